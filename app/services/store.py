"""
Escrow store: SQLAlchemy persistence for groups, rosters, submissions,
cached day summaries and reactions.

Rules:
- One submission per (group, player, day). put_submission upserts and never
  disturbs other players' rows for the same day.
- Roster edits never delete historical submissions.
- db.commit() only in the public write functions.

Public API
----------
create_group / get_group / list_groups / update_group / delete_group
get_roster(db, group_id)                           -> list[str]
resolve_player(group, player)                      -> str  (roster spelling)
submitted_players(db, group_id, day)               -> list[str]
get_history(db, group_id)                          -> HistorySnapshot
watch_history(session_factory, group_id, ...)      -> Iterator[HistorySnapshot]
put_submission(db, group_id, day, player, parsed)  -> Submission
get_summary / put_summary
add_reaction / list_reactions
"""
from __future__ import annotations

import logging
import time
from datetime import date
from typing import Callable, Iterator, Optional

from sqlalchemy.orm import Session

from app.core.config import settings
from app.core.errors import (
    GroupNotFoundError,
    InvalidReactionError,
    InvalidRosterError,
    PlayerNotInRosterError,
    RosterTooLargeError,
)
from app.models.day_summary import DaySummary, SummaryStatus
from app.models.group import Group, GroupMember
from app.models.reaction import EMOJI_CHOICES, Reaction
from app.models.submission import Submission
from app.services.history import DailyResultSet, History, HistorySnapshot, history_version
from app.services.parsing import ParsedShare

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Roster helpers
# ---------------------------------------------------------------------------

def normalize_roster(players: list[str], max_size: Optional[int] = None) -> list[str]:
    """Trim names and reject blanks, case-insensitive duplicates and oversize rosters."""
    limit = settings.MAX_ROSTER_SIZE if max_size is None else max_size
    cleaned: list[str] = []
    seen: set[str] = set()
    for raw in players:
        name = (raw or "").strip()
        if not name:
            raise InvalidRosterError("Player names must not be empty.")
        if name.lower() in seen:
            raise InvalidRosterError(f"Player '{name}' appears more than once.", player=name)
        seen.add(name.lower())
        cleaned.append(name)
    if len(cleaned) > limit:
        raise RosterTooLargeError(max_players=limit, received=len(cleaned))
    return cleaned


def resolve_player(group: Group, player: str) -> str:
    """Return the roster spelling of `player`, matched case-insensitively."""
    wanted = player.strip().lower()
    for name in group.players:
        if name.lower() == wanted:
            return name
    raise PlayerNotInRosterError(player=player, group_id=group.id)


# ---------------------------------------------------------------------------
# Groups
# ---------------------------------------------------------------------------

def create_group(db: Session, name: str, players: list[str]) -> Group:
    roster = normalize_roster(players)
    group = Group(name=name.strip())
    group.members = [GroupMember(player=p, position=i) for i, p in enumerate(roster)]
    db.add(group)
    db.commit()
    db.refresh(group)
    logger.info("Created group %s with %d players", group.id, len(roster))
    return group


def get_group(db: Session, group_id: int) -> Group:
    group = db.get(Group, group_id)
    if group is None:
        raise GroupNotFoundError(group_id)
    return group


def list_groups(db: Session) -> list[Group]:
    return db.query(Group).order_by(Group.created_at.asc(), Group.id.asc()).all()


def _respell_submissions(db: Session, group: Group, roster: list[str]) -> None:
    """Carry stored rows over to a new spelling when a name only changes case."""
    new_by_key = {name.lower(): name for name in roster}
    for old in group.players:
        new = new_by_key.get(old.lower())
        if new is None or new == old:
            continue
        db.query(Submission).filter(
            Submission.group_id == group.id, Submission.player == old
        ).update({Submission.player: new}, synchronize_session=False)
        logger.info("Renamed %s to %s in group %s", old, new, group.id)


def update_group(
    db: Session,
    group_id: int,
    name: Optional[str] = None,
    players: Optional[list[str]] = None,
) -> Group:
    group = get_group(db, group_id)
    if name is not None:
        group.name = name.strip()
    if players is not None:
        roster = normalize_roster(players)
        _respell_submissions(db, group, roster)
        # Replace roster slots; submissions are keyed by name, not member id
        group.members.clear()
        db.flush()
        group.members.extend(GroupMember(player=p, position=i) for i, p in enumerate(roster))
    db.commit()
    db.refresh(group)
    return group


def delete_group(db: Session, group_id: int) -> None:
    group = get_group(db, group_id)
    db.query(Submission).filter(Submission.group_id == group_id).delete()
    db.query(DaySummary).filter(DaySummary.group_id == group_id).delete()
    db.query(Reaction).filter(Reaction.group_id == group_id).delete()
    db.delete(group)
    db.commit()
    logger.info("Deleted group %s", group_id)


def get_roster(db: Session, group_id: int) -> list[str]:
    return get_group(db, group_id).players[: settings.MAX_ROSTER_SIZE]


# ---------------------------------------------------------------------------
# Submissions / history
# ---------------------------------------------------------------------------

def submitted_players(db: Session, group_id: int, day: date) -> list[str]:
    rows = (
        db.query(Submission.player)
        .filter(Submission.group_id == group_id, Submission.day == day)
        .all()
    )
    return [r.player for r in rows]


def day_submissions(db: Session, group_id: int, day: date) -> list[Submission]:
    return (
        db.query(Submission)
        .filter(Submission.group_id == group_id, Submission.day == day)
        .all()
    )


def get_history(db: Session, group_id: int) -> HistorySnapshot:
    """Materialize the group's full History in one pass."""
    get_group(db, group_id)
    history: History = {}

    for sub in (
        db.query(Submission)
        .filter(Submission.group_id == group_id)
        .order_by(Submission.day.asc())
        .all()
    ):
        history.setdefault(sub.day, DailyResultSet()).submissions[sub.player] = sub

    for summary in (
        db.query(DaySummary)
        .filter(
            DaySummary.group_id == group_id,
            DaySummary.status == SummaryStatus.succeeded.value,
        )
        .all()
    ):
        if summary.day in history:
            history[summary.day].summary = summary.text

    return HistorySnapshot(group_id=group_id, history=history, version=history_version(history))


def watch_history(
    session_factory: Callable[[], Session],
    group_id: int,
    interval: float = 5.0,
    max_polls: Optional[int] = None,
    sleep: Callable[[float], None] = time.sleep,
) -> Iterator[HistorySnapshot]:
    """
    Poll the store and yield a snapshot whenever its version changes.
    The first poll always yields. Stops after `max_polls` polls when given.
    """
    last_version: Optional[str] = None
    polls = 0
    while max_polls is None or polls < max_polls:
        if polls:
            sleep(interval)
        polls += 1
        db = session_factory()
        try:
            snapshot = get_history(db, group_id)
        finally:
            db.close()
        if snapshot.version != last_version:
            last_version = snapshot.version
            yield snapshot


def put_submission(
    db: Session,
    group_id: int,
    day: date,
    player: str,
    parsed: ParsedShare,
) -> Submission:
    """Upsert one player's result for `day`. Last write wins."""
    group = get_group(db, group_id)
    name = resolve_player(group, player)

    sub = (
        db.query(Submission)
        .filter(
            Submission.group_id == group_id,
            Submission.player == name,
            Submission.day == day,
        )
        .first()
    )
    if sub is None:
        sub = Submission(group_id=group_id, player=name, day=day)
        db.add(sub)

    sub.score = parsed.score
    sub.grid = parsed.grid
    sub.puzzle_number = parsed.puzzle_number
    db.commit()
    db.refresh(sub)
    logger.info("Stored submission group=%s player=%s day=%s score=%s",
                group_id, name, day, sub.score_display)
    return sub


# ---------------------------------------------------------------------------
# Summaries
# ---------------------------------------------------------------------------

def get_summary(db: Session, group_id: int, day: date) -> Optional[DaySummary]:
    return (
        db.query(DaySummary)
        .filter(DaySummary.group_id == group_id, DaySummary.day == day)
        .first()
    )


def put_summary(
    db: Session,
    group_id: int,
    day: date,
    text: Optional[str],
    status: SummaryStatus = SummaryStatus.succeeded,
    error_message: Optional[str] = None,
) -> DaySummary:
    """Attach or overwrite the cached recap for a day."""
    summary = get_summary(db, group_id, day)
    if summary is None:
        summary = DaySummary(group_id=group_id, day=day)
        db.add(summary)
    if text is not None:
        summary.text = text
    summary.status = status.value
    summary.error_message = error_message
    db.commit()
    db.refresh(summary)
    return summary


# ---------------------------------------------------------------------------
# Reactions
# ---------------------------------------------------------------------------

def add_reaction(
    db: Session, group_id: int, day: date, emoji: str, posted_by: Optional[str] = None
) -> Reaction:
    if emoji not in EMOJI_CHOICES:
        raise InvalidReactionError(emoji=emoji, allowed=EMOJI_CHOICES)
    reaction = Reaction(group_id=group_id, day=day, emoji=emoji, posted_by=posted_by)
    db.add(reaction)
    db.commit()
    db.refresh(reaction)
    return reaction


def list_reactions(db: Session, group_id: int, day: date) -> list[Reaction]:
    return (
        db.query(Reaction)
        .filter(Reaction.group_id == group_id, Reaction.day == day)
        .order_by(Reaction.created_at.asc(), Reaction.id.asc())
        .all()
    )
