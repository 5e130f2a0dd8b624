"""
Reveal policy: decides whether a group's results for a day leave escrow.

A day is revealed when either
  (a) every roster member has submitted (names compared case-insensitively), or
  (b) the cutoff hour has passed in the reference time zone. Any day other
      than "today" in that zone counts as past the cutoff.

A group with an empty roster never reveals.

Everything here is a pure function of its arguments. `now` and the time zone
are always passed in, never read from the ambient clock, and the decision is
recomputed on every read because `now` moves independently of any write.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime, timezone
from typing import Iterable
from zoneinfo import ZoneInfo

DEFAULT_CUTOFF_HOUR = 13
DEFAULT_MAX_ROSTER = 10


@dataclass(frozen=True)
class RevealStatus:
    day: date
    reveal: bool
    all_submitted: bool
    past_cutoff: bool
    players: list[str] = field(default_factory=list)
    submitted_by: list[str] = field(default_factory=list)


def now_utc() -> datetime:
    return datetime.now(tz=timezone.utc)


def _localize(now: datetime, tz: ZoneInfo) -> datetime:
    if now.tzinfo is None:
        now = now.replace(tzinfo=timezone.utc)
    return now.astimezone(tz)


def today_in_zone(now: datetime, tz: ZoneInfo) -> date:
    """Calendar day of `now` in `tz`. Naive datetimes are taken as UTC."""
    return _localize(now, tz).date()


def is_past_cutoff(
    target_date: date,
    now: datetime,
    tz: ZoneInfo,
    cutoff_hour: int = DEFAULT_CUTOFF_HOUR,
) -> bool:
    local_now = _localize(now, tz)
    if target_date != local_now.date():
        return True
    return local_now.hour >= cutoff_hour


def all_submitted(roster: Iterable[str], submitted: Iterable[str]) -> bool:
    """Quorum check. False for an empty roster."""
    players = [p.lower() for p in roster]
    if not players:
        return False
    submitted_lower = {s.lower() for s in submitted}
    return all(p in submitted_lower for p in players)


def evaluate_reveal(
    roster: Iterable[str],
    submitted: Iterable[str],
    now: datetime,
    target_date: date,
    tz: ZoneInfo,
    cutoff_hour: int = DEFAULT_CUTOFF_HOUR,
    max_roster: int = DEFAULT_MAX_ROSTER,
) -> RevealStatus:
    """Full reveal decision with the parts that led to it."""
    players = list(roster)[:max_roster]
    submitted_list = list(submitted)
    submitted_lower = {s.lower() for s in submitted_list}

    quorum = all_submitted(players, submitted_list)
    past_cutoff = is_past_cutoff(target_date, now, tz, cutoff_hour)
    reveal = bool(players) and (quorum or past_cutoff)

    return RevealStatus(
        day=target_date,
        reveal=reveal,
        all_submitted=quorum,
        past_cutoff=past_cutoff,
        players=players,
        submitted_by=[p for p in players if p.lower() in submitted_lower],
    )


def should_reveal(
    roster: Iterable[str],
    submitted: Iterable[str],
    now: datetime,
    target_date: date,
    tz: ZoneInfo,
    cutoff_hour: int = DEFAULT_CUTOFF_HOUR,
    max_roster: int = DEFAULT_MAX_ROSTER,
) -> bool:
    return evaluate_reveal(
        roster, submitted, now, target_date, tz, cutoff_hour, max_roster
    ).reveal
