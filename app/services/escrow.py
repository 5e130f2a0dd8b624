"""
Escrow service: applies the reveal policy to stored data.

Public API
----------
reference_zone()                         -> ZoneInfo
reference_today(now)                     -> date
reveal_status(db, group, day, now)       -> RevealStatus
revealed_history(db, group_id, now)      -> HistorySnapshot (escrowed days removed)
"""
from __future__ import annotations

from datetime import date, datetime
from zoneinfo import ZoneInfo

from sqlalchemy.orm import Session

from app.core.config import settings
from app.models.group import Group
from app.services import store
from app.services.history import HistorySnapshot, history_version
from app.services.reveal import RevealStatus, evaluate_reveal, today_in_zone


def reference_zone() -> ZoneInfo:
    return ZoneInfo(settings.REVEAL_TIMEZONE)


def reference_today(now: datetime) -> date:
    return today_in_zone(now, reference_zone())


def _evaluate(roster: list[str], submitted: list[str], day: date, now: datetime) -> RevealStatus:
    return evaluate_reveal(
        roster=roster,
        submitted=submitted,
        now=now,
        target_date=day,
        tz=reference_zone(),
        cutoff_hour=settings.REVEAL_CUTOFF_HOUR,
        max_roster=settings.MAX_ROSTER_SIZE,
    )


def reveal_status(db: Session, group: Group, day: date, now: datetime) -> RevealStatus:
    return _evaluate(group.players, store.submitted_players(db, group.id, day), day, now)


def revealed_history(db: Session, group_id: int, now: datetime) -> HistorySnapshot:
    """The group's History with every still-escrowed day left out."""
    group = store.get_group(db, group_id)
    snapshot = store.get_history(db, group_id)
    visible = {
        day: result_set
        for day, result_set in snapshot.history.items()
        if _evaluate(group.players, list(result_set.submissions), day, now).reveal
    }
    return HistorySnapshot(group_id=group_id, history=visible, version=history_version(visible))
