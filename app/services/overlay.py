"""
Optimistic staging overlay for clients.

Local submissions are staged on top of the last confirmed History snapshot
so the caller sees its own write immediately. A staged entry leaves the
overlay when the write is confirmed, either by a successful response or by
a later snapshot that already contains it. A failed write keeps its entry
and the overlay reports that it is ahead of the server.
"""
from __future__ import annotations

from dataclasses import dataclass, replace
from datetime import date
from typing import Optional

from app.services.history import DailyResultSet, History, HistorySnapshot


@dataclass(frozen=True)
class SubmissionRecord:
    """Plain submission value used outside the database."""
    player: str
    day: date
    score: int
    grid: str
    puzzle_number: int


StageKey = tuple[date, str]


def _same_result(a, b) -> bool:
    return (a.score, a.grid, a.puzzle_number) == (b.score, b.grid, b.puzzle_number)


class StagedHistory:
    def __init__(self, snapshot: Optional[HistorySnapshot] = None):
        self.confirmed: History = dict(snapshot.history) if snapshot else {}
        self.version: Optional[str] = snapshot.version if snapshot else None
        self.pending: dict[StageKey, SubmissionRecord] = {}
        self.failed: set[StageKey] = set()

    @property
    def ahead_of_server(self) -> bool:
        return bool(self.failed)

    def stage(self, record: SubmissionRecord) -> StageKey:
        key = (record.day, record.player.lower())
        self.pending[key] = record
        self.failed.discard(key)
        return key

    def confirm(self, key: StageKey, stored_player: Optional[str] = None) -> None:
        """
        Move a staged entry into the confirmed History. `stored_player` is
        the roster spelling the server saved it under, when known.
        """
        record = self.pending.pop(key, None)
        self.failed.discard(key)
        if record is None:
            return
        if stored_player and stored_player != record.player:
            record = replace(record, player=stored_player)

        # Copy the day so the snapshot this overlay was built from stays untouched
        old = self.confirmed.get(record.day)
        day_set = (
            DailyResultSet(submissions=dict(old.submissions), summary=old.summary)
            if old is not None
            else DailyResultSet()
        )
        for existing in [p for p in day_set.submissions if p.lower() == key[1]]:
            del day_set.submissions[existing]
        day_set.submissions[record.player] = record
        self.confirmed[record.day] = day_set

    def mark_failed(self, key: StageKey) -> None:
        if key in self.pending:
            self.failed.add(key)

    def discard(self, key: StageKey) -> None:
        self.pending.pop(key, None)
        self.failed.discard(key)

    def reconcile(self, snapshot: HistorySnapshot) -> None:
        """Adopt a newer snapshot and drop staged entries it already holds."""
        self.confirmed = dict(snapshot.history)
        self.version = snapshot.version
        for key, record in list(self.pending.items()):
            day_set = self.confirmed.get(record.day)
            if day_set is None:
                continue
            stored = next(
                (s for p, s in day_set.submissions.items() if p.lower() == key[1]),
                None,
            )
            if stored is not None and _same_result(stored, record):
                self.discard(key)

    def view(self) -> History:
        """Confirmed History with staged entries layered on top."""
        merged: History = {
            day: DailyResultSet(submissions=dict(rs.submissions), summary=rs.summary)
            for day, rs in self.confirmed.items()
        }
        for (day, player_key), record in self.pending.items():
            day_set = merged.setdefault(day, DailyResultSet())
            for existing in [p for p in day_set.submissions if p.lower() == player_key]:
                del day_set.submissions[existing]
            day_set.submissions[record.player] = record
        return merged
