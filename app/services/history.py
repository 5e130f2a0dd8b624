"""
In-memory History shapes shared by the store, the stats engine and the
client overlay.

History maps a calendar day to that day's DailyResultSet. Submissions are
anything exposing `player`, `day`, `score`, `grid` and `puzzle_number`
(ORM rows on the server, plain records in the client).
"""
from __future__ import annotations

import hashlib
from dataclasses import dataclass, field
from datetime import date
from typing import Any, Optional


@dataclass
class DailyResultSet:
    submissions: dict[str, Any] = field(default_factory=dict)
    summary: Optional[str] = None


History = dict[date, DailyResultSet]


@dataclass(frozen=True)
class HistorySnapshot:
    """Point-in-time view of one group's History plus a content version."""
    group_id: int
    history: History
    version: str


def history_version(history: History) -> str:
    """
    Content hash of a History. Two snapshots with equal versions hold the
    same submissions and summaries, whatever order they were loaded in.
    """
    digest = hashlib.sha1()
    for day in sorted(history):
        result_set = history[day]
        digest.update(f"{day.isoformat()}|{result_set.summary or ''}\n".encode())
        for player in sorted(result_set.submissions):
            sub = result_set.submissions[player]
            digest.update(
                f"{player}|{sub.score}|{sub.puzzle_number}|{sub.grid}\n".encode()
            )
    return digest.hexdigest()


def find_submission(result_set: DailyResultSet, player: str) -> Optional[Any]:
    """The player's submission for the day, matching the name ignoring case."""
    if player in result_set.submissions:
        return result_set.submissions[player]
    wanted = player.lower()
    return next(
        (sub for name, sub in result_set.submissions.items() if name.lower() == wanted),
        None,
    )


def submissions_for(history: History, player: str) -> list[Any]:
    """A player's submissions in ascending date order, skipping days without one."""
    found = (find_submission(history[day], player) for day in sorted(history))
    return [sub for sub in found if sub is not None]
