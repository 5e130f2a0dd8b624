"""Builders for transient rows and in-memory histories used across tests."""
from datetime import date, datetime, timezone

from app.models.submission import Submission
from app.services.history import DailyResultSet

# 2026-02-20 10:00 in America/Chicago (CST, UTC-6): before the 13:00 cutoff
MORNING = datetime(2026, 2, 20, 16, 0, tzinfo=timezone.utc)
# 2026-02-20 13:00 in America/Chicago
CUTOFF = datetime(2026, 2, 20, 19, 0, tzinfo=timezone.utc)
TODAY = date(2026, 2, 20)

SHARE_4 = "Wordle 1,234 4/6\n\n⬛🟨⬛⬛⬛\n⬛⬛🟩🟨⬛\n🟩🟩🟩⬛🟩\n🟩🟩🟩🟩🟩"
SHARE_3 = "Wordle 1,234 3/6\n\n⬛🟨⬛⬛⬛\n🟩🟩🟩⬛🟩\n🟩🟩🟩🟩🟩"
SHARE_X = "Wordle 1,234 X/6\n\n⬛⬛⬛⬛⬛\n⬛⬛⬛⬛⬛\n⬛⬛⬛⬛⬛\n⬛⬛⬛⬛⬛\n⬛⬛⬛⬛⬛\n⬛⬛⬛⬛⬛"


def make_sub(player: str, day: date, score: int, grid: str = "", puzzle_number: int = 1) -> Submission:
    """Transient Submission row, no session needed."""
    return Submission(player=player, day=day, score=score, grid=grid, puzzle_number=puzzle_number)


def make_history(rows):
    """rows: iterable of (player, day, score)."""
    history = {}
    for player, day, score in rows:
        history.setdefault(day, DailyResultSet()).submissions[player] = make_sub(player, day, score)
    return history
