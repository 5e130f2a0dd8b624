"""
Statistics engine.

Zero side effects: every function is a deterministic projection of a History
and can be recomputed on each request.

Public API
----------
compute_player_stats(history, player, today)      -> PlayerStats
compute_all_player_stats(history, players, today) -> dict[str, PlayerStats]
compute_head_to_head(history, player1, player2)   -> HeadToHeadStats | None
rank_day_results(submissions)                     -> list (score asc, then name)
"""
from __future__ import annotations

import math
from dataclasses import dataclass, field
from datetime import date, timedelta
from typing import Any, Iterable, Optional

from app.models.submission import FAILED_SCORE
from app.services.history import History, find_submission, submissions_for

DISTRIBUTION_KEYS = ["1", "2", "3", "4", "5", "6", "X"]


# ---------------------------------------------------------------------------
# Result types
# ---------------------------------------------------------------------------

def _empty_distribution() -> dict[str, int]:
    return {key: 0 for key in DISTRIBUTION_KEYS}


@dataclass
class PlayerStats:
    games_played: int = 0
    win_percentage: int = 0
    current_streak: int = 0
    max_streak: int = 0
    average_score: float = 0
    score_distribution: dict[str, int] = field(default_factory=_empty_distribution)


@dataclass
class HeadToHeadStats:
    player1: str
    player2: str
    games_played: int = 0
    player1_wins: int = 0
    player2_wins: int = 0
    ties: int = 0
    player1_average_score: float = 0
    player2_average_score: float = 0


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

def _is_win(score: int) -> bool:
    return score < FAILED_SCORE


def _distribution_key(score: int) -> str:
    return "X" if score >= FAILED_SCORE else str(score)


def _round_percent(wins: int, games: int) -> int:
    # half-up, so 50.5 -> 51
    return int(math.floor(wins / games * 100 + 0.5))


def _average(total: int, count: int) -> float:
    return round(total / count, 2) if count else 0


# ---------------------------------------------------------------------------
# Per-player stats
# ---------------------------------------------------------------------------

def compute_player_stats(history: History, player: str, today: date) -> PlayerStats:
    """
    Lifetime stats for one player.

    A win extends the current streak only when it lands exactly one calendar
    day after the player's previous submission; a later win restarts at 1 and
    a loss resets to 0. If the last submission is more than a day before
    `today` the current streak has lapsed and reports 0.
    """
    subs = submissions_for(history, player)
    stats = PlayerStats()
    if not subs:
        return stats

    wins = 0
    win_total = 0
    current = 0
    best = 0
    prev_day: Optional[date] = None

    for sub in subs:
        stats.score_distribution[_distribution_key(sub.score)] += 1
        if _is_win(sub.score):
            wins += 1
            win_total += sub.score
            if prev_day is not None and sub.day - prev_day == timedelta(days=1):
                current += 1
            else:
                current = 1
        else:
            current = 0
        best = max(best, current)
        prev_day = sub.day

    if (today - prev_day).days > 1:
        current = 0

    stats.games_played = len(subs)
    stats.win_percentage = _round_percent(wins, len(subs))
    stats.current_streak = current
    stats.max_streak = best
    stats.average_score = _average(win_total, wins)
    return stats


def compute_all_player_stats(
    history: History, players: Iterable[str], today: date
) -> dict[str, PlayerStats]:
    return {p: compute_player_stats(history, p, today) for p in players}


# ---------------------------------------------------------------------------
# Head-to-head
# ---------------------------------------------------------------------------

def compute_head_to_head(
    history: History, player1: str, player2: str
) -> Optional[HeadToHeadStats]:
    """
    Compare two players over the days both submitted.

    Lower score takes the day; equal scores are a tie. Averages cover each
    player's winning scores on those shared days only.
    Returns None when both names refer to the same player.
    """
    if player1.lower() == player2.lower():
        return None

    h2h = HeadToHeadStats(player1=player1, player2=player2)
    p1_total = p1_wins = 0
    p2_total = p2_wins = 0

    for day in sorted(history):
        sub1 = find_submission(history[day], player1)
        sub2 = find_submission(history[day], player2)
        if sub1 is None or sub2 is None:
            continue

        h2h.games_played += 1
        if sub1.score < sub2.score:
            h2h.player1_wins += 1
        elif sub2.score < sub1.score:
            h2h.player2_wins += 1
        else:
            h2h.ties += 1

        if _is_win(sub1.score):
            p1_total += sub1.score
            p1_wins += 1
        if _is_win(sub2.score):
            p2_total += sub2.score
            p2_wins += 1

    h2h.player1_average_score = _average(p1_total, p1_wins)
    h2h.player2_average_score = _average(p2_total, p2_wins)
    return h2h


# ---------------------------------------------------------------------------
# Presentation ordering
# ---------------------------------------------------------------------------

def rank_day_results(submissions: Iterable[Any]) -> list[Any]:
    """Best score first; equal scores ordered alphabetically by player."""
    return sorted(submissions, key=lambda s: (s.score, s.player.lower(), s.player))
