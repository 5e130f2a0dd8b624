"""
Escrowed results, history and statistics schemas.
"""
from __future__ import annotations

from typing import Any, Optional

from pydantic import BaseModel, Field

from app.models.submission import FAILED_SCORE
from app.services.reveal import RevealStatus


class RevealOut(BaseModel):
    day: str
    reveal: bool = Field(description="True once the day's results may be shown.")
    all_submitted: bool
    past_cutoff: bool
    players: list[str]
    submitted_by: list[str] = Field(description="Roster names that have submitted.")

    @classmethod
    def from_status(cls, status: RevealStatus) -> "RevealOut":
        return cls(
            day=str(status.day),
            reveal=status.reveal,
            all_submitted=status.all_submitted,
            past_cutoff=status.past_cutoff,
            players=status.players,
            submitted_by=status.submitted_by,
        )


class RankedResult(BaseModel):
    player: str
    score: int
    score_display: str
    grid: str
    puzzle_number: int

    @classmethod
    def from_submission(cls, sub: Any) -> "RankedResult":
        return cls(
            player=sub.player,
            score=sub.score,
            score_display="X" if sub.score >= FAILED_SCORE else str(sub.score),
            grid=sub.grid or "",
            puzzle_number=sub.puzzle_number,
        )


class TodayResponse(RevealOut):
    results: list[RankedResult] = Field(
        default_factory=list,
        description="Ranked results; empty while the day is in escrow.",
    )
    summary: Optional[str] = None
    summary_status: Optional[str] = None


class DayOut(BaseModel):
    date: str
    results: list[RankedResult]
    summary: Optional[str] = None


class HistoryResponse(BaseModel):
    group_id: int
    version: str = Field(description="Content hash; unchanged when nothing was written.")
    changed: bool = True
    days: list[DayOut] = Field(default_factory=list, description="Revealed days, oldest first.")


class PlayerStatsOut(BaseModel):
    player: str
    games_played: int
    win_percentage: int
    current_streak: int
    max_streak: int
    average_score: float
    score_distribution: dict[str, int]


class StatsResponse(BaseModel):
    group_id: int
    as_of: str
    players: list[PlayerStatsOut]


class HeadToHeadOut(BaseModel):
    player1: str
    player2: str
    games_played: int
    player1_wins: int
    player2_wins: int
    ties: int
    player1_average_score: float
    player2_average_score: float


class HeadToHeadResponse(BaseModel):
    applicable: bool = Field(description="False when both players are the same person.")
    stats: Optional[HeadToHeadOut] = None
