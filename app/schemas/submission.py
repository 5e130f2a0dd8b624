"""
Submission schemas.

POST /groups/{id}/submissions → SubmissionRequest → SubmitResponse
"""
from __future__ import annotations

import datetime as dt
from typing import Annotated, Optional

from pydantic import BaseModel, Field, field_validator

from app.schemas.results import RevealOut


class SubmissionRequest(BaseModel):
    """A player's pasted share text."""

    player: Annotated[str, Field(
        min_length=1,
        max_length=64,
        description="Roster name (matched ignoring case).",
        examples=["Joe"],
    )]
    share_text: Annotated[str, Field(
        min_length=1,
        max_length=2_000,
        description="Full Wordle share text, header first.",
        examples=["Wordle 1,234 4/6\n\n⬛🟨⬛⬛⬛\n⬛⬛🟩🟨⬛\n🟩🟩🟩⬛🟩\n🟩🟩🟩🟩🟩"],
    )]
    date: Optional[dt.date] = Field(
        default=None,
        description="Day the result belongs to. Defaults to today in the reference time zone.",
        examples=["2026-02-20"],
    )

    @field_validator("player", "share_text", mode="before")
    @classmethod
    def strip_and_check_empty(cls, v: str) -> str:
        stripped = v.strip() if isinstance(v, str) else v
        if not stripped:
            raise ValueError("must not be empty after stripping whitespace")
        return stripped


class SubmissionOut(BaseModel):
    player: str
    date: str
    score: int = Field(description="1-6 guesses, 7 for a failed puzzle.")
    score_display: str = Field(description="'1'..'6' or 'X'.")
    grid: str
    puzzle_number: int


class SubmitResponse(BaseModel):
    submission: SubmissionOut
    reveal: RevealOut
