"""
Recap, reaction-image and emoji-reaction schemas.

POST /recap                              → RecapRequest         → RecapResponse
POST /reaction-image                     → ReactionImageRequest → ReactionImageResponse
POST /groups/{id}/days/{date}/summary    →                      → DaySummaryResponse
POST /groups/{id}/days/{date}/reactions  → ReactionRequest      → ReactionOut
"""
from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class RecapSubmission(BaseModel):
    player: Optional[str] = None
    score: int = Field(ge=1, le=7)


class RecapRequest(BaseModel):
    submissions: dict[str, RecapSubmission] = Field(
        min_length=1,
        description="Player name → score for the day.",
        examples=[{"Joe": {"score": 3}, "Pete": {"score": 7}}],
    )


class RecapResponse(BaseModel):
    summary: str


class ReactionImageRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    is_winner: bool = Field(alias="isWinner")


class ReactionImageResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    gif_url: Optional[str] = Field(default=None, alias="gifUrl")


class DaySummaryResponse(BaseModel):
    date: str
    status: str
    text: Optional[str] = None


class ReactionRequest(BaseModel):
    emoji: str = Field(min_length=1, max_length=16)
    posted_by: Optional[str] = Field(default=None, max_length=64)


class ReactionOut(BaseModel):
    id: int
    date: str
    emoji: str
    posted_by: Optional[str] = None
    created_at: str
