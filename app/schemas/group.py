"""
Group request / response schemas.

POST  /groups          → GroupCreateRequest → GroupResponse
PATCH /groups/{id}     → GroupUpdateRequest → GroupResponse
"""
from __future__ import annotations

from typing import Annotated, Optional

from pydantic import BaseModel, Field, field_validator


class GroupCreateRequest(BaseModel):
    name: Annotated[str, Field(
        min_length=1,
        max_length=128,
        description="Display name of the group.",
        examples=["Breakfast Club"],
    )]
    players: list[str] = Field(
        default_factory=list,
        description="Roster in display order (at most 10 names, unique ignoring case).",
        examples=[["Joe", "Pete"]],
    )

    @field_validator("name", mode="before")
    @classmethod
    def strip_name(cls, v: str) -> str:
        stripped = v.strip() if isinstance(v, str) else v
        if not stripped:
            raise ValueError("name must not be empty after stripping whitespace")
        return stripped


class GroupUpdateRequest(BaseModel):
    name: Optional[str] = Field(default=None, min_length=1, max_length=128)
    players: Optional[list[str]] = Field(
        default=None,
        description="Replacement roster. Historical submissions are kept.",
    )


class GroupResponse(BaseModel):
    id: int
    name: str
    players: list[str]
    created_at: str
