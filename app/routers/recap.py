"""
Recap and reaction-image router.

POST /recap
POST /reaction-image
POST /groups/{group_id}/days/{day}/summary
"""
from __future__ import annotations

from datetime import date, datetime

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from app.core.errors import ResultsEscrowedError
from app.db.base import get_db
from app.schemas.recap import (
    DaySummaryResponse,
    RecapRequest,
    RecapResponse,
    ReactionImageRequest,
    ReactionImageResponse,
)
from app.services import escrow, store
from app.services.overlay import SubmissionRecord
from app.services.reaction_image import find_reaction_gif
from app.services.recap import generate_day_summary, generate_recap
from app.services.reveal import now_utc

router = APIRouter(tags=["recap"])


@router.post(
    "/recap",
    response_model=RecapResponse,
    summary="Generate a one-paragraph recap for a set of scores",
    responses={502: {"description": "Recap generation failed"}},
)
def recap(payload: RecapRequest):
    """Stateless: nothing is stored. Failures return 502 and are not retried."""
    subs = [
        SubmissionRecord(player=s.player or name, day=date.min, score=s.score, grid="", puzzle_number=0)
        for name, s in payload.submissions.items()
    ]
    return RecapResponse(summary=generate_recap(subs))


@router.post(
    "/reaction-image",
    response_model=ReactionImageResponse,
    summary="Find a reaction GIF",
)
def reaction_image(payload: ReactionImageRequest):
    """Always 200. `gifUrl` is null when nothing could be found."""
    return ReactionImageResponse(gif_url=find_reaction_gif(payload.is_winner))


@router.post(
    "/groups/{group_id}/days/{day}/summary",
    response_model=DaySummaryResponse,
    summary="Generate and cache the recap for a revealed day",
    responses={
        404: {"description": "Group not found"},
        409: {"description": "Day still in escrow"},
        502: {"description": "Recap generation failed; the failure is recorded"},
    },
)
def day_summary(
    group_id: int,
    day: date,
    db: Session = Depends(get_db),
    now: datetime = Depends(now_utc),
):
    """Returns the cached recap when one already succeeded."""
    group = store.get_group(db, group_id)
    if not escrow.reveal_status(db, group, day, now).reveal:
        raise ResultsEscrowedError(day)

    summary = generate_day_summary(db, group_id, day, store.day_submissions(db, group_id, day))
    return DaySummaryResponse(date=str(summary.day), status=summary.status, text=summary.text)
