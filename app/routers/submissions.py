"""
Submissions and escrowed results router.

POST /groups/{group_id}/submissions
GET  /groups/{group_id}/today
GET  /groups/{group_id}/history
GET  /groups/{group_id}/days/{day}/reactions
POST /groups/{group_id}/days/{day}/reactions
"""
from __future__ import annotations

from datetime import date, datetime
from typing import Optional

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from app.core.errors import ResultsEscrowedError, StoreWriteError
from app.db.base import get_db
from app.models.reaction import Reaction
from app.models.submission import Submission
from app.schemas.recap import ReactionOut, ReactionRequest
from app.schemas.results import DayOut, HistoryResponse, RankedResult, RevealOut, TodayResponse
from app.schemas.submission import SubmissionOut, SubmissionRequest, SubmitResponse
from app.services import escrow, store
from app.services.parsing import parse_share_text
from app.services.reveal import now_utc
from app.services.stats import rank_day_results

router = APIRouter(prefix="/groups/{group_id}", tags=["submissions"])


def _sub_to_out(sub: Submission) -> SubmissionOut:
    return SubmissionOut(
        player=sub.player,
        date=str(sub.day),
        score=sub.score,
        score_display=sub.score_display,
        grid=sub.grid,
        puzzle_number=sub.puzzle_number,
    )


def _reaction_to_out(r: Reaction) -> ReactionOut:
    return ReactionOut(
        id=r.id,
        date=str(r.day),
        emoji=r.emoji,
        posted_by=r.posted_by,
        created_at=r.created_at.isoformat() if r.created_at else "",
    )


def _require_revealed(db: Session, group_id: int, day: date, now: datetime) -> None:
    group = store.get_group(db, group_id)
    if not escrow.reveal_status(db, group, day, now).reveal:
        raise ResultsEscrowedError(day)


# ---------------------------------------------------------------------------
# POST /groups/{group_id}/submissions
# ---------------------------------------------------------------------------

@router.post(
    "/submissions",
    response_model=SubmitResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Submit a pasted share text",
    responses={
        404: {"description": "Group not found"},
        422: {"description": "Missing or garbled header, or player not on the roster"},
        503: {"description": "Store write failed; retry"},
    },
)
def submit(
    group_id: int,
    payload: SubmissionRequest,
    db: Session = Depends(get_db),
    now: datetime = Depends(now_utc),
):
    """
    Parse the share text and upsert the player's result for the day.

    Submitting again for the same day overwrites the earlier result.
    The response carries the reveal status so the client knows whether the
    rest of the group's scores are visible yet.
    """
    parsed = parse_share_text(payload.share_text)
    day = payload.date or escrow.reference_today(now)

    try:
        sub = store.put_submission(db, group_id, day, payload.player, parsed)
    except SQLAlchemyError as exc:
        db.rollback()
        raise StoreWriteError(reason=exc.__class__.__name__) from exc

    group = store.get_group(db, group_id)
    return SubmitResponse(
        submission=_sub_to_out(sub),
        reveal=RevealOut.from_status(escrow.reveal_status(db, group, day, now)),
    )


# ---------------------------------------------------------------------------
# GET /groups/{group_id}/today
# ---------------------------------------------------------------------------

@router.get(
    "/today",
    response_model=TodayResponse,
    summary="Today's escrow status and, once revealed, ranked results",
)
def today(
    group_id: int,
    day: Optional[date] = Query(
        default=None,
        description="Day to inspect. Defaults to today in the reference time zone.",
        examples=["2026-02-20"],
    ),
    db: Session = Depends(get_db),
    now: datetime = Depends(now_utc),
):
    """Who has submitted is always visible; scores only after reveal."""
    group = store.get_group(db, group_id)
    target = day or escrow.reference_today(now)
    reveal = escrow.reveal_status(db, group, target, now)

    response = TodayResponse(**RevealOut.from_status(reveal).model_dump())
    if reveal.reveal:
        subs = store.day_submissions(db, group_id, target)
        response.results = [RankedResult.from_submission(s) for s in rank_day_results(subs)]
        summary = store.get_summary(db, group_id, target)
        if summary is not None:
            response.summary = summary.text
            response.summary_status = summary.status
    return response


# ---------------------------------------------------------------------------
# GET /groups/{group_id}/history
# ---------------------------------------------------------------------------

@router.get(
    "/history",
    response_model=HistoryResponse,
    summary="Revealed history with a content version for polling",
)
def history(
    group_id: int,
    since: Optional[str] = Query(
        default=None,
        description="Version from a previous response. If unchanged, days is empty and changed=false.",
    ),
    db: Session = Depends(get_db),
    now: datetime = Depends(now_utc),
):
    snapshot = escrow.revealed_history(db, group_id, now)
    if since is not None and since == snapshot.version:
        return HistoryResponse(group_id=group_id, version=snapshot.version, changed=False)

    days = [
        DayOut(
            date=str(day),
            results=[
                RankedResult.from_submission(s)
                for s in rank_day_results(snapshot.history[day].submissions.values())
            ],
            summary=snapshot.history[day].summary,
        )
        for day in sorted(snapshot.history)
    ]
    return HistoryResponse(group_id=group_id, version=snapshot.version, days=days)


# ---------------------------------------------------------------------------
# Reactions
# ---------------------------------------------------------------------------

@router.get(
    "/days/{day}/reactions",
    response_model=list[ReactionOut],
    summary="Emoji reactions for a revealed day",
    responses={409: {"description": "Day still in escrow"}},
)
def list_reactions(
    group_id: int,
    day: date,
    db: Session = Depends(get_db),
    now: datetime = Depends(now_utc),
):
    _require_revealed(db, group_id, day, now)
    return [_reaction_to_out(r) for r in store.list_reactions(db, group_id, day)]


@router.post(
    "/days/{day}/reactions",
    response_model=ReactionOut,
    status_code=status.HTTP_201_CREATED,
    summary="React to a revealed day",
    responses={
        409: {"description": "Day still in escrow"},
        422: {"description": "Emoji not in the allowed palette"},
    },
)
def add_reaction(
    group_id: int,
    day: date,
    payload: ReactionRequest,
    db: Session = Depends(get_db),
    now: datetime = Depends(now_utc),
):
    _require_revealed(db, group_id, day, now)
    reaction = store.add_reaction(db, group_id, day, payload.emoji, payload.posted_by)
    return _reaction_to_out(reaction)
