"""
Stats router.

GET /groups/{group_id}/stats
GET /groups/{group_id}/head-to-head?player1=..&player2=..

Both read only revealed days, so today's escrowed scores never leak
through the aggregates.
"""
from __future__ import annotations

from dataclasses import asdict
from datetime import datetime

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from app.db.base import get_db
from app.schemas.results import HeadToHeadOut, HeadToHeadResponse, PlayerStatsOut, StatsResponse
from app.services import escrow, store
from app.services.reveal import now_utc
from app.services.stats import compute_all_player_stats, compute_head_to_head

router = APIRouter(prefix="/groups/{group_id}", tags=["stats"])


@router.get(
    "/stats",
    response_model=StatsResponse,
    summary="Lifetime stats for every roster member",
    responses={404: {"description": "Group not found"}},
)
def player_stats(
    group_id: int,
    db: Session = Depends(get_db),
    now: datetime = Depends(now_utc),
):
    """Games, win %, current / max streak, average on wins and score distribution."""
    roster = store.get_roster(db, group_id)
    snapshot = escrow.revealed_history(db, group_id, now)
    today = escrow.reference_today(now)
    all_stats = compute_all_player_stats(snapshot.history, roster, today)
    return StatsResponse(
        group_id=group_id,
        as_of=str(today),
        players=[PlayerStatsOut(player=p, **asdict(s)) for p, s in all_stats.items()],
    )


@router.get(
    "/head-to-head",
    response_model=HeadToHeadResponse,
    summary="Compare two players over the days both played",
    responses={
        404: {"description": "Group not found"},
        422: {"description": "A player is not on the roster"},
    },
)
def head_to_head(
    group_id: int,
    player1: str = Query(min_length=1, description="Roster name (any case)."),
    player2: str = Query(min_length=1, description="Roster name (any case)."),
    db: Session = Depends(get_db),
    now: datetime = Depends(now_utc),
):
    """Selecting the same player twice returns `applicable: false`."""
    group = store.get_group(db, group_id)
    name1 = store.resolve_player(group, player1)
    name2 = store.resolve_player(group, player2)
    snapshot = escrow.revealed_history(db, group_id, now)

    h2h = compute_head_to_head(snapshot.history, name1, name2)
    if h2h is None:
        return HeadToHeadResponse(applicable=False)
    return HeadToHeadResponse(applicable=True, stats=HeadToHeadOut(**asdict(h2h)))
