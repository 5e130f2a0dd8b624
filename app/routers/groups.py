"""
Groups router.

POST   /groups
GET    /groups
GET    /groups/{group_id}
PATCH  /groups/{group_id}
DELETE /groups/{group_id}
"""
from __future__ import annotations

from fastapi import APIRouter, Depends, Response, status
from sqlalchemy.orm import Session

from app.db.base import get_db
from app.models.group import Group
from app.schemas.group import GroupCreateRequest, GroupResponse, GroupUpdateRequest
from app.services import store

router = APIRouter(prefix="/groups", tags=["groups"])


def _group_to_response(group: Group) -> GroupResponse:
    return GroupResponse(
        id=group.id,
        name=group.name,
        players=group.players,
        created_at=group.created_at.isoformat() if group.created_at else "",
    )


@router.post(
    "",
    response_model=GroupResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create a group",
    responses={422: {"description": "Invalid or oversized roster"}},
)
def create_group(payload: GroupCreateRequest, db: Session = Depends(get_db)):
    """Create a group with up to 10 players."""
    return _group_to_response(store.create_group(db, payload.name, payload.players))


@router.get("", response_model=list[GroupResponse], summary="List groups")
def list_groups(db: Session = Depends(get_db)):
    return [_group_to_response(g) for g in store.list_groups(db)]


@router.get(
    "/{group_id}",
    response_model=GroupResponse,
    summary="Get a group",
    responses={404: {"description": "Group not found"}},
)
def get_group(group_id: int, db: Session = Depends(get_db)):
    return _group_to_response(store.get_group(db, group_id))


@router.patch(
    "/{group_id}",
    response_model=GroupResponse,
    summary="Rename a group or replace its roster",
    responses={404: {"description": "Group not found"}, 422: {"description": "Invalid roster"}},
)
def update_group(group_id: int, payload: GroupUpdateRequest, db: Session = Depends(get_db)):
    """
    Replacing the roster never deletes submissions; a removed player's
    history stays and reappears if they are added back.
    """
    group = store.update_group(db, group_id, name=payload.name, players=payload.players)
    return _group_to_response(group)


@router.delete(
    "/{group_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Delete a group and all of its data",
    responses={404: {"description": "Group not found"}},
)
def delete_group(group_id: int, db: Session = Depends(get_db)):
    store.delete_group(db, group_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
