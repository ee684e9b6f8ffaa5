"""Group endpoints."""

from __future__ import annotations

from typing import List

from fastapi import APIRouter, Depends, HTTPException, Response, status
from sqlalchemy.orm import Session

from ...core.database import get_db
from ...schemas import GroupCreate, GroupRead
from ...services import roster_service
from ...services.roster_service import RosterRuleViolation

router = APIRouter(prefix="/groups", tags=["groups"])


@router.get("", response_model=List[GroupRead], summary="List groups")
def list_groups(db: Session = Depends(get_db)) -> List[GroupRead]:
    return list(roster_service.list_groups(db))


@router.post(
    "",
    response_model=GroupRead,
    status_code=status.HTTP_201_CREATED,
    summary="Add a group",
    responses={
        201: {
            "description": "Group created",
            "content": {
                "application/json": {
                    "example": {
                        "group_id": "g1",
                        "name": "Team EEG",
                        "points": 0,
                        "created_at": "2025-09-01T09:00:00",
                    }
                }
            },
        },
        409: {"description": "Group id already in use"},
    },
)
def create_group(payload: GroupCreate, db: Session = Depends(get_db)) -> GroupRead:
    try:
        group = roster_service.add_group(db, name=payload.name, group_id=payload.group_id)
        db.commit()
        db.refresh(group)
        return group
    except RosterRuleViolation as exc:
        db.rollback()
        raise HTTPException(status_code=exc.status_code, detail=exc.detail) from exc


@router.delete("/{group_id}", status_code=status.HTTP_204_NO_CONTENT, summary="Remove a group")
def delete_group(group_id: str, db: Session = Depends(get_db)) -> Response:
    """Remove a group; its members are left without a group."""

    try:
        roster_service.remove_group(db, group_id)
        db.commit()
    except RosterRuleViolation as exc:
        db.rollback()
        raise HTTPException(status_code=exc.status_code, detail=exc.detail) from exc
    return Response(status_code=status.HTTP_204_NO_CONTENT)
