"""Badge catalog endpoints."""

from __future__ import annotations

from typing import List

from fastapi import APIRouter, Depends, HTTPException, Response, status
from sqlalchemy.orm import Session

from ...core.database import get_db
from ...schemas import BadgeCreate, BadgeRead
from ...services import badge_service
from ...services.roster_service import RosterRuleViolation

router = APIRouter(prefix="/badges", tags=["badges"])


@router.get("", response_model=List[BadgeRead], summary="Badge catalog")
def list_badges(db: Session = Depends(get_db)) -> List[BadgeRead]:
    return list(badge_service.list_badges(db))


@router.post("", response_model=BadgeRead, status_code=status.HTTP_201_CREATED, summary="Add a badge")
def create_badge(payload: BadgeCreate, db: Session = Depends(get_db)) -> BadgeRead:
    try:
        badge = badge_service.add_badge(
            db,
            title=payload.title,
            image=payload.image,
            requirement=payload.requirement,
        )
        db.commit()
        db.refresh(badge)
        return badge
    except RosterRuleViolation as exc:
        db.rollback()
        raise HTTPException(status_code=exc.status_code, detail=exc.detail) from exc


@router.delete("/{badge_id}", status_code=status.HTTP_204_NO_CONTENT, summary="Remove a badge")
def delete_badge(badge_id: str, db: Session = Depends(get_db)) -> Response:
    try:
        badge_service.remove_badge(db, badge_id)
        db.commit()
    except RosterRuleViolation as exc:
        db.rollback()
        raise HTTPException(status_code=exc.status_code, detail=exc.detail) from exc
    return Response(status_code=status.HTTP_204_NO_CONTENT)
