"""Point award endpoints."""

from __future__ import annotations

from typing import List

from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.orm import Session

from ...core.database import get_db
from ...schemas import AwardCreate, AwardRead
from ...services import roster_service
from ...services.roster_service import RosterRuleViolation

router = APIRouter(prefix="/awards", tags=["awards"])

_AWARD_EXAMPLE = {
    "award_id": "44444444-4444-4444-4444-444444444444",
    "kind": "student",
    "target_id": "s3",
    "amount": 4,
    "reason": "Reading quiz",
    "badge_id": None,
    "created_at": "2025-09-12T10:15:30",
}


@router.get(
    "",
    response_model=List[AwardRead],
    summary="Recent awards",
    responses={
        200: {
            "description": "Award log, newest first",
            "content": {"application/json": {"example": [_AWARD_EXAMPLE]}},
        }
    },
)
def list_awards(
    limit: int = Query(15, ge=1, le=500, description="Maximum items to return"),
    offset: int = Query(0, ge=0, description="Items to skip for pagination"),
    db: Session = Depends(get_db),
) -> List[AwardRead]:
    return list(roster_service.list_awards(db, limit=limit, offset=offset))


@router.post(
    "/students",
    response_model=AwardRead,
    status_code=status.HTTP_201_CREATED,
    summary="Award points to a student",
    responses={
        201: {"description": "Award logged", "content": {"application/json": {"example": _AWARD_EXAMPLE}}},
        404: {"description": "Student not found"},
    },
)
def award_student(payload: AwardCreate, db: Session = Depends(get_db)) -> AwardRead:
    """Add (or with a negative amount, deduct) points for a student.

    Example request body::

        {
            "target_id": "s3",
            "amount": 4,
            "reason": "Reading quiz"
        }
    """

    try:
        award = roster_service.award_to_student(
            db,
            student_id=payload.target_id,
            amount=payload.amount,
            reason=payload.reason.strip(),
        )
        db.commit()
        db.refresh(award)
        return award
    except RosterRuleViolation as exc:
        db.rollback()
        raise HTTPException(status_code=exc.status_code, detail=exc.detail) from exc


@router.post(
    "/groups",
    response_model=AwardRead,
    status_code=status.HTTP_201_CREATED,
    summary="Award bonus points to a group",
    responses={404: {"description": "Group not found"}},
)
def award_group(payload: AwardCreate, db: Session = Depends(get_db)) -> AwardRead:
    try:
        award = roster_service.award_to_group(
            db,
            group_id=payload.target_id,
            amount=payload.amount,
            reason=payload.reason.strip(),
        )
        db.commit()
        db.refresh(award)
        return award
    except RosterRuleViolation as exc:
        db.rollback()
        raise HTTPException(status_code=exc.status_code, detail=exc.detail) from exc
