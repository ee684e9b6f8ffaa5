"""Student roster endpoints."""

from __future__ import annotations

from typing import List

from fastapi import APIRouter, Depends, HTTPException, Response, status
from sqlalchemy.orm import Session

from ...core.database import get_db
from ...schemas import AwardRead, BadgeRead, BadgeToggle, BingoAnswers, GroupAssignment, StudentCreate, StudentRead
from ...services import badge_service, roster_service
from ...services.roster_service import RosterRuleViolation

router = APIRouter(prefix="/students", tags=["students"])


@router.get("", response_model=List[StudentRead], summary="List students")
def list_students(db: Session = Depends(get_db)) -> List[StudentRead]:
    return list(roster_service.list_students(db))


@router.post(
    "",
    response_model=StudentRead,
    status_code=status.HTTP_201_CREATED,
    summary="Add a student",
    responses={
        201: {
            "description": "Student created",
            "content": {
                "application/json": {
                    "example": {
                        "student_id": "s1",
                        "display_name": "Alex",
                        "email": "alex@student.nhlstenden.com",
                        "points": 0,
                        "group_id": "g1",
                        "badge_ids": [],
                        "bingo": None,
                        "created_at": "2025-09-01T09:00:00",
                    }
                }
            },
        },
        400: {"description": "Invalid name or email"},
        409: {"description": "Email or id already in use"},
    },
)
def create_student(payload: StudentCreate, db: Session = Depends(get_db)) -> StudentRead:
    """Add a student with zero points.

    Example request body::

        {
            "display_name": "Alex",
            "email": "alex@student.nhlstenden.com",
            "group_id": "g1"
        }
    """

    try:
        student = roster_service.add_student(
            db,
            name=payload.display_name,
            email=payload.email,
            group_id=payload.group_id,
            bingo=payload.bingo,
            student_id=payload.student_id,
        )
        db.commit()
        db.refresh(student)
        return student
    except RosterRuleViolation as exc:
        db.rollback()
        raise HTTPException(status_code=exc.status_code, detail=exc.detail) from exc


@router.get("/{student_id}", response_model=StudentRead, summary="Get a student")
def get_student(student_id: str, db: Session = Depends(get_db)) -> StudentRead:
    try:
        return roster_service.get_student(db, student_id)
    except RosterRuleViolation as exc:
        raise HTTPException(status_code=exc.status_code, detail=exc.detail) from exc


@router.delete("/{student_id}", status_code=status.HTTP_204_NO_CONTENT, summary="Remove a student")
def delete_student(student_id: str, db: Session = Depends(get_db)) -> Response:
    """Remove a student together with its individual awards."""

    try:
        roster_service.remove_student(db, student_id)
        db.commit()
    except RosterRuleViolation as exc:
        db.rollback()
        raise HTTPException(status_code=exc.status_code, detail=exc.detail) from exc
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.put("/{student_id}/group", response_model=StudentRead, summary="Assign a group")
def assign_group(student_id: str, payload: GroupAssignment, db: Session = Depends(get_db)) -> StudentRead:
    try:
        student = roster_service.assign_group(db, student_id, payload.group_id)
        db.commit()
        db.refresh(student)
        return student
    except RosterRuleViolation as exc:
        db.rollback()
        raise HTTPException(status_code=exc.status_code, detail=exc.detail) from exc


@router.put("/{student_id}/bingo", response_model=StudentRead, summary="Set bingo answers")
def set_bingo(student_id: str, payload: BingoAnswers, db: Session = Depends(get_db)) -> StudentRead:
    try:
        student = roster_service.set_bingo_answers(db, student_id, payload.model_dump())
        db.commit()
        db.refresh(student)
        return student
    except RosterRuleViolation as exc:
        db.rollback()
        raise HTTPException(status_code=exc.status_code, detail=exc.detail) from exc


@router.put(
    "/{student_id}/badges/{badge_id}",
    response_model=StudentRead,
    summary="Grant or revoke a badge",
    responses={404: {"description": "Student not found"}},
)
def toggle_badge(
    student_id: str,
    badge_id: str,
    payload: BadgeToggle,
    db: Session = Depends(get_db),
) -> StudentRead:
    """Granting adds the badge points, revoking deducts them; both are logged as awards."""

    try:
        roster_service.toggle_badge(db, student_id=student_id, badge_id=badge_id, has_badge=payload.has_badge)
        db.commit()
        student = roster_service.get_student(db, student_id)
        db.refresh(student)
        return student
    except RosterRuleViolation as exc:
        db.rollback()
        raise HTTPException(status_code=exc.status_code, detail=exc.detail) from exc


@router.get("/{student_id}/badges", response_model=List[BadgeRead], summary="Badges earned by a student")
def student_badges(student_id: str, db: Session = Depends(get_db)) -> List[BadgeRead]:
    try:
        return badge_service.badges_for_student(db, student_id)
    except RosterRuleViolation as exc:
        raise HTTPException(status_code=exc.status_code, detail=exc.detail) from exc


@router.get("/{student_id}/awards", response_model=List[AwardRead], summary="Awards for a student and its group")
def student_awards(student_id: str, db: Session = Depends(get_db)) -> List[AwardRead]:
    try:
        return list(roster_service.awards_for_student(db, student_id))
    except RosterRuleViolation as exc:
        raise HTTPException(status_code=exc.status_code, detail=exc.detail) from exc
