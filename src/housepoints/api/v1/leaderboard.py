"""Leaderboard endpoints."""

from __future__ import annotations

from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.orm import Session

from ...core.database import get_db
from ...schemas import GroupRead, RankedGroup, RankedStudent, StudentRead
from ...services import leaderboard_service, roster_service

router = APIRouter(prefix="/leaderboard", tags=["leaderboard"])


def _student_snapshots(db: Session) -> List[StudentRead]:
    return [StudentRead.model_validate(student) for student in roster_service.list_students(db)]


def _group_snapshots(db: Session) -> List[GroupRead]:
    return [GroupRead.model_validate(group) for group in roster_service.list_groups(db)]


@router.get(
    "/students",
    response_model=List[RankedStudent],
    summary="Individual leaderboard",
    responses={
        200: {
            "description": "Students ordered by points",
            "content": {
                "application/json": {
                    "example": [
                        {
                            "student_id": "s3",
                            "display_name": "Casey",
                            "email": "casey@student.nhlstenden.com",
                            "points": 12,
                            "group_id": "g2",
                            "badge_ids": [],
                            "bingo": None,
                            "created_at": "2025-09-01T09:00:00",
                            "rank": 1,
                        }
                    ]
                }
            },
        }
    },
)
def get_individual_leaderboard(
    limit: Optional[int] = Query(None, ge=1, description="Number of top students to return"),
    db: Session = Depends(get_db),
) -> List[RankedStudent]:
    """Return students ranked by point total."""

    ranked = leaderboard_service.rank_individuals(_student_snapshots(db))
    return leaderboard_service.top(ranked, limit) if limit else ranked


@router.get(
    "/groups",
    response_model=List[RankedGroup],
    summary="Group leaderboard",
    responses={
        200: {
            "description": "Groups ordered by average member points plus bonus",
            "content": {
                "application/json": {
                    "example": [
                        {
                            "group_id": "g1",
                            "name": "Team EEG",
                            "points": 20,
                            "created_at": "2025-09-01T09:00:00",
                            "size": 2,
                            "avg_indiv": 7.5,
                            "bonus": 20,
                            "total": 27.5,
                            "rank": 1,
                        }
                    ]
                }
            },
        }
    },
)
def get_group_leaderboard(
    limit: Optional[int] = Query(None, ge=1, description="Number of top groups to return"),
    db: Session = Depends(get_db),
) -> List[RankedGroup]:
    """Return groups ranked by total score."""

    ranked = leaderboard_service.rank_groups(_group_snapshots(db), _student_snapshots(db))
    return leaderboard_service.top(ranked, limit) if limit else ranked


@router.get("/students/{student_id}", response_model=RankedStudent, summary="A student's standing")
def get_student_standing(student_id: str, db: Session = Depends(get_db)) -> RankedStudent:
    ranked = leaderboard_service.rank_individuals(_student_snapshots(db))
    entry = leaderboard_service.find_entry(ranked, student_id)
    if entry is None:
        raise HTTPException(status_code=404, detail=f"Student {student_id} not found")
    return entry


@router.get("/groups/{group_id}", response_model=RankedGroup, summary="A group's standing")
def get_group_standing(group_id: str, db: Session = Depends(get_db)) -> RankedGroup:
    ranked = leaderboard_service.rank_groups(_group_snapshots(db), _student_snapshots(db))
    entry = leaderboard_service.find_entry(ranked, group_id)
    if entry is None:
        raise HTTPException(status_code=404, detail=f"Group {group_id} not found")
    return entry
