"""Bingo icebreaker endpoints.

The card state lives with the caller: ``/match`` compares one question for
the active student, ``/patterns`` evaluates the card the caller has built.
"""

from __future__ import annotations

from typing import List

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

from ...core.database import get_db
from ...schemas import MatchRequest, MatchResponse, PatternFlags, PatternRequest, QuestionRead
from ...services import bingo_service, roster_service
from ...services.bingo_service import BingoRuleViolation
from ...services.roster_service import RosterRuleViolation

router = APIRouter(prefix="/bingo", tags=["bingo"])


@router.get("/questions", response_model=List[QuestionRead], summary="Bingo questions")
def list_questions() -> List[QuestionRead]:
    return [QuestionRead(question=key, prompt=prompt) for key, prompt in bingo_service.QUESTIONS.items()]


@router.post(
    "/match",
    response_model=MatchResponse,
    summary="Compare one question with another student",
    responses={
        200: {
            "description": "Match result; matched_answer is null when nothing overlaps",
            "content": {
                "application/json": {
                    "example": {"question": "Q1", "result": {"other_id": "s2", "matched_answer": "Adele"}}
                }
            },
        },
        404: {"description": "Student not found"},
    },
)
def match(payload: MatchRequest, db: Session = Depends(get_db)) -> MatchResponse:
    """Find the first of the active student's answers the other student shares.

    Example request body::

        {
            "active_id": "s1",
            "question": "Q1",
            "other_id": "s2"
        }
    """

    try:
        card = bingo_service.BingoSession(payload.active_id)
        if not payload.other_id:
            card.match(payload.question, None, {})
            return MatchResponse(question=payload.question, result=None)

        answers = {}
        for student_id in (payload.active_id, payload.other_id):
            student = roster_service.get_student(db, student_id)
            answers[student_id] = student.bingo or {}
        result = card.match(payload.question, payload.other_id, answers)
    except (BingoRuleViolation, RosterRuleViolation) as exc:
        raise HTTPException(status_code=exc.status_code, detail=exc.detail) from exc
    return MatchResponse(question=payload.question, result=result)


@router.post("/patterns", response_model=PatternFlags, summary="Completed lines on a card")
def patterns(payload: PatternRequest) -> PatternFlags:
    return bingo_service.pattern_flags(payload.matches)
