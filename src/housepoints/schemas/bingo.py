"""Pydantic schemas for the bingo icebreaker."""

from typing import Dict, Optional

from pydantic import BaseModel, Field


class MatchResult(BaseModel):
    """Outcome of comparing one question with another participant.

    ``matched_answer`` is ``None`` when the answer lists share nothing.
    """

    other_id: str
    matched_answer: Optional[str] = None


class PatternFlags(BaseModel):
    """Completed lines on the 2x2 bingo card."""

    row1: bool = False
    row2: bool = False
    col1: bool = False
    col2: bool = False
    diag1: bool = False
    diag2: bool = False
    full: bool = False


class MatchRequest(BaseModel):
    """Compare the active student's answers with another student's."""

    active_id: str
    question: str = Field(..., description="Question slot, Q1 to Q4.")
    other_id: Optional[str] = None


class MatchResponse(BaseModel):
    """Result of a match request; ``result`` is null when no participant was chosen."""

    question: str
    result: Optional[MatchResult] = None


class PatternRequest(BaseModel):
    """Per-question match state to evaluate."""

    matches: Dict[str, Optional[MatchResult]] = Field(default_factory=dict)


class QuestionRead(BaseModel):
    """A bingo question slot and its prompt."""

    question: str
    prompt: str
