"""Bingo icebreaker: answer matching and line detection on a 2x2 card."""

from __future__ import annotations

import logging
from typing import Dict, Mapping, Optional, Sequence

from ..schemas import MatchResult, PatternFlags

logger = logging.getLogger(__name__)

QUESTIONS: Dict[str, str] = {
    "Q1": "3 favourite artists",
    "Q2": "3 favourite series",
    "Q3": "3 favourite dishes",
    "Q4": "3 (former) sports",
}

# Card layout:  Q1 Q2
#               Q3 Q4
PATTERNS: Dict[str, tuple[str, ...]] = {
    "row1": ("Q1", "Q2"),
    "row2": ("Q3", "Q4"),
    "col1": ("Q1", "Q3"),
    "col2": ("Q2", "Q4"),
    "diag1": ("Q1", "Q4"),
    "diag2": ("Q2", "Q3"),
    "full": ("Q1", "Q2", "Q3", "Q4"),
}

PATTERN_LABELS: Dict[str, str] = {
    "row1": "horizontal row (top)",
    "row2": "horizontal row (bottom)",
    "col1": "vertical column (left)",
    "col2": "vertical column (right)",
    "diag1": "diagonal",
    "diag2": "diagonal",
    "full": "full card",
}


class BingoRuleViolation(Exception):
    """Raised when a bingo comparison cannot be made."""

    def __init__(self, detail: str, status_code: int = 400) -> None:
        super().__init__(detail)
        self.detail = detail
        self.status_code = status_code


def _ensure_question(question: str) -> str:
    if question not in QUESTIONS:
        raise BingoRuleViolation(f"Unknown bingo question {question!r}.")
    return question


def record_match(
    active_id: str,
    question: str,
    other_id: Optional[str],
    my_answers: Sequence[str],
    other_answers: Sequence[str],
) -> Optional[MatchResult]:
    """Compare two answer lists for one question.

    Returns ``None`` when no other participant was chosen. Otherwise the
    result carries the first of ``my_answers`` that also appears in
    ``other_answers`` (case-insensitive), or ``None`` as ``matched_answer``
    when the lists are disjoint. Blank answers never match.
    """

    if not other_id:
        return None

    theirs = {answer.lower() for answer in other_answers if answer}
    matched = next((answer for answer in my_answers if answer and answer.lower() in theirs), None)
    logger.debug("bingo %s %s vs %s: %s", active_id, question, other_id, matched or "no overlap")
    return MatchResult(other_id=other_id, matched_answer=matched)


def pattern_flags(match_state: Mapping[str, Optional[MatchResult]]) -> PatternFlags:
    """Evaluate every line on the card against the per-question match state."""

    def matched(question: str) -> bool:
        result = match_state.get(question)
        return result is not None and bool(result.matched_answer)

    return PatternFlags(
        **{name: all(matched(question) for question in slots) for name, slots in PATTERNS.items()}
    )


class BingoSession:
    """Match state for one active participant.

    Completed patterns latch: once flagged they stay flagged (and are logged
    only once) until another participant is selected.
    """

    def __init__(self, active_id: str) -> None:
        self.active_id = active_id
        self.matches: Dict[str, Optional[MatchResult]] = {question: None for question in QUESTIONS}
        self.logged = PatternFlags()

    def select_participant(self, active_id: str) -> None:
        self.active_id = active_id
        self.matches = {question: None for question in QUESTIONS}
        self.logged = PatternFlags()

    def match(
        self,
        question: str,
        other_id: Optional[str],
        answers: Mapping[str, Mapping[str, Sequence[str]]],
    ) -> Optional[MatchResult]:
        """Compare ``question`` with ``other_id`` using the answer sheets in ``answers``.

        ``answers`` maps participant id to that participant's answers per question.
        """

        _ensure_question(question)
        if not other_id:
            return None
        if self.active_id not in answers:
            raise BingoRuleViolation(f"No bingo answers for {self.active_id}", status_code=404)
        if other_id not in answers:
            raise BingoRuleViolation(f"No bingo answers for {other_id}", status_code=404)

        result = record_match(
            self.active_id,
            question,
            other_id,
            answers[self.active_id].get(question, []),
            answers[other_id].get(question, []),
        )
        self.matches[question] = result
        if result is not None and result.matched_answer is not None:
            self._latch_patterns()
        return result

    def _latch_patterns(self) -> None:
        current = pattern_flags(self.matches)
        logged = self.logged.model_dump()
        for name, satisfied in current.model_dump().items():
            if satisfied and not logged[name]:
                logger.info("bingo for %s: %s", self.active_id, PATTERN_LABELS[name])
                logged[name] = True
        self.logged = PatternFlags(**logged)

    def status(self, question: str) -> str:
        """``pending`` before any comparison, ``matched`` or ``no_overlap`` after."""

        result = self.matches.get(_ensure_question(question))
        if result is None:
            return "pending"
        return "matched" if result.matched_answer else "no_overlap"

    @property
    def has_horizontal(self) -> bool:
        return self.logged.row1 or self.logged.row2

    @property
    def has_vertical(self) -> bool:
        return self.logged.col1 or self.logged.col2

    @property
    def has_diagonal(self) -> bool:
        return self.logged.diag1 or self.logged.diag2

    @property
    def has_full(self) -> bool:
        return self.logged.full
