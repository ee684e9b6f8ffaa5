"""Domain logic for students, groups and the award log."""

from __future__ import annotations

import logging
import math
from datetime import datetime
from typing import Mapping, Optional, Sequence

from sqlalchemy import delete, func, or_, select
from sqlalchemy.orm import Session

from ..core.config import get_settings
from ..models import Award, AwardKind, BadgeDefinition, Group, Student
from .bingo_service import QUESTIONS

logger = logging.getLogger(__name__)


class RosterRuleViolation(Exception):
    """Raised when roster rules are violated."""

    def __init__(self, detail: str, status_code: int = 400) -> None:
        super().__init__(detail)
        self.detail = detail
        self.status_code = status_code


def _ensure_student(session: Session, student_id: str) -> Student:
    stmt = select(Student).where(Student.student_id == student_id)
    student = session.execute(stmt).scalar_one_or_none()
    if student is None:
        raise RosterRuleViolation(f"Student {student_id} not found", status_code=404)
    return student


def _ensure_group(session: Session, group_id: str) -> Group:
    stmt = select(Group).where(Group.group_id == group_id)
    group = session.execute(stmt).scalar_one_or_none()
    if group is None:
        raise RosterRuleViolation(f"Group {group_id} not found", status_code=404)
    return group


def email_valid(email: Optional[str], domain: Optional[str] = None) -> bool:
    """Return whether ``email`` belongs to the configured student domain."""

    domain = get_settings().student_email_domain if domain is None else domain
    candidate = (email or "").strip().lower()
    if not candidate or "@" not in candidate:
        return False
    if not domain:
        return True
    return candidate.endswith("@" + domain.lower())


def find_student_by_email(session: Session, email: str) -> Optional[Student]:
    """Case-insensitive lookup of a student by email."""

    stmt = select(Student).where(func.lower(Student.email) == email.strip().lower())
    return session.execute(stmt).scalars().first()


def normalize_bingo(answers: Optional[Mapping[str, Sequence[str]]]) -> dict[str, list[str]]:
    """Trim every answer and drop blanks; unknown question keys are ignored."""

    answers = answers or {}
    return {
        question: [answer.strip() for answer in answers.get(question, []) if answer and answer.strip()]
        for question in QUESTIONS
    }


def _append_award(
    session: Session,
    *,
    kind: AwardKind,
    target_id: str,
    amount: float,
    reason: str,
    badge_id: Optional[str] = None,
    history_limit: Optional[int] = None,
) -> Award:
    award = Award(
        kind=kind,
        target_id=target_id,
        amount=amount,
        reason=reason or "",
        badge_id=badge_id,
        created_at=datetime.utcnow(),
    )
    session.add(award)
    session.flush()
    truncate_awards(session, history_limit=history_limit)
    return award


def truncate_awards(session: Session, *, history_limit: Optional[int] = None) -> int:
    """Drop awards older than the most recent ``history_limit`` entries."""

    limit = history_limit if history_limit is not None else get_settings().award_history_limit
    stale_stmt = select(Award.sequence).order_by(Award.sequence.desc()).offset(limit)
    stale = session.execute(stale_stmt).scalars().all()
    if not stale:
        return 0
    session.execute(delete(Award).where(Award.sequence.in_(stale)))
    session.flush()
    return len(stale)


def _ensure_finite(amount: float) -> None:
    if not isinstance(amount, (int, float)) or not math.isfinite(amount):
        raise RosterRuleViolation("Award amount must be a finite number.")


def list_students(session: Session) -> Sequence[Student]:
    return session.execute(select(Student).order_by(Student.created_at, Student.student_id)).scalars().all()


def get_student(session: Session, student_id: str) -> Student:
    return _ensure_student(session, student_id)


def add_student(
    session: Session,
    *,
    name: str,
    email: Optional[str] = None,
    group_id: Optional[str] = None,
    bingo: Optional[Mapping[str, Sequence[str]]] = None,
    student_id: Optional[str] = None,
) -> Student:
    """Create a student with zero points and no badges."""

    name = (name or "").strip()
    if not name:
        raise RosterRuleViolation("Student name is required.")

    email = (email or "").strip() or None
    if email is not None:
        if not email_valid(email):
            raise RosterRuleViolation(f"Email {email} is not a valid student email.")
        if find_student_by_email(session, email) is not None:
            raise RosterRuleViolation(f"A student with email {email} already exists.", status_code=409)

    if student_id is not None and session.get(Student, student_id) is not None:
        raise RosterRuleViolation(f"Student {student_id} already exists.", status_code=409)

    if group_id:
        _ensure_group(session, group_id)

    student = Student(
        display_name=name,
        email=email,
        group_id=group_id or None,
        points=0,
        badge_ids=[],
        bingo=normalize_bingo(bingo) if bingo is not None else None,
    )
    if student_id is not None:
        student.student_id = student_id
    session.add(student)
    session.flush()
    return student


def remove_student(session: Session, student_id: str) -> int:
    """Delete a student and prune its individual awards; returns pruned count."""

    student = _ensure_student(session, student_id)
    result = session.execute(
        delete(Award).where(Award.kind == AwardKind.STUDENT, Award.target_id == student.student_id)
    )
    session.delete(student)
    session.flush()
    logger.info("removed student %s and %d awards", student_id, result.rowcount or 0)
    return result.rowcount or 0


def assign_group(session: Session, student_id: str, group_id: Optional[str]) -> Student:
    student = _ensure_student(session, student_id)
    if group_id:
        _ensure_group(session, group_id)
    student.group_id = group_id or None
    session.flush()
    return student


def set_bingo_answers(session: Session, student_id: str, answers: Mapping[str, Sequence[str]]) -> Student:
    student = _ensure_student(session, student_id)
    student.bingo = normalize_bingo(answers)
    session.flush()
    return student


def list_groups(session: Session) -> Sequence[Group]:
    return session.execute(select(Group).order_by(Group.created_at, Group.group_id)).scalars().all()


def add_group(session: Session, *, name: str, group_id: Optional[str] = None) -> Group:
    name = (name or "").strip()
    if not name:
        raise RosterRuleViolation("Group name is required.")
    if group_id is not None and session.get(Group, group_id) is not None:
        raise RosterRuleViolation(f"Group {group_id} already exists.", status_code=409)

    group = Group(name=name, points=0)
    if group_id is not None:
        group.group_id = group_id
    session.add(group)
    session.flush()
    return group


def remove_group(session: Session, group_id: str) -> None:
    """Delete a group; its members fall back to no group."""

    group = _ensure_group(session, group_id)
    members = session.execute(select(Student).where(Student.group_id == group.group_id)).scalars().all()
    for member in members:
        member.group_id = None
    session.delete(group)
    session.flush()


def award_to_student(
    session: Session,
    *,
    student_id: str,
    amount: float,
    reason: str = "",
    history_limit: Optional[int] = None,
) -> Award:
    """Add a signed amount to a student's points and log it."""

    _ensure_finite(amount)
    student = _ensure_student(session, student_id)
    student.points = (student.points or 0) + amount
    award = _append_award(
        session,
        kind=AwardKind.STUDENT,
        target_id=student.student_id,
        amount=amount,
        reason=reason,
        history_limit=history_limit,
    )
    logger.info("awarded %s points to student %s: %s", amount, student_id, reason)
    return award


def award_to_group(
    session: Session,
    *,
    group_id: str,
    amount: float,
    reason: str = "",
    history_limit: Optional[int] = None,
) -> Award:
    """Add a signed amount to a group's bonus and log it."""

    _ensure_finite(amount)
    group = _ensure_group(session, group_id)
    group.points = (group.points or 0) + amount
    award = _append_award(
        session,
        kind=AwardKind.GROUP,
        target_id=group.group_id,
        amount=amount,
        reason=reason,
        history_limit=history_limit,
    )
    logger.info("awarded %s points to group %s: %s", amount, group_id, reason)
    return award


def toggle_badge(
    session: Session,
    *,
    student_id: str,
    badge_id: str,
    has_badge: bool,
    badge_points: Optional[float] = None,
) -> Optional[Award]:
    """Grant or revoke a badge, moving ``badge_points`` with it.

    Returns the logged award, or ``None`` when the student already was in the
    requested state.
    """

    if not badge_id:
        raise RosterRuleViolation("Badge id is required.")
    points = get_settings().badge_points if badge_points is None else badge_points
    student = _ensure_student(session, student_id)

    current = list(student.badge_ids or [])
    had_badge = badge_id in current
    if has_badge and not had_badge:
        current.append(badge_id)
        delta = points
    elif not has_badge and had_badge:
        current.remove(badge_id)
        delta = -points
    else:
        return None

    student.badge_ids = current
    student.points = (student.points or 0) + delta

    definition = session.get(BadgeDefinition, badge_id)
    title = definition.title if definition is not None else badge_id
    return _append_award(
        session,
        kind=AwardKind.STUDENT,
        target_id=student.student_id,
        amount=delta,
        reason=f"Badge {title}",
        badge_id=badge_id,
    )


def list_awards(session: Session, *, limit: int = 50, offset: int = 0) -> Sequence[Award]:
    """Most recent awards first."""

    stmt = select(Award).order_by(Award.sequence.desc()).offset(offset).limit(limit)
    return session.execute(stmt).scalars().all()


def awards_for_student(session: Session, student_id: str) -> Sequence[Award]:
    """Awards to the student plus awards to the student's current group."""

    student = _ensure_student(session, student_id)
    conditions = [(Award.kind == AwardKind.STUDENT) & (Award.target_id == student.student_id)]
    if student.group_id and session.get(Group, student.group_id) is not None:
        conditions.append((Award.kind == AwardKind.GROUP) & (Award.target_id == student.group_id))

    stmt = select(Award).where(or_(*conditions)).order_by(Award.sequence.desc())
    return session.execute(stmt).scalars().all()
