"""Badge catalog management."""

from __future__ import annotations

from typing import Optional, Sequence

from sqlalchemy import select
from sqlalchemy.orm import Session

from ..models import BadgeDefinition, Student
from .roster_service import RosterRuleViolation, get_student


def list_badges(session: Session) -> Sequence[BadgeDefinition]:
    return session.execute(select(BadgeDefinition).order_by(BadgeDefinition.title)).scalars().all()


def add_badge(
    session: Session,
    *,
    title: str,
    image: str,
    requirement: str = "",
    badge_id: Optional[str] = None,
) -> BadgeDefinition:
    """Add a badge definition; title and image are required."""

    title = (title or "").strip()
    if not title or not image:
        raise RosterRuleViolation("Badge title and image are required.")

    badge = BadgeDefinition(title=title, image=image, requirement=(requirement or "").strip())
    if badge_id is not None:
        badge.badge_id = badge_id
    session.add(badge)
    session.flush()
    return badge


def remove_badge(session: Session, badge_id: str) -> None:
    """Delete a definition. Students keep the id; it is filtered out on read."""

    badge = session.get(BadgeDefinition, badge_id)
    if badge is None:
        raise RosterRuleViolation(f"Badge {badge_id} not found", status_code=404)
    session.delete(badge)
    session.flush()


def resolve_badges(student: Student, catalog: Sequence[BadgeDefinition]) -> list[BadgeDefinition]:
    """Return the student's badges in earned order, skipping dangling ids."""

    by_id = {badge.badge_id: badge for badge in catalog}
    return [by_id[badge_id] for badge_id in (student.badge_ids or []) if badge_id in by_id]


def badges_for_student(session: Session, student_id: str) -> list[BadgeDefinition]:
    student = get_student(session, student_id)
    return resolve_badges(student, list_badges(session))
