"""SQLAlchemy models for House Points."""

from .award import Award, AwardKind
from .badge import BadgeDefinition
from .group import Group
from .student import Student

__all__ = [
    "Award",
    "AwardKind",
    "BadgeDefinition",
    "Group",
    "Student",
]
