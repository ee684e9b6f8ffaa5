"""Award log model capturing point movements."""

import enum
import uuid
from datetime import datetime

from sqlalchemy import Column, DateTime, Enum, Float, Index, Integer, String

from ..core.database import Base


class AwardKind(str, enum.Enum):
    """Whether an award targets a student or a group."""

    STUDENT = "student"
    GROUP = "group"


class Award(Base):
    """Immutable log entry of a point or badge grant."""

    __tablename__ = "awards"
    __table_args__ = (
        Index("awards_target_idx", "kind", "target_id"),
    )

    sequence = Column(Integer, primary_key=True, autoincrement=True)
    award_id = Column(String(64), nullable=False, unique=True, default=lambda: str(uuid.uuid4()))
    kind = Column(Enum(AwardKind, name="award_kind"), nullable=False)
    target_id = Column(String(64), nullable=False)
    amount = Column(Float, nullable=False)
    reason = Column(String, nullable=False, default="")
    badge_id = Column(String(64))
    created_at = Column(DateTime, default=datetime.utcnow, nullable=False, index=True)
