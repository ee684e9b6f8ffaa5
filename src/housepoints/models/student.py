"""Student domain model."""

import uuid
from datetime import datetime

from sqlalchemy import JSON, Column, DateTime, Float, String, UniqueConstraint

from ..core.database import Base


def _new_id() -> str:
    return str(uuid.uuid4())


class Student(Base):
    """Represents a student collecting house points."""

    __tablename__ = "students"
    __table_args__ = (
        UniqueConstraint("email", name="students_email_unique"),
    )

    student_id = Column(String(64), primary_key=True, default=_new_id)
    display_name = Column(String, nullable=False)
    email = Column(String)
    points = Column(Float, nullable=False, default=0)
    # Not a foreign key: an unknown group reads as "no group".
    group_id = Column(String(64), index=True)
    badge_ids = Column(JSON, nullable=False, default=list)
    bingo = Column(JSON)
    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)
