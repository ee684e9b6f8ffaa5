"""Group domain model."""

import uuid
from datetime import datetime

from sqlalchemy import Column, DateTime, Float, String

from ..core.database import Base


class Group(Base):
    """A team of students with its own bonus point total."""

    __tablename__ = "groups"

    group_id = Column(String(64), primary_key=True, default=lambda: str(uuid.uuid4()))
    name = Column(String, nullable=False)
    points = Column(Float, nullable=False, default=0)
    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)
