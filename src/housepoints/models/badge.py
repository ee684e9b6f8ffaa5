"""Badge catalog model."""

import uuid

from sqlalchemy import Column, String

from ..core.database import Base


class BadgeDefinition(Base):
    """A named achievement students can earn."""

    __tablename__ = "badges"

    badge_id = Column(String(64), primary_key=True, default=lambda: str(uuid.uuid4()))
    title = Column(String, nullable=False)
    image = Column(String, nullable=False)
    requirement = Column(String, nullable=False, default="")
