"""Pydantic schemas for the badge catalog."""

from pydantic import BaseModel, ConfigDict, Field


class BadgeCreate(BaseModel):
    """Request body for adding a badge definition."""

    title: str = Field(..., max_length=120)
    image: str = Field(..., description="Image reference (path or URL).")
    requirement: str = Field("", max_length=500)


class BadgeRead(BaseModel):
    """Badge definition."""

    model_config = ConfigDict(from_attributes=True)

    badge_id: str
    title: str
    image: str
    requirement: str


class BadgeToggle(BaseModel):
    """Request body for granting or revoking a badge."""

    has_badge: bool
