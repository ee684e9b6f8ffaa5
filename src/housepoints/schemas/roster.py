"""Pydantic schemas for students and groups."""

from datetime import datetime
from typing import Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


class StudentCreate(BaseModel):
    """Request body for adding a student."""

    display_name: str = Field(..., min_length=1, max_length=120)
    email: Optional[str] = Field(None, max_length=254)
    group_id: Optional[str] = None
    student_id: Optional[str] = Field(None, max_length=64, description="Optional caller supplied id.")
    bingo: Optional[Dict[str, List[str]]] = None


class StudentRead(BaseModel):
    """Student snapshot as consumed by the leaderboard and returned by the API."""

    model_config = ConfigDict(from_attributes=True)

    student_id: str
    display_name: str
    email: Optional[str] = None
    points: float = 0
    group_id: Optional[str] = None
    badge_ids: List[str] = Field(default_factory=list)
    bingo: Optional[Dict[str, List[str]]] = None
    created_at: Optional[datetime] = None

    @field_validator("points", mode="before")
    @classmethod
    def missing_points_are_zero(cls, value):
        return 0 if value is None else value

    @field_validator("badge_ids", mode="before")
    @classmethod
    def missing_badges_are_empty(cls, value):
        return value or []


class GroupAssignment(BaseModel):
    """Request body for moving a student between groups."""

    group_id: Optional[str] = Field(None, description="Target group, or null to clear.")


class BingoAnswers(BaseModel):
    """A student's answers to the four bingo questions."""

    Q1: List[str] = Field(default_factory=list)
    Q2: List[str] = Field(default_factory=list)
    Q3: List[str] = Field(default_factory=list)
    Q4: List[str] = Field(default_factory=list)


class GroupCreate(BaseModel):
    """Request body for adding a group."""

    name: str = Field(..., min_length=1, max_length=120)
    group_id: Optional[str] = Field(None, max_length=64)


class GroupRead(BaseModel):
    """Group snapshot."""

    model_config = ConfigDict(from_attributes=True)

    group_id: str
    name: str
    points: float = 0
    created_at: Optional[datetime] = None

    @field_validator("points", mode="before")
    @classmethod
    def missing_points_are_zero(cls, value):
        return 0 if value is None else value
