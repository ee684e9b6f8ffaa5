"""Pydantic schemas for award endpoints."""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

from ..models import AwardKind


class AwardCreate(BaseModel):
    """Request body for awarding (or deducting) points."""

    target_id: str
    amount: float = Field(..., allow_inf_nan=False, description="Signed amount; negative for penalties.")
    reason: str = Field("", max_length=280)


class AwardRead(BaseModel):
    """Award log entry."""

    model_config = ConfigDict(from_attributes=True)

    award_id: str
    kind: AwardKind
    target_id: str
    amount: float
    reason: str
    badge_id: Optional[str] = None
    created_at: datetime
