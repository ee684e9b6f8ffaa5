"""Leaderboard response schemas."""

from pydantic import Field

from .roster import GroupRead, StudentRead


class RankedStudent(StudentRead):
    """Student entry of the individual leaderboard."""

    rank: int = Field(..., ge=1)


class RankedGroup(GroupRead):
    """Group entry of the group leaderboard with its derived scores."""

    size: int = Field(..., ge=0)
    avg_indiv: float
    bonus: float
    total: float
    rank: int = Field(..., ge=1)
