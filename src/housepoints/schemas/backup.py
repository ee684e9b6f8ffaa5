"""Pydantic schemas for backup and mirror endpoints."""

from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field


class RestoreSummary(BaseModel):
    """Number of records restored per collection; skipped collections are absent."""

    restored: Dict[str, int]


class MirrorReport(BaseModel):
    """Outcome of writing JSON mirror files."""

    ok: bool
    files: List[str] = Field(default_factory=list)
    error: Optional[str] = None


class BackupPayload(BaseModel):
    """Full roster snapshot."""

    students: List[Dict[str, Any]] = Field(default_factory=list)
    groups: List[Dict[str, Any]] = Field(default_factory=list)
    awards: List[Dict[str, Any]] = Field(default_factory=list)
    badges: List[Dict[str, Any]] = Field(default_factory=list)
