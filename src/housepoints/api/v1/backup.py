"""Backup, restore and JSON mirror endpoints."""

from __future__ import annotations

from typing import Any, Dict, List

from fastapi import APIRouter, Body, Depends, HTTPException, status
from sqlalchemy.orm import Session

from ...core.config import get_settings
from ...core.database import get_db
from ...schemas import BackupPayload, MirrorReport, RestoreSummary
from ...services import backup_service, mirror_service
from ...services.backup_service import BackupFormatError

router = APIRouter(tags=["backup"])


@router.get("/backup", response_model=BackupPayload, summary="Export the full roster")
def export_backup(db: Session = Depends(get_db)) -> Dict[str, List[Dict[str, Any]]]:
    return backup_service.export_snapshot(db)


@router.post(
    "/backup/restore",
    response_model=RestoreSummary,
    summary="Restore a roster backup",
    responses={400: {"description": "Invalid backup"}},
)
def restore_backup(data: Any = Body(...), db: Session = Depends(get_db)) -> RestoreSummary:
    """Replace every collection present as a list in the payload.

    Example request body::

        {
            "groups": [{"id": "g1", "name": "Team EEG", "points": 20}],
            "students": [{"id": "s1", "name": "Alex", "groupId": "g1", "points": 10, "badges": []}]
        }
    """

    try:
        restored = backup_service.restore_snapshot(db, data)
        db.commit()
    except BackupFormatError as exc:
        db.rollback()
        raise HTTPException(status_code=exc.status_code, detail=exc.detail) from exc
    return RestoreSummary(restored=restored)


def _mirror_dir() -> str:
    directory = get_settings().mirror_dir
    if not directory:
        raise HTTPException(status_code=status.HTTP_503_SERVICE_UNAVAILABLE, detail="Mirroring is not configured.")
    return directory


def _report(result: mirror_service.MirrorResult) -> MirrorReport:
    if not result.ok:
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=result.error)
    return MirrorReport(ok=result.ok, files=result.files, error=result.error)


@router.post("/mirror/students", response_model=MirrorReport, summary="Write students.json verbatim")
def mirror_students(data: Any = Body(...)) -> MirrorReport:
    return _report(mirror_service.write_students_file(_mirror_dir(), data))


@router.post("/mirror", response_model=MirrorReport, summary="Mirror the roster to JSON files")
def mirror_roster(db: Session = Depends(get_db)) -> MirrorReport:
    return _report(mirror_service.mirror_roster(db, _mirror_dir()))
