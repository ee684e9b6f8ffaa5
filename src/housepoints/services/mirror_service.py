"""Write-through JSON mirrors of the roster.

Failures are reported through ``MirrorResult`` so callers decide whether to
retry, queue or warn.
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, List, Optional, Union

from sqlalchemy.orm import Session

from .backup_service import COLLECTIONS, export_snapshot

logger = logging.getLogger(__name__)

PathLike = Union[str, Path]


@dataclass
class MirrorResult:
    """Outcome of a mirror write."""

    ok: bool
    files: List[str] = field(default_factory=list)
    error: Optional[str] = None


def _write_json(path: Path, payload: Any) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    tmp_path = path.with_suffix(path.suffix + ".tmp")
    tmp_path.write_text(json.dumps(payload, indent=2, ensure_ascii=False) + "\n", encoding="utf-8")
    tmp_path.replace(path)


def write_students_file(directory: PathLike, payload: Any) -> MirrorResult:
    """Store ``payload`` verbatim as ``students.json`` in ``directory``."""

    path = Path(directory) / "students.json"
    try:
        _write_json(path, payload)
    except (OSError, TypeError, ValueError) as exc:
        logger.warning("failed to write %s: %s", path, exc)
        return MirrorResult(ok=False, error=str(exc))
    return MirrorResult(ok=True, files=[str(path)])


def mirror_roster(session: Session, directory: PathLike) -> MirrorResult:
    """Write one JSON file per collection into ``directory``."""

    snapshot = export_snapshot(session)
    written: List[str] = []
    for collection in COLLECTIONS:
        path = Path(directory) / f"{collection}.json"
        try:
            _write_json(path, snapshot[collection])
        except OSError as exc:
            logger.warning("roster mirror stopped at %s: %s", path, exc)
            return MirrorResult(ok=False, files=written, error=str(exc))
        written.append(str(path))

    logger.info("mirrored roster to %s", directory)
    return MirrorResult(ok=True, files=written)
