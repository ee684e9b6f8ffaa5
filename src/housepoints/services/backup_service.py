"""Full roster export and restore.

Restore accepts both the export format of this service and the camelCase
shape used by browser backups (``id``/``name``/``groupId``/``targetId``,
``type`` for the award kind and ``ts`` in epoch milliseconds).
"""

from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import Any, Callable, Dict, Iterable, List, Mapping

from pydantic import ValidationError
from sqlalchemy import delete, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from ..models import Award, BadgeDefinition, Group, Student
from ..schemas import AwardRead, BadgeRead, GroupRead, StudentRead
from .roster_service import normalize_bingo, truncate_awards

logger = logging.getLogger(__name__)

COLLECTIONS = ("students", "groups", "awards", "badges")


class BackupFormatError(Exception):
    """Raised when a backup payload cannot be restored."""

    def __init__(self, detail: str, status_code: int = 400) -> None:
        super().__init__(detail)
        self.detail = detail
        self.status_code = status_code


def export_snapshot(session: Session) -> Dict[str, List[Dict[str, Any]]]:
    """Return every collection as JSON-ready dicts; awards newest first."""

    students = session.execute(select(Student).order_by(Student.created_at, Student.student_id)).scalars()
    groups = session.execute(select(Group).order_by(Group.created_at, Group.group_id)).scalars()
    awards = session.execute(select(Award).order_by(Award.sequence.desc())).scalars()
    badges = session.execute(select(BadgeDefinition).order_by(BadgeDefinition.title)).scalars()
    return {
        "students": [StudentRead.model_validate(item).model_dump(mode="json") for item in students],
        "groups": [GroupRead.model_validate(item).model_dump(mode="json") for item in groups],
        "awards": [AwardRead.model_validate(item).model_dump(mode="json") for item in awards],
        "badges": [BadgeRead.model_validate(item).model_dump(mode="json") for item in badges],
    }


def _pick(record: Mapping[str, Any], *keys: str, default: Any = None) -> Any:
    for key in keys:
        if record.get(key) is not None:
            return record[key]
    return default


def _timestamp(record: Mapping[str, Any]) -> datetime:
    if record.get("created_at"):
        value = datetime.fromisoformat(str(record["created_at"]))
        return value.astimezone(timezone.utc).replace(tzinfo=None) if value.tzinfo else value
    if record.get("ts") is not None:
        return datetime.fromtimestamp(float(record["ts"]) / 1000, tz=timezone.utc).replace(tzinfo=None)
    return datetime.utcnow()


def _student(record: Mapping[str, Any]) -> Student:
    snapshot = StudentRead.model_validate(
        {
            "student_id": _pick(record, "student_id", "id"),
            "display_name": _pick(record, "display_name", "name"),
            "email": record.get("email") or None,
            "points": record.get("points"),
            "group_id": _pick(record, "group_id", "groupId"),
            "badge_ids": _pick(record, "badge_ids", "badges", default=[]),
            "bingo": record.get("bingo"),
        }
    )
    return Student(
        student_id=snapshot.student_id,
        display_name=snapshot.display_name,
        email=snapshot.email,
        points=snapshot.points,
        group_id=snapshot.group_id,
        badge_ids=list(dict.fromkeys(snapshot.badge_ids)),
        bingo=normalize_bingo(snapshot.bingo) if snapshot.bingo is not None else None,
        created_at=_timestamp(record),
    )


def _group(record: Mapping[str, Any]) -> Group:
    snapshot = GroupRead.model_validate(
        {
            "group_id": _pick(record, "group_id", "id"),
            "name": record.get("name"),
            "points": record.get("points"),
        }
    )
    return Group(group_id=snapshot.group_id, name=snapshot.name, points=snapshot.points, created_at=_timestamp(record))


def _award(record: Mapping[str, Any]) -> Award:
    snapshot = AwardRead.model_validate(
        {
            "award_id": _pick(record, "award_id", "id"),
            "kind": _pick(record, "kind", "type"),
            "target_id": _pick(record, "target_id", "targetId"),
            "amount": record.get("amount"),
            "reason": record.get("reason") or "",
            "badge_id": _pick(record, "badge_id", "badgeId"),
            "created_at": _timestamp(record),
        }
    )
    return Award(**snapshot.model_dump())


def _badge(record: Mapping[str, Any]) -> BadgeDefinition:
    snapshot = BadgeRead.model_validate(
        {
            "badge_id": _pick(record, "badge_id", "id"),
            "title": record.get("title"),
            "image": record.get("image"),
            "requirement": record.get("requirement") or "",
        }
    )
    return BadgeDefinition(**snapshot.model_dump())


_BUILDERS: Dict[str, tuple[type, Callable[[Mapping[str, Any]], Any]]] = {
    "students": (Student, _student),
    "groups": (Group, _group),
    "awards": (Award, _award),
    "badges": (BadgeDefinition, _badge),
}

_KEYS: Dict[str, str] = {
    "students": "student_id",
    "groups": "group_id",
    "awards": "award_id",
    "badges": "badge_id",
}


def _ensure_unique(collection: str, records: List[Any]) -> None:
    seen_ids = set()
    seen_emails = set()
    for index, record in enumerate(records):
        key = getattr(record, _KEYS[collection])
        if key in seen_ids:
            raise BackupFormatError(f"{collection}[{index}] repeats id {key!r}.")
        seen_ids.add(key)
        email = getattr(record, "email", None)
        if email:
            if email.lower() in seen_emails:
                raise BackupFormatError(f"{collection}[{index}] repeats email {email!r}.")
            seen_emails.add(email.lower())


def _build(collection: str, records: Iterable[Any]) -> list:
    _, builder = _BUILDERS[collection]
    built = []
    for index, record in enumerate(records):
        if not isinstance(record, Mapping):
            raise BackupFormatError(f"{collection}[{index}] is not an object.")
        try:
            built.append(builder(record))
        except (ValidationError, ValueError, TypeError) as exc:
            raise BackupFormatError(f"{collection}[{index}] is invalid: {exc}") from exc
    _ensure_unique(collection, built)
    return built


def restore_snapshot(session: Session, data: Any) -> Dict[str, int]:
    """Replace each collection present as a list in ``data``.

    Collections that are missing or not lists are left untouched. Returns the
    number of restored records per replaced collection. The award log is cut
    back to the configured history limit afterwards.
    """

    if not isinstance(data, Mapping):
        raise BackupFormatError("Backup must be a JSON object.")

    # Validate everything before touching the tables.
    staged = {
        collection: _build(collection, data[collection])
        for collection in COLLECTIONS
        if isinstance(data.get(collection), list)
    }

    summary: Dict[str, int] = {}
    try:
        for collection, records in staged.items():
            model, _ = _BUILDERS[collection]
            session.execute(delete(model))
            if collection == "awards":
                # Backups list awards newest first; insert oldest first to keep the sequence order.
                records = list(reversed(records))
            session.add_all(records)
            session.flush()
            summary[collection] = len(records)
    except IntegrityError as exc:
        session.rollback()
        raise BackupFormatError(f"Backup conflicts with stored data: {exc.orig}") from exc

    if "awards" in staged:
        truncate_awards(session)

    logger.info("restored backup: %s", summary)
    return summary
