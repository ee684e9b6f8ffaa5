"""Leaderboard ranking over student and group snapshots.

These functions are pure: they never touch the database and are recomputed
on every call. Callers pass snapshots (``StudentRead``/``GroupRead`` or any
object exposing the same attributes) and get fresh ranked rows back.
"""

from __future__ import annotations

from typing import Iterable, List, Optional, Sequence, TypeVar

from ..schemas import GroupRead, RankedGroup, RankedStudent, StudentRead

Ranked = TypeVar("Ranked", RankedStudent, RankedGroup)


def _points(record) -> float:
    # Missing or null point totals count as zero.
    return getattr(record, "points", None) or 0


def _snapshot(record, schema):
    if isinstance(record, schema):
        return record
    return schema.model_validate(record)


def rank_individuals(students: Iterable[StudentRead]) -> List[RankedStudent]:
    """Rank students by point total, highest first.

    Equal totals keep their input order (``sorted`` is stable); no other
    tie-break is applied.
    """

    snapshots = [_snapshot(student, StudentRead) for student in students]
    ordered = sorted(snapshots, key=_points, reverse=True)
    return [
        RankedStudent(**{**student.model_dump(), "rank": position})
        for position, student in enumerate(ordered, start=1)
    ]


def rank_groups(groups: Iterable[GroupRead], students: Iterable[StudentRead]) -> List[RankedGroup]:
    """Rank groups by average member points plus the group's own bonus."""

    members_by_group: dict[str, list[float]] = {}
    for student in students:
        snapshot = _snapshot(student, StudentRead)
        if snapshot.group_id is None:
            continue
        members_by_group.setdefault(snapshot.group_id, []).append(_points(snapshot))

    stats = []
    for group in groups:
        snapshot = _snapshot(group, GroupRead)
        member_points = members_by_group.get(snapshot.group_id, [])
        size = len(member_points)
        avg_indiv = sum(member_points) / size if size else 0
        bonus = _points(snapshot)
        stats.append((snapshot, size, avg_indiv, bonus, avg_indiv + bonus))

    stats.sort(key=lambda row: row[4], reverse=True)
    return [
        RankedGroup(
            **{
                **snapshot.model_dump(),
                "size": size,
                "avg_indiv": avg_indiv,
                "bonus": bonus,
                "total": total,
                "rank": position,
            }
        )
        for position, (snapshot, size, avg_indiv, bonus, total) in enumerate(stats, start=1)
    ]


def top(entries: Sequence[Ranked], limit: int = 3) -> List[Ranked]:
    """Return the first ``limit`` ranked rows (the podium by default)."""

    return list(entries[: max(0, limit)])


def find_entry(entries: Sequence[Ranked], entry_id: str) -> Optional[Ranked]:
    """Return the ranked row for a student or group id, if present."""

    for entry in entries:
        current = entry.student_id if isinstance(entry, RankedStudent) else entry.group_id
        if current == entry_id:
            return entry
    return None
