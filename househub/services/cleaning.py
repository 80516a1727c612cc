"""Cleaning checklists: visit snapshots, per-room progress and issue triage order."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Iterable

from househub.models.cleaning import ISSUE_SEVERITIES, VisitStatus

# urgent first
SEVERITY_RANK = {name: rank for rank, name in enumerate(reversed(ISSUE_SEVERITIES))}


@dataclass
class RoomProgress:
    room: str
    total: int
    completed: int = 0

    @property
    def percent(self) -> int:
        if not self.total:
            return 0
        return round(100 * self.completed / self.total)


def _field(item: Any, name: str) -> Any:
    if isinstance(item, dict):
        return item.get(name)
    return getattr(item, name, None)


def checklist_order(tasks: Iterable[Any]) -> list[Any]:
    """Checklist items by display_order, then insertion (id)."""
    return sorted(tasks, key=lambda t: (_field(t, "display_order") or 0, _field(t, "id") or 0))


def snapshot_checklist(tasks: Iterable[Any]) -> list[dict]:
    """Field values for the visit copies of each checklist item, numbered in checklist order."""
    return [
        {"task_id": t.id, "room": t.room, "task": t.task, "display_order": position}
        for position, t in enumerate(checklist_order(tasks))
    ]


def room_progress(items: Iterable[Any]) -> list[RoomProgress]:
    """Totals per room, rooms in order of first appearance."""
    rooms: dict[str, RoomProgress] = {}
    for item in items:
        room = _field(item, "room") or "Other"
        progress = rooms.setdefault(room, RoomProgress(room=room, total=0))
        progress.total += 1
        if _field(item, "is_completed"):
            progress.completed += 1
    return list(rooms.values())


def visit_status(items: Iterable[Any]) -> VisitStatus:
    """Status implied by ticked items. Only an explicit completion marks a visit completed."""
    if any(_field(i, "is_completed") for i in items):
        return VisitStatus.in_progress
    return VisitStatus.scheduled


def remaining(items: Iterable[Any]) -> int:
    return sum(1 for i in items if not _field(i, "is_completed"))


def triage_order(issues: Iterable[Any]) -> list[Any]:
    """Open issues first, most severe first, newest report first within a severity."""
    def key(issue):
        reported = _field(issue, "reported_at")
        return (
            bool(_field(issue, "is_resolved")),
            SEVERITY_RANK.get(_field(issue, "severity"), len(SEVERITY_RANK)),
            -(reported.timestamp() if reported else 0),
        )

    return sorted(issues, key=key)
