"""Pure filters over fetched collections (users, tasks, recommendations).

Items may be ORM rows or plain dicts. Missing/None fields never match and
never raise.
"""
from __future__ import annotations

from datetime import date
from typing import Any, Iterable, Sequence, TypeVar

from househub.models.task import TaskStatus
from househub.services.roles import effective_role

T = TypeVar("T")

ALL = "all"
OPEN = "open"
OPEN_STATUSES = frozenset({TaskStatus.pending.value, TaskStatus.in_progress.value})


def _field(item: Any, name: str) -> Any:
    if isinstance(item, dict):
        return item.get(name)
    return getattr(item, name, None)


def _normalize(value: Any) -> str:
    return getattr(value, "value", value) if value is not None else value


def text_matches(item: Any, term: str | None, fields: Sequence[str]) -> bool:
    needle = (term or "").strip().lower()
    if not needle:
        return True
    for name in fields:
        value = _field(item, name)
        if isinstance(value, str) and needle in value.lower():
            return True
    return False


def search_text(items: Iterable[T], term: str | None, fields: Sequence[str]) -> list[T]:
    return [i for i in items if text_matches(i, term, fields)]


def search_users(users: Iterable[T], term: str | None) -> list[T]:
    return search_text(users, term, ("full_name", "email"))


def filter_by_role(users: Iterable[T], role: str | None) -> list[T]:
    """Exact match against each user's effective role (guest when unset). None/'all' keeps everyone."""
    if not role or role == ALL:
        return list(users)
    return [u for u in users if effective_role(_field(u, "role")).value == role]


def filter_users(users: Iterable[T], role: str | None = None, term: str | None = None) -> list[T]:
    return search_users(filter_by_role(users, role), term)


def filter_tasks_by_status(tasks: Iterable[T], status: str | None) -> list[T]:
    """'open' = pending or in progress; 'all'/None = everything; otherwise exact status."""
    if not status or status == ALL:
        return list(tasks)
    if status == OPEN:
        return [t for t in tasks if _normalize(_field(t, "status")) in OPEN_STATUSES]
    return [t for t in tasks if _normalize(_field(t, "status")) == status]


def filter_tasks_by_assignment(tasks: Iterable[T], assignment: str | None, user_id: Any = None) -> list[T]:
    """'mine' = assigned to user_id, 'unassigned' = nobody, 'all'/None = everything."""
    if not assignment or assignment == ALL:
        return list(tasks)
    if assignment == "mine":
        if user_id is None:
            return []
        return [t for t in tasks if _field(t, "assigned_to") is not None and _field(t, "assigned_to") == user_id]
    if assignment == "unassigned":
        return [t for t in tasks if _field(t, "assigned_to") is None]
    return []


def filter_by_category(items: Iterable[T], category: str | None) -> list[T]:
    if not category or category == ALL:
        return list(items)
    return [i for i in items if _field(i, "category") == category]


def overdue_tasks(tasks: Iterable[T], today: date) -> list[T]:
    """Not-completed tasks whose due date is before today."""
    out = []
    for t in tasks:
        due = _field(t, "due_date")
        if due is None or _normalize(_field(t, "status")) == TaskStatus.completed.value:
            continue
        if due < today:
            out.append(t)
    return out
