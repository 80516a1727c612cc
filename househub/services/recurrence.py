"""Recurring task date projection.

A completed recurring task spawns at most one successor. The successor's due
date comes from next_due_date; whether it is created at all from
should_spawn_next. Month arithmetic clamps to the last valid day of the target
month (Jan 31 + 1 month = Feb 28/29), so a series never drifts into the next
month.
"""
from __future__ import annotations

import calendar
from datetime import date, timedelta
from typing import Any

from househub.models.task import RecurrencePattern, TaskStatus


def _as_date(value: date | str) -> date:
    if isinstance(value, date):
        return value
    return date.fromisoformat(str(value)[:10])


def add_months(d: date, months: int) -> date:
    month_index = d.month - 1 + months
    year = d.year + month_index // 12
    month = month_index % 12 + 1
    day = min(d.day, calendar.monthrange(year, month)[1])
    return date(year, month, day)


def next_due_date(current_due_date: date | str, pattern: str | RecurrencePattern | None, interval: int | None = 1) -> date:
    """Due date of the next occurrence. Unknown patterns advance by one day."""
    current = _as_date(current_due_date)
    step = interval if interval and interval > 0 else 1
    value = pattern.value if isinstance(pattern, RecurrencePattern) else pattern

    if value == RecurrencePattern.daily.value:
        return current + timedelta(days=step)
    if value == RecurrencePattern.weekly.value:
        return current + timedelta(days=step * 7)
    if value == RecurrencePattern.monthly.value:
        return add_months(current, step)
    if value == RecurrencePattern.quarterly.value:
        return add_months(current, step * 3)
    if value == RecurrencePattern.yearly.value:
        return add_months(current, step * 12)
    return current + timedelta(days=1)


def should_spawn_next(next_date: date | str, recurring_end_date: date | str | None) -> bool:
    if recurring_end_date is None or recurring_end_date == "":
        return True
    return _as_date(next_date) <= _as_date(recurring_end_date)


def successor_fields(task: Any, next_date: date) -> dict[str, Any]:
    """Column values for the next task in a series. task is a Task row (or anything with its attributes)."""
    return {
        "property_id": task.property_id,
        "title": task.title,
        "description": task.description,
        "priority": task.priority,
        "category": task.category,
        "assigned_to": task.assigned_to,
        "created_by": task.created_by,
        "due_date": next_date,
        "status": TaskStatus.in_progress.value if task.assigned_to else TaskStatus.pending.value,
        "is_recurring": True,
        "recurrence_pattern": task.recurrence_pattern,
        "recurrence_interval": task.recurrence_interval,
        "recurring_end_date": task.recurring_end_date,
        "parent_task_id": task.parent_task_id or task.id,
    }
