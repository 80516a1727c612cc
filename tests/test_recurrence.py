from datetime import date
from types import SimpleNamespace

from househub.models.task import RecurrencePattern
from househub.services.recurrence import add_months, next_due_date, should_spawn_next, successor_fields


def test_monthly_clamps_to_end_of_february():
    assert next_due_date("2024-01-31", "monthly", 1) == date(2024, 2, 29)
    assert next_due_date("2023-01-31", "monthly", 1) == date(2023, 2, 28)


def test_weekly_with_interval():
    assert next_due_date("2024-01-15", "weekly", 2) == date(2024, 1, 29)


def test_yearly():
    assert next_due_date("2024-12-15", "yearly", 1) == date(2025, 12, 15)
    assert next_due_date(date(2024, 2, 29), RecurrencePattern.yearly) == date(2025, 2, 28)


def test_daily_and_quarterly():
    assert next_due_date(date(2024, 12, 31), "daily") == date(2025, 1, 1)
    assert next_due_date(date(2024, 11, 30), "quarterly") == date(2025, 2, 28)


def test_unknown_pattern_advances_one_day():
    assert next_due_date("2024-03-01", "fortnightly", 3) == date(2024, 3, 2)
    assert next_due_date("2024-03-01", None) == date(2024, 3, 2)


def test_bad_interval_treated_as_one():
    assert next_due_date("2024-03-01", "weekly", 0) == date(2024, 3, 8)
    assert next_due_date("2024-03-01", "weekly", None) == date(2024, 3, 8)


def test_add_months_across_year():
    assert add_months(date(2024, 11, 15), 3) == date(2025, 2, 15)


def test_should_spawn_next_is_boundary_inclusive():
    assert should_spawn_next(date(2024, 3, 8), None)
    assert should_spawn_next(date(2024, 3, 8), date(2024, 3, 8))
    assert not should_spawn_next(date(2024, 3, 9), date(2024, 3, 8))
    assert should_spawn_next("2024-03-08", "2024-04-01")


def _task(**overrides):
    fields = dict(
        id=10, property_id=1, title="Water plants", description=None, priority="medium",
        category="landscaping", assigned_to=None, created_by=3, recurrence_pattern="weekly",
        recurrence_interval=1, recurring_end_date=None, parent_task_id=None,
    )
    fields.update(overrides)
    return SimpleNamespace(**fields)


def test_successor_points_at_series_root():
    assert successor_fields(_task(), date(2024, 3, 8))["parent_task_id"] == 10
    assert successor_fields(_task(id=12, parent_task_id=10), date(2024, 3, 15))["parent_task_id"] == 10


def test_successor_status_follows_assignment():
    assert successor_fields(_task(), date(2024, 3, 8))["status"] == "pending"
    assert successor_fields(_task(assigned_to=4), date(2024, 3, 8))["status"] == "in_progress"
