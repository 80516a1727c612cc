"""Reservation rules: status on save and date arithmetic."""
from __future__ import annotations

from datetime import date

from househub.models.reservation import ReservationStatus
from househub.services.roles import Role, parse_role


class _Unchanged:
    """Sentinel: keep the reservation's stored status."""

    def __repr__(self) -> str:
        return "UNCHANGED"


UNCHANGED = _Unchanged()

AUTO_CONFIRM_ROLES = frozenset({Role.owner, Role.admin, Role.manager, Role.family, Role.friend})


def determine_status(
    role: str | Role | None,
    is_editing_existing: bool,
    can_approve_others: bool,
) -> ReservationStatus | _Unchanged:
    """Status a saved reservation should get, or UNCHANGED when an edit must keep the stored one."""
    if is_editing_existing and not can_approve_others:
        return UNCHANGED
    if parse_role(role) in AUTO_CONFIRM_ROLES:
        return ReservationStatus.confirmed
    return ReservationStatus.pending_approval


def resolve_status(
    role: str | Role | None,
    is_editing_existing: bool,
    can_approve_others: bool,
    current_status: str | None = None,
) -> ReservationStatus:
    """determine_status with the UNCHANGED fallback applied to the stored status."""
    status = determine_status(role, is_editing_existing, can_approve_others)
    if status is UNCHANGED:
        try:
            return ReservationStatus(current_status)
        except ValueError:
            return ReservationStatus.pending_approval
    return status


def reservation_nights(start: date, end: date) -> int:
    return (end - start).days if end > start else 0


def validate_date_range(start: date, end: date) -> None:
    if end < start:
        raise ValueError("End date must not be before start date")


def overlaps(start: date, end: date, window_start: date | None, window_end: date | None) -> bool:
    """True when [start, end] intersects the (optionally open-ended) window."""
    if window_start is not None and end < window_start:
        return False
    if window_end is not None and start > window_end:
        return False
    return True
