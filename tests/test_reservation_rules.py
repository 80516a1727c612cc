from datetime import date

import pytest

from househub.models.reservation import ReservationStatus
from househub.services.reservations import (
    UNCHANGED,
    determine_status,
    overlaps,
    reservation_nights,
    resolve_status,
    validate_date_range,
)


def test_owner_booking_is_confirmed():
    assert determine_status("owner", False, True) == ReservationStatus.confirmed


def test_guest_booking_needs_approval():
    assert determine_status("guest", False, True) == ReservationStatus.pending_approval
    assert ReservationStatus.pending_approval.value == "pending approval"


@pytest.mark.parametrize("role", ["owner", "admin", "manager", "family", "friend"])
def test_trusted_roles_auto_confirm(role):
    assert determine_status(role, False, False) == ReservationStatus.confirmed


@pytest.mark.parametrize("role", ["staff", "tenant", "guest", None, "nonsense"])
def test_other_roles_go_pending(role):
    assert determine_status(role, False, False) == ReservationStatus.pending_approval


@pytest.mark.parametrize("role", ["owner", "friend", "guest", None])
def test_edit_without_approval_rights_keeps_status(role):
    assert determine_status(role, True, False) is UNCHANGED


def test_edit_by_approver_recomputes():
    assert determine_status("admin", True, True) == ReservationStatus.confirmed


def test_resolve_status_falls_back_to_stored_value():
    assert resolve_status("guest", True, False, "confirmed") == ReservationStatus.confirmed
    assert resolve_status("guest", True, False, "cancelled") == ReservationStatus.cancelled
    assert resolve_status("guest", True, False, None) == ReservationStatus.pending_approval


def test_nights():
    assert reservation_nights(date(2024, 7, 1), date(2024, 7, 5)) == 4
    assert reservation_nights(date(2024, 7, 1), date(2024, 7, 1)) == 0
    assert reservation_nights(date(2024, 7, 5), date(2024, 7, 1)) == 0


def test_end_before_start_is_rejected():
    validate_date_range(date(2024, 7, 1), date(2024, 7, 1))
    with pytest.raises(ValueError):
        validate_date_range(date(2024, 7, 2), date(2024, 7, 1))


def test_overlaps_window():
    start, end = date(2024, 7, 1), date(2024, 7, 5)
    assert overlaps(start, end, None, None)
    assert overlaps(start, end, date(2024, 7, 5), None)
    assert not overlaps(start, end, date(2024, 7, 6), None)
    assert not overlaps(start, end, None, date(2024, 6, 30))
    assert overlaps(start, end, date(2024, 6, 1), date(2024, 7, 1))
