from datetime import date

from househub.models.reservation import Companion, Reservation
from househub.services.invitations import eligible_companions, send_guest_invitations


def _reservation(db, prop, user, companions):
    r = Reservation(
        property_id=prop.id,
        user_id=user.id,
        title="Summer week",
        start_date=date(2024, 7, 1),
        end_date=date(2024, 7, 8),
        guests=1 + len(companions),
        status="confirmed",
    )
    db.add(r)
    db.commit()
    for name, email, invited in companions:
        db.add(Companion(reservation_id=r.id, name=name, email=email, invited_to_system=invited))
    db.commit()
    db.refresh(r)
    return r


def test_only_flagged_companions_with_email_are_eligible(db, prop, make_user):
    user, _ = make_user("family")
    r = _reservation(db, prop, user, [
        ("Ann", "ann@example.com", True),
        ("Ben", None, True),
        ("Cal", "cal@example.com", False),
        ("Dee", "", True),
    ])
    assert [c.name for c in eligible_companions(db, r.id)] == ["Ann"]


def test_second_call_sends_nothing(db, prop, make_user):
    user, _ = make_user("family")
    r = _reservation(db, prop, user, [("Ann", "ann@example.com", True), ("Eve", "eve@example.com", True)])
    sent_to = []

    def sender(req):
        sent_to.append(req.email)
        return True

    assert send_guest_invitations(db, r.id, sender=sender) == 2
    assert send_guest_invitations(db, r.id, sender=sender) == 0
    assert sorted(sent_to) == ["ann@example.com", "eve@example.com"]
    assert all(c.invite_sent_at is not None for c in r.companions)


def test_failed_send_leaves_companion_eligible(db, prop, make_user):
    user, _ = make_user("family")
    r = _reservation(db, prop, user, [("Ann", "ann@example.com", True), ("Bad", "bad@example.com", True)])

    def sender(req):
        if req.email.startswith("bad"):
            raise RuntimeError("smtp down")
        return True

    assert send_guest_invitations(db, r.id, sender=sender) == 1
    assert [c.name for c in eligible_companions(db, r.id)] == ["Bad"]

    assert send_guest_invitations(db, r.id, sender=lambda req: True) == 1
    assert eligible_companions(db, r.id) == []


def test_invite_request_carries_reservation_details(db, prop, make_user):
    user, _ = make_user("family")
    r = _reservation(db, prop, user, [("Ann", "ann@example.com", True)])
    seen = []
    send_guest_invitations(db, r.id, sender=lambda req: seen.append(req) or True)
    assert seen[0].property_name == "Lake House"
    assert (seen[0].start, seen[0].end) == ("2024-07-01", "2024-07-08")


def test_unknown_reservation_sends_nothing(db):
    assert send_guest_invitations(db, 999, sender=lambda req: True) == 0


def test_unconfigured_mail_is_simulated(db, prop, make_user):
    user, _ = make_user("family")
    r = _reservation(db, prop, user, [("Ann", "ann@example.com", True)])
    assert send_guest_invitations(db, r.id) == 1
