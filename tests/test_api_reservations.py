"""Reservation lifecycle through the HTTP API."""
from househub.models.reservation import Companion, ReservationApproval


def _book(client, headers, prop, **extra):
    body = {
        "property_id": prop.id,
        "title": "Long weekend",
        "start_date": "2024-08-02",
        "end_date": "2024-08-05",
    }
    body.update(extra)
    return client.post("/reservations", json=body, headers=headers)


def test_friend_booking_is_confirmed(client, prop, make_user):
    _, friend = make_user("friend")
    r = _book(client, friend, prop)
    assert r.status_code == 200
    data = r.json()
    assert data["reservation"]["status"] == "confirmed"
    assert data["reservation"]["nights"] == 3
    assert data["reservation"]["companions"] == []
    assert data["invitations_sent"] == 0


def test_guest_booking_waits_for_approval_then_admin_approves(client, db, prop, make_user):
    _, guest = make_user("guest")
    _, admin = make_user("admin")
    companions = [
        {"name": "Ann", "email": "ann@example.com", "invited_to_system": True},
        {"name": "Kid", "relationship": "child", "age_range": "child"},
        {"name": "   "},
    ]
    r = _book(client, guest, prop, companions=companions, guests=2)
    assert r.status_code == 200
    saved = r.json()
    res = saved["reservation"]
    assert res["status"] == "pending approval"
    assert res["guests"] == 4
    assert len(res["companions"]) == 2
    assert "will be sent once approved" in saved["message"]

    pending = client.get("/reservations/approvals/pending", headers=admin).json()
    assert [a["reservation_id"] for a in pending] == [res["id"]]

    r = client.post(f"/reservations/{res['id']}/approve", json={"notes": "enjoy"}, headers=admin)
    assert r.status_code == 200
    approved = r.json()
    assert approved["reservation"]["status"] == "confirmed"
    assert approved["invitations_sent"] == 1
    assert client.get("/reservations/approvals/pending", headers=admin).json() == []

    stamped = db.query(Companion).filter(Companion.reservation_id == res["id"], Companion.invite_sent_at.isnot(None)).all()
    assert [c.name for c in stamped] == ["Ann"]

    again = client.post(f"/reservations/{res['id']}/invitations", headers=admin)
    assert again.json()["invitations_sent"] == 0


def test_only_approvers_can_approve(client, prop, make_user):
    _, guest = make_user("guest")
    _, staff = make_user("staff")
    res = _book(client, guest, prop).json()["reservation"]
    assert client.post(f"/reservations/{res['id']}/approve", headers=staff).status_code == 403


def test_cannot_approve_twice(client, prop, make_user):
    _, guest = make_user("guest")
    _, manager = make_user("manager")
    res = _book(client, guest, prop).json()["reservation"]
    assert client.post(f"/reservations/{res['id']}/approve", headers=manager).status_code == 200
    assert client.post(f"/reservations/{res['id']}/approve", headers=manager).status_code == 400


def test_reject(client, prop, make_user):
    _, guest = make_user("guest")
    _, manager = make_user("manager")
    res = _book(client, guest, prop).json()["reservation"]
    r = client.post(f"/reservations/{res['id']}/reject", json={"notes": "house closed"}, headers=manager)
    assert r.json()["status"] == "rejected"


def test_end_before_start_is_rejected_before_write(client, prop, make_user):
    _, friend = make_user("friend")
    r = _book(client, friend, prop, start_date="2024-08-05", end_date="2024-08-02")
    assert r.status_code == 400
    assert client.get(f"/reservations?property_id={prop.id}", headers=friend).json() == []


def test_edit_by_guest_keeps_confirmed_status(client, prop, make_user):
    guest_user, guest = make_user("guest")
    _, admin = make_user("admin")
    res = _book(client, guest, prop).json()["reservation"]
    client.post(f"/reservations/{res['id']}/approve", headers=admin)

    r = client.put(f"/reservations/{res['id']}", json={"title": "Longer weekend", "end_date": "2024-08-06"}, headers=guest)
    assert r.status_code == 200
    assert r.json()["reservation"]["status"] == "confirmed"
    assert r.json()["reservation"]["nights"] == 4


def test_edit_keeps_invite_stamp_for_same_email(client, db, prop, make_user):
    _, family = make_user("family")
    companions = [{"name": "Ann", "email": "ann@example.com", "invited_to_system": True}]
    res = _book(client, family, prop, companions=companions).json()
    assert res["invitations_sent"] == 1
    rid = res["reservation"]["id"]

    companions.append({"name": "Bo", "email": "bo@example.com", "invited_to_system": True})
    r = client.put(f"/reservations/{rid}", json={"companions": companions}, headers=family)
    assert r.json()["invitations_sent"] == 1
    assert r.json()["reservation"]["guests"] == 3


def test_other_users_cannot_edit_or_cancel(client, prop, make_user):
    _, friend = make_user("friend")
    _, other = make_user("family")
    res = _book(client, friend, prop).json()["reservation"]
    assert client.put(f"/reservations/{res['id']}", json={"title": "mine now"}, headers=other).status_code == 403
    assert client.post(f"/reservations/{res['id']}/cancel", headers=other).status_code == 403
    assert client.post(f"/reservations/{res['id']}/cancel", headers=friend).json()["status"] == "cancelled"


def test_list_by_window_and_delete(client, prop, make_user):
    _, friend = make_user("friend")
    first = _book(client, friend, prop).json()["reservation"]
    _book(client, friend, prop, start_date="2024-09-10", end_date="2024-09-12")

    r = client.get(f"/reservations?property_id={prop.id}&start=2024-09-01&end=2024-09-30", headers=friend)
    assert [x["start_date"] for x in r.json()] == ["2024-09-10"]

    assert client.delete(f"/reservations/{first['id']}", headers=friend).status_code == 200
    assert client.get(f"/reservations/{first['id']}", headers=friend).status_code == 404


def test_requires_auth(client, prop):
    assert client.get(f"/reservations?property_id={prop.id}").status_code == 401


def test_delete_removes_companions(client, db, prop, make_user):
    _, friend = make_user("friend")
    res = _book(client, friend, prop, companions=[{"name": "Ann"}, {"name": "Bo"}]).json()["reservation"]
    assert db.query(Companion).filter(Companion.reservation_id == res["id"]).count() == 2

    assert client.delete(f"/reservations/{res['id']}", headers=friend).status_code == 200
    assert db.query(Companion).count() == 0


def test_guest_count_edit_still_includes_companions(client, prop, make_user):
    _, friend = make_user("friend")
    res = _book(client, friend, prop, guests=2, companions=[{"name": "Ann"}, {"name": "Bo"}]).json()["reservation"]
    assert res["guests"] == 4

    r = client.put(f"/reservations/{res['id']}", json={"guests": 3}, headers=friend)
    assert r.status_code == 200
    assert r.json()["reservation"]["guests"] == 5
    assert len(r.json()["reservation"]["companions"]) == 2


def test_null_for_required_field_is_rejected_before_write(client, prop, make_user):
    _, friend = make_user("friend")
    res = _book(client, friend, prop).json()["reservation"]

    assert client.put(f"/reservations/{res['id']}", json={"start_date": None}, headers=friend).status_code == 422
    assert client.put(f"/reservations/{res['id']}", json={"guests": None}, headers=friend).status_code == 422
    kept = client.get(f"/reservations/{res['id']}", headers=friend).json()
    assert kept["start_date"] == "2024-08-02"
    assert kept["guests"] == 1


def test_approver_edit_of_pending_reservation_closes_its_approval(client, db, prop, make_user):
    _, guest = make_user("guest")
    manager_user, manager = make_user("manager")
    res = _book(client, guest, prop).json()["reservation"]
    assert len(client.get("/reservations/approvals/pending", headers=manager).json()) == 1

    r = client.put(f"/reservations/{res['id']}", json={"title": "Approved trip"}, headers=manager)
    assert r.json()["reservation"]["status"] == "confirmed"
    assert client.get("/reservations/approvals/pending", headers=manager).json() == []
    approval = db.query(ReservationApproval).filter(ReservationApproval.reservation_id == res["id"]).one()
    assert approval.status == "approved"
    assert approval.reviewed_by == manager_user.id
