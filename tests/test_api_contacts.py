"""Property contact directory and the opt-in people directory."""


def _add(client, headers, prop, **fields):
    return client.post("/contacts", json={"property_id": prop.id, **fields}, headers=headers)


def test_manager_maintains_contacts_everyone_reads(client, prop, make_user):
    _, family = make_user("family")
    _, manager = make_user("manager")
    assert _add(client, family, prop, name="Plumber Joe").status_code == 403

    joe = _add(client, manager, prop, name="Plumber Joe", category="maintenance", phone="555-0101", priority=2).json()
    _add(client, manager, prop, name="Fire department", category="emergency", phone="911", priority=1)
    _add(client, manager, prop, name="Ada Neighbor", category="neighbor", notes="Has a spare key")

    listed = client.get(f"/contacts?property_id={prop.id}", headers=family).json()
    assert [c["name"] for c in listed] == ["Fire department", "Plumber Joe", "Ada Neighbor"]

    only = client.get(f"/contacts?property_id={prop.id}&category=maintenance", headers=family).json()
    assert [c["id"] for c in only] == [joe["id"]]
    assert len(client.get(f"/contacts?property_id={prop.id}&category=all", headers=family).json()) == 3
    by_notes = client.get(f"/contacts?property_id={prop.id}&search=spare", headers=family).json()
    assert [c["name"] for c in by_notes] == ["Ada Neighbor"]

    assert client.put(f"/contacts/{joe['id']}", json={"name": None}, headers=manager).status_code == 422
    assert client.put(f"/contacts/{joe['id']}", json={"phone": "555-0199"}, headers=family).status_code == 403
    assert client.put(f"/contacts/{joe['id']}", json={"phone": "555-0199"}, headers=manager).json()["phone"] == "555-0199"
    assert client.delete(f"/contacts/{joe['id']}", headers=manager).status_code == 200
    assert client.get(f"/contacts/{joe['id']}", headers=family).status_code == 404


def test_unknown_category_is_rejected(client, prop, make_user):
    _, manager = make_user("manager")
    assert _add(client, manager, prop, name="Someone", category="spy").status_code == 422


def test_people_directory_honours_opt_out(client, db, make_user):
    shown, headers = make_user("family", full_name="Shown Person")
    hidden, _ = make_user("friend", full_name="Hidden Person")
    hidden.show_in_contacts = False
    db.commit()

    people = client.get("/contacts/people", headers=headers).json()
    assert [p["id"] for p in people] == [shown.id]
    assert client.get("/contacts/people?search=nobody", headers=headers).json() == []

    client.put("/auth/me", json={"show_in_contacts": False}, headers=headers)
    assert client.get("/contacts/people", headers=headers).json() == []
