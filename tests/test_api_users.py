"""Signup/login and admin user management."""


def test_register_login_and_me(client):
    r = client.post("/auth/register", json={"email": "New@Example.com", "password": "longenough", "full_name": "Nia"})
    assert r.status_code == 200
    assert r.json()["user"]["role"] == "guest"
    assert r.json()["user"]["email"] == "new@example.com"

    r = client.post("/auth/login", json={"email": "new@example.com", "password": "longenough"})
    headers = {"Authorization": f"Bearer {r.json()['access_token']}"}
    assert client.get("/auth/me", headers=headers).json()["full_name"] == "Nia"

    r = client.put("/auth/me", json={"phone": "555-0100"}, headers=headers)
    assert r.json()["phone"] == "555-0100"


def test_duplicate_email_and_bad_password(client):
    body = {"email": "dup@example.com", "password": "longenough"}
    assert client.post("/auth/register", json=body).status_code == 200
    assert client.post("/auth/register", json=body).status_code == 400
    assert client.post("/auth/register", json={"email": "x@example.com", "password": "short"}).status_code == 422
    assert client.post("/auth/login", json={"email": "dup@example.com", "password": "wrongpass"}).status_code == 401


def test_invalid_token(client):
    assert client.get("/auth/me", headers={"Authorization": "Bearer nope"}).status_code == 401


def test_non_admin_cannot_manage_users(client, make_user):
    _, manager = make_user("manager")
    assert client.get("/api/users", headers=manager).status_code == 403


def test_admin_lists_with_filters(client, make_user):
    _, admin = make_user("admin", full_name="Root Admin")
    make_user("family", email="anna@example.com", full_name="Anna Berg")
    make_user("friend", email="dc@example.com", full_name="Daniel Cho")
    make_user("friend", email="bob@example.com", full_name="Bob Lee")

    users = client.get("/api/users?search=an", headers=admin).json()
    assert sorted(u["email"] for u in users) == ["anna@example.com", "dc@example.com"]

    friends = client.get("/api/users?role=friend", headers=admin).json()
    assert sorted(u["email"] for u in friends) == ["bob@example.com", "dc@example.com"]


def test_admin_creates_updates_and_deletes(client, make_user):
    admin_user, admin = make_user("admin")
    r = client.post("/api/users", json={"email": "staffer@example.com", "password": "longenough", "role": "staff"}, headers=admin)
    assert r.status_code == 200
    uid = r.json()["id"]
    assert r.json()["role"] == "staff"

    r = client.post("/api/users/update", json={"userId": uid, "userData": {"role": "manager", "full_name": "Sam"}}, headers=admin)
    assert r.json()["role"] == "manager"
    assert r.json()["full_name"] == "Sam"

    assert client.post("/api/users/delete", json={"userId": admin_user.id}, headers=admin).status_code == 400
    assert client.post("/api/users/delete", json={"userId": uid}, headers=admin).status_code == 200
    assert client.post("/api/users/delete", json={"userId": uid}, headers=admin).status_code == 404


def test_only_owner_grants_owner(client, make_user):
    target, _ = make_user("friend")
    _, admin = make_user("admin")
    _, owner = make_user("owner")
    body = {"userId": target.id, "userData": {"role": "owner"}}
    assert client.post("/api/users/update", json=body, headers=admin).status_code == 403
    assert client.post("/api/users/update", json=body, headers=owner).json()["role"] == "owner"
    assert client.post("/api/users/delete", json={"userId": target.id}, headers=admin).status_code == 403


def test_unknown_stored_role_reads_as_guest(client, make_user):
    _, weird = make_user("wizard")
    me = client.get("/auth/me", headers=weird).json()
    assert me["role"] == "guest"
    assert client.get("/properties", headers=weird).status_code == 200
