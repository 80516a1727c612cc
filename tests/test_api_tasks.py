"""Tasks, including completion of recurring series."""
from househub.models.task import Task


def _create(client, headers, prop, **extra):
    body = {"property_id": prop.id, "title": "Water plants"}
    body.update(extra)
    return client.post("/tasks", json=body, headers=headers)


def test_completing_weekly_task_spawns_one_pending_successor(client, db, prop, make_user):
    _, staff = make_user("staff")
    task = _create(client, staff, prop, is_recurring=True, recurrence_pattern="weekly", due_date="2024-03-01").json()

    r = client.post(f"/tasks/{task['id']}/complete", headers=staff)
    assert r.status_code == 200
    data = r.json()
    assert data["task"]["status"] == "completed"
    assert data["task"]["completed_at"] is not None
    nxt = data["next_task"]
    assert nxt["due_date"] == "2024-03-08"
    assert nxt["status"] == "pending"
    assert nxt["parent_task_id"] == task["id"]
    assert nxt["is_recurring"] is True
    assert db.query(Task).count() == 2


def test_successor_of_assigned_task_is_in_progress(client, prop, make_user):
    worker, staff = make_user("staff")
    task = _create(
        client, staff, prop,
        is_recurring=True, recurrence_pattern="weekly", due_date="2024-03-01", assigned_to=worker.id,
    ).json()
    nxt = client.post(f"/tasks/{task['id']}/complete", headers=staff).json()["next_task"]
    assert nxt["status"] == "in_progress"
    assert nxt["assigned_to"] == worker.id


def test_series_keeps_pointing_at_root(client, prop, make_user):
    _, staff = make_user("staff")
    root = _create(client, staff, prop, is_recurring=True, recurrence_pattern="daily", due_date="2024-03-01").json()
    second = client.post(f"/tasks/{root['id']}/complete", headers=staff).json()["next_task"]
    third = client.post(f"/tasks/{second['id']}/complete", headers=staff).json()["next_task"]
    assert third["due_date"] == "2024-03-03"
    assert third["parent_task_id"] == root["id"]


def test_series_stops_after_end_date(client, db, prop, make_user):
    _, staff = make_user("staff")
    task = _create(
        client, staff, prop,
        is_recurring=True, recurrence_pattern="monthly", due_date="2024-01-31", recurring_end_date="2024-02-15",
    ).json()
    data = client.post(f"/tasks/{task['id']}/complete", headers=staff).json()
    assert data["next_task"] is None
    assert "ended" in data["message"]
    assert db.query(Task).count() == 1


def test_non_recurring_completion_has_no_successor(client, db, prop, make_user):
    _, staff = make_user("staff")
    task = _create(client, staff, prop, due_date="2024-03-01").json()
    assert client.post(f"/tasks/{task['id']}/complete", headers=staff).json()["next_task"] is None
    assert client.post(f"/tasks/{task['id']}/complete", headers=staff).status_code == 400


def test_completing_via_edit_also_spawns(client, db, prop, make_user):
    _, staff = make_user("staff")
    task = _create(client, staff, prop, is_recurring=True, recurrence_pattern="weekly", due_date="2024-03-01").json()
    r = client.put(f"/tasks/{task['id']}", json={"status": "completed"}, headers=staff)
    assert r.json()["status"] == "completed"
    assert db.query(Task).filter(Task.parent_task_id == task["id"]).count() == 1


def test_recurring_task_needs_pattern_and_due_date(client, prop, make_user):
    _, staff = make_user("staff")
    assert _create(client, staff, prop, is_recurring=True, due_date="2024-03-01").status_code == 422
    assert _create(client, staff, prop, is_recurring=True, recurrence_pattern="weekly").status_code == 422


def test_claim_assigns_and_starts(client, prop, make_user):
    _, creator = make_user("manager")
    claimer, claimer_headers = make_user("staff")
    task = _create(client, creator, prop).json()
    r = client.post(f"/tasks/{task['id']}/claim", headers=claimer_headers)
    assert r.json()["assigned_to"] == claimer.id
    assert r.json()["status"] == "in_progress"


def test_only_creator_deletes(client, prop, make_user):
    _, creator = make_user("staff")
    _, admin = make_user("admin")
    task = _create(client, creator, prop).json()
    assert client.delete(f"/tasks/{task['id']}", headers=admin).status_code == 403
    assert client.delete(f"/tasks/{task['id']}", headers=creator).status_code == 200


def test_list_filters(client, prop, make_user):
    me, mine = make_user("staff")
    _create(client, mine, prop, title="Fix gutter", category="repair", assigned_to=me.id)
    _create(client, mine, prop, title="Mow lawn", category="landscaping")
    done = _create(client, mine, prop, title="Fix fence", category="repair").json()
    client.post(f"/tasks/{done['id']}/complete", headers=mine)

    def titles(query):
        return [t["title"] for t in client.get(f"/tasks?property_id={prop.id}&{query}", headers=mine).json()]

    assert sorted(titles("status=open")) == ["Fix gutter", "Mow lawn"]
    assert titles("assignment=mine") == ["Fix gutter"]
    assert sorted(titles("category=repair")) == ["Fix fence", "Fix gutter"]
    assert titles("status=open&search=FIX") == ["Fix gutter"]


def test_null_title_or_status_is_rejected(client, db, prop, make_user):
    _, staff = make_user("staff")
    task = _create(client, staff, prop).json()

    assert client.put(f"/tasks/{task['id']}", json={"title": None}, headers=staff).status_code == 422
    assert client.put(f"/tasks/{task['id']}", json={"status": None}, headers=staff).status_code == 422
    kept = db.query(Task).filter(Task.id == task["id"]).one()
    assert kept.title == "Water plants"
    assert kept.status == "pending"
