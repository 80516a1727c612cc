"""
Backend API smoke test – in-process via TestClient (no separate server).
Uses DATABASE_URL from .env; creates tables, seeds staples, bootstraps an owner.
Run: python scripts/smoke_api.py
"""
import sys
import os
import uuid
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), "..")))

from fastapi.testclient import TestClient
from househub.database import SessionLocal
from househub.main import app, setup_database
from househub.models.user import User
from househub.services.auth import create_access_token, get_password_hash

setup_database()

client = TestClient(app)
passed = failed = 0
run_id = uuid.uuid4().hex[:8]
owner_token = guest_token = None
property_id = reservation_id = task_id = None


def bootstrap_owner() -> str:
    """Owners can't self-register; create one directly and mint a token."""
    db = SessionLocal()
    try:
        user = User(
            email=f"owner-{run_id}@smoke.househub.dev",
            hashed_password=get_password_hash("smokepass123"),
            full_name="Smoke Owner",
            role="owner",
        )
        db.add(user)
        db.commit()
        db.refresh(user)
        return create_access_token(user.id, user.email, user.role)
    finally:
        db.close()


def req(method, path, body=None, token=None):
    kwargs = {"headers": {"Accept": "application/json"}}
    if token:
        kwargs["headers"]["Authorization"] = f"Bearer {token}"
    if body is not None:
        kwargs["json"] = body
    r = client.request(method, path, **kwargs)
    if r.status_code >= 400:
        raise RuntimeError(f"HTTP {r.status_code}: {r.text}")
    return r.json() if r.content else {}


def test(name, fn):
    global passed, failed
    try:
        fn()
        print(f"  OK  {name}")
        passed += 1
    except Exception as e:
        print(f"  FAIL {name}: {e}")
        failed += 1


def main():
    global owner_token, guest_token, property_id, reservation_id, task_id
    print("HouseHub API smoke test (in-process)\n" + "=" * 50)

    test("GET /", lambda: req("GET", "/"))
    test("GET /health", lambda: req("GET", "/health"))

    print("\n--- Auth ---")
    owner_token = bootstrap_owner()
    def register_guest():
        global guest_token
        r = req("POST", "/auth/register", {"email": f"guest-{run_id}@smoke.househub.dev", "password": "smokepass123"})
        guest_token = (r.get("access_token") or "").strip()
        if not guest_token:
            raise RuntimeError("no access_token in response")
    test("POST /auth/register (guest)", register_guest)
    test("GET /auth/me (owner)", lambda: req("GET", "/auth/me", token=owner_token))
    test("GET /api/users (owner)", lambda: req("GET", "/api/users?search=smoke", token=owner_token))

    print("\n--- Properties ---")
    def add_prop():
        global property_id
        property_id = req("POST", "/properties", {"name": f"Smoke House {run_id}", "amenities": ["wifi"]}, token=owner_token)["id"]
    test("POST /properties", add_prop)
    test("GET /properties", lambda: req("GET", "/properties", token=guest_token))

    print("\n--- Reservations ---")
    def add_reservation():
        global reservation_id
        saved = req("POST", "/reservations", {
            "property_id": property_id, "title": "Smoke stay", "start_date": "2025-07-01", "end_date": "2025-07-04",
            "companions": [{"name": "Pal", "email": f"pal-{run_id}@smoke.househub.dev", "invited_to_system": True}]},
            token=guest_token)
        reservation_id = saved["reservation"]["id"]
        print(f"       status={saved['reservation']['status']} message={saved['message']}")
    test("POST /reservations (guest)", add_reservation)
    test("GET /reservations/approvals/pending", lambda: req("GET", "/reservations/approvals/pending", token=owner_token))
    test("POST /reservations/{id}/approve", lambda: req("POST", f"/reservations/{reservation_id}/approve", token=owner_token))
    test("GET /reservations/{id}/companions", lambda: req("GET", f"/reservations/{reservation_id}/companions", token=guest_token))

    print("\n--- Tasks ---")
    def add_task():
        global task_id
        task_id = req("POST", "/tasks", {
            "property_id": property_id, "title": "Smoke weekly", "is_recurring": True,
            "recurrence_pattern": "weekly", "due_date": "2025-03-01"}, token=owner_token)["id"]
    test("POST /tasks (recurring)", add_task)
    test("POST /tasks/{id}/complete", lambda: req("POST", f"/tasks/{task_id}/complete", token=owner_token))
    test("GET /tasks?status=open", lambda: req("GET", f"/tasks?property_id={property_id}&status=open", token=owner_token))

    print("\n--- Inventory & staples ---")
    test("GET /staples/available", lambda: req("GET", f"/staples/available?property_id={property_id}", token=guest_token))
    test("POST /inventory", lambda: req("POST", "/inventory", {"property_id": property_id, "name": "Coffee", "category": "staples"}, token=guest_token))
    test("GET /inventory/shopping-list", lambda: req("GET", f"/inventory/shopping-list?property_id={property_id}", token=guest_token))

    print("\n--- Content ---")
    test("POST /recommendations", lambda: req("POST", "/recommendations", {"property_id": property_id, "name": "Diner", "category": "restaurant"}, token=guest_token))
    test("POST /guest-book", lambda: req("POST", "/guest-book", {"property_id": property_id, "guest_name": "Smoke", "message": "Great!", "rating": 5}, token=guest_token))
    test("POST /walkthrough/sections", lambda: req("POST", "/walkthrough/sections", {"property_id": property_id, "title": "Arrival"}, token=owner_token))
    test("GET /dashboard/summary", lambda: req("GET", f"/dashboard/summary?property_id={property_id}", token=owner_token))
    test("POST /contacts", lambda: req("POST", "/contacts", {"property_id": property_id, "name": "Plumber", "category": "maintenance"}, token=owner_token))
    test("GET /contacts/people", lambda: req("GET", "/contacts/people", token=guest_token))
    test("POST /cleaning/tasks", lambda: req("POST", "/cleaning/tasks", {"property_id": property_id, "room": "Kitchen", "task": "Wipe counters"}, token=owner_token))
    test("GET /cleaning/rooms", lambda: req("GET", f"/cleaning/rooms?property_id={property_id}", token=owner_token))

    print("\n--- Cleanup ---")
    test("DELETE /properties/{id}", lambda: req("DELETE", f"/properties/{property_id}", token=owner_token))

    print("\n" + "=" * 50)
    print(f"Passed: {passed}  Failed: {failed}  Total: {passed + failed}")
    sys.exit(0 if failed == 0 else 1)


if __name__ == "__main__":
    main()
