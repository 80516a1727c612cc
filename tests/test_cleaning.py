from datetime import datetime
from types import SimpleNamespace

from househub.models.cleaning import VisitStatus
from househub.services.cleaning import checklist_order, remaining, room_progress, snapshot_checklist, triage_order, visit_status

CHECKLIST = [
    SimpleNamespace(id=3, room="Kitchen", task="Wipe counters", display_order=1),
    SimpleNamespace(id=1, room="Bathroom", task="Scrub shower", display_order=0),
    SimpleNamespace(id=2, room="Kitchen", task="Empty fridge", display_order=1),
]


def test_checklist_order_uses_display_order_then_id():
    assert [t.id for t in checklist_order(CHECKLIST)] == [1, 2, 3]


def test_snapshot_renumbers_in_checklist_order():
    snap = snapshot_checklist(CHECKLIST)
    assert [(s["task_id"], s["display_order"]) for s in snap] == [(1, 0), (2, 1), (3, 2)]
    assert snap[0] == {"task_id": 1, "room": "Bathroom", "task": "Scrub shower", "display_order": 0}


def test_room_progress_keeps_first_seen_order():
    items = [
        {"room": "Bathroom", "is_completed": True},
        {"room": "Kitchen", "is_completed": False},
        {"room": "Kitchen", "is_completed": True},
        {"room": None, "is_completed": False},
    ]
    progress = room_progress(items)
    assert [(p.room, p.total, p.completed, p.percent) for p in progress] == [
        ("Bathroom", 1, 1, 100),
        ("Kitchen", 2, 1, 50),
        ("Other", 1, 0, 0),
    ]


def test_visit_status_never_completes_on_its_own():
    assert visit_status([]) == VisitStatus.scheduled
    assert visit_status([{"is_completed": False}]) == VisitStatus.scheduled
    assert visit_status([{"is_completed": True}, {"is_completed": True}]) == VisitStatus.in_progress
    assert remaining([{"is_completed": True}, {"is_completed": False}]) == 1


def test_triage_puts_open_severe_recent_first():
    issues = [
        SimpleNamespace(id=1, is_resolved=True, severity="urgent", reported_at=datetime(2024, 5, 3)),
        SimpleNamespace(id=2, is_resolved=False, severity="low", reported_at=datetime(2024, 5, 3)),
        SimpleNamespace(id=3, is_resolved=False, severity="urgent", reported_at=datetime(2024, 5, 1)),
        SimpleNamespace(id=4, is_resolved=False, severity="urgent", reported_at=datetime(2024, 5, 2)),
        SimpleNamespace(id=5, is_resolved=False, severity="medium", reported_at=None),
    ]
    assert [i.id for i in triage_order(issues)] == [4, 3, 5, 2, 1]
