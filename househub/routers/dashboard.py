"""Dashboard: upcoming visits, task and inventory alerts for one property."""
from datetime import date, timedelta
from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session
from househub.config import get_settings
from househub.database import get_db
from househub.models.user import User
from househub.models.guest_book import GuestBookEntry
from househub.models.inventory import InventoryItem
from househub.models.reservation import Reservation, ReservationStatus
from househub.models.task import Task
from househub.schemas.dashboard import DashboardSummary
from househub.schemas.inventory import InventoryItemResponse
from househub.schemas.reservation import ReservationResponse
from househub.schemas.task import TaskResponse
from househub.dependencies import get_current_user, get_property_or_404
from househub.services.filters import filter_tasks_by_assignment, filter_tasks_by_status, overdue_tasks
from househub.services.reservations import overlaps
from househub.services.staples import low_stock

router = APIRouter(prefix="/dashboard", tags=["dashboard"])


@router.get("/summary", response_model=DashboardSummary)
def summary(
    property_id: int = Query(...),
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    get_property_or_404(db, property_id)
    today = date.today()
    horizon = today + timedelta(days=get_settings().upcoming_reservation_days)

    reservations = (
        db.query(Reservation)
        .filter(Reservation.property_id == property_id)
        .order_by(Reservation.start_date)
        .all()
    )
    upcoming = [
        r for r in reservations
        if r.status == ReservationStatus.confirmed.value and overlaps(r.start_date, r.end_date, today, horizon)
    ]
    pending = [r for r in reservations if r.status == ReservationStatus.pending_approval.value]

    tasks = db.query(Task).filter(Task.property_id == property_id).all()
    open_tasks = filter_tasks_by_status(tasks, "open")

    items = db.query(InventoryItem).filter(InventoryItem.property_id == property_id).all()

    entries = db.query(GuestBookEntry).filter(
        GuestBookEntry.property_id == property_id,
        GuestBookEntry.is_public.is_(True),
        GuestBookEntry.is_approved.is_(True),
    ).all()
    ratings = [e.rating for e in entries if e.rating]

    return DashboardSummary(
        property_id=property_id,
        upcoming_reservations=[ReservationResponse.model_validate(r) for r in upcoming],
        pending_approvals=len(pending),
        open_tasks=len(open_tasks),
        overdue_tasks=[TaskResponse.model_validate(t) for t in overdue_tasks(tasks, today)],
        my_tasks=len(filter_tasks_by_assignment(open_tasks, "mine", current_user.id)),
        low_stock_items=[InventoryItemResponse.model_validate(i) for i in low_stock(items)],
        guest_book_entries=len(entries),
        average_rating=round(sum(ratings) / len(ratings), 2) if ratings else None,
    )
