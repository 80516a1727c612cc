"""Dashboard summary schema."""
from pydantic import BaseModel
from househub.schemas.inventory import InventoryItemResponse
from househub.schemas.reservation import ReservationResponse
from househub.schemas.task import TaskResponse


class DashboardSummary(BaseModel):
    property_id: int
    upcoming_reservations: list[ReservationResponse]
    pending_approvals: int
    open_tasks: int
    overdue_tasks: list[TaskResponse]
    my_tasks: int
    low_stock_items: list[InventoryItemResponse]
    guest_book_entries: int
    average_rating: float | None = None
