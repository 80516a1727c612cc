"""Tasks, including recurring series."""
import enum
from sqlalchemy import Column, Integer, String, Text, Date, ForeignKey, DateTime, Boolean, JSON
from sqlalchemy.sql import func
from househub.database import Base


class TaskStatus(str, enum.Enum):
    pending = "pending"
    in_progress = "in_progress"
    completed = "completed"


class TaskPriority(str, enum.Enum):
    low = "low"
    medium = "medium"
    high = "high"


class RecurrencePattern(str, enum.Enum):
    daily = "daily"
    weekly = "weekly"
    monthly = "monthly"
    quarterly = "quarterly"
    yearly = "yearly"


TASK_CATEGORIES = (
    "maintenance",
    "repair",
    "cleaning",
    "inspection",
    "safety",
    "utilities",
    "landscaping",
    "tenant_request",
    "administrative",
    "seasonal",
    "inventory",
    "other",
)


class Task(Base):
    __tablename__ = "tasks"

    id = Column(Integer, primary_key=True, index=True)
    property_id = Column(Integer, ForeignKey("properties.id", ondelete="CASCADE"), nullable=False, index=True)

    title = Column(String(255), nullable=False)
    description = Column(Text, nullable=True)
    status = Column(String(16), nullable=False, default=TaskStatus.pending.value, index=True)
    priority = Column(String(16), nullable=False, default=TaskPriority.medium.value)
    category = Column(String(32), nullable=True)

    assigned_to = Column(Integer, ForeignKey("users.id", ondelete="SET NULL"), nullable=True)
    created_by = Column(Integer, ForeignKey("users.id", ondelete="SET NULL"), nullable=True)

    due_date = Column(Date, nullable=True)
    completed_at = Column(DateTime(timezone=True), nullable=True)

    is_recurring = Column(Boolean, nullable=False, default=False)
    recurrence_pattern = Column(String(16), nullable=True)
    recurrence_interval = Column(Integer, nullable=True)
    recurring_end_date = Column(Date, nullable=True)
    # Root of the recurring series (not the immediate predecessor)
    parent_task_id = Column(Integer, ForeignKey("tasks.id", ondelete="SET NULL"), nullable=True)

    attachments = Column(JSON, nullable=True)  # list of URLs

    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), onupdate=func.now())
