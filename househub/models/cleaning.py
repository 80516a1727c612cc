"""Cleaning: per-room checklist, cleaning visits with their ticked-off tasks, reported issues."""
import enum
from sqlalchemy import Column, Integer, String, Text, Boolean, Date, DateTime, ForeignKey, JSON
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
from househub.database import Base

ISSUE_SEVERITIES = ("low", "medium", "high", "urgent")


class VisitStatus(str, enum.Enum):
    scheduled = "scheduled"
    in_progress = "in_progress"
    completed = "completed"


class CleaningTask(Base):
    """Checklist template item: one thing to do in one room."""
    __tablename__ = "cleaning_tasks"

    id = Column(Integer, primary_key=True, index=True)
    property_id = Column(Integer, ForeignKey("properties.id", ondelete="CASCADE"), nullable=False, index=True)
    room = Column(String(100), nullable=False)
    task = Column(String(255), nullable=False)
    description = Column(Text, nullable=True)
    display_order = Column(Integer, nullable=False, default=0)
    photo_url = Column(String(1000), nullable=True)  # reference photo of the finished result

    created_by = Column(Integer, ForeignKey("users.id", ondelete="SET NULL"), nullable=True)

    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), onupdate=func.now())


class CleaningVisit(Base):
    __tablename__ = "cleaning_visits"

    id = Column(Integer, primary_key=True, index=True)
    property_id = Column(Integer, ForeignKey("properties.id", ondelete="CASCADE"), nullable=False, index=True)
    reservation_id = Column(Integer, ForeignKey("reservations.id", ondelete="SET NULL"), nullable=True)
    visit_date = Column(Date, nullable=False)
    status = Column(String(20), nullable=False, default=VisitStatus.scheduled.value)
    notes = Column(Text, nullable=True)

    cleaner_id = Column(Integer, ForeignKey("users.id", ondelete="SET NULL"), nullable=True)
    completed_at = Column(DateTime(timezone=True), nullable=True)

    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), onupdate=func.now())

    tasks = relationship(
        "CleaningVisitTask",
        back_populates="visit",
        cascade="all, delete-orphan",
        passive_deletes=True,
        order_by="CleaningVisitTask.display_order",
    )


class CleaningVisitTask(Base):
    """A checklist item as it stood when the visit started, with its completion."""
    __tablename__ = "cleaning_visit_tasks"

    id = Column(Integer, primary_key=True, index=True)
    visit_id = Column(Integer, ForeignKey("cleaning_visits.id", ondelete="CASCADE"), nullable=False, index=True)
    task_id = Column(Integer, ForeignKey("cleaning_tasks.id", ondelete="SET NULL"), nullable=True)
    room = Column(String(100), nullable=False)
    task = Column(String(255), nullable=False)
    display_order = Column(Integer, nullable=False, default=0)

    is_completed = Column(Boolean, nullable=False, default=False)
    completed_by = Column(Integer, ForeignKey("users.id", ondelete="SET NULL"), nullable=True)
    completed_at = Column(DateTime(timezone=True), nullable=True)
    photo_url = Column(String(1000), nullable=True)
    notes = Column(Text, nullable=True)

    visit = relationship("CleaningVisit", back_populates="tasks")


class CleaningIssue(Base):
    __tablename__ = "cleaning_issues"

    id = Column(Integer, primary_key=True, index=True)
    property_id = Column(Integer, ForeignKey("properties.id", ondelete="CASCADE"), nullable=False, index=True)
    visit_id = Column(Integer, ForeignKey("cleaning_visits.id", ondelete="SET NULL"), nullable=True)

    description = Column(Text, nullable=False)
    severity = Column(String(20), nullable=False, default="medium")
    location = Column(String(255), nullable=True)
    category = Column(String(50), nullable=True)
    photo_urls = Column(JSON, nullable=True)

    reported_by = Column(Integer, ForeignKey("users.id", ondelete="SET NULL"), nullable=True)
    reported_at = Column(DateTime(timezone=True), server_default=func.now())

    is_resolved = Column(Boolean, nullable=False, default=False)
    resolved_by = Column(Integer, ForeignKey("users.id", ondelete="SET NULL"), nullable=True)
    resolved_at = Column(DateTime(timezone=True), nullable=True)
    resolution_notes = Column(Text, nullable=True)
