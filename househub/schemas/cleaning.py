"""Cleaning checklist, visit and issue schemas."""
from datetime import date, datetime
from pydantic import BaseModel, Field, field_validator
from househub.models.cleaning import ISSUE_SEVERITIES
from househub.schemas.common import reject_null


def _check_text(v: str | None, label: str) -> str | None:
    if v is None:
        return v
    v = v.strip()
    if not v:
        raise ValueError(f"{label} is required")
    return v


def _check_severity(v: str | None) -> str | None:
    if v is not None and v not in ISSUE_SEVERITIES:
        raise ValueError(f"severity must be one of {', '.join(ISSUE_SEVERITIES)}")
    return v


class CleaningTaskCreate(BaseModel):
    property_id: int
    room: str
    task: str
    description: str | None = None
    display_order: int = 0
    photo_url: str | None = None

    @field_validator("room")
    @classmethod
    def room_required(cls, v: str) -> str:
        return _check_text(v, "Room")

    @field_validator("task")
    @classmethod
    def task_required(cls, v: str) -> str:
        return _check_text(v, "Task")


class CleaningTaskUpdate(BaseModel):
    room: str | None = None
    task: str | None = None
    description: str | None = None
    display_order: int | None = None
    photo_url: str | None = None

    @field_validator("room", "task", "display_order")
    @classmethod
    def not_null(cls, v):
        return reject_null(v)

    @field_validator("room", "task")
    @classmethod
    def not_blank(cls, v: str) -> str:
        return _check_text(v, "Room and task")


class CleaningTaskResponse(BaseModel):
    id: int
    property_id: int
    room: str
    task: str
    description: str | None
    display_order: int
    photo_url: str | None
    created_by: int | None

    class Config:
        from_attributes = True


class RoomSummary(BaseModel):
    room: str
    task_count: int


class RoomProgressResponse(BaseModel):
    room: str
    total: int
    completed: int
    percent: int

    class Config:
        from_attributes = True


class CleaningVisitCreate(BaseModel):
    property_id: int
    visit_date: date
    reservation_id: int | None = None
    notes: str | None = None


class VisitTaskUpdate(BaseModel):
    is_completed: bool
    photo_url: str | None = None
    notes: str | None = None


class VisitTaskResponse(BaseModel):
    id: int
    visit_id: int
    task_id: int | None
    room: str
    task: str
    display_order: int
    is_completed: bool
    completed_by: int | None
    completed_at: datetime | None
    photo_url: str | None
    notes: str | None

    class Config:
        from_attributes = True


class CleaningVisitResponse(BaseModel):
    id: int
    property_id: int
    reservation_id: int | None
    visit_date: date
    status: str
    notes: str | None
    cleaner_id: int | None
    completed_at: datetime | None
    tasks: list[VisitTaskResponse] = []
    rooms: list[RoomProgressResponse] = []

    class Config:
        from_attributes = True


class CleaningIssueCreate(BaseModel):
    property_id: int
    description: str
    severity: str = "medium"
    location: str | None = None
    category: str | None = None
    photo_urls: list[str] = []
    visit_id: int | None = None

    @field_validator("description")
    @classmethod
    def description_required(cls, v: str) -> str:
        return _check_text(v, "Description")

    @field_validator("severity")
    @classmethod
    def known_severity(cls, v: str) -> str:
        return _check_severity(v)


class IssueResolve(BaseModel):
    notes: str | None = None


class CleaningIssueResponse(BaseModel):
    id: int
    property_id: int
    visit_id: int | None
    description: str
    severity: str
    location: str | None
    category: str | None
    photo_urls: list[str] = []
    reported_by: int | None
    reported_at: datetime | None = None
    is_resolved: bool
    resolved_by: int | None
    resolved_at: datetime | None
    resolution_notes: str | None

    @field_validator("photo_urls", mode="before")
    @classmethod
    def coerce_photo_urls(cls, v) -> list[str]:
        return list(v or [])

    class Config:
        from_attributes = True
