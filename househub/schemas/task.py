"""Task schemas."""
from datetime import date, datetime
from pydantic import BaseModel, Field, field_validator, model_validator
from househub.models.task import TASK_CATEGORIES, RecurrencePattern, TaskPriority, TaskStatus
from househub.schemas.common import reject_null


def _check_category(v: str | None) -> str | None:
    if v is not None and v not in TASK_CATEGORIES:
        raise ValueError(f"category must be one of {', '.join(TASK_CATEGORIES)}")
    return v


class TaskCreate(BaseModel):
    property_id: int
    title: str
    description: str | None = None
    status: TaskStatus = TaskStatus.pending
    priority: TaskPriority = TaskPriority.medium
    category: str | None = None
    assigned_to: int | None = None
    due_date: date | None = None
    is_recurring: bool = False
    recurrence_pattern: RecurrencePattern | None = None
    recurrence_interval: int = Field(1, ge=1)
    recurring_end_date: date | None = None
    attachments: list[str] = []

    @field_validator("title")
    @classmethod
    def title_required(cls, v: str) -> str:
        v = (v or "").strip()
        if not v:
            raise ValueError("Task title is required")
        return v

    @field_validator("category")
    @classmethod
    def known_category(cls, v: str | None) -> str | None:
        return _check_category(v)

    @model_validator(mode="after")
    def recurrence_complete(self):
        if self.is_recurring:
            if not self.recurrence_pattern:
                raise ValueError("Recurring tasks need a recurrence_pattern")
            if not self.due_date:
                raise ValueError("Recurring tasks need a due_date")
        else:
            self.recurrence_pattern = None
            self.recurring_end_date = None
        return self


class TaskUpdate(BaseModel):
    """All optional; only provided fields are updated."""
    title: str | None = None
    description: str | None = None
    status: TaskStatus | None = None
    priority: TaskPriority | None = None
    category: str | None = None
    assigned_to: int | None = None
    due_date: date | None = None
    is_recurring: bool | None = None
    recurrence_pattern: RecurrencePattern | None = None
    recurrence_interval: int | None = Field(None, ge=1)
    recurring_end_date: date | None = None
    attachments: list[str] | None = None

    @field_validator("title", "status", "priority", "is_recurring")
    @classmethod
    def not_null(cls, v):
        return reject_null(v)

    @field_validator("category")
    @classmethod
    def known_category(cls, v: str | None) -> str | None:
        return _check_category(v)


class TaskResponse(BaseModel):
    id: int
    property_id: int
    title: str
    description: str | None
    status: str
    priority: str
    category: str | None
    assigned_to: int | None
    created_by: int | None
    due_date: date | None
    completed_at: datetime | None
    is_recurring: bool
    recurrence_pattern: str | None
    recurrence_interval: int | None
    recurring_end_date: date | None
    parent_task_id: int | None
    attachments: list[str] = []
    created_at: datetime | None = None

    @field_validator("attachments", mode="before")
    @classmethod
    def coerce_attachments(cls, v) -> list[str]:
        return list(v or [])

    class Config:
        from_attributes = True


class TaskCompleted(BaseModel):
    task: TaskResponse
    next_task: TaskResponse | None = None
    message: str
