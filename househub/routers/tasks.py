"""Tasks: create, claim, complete (with recurring series), edit, delete."""
import logging
from datetime import datetime, timezone
from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session
from househub.database import get_db
from househub.models.user import User
from househub.models.task import Task, TaskStatus
from househub.schemas.task import TaskCompleted, TaskCreate, TaskResponse, TaskUpdate
from househub.dependencies import get_current_user, get_property_or_404
from househub.services.filters import filter_by_category, filter_tasks_by_assignment, filter_tasks_by_status, search_text
from househub.services.recurrence import next_due_date, should_spawn_next, successor_fields
from househub.services.roles import can_manage_property

router = APIRouter(prefix="/tasks", tags=["tasks"])
log = logging.getLogger("uvicorn.error")


def _get_task_or_404(db: Session, task_id: int) -> Task:
    task = db.query(Task).filter(Task.id == task_id).first()
    if not task:
        raise HTTPException(status_code=404, detail="Task not found")
    return task


def _check_assignee(db: Session, user_id: int | None) -> None:
    if user_id is not None and not db.query(User).filter(User.id == user_id).first():
        raise HTTPException(status_code=400, detail="Assigned user not found")


def complete_task(db: Session, task: Task) -> tuple[Task | None, str]:
    """Mark task completed and, for a live recurring series, create its single successor.

    The completion is committed first; the successor is a separate write whose
    failure is logged and reported but does not undo the completion."""
    now = datetime.now(timezone.utc)
    task.status = TaskStatus.completed.value
    task.completed_at = now
    db.commit()

    if not (task.is_recurring and task.recurrence_pattern and task.due_date):
        return None, "Task completed!"

    next_date = next_due_date(task.due_date, task.recurrence_pattern, task.recurrence_interval or 1)
    if not should_spawn_next(next_date, task.recurring_end_date):
        return None, "Task completed! Recurring series has ended."

    try:
        successor = Task(**successor_fields(task, next_date))
        db.add(successor)
        db.commit()
        db.refresh(successor)
    except SQLAlchemyError:
        db.rollback()
        log.exception("[Tasks] Error creating next recurring task after task %s", task.id)
        return None, "Task completed but failed to create next occurrence."
    log.info("[Tasks] Task %s completed; next occurrence %s due %s", task.id, successor.id, next_date)
    return successor, "Task completed! Next occurrence created automatically."


@router.get("", response_model=list[TaskResponse])
def list_tasks(
    property_id: int = Query(...),
    status: str | None = Query(None, description="'open', 'all', or an exact status"),
    assignment: str | None = Query(None, description="'mine', 'unassigned' or 'all'"),
    category: str | None = Query(None),
    search: str | None = Query(None),
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    get_property_or_404(db, property_id)
    tasks = (
        db.query(Task)
        .filter(Task.property_id == property_id)
        .order_by(Task.due_date.is_(None), Task.due_date, Task.id)
        .all()
    )
    tasks = filter_tasks_by_status(tasks, status)
    tasks = filter_tasks_by_assignment(tasks, assignment, current_user.id)
    tasks = filter_by_category(tasks, category)
    tasks = search_text(tasks, search, ("title", "description"))
    return [TaskResponse.model_validate(t) for t in tasks]


@router.post("", response_model=TaskResponse)
def create_task(
    data: TaskCreate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    get_property_or_404(db, data.property_id)
    _check_assignee(db, data.assigned_to)
    if data.recurring_end_date and data.due_date and data.recurring_end_date < data.due_date:
        raise HTTPException(status_code=400, detail="Recurring end date must not be before the due date")
    task = Task(
        property_id=data.property_id,
        title=data.title,
        description=data.description,
        status=data.status.value,
        priority=data.priority.value,
        category=data.category,
        assigned_to=data.assigned_to,
        created_by=current_user.id,
        due_date=data.due_date,
        is_recurring=data.is_recurring,
        recurrence_pattern=data.recurrence_pattern.value if data.recurrence_pattern else None,
        recurrence_interval=data.recurrence_interval if data.is_recurring else None,
        recurring_end_date=data.recurring_end_date,
        attachments=data.attachments,
    )
    db.add(task)
    db.commit()
    db.refresh(task)
    return TaskResponse.model_validate(task)


@router.get("/{task_id}", response_model=TaskResponse)
def get_task(
    task_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    return TaskResponse.model_validate(_get_task_or_404(db, task_id))


@router.put("/{task_id}", response_model=TaskResponse)
def update_task(
    task_id: int,
    data: TaskUpdate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    task = _get_task_or_404(db, task_id)
    if task.created_by != current_user.id and task.assigned_to != current_user.id and not can_manage_property(current_user.role):
        raise HTTPException(status_code=403, detail="You can only edit tasks you created or are assigned to")
    changes = data.model_dump(exclude_unset=True)
    if "assigned_to" in changes:
        _check_assignee(db, changes["assigned_to"])
    # Completing through an edit goes through the same path as /complete
    completing = changes.get("status") == TaskStatus.completed and task.status != TaskStatus.completed.value
    if completing:
        changes.pop("status")
    for field, value in changes.items():
        setattr(task, field, getattr(value, "value", value))
    if task.is_recurring and not task.recurrence_pattern:
        db.rollback()
        raise HTTPException(status_code=400, detail="Recurring tasks need a recurrence_pattern")
    if completing:
        complete_task(db, task)
    else:
        db.commit()
    db.refresh(task)
    return TaskResponse.model_validate(task)


@router.delete("/{task_id}")
def delete_task(
    task_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    task = _get_task_or_404(db, task_id)
    if task.created_by != current_user.id:
        raise HTTPException(status_code=403, detail="You can only delete tasks you created")
    db.delete(task)
    db.commit()
    return {"status": "ok", "message": "Task deleted"}


@router.post("/{task_id}/claim", response_model=TaskResponse)
def claim_task(
    task_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    task = _get_task_or_404(db, task_id)
    if task.status == TaskStatus.completed.value:
        raise HTTPException(status_code=400, detail="Task is already completed")
    task.assigned_to = current_user.id
    task.status = TaskStatus.in_progress.value
    db.commit()
    db.refresh(task)
    return TaskResponse.model_validate(task)


@router.post("/{task_id}/complete", response_model=TaskCompleted)
def complete(
    task_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    task = _get_task_or_404(db, task_id)
    if task.status == TaskStatus.completed.value:
        raise HTTPException(status_code=400, detail="Task is already completed")
    successor, message = complete_task(db, task)
    db.refresh(task)
    return TaskCompleted(
        task=TaskResponse.model_validate(task),
        next_task=TaskResponse.model_validate(successor) if successor else None,
        message=message,
    )

