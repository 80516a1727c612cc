"""Cleaning checklists, visits and issues. Staff and above only; checklist edits need a manager."""
import logging
from datetime import datetime, timezone
from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.orm import Session
from househub.database import get_db
from househub.models.user import User
from househub.models.reservation import Reservation
from househub.models.cleaning import CleaningIssue, CleaningTask, CleaningVisit, CleaningVisitTask, VisitStatus
from househub.schemas.cleaning import (
    CleaningIssueCreate,
    CleaningIssueResponse,
    CleaningTaskCreate,
    CleaningTaskResponse,
    CleaningTaskUpdate,
    CleaningVisitCreate,
    CleaningVisitResponse,
    IssueResolve,
    RoomProgressResponse,
    RoomSummary,
    VisitTaskUpdate,
)
from househub.dependencies import get_property_or_404, require_cleaning_access, require_manager
from househub.services.cleaning import checklist_order, remaining, room_progress, snapshot_checklist, triage_order, visit_status

router = APIRouter(prefix="/cleaning", tags=["cleaning"])
log = logging.getLogger("uvicorn.error")


def _get_task_or_404(db: Session, task_id: int) -> CleaningTask:
    task = db.query(CleaningTask).filter(CleaningTask.id == task_id).first()
    if not task:
        raise HTTPException(status_code=404, detail="Checklist item not found")
    return task


def _get_visit_or_404(db: Session, visit_id: int) -> CleaningVisit:
    visit = db.query(CleaningVisit).filter(CleaningVisit.id == visit_id).first()
    if not visit:
        raise HTTPException(status_code=404, detail="Cleaning visit not found")
    return visit


def _visit_response(visit: CleaningVisit) -> CleaningVisitResponse:
    out = CleaningVisitResponse.model_validate(visit)
    out.rooms = [RoomProgressResponse.model_validate(p) for p in room_progress(visit.tasks)]
    return out


# --- Checklist ---

@router.get("/tasks", response_model=list[CleaningTaskResponse])
def list_checklist(
    property_id: int = Query(...),
    room: str | None = Query(None),
    db: Session = Depends(get_db),
    current_user: User = Depends(require_cleaning_access),
):
    get_property_or_404(db, property_id)
    q = db.query(CleaningTask).filter(CleaningTask.property_id == property_id)
    if room:
        q = q.filter(CleaningTask.room == room)
    return [CleaningTaskResponse.model_validate(t) for t in checklist_order(q.all())]


@router.post("/tasks", response_model=CleaningTaskResponse)
def create_checklist_item(
    data: CleaningTaskCreate,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_manager),
):
    get_property_or_404(db, data.property_id)
    task = CleaningTask(**data.model_dump(), created_by=current_user.id)
    db.add(task)
    db.commit()
    db.refresh(task)
    return CleaningTaskResponse.model_validate(task)


@router.put("/tasks/{task_id}", response_model=CleaningTaskResponse)
def update_checklist_item(
    task_id: int,
    data: CleaningTaskUpdate,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_manager),
):
    task = _get_task_or_404(db, task_id)
    for field, value in data.model_dump(exclude_unset=True).items():
        setattr(task, field, value)
    db.commit()
    db.refresh(task)
    return CleaningTaskResponse.model_validate(task)


@router.delete("/tasks/{task_id}")
def delete_checklist_item(
    task_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_manager),
):
    task = _get_task_or_404(db, task_id)
    db.delete(task)
    db.commit()
    return {"status": "ok", "message": "Checklist item deleted"}


@router.get("/rooms", response_model=list[RoomSummary])
def list_rooms(
    property_id: int = Query(...),
    db: Session = Depends(get_db),
    current_user: User = Depends(require_cleaning_access),
):
    get_property_or_404(db, property_id)
    tasks = db.query(CleaningTask).filter(CleaningTask.property_id == property_id).all()
    return [RoomSummary(room=p.room, task_count=p.total) for p in room_progress(checklist_order(tasks))]


# --- Visits ---

@router.get("/visits", response_model=list[CleaningVisitResponse])
def list_visits(
    property_id: int = Query(...),
    db: Session = Depends(get_db),
    current_user: User = Depends(require_cleaning_access),
):
    """Cleaning history, most recent visit first."""
    get_property_or_404(db, property_id)
    visits = (
        db.query(CleaningVisit)
        .filter(CleaningVisit.property_id == property_id)
        .order_by(CleaningVisit.visit_date.desc(), CleaningVisit.id.desc())
        .all()
    )
    return [_visit_response(v) for v in visits]


@router.post("/visits", response_model=CleaningVisitResponse)
def start_visit(
    data: CleaningVisitCreate,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_cleaning_access),
):
    """Start a visit with a copy of the property's current checklist."""
    get_property_or_404(db, data.property_id)
    if data.reservation_id is not None:
        reservation = db.query(Reservation).filter(Reservation.id == data.reservation_id).first()
        if not reservation or reservation.property_id != data.property_id:
            raise HTTPException(status_code=400, detail="Reservation does not belong to this property")
    checklist = db.query(CleaningTask).filter(CleaningTask.property_id == data.property_id).all()
    if not checklist:
        raise HTTPException(status_code=400, detail="This property has no cleaning checklist yet")

    visit = CleaningVisit(**data.model_dump(), cleaner_id=current_user.id, status=VisitStatus.scheduled.value)
    visit.tasks = [CleaningVisitTask(**fields) for fields in snapshot_checklist(checklist)]
    db.add(visit)
    db.commit()
    db.refresh(visit)
    log.info("[Cleaning] Visit %s started at property=%s with %s item(s)", visit.id, visit.property_id, len(visit.tasks))
    return _visit_response(visit)


@router.get("/visits/{visit_id}", response_model=CleaningVisitResponse)
def get_visit(
    visit_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_cleaning_access),
):
    return _visit_response(_get_visit_or_404(db, visit_id))


@router.patch("/visits/{visit_id}/tasks/{item_id}", response_model=CleaningVisitResponse)
def tick_visit_task(
    visit_id: int,
    item_id: int,
    data: VisitTaskUpdate,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_cleaning_access),
):
    visit = _get_visit_or_404(db, visit_id)
    if visit.status == VisitStatus.completed.value:
        raise HTTPException(status_code=400, detail="Visit is already completed")
    item = next((t for t in visit.tasks if t.id == item_id), None)
    if item is None:
        raise HTTPException(status_code=404, detail="Checklist item not found on this visit")
    item.is_completed = data.is_completed
    item.completed_by = current_user.id if data.is_completed else None
    item.completed_at = datetime.now(timezone.utc) if data.is_completed else None
    changes = data.model_dump(exclude_unset=True, exclude={"is_completed"})
    for field, value in changes.items():
        setattr(item, field, value)
    visit.status = visit_status(visit.tasks).value
    db.commit()
    db.refresh(visit)
    return _visit_response(visit)


@router.post("/visits/{visit_id}/complete", response_model=CleaningVisitResponse)
def complete_visit(
    visit_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_cleaning_access),
):
    visit = _get_visit_or_404(db, visit_id)
    if visit.status == VisitStatus.completed.value:
        raise HTTPException(status_code=400, detail="Visit is already completed")
    left = remaining(visit.tasks)
    if left:
        raise HTTPException(status_code=400, detail=f"{left} checklist item(s) still open")
    visit.status = VisitStatus.completed.value
    visit.completed_at = datetime.now(timezone.utc)
    db.commit()
    db.refresh(visit)
    log.info("[Cleaning] Visit %s completed by user=%s", visit.id, current_user.id)
    return _visit_response(visit)


# --- Issues ---

@router.get("/issues", response_model=list[CleaningIssueResponse])
def list_issues(
    property_id: int = Query(...),
    resolved: bool | None = Query(None, description="Only open (false) or only resolved (true) issues"),
    db: Session = Depends(get_db),
    current_user: User = Depends(require_cleaning_access),
):
    get_property_or_404(db, property_id)
    q = db.query(CleaningIssue).filter(CleaningIssue.property_id == property_id)
    if resolved is not None:
        q = q.filter(CleaningIssue.is_resolved.is_(resolved))
    return [CleaningIssueResponse.model_validate(i) for i in triage_order(q.all())]


@router.post("/issues", response_model=CleaningIssueResponse)
def report_issue(
    data: CleaningIssueCreate,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_cleaning_access),
):
    get_property_or_404(db, data.property_id)
    if data.visit_id is not None:
        visit = _get_visit_or_404(db, data.visit_id)
        if visit.property_id != data.property_id:
            raise HTTPException(status_code=400, detail="Visit does not belong to this property")
    issue = CleaningIssue(**data.model_dump(), reported_by=current_user.id)
    db.add(issue)
    db.commit()
    db.refresh(issue)
    log.info("[Cleaning] Issue %s (%s) reported at property=%s", issue.id, issue.severity, issue.property_id)
    return CleaningIssueResponse.model_validate(issue)


@router.post("/issues/{issue_id}/resolve", response_model=CleaningIssueResponse)
def resolve_issue(
    issue_id: int,
    data: IssueResolve | None = None,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_cleaning_access),
):
    issue = db.query(CleaningIssue).filter(CleaningIssue.id == issue_id).first()
    if not issue:
        raise HTTPException(status_code=404, detail="Issue not found")
    if issue.is_resolved:
        raise HTTPException(status_code=400, detail="Issue is already resolved")
    issue.is_resolved = True
    issue.resolved_by = current_user.id
    issue.resolved_at = datetime.now(timezone.utc)
    issue.resolution_notes = data.notes if data else None
    db.commit()
    db.refresh(issue)
    return CleaningIssueResponse.model_validate(issue)
