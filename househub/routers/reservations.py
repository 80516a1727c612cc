"""Reservations: request a stay, approve/reject, cancel, companions and invitations."""
import logging
from datetime import date, datetime, timezone
from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session
from househub.database import get_db
from househub.models.user import User
from househub.models.reservation import (
    ApprovalStatus,
    Companion,
    Reservation,
    ReservationApproval,
    ReservationStatus,
)
from househub.schemas.reservation import (
    ApprovalDecision,
    ApprovalResponse,
    CompanionIn,
    CompanionResponse,
    ReservationCreate,
    ReservationResponse,
    ReservationSaved,
    ReservationUpdate,
)
from househub.dependencies import get_current_user, get_property_or_404, require_manager
from househub.services.invitations import send_guest_invitations
from househub.services.notifications import send_reservation_request_email
from househub.services.reservations import overlaps, resolve_status, validate_date_range
from househub.services.roles import can_approve_reservations

router = APIRouter(prefix="/reservations", tags=["reservations"])
log = logging.getLogger("uvicorn.error")


def _get_reservation_or_404(db: Session, reservation_id: int) -> Reservation:
    reservation = db.query(Reservation).filter(Reservation.id == reservation_id).first()
    if not reservation:
        raise HTTPException(status_code=404, detail="Reservation not found")
    return reservation


def _require_owner_or_approver(reservation: Reservation, user: User) -> None:
    if reservation.user_id != user.id and not can_approve_reservations(user.role):
        raise HTTPException(status_code=403, detail="Not your reservation")


def _check_dates(start: date, end: date) -> None:
    try:
        validate_date_range(start, end)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))


def _named(companions: list[CompanionIn]) -> list[CompanionIn]:
    return [c for c in companions if c.name]


def _save_companions(
    db: Session,
    reservation: Reservation,
    companions: list[CompanionIn],
    previously_invited: dict[str, datetime] | None = None,
) -> None:
    """Insert companions for a saved reservation. A failure here is logged; the reservation stays."""
    previously_invited = previously_invited or {}
    try:
        for c in companions:
            db.add(Companion(
                reservation_id=reservation.id,
                name=c.name,
                email=c.email,
                phone=c.phone,
                relationship=c.relationship,
                age_range=c.age_range,
                invited_to_system=c.invited_to_system,
                invite_sent_at=previously_invited.get((c.email or "").lower()) if c.email else None,
            ))
        db.commit()
    except SQLAlchemyError:
        db.rollback()
        log.exception("[Reservations] Failed to save companions for reservation %s", reservation.id)


def _open_approval_request(db: Session, reservation: Reservation, requester: User) -> None:
    existing = (
        db.query(ReservationApproval)
        .filter(
            ReservationApproval.reservation_id == reservation.id,
            ReservationApproval.status == ApprovalStatus.pending.value,
        )
        .first()
    )
    if existing:
        return
    db.add(ReservationApproval(
        reservation_id=reservation.id,
        requested_by=requester.id,
        status=ApprovalStatus.pending.value,
    ))
    db.commit()
    approvers = [u for u in db.query(User).all() if can_approve_reservations(u.role)]
    for approver in approvers:
        send_reservation_request_email(
            approver.email,
            requester.full_name or requester.email,
            reservation.title,
            reservation.start_date.isoformat(),
            reservation.end_date.isoformat(),
        )


def _close_approval_requests(db: Session, reservation: Reservation, reviewer: User, status: ApprovalStatus, notes: str | None) -> None:
    now = datetime.now(timezone.utc)
    pending = (
        db.query(ReservationApproval)
        .filter(
            ReservationApproval.reservation_id == reservation.id,
            ReservationApproval.status == ApprovalStatus.pending.value,
        )
        .all()
    )
    for approval in pending:
        approval.status = status.value
        approval.reviewed_by = reviewer.id
        approval.reviewed_at = now
        approval.notes = notes


def _saved_message(status: ReservationStatus, companions: list[CompanionIn], invitations_sent: int) -> str:
    companion_count = len(companions)
    invite_count = len([c for c in companions if c.email and c.invited_to_system])
    if status == ReservationStatus.confirmed:
        parts = ["Reservation confirmed."]
        if companion_count:
            parts.append(f"{companion_count} companion(s) added.")
        if invitations_sent:
            parts.append(f"Sent {invitations_sent} invitation(s).")
    elif status == ReservationStatus.pending_approval:
        parts = ["Reservation submitted for approval."]
        if companion_count:
            parts.append(f"{companion_count} companion(s) will be included.")
        if invite_count:
            parts.append(f"{invite_count} invitation(s) will be sent once approved.")
    else:
        parts = ["Reservation saved."]
    return " ".join(parts)


def _after_save(db: Session, reservation: Reservation, status: ReservationStatus, actor: User) -> int:
    if status == ReservationStatus.confirmed:
        return send_guest_invitations(db, reservation.id)
    if status == ReservationStatus.pending_approval:
        _open_approval_request(db, reservation, actor)
    return 0


@router.get("", response_model=list[ReservationResponse])
def list_reservations(
    property_id: int = Query(...),
    start: date | None = Query(None, description="Only reservations ending on/after this date"),
    end: date | None = Query(None, description="Only reservations starting on/before this date"),
    status: str | None = Query(None),
    mine: bool = Query(False),
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    get_property_or_404(db, property_id)
    q = db.query(Reservation).filter(Reservation.property_id == property_id)
    if status:
        q = q.filter(Reservation.status == status)
    if mine:
        q = q.filter(Reservation.user_id == current_user.id)
    rows = q.order_by(Reservation.start_date).all()
    return [ReservationResponse.model_validate(r) for r in rows if overlaps(r.start_date, r.end_date, start, end)]


@router.get("/approvals/pending", response_model=list[ApprovalResponse])
def list_pending_approvals(
    db: Session = Depends(get_db),
    current_user: User = Depends(require_manager),
):
    rows = (
        db.query(ReservationApproval)
        .filter(ReservationApproval.status == ApprovalStatus.pending.value)
        .order_by(ReservationApproval.requested_at)
        .all()
    )
    return [ApprovalResponse.model_validate(a) for a in rows]


@router.post("", response_model=ReservationSaved)
def create_reservation(
    data: ReservationCreate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    get_property_or_404(db, data.property_id)
    _check_dates(data.start_date, data.end_date)
    title = (data.title or "").strip()
    if not title:
        raise HTTPException(status_code=400, detail="Title is required")

    status = resolve_status(current_user.role, False, can_approve_reservations(current_user.role))
    companions = _named(data.companions)
    reservation = Reservation(
        property_id=data.property_id,
        user_id=current_user.id,
        title=title,
        description=data.description,
        start_date=data.start_date,
        end_date=data.end_date,
        guests=data.guests + len(companions),
        status=status.value,
    )
    db.add(reservation)
    db.commit()
    db.refresh(reservation)
    log.info("[Reservations] id=%s created by user=%s status=%s", reservation.id, current_user.id, status.value)

    if companions:
        _save_companions(db, reservation, companions)
    sent = _after_save(db, reservation, status, current_user)
    db.refresh(reservation)
    return ReservationSaved(
        reservation=ReservationResponse.model_validate(reservation),
        invitations_sent=sent,
        message=_saved_message(status, companions, sent),
    )


@router.get("/{reservation_id}", response_model=ReservationResponse)
def get_reservation(
    reservation_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    return ReservationResponse.model_validate(_get_reservation_or_404(db, reservation_id))


@router.put("/{reservation_id}", response_model=ReservationSaved)
def update_reservation(
    reservation_id: int,
    data: ReservationUpdate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    reservation = _get_reservation_or_404(db, reservation_id)
    _require_owner_or_approver(reservation, current_user)
    start = data.start_date or reservation.start_date
    end = data.end_date or reservation.end_date
    _check_dates(start, end)

    was_pending = reservation.status == ReservationStatus.pending_approval.value
    # Non-approvers keep whatever status the reservation already has
    status = resolve_status(
        current_user.role, True, can_approve_reservations(current_user.role), reservation.status
    )
    changes = data.model_dump(exclude_unset=True, exclude={"companions"})
    if "title" in changes:
        changes["title"] = (changes["title"] or "").strip() or reservation.title
    for field, value in changes.items():
        setattr(reservation, field, value)
    reservation.status = status.value
    if was_pending and status == ReservationStatus.confirmed:
        _close_approval_requests(db, reservation, current_user, ApprovalStatus.approved, None)

    companions = None
    if data.companions is not None:
        companions = _named(data.companions)
        previously_invited = {
            c.email.lower(): c.invite_sent_at
            for c in reservation.companions
            if c.email and c.invite_sent_at
        }
        base_guests = data.guests if data.guests is not None else max(1, reservation.guests - len(reservation.companions))
        reservation.guests = base_guests + len(companions)
        db.query(Companion).filter(Companion.reservation_id == reservation.id).delete()
        db.commit()
        _save_companions(db, reservation, companions, previously_invited)
    else:
        if data.guests is not None:
            reservation.guests = data.guests + len(reservation.companions)
        db.commit()

    sent = _after_save(db, reservation, status, current_user)
    db.refresh(reservation)
    return ReservationSaved(
        reservation=ReservationResponse.model_validate(reservation),
        invitations_sent=sent,
        message=_saved_message(status, companions or [], sent),
    )


@router.post("/{reservation_id}/approve", response_model=ReservationSaved)
def approve_reservation(
    reservation_id: int,
    data: ApprovalDecision | None = None,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_manager),
):
    reservation = _get_reservation_or_404(db, reservation_id)
    if reservation.status != ReservationStatus.pending_approval.value:
        raise HTTPException(status_code=400, detail=f"Reservation is {reservation.status}, not pending approval")
    reservation.status = ReservationStatus.confirmed.value
    _close_approval_requests(db, reservation, current_user, ApprovalStatus.approved, data.notes if data else None)
    db.commit()
    log.info("[Reservations] id=%s approved by user=%s", reservation.id, current_user.id)
    sent = send_guest_invitations(db, reservation.id)
    db.refresh(reservation)
    message = "Reservation approved."
    if sent:
        message += f" Sent {sent} invitation(s)."
    return ReservationSaved(reservation=ReservationResponse.model_validate(reservation), invitations_sent=sent, message=message)


@router.post("/{reservation_id}/reject", response_model=ReservationResponse)
def reject_reservation(
    reservation_id: int,
    data: ApprovalDecision | None = None,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_manager),
):
    reservation = _get_reservation_or_404(db, reservation_id)
    if reservation.status != ReservationStatus.pending_approval.value:
        raise HTTPException(status_code=400, detail=f"Reservation is {reservation.status}, not pending approval")
    reservation.status = ReservationStatus.rejected.value
    _close_approval_requests(db, reservation, current_user, ApprovalStatus.rejected, data.notes if data else None)
    db.commit()
    db.refresh(reservation)
    log.info("[Reservations] id=%s rejected by user=%s", reservation.id, current_user.id)
    return ReservationResponse.model_validate(reservation)


@router.post("/{reservation_id}/cancel", response_model=ReservationResponse)
def cancel_reservation(
    reservation_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    reservation = _get_reservation_or_404(db, reservation_id)
    _require_owner_or_approver(reservation, current_user)
    reservation.status = ReservationStatus.cancelled.value
    db.commit()
    db.refresh(reservation)
    return ReservationResponse.model_validate(reservation)


@router.delete("/{reservation_id}")
def delete_reservation(
    reservation_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    reservation = _get_reservation_or_404(db, reservation_id)
    _require_owner_or_approver(reservation, current_user)
    db.query(ReservationApproval).filter(ReservationApproval.reservation_id == reservation.id).delete()
    db.delete(reservation)
    db.commit()
    return {"status": "ok", "message": "Reservation deleted"}


@router.get("/{reservation_id}/companions", response_model=list[CompanionResponse])
def list_companions(
    reservation_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    reservation = _get_reservation_or_404(db, reservation_id)
    return [CompanionResponse.model_validate(c) for c in reservation.companions]


@router.post("/{reservation_id}/invitations")
def send_invitations(
    reservation_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    """Invite any companions that are flagged but not yet invited (confirmed reservations only)."""
    reservation = _get_reservation_or_404(db, reservation_id)
    _require_owner_or_approver(reservation, current_user)
    if reservation.status != ReservationStatus.confirmed.value:
        raise HTTPException(status_code=400, detail="Invitations are sent once the reservation is confirmed")
    sent = send_guest_invitations(db, reservation.id)
    return {"status": "ok", "invitations_sent": sent}
