"""Guest book: entries are public once both published and approved."""
import logging
from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.orm import Session
from househub.database import get_db
from househub.models.user import User
from househub.models.property import Property
from househub.models.guest_book import GuestBookEntry, GuestBookPhoto
from househub.schemas.guest_book import GuestBookEntryCreate, GuestBookEntryResponse, GuestBookModeration
from househub.dependencies import get_current_user, get_property_or_404, require_manager
from househub.services.notifications import send_guest_book_notification
from househub.services.roles import can_manage_property

router = APIRouter(prefix="/guest-book", tags=["guest-book"])
log = logging.getLogger("uvicorn.error")


def is_publicly_visible(entry: GuestBookEntry) -> bool:
    return bool(entry.is_public and entry.is_approved)


def _get_entry_or_404(db: Session, entry_id: int) -> GuestBookEntry:
    entry = db.query(GuestBookEntry).filter(GuestBookEntry.id == entry_id).first()
    if not entry:
        raise HTTPException(status_code=404, detail="Guest book entry not found")
    return entry


def _notify_owner(db: Session, prop: Property, entry: GuestBookEntry) -> None:
    owner = db.query(User).filter(User.id == prop.created_by).first() if prop.created_by else None
    if not owner or not owner.email:
        log.info("[GuestBook] Property %s has no owner email; entry %s notification skipped", prop.id, entry.id)
        return
    send_guest_book_notification(
        owner.email,
        prop.name,
        entry.guest_name,
        rating=entry.rating,
        visit_date=entry.visit_date.isoformat() if entry.visit_date else None,
        message=entry.message,
    )


@router.get("", response_model=list[GuestBookEntryResponse])
def list_entries(
    property_id: int = Query(...),
    include_unapproved: bool = Query(False, description="Managers only: include hidden/unapproved entries"),
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    get_property_or_404(db, property_id)
    entries = (
        db.query(GuestBookEntry)
        .filter(GuestBookEntry.property_id == property_id)
        .order_by(GuestBookEntry.created_at.desc(), GuestBookEntry.id.desc())
        .all()
    )
    show_all = include_unapproved and can_manage_property(current_user.role)
    visible = [
        e for e in entries
        if show_all or is_publicly_visible(e) or e.created_by == current_user.id
    ]
    return [GuestBookEntryResponse.model_validate(e) for e in visible]


@router.post("", response_model=GuestBookEntryResponse)
def create_entry(
    data: GuestBookEntryCreate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    prop = get_property_or_404(db, data.property_id)
    if not data.message.strip():
        raise HTTPException(status_code=400, detail="Message is required")
    entry = GuestBookEntry(
        property_id=data.property_id,
        guest_name=data.guest_name.strip() or (current_user.full_name or current_user.email),
        guest_email=data.guest_email or current_user.email,
        visit_date=data.visit_date,
        title=data.title,
        message=data.message.strip(),
        rating=data.rating,
        is_public=data.is_public,
        is_approved=False,
        created_by=current_user.id,
    )
    entry.photos = [GuestBookPhoto(photo_url=p.photo_url, caption=p.caption) for p in data.photos]
    db.add(entry)
    db.commit()
    db.refresh(entry)
    log.info("[GuestBook] Entry %s added for property %s (awaiting approval)", entry.id, entry.property_id)
    _notify_owner(db, prop, entry)
    return GuestBookEntryResponse.model_validate(entry)


@router.post("/{entry_id}/approve", response_model=GuestBookEntryResponse)
def moderate_entry(
    entry_id: int,
    data: GuestBookModeration | None = None,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_manager),
):
    entry = _get_entry_or_404(db, entry_id)
    data = data or GuestBookModeration()
    entry.is_approved = data.is_approved
    if data.is_public is not None:
        entry.is_public = data.is_public
    db.commit()
    db.refresh(entry)
    return GuestBookEntryResponse.model_validate(entry)


@router.delete("/{entry_id}")
def delete_entry(
    entry_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    entry = _get_entry_or_404(db, entry_id)
    if entry.created_by != current_user.id and not can_manage_property(current_user.role):
        raise HTTPException(status_code=403, detail="You can only delete your own entries")
    db.delete(entry)
    db.commit()
    return {"status": "ok", "message": "Entry deleted"}
