"""Contact directory per property, plus the opt-in directory of registered people."""
import logging
from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.orm import Session
from househub.database import get_db
from househub.models.user import User
from househub.models.contact import Contact
from househub.schemas.contact import ContactCreate, ContactResponse, ContactUpdate, PersonContact
from househub.dependencies import get_current_user, get_property_or_404, require_manager
from househub.services.filters import filter_by_category, search_text, search_users

router = APIRouter(prefix="/contacts", tags=["contacts"])
log = logging.getLogger("uvicorn.error")

CONTACT_SEARCH_FIELDS = ("name", "email", "phone", "address", "notes")


def _get_or_404(db: Session, contact_id: int) -> Contact:
    contact = db.query(Contact).filter(Contact.id == contact_id).first()
    if not contact:
        raise HTTPException(status_code=404, detail="Contact not found")
    return contact


@router.get("", response_model=list[ContactResponse])
def list_contacts(
    property_id: int = Query(...),
    category: str | None = Query(None, description="Category, or 'all'"),
    search: str | None = Query(None, description="Matches name, email, phone, address or notes"),
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    get_property_or_404(db, property_id)
    contacts = (
        db.query(Contact)
        .filter(Contact.property_id == property_id)
        .order_by(Contact.priority, Contact.name)
        .all()
    )
    contacts = search_text(filter_by_category(contacts, category), search, CONTACT_SEARCH_FIELDS)
    return [ContactResponse.model_validate(c) for c in contacts]


@router.get("/people", response_model=list[PersonContact])
def list_people(
    search: str | None = Query(None, description="Case-insensitive match on name or email"),
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    """Registered users who chose to appear in the directory (show_in_contacts)."""
    people = (
        db.query(User)
        .filter(User.show_in_contacts.is_(True))
        .order_by(User.full_name, User.email)
        .all()
    )
    return [PersonContact.model_validate(u) for u in search_users(people, search)]


@router.post("", response_model=ContactResponse)
def create_contact(
    data: ContactCreate,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_manager),
):
    get_property_or_404(db, data.property_id)
    contact = Contact(**data.model_dump(), created_by=current_user.id)
    db.add(contact)
    db.commit()
    db.refresh(contact)
    log.info("[Contacts] %s added contact id=%s to property=%s", current_user.email, contact.id, contact.property_id)
    return ContactResponse.model_validate(contact)


@router.get("/{contact_id}", response_model=ContactResponse)
def get_contact(
    contact_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    return ContactResponse.model_validate(_get_or_404(db, contact_id))


@router.put("/{contact_id}", response_model=ContactResponse)
def update_contact(
    contact_id: int,
    data: ContactUpdate,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_manager),
):
    contact = _get_or_404(db, contact_id)
    for field, value in data.model_dump(exclude_unset=True).items():
        setattr(contact, field, value)
    db.commit()
    db.refresh(contact)
    return ContactResponse.model_validate(contact)


@router.delete("/{contact_id}")
def delete_contact(
    contact_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_manager),
):
    contact = _get_or_404(db, contact_id)
    db.delete(contact)
    db.commit()
    return {"status": "ok", "message": "Contact deleted"}
