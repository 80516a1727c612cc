"""Contact directory schemas."""
from datetime import datetime
from pydantic import BaseModel, Field, field_validator
from househub.models.contact import CONTACT_CATEGORIES
from househub.schemas.common import reject_null


def _check_category(v: str | None) -> str | None:
    if v is not None and v not in CONTACT_CATEGORIES:
        raise ValueError(f"category must be one of {', '.join(CONTACT_CATEGORIES)}")
    return v


class ContactCreate(BaseModel):
    property_id: int
    name: str
    category: str = "general"
    phone: str | None = None
    email: str | None = None
    address: str | None = None
    website: str | None = None
    notes: str | None = None
    priority: int = Field(3, ge=1, le=5)

    @field_validator("name")
    @classmethod
    def name_required(cls, v: str) -> str:
        v = (v or "").strip()
        if not v:
            raise ValueError("Contact name is required")
        return v

    @field_validator("category")
    @classmethod
    def known_category(cls, v: str) -> str:
        return _check_category(v)


class ContactUpdate(BaseModel):
    name: str | None = None
    category: str | None = None
    phone: str | None = None
    email: str | None = None
    address: str | None = None
    website: str | None = None
    notes: str | None = None
    priority: int | None = Field(None, ge=1, le=5)

    @field_validator("name", "category", "priority")
    @classmethod
    def not_null(cls, v):
        return reject_null(v)

    @field_validator("category")
    @classmethod
    def known_category(cls, v: str | None) -> str | None:
        return _check_category(v)


class ContactResponse(BaseModel):
    id: int
    property_id: int
    name: str
    category: str
    phone: str | None
    email: str | None
    address: str | None
    website: str | None
    notes: str | None
    priority: int
    created_by: int | None
    created_at: datetime | None = None

    class Config:
        from_attributes = True


class PersonContact(BaseModel):
    """A registered user who opted into the people directory."""
    id: int
    full_name: str | None = None
    email: str
    phone: str | None = None
    avatar_url: str | None = None

    class Config:
        from_attributes = True
