"""Guest book schemas."""
from datetime import date, datetime
from pydantic import BaseModel, Field


class GuestBookPhotoIn(BaseModel):
    photo_url: str
    caption: str | None = None


class GuestBookPhotoResponse(BaseModel):
    id: int
    photo_url: str
    caption: str | None

    class Config:
        from_attributes = True


class GuestBookEntryCreate(BaseModel):
    property_id: int
    guest_name: str
    guest_email: str | None = None
    visit_date: date | None = None
    title: str | None = None
    message: str
    rating: int | None = Field(None, ge=1, le=5)
    is_public: bool = True
    photos: list[GuestBookPhotoIn] = []


class GuestBookEntryResponse(BaseModel):
    id: int
    property_id: int
    guest_name: str
    guest_email: str | None
    visit_date: date | None
    title: str | None
    message: str
    rating: int | None
    is_public: bool
    is_approved: bool
    created_by: int | None
    photos: list[GuestBookPhotoResponse] = []
    created_at: datetime | None = None

    class Config:
        from_attributes = True


class GuestBookModeration(BaseModel):
    is_approved: bool = True
    is_public: bool | None = None
