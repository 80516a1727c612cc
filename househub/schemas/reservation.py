"""Reservation, companion and approval schemas."""
from datetime import date, datetime
from pydantic import BaseModel, Field, computed_field, field_validator
from househub.schemas.common import reject_null
from househub.services.reservations import reservation_nights

RELATIONSHIP_OPTIONS = ("spouse", "child", "parent", "sibling", "friend", "colleague", "other")
AGE_RANGE_OPTIONS = ("adult", "teen", "child", "infant")


class CompanionIn(BaseModel):
    name: str
    email: str | None = None
    phone: str | None = None
    relationship: str = "friend"
    age_range: str = "adult"
    invited_to_system: bool = False

    @field_validator("name")
    @classmethod
    def strip_name(cls, v: str) -> str:
        return (v or "").strip()

    @field_validator("email", "phone")
    @classmethod
    def blank_to_none(cls, v: str | None) -> str | None:
        v = (v or "").strip()
        return v or None

    @field_validator("relationship")
    @classmethod
    def known_relationship(cls, v: str) -> str:
        if v not in RELATIONSHIP_OPTIONS:
            raise ValueError(f"relationship must be one of {', '.join(RELATIONSHIP_OPTIONS)}")
        return v

    @field_validator("age_range")
    @classmethod
    def known_age_range(cls, v: str) -> str:
        if v not in AGE_RANGE_OPTIONS:
            raise ValueError(f"age_range must be one of {', '.join(AGE_RANGE_OPTIONS)}")
        return v


class CompanionResponse(BaseModel):
    id: int
    name: str
    email: str | None
    phone: str | None
    relationship: str
    age_range: str
    invited_to_system: bool
    invite_sent_at: datetime | None

    class Config:
        from_attributes = True


class ReservationCreate(BaseModel):
    property_id: int
    title: str
    description: str | None = None
    start_date: date
    end_date: date
    guests: int = Field(1, ge=1)
    companions: list[CompanionIn] = []


class ReservationUpdate(BaseModel):
    """All optional; companions, when given, replace the existing list."""
    title: str | None = None
    description: str | None = None
    start_date: date | None = None
    end_date: date | None = None
    guests: int | None = Field(None, ge=1)
    companions: list[CompanionIn] | None = None

    @field_validator("title", "start_date", "end_date", "guests")
    @classmethod
    def not_null(cls, v):
        return reject_null(v)


class ReservationResponse(BaseModel):
    id: int
    property_id: int
    user_id: int
    title: str
    description: str | None
    start_date: date
    end_date: date
    guests: int
    status: str
    companions: list[CompanionResponse] = []
    created_at: datetime | None = None

    @computed_field
    @property
    def nights(self) -> int:
        return reservation_nights(self.start_date, self.end_date)

    class Config:
        from_attributes = True


class ReservationSaved(BaseModel):
    reservation: ReservationResponse
    invitations_sent: int = 0
    message: str


class ApprovalDecision(BaseModel):
    notes: str | None = None


class ApprovalResponse(BaseModel):
    id: int
    reservation_id: int
    requested_by: int | None
    status: str
    requested_at: datetime | None
    reviewed_by: int | None
    reviewed_at: datetime | None
    notes: str | None

    class Config:
        from_attributes = True
