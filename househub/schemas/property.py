"""Property schemas."""
from datetime import datetime
from pydantic import BaseModel, field_validator
from househub.schemas.common import reject_null


class PropertyCreate(BaseModel):
    name: str
    address: str | None = None
    description: str | None = None
    header_image_url: str | None = None
    amenities: list[str] = []

    @field_validator("name")
    @classmethod
    def name_required(cls, v: str) -> str:
        v = (v or "").strip()
        if not v:
            raise ValueError("Property name is required")
        return v


class PropertyUpdate(BaseModel):
    """All optional; only provided fields are updated."""
    name: str | None = None
    address: str | None = None
    description: str | None = None
    header_image_url: str | None = None
    amenities: list[str] | None = None

    @field_validator("name")
    @classmethod
    def not_null(cls, v):
        return reject_null(v)


class PropertyResponse(BaseModel):
    id: int
    name: str
    address: str | None
    description: str | None
    header_image_url: str | None
    amenities: list[str] = []
    created_by: int | None
    created_at: datetime | None = None

    @field_validator("amenities", mode="before")
    @classmethod
    def coerce_amenities(cls, v) -> list[str]:
        return list(v or [])

    class Config:
        from_attributes = True
