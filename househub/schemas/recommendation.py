"""Recommendation schemas."""
from datetime import datetime
from pydantic import BaseModel, Field, field_validator
from househub.models.recommendation import RECOMMENDATION_CATEGORIES
from househub.schemas.common import reject_null


def _check_category(v: str | None) -> str | None:
    if v is not None and v not in RECOMMENDATION_CATEGORIES:
        raise ValueError(f"category must be one of {', '.join(RECOMMENDATION_CATEGORIES)}")
    return v


class RecommendationCreate(BaseModel):
    property_id: int
    name: str
    category: str = "other"
    address: str | None = None
    description: str | None = None
    website: str | None = None
    phone_number: str | None = None
    rating: float | None = Field(None, ge=0, le=5)
    images: list[str] = []
    is_recommended: bool = True

    @field_validator("category")
    @classmethod
    def known_category(cls, v: str) -> str:
        return _check_category(v)


class RecommendationUpdate(BaseModel):
    name: str | None = None
    category: str | None = None
    address: str | None = None
    description: str | None = None
    website: str | None = None
    phone_number: str | None = None
    rating: float | None = Field(None, ge=0, le=5)
    images: list[str] | None = None
    is_recommended: bool | None = None

    @field_validator("name", "category", "is_recommended")
    @classmethod
    def not_null(cls, v):
        return reject_null(v)

    @field_validator("category")
    @classmethod
    def known_category(cls, v: str | None) -> str | None:
        return _check_category(v)


class RecommendationResponse(BaseModel):
    id: int
    property_id: int
    name: str
    category: str
    address: str | None
    description: str | None
    website: str | None
    phone_number: str | None
    rating: float | None
    images: list[str] = []
    is_recommended: bool
    created_by: int | None
    created_at: datetime | None = None

    @field_validator("images", mode="before")
    @classmethod
    def coerce_images(cls, v) -> list[str]:
        return list(v or [])

    class Config:
        from_attributes = True
