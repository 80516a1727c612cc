"""Inventory and staple schemas."""
from datetime import datetime
from typing import Literal
from pydantic import BaseModel, Field, field_validator
from househub.models.inventory import INVENTORY_CATEGORIES
from househub.schemas.common import reject_null


def _check_category(v: str | None) -> str | None:
    if v is not None and v not in INVENTORY_CATEGORIES:
        raise ValueError(f"category must be one of {', '.join(INVENTORY_CATEGORIES)}")
    return v


def _check_name(v: str | None) -> str | None:
    if v is None:
        return v
    v = v.strip()
    if not v:
        raise ValueError("Name is required")
    return v


class _NamedCategorized(BaseModel):
    @field_validator("name", check_fields=False)
    @classmethod
    def name_not_blank(cls, v: str | None) -> str | None:
        return _check_name(v)

    @field_validator("category", check_fields=False)
    @classmethod
    def known_category(cls, v: str | None) -> str | None:
        return _check_category(v)


class InventoryItemCreate(_NamedCategorized):
    property_id: int
    name: str
    category: str = "other"
    quantity: int = Field(0, ge=0)
    threshold: int = Field(1, ge=0)


class InventoryItemUpdate(_NamedCategorized):
    name: str | None = None
    category: str | None = None
    quantity: int | None = Field(None, ge=0)
    threshold: int | None = Field(None, ge=0)

    @field_validator("name", "category", "quantity", "threshold")
    @classmethod
    def not_null(cls, v):
        return reject_null(v)


class QuantityUpdate(BaseModel):
    quantity: int = Field(ge=0)


class InventoryItemResponse(BaseModel):
    id: int
    property_id: int
    name: str
    category: str
    quantity: int
    threshold: int
    user_id: int | None
    last_updated_by: int | None
    updated_at: datetime | None = None

    class Config:
        from_attributes = True


class StapleResponse(BaseModel):
    id: int
    name: str
    category: str
    default_threshold: int
    source_table: str
    display_order: int | None = None

    class Config:
        from_attributes = True


class CustomStapleCreate(_NamedCategorized):
    property_id: int
    name: str
    category: str = "staples"
    default_threshold: int = Field(1, ge=0)


class CustomStapleUpdate(_NamedCategorized):
    name: str | None = None
    category: str | None = None
    default_threshold: int | None = Field(None, ge=0)

    @field_validator("name", "category", "default_threshold")
    @classmethod
    def not_null(cls, v):
        return reject_null(v)


class QuickAddStaple(BaseModel):
    property_id: int
    staple_id: int
    source_table: Literal["default_staples", "custom_staples"] = "default_staples"
