"""Walkthrough manual schemas."""
from pydantic import BaseModel, field_validator
from househub.schemas.common import reject_null


class WalkthroughStepCreate(BaseModel):
    title: str
    body: str | None = None
    image_url: str | None = None
    order_index: int | None = None


class WalkthroughStepUpdate(BaseModel):
    title: str | None = None
    body: str | None = None
    image_url: str | None = None
    order_index: int | None = None

    @field_validator("title", "order_index")
    @classmethod
    def not_null(cls, v):
        return reject_null(v)


class WalkthroughStepResponse(BaseModel):
    id: int
    section_id: int
    title: str
    body: str | None
    image_url: str | None
    order_index: int

    class Config:
        from_attributes = True


class WalkthroughSectionCreate(BaseModel):
    property_id: int
    title: str
    description: str | None = None
    order_index: int | None = None


class WalkthroughSectionUpdate(BaseModel):
    title: str | None = None
    description: str | None = None
    order_index: int | None = None

    @field_validator("title", "order_index")
    @classmethod
    def not_null(cls, v):
        return reject_null(v)


class WalkthroughSectionResponse(BaseModel):
    id: int
    property_id: int
    title: str
    description: str | None
    order_index: int
    steps: list[WalkthroughStepResponse] = []

    class Config:
        from_attributes = True
