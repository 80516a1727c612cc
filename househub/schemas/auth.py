"""Auth and user-management schemas."""
from datetime import datetime
from pydantic import BaseModel, EmailStr, Field, field_validator
from househub.schemas.common import reject_null
from househub.services.roles import Role, effective_role

PASSWORD_MIN_LENGTH = 8


def _check_password(v: str) -> str:
    if len(v or "") < PASSWORD_MIN_LENGTH:
        raise ValueError(f"Password must be at least {PASSWORD_MIN_LENGTH} characters")
    return v


class UserCreate(BaseModel):
    email: EmailStr
    password: str
    full_name: str | None = None
    phone: str | None = None

    @field_validator("password")
    @classmethod
    def password_long_enough(cls, v: str) -> str:
        return _check_password(v)


class UserLogin(BaseModel):
    email: EmailStr
    password: str


class UserResponse(BaseModel):
    id: int
    email: str
    role: str = Role.guest.value
    full_name: str | None = None
    phone: str | None = None
    address: str | None = None
    avatar_url: str | None = None
    show_in_contacts: bool = True
    created_at: datetime | None = None

    @field_validator("role", mode="before")
    @classmethod
    def computed_role(cls, v) -> str:
        return effective_role(v).value

    class Config:
        from_attributes = True


class Token(BaseModel):
    access_token: str
    token_type: str = "bearer"
    user: UserResponse


class ProfileUpdate(BaseModel):
    """Self-edit: everything except role."""
    full_name: str | None = None
    phone: str | None = None
    address: str | None = None
    avatar_url: str | None = None
    show_in_contacts: bool | None = None

    @field_validator("show_in_contacts")
    @classmethod
    def not_null(cls, v):
        return reject_null(v)


class AdminUserCreate(BaseModel):
    email: EmailStr
    password: str
    full_name: str | None = None
    phone: str | None = None
    role: Role = Role.guest

    @field_validator("password")
    @classmethod
    def password_long_enough(cls, v: str) -> str:
        return _check_password(v)


class UserUpdateData(BaseModel):
    email: EmailStr | None = None
    full_name: str | None = None
    phone: str | None = None
    address: str | None = None
    role: Role | None = None
    show_in_contacts: bool | None = None

    @field_validator("email", "show_in_contacts")
    @classmethod
    def not_null(cls, v):
        return reject_null(v)


class UserUpdateRequest(BaseModel):
    """Body of POST /api/users/update (camelCase keys kept for existing clients)."""
    user_id: int = Field(alias="userId")
    user_data: UserUpdateData = Field(alias="userData")

    model_config = {"populate_by_name": True}


class UserDeleteRequest(BaseModel):
    user_id: int = Field(alias="userId")

    model_config = {"populate_by_name": True}
