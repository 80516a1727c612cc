"""Shared dependencies: DB session, current user, role gates."""
from typing import Callable

from fastapi import Depends, HTTPException
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from sqlalchemy.orm import Session
from househub.database import get_db
from househub.models.user import User
from househub.models.property import Property
from househub.services.auth import decode_token_with_error
from househub.services.roles import can_access_cleaning, can_manage_property, can_manage_users

security = HTTPBearer(auto_error=False)


def get_current_user(
    db: Session = Depends(get_db),
    credentials: HTTPAuthorizationCredentials | None = Depends(security),
) -> User:
    if not credentials:
        raise HTTPException(status_code=401, detail="Not authenticated")
    payload, _ = decode_token_with_error((credentials.credentials or "").strip())
    if not payload:
        raise HTTPException(status_code=401, detail="Invalid or expired token")
    try:
        user_id = int(payload.get("sub"))
    except (TypeError, ValueError):
        raise HTTPException(status_code=401, detail="Invalid token")
    user = db.query(User).filter(User.id == user_id).first()
    if not user:
        raise HTTPException(status_code=401, detail="User not found")
    return user


def require_capability(allowed: Callable[[str | None], bool], detail: str):
    """Dependency factory: current user's role must pass `allowed` (a services.roles capability check)."""

    def _check(current_user: User = Depends(get_current_user)) -> User:
        if not allowed(current_user.role):
            raise HTTPException(status_code=403, detail=detail)
        return current_user

    return _check


require_cleaning_access = require_capability(can_access_cleaning, "Staff role or higher required")
require_manager = require_capability(can_manage_property, "Manager role or higher required")
require_admin = require_capability(can_manage_users, "Admin role or higher required")


def get_property_or_404(db: Session, property_id: int) -> Property:
    prop = db.query(Property).filter(Property.id == property_id).first()
    if not prop:
        raise HTTPException(status_code=404, detail="Property not found")
    return prop
