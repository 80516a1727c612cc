"""Role hierarchy: role names, privilege levels and permission checks."""
from __future__ import annotations

import enum
import logging

log = logging.getLogger("uvicorn.error")


class Role(str, enum.Enum):
    owner = "owner"
    admin = "admin"
    manager = "manager"
    staff = "staff"
    family = "family"
    friend = "friend"
    tenant = "tenant"
    guest = "guest"


ROLE_LEVELS: dict[Role, int] = {
    Role.owner: 6,
    Role.admin: 5,
    Role.manager: 4,
    Role.staff: 3,
    Role.family: 2,
    Role.friend: 1,
    Role.tenant: 1,
    Role.guest: 0,
}

DEFAULT_ROLE = Role.guest


def parse_role(raw: str | Role | None) -> Role | None:
    """Validate a role value read from the store. Unknown values are logged and yield None."""
    if raw is None:
        return None
    if isinstance(raw, Role):
        return raw
    value = str(raw).strip().lower()
    if not value:
        return None
    try:
        return Role(value)
    except ValueError:
        log.warning("[Roles] Unknown role value %r; treating as lowest privilege", raw)
        return None


def role_level(role: str | Role | None) -> int:
    """Privilege level for a role; unknown or missing roles get the lowest level (0)."""
    parsed = parse_role(role)
    if parsed is None:
        return 0
    return ROLE_LEVELS[parsed]


def has_permission(user_role: str | Role | None, required_role: str | Role | None) -> bool:
    return role_level(user_role) >= role_level(required_role)


def effective_role(raw: str | Role | None) -> Role:
    """Role used for display and filtering: the parsed role, or guest when unset/unknown."""
    return parse_role(raw) or DEFAULT_ROLE


def can_manage_users(role: str | Role | None) -> bool:
    return has_permission(role, Role.admin)


def can_manage_property(role: str | Role | None) -> bool:
    return has_permission(role, Role.manager)


def can_approve_reservations(role: str | Role | None) -> bool:
    return has_permission(role, Role.manager)


def can_access_cleaning(role: str | Role | None) -> bool:
    return has_permission(role, Role.staff)
