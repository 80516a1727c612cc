from househub.services.roles import (
    ROLE_LEVELS,
    Role,
    can_access_cleaning,
    can_approve_reservations,
    can_manage_users,
    effective_role,
    has_permission,
    parse_role,
    role_level,
)

ORDERED = ["guest", "friend", "family", "staff", "manager", "admin", "owner"]


def test_levels_strictly_increase():
    levels = [role_level(r) for r in ORDERED]
    assert levels == sorted(levels)
    assert len(set(levels)) == len(levels)


def test_role_always_has_its_own_permission():
    for role in Role:
        assert has_permission(role, role)
        assert has_permission(role.value, role.value)


def test_tenant_sits_with_friend():
    assert ROLE_LEVELS[Role.tenant] == ROLE_LEVELS[Role.friend]


def test_unknown_and_missing_roles_are_lowest():
    assert role_level("superuser") == 0
    assert role_level(None) == 0
    assert role_level("") == 0
    assert parse_role("superuser") is None
    assert not has_permission("superuser", "friend")


def test_parse_role_is_forgiving_about_case_and_whitespace():
    assert parse_role(" Admin ") == Role.admin


def test_effective_role_defaults_to_guest():
    assert effective_role(None) == Role.guest
    assert effective_role("bogus") == Role.guest
    assert effective_role("staff") == Role.staff


def test_capabilities():
    assert can_manage_users("admin") and not can_manage_users("manager")
    assert can_approve_reservations("manager") and not can_approve_reservations("staff")
    assert can_access_cleaning("staff") and not can_access_cleaning("family")
