"""Role hierarchy and authorization predicates.

Two predicates coexist on purpose:

- `has_role` compares positions in the hierarchy ("at least this privileged").
- `has_any_role` checks literal membership in a set of roles.

Routes pick whichever matches the rule they enforce; they are not
interchangeable (a MANAGER passes `has_role(..., CHEF)` but fails
`has_any_role(..., [CHEF])`).
"""
from typing import Iterable, Optional
from uuid import UUID


class Role:
    """Role name constants."""

    ADMIN = "ADMIN"
    MANAGER = "MANAGER"
    CHEF = "CHEF"
    CUSTOMER = "CUSTOMER"


ROLES = [Role.ADMIN, Role.MANAGER, Role.CHEF, Role.CUSTOMER]

# Higher number = more permissions
ROLE_HIERARCHY = {
    Role.CUSTOMER: 1,
    Role.CHEF: 2,
    Role.MANAGER: 3,
    Role.ADMIN: 4,
}

ROLE_DISPLAY_NAMES = {
    Role.ADMIN: "Administrator",
    Role.MANAGER: "Manager",
    Role.CHEF: "Chef",
    Role.CUSTOMER: "Customer",
}

ROLE_PERMISSIONS = {
    Role.ADMIN: [
        "Full system access",
        "User management",
        "All inventory operations",
        "Recipe management",
        "Production management",
        "Order management",
        "Reports and analytics",
    ],
    Role.MANAGER: [
        "Inventory management",
        "Recipe management",
        "Production oversight",
        "Order management",
        "Reports viewing",
    ],
    Role.CHEF: [
        "Recipe creation and editing",
        "Production management",
        "Inventory viewing",
        "Order viewing",
    ],
    Role.CUSTOMER: [
        "View orders",
        "Basic dashboard access",
    ],
}


def is_valid_role(role: Optional[str]) -> bool:
    return role in ROLE_HIERARCHY


def has_role(user_role: Optional[str], required_role: str) -> bool:
    """True if user_role sits at or above required_role in the hierarchy."""
    if not is_valid_role(user_role):
        return False
    return ROLE_HIERARCHY[user_role] >= ROLE_HIERARCHY[required_role]


def has_any_role(user_role: Optional[str], roles: Iterable[str]) -> bool:
    """True if user_role is literally one of roles."""
    if not user_role:
        return False
    return user_role in roles


def get_role_display_name(role: Optional[str]) -> str:
    return ROLE_DISPLAY_NAMES.get(role, "Customer")


def get_role_permissions(role: Optional[str]) -> list[str]:
    return ROLE_PERMISSIONS.get(role, ["Basic access"])


def is_self_modification(acting_user_id: UUID, target_user_id: UUID) -> bool:
    """True when a user is trying to change their own account."""
    return str(acting_user_id) == str(target_user_id)
