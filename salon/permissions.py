"""Roles and permission kinds.

Admins hold every permission. Professional accounts hold the permissions
granted to them by their admin, chosen from ``GRANTABLE_PERMISSIONS``.
"""

from enum import Enum


class Role(str, Enum):
    ADMIN = "admin"
    PROFESSIONAL = "professional"


class Permission(str, Enum):
    VIEW_APPOINTMENTS = "view_appointments"
    MANAGE_APPOINTMENTS = "manage_appointments"
    VIEW_CLIENTS = "view_clients"
    MANAGE_CLIENTS = "manage_clients"
    VIEW_SERVICES = "view_services"
    MANAGE_SERVICES = "manage_services"
    VIEW_FINANCIAL = "view_financial"
    MANAGE_FINANCIAL = "manage_financial"
    MANAGE_PROFESSIONALS = "manage_professionals"


# Permissions an admin may grant to a professional account
GRANTABLE_PERMISSIONS = frozenset(p for p in Permission if p is not Permission.MANAGE_PROFESSIONALS)

# Granted when a professional first receives system access
DEFAULT_PROFESSIONAL_PERMISSIONS = frozenset(
    {
        Permission.VIEW_APPOINTMENTS,
        Permission.VIEW_CLIENTS,
        Permission.VIEW_SERVICES,
    }
)

ROLE_PERMISSIONS: dict[Role, frozenset[Permission]] = {
    Role.ADMIN: frozenset(Permission),
    # Upper bound; the effective set is whatever the admin granted
    Role.PROFESSIONAL: GRANTABLE_PERMISSIONS,
}


def effective_permissions(role: Role, granted: set[Permission]) -> frozenset[Permission]:
    """Permissions a user actually holds."""
    if role is Role.ADMIN:
        return ROLE_PERMISSIONS[Role.ADMIN]
    return frozenset(granted) & ROLE_PERMISSIONS[role]


def parse_permissions(values) -> set[Permission]:
    """Convert stored permission strings, skipping ones no longer defined."""
    result = set()
    for value in values:
        try:
            result.add(Permission(value))
        except ValueError:
            continue
    return result


def permission_map(held: frozenset[Permission]) -> dict[str, bool]:
    return {p.value: p in held for p in Permission}
