"""Role-Based Access Control (RBAC) for back-office operations.

Permissions are granular actions, roles are named collections of permissions.
"""

from __future__ import annotations

from enum import StrEnum


class Permission(StrEnum):
    """Back-office permissions.

    Permissions follow the pattern: area.resource.action
    """

    MAINTENANCE_READ = "system.maintenance.read"
    MAINTENANCE_EXECUTE = "system.maintenance.execute"


class Role(StrEnum):
    """Back-office roles."""

    # Full access
    ADMIN = "admin"

    # Can inspect system state but not change it
    SUPPORT = "support"

    # Service account for automation (deploy hooks, schedulers)
    SERVICE = "service"


ROLE_PERMISSIONS: dict[Role, set[Permission]] = {
    Role.ADMIN: {*Permission},
    Role.SUPPORT: {Permission.MAINTENANCE_READ},
    Role.SERVICE: {Permission.MAINTENANCE_READ, Permission.MAINTENANCE_EXECUTE},
}


def get_permissions_for_role(role: Role | str) -> set[Permission]:
    """Get all permissions associated with a role.

    Unknown role names grant nothing.
    """
    if isinstance(role, str):
        try:
            role = Role(role)
        except ValueError:
            return set()

    return ROLE_PERMISSIONS.get(role, set())


def get_permissions_for_roles(roles: list[Role | str]) -> set[Permission]:
    """Get the union of permissions for a list of roles."""
    permissions: set[Permission] = set()
    for role in roles:
        permissions.update(get_permissions_for_role(role))
    return permissions


def has_permission(
    user_roles: list[str],
    user_permissions: list[str],
    required_permission: Permission | str,
) -> bool:
    """Check if a user holds a permission, directly or through a role.

    Args:
        user_roles: List of user's roles.
        user_permissions: List of user's direct permissions.
        required_permission: The permission to check.

    Returns:
        True if user has the permission, False otherwise.
    """
    required = str(required_permission)

    if required in user_permissions:
        return True

    return required in {str(p) for p in get_permissions_for_roles(user_roles)}


def has_any_permission(
    user_roles: list[str],
    user_permissions: list[str],
    required_permissions: list[Permission | str],
) -> bool:
    """Check if a user holds at least one of the permissions."""
    return any(
        has_permission(user_roles, user_permissions, perm)
        for perm in required_permissions
    )
