"""Authentication and authorization.

This module provides:
- Role-based access control (RBAC) for maintenance operations
- Pluggable auth providers (local JWT, trusted headers, disabled)
- FastAPI security dependencies
"""

from shopadmin.auth.permissions import Permission, Role
from shopadmin.auth.dependencies import CurrentUser, RequirePermissions, get_current_user


__all__ = [
    "CurrentUser",
    "Permission",
    "RequirePermissions",
    "Role",
    "get_current_user",
]
