"""FastAPI security dependencies.

Reusable dependencies for authentication and authorization in route
handlers. Token validation is delegated to the configured auth provider.
"""

from __future__ import annotations

from typing import Annotated, Final

from fastapi import Depends, HTTPException, Request, status
from fastapi.security import OAuth2PasswordBearer
from pydantic import BaseModel

from shopadmin.auth.permissions import (
    Permission,
    has_any_permission,
    has_permission,
)
from shopadmin.auth.providers import (
    AuthenticationError,
    AuthResult,
    TokenExpiredError,
    TokenInvalidError,
    get_auth_provider,
)
from shopadmin.observability.logging import bind_context, get_logger


logger = get_logger(__name__)

DEFAULT_JWT_TYPE: Final[str] = "access"

# Token extraction only. Header and disabled modes run without a bearer token,
# so a missing token is left to the provider to reject.
oauth2_scheme = OAuth2PasswordBearer(
    tokenUrl="/oauth/token",
    scheme_name="JWT",
    description="JWT Bearer token authentication",
    auto_error=False,
)


class CurrentUser(BaseModel):
    """The authenticated caller."""

    id: str
    roles: list[str] = []
    permissions: list[str] = []
    token_type: str = DEFAULT_JWT_TYPE

    @classmethod
    def from_auth_result(cls, result: AuthResult) -> CurrentUser:
        """Create CurrentUser from AuthResult."""
        return cls(
            id=result.user_id,
            roles=result.roles,
            permissions=result.permissions,
            token_type=result.token_type,
        )

    def has_permission(self, permission: Permission | str) -> bool:
        """Check if user has a specific permission."""
        return has_permission(self.roles, self.permissions, permission)


async def get_auth_result(
    request: Request,
    token: Annotated[str | None, Depends(oauth2_scheme)],
) -> AuthResult:
    """Validate the request using the configured auth provider.

    Raises:
        HTTPException: 401 if authentication fails.
    """
    try:
        provider = get_auth_provider()
        return await provider.validate_token(token or "", request)

    except TokenExpiredError:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Token has expired",
            headers={"WWW-Authenticate": "Bearer"},
        ) from None

    except TokenInvalidError as e:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=str(e) or "Invalid token",
            headers={"WWW-Authenticate": "Bearer"},
        ) from None

    except AuthenticationError as e:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=str(e) or "Authentication failed",
            headers={"WWW-Authenticate": "Bearer"},
        ) from None


async def get_current_user(
    auth_result: Annotated[AuthResult, Depends(get_auth_result)],
) -> CurrentUser:
    """Get the current authenticated user and tag the log context with it."""
    user = CurrentUser.from_auth_result(auth_result)
    bind_context(user_id=user.id)
    return user


class RequirePermissions:
    """Dependency class for requiring specific permissions.

    The check runs before the route handler, so a rejected request never
    reaches the maintenance action.

    Usage:
        @router.post("/clear-cache")
        async def clear_cache(
            user: Annotated[
                CurrentUser,
                Depends(RequirePermissions(Permission.MAINTENANCE_EXECUTE)),
            ],
        ):
            ...
    """

    def __init__(
        self,
        *permissions: Permission | str,
        require_all: bool = False,
    ) -> None:
        self.permissions = list(permissions)
        self.require_all = require_all

    async def __call__(
        self,
        user: Annotated[CurrentUser, Depends(get_current_user)],
    ) -> CurrentUser:
        """Return the user if authorized.

        Raises:
            HTTPException: 403 if user lacks required permissions.
        """
        if self.require_all:
            has_perms = all(user.has_permission(p) for p in self.permissions)
        else:
            has_perms = has_any_permission(
                user.roles, user.permissions, self.permissions
            )

        if not has_perms:
            logger.warning(
                "Permission denied",
                user_id=user.id,
                required=[str(p) for p in self.permissions],
            )
            raise HTTPException(
                status_code=status.HTTP_403_FORBIDDEN,
                detail="Insufficient permissions",
            )

        return user
