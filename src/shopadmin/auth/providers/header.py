"""Header-based authentication provider.

Reads the caller identity from request headers. Use this ONLY for local
development or behind a trusted gateway that has already authenticated the
user; header values are trusted completely.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from shopadmin.auth.providers.exceptions import AuthenticationError
from shopadmin.auth.providers.models import AuthResult
from shopadmin.observability.logging import get_logger


if TYPE_CHECKING:
    from starlette.requests import Request

logger = get_logger(__name__)


def _split_header(value: str) -> list[str]:
    return [item.strip() for item in value.split(",") if item.strip()]


class HeaderAuthProvider:
    """Extracts user id, roles and permissions from configurable headers.

    If the user id header is missing, authentication fails. Roles and
    permissions are comma-separated lists.
    """

    def __init__(
        self,
        user_id_header: str = "X-User-ID",
        roles_header: str = "X-User-Roles",
        permissions_header: str = "X-User-Permissions",
    ) -> None:
        self.user_id_header = user_id_header
        self.roles_header = roles_header
        self.permissions_header = permissions_header

    @property
    def provider_name(self) -> str:
        """Return provider name for logging."""
        return "header"

    async def validate_token(
        self,
        _token: str,
        request: Request | None = None,
    ) -> AuthResult:
        """Build an ``AuthResult`` from request headers; the token is ignored.

        Raises:
            AuthenticationError: If request is None or user ID header is missing.
        """
        if request is None:
            msg = "HeaderAuthProvider requires request object for header access"
            raise AuthenticationError(msg)

        user_id = request.headers.get(self.user_id_header)
        if not user_id:
            msg = f"Missing required header: {self.user_id_header}"
            raise AuthenticationError(msg)

        roles = _split_header(request.headers.get(self.roles_header, ""))
        permissions = _split_header(request.headers.get(self.permissions_header, ""))

        logger.debug(
            "Authenticated via headers",
            user_id=user_id,
            roles=roles,
            permissions_count=len(permissions),
        )

        return AuthResult(
            user_id=user_id,
            roles=roles,
            permissions=permissions,
            token_type="header",  # noqa: S106 - not a password
            raw_claims={"source": "headers"},
        )

    async def initialize(self) -> None:
        logger.warning(
            "HeaderAuthProvider is enabled - ensure this is only used in "
            "development/testing or behind a trusted gateway",
            user_id_header=self.user_id_header,
        )

    async def shutdown(self) -> None:
        logger.debug("HeaderAuthProvider shutdown")
