"""Authentication provider protocol definition."""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable


if TYPE_CHECKING:
    from starlette.requests import Request

    from shopadmin.auth.providers.models import AuthResult


@runtime_checkable
class AuthProvider(Protocol):
    """Interface every authentication provider implements.

    Providers validate a bearer token (or request headers) and return an
    ``AuthResult``; they may hold resources opened in ``initialize`` and
    released in ``shutdown``.
    """

    @property
    def provider_name(self) -> str:
        """Short provider name for logging, e.g. 'local_jwt'."""
        ...

    async def validate_token(
        self,
        token: str,
        request: Request | None = None,
    ) -> AuthResult:
        """Validate a token and return the authenticated identity.

        Raises:
            TokenExpiredError: If the token has expired.
            TokenInvalidError: If the token is malformed or signature fails.
            AuthenticationError: For other authentication failures.
        """
        ...

    async def initialize(self) -> None:
        """Prepare the provider during application startup."""
        ...

    async def shutdown(self) -> None:
        """Release provider resources during application shutdown."""
        ...
