"""Authentication provider factory.

Creates the configured provider and holds the process-wide instance used by
the FastAPI dependencies.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from shopadmin.auth.permissions import Role
from shopadmin.auth.providers.exceptions import ConfigurationError
from shopadmin.auth.providers.header import HeaderAuthProvider
from shopadmin.auth.providers.local_jwt import LocalJWTAuthProvider
from shopadmin.auth.providers.models import AuthResult
from shopadmin.core.config import AuthMode, get_settings
from shopadmin.observability.logging import get_logger


if TYPE_CHECKING:
    from shopadmin.auth.providers.protocol import AuthProvider
    from shopadmin.core.config import Settings

logger = get_logger(__name__)

# Fixed development secret - safe for local dev, blocked in production
_DEV_JWT_SECRET = "insecure-dev-key-do-not-use-in-production"  # noqa: S105


def _get_jwt_secret(settings: Settings) -> str:
    """Get JWT secret, validating it's set in production.

    Raises:
        ConfigurationError: If secret is not set in production.
    """
    if settings.JWT_SECRET_KEY:
        return settings.JWT_SECRET_KEY

    if settings.is_production:
        msg = "JWT_SECRET_KEY must be set in production for local_jwt auth mode"
        raise ConfigurationError(msg)

    logger.warning("Using insecure development JWT secret - do not use in production")
    return _DEV_JWT_SECRET


# Provider state container (avoids global statement for mutation)
_state: dict[str, AuthProvider | None] = {"provider": None}


class DisabledAuthProvider:
    """Auth provider that lets every request through as an administrator.

    WARNING: This provider bypasses authentication and authorization. Only
    use it for tests and isolated internal deployments.
    """

    @property
    def provider_name(self) -> str:
        return "disabled"

    async def validate_token(
        self,
        _token: str,
        _request: object = None,
    ) -> AuthResult:
        return AuthResult(
            user_id="anonymous",
            roles=[Role.ADMIN.value],
            token_type="none",  # noqa: S106 - not a password
            raw_claims={"auth_disabled": True},
        )

    async def initialize(self) -> None:
        logger.warning(
            "DisabledAuthProvider initialized - authentication is disabled! "
            "Ensure this is intentional and not a production deployment."
        )

    async def shutdown(self) -> None:
        pass


def create_auth_provider(settings: Settings | None = None) -> AuthProvider:
    """Create an authentication provider based on ``auth.mode``.

    Raises:
        ConfigurationError: If the mode is unknown or disabled in production.
    """
    if settings is None:
        settings = get_settings()

    try:
        mode = settings.auth_mode_enum
    except ValueError as e:
        raise ConfigurationError(str(e)) from e

    logger.info("Creating auth provider", mode=mode.value)

    if mode == AuthMode.DISABLED:
        if settings.is_production:
            msg = "Authentication cannot be disabled in production"
            raise ConfigurationError(msg)
        return DisabledAuthProvider()

    if mode == AuthMode.HEADER:
        return HeaderAuthProvider(
            user_id_header=settings.auth.headers.user_id,
            roles_header=settings.auth.headers.roles,
            permissions_header=settings.auth.headers.permissions,
        )

    return LocalJWTAuthProvider(
        secret_key=_get_jwt_secret(settings),
        algorithm=settings.auth.jwt.algorithm,
        issuer=settings.auth.jwt_validation.issuer,
        audience=settings.auth.jwt_validation.audience or None,
    )


def get_auth_provider() -> AuthProvider:
    """Get the global auth provider instance.

    Raises:
        RuntimeError: If the provider has not been initialized.
    """
    provider = _state["provider"]
    if provider is None:
        msg = "Auth provider not initialized. Call initialize_auth_provider() first."
        raise RuntimeError(msg)
    return provider


def set_auth_provider(provider: AuthProvider | None) -> None:
    """Set (or clear, with None) the global auth provider instance."""
    _state["provider"] = provider
    if provider is not None:
        logger.info("Auth provider set", provider=provider.provider_name)


async def initialize_auth_provider(settings: Settings | None = None) -> AuthProvider:
    """Create, initialize, and set the auth provider."""
    provider = create_auth_provider(settings)
    await provider.initialize()
    set_auth_provider(provider)
    return provider


async def shutdown_auth_provider() -> None:
    """Shutdown the global auth provider and clear it."""
    provider = _state["provider"]
    if provider is not None:
        await provider.shutdown()
        _state["provider"] = None
        logger.info("Auth provider shutdown complete")
