"""Pluggable authentication providers.

Available providers:
- LocalJWTAuthProvider: Validates JWTs locally
- HeaderAuthProvider: Extracts user from headers (development only)
- DisabledAuthProvider: Allows all requests (testing only)
"""

from shopadmin.auth.providers.exceptions import (
    AuthenticationError,
    AuthProviderError,
    ConfigurationError,
    TokenExpiredError,
    TokenInvalidError,
)
from shopadmin.auth.providers.factory import (
    DisabledAuthProvider,
    create_auth_provider,
    get_auth_provider,
    initialize_auth_provider,
    set_auth_provider,
    shutdown_auth_provider,
)
from shopadmin.auth.providers.header import HeaderAuthProvider
from shopadmin.auth.providers.local_jwt import LocalJWTAuthProvider
from shopadmin.auth.providers.models import AuthResult
from shopadmin.auth.providers.protocol import AuthProvider


__all__ = [
    "AuthProvider",
    "AuthProviderError",
    "AuthResult",
    "AuthenticationError",
    "ConfigurationError",
    "DisabledAuthProvider",
    "HeaderAuthProvider",
    "LocalJWTAuthProvider",
    "TokenExpiredError",
    "TokenInvalidError",
    "create_auth_provider",
    "get_auth_provider",
    "initialize_auth_provider",
    "set_auth_provider",
    "shutdown_auth_provider",
]
