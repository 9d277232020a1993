"""Local JWT authentication provider.

Validates JWTs issued by the platform's auth service using a shared secret,
without calling any external service.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from jose import jwt
from jose.exceptions import ExpiredSignatureError, JWTClaimsError, JWTError

from shopadmin.auth.providers.exceptions import (
    ConfigurationError,
    TokenExpiredError,
    TokenInvalidError,
)
from shopadmin.auth.providers.models import AuthResult
from shopadmin.observability.logging import get_logger


if TYPE_CHECKING:
    from starlette.requests import Request

logger = get_logger(__name__)

_ACCEPTED_TOKEN_TYPES = ("access", "api_key")


class LocalJWTAuthProvider:
    """Validates JWTs locally using the configured secret key.

    Attributes:
        secret_key: The secret key for HS256 or public key for RS256.
        algorithm: JWT signing algorithm (default: HS256).
        issuer: Expected 'iss' claim value (optional).
        audience: Expected 'aud' claim values (optional).
    """

    def __init__(
        self,
        secret_key: str,
        algorithm: str = "HS256",
        issuer: str | None = None,
        audience: list[str] | None = None,
    ) -> None:
        self.secret_key = secret_key
        self.algorithm = algorithm
        self.issuer = issuer
        self.audience = audience or None

    @property
    def provider_name(self) -> str:
        """Return provider name for logging."""
        return "local_jwt"

    async def validate_token(
        self,
        token: str,
        _request: Request | None = None,
    ) -> AuthResult:
        """Validate JWT locally and return authentication result.

        Raises:
            TokenExpiredError: If the token has expired.
            TokenInvalidError: If the token is malformed or signature fails.
        """
        if not token:
            msg = "Missing bearer token"
            raise TokenInvalidError(msg)

        decode_kwargs: dict[str, Any] = {"algorithms": [self.algorithm]}
        if self.issuer:
            decode_kwargs["issuer"] = self.issuer
        if self.audience:
            decode_kwargs["audience"] = self.audience
        else:
            decode_kwargs["options"] = {"verify_aud": False}

        try:
            payload = jwt.decode(token, self.secret_key, **decode_kwargs)
        except ExpiredSignatureError as e:
            logger.debug("Token expired during local validation")
            msg = "Token has expired"
            raise TokenExpiredError(msg) from e
        except JWTClaimsError as e:
            logger.warning("JWT claims validation failed", error=str(e))
            raise TokenInvalidError(str(e)) from e
        except JWTError as e:
            logger.warning("JWT validation failed", error=str(e))
            msg = "Invalid token"
            raise TokenInvalidError(msg) from e

        token_type = payload.get("type", "access")
        if token_type not in _ACCEPTED_TOKEN_TYPES:
            msg = f"Invalid token type: {token_type}. Expected 'access'."
            raise TokenInvalidError(msg)

        user_id = payload.get("sub")
        if not user_id:
            msg = "Token missing 'sub' claim"
            raise TokenInvalidError(msg)

        return AuthResult(
            user_id=user_id,
            roles=payload.get("roles", []),
            permissions=payload.get("permissions", []),
            token_type=token_type,
            issuer=payload.get("iss"),
            expires_at=payload.get("exp"),
            raw_claims=payload,
        )

    async def initialize(self) -> None:
        """Check that a secret key is configured."""
        if not self.secret_key:
            msg = "JWT secret key is not configured"
            raise ConfigurationError(msg)

        logger.info(
            "LocalJWTAuthProvider initialized",
            algorithm=self.algorithm,
            issuer_validation=self.issuer is not None,
            audience_validation=self.audience is not None,
        )

    async def shutdown(self) -> None:
        logger.debug("LocalJWTAuthProvider shutdown")
