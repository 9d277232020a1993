"""Authentication provider models."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field


class AuthResult(BaseModel):
    """Identity established by an auth provider.

    The same shape is produced by every provider so the rest of the
    application does not care how the caller was authenticated.
    """

    user_id: str = Field(..., description="User identifier")
    roles: list[str] = Field(default_factory=list, description="User roles")
    permissions: list[str] = Field(default_factory=list, description="User permissions")
    token_type: str = Field(default="access", description="Type of validated credential")
    issuer: str | None = Field(default=None, description="Token issuer")
    expires_at: int | None = Field(default=None, description="Expiration timestamp")
    raw_claims: dict[str, Any] = Field(
        default_factory=dict,
        description="Original claims, for auditing",
    )

    model_config = {"frozen": True}
