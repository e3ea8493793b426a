"""Verified token claims model."""

from typing import Any

from pydantic import BaseModel, Field


class TokenClaims(BaseModel):
    """Claims extracted from a verified access token."""

    raw_token: str = Field(description="The original encoded token")
    uid: str = Field(description="Stable user identifier derived from the claims")
    issuer: str = Field(description="Token issuer (iss)")
    subject: str = Field(description="Token subject (sub)")
    audience: str | list[str] = Field(default_factory=list, description="Token audience (aud)")
    expires_at: int = Field(description="Expiration timestamp (exp)")
    issued_at: int = Field(description="Issued-at timestamp (iat)")
    not_before: int | None = Field(default=None, description="Not-before timestamp (nbf)")
    jti: str | None = Field(default=None, description="Unique token identifier")
    scopes: list[str] = Field(default_factory=list, description="Granted scopes")
    roles: list[str] = Field(default_factory=list, description="Granted roles")
    email: str | None = Field(default=None, description="Email address")
    name: str | None = Field(default=None, description="Display name")
    custom_claims: dict[str, Any] = Field(
        default_factory=dict, description="Claims not mapped to a dedicated field"
    )

    def has_role(self, role: str) -> bool:
        return role in self.roles
