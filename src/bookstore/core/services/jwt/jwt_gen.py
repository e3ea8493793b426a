import time
from typing import Any

from authlib.common.security import generate_token
from authlib.jose import JoseError, jwt
from loguru import logger

from src.bookstore.runtime.config.config_data import ConfigData
from src.bookstore.runtime.context import get_config


class JwtGenerationError(RuntimeError):
    """Raised when a token cannot be produced from the current configuration."""


class JwtGeneratorService:
    """Service for generating JWT tokens for API authentication."""

    def __init__(self, config: ConfigData | None = None):
        self._config = config or get_config()

    def generate_jwt(
        self,
        subject: str,
        claims: dict[str, Any] | None = None,
        expires_in_seconds: int = 3600,
        valid_after_seconds: int = 0,
        issuer: str | None = None,
        audience: str | list[str] | None = None,
        algorithm: str = "HS256",
        include_jti: bool = True,
        secret: str | None = None,
    ) -> str:
        """Generate a signed JWT token for API authentication using authlib.

        Args:
            subject: Subject (sub) claim - typically user ID
            claims: Additional claims to include in the token
            expires_in_seconds: Token lifetime in seconds (default: 1 hour)
            valid_after_seconds: Time in seconds before the token is valid (default: 0)
            issuer: Issuer (iss) claim (defaults to config issuer)
            audience: Audience (aud) claim (defaults to config audiences)
            algorithm: Signing algorithm (default: HS256)
            include_jti: Whether to include a unique JWT ID claim (default: True)
            secret: Optional secret key for signing. If None, will use config secret.

        Returns:
            Signed JWT token string

        Raises:
            JwtGenerationError: If configuration is missing or invalid
        """
        config = self._config

        issuer = issuer or config.jwt.issuer
        secret = secret or config.app.jwt_signing_secret
        if not secret:
            raise JwtGenerationError("JWT signing secret not configured")

        if algorithm not in config.jwt.allowed_algorithms:
            logger.debug(
                f"Attempted to use disallowed algorithm: {algorithm}, only {config.jwt.allowed_algorithms} are allowed"
            )
            raise JwtGenerationError(f"Algorithm {algorithm} not allowed")

        now = int(time.time())
        aud = audience or config.jwt.audiences

        payload = {
            "iss": issuer,
            "sub": subject,
            "aud": aud,
            "exp": now + expires_in_seconds,
            "iat": now,
            "nbf": now + valid_after_seconds,
        }

        if include_jti:
            payload["jti"] = generate_token(16)

        # Custom claims never override the registered ones
        if claims:
            payload.update(
                {
                    k: v
                    for k, v in claims.items()
                    if k not in {"iss", "sub", "aud", "exp", "iat", "nbf", "jti"}
                }
            )

        try:
            header = {"alg": algorithm, "typ": "JWT"}
            token = jwt.encode(header, payload, secret)
        except JoseError as e:
            raise JwtGenerationError(f"JWT encoding failed: {e}") from e

        # authlib returns bytes, decode to string
        return token.decode() if isinstance(token, bytes) else token

    def generate_access_token(
        self,
        user_id: str,
        scopes: list[str] | None = None,
        roles: list[str] | None = None,
        expires_in_seconds: int = 3600,
        **extra_claims,
    ) -> str:
        """Generate an access token JWT for API authentication.

        Example:
            token = generate_access_token(
                user_id="admin@bookstore.com",
                roles=["Administrator"],
                email="admin@bookstore.com",
            )
        """
        claims: dict[str, Any] = {}

        if scopes:
            claims["scope"] = " ".join(scopes)

        if roles:
            claims["roles"] = roles

        claims.update(extra_claims)

        return self.generate_jwt(
            subject=user_id,
            claims=claims,
            expires_in_seconds=expires_in_seconds,
        )
