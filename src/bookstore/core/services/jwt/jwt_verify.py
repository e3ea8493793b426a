"""JWT verification service."""

import time

from authlib.jose import JoseError, jwt
from fastapi import HTTPException
from loguru import logger

from src.bookstore.core.models.claims import TokenClaims
from src.bookstore.core.services.jwt.jwt_utils import (
    JwtPreview,
    create_token_claims,
    preview_jwt,
)
from src.bookstore.runtime.config.config_data import ConfigData
from src.bookstore.runtime.context import get_config


def _as_list(v):
    return [v] if isinstance(v, str) else list(v or ())


class JwtVerificationService:
    """Verifies bearer tokens signed with the API's shared HMAC secret."""

    def __init__(self, config: ConfigData | None = None):
        self._config = config or get_config()

    def verify_jwt(
        self,
        token: str,
        *,
        key: str | None = None,
        expected_audience: list[str] | str | None = None,
        expected_issuer: str | None = None,
        preview: JwtPreview | None = None,
    ) -> TokenClaims:
        cfg = self._config
        pv = preview or preview_jwt(token)

        # alg allowlist
        if pv.alg not in cfg.jwt.allowed_algorithms:
            raise HTTPException(status_code=401, detail="Disallowed JWT algorithm")

        if not pv.iss:
            raise HTTPException(status_code=401, detail="Missing iss claim")

        issuer = (expected_issuer or cfg.jwt.issuer).rstrip("/")
        if pv.iss != issuer:
            raise HTTPException(status_code=401, detail="Invalid issuer")

        verification_key = key or cfg.app.jwt_signing_secret
        if not verification_key:
            raise HTTPException(status_code=500, detail="JWT signing secret not configured")

        aud_values = _as_list(expected_audience or cfg.jwt.audiences)
        if not aud_values:
            raise HTTPException(status_code=401, detail="No expected audience configured")

        claims_options = {
            "iss": {"essential": True, "values": [issuer]},
            "aud": {"essential": True, "values": aud_values},
            "exp": {"essential": True},
        }

        # verify signature + registered claims
        try:
            logger.debug(
                f"Verifying JWT from issuer {issuer} with expected audience {aud_values}"
            )
            claims = jwt.decode(token, verification_key, claims_options=claims_options)
            claims.validate(leeway=cfg.jwt.clock_skew)
        except (JoseError, ValueError) as exc:
            logger.warning("JWT rejected: {}", exc)
            raise HTTPException(status_code=401, detail="Invalid token") from exc

        # extra temporal sanity
        now = int(time.time())
        for k, check in (
            ("exp", lambda v: now > int(v) + cfg.jwt.clock_skew),
            ("nbf", lambda v: now < int(v) - cfg.jwt.clock_skew),
            ("iat", lambda v: int(v) > now + cfg.jwt.clock_skew),
        ):
            v = claims.get(k)
            if v is not None and check(v):
                raise HTTPException(status_code=401, detail=f"Invalid {k} with skew")

        if not claims.get("sub"):
            raise HTTPException(status_code=401, detail="Missing sub claim")

        return create_token_claims(
            token=token, claims=dict(claims), uid_claim=cfg.jwt.claims.user_id
        )
