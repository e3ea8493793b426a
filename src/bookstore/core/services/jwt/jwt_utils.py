import base64
import json
import time
from dataclasses import dataclass
from typing import Any, Final

from fastapi import HTTPException
from loguru import logger

from src.bookstore.core.models.claims import TokenClaims

# ---------------- tunables ----------------
MAX_JWT_CHARS: Final = 4096
MAX_SEGMENT_CHARS: Final = 4096
MAX_HEADER_BYTES: Final = 8 * 1024
MAX_PAYLOAD_BYTES: Final = 64 * 1024
_ALLOWED: Final = frozenset(
    "ABCDEFGHIJKLMNOPQRSTUVWXYZabcdefghijklmnopqrstuvwxyz0123456789-_."
)  # no '='

# Role claim emitted by ASP.NET Identity token issuers
DOTNET_ROLE_CLAIM: Final = "http://schemas.microsoft.com/ws/2008/06/identity/claims/role"


# --------------- one-pass prefilter ---------------
def _prefilter_compact_jwt(token: str) -> tuple[str, str, str]:
    if not token or len(token) > MAX_JWT_CHARS:
        raise HTTPException(status_code=401, detail="Invalid JWT size")
    first = second = -1
    for i, ch in enumerate(token):
        if ch not in _ALLOWED:
            raise HTTPException(status_code=401, detail="Invalid JWT characters")
        if ch == ".":
            if first < 0:
                first = i
            elif second < 0:
                second = i
            else:  # third dot
                raise HTTPException(status_code=401, detail="Invalid JWT format")
    # require exactly two dots and non-empty segments
    if first <= 0 or second - first <= 1 or second >= len(token) - 1:
        raise HTTPException(status_code=401, detail="Invalid JWT format")
    h, p, s = token[:first], token[first + 1 : second], token[second + 1 :]
    if (
        len(h) > MAX_SEGMENT_CHARS
        or len(p) > MAX_SEGMENT_CHARS
        or len(s) > MAX_SEGMENT_CHARS
    ):
        raise HTTPException(status_code=401, detail="Invalid JWT segment size")
    return h, p, s


def _b64url_decode_unpadded(seg: str, what: str, max_bytes: int) -> bytes:
    pad = (-len(seg)) % 4
    try:
        raw = base64.urlsafe_b64decode((seg + "=" * pad).encode("ascii"))
    except Exception as e:
        raise HTTPException(
            status_code=401, detail=f"Invalid base64url in {what}"
        ) from e
    if len(raw) > max_bytes:
        raise HTTPException(status_code=401, detail=f"{what} too large")
    return raw


def _decode_json_object(raw: bytes, what: str) -> dict[str, Any]:
    try:
        obj = json.loads(raw.decode("utf-8"))
    except UnicodeDecodeError as e:
        raise HTTPException(status_code=401, detail=f"Non-UTF8 {what}") from e
    except json.JSONDecodeError as e:
        raise HTTPException(status_code=401, detail=f"Invalid JSON in {what}") from e
    if not isinstance(obj, dict):
        raise HTTPException(status_code=401, detail=f"{what} must be a JSON object")
    return obj


@dataclass(frozen=True)
class JwtPreview:
    header: dict[str, Any]
    claims: dict[str, Any]
    alg: str | None
    iss: str | None


def preview_jwt(token: str) -> JwtPreview:
    """Split and decode header+payload exactly once."""
    h_seg, p_seg, _ = _prefilter_compact_jwt(token)
    h_raw = _b64url_decode_unpadded(h_seg, "JWT header", MAX_HEADER_BYTES)
    p_raw = _b64url_decode_unpadded(p_seg, "JWT payload", MAX_PAYLOAD_BYTES)
    header = _decode_json_object(h_raw, "JWT header")
    claims = _decode_json_object(p_raw, "JWT payload")
    iss = claims.get("iss")
    if iss and isinstance(iss, str):
        iss = iss.rstrip("/")  # normalize
    else:
        iss = None

    return JwtPreview(header=header, claims=claims, alg=header.get("alg"), iss=iss)


def extract_uid(claims: dict[str, Any], uid_claim: str = "sub") -> str:
    if uid_claim and uid_claim in claims:
        return str(claims[uid_claim])
    return f"{claims.get('iss')}|{claims.get('sub')}"


def extract_scopes(claims: dict[str, Any]) -> list[str]:
    """Extract scopes from JWT claims, preserving order.

    Scopes can be in various claims: 'scope' (space-separated), 'scp' (string or array),
    or 'scopes' (array). Returns as a list with deduplication, preserving first occurrence order.
    """
    seen = set()
    scopes = []

    def add_scope_items(items):
        for item in items:
            if item not in seen:
                seen.add(item)
                scopes.append(item)

    if "scope" in claims:
        add_scope_items(str(claims["scope"]).split())

    if "scp" in claims:
        value = claims["scp"]
        if isinstance(value, str):
            add_scope_items(value.split())
        elif isinstance(value, (list, tuple)):
            add_scope_items(value)

    if "scopes" in claims and isinstance(claims["scopes"], (list, tuple)):
        add_scope_items(claims["scopes"])

    return scopes


def extract_roles(claims: dict[str, Any]) -> list[str]:
    """Extract roles from JWT claims.

    Roles can be in various claims and nested structures.
    """
    roles: list[str] = []

    def add(value: Any) -> None:
        if isinstance(value, list):
            roles.extend(str(v) for v in value)
        elif isinstance(value, str):
            # Handle space-separated roles string
            roles.extend(value.split())
        elif value:
            roles.append(str(value))

    for role_claim in ["role", "roles", "groups", DOTNET_ROLE_CLAIM]:
        add(claims.get(role_claim))

    # Keycloak realm roles
    realm_access = claims.get("realm_access")
    if isinstance(realm_access, dict):
        add(realm_access.get("roles"))

    # Preserve order, drop duplicates
    return list(dict.fromkeys(roles))


def create_token_claims(
    token: str, claims: dict[str, Any], uid_claim: str = "sub"
) -> TokenClaims:
    """Create TokenClaims instance from verified JWT claims.

    Args:
        token: The raw JWT token
        claims: Verified JWT claims
        uid_claim: Claim used as the stable user identifier

    Returns:
        TokenClaims instance with parsed claims
    """
    now = int(time.time())

    remaining_claims = dict(claims)

    logger.debug(f"Creating TokenClaims for subject {claims.get('sub')}")

    uid = extract_uid(remaining_claims, uid_claim)

    expires_at = remaining_claims.pop("exp", now + 3600)
    issued_at = remaining_claims.pop("iat", now)
    not_before = remaining_claims.pop("nbf", None)
    subject = remaining_claims.pop("sub", "")
    audience = remaining_claims.pop("aud", [])
    issuer = remaining_claims.pop("iss", "") or ""
    jti = remaining_claims.pop("jti", None)
    email = remaining_claims.pop("email", None)
    name = remaining_claims.pop("name", None)

    scopes = extract_scopes(claims)
    roles = extract_roles(claims)

    for processed in ["scope", "scopes", "scp", "role", "roles", "groups", DOTNET_ROLE_CLAIM]:
        remaining_claims.pop(processed, None)
    if isinstance(remaining_claims.get("realm_access"), dict):
        remaining_claims.pop("realm_access", None)

    return TokenClaims(
        raw_token=token,
        uid=uid,
        issuer=issuer,
        subject=str(subject),
        audience=audience,
        expires_at=int(expires_at),
        issued_at=int(issued_at),
        not_before=not_before,
        jti=jti,
        scopes=scopes,
        roles=roles,
        email=email,
        name=name,
        custom_claims=remaining_claims,
    )
