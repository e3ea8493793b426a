"""FastAPI dependency implementations."""

from __future__ import annotations

from collections.abc import Iterator
from typing import Annotated

from fastapi import Depends, HTTPException, Path, Request
from sqlmodel import Session

from src.bookstore.api.http.app_data import ApplicationDependencies
from src.bookstore.core.models.claims import TokenClaims
from src.bookstore.core.services import JwtVerificationService
from src.bookstore.core.storage import ImageStore

ADMINISTRATOR_ROLE = "Administrator"

# Path ids outside a signed 64-bit integer cannot reach the database
RowId = Annotated[int, Path(ge=-(2**63), le=2**63 - 1)]


def get_app_dependencies(request: Request) -> ApplicationDependencies:
    """Get the dependencies built at startup."""
    return request.app.state.app_dependencies


def get_session(request: Request) -> Iterator[Session]:
    """Yield a database session scoped to the request."""
    app_deps = get_app_dependencies(request)
    session = app_deps.database_service.get_session()
    try:
        yield session
    finally:
        session.close()


def get_image_store(request: Request) -> ImageStore:
    """Get the image store instance."""
    return get_app_dependencies(request).image_store


def get_jwt_verify_service(request: Request) -> JwtVerificationService:
    """Get the JWT verification service instance."""
    return get_app_dependencies(request).jwt_verify_service


async def get_current_principal(
    request: Request,
    jwt_verify: JwtVerificationService = Depends(get_jwt_verify_service),
) -> TokenClaims:
    """Authenticate the request using a Bearer token."""

    auth_header = request.headers.get("Authorization")
    if not auth_header or not auth_header.startswith("Bearer "):
        raise HTTPException(
            status_code=401,
            detail="Missing Bearer token",
            headers={"WWW-Authenticate": "Bearer"},
        )

    token = auth_header.split(" ", 1)[1].strip()
    try:
        claims = jwt_verify.verify_jwt(token)
    except HTTPException as exc:
        if exc.status_code == 401:
            exc.headers = {"WWW-Authenticate": "Bearer"}
        raise

    request.state.claims = claims
    request.state.roles = set(claims.roles)
    request.state.uid = claims.uid
    return claims


def require_role(required_role: str):
    """Create a dependency that requires a specific role for the authenticated caller."""

    async def dep(principal: TokenClaims = Depends(get_current_principal)) -> None:
        if not principal.has_role(required_role):
            raise HTTPException(
                status_code=403, detail=f"Missing required role: {required_role}"
            )

    return dep
