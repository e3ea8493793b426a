"""Tests for JWT generation, verification and claim extraction."""

import pytest
from fastapi import HTTPException

from src.bookstore.core.services import (
    JwtGenerationError,
    JwtGeneratorService,
    JwtVerificationService,
)
from src.bookstore.core.services.jwt.jwt_utils import (
    DOTNET_ROLE_CLAIM,
    extract_roles,
    extract_scopes,
)
from src.bookstore.runtime.config.config_data import ConfigData


class TestTokenRoundTrip:
    """Tokens issued by the generator are accepted by the verifier."""

    def test_access_token_claims(
        self,
        jwt_generate_service: JwtGeneratorService,
        jwt_verify_service: JwtVerificationService,
        issuer: str,
        audience: str,
    ):
        token = jwt_generate_service.generate_access_token(
            user_id="alice",
            scopes=["books:read", "books:write"],
            roles=["Administrator"],
            email="alice@bookstore.test",
        )

        claims = jwt_verify_service.verify_jwt(token)

        assert claims.subject == "alice"
        assert claims.uid == "alice"
        assert claims.issuer == issuer
        assert audience in claims.audience
        assert claims.roles == ["Administrator"]
        assert claims.scopes == ["books:read", "books:write"]
        assert claims.email == "alice@bookstore.test"
        assert claims.has_role("Administrator")
        assert claims.raw_token == token


class TestVerificationFailures:
    """Every rejected token surfaces as 401."""

    def test_wrong_secret(
        self,
        jwt_generate_service: JwtGeneratorService,
        jwt_verify_service: JwtVerificationService,
    ):
        token = jwt_generate_service.generate_jwt(
            subject="mallory", secret="some-other-secret-entirely-0000"
        )

        with pytest.raises(HTTPException) as exc_info:
            jwt_verify_service.verify_jwt(token)
        assert exc_info.value.status_code == 401
        assert exc_info.value.detail == "Invalid token"

    def test_wrong_issuer(
        self,
        jwt_generate_service: JwtGeneratorService,
        jwt_verify_service: JwtVerificationService,
    ):
        token = jwt_generate_service.generate_jwt(
            subject="mallory", issuer="https://evil.test"
        )

        with pytest.raises(HTTPException) as exc_info:
            jwt_verify_service.verify_jwt(token)
        assert exc_info.value.status_code == 401
        assert exc_info.value.detail == "Invalid issuer"

    def test_wrong_audience(
        self,
        jwt_generate_service: JwtGeneratorService,
        jwt_verify_service: JwtVerificationService,
    ):
        token = jwt_generate_service.generate_jwt(subject="bob", audience="someone-else")

        with pytest.raises(HTTPException) as exc_info:
            jwt_verify_service.verify_jwt(token)
        assert exc_info.value.status_code == 401
        assert exc_info.value.detail == "Invalid token"

    def test_expired_token(
        self,
        jwt_generate_service: JwtGeneratorService,
        jwt_verify_service: JwtVerificationService,
    ):
        token = jwt_generate_service.generate_jwt(subject="bob", expires_in_seconds=-600)

        with pytest.raises(HTTPException) as exc_info:
            jwt_verify_service.verify_jwt(token)
        assert exc_info.value.status_code == 401
        assert exc_info.value.detail == "Invalid token"

    def test_malformed_token(self, jwt_verify_service: JwtVerificationService):
        with pytest.raises(HTTPException) as exc_info:
            jwt_verify_service.verify_jwt("not-a-jwt")
        assert exc_info.value.status_code == 401


class TestGeneration:
    def test_missing_secret(self, test_config: ConfigData):
        config = test_config.model_copy(deep=True)
        config.app.jwt_signing_secret = None

        with pytest.raises(JwtGenerationError):
            JwtGeneratorService(config).generate_jwt(subject="alice")

    def test_disallowed_algorithm(self, jwt_generate_service: JwtGeneratorService):
        with pytest.raises(JwtGenerationError):
            jwt_generate_service.generate_jwt(subject="alice", algorithm="RS256")


class TestClaimExtraction:
    def test_roles_from_every_supported_claim(self):
        claims = {
            "role": "Administrator",
            "roles": ["Editor", "Administrator"],
            DOTNET_ROLE_CLAIM: "Customer",
            "realm_access": {"roles": ["Auditor"]},
        }

        assert extract_roles(claims) == ["Administrator", "Editor", "Customer", "Auditor"]

    def test_no_roles(self):
        assert extract_roles({"sub": "alice"}) == []

    def test_scopes_from_space_separated_string(self):
        assert extract_scopes({"scope": "read write"}) == ["read", "write"]
