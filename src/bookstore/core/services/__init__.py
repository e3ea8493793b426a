"""Core services exports."""

# Database Service
from .database.db_session import DbSessionService

# JWT Services
from .jwt.jwt_gen import JwtGenerationError, JwtGeneratorService
from .jwt.jwt_verify import JwtVerificationService

__all__ = [
    # JWT Services
    "JwtGenerationError",
    "JwtGeneratorService",
    "JwtVerificationService",
    # Database Service
    "DbSessionService",
]
