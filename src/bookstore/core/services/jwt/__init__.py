"""JWT services for bearer-token authentication."""

from .jwt_gen import JwtGenerationError, JwtGeneratorService
from .jwt_verify import JwtVerificationService

__all__ = ["JwtGenerationError", "JwtGeneratorService", "JwtVerificationService"]
