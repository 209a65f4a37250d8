"""Identity services - JWT and password hashing."""

from vet_identity.services.jwt_service import JWTService
from vet_identity.services.password_service import PasswordHashingService

__all__ = [
    "JWTService",
    "PasswordHashingService",
]
