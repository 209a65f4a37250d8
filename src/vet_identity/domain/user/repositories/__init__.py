from vet_identity.domain.user.repositories.user_repository import UserRepository
from vet_identity.domain.user.repositories.user_session_repository import (
    UserSessionRepository,
)

__all__ = ["UserRepository", "UserSessionRepository"]
