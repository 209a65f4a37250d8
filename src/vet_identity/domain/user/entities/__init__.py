from vet_identity.domain.user.entities.user_session import UserSession

__all__ = ["UserSession"]
