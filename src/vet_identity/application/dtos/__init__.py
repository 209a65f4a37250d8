"""Data Transfer Objects returned by the lifecycle operations."""

from vet_identity.application.dtos.session_tokens_dto import SessionTokens
from vet_identity.application.dtos.user_details_dto import UserDetails

__all__ = [
    "SessionTokens",
    "UserDetails",
]
