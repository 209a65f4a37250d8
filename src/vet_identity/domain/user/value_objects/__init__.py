"""Value objects for the user domain."""

from vet_identity.domain.user.value_objects.email import Email, normalize_email
from vet_identity.domain.user.value_objects.session_token_type import (
    SESSION_LIFETIMES,
    SessionTokenType,
)
from vet_identity.domain.user.value_objects.user_role import UserRole

__all__ = [
    "SESSION_LIFETIMES",
    "Email",
    "SessionTokenType",
    "UserRole",
    "normalize_email",
]
