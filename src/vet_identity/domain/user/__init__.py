"""User domain manages identity and session state.

This domain handles:
- User aggregate (identity: id, names, email, role, password hash)
- UserSession entity (refresh and reset-password tokens with expiry)
- The error catalogue returned by the session lifecycle operations
"""

from vet_identity.domain.user.aggregates import User
from vet_identity.domain.user.entities import UserSession
from vet_identity.domain.user.errors import EmailErrors, UserErrors
from vet_identity.domain.user.exceptions import (
    EmailAlreadyExistsError,
    InvalidEmailError,
    SessionOwnershipError,
)
from vet_identity.domain.user.repositories import (
    UserRepository,
    UserSessionRepository,
)
from vet_identity.domain.user.value_objects import (
    SESSION_LIFETIMES,
    Email,
    SessionTokenType,
    UserRole,
    normalize_email,
)

__all__ = [
    "SESSION_LIFETIMES",
    "Email",
    "EmailAlreadyExistsError",
    "EmailErrors",
    "InvalidEmailError",
    "SessionOwnershipError",
    "SessionTokenType",
    "User",
    "UserErrors",
    "UserRepository",
    "UserRole",
    "UserSession",
    "UserSessionRepository",
    "normalize_email",
]
