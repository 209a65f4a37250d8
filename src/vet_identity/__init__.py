"""VetCare Identity - users, credentials and the session lifecycle.

This package handles:
- Login with password, issuing an access token and a refresh session
- Refresh token rotation and logout
- Password reset through short-lived reset sessions delivered by email
- Registration and user lookup

HTTP routing and dependency wiring live outside this package; callers
receive ``Result`` values and map error types to transport status codes.
"""

from vet_identity.application.dtos import SessionTokens, UserDetails
from vet_identity.application.ports import (
    CredentialStore,
    Notifier,
    PasswordHasher,
    TokenSigner,
)
from vet_identity.application.queries import GetUserByIdQuery
from vet_identity.application.services import (
    AuthenticationService,
    PasswordResetService,
    build_reset_link,
)
from vet_identity.domain.shared import Error, ErrorType, Result
from vet_identity.domain.user import (
    Email,
    EmailAlreadyExistsError,
    EmailErrors,
    InvalidEmailError,
    SessionTokenType,
    User,
    UserErrors,
    UserRepository,
    UserRole,
    UserSession,
    UserSessionRepository,
)
from vet_identity.exceptions import (
    AuthError,
    InvalidTokenError,
    StaleSessionError,
    WeakPasswordError,
)
from vet_identity.schemas import TokenPayload
from vet_identity.services import (
    JWTService,
    PasswordHashingService,
)

__all__ = [
    # Domain - shared
    "Error",
    "ErrorType",
    "Result",
    # Domain - User
    "Email",
    "EmailAlreadyExistsError",
    "EmailErrors",
    "InvalidEmailError",
    "SessionTokenType",
    "User",
    "UserErrors",
    "UserRepository",
    "UserRole",
    "UserSession",
    "UserSessionRepository",
    # Exceptions
    "AuthError",
    "InvalidTokenError",
    "StaleSessionError",
    "WeakPasswordError",
    # Schemas
    "TokenPayload",
    # Services
    "JWTService",
    "PasswordHashingService",
    # Application
    "AuthenticationService",
    "CredentialStore",
    "GetUserByIdQuery",
    "Notifier",
    "PasswordHasher",
    "PasswordResetService",
    "SessionTokens",
    "TokenSigner",
    "UserDetails",
    "build_reset_link",
]
