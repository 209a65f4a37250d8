from vet_identity.application.services.authentication_service import (
    AuthenticationService,
)
from vet_identity.application.services.password_reset_service import (
    PasswordResetService,
    build_reset_link,
)

__all__ = [
    "AuthenticationService",
    "PasswordResetService",
    "build_reset_link",
]
