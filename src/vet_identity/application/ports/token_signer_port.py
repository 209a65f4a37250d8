"""Token signer port."""

from datetime import timedelta
from typing import Protocol

from vet_identity.domain.user.aggregates import User


class TokenSigner(Protocol):
    """Issues access tokens and opaque session tokens."""

    @property
    def access_token_lifetime(self) -> timedelta:
        ...

    def issue_access_token(self, user: User) -> str:
        ...

    def issue_opaque_token(self) -> str:
        """Return a cryptographically random token string."""
        ...
