"""Identity schemas and data structures.

These are simple data classes used for transferring identity
data between components.
"""

from dataclasses import dataclass
from datetime import datetime
from uuid import UUID

from vet_identity.domain.user.value_objects import UserRole


@dataclass(frozen=True)
class TokenPayload:
    """Decoded access token payload.

    Attributes
    ----------
    user_id
        The unique identifier of the user
    email
        The user's email address
    role
        The role claim carried by the token
    jti
        Unique token identifier
    exp
        Token expiration timestamp
    token_type
        Always "access" for tokens issued by ``JWTService``
    """

    user_id: UUID
    email: str
    role: UserRole
    jti: str
    exp: datetime
    token_type: str

    def is_expired(self) -> bool:
        """Check if the token has expired."""
        return datetime.now(tz=self.exp.tzinfo) > self.exp

    def is_access_token(self) -> bool:
        return self.token_type == "access"
