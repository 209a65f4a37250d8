"""JWT token service.

Signs short-lived access tokens and issues the opaque random strings used
for refresh and reset-password sessions.
"""

from __future__ import annotations

import secrets
from datetime import datetime, timedelta, timezone
from typing import TYPE_CHECKING
from uuid import UUID, uuid4

import jwt

from vet_identity.domain.user.value_objects import UserRole
from vet_identity.exceptions import InvalidTokenError
from vet_identity.schemas import TokenPayload

if TYPE_CHECKING:
    from vet_config import Settings
    from vet_identity.domain.user.aggregates import User


class JWTService:
    """Service for access token creation and verification.

    Access tokens are HS256-signed JWTs carrying the user id, email and
    role. Refresh and reset tokens are not JWTs: they are random strings
    whose validity lives entirely in the session store.

    Examples
    --------
    >>> service = JWTService(
    ...     secret_key="x" * 32, issuer="vet-identity", audience="vet-api"
    ... )
    >>> token = service.issue_access_token(user)
    >>> service.verify_token(token).user_id == user.id
    True
    """

    ALGORITHM = "HS256"
    MIN_SECRET_LENGTH = 32
    DEFAULT_ACCESS_EXPIRE_MINUTES = 15
    OPAQUE_TOKEN_BYTES = 32

    def __init__(
        self,
        secret_key: str,
        issuer: str,
        audience: str,
        access_token_expire_minutes: int = DEFAULT_ACCESS_EXPIRE_MINUTES,
    ):
        """Initialize the JWT service.

        Parameters
        ----------
        secret_key
            HMAC key for signing tokens, at least 32 characters
        issuer
            Value of the ``iss`` claim, checked on verification
        audience
            Value of the ``aud`` claim, checked on verification
        access_token_expire_minutes
            Minutes until an access token expires

        Raises
        ------
        ValueError
            If any of the parameters is unusable
        """
        if not secret_key or len(secret_key) < self.MIN_SECRET_LENGTH:
            msg = f"JWT secret key must be at least {self.MIN_SECRET_LENGTH} characters"
            raise ValueError(msg)
        if not issuer:
            msg = "JWT issuer cannot be empty"
            raise ValueError(msg)
        if not audience:
            msg = "JWT audience cannot be empty"
            raise ValueError(msg)
        if access_token_expire_minutes <= 0:
            msg = "Access token lifetime must be positive"
            raise ValueError(msg)

        self._secret_key = secret_key
        self._issuer = issuer
        self._audience = audience
        self._access_expire = timedelta(minutes=access_token_expire_minutes)

    @classmethod
    def from_settings(cls, settings: Settings) -> JWTService:
        return cls(
            secret_key=settings.jwt_secret_key.get_secret_value(),
            issuer=settings.jwt_issuer,
            audience=settings.jwt_audience,
            access_token_expire_minutes=settings.jwt_access_token_expire_minutes,
        )

    @property
    def access_token_lifetime(self) -> timedelta:
        return self._access_expire

    def issue_access_token(self, user: User) -> str:
        """Create a signed access token whose subject is ``user``."""
        now = datetime.now(tz=timezone.utc)
        payload = {
            "sub": str(user.id),
            "email": user.email,
            "role": user.role.value,
            "jti": str(uuid4()),
            "type": "access",
            "iat": now,
            "exp": now + self._access_expire,
            "iss": self._issuer,
            "aud": self._audience,
        }
        return jwt.encode(payload, self._secret_key, algorithm=self.ALGORITHM)

    def issue_opaque_token(self) -> str:
        """Return a URL-safe random token for refresh or reset sessions."""
        return secrets.token_urlsafe(self.OPAQUE_TOKEN_BYTES)

    def verify_token(self, token: str) -> TokenPayload:
        """Verify and decode an access token.

        Checks the signature, expiry, issuer and audience.

        Raises
        ------
        InvalidTokenError
            If token is invalid, expired, or malformed
        """
        try:
            payload = jwt.decode(
                token,
                self._secret_key,
                algorithms=[self.ALGORITHM],
                audience=self._audience,
                issuer=self._issuer,
                options={"require": ["sub", "exp", "iss", "aud"]},
            )

            return TokenPayload(
                user_id=UUID(payload["sub"]),
                email=payload["email"],
                role=UserRole(payload["role"]),
                jti=payload["jti"],
                exp=datetime.fromtimestamp(payload["exp"], tz=timezone.utc),
                token_type=payload.get("type", "access"),
            )

        except jwt.ExpiredSignatureError as e:
            raise InvalidTokenError("Token has expired") from e
        except jwt.InvalidTokenError as e:
            raise InvalidTokenError(f"Invalid token: {e}") from e
        except (KeyError, ValueError) as e:
            raise InvalidTokenError(f"Malformed token payload: {e}") from e
