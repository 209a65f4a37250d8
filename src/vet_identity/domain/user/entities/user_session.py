"""UserSession entity: a persisted token bound to its owner and expiry."""

from __future__ import annotations

from datetime import datetime
from typing import Union
from uuid import UUID, uuid4

from vet_identity.domain.shared.time import utc_now
from vet_identity.domain.user.value_objects import SessionTokenType


class UserSession:
    """
    Persisted record binding a token string, its kind, its owner and its expiry.

    A session holds a non-owning reference to its user (``user_id``); the
    user is resolved by lookup. Refresh sessions are rotated in place: the
    row keeps its id and only the token value changes.

    ``version`` increases with every persisted rotation so that the store
    can reject a rotation computed from a stale read.
    """

    def __init__(  # noqa: PLR0913
        self,
        user_id: UUID,
        token: str,
        token_type: Union[str, SessionTokenType],
        expires_at: datetime,
        id: UUID | None = None,
        created_at: datetime | None = None,
        version: int = 1,
    ):
        if not token:
            msg = "Session token cannot be empty"
            raise ValueError(msg)

        self._id = id or uuid4()
        self._user_id = user_id
        self._token = token
        self._token_type = (
            token_type
            if isinstance(token_type, SessionTokenType)
            else SessionTokenType(token_type)
        )
        self._expires_at = expires_at
        self._created_at = created_at or utc_now()
        self.version = version

    @property
    def id(self) -> UUID:
        return self._id

    @property
    def user_id(self) -> UUID:
        return self._user_id

    @property
    def token(self) -> str:
        return self._token

    @property
    def token_type(self) -> SessionTokenType:
        return self._token_type

    @property
    def expires_at(self) -> datetime:
        return self._expires_at

    @property
    def created_at(self) -> datetime:
        return self._created_at

    @property
    def is_refresh(self) -> bool:
        return self._token_type == SessionTokenType.REFRESH

    @property
    def is_reset_password(self) -> bool:
        return self._token_type == SessionTokenType.RESET_PASSWORD

    def is_expired(self, now: datetime) -> bool:
        """Whether the session expired strictly before ``now``.

        A session expiring exactly at ``now`` is still valid.
        """
        return self._expires_at < now

    def authorizes_reset(self, token: str, now: datetime) -> bool:
        """Whether this session can authorize a password change right now.

        Requires a reset-password session, a matching token and an expiry
        strictly after ``now``.
        """
        return (
            self.is_reset_password
            and self._token == token
            and self._expires_at > now
        )

    def rotate(self, new_token: str, expires_at: datetime | None = None) -> None:
        """Replace the token value in place.

        Parameters
        ----------
        new_token
            The freshly issued refresh token
        expires_at
            New expiry; when omitted the original expiry is kept
        """
        if not self.is_refresh:
            msg = f"Only refresh sessions can be rotated, not {self._token_type.value}"
            raise ValueError(msg)
        if not new_token:
            msg = "Session token cannot be empty"
            raise ValueError(msg)
        self._token = new_token
        if expires_at is not None:
            self._expires_at = expires_at

    @classmethod
    def open(
        cls,
        user_id: UUID,
        token: str,
        token_type: SessionTokenType,
        now: datetime | None = None,
    ) -> UserSession:
        """Create a session whose expiry follows the lifetime of its kind."""
        issued_at = now or utc_now()
        return cls(
            user_id=user_id,
            token=token,
            token_type=token_type,
            expires_at=issued_at + token_type.lifetime,
            created_at=issued_at,
        )

    @classmethod
    def reconstitute(  # noqa: PLR0913
        cls,
        id: UUID,
        user_id: UUID,
        token: str,
        token_type: Union[str, SessionTokenType],
        expires_at: datetime,
        created_at: datetime,
        version: int,
    ) -> UserSession:
        return cls(
            id=id,
            user_id=user_id,
            token=token,
            token_type=token_type,
            expires_at=expires_at,
            created_at=created_at,
            version=version,
        )

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, UserSession):
            return NotImplemented
        return self._id == other._id

    def __hash__(self) -> int:
        return hash(self._id)

    def __repr__(self) -> str:
        return (
            f"UserSession(id={self._id}, user_id={self._user_id}, "
            f"type={self._token_type.value}, expires_at={self._expires_at.isoformat()})"
        )
