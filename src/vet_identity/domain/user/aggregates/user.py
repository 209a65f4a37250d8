"""User aggregate root owning the user's sessions."""

from __future__ import annotations

from datetime import datetime
from typing import Iterable, Optional, Union
from uuid import UUID, uuid4

from vet_identity.domain.shared.time import utc_now
from vet_identity.domain.user.entities import UserSession
from vet_identity.domain.user.exceptions import SessionOwnershipError
from vet_identity.domain.user.value_objects import Email, UserRole, normalize_email


class User:
    """
    User aggregate root.

    Owns an ordered collection of sessions. The collection is only changed
    through ``add_session`` and ``remove_session``; callers get a read-only
    view via ``sessions``.
    """

    def __init__(  # noqa: PLR0913
        self,
        first_name: str,
        last_name: str,
        email: str,
        password_hash: str,
        role: Union[str, UserRole] = UserRole.DOCTOR,
        is_active: bool = True,
        id: UUID | None = None,
        created_at: datetime | None = None,
        updated_at: datetime | None = None,
        sessions: Iterable[UserSession] = (),
    ):
        self._id = id or uuid4()
        self._first_name = first_name
        self._last_name = last_name
        self._email = normalize_email(email)
        self._password_hash = password_hash
        self._role = role if isinstance(role, UserRole) else UserRole(role)
        self._is_active = is_active
        self._created_at = created_at or utc_now()
        self._updated_at = updated_at or self._created_at
        self._sessions: list[UserSession] = []
        for session in sessions:
            self.add_session(session)

    @property
    def id(self) -> UUID:
        return self._id

    @property
    def first_name(self) -> str:
        return self._first_name

    @property
    def last_name(self) -> str:
        return self._last_name

    @property
    def full_name(self) -> str:
        return f"{self._first_name} {self._last_name}"

    @property
    def email(self) -> str:
        return self._email

    @property
    def password_hash(self) -> str:
        return self._password_hash

    @property
    def role(self) -> UserRole:
        return self._role

    @property
    def is_admin(self) -> bool:
        return self._role == UserRole.ADMIN

    @property
    def is_active(self) -> bool:
        return self._is_active

    @property
    def created_at(self) -> datetime:
        return self._created_at

    @property
    def updated_at(self) -> datetime:
        return self._updated_at

    @property
    def sessions(self) -> tuple[UserSession, ...]:
        return tuple(self._sessions)

    def add_session(self, session: UserSession) -> None:
        if session.user_id != self._id:
            raise SessionOwnershipError(str(session.user_id), str(self._id))
        if session not in self._sessions:
            self._sessions.append(session)

    def remove_session(self, session: UserSession) -> None:
        if session in self._sessions:
            self._sessions.remove(session)

    def find_session_by_token(self, token: str) -> Optional[UserSession]:
        for session in self._sessions:
            if session.token == token:
                return session
        return None

    def find_active_reset_session(
        self,
        token: str,
        now: datetime,
    ) -> Optional[UserSession]:
        """Find the reset-password session that authorizes ``token`` at ``now``.

        Wrong token, wrong kind and expiry at or before ``now`` all yield None.
        """
        for session in self._sessions:
            if session.authorizes_reset(token, now):
                return session
        return None

    def change_password_hash(
        self,
        password_hash: str,
        now: datetime | None = None,
    ) -> None:
        self._password_hash = password_hash
        self._updated_at = now or utc_now()

    def deactivate(self) -> None:
        self._is_active = False
        self._updated_at = utc_now()

    def activate(self) -> None:
        self._is_active = True
        self._updated_at = utc_now()

    @classmethod
    def create(
        cls,
        first_name: str,
        last_name: str,
        email: Union[str, Email],
        password_hash: str,
        role: UserRole = UserRole.DOCTOR,
    ) -> User:
        """Register a new active user.

        Raises
        ------
        InvalidEmailError
            If the email is malformed
        """
        email_obj = email if isinstance(email, Email) else Email(email)
        return cls(
            first_name=first_name,
            last_name=last_name,
            email=email_obj.value,
            password_hash=password_hash,
            role=role,
        )

    @classmethod
    def reconstitute(  # noqa: PLR0913
        cls,
        id: UUID,
        first_name: str,
        last_name: str,
        email: str,
        password_hash: str,
        role: Union[str, UserRole],
        is_active: bool,
        created_at: datetime,
        updated_at: datetime,
        sessions: Iterable[UserSession] = (),
    ) -> User:
        return cls(
            id=id,
            first_name=first_name,
            last_name=last_name,
            email=email,
            password_hash=password_hash,
            role=role,
            is_active=is_active,
            created_at=created_at,
            updated_at=updated_at,
            sessions=sessions,
        )

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, User):
            return NotImplemented
        return self._id == other._id

    def __hash__(self) -> int:
        return hash(self._id)

    def __repr__(self) -> str:
        return f"User(id={self._id}, email={self._email}, role={self._role.value})"
