"""User repository interface."""

from abc import ABC, abstractmethod
from typing import Optional, Union
from uuid import UUID

from vet_identity.domain.user.aggregates.user import User
from vet_identity.domain.user.value_objects.email import Email


class UserRepository(ABC):
    """Repository interface for User aggregates."""

    @abstractmethod
    async def find_by_id(self, user_id: UUID) -> Optional[User]:
        """Find a user by their ID, without sessions."""

    @abstractmethod
    async def find_by_email(
        self,
        email: Union[str, Email],
        include_sessions: bool = False,
    ) -> Optional[User]:
        """Find a user by email.

        The email is normalized before lookup, so the match is
        case-insensitive. Sessions are loaded only with ``include_sessions``.
        """

    @abstractmethod
    async def exists_by_email(self, email: Union[str, Email]) -> bool:
        """Check if a user exists with the given email."""

    @abstractmethod
    async def save(self, user: User) -> None:
        """Insert or update the user's own fields.

        Sessions are persisted through ``UserSessionRepository``.

        Raises
        ------
        EmailAlreadyExistsError
            If another user already holds the email
        """
