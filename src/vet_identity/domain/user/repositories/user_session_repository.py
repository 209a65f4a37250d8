"""User session repository interface."""

from abc import ABC, abstractmethod
from typing import Optional

from vet_identity.domain.user.entities.user_session import UserSession


class UserSessionRepository(ABC):
    """Repository interface for UserSession entities."""

    @abstractmethod
    async def find_by_token(self, token: str) -> Optional[UserSession]:
        """Find a session by its token value.

        Parameters
        ----------
        token
            The opaque token string

        Returns
        -------
        The session if one currently holds this token, None otherwise
        """

    @abstractmethod
    async def add(self, session: UserSession) -> None:
        """Stage a new session for insertion on the next commit."""

    @abstractmethod
    async def update(self, session: UserSession) -> None:
        """Persist a rotated session.

        The write only applies if the stored row still has the version the
        session was read with; on success ``session.version`` is bumped.

        Raises
        ------
        StaleSessionError
            If the row was changed or removed since it was read
        """

    @abstractmethod
    async def delete(self, session: UserSession) -> None:
        """Stage the session for deletion on the next commit."""
