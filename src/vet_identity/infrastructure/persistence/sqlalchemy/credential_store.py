"""Unit of work over one AsyncSession."""

import logging

from sqlalchemy.ext.asyncio import AsyncSession

from vet_identity.application.ports import CredentialStore
from vet_identity.infrastructure.persistence.sqlalchemy.repositories import (
    UserRepositorySQLAlchemy,
    UserSessionRepositorySQLAlchemy,
)

logger = logging.getLogger(__name__)


class SQLAlchemyCredentialStore(CredentialStore):
    """Credential store backed by a single SQLAlchemy ``AsyncSession``.

    Both repositories share the session, so everything staged during one
    operation lands in one transaction and ``commit`` is atomic.
    """

    def __init__(self, session: AsyncSession) -> None:
        self._session = session
        self._sessions = UserSessionRepositorySQLAlchemy(session)
        self._users = UserRepositorySQLAlchemy(session, self._sessions)

    @property
    def users(self) -> UserRepositorySQLAlchemy:
        return self._users

    @property
    def sessions(self) -> UserSessionRepositorySQLAlchemy:
        return self._sessions

    async def commit(self) -> None:
        await self._session.commit()

    async def rollback(self) -> None:
        await self._session.rollback()
        logger.debug("Rolled back credential store transaction")
