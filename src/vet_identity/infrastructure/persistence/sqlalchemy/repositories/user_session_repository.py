"""SQLAlchemy implementation of UserSessionRepository."""

import logging
from typing import Optional
from uuid import UUID

from sqlalchemy import delete, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from vet_identity.domain.shared.time import ensure_tz_aware
from vet_identity.domain.user import UserSession, UserSessionRepository
from vet_identity.exceptions import StaleSessionError
from vet_identity.infrastructure.persistence.sqlalchemy.models import (
    UserSessionModel,
)

logger = logging.getLogger(__name__)


class UserSessionRepositorySQLAlchemy(UserSessionRepository):
    """SQLAlchemy implementation of the UserSessionRepository interface.

    Rotation and deletion are issued as conditional statements so that the
    row count tells whether another transaction got there first.
    """

    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def find_by_token(self, token: str) -> Optional[UserSession]:
        stmt = (
            select(UserSessionModel)
            .where(UserSessionModel.token == token)
            .execution_options(populate_existing=True)
        )
        result = await self._session.execute(stmt)
        model = result.scalar_one_or_none()

        if model is None:
            return None

        return self._map_to_domain(model)

    async def find_by_user_id(self, user_id: UUID) -> list[UserSession]:
        stmt = (
            select(UserSessionModel)
            .where(UserSessionModel.user_id == user_id)
            .order_by(UserSessionModel.created_at, UserSessionModel.id)
            .execution_options(populate_existing=True)
        )
        result = await self._session.execute(stmt)
        return [self._map_to_domain(model) for model in result.scalars().all()]

    async def add(self, session: UserSession) -> None:
        self._session.add(self._map_to_model(session))
        await self._session.flush()
        logger.debug("Added %s session %s", session.token_type.value, session.id)

    async def update(self, session: UserSession) -> None:
        expected_version = session.version
        stmt = (
            update(UserSessionModel)
            .where(
                UserSessionModel.id == session.id,
                UserSessionModel.version == expected_version,
            )
            .values(
                token=session.token,
                expires_at=session.expires_at,
                version=expected_version + 1,
            )
        )
        result = await self._session.execute(stmt)

        if result.rowcount == 0:
            logger.warning(
                "Session %s changed since it was read (expected version %d)",
                session.id,
                expected_version,
            )
            raise StaleSessionError

        session.version = expected_version + 1

    async def delete(self, session: UserSession) -> None:
        stmt = delete(UserSessionModel).where(UserSessionModel.id == session.id)
        result = await self._session.execute(stmt)

        if result.rowcount == 0:
            logger.warning("Session %s was already removed", session.id)
            raise StaleSessionError("Session no longer exists")

        logger.debug("Deleted session %s", session.id)

    def _map_to_domain(self, model: UserSessionModel) -> UserSession:
        return UserSession.reconstitute(
            id=model.id,
            user_id=model.user_id,
            token=model.token,
            token_type=model.token_type,
            expires_at=ensure_tz_aware(model.expires_at),
            created_at=ensure_tz_aware(model.created_at),
            version=model.version,
        )

    def _map_to_model(self, session: UserSession) -> UserSessionModel:
        return UserSessionModel(
            id=session.id,
            user_id=session.user_id,
            token=session.token,
            token_type=session.token_type.value,
            expires_at=session.expires_at,
            created_at=session.created_at,
            version=session.version,
        )
