"""Credential store port. Unit of work over users and sessions."""

from typing import Protocol

from vet_identity.domain.user.repositories import (
    UserRepository,
    UserSessionRepository,
)


class CredentialStore(Protocol):
    """Port for the transactional store behind every lifecycle operation.

    Implementations stage changes made through ``users`` and ``sessions``
    and make them visible atomically on ``commit``. ``rollback`` discards
    everything staged since the last commit.
    """

    @property
    def users(self) -> UserRepository:
        ...

    @property
    def sessions(self) -> UserSessionRepository:
        ...

    async def commit(self) -> None:
        ...

    async def rollback(self) -> None:
        ...
