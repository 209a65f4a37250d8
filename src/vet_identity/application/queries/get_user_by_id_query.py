"""Get user by id query."""

from __future__ import annotations

from typing import TYPE_CHECKING
from uuid import UUID

from vet_identity.application.dtos import UserDetails
from vet_identity.application.services._boundary import operation_boundary
from vet_identity.domain.shared import Result
from vet_identity.domain.user import UserErrors

if TYPE_CHECKING:
    from vet_identity.application.ports import CredentialStore


class GetUserByIdQuery:
    """Read-only lookup of a user's public details."""

    def __init__(self, store: CredentialStore):
        self._store = store

    @operation_boundary("get user by id")
    async def execute(self, user_id: UUID) -> Result[UserDetails]:
        user = await self._store.users.find_by_id(user_id)
        if user is None:
            return Result.failure(UserErrors.user_not_found_by_id(user_id))
        return Result.success(UserDetails.from_user(user))
