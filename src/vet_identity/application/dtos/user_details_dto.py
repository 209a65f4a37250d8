"""DTO for reading a user."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any
from uuid import UUID

from vet_identity.domain.user.aggregates import User


@dataclass(frozen=True)
class UserDetails:
    id: UUID
    email: str
    full_name: str

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": str(self.id),
            "email": self.email,
            "full_name": self.full_name,
        }

    @classmethod
    def from_user(cls, user: User) -> UserDetails:
        return cls(id=user.id, email=user.email, full_name=user.full_name)
