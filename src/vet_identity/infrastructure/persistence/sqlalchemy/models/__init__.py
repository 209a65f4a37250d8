# ruff: noqa: E501 - Long import paths in __init__.py re-exports
"""SQLAlchemy models for identity management."""

from vet_identity.infrastructure.persistence.sqlalchemy.models.user_model import (
    UserModel,
)
from vet_identity.infrastructure.persistence.sqlalchemy.models.user_session_model import (
    UserSessionModel,
)

__all__ = [
    "UserModel",
    "UserSessionModel",
]
