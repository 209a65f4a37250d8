# ruff: noqa: E501 - Long import paths in __init__.py re-exports
"""SQLAlchemy repository implementations for identity management."""

from vet_identity.infrastructure.persistence.sqlalchemy.repositories.user_repository import (
    UserRepositorySQLAlchemy,
)
from vet_identity.infrastructure.persistence.sqlalchemy.repositories.user_session_repository import (
    UserSessionRepositorySQLAlchemy,
)

__all__ = [
    "UserRepositorySQLAlchemy",
    "UserSessionRepositorySQLAlchemy",
]
