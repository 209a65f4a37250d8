"""SQLAlchemy implementation for vet_identity persistence.

Provides:
- Base: Declarative base for identity models
- UserModel / UserSessionModel: table mappings
- UserRepositorySQLAlchemy / UserSessionRepositorySQLAlchemy: repositories
- SQLAlchemyCredentialStore: the unit of work the lifecycle services use
- Engine, session factory and schema helpers
"""

from vet_identity.infrastructure.persistence.sqlalchemy.base import Base
from vet_identity.infrastructure.persistence.sqlalchemy.credential_store import (
    SQLAlchemyCredentialStore,
)
from vet_identity.infrastructure.persistence.sqlalchemy.database import (
    create_engine_from_settings,
    create_session_factory,
    create_tables,
    drop_tables,
)
from vet_identity.infrastructure.persistence.sqlalchemy.models import (
    UserModel,
    UserSessionModel,
)
from vet_identity.infrastructure.persistence.sqlalchemy.repositories import (
    UserRepositorySQLAlchemy,
    UserSessionRepositorySQLAlchemy,
)

__all__ = [
    "Base",
    "SQLAlchemyCredentialStore",
    "UserModel",
    "UserRepositorySQLAlchemy",
    "UserSessionModel",
    "UserSessionRepositorySQLAlchemy",
    "create_engine_from_settings",
    "create_session_factory",
    "create_tables",
    "drop_tables",
]
