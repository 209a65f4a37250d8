"""
Pytest configuration for vet_identity integration tests.

SQLite (aiosqlite) fixtures run by default. The PostgreSQL fixtures from
``tests.shared.fixtures.database`` are re-exported for the tests marked
``integration``.
"""

import pytest
from sqlalchemy.ext.asyncio import create_async_engine

from tests.shared.fixtures.database import (
    pg_engine,
    pg_session_factory,
    postgres_container,
)
from tests.shared.fixtures.factories import make_jwt_service, make_password_service
from vet_identity.infrastructure.persistence.sqlalchemy import (
    SQLAlchemyCredentialStore,
    create_session_factory,
    create_tables,
)

__all__ = [
    "pg_engine",
    "pg_session_factory",
    "postgres_container",
]


@pytest.fixture
async def engine():
    """In-memory SQLite engine with the identity schema."""
    engine = create_async_engine("sqlite+aiosqlite:///:memory:", echo=False)
    await create_tables(engine)
    yield engine
    await engine.dispose()


@pytest.fixture
async def file_engine(tmp_path):
    """File-backed SQLite engine, for tests that need separate connections."""
    engine = create_async_engine(
        f"sqlite+aiosqlite:///{tmp_path / 'identity.db'}",
        echo=False,
    )
    await create_tables(engine)
    yield engine
    await engine.dispose()


@pytest.fixture
async def session(engine):
    async with create_session_factory(engine)() as session:
        yield session


@pytest.fixture
def store(session):
    return SQLAlchemyCredentialStore(session)


@pytest.fixture
def password_service():
    return make_password_service()


@pytest.fixture
def jwt_service():
    return make_jwt_service()
