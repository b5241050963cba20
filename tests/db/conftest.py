"""DB test fixtures: a migrated in-memory database per test."""

import pytest

from quickpizza.infrastructure.database import DatabaseSessionManager


@pytest.fixture
async def db_manager():
    manager = DatabaseSessionManager("sqlite+aiosqlite:///:memory:")
    await manager.migrate()
    yield manager
    await manager.dispose()
