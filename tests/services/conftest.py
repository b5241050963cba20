"""Service test fixtures: migrated in-memory database + catalog builders.

Invariants:
    - Every test gets a fresh in-memory SQLite database, migrated to head
      through alembic (seed data included)
    - Each catalog gets its own FaultInjector: no state shared across tests

Design Decisions:
    - Real alembic migrations instead of Base.metadata.create_all: tests run
      against the schema the service actually deploys
    - make_catalog takes retention limits as keyword arguments so bounded-table
      tests can use tiny caps
"""

import pytest
from sqlalchemy import func, select

from quickpizza.config import Settings
from quickpizza.infrastructure.database import DatabaseSessionManager
from quickpizza.infrastructure.faults import FaultInjector
from quickpizza.models import Dough, Ingredient, Pizza
from quickpizza.services.catalog import Catalog

MEMORY_URL = "sqlite+aiosqlite:///:memory:"


@pytest.fixture
async def db_manager():
    manager = DatabaseSessionManager(MEMORY_URL)
    await manager.migrate()
    yield manager
    await manager.dispose()


@pytest.fixture
def faults():
    return FaultInjector()


@pytest.fixture
def make_catalog(db_manager, faults):
    """Build a Catalog on the test DB. Keyword args override Settings fields."""
    def build(credentials=None, **overrides) -> Catalog:
        settings = Settings(database_url=MEMORY_URL, **overrides)
        return Catalog(
            db_manager, settings, credentials=credentials, faults=faults,
        )
    return build


@pytest.fixture
def catalog(make_catalog):
    return make_catalog()


@pytest.fixture
def count_rows(db_manager):
    async def count(model) -> int:
        async with db_manager.session() as db:
            result = await db.execute(select(func.count()).select_from(model))
            return result.scalar_one()
    return count


@pytest.fixture
def new_pizza(catalog):
    """Build an unsaved Pizza on the first seeded dough with `n` toppings."""
    async def build(name: str = "Margherita", n: int = 2) -> Pizza:
        doughs: list[Dough] = await catalog.get_doughs()
        toppings: list[Ingredient] = await catalog.get_ingredients("topping")
        return Pizza(
            name=name, tool="Knife", dough=doughs[0], ingredients=toppings[:n],
        )
    return build
