"""Database Session Manager: async engine, transactions, migrations, health checks.

Invariants:
    - Every session rolls back on exception; storage errors are logged and
      re-raised UNCHANGED (callers own retry decisions)
    - Cancellation (asyncio.CancelledError) rolls the open transaction back too
    - SQLite connections always run with PRAGMA foreign_keys=ON so join rows
      cascade away with their pizza
    - In-memory SQLite shares one connection (StaticPool): every session and
      the migrator see the same database
    - On a shared connection, sessions (and migrate) hold an asyncio.Lock for
      their whole lifetime: one transaction at a time, so one session's
      COMMIT or reset-on-return never touches another session's rows

Design Decisions:
    - migrate() runs alembic on this manager's engine (shared connection)
      instead of a separate migrator process, which could not reach an
      in-memory database
    - expire_on_commit=False: returned ORM objects stay readable after commit
"""

import asyncio
import logging
from contextlib import asynccontextmanager, nullcontext
from pathlib import Path
from typing import AsyncGenerator

from alembic import command
from alembic.config import Config
from alembic.runtime.migration import MigrationContext
from sqlalchemy import event, text
from sqlalchemy.engine import Connection, make_url
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import (
    AsyncSession, create_async_engine, async_sessionmaker,
)
from sqlalchemy.pool import StaticPool

logger = logging.getLogger(__name__)

MIGRATIONS_DIR = Path(__file__).resolve().parent.parent / "migrations"


def _enable_sqlite_foreign_keys(dbapi_connection, connection_record):
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


def _is_memory_database(database: str | None) -> bool:
    return not database or database == ":memory:" or "mode=memory" in database


def _alembic_config() -> Config:
    config = Config()
    config.set_main_option("script_location", str(MIGRATIONS_DIR))
    return config


def _upgrade(connection: Connection) -> tuple[str | None, str | None]:
    before = MigrationContext.configure(connection).get_current_revision()
    config = _alembic_config()
    config.attributes["connection"] = connection
    command.upgrade(config, "head")
    after = MigrationContext.configure(connection).get_current_revision()
    return before, after


class DatabaseSessionManager:
    """Manages async database sessions with pooling, rollback, and health checks."""

    def __init__(
        self, database_url: str, pool_size: int = 20, max_overflow: int = 10,
    ):
        url = make_url(database_url)
        self.is_sqlite = url.get_backend_name() == "sqlite"
        self.shares_connection = (
            self.is_sqlite and _is_memory_database(url.database)
        )
        self._connection_lock = asyncio.Lock()
        if self.shares_connection:
            engine_kwargs = {"poolclass": StaticPool}
        elif self.is_sqlite:
            engine_kwargs = {"pool_pre_ping": True}
        else:
            engine_kwargs = {
                "pool_size": pool_size,
                "max_overflow": max_overflow,
                "pool_pre_ping": True,
                "pool_recycle": 3600,
            }
        self.engine = create_async_engine(database_url, **engine_kwargs)
        if self.is_sqlite:
            event.listen(
                self.engine.sync_engine, "connect", _enable_sqlite_foreign_keys,
            )
        self._session_factory = async_sessionmaker(
            self.engine,
            class_=AsyncSession,
            expire_on_commit=False,
        )

    def _exclusive(self):
        if self.shares_connection:
            return self._connection_lock
        return nullcontext()

    @asynccontextmanager
    async def session(self) -> AsyncGenerator[AsyncSession, None]:
        """Provide session with auto-rollback on exception."""
        async with self._exclusive():
            session = self._session_factory()
            try:
                yield session
            except SQLAlchemyError as e:
                await session.rollback()
                logger.error(
                    f"DB error: {e}", extra={"error_code": type(e).__name__},
                )
                raise
            finally:
                await session.close()

    @asynccontextmanager
    async def transaction(self) -> AsyncGenerator[AsyncSession, None]:
        """Session inside one transaction: commit on success, rollback otherwise."""
        async with self.session() as session:
            async with session.begin():
                yield session

    async def migrate(self) -> list[str]:
        """Upgrade the schema to head. Returns [from_revision, to_revision] if anything ran."""
        async with self._exclusive(), self.engine.begin() as conn:
            before, after = await conn.run_sync(_upgrade)
        applied = [] if before == after else [before or "base", after]
        logger.info(
            "Applied migrations" if applied else "Schema up to date",
            extra={"migrations": applied or None},
        )
        return applied

    async def health_check(self) -> bool:
        """Check database connectivity (for readiness probes)."""
        try:
            async with self.session() as db:
                await db.execute(text("SELECT 1"))
            return True
        except Exception as e:
            logger.error(f"DB health check failed: {e}")
            return False

    async def dispose(self) -> None:
        await self.engine.dispose()
