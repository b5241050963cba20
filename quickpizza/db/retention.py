"""Retention Policy: keeps bounded tables from growing without limit.

Invariants:
    - maximum <= 0 disables pruning entirely (no query is issued)
    - Rows with id <= fixed are never deleted, even if the table exceeds maximum
    - Every other row outside the `maximum` most recent (created_at DESC,
      id DESC) is deleted in ONE statement
    - Runs on the caller's session, inside the caller's transaction
    - Idempotent: a second run on a trimmed table deletes nothing

Design Decisions:
    - One policy object for users, pizzas and ratings: the ordering and
      tie-break live in a single place
    - id DESC tie-break: created_at collides under load
    - correlate(None): the subquery reads the same table the DELETE targets and
      must not be auto-correlated away
    - maximum < fixed is legal; the protected prefix wins and the cap is soft
"""

import logging
from dataclasses import dataclass

from sqlalchemy import Delete, delete, select
from sqlalchemy.ext.asyncio import AsyncSession

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RetentionPolicy:
    """Recency + protected-prefix eviction for a table with id and created_at."""
    fixed: int
    maximum: int

    @property
    def enabled(self) -> bool:
        return self.maximum > 0

    def prune_statement(self, model: type) -> Delete:
        """DELETE every row that is neither recent nor protected."""
        recent = (
            select(model.id)
            .order_by(model.created_at.desc(), model.id.desc())
            .limit(self.maximum)
            .correlate(None)
        )
        return (
            delete(model)
            .where(model.id.not_in(recent), model.id > self.fixed)
            .execution_options(synchronize_session=False)
        )

    async def enforce(self, db: AsyncSession, model: type) -> int:
        """Prune `model`'s table within the current transaction. Returns rows deleted."""
        if not self.enabled:
            return 0
        result = await db.execute(self.prune_statement(model))
        deleted = result.rowcount or 0
        if deleted:
            logger.debug(
                f"Pruned {deleted} row(s) from {model.__tablename__}",
                extra={
                    "table": model.__tablename__, "deleted": deleted,
                    "fixed": self.fixed, "maximum": self.maximum,
                },
            )
        return deleted
