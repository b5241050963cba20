"""Catalog Store: transactional recorder and query service for the QuickPizza tables.

Invariants:
    - Every record_* call is ONE transaction: insert(s) + retention enforcement
      + commit. Any failure (validation, digest, insert, enforcement,
      cancellation) leaves no row behind
    - Validation and digest computation happen before the transaction opens
    - Fault check points are consulted before any query or write; an injected
      error propagates unchanged
    - "Not found" is None, never an exception; login failures are
      indistinguishable from unknown usernames
    - Storage errors propagate unchanged; no retries here

Design Decisions:
    - Collaborators (credentials, faults) injected through core/protocols.py
    - Per-call `faults` override: a request can arm its own check points
      without touching the catalog-wide injector
    - Digest and verify run in a worker thread (asyncio.to_thread)
"""

import asyncio
import logging

from sqlalchemy import delete, select
from sqlalchemy.orm import selectinload

from quickpizza.config import Settings, get_settings
from quickpizza.core.protocols import CredentialHelper, FaultHook
from quickpizza.core.validation import (
    validate_new_user, validate_recommendation, validate_rating,
)
from quickpizza.db.retention import RetentionPolicy
from quickpizza.infrastructure.credentials import PasswordCredentials
from quickpizza.infrastructure.database import DatabaseSessionManager
from quickpizza.infrastructure.faults import (
    FaultInjector, GET_INGREDIENTS, RECORD_RECOMMENDATION,
)
from quickpizza.infrastructure.observability import setup_logging
from quickpizza.models import (
    Dough, Ingredient, Pizza, PizzaIngredient, Rating, Tool, User,
)

logger = logging.getLogger(__name__)


class Catalog:
    """Data access for users, pizzas, reference data and ratings."""

    def __init__(
        self,
        db: DatabaseSessionManager,
        settings: Settings | None = None,
        credentials: CredentialHelper | None = None,
        faults: FaultHook | None = None,
    ):
        settings = settings or get_settings()
        self._db = db
        self._credentials = credentials or PasswordCredentials()
        self._faults = faults or FaultInjector()
        self.user_retention = RetentionPolicy(
            settings.db_fixed_users, settings.db_max_users,
        )
        self.pizza_retention = RetentionPolicy(
            settings.db_fixed_pizzas, settings.db_max_pizzas,
        )
        self.rating_retention = RetentionPolicy(
            settings.db_fixed_ratings, settings.db_max_ratings,
        )
        logger.info(
            "Catalog parameters: "
            f"fixed_pizzas={settings.db_fixed_pizzas} "
            f"fixed_users={settings.db_fixed_users} "
            f"fixed_ratings={settings.db_fixed_ratings} "
            f"max_pizzas={settings.db_max_pizzas} "
            f"max_users={settings.db_max_users} "
            f"max_ratings={settings.db_max_ratings}",
        )

    # ─── Reference data ──────────────────────────────────────────

    async def get_ingredients(
        self, ingredient_type: str, faults: FaultHook | None = None,
    ) -> list[Ingredient]:
        await (faults or self._faults).inject(GET_INGREDIENTS)
        async with self._db.session() as db:
            result = await db.execute(
                select(Ingredient)
                .where(Ingredient.type == ingredient_type)
                .order_by(Ingredient.id),
            )
            return list(result.scalars().all())

    async def get_doughs(self) -> list[Dough]:
        async with self._db.session() as db:
            result = await db.execute(select(Dough).order_by(Dough.id))
            return list(result.scalars().all())

    async def get_tools(self) -> list[str]:
        """Distinct tool names."""
        async with self._db.session() as db:
            result = await db.execute(
                select(Tool.name).distinct().order_by(Tool.name),
            )
            return list(result.scalars().all())

    # ─── Recommendations ─────────────────────────────────────────

    async def get_history(self, limit: int) -> list[Pizza]:
        """Most recent pizzas first, dough and ingredients eager-loaded."""
        if limit <= 0:
            return []
        async with self._db.session() as db:
            result = await db.execute(
                select(Pizza)
                .options(selectinload(Pizza.dough), selectinload(Pizza.ingredients))
                .order_by(Pizza.created_at.desc(), Pizza.id.desc())
                .limit(limit),
            )
            return list(result.scalars().all())

    async def get_recommendation(self, pizza_id: int) -> Pizza | None:
        async with self._db.session() as db:
            result = await db.execute(
                select(Pizza)
                .options(selectinload(Pizza.dough), selectinload(Pizza.ingredients))
                .where(Pizza.id == pizza_id),
            )
            return result.scalar_one_or_none()

    async def record_recommendation(
        self, pizza: Pizza, faults: FaultHook | None = None,
    ) -> Pizza:
        """Insert a pizza and one join row per ingredient, then prune pizzas."""
        await (faults or self._faults).inject(RECORD_RECOMMENDATION)

        dough_id = pizza.dough.id if pizza.dough is not None else pizza.dough_id
        validate_recommendation(dough_id)
        pizza.dough_id = dough_id
        ingredient_ids = [ingredient.id for ingredient in pizza.ingredients]

        async with self._db.transaction() as db:
            db.add(pizza)
            await db.flush()
            db.add_all([
                PizzaIngredient(pizza_id=pizza.id, ingredient_id=ingredient_id)
                for ingredient_id in ingredient_ids
            ])
            await db.flush()
            await self.pizza_retention.enforce(db, Pizza)
        return pizza

    # ─── Users ───────────────────────────────────────────────────

    async def record_user(self, user: User) -> User:
        """Validate, hash, assign a token, insert and prune users.

        The plaintext password is cleared from `user` once hashed; the
        returned object carries only the digest and the new token.
        """
        validate_new_user(user.username, user.password)
        user.password_hash = await asyncio.to_thread(
            self._credentials.digest, user.password,
        )
        user.password = ""
        user.token = self._credentials.generate_token()

        async with self._db.transaction() as db:
            db.add(user)
            await db.flush()
            await self.user_retention.enforce(db, User)
        return user

    async def login_user(self, username: str, password: str) -> User | None:
        """User for valid credentials; None for unknown user OR wrong password."""
        async with self._db.session() as db:
            result = await db.execute(
                select(User).where(User.username == username).limit(1),
            )
            user = result.scalar_one_or_none()
        if user is None:
            return None
        verified = await asyncio.to_thread(
            self._credentials.verify, password, user.password_hash,
        )
        return user if verified else None

    async def get_user_from_token(self, token: str) -> User | None:
        if not token:
            return None
        async with self._db.session() as db:
            result = await db.execute(
                select(User).where(User.token == token).limit(1),
            )
            return result.scalar_one_or_none()

    # ─── Ratings ─────────────────────────────────────────────────

    async def record_rating(self, user: User, rating: Rating) -> Rating:
        validate_rating(rating.stars)
        rating.user_id = user.id
        async with self._db.transaction() as db:
            db.add(rating)
            await db.flush()
            await self.rating_retention.enforce(db, Rating)
        return rating

    async def get_ratings(self, user: User) -> list[Rating]:
        async with self._db.session() as db:
            result = await db.execute(
                select(Rating)
                .where(Rating.user_id == user.id)
                .order_by(Rating.id),
            )
            return list(result.scalars().all())

    async def get_rating(self, user: User, rating_id: int) -> Rating | None:
        async with self._db.session() as db:
            result = await db.execute(
                select(Rating).where(
                    Rating.id == rating_id, Rating.user_id == user.id,
                ),
            )
            return result.scalar_one_or_none()

    async def update_rating(
        self, user: User, rating_id: int, stars: int,
    ) -> Rating | None:
        validate_rating(stars)
        async with self._db.transaction() as db:
            result = await db.execute(
                select(Rating).where(
                    Rating.id == rating_id, Rating.user_id == user.id,
                ),
            )
            rating = result.scalar_one_or_none()
            if rating is not None:
                rating.stars = stars
        return rating

    async def delete_ratings(self, user: User) -> int:
        async with self._db.transaction() as db:
            result = await db.execute(
                delete(Rating)
                .where(Rating.user_id == user.id)
                .execution_options(synchronize_session=False),
            )
        return result.rowcount or 0

    async def delete_rating(self, user: User, rating_id: int) -> bool:
        async with self._db.transaction() as db:
            result = await db.execute(
                delete(Rating)
                .where(Rating.id == rating_id, Rating.user_id == user.id)
                .execution_options(synchronize_session=False),
            )
        return bool(result.rowcount)

    # ─── Lifecycle ───────────────────────────────────────────────

    async def ping(self) -> bool:
        return await self._db.health_check()

    async def close(self) -> None:
        await self._db.dispose()


async def open_catalog(
    settings: Settings | None = None,
    credentials: CredentialHelper | None = None,
    faults: FaultHook | None = None,
) -> Catalog:
    """Startup bootstrap: logging, engine, migrations, catalog."""
    settings = settings or get_settings()
    setup_logging(settings.log_level, settings.log_format)
    db = DatabaseSessionManager(
        settings.database_url,
        pool_size=settings.db_pool_size,
        max_overflow=settings.db_max_overflow,
    )
    logger.info("Running catalog migrations")
    await db.migrate()
    return Catalog(db, settings, credentials=credentials, faults=faults)
