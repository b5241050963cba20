"""Catalog bootstrap: open_catalog migrates and applies configured limits."""

import logging

from quickpizza.config import Settings
from quickpizza.models import User
from quickpizza.services.catalog import open_catalog


async def test_open_catalog_is_ready_to_use():
    handlers = list(logging.root.handlers)
    level = logging.root.level
    settings = Settings(
        database_url="sqlite+aiosqlite:///:memory:",
        db_fixed_users=3, db_max_users=7, log_format="text",
    )
    catalog = await open_catalog(settings)
    try:
        assert catalog.user_retention.fixed == 3
        assert catalog.user_retention.maximum == 7
        assert catalog.pizza_retention.maximum == 5000
        assert await catalog.ping()
        user = await catalog.record_user(User(username="zoe", password="pw"))
        assert await catalog.login_user("zoe", "pw") is not None
        assert user.id == 2
    finally:
        await catalog.close()
        logging.root.handlers = handlers
        logging.root.setLevel(level)


async def test_open_catalog_logs_parameters(caplog):
    caplog.set_level(logging.INFO, logger="quickpizza")
    handlers = list(logging.root.handlers)
    level = logging.root.level
    catalog = await open_catalog(Settings(
        database_url="sqlite+aiosqlite:///:memory:", log_format="text",
    ))
    try:
        assert any("Catalog parameters" in r.getMessage() for r in caplog.records)
    finally:
        await catalog.close()
        logging.root.handlers = handlers
        logging.root.setLevel(level)
