"""Root conftest: shared test configuration."""

import os

# Tests never touch a real database server
os.environ.setdefault("QUICKPIZZA_DB", "sqlite+aiosqlite:///:memory:")
os.environ.setdefault("QUICKPIZZA_LOG_FORMAT", "text")
