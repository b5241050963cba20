"""Catalog Users: registration, login and token lookup.

Tests cover:
    - Register then login with the same credentials returns the user
    - Returned users carry a 16-char token and no plaintext password
    - Invalid candidates fail validation and insert nothing
    - Wrong password and unknown username both return None
    - Digest failure aborts before any row is written
    - Duplicate usernames surface the storage error unchanged
    - Users table is bounded; the seeded default user is protected
    - Concurrent registrations: a failing one leaves no row, the rest commit
      and the table stays bounded
"""

import asyncio

import pytest
from sqlalchemy import select
from sqlalchemy.exc import IntegrityError

from quickpizza.core.errors import InvalidUserError
from quickpizza.infrastructure.credentials import TOKEN_ALPHABET
from quickpizza.models import User


class FailingDigest:
    """Credential helper whose digest computation always fails."""
    def digest(self, plaintext: str) -> str:
        raise MemoryError("digest exhausted resources")

    def verify(self, plaintext: str, digest: str) -> bool:
        return False

    def generate_token(self) -> str:
        return "x" * 16


async def test_register_then_login(catalog):
    created = await catalog.record_user(User(username="alice", password="hunter2"))
    assert created.id > 1

    user = await catalog.login_user("alice", "hunter2")
    assert user is not None
    assert user.id == created.id
    assert user.token == created.token
    assert user.password == ""


async def test_registered_user_has_token_and_no_plaintext(catalog):
    user = await catalog.record_user(User(username="bob", password="pa55"))
    assert len(user.token) == 16
    assert set(user.token) <= set(TOKEN_ALPHABET)
    assert user.password == ""
    assert user.password_hash and user.password_hash != "pa55"


@pytest.mark.parametrize("username,password", [
    ("", "pw"),
    ("x" * 33, "pw"),
    ("default", "pw"),
    ("carol", ""),
])
async def test_invalid_user_inserts_nothing(catalog, count_rows, username, password):
    before = await count_rows(User)
    with pytest.raises(InvalidUserError):
        await catalog.record_user(User(username=username, password=password))
    assert await count_rows(User) == before


async def test_wrong_password_returns_none(catalog):
    await catalog.record_user(User(username="dave", password="right"))
    assert await catalog.login_user("dave", "wrong") is None


async def test_unknown_username_returns_none(catalog):
    assert await catalog.login_user("nobody", "whatever") is None


async def test_seeded_default_user_can_login(catalog):
    user = await catalog.login_user("default", "12345678")
    assert user is not None
    assert user.id == 1


async def test_digest_failure_writes_nothing(make_catalog, count_rows):
    catalog = make_catalog(credentials=FailingDigest())
    before = await count_rows(User)
    with pytest.raises(MemoryError):
        await catalog.record_user(User(username="erin", password="pw"))
    assert await count_rows(User) == before


async def test_duplicate_username_propagates_integrity_error(catalog, count_rows):
    await catalog.record_user(User(username="frank", password="pw"))
    before = await count_rows(User)
    with pytest.raises(IntegrityError):
        await catalog.record_user(User(username="frank", password="other"))
    assert await count_rows(User) == before


async def test_get_user_from_token(catalog):
    created = await catalog.record_user(User(username="grace", password="pw"))
    found = await catalog.get_user_from_token(created.token)
    assert found is not None and found.username == "grace"
    assert await catalog.get_user_from_token("0000000000000000") is None
    assert await catalog.get_user_from_token("") is None


async def test_users_table_is_bounded(make_catalog, db_manager):
    catalog = make_catalog(db_fixed_users=1, db_max_users=3)
    for i in range(5):
        await catalog.record_user(User(username=f"user{i}", password="pw"))

    async with db_manager.session() as db:
        result = await db.execute(select(User.username).order_by(User.id))
        usernames = list(result.scalars().all())
    assert usernames == ["default", "user2", "user3", "user4"]


async def test_pruned_ids_are_not_reused(make_catalog):
    catalog = make_catalog(db_fixed_users=0, db_max_users=1)
    first = await catalog.record_user(User(username="one", password="pw"))
    second = await catalog.record_user(User(username="two", password="pw"))
    third = await catalog.record_user(User(username="three", password="pw"))
    assert first.id < second.id < third.id


# ─── concurrent registrations ────────────────────────────────────

class StallingPolicy:
    def __init__(self):
        self.entered = asyncio.Event()

    async def enforce(self, db, model) -> int:
        self.entered.set()
        await asyncio.sleep(0.1)
        raise RuntimeError("enforcement failed")


async def _usernames(db_manager) -> list[str]:
    async with db_manager.session() as db:
        result = await db.execute(select(User.username).order_by(User.id))
        return list(result.scalars().all())


async def test_failed_registration_not_committed_by_concurrent_one(
    make_catalog, db_manager,
):
    failing, ok = make_catalog(), make_catalog()
    stalling = StallingPolicy()
    failing.user_retention = stalling

    doomed = asyncio.create_task(
        failing.record_user(User(username="doomed", password="pw")),
    )
    await stalling.entered.wait()
    await ok.record_user(User(username="fine", password="pw"))
    with pytest.raises(RuntimeError, match="enforcement failed"):
        await doomed

    assert await _usernames(db_manager) == ["default", "fine"]
    assert await ok.login_user("doomed", "pw") is None


async def test_concurrent_registrations_stay_bounded(make_catalog, db_manager):
    catalog = make_catalog(db_fixed_users=1, db_max_users=2)
    users = await asyncio.gather(*(
        catalog.record_user(User(username=f"user{i}", password="pw"))
        for i in range(5)
    ))

    assert len({u.id for u in users}) == 5
    usernames = await _usernames(db_manager)
    assert "default" in usernames
    assert len(usernames) <= 2 + 1
