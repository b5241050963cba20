"""Catalog Ratings: user-scoped, bounded star ratings.

Tests cover:
    - Record, list, get, update and delete ratings for the owning user
    - Other users never see or touch someone else's ratings
    - Stars outside 1..5 rejected before any write
    - Ratings table bounded by its own retention policy
    - Ratings go away with their pizza
"""

import pytest
from sqlalchemy.exc import IntegrityError

from quickpizza.core.errors import InvalidRatingError
from quickpizza.models import Rating, User


@pytest.fixture
async def alice(catalog):
    return await catalog.record_user(User(username="alice", password="pw"))


@pytest.fixture
async def bob(catalog):
    return await catalog.record_user(User(username="bob", password="pw"))


@pytest.fixture
async def pizza(catalog, new_pizza):
    return await catalog.record_recommendation(await new_pizza())


async def test_record_and_list_ratings(catalog, alice, pizza):
    rating = await catalog.record_rating(alice, Rating(stars=4, pizza_id=pizza.id))
    assert rating.id is not None
    assert rating.user_id == alice.id

    ratings = await catalog.get_ratings(alice)
    assert [(r.id, r.stars) for r in ratings] == [(rating.id, 4)]


async def test_ratings_scoped_to_owner(catalog, alice, bob, pizza):
    rating = await catalog.record_rating(alice, Rating(stars=5, pizza_id=pizza.id))
    assert await catalog.get_ratings(bob) == []
    assert await catalog.get_rating(bob, rating.id) is None
    assert await catalog.update_rating(bob, rating.id, 1) is None
    assert await catalog.delete_rating(bob, rating.id) is False
    assert (await catalog.get_rating(alice, rating.id)).stars == 5


async def test_invalid_stars_rejected(catalog, alice, pizza, count_rows):
    with pytest.raises(InvalidRatingError):
        await catalog.record_rating(alice, Rating(stars=6, pizza_id=pizza.id))
    assert await count_rows(Rating) == 0


async def test_rating_unknown_pizza_propagates_storage_error(catalog, alice, count_rows):
    with pytest.raises(IntegrityError):
        await catalog.record_rating(alice, Rating(stars=3, pizza_id=999))
    assert await count_rows(Rating) == 0


async def test_update_rating(catalog, alice, pizza):
    rating = await catalog.record_rating(alice, Rating(stars=2, pizza_id=pizza.id))
    updated = await catalog.update_rating(alice, rating.id, 5)
    assert updated.stars == 5
    assert (await catalog.get_rating(alice, rating.id)).stars == 5
    with pytest.raises(InvalidRatingError):
        await catalog.update_rating(alice, rating.id, 0)


async def test_delete_single_and_all(catalog, alice, pizza):
    first = await catalog.record_rating(alice, Rating(stars=1, pizza_id=pizza.id))
    await catalog.record_rating(alice, Rating(stars=2, pizza_id=pizza.id))
    await catalog.record_rating(alice, Rating(stars=3, pizza_id=pizza.id))

    assert await catalog.delete_rating(alice, first.id) is True
    assert await catalog.get_rating(alice, first.id) is None
    assert await catalog.delete_ratings(alice) == 2
    assert await catalog.get_ratings(alice) == []


async def test_ratings_table_is_bounded(make_catalog, alice, pizza):
    catalog = make_catalog(db_fixed_ratings=0, db_max_ratings=2)
    for stars in (1, 2, 3, 4):
        await catalog.record_rating(alice, Rating(stars=stars, pizza_id=pizza.id))
    assert [r.stars for r in await catalog.get_ratings(alice)] == [3, 4]


async def test_ratings_cascade_with_pruned_pizza(make_catalog, new_pizza, alice, count_rows):
    catalog = make_catalog(db_fixed_pizzas=0, db_max_pizzas=1)
    first = await catalog.record_recommendation(await new_pizza("First"))
    await catalog.record_rating(alice, Rating(stars=5, pizza_id=first.id))
    await catalog.record_recommendation(await new_pizza("Second"))
    assert await count_rows(Rating) == 0
