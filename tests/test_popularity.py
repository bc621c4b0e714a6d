"""Tests for the popularity / trending engine and its new-arrivals fallback."""

from datetime import timedelta

from app.domain.services.popularity_svc import get_popular_products
from conftest import add_interaction, add_products, ids, product_doc


async def test_no_interactions_returns_new_arrivals(db):
    await add_products(db, product_doc("t1", minutes=1), product_doc("t2", minutes=2), product_doc("t3", minutes=3))

    items = await get_popular_products(db, 2)

    assert ids(items) == ["t3", "t2"]
    assert all(i.reason == "New arrivals" for i in items)
    assert all(i.match_score == 0.7 for i in items)


async def test_ranks_by_interaction_volume(db):
    await add_products(db, product_doc("a", minutes=1), product_doc("b", minutes=2), product_doc("c", minutes=3))
    for user in ("u1", "u2", "u3"):
        await add_interaction(db, user, "a")
    await add_interaction(db, "u1", "b", type="cart")
    await add_interaction(db, "u2", "b", type="like")

    items = await get_popular_products(db, 2)

    assert ids(items) == ["a", "b"]
    assert all(i.reason == "Trending now — Popular among shoppers" for i in items)
    assert all(i.match_score == 0.7 for i in items)


async def test_only_trailing_window_counts(db):
    await add_products(db, product_doc("old"), product_doc("new", minutes=1))
    await add_interaction(db, "u1", "old", age=timedelta(days=40))
    await add_interaction(db, "u2", "old", age=timedelta(days=40))
    await add_interaction(db, "u3", "new", age=timedelta(days=2))

    items = await get_popular_products(db, 5)

    assert ids(items) == ["new"]


async def test_deleted_products_fall_back_to_new_arrivals(db):
    await add_products(db, product_doc("p1", minutes=1), product_doc("p2", minutes=2))
    await add_interaction(db, "u1", "gone")

    items = await get_popular_products(db, 5)

    assert ids(items) == ["p2", "p1"]
    assert items[0].reason == "New arrivals"


async def test_empty_catalog_returns_empty_list(db):
    assert await get_popular_products(db, 6) == []
