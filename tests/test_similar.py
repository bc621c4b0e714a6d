"""Tests for content-based (same category) recommendations."""

from app.domain.services.similar_products_svc import get_similar_products
from conftest import add_products, ids, product_doc


async def _seed(db):
    await add_products(
        db,
        product_doc("A", "Electronics", minutes=0),
        product_doc("B", "Electronics", minutes=1),
        product_doc("C", "Electronics", minutes=2),
        product_doc("D", "Electronics", minutes=3),
        product_doc("E", "Fashion", minutes=4),
    )


async def test_anchor_product_same_category_newest_first(db):
    await _seed(db)

    items = await get_similar_products(db, "A", None, 3)

    assert ids(items) == ["D", "C", "B"]
    assert all(i.match_score == 0.8 for i in items)
    assert items[0].reason == "Similar to items you viewed in Electronics"


async def test_anchor_is_never_included(db):
    await _seed(db)
    for anchor in ("A", "B", "C", "D", "E"):
        assert anchor not in ids(await get_similar_products(db, anchor, None, 10))


async def test_category_without_anchor(db):
    await _seed(db)

    items = await get_similar_products(db, None, "Fashion", 5)

    assert ids(items) == ["E"]
    assert items[0].reason == "Similar to items you viewed in Fashion"


async def test_unknown_product_falls_back_to_category(db):
    await _seed(db)

    items = await get_similar_products(db, "does-not-exist", "Electronics", 2)

    assert ids(items) == ["D", "C"]


async def test_malformed_product_and_no_category_is_unfiltered(db):
    await _seed(db)

    items = await get_similar_products(db, "undefined", None, 3)

    assert ids(items) == ["E", "D", "C"]
    assert items[0].reason == "Similar to items you viewed in Fashion"
