"""Tests for the interaction log: validation, retention and read queries."""

from datetime import timedelta

import pytest
from pymongo.errors import ServerSelectionTimeoutError

from app.core.errors import StoreUnavailable, ValidationError
from app.domain.models.product import InteractionType
from app.domain.repositories.interaction_repo import InteractionLog
from conftest import add_interaction


async def test_record_appends_interaction(db):
    log = InteractionLog(db)

    interaction = await log.record("u1", "p1", "view")

    assert interaction.type is InteractionType.VIEW
    assert interaction.interaction_id
    assert await db["interactions"].count_documents({}) == 1


async def test_record_allows_repeats(db):
    log = InteractionLog(db)
    for _ in range(3):
        await log.record("u1", "p1", "cart")
    assert await log.total_count() == 3


@pytest.mark.parametrize("user_id,product_id,type,field", [
    ("u1", "p1", "wishlist", "type"),
    ("u1", "p1", None, "type"),
    ("u1", None, "view", "productId"),
    ("u1", "", "view", "productId"),
    (None, "p1", "view", "userId"),
])
async def test_record_rejects_malformed(db, user_id, product_id, type, field):
    with pytest.raises(ValidationError) as exc_info:
        await InteractionLog(db).record(user_id, product_id, type)
    assert exc_info.value.status_code == 400
    assert exc_info.value.details["field"] == field
    assert await db["interactions"].count_documents({}) == 0


class _UnreachableCollection:
    async def insert_one(self, doc):
        raise ServerSelectionTimeoutError("no servers")


async def test_record_store_failure_propagates(db):
    log = InteractionLog(db)
    log.col = _UnreachableCollection()

    with pytest.raises(StoreUnavailable):
        await log.record("u1", "p1", "view")


async def test_reads_ignore_expired_records(db):
    await add_interaction(db, "u1", "old", age=timedelta(days=31))
    await add_interaction(db, "u1", "fresh", age=timedelta(days=1))
    log = InteractionLog(db)

    assert await log.total_count() == 1
    assert await log.distinct_product_ids("u1") == ["fresh"]
    assert dict(await log.count_by_product()) == {"fresh": 1}


async def test_count_by_product_respects_since(db):
    await add_interaction(db, "u1", "a", age=timedelta(days=10))
    await add_interaction(db, "u2", "b", age=timedelta(hours=1))
    log = InteractionLog(db)

    counts = await log.count_by_product(since=log.cutoff() + timedelta(days=25))

    assert dict(counts) == {"b": 1}


async def test_distinct_user_ids_excludes_caller(db):
    await add_interaction(db, "u1", "p")
    await add_interaction(db, "u2", "p")
    await add_interaction(db, "u3", "q")

    users = await InteractionLog(db).distinct_user_ids(["p"], excluding_user_id="u1")

    assert users == ["u2"]


async def test_product_ids_for_users_newest_first_and_bounded(db):
    await add_interaction(db, "v", "old", age=timedelta(days=3))
    await add_interaction(db, "v", "seen", age=timedelta(days=2))
    await add_interaction(db, "v", "new", age=timedelta(days=1))
    await add_interaction(db, "v", "new", age=timedelta(hours=1))

    log = InteractionLog(db)
    assert await log.product_ids_for_users(["v"], excluding_product_ids=["seen"], limit=5) == ["new", "old"]
    assert await log.product_ids_for_users(["v"], excluding_product_ids=[], limit=1) == ["new"]


async def test_recent_filters_by_type(db):
    await add_interaction(db, "u1", "a", type="view", age=timedelta(hours=3))
    await add_interaction(db, "u1", "b", type="cart", age=timedelta(hours=2))
    await add_interaction(db, "u1", "c", type="view", age=timedelta(hours=1))

    views = await InteractionLog(db).recent("u1", 6, type=InteractionType.VIEW)

    assert [v.product_id for v in views] == ["c", "a"]
