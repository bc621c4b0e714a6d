"""Shared fixtures: an in-memory Motor database plus seeding helpers."""

import uuid
from datetime import timedelta

import pytest
from mongomock_motor import AsyncMongoMockClient

from app.utils.clock import utcnow

# Fixed reference point for product creation times
T0 = utcnow().replace(microsecond=0) - timedelta(days=365)


@pytest.fixture
def db():
    """Fresh in-memory database per test."""
    client = AsyncMongoMockClient()
    return client[f"shopreco_test_{uuid.uuid4().hex[:8]}"]


def product_doc(product_id, category="Electronics", minutes=0, price=10.0, **extra):
    """Catalog document created `minutes` after T0."""
    doc = {
        "product_id": product_id,
        "name": f"Product {product_id}",
        "category": category,
        "price": price,
        "stock": 5,
        "created_at": T0 + timedelta(minutes=minutes),
    }
    doc.update(extra)
    return doc


async def add_products(db, *docs):
    await db["products"].insert_many([dict(d) for d in docs])


async def add_interaction(db, user_id, product_id, type="view", age=timedelta(0)):
    """Insert an interaction created `age` ago."""
    await db["interactions"].insert_one(
        {
            "user_id": user_id,
            "product_id": product_id,
            "type": type,
            "created_at": utcnow() - age,
        }
    )


async def add_order(db, *product_ids, user_id="buyer", minutes=0):
    await db["orders"].insert_one(
        {
            "user_id": user_id,
            "items": [{"product_id": pid, "quantity": 1, "price": 10.0} for pid in product_ids],
            "total_amount": 10.0 * len(product_ids),
            "created_at": T0 + timedelta(minutes=minutes),
        }
    )


def ids(items):
    """Product ids of a list of RecommendationItem."""
    return [it.product.product_id for it in items]
