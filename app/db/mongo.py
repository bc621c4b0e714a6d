# app/db/mongo.py
import logging
from contextlib import contextmanager
from typing import Iterator

import certifi
from motor.motor_asyncio import AsyncIOMotorClient, AsyncIOMotorDatabase
from pymongo import ASCENDING, DESCENDING
from pymongo.errors import PyMongoError

from app.core.config import get_settings
from app.core.errors import StoreUnavailable

logger = logging.getLogger(__name__)

_client: AsyncIOMotorClient | None = None
_db: AsyncIOMotorDatabase | None = None


def get_db() -> AsyncIOMotorDatabase:
    if _db is None:
        raise StoreUnavailable("mongo.get_db")
    return _db


@contextmanager
def store_errors(operation: str) -> Iterator[None]:
    """
    Re-raise any driver failure inside the block as StoreUnavailable,
    so callers can tell "store down" apart from "no data".
    """
    try:
        yield
    except PyMongoError as e:
        logger.warning("store error op=%s err=%s", operation, e)
        raise StoreUnavailable(operation, e) from e


def _new_client() -> AsyncIOMotorClient:
    settings = get_settings()
    kwargs = dict(
        uuidRepresentation="standard",
        serverSelectionTimeoutMS=6000,
        connectTimeoutMS=6000,
    )
    if settings.MONGO_TLS:
        # explicit CA bundle; container images often lack system roots
        kwargs.update(tls=True, tlsCAFile=certifi.where())
    return AsyncIOMotorClient(settings.MONGO_URI, **kwargs)


async def connect():
    """
    Create the Motor client and ping it.
    A failed ping does not abort startup: the client stays lazy and the first
    real query retries. Read endpoints degrade to empty results meanwhile.
    """
    global _client, _db
    settings = get_settings()

    _client = _new_client()
    _db = _client[settings.MONGO_DB]
    try:
        await _client.admin.command("ping")
        logger.info("Mongo connected (ping ok) db=%s", settings.MONGO_DB)
    except PyMongoError as e:
        logger.warning("Mongo ping at startup failed, will connect lazily: %s", e)
        return

    try:
        await ensure_indexes(_db)
    except PyMongoError as e:
        logger.warning("Mongo index creation failed: %s", e)


async def disconnect():
    global _client, _db
    if _client:
        _client.close()
        logger.info("Mongo disconnected")
    _client = None
    _db = None


async def ensure_indexes(db: AsyncIOMotorDatabase) -> None:
    """
    Indexes backing the engine queries, plus the TTL index that makes
    interactions expire after the retention window.
    """
    settings = get_settings()
    interactions = db[settings.interactions_collection]
    await interactions.create_index(
        [("created_at", ASCENDING)],
        expireAfterSeconds=settings.interaction_ttl_days * 24 * 3600,
        name="interactions_ttl",
    )
    await interactions.create_index([("user_id", ASCENDING), ("created_at", DESCENDING)])
    await interactions.create_index([("product_id", ASCENDING), ("created_at", DESCENDING)])

    products = db[settings.products_collection]
    await products.create_index([("product_id", ASCENDING)], unique=True)
    await products.create_index([("category", ASCENDING), ("created_at", DESCENDING)])
    await products.create_index([("created_at", DESCENDING)])

    await db[settings.orders_collection].create_index([("items.product_id", ASCENDING)])
    logger.info("Mongo indexes ensured")
