# app/domain/repositories/product_repo.py

from __future__ import annotations
import logging
from typing import Iterable, Optional, List, Sequence
from motor.motor_asyncio import AsyncIOMotorDatabase
from pydantic import ValidationError
from pymongo import ASCENDING, DESCENDING
from app.core.config import get_settings
from app.db.mongo import store_errors
from app.domain.models.product import Product

logger = logging.getLogger(__name__)

_NEWEST_FIRST = [("created_at", DESCENDING), ("product_id", ASCENDING)]


def _valid_products(docs: Iterable[dict]) -> List[Product]:
    """Validate catalog documents, skipping (and logging) malformed ones."""
    products: List[Product] = []
    for doc in docs:
        try:
            products.append(Product.model_validate(doc))
        except ValidationError as e:
            logger.warning(
                "skipping invalid product document product_id=%s errors=%s",
                doc.get("product_id"), e.error_count(),
            )
    return products


class ProductRepo:
    """
    Read-only catalog backed by the 'products' collection.
    Products are addressed by their business key `product_id`, never by `_id`.
    """

    def __init__(self, db: AsyncIOMotorDatabase, collection_name: Optional[str] = None):
        self.col = db[collection_name or get_settings().products_collection]

    async def get_by_product_id(self, product_id: str) -> Optional[Product]:
        with store_errors("products.find_one"):
            doc = await self.col.find_one({"product_id": product_id}, {"_id": 0})
        found = _valid_products([doc] if doc else [])
        return found[0] if found else None

    async def get_many_by_product_ids(self, ids: Sequence[str]) -> List[Product]:
        """
        Resolve ids to products, keeping the order of `ids`.
        Ids with no matching product (deleted, never existed, malformed) are dropped.
        """
        if not ids:
            return []
        with store_errors("products.find_many"):
            cursor = self.col.find({"product_id": {"$in": list(ids)}}, {"_id": 0}, limit=len(ids))
            docs = await cursor.to_list(length=None)
        by_id = {p.product_id: p for p in _valid_products(docs)}
        return [by_id[pid] for pid in ids if pid in by_id]

    async def newest(
        self,
        limit: int,
        *,
        category: Optional[str] = None,
        exclude_product_id: Optional[str] = None,
    ) -> List[Product]:
        """Most recently created products, optionally within one category."""
        if limit <= 0:
            return []  # Mongo treats limit=0 as "no limit"
        query: dict = {}
        if category is not None:
            query["category"] = category
        if exclude_product_id is not None:
            query["product_id"] = {"$ne": exclude_product_id}
        with store_errors("products.newest"):
            cursor = self.col.find(query, {"_id": 0}, sort=_NEWEST_FIRST, limit=limit)
            docs = await cursor.to_list(length=None)
        return _valid_products(docs)
