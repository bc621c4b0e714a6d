# app/domain/repositories/order_repo.py

from __future__ import annotations
import logging
from typing import List, Optional
from motor.motor_asyncio import AsyncIOMotorDatabase
from pydantic import ValidationError
from pymongo import DESCENDING
from app.core.config import get_settings
from app.db.mongo import store_errors
from app.domain.models.product import Order

logger = logging.getLogger(__name__)


class OrderRepo:
    """
    Read-only order history ('orders' collection).
    Each order embeds its lines: items = [{product_id, quantity, price}, ...]
    """

    def __init__(self, db: AsyncIOMotorDatabase, collection_name: Optional[str] = None):
        self.col = db[collection_name or get_settings().orders_collection]

    async def find_containing(self, product_id: str, limit: Optional[int] = None) -> List[Order]:
        """Orders with at least one line for `product_id`, newest first. Malformed orders are skipped."""
        limit = limit or get_settings().max_scan_docs
        with store_errors("orders.find_containing"):
            cursor = self.col.find(
                {"items.product_id": product_id},
                {"user_id": 1, "items": 1, "created_at": 1},
                sort=[("created_at", DESCENDING), ("_id", DESCENDING)],
                limit=limit,
            )
            docs = await cursor.to_list(length=None)

        orders: List[Order] = []
        for d in docs:
            try:
                orders.append(
                    Order(
                        order_id=str(d.get("_id")),
                        user_id=d.get("user_id"),
                        items=[it for it in d.get("items") or [] if it.get("product_id")],
                        created_at=d.get("created_at"),
                    )
                )
            except ValidationError as e:
                logger.warning("skipping invalid order document _id=%s errors=%s", d.get("_id"), e.error_count())
        return orders
