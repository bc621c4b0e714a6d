# app/domain/repositories/interaction_repo.py

from __future__ import annotations
import logging
from collections import Counter
from datetime import datetime, timedelta
from typing import List, Optional, Sequence
from motor.motor_asyncio import AsyncIOMotorDatabase
from pymongo import DESCENDING
from app.core.config import get_settings
from app.core.errors import ValidationError
from app.db.mongo import store_errors
from app.domain.models.product import Interaction, InteractionType
from app.domain.services.filters import parse_identifier, parse_interaction_type
from app.domain.services.ranking import count_by_key, ordered_unique
from app.utils.clock import utcnow

logger = logging.getLogger(__name__)

_NEWEST_FIRST = [("created_at", DESCENDING), ("_id", DESCENDING)]

class InteractionLog:
    """
    Append-only log of user/product events in the 'interactions' collection.

    Documents expire through the TTL index on `created_at`. Mongo reaps expired
    documents lazily (about once a minute), so every read also applies the
    retention cutoff itself. Reads are capped at `max_scan_docs` documents.
    """

    def __init__(
        self,
        db: AsyncIOMotorDatabase,
        collection_name: Optional[str] = None,
        *,
        ttl_days: Optional[int] = None,
        max_scan_docs: Optional[int] = None,
    ):
        settings = get_settings()
        self.col = db[collection_name or settings.interactions_collection]
        self.ttl_days = ttl_days if ttl_days is not None else settings.interaction_ttl_days
        self.max_scan_docs = max_scan_docs or settings.max_scan_docs

    def cutoff(self) -> datetime:
        """Oldest creation time still inside the retention window."""
        return utcnow() - timedelta(days=self.ttl_days)

    def _live(self, query: Optional[dict] = None, since: Optional[datetime] = None) -> dict:
        floor = self.cutoff()
        if since is not None and since > floor:
            floor = since
        return {**(query or {}), "created_at": {"$gte": floor}}

    # ----- Write path --------------------------------------------------------

    async def record(self, user_id, product_id, type) -> Interaction:
        """
        Append one interaction. Raises ValidationError on missing/malformed
        ids or an unknown type; store failures propagate as StoreUnavailable.
        """
        uid = parse_identifier(user_id)
        if uid is None:
            raise ValidationError("userId is required", field="userId", value=user_id)
        pid = parse_identifier(product_id)
        if pid is None:
            raise ValidationError("productId is required", field="productId", value=product_id)
        kind = parse_interaction_type(type)
        if kind is None:
            allowed = ", ".join(t.value for t in InteractionType)
            raise ValidationError(f"type must be one of: {allowed}", field="type", value=type)

        doc = {"user_id": uid, "product_id": pid, "type": kind.value, "created_at": utcnow()}
        with store_errors("interactions.insert_one"):
            res = await self.col.insert_one(doc)
        logger.debug("interaction recorded user_id=%s product_id=%s type=%s", uid, pid, kind.value)
        return Interaction(
            interaction_id=str(res.inserted_id),
            user_id=uid,
            product_id=pid,
            type=kind,
            created_at=doc["created_at"],
        )

    # ----- Read queries ------------------------------------------------------

    async def total_count(self) -> int:
        with store_errors("interactions.count"):
            return await self.col.count_documents(self._live())

    async def count_by_product(self, since: Optional[datetime] = None) -> Counter:
        """
        Interactions per product since `since` (clamped to the retention window).
        Counts the newest `max_scan_docs` events; equal counts keep the order in
        which products were first seen, i.e. most recent activity first.
        """
        with store_errors("interactions.count_by_product"):
            cursor = self.col.find(
                self._live(since=since),
                {"_id": 0, "product_id": 1},
                sort=_NEWEST_FIRST,
                limit=self.max_scan_docs,
            )
            docs = await cursor.to_list(length=None)
        return count_by_key(d.get("product_id") for d in docs)

    async def distinct_product_ids(self, user_id: str) -> List[str]:
        """Products the user interacted with (any type)."""
        with store_errors("interactions.distinct_product_ids"):
            ids = await self.col.distinct("product_id", self._live({"user_id": user_id}))
        return sorted(ids or [])

    async def distinct_user_ids(self, product_ids: Sequence[str], excluding_user_id: str) -> List[str]:
        """Other users who interacted with any of `product_ids`."""
        if not product_ids:
            return []
        query = {"product_id": {"$in": list(product_ids)}, "user_id": {"$ne": excluding_user_id}}
        with store_errors("interactions.distinct_user_ids"):
            ids = await self.col.distinct("user_id", self._live(query))
        return sorted(ids or [])

    async def product_ids_for_users(
        self,
        user_ids: Sequence[str],
        excluding_product_ids: Sequence[str],
        limit: int,
    ) -> List[str]:
        """
        Distinct products touched by `user_ids`, minus the excluded ones,
        most recently touched first, at most `limit`.
        """
        if not user_ids or limit <= 0:
            return []
        query = {
            "user_id": {"$in": list(user_ids)},
            "product_id": {"$nin": list(excluding_product_ids)},
        }
        with store_errors("interactions.product_ids_for_users"):
            cursor = self.col.find(
                self._live(query),
                {"_id": 0, "product_id": 1},
                sort=_NEWEST_FIRST,
                limit=self.max_scan_docs,
            )
            docs = await cursor.to_list(length=None)
        return ordered_unique(d.get("product_id") for d in docs)[:limit]

    async def recent(
        self,
        user_id: str,
        limit: int,
        type: Optional[InteractionType] = None,
    ) -> List[Interaction]:
        """The user's last `limit` interactions, newest first."""
        if limit <= 0:
            return []
        query: dict = {"user_id": user_id}
        if type is not None:
            query["type"] = type.value
        with store_errors("interactions.recent"):
            cursor = self.col.find(self._live(query), sort=_NEWEST_FIRST, limit=limit)
            docs = await cursor.to_list(length=None)
        return [
            Interaction(
                interaction_id=str(d.get("_id")),
                user_id=d["user_id"],
                product_id=d["product_id"],
                type=d["type"],
                created_at=d["created_at"],
            )
            for d in docs
        ]

    async def product_ids_for_user(self, user_id: str) -> List[str]:
        """Product id of each of the user's interactions (repeats kept), newest first."""
        with store_errors("interactions.product_ids_for_user"):
            cursor = self.col.find(
                self._live({"user_id": user_id}),
                {"_id": 0, "product_id": 1},
                sort=_NEWEST_FIRST,
                limit=self.max_scan_docs,
            )
            docs = await cursor.to_list(length=None)
        return [d["product_id"] for d in docs if d.get("product_id")]
