# app/domain/services/bought_together_svc.py
import time
import logging
from typing import List, Optional

from app.core.config import get_settings
from app.domain.models.product import RecommendationItem
from app.domain.repositories.order_repo import OrderRepo
from app.domain.repositories.product_repo import ProductRepo
from app.domain.services.constants import REASON_BOUGHT_TOGETHER, SCORE_BOUGHT_TOGETHER
from app.domain.services.filters import parse_identifier
from app.domain.services.ranking import co_occurrence, top_keys

logger = logging.getLogger(__name__)


async def get_bought_together_products(
    db,
    product_id: Optional[str],
    limit: Optional[int] = None,
) -> List[RecommendationItem]:
    """
    Products most often ordered together with `product_id`.

    Counts are taken over the orders that contain the product (newest first,
    bounded scan); equal counts keep the order in which products were first
    met. No co-occurrence means an empty list: there is deliberately no
    popularity fallback here.
    """
    t0 = time.perf_counter()
    limit = limit if limit is not None else get_settings().bought_together_limit
    pid = parse_identifier(product_id)
    if pid is None:
        logger.info("bought_together invalid product_id=%r", product_id)
        return []

    orders = await OrderRepo(db).find_containing(pid)
    counts = co_occurrence(orders, pid)
    if not counts:
        logger.info("bought_together no co-purchases product_id=%s orders=%s", pid, len(orders))
        return []

    ranked_ids = top_keys(counts, limit)
    logger.debug("bought_together product_id=%s ranked=%s", pid, [(i, counts[i]) for i in ranked_ids])

    products = await ProductRepo(db).get_many_by_product_ids(ranked_ids)
    items = [
        RecommendationItem(product=p, reason=REASON_BOUGHT_TOGETHER, match_score=SCORE_BOUGHT_TOGETHER)
        for p in products
    ]

    logger.info(
        "bought_together done product_id=%s orders=%s items=%s total_time=%.3fs",
        pid, len(orders), len(items), time.perf_counter() - t0,
    )
    return items
