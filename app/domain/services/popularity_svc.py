import time
import logging
from typing import List, Optional

from app.domain.models.product import RecommendationItem
from app.domain.repositories.interaction_repo import InteractionLog
from app.domain.repositories.product_repo import ProductRepo
from app.domain.services.constants import (
    REASON_NEW_ARRIVALS,
    REASON_TRENDING,
    SCORE_NEW_ARRIVALS,
    SCORE_TRENDING,
)
from app.domain.services.fallback import first_available
from app.domain.services.ranking import to_items, top_keys

logger = logging.getLogger(__name__)


async def _trending(products: ProductRepo, log: InteractionLog, limit: int) -> Optional[List[RecommendationItem]]:
    if await log.total_count() == 0:
        logger.info("popular no interactions in log")
        return None

    counts = await log.count_by_product(since=log.cutoff())
    ranked_ids = top_keys(counts, limit)
    resolved = await products.get_many_by_product_ids(ranked_ids)
    logger.debug("popular ranked=%s resolved=%s", ranked_ids, [p.product_id for p in resolved])
    if not resolved:
        # every counted product is gone from the catalog
        logger.info("popular ranked set empty after resolve (ranked=%s)", len(ranked_ids))
        return None
    return to_items(resolved, reason=REASON_TRENDING, score=SCORE_TRENDING)


async def _new_arrivals(products: ProductRepo, limit: int) -> List[RecommendationItem]:
    newest = await products.newest(limit)
    return to_items(newest, reason=REASON_NEW_ARRIVALS, score=SCORE_NEW_ARRIVALS)


async def get_popular_products(db, limit: int = 6) -> List[RecommendationItem]:
    """
    Products ranked by interaction volume over the retention window.
    Terminal fallback for every other engine: with no usable interaction data
    it serves the newest products instead ("New arrivals").
    """
    t0 = time.perf_counter()
    logger.info("popular start limit=%s", limit)
    products = ProductRepo(db)
    log = InteractionLog(db)

    items = await first_available(
        lambda: _trending(products, log, limit),
        lambda: _new_arrivals(products, limit),
    )

    logger.info(
        "popular done items=%s reason=%s total_time=%.3fs",
        len(items), items[0].reason if items else None, time.perf_counter() - t0,
    )
    return items
