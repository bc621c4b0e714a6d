import math
import time
import logging
from typing import List, Optional

from app.domain.models.product import RecommendationItem
from app.domain.services.collaborative_svc import get_collaborative_products
from app.domain.services.ranking import merge_last_wins, sort_by_score
from app.domain.services.similar_products_svc import get_similar_products

logger = logging.getLogger(__name__)


async def get_hybrid_products(
    db,
    user_id: Optional[str] = None,
    product_id: Optional[str] = None,
    category: Optional[str] = None,
    limit: int = 6,
) -> List[RecommendationItem]:
    """
    Collaborative + content-based, half of `limit` each, merged by product id.

    Collision rule: content-based items are merged after collaborative ones and
    win on a shared product id (their reason/score survive), while the entry
    keeps the collaborative position. The merged list is then stably sorted by
    score and cut to `limit`.
    """
    t0 = time.perf_counter()
    half = math.ceil(limit / 2)
    logger.info(
        "hybrid start user_id=%s product_id=%s category=%s limit=%s half=%s",
        user_id, product_id, category, limit, half,
    )

    collaborative = await get_collaborative_products(db, user_id, half)
    content = await get_similar_products(db, product_id, category, half)

    merged = merge_last_wins(collaborative, content)
    items = sort_by_score(merged)[:limit]

    logger.info(
        "hybrid done collaborative=%s content=%s merged=%s items=%s total_time=%.3fs",
        len(collaborative), len(content), len(merged), len(items), time.perf_counter() - t0,
    )
    return items
