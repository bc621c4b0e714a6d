import time
import logging
from typing import List, Optional

from app.domain.models.product import Product, RecommendationItem
from app.domain.repositories.product_repo import ProductRepo
from app.domain.services.constants import REASON_CONTENT, SCORE_CONTENT
from app.domain.services.filters import parse_category, parse_identifier
from app.domain.services.ranking import to_items

logger = logging.getLogger(__name__)


def _content_reason(product: Product) -> str:
    return REASON_CONTENT.format(category=product.category or "all categories")


async def get_similar_products(
    db,
    product_id: Optional[str] = None,
    category: Optional[str] = None,
    limit: int = 6,
) -> List[RecommendationItem]:
    """
    Content-based filtering: newest products sharing the anchor's category.
    - product_id resolves -> its category, anchor excluded
    - else category given -> that category
    - else -> newest products overall
    An unknown or malformed product_id is not an error; it just drops to the
    next branch.
    """
    t0 = time.perf_counter()
    products = ProductRepo(db)
    pid = parse_identifier(product_id)
    cat = parse_category(category)

    anchor = await products.get_by_product_id(pid) if pid else None
    if anchor is not None:
        branch = "anchor"
        found = await products.newest(limit, category=anchor.category, exclude_product_id=anchor.product_id)
    elif cat is not None:
        branch = "category"
        found = await products.newest(limit, category=cat)
    else:
        branch = "unfiltered"
        found = await products.newest(limit)

    items = to_items(found, reason=_content_reason, score=SCORE_CONTENT)
    logger.info(
        "similar done branch=%s product_id=%s category=%s items=%s total_time=%.3fs",
        branch, pid, anchor.category if anchor else cat, len(items), time.perf_counter() - t0,
    )
    return items
