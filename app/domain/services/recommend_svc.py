"""
Entry points used by the request-handling layer.

Read paths never raise past this module: a store failure degrades to an
empty result (see fallback.degrade).
"""
import logging
from typing import List, Optional

from app.core.config import get_settings
from app.domain.models.product import PersonalizedHome, RecommendationItem
from app.domain.services import personalized_home_svc
from app.domain.services.bought_together_svc import get_bought_together_products
from app.domain.services.collaborative_svc import get_collaborative_products
from app.domain.services.constants import ALGO_COLLABORATIVE, ALGO_HYBRID
from app.domain.services.fallback import degrade
from app.domain.services.filters import parse_algorithm
from app.domain.services.hybrid_svc import get_hybrid_products
from app.domain.services.similar_products_svc import get_similar_products

logger = logging.getLogger(__name__)


async def get_recommendations(
    db,
    algorithm: Optional[str] = None,
    product_id: Optional[str] = None,
    category: Optional[str] = None,
    user_id: Optional[str] = None,
    limit: Optional[int] = None,
) -> List[RecommendationItem]:
    algo = parse_algorithm(algorithm)
    limit = limit or get_settings().recommendations_limit
    logger.info("Request: recommendations algorithm=%s (raw=%r) limit=%s", algo, algorithm, limit)

    if algo == ALGO_COLLABORATIVE:
        work = get_collaborative_products(db, user_id, limit)
    elif algo == ALGO_HYBRID:
        work = get_hybrid_products(db, user_id, product_id, category, limit)
    else:
        work = get_similar_products(db, product_id, category, limit)

    return await degrade(f"recommendations.{algo}", work, [])


async def get_personalized_home(db, user_id: Optional[str] = None) -> PersonalizedHome:
    return await degrade(
        "personalized_home",
        personalized_home_svc.get_personalized_home(db, user_id),
        PersonalizedHome(),
    )


async def get_bought_together(db, product_id: Optional[str]) -> List[RecommendationItem]:
    return await degrade("bought_together", get_bought_together_products(db, product_id), [])
