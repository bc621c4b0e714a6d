import logging
import time
from typing import List, Optional

from app.core.config import get_settings
from app.domain.models.product import InteractionType, PersonalizedHome, Product
from app.domain.repositories.interaction_repo import InteractionLog
from app.domain.repositories.product_repo import ProductRepo
from app.domain.services.fallback import degrade
from app.domain.services.filters import parse_identifier
from app.domain.services.hybrid_svc import get_hybrid_products
from app.domain.services.popularity_svc import get_popular_products
from app.domain.services.ranking import count_by_key, ordered_unique, top_keys
from app.domain.services.similar_products_svc import get_similar_products

logger = logging.getLogger(__name__)


async def get_recently_viewed(db, user_id: str, limit: int = 6) -> List[Product]:
    """
    Products from the user's last `limit` view events, newest first.
    Deleted products are skipped and a product viewed twice appears once.
    """
    views = await InteractionLog(db).recent(user_id, limit, type=InteractionType.VIEW)
    ids = ordered_unique(v.product_id for v in views)
    return await ProductRepo(db).get_many_by_product_ids(ids)


async def get_favorite_categories(db, user_id: str, limit: int = 3) -> List[str]:
    """Categories of the products the user touched, most frequent first."""
    touched = await InteractionLog(db).product_ids_for_user(user_id)
    if not touched:
        return []
    products = await ProductRepo(db).get_many_by_product_ids(ordered_unique(touched))
    category_of = {p.product_id: p.category for p in products if p.category}
    counts = count_by_key(category_of.get(pid) for pid in touched)
    return top_keys(counts, limit)


async def get_personalized_home(db, user_id: Optional[str] = None) -> PersonalizedHome:
    """
    Home page payload. Each section degrades on its own: a store failure in one
    section leaves it empty without affecting the others.
    Anonymous callers only get trending plus the unfiltered recommendations.
    """
    t0 = time.perf_counter()
    settings = get_settings()
    uid = parse_identifier(user_id)
    logger.info("home start user_id=%s", uid)

    recommendations = []
    recently_viewed: List[Product] = []
    category_suggestions: List[str] = []

    if uid is not None:
        recommendations = await degrade(
            "home.recommendations",
            get_hybrid_products(db, uid, None, None, settings.home_recommendations_limit),
            [],
        )
        recently_viewed = await degrade(
            "home.recently_viewed",
            get_recently_viewed(db, uid, settings.home_section_limit),
            [],
        )
        category_suggestions = await degrade(
            "home.category_suggestions",
            get_favorite_categories(db, uid, settings.category_suggestions_limit),
            [],
        )

    trending = await degrade("home.trending", get_popular_products(db, settings.home_section_limit), [])

    if not recommendations:
        recommendations = await degrade(
            "home.recommendations_fallback",
            get_similar_products(db, None, None, settings.home_recommendations_limit),
            [],
        )

    home = PersonalizedHome(
        recommendations=recommendations,
        trending=trending,
        recently_viewed=recently_viewed,
        category_suggestions=category_suggestions,
    )
    logger.info(
        "home done user_id=%s recommendations=%s trending=%s recently_viewed=%s categories=%s total_time=%.3fs",
        uid, len(home.recommendations), len(home.trending), len(home.recently_viewed),
        len(home.category_suggestions), time.perf_counter() - t0,
    )
    return home
