import time
import logging
from typing import List, Optional

from app.domain.models.product import RecommendationItem
from app.domain.repositories.interaction_repo import InteractionLog
from app.domain.repositories.product_repo import ProductRepo
from app.domain.services.constants import REASON_COLLABORATIVE, SCORE_COLLABORATIVE
from app.domain.services.fallback import first_available
from app.domain.services.filters import parse_identifier
from app.domain.services.popularity_svc import get_popular_products
from app.domain.services.ranking import to_items

logger = logging.getLogger(__name__)


async def _similar_users_products(db, user_id: Optional[str], limit: int) -> Optional[List[RecommendationItem]]:
    """
    Products liked by users whose interaction sets overlap this user's.
    Returns None at each "no signal" point so the caller can fall back.
    """
    if user_id is None:
        logger.info("collaborative no valid user_id, falling back to popular")
        return None

    log = InteractionLog(db)

    # S: what this user touched
    seen = await log.distinct_product_ids(user_id)
    if not seen:
        logger.info("collaborative user_id=%s has no interactions, falling back to popular", user_id)
        return None

    # U: other users who touched anything in S
    neighbours = await log.distinct_user_ids(seen, excluding_user_id=user_id)
    if not neighbours:
        logger.info("collaborative user_id=%s has no similar users, falling back to popular", user_id)
        return None

    # what U touched that this user has not
    candidate_ids = await log.product_ids_for_users(neighbours, excluding_product_ids=seen, limit=limit)
    if not candidate_ids:
        logger.info("collaborative user_id=%s no unseen candidates, falling back to popular", user_id)
        return None

    logger.debug(
        "collaborative user_id=%s seen=%s neighbours=%s candidates=%s",
        user_id, len(seen), len(neighbours), candidate_ids,
    )
    resolved = await ProductRepo(db).get_many_by_product_ids(candidate_ids)
    return to_items(resolved[:limit], reason=REASON_COLLABORATIVE, score=SCORE_COLLABORATIVE)


async def get_collaborative_products(db, user_id: Optional[str] = None, limit: int = 6) -> List[RecommendationItem]:
    """
    User-based collaborative filtering over the interaction log, with
    popularity as the fallback whenever there is no behavioural signal.
    """
    t0 = time.perf_counter()
    uid = parse_identifier(user_id)
    logger.info("collaborative start user_id=%s limit=%s", uid, limit)

    items = await first_available(
        lambda: _similar_users_products(db, uid, limit),
        lambda: get_popular_products(db, limit),
    )

    logger.info(
        "collaborative done user_id=%s items=%s total_time=%.3fs",
        uid, len(items), time.perf_counter() - t0,
    )
    return items
