# app/api/v1/routers/recommendations.py
from fastapi import APIRouter, Depends, Query
from typing import List, Optional
import time
import logging

from app.api.deps import mongo_db
from app.domain.models.product import RecommendationItem
from app.domain.services.constants import DEFAULT_ALGORITHM
from app.domain.services.recommend_svc import get_bought_together, get_recommendations

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/recommendations", tags=["recommendations"])

@router.get("", response_model=List[RecommendationItem])
async def recommendations(
    algorithm: str = Query(DEFAULT_ALGORITHM, description="content-based | collaborative | hybrid"),
    product_id: Optional[str] = Query(None, alias="productId"),
    category: Optional[str] = Query(None),
    user_id: Optional[str] = Query(None, alias="userId"),
    limit: Optional[int] = Query(None, ge=1, le=50),
    db = Depends(mongo_db),
):
    start_time = time.perf_counter()
    items = await get_recommendations(
        db,
        algorithm=algorithm,
        product_id=product_id,
        category=category,
        user_id=user_id,
        limit=limit,
    )
    logger.info(
        "Response: recommendations algorithm=%s count=%s elapsed_time=%.4fs",
        algorithm, len(items), time.perf_counter() - start_time,
    )
    return items

@router.get("/bought-together/{product_id}", response_model=List[RecommendationItem])
async def bought_together(
    product_id: str,
    db = Depends(mongo_db),
):
    """Up to 4 products most often ordered together with `product_id`."""
    start_time = time.perf_counter()
    items = await get_bought_together(db, product_id)
    logger.info(
        "Response: bought_together product_id=%s count=%s elapsed_time=%.4fs",
        product_id, len(items), time.perf_counter() - start_time,
    )
    return items
