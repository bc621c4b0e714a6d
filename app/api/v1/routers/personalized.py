from __future__ import annotations
from typing import Optional
from fastapi import APIRouter, Depends, Query
from app.api.deps import mongo_db

from app.domain.models.product import PersonalizedHome
from app.domain.services.recommend_svc import get_personalized_home

import logging
logger = logging.getLogger(__name__)

router = APIRouter(prefix="/personalized", tags=["personalized"])

@router.get("/home", response_model=PersonalizedHome)
async def personalized_home(
    user_id: Optional[str] = Query(None, alias="userId"),
    db = Depends(mongo_db),
):
    """
    Home page sections: recommendations, trending, recentlyViewed,
    categorySuggestions. Anonymous callers get trending + general picks.
    """
    logger.info("Request: personalized_home user_id=%s", user_id)
    home = await get_personalized_home(db, user_id)
    logger.info(
        "Response: personalized_home user_id=%s recommendations=%s trending=%s",
        user_id, len(home.recommendations), len(home.trending),
    )
    return home
