# app/api/v1/routers/interactions.py
from fastapi import APIRouter, Depends, status
import logging

from app.api.deps import current_user_id, mongo_db
from app.api.v1.schemas.reco import ErrorOut, InteractionAck, InteractionIn
from app.domain.services.tracking_svc import record_interaction

logger = logging.getLogger(__name__)

router = APIRouter(tags=["interactions"])

@router.post(
    "/interactions",
    status_code=status.HTTP_201_CREATED,
    response_model=InteractionAck,
    responses={400: {"model": ErrorOut}, 503: {"model": ErrorOut}},
)
async def track_interaction(
    body: InteractionIn,
    user_id: str = Depends(current_user_id),
    db = Depends(mongo_db),
) -> InteractionAck:
    """
    Record one user/product event. Validation and store errors are not
    swallowed here; the app-level handlers turn them into 400/503.
    """
    logger.info("Request: track_interaction user_id=%s product_id=%s type=%s", user_id, body.product_id, body.type)
    interaction = await record_interaction(db, user_id, body.product_id, body.type)
    return InteractionAck(interaction_id=interaction.interaction_id)
