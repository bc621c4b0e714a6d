import logging
from typing import Optional

from app.domain.models.product import Interaction
from app.domain.repositories.interaction_repo import InteractionLog

logger = logging.getLogger(__name__)


async def record_interaction(db, user_id: Optional[str], product_id: Optional[str], type: Optional[str]) -> Interaction:
    """
    The only write path of the engine. Unlike the read paths, failures are
    not absorbed: ValidationError and StoreUnavailable reach the caller.
    """
    interaction = await InteractionLog(db).record(user_id, product_id, type)
    logger.info(
        "interaction tracked user_id=%s product_id=%s type=%s",
        interaction.user_id, interaction.product_id, interaction.type.value,
    )
    return interaction
