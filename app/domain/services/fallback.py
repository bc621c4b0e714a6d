"""
Fallback combinators for the ranking engines.

A strategy is a zero-argument coroutine function returning either a list
(the answer, possibly empty) or None ("no data here, try the next one").
Store failures are not "no data": they surface as StoreUnavailable and are
only absorbed at the engine boundary by `degrade`.
"""
from __future__ import annotations

import logging
from typing import Awaitable, Callable, List, Optional, TypeVar

from app.core.errors import StoreUnavailable

logger = logging.getLogger(__name__)

T = TypeVar("T")

Strategy = Callable[[], Awaitable[Optional[List[T]]]]


async def first_available(*strategies: Strategy) -> List[T]:
    """Run strategies in order; return the first non-None result, else []."""
    for strategy in strategies:
        result = await strategy()
        if result is not None:
            return result
    return []


async def degrade(operation: str, awaitable: Awaitable[T], default: T) -> T:
    """
    Await a read path; if the store is unavailable, log and return `default`
    so recommendation endpoints answer with an empty result instead of an error.
    """
    try:
        return await awaitable
    except StoreUnavailable as e:
        logger.warning("%s degraded to default: %s", operation, e.message)
        return default
