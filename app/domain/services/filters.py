import re
from typing import Optional

from app.domain.models.product import InteractionType
from app.domain.services.constants import ALL_ALGORITHMS, DEFAULT_ALGORITHM, FALLBACK_ALGORITHM

# Ids are opaque strings (Mongo ObjectId hex, UUIDs, SKUs...)
_ID_RE = re.compile(r"^[A-Za-z0-9][A-Za-z0-9_.:\-]{0,127}$")

# Placeholders front-ends send when a value is not set
_NULLISH = {"undefined", "null", "none", "nan"}


def parse_identifier(raw) -> Optional[str]:
    """
    Parse a user/product id once at the engine entry point.
    Returns the normalized id, or None when the signal is absent or malformed.
    Downstream code only ever sees a valid id or None.
    """
    if raw is None:
        return None
    s = str(raw).strip()
    if not s or s.lower() in _NULLISH:
        return None
    if not _ID_RE.match(s):
        return None
    return s


def parse_category(raw) -> Optional[str]:
    """Categories are free text; only blank/placeholder values are dropped."""
    if raw is None:
        return None
    s = str(raw).strip()
    if not s or s.lower() in _NULLISH:
        return None
    return s


def parse_interaction_type(raw) -> Optional[InteractionType]:
    if isinstance(raw, InteractionType):
        return raw
    if raw is None:
        return None
    try:
        return InteractionType(str(raw).strip().lower())
    except ValueError:
        return None


def parse_algorithm(raw) -> str:
    """
    Normalize the algorithm selector.
    Missing selects the default (hybrid); anything unrecognized is served
    by the content-based engine.
    """
    if raw is None:
        return DEFAULT_ALGORITHM
    s = str(raw).strip().lower()
    return s if s in ALL_ALGORITHMS else FALLBACK_ALGORITHM
