"""
Pure ranking helpers: group-by/count/sort over already-fetched data.

Nothing here touches a store, so the ranking rules are testable without
Mongo and do not depend on aggregation-pipeline semantics.
"""
from __future__ import annotations

from collections import Counter
from typing import Callable, Iterable, List, Sequence

from app.domain.models.product import Order, Product, RecommendationItem


def ordered_unique(values: Iterable[str]) -> List[str]:
    """Drop repeats, keeping the first occurrence of each value."""
    seen = set()
    out: List[str] = []
    for v in values:
        if v is None or v in seen:
            continue
        seen.add(v)
        out.append(v)
    return out


def count_by_key(values: Iterable[str]) -> Counter:
    """Occurrences per key. Counter keeps first-seen order for equal counts."""
    counts: Counter = Counter()
    for v in values:
        if v is not None:
            counts[v] += 1
    return counts


def top_keys(counts: Counter, limit: int) -> List[str]:
    """Keys by count descending; ties keep first-seen order (stable sort)."""
    if limit <= 0:
        return []
    ranked = sorted(counts.items(), key=lambda kv: kv[1], reverse=True)
    return [k for k, _ in ranked[:limit]]


def co_occurrence(orders: Iterable[Order], product_id: str) -> Counter:
    """
    For each order containing `product_id`, count every other line in it.
    A product on several lines of one order counts once per line.
    """
    counts: Counter = Counter()
    for order in orders:
        ids = [item.product_id for item in order.items]
        if product_id not in ids:
            continue
        for other in ids:
            if other != product_id:
                counts[other] += 1
    return counts


def to_items(
    products: Iterable[Product],
    *,
    reason: Callable[[Product], str] | str,
    score: float,
) -> List[RecommendationItem]:
    """Tag products with a reason and the strategy's fixed score."""
    return [
        RecommendationItem(
            product=p,
            reason=reason(p) if callable(reason) else reason,
            match_score=score,
        )
        for p in products
    ]


def merge_last_wins(*groups: Sequence[RecommendationItem]) -> List[RecommendationItem]:
    """
    Merge item lists into one list keyed by product id.

    Groups are merged in argument order. On an id collision the item from the
    later group replaces the earlier one's reason/score, but the entry keeps
    the position where the id was first inserted.
    """
    merged: dict[str, RecommendationItem] = {}
    for group in groups:
        for item in group:
            merged[item.product.product_id] = item  # dict assignment keeps the original slot
    return list(merged.values())


def sort_by_score(items: Iterable[RecommendationItem]) -> List[RecommendationItem]:
    """Score descending; equal scores keep their current order."""
    return sorted(items, key=lambda it: it.match_score, reverse=True)
