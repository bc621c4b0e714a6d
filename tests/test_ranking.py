"""Tests for the pure ranking helpers (no store involved)."""

from collections import Counter

from app.domain.models.product import Order, OrderItem, Product, RecommendationItem
from app.domain.services.ranking import (
    co_occurrence,
    count_by_key,
    merge_last_wins,
    ordered_unique,
    sort_by_score,
    to_items,
    top_keys,
)
from conftest import T0


def _product(pid, category="Electronics"):
    return Product(product_id=pid, name=pid, category=category, price=1.0, created_at=T0)


def _item(pid, reason, score):
    return RecommendationItem(product=_product(pid), reason=reason, match_score=score)


def _order(*pids):
    return Order(items=[OrderItem(product_id=p) for p in pids])


def test_ordered_unique_keeps_first_occurrence():
    assert ordered_unique(["b", "a", "b", None, "c", "a"]) == ["b", "a", "c"]


def test_top_keys_ties_keep_first_seen_order():
    counts = count_by_key(["x", "y", "z", "y", "z", "w"])
    # y and z tie at 2; y was seen first
    assert top_keys(counts, 3) == ["y", "z", "x"]


def test_top_keys_non_positive_limit():
    assert top_keys(Counter({"a": 3}), 0) == []


def test_co_occurrence_counts_every_line_and_skips_anchor():
    orders = [
        _order("X", "Y"),
        _order("X", "Y", "Y"),
        _order("X", "Z"),
        _order("Y", "Z"),  # no X: ignored
    ]
    counts = co_occurrence(orders, "X")
    assert counts == Counter({"Y": 3, "Z": 1})
    assert "X" not in counts


def test_merge_last_wins_keeps_first_position_with_later_attributes():
    collaborative = [_item("a", "collab", 0.9), _item("b", "collab", 0.9)]
    content = [_item("b", "content", 0.8), _item("c", "content", 0.8)]

    merged = merge_last_wins(collaborative, content)

    assert [i.product.product_id for i in merged] == ["a", "b", "c"]
    assert merged[1].reason == "content"
    assert merged[1].match_score == 0.8


def test_sort_by_score_is_stable():
    items = [_item("a", "r", 0.8), _item("b", "r", 0.9), _item("c", "r", 0.8), _item("d", "r", 0.9)]
    assert [i.product.product_id for i in sort_by_score(items)] == ["b", "d", "a", "c"]


def test_to_items_accepts_callable_reason():
    items = to_items([_product("a", "Books")], reason=lambda p: f"in {p.category}", score=0.5)
    assert items[0].reason == "in Books"
    assert items[0].match_score == 0.5
