"""Tests for identifier / selector parsing done at engine entry points."""

import pytest

from app.domain.models.product import InteractionType
from app.domain.services.filters import (
    parse_algorithm,
    parse_category,
    parse_identifier,
    parse_interaction_type,
)


@pytest.mark.parametrize("raw", [None, "", "   ", "undefined", "null", "None", "bad id", "../etc", "x" * 200])
def test_parse_identifier_rejects_absent_or_malformed(raw):
    assert parse_identifier(raw) is None


@pytest.mark.parametrize("raw,expected", [
    ("64b7f0c2a1e4c3d2b1a09876", "64b7f0c2a1e4c3d2b1a09876"),
    ("  sku-123  ", "sku-123"),
    (42, "42"),
])
def test_parse_identifier_accepts_ids(raw, expected):
    assert parse_identifier(raw) == expected


def test_parse_category():
    assert parse_category(" Home & Garden ") == "Home & Garden"
    assert parse_category("undefined") is None
    assert parse_category("") is None


def test_parse_interaction_type():
    assert parse_interaction_type("VIEW") is InteractionType.VIEW
    assert parse_interaction_type(InteractionType.LIKE) is InteractionType.LIKE
    assert parse_interaction_type("wishlist") is None
    assert parse_interaction_type(None) is None


def test_parse_algorithm_defaults_and_unknown():
    assert parse_algorithm(None) == "hybrid"
    assert parse_algorithm("Collaborative") == "collaborative"
    assert parse_algorithm("content-based") == "content-based"
    assert parse_algorithm("deep-learning") == "content-based"
