"""Tests for leaf listing, search and attribute filters."""

import pytest

from catgraph.graph.queries import (
    CategoryFilter,
    featured_categories,
    filter_categories,
    homepage_categories,
    leaf_categories,
    search_categories,
)
from tests.graph_test_helpers import build_index, make_category


@pytest.fixture
def shop_index():
    return build_index(
        make_category("electronics", "Electronics", is_featured=True, show_on_homepage=True),
        make_category(
            "audio", "Audio", ["electronics"], description="Speakers and sound", product_count=3
        ),
        make_category("headphones", "Headphones", ["audio"], sort_order=1),
        make_category("speakers", "Speakers", ["audio"], sort_order=0, is_active=False),
        make_category("garden", "Garden", is_featured=True, is_active=False),
    )


class TestLeafCategories:
    def test_leaves_in_sibling_order(self, shop_index):
        assert [c.id for c in leaf_categories(shop_index)] == ["garden", "speakers", "headphones"]

    def test_active_only(self, shop_index):
        assert [c.id for c in leaf_categories(shop_index, active_only=True)] == ["headphones"]


class TestSearch:
    def test_name_match_case_insensitive(self, shop_index):
        assert [c.id for c in search_categories(shop_index, "HEAD")] == ["headphones"]

    def test_name_matches_rank_before_description(self, shop_index):
        assert [c.id for c in search_categories(shop_index, "speakers")] == ["speakers", "audio"]

    def test_blank_query(self, shop_index):
        assert search_categories(shop_index, "   ") == []

    def test_limit(self, shop_index):
        assert len(search_categories(shop_index, "e", limit=2)) == 2


class TestFilters:
    def test_featured_excludes_inactive(self, shop_index):
        assert [c.id for c in featured_categories(shop_index)] == ["electronics"]

    def test_homepage(self, shop_index):
        assert [c.id for c in homepage_categories(shop_index)] == ["electronics"]

    def test_parent_filter_matches_any_parent(self, electronics_index):
        index = electronics_index.replace(
            [make_category("headphones", "Headphones", ["audio", "accessories"])]
        )
        result = filter_categories(index, CategoryFilter(parent_id="accessories"))
        assert [c.id for c in result] == ["headphones"]

    def test_level_and_children(self, shop_index):
        result = filter_categories(shop_index, CategoryFilter(level=1, has_children=True))
        assert [c.id for c in result] == ["audio"]

    def test_min_product_count(self, shop_index):
        result = filter_categories(shop_index, CategoryFilter(min_product_count=1))
        assert [c.id for c in result] == ["audio"]

    def test_empty_filter_matches_everything(self, shop_index):
        assert len(filter_categories(shop_index, CategoryFilter())) == len(shop_index)
