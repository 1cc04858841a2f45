"""Tests for the snapshot adapter at the persistence boundary."""

import json

import pytest

from catgraph.graph import Category, InvalidArgument
from catgraph.graph.loader import (
    category_from_record,
    category_to_record,
    dump_snapshot,
    load_records,
    load_snapshot,
    slugify,
)


class TestCategoryFromRecord:
    def test_camel_case_record(self):
        category = category_from_record(
            {
                "id": "audio",
                "name": "Audio",
                "slug": "audio",
                "parentIds": ["electronics"],
                "sortOrder": 3,
                "isFeatured": True,
                "productCount": 12,
            }
        )
        assert category.parent_ids == ("electronics",)
        assert category.sort_order == 3
        assert category.is_featured
        assert category.product_count == 12

    def test_snake_case_record(self):
        category = category_from_record({"id": "a", "parent_ids": ["b"], "show_on_homepage": True})
        assert category.parent_ids == ("b",)
        assert category.show_on_homepage

    def test_legacy_single_parent(self):
        category = category_from_record({"id": "a", "parentId": "b"})
        assert category.parent_ids == ("b",)

    def test_parent_ids_win_over_legacy(self):
        category = category_from_record({"id": "a", "parentIds": ["c"], "parentId": "b"})
        assert category.parent_ids == ("c",)

    def test_null_parent_is_root(self):
        category = category_from_record({"id": "a", "parentId": None, "parentIds": None})
        assert category.is_root

    def test_slug_derived_from_name(self):
        assert category_from_record({"id": "x1", "name": "Home & Garden"}).slug == "home-garden"
        assert category_from_record({"id": "x1"}).slug == "x1"

    def test_non_string_slug_rejected(self):
        with pytest.raises(InvalidArgument, match="slug"):
            category_from_record({"id": "a", "slug": 7})

    def test_missing_id_rejected(self):
        with pytest.raises(InvalidArgument, match="id"):
            category_from_record({"name": "Nameless"})

    def test_string_parent_ids_rejected(self):
        with pytest.raises(InvalidArgument, match="must be a list"):
            category_from_record({"id": "a", "parentIds": "b"})

    def test_non_integer_level_rejected(self):
        with pytest.raises(InvalidArgument, match="level"):
            category_from_record({"id": "a", "level": "2"})


class TestRecords:
    def test_to_record_uses_camel_case(self):
        record = category_to_record(Category(id="a", name="A", slug="a", parent_ids=("b",)))
        assert record["parentIds"] == ["b"]
        assert record["sortOrder"] == 0
        assert record["createdBy"] == "admin"
        assert "parent_ids" not in record

    def test_record_round_trip(self):
        category = Category(id="a", name="A", slug="a", parent_ids=("b", "c"), level=1, path="/b/a")
        assert category_from_record(category_to_record(category)) == category

    def test_slugify(self):
        assert slugify("  TV & Video  ") == "tv-video"
        assert slugify("!!!") == ""


class TestSnapshotFiles:
    def test_dump_and_load(self, tmp_path, electronics_index):
        path = tmp_path / "snap.json"
        dump_snapshot(electronics_index.values(), path)
        loaded = load_snapshot(path)
        assert dict(loaded) == dict(electronics_index)

    def test_top_level_list_accepted(self, tmp_path):
        path = tmp_path / "list.json"
        path.write_text(json.dumps([{"id": "a"}, {"id": "b", "parentId": "a"}]))
        assert load_snapshot(path).children_of("a") == ("b",)

    def test_wrong_shape_rejected(self, tmp_path):
        path = tmp_path / "bad.json"
        path.write_text(json.dumps({"items": []}))
        with pytest.raises(InvalidArgument):
            load_records(path)
