"""Tests for the Category record and parent id normalization."""

import dataclasses

import pytest

from catgraph.graph import Category, InvalidArgument
from catgraph.graph.category import normalize_parent_ids


class TestNormalizeParentIds:
    """Parent id lists are validated at the boundary."""

    def test_keeps_order(self):
        assert normalize_parent_ids("x", ["b", "a"]) == ("b", "a")

    def test_duplicates_collapse_to_first_occurrence(self):
        assert normalize_parent_ids("x", ["a", "b", "a", "b"]) == ("a", "b")

    def test_none_rejected(self):
        with pytest.raises(InvalidArgument):
            normalize_parent_ids("x", None)

    def test_bare_string_rejected(self):
        """A string is iterable but is never a parent list."""
        with pytest.raises(InvalidArgument, match="not a string"):
            normalize_parent_ids("x", "audio")

    @pytest.mark.parametrize("bad", ["", None, 3])
    def test_invalid_entry_rejected(self, bad):
        with pytest.raises(InvalidArgument):
            normalize_parent_ids("x", ["a", bad])

    def test_empty_list_is_root(self):
        assert normalize_parent_ids("x", []) == ()


class TestCategory:
    """Category construction and convenience properties."""

    def test_empty_id_rejected(self):
        with pytest.raises(InvalidArgument):
            Category(id="")

    def test_parent_list_normalized_to_tuple(self):
        category = Category(id="x", parent_ids=["a", "a", "b"])
        assert category.parent_ids == ("a", "b")

    def test_primary_parent_is_first(self):
        category = Category(id="x", parent_ids=("audio", "accessories"))
        assert category.primary_parent_id == "audio"
        assert not category.is_root

    def test_root_has_no_primary(self):
        category = Category(id="x")
        assert category.primary_parent_id is None
        assert category.is_root

    def test_is_immutable(self):
        category = Category(id="x")
        with pytest.raises(dataclasses.FrozenInstanceError):
            category.level = 3  # type: ignore[misc]

    def test_replace_revalidates(self):
        category = Category(id="x")
        with pytest.raises(InvalidArgument):
            dataclasses.replace(category, parent_ids=None)

    def test_slug_defaults_to_id(self):
        assert Category(id="audio").slug == "audio"

    @pytest.mark.parametrize("bad", ["", 3])
    def test_invalid_slug_rejected(self, bad):
        with pytest.raises(InvalidArgument, match="slug"):
            Category(id="x", slug=bad)

    def test_replace_revalidates_slug(self):
        category = Category(id="x", slug="x")
        with pytest.raises(InvalidArgument, match="slug"):
            dataclasses.replace(category, slug="")

    def test_invalid_argument_is_value_error(self):
        with pytest.raises(ValueError):
            Category(id="x", parent_ids="a")
