"""Tests for GraphIndex lookup, adjacency and derivation."""

import pytest

from catgraph.graph import GraphIndex, InvalidArgument
from tests.graph_test_helpers import make_category


class TestConstruction:
    def test_duplicate_ids_rejected(self):
        with pytest.raises(InvalidArgument, match="Duplicate"):
            GraphIndex([make_category("a"), make_category("a")])

    def test_mapping_protocol(self, electronics_index):
        assert len(electronics_index) == 4
        assert "audio" in electronics_index
        assert electronics_index["audio"].name == "Audio"
        assert electronics_index.get("missing") is None
        assert list(electronics_index) == ["electronics", "audio", "headphones", "accessories"]

    def test_from_records(self):
        index = GraphIndex.from_records(
            [
                {"id": "a", "name": "A"},
                {"id": "b", "name": "B", "parentIds": ["a"]},
            ]
        )
        assert index.children_of("a") == ("b",)

    def test_empty_index(self):
        index = GraphIndex()
        assert len(index) == 0
        assert list(index.iter_roots()) == []
        assert index.dangling_references() == []


class TestAdjacency:
    """children_of/parents_of views."""

    def test_children_of(self, electronics_index):
        assert electronics_index.children_of("electronics") == ("audio",)
        assert electronics_index.children_of("headphones") == ()
        assert electronics_index.children_of("unknown") == ()

    def test_multi_parent_child_listed_under_each_parent(self, diamond_index):
        assert diamond_index.children_of("b") == ("d",)
        assert diamond_index.children_of("c") == ("d",)
        assert diamond_index.parents_of("d") == ("b", "c")

    def test_child_count(self, diamond_index):
        assert diamond_index.child_count("a") == 2
        assert diamond_index.child_count("e") == 0

    def test_roots_and_leaves(self, electronics_index):
        assert {c.id for c in electronics_index.iter_roots()} == {"electronics", "accessories"}
        assert {c.id for c in electronics_index.iter_leaves()} == {"headphones", "accessories"}


class TestDanglingReferences:
    """Unresolved parents are recorded, not raised."""

    def test_dangling_parent_detected(self):
        index = GraphIndex([make_category("a"), make_category("b", parent_ids=["a", "ghost"])])
        dangling = index.dangling_references()
        assert index.has_dangling_references()
        assert len(dangling) == 1
        assert dangling[0].category_id == "b"
        assert dangling[0].parent_id == "ghost"
        assert dangling[0].position == 1
        assert not dangling[0].is_primary

    def test_dangling_excluded_from_parents_of(self):
        index = GraphIndex([make_category("b", parent_ids=["ghost"])])
        assert index.parents_of("b") == ()
        assert "missing" in str(index.dangling_references()[0])

    def test_dangling_category_is_not_a_declared_root(self):
        index = GraphIndex([make_category("b", parent_ids=["ghost"])])
        assert list(index.iter_roots()) == []


class TestFingerprint:
    def test_stable_across_order(self):
        first = GraphIndex([make_category("a"), make_category("b", parent_ids=["a"])])
        second = GraphIndex([make_category("b", parent_ids=["a"]), make_category("a")])
        assert first.fingerprint() == second.fingerprint()

    def test_changes_with_edges(self):
        first = GraphIndex([make_category("a"), make_category("b", parent_ids=["a"])])
        second = GraphIndex([make_category("a"), make_category("b")])
        assert first.fingerprint() != second.fingerprint()

    def test_changes_with_slugs(self):
        """A renamed ancestor slug changes every path below it."""
        first = GraphIndex([make_category("a"), make_category("b", parent_ids=["a"])])
        second = GraphIndex([make_category("a", slug="renamed"), make_category("b", parent_ids=["a"])])
        assert first.fingerprint() != second.fingerprint()

    def test_ignores_derived_fields(self):
        first = GraphIndex([make_category("a", level=0)])
        second = GraphIndex([make_category("a", level=7)])
        assert first.fingerprint() == second.fingerprint()


class TestReplace:
    def test_replace_returns_new_index(self, electronics_index):
        moved = make_category("headphones", "Headphones", ["accessories"])
        updated = electronics_index.replace([moved])
        assert updated.children_of("accessories") == ("headphones",)
        assert electronics_index.children_of("accessories") == ()

    def test_remove(self, electronics_index):
        updated = electronics_index.replace(remove=["headphones"])
        assert "headphones" not in updated
        assert updated.children_of("audio") == ()

    def test_preserves_order(self, electronics_index):
        updated = electronics_index.replace([make_category("audio", "Audio v2", ["electronics"])])
        assert list(updated) == list(electronics_index)
