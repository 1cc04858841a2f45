"""Tests for the display tree projection."""

from catgraph.graph import GraphIndex
from catgraph.graph.tree import TreeNode, build_trees, flatten_tree
from tests.graph_test_helpers import build_index, make_category


def _shape(roots: list[TreeNode]) -> list:
    return [(node.id, _shape(node.children)) for node in roots]


class TestBuildTrees:
    def test_roots_and_nesting(self, electronics_index):
        roots = build_trees(electronics_index.values())
        assert _shape(roots) == [
            ("accessories", []),
            ("electronics", [("audio", [("headphones", [])])]),
        ]

    def test_multi_parent_category_appears_once_under_primary(self, diamond_index):
        roots = build_trees(diamond_index.values())
        assert _shape(roots) == [("a", [("b", [("d", [("e", [])])]), ("c", [])])]
        all_ids = [n.id for root in roots for n in root.walk()]
        assert len(all_ids) == len(set(all_ids)) == len(diamond_index)

    def test_siblings_sorted_by_sort_order_then_name(self):
        index = build_index(
            make_category("root"),
            make_category("z", "Zed", ["root"], sort_order=0),
            make_category("y", "apple", ["root"], sort_order=1),
            make_category("x", "Banana", ["root"], sort_order=1),
            make_category("w", "Aardvark", ["root"], sort_order=2),
        )
        root = build_trees(index.values())[0]
        assert [c.id for c in root.children] == ["z", "y", "x", "w"]

    def test_missing_primary_parent_becomes_root(self):
        index = build_index(
            make_category("a"),
            make_category("b", parent_ids=["ghost", "a"]),
        )
        assert sorted(r.id for r in build_trees(index.values())) == ["a", "b"]

    def test_subset_of_snapshot(self, electronics_index):
        subset = [electronics_index["audio"], electronics_index["headphones"]]
        assert _shape(build_trees(subset)) == [("audio", [("headphones", [])])]

    def test_inactive_subtree_hidden(self):
        index = build_index(
            make_category("root"),
            make_category("off", parent_ids=["root"], is_active=False),
            make_category("under", parent_ids=["off"]),
            make_category("on", parent_ids=["root"]),
        )
        assert _shape(build_trees(index.values(), include_inactive=False)) == [
            ("root", [("on", [])])
        ]
        assert len(build_trees(index.values())[0].children) == 2

    def test_inactive_root_hidden(self):
        index = build_index(make_category("off", is_active=False), make_category("on"))
        assert [r.id for r in build_trees(index.values(), include_inactive=False)] == ["on"]

    def test_max_depth(self, electronics_index):
        roots = build_trees(electronics_index.values(), max_depth=1)
        electronics = next(r for r in roots if r.id == "electronics")
        assert _shape([electronics]) == [("electronics", [("audio", [])])]
        assert all(r.is_leaf for r in build_trees(electronics_index.values(), max_depth=0))

    def test_primary_parent_loop_promoted(self):
        """A corrupt loop still shows every category once."""
        index = GraphIndex(
            [make_category("p", parent_ids=["q"]), make_category("q", parent_ids=["p"])]
        )
        roots = build_trees(index.values())
        assert sum(r.count() for r in roots) == 2

    def test_empty(self):
        assert build_trees([]) == []


class TestTreeNode:
    def test_walk_pre_order(self, diamond_index):
        root = build_trees(diamond_index.values())[0]
        assert [n.id for n in root.walk()] == ["a", "b", "d", "e", "c"]
        assert root.count() == 5

    def test_to_dict(self, electronics_index):
        audio = build_trees([electronics_index["audio"]])[0]
        assert audio.to_dict() == {
            "id": "audio",
            "name": "Audio",
            "slug": "audio",
            "level": 1,
            "path": "/electronics/audio",
            "sortOrder": 0,
            "children": [],
        }

    def test_flatten_tree_depths(self, electronics_index):
        flat = flatten_tree(build_trees(electronics_index.values()))
        assert [(depth, node.id) for depth, node in flat] == [
            (0, "accessories"),
            (0, "electronics"),
            (1, "audio"),
            (2, "headphones"),
        ]
