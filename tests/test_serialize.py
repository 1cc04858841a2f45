"""Tests for tree, snapshot and batch serialization."""

import csv
import io

from catgraph.graph import reparent
from catgraph.graph.serialize import (
    serialize_batch,
    serialize_index,
    serialize_trees,
    to_csv,
    to_markdown,
)
from catgraph.graph.tree import build_trees


class TestSerializeIndex:
    def test_metadata(self, electronics_index):
        data = serialize_index(electronics_index)
        assert data["metadata"]["category_count"] == 4
        assert data["metadata"]["root_count"] == 2
        assert data["metadata"]["fingerprint"] == electronics_index.fingerprint()
        assert data["roots"] == ["electronics", "accessories"]
        assert data["dangling"] == []


class TestSerializeTrees:
    def test_nested_dicts(self, electronics_index):
        data = serialize_trees(build_trees(electronics_index.values()))
        assert [d["id"] for d in data] == ["accessories", "electronics"]
        assert data[1]["children"][0]["children"][0]["id"] == "headphones"

    def test_markdown(self, electronics_index):
        text = to_markdown(build_trees(electronics_index.values()))
        assert text.startswith("# Category Tree\n")
        assert "    - **Headphones** (`/electronics/audio/headphones`)" in text

    def test_markdown_empty(self):
        assert "_No categories_" in to_markdown([])

    def test_csv(self, electronics_index):
        rows = list(csv.DictReader(io.StringIO(to_csv(build_trees(electronics_index.values())))))
        assert [r["id"] for r in rows] == ["accessories", "electronics", "audio", "headphones"]
        assert rows[3]["depth"] == "2"
        assert rows[3]["path"] == "/electronics/audio/headphones"


class TestSerializeBatch:
    def test_batch_payload(self, electronics_index):
        batch = reparent("audio", ["accessories"], electronics_index)
        data = serialize_batch(batch)
        assert data["id"] == batch.id
        assert data["operation"] == "reparent"
        assert data["targetId"] == "audio"
        assert data["update"]["audio"]["parentIds"] == ["accessories"]
        assert data["update"]["headphones"] == {
            "level": 2,
            "path": "/accessories/audio/headphones",
        }
        assert "timestamp" in data
