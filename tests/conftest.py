"""Pytest fixtures for catgraph tests."""

import pytest


@pytest.fixture(autouse=True)
def _isolate_environment(monkeypatch, tmp_path):
    """Keep CATGRAPH_* variables and stray config files out of every test."""
    import os

    for key in list(os.environ):
        if key.startswith("CATGRAPH_"):
            monkeypatch.delenv(key)
    monkeypatch.chdir(tmp_path)


@pytest.fixture(autouse=True)
def _reset_logging():
    """Undo any structlog configuration a CLI test installed."""
    import structlog

    yield
    structlog.reset_defaults()


@pytest.fixture
def electronics_index():
    """Electronics > Audio > Headphones, plus a separate Accessories root."""
    from tests.graph_test_helpers import build_index, make_category

    return build_index(
        make_category("electronics", "Electronics"),
        make_category("audio", "Audio", ["electronics"]),
        make_category("headphones", "Headphones", ["audio"]),
        make_category("accessories", "Accessories"),
    )


@pytest.fixture
def diamond_index():
    """a -> (b, c) -> d -> e, where d has two parents."""
    from tests.graph_test_helpers import build_index, make_category

    return build_index(
        make_category("a"),
        make_category("b", parent_ids=["a"]),
        make_category("c", parent_ids=["a"]),
        make_category("d", parent_ids=["b", "c"]),
        make_category("e", parent_ids=["d"]),
    )


@pytest.fixture
def deep_index():
    """root -> l1 -> l2 -> l3, with a side branch root -> side."""
    from tests.graph_test_helpers import build_index, make_category

    return build_index(
        make_category("root", "Root"),
        make_category("l1", "Level One", ["root"]),
        make_category("l2", "Level Two", ["l1"]),
        make_category("l3", "Level Three", ["l2"]),
        make_category("side", "Side", ["root"]),
    )


@pytest.fixture
def snapshot_file(tmp_path, electronics_index):
    """electronics_index written as a JSON snapshot."""
    from catgraph.graph.loader import dump_snapshot

    path = tmp_path / "categories.json"
    dump_snapshot(electronics_index.values(), path)
    return path
