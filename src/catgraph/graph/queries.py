"""Read-side category queries over a snapshot index.

Leaf listing, text search and attribute filters used by navigation,
homepage and admin picker views.
"""

from __future__ import annotations

from dataclasses import dataclass

from catgraph.graph.category import Category
from catgraph.graph.index import GraphIndex


@dataclass(frozen=True)
class CategoryFilter:
    """Attribute filter. None means "do not filter on this field"."""

    parent_id: str | None = None
    level: int | None = None
    is_featured: bool | None = None
    show_on_homepage: bool | None = None
    is_active: bool | None = None
    has_children: bool | None = None
    min_product_count: int | None = None

    def matches(self, category: Category, index: GraphIndex) -> bool:
        if self.parent_id is not None and self.parent_id not in category.parent_ids:
            return False
        if self.level is not None and category.level != self.level:
            return False
        if self.is_featured is not None and category.is_featured != self.is_featured:
            return False
        if self.show_on_homepage is not None and category.show_on_homepage != self.show_on_homepage:
            return False
        if self.is_active is not None and category.is_active != self.is_active:
            return False
        # Adjacency, not the stored counter, which may lag behind.
        if self.has_children is not None and bool(index.children_of(category.id)) != self.has_children:
            return False
        if self.min_product_count is not None and category.product_count < self.min_product_count:
            return False
        return True


def _ordered(categories: list[Category]) -> list[Category]:
    return sorted(categories, key=lambda c: (c.sort_order, c.name.lower(), c.id))


def filter_categories(index: GraphIndex, criteria: CategoryFilter) -> list[Category]:
    """Categories matching every set field of criteria, in sibling order."""
    return _ordered([c for c in index.values() if criteria.matches(c, index)])


def leaf_categories(index: GraphIndex, active_only: bool = False) -> list[Category]:
    """Categories that no other category lists as a parent."""
    return _ordered([c for c in index.iter_leaves() if c.is_active or not active_only])


def featured_categories(index: GraphIndex) -> list[Category]:
    return filter_categories(index, CategoryFilter(is_featured=True, is_active=True))


def homepage_categories(index: GraphIndex) -> list[Category]:
    return filter_categories(index, CategoryFilter(show_on_homepage=True, is_active=True))


def search_categories(index: GraphIndex, query: str, limit: int = 50) -> list[Category]:
    """Case-insensitive substring search over name and description.

    Name matches rank before description-only matches.

    Args:
        index: Snapshot index.
        query: Search text; blank queries return nothing.
        limit: Maximum number of results.

    Returns:
        Matching categories.
    """
    needle = query.strip().lower()
    if not needle:
        return []

    by_name: list[Category] = []
    by_description: list[Category] = []
    for category in index.values():
        if needle in category.name.lower():
            by_name.append(category)
        elif needle in category.description.lower():
            by_description.append(category)
    return (_ordered(by_name) + _ordered(by_description))[:limit]


__all__ = [
    "CategoryFilter",
    "featured_categories",
    "filter_categories",
    "homepage_categories",
    "leaf_categories",
    "search_categories",
]
