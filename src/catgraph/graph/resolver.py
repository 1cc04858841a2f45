"""Level and path derivation.

level answers "how deep can this category be reached" and uses every
parent. path answers "where does it canonically live" and uses only the
primary parent, so a category has exactly one URL.
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence

from catgraph.graph.category import Category
from catgraph.graph.errors import InvalidArgument


def resolve_level(parent_ids: Sequence[str], lookup: Mapping[str, Category]) -> int:
    """Compute a category's level from its parents' resolved levels.

    Dangling parents are skipped. A category whose parents are all
    dangling resolves to level 0.

    Args:
        parent_ids: The category's parent ids.
        lookup: Resolved categories by id.

    Returns:
        0 for roots, otherwise 1 + the deepest resolved parent level.
    """
    levels = [lookup[p].level for p in parent_ids if p in lookup]
    if not levels:
        return 0
    return 1 + max(levels)


def resolve_path(slug: str, parent_ids: Sequence[str], lookup: Mapping[str, Category]) -> str:
    """Compute the canonical display path through the primary parent.

    Secondary parents never influence the result. A dangling primary
    parent yields a root-style path.

    Args:
        slug: The category's slug.
        parent_ids: The category's parent ids.
        lookup: Resolved categories by id.

    Returns:
        "/<slug>" for roots, otherwise "<primary parent path>/<slug>".

    Raises:
        InvalidArgument: If slug is empty.
    """
    if not slug:
        raise InvalidArgument("Cannot resolve a path for an empty slug")
    if not parent_ids:
        return f"/{slug}"
    primary = lookup.get(parent_ids[0])
    if primary is None:
        return f"/{slug}"
    return f"{primary.path}/{slug}"


__all__ = ["resolve_level", "resolve_path"]
