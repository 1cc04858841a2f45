"""Snapshot adapter at the persistence boundary.

Raw category documents come from the store with either camelCase or
snake_case keys, and older documents carry a single `parentId` instead
of a `parentIds` list. Everything is normalized here into Category
records so the graph algorithms only ever see `parent_ids`.
"""

from __future__ import annotations

import json
import re
from collections.abc import Iterable, Mapping
from pathlib import Path
from typing import TYPE_CHECKING, Any

import structlog

from catgraph.graph.category import Category
from catgraph.graph.errors import InvalidArgument

if TYPE_CHECKING:
    from catgraph.graph.index import GraphIndex
    from catgraph.graph.mutations import BatchUpdate

logger = structlog.get_logger(__name__)

# Category attribute -> accepted record keys, canonical (camelCase) first.
FIELD_KEYS: dict[str, tuple[str, ...]] = {
    "name": ("name",),
    "slug": ("slug",),
    "parent_ids": ("parentIds", "parent_ids"),
    "level": ("level",),
    "path": ("path",),
    "sort_order": ("sortOrder", "sort_order"),
    "child_count": ("childCount", "child_count"),
    "has_children": ("hasChildren", "has_children"),
    "product_count": ("productCount", "product_count"),
    "is_active": ("isActive", "is_active"),
    "is_featured": ("isFeatured", "is_featured"),
    "show_on_homepage": ("showOnHomepage", "show_on_homepage"),
    "description": ("description",),
    "created_by": ("createdBy", "created_by"),
    "needs_review": ("needsReview", "needs_review"),
}

LEGACY_PARENT_KEYS = ("parentId", "parent_id")

_SLUG_STRIP = re.compile(r"[^a-z0-9]+")


def slugify(text: str) -> str:
    """Lowercase, hyphen-separated slug: "Home & Garden" -> "home-garden"."""
    return _SLUG_STRIP.sub("-", text.lower()).strip("-")


def _lookup(record: Mapping[str, Any], keys: tuple[str, ...]) -> Any:
    for key in keys:
        if key in record and record[key] is not None:
            return record[key]
    return None


def _parent_ids_of(record: Mapping[str, Any], category_id: str) -> list[str]:
    parent_ids = _lookup(record, FIELD_KEYS["parent_ids"])
    if parent_ids is not None:
        if isinstance(parent_ids, str) or not isinstance(parent_ids, (list, tuple)):
            raise InvalidArgument(
                f"Category '{category_id}': parentIds must be a list, got {type(parent_ids).__name__}"
            )
        return list(parent_ids)

    legacy = _lookup(record, LEGACY_PARENT_KEYS)
    if legacy:
        return [legacy]
    return []


def category_from_record(record: Mapping[str, Any]) -> Category:
    """Normalize one raw document into a Category.

    Args:
        record: Raw mapping with an `id` key plus any known fields.

    Returns:
        The Category. Missing slugs are derived from the name.

    Raises:
        InvalidArgument: If the id is missing or a field has the wrong shape.
    """
    category_id = record.get("id")
    if not isinstance(category_id, str) or not category_id:
        raise InvalidArgument(f"Record is missing a valid 'id': {dict(record)!r}")

    values: dict[str, Any] = {}
    for attr, keys in FIELD_KEYS.items():
        if attr == "parent_ids":
            continue
        value = _lookup(record, keys)
        if value is not None:
            values[attr] = value

    values["parent_ids"] = tuple(_parent_ids_of(record, category_id))
    if not values.get("slug"):
        values["slug"] = slugify(values.get("name", "")) or category_id

    for attr in ("level", "sort_order", "child_count", "product_count"):
        if attr in values and not isinstance(values[attr], int):
            raise InvalidArgument(f"Category '{category_id}': {attr} must be an integer")

    return Category(id=category_id, **values)


def category_to_record(category: Category) -> dict[str, Any]:
    """Render a Category as a camelCase document."""
    record: dict[str, Any] = {"id": category.id}
    for attr, keys in FIELD_KEYS.items():
        value = getattr(category, attr)
        record[keys[0]] = list(value) if attr == "parent_ids" else value
    return record


def batch_to_records(batch: BatchUpdate) -> dict[str, Any]:
    """Render a BatchUpdate as camelCase write payloads.

    Returns:
        Dict with "create" (full document or None), "update" (id -> changed
        fields), "delete" (ids) and the bookkeeping fields.
    """
    updates: dict[str, dict[str, Any]] = {}
    for update in batch.iter_updates():
        if batch.created is not None and update.category_id == batch.created.id:
            continue
        changes = {}
        for attr, value in update.changes().items():
            changes[FIELD_KEYS[attr][0]] = list(value) if attr == "parent_ids" else value
        updates[update.category_id] = changes

    created = None
    if batch.created is not None:
        created_update = batch.get(batch.created.id)
        final = created_update.apply_to(batch.created) if created_update else batch.created
        created = category_to_record(final)

    return {
        "operation": batch.operation,
        "targetId": batch.target_id,
        "baseFingerprint": batch.base_fingerprint,
        "create": created,
        "update": updates,
        "delete": list(batch.deleted),
        "recountProductCounts": list(batch.recount_ids),
    }


def load_records(path: Path) -> list[dict[str, Any]]:
    """Read raw records from a JSON snapshot file.

    Accepts either a top-level list or an object with a "categories" list.
    """
    data = json.loads(path.read_text(encoding="utf-8"))
    if isinstance(data, Mapping):
        data = data.get("categories")
    if not isinstance(data, list):
        raise InvalidArgument(f"{path}: expected a list of categories or {{'categories': [...]}}")
    return data


def load_snapshot(path: Path) -> GraphIndex:
    """Load a JSON snapshot file into a GraphIndex."""
    from catgraph.graph.index import GraphIndex

    records = load_records(path)
    index = GraphIndex(category_from_record(r) for r in records)
    logger.debug("snapshot_loaded", path=str(path), categories=len(index))
    return index


def dump_snapshot(categories: Iterable[Category], path: Path) -> None:
    """Write categories as a JSON snapshot file."""
    payload = {"categories": [category_to_record(c) for c in categories]}
    path.write_text(json.dumps(payload, indent=2) + "\n", encoding="utf-8")


__all__ = [
    "batch_to_records",
    "category_from_record",
    "category_to_record",
    "dump_snapshot",
    "load_records",
    "load_snapshot",
    "slugify",
]
