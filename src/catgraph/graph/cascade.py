"""Cascading recomputation - create, reparent and delete categories.

Every operation here is pure: it validates against the given index,
stages the structural change in a new index, recomputes derived fields
for every affected category in dependency order and returns a
BatchUpdate. Nothing is written; the persistence collaborator applies
the batch atomically.

Recomputation never re-runs cycle detection. The single validation at
the start already proves the new edges are safe.
"""

from __future__ import annotations

import dataclasses
import heapq
from collections import ChainMap
from collections.abc import Iterable, Sequence
from dataclasses import dataclass, field

import structlog

from catgraph.graph.category import Category, normalize_parent_ids
from catgraph.graph.collector import collect_descendants, iter_ancestors, iter_descendants
from catgraph.graph.errors import InvalidArgument
from catgraph.graph.index import GraphIndex
from catgraph.graph.mutations import BatchUpdate, FieldUpdate
from catgraph.graph.resolver import resolve_level, resolve_path
from catgraph.graph.validator import validate_parents

logger = structlog.get_logger(__name__)


@dataclass(frozen=True)
class DeleteImpact:
    """What deleting a category would affect.

    Attributes:
        category_id: The category considered for deletion.
        child_ids: Direct children.
        descendant_ids: Every category below it, each once.
        orphaned_child_ids: Children whose only resolved parent is this
            category; they become roots if it is deleted without cascade.
        product_count: Products in the category and all descendants.
    """

    category_id: str
    child_ids: tuple[str, ...] = ()
    descendant_ids: frozenset[str] = field(default_factory=frozenset)
    orphaned_child_ids: tuple[str, ...] = ()
    product_count: int = 0

    @property
    def has_children(self) -> bool:
        return bool(self.child_ids)

    @property
    def is_safe(self) -> bool:
        """True if nothing else would be affected by the delete."""
        return not self.child_ids and self.product_count == 0

    def summary(self) -> str:
        """One-line warning for confirmation dialogs."""
        if self.is_safe:
            return f"Deleting '{self.category_id}' affects no other categories"
        return (
            f"Deleting '{self.category_id}' affects {len(self.descendant_ids)} "
            f"descendant categories ({len(self.child_ids)} direct, "
            f"{len(self.orphaned_child_ids)} would become roots) "
            f"and {self.product_count} products"
        )


def _require(category_id: str, index: GraphIndex) -> Category:
    if not isinstance(category_id, str) or not category_id:
        raise InvalidArgument(f"Category id must be a non-empty string, got {category_id!r}")
    category = index.get(category_id)
    if category is None:
        raise InvalidArgument(f"Category '{category_id}' not found in snapshot")
    return category


def _recompute(staged: GraphIndex, seeds: Sequence[str]) -> list[Category]:
    """Recompute level/path for seeds and all their descendants.

    Kahn's algorithm over the affected subgraph: a category is processed
    only after every affected parent has fresh values, so each one is
    visited exactly once and never reads a stale parent. Ties are broken
    by previous level, then id, for deterministic output.

    Args:
        staged: The post-mutation index (structure updated, derived fields stale).
        seeds: Categories whose parent sets changed.

    Returns:
        Recomputed categories in processing order.
    """
    affected: dict[str, None] = {}
    for seed in seeds:
        affected[seed] = None
        for descendant in iter_descendants(seed, staged):
            affected[descendant] = None

    pending = {
        cid: sum(1 for p in staged.parents_of(cid) if p in affected and p != cid)
        for cid in affected
    }
    ready = [(staged[cid].level, cid) for cid, count in pending.items() if count == 0]
    heapq.heapify(ready)

    fresh: dict[str, Category] = {}
    view = ChainMap(fresh, staged)  # type: ignore[arg-type]
    order: list[Category] = []

    def _derive(cid: str) -> None:
        category = staged[cid]
        updated = dataclasses.replace(
            category,
            level=resolve_level(category.parent_ids, view),
            path=resolve_path(category.slug, category.parent_ids, view),
        )
        fresh[cid] = updated
        order.append(updated)

    while ready:
        _, cid = heapq.heappop(ready)
        if cid in fresh:
            continue
        _derive(cid)
        for child in staged.children_of(cid):
            if child in pending and child not in fresh:
                pending[child] -= 1
                if pending[child] == 0:
                    heapq.heappush(ready, (staged[child].level, child))

    leftover = sorted((cid for cid in affected if cid not in fresh), key=lambda c: (staged[c].level, c))
    if leftover:
        # Only reachable when the input snapshot was already cyclic.
        logger.warning("cascade_snapshot_cycle", category_ids=leftover)
        for cid in leftover:
            _derive(cid)

    return order


def _add_counter_updates(batch: BatchUpdate, staged: GraphIndex, parent_ids: Iterable[str]) -> None:
    for parent_id in sorted(set(parent_ids)):
        if parent_id not in staged:
            continue
        count = staged.child_count(parent_id)
        batch.add(FieldUpdate(parent_id, child_count=count, has_children=count > 0))


def _recount_ids(parent_ids: Iterable[str], *indexes: GraphIndex) -> tuple[str, ...]:
    """Changed parents plus every ancestor of theirs, before and after the mutation."""
    ids: dict[str, None] = {}
    for parent_id in parent_ids:
        for idx in indexes:
            if parent_id not in idx:
                continue
            ids[parent_id] = None
            for ancestor in iter_ancestors(parent_id, idx):
                ids[ancestor] = None
    return tuple(ids)


def reparent(category_id: str, new_parent_ids: Sequence[str], index: GraphIndex) -> BatchUpdate:
    """Replace a category's parent set and cascade derived fields.

    Args:
        category_id: The category to move.
        new_parent_ids: The complete new parent list; first entry is primary.
        index: Snapshot index.

    Returns:
        BatchUpdate with level/path for the category and every descendant,
        the new parent_ids for the category, and fresh counters for every
        parent that gained or lost the edge.

    Raises:
        CycleError: If the new parents would introduce a cycle.
        InvalidArgument: If the category is unknown or the input malformed.
    """
    category = _require(category_id, index)
    parents = normalize_parent_ids(category_id, new_parent_ids)
    validate_parents(category_id, parents, index)

    staged = index.replace([dataclasses.replace(category, parent_ids=parents)])
    recomputed = _recompute(staged, [category_id])

    changed_parents = set(category.parent_ids) ^ set(parents)
    batch = BatchUpdate(
        operation="reparent",
        target_id=category_id,
        recount_ids=_recount_ids(sorted(changed_parents), index, staged),
        base_fingerprint=index.fingerprint(),
    )
    for updated in recomputed:
        batch.add(
            FieldUpdate(
                updated.id,
                level=updated.level,
                path=updated.path,
                parent_ids=parents if updated.id == category_id else None,
            )
        )
    _add_counter_updates(batch, staged, changed_parents)

    logger.info(
        "category_reparented",
        category_id=category_id,
        parent_ids=list(parents),
        recomputed=len(recomputed),
    )
    return batch


def create_category(category: Category, index: GraphIndex) -> BatchUpdate:
    """Validate a new category and compute its initial derived fields.

    Records that already listed the new id as a parent (dangling until
    now) are adopted as children and their subtrees recomputed.

    Args:
        category: The draft record; derived fields are ignored.
        index: Snapshot index.

    Returns:
        BatchUpdate whose `created` holds the complete new record.

    Raises:
        CycleError: If the initial parents would introduce a cycle.
        InvalidArgument: If the id already exists.
    """
    if category.id in index:
        raise InvalidArgument(f"Category '{category.id}' already exists")
    validate_parents(category.id, category.parent_ids, index)

    staged = index.replace([category])
    recomputed = _recompute(staged, [category.id])
    child_count = staged.child_count(category.id)

    created = dataclasses.replace(
        recomputed[0], child_count=child_count, has_children=child_count > 0
    )
    batch = BatchUpdate(
        operation="create",
        target_id=category.id,
        created=created,
        recount_ids=_recount_ids(category.parent_ids, staged),
        base_fingerprint=index.fingerprint(),
    )
    batch.add(
        FieldUpdate(
            created.id,
            level=created.level,
            path=created.path,
            parent_ids=created.parent_ids,
            child_count=child_count,
            has_children=child_count > 0,
        )
    )
    for updated in recomputed[1:]:
        batch.add(FieldUpdate(updated.id, level=updated.level, path=updated.path))
    _add_counter_updates(batch, staged, category.parent_ids)

    logger.info(
        "category_created",
        category_id=category.id,
        level=created.level,
        path=created.path,
        adopted=child_count,
    )
    return batch


def delete_impact(category_id: str, index: GraphIndex) -> DeleteImpact:
    """Enumerate what deleting a category would affect.

    Raises:
        InvalidArgument: If the category is unknown.
    """
    category = _require(category_id, index)
    child_ids = index.children_of(category_id)
    descendants = collect_descendants(category_id, index)
    orphaned = tuple(c for c in child_ids if index.parents_of(c) == (category_id,))
    products = category.product_count + sum(index[d].product_count for d in descendants)
    return DeleteImpact(
        category_id=category_id,
        child_ids=child_ids,
        descendant_ids=frozenset(descendants),
        orphaned_child_ids=orphaned,
        product_count=products,
    )


def delete_category(category_id: str, index: GraphIndex, cascade: bool = False) -> BatchUpdate:
    """Delete a category.

    Args:
        category_id: The category to delete.
        index: Snapshot index.
        cascade: If True, every descendant is deleted too. Otherwise the
            category is removed from each child's parent list and the
            children's subtrees are recomputed; children left without
            parents become roots.

    Returns:
        BatchUpdate listing deleted ids, recomputed descendants and fresh
        counters for the former parents.

    Raises:
        InvalidArgument: If the category is unknown.
    """
    _require(category_id, index)

    if cascade:
        removed = [category_id, *iter_descendants(category_id, index)]
        removed_set = set(removed)
        staged = index.replace(remove=removed)
        former_parents = {
            p for rid in removed for p in index.parents_of(rid) if p not in removed_set
        }
        recomputed: list[Category] = []
        detached: dict[str, tuple[str, ...]] = {}
    else:
        removed = [category_id]
        detached = {
            child: tuple(p for p in index[child].parent_ids if p != category_id)
            for child in index.children_of(category_id)
        }
        staged = index.replace(
            [dataclasses.replace(index[c], parent_ids=p) for c, p in detached.items()],
            remove=removed,
        )
        former_parents = set(index.parents_of(category_id))
        recomputed = _recompute(staged, list(detached))

    batch = BatchUpdate(
        operation="delete",
        target_id=category_id,
        deleted=tuple(removed),
        recount_ids=_recount_ids(sorted(former_parents), index),
        base_fingerprint=index.fingerprint(),
    )
    for updated in recomputed:
        batch.add(
            FieldUpdate(
                updated.id,
                level=updated.level,
                path=updated.path,
                parent_ids=detached.get(updated.id),
            )
        )
    _add_counter_updates(batch, staged, former_parents)

    logger.info(
        "category_deleted",
        category_id=category_id,
        cascade=cascade,
        deleted=len(removed),
        recomputed=len(recomputed),
    )
    return batch


__all__ = ["DeleteImpact", "create_category", "delete_category", "delete_impact", "reparent"]
