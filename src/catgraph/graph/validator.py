"""Cycle validation for category parent assignments.

Centralized functions for acyclicity checks:
- validate_parents: reject a proposed parent set that closes a loop
- check_parents: non-raising variant
- detect_cycles: independent full-graph scan
"""

from __future__ import annotations

from collections import deque
from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field

from catgraph.graph.category import Category, normalize_parent_ids
from catgraph.graph.errors import CycleError, InvalidArgument


@dataclass
class CycleInfo:
    """Pure data structure for cycle detection results."""

    cycle_members: set[str] = field(default_factory=set)
    cycle_paths: list[list[str]] = field(default_factory=list)

    @property
    def has_cycles(self) -> bool:
        return bool(self.cycle_members)


def _name_of(index: Mapping[str, Category], category_id: str) -> str:
    category = index.get(category_id)
    return category.name if category is not None and category.name else category_id


def check_parents(
    category_id: str,
    proposed_parent_ids: Sequence[str],
    index: Mapping[str, Category],
) -> CycleError | None:
    """Return the CycleError a parent assignment would cause, or None.

    Walks breadth-first from every proposed parent through all parents of
    each visited node (not only the primary one). A single visited set
    shared by every walk bounds the work and guarantees termination even
    if the snapshot already contains a cycle.

    Args:
        category_id: The category whose parents are being set.
        proposed_parent_ids: The candidate parent ids.
        index: Snapshot lookup (GraphIndex or any id -> Category mapping).

    Returns:
        None if the assignment is acyclic, otherwise the error describing
        the first conflict found.

    Raises:
        InvalidArgument: If category_id is empty or the parent list is malformed.
    """
    if not isinstance(category_id, str) or not category_id:
        raise InvalidArgument(f"Category id must be a non-empty string, got {category_id!r}")
    parents = normalize_parent_ids(category_id, proposed_parent_ids)

    if category_id in parents:
        return CycleError(
            category_id=category_id,
            conflicting_category_id=category_id,
            conflicting_category_name=_name_of(index, category_id),
            proposed_parent_id=category_id,
            proposed_parent_name=_name_of(index, category_id),
        )

    visited: set[str] = set()
    for parent_id in parents:
        if parent_id in visited:
            continue
        visited.add(parent_id)
        queue: deque[str] = deque([parent_id])
        while queue:
            current = index.get(queue.popleft())
            if current is None:
                continue
            for ancestor_id in current.parent_ids:
                if ancestor_id == category_id:
                    return CycleError(
                        category_id=category_id,
                        conflicting_category_id=ancestor_id,
                        conflicting_category_name=_name_of(index, ancestor_id),
                        proposed_parent_id=parent_id,
                        proposed_parent_name=_name_of(index, parent_id),
                        existing_child_id=current.id,
                        existing_child_name=_name_of(index, current.id),
                    )
                if ancestor_id not in visited:
                    visited.add(ancestor_id)
                    queue.append(ancestor_id)

    return None


def validate_parents(
    category_id: str,
    proposed_parent_ids: Sequence[str],
    index: Mapping[str, Category],
) -> None:
    """Raise CycleError if the proposed parents would introduce a cycle.

    Args:
        category_id: The category whose parents are being set.
        proposed_parent_ids: The candidate parent ids.
        index: Snapshot lookup.

    Raises:
        CycleError: If the assignment makes category_id its own ancestor.
        InvalidArgument: If the input is malformed.
    """
    error = check_parents(category_id, proposed_parent_ids, index)
    if error is not None:
        raise error


def detect_cycles(index: Mapping[str, Category]) -> CycleInfo:
    """Detect cycles over the whole snapshot. PURE - no mutation.

    Iterative DFS with an explicit stack so deep hierarchies cannot hit
    the recursion limit. Used as an independent brute-force check of the
    acyclicity invariant.

    Args:
        index: Snapshot lookup.

    Returns:
        CycleInfo with cycle_members and one path per back edge found.
    """
    white, grey, black = 0, 1, 2
    color: dict[str, int] = {cid: white for cid in index}
    cycle_members: set[str] = set()
    cycle_paths: list[list[str]] = []

    for start in index:
        if color[start] != white:
            continue
        color[start] = grey
        path: list[str] = [start]
        stack: list[tuple[str, int]] = [(start, 0)]

        while stack:
            node_id, next_pos = stack[-1]
            parents = index[node_id].parent_ids
            if next_pos >= len(parents):
                stack.pop()
                path.pop()
                color[node_id] = black
                continue

            stack[-1] = (node_id, next_pos + 1)
            parent_id = parents[next_pos]
            if parent_id not in color:
                continue  # dangling
            if color[parent_id] == grey:
                loop = path[path.index(parent_id):] + [parent_id]
                cycle_paths.append(loop)
                cycle_members.update(loop)
            elif color[parent_id] == white:
                color[parent_id] = grey
                path.append(parent_id)
                stack.append((parent_id, 0))

    return CycleInfo(cycle_members=cycle_members, cycle_paths=cycle_paths)


__all__ = ["CycleInfo", "check_parents", "detect_cycles", "validate_parents"]
