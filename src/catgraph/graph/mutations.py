"""Mutation types for category graph operations.

This module provides dataclasses describing the output of a mutation:
per-category field updates, the batch the persistence collaborator must
apply atomically, and dangling parent references found in a snapshot.
"""

from __future__ import annotations

import dataclasses
from dataclasses import dataclass, field
from datetime import datetime
from typing import TYPE_CHECKING, Any, Iterator
from uuid import uuid4

if TYPE_CHECKING:
    from catgraph.graph.category import Category
    from catgraph.graph.index import GraphIndex


@dataclass(frozen=True)
class DanglingReference:
    """A parent id with no matching record in the snapshot.

    Not an error: the snapshot may be intentionally partial. The edge is
    treated as absent by every engine operation.

    Attributes:
        category_id: ID of the category listing the parent.
        parent_id: ID that was referenced but is missing.
        position: Index of the entry in the category's parent_ids.
    """

    category_id: str
    parent_id: str
    position: int = 0

    @property
    def is_primary(self) -> bool:
        """True if the missing parent is the primary parent."""
        return self.position == 0

    def __str__(self) -> str:
        """Human-readable representation."""
        return f"{self.category_id} --[parent]--> {self.parent_id} (missing)"


@dataclass(frozen=True)
class FieldUpdate:
    """New values for one category. Fields left as None are unchanged."""

    category_id: str
    level: int | None = None
    path: str | None = None
    parent_ids: tuple[str, ...] | None = None
    child_count: int | None = None
    has_children: bool | None = None

    def changes(self) -> dict[str, Any]:
        """Return only the fields this update sets."""
        return {
            f.name: getattr(self, f.name)
            for f in dataclasses.fields(self)
            if f.name != "category_id" and getattr(self, f.name) is not None
        }

    def merge(self, other: FieldUpdate) -> FieldUpdate:
        """Combine with another update for the same category; other wins on overlap."""
        if other.category_id != self.category_id:
            raise ValueError(
                f"Cannot merge updates for '{self.category_id}' and '{other.category_id}'"
            )
        return dataclasses.replace(self, **other.changes())

    def apply_to(self, category: Category) -> Category:
        """Return a copy of category with this update applied."""
        return dataclasses.replace(category, **self.changes())


@dataclass
class BatchUpdate:
    """Result of one mutation, to be written atomically or not at all.

    Attributes:
        operation: "create", "reparent" or "delete".
        target_id: The category the caller asked to mutate.
        updates: Field updates keyed by category id, in recomputation order.
        created: The new record for a create operation.
        deleted: Ids removed by a delete operation.
        recount_ids: Ids whose product_count the collaborator should refresh.
        base_fingerprint: Fingerprint of the snapshot this batch was computed
            from; compare it at write time to detect concurrent edits.
    """

    operation: str
    target_id: str
    updates: dict[str, FieldUpdate] = field(default_factory=dict)
    created: Category | None = None
    deleted: tuple[str, ...] = ()
    recount_ids: tuple[str, ...] = ()
    base_fingerprint: str = ""
    id: str = field(default_factory=lambda: uuid4().hex)
    timestamp: datetime = field(default_factory=datetime.now)

    def add(self, update: FieldUpdate) -> None:
        """Add an update, merging with any existing one for the same id."""
        existing = self.updates.get(update.category_id)
        self.updates[update.category_id] = existing.merge(update) if existing else update

    def iter_updates(self) -> Iterator[FieldUpdate]:
        """Iterate updates in recomputation order."""
        yield from self.updates.values()

    def get(self, category_id: str) -> FieldUpdate | None:
        """Return the update for a category, or None."""
        return self.updates.get(category_id)

    def __len__(self) -> int:
        return len(self.updates)

    @property
    def affected_ids(self) -> set[str]:
        """Every id this batch touches."""
        ids = set(self.updates) | set(self.deleted)
        if self.created is not None:
            ids.add(self.created.id)
        return ids

    def apply(self, index: GraphIndex) -> GraphIndex:
        """Return the post-mutation index. The given index is not modified.

        Args:
            index: The snapshot this batch was computed from.

        Returns:
            A new GraphIndex with the batch applied.
        """
        replaced: list[Category] = []
        if self.created is not None:
            created_update = self.updates.get(self.created.id)
            created = created_update.apply_to(self.created) if created_update else self.created
            replaced.append(created)
        for update in self.updates.values():
            if self.created is not None and update.category_id == self.created.id:
                continue
            current = index.get(update.category_id)
            if current is not None:
                replaced.append(update.apply_to(current))
        return index.replace(replaced, remove=self.deleted)

    def to_records(self) -> dict[str, Any]:
        """Render the batch as camelCase persistence payloads."""
        from catgraph.graph.loader import batch_to_records

        return batch_to_records(self)

    def __str__(self) -> str:
        """Human-readable representation."""
        return f"[{self.id[:8]}] {self.operation}({self.target_id}): {len(self.updates)} updates"


__all__ = ["BatchUpdate", "DanglingReference", "FieldUpdate"]
