"""Graph Index - id lookup and adjacency views over a category snapshot.

The index is built once per operation from a flat collection of
categories and passed explicitly to every other component. It is never
mutated after construction; `replace()` returns a new index.
"""

from __future__ import annotations

import hashlib
from collections.abc import Iterable, Iterator, Mapping
from typing import Any

import structlog

from catgraph.graph.category import Category
from catgraph.graph.errors import InvalidArgument
from catgraph.graph.mutations import DanglingReference

logger = structlog.get_logger(__name__)


class GraphIndex(Mapping[str, Category]):
    """Immutable id -> Category mapping with child adjacency.

    Parent references that do not resolve to a record in the snapshot are
    recorded as DanglingReference and otherwise treated as absent edges.

    Example:
        >>> index = GraphIndex([Category("a", "A", "a"), Category("b", "B", "b", ("a",))])
        >>> index.children_of("a")
        ('b',)
    """

    def __init__(self, categories: Iterable[Category] = ()) -> None:
        """Build the index.

        Args:
            categories: Snapshot records, in any order.

        Raises:
            InvalidArgument: If two records share an id.
        """
        self._categories: dict[str, Category] = {}
        for category in categories:
            if category.id in self._categories:
                raise InvalidArgument(f"Duplicate category id '{category.id}' in snapshot")
            self._categories[category.id] = category

        children: dict[str, list[str]] = {}
        dangling: list[DanglingReference] = []
        for category in self._categories.values():
            for position, parent_id in enumerate(category.parent_ids):
                if parent_id in self._categories:
                    children.setdefault(parent_id, []).append(category.id)
                else:
                    dangling.append(DanglingReference(category.id, parent_id, position))

        self._children: dict[str, tuple[str, ...]] = {k: tuple(v) for k, v in children.items()}
        self._dangling: tuple[DanglingReference, ...] = tuple(dangling)

        if dangling:
            logger.debug(
                "dangling_parent_references",
                count=len(dangling),
                sample=[str(d) for d in dangling[:5]],
            )

    @classmethod
    def from_records(cls, records: Iterable[Mapping[str, Any]]) -> GraphIndex:
        """Build an index from raw persistence records."""
        from catgraph.graph.loader import category_from_record

        return cls(category_from_record(r) for r in records)

    # Mapping protocol
    def __getitem__(self, category_id: str) -> Category:
        return self._categories[category_id]

    def __iter__(self) -> Iterator[str]:
        return iter(self._categories)

    def __len__(self) -> int:
        return len(self._categories)

    def __repr__(self) -> str:
        return f"GraphIndex({len(self)} categories, {len(self._dangling)} dangling)"

    # Adjacency
    def children_of(self, category_id: str) -> tuple[str, ...]:
        """Ids of categories listing category_id in their parent_ids."""
        return self._children.get(category_id, ())

    def parents_of(self, category_id: str) -> tuple[str, ...]:
        """Resolved parent ids of a category, in declared order."""
        category = self._categories.get(category_id)
        if category is None:
            return ()
        return tuple(p for p in category.parent_ids if p in self._categories)

    def child_count(self, category_id: str) -> int:
        """Number of categories listing category_id as a parent."""
        return len(self._children.get(category_id, ()))

    def iter_roots(self) -> Iterator[Category]:
        """Iterate categories that declare no parents."""
        for category in self._categories.values():
            if category.is_root:
                yield category

    def iter_leaves(self) -> Iterator[Category]:
        """Iterate categories that no other category lists as a parent."""
        for category in self._categories.values():
            if category.id not in self._children:
                yield category

    def categories(self) -> list[Category]:
        """All categories in snapshot order."""
        return list(self._categories.values())

    # Detection
    def dangling_references(self) -> list[DanglingReference]:
        """Parent references with no matching record."""
        return list(self._dangling)

    def has_dangling_references(self) -> bool:
        """True if any parent reference failed to resolve."""
        return bool(self._dangling)

    def fingerprint(self) -> str:
        """Stable hash of the ids, slugs and parent edges in this snapshot.

        These are the inputs every level and path is derived from. Derived
        fields are not included, so two snapshots that would derive the same
        levels and paths share a fingerprint.
        """
        hash_obj = hashlib.sha256()
        for category_id in sorted(self._categories):
            category = self._categories[category_id]
            parents = ",".join(category.parent_ids)
            hash_obj.update(f"{category_id}:{category.slug}:{parents}\n".encode("utf-8"))
        return hash_obj.hexdigest()[:16]

    # Derivation
    def replace(
        self,
        categories: Iterable[Category] = (),
        remove: Iterable[str] = (),
    ) -> GraphIndex:
        """Return a new index with records added, replaced or removed.

        Args:
            categories: Records to insert or overwrite by id.
            remove: Ids to drop.

        Returns:
            A new GraphIndex. Snapshot order is preserved for existing ids.
        """
        merged = dict(self._categories)
        for category_id in remove:
            merged.pop(category_id, None)
        for category in categories:
            merged[category.id] = category
        return GraphIndex(merged.values())


__all__ = ["GraphIndex"]
