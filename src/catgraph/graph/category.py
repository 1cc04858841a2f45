"""Category - the single entity of the hierarchy engine.

A Category is an immutable record. Derived fields (level, path and the
child counters) are computed by the engine and returned as new records;
callers never set them directly on a live snapshot.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from catgraph.graph.errors import InvalidArgument


def normalize_parent_ids(category_id: str, parent_ids: object) -> tuple[str, ...]:
    """Validate and normalize a parent id sequence.

    Duplicates are collapsed keeping the first occurrence, so the
    primary parent never moves.

    Args:
        category_id: Owning category, used in error messages.
        parent_ids: Sequence of parent ids.

    Returns:
        Tuple of unique, non-empty parent ids in original order.

    Raises:
        InvalidArgument: If parent_ids is None, a bare string, or holds
            empty or non-string entries.
    """
    if parent_ids is None:
        raise InvalidArgument(f"Category '{category_id}': parent_ids must be a sequence, not None")
    if isinstance(parent_ids, str):
        raise InvalidArgument(
            f"Category '{category_id}': parent_ids must be a sequence of ids, not a string"
        )

    seen: set[str] = set()
    result: list[str] = []
    for pid in parent_ids:  # type: ignore[union-attr]
        if not isinstance(pid, str) or not pid:
            raise InvalidArgument(f"Category '{category_id}': invalid parent id {pid!r}")
        if pid not in seen:
            seen.add(pid)
            result.append(pid)
    return tuple(result)


@dataclass(frozen=True)
class Category:
    """A product category node.

    Attributes:
        id: Opaque stable identifier.
        name: Display name.
        slug: URL-safe identifier used to build `path`. Defaults to the id.
        parent_ids: Ordered parent ids; the first one is the primary parent.
        level: Longest-path depth from any root (derived).
        path: Canonical URL path through the primary parent (derived).
        sort_order: Sibling ordering in tree projections.
        child_count: Number of categories listing this one as a parent (derived).
        has_children: child_count > 0 (derived).
        product_count: Products assigned to this category (maintained elsewhere).
    """

    id: str
    name: str = ""
    slug: str | None = None
    parent_ids: tuple[str, ...] = field(default_factory=tuple)
    level: int = 0
    path: str = ""
    sort_order: int = 0
    child_count: int = 0
    has_children: bool = False
    product_count: int = 0
    is_active: bool = True
    is_featured: bool = False
    show_on_homepage: bool = False
    description: str = ""
    created_by: str = "admin"
    needs_review: bool = False

    def __post_init__(self) -> None:
        if not isinstance(self.id, str) or not self.id:
            raise InvalidArgument(f"Category id must be a non-empty string, got {self.id!r}")
        if self.slug is None:
            object.__setattr__(self, "slug", self.id)
        elif not isinstance(self.slug, str) or not self.slug:
            raise InvalidArgument(
                f"Category '{self.id}': slug must be a non-empty string, got {self.slug!r}"
            )
        object.__setattr__(self, "parent_ids", normalize_parent_ids(self.id, self.parent_ids))

    @property
    def primary_parent_id(self) -> str | None:
        """The parent used for path and tree placement, or None for roots."""
        return self.parent_ids[0] if self.parent_ids else None

    @property
    def is_root(self) -> bool:
        """True if the category declares no parents."""
        return not self.parent_ids

    def __str__(self) -> str:
        return f"{self.id}: {self.name}"


__all__ = ["Category", "normalize_parent_ids"]
