"""Errors raised by the category graph engine.

Only one domain error exists: CycleError. InvalidArgument is raised at
the boundary for malformed input, before any graph logic runs.
"""

from __future__ import annotations


class CatgraphError(Exception):
    """Base class for all catgraph errors."""


class InvalidArgument(CatgraphError, ValueError):
    """Malformed input rejected before traversal (empty id, None parents, ...)."""


class CycleError(CatgraphError, ValueError):
    """A proposed parent set would make a category its own ancestor.

    Attributes:
        category_id: The category whose parents were being changed.
        conflicting_category_id: Category found in the proposed ancestor chain.
        conflicting_category_name: Display name of that category.
        proposed_parent_id: The proposed parent whose lineage closes the loop.
        proposed_parent_name: Display name of the proposed parent.
        existing_child_id: Ancestor of the proposed parent that already lists
            category_id as one of its parents.
        existing_child_name: Display name of that ancestor; the message names it.
    """

    def __init__(
        self,
        category_id: str,
        conflicting_category_id: str,
        conflicting_category_name: str,
        proposed_parent_id: str | None = None,
        proposed_parent_name: str | None = None,
        existing_child_id: str | None = None,
        existing_child_name: str | None = None,
    ) -> None:
        self.category_id = category_id
        self.conflicting_category_id = conflicting_category_id
        self.conflicting_category_name = conflicting_category_name
        self.proposed_parent_id = proposed_parent_id
        self.proposed_parent_name = proposed_parent_name
        self.existing_child_id = existing_child_id
        self.existing_child_name = existing_child_name
        super().__init__(self.message)

    @property
    def is_self_parent(self) -> bool:
        """True if the category was proposed as its own parent."""
        return self.proposed_parent_id == self.category_id

    @property
    def message(self) -> str:
        """Human-readable message suitable for an admin form error."""
        if self.is_self_parent:
            return "A category cannot be its own parent"
        name = self.existing_child_name or self.conflicting_category_name
        return f'Circular reference detected: "{name}" is already a child of this category'

    def to_dict(self) -> dict[str, str | None]:
        """Return a JSON-compatible payload for API error responses."""
        return {
            "categoryId": self.category_id,
            "conflictingCategoryId": self.conflicting_category_id,
            "conflictingCategoryName": self.conflicting_category_name,
            "proposedParentId": self.proposed_parent_id,
            "proposedParentName": self.proposed_parent_name,
            "existingChildId": self.existing_child_id,
            "existingChildName": self.existing_child_name,
            "message": self.message,
        }


__all__ = ["CatgraphError", "CycleError", "InvalidArgument"]
