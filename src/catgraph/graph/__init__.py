"""Graph module - Category hierarchy engine.

Exports:
- Category: The category record
- GraphIndex: Immutable snapshot lookup with adjacency views
- CycleError, InvalidArgument: Engine errors
- validate_parents, check_parents, detect_cycles: Acyclicity checks
- resolve_level, resolve_path: Derived field computation
- reparent, create_category, delete_category, delete_impact: Mutations
- collect_descendants, all_ancestor_paths: Traversals
- build_trees, TreeNode: Display projection
- BatchUpdate, FieldUpdate, DanglingReference: Mutation output types
"""

from catgraph.graph.cascade import (
    DeleteImpact,
    create_category,
    delete_category,
    delete_impact,
    reparent,
)
from catgraph.graph.category import Category
from catgraph.graph.collector import (
    all_ancestor_paths,
    breadcrumbs,
    collect_descendants,
    format_category_path,
    iter_ancestors,
    iter_descendants,
)
from catgraph.graph.errors import CatgraphError, CycleError, InvalidArgument
from catgraph.graph.index import GraphIndex
from catgraph.graph.mutations import BatchUpdate, DanglingReference, FieldUpdate
from catgraph.graph.resolver import resolve_level, resolve_path
from catgraph.graph.tree import TreeNode, build_trees
from catgraph.graph.validator import CycleInfo, check_parents, detect_cycles, validate_parents

__all__ = [
    "Category",
    "GraphIndex",
    "CatgraphError",
    "CycleError",
    "InvalidArgument",
    "CycleInfo",
    "check_parents",
    "validate_parents",
    "detect_cycles",
    "resolve_level",
    "resolve_path",
    "reparent",
    "create_category",
    "delete_category",
    "delete_impact",
    "DeleteImpact",
    "collect_descendants",
    "iter_descendants",
    "iter_ancestors",
    "all_ancestor_paths",
    "format_category_path",
    "breadcrumbs",
    "build_trees",
    "TreeNode",
    "BatchUpdate",
    "FieldUpdate",
    "DanglingReference",
]
