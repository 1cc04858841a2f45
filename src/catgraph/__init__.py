"""
catgraph - Category hierarchy engine

catgraph keeps a product-category DAG consistent: it rejects parent
assignments that would create cycles, recomputes levels and paths for
every affected descendant after a change, and projects the graph into
display trees and breadcrumb trails.
"""

from importlib.metadata import PackageNotFoundError, version

try:
    __version__ = version("catgraph")
except PackageNotFoundError:
    __version__ = "0.0.0+unknown"  # Not installed
__author__ = "Anspar"
__license__ = "MIT"

from catgraph.graph import (
    BatchUpdate,
    Category,
    CatgraphError,
    CycleError,
    GraphIndex,
    InvalidArgument,
    build_trees,
    collect_descendants,
    create_category,
    delete_category,
    reparent,
    validate_parents,
)

__all__ = [
    "__version__",
    "BatchUpdate",
    "Category",
    "CatgraphError",
    "CycleError",
    "GraphIndex",
    "InvalidArgument",
    "build_trees",
    "collect_descendants",
    "create_category",
    "delete_category",
    "reparent",
    "validate_parents",
]
