"""
catgraph.commands - CLI command implementations
"""

__all__ = [
    "breadcrumbs_cmd",
    "config_cmd",
    "delete_cmd",
    "descendants",
    "leaves",
    "reparent_cmd",
    "search",
    "tree",
    "validate",
]
