"""
catgraph.cli - Command-line interface.

Main entry point for the catgraph CLI tool.
"""

import argparse
import sys
from pathlib import Path
from typing import List, Optional

from catgraph import __version__
from catgraph.commands import (
    breadcrumbs_cmd,
    config_cmd,
    delete_cmd,
    descendants,
    leaves,
    reparent_cmd,
    search,
    tree,
    validate,
)


def _add_json_flag(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "-j",
        "--json",
        action="store_true",
        help="Output as JSON",
    )


def create_parser() -> argparse.ArgumentParser:
    """Create the argument parser."""
    parser = argparse.ArgumentParser(
        prog="catgraph",
        description="Category hierarchy engine: cycle-safe parents, cascading levels and paths",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  catgraph tree                          # Print the category tree
  catgraph tree --format markdown        # Nested markdown outline
  catgraph validate                      # Audit levels, paths and cycles
  catgraph descendants electronics       # Everything below a category
  catgraph breadcrumbs headphones        # Breadcrumb trails
  catgraph reparent audio accessories    # Preview a move
  catgraph reparent audio --write        # Make audio a root and save
  catgraph delete audio --dry-run        # Show what a delete would affect

Configuration:
  catgraph looks for .catgraph.toml in the current directory or parent
  directories. CATGRAPH_<SECTION>_<KEY> environment variables override it.

  catgraph config show           # View current config
  catgraph config path           # Show config file location

For detailed command help: catgraph <command> --help
        """,
    )

    # Global options
    parser.add_argument(
        "--version",
        action="version",
        version=f"catgraph {__version__}",
    )
    parser.add_argument(
        "--config",
        type=Path,
        help="Path to configuration file",
        metavar="PATH",
    )
    parser.add_argument(
        "--snapshot",
        type=Path,
        help="Category snapshot JSON file (default: snapshot.file from config)",
        metavar="PATH",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Verbose output (debug logging, tracebacks on error)",
    )
    parser.add_argument(
        "-q",
        "--quiet",
        action="store_true",
        help="Suppress non-error output",
    )

    # Subcommands
    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # tree command
    tree_parser = subparsers.add_parser(
        "tree",
        help="Print the category tree",
    )
    tree_parser.add_argument(
        "--format",
        choices=["text", "json", "markdown", "csv"],
        default="text",
        help="Output format (default: text)",
    )
    tree_parser.add_argument(
        "--active-only",
        action="store_true",
        help="Leave out inactive categories and everything below them",
    )
    tree_parser.add_argument(
        "--max-depth",
        type=int,
        help="Only show this many levels below each root",
        metavar="N",
    )
    _add_json_flag(tree_parser)

    # validate command
    validate_parser = subparsers.add_parser(
        "validate",
        help="Audit a snapshot for cycles and stale levels, paths and counters",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Checks:
  graph.acyclic              No category is its own ancestor (error)
  graph.parents_resolve      Parent ids exist in the snapshot (warning)
  hierarchy.levels           Stored level matches parents (error)
  hierarchy.paths            Stored path matches primary parent (error)
  hierarchy.max_level        Nesting depth within hierarchy.max_level (warning)
  hierarchy.child_counts     childCount/hasChildren match adjacency (warning)
  hierarchy.sibling_slugs    Slugs unique among siblings (warning)
""",
    )
    _add_json_flag(validate_parser)

    # descendants command
    descendants_parser = subparsers.add_parser(
        "descendants",
        help="List every category below a category",
    )
    descendants_parser.add_argument("category_id", help="Category id")
    _add_json_flag(descendants_parser)

    # breadcrumbs command
    breadcrumbs_parser = subparsers.add_parser(
        "breadcrumbs",
        help="Show breadcrumb trails for a category",
    )
    breadcrumbs_parser.add_argument("category_id", help="Category id")
    breadcrumbs_parser.add_argument(
        "--separator",
        help="Trail separator (default: breadcrumbs.separator from config)",
    )
    _add_json_flag(breadcrumbs_parser)

    # reparent command
    reparent_parser = subparsers.add_parser(
        "reparent",
        help="Replace a category's parents and cascade levels and paths",
    )
    reparent_parser.add_argument("category_id", help="Category to move")
    reparent_parser.add_argument(
        "parent_ids",
        nargs="*",
        help="New parent ids, primary first (none makes it a root)",
        metavar="PARENT_ID",
    )
    reparent_parser.add_argument(
        "--write",
        action="store_true",
        help="Apply the update to the snapshot file",
    )
    _add_json_flag(reparent_parser)

    # delete command
    delete_parser = subparsers.add_parser(
        "delete",
        help="Delete a category",
    )
    delete_parser.add_argument("category_id", help="Category to delete")
    delete_mode = delete_parser.add_mutually_exclusive_group()
    delete_mode.add_argument(
        "--cascade",
        action="store_true",
        help="Also delete every descendant",
    )
    delete_mode.add_argument(
        "--force",
        action="store_true",
        help="Delete even with children; children keep their other parents or become roots",
    )
    delete_parser.add_argument(
        "--dry-run",
        action="store_true",
        help="Only report what the delete would affect",
    )
    delete_parser.add_argument(
        "--write",
        action="store_true",
        help="Apply the delete to the snapshot file",
    )
    _add_json_flag(delete_parser)

    # leaves command
    leaves_parser = subparsers.add_parser(
        "leaves",
        help="List categories without children",
    )
    leaves_parser.add_argument(
        "--active-only",
        action="store_true",
        help="Only active categories",
    )
    _add_json_flag(leaves_parser)

    # search command
    search_parser = subparsers.add_parser(
        "search",
        help="Search categories by name and description",
    )
    search_parser.add_argument("query", help="Case-insensitive search text")
    search_parser.add_argument(
        "--limit",
        type=int,
        help="Maximum results (default: search.limit from config)",
        metavar="N",
    )
    _add_json_flag(search_parser)

    # config command
    config_parser = subparsers.add_parser(
        "config",
        help="View configuration (show, get, path)",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Quick Start (.catgraph.toml):
  [snapshot]
  file = "categories.json"

  [hierarchy]
  max_level = 5

  [breadcrumbs]
  separator = " > "
  url_prefix = "/categories"

  [logging]
  level = "INFO"
  format = "json"
""",
    )
    config_subparsers = config_parser.add_subparsers(dest="config_action")

    config_show = config_subparsers.add_parser(
        "show",
        help="Show current configuration",
    )
    config_show.add_argument(
        "--section",
        help="Show only a specific section (e.g., 'breadcrumbs')",
        metavar="SECTION",
    )
    _add_json_flag(config_show)

    config_get = config_subparsers.add_parser(
        "get",
        help="Get a configuration value",
    )
    config_get.add_argument(
        "key",
        help="Configuration key (dot-notation, e.g., 'hierarchy.max_level')",
    )
    _add_json_flag(config_get)

    config_subparsers.add_parser(
        "path",
        help="Show config file location",
    )

    return parser


def _setup_logging(args: argparse.Namespace) -> None:
    from catgraph.config import load_config
    from catgraph.log import configure_logging

    config = load_config(args.config)
    level = "DEBUG" if args.verbose else config.get("logging.level", "WARNING")
    configure_logging(level, config.get("logging.format", "text"))


def main(argv: Optional[List[str]] = None) -> int:
    """
    Main entry point for the CLI.

    Args:
        argv: Command line arguments (defaults to sys.argv[1:])

    Returns:
        Exit code (0 for success, non-zero for failure)
    """
    parser = create_parser()

    # Enable shell tab-completion if argcomplete is installed
    # Install with: pip install catgraph[completion]
    # Then activate: eval "$(register-python-argcomplete catgraph)"
    try:
        import argcomplete

        argcomplete.autocomplete(parser)
    except ImportError:
        pass

    args = parser.parse_args(argv)

    # Handle no command
    if not args.command:
        parser.print_help()
        return 0

    try:
        _setup_logging(args)

        # Dispatch to command handlers
        if args.command == "tree":
            return tree.run(args)
        elif args.command == "validate":
            return validate.run(args)
        elif args.command == "descendants":
            return descendants.run(args)
        elif args.command == "breadcrumbs":
            return breadcrumbs_cmd.run(args)
        elif args.command == "reparent":
            return reparent_cmd.run(args)
        elif args.command == "delete":
            return delete_cmd.run(args)
        elif args.command == "leaves":
            return leaves.run(args)
        elif args.command == "search":
            return search.run(args)
        elif args.command == "config":
            return config_cmd.run(args)
        else:
            parser.print_help()
            return 1

    except KeyboardInterrupt:
        print("\nOperation cancelled.", file=sys.stderr)
        return 130
    except Exception as e:
        if args.verbose:
            raise
        print(f"Error: {e}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
