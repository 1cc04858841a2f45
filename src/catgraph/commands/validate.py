"""
catgraph.commands.validate - Audit a snapshot for hierarchy consistency.

Runs every check in catgraph.graph.audit and reports them the same way
for text and JSON output. Exit code is 1 if any error-severity check fails.
"""

from __future__ import annotations

import argparse

from catgraph.commands.common import load_configuration, load_index, print_json
from catgraph.graph.audit import AuditReport, audit_snapshot


def run(args: argparse.Namespace) -> int:
    """Run the validate command."""
    config = load_configuration(args)
    index = load_index(args, config)

    report = audit_snapshot(index, max_level=config.get("hierarchy.max_level", 5))

    if args.json:
        print_json(report.to_dict())
    elif not args.quiet or not report.is_consistent:
        _print_text_report(report, verbose=args.verbose)

    return 0 if report.is_consistent else 1


def _print_text_report(report: AuditReport, verbose: bool = False) -> None:
    for check in report.checks:
        if check.passed:
            icon = "✓"
        elif check.severity == "warning":
            icon = "⚠"
        else:
            icon = "✗"
        print(f"  {icon} {check.name}: {check.message}")

        if verbose and check.details:
            for key, value in check.details.items():
                if isinstance(value, list) and len(value) > 3:
                    print(f"      {key}: {value[:3]} ... ({len(value)} total)")
                else:
                    print(f"      {key}: {value}")

    print()
    if report.is_consistent:
        print(f"✓ CONSISTENT: {report.passed} checks passed, {report.warnings} warnings")
    else:
        print(f"✗ INCONSISTENT: {report.failed} errors, {report.warnings} warnings")
