"""Snapshot audit - full-graph consistency checks.

Independent of the mutation path: every check here re-derives the
invariants from scratch, so it can be used to verify snapshots written
by other tools or to confirm that accepted mutations kept the graph
consistent.
"""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass, field
from typing import Any

from catgraph.graph.errors import InvalidArgument
from catgraph.graph.index import GraphIndex
from catgraph.graph.resolver import resolve_level, resolve_path
from catgraph.graph.validator import detect_cycles


@dataclass
class AuditCheck:
    """Result of a single audit check."""

    name: str
    passed: bool
    message: str
    severity: str = "error"  # error, warning, info
    details: dict[str, Any] = field(default_factory=dict)


@dataclass
class AuditReport:
    """Aggregated audit results."""

    checks: list[AuditCheck] = field(default_factory=list)

    @property
    def passed(self) -> int:
        return sum(1 for c in self.checks if c.passed)

    @property
    def failed(self) -> int:
        return sum(1 for c in self.checks if not c.passed and c.severity == "error")

    @property
    def warnings(self) -> int:
        return sum(1 for c in self.checks if not c.passed and c.severity == "warning")

    @property
    def is_consistent(self) -> bool:
        return self.failed == 0

    def add(self, check: AuditCheck) -> None:
        self.checks.append(check)

    def get(self, name: str) -> AuditCheck | None:
        for check in self.checks:
            if check.name == name:
                return check
        return None

    def iter_failures(self) -> Iterator[AuditCheck]:
        for check in self.checks:
            if not check.passed:
                yield check

    def to_dict(self) -> dict[str, Any]:
        return {
            "consistent": self.is_consistent,
            "summary": {
                "passed": self.passed,
                "failed": self.failed,
                "warnings": self.warnings,
            },
            "checks": [
                {
                    "name": c.name,
                    "passed": c.passed,
                    "message": c.message,
                    "severity": c.severity,
                    "details": c.details,
                }
                for c in self.checks
            ],
        }


def check_acyclic(index: GraphIndex) -> AuditCheck:
    """No category may be its own ancestor."""
    info = detect_cycles(index)
    if not info.has_cycles:
        return AuditCheck(name="graph.acyclic", passed=True, message="No cycles found")
    return AuditCheck(
        name="graph.acyclic",
        passed=False,
        message=f"{len(info.cycle_paths)} cycle(s) across {len(info.cycle_members)} categories",
        details={
            "members": sorted(info.cycle_members),
            "paths": [" -> ".join(p) for p in info.cycle_paths],
        },
    )


def check_parents_resolve(index: GraphIndex) -> AuditCheck:
    """Parent references should point at records in the snapshot."""
    dangling = index.dangling_references()
    if not dangling:
        return AuditCheck(
            name="graph.parents_resolve",
            passed=True,
            message="All parent references resolve",
        )
    return AuditCheck(
        name="graph.parents_resolve",
        passed=False,
        message=f"{len(dangling)} parent reference(s) not in snapshot",
        severity="warning",
        details={"references": [str(d) for d in dangling]},
    )


def check_levels(index: GraphIndex) -> AuditCheck:
    """level == 0 for roots, else 1 + max(parent levels)."""
    mismatched = {}
    for category in index.values():
        expected = resolve_level(category.parent_ids, index)
        if category.level != expected:
            mismatched[category.id] = {"stored": category.level, "expected": expected}
    if not mismatched:
        return AuditCheck(name="hierarchy.levels", passed=True, message="All levels consistent")
    return AuditCheck(
        name="hierarchy.levels",
        passed=False,
        message=f"{len(mismatched)} categories have a stale level",
        details={"categories": mismatched},
    )


def check_paths(index: GraphIndex) -> AuditCheck:
    """path follows the primary parent's path."""
    mismatched = {}
    for category in index.values():
        try:
            expected = resolve_path(category.slug, category.parent_ids, index)
        except InvalidArgument:
            mismatched[category.id] = {"stored": category.path, "expected": None}
            continue
        if category.path != expected:
            mismatched[category.id] = {"stored": category.path, "expected": expected}
    if not mismatched:
        return AuditCheck(name="hierarchy.paths", passed=True, message="All paths consistent")
    return AuditCheck(
        name="hierarchy.paths",
        passed=False,
        message=f"{len(mismatched)} categories have a stale or missing path",
        details={"categories": mismatched},
    )


def check_max_level(index: GraphIndex, max_level: int) -> AuditCheck:
    """Warn about categories nested deeper than the configured limit."""
    too_deep = sorted(c.id for c in index.values() if c.level > max_level)
    if not too_deep:
        return AuditCheck(
            name="hierarchy.max_level",
            passed=True,
            message=f"No category deeper than level {max_level}",
        )
    return AuditCheck(
        name="hierarchy.max_level",
        passed=False,
        message=f"{len(too_deep)} categories deeper than level {max_level}",
        severity="warning",
        details={"categories": too_deep, "max_level": max_level},
    )


def check_child_counts(index: GraphIndex) -> AuditCheck:
    """Stored child_count / has_children match the adjacency."""
    mismatched = {}
    for category in index.values():
        actual = index.child_count(category.id)
        if category.child_count != actual or category.has_children != (actual > 0):
            mismatched[category.id] = {"stored": category.child_count, "actual": actual}
    if not mismatched:
        return AuditCheck(
            name="hierarchy.child_counts", passed=True, message="All child counters consistent"
        )
    return AuditCheck(
        name="hierarchy.child_counts",
        passed=False,
        message=f"{len(mismatched)} categories have stale child counters",
        severity="warning",
        details={"categories": mismatched},
    )


def check_sibling_slugs(index: GraphIndex) -> AuditCheck:
    """Slugs should be unique among siblings under the same primary parent."""
    seen: dict[tuple[str | None, str], list[str]] = {}
    for category in index.values():
        seen.setdefault((category.primary_parent_id, category.slug), []).append(category.id)
    duplicates = {
        f"{parent or '<root>'}/{slug}": ids for (parent, slug), ids in seen.items() if len(ids) > 1
    }
    if not duplicates:
        return AuditCheck(
            name="hierarchy.sibling_slugs", passed=True, message="Sibling slugs are unique"
        )
    return AuditCheck(
        name="hierarchy.sibling_slugs",
        passed=False,
        message=f"{len(duplicates)} duplicate slug(s) among siblings",
        severity="warning",
        details={"duplicates": duplicates},
    )


def audit_snapshot(index: GraphIndex, max_level: int = 5) -> AuditReport:
    """Run every consistency check over a snapshot.

    Args:
        index: Snapshot index.
        max_level: Deepest level allowed before a warning is raised.

    Returns:
        AuditReport; `is_consistent` is False if any error-severity check failed.
    """
    report = AuditReport()
    report.add(check_acyclic(index))
    report.add(check_parents_resolve(index))
    report.add(check_levels(index))
    report.add(check_paths(index))
    report.add(check_max_level(index, max_level))
    report.add(check_child_counts(index))
    report.add(check_sibling_slugs(index))
    return report


__all__ = [
    "AuditCheck",
    "AuditReport",
    "audit_snapshot",
    "check_acyclic",
    "check_child_counts",
    "check_levels",
    "check_max_level",
    "check_parents_resolve",
    "check_paths",
    "check_sibling_slugs",
]
