"""
Registry Analyzer — diagnostics and inventory of an ItemRegistry.

This module provides read-only analysis of a registry:
    - Item inventory (records vs unions)
    - Reference graph and reference cycles
    - Defaultability per item
    - Unboxed recursion (infinite-size items)
    - Dangling and unreferenced names

IMPORTANT: This does NOT modify the registry. It only produces reports.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Set

from typegraph.model import Record, TaggedUnion
from typegraph.registry import ItemRegistry

logger = logging.getLogger(__name__)


def _find_cycle_dfs(graph: Dict[str, List[str]], start: str, visited: Set[str],
                    rec_stack: Set[str], path: List[str]) -> Optional[List[str]]:
    """DFS to find a reference cycle starting from a node."""
    visited.add(start)
    rec_stack.add(start)
    path.append(start)

    for neighbor in graph.get(start, []):
        if neighbor not in visited:
            cycle = _find_cycle_dfs(graph, neighbor, visited, rec_stack, path[:])
            if cycle:
                return cycle
        elif neighbor in rec_stack:
            cycle_start_idx = path.index(neighbor)
            return path[cycle_start_idx:] + [neighbor]

    rec_stack.remove(start)
    return None


@dataclass
class RegistryReport:
    """Analysis report for an item registry."""

    total_items: int = 0
    total_records: int = 0
    total_unions: int = 0

    # item name -> names it references, declaration order, duplicates kept
    reference_graph: Dict[str, List[str]] = field(default_factory=dict)

    defaultable_items: List[str] = field(default_factory=list)
    recursive_items: List[str] = field(default_factory=list)
    dangling_references: Dict[str, List[str]] = field(default_factory=dict)
    unreferenced_items: Set[str] = field(default_factory=set)

    # Any reference cycle, boxed or not. Informational only; only
    # recursive_items describe infinite-size types.
    has_reference_cycles: bool = False
    cycle_example: Optional[List[str]] = None

    warnings: List[str] = field(default_factory=list)

    def add_warning(self, msg: str) -> None:
        """Add a warning to the report."""
        if msg not in self.warnings:
            self.warnings.append(msg)


def analyze_registry(registry: ItemRegistry) -> RegistryReport:
    """
    Perform a full structural analysis of a registry.

    Returns a RegistryReport. Recursive items and dangling references
    are also reported as warnings.
    """
    report = RegistryReport(total_items=len(registry))
    defaultable = registry.defaultable_names()

    for item in registry:
        if isinstance(item, Record):
            report.total_records += 1
        elif isinstance(item, TaggedUnion):
            report.total_unions += 1

        report.reference_graph[item.name] = list(item.named_type_references())

        if item.name in defaultable:
            report.defaultable_items.append(item.name)
        if item.is_recursive(registry):
            report.recursive_items.append(item.name)

    report.dangling_references = {
        name: list(missing) for name, missing in registry.dangling_references().items()
    }

    referenced: Set[str] = set()
    for name, refs in report.reference_graph.items():
        referenced.update(ref for ref in refs if ref != name)
    report.unreferenced_items = set(registry.names()) - referenced

    visited: Set[str] = set()
    for name in report.reference_graph:
        if name not in visited:
            cycle = _find_cycle_dfs(report.reference_graph, name, visited, set(), [])
            if cycle:
                report.has_reference_cycles = True
                report.cycle_example = cycle
                break

    for name in report.recursive_items:
        report.add_warning(f"Recursive without indirection (infinite size): {name}")

    for name, missing in report.dangling_references.items():
        logger.warning("Item %s references unregistered names: %s", name, ", ".join(missing))
        report.add_warning(f"Dangling references in {name}: {', '.join(missing)}")

    return report


def format_report(report: RegistryReport) -> str:
    """Render a RegistryReport as plain text."""
    lines = [
        f"Items:       {report.total_items} ({report.total_records} records, "
        f"{report.total_unions} unions)",
        f"Defaultable: {', '.join(report.defaultable_items) or '(none)'}",
        f"Recursive:   {', '.join(report.recursive_items) or '(none)'}",
        f"Unreferenced: {', '.join(sorted(report.unreferenced_items)) or '(none)'}",
    ]
    if report.has_reference_cycles and report.cycle_example:
        lines.append(f"Reference cycle: {' -> '.join(report.cycle_example)}")
    if report.warnings:
        lines.append("Warnings:")
        for i, warning in enumerate(report.warnings, 1):
            lines.append(f"  {i}. {warning}")
    return "\n".join(lines)


if __name__ == '__main__':
    import argparse
    from typegraph.serialization import registry_from_yaml

    parser = argparse.ArgumentParser(description='Analyze a YAML file of type definitions')
    parser.add_argument('definitions', help='Path to YAML type definitions')
    parser.add_argument('--sanitize', action='store_true',
                        help='Sanitize illegal names instead of rejecting them')
    parser.add_argument('--verbose', action='store_true', help='Enable debug logging')
    args = parser.parse_args()

    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.WARNING)

    with open(args.definitions, 'r', encoding='utf-8') as f:
        registry = registry_from_yaml(f.read(), sanitize_names=args.sanitize)

    print(format_report(analyze_registry(registry)))
