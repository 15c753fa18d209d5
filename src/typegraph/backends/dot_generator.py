"""
Graphviz DOT diagram generator for item registries.

Converts an ItemRegistry's reference graph into Graphviz DOT format.

Supports two modes:
    - SIMPLE: Item names and reference edges
    - DETAILED: Member / variant names listed in each node
"""

from enum import Enum
from typing import List, Set

from typegraph.model import Item, Record, TaggedUnion
from typegraph.registry import ItemRegistry


class DotMode(Enum):
    """Visualization modes for DOT output."""
    SIMPLE = "simple"
    DETAILED = "detailed"


def _escape_dot_string(s: str) -> str:
    """Escape special characters for DOT labels."""
    if not s:
        return '""'
    # Escape backslashes first, then quotes; keep \n sequences meaningful
    s = s.replace('\\', '\\\\')
    s = s.replace('"', '\\"')
    s = s.replace('\n', '\\n')
    return f'"{s}"'


def _item_label(item: Item, mode: DotMode) -> str:
    if mode != DotMode.DETAILED:
        return item.name
    if isinstance(item, Record):
        parts = [m.name for m in item.members]
    elif isinstance(item, TaggedUnion):
        parts = [v.name for v in item.variants]
    else:
        parts = []
    if not parts:
        return item.name
    return item.name + "\n" + "\n".join(parts)


def generate_dot(registry: ItemRegistry, mode: DotMode = DotMode.SIMPLE) -> str:
    """
    Generate Graphviz DOT format for a registry.

    Node IDs are always quoted, since names like "Node" or "Graph" are
    DOT keywords. Records are boxes, unions are hexagons. Items that are recursive
    without indirection are filled red. Referenced names missing from
    the registry are drawn as dashed ellipses.

    Args:
        registry: ItemRegistry to visualize
        mode: Visualization mode (SIMPLE, DETAILED)

    Returns:
        String containing DOT graph definition
    """
    lines = []

    lines.append("digraph types {")
    lines.append("  rankdir=LR;")
    lines.append("  node [style=filled, fillcolor=lightblue];")

    recursive: Set[str] = set(registry.recursive_items())

    for item in registry:
        shape = "hexagon" if isinstance(item, TaggedUnion) else "box"
        fill = "red" if item.name in recursive else "lightblue"
        label = _escape_dot_string(_item_label(item, mode))
        lines.append(f'  "{item.name}" [shape={shape}, fillcolor={fill}, label={label}];')

    dangling: List[str] = []
    for missing in registry.dangling_references().values():
        for name in missing:
            if name not in dangling:
                dangling.append(name)
    for name in dangling:
        lines.append(f'  "{name}" [shape=ellipse, style=dashed, fillcolor=white];')

    for item in registry:
        seen: Set[str] = set()
        for ref in item.named_type_references():
            if ref in seen:
                continue
            seen.add(ref)
            lines.append(f'  "{item.name}" -> "{ref}";')

    lines.append("}")

    return "\n".join(lines)


def save_dot_file(registry: ItemRegistry, filename: str, mode: DotMode = DotMode.SIMPLE) -> None:
    """
    Generate DOT and save to file.

    Args:
        registry: ItemRegistry to visualize
        filename: Output file path (.dot extension recommended)
        mode: Visualization mode
    """
    dot = generate_dot(registry, mode=mode)
    with open(filename, 'w') as f:
        f.write(dot)


__all__ = ["DotMode", "generate_dot", "save_dot_file"]
