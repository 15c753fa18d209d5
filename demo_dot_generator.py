#!/usr/bin/env python3
"""
Demo: Generate Graphviz DOT diagrams of the example type registry.

Shows both visualization modes (SIMPLE, DETAILED).
"""

from typegraph.examples import build_example_registry
from typegraph.backends import generate_dot, save_dot_file, DotMode


def main():
    registry = build_example_registry()

    print("=" * 80)
    print("DOT GENERATOR DEMO")
    print("=" * 80)

    for mode in [DotMode.SIMPLE, DotMode.DETAILED]:
        print(f"\n{mode.value.upper()} MODE:")
        print("-" * 80)

        print(generate_dot(registry, mode=mode))

        filename = f"types_{mode.value}.dot"
        save_dot_file(registry, filename, mode=mode)
        print(f"\nSaved to: {filename}")

    print("\n" + "=" * 80)
    print("To visualize the diagrams:")
    print("  dot -Tpng types_simple.dot -o types_simple.png")
    print("  dot -Tpng types_detailed.dot -o types_detailed.png")
    print("=" * 80)


if __name__ == "__main__":
    main()
