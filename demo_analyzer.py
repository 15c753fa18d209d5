"""
Demo: Run the analyzer on the example type registry and print the report.
"""

from typegraph.examples import build_example_registry
from typegraph.analyzer import analyze_registry
from typegraph.serialization import registry_to_yaml


def print_report(report):
    """Pretty-print a RegistryReport."""
    print()
    print("=" * 70)
    print("TYPE REGISTRY ANALYSIS REPORT")
    print("=" * 70)
    print()

    print("BASIC METRICS")
    print(f"  Total Items:           {report.total_items}")
    print(f"  Records:               {report.total_records}")
    print(f"  Unions:                {report.total_unions}")
    print()

    print("REFERENCES")
    for name, refs in report.reference_graph.items():
        print(f"  {name} -> {', '.join(refs) if refs else '(none)'}")
    print(f"  Unreferenced Items:    {sorted(report.unreferenced_items) or 'None'}")
    print(f"  Has Reference Cycles:  {'YES' if report.has_reference_cycles else 'NO'}")
    if report.has_reference_cycles and report.cycle_example:
        print(f"    Example: {' -> '.join(report.cycle_example)}")
    print()

    print("STRUCTURE")
    print(f"  Defaultable:           {report.defaultable_items or 'None'}")
    print(f"  Recursive (unboxed):   {report.recursive_items or 'None'}")
    print()

    if report.warnings:
        print("WARNINGS")
        for i, warning in enumerate(report.warnings, 1):
            print(f"  {i}. {warning}")
    else:
        print("NO WARNINGS - registry looks clean!")
    print()


if __name__ == "__main__":
    registry = build_example_registry()

    report = analyze_registry(registry)
    print_report(report)

    yaml_str = registry_to_yaml(registry)
    with open("example_types_output.yaml", "w") as f:
        f.write(yaml_str)
    print("Registry exported to example_types_output.yaml")
