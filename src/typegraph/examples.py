"""
Example type definitions.

Builds a small but realistic set of items: a JSON document model (boxed
recursion through a union), a linked list done right and done wrong,
and a pair of mutually recursive records.
"""
from typegraph.model import Member, Record, TaggedUnion, Variant
from typegraph.registry import ItemRegistry
from typegraph.type_expressions import (
    BOOLEAN,
    FLOAT,
    INTEGER,
    TEXT,
    BoxedType,
    EitherType,
    MappingType,
    NamedType,
    OptionalType,
    SequenceType,
)


def build_json_value_items():
    """
    JSON value model.

    JsonValue's Array and Object variants hold JsonValue inside a
    sequence and a map. The sequence is heap-backed; the map is not
    counted as an indirection, so Object is boxed explicitly.
    """
    json_value = TaggedUnion("JsonValue", [
        Variant("Null"),
        Variant("Bool", BOOLEAN),
        Variant("Number", FLOAT),
        Variant("String", TEXT),
        Variant("Array", SequenceType(NamedType("JsonValue"))),
        Variant("Object", MappingType(BoxedType(NamedType("JsonValue")))),
    ])
    document = Record("Document", [
        Member("id", INTEGER),
        Member("title", OptionalType(TEXT)),
        Member("tags", SequenceType(TEXT)),
        Member("body", NamedType("JsonValue")),
    ])
    return [json_value, document]


def build_linked_list_items():
    """A boxed list node (finite) and an unboxed one (infinite size)."""
    node = Record("Node", [
        Member("value", INTEGER),
        Member("next", OptionalType(BoxedType(NamedType("Node")))),
    ])
    bad_node = Record("BadNode", [
        Member("value", INTEGER),
        Member("next", OptionalType(NamedType("BadNode"))),
    ])
    return [node, bad_node]


def build_mutual_recursion_items():
    """Parent holds a Child by value and Child holds a Parent by value."""
    parent = Record("Parent", [Member("child", NamedType("Child"))])
    child = Record("Child", [
        Member("parent", NamedType("Parent")),
        Member("status", EitherType(NamedType("Parent"), TEXT)),
    ])
    return [parent, child]


def build_example_registry() -> ItemRegistry:
    items = build_json_value_items() + build_linked_list_items() + build_mutual_recursion_items()
    return ItemRegistry.build(items)
