"""
Tests for Core Model Objects

These tests verify:
    - Item creation and name validation
    - Member / variant uniqueness within an item
    - Defaultability of records and unions
    - Recursion through value-contained members, including mutual recursion
    - Named type references in declaration order
"""

import time

import pytest

from typegraph.errors import DuplicateName, InvalidIdentifier
from typegraph.model import (
    Alias,
    Item,
    Member,
    Record,
    TaggedUnion,
    Variant,
    Wrapper,
)
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
    ReferenceType,
    SequenceType,
)


class TestRecord:
    """Test Record objects."""

    def test_create_record(self):
        record = Record("Point", [Member("x", FLOAT), Member("y", FLOAT)])
        assert record.name == "Point"
        assert [m.name for m in record.members] == ["x", "y"]
        assert isinstance(record, Item)

    def test_members_stored_as_tuple(self):
        record = Record("Point", [Member("x", FLOAT)])
        assert isinstance(record.members, tuple)

    def test_empty_record(self):
        assert Record("Unit").members == ()

    def test_invalid_name_rejected(self):
        with pytest.raises(InvalidIdentifier):
            Record("struct", [])
        with pytest.raises(InvalidIdentifier):
            Member("first-name", TEXT)

    def test_duplicate_member_rejected(self):
        with pytest.raises(DuplicateName) as exc:
            Record("Point", [Member("x", FLOAT), Member("x", INTEGER)])
        assert exc.value.name == "x"

    def test_get_member(self):
        record = Record("Point", [Member("x", FLOAT)])
        assert record.get_member("x").type == FLOAT
        assert record.get_member("z") is None

    def test_original_name_kept(self):
        member = Member("firstname", TEXT, original_name="first-name")
        assert member.original_name == "first-name"

    def test_record_immutable(self):
        record = Record("Point", [])
        with pytest.raises(AttributeError):
            record.name = "Other"


class TestTaggedUnion:
    """Test TaggedUnion objects."""

    def test_create_union(self):
        union = TaggedUnion("Shape", [Variant("Circle", FLOAT), Variant("Empty")])
        assert union.name == "Shape"
        assert union.get_variant("Empty").payload is None
        assert union.get_variant("Square") is None

    def test_duplicate_variant_rejected(self):
        with pytest.raises(DuplicateName):
            TaggedUnion("Shape", [Variant("Empty"), Variant("Empty")])

    def test_same_member_name_in_different_items(self):
        """Member names are only unique within one item."""
        registry = ItemRegistry.build([
            Record("A", [Member("value", INTEGER)]),
            Record("B", [Member("value", TEXT)]),
        ])
        assert len(registry) == 2


class TestDefaultability:
    """Test item defaultability."""

    def test_record_of_simple_members(self):
        record = Record("Config", [
            Member("enabled", BOOLEAN),
            Member("names", SequenceType(TEXT)),
            Member("limit", OptionalType(INTEGER)),
            Member("extra", MappingType(TEXT)),
        ])
        registry = ItemRegistry.build([record])
        assert record.is_defaultable(registry)

    def test_empty_record_is_defaultable(self):
        record = Record("Empty")
        assert record.is_defaultable(ItemRegistry.build([record]))

    def test_record_with_either_member(self):
        record = Record("Outcome", [Member("result", EitherType(INTEGER, TEXT))])
        assert not record.is_defaultable(ItemRegistry.build([record]))

    def test_record_with_reference_member(self):
        record = Record("View", [Member("text", ReferenceType(TEXT))])
        assert not record.is_defaultable(ItemRegistry.build([record]))

    def test_union_never_defaultable(self):
        union = TaggedUnion("Flag", [Variant("On"), Variant("Off")])
        assert not union.is_defaultable(ItemRegistry.build([union]))

    def test_record_follows_named_members(self):
        inner = Record("Inner", [Member("x", INTEGER)])
        outer = Record("Outer", [Member("inner", NamedType("Inner"))])
        union = TaggedUnion("Choice", [Variant("A")])
        holder = Record("Holder", [Member("choice", NamedType("Choice"))])
        registry = ItemRegistry.build([inner, outer, union, holder])
        assert outer.is_defaultable(registry)
        assert not holder.is_defaultable(registry)

    def test_dangling_member_not_defaultable(self):
        record = Record("A", [Member("b", NamedType("Missing"))])
        assert not record.is_defaultable(ItemRegistry.build([record]))

    def test_boxed_self_reference_terminates(self):
        """A default that needs itself cannot be built."""
        record = Record("Loop", [Member("next", BoxedType(NamedType("Loop")))])
        assert not record.is_defaultable(ItemRegistry.build([record]))

    def test_optional_self_reference_is_defaultable(self):
        record = Record("Node", [Member("next", OptionalType(BoxedType(NamedType("Node"))))])
        assert record.is_defaultable(ItemRegistry.build([record]))


class TestRecursion:
    """Test unboxed recursion detection."""

    def test_direct_self_reference(self):
        record = Record("A", [Member("a", NamedType("A"))])
        assert record.is_recursive(ItemRegistry.build([record]))

    def test_boxed_self_reference(self):
        record = Record("A", [Member("a", BoxedType(NamedType("A")))])
        assert not record.is_recursive(ItemRegistry.build([record]))

    def test_sequence_self_reference(self):
        record = Record("Tree", [Member("children", SequenceType(NamedType("Tree")))])
        assert not record.is_recursive(ItemRegistry.build([record]))

    def test_optional_self_reference(self):
        record = Record("A", [Member("a", OptionalType(NamedType("A")))])
        assert record.is_recursive(ItemRegistry.build([record]))

    def test_mutual_recursion_terminates(self):
        a = Record("A", [Member("b", NamedType("B"))])
        b = Record("B", [Member("a", NamedType("A"))])
        registry = ItemRegistry.build([a, b])
        assert a.is_recursive(registry)
        assert b.is_recursive(registry)

    def test_cycle_broken_by_box(self):
        a = Record("A", [Member("b", NamedType("B"))])
        b = Record("B", [Member("c", NamedType("C"))])
        c = Record("C", [Member("a", BoxedType(NamedType("A")))])
        registry = ItemRegistry.build([a, b, c])
        assert not any(item.is_recursive(registry) for item in registry)

    def test_cycle_not_through_target(self):
        """A reaches a B<->C cycle but is not itself recursive."""
        a = Record("A", [Member("b", NamedType("B"))])
        b = Record("B", [Member("c", NamedType("C"))])
        c = Record("C", [Member("b", NamedType("B"))])
        registry = ItemRegistry.build([a, b, c])
        assert not a.is_recursive(registry)
        assert b.is_recursive(registry)
        assert c.is_recursive(registry)

    def test_union_any_variant(self):
        union = TaggedUnion("Expr", [
            Variant("Lit", INTEGER),
            Variant("Neg", NamedType("Expr")),
            Variant("Nothing"),
        ])
        assert union.is_recursive(ItemRegistry.build([union]))

    def test_union_boxed_variant(self):
        union = TaggedUnion("Expr", [
            Variant("Lit", INTEGER),
            Variant("Neg", BoxedType(NamedType("Expr"))),
        ])
        assert not union.is_recursive(ItemRegistry.build([union]))

    def test_either_member_needs_both_sides(self):
        both = Record("A", [Member("x", EitherType(NamedType("A"), NamedType("A")))])
        one = Record("B", [Member("x", EitherType(NamedType("B"), TEXT))])
        registry = ItemRegistry.build([both, one])
        assert both.is_recursive(registry)
        assert not one.is_recursive(registry)

    def test_reference_never_recursive(self):
        record = Record("A", [Member("a", ReferenceType(NamedType("A")))])
        assert not record.is_recursive(ItemRegistry.build([record]))

    def test_contains_unboxed_other_target(self):
        a = Record("A", [Member("b", OptionalType(NamedType("B")))])
        b = Record("B", [Member("x", INTEGER)])
        registry = ItemRegistry.build([a, b])
        assert a.contains_unboxed("B", registry)
        assert not b.contains_unboxed("A", registry)


class TestNamedTypeReferences:
    """Test reference listing."""

    def test_record_references_in_order(self):
        record = Record("A", [
            Member("c", NamedType("C")),
            Member("n", INTEGER),
            Member("b", BoxedType(SequenceType(NamedType("B")))),
            Member("c2", OptionalType(NamedType("C"))),
        ])
        assert record.named_type_references() == ["C", "B", "C"]

    def test_union_references_skip_bare_variants(self):
        union = TaggedUnion("U", [
            Variant("Bare"),
            Variant("Ok", EitherType(NamedType("Good"), NamedType("Bad"))),
        ])
        assert union.named_type_references() == ["Good"]


class TestWrapperAndAlias:
    """Test single-type declarations."""

    def test_wrapper(self):
        wrapper = Wrapper("UserId", INTEGER)
        assert wrapper.name == "UserId"
        assert wrapper.named_root() is None

    def test_alias(self):
        alias = Alias("Users", SequenceType(NamedType("User")))
        assert alias.named_root() == "User"

    def test_names_validated(self):
        with pytest.raises(InvalidIdentifier):
            Wrapper("type", INTEGER)
        with pytest.raises(InvalidIdentifier):
            Alias("", TEXT)


def build_shared_chain(depth, close_cycle=False):
    """Items T0..T<depth>, each holding the next one by value twice."""
    items = [
        Record(f"T{k}", [Member("a", NamedType(f"T{k + 1}")), Member("b", NamedType(f"T{k + 1}"))])
        for k in range(depth)
    ]
    last = NamedType("T0") if close_cycle else INTEGER
    items.append(Record(f"T{depth}", [Member("a", last)]))
    return ItemRegistry.build(items)


class TestSharedReferences:
    """Repeated references to the same item are answered once per query."""

    def test_deep_shared_chain_is_fast(self):
        registry = build_shared_chain(60)
        first = registry.lookup("T0")

        start = time.perf_counter()
        assert not first.is_recursive(registry)
        assert first.is_defaultable(registry)
        assert registry.recursive_items() == []
        assert time.perf_counter() - start < 5.0

    def test_deep_shared_cycle_is_recursive(self):
        registry = build_shared_chain(30, close_cycle=True)

        start = time.perf_counter()
        assert registry.lookup("T0").is_recursive(registry)
        assert registry.lookup("T17").is_recursive(registry)
        assert len(registry.recursive_items()) == 31
        assert not registry.lookup("T0").is_defaultable(registry)
        assert time.perf_counter() - start < 5.0

    def test_defaultable_names(self):
        registry = build_shared_chain(3)
        assert registry.defaultable_names() == {"T0", "T1", "T2", "T3"}

    def test_names_containing(self):
        registry = build_shared_chain(3)
        assert registry.names_containing("T2") == {"T0", "T1"}
        assert registry.names_containing("Missing") == frozenset()
