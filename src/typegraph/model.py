"""
Core Type Model Objects

Defines the declarations of the type graph:
    - Members (record fields)
    - Variants (tagged union cases)
    - Records and TaggedUnions (Items, the registry members)
    - Wrappers and Aliases (single-type declarations, not registry members)

ARCHITECTURAL RULE:
    These objects:
        - Know nothing about rendering or target syntax
        - Are immutable once constructed
        - Validate every name they store

Relational questions (defaultability, recursion) need an ItemRegistry
to resolve NamedType references and are answered by the query
functions at the bottom of this module.
"""

from abc import ABC
from dataclasses import dataclass, field
from typing import AbstractSet, List, Optional, Tuple

from typegraph.errors import DuplicateName
from typegraph.identifiers import Identifier, as_identifier
from typegraph.type_expressions import (
    TypeExpression,
    named_root,
    is_defaultable as type_is_defaultable,
    contains_unboxed as type_contains_unboxed,
)


@dataclass(frozen=True)
class Member:
    """
    A single named, typed field of a Record.

    Properties:
        name: Field identifier
        type: Field type
        original_name: Spelling of the name before sanitization, if it
            was changed (e.g. "first-name" -> "firstname"). Renderers can
            use it to emit a rename annotation.
    """

    name: Identifier
    type: TypeExpression
    original_name: Optional[str] = None

    def __post_init__(self):
        object.__setattr__(self, "name", as_identifier(self.name))


@dataclass(frozen=True)
class Variant:
    """
    A single case of a TaggedUnion.

    Properties:
        name: Variant identifier
        payload: Carried type, or None for a bare tag
        original_name: Spelling before sanitization, if changed
    """

    name: Identifier
    payload: Optional[TypeExpression] = None
    original_name: Optional[str] = None

    def __post_init__(self):
        object.__setattr__(self, "name", as_identifier(self.name))


def _check_unique(owner: str, names: List[str]) -> None:
    seen = set()
    for name in names:
        if name in seen:
            raise DuplicateName(name, scope=owner)
        seen.add(name)


class Item(ABC):
    """
    A named composite declaration: Record or TaggedUnion.

    The set of item kinds is closed. Every query dispatches on the
    concrete class in the functions below rather than being overridden.
    """

    def is_defaultable(self, registry) -> bool:
        return item_is_defaultable(self, registry)

    def contains_unboxed(self, target: str, registry) -> bool:
        return item_contains_unboxed(self, target, registry)

    def is_recursive(self, registry) -> bool:
        """
        True if this item contains itself without a BoxedType in between.

        Such an item has infinite size. A renderer must refuse to emit it
        until one of the offending paths is boxed.
        """
        return self.contains_unboxed(self.name, registry)

    def named_type_references(self) -> List[Identifier]:
        return item_named_type_references(self)


@dataclass(frozen=True)
class Record(Item):
    """
    A product type: an ordered list of named members.

    Example:
        Record("Point", [Member("x", FLOAT), Member("y", FLOAT)])

    Member names must be unique within the record.
    """

    name: Identifier
    members: Tuple[Member, ...] = field(default_factory=tuple)

    def __post_init__(self):
        object.__setattr__(self, "name", as_identifier(self.name))
        object.__setattr__(self, "members", tuple(self.members))
        _check_unique(f"record {self.name}", [m.name for m in self.members])

    def get_member(self, name: str) -> Optional[Member]:
        for member in self.members:
            if member.name == name:
                return member
        return None


@dataclass(frozen=True)
class TaggedUnion(Item):
    """
    A sum type: an ordered list of variants, each optionally carrying a payload.

    Example:
        TaggedUnion("Shape", [
            Variant("Circle", NamedType("Circle")),
            Variant("Empty"),
        ])

    Variant names must be unique within the union.
    """

    name: Identifier
    variants: Tuple[Variant, ...] = field(default_factory=tuple)

    def __post_init__(self):
        object.__setattr__(self, "name", as_identifier(self.name))
        object.__setattr__(self, "variants", tuple(self.variants))
        _check_unique(f"union {self.name}", [v.name for v in self.variants])

    def get_variant(self, name: str) -> Optional[Variant]:
        for variant in self.variants:
            if variant.name == name:
                return variant
        return None


@dataclass(frozen=True)
class Wrapper:
    """
    A single-field wrapper (newtype) around another type.

    Wrappers are handled by the rendering layer and are not registered
    in an ItemRegistry.
    """

    name: Identifier
    inner: TypeExpression

    def __post_init__(self):
        object.__setattr__(self, "name", as_identifier(self.name))

    def named_root(self) -> Optional[Identifier]:
        return named_root(self.inner)


@dataclass(frozen=True)
class Alias:
    """A second name for an existing type. Not an ItemRegistry member."""

    name: Identifier
    target: TypeExpression

    def __post_init__(self):
        object.__setattr__(self, "name", as_identifier(self.name))

    def named_root(self) -> Optional[Identifier]:
        return named_root(self.target)


# =========================================================================
# ITEM QUERIES
# =========================================================================

def item_types(item: Item) -> List[TypeExpression]:
    """Member types (Record) or non-empty payloads (TaggedUnion), in order."""
    if isinstance(item, Record):
        return [m.type for m in item.members]
    if isinstance(item, TaggedUnion):
        return [v.payload for v in item.variants if v.payload is not None]
    raise TypeError(f"Unsupported Item type: {type(item)}")


def item_is_defaultable(item: Item, registry,
                        _known: Optional[AbstractSet[str]] = None) -> bool:
    """
    Records are defaultable iff every member type is (vacuously true when
    empty). Unions never are: there is no canonical default variant.

    Named members are answered from _known, the registry's defaultable
    names, computed here when not supplied. A record whose default needs
    its own default (e.g. through Box<Self>) is never in that set.
    """
    if isinstance(item, Record):
        if _known is None:
            _known = registry.defaultable_names()
        return all(type_is_defaultable(m.type, registry, _known) for m in item.members)
    if isinstance(item, TaggedUnion):
        return False
    raise TypeError(f"Unsupported Item type: {type(item)}")


def item_contains_unboxed(item: Item, target: str, registry,
                          _known: Optional[AbstractSet[str]] = None) -> bool:
    """
    True if any member (Record) or any variant payload (TaggedUnion)
    contains `target` without crossing a BoxedType.

    Named members are answered from _known, the registry's names that
    contain target, computed here when not supplied.
    """
    if _known is None:
        _known = registry.names_containing(target)
    return any(type_contains_unboxed(typ, target, registry, _known)
               for typ in item_types(item))


def item_named_type_references(item: Item) -> List[Identifier]:
    """Named roots of every member or variant, in declaration order."""
    references = []
    for typ in item_types(item):
        root = named_root(typ)
        if root is not None:
            references.append(root)
    return references


__all__ = [
    "Member",
    "Variant",
    "Item",
    "Record",
    "TaggedUnion",
    "Wrapper",
    "Alias",
    "item_types",
    "item_is_defaultable",
    "item_contains_unboxed",
    "item_named_type_references",
]
