"""
Type Expression System

The type of every record member and union payload is an immutable tree
of TypeExpression nodes, never a string.

The variant set is closed:
    PrimitiveType   unit, bool, integer, float, text
    BoxedType       T behind a heap indirection
    SequenceType    growable list of T
    OptionalType    T or nothing
    EitherType      exactly one of two alternatives (success / failure)
    MappingType     text-keyed map to T
    NamedType       reference to an Item, resolved through an ItemRegistry
    ReferenceType   non-owning borrow of T

Trees are finite. Cycles only exist semantically, through chains of
NamedType references resolved against a registry, which is why every
relational query takes the registry as an argument. A NamedType is
answered from the set of item names the registry proves defaultable
(or containing the target), computed once per top-level query as a
least fixed point; see ItemRegistry.defaultable_names().

Queries dispatch on the node class (named_root, is_defaultable,
contains_unboxed) and raise TypeError for anything outside the closed set.
"""

from abc import ABC
from dataclasses import dataclass
from enum import Enum
from typing import AbstractSet, List, Optional

from typegraph.identifiers import Identifier, as_identifier


class TypeExpression(ABC):
    """
    Base class for all type expression nodes.

    The nodes themselves hold structure only. The methods below are thin
    conveniences over the module-level query functions.
    """

    def named_root(self) -> Optional[Identifier]:
        return named_root(self)

    def is_defaultable(self, registry) -> bool:
        return is_defaultable(self, registry)

    def contains_unboxed(self, target: str, registry) -> bool:
        return contains_unboxed(self, target, registry)


class PrimitiveKind(Enum):
    """Leaf types with an obvious zero value."""

    UNIT = "unit"
    BOOLEAN = "boolean"
    INTEGER = "integer"
    FLOAT = "float"
    TEXT = "text"


@dataclass(frozen=True)
class PrimitiveType(TypeExpression):
    kind: PrimitiveKind


@dataclass(frozen=True)
class BoxedType(TypeExpression):
    """
    T stored behind a heap indirection.

    Boxing breaks value-containment: a record holding BoxedType(NamedType(self))
    has a bounded size.
    """

    inner: TypeExpression


@dataclass(frozen=True)
class SequenceType(TypeExpression):
    inner: TypeExpression


@dataclass(frozen=True)
class OptionalType(TypeExpression):
    inner: TypeExpression


@dataclass(frozen=True)
class EitherType(TypeExpression):
    """
    Exactly one of two typed alternatives.

    The left operand is the primary ("success") side; see named_root.
    """

    left: TypeExpression
    right: TypeExpression


@dataclass(frozen=True)
class MappingType(TypeExpression):
    """Map from text keys to values of type `value`."""

    value: TypeExpression


@dataclass(frozen=True)
class NamedType(TypeExpression):
    """
    Reference to an Item by name.

    The name is validated on construction. Whether it resolves is only
    known relative to an ItemRegistry; an unresolved name is legal here.
    """

    name: Identifier

    def __post_init__(self):
        object.__setattr__(self, "name", as_identifier(self.name))


@dataclass(frozen=True)
class ReferenceType(TypeExpression):
    """
    Non-owning borrow of T.

    Never defaultable and never part of recursion analysis: a borrow
    cannot make its holder infinitely large.
    """

    inner: TypeExpression


UNIT = PrimitiveType(PrimitiveKind.UNIT)
BOOLEAN = PrimitiveType(PrimitiveKind.BOOLEAN)
INTEGER = PrimitiveType(PrimitiveKind.INTEGER)
FLOAT = PrimitiveType(PrimitiveKind.FLOAT)
TEXT = PrimitiveType(PrimitiveKind.TEXT)


def named_root(expr: TypeExpression) -> Optional[Identifier]:
    """
    Find the NamedType at the bottom of a chain of wrapper types.

    Looks through BoxedType, SequenceType, OptionalType, ReferenceType and
    the LEFT operand of EitherType.

    NOTE: the right operand of EitherType is deliberately ignored, so
    Either<Foo, Bar> has root Foo. MappingType and primitives have no root.
    """
    if isinstance(expr, NamedType):
        return expr.name
    if isinstance(expr, (BoxedType, SequenceType, OptionalType, ReferenceType)):
        return named_root(expr.inner)
    if isinstance(expr, EitherType):
        return named_root(expr.left)
    if isinstance(expr, (PrimitiveType, MappingType)):
        return None
    raise TypeError(f"Unsupported TypeExpression type: {type(expr)}")


def named_types_in(expr: TypeExpression) -> List[Identifier]:
    """Every NamedType name anywhere in expr, boxed or not, in tree order."""
    if isinstance(expr, NamedType):
        return [expr.name]
    if isinstance(expr, (BoxedType, SequenceType, OptionalType, ReferenceType)):
        return named_types_in(expr.inner)
    if isinstance(expr, EitherType):
        return named_types_in(expr.left) + named_types_in(expr.right)
    if isinstance(expr, MappingType):
        return named_types_in(expr.value)
    if isinstance(expr, PrimitiveType):
        return []
    raise TypeError(f"Unsupported TypeExpression type: {type(expr)}")


def is_defaultable(expr: TypeExpression, registry,
                   _known: Optional[AbstractSet[str]] = None) -> bool:
    """
    Whether a value of this type can be built with no input.

    Primitives, sequences, optionals and mappings all have an empty/zero
    value. A box is defaultable if its content is. Either and references
    never are. A NamedType is defaultable if the referenced item is; a
    dangling name is not.

    Args:
        expr: Type to inspect
        registry: ItemRegistry used to resolve NamedType references
        _known: Names of the registry's defaultable items, if already
            computed. Defaults to registry.defaultable_names().
    """
    if isinstance(expr, (PrimitiveType, SequenceType, OptionalType, MappingType)):
        return True
    if isinstance(expr, BoxedType):
        return is_defaultable(expr.inner, registry, _known)
    if isinstance(expr, NamedType):
        if _known is None:
            _known = registry.defaultable_names()
        return expr.name in _known
    if isinstance(expr, (EitherType, ReferenceType)):
        return False
    raise TypeError(f"Unsupported TypeExpression type: {type(expr)}")


def contains_unboxed(expr: TypeExpression, target: str, registry,
                     _known: Optional[AbstractSet[str]] = None) -> bool:
    """
    Whether `target` is reachable from expr without crossing a BoxedType.

    Propagation rules:
        OptionalType, MappingType   look inside
        EitherType                  BOTH operands must contain target
        NamedType                   matches target, or the item contains it
        everything else             never contains

    Either is an AND because a union tag already bounds the size unless
    every alternative explodes.

    Args:
        expr: Type to inspect
        target: Item name being searched for
        registry: ItemRegistry used to resolve NamedType references
        _known: Names of the registry's items that contain target, if
            already computed. Defaults to registry.names_containing(target).
    """
    if isinstance(expr, OptionalType):
        return contains_unboxed(expr.inner, target, registry, _known)
    if isinstance(expr, MappingType):
        return contains_unboxed(expr.value, target, registry, _known)
    if isinstance(expr, EitherType):
        return (contains_unboxed(expr.left, target, registry, _known)
                and contains_unboxed(expr.right, target, registry, _known))
    if isinstance(expr, NamedType):
        if expr.name == target:
            return True
        if _known is None:
            _known = registry.names_containing(target)
        return expr.name in _known
    if isinstance(expr, (PrimitiveType, BoxedType, SequenceType, ReferenceType)):
        return False
    raise TypeError(f"Unsupported TypeExpression type: {type(expr)}")


__all__ = [
    "TypeExpression",
    "PrimitiveKind",
    "PrimitiveType",
    "BoxedType",
    "SequenceType",
    "OptionalType",
    "EitherType",
    "MappingType",
    "NamedType",
    "ReferenceType",
    "UNIT",
    "BOOLEAN",
    "INTEGER",
    "FLOAT",
    "TEXT",
    "named_root",
    "named_types_in",
    "is_defaultable",
    "contains_unboxed",
]
