"""
Serialization helpers for type graph objects (TypeExpression, Item, ItemRegistry).

Provides lossless JSON/YAML round-trip via intermediate dict representation.
This module intentionally keeps serialization structure stable and explicit.

Decoding can optionally sanitize illegal names (sanitize_names=True);
a renamed member or variant keeps its original spelling in original_name.
"""
from __future__ import annotations

import json
import logging
import warnings
from typing import Any, Dict, Optional

import yaml

from typegraph.errors import InvalidIdentifier
from typegraph.identifiers import DEFAULT_VALIDATOR, Identifier, IdentifierValidator
from typegraph.model import Item, Member, Record, TaggedUnion, Variant
from typegraph.registry import ItemRegistry
from typegraph.type_expressions import (
    BoxedType,
    EitherType,
    MappingType,
    NamedType,
    OptionalType,
    PrimitiveKind,
    PrimitiveType,
    ReferenceType,
    SequenceType,
    TypeExpression,
)

logger = logging.getLogger(__name__)

_WRAPPER_TAGS = {
    "box": BoxedType,
    "seq": SequenceType,
    "option": OptionalType,
    "ref": ReferenceType,
}


def _decode_name(raw: Any, sanitize: bool, validator: Optional[IdentifierValidator]) -> Identifier:
    # YAML turns bare 123 / on / null into int / bool / None
    if not isinstance(raw, str):
        raise InvalidIdentifier(repr(raw), f"name must be a string, got {type(raw).__name__}")
    validator = validator or DEFAULT_VALIDATOR
    if not sanitize:
        return validator.validate(raw)
    name = validator.sanitize(raw)
    if name != raw:
        logger.debug("Renamed %r to %r while decoding", raw, name)
    return name


def type_to_dict(t: TypeExpression) -> Dict[str, Any]:
    if isinstance(t, PrimitiveType):
        return {"type": "primitive", "kind": t.kind.value}
    for tag, cls in _WRAPPER_TAGS.items():
        if type(t) is cls:
            return {"type": tag, "inner": type_to_dict(t.inner)}
    if isinstance(t, EitherType):
        return {"type": "either", "left": type_to_dict(t.left), "right": type_to_dict(t.right)}
    if isinstance(t, MappingType):
        return {"type": "map", "value": type_to_dict(t.value)}
    if isinstance(t, NamedType):
        return {"type": "named", "name": str(t.name)}
    raise TypeError(f"Unsupported TypeExpression type: {type(t)}")


def type_from_dict(d: Dict[str, Any], sanitize_names: bool = False,
                   validator: Optional[IdentifierValidator] = None) -> TypeExpression:
    t = d.get("type")
    if t == "primitive":
        return PrimitiveType(PrimitiveKind(d["kind"]))
    if t in _WRAPPER_TAGS:
        return _WRAPPER_TAGS[t](type_from_dict(d["inner"], sanitize_names, validator))
    if t == "either":
        return EitherType(
            left=type_from_dict(d["left"], sanitize_names, validator),
            right=type_from_dict(d["right"], sanitize_names, validator),
        )
    if t == "map":
        return MappingType(type_from_dict(d["value"], sanitize_names, validator))
    if t == "named":
        return NamedType(_decode_name(d["name"], sanitize_names, validator))
    raise TypeError(f"Unsupported type dict type: {t}")


def member_to_dict(m: Member) -> Dict[str, Any]:
    return {"name": str(m.name), "type": type_to_dict(m.type), "original_name": m.original_name}


def member_from_dict(d: Dict[str, Any], sanitize_names: bool = False,
                     validator: Optional[IdentifierValidator] = None) -> Member:
    name = _decode_name(d["name"], sanitize_names, validator)
    original = d.get("original_name")
    if original is None and name != d["name"]:
        original = d["name"]
    return Member(
        name=name,
        type=type_from_dict(d["type"], sanitize_names, validator),
        original_name=original,
    )


def variant_to_dict(v: Variant) -> Dict[str, Any]:
    payload = type_to_dict(v.payload) if v.payload is not None else None
    return {"name": str(v.name), "payload": payload, "original_name": v.original_name}


def variant_from_dict(d: Dict[str, Any], sanitize_names: bool = False,
                      validator: Optional[IdentifierValidator] = None) -> Variant:
    name = _decode_name(d["name"], sanitize_names, validator)
    original = d.get("original_name")
    if original is None and name != d["name"]:
        original = d["name"]
    payload = d.get("payload")
    return Variant(
        name=name,
        payload=type_from_dict(payload, sanitize_names, validator) if payload is not None else None,
        original_name=original,
    )


def item_to_dict(item: Item) -> Dict[str, Any]:
    if isinstance(item, Record):
        return {
            "kind": "record",
            "name": str(item.name),
            "members": [member_to_dict(m) for m in item.members],
        }
    if isinstance(item, TaggedUnion):
        return {
            "kind": "union",
            "name": str(item.name),
            "variants": [variant_to_dict(v) for v in item.variants],
        }
    raise TypeError(f"Unsupported Item type: {type(item)}")


def item_from_dict(d: Dict[str, Any], sanitize_names: bool = False,
                   validator: Optional[IdentifierValidator] = None) -> Item:
    kind = d.get("kind")
    name = _decode_name(d["name"], sanitize_names, validator)
    if name != d["name"]:
        # Item names have nowhere to keep their original spelling
        warnings.warn(f"Item {d['name']!r} renamed to {name!r}", UserWarning)
    if kind == "record":
        members = [member_from_dict(m, sanitize_names, validator) for m in d.get("members", [])]
        return Record(name=name, members=members)
    if kind == "union":
        variants = [variant_from_dict(v, sanitize_names, validator) for v in d.get("variants", [])]
        return TaggedUnion(name=name, variants=variants)
    raise TypeError(f"Unsupported item dict kind: {kind}")


def registry_to_dict(r: ItemRegistry) -> Dict[str, Any]:
    return {"items": [item_to_dict(item) for item in r]}


def registry_from_dict(d: Dict[str, Any], sanitize_names: bool = False,
                       validator: Optional[IdentifierValidator] = None) -> ItemRegistry:
    items = [item_from_dict(i, sanitize_names, validator) for i in d.get("items", [])]
    return ItemRegistry.build(items)


def registry_to_json(r: ItemRegistry) -> str:
    return json.dumps(registry_to_dict(r), sort_keys=True)


def registry_from_json(s: str, sanitize_names: bool = False,
                       validator: Optional[IdentifierValidator] = None) -> ItemRegistry:
    d = json.loads(s)
    return registry_from_dict(d, sanitize_names, validator)


def registry_to_yaml(r: ItemRegistry) -> str:
    return yaml.safe_dump(registry_to_dict(r))


def registry_from_yaml(s: str, sanitize_names: bool = False,
                       validator: Optional[IdentifierValidator] = None) -> ItemRegistry:
    d = yaml.safe_load(s)
    return registry_from_dict(d or {}, sanitize_names, validator)
