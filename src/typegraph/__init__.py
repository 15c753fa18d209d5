"""
Type Graph Model Package

An in-memory model of composite type definitions (records, tagged unions,
wrappers and aliases) for code generators targeting a Rust-like language.

ARCHITECTURAL GUARANTEE:
------------------------
This package contains ZERO knowledge of:
    - Rendering definitions into target syntax
    - Attribute / derive decoration
    - Formatting of generated code

This package defines TYPE STRUCTURE only, plus the structural questions
a renderer must ask before emitting a definition:
    - Is every name a legal identifier?
    - Does a type admit a default value?
    - Is a type recursive through value-contained fields?

All rendering happens in external layers.
"""

from typegraph.errors import TypeGraphError, InvalidIdentifier, DuplicateName
from typegraph.identifiers import Identifier, IdentifierValidator
from typegraph.registry import ItemRegistry

__version__ = "0.1.0"

__all__ = [
    "TypeGraphError",
    "InvalidIdentifier",
    "DuplicateName",
    "Identifier",
    "IdentifierValidator",
    "ItemRegistry",
]
