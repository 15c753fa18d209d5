"""
Error types raised by the type graph model.

There are exactly two failure kinds, both deterministic functions of input:
    - InvalidIdentifier: a name failed validation or could not be sanitized
    - DuplicateName: two declarations share a name within one scope
"""

from typing import Optional


class TypeGraphError(Exception):
    """Base class for all errors raised by typegraph."""
    pass


class InvalidIdentifier(TypeGraphError, ValueError):
    """
    Raised when a string is not (and cannot be made into) a legal identifier.

    Properties:
        raw: The offending input string
        reason: Human-readable explanation
        position: Index of the first offending character, if the failure
            is attributable to a single character
    """

    def __init__(self, raw: str, reason: str, position: Optional[int] = None):
        self.raw = raw
        self.reason = reason
        self.position = position
        if position is None:
            message = f"Invalid identifier {raw!r}: {reason}"
        else:
            message = f"Invalid identifier {raw!r}: {reason} at index {position}"
        super().__init__(message)


class DuplicateName(TypeGraphError, KeyError):
    """
    Raised when a name is declared twice in the same scope.

    Scopes are the item registry (item names) and a single item
    (member or variant names).
    """

    def __init__(self, name: str, scope: Optional[str] = None):
        self.name = name
        self.scope = scope
        super().__init__(name)

    def __str__(self) -> str:
        if self.scope:
            return f"Non-unique name {self.name!r} in {self.scope}"
        return f"Non-unique name {self.name!r}"


__all__ = ["TypeGraphError", "InvalidIdentifier", "DuplicateName"]
