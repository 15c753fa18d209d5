"""
Identifier validation and sanitization.

Every name stored in the model (items, members, variants, references)
is an Identifier: a string checked at construction time to be a legal
bare name in the target language and not a reserved word.

Character classification is ASCII only:
    leading:      A-Z a-z _
    continuation: A-Z a-z 0-9 _

Non-ASCII input is rejected, not transliterated.
"""

import logging
import string
from typing import FrozenSet, Iterable, Optional, Union

from typegraph.errors import InvalidIdentifier
from typegraph.keywords import RUST_KEYWORDS

logger = logging.getLogger(__name__)

LEADING_CHARS = frozenset(string.ascii_letters + "_")
CONTINUATION_CHARS = frozenset(string.ascii_letters + string.digits + "_")

PLACEHOLDER = "_"


class IdentifierValidator:
    """
    Decides identifier legality against an injected reserved-word set.

    Different target dialects (or test fixtures) use different validators;
    there is no process-wide keyword table.

    Example:
        validator = IdentifierValidator(reserved_words={"record", "union"})
        validator.validate("Point")      # Identifier("Point")
        validator.sanitize("record")     # Identifier("record_")
    """

    def __init__(self, reserved_words: Iterable[str] = RUST_KEYWORDS):
        self.reserved_words: FrozenSet[str] = frozenset(reserved_words)

    def check(self, raw: str) -> None:
        """
        Raise InvalidIdentifier if raw is not a legal identifier.

        Args:
            raw: Candidate name

        Raises:
            InvalidIdentifier: With the reason and, for character-level
                failures, the index of the first offending character
        """
        if raw == PLACEHOLDER:
            raise InvalidIdentifier(raw, "'_' is not a valid name")
        if len(raw) == 0:
            raise InvalidIdentifier(raw, "identifier is empty")
        if raw in self.reserved_words:
            raise InvalidIdentifier(raw, "identifier is a reserved word")
        for ix, c in enumerate(raw):
            allowed = LEADING_CHARS if ix == 0 else CONTINUATION_CHARS
            if c not in allowed:
                raise InvalidIdentifier(raw, f"invalid character {c!r}", position=ix)

    def is_valid(self, raw: str) -> bool:
        try:
            self.check(raw)
        except InvalidIdentifier:
            return False
        return True

    def validate(self, raw: str) -> "Identifier":
        """Return raw as an Identifier, or raise InvalidIdentifier."""
        return Identifier(raw, validator=self)

    def sanitize(self, raw: str) -> "Identifier":
        """
        Best-effort conversion of raw into a legal identifier.

        Valid input is returned unchanged. Otherwise:
            1. Characters before the first legal leading character are dropped
            2. Illegal continuation characters are dropped
            3. A trailing '_' is appended if the result is reserved

        This is lossy. Callers that need the original spelling must keep
        it themselves (e.g. as a member's original_name).

        Raises:
            InvalidIdentifier: If nothing usable remains
        """
        if self.is_valid(raw):
            return Identifier(raw, validator=self)

        out = []
        for c in raw:
            if not out:
                if c in LEADING_CHARS:
                    out.append(c)
            elif c in CONTINUATION_CHARS:
                out.append(c)
        result = "".join(out)

        if result in self.reserved_words:
            result += "_"
        if result == "" or result == PLACEHOLDER:
            raise InvalidIdentifier(raw, "could not generate a valid identifier")

        logger.debug("Sanitized identifier %r -> %r", raw, result)
        return Identifier(result, validator=self)


class Identifier(str):
    """
    A validated name.

    Identifiers are immutable strings and compare equal to plain str,
    so they can be used directly as dict keys and in messages.

    Constructing one validates it:
        Identifier("Point")   # ok
        Identifier("type")    # raises InvalidIdentifier
    """

    __slots__ = ()

    def __new__(cls, raw: str, validator: Optional[IdentifierValidator] = None):
        if isinstance(raw, Identifier) and validator is None:
            return raw
        (validator or DEFAULT_VALIDATOR).check(raw)
        return super().__new__(cls, raw)

    def __repr__(self) -> str:
        return f"Identifier({str.__repr__(self)})"

    @classmethod
    def validate(cls, raw: str, validator: Optional[IdentifierValidator] = None) -> "Identifier":
        return (validator or DEFAULT_VALIDATOR).validate(raw)

    @classmethod
    def sanitize(cls, raw: str, validator: Optional[IdentifierValidator] = None) -> "Identifier":
        return (validator or DEFAULT_VALIDATOR).sanitize(raw)


DEFAULT_VALIDATOR = IdentifierValidator(RUST_KEYWORDS)


def validate(raw: str) -> Identifier:
    """Validate raw against the default (Rust) reserved words."""
    return DEFAULT_VALIDATOR.validate(raw)


def sanitize(raw: str) -> Identifier:
    """Sanitize raw against the default (Rust) reserved words."""
    return DEFAULT_VALIDATOR.sanitize(raw)


def as_identifier(value: Union[str, Identifier],
                  validator: Optional[IdentifierValidator] = None) -> Identifier:
    """
    Coerce a str (or Identifier) into an Identifier.

    An existing Identifier is passed through unless a specific validator
    is given, in which case it is re-checked against that validator.
    """
    if not isinstance(value, str):
        raise TypeError(f"Identifier must be a string, got {type(value).__name__}")
    return Identifier(value, validator=validator)


__all__ = [
    "Identifier",
    "IdentifierValidator",
    "DEFAULT_VALIDATOR",
    "validate",
    "sanitize",
    "as_identifier",
]
