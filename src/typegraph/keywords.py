"""
Reserved words of the target language.

These sets are plain data. They are handed to an IdentifierValidator at
construction time; nothing in the package consults them implicitly.
"""

# Keywords in use by the language
STRICT_KEYWORDS = frozenset([
    "as", "async", "await", "break", "const", "continue", "crate", "dyn",
    "else", "enum", "extern", "false", "fn", "for", "if", "impl", "in",
    "let", "loop", "match", "mod", "move", "mut", "pub", "ref", "return",
    "self", "Self", "static", "struct", "super", "trait", "true", "type",
    "unsafe", "use", "where", "while",
])

# Reserved for future use
RESERVED_KEYWORDS = frozenset([
    "abstract", "become", "box", "do", "final", "gen", "macro", "override",
    "priv", "try", "typeof", "unsized", "virtual", "yield",
])

RUST_KEYWORDS = STRICT_KEYWORDS | RESERVED_KEYWORDS


__all__ = ["STRICT_KEYWORDS", "RESERVED_KEYWORDS", "RUST_KEYWORDS"]
