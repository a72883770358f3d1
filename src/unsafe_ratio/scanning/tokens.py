"""Token model for the Rust lexer.

Only the distinctions the scope tracker and statement classifier need are
kept: identifiers (keywords included), lifetimes, opaque literals and
punctuation. Comments and whitespace never become tokens.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class TokenKind(Enum):
    IDENT = "ident"
    LIFETIME = "lifetime"
    LITERAL = "literal"
    PUNCT = "punct"


# Keywords that introduce a brace-delimited item body
ITEM_KEYWORDS = frozenset({"struct", "enum", "union", "trait", "impl", "mod", "extern"})

# Keywords that may begin a statement ending at its own closing brace
BLOCK_LIKE_STARTS = frozenset(
    {"unsafe", "if", "match", "loop", "while", "for", "fn", "macro_rules"} | ITEM_KEYWORDS
)

# Modifiers skipped when looking for the keyword that starts a statement
STATEMENT_MODIFIERS = frozenset({"pub", "async", "const", "default", "extern", "static", "move"})

KEYWORDS = frozenset(
    {
        "as", "async", "await", "break", "const", "continue", "crate", "dyn",
        "else", "enum", "extern", "false", "fn", "for", "if", "impl", "in",
        "let", "loop", "match", "mod", "move", "mut", "pub", "ref", "return",
        "self", "Self", "static", "struct", "super", "trait", "true", "type",
        "unsafe", "use", "where", "while", "try", "union", "macro_rules",
    }
)


@dataclass(frozen=True)
class Token:
    """A lexical unit with its 1-based source position."""

    kind: TokenKind
    text: str
    line: int
    column: int

    def is_punct(self, text: str) -> bool:
        return self.kind is TokenKind.PUNCT and self.text == text

    def is_keyword(self, text: str) -> bool:
        return self.kind is TokenKind.IDENT and self.text == text

    @property
    def is_ident(self) -> bool:
        return self.kind is TokenKind.IDENT

    @property
    def is_plain_ident(self) -> bool:
        """An identifier that is not a reserved keyword (``r#kw`` counts as plain)."""
        return self.kind is TokenKind.IDENT and self.text not in KEYWORDS

    def __str__(self) -> str:
        return f"{self.text!r}@{self.line}:{self.column}"
