"""Character-level Rust lexer.

Splits source text into :class:`Token` objects. Comments and whitespace are
discarded; string, char and numeric literals are scanned to their end but
kept opaque. Nested block comments, raw strings with any number of ``#``
guards, byte/C string prefixes and the char-literal/lifetime ambiguity are
handled so that braces and keywords inside them never reach the scope
tracker.

Unterminated comments and literals raise :class:`MalformedInputError`.
"""

from __future__ import annotations

from collections.abc import Iterator
from typing import Optional

from ..exceptions import MalformedInputError
from .tokens import Token, TokenKind

TWO_CHAR_PUNCT = frozenset({"::", "->", "=>"})


def _is_ident_start(ch: str) -> bool:
    return ch == "_" or ch.isalpha()


def _is_ident_continue(ch: str) -> bool:
    return ch == "_" or ch.isalnum()


class RustLexer:
    """Single-pass lexer over one source text.

    Example:
        >>> [t.text for t in RustLexer("let x = 1; // done").tokens()]
        ['let', 'x', '=', '1', ';']
    """

    def __init__(self, text: str):
        if text.startswith("\ufeff"):
            text = text[1:]
        self.text = text
        self.pos = 0
        self.line = 1
        self.column = 1

    # -- cursor --

    def _peek(self, offset: int = 0) -> str:
        idx = self.pos + offset
        if idx < len(self.text):
            return self.text[idx]
        return ""

    def _advance(self, count: int = 1) -> None:
        for _ in range(count):
            if self.pos >= len(self.text):
                return
            if self.text[self.pos] == "\n":
                self.line += 1
                self.column = 1
            else:
                self.column += 1
            self.pos += 1

    def _slice_from(self, start: int) -> str:
        return self.text[start : self.pos]

    # -- main loop --

    def tokens(self) -> Iterator[Token]:
        """Yield tokens lazily until end of input."""
        self._skip_shebang()
        while self.pos < len(self.text):
            ch = self._peek()

            if ch.isspace():
                self._advance()
                continue

            if ch == "/" and self._peek(1) == "/":
                self._skip_line_comment()
                continue

            if ch == "/" and self._peek(1) == "*":
                self._skip_block_comment()
                continue

            line, column = self.line, self.column

            string_prefix = self._string_prefix()
            if string_prefix is not None:
                yield self._scan_string(string_prefix, line, column)
            elif ch == "'":
                yield self._scan_quote(line, column)
            elif ch == "b" and self._peek(1) == "'":
                start = self.pos
                self._advance()
                self._scan_char_body(line, column)
                yield Token(TokenKind.LITERAL, self._slice_from(start), line, column)
            elif ch == "r" and self._peek(1) == "#" and _is_ident_start(self._peek(2)):
                yield self._scan_ident(line, column, raw=True)
            elif _is_ident_start(ch):
                yield self._scan_ident(line, column)
            elif ch.isdigit():
                yield self._scan_number(line, column)
            else:
                pair = ch + self._peek(1)
                if pair in TWO_CHAR_PUNCT:
                    self._advance(2)
                    yield Token(TokenKind.PUNCT, pair, line, column)
                else:
                    self._advance()
                    yield Token(TokenKind.PUNCT, ch, line, column)

    # -- trivia --

    def _skip_shebang(self) -> None:
        if not self.text.startswith("#!"):
            return
        rest = self.text[2:].lstrip()
        if rest.startswith("["):
            # inner attribute such as #![allow(unused)]
            return
        self._skip_line_comment()

    def _skip_line_comment(self) -> None:
        while self.pos < len(self.text) and self._peek() != "\n":
            self._advance()

    def _skip_block_comment(self) -> None:
        line, column = self.line, self.column
        self._advance(2)
        depth = 1
        while depth > 0:
            if self.pos >= len(self.text):
                raise MalformedInputError("unterminated block comment", line, column)
            pair = self._peek() + self._peek(1)
            if pair == "/*":
                depth += 1
                self._advance(2)
            elif pair == "*/":
                depth -= 1
                self._advance(2)
            else:
                self._advance()

    # -- literals --

    def _string_prefix(self) -> Optional[tuple[int, bool, int]]:
        """Detect a string literal start at the cursor.

        Returns:
            ``(prefix_length, is_raw, hash_count)`` where ``prefix_length``
            counts everything up to and including the opening quote, or
            None if no string starts here.
        """
        i = 0
        if self._peek(i) in ("b", "c"):
            i += 1
        raw = False
        if self._peek(i) == "r":
            raw = True
            i += 1
        hashes = 0
        if raw:
            while self._peek(i + hashes) == "#":
                hashes += 1
        if self._peek(i + hashes) != '"':
            return None
        return i + hashes + 1, raw, hashes

    def _scan_string(self, prefix: tuple[int, bool, int], line: int, column: int) -> Token:
        prefix_length, raw, hashes = prefix
        start = self.pos
        self._advance(prefix_length)

        if raw:
            terminator = '"' + "#" * hashes
            end = self.text.find(terminator, self.pos)
            if end == -1:
                raise MalformedInputError("unterminated raw string literal", line, column)
            self._advance(end + len(terminator) - self.pos)
            return Token(TokenKind.LITERAL, self._slice_from(start), line, column)

        while True:
            ch = self._peek()
            if ch == "":
                raise MalformedInputError("unterminated string literal", line, column)
            if ch == "\\":
                self._advance(2)
            elif ch == '"':
                self._advance()
                break
            else:
                self._advance()
        return Token(TokenKind.LITERAL, self._slice_from(start), line, column)

    def _scan_quote(self, line: int, column: int) -> Token:
        """Scan either a char literal or a lifetime/label at a ``'``."""
        start = self.pos
        if self._peek(1) == "\\" or (self._peek(1) not in ("", "\n") and self._peek(2) == "'"):
            self._scan_char_body(line, column)
            return Token(TokenKind.LITERAL, self._slice_from(start), line, column)

        if not _is_ident_start(self._peek(1)):
            raise MalformedInputError("unterminated character literal", line, column)
        self._advance()
        while _is_ident_continue(self._peek()):
            self._advance()
        return Token(TokenKind.LIFETIME, self._slice_from(start), line, column)

    def _scan_char_body(self, line: int, column: int) -> None:
        """Consume ``'x'`` or ``'\\...'`` starting at the opening quote."""
        self._advance()
        if self._peek() == "\\":
            self._advance(2)
        else:
            self._advance()
        while self._peek() != "'":
            if self._peek() in ("", "\n"):
                raise MalformedInputError("unterminated character literal", line, column)
            self._advance()
        self._advance()

    def _scan_number(self, line: int, column: int) -> Token:
        start = self.pos
        while _is_ident_continue(self._peek()):
            self._advance()
        if self._peek() == "." and self._peek(1).isdigit():
            self._advance()
            while _is_ident_continue(self._peek()):
                self._advance()
        text = self._slice_from(start)
        is_hex = text[:2].lower() in ("0x", "0b", "0o")
        if not is_hex and text[-1] in ("e", "E") and self._peek() in ("+", "-"):
            self._advance()
            while _is_ident_continue(self._peek()):
                self._advance()
        return Token(TokenKind.LITERAL, self._slice_from(start), line, column)

    def _scan_ident(self, line: int, column: int, raw: bool = False) -> Token:
        start = self.pos
        if raw:
            self._advance(2)
        while _is_ident_continue(self._peek()):
            self._advance()
        return Token(TokenKind.IDENT, self._slice_from(start), line, column)


def tokenize(text: str) -> Iterator[Token]:
    """Lazily tokenize Rust source text.

    Raises:
        MalformedInputError: On an unterminated comment or literal (raised
            when the generator reaches it)
    """
    return RustLexer(text).tokens()
