"""Brace-scope tracking over a Rust token stream.

The tracker keeps a stack of :class:`ScopeFrame` objects, one per open
``{``, starting from an implicit root frame. Each frame records whether its
contents are unsafe and what kind of construct the brace opened; the
statement classifier only counts statements inside ``BLOCK`` frames.

Unsafe-ness is lexically inherited: a frame is unsafe if the tokens before
its ``{`` mark it (``unsafe {`` or ``unsafe fn ... {``) or if its parent is
unsafe. Rust has no safe block, so once set the flag holds for every
descendant.

Parentheses and brackets are tracked inside each frame so that ``;`` in
``[0u8; 4]`` is not mistaken for a statement terminator and so that
unbalanced input is detected.
"""

from __future__ import annotations

from collections import deque
from collections.abc import Iterable, Iterator
from dataclasses import dataclass, field
from enum import Enum
from typing import Optional

from ..exceptions import MalformedInputError
from ..logging_config import get_logger
from .tokens import ITEM_KEYWORDS, Token, TokenKind

logger = get_logger(__name__)

GROUP_PAIRS = {"(": ")", "[": "]"}
GROUP_CLOSERS = {")": "(", "]": "["}

# Keywords at the head of a condition or pattern whose `{` opens a block
_CONDITION_KEYWORDS = frozenset({"if", "while", "for"})


class FrameKind(Enum):
    ROOT = "root"
    BLOCK = "block"  # fn bodies, block expressions, closures, control flow
    ITEM = "item"  # struct/enum/union/trait/impl/mod/extern bodies
    MATCH = "match"  # match arm list
    LITERAL = "literal"  # struct literal or struct pattern
    OPAQUE = "opaque"  # macro token tree


@dataclass
class _PendingOpen:
    """What the next `{` at a given group depth will open."""

    keyword: str
    kind: FrameKind
    is_unsafe: bool = False
    in_pattern: bool = False


@dataclass(frozen=True)
class _Group:
    opener: Token
    is_macro: bool


@dataclass(eq=False)
class ScopeFrame:
    """One open brace level.

    Attributes:
        kind: Construct the brace opened
        is_unsafe: Whether code in this frame lies in an unsafe context
        opened_at: The `{` token, or None for the root frame
    """

    kind: FrameKind
    is_unsafe: bool = False
    opened_at: Optional[Token] = None
    groups: list[_Group] = field(default_factory=list)
    pending: dict[int, _PendingOpen] = field(default_factory=dict)

    @property
    def group_depth(self) -> int:
        return len(self.groups)

    @property
    def in_macro_group(self) -> bool:
        return any(g.is_macro for g in self.groups)

    @property
    def counts_statements(self) -> bool:
        return self.kind is FrameKind.BLOCK


@dataclass(frozen=True)
class ScopedToken:
    """A token paired with the scope it was seen in.

    ``{`` is reported with the frame it opens and ``}`` with the frame it
    closes. ``group_depth`` counts the parentheses/brackets enclosing the
    token; for braces these are the enclosing frame's groups.
    """

    token: Token
    is_unsafe: bool
    frame: ScopeFrame
    depth: int
    group_depth: int

    @property
    def text(self) -> str:
        return self.token.text


class ScopeTracker:
    """Annotate a token stream with scope information.

    Example:
        >>> from .lexer import tokenize
        >>> scoped = list(ScopeTracker().scan(tokenize("unsafe { f(); }")))
        >>> [(s.text, s.is_unsafe) for s in scoped]
        [('unsafe', False), ('{', True), ('f', True), ('(', True), (')', True), (';', True), ('}', True)]
    """

    def __init__(self) -> None:
        self.stack: list[ScopeFrame] = [ScopeFrame(FrameKind.ROOT)]
        self._history: deque[Token] = deque(maxlen=3)
        # None, "kw" right after `unsafe`, "extern" after `unsafe extern`,
        # or "fn" once `fn` follows either of those
        self._unsafe_state: Optional[str] = None

    @property
    def current(self) -> ScopeFrame:
        return self.stack[-1]

    @property
    def depth(self) -> int:
        return len(self.stack) - 1

    def scan(self, tokens: Iterable[Token]) -> Iterator[ScopedToken]:
        """Yield each token with the unsafe flag of its enclosing frame.

        Raises:
            MalformedInputError: On unbalanced braces, parentheses or brackets
        """
        for token in tokens:
            if token.is_punct("{"):
                yield self._open_brace(token)
            elif token.is_punct("}"):
                yield self._close_brace(token)
            else:
                yield self._plain(token)
            self._history.append(token)
        self._finish()

    # -- braces --

    def _open_brace(self, token: Token) -> ScopedToken:
        parent = self.current
        group_depth = parent.group_depth
        kind, marked_unsafe = self._classify_brace(parent, group_depth)
        self._unsafe_state = None

        frame = ScopeFrame(
            kind=kind,
            is_unsafe=marked_unsafe or parent.is_unsafe,
            opened_at=token,
        )
        self.stack.append(frame)
        logger.debug(f"open {kind.value} frame at {token.line}:{token.column} unsafe={frame.is_unsafe}")
        return ScopedToken(token, frame.is_unsafe, frame, self.depth, group_depth)

    def _close_brace(self, token: Token) -> ScopedToken:
        frame = self.current
        if frame.kind is FrameKind.ROOT:
            raise MalformedInputError("unmatched closing brace '}'", token.line, token.column)
        if frame.groups:
            opener = frame.groups[-1].opener
            raise MalformedInputError(
                f"'}}' closes a block while '{opener.text}' opened at "
                f"{opener.line}:{opener.column} is still open",
                token.line,
                token.column,
            )
        self._unsafe_state = None
        depth = self.depth
        self.stack.pop()
        return ScopedToken(token, frame.is_unsafe, frame, depth, self.current.group_depth)

    def _classify_brace(self, parent: ScopeFrame, group_depth: int) -> tuple[FrameKind, bool]:
        """Decide what a `{` opens from the tokens preceding it.

        Returns:
            ``(kind, marked_unsafe)`` where ``marked_unsafe`` is True only
            when an ``unsafe`` keyword explicitly flags the new frame.
        """
        prev = self._history[-1] if self._history else None
        prev2 = self._history[-2] if len(self._history) > 1 else None
        prev3 = self._history[-3] if len(self._history) > 2 else None

        if parent.kind is FrameKind.OPAQUE or parent.in_macro_group:
            return FrameKind.OPAQUE, False

        if prev is not None and prev.is_punct("!") and prev2 is not None and prev2.is_plain_ident:
            return FrameKind.OPAQUE, False
        if prev2 is not None and prev2.is_punct("!") and prev3 is not None and prev3.is_keyword("macro_rules"):
            return FrameKind.OPAQUE, False

        if self._unsafe_state == "kw":
            parent.pending.pop(group_depth, None)
            return FrameKind.BLOCK, True

        pending = parent.pending.get(group_depth)
        if pending is not None:
            if pending.in_pattern:
                return FrameKind.LITERAL, False
            del parent.pending[group_depth]
            return pending.kind, pending.is_unsafe

        if prev is None:
            return FrameKind.BLOCK, False
        if prev.is_punct("=>"):
            return FrameKind.BLOCK, False
        if prev.is_plain_ident or prev.is_keyword("Self") or prev.is_punct(">"):
            return FrameKind.LITERAL, False
        return FrameKind.BLOCK, False

    # -- everything else --

    def _plain(self, token: Token) -> ScopedToken:
        frame = self.current
        group_depth = frame.group_depth

        self._track_unsafe_keyword(frame, token, group_depth)

        if token.kind is TokenKind.PUNCT and token.text in GROUP_PAIRS:
            frame.groups.append(_Group(token, self._opens_macro_group()))
        elif token.kind is TokenKind.PUNCT and token.text in GROUP_CLOSERS:
            self._close_group(frame, token)
            group_depth = frame.group_depth
        elif token.is_punct(";") or token.is_punct("=>"):
            frame.pending.pop(group_depth, None)
        elif token.kind is TokenKind.IDENT:
            self._note_keyword(frame, token, group_depth)
        elif token.is_punct("->"):
            frame.pending.setdefault(group_depth, _PendingOpen("->", FrameKind.BLOCK))
        elif token.is_punct("="):
            pending = frame.pending.get(group_depth)
            if pending is not None and pending.keyword in ("if", "while"):
                pending.in_pattern = False

        return ScopedToken(token, frame.is_unsafe, frame, self.depth, group_depth)

    def _opens_macro_group(self) -> bool:
        prev = self._history[-1] if self._history else None
        prev2 = self._history[-2] if len(self._history) > 1 else None
        return (
            prev is not None
            and prev.is_punct("!")
            and prev2 is not None
            and prev2.is_plain_ident
        )

    def _close_group(self, frame: ScopeFrame, token: Token) -> None:
        expected_opener = GROUP_CLOSERS[token.text]
        if not frame.groups:
            raise MalformedInputError(
                f"unmatched closing '{token.text}'", token.line, token.column
            )
        opener = frame.groups[-1].opener
        if opener.text != expected_opener:
            raise MalformedInputError(
                f"mismatched closing '{token.text}' for '{opener.text}' opened at "
                f"{opener.line}:{opener.column}",
                token.line,
                token.column,
            )
        frame.pending.pop(frame.group_depth, None)
        frame.groups.pop()

    def _track_unsafe_keyword(self, frame: ScopeFrame, token: Token, group_depth: int) -> None:
        """Drive the `unsafe` marker: `unsafe {` and `unsafe [extern "abi"] fn name`.

        `unsafe fn` only marks the next body once a name follows, so an
        `unsafe fn(..)` pointer type in a signature leaves it alone.
        """
        state = self._unsafe_state
        self._unsafe_state = None
        if token.is_keyword("unsafe"):
            self._unsafe_state = "kw"
        elif state in ("kw", "extern") and token.is_keyword("fn"):
            self._unsafe_state = "fn"
        elif state == "fn" and token.is_plain_ident:
            frame.pending[group_depth] = _PendingOpen("fn", FrameKind.BLOCK, is_unsafe=True)
        elif state == "kw" and token.is_keyword("extern"):
            self._unsafe_state = "extern"
        elif state == "extern" and token.kind is TokenKind.LITERAL:
            self._unsafe_state = "extern"

    def _note_keyword(self, frame: ScopeFrame, token: Token, group_depth: int) -> None:
        """Record keywords that decide what the next `{` at this depth opens."""
        text = token.text
        pending = frame.pending.get(group_depth)

        if text == "fn":
            if pending is None or pending.keyword == "extern":
                frame.pending[group_depth] = _PendingOpen("fn", FrameKind.BLOCK)
        elif text == "let":
            if pending is not None and pending.keyword in ("if", "while"):
                pending.in_pattern = True
        elif text == "in":
            if pending is not None and pending.keyword == "for":
                pending.in_pattern = False
        elif pending is not None:
            return
        elif text == "union" and self._follows_path_separator():
            # `a.union(&b)` is a method call, not a union item
            return
        elif text in ITEM_KEYWORDS:
            frame.pending[group_depth] = _PendingOpen(text, FrameKind.ITEM)
        elif text == "match":
            frame.pending[group_depth] = _PendingOpen(text, FrameKind.MATCH)
        elif text in _CONDITION_KEYWORDS:
            frame.pending[group_depth] = _PendingOpen(
                text, FrameKind.BLOCK, in_pattern=(text == "for")
            )
        elif text in ("loop", "else", "async", "try"):
            frame.pending[group_depth] = _PendingOpen(text, FrameKind.BLOCK)

    def _follows_path_separator(self) -> bool:
        prev = self._history[-1] if self._history else None
        return prev is not None and (prev.is_punct(".") or prev.is_punct("::"))

    def _finish(self) -> None:
        for frame in reversed(self.stack):
            if frame.groups:
                opener = frame.groups[-1].opener
                raise MalformedInputError(
                    f"unclosed '{opener.text}'", opener.line, opener.column
                )
            if frame.opened_at is not None:
                opener = frame.opened_at
                raise MalformedInputError("unclosed '{'", opener.line, opener.column)


def scope_tokens(tokens: Iterable[Token]) -> Iterator[ScopedToken]:
    """Convenience wrapper: ``ScopeTracker().scan(tokens)``."""
    return ScopeTracker().scan(tokens)
