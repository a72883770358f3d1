"""Statement segmentation and unsafe classification.

Folds the scoped token stream into statements. Boundary rules:

- ``;`` outside parentheses/brackets in a block frame ends a statement;
  ``;`` with nothing before it is an empty statement and counts too.
- Tokens still pending when a block's ``}`` arrives form a tail-expression
  statement.
- A statement that starts with a brace-delimited construct (bare block,
  ``unsafe { }``, ``if``/``else``, ``match``, loops, nested items, brace
  macro calls) ends at its own closing ``}`` and is not counted; the
  statements inside it are. A ``;`` right after its ``}`` belongs to it.
- Nothing is counted outside block frames: module-level items, trait and
  impl bodies, match-arm expressions, struct literals and macro bodies.

A statement is unsafe iff the frame its tokens were scanned in is unsafe.
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator
from dataclasses import dataclass
from enum import Enum
from typing import Optional

from ..logging_config import get_logger
from ..models import StatementCounts
from ..scanning.scope import FrameKind, ScopedToken, ScopeFrame
from ..scanning.tokens import BLOCK_LIKE_STARTS, STATEMENT_MODIFIERS, Token, TokenKind

logger = get_logger(__name__)


class StatementEnd(Enum):
    SEMICOLON = "semicolon"
    EMPTY = "empty"
    TAIL = "tail"


@dataclass(frozen=True)
class StatementRecord:
    """One classified statement, located by the token that ended it."""

    is_unsafe: bool
    end: StatementEnd
    line: int
    column: int


class _Statement:
    """Accumulator for the statement currently being scanned in one frame."""

    __slots__ = (
        "frame",
        "opened_at_group_depth",
        "has_content",
        "is_unsafe",
        "head_decided",
        "block_like",
        "simple_path",
        "block_done",
        "skip",
    )

    def __init__(self, frame: ScopeFrame, opened_at_group_depth: int = 0):
        self.frame = frame
        self.opened_at_group_depth = opened_at_group_depth
        self.reset()

    def reset(self) -> None:
        self.has_content = False
        self.is_unsafe = False
        self.head_decided = False
        self.block_like = False
        self.simple_path = False
        self.block_done = False
        # head-skipping context: "group" after `pub`/`#`, "abi" after
        # `extern`, "label" after a loop label
        self.skip: Optional[str] = None

    def observe_head(self, token: Token, group_depth: int) -> None:
        """Decide from the first significant token whether the statement is block-like."""
        if self.head_decided:
            if group_depth == 0:
                self.simple_path = self.simple_path and (
                    token.is_plain_ident or token.is_punct("::") or token.is_punct("!")
                )
            return

        if group_depth > 0:
            return
        if self.skip == "group" and token.kind is TokenKind.PUNCT:
            if token.text in ("(", "[", "!"):
                return
            if token.text in (")", "]"):
                self.skip = None
                return
        if token.is_punct("#"):
            self.skip = "group"
            return
        if token.kind is TokenKind.LIFETIME:
            self.skip = "label"
            return
        if self.skip == "label" and token.is_punct(":"):
            self.skip = None
            return
        if token.kind is TokenKind.IDENT and token.text in STATEMENT_MODIFIERS:
            if token.text == "pub":
                self.skip = "group"
            elif token.text == "extern":
                self.skip = "abi"
            else:
                self.skip = None
            return
        if self.skip == "abi" and token.kind is TokenKind.LITERAL:
            return

        self.skip = None
        self.head_decided = True
        self.block_like = token.is_punct("{") or (
            token.kind is TokenKind.IDENT and token.text in BLOCK_LIKE_STARTS
        )
        self.simple_path = token.is_plain_ident or token.is_punct("::")


class StatementClassifier:
    """Fold a scoped token stream into statement counts.

    Example:
        >>> from unsafe_ratio.scanning import scope_tokens, tokenize
        >>> classifier = StatementClassifier()
        >>> classifier.classify(scope_tokens(tokenize("unsafe fn f() { let x = 1; }")))
        StatementCounts(unsafe_count=1, total_count=1)
    """

    def statements(self, scoped_tokens: Iterable[ScopedToken]) -> Iterator[StatementRecord]:
        """Yield a record for every statement as soon as its end is seen."""
        # the root frame never counts statements, so a stand-in frame suffices
        stack: list[_Statement] = [_Statement(ScopeFrame(FrameKind.ROOT))]

        for scoped in scoped_tokens:
            token = scoped.token

            if token.is_punct("{"):
                parent = stack[-1]
                # `name! { ... }` in statement position
                brace_macro = (
                    scoped.frame.kind is FrameKind.OPAQUE
                    and scoped.group_depth == 0
                    and parent.head_decided
                    and parent.simple_path
                    and not parent.block_done
                )
                self._feed(parent, scoped)
                if brace_macro:
                    parent.block_like = True
                stack.append(_Statement(scoped.frame, scoped.group_depth))

            elif token.is_punct("}"):
                closed = stack.pop()
                if closed.frame.counts_statements and closed.has_content and not closed.block_done:
                    yield StatementRecord(
                        closed.is_unsafe, StatementEnd.TAIL, token.line, token.column
                    )
                parent = stack[-1]
                if (
                    parent.block_like
                    and closed.opened_at_group_depth == 0
                    and closed.frame.kind is not FrameKind.LITERAL
                ):
                    parent.block_done = True

            elif token.is_punct(";") and scoped.group_depth == 0:
                current = stack[-1]
                # `unsafe { .. };` is one block statement, already closed
                if current.frame.counts_statements and not current.block_done:
                    if current.has_content:
                        yield StatementRecord(
                            current.is_unsafe, StatementEnd.SEMICOLON, token.line, token.column
                        )
                    else:
                        yield StatementRecord(
                            scoped.is_unsafe, StatementEnd.EMPTY, token.line, token.column
                        )
                current.reset()

            else:
                self._feed(stack[-1], scoped)

    def classify(self, scoped_tokens: Iterable[ScopedToken]) -> StatementCounts:
        """Count statements, returning ``(unsafe_count, total_count)``."""
        unsafe_count = 0
        total_count = 0
        for record in self.statements(scoped_tokens):
            total_count += 1
            if record.is_unsafe:
                unsafe_count += 1
            logger.debug(
                f"statement at {record.line}:{record.column} "
                f"({record.end.value}) unsafe={record.is_unsafe}"
            )
        return StatementCounts(unsafe_count=unsafe_count, total_count=total_count)

    @staticmethod
    def _feed(state: _Statement, scoped: ScopedToken) -> None:
        token = scoped.token

        if state.block_done:
            if token.is_keyword("else"):
                state.block_done = False
            elif token.is_punct(".") or token.is_punct("?"):
                # `match x { .. }.len()` continues as an ordinary expression
                state.block_done = False
                state.block_like = False
            else:
                state.reset()

        state.observe_head(token, scoped.group_depth)
        state.has_content = True
        if scoped.frame is state.frame:
            state.is_unsafe = state.is_unsafe or scoped.is_unsafe
        else:
            state.is_unsafe = state.is_unsafe or state.frame.is_unsafe
