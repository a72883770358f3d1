"""Rust source scanning: lexing and brace-scope tracking."""

from .lexer import RustLexer, tokenize
from .scope import FrameKind, ScopedToken, ScopeFrame, ScopeTracker, scope_tokens
from .tokens import Token, TokenKind

__all__ = [
    "RustLexer",
    "tokenize",
    "FrameKind",
    "ScopeFrame",
    "ScopedToken",
    "ScopeTracker",
    "scope_tokens",
    "Token",
    "TokenKind",
]
