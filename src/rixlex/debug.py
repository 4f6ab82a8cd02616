"""--debug token dump to stderr."""

from __future__ import annotations

import sys
from collections.abc import Iterable
from typing import TextIO

from rixlex.tokens import Token, TokenKind

_OPENERS = {TokenKind.QUOTE: '"', TokenKind.INDENT_QUOTE: "''"}


def dump_tokens(tokens: Iterable[Token], *, file: TextIO = sys.stderr) -> None:
    """Print tokens to *file*, indenting string contents and interpolations."""
    # Open constructs: '"', "''", "${" or "{"
    stack: list[str] = []
    for token in tokens:
        kind = token.kind
        top = stack[-1] if stack else None
        closes = (kind in _OPENERS and top == _OPENERS[kind]) or (
            kind is TokenKind.BRACE_R and top in ("${", "{")
        )
        if closes:
            stack.pop()
        file.write(f"{_indent(len(stack))}{_describe(token)}\n")
        if closes:
            continue
        if kind in _OPENERS:
            stack.append(_OPENERS[kind])
        elif kind is TokenKind.DOLLAR_BRACE:
            stack.append("${")
        elif kind is TokenKind.BRACE_L and stack:
            stack.append("{")


def _indent(depth: int) -> str:
    return "  " * depth


def _describe(token: Token) -> str:
    if token.kind in (TokenKind.STR_PART, TokenKind.INDENT_STR_PART, TokenKind.UNKNOWN):
        return f"{token.kind.name}({token.value!r}) @ {token.span}"
    if token.kind in (TokenKind.ID, TokenKind.INT, TokenKind.FLOAT, TokenKind.PATH, TokenKind.URI):
        return f"{token.kind.name}({token.value}) @ {token.span}"
    return f"{token.kind.name} @ {token.span}"
