"""Shared test fixtures and helpers."""

from __future__ import annotations

import pytest

from rixlex.lexer import Lexer
from rixlex.symbols import SymbolTable
from rixlex.tokens import Token, TokenKind


@pytest.fixture
def lex():
    """Return a helper that lexes source and returns the token list."""

    def _lex(source: str) -> list[Token]:
        return list(Lexer(source, "<test>", SymbolTable()))

    return _lex


@pytest.fixture
def lex_with_diagnostics():
    """Return a helper that lexes source and returns (tokens, diagnostics)."""

    def _lex(source: str):
        lexer = Lexer(source, "<test>", SymbolTable())
        tokens = list(lexer)
        return tokens, lexer.diagnostics

    return _lex


def assert_kinds(tokens: list[Token], expected: list[TokenKind]) -> None:
    """Assert that the token kinds match the expected list."""
    actual = [t.kind for t in tokens]
    assert actual == expected, f"Expected {expected}, got {actual}"


def assert_values(tokens: list[Token], expected: list[object]) -> None:
    """Assert that the token values match the expected list."""
    actual = [t.value for t in tokens]
    assert actual == expected, f"Expected {expected}, got {actual}"


def spans(tokens: list[Token]) -> list[str]:
    """Render token spans as 'line:col-line:col' strings."""
    return [str(t.span) for t in tokens]
