"""rixlex: lexer for the rix configuration language."""

from __future__ import annotations

from rixlex.errors import Diagnostic, LexError, LexErrorKind
from rixlex.lexer import Lexer, lex, tokenize
from rixlex.symbols import SymbolTable, default_symbols
from rixlex.tokens import Pos, Span, Spanned, Token, TokenKind

__version__ = "0.1.0"

__all__ = [
    "Diagnostic",
    "LexError",
    "LexErrorKind",
    "Lexer",
    "Pos",
    "Span",
    "Spanned",
    "SymbolTable",
    "Token",
    "TokenKind",
    "default_symbols",
    "lex",
    "tokenize",
]
