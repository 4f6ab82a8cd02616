"""Token kinds, source positions, spans, and character classification helpers."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, auto
from typing import Generic, TypeVar

T = TypeVar("T")


class TokenKind(Enum):
    UNKNOWN = auto()  # unrecognized or invalid lexeme (value is the source text)

    # Literals
    ID = auto()
    INT = auto()
    FLOAT = auto()
    PATH = auto()
    URI = auto()

    # String construction primitives
    STR_PART = auto()  # literal text inside "..."
    INDENT_STR_PART = auto()  # literal text inside ''...''
    QUOTE = auto()  # "
    INDENT_QUOTE = auto()  # ''
    DOLLAR_BRACE = auto()  # ${

    # Operators
    MULT = auto()  # *
    MINUS = auto()  # -
    PLUS = auto()  # +
    DIVIDE = auto()  # /
    LESS = auto()  # <
    GREATER = auto()  # >
    LESS_EQ = auto()  # <=
    GREATER_EQ = auto()  # >=
    ASSIGN = auto()  # =
    EQUALS = auto()  # ==
    NOT_EQUALS = auto()  # !=
    AND = auto()  # &&
    OR = auto()  # ||
    IMPLIES = auto()  # ->
    NOT = auto()  # !
    UPDATE = auto()  # //
    CONCAT = auto()  # ++

    # Other syntax
    AT = auto()  # @
    COMMA = auto()  # ,
    DOT = auto()  # .
    ELLIPSIS = auto()  # ...
    QUESTION = auto()  # ?
    COLON = auto()  # :
    SEMICOLON = auto()  # ;

    # Delimiters
    PAREN_L = auto()  # (
    PAREN_R = auto()  # )
    BRACKET_L = auto()  # [
    BRACKET_R = auto()  # ]
    BRACE_L = auto()  # {
    BRACE_R = auto()  # }


# Longest lexemes first; the lexer takes the first entry that matches.
OPERATORS: tuple[tuple[str, TokenKind], ...] = (
    ("->", TokenKind.IMPLIES),
    ("<=", TokenKind.LESS_EQ),
    (">=", TokenKind.GREATER_EQ),
    ("==", TokenKind.EQUALS),
    ("!=", TokenKind.NOT_EQUALS),
    ("&&", TokenKind.AND),
    ("||", TokenKind.OR),
    ("//", TokenKind.UPDATE),
    ("++", TokenKind.CONCAT),
    ("<", TokenKind.LESS),
    (">", TokenKind.GREATER),
    ("=", TokenKind.ASSIGN),
    ("!", TokenKind.NOT),
    ("*", TokenKind.MULT),
    ("-", TokenKind.MINUS),
    ("+", TokenKind.PLUS),
    ("/", TokenKind.DIVIDE),
)

PUNCTUATION: tuple[tuple[str, TokenKind], ...] = (
    ("...", TokenKind.ELLIPSIS),
    ("@", TokenKind.AT),
    (",", TokenKind.COMMA),
    (".", TokenKind.DOT),
    ("?", TokenKind.QUESTION),
    (":", TokenKind.COLON),
    (";", TokenKind.SEMICOLON),
    ("(", TokenKind.PAREN_L),
    (")", TokenKind.PAREN_R),
    ("[", TokenKind.BRACKET_L),
    ("]", TokenKind.BRACKET_R),
    ("{", TokenKind.BRACE_L),
    ("}", TokenKind.BRACE_R),
)


@dataclass(frozen=True, slots=True, order=True)
class Pos:
    """Source position, 1-based line and column, 0-based codepoint offset."""

    line: int
    column: int
    offset: int = 0

    def __str__(self) -> str:
        return f"{self.line}:{self.column}"


@dataclass(frozen=True, slots=True)
class Span:
    """Half-open source range within a file."""

    file: str
    start: Pos
    end: Pos

    def __str__(self) -> str:
        return f"{self.start}-{self.end}"


@dataclass(frozen=True, slots=True)
class Spanned(Generic[T]):
    """Any value paired with the source range it came from."""

    value: T
    span: Span


@dataclass(frozen=True, slots=True)
class Token:
    """A single lexer token: its kind, payload, and source span."""

    kind: TokenKind
    value: str | int | float | None
    span: Span


class SpanBuilder:
    """Build spans and tokens for one source file."""

    def __init__(self, file: str) -> None:
        self.file = file

    def span(self, start: Pos, end: Pos) -> Span:
        return Span(self.file, start, end)

    def spanned(self, value: T, start: Pos, end: Pos) -> Spanned[T]:
        return Spanned(value, self.span(start, end))

    def token(
        self, kind: TokenKind, value: str | int | float | None, start: Pos, end: Pos
    ) -> Token:
        return Token(kind, value, self.span(start, end))


# Characters allowed in path segments: identifier letters, digits, and . _ + -
_PATH_SPECIAL = frozenset("._+-")

# Characters allowed after the scheme colon of a URI
_URI_SPECIAL = frozenset("%/?:@&=+$,-_.!~*'")

# Characters allowed in a URI scheme after the first letter
_SCHEME_SPECIAL = frozenset("+-.")

WHITESPACE = frozenset(" \t\r\n")


def _is_ascii_alnum(ch: str) -> bool:
    return ch.isascii() and ch.isalnum()


def is_digit(ch: str | None) -> bool:
    """Return True if ch is an ASCII decimal digit."""
    return ch is not None and ch in "0123456789"


def is_ident_start(ch: str | None) -> bool:
    """Return True if ch can begin an identifier."""
    return ch is not None and (ch.isalpha() or ch == "_")


def is_ident_char(ch: str | None) -> bool:
    """Return True if ch can continue an identifier."""
    return ch is not None and (ch.isalpha() or is_digit(ch) or ch in "_'")


def is_path_char(ch: str | None) -> bool:
    """Return True if ch is valid inside a path segment."""
    return ch is not None and (ch.isalpha() or is_digit(ch) or ch in _PATH_SPECIAL)


def is_scheme_char(ch: str | None) -> bool:
    """Return True if ch can continue a URI scheme."""
    return ch is not None and (_is_ascii_alnum(ch) or ch in _SCHEME_SPECIAL)


def is_uri_char(ch: str | None) -> bool:
    """Return True if ch is valid in the body of a URI."""
    return ch is not None and (_is_ascii_alnum(ch) or ch in _URI_SPECIAL)
