"""rixlex lexer: converts source text into a lazy stream of spanned tokens."""

from __future__ import annotations

import math
from collections.abc import Callable, Iterator
from dataclasses import dataclass
from enum import Enum, auto

from rixlex.chars import CharStream
from rixlex.errors import Diagnostic, LexError, LexErrorKind
from rixlex.symbols import SymbolTable, default_symbols
from rixlex.tokens import (
    OPERATORS,
    PUNCTUATION,
    WHITESPACE,
    Pos,
    Span,
    SpanBuilder,
    Spanned,
    Token,
    TokenKind,
    is_digit,
    is_ident_char,
    is_ident_start,
    is_path_char,
    is_scheme_char,
    is_uri_char,
)

_INT_MAX = 2**63 - 1
_INT_MAX_DIGITS = len(str(_INT_MAX))

# Longest lexemes first so that maximal munch is a plain first-match scan.
_SYMBOLS = tuple(sorted(OPERATORS + PUNCTUATION, key=lambda entry: -len(entry[0])))

# Escapes shared by both string flavours; any other escaped char stands for itself.
_ESCAPES = {"n": "\n", "r": "\r", "t": "\t"}


class _Mode(Enum):
    NORMAL = auto()
    STRING = auto()
    INDENT_STRING = auto()


@dataclass(slots=True)
class _Frame:
    mode: _Mode
    opener: Span | None = None  # token that pushed this frame
    brace_depth: int = 0


class Lexer:
    """Tokenize source text into a single-pass iterator of Token objects.

    Problems are never raised: they are recorded in ``diagnostics`` (and
    invalid lexemes become UNKNOWN tokens) so that the rest of the input is
    still lexed. The list is complete once the iterator is exhausted.
    """

    def __init__(
        self,
        source: str,
        filename: str = "<stdin>",
        symbols: SymbolTable | None = None,
    ) -> None:
        self._symbols = symbols if symbols is not None else default_symbols()
        self._chars = CharStream(source)
        self._spans = SpanBuilder(self._symbols.intern(filename))
        self._stack: list[_Frame] = [_Frame(_Mode.NORMAL)]
        self._tokens = self._generate()
        self.diagnostics: list[Diagnostic] = []

    @property
    def filename(self) -> str:
        return self._spans.file

    def __iter__(self) -> Lexer:
        return self

    def __next__(self) -> Token:
        return next(self._tokens)

    def _generate(self) -> Iterator[Token]:
        while True:
            frame = self._stack[-1]
            if frame.mode is _Mode.NORMAL:
                token = self._lex_normal(frame)
            else:
                token = self._lex_string(frame)
            if token is None:
                break
            yield token

        # Unclosed strings at EOF, innermost first
        for frame in reversed(self._stack):
            if frame.mode is not _Mode.NORMAL and frame.opener is not None:
                self._report(
                    LexErrorKind.UNTERMINATED_STRING,
                    Spanned("unterminated string", frame.opener),
                )

    # ------------------------------------------------------------------
    # Position helpers
    # ------------------------------------------------------------------

    def _pos(self) -> Pos:
        return self._chars.current_pos()

    def _token(self, kind: TokenKind, value: str | int | float | None, start: Pos) -> Token:
        return self._spans.token(kind, value, start, self._pos())

    def _report(self, kind: LexErrorKind, message: Spanned[str]) -> None:
        self.diagnostics.append(Diagnostic.from_spanned(kind, message))

    def _invalid(self, kind: LexErrorKind, message: str, text: str, start: Pos) -> Token:
        token = self._token(TokenKind.UNKNOWN, text, start)
        self._report(kind, Spanned(message, token.span))
        return token

    # ------------------------------------------------------------------
    # Normal mode
    # ------------------------------------------------------------------

    def _lex_normal(self, frame: _Frame) -> Token | None:
        self._skip_trivia()
        ch = self._chars.peek()
        if ch is None:
            return None

        start = self._pos()

        if ch == '"':
            self._chars.advance()
            token = self._token(TokenKind.QUOTE, '"', start)
            self._stack.append(_Frame(_Mode.STRING, token.span))
            return token

        if ch == "'" and self._chars.peek(1) == "'":
            self._chars.advance_by(2)
            token = self._token(TokenKind.INDENT_QUOTE, "''", start)
            self._stack.append(_Frame(_Mode.INDENT_STRING, token.span))
            return token

        token = self._lex_literal(start)
        if token is not None:
            return token

        token = self._lex_symbol(start)
        if token.kind is TokenKind.BRACE_L:
            frame.brace_depth += 1
        elif token.kind is TokenKind.BRACE_R:
            if frame.brace_depth > 0:
                frame.brace_depth -= 1
            elif len(self._stack) > 1:
                # Closes the ${ of the enclosing string
                self._stack.pop()
        return token

    def _skip_trivia(self) -> None:
        chars = self._chars
        while True:
            ch = chars.peek()
            if ch is None:
                return
            if ch in WHITESPACE:
                chars.advance()
            elif ch == "#":
                while chars.peek() not in (None, "\n"):
                    chars.advance()
            elif ch == "/" and chars.peek(1) == "*":
                self._skip_block_comment()
            else:
                return

    def _skip_block_comment(self) -> None:
        start = self._pos()
        self._chars.advance_by(2)  # consume /*
        while not self._chars.at_end:
            if self._chars.startswith("*/"):
                self._chars.advance_by(2)
                return
            self._chars.advance()
        self._report(
            LexErrorKind.UNTERMINATED_BLOCK_COMMENT,
            self._spans.spanned("unterminated block comment", start, self._pos()),
        )

    # ------------------------------------------------------------------
    # Literals: numbers, paths, URIs, identifiers
    # ------------------------------------------------------------------

    def _lex_literal(self, start: Pos) -> Token | None:
        """Scan every literal form on a clone and keep the longest match.

        Ties go to the earlier scanner, so a digit run that is nothing more
        stays a number.
        """
        scanners: tuple[Callable[[CharStream], TokenKind | None], ...] = (
            _scan_number,
            _scan_path,
            _scan_uri,
            _scan_ident,
        )
        best: tuple[TokenKind, CharStream] | None = None
        for scan in scanners:
            attempt = self._chars.clone()
            kind = scan(attempt)
            if kind is None:
                continue
            if best is None or attempt.offset > best[1].offset:
                best = (kind, attempt)

        if best is None:
            return None

        kind, attempt = best
        self._chars.restore(attempt)
        text = self._chars.text_from(start.offset)

        if kind is TokenKind.INT:
            # Leading zeros are dropped before int(), which refuses very long digit strings
            digits = text.lstrip("0") or "0"
            if len(digits) > _INT_MAX_DIGITS or int(digits) > _INT_MAX:
                return self._invalid(
                    LexErrorKind.INTEGER_OVERFLOW,
                    f"integer literal '{text}' does not fit in 64 bits",
                    text,
                    start,
                )
            return self._token(kind, int(digits), start)

        if kind is TokenKind.FLOAT:
            value = float(text)
            if math.isinf(value):
                return self._invalid(
                    LexErrorKind.FLOAT_OVERFLOW,
                    f"float literal '{text}' is out of range",
                    text,
                    start,
                )
            return self._token(kind, value, start)

        if kind in (TokenKind.ID, TokenKind.PATH):
            return self._token(kind, self._symbols.intern(text), start)

        return self._token(kind, text, start)

    # ------------------------------------------------------------------
    # Operators and punctuation
    # ------------------------------------------------------------------

    def _lex_symbol(self, start: Pos) -> Token:
        for lexeme, kind in _SYMBOLS:
            if self._chars.startswith(lexeme):
                self._chars.advance_by(len(lexeme))
                return self._token(kind, lexeme, start)

        ch = self._chars.advance()
        return self._invalid(
            LexErrorKind.UNRECOGNIZED_CHARACTER,
            f"unrecognized character {ch!r}",
            ch or "",
            start,
        )

    # ------------------------------------------------------------------
    # String modes
    # ------------------------------------------------------------------

    def _lex_string(self, frame: _Frame) -> Token | None:
        chars = self._chars
        if chars.at_end:
            return None

        indented = frame.mode is _Mode.INDENT_STRING
        start = self._pos()

        if not indented and chars.peek() == '"':
            chars.advance()
            self._stack.pop()
            return self._token(TokenKind.QUOTE, '"', start)

        if indented and chars.startswith("''") and chars.peek(2) not in ("'", "$", "\\"):
            chars.advance_by(2)
            self._stack.pop()
            return self._token(TokenKind.INDENT_QUOTE, "''", start)

        if chars.startswith("${"):
            chars.advance_by(2)
            token = self._token(TokenKind.DOLLAR_BRACE, "${", start)
            self._stack.append(_Frame(_Mode.NORMAL, token.span))
            return token

        if indented:
            return self._token(TokenKind.INDENT_STR_PART, self._scan_indented_text(), start)
        return self._token(TokenKind.STR_PART, self._scan_text(), start)

    def _scan_text(self) -> str:
        """Accumulate "..." text up to the closing quote or an interpolation."""
        chars = self._chars
        out: list[str] = []
        while True:
            ch = chars.peek()
            if ch is None or ch == '"':
                break
            if ch == "$":
                if not self._scan_dollar(out):
                    break
            elif ch == "\\":
                chars.advance()
                esc = chars.advance()
                out.append("\\" if esc is None else _ESCAPES.get(esc, esc))
            else:
                out.append(ch)
                chars.advance()
        return "".join(out)

    def _scan_indented_text(self) -> str:
        """Accumulate ''...'' text up to the closing '' or an interpolation."""
        chars = self._chars
        out: list[str] = []
        while True:
            ch = chars.peek()
            if ch is None:
                break
            if ch == "$":
                if not self._scan_dollar(out):
                    break
            elif ch == "'" and chars.peek(1) == "'":
                follow = chars.peek(2)
                if follow == "'":
                    chars.advance_by(3)
                    out.append("''")
                elif follow == "$":
                    chars.advance_by(3)
                    out.append("$")
                elif follow == "\\":
                    chars.advance_by(3)
                    esc = chars.advance()
                    out.append("''\\" if esc is None else _ESCAPES.get(esc, esc))
                else:
                    break
            else:
                out.append(ch)
                chars.advance()
        return "".join(out)

    def _scan_dollar(self, out: list[str]) -> bool:
        """Consume literal text starting at '$'; False if it opens an interpolation."""
        chars = self._chars
        if chars.peek(1) == "{":
            return False
        if chars.startswith("$${"):
            chars.advance_by(3)
            out.append("${")
        else:
            chars.advance()
            out.append("$")
        return True


# ----------------------------------------------------------------------
# Literal scanners. Each consumes from the given clone and returns the
# kind it matched, or None if the input does not start with that form.
# ----------------------------------------------------------------------


def _consume_while(chars: CharStream, pred: Callable[[str | None], bool]) -> int:
    count = 0
    while pred(chars.peek()):
        chars.advance()
        count += 1
    return count


def _scan_number(chars: CharStream) -> TokenKind | None:
    if not is_digit(chars.peek()):
        return None
    _consume_while(chars, is_digit)
    kind = TokenKind.INT

    if chars.peek() == "." and is_digit(chars.peek(1)):
        chars.advance()
        _consume_while(chars, is_digit)
        kind = TokenKind.FLOAT

    if chars.peek() in ("e", "E"):
        sign = 1 if chars.peek(1) in ("+", "-") else 0
        if is_digit(chars.peek(1 + sign)):
            chars.advance_by(1 + sign)
            _consume_while(chars, is_digit)
            kind = TokenKind.FLOAT

    return kind


def _scan_segments(chars: CharStream) -> int:
    """Consume ("/" path-char+)* and return how many segments were read."""
    count = 0
    while chars.peek() == "/" and is_path_char(chars.peek(1)):
        chars.advance()
        _consume_while(chars, is_path_char)
        count += 1
    return count


def _scan_path(chars: CharStream) -> TokenKind | None:
    ch = chars.peek()

    if ch == "<":
        chars.advance()
        if _consume_while(chars, is_path_char) == 0:
            return None
        _scan_segments(chars)
        if chars.peek() != ">":
            return None
        chars.advance()
        return TokenKind.PATH

    if ch == "~":
        chars.advance()
    else:
        _consume_while(chars, is_path_char)

    if _scan_segments(chars) == 0:
        return None
    return TokenKind.PATH


def _scan_uri(chars: CharStream) -> TokenKind | None:
    ch = chars.peek()
    if ch is None or not (ch.isascii() and ch.isalpha()):
        return None
    chars.advance()
    _consume_while(chars, is_scheme_char)
    if chars.peek() != ":" or not is_uri_char(chars.peek(1)):
        return None
    chars.advance()
    _consume_while(chars, is_uri_char)
    return TokenKind.URI


def _scan_ident(chars: CharStream) -> TokenKind | None:
    if not is_ident_start(chars.peek()):
        return None
    chars.advance()
    _consume_while(chars, is_ident_char)
    return TokenKind.ID


def lex(
    source: str, filename: str = "<stdin>", symbols: SymbolTable | None = None
) -> list[Token]:
    """Convenience function: lex the whole source, ignoring diagnostics."""
    return list(Lexer(source, filename, symbols))


def tokenize(
    source: str, filename: str = "<stdin>", symbols: SymbolTable | None = None
) -> list[Token]:
    """Lex the whole source; raise LexError if any diagnostic was reported."""
    lexer = Lexer(source, filename, symbols)
    tokens = list(lexer)
    if lexer.diagnostics:
        raise LexError(lexer.diagnostics, source)
    return tokens
