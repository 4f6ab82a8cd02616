"""Lexical diagnostics with formatted source context."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, auto

from rixlex.tokens import Span, Spanned


class LexErrorKind(Enum):
    INTEGER_OVERFLOW = auto()
    FLOAT_OVERFLOW = auto()
    UNTERMINATED_STRING = auto()
    UNTERMINATED_BLOCK_COMMENT = auto()
    UNRECOGNIZED_CHARACTER = auto()


@dataclass(frozen=True, slots=True)
class Diagnostic:
    """A recoverable lexing problem reported alongside the token stream."""

    kind: LexErrorKind
    message: str
    span: Span

    @classmethod
    def from_spanned(cls, kind: LexErrorKind, message: Spanned[str]) -> Diagnostic:
        return cls(kind, message.value, message.span)

    @property
    def spanned(self) -> Spanned[str]:
        return Spanned(self.message, self.span)

    def format(self, source: str) -> str:
        lines = source.splitlines(keepends=True)
        line_idx = self.span.start.line - 1
        col = self.span.start.column

        if 0 <= line_idx < len(lines):
            source_line = lines[line_idx].rstrip("\n").rstrip("\r")
        else:
            source_line = ""

        # Underline the full span when on one line, otherwise to end of line
        if self.span.end.line == self.span.start.line:
            underline_len = max(1, self.span.end.column - col)
        else:
            underline_len = max(1, len(source_line) - col + 1)

        pad = " " * (col - 1)
        carets = "^" * underline_len

        line_num = str(self.span.start.line)
        gutter_width = len(line_num) + 1

        blank_gutter = " " * gutter_width + "|"
        line_gutter = f"{line_num:>{gutter_width - 1}} |"

        return (
            f"error: {self.message}\n"
            f"{' ' * gutter_width}--> {self.span.file}:{self.span.start.line}:{col}\n"
            f"{blank_gutter}\n"
            f"{line_gutter} {source_line}\n"
            f"{blank_gutter} {pad}{carets}"
        )


class LexError(Exception):
    """Raised by strict tokenization when any diagnostic was reported."""

    def __init__(self, diagnostics: list[Diagnostic], source: str) -> None:
        self.diagnostics = diagnostics
        self.source = source
        super().__init__(self.format())

    @property
    def message(self) -> str:
        return self.diagnostics[0].message if self.diagnostics else ""

    def format(self) -> str:
        return "\n\n".join(d.format(self.source) for d in self.diagnostics)
