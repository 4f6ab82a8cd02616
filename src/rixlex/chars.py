"""Codepoint stream with line/column tracking."""

from __future__ import annotations

from rixlex.tokens import Pos


class CharStream:
    """Cursor over source text that keeps the current position up to date.

    Cloning is cheap (three integers and a shared reference to the text), so
    the lexer can try a greedy match on a clone and adopt it with
    :meth:`restore` only if the match succeeds.
    """

    __slots__ = ("_source", "_index", "_line", "_column")

    def __init__(self, source: str) -> None:
        self._source = source
        self._index = 0
        self._line = 1
        self._column = 1

    @property
    def at_end(self) -> bool:
        return self._index >= len(self._source)

    @property
    def offset(self) -> int:
        return self._index

    def current_pos(self) -> Pos:
        return Pos(self._line, self._column, self._index)

    def peek(self, offset: int = 0) -> str | None:
        idx = self._index + offset
        if idx < len(self._source):
            return self._source[idx]
        return None

    def advance(self) -> str | None:
        if self._index >= len(self._source):
            return None
        ch = self._source[self._index]
        self._index += 1
        if ch == "\n":
            self._line += 1
            self._column = 1
        else:
            self._column += 1
        return ch

    def advance_by(self, count: int) -> str:
        """Consume up to count codepoints and return them."""
        start = self._index
        for _ in range(count):
            if self.advance() is None:
                break
        return self._source[start : self._index]

    def startswith(self, text: str) -> bool:
        return self._source.startswith(text, self._index)

    def text_from(self, offset: int) -> str:
        """Return the source text between offset and the current position."""
        return self._source[offset : self._index]

    def clone(self) -> CharStream:
        other = CharStream.__new__(CharStream)
        other._source = self._source
        other._index = self._index
        other._line = self._line
        other._column = self._column
        return other

    def restore(self, other: CharStream) -> None:
        """Adopt the consumption state of a clone."""
        self._index = other._index
        self._line = other._line
        self._column = other._column
