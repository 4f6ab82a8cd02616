"""String interning for identifiers, paths, and filenames."""

from __future__ import annotations

from dataclasses import dataclass, field


@dataclass
class SymbolTable:
    """Maps string content to one canonical, shared instance.

    Equal text always yields the same object, so interned handles can be
    compared with ``is`` as well as ``==``.
    """

    _symbols: dict[str, str] = field(default_factory=dict, init=False, repr=False)

    def intern(self, text: str) -> str:
        """Return the canonical instance for text, registering it if new."""
        # setdefault is atomic, so concurrent lexers can share one table
        return self._symbols.setdefault(text, text)

    def __contains__(self, text: object) -> bool:
        return text in self._symbols

    def __len__(self) -> int:
        return len(self._symbols)


_DEFAULT = SymbolTable()


def default_symbols() -> SymbolTable:
    """Return the process-wide symbol table."""
    return _DEFAULT
