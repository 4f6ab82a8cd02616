"""Test the string-interning symbol table."""

from rixlex.lexer import Lexer
from rixlex.symbols import SymbolTable, default_symbols


class TestSymbolTable:
    def test_intern_returns_equal_text(self):
        symbols = SymbolTable()
        assert symbols.intern("foo") == "foo"

    def test_same_text_same_object(self):
        symbols = SymbolTable()
        first = symbols.intern("foo")
        built = "".join(["f", "o", "o"])
        assert symbols.intern(built) is first

    def test_len_and_contains(self):
        symbols = SymbolTable()
        symbols.intern("a")
        symbols.intern("b")
        symbols.intern("a")
        assert len(symbols) == 2
        assert "a" in symbols
        assert "c" not in symbols

    def test_tables_are_independent(self):
        one = SymbolTable()
        two = SymbolTable()
        one.intern("x")
        assert "x" not in two


class TestDefaultSymbols:
    def test_process_wide_singleton(self):
        assert default_symbols() is default_symbols()

    def test_lexer_uses_default_table(self):
        lexer = Lexer("some_identifier", "default.rix")
        tokens = list(lexer)
        table = default_symbols()
        assert "default.rix" in table
        assert tokens[0].value is table.intern("some_identifier")
