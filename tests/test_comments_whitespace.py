"""Test whitespace and comment skipping."""

from rixlex.errors import LexErrorKind
from rixlex.tokens import TokenKind

from .conftest import assert_kinds


class TestWhitespace:
    def test_empty_input(self, lex):
        assert lex("") == []

    def test_only_whitespace(self, lex):
        assert lex("   \t\n  \r\n") == []

    def test_newline_advances_line(self, lex):
        tokens = lex("a\n  b")
        assert str(tokens[1].span) == "2:3-2:4"

    def test_tab_counts_one_column(self, lex):
        tokens = lex("\tx")
        assert tokens[0].span.start.column == 2


class TestLineComments:
    def test_comment_only(self, lex):
        assert lex("# just a comment") == []

    def test_comment_between_tokens(self, lex):
        tokens = lex("a # c\nb")
        assert_kinds(tokens, [TokenKind.ID, TokenKind.ID])
        assert tokens[1].span.start.line == 2
        assert tokens[1].span.start.column == 1

    def test_hash_inside_comment_line(self, lex):
        assert lex("## ### #") == []


class TestBlockComments:
    def test_block_comment(self, lex):
        tokens = lex("/* x */ a")
        assert_kinds(tokens, [TokenKind.ID])
        assert tokens[0].span.start.column == 9

    def test_comment_between_operands(self, lex):
        assert_kinds(lex("1/*c*/+2"), [TokenKind.INT, TokenKind.PLUS, TokenKind.INT])

    def test_multiline_block_comment(self, lex):
        tokens = lex("/*\n\n*/x")
        assert str(tokens[0].span) == "3:3-3:4"

    def test_not_nesting(self, lex):
        tokens = lex("/* a /* b */ c */")
        assert_kinds(tokens, [TokenKind.ID, TokenKind.MULT, TokenKind.DIVIDE])

    def test_unterminated(self, lex_with_diagnostics):
        tokens, diags = lex_with_diagnostics("a /* never closed")
        assert_kinds(tokens, [TokenKind.ID])
        assert [d.kind for d in diags] == [LexErrorKind.UNTERMINATED_BLOCK_COMMENT]
        assert str(diags[0].span.start) == "1:3"

    def test_opener_star_does_not_close(self, lex_with_diagnostics):
        tokens, diags = lex_with_diagnostics("/*/")
        assert tokens == []
        assert diags[0].kind is LexErrorKind.UNTERMINATED_BLOCK_COMMENT
