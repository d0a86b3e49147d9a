"""
Тесты для лексера выражений.
"""

import pytest

from srtemplate.errors import ParseError
from srtemplate.lexer import ExpressionLexer, Token, locate


class TestExpressionLexer:

    def setup_method(self):
        self.lexer = ExpressionLexer()

    def _types(self, text):
        return [t.type for t in self.lexer.tokenize(text)]

    def test_empty_expression(self):
        """Пустое выражение - только EOF"""
        tokens = self.lexer.tokenize("")
        assert tokens == [Token(type='EOF', value='', position=0)]

    def test_whitespace_is_ignored(self):
        tokens = self.lexer.tokenize("  name \n\t")
        assert [t.type for t in tokens] == ['IDENTIFIER', 'EOF']
        assert tokens[0].value == "name"
        assert tokens[0].position == 2

    def test_function_call(self):
        assert self._types("f(a, g(b))") == [
            'IDENTIFIER', 'LPAREN', 'IDENTIFIER', 'COMMA',
            'IDENTIFIER', 'LPAREN', 'IDENTIFIER', 'RPAREN', 'RPAREN', 'EOF',
        ]

    def test_string_literal_strips_quotes(self):
        tokens = self.lexer.tokenize('"  !   "')
        assert tokens[0].type == 'STRING'
        assert tokens[0].value == "  !   "

    def test_string_keeps_special_characters(self):
        """Запятые и скобки внутри строки не являются токенами"""
        tokens = self.lexer.tokenize('"a, (b)"')
        assert [t.type for t in tokens] == ['STRING', 'EOF']
        assert tokens[0].value == "a, (b)"

    def test_backslash_is_not_an_escape(self):
        tokens = self.lexer.tokenize(r'"a\"')
        assert tokens[0].value == "a\\"

    def test_numbers(self):
        tokens = self.lexer.tokenize("42 -7 3.14 -0.5")
        assert [(t.type, t.value) for t in tokens[:-1]] == [
            ('NUMBER', '42'),
            ('NUMBER', '-7'),
            ('FLOAT', '3.14'),
            ('FLOAT', '-0.5'),
        ]

    def test_unicode_identifier(self):
        tokens = self.lexer.tokenize("имя_2")
        assert tokens[0].type == 'IDENTIFIER'
        assert tokens[0].value == "имя_2"

    def test_absolute_positions(self):
        """Позиции отсчитываются от начала всего текста"""
        text = "Hello {{ f(x) }}"
        tokens = self.lexer.tokenize(text, 8, 14)
        assert [(t.value, t.position) for t in tokens] == [
            ("f", 9), ("(", 10), ("x", 11), (")", 12), ("", 14),
        ]

    def test_unexpected_character(self):
        with pytest.raises(ParseError, match="Unexpected character '\\+'"):
            self.lexer.tokenize("a + b")

    def test_unterminated_string(self):
        with pytest.raises(ParseError, match="Unterminated string literal") as exc_info:
            self.lexer.tokenize('f("abc')
        assert exc_info.value.position == 2


def test_locate():
    text = "line1\nline2\nline3"
    assert locate(text, 0) == (1, 1)
    assert locate(text, 6) == (2, 1)
    assert locate(text, 14) == (3, 3)
