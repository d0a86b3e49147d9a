"""Тесты для парсера шаблонов TemplateParser."""

from dataclasses import FrozenInstanceError

import pytest

from srtemplate.errors import ParseError
from srtemplate.nodes import (
    FloatLiteral,
    Function,
    NumberLiteral,
    RawText,
    StringLiteral,
    Variable,
)
from srtemplate.parser import MAX_NESTING_DEPTH, TemplateParser, parse


class TestTemplateParser:
    """Основные тесты для TemplateParser."""

    def test_parse_empty_template(self):
        assert parse("") == []

    def test_parse_plain_text(self):
        """Текст без выражений сохраняется целиком, включая переводы строк."""
        text = "Hello,\n  world!\n"
        assert parse(text) == [RawText(text)]

    def test_parse_variable(self):
        assert parse("Hello {{ var }}") == [RawText("Hello "), Variable("var")]

    def test_parse_text_around_variable(self):
        assert parse("a{{x}}b") == [RawText("a"), Variable("x"), RawText("b")]

    def test_adjacent_expressions(self):
        """Между соседними выражениями не появляется пустой RawText."""
        assert parse("{{ a }}{{ b }}") == [Variable("a"), Variable("b")]

    def test_parse_function(self):
        assert parse("Hello {{ toLowerCase(var) }}") == [
            RawText("Hello "),
            Function("toLowerCase", (Variable("var"),)),
        ]

    def test_zero_argument_call_differs_from_variable(self):
        assert parse("{{ now() }}") == [Function("now", ())]
        assert parse("{{ now }}") == [Variable("now")]

    def test_nested_functions(self):
        assert parse("{{ toLowerCase(trim(var)) }}") == [
            Function("toLowerCase", (Function("trim", (Variable("var"),)),)),
        ]

    def test_literal_arguments(self):
        ast = parse('{{ f("  !   ", 42, 3.14, -1) }}')
        assert ast == [
            Function("f", (
                StringLiteral("  !   "),
                NumberLiteral("42"),
                FloatLiteral("3.14"),
                NumberLiteral("-1"),
            )),
        ]

    def test_commas_inside_strings_and_calls_are_not_separators(self):
        ast = parse('{{ f("a, b", g(x, y), z) }}')
        assert ast == [
            Function("f", (
                StringLiteral("a, b"),
                Function("g", (Variable("x"), Variable("y"))),
                Variable("z"),
            )),
        ]

    def test_whitespace_is_insignificant(self):
        assert parse("{{f(a,b)}}") == parse("{{  f ( a ,\n b )  }}")

    def test_raw_string_argument_in_multiline_template(self):
        template = 'Hello\n{{ toLowerCase(trim(var, "  !   ")) }}'
        assert parse(template) == [
            RawText("Hello\n"),
            Function("toLowerCase", (
                Function("trim", (Variable("var"), StringLiteral("  !   "))),
            )),
        ]

    def test_nodes_are_immutable(self):
        node = parse("{{ f(x) }}")[0]
        with pytest.raises(FrozenInstanceError):
            node.name = "g"  # type: ignore[misc]

    def test_parser_is_reusable(self):
        parser = TemplateParser()
        assert parser.parse("{{ a }}") == [Variable("a")]
        assert parser.parse("{{ b }}") == [Variable("b")]


class TestDelimiters:
    """Тесты для пользовательских разделителей."""

    def test_custom_delimiters(self):
        assert parse("Hi <% name %>!", "<%", "%>") == [
            RawText("Hi "), Variable("name"), RawText("!"),
        ]

    def test_default_delimiters_are_text_with_custom_ones(self):
        assert parse("{{ x }}", "<%", "%>") == [RawText("{{ x }}")]

    def test_equal_delimiters(self):
        """Одинаковые разделители: берётся первое непересекающееся вхождение."""
        assert parse("%a% and %b%", "%", "%") == [
            Variable("a"), RawText(" and "), Variable("b"),
        ]

    def test_close_delimiter_inside_string(self):
        assert parse('{{ f("}}") }}') == [Function("f", (StringLiteral("}}"),))]

    def test_lone_close_delimiter_is_text(self):
        assert parse("a }} b") == [RawText("a }} b")]

    def test_empty_delimiters_are_rejected(self):
        with pytest.raises(ParseError, match="Delimiters must not be empty"):
            TemplateParser("", "}}")
        with pytest.raises(ParseError, match="Delimiters must not be empty"):
            TemplateParser("{{", "")


class TestParserErrors:
    """Тесты для синтаксических ошибок."""

    def test_unterminated_expression(self):
        with pytest.raises(ParseError, match="Unterminated expression") as exc_info:
            parse("Hello {{ var")
        assert exc_info.value.position == 6
        assert exc_info.value.line == 1
        assert exc_info.value.column == 7

    def test_error_position_on_later_line(self):
        with pytest.raises(ParseError) as exc_info:
            parse("line one\nline two {{ f(a b) }}")
        error = exc_info.value
        assert error.line == 2
        assert error.column == 17
        assert "2:17" in str(error)

    def test_empty_expression(self):
        with pytest.raises(ParseError, match="Empty expression"):
            parse("{{   }}")

    def test_missing_close_paren(self):
        with pytest.raises(ParseError, match="Expected '\\)' to close call of 'f'"):
            parse("{{ f(a }}")

    def test_extra_close_paren(self):
        with pytest.raises(ParseError, match="Unexpected token '\\)'"):
            parse("{{ f(a)) }}")

    def test_paren_without_function_name(self):
        with pytest.raises(ParseError, match="Unexpected token '\\('"):
            parse("{{ (a) }}")

    def test_literal_at_top_level(self):
        with pytest.raises(ParseError, match="only allowed as a function argument"):
            parse('{{ "text" }}')
        with pytest.raises(ParseError, match="only allowed as a function argument"):
            parse("{{ 42 }}")

    def test_trailing_comma(self):
        with pytest.raises(ParseError, match="Trailing comma"):
            parse("{{ f(a,) }}")

    def test_leading_comma(self):
        with pytest.raises(ParseError, match="Expected argument"):
            parse("{{ f(,a) }}")

    def test_two_identifiers(self):
        with pytest.raises(ParseError, match="Unexpected token 'b'"):
            parse("{{ a b }}")

    def test_unparseable_argument(self):
        with pytest.raises(ParseError, match="Unexpected character"):
            parse("{{ f(a + b) }}")

    def test_unterminated_string_in_expression(self):
        """Незакрытая кавычка поглощает закрывающий разделитель."""
        with pytest.raises(ParseError, match="Unterminated expression"):
            parse('{{ f("abc) }}')

    def test_nesting_limit(self):
        depth = MAX_NESTING_DEPTH + 1
        template = "{{ " + "f(" * depth + "x" + ")" * depth + " }}"
        with pytest.raises(ParseError, match="nesting is deeper"):
            parse(template)

    def test_nesting_below_limit(self):
        depth = MAX_NESTING_DEPTH
        template = "{{ " + "f(" * depth + "x" + ")" * depth + " }}"
        node = parse(template)[0]
        for _ in range(depth):
            assert isinstance(node, Function)
            node = node.arguments[0]
        assert node == Variable("x")
