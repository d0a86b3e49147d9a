"""
Парсер шаблонов с рекурсивным спуском.

Разбивает шаблон на сырой текст и выражения между разделителями,
а выражения преобразует в AST из вызовов функций, переменных и литералов.

Грамматика выражения:
expression → call | IDENTIFIER
call       → IDENTIFIER "(" [argument ("," argument)*] ")"
argument   → call | IDENTIFIER | STRING | NUMBER | FLOAT
"""

from __future__ import annotations

import logging
from typing import List, Optional

from .errors import ParseError
from .lexer import ExpressionLexer, Token, parse_error
from .nodes import (
    TemplateNode,
    TemplateAST,
    RawText,
    StringLiteral,
    NumberLiteral,
    FloatLiteral,
    Variable,
    Function,
)

logger = logging.getLogger(__name__)

DEFAULT_OPEN_DELIMITER = "{{"
DEFAULT_CLOSE_DELIMITER = "}}"

# Предел вложенности вызовов функций
MAX_NESTING_DEPTH = 128

_LITERALS = {
    'STRING': StringLiteral,
    'NUMBER': NumberLiteral,
    'FLOAT': FloatLiteral,
}


class TemplateParser:
    """
    Парсер шаблонов.

    Сканирует шаблон слева направо: текст до очередного открывающего
    разделителя становится RawText, содержимое до парного закрывающего
    разделителя разбирается как одно выражение.
    """

    def __init__(
        self,
        open_delim: str = DEFAULT_OPEN_DELIMITER,
        close_delim: str = DEFAULT_CLOSE_DELIMITER,
    ):
        if not open_delim or not close_delim:
            raise ParseError("Delimiters must not be empty", 0)

        self.open_delim = open_delim
        self.close_delim = close_delim
        self.lexer = ExpressionLexer()

        self._text = ""
        self._tokens: List[Token] = []
        self._position = 0

    def parse(self, text: str) -> TemplateAST:
        """
        Парсит шаблон в AST.

        Args:
            text: Исходный текст шаблона

        Returns:
            Список узлов верхнего уровня

        Raises:
            ParseError: При синтаксической ошибке
        """
        self._text = text
        ast: List[TemplateNode] = []
        length = len(text)
        pos = 0

        while pos < length:
            open_at = text.find(self.open_delim, pos)
            if open_at == -1:
                ast.append(RawText(text=text[pos:]))
                break

            if open_at > pos:
                ast.append(RawText(text=text[pos:open_at]))

            expr_start = open_at + len(self.open_delim)
            close_at = self._find_close(expr_start)
            if close_at is None:
                raise parse_error("Unterminated expression", text, open_at)

            ast.append(self._parse_expression(expr_start, close_at, open_at))
            pos = close_at + len(self.close_delim)

        logger.debug(f"Parsed template of length {length} into {len(ast)} nodes")
        return ast

    def _find_close(self, start: int) -> Optional[int]:
        """
        Находит закрывающий разделитель, начиная с позиции start.

        Разделитель внутри строки в кавычках не считается закрывающим.
        """
        text = self._text
        in_string = False
        pos = start
        while pos < len(text):
            if not in_string and text.startswith(self.close_delim, pos):
                return pos
            if text[pos] == '"':
                in_string = not in_string
            pos += 1
        return None

    def _parse_expression(self, start: int, end: int, open_at: int) -> TemplateNode:
        """Парсит содержимое одной пары разделителей."""
        self._tokens = self.lexer.tokenize(self._text, start, end)
        self._position = 0

        if self._is_at_end():
            raise parse_error("Empty expression", self._text, open_at)

        current = self._current_token()
        if current.type == 'IDENTIFIER':
            node = self._parse_identifier(depth=0)
        elif current.type in _LITERALS:
            raise self._error(
                f"Literal '{current.value}' is only allowed as a function argument", current
            )
        else:
            raise self._error(f"Unexpected token '{current.value}'", current)

        # Проверяем, что мы достигли конца выражения
        if not self._is_at_end():
            current = self._current_token()
            raise self._error(f"Unexpected token '{current.value}'", current)

        return node

    def _parse_identifier(self, depth: int) -> TemplateNode:
        """Парсит переменную или вызов функции."""
        name_token = self._advance()

        if not self._match('LPAREN'):
            return Variable(name=name_token.value)

        if depth >= MAX_NESTING_DEPTH:
            raise self._error(
                f"Function nesting is deeper than {MAX_NESTING_DEPTH} levels", name_token
            )

        return Function(
            name=name_token.value,
            arguments=tuple(self._parse_arguments(name_token, depth)),
        )

    def _parse_arguments(self, name_token: Token, depth: int) -> List[TemplateNode]:
        """Парсит список аргументов после открывающей скобки."""
        arguments: List[TemplateNode] = []

        if self._match('RPAREN'):
            return arguments

        while True:
            arguments.append(self._parse_argument(depth + 1))

            if self._match('RPAREN'):
                return arguments

            if self._match('COMMA'):
                if self._check('RPAREN'):
                    raise self._error("Trailing comma in argument list", self._current_token())
                continue

            current = self._current_token()
            if current.type == 'EOF':
                raise self._error(
                    f"Expected ')' to close call of '{name_token.value}'", current
                )
            raise self._error(f"Expected ',' or ')', got '{current.value}'", current)

    def _parse_argument(self, depth: int) -> TemplateNode:
        """Парсит один аргумент функции."""
        current = self._current_token()

        literal_cls = _LITERALS.get(current.type)
        if literal_cls is not None:
            self._advance()
            return literal_cls(text=current.value)

        if current.type == 'IDENTIFIER':
            return self._parse_identifier(depth)

        if current.type == 'EOF':
            raise self._error("Unexpected end of expression", current)
        if current.type in ('COMMA', 'RPAREN'):
            raise self._error(f"Expected argument, got '{current.value}'", current)
        raise self._error(f"Unexpected token '{current.value}'", current)

    # Вспомогательные методы для работы с токенами

    def _current_token(self) -> Token:
        """Возвращает текущий токен без продвижения позиции."""
        return self._tokens[min(self._position, len(self._tokens) - 1)]

    def _is_at_end(self) -> bool:
        return self._current_token().type == 'EOF'

    def _advance(self) -> Token:
        """Продвигает позицию и возвращает предыдущий токен."""
        current = self._current_token()
        if not self._is_at_end():
            self._position += 1
        return current

    def _check(self, token_type: str) -> bool:
        return self._current_token().type == token_type

    def _match(self, token_type: str) -> bool:
        """Проверяет и потребляет токен указанного типа."""
        if self._check(token_type):
            self._advance()
            return True
        return False

    def _error(self, message: str, token: Token) -> ParseError:
        return parse_error(message, self._text, token.position)


def parse(
    template: str,
    open_delim: str = DEFAULT_OPEN_DELIMITER,
    close_delim: str = DEFAULT_CLOSE_DELIMITER,
) -> TemplateAST:
    """
    Удобная функция для парсинга шаблона.

    Args:
        template: Исходный текст шаблона
        open_delim: Открывающий разделитель выражений
        close_delim: Закрывающий разделитель выражений

    Returns:
        Список узлов AST

    Raises:
        ParseError: При ошибке синтаксического анализа
    """
    return TemplateParser(open_delim, close_delim).parse(template)


__all__ = [
    "TemplateParser",
    "parse",
    "DEFAULT_OPEN_DELIMITER",
    "DEFAULT_CLOSE_DELIMITER",
    "MAX_NESTING_DEPTH",
]
