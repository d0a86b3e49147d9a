"""
Лексер для разбора выражений внутри разделителей.

Выполняет токенизацию содержимого между открывающим и закрывающим
разделителями, разбивая его на значимые элементы:
- Идентификаторы (имена переменных и функций)
- Литералы (строки в кавычках, целые и дробные числа)
- Символы (скобки, запятые)
- Пробелы (игнорируются)
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import List, Optional, Tuple

from .errors import ParseError


@dataclass(frozen=True)
class Token:
    """
    Токен выражения.

    Attributes:
        type: Тип токена (IDENTIFIER, STRING, NUMBER, FLOAT, LPAREN, RPAREN, COMMA, EOF)
        value: Значение токена (для STRING - без кавычек)
        position: Абсолютная позиция в исходном шаблоне
    """
    type: str
    value: str
    position: int

    def __repr__(self):
        return f"Token({self.type}, '{self.value}', pos={self.position})"


def locate(text: str, position: int) -> Tuple[int, int]:
    """Переводит позицию в тексте в пару (строка, колонка), обе с 1."""
    line = text.count("\n", 0, position) + 1
    line_start = text.rfind("\n", 0, position) + 1
    return line, position - line_start + 1


def parse_error(message: str, text: str, position: int) -> ParseError:
    line, column = locate(text, position)
    return ParseError(message, position, line, column)


class ExpressionLexer:
    """
    Лексер для разбиения выражения на токены.

    Поддерживаемые токены:
    - IDENTIFIER: имена переменных и функций
    - STRING: "строка" (без обработки escape-последовательностей)
    - NUMBER: 42, -7
    - FLOAT: 3.14, -0.5
    - LPAREN, RPAREN, COMMA: ( ) ,
    - EOF: конец выражения
    """

    # Спецификация токенов: (regex_pattern, token_type, ignore_flag)
    TOKEN_SPECS = [
        # Пробелы, табуляция и переводы строк (игнорируем)
        (r'\s+', 'WHITESPACE', True),

        # Строки в кавычках; незакрытая кавычка - отдельный случай для ошибки
        (r'"[^"]*"', 'STRING', False),
        (r'"', 'UNTERMINATED_STRING', False),

        # Числа (дробные проверяем раньше целых)
        (r'-?\d+\.\d+', 'FLOAT', False),
        (r'-?\d+', 'NUMBER', False),

        # Идентификаторы (Unicode буквы, цифры, подчёркивания; не с цифры)
        (r'[^\W\d]\w*', 'IDENTIFIER', False),

        # Символы
        (r'\(', 'LPAREN', False),
        (r'\)', 'RPAREN', False),
        (r',', 'COMMA', False),

        # Неизвестный символ (ошибка)
        (r'.', 'UNKNOWN', False),
    ]

    def __init__(self):
        # Компилируем регулярные выражения для лучшей производительности
        self._compiled_patterns = [
            (re.compile(pattern, re.DOTALL), token_type, ignore)
            for pattern, token_type, ignore in self.TOKEN_SPECS
        ]

    def tokenize(self, text: str, start: int = 0, end: Optional[int] = None) -> List[Token]:
        """
        Разбивает выражение на токены.

        Выражение задаётся срезом text[start:end], что позволяет сохранять
        абсолютные позиции токенов в исходном шаблоне.

        Args:
            text: Исходный текст шаблона
            start: Начало выражения
            end: Конец выражения (по умолчанию - конец текста)

        Returns:
            Список токенов, включая EOF в конце

        Raises:
            ParseError: При обнаружении неизвестного символа или незакрытой строки
        """
        if end is None:
            end = len(text)

        tokens: List[Token] = []
        position = start

        while position < end:
            for pattern, token_type, ignore in self._compiled_patterns:
                match = pattern.match(text, position, end)
                if not match:
                    continue

                value = match.group(0)
                if not ignore:
                    if token_type == 'UNKNOWN':
                        raise parse_error(f"Unexpected character '{value}'", text, position)
                    if token_type == 'UNTERMINATED_STRING':
                        raise parse_error("Unterminated string literal", text, position)
                    if token_type == 'STRING':
                        value = value[1:-1]

                    tokens.append(Token(type=token_type, value=value, position=position))

                position = match.end()
                break

        tokens.append(Token(type='EOF', value='', position=end))

        return tokens


__all__ = ["Token", "ExpressionLexer", "locate", "parse_error"]
