"""
AST-узлы шаблона.

Определяет иерархию неизменяемых классов узлов, получаемых парсером.
Узлы владеют своим текстом и не ссылаются на исходный шаблон,
поэтому одно дерево можно рендерить многократно.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Tuple


@dataclass(frozen=True)
class TemplateNode:
    """Базовый класс для всех узлов AST шаблона."""
    pass


@dataclass(frozen=True)
class RawText(TemplateNode):
    """
    Обычный текстовый контент вне разделителей.

    Выводится в результат как есть, включая пробелы и переводы строк.
    """
    text: str


@dataclass(frozen=True)
class StringLiteral(TemplateNode):
    """Строка в кавычках как аргумент функции (кавычки уже сняты)."""
    text: str


@dataclass(frozen=True)
class NumberLiteral(TemplateNode):
    """Целое число как аргумент функции. Хранится текстом, без преобразования."""
    text: str


@dataclass(frozen=True)
class FloatLiteral(TemplateNode):
    """Число с десятичной точкой как аргумент функции. Хранится текстом."""
    text: str


@dataclass(frozen=True)
class Variable(TemplateNode):
    """Ссылка на переменную, разрешается при рендеринге по точному имени."""
    name: str


@dataclass(frozen=True)
class Function(TemplateNode):
    """
    Вызов функции: name(arg1, arg2, ...)

    Аргументы - упорядоченный кортеж узлов, каждый из которых может быть
    литералом, переменной или вложенным вызовом функции.
    """
    name: str
    arguments: Tuple[TemplateNode, ...] = field(default_factory=tuple)


# Узлы, которые выводятся без вычисления
LiteralNode = (RawText, StringLiteral, NumberLiteral, FloatLiteral)

# Алиас для списка узлов (AST)
TemplateAST = List[TemplateNode]


def dump_node(node: TemplateNode) -> Dict[str, Any]:
    """
    Структурное представление узла для JSON-вывода.

    Args:
        node: Узел AST

    Returns:
        Словарь с полем "type" и полями узла
    """
    if isinstance(node, Function):
        return {
            "type": "Function",
            "name": node.name,
            "arguments": [dump_node(arg) for arg in node.arguments],
        }
    if isinstance(node, Variable):
        return {"type": "Variable", "name": node.name}
    if isinstance(node, LiteralNode):
        return {"type": type(node).__name__, "text": node.text}
    raise TypeError(f"Unknown template node: {type(node).__name__}")


def dump_ast(nodes: TemplateAST) -> List[Dict[str, Any]]:
    return [dump_node(node) for node in nodes]


__all__ = [
    "TemplateNode",
    "RawText",
    "StringLiteral",
    "NumberLiteral",
    "FloatLiteral",
    "Variable",
    "Function",
    "LiteralNode",
    "TemplateAST",
    "dump_node",
    "dump_ast",
]
