"""
Движок рендеринга AST шаблона.

Проходит по узлам и подставляет значения переменных и результаты функций.
Аргументы функций вычисляются раньше самой функции, слева направо;
первая же ошибка прерывает рендеринг.
"""

from __future__ import annotations

import logging
from typing import Callable, List, Mapping

from .errors import FunctionError, FunctionNotImplemented, VariableNotFound
from .nodes import Function, LiteralNode, TemplateAST, TemplateNode, Variable

logger = logging.getLogger(__name__)

# Функция шаблона: получает уже отрендеренные аргументы, возвращает строку.
# Об ошибках сообщает исключением FunctionError.
TemplateFunction = Callable[[List[str]], str]

VariableLookup = Mapping[str, str]
FunctionLookup = Mapping[str, TemplateFunction]


def render_nodes(
    buffer: List[str],
    node: TemplateNode,
    variables: VariableLookup,
    functions: FunctionLookup,
) -> None:
    """
    Рендерит узел и дописывает результат в буфер.

    Если узел не удалось отрендерить, в буфер ничего не добавляется,
    а ранее записанные части остаются на месте.

    Args:
        buffer: Список фрагментов результата
        node: Узел AST
        variables: Значения переменных по имени
        functions: Функции шаблона по имени

    Raises:
        VariableNotFound: Переменная не задана
        FunctionNotImplemented: Функция не зарегистрирована
        FunctionError: Ошибка, сообщённая функцией
    """
    buffer.append(render_node(node, variables, functions))


def render_node(
    node: TemplateNode,
    variables: VariableLookup,
    functions: FunctionLookup,
) -> str:
    """
    Рендерит отдельный узел в строку.

    Raises:
        VariableNotFound: Переменная не задана
        FunctionNotImplemented: Функция не зарегистрирована
        FunctionError: Ошибка, сообщённая функцией
    """
    if isinstance(node, LiteralNode):
        return node.text
    if isinstance(node, Variable):
        return _render_variable(node, variables)
    if isinstance(node, Function):
        return _render_function(node, variables, functions)
    raise TypeError(f"Unknown template node: {type(node).__name__}")


def render_ast(
    nodes: TemplateAST,
    variables: VariableLookup,
    functions: FunctionLookup,
) -> str:
    """Рендерит последовательность узлов через общий буфер."""
    buffer: List[str] = []
    for node in nodes:
        render_nodes(buffer, node, variables, functions)
    return "".join(buffer)


def _render_variable(node: Variable, variables: VariableLookup) -> str:
    try:
        value = variables[node.name]
    except KeyError:
        raise VariableNotFound(node.name) from None
    # Обычный dict может содержать не-строки; приводим так же, как VariableStore.set
    return value if isinstance(value, str) else str(value)


def _render_function(
    node: Function,
    variables: VariableLookup,
    functions: FunctionLookup,
) -> str:
    # Аргументы вычисляются до проверки существования функции
    evaluated_arguments = [render_node(arg, variables, functions) for arg in node.arguments]
    logger.debug(f"Evaluated args of '{node.name}': {evaluated_arguments!r}")

    try:
        function = functions[node.name]
    except KeyError:
        raise FunctionNotImplemented(node.name) from None

    result = function(evaluated_arguments)
    if not isinstance(result, str):
        raise FunctionError(
            f"expected str result, got {type(result).__name__}", function=node.name
        )

    logger.debug(f"Result of function '{node.name}': {result!r}")
    return result


__all__ = [
    "TemplateFunction",
    "VariableLookup",
    "FunctionLookup",
    "render_nodes",
    "render_node",
    "render_ast",
]
