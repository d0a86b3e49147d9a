"""
Высокоуровневый фасад шаблонизатора.

SrTemplate хранит разделители, переменные и функции и позволяет
отрендерить шаблон одним вызовом. Для многократного рендеринга
шаблон можно скомпилировать один раз через compile().
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Tuple

from .builtin import register_builtins
from .nodes import TemplateNode
from .parser import DEFAULT_CLOSE_DELIMITER, DEFAULT_OPEN_DELIMITER, TemplateParser
from .renderer import FunctionLookup, TemplateFunction, VariableLookup, render_ast
from .store import FunctionRegistry, VariableStore

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CompiledTemplate:
    """Разобранный шаблон, готовый к многократному рендерингу."""
    nodes: Tuple[TemplateNode, ...]

    def render(self, variables: VariableLookup, functions: FunctionLookup) -> str:
        return render_ast(self.nodes, variables, functions)


class SrTemplate:
    """
    Шаблонизатор с собственными переменными и функциями.

    Хранилища потокобезопасны: один экземпляр можно рендерить
    из нескольких потоков, параллельно обновляя переменные.
    """

    def __init__(
        self,
        open_delim: str = DEFAULT_OPEN_DELIMITER,
        close_delim: str = DEFAULT_CLOSE_DELIMITER,
        builtins: bool = True,
    ):
        """
        Args:
            open_delim: Открывающий разделитель выражений
            close_delim: Закрывающий разделитель выражений
            builtins: Регистрировать ли встроенные функции
        """
        self.variables = VariableStore()
        self.functions = FunctionRegistry()
        self.set_delimiter(open_delim, close_delim)

        if builtins:
            register_builtins(self.functions)

    @property
    def delimiters(self) -> tuple[str, str]:
        return self._open_delim, self._close_delim

    def set_delimiter(self, open_delim: str, close_delim: str) -> None:
        """
        Меняет разделители выражений.

        Raises:
            ParseError: Если один из разделителей пустой
        """
        TemplateParser(open_delim, close_delim)  # валидирует разделители
        self._open_delim = open_delim
        self._close_delim = close_delim
        logger.debug(f"Delimiters set to {open_delim!r} / {close_delim!r}")

    def add_variable(self, name: str, value: Any) -> None:
        self.variables.set(name, value)

    def remove_variable(self, name: str) -> bool:
        return self.variables.remove(name)

    def contains_variable(self, name: str) -> bool:
        return name in self.variables

    def add_function(self, name: str, func: TemplateFunction) -> None:
        self.functions.register(name, func)

    def remove_function(self, name: str) -> bool:
        return self.functions.unregister(name)

    def contains_function(self, name: str) -> bool:
        return name in self.functions

    def compile(self, text: str) -> CompiledTemplate:
        """
        Разбирает шаблон текущими разделителями.

        Каждый вызов использует свой парсер, поэтому compile() можно
        вызывать из нескольких потоков.

        Raises:
            ParseError: При синтаксической ошибке
        """
        return CompiledTemplate(nodes=tuple(TemplateParser(*self.delimiters).parse(text)))

    def render(self, text: str) -> str:
        """
        Рендерит шаблон с текущими переменными и функциями.

        Args:
            text: Исходный текст шаблона

        Returns:
            Отрендеренный текст

        Raises:
            ParseError: При синтаксической ошибке
            RenderError: При ошибке рендеринга
        """
        return self.render_compiled(self.compile(text))

    def render_compiled(self, compiled: CompiledTemplate) -> str:
        """Рендерит заранее разобранный шаблон с текущими переменными и функциями."""
        return compiled.render(self.variables, self.functions)


__all__ = ["SrTemplate", "CompiledTemplate"]
