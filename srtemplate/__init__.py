"""
sr-template: встраиваемый шаблонизатор с переменными и вложенными вызовами функций.

Шаблон разбирается в неизменяемое AST один раз и рендерится многократно
с актуальными значениями переменных и набором функций.
"""

from __future__ import annotations

from .errors import (
    SrTemplateError,
    ParseError,
    RenderError,
    VariableNotFound,
    FunctionNotImplemented,
    FunctionError,
    InvalidArgument,
    ConfigError,
)
from .nodes import (
    TemplateNode,
    RawText,
    StringLiteral,
    NumberLiteral,
    FloatLiteral,
    Variable,
    Function,
    TemplateAST,
)
from .parser import TemplateParser, parse
from .renderer import TemplateFunction, render_node, render_nodes, render_ast
from .store import VariableStore, FunctionRegistry
from .template import SrTemplate, CompiledTemplate

__all__ = [
    "SrTemplateError",
    "ParseError",
    "RenderError",
    "VariableNotFound",
    "FunctionNotImplemented",
    "FunctionError",
    "InvalidArgument",
    "ConfigError",
    "TemplateNode",
    "RawText",
    "StringLiteral",
    "NumberLiteral",
    "FloatLiteral",
    "Variable",
    "Function",
    "TemplateAST",
    "TemplateParser",
    "parse",
    "TemplateFunction",
    "render_node",
    "render_nodes",
    "render_ast",
    "VariableStore",
    "FunctionRegistry",
    "SrTemplate",
    "CompiledTemplate",
]
