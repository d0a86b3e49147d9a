"""
Встроенные функции шаблона.

Все функции следуют общему контракту: список отрендеренных аргументов
на входе, строка на выходе, InvalidArgument при неверном использовании.
"""

from __future__ import annotations

from typing import Dict

from . import numeric, text
from ..renderer import TemplateFunction
from ..store import FunctionRegistry

BUILTIN_FUNCTIONS: Dict[str, TemplateFunction] = {
    "toLowerCase": text.to_lower,
    "toUpperCase": text.to_upper,
    "trim": text.trim,
    "add": numeric.add,
    "sub": numeric.sub,
    "mul": numeric.mul,
    "div": numeric.div,
}


def register_builtins(registry: FunctionRegistry) -> None:
    """Регистрирует все встроенные функции в реестре."""
    for name, func in BUILTIN_FUNCTIONS.items():
        registry.register(name, func)


__all__ = ["BUILTIN_FUNCTIONS", "register_builtins"]
