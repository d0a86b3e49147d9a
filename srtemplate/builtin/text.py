"""
Текстовые функции шаблона.

Каждая функция преобразует все аргументы по отдельности
и соединяет результаты одним пробелом.
"""

from __future__ import annotations

from typing import Callable, List


def _each(transform: Callable[[str], str], args: List[str]) -> str:
    return " ".join(transform(arg) for arg in args)


def to_lower(args: List[str]) -> str:
    """toLowerCase(s, ...)"""
    return _each(str.lower, args)


def to_upper(args: List[str]) -> str:
    """toUpperCase(s, ...)"""
    return _each(str.upper, args)


def trim(args: List[str]) -> str:
    """trim(s, ...): убирает пробельные символы по краям каждого аргумента."""
    return _each(str.strip, args)


__all__ = ["to_lower", "to_upper", "trim"]
