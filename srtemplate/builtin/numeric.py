"""
Арифметические функции шаблона.

Аргументы приходят строками; допустимы только целые и дробные числа
в десятичной записи (как NumberLiteral и FloatLiteral в шаблоне).
Вычисления ведутся в Decimal, чтобы результат не зависел от погрешностей float.
Сложение, вычитание и умножение точны при любой длине чисел; деление
округляется до точности текущего контекста decimal (28 знаков по умолчанию).
"""

from __future__ import annotations

import re
from decimal import Decimal, DivisionByZero, InvalidOperation, localcontext
from functools import reduce
from typing import Callable, List, Sequence

from ..errors import InvalidArgument

_NUMBER_RE = re.compile(r'-?\d+(?:\.\d+)?')


def _to_number(function: str, value: str) -> Decimal:
    text = value.strip()
    if not _NUMBER_RE.fullmatch(text):
        raise InvalidArgument(f"'{value}' is not a number", function=function)
    return Decimal(text)


def _format(value: Decimal) -> str:
    # Без экспоненты: 1E+1 → "10", 3.50 → "3.5"
    if value == value.to_integral_value():
        return format(value.to_integral_value(), "f")
    return format(value.normalize(), "f")


def _exact_precision(numbers: Sequence[Decimal]) -> int:
    # Верхняя граница числа цифр точной суммы, разности или произведения
    digits = 0
    for number in numbers:
        _, mantissa, exponent = number.as_tuple()
        digits += len(mantissa) - min(exponent, 0)
    return digits + len(numbers)


def _fold(
    function: str,
    op: Callable[[Decimal, Decimal], Decimal],
    args: List[str],
    exact: bool = True,
) -> str:
    if not args:
        raise InvalidArgument("expected at least one argument", function=function)
    numbers = [_to_number(function, arg) for arg in args]
    with localcontext() as ctx:
        if exact:
            ctx.prec = max(ctx.prec, _exact_precision(numbers))
        return _format(reduce(op, numbers))


def add(args: List[str]) -> str:
    """add(a, b, ...) → a + b + ..."""
    return _fold("add", lambda a, b: a + b, args)


def sub(args: List[str]) -> str:
    """sub(a, b, ...) → a - b - ..."""
    return _fold("sub", lambda a, b: a - b, args)


def mul(args: List[str]) -> str:
    """mul(a, b, ...) → a * b * ..."""
    return _fold("mul", lambda a, b: a * b, args)


def div(args: List[str]) -> str:
    """div(a, b, ...) → a / b / ... (с точностью контекста decimal)"""
    try:
        return _fold("div", lambda a, b: a / b, args, exact=False)
    except (DivisionByZero, InvalidOperation):
        raise InvalidArgument("division by zero", function="div") from None


__all__ = ["add", "sub", "mul", "div"]
