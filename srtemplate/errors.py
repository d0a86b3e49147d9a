"""
Error taxonomy for sr-template.

All expected errors that should be displayed to the user
as clean messages (without stack traces) inherit from SrTemplateError.

Programming errors and bugs should NOT inherit from SrTemplateError;
they will propagate with full tracebacks.
"""

from __future__ import annotations

from typing import Optional


class SrTemplateError(Exception):
    """
    Base class for all user-facing errors in sr-template.

    These errors indicate problems that the user can fix:
    malformed templates, missing bindings, misused functions, bad configuration.
    """
    pass


class ParseError(SrTemplateError):
    """Ошибка синтаксического анализа шаблона."""

    def __init__(self, message: str, position: int, line: int = 0, column: int = 0):
        if line:
            super().__init__(f"{message} at {line}:{column}")
        else:
            super().__init__(f"{message} at position {position}")
        self.message = message
        self.position = position
        self.line = line
        self.column = column


class RenderError(SrTemplateError):
    """Base class for errors raised while rendering a parsed template."""
    pass


class VariableNotFound(RenderError):
    """A variable referenced by the template is not bound."""

    def __init__(self, name: str):
        super().__init__(f"Variable not found: '{name}'")
        self.name = name


class FunctionNotImplemented(RenderError):
    """A function referenced by the template is not registered."""

    def __init__(self, name: str):
        super().__init__(f"Function not implemented: '{name}'")
        self.name = name


class FunctionError(RenderError):
    """
    Error reported by a registered template function.

    Functions raise it (or a subclass) to signal misuse; the render engine
    propagates it to the caller unchanged.
    """

    def __init__(self, message: str, function: Optional[str] = None):
        super().__init__(f"{function}: {message}" if function else message)
        self.message = message
        self.function = function


class InvalidArgument(FunctionError):
    """A builtin function received an argument it cannot handle."""
    pass


class ConfigError(SrTemplateError, ValueError):
    """Ошибка загрузки конфигурации с указанием поля."""
    pass


__all__ = [
    "SrTemplateError",
    "ParseError",
    "RenderError",
    "VariableNotFound",
    "FunctionNotImplemented",
    "FunctionError",
    "InvalidArgument",
    "ConfigError",
]
