"""
Потокобезопасные хранилища переменных и функций.

Оба хранилища реализуют Mapping, поэтому передаются в движок рендеринга
напрямую. Каждое отдельное чтение или запись атомарны; на время
рендеринга целиком блокировка не удерживается.
"""

from __future__ import annotations

import logging
import threading
from collections.abc import Mapping
from typing import Any, Callable, Dict, Iterator, Optional

from .renderer import TemplateFunction

logger = logging.getLogger(__name__)


class _LockedMapping(Mapping):
    """Словарь под RLock с операциями чтения из Mapping."""

    def __init__(self):
        self._lock = threading.RLock()
        self._data: Dict[str, Any] = {}

    def __getitem__(self, name: str) -> Any:
        with self._lock:
            return self._data[name]

    def __contains__(self, name: object) -> bool:
        with self._lock:
            return name in self._data

    def __len__(self) -> int:
        with self._lock:
            return len(self._data)

    def __iter__(self) -> Iterator[str]:
        # Итерируемся по снимку, чтобы параллельные записи не ломали обход
        return iter(self.snapshot())

    def snapshot(self) -> Dict[str, Any]:
        """Возвращает копию текущего содержимого."""
        with self._lock:
            return dict(self._data)

    def clear(self) -> None:
        with self._lock:
            self._data.clear()

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.snapshot()!r})"


class VariableStore(_LockedMapping):
    """
    Хранилище значений переменных.

    Значения всегда хранятся строками: set() приводит значение через str().
    """

    def __init__(self, initial: Optional[Mapping[str, Any]] = None):
        super().__init__()
        if initial:
            self.update(initial)

    def set(self, name: str, value: Any) -> None:
        with self._lock:
            self._data[name] = str(value)
        logger.debug(f"Variable '{name}' set")

    def update(self, values: Mapping[str, Any]) -> None:
        with self._lock:
            for name, value in values.items():
                self._data[name] = str(value)

    def remove(self, name: str) -> bool:
        """
        Удаляет переменную.

        Returns:
            True если переменная существовала
        """
        with self._lock:
            return self._data.pop(name, None) is not None


class FunctionRegistry(_LockedMapping):
    """
    Реестр функций шаблона.

    Обычно заполняется один раз при настройке, но регистрация
    во время параллельного рендеринга тоже допустима.
    """

    def __init__(self, initial: Optional[Mapping[str, TemplateFunction]] = None):
        super().__init__()
        if initial:
            for name, func in initial.items():
                self.register(name, func)

    def register(self, name: str, func: TemplateFunction) -> None:
        """
        Регистрирует функцию под указанным именем.

        Raises:
            TypeError: Если func не вызываемый объект
        """
        if not callable(func):
            raise TypeError(f"Template function '{name}' must be callable, got {type(func).__name__}")
        with self._lock:
            if name in self._data:
                logger.warning(f"Template function '{name}' overwrites existing function")
            self._data[name] = func
        logger.debug(f"Registered template function: {name}")

    def function(self, name: str) -> Callable[[TemplateFunction], TemplateFunction]:
        """Декоратор для регистрации функции: @registry.function("name")."""
        def decorator(func: TemplateFunction) -> TemplateFunction:
            self.register(name, func)
            return func
        return decorator

    def unregister(self, name: str) -> bool:
        """
        Удаляет функцию из реестра.

        Returns:
            True если функция была зарегистрирована
        """
        with self._lock:
            return self._data.pop(name, None) is not None


__all__ = ["VariableStore", "FunctionRegistry"]
