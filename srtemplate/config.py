"""
Конфигурация шаблонизатора в YAML.

Пример srtemplate.yaml:

    delimiters:
      open: "{{"
      close: "}}"
    builtins: true
    variables:
      name: World
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict

from ruamel.yaml import YAML
from ruamel.yaml.error import YAMLError

from .errors import ConfigError
from .parser import DEFAULT_CLOSE_DELIMITER, DEFAULT_OPEN_DELIMITER
from .template import SrTemplate

DEFAULT_CFG_FILE = "srtemplate.yaml"

_yaml = YAML(typ="safe")


@dataclass
class TemplateConfig:
    """Настройки шаблонизатора: разделители, встроенные функции, переменные."""
    open_delim: str = DEFAULT_OPEN_DELIMITER
    close_delim: str = DEFAULT_CLOSE_DELIMITER
    builtins: bool = True
    variables: Dict[str, str] = field(default_factory=dict)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "TemplateConfig":
        """
        Создание экземпляра из словаря (из YAML).

        Raises:
            ConfigError: Если поле имеет неверный тип
        """
        delimiters = data.get("delimiters") or {}
        if not isinstance(delimiters, dict):
            raise ConfigError(f"delimiters: expected mapping, got {type(delimiters).__name__}")

        open_delim = delimiters.get("open", DEFAULT_OPEN_DELIMITER)
        close_delim = delimiters.get("close", DEFAULT_CLOSE_DELIMITER)
        for key, value in (("open", open_delim), ("close", close_delim)):
            if not isinstance(value, str) or not value:
                raise ConfigError(f"delimiters.{key}: expected non-empty string, got {value!r}")

        builtins = data.get("builtins", True)
        if not isinstance(builtins, bool):
            raise ConfigError(f"builtins: expected bool, got {builtins!r}")

        variables = data.get("variables") or {}
        if not isinstance(variables, dict):
            raise ConfigError(f"variables: expected mapping, got {type(variables).__name__}")

        return cls(
            open_delim=open_delim,
            close_delim=close_delim,
            builtins=builtins,
            # Числа и булевы из YAML становятся строками, как и любые значения переменных
            variables={str(k): _scalar_to_str(f"variables.{k}", v) for k, v in variables.items()},
        )

    def to_dict(self) -> Dict[str, Any]:
        """Сериализация в словарь для YAML."""
        return {
            "delimiters": {"open": self.open_delim, "close": self.close_delim},
            "builtins": self.builtins,
            "variables": dict(self.variables),
        }

    def create_template(self) -> SrTemplate:
        """Создаёт шаблонизатор с этими настройками."""
        template = SrTemplate(self.open_delim, self.close_delim, builtins=self.builtins)
        template.variables.update(self.variables)
        return template


def _scalar_to_str(path: str, value: Any) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (str, int, float)):
        return str(value)
    raise ConfigError(f"{path}: expected scalar value, got {type(value).__name__}")


def load_config(path: Path) -> TemplateConfig:
    """
    Загрузить конфигурацию шаблонизатора.

    • Если файла нет, вернуть дефолты.
    • Документ должен быть YAML-словарём.

    Raises:
        ConfigError: При синтаксической ошибке YAML или неверной структуре
    """
    if not path.is_file():
        return TemplateConfig()

    try:
        raw = _yaml.load(path.read_text(encoding="utf-8")) or {}
    except YAMLError as e:
        raise ConfigError(f"Invalid YAML in {path}: {e}") from e

    if not isinstance(raw, dict):
        raise ConfigError(f"YAML must be a mapping: {path}")

    return TemplateConfig.from_dict(raw)


__all__ = ["TemplateConfig", "load_config", "DEFAULT_CFG_FILE"]
