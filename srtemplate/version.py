from __future__ import annotations

from importlib import metadata


def tool_version() -> str:
    """
    Версия установленного пакета sr-template.
    Не зависит от остальных модулей (во избежание циклов).
    """
    try:
        return metadata.version("sr-template")
    except metadata.PackageNotFoundError:
        return "0.0.0"

__all__ = ["tool_version"]
