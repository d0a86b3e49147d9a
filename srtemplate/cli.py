from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import Dict

from .config import DEFAULT_CFG_FILE, TemplateConfig, load_config
from .errors import SrTemplateError
from .nodes import dump_ast
from .version import tool_version


def _build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(
        prog="srtemplate",
        description="sr-template: подстановка переменных и функций в текстовые шаблоны",
        add_help=True,
    )
    p.add_argument("-v", "--version", action="version", version=f"%(prog)s {tool_version()}")
    sub = p.add_subparsers(dest="cmd", required=True)

    # Общие аргументы для render/parse
    def add_common(sp: argparse.ArgumentParser) -> None:
        sp.add_argument(
            "template",
            help="путь к файлу шаблона или - для чтения из stdin",
        )
        sp.add_argument(
            "--config",
            metavar="PATH",
            help=f"YAML-конфигурация (по умолчанию ./{DEFAULT_CFG_FILE}, если существует)",
        )
        sp.add_argument("--open", dest="open_delim", metavar="S", help="открывающий разделитель")
        sp.add_argument("--close", dest="close_delim", metavar="S", help="закрывающий разделитель")
        sp.add_argument("--debug", action="store_true", help="отладочный вывод в stderr")

    sp_render = sub.add_parser("render", help="Отрендерить шаблон в stdout")
    add_common(sp_render)
    sp_render.add_argument(
        "--var",
        action="append",
        metavar="NAME=VALUE",
        help="значение переменной (можно указать несколько; перекрывает конфиг)",
    )

    sp_parse = sub.add_parser("parse", help="AST шаблона (JSON)")
    add_common(sp_parse)

    return p


def _setup_logging(debug: bool) -> None:
    if not debug:
        return
    handler = logging.StreamHandler()
    handler.setFormatter(logging.Formatter("[%(levelname)s] %(message)s"))
    pkg_logger = logging.getLogger("srtemplate")
    pkg_logger.setLevel(logging.DEBUG)
    if not pkg_logger.handlers:
        pkg_logger.addHandler(handler)


def _parse_vars(var_specs: list[str] | None) -> Dict[str, str]:
    """Парсит список переменных в формате 'name=value' в словарь."""
    result: Dict[str, str] = {}
    if not var_specs:
        return result

    for spec in var_specs:
        if "=" not in spec:
            raise ValueError(f"Invalid variable format '{spec}'. Expected 'name=value'")
        name, value = spec.split("=", 1)
        name = name.strip()
        if not name:
            raise ValueError(f"Invalid variable format '{spec}'. Variable name is empty")
        result[name] = value

    return result


def _read_template(template_arg: str) -> str:
    """
    Читает текст шаблона.

    Поддерживает два формата:
    - Путь к файлу
    - Из stdin: -
    """
    if template_arg == "-":
        return sys.stdin.read()

    file_path = Path(template_arg)
    if not file_path.is_file():
        raise ValueError(f"Template file not found: {file_path}")
    return file_path.read_text(encoding="utf-8")


def _load_cfg(ns: argparse.Namespace) -> TemplateConfig:
    if ns.config:
        path = Path(ns.config)
        if not path.is_file():
            raise ValueError(f"Config file not found: {path}")
    else:
        path = Path.cwd() / DEFAULT_CFG_FILE

    cfg = load_config(path)
    if ns.open_delim is not None:
        cfg.open_delim = ns.open_delim
    if ns.close_delim is not None:
        cfg.close_delim = ns.close_delim
    return cfg


def main(argv: list[str] | None = None) -> int:
    ns = _build_parser().parse_args(argv)
    _setup_logging(bool(getattr(ns, "debug", False)))

    try:
        cfg = _load_cfg(ns)
        text = _read_template(ns.template)
        template = cfg.create_template()

        if ns.cmd == "render":
            template.variables.update(_parse_vars(getattr(ns, "var", None)))
            sys.stdout.write(template.render(text))
            return 0

        if ns.cmd == "parse":
            compiled = template.compile(text)
            sys.stdout.write(json.dumps(dump_ast(compiled.nodes), ensure_ascii=False))
            return 0

    except SrTemplateError as e:
        sys.stderr.write(str(e).rstrip() + "\n")
        return 2
    except ValueError as e:
        sys.stderr.write(str(e).rstrip() + "\n")
        return 2

    return 2


if __name__ == "__main__":
    raise SystemExit(main())
