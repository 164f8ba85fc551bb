# src/supernal_config/display/format_helper.py
"""Conversão de formato e extração de seções da configuração resolvida."""

from __future__ import annotations

import json
import re
from typing import Any

import yaml  # PyYAML

SUPPORTED_FORMATS = ("yaml", "json")

_INDEXED_KEY = re.compile(r"^(.+)\[(\d+)\]$")


class _Missing:
    def __repr__(self) -> str:  # pragma: no cover
        return "<missing>"


MISSING: Any = _Missing()


def lookup(config: Any, path: str) -> Any:
    """
    Resolve um caminho pontuado (`a.b[0].c`) em `config`.

    Retorna `MISSING` quando qualquer segmento não existe, distinguindo
    chaves ausentes de valores `None` explícitos.
    """
    current = config
    for segment in path.split("."):
        match = _INDEXED_KEY.match(segment)
        key = match.group(1) if match else segment

        if not isinstance(current, dict) or key not in current:
            return MISSING
        current = current[key]

        if match:
            index = int(match.group(2))
            if not isinstance(current, list) or index >= len(current):
                return MISSING
            current = current[index]

    return current


def extract_section(config: Any, path: str) -> Any:
    """Como `lookup`, mas retorna `None` para caminhos inexistentes."""
    value = lookup(config, path)
    return None if value is MISSING else value


def to_yaml(obj: Any, *, indent: int = 2, width: int = 80) -> str:
    return yaml.safe_dump(
        obj,
        indent=indent,
        width=width,
        sort_keys=False,
        default_flow_style=False,
        allow_unicode=True,
    )


def to_json(obj: Any, *, indent: int = 2) -> str:
    return json.dumps(obj, indent=indent, ensure_ascii=False, default=str)


def render(obj: Any, fmt: str) -> str:
    if fmt not in SUPPORTED_FORMATS:
        raise ValueError(f"Unsupported format: {fmt} (expected one of {', '.join(SUPPORTED_FORMATS)})")
    return to_json(obj) if fmt == "json" else to_yaml(obj)
