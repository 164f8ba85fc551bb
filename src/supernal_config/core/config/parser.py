# src/supernal_config/core/config/parser.py
"""
Parser YAML com diagnóstico de contexto.

Este módulo é a folha da camada de configuração: transforma texto YAML
em um documento (`dict`) e converte falhas do parser em
`YAMLSyntaxError` com arquivo, linha, coluna e janela de contexto.

Decisões arquiteturais:
    - Apenas YAML seguro (`yaml.safe_load`)
    - Arquivos vazios são interpretados como dicionários vazios
    - O conteúdo raiz deve ser um dicionário
    - Arquivos são lidos como UTF-8; bytes inválidos viram `YAMLSyntaxError`

Limites explícitos:
    - Não resolve `defaults`
    - Não realiza merge
"""

from __future__ import annotations

from pathlib import Path
from typing import Any, Dict, Union

import yaml  # PyYAML
from yaml.error import Mark, MarkedYAMLError

from .errors import ConfigFileNotFoundError, InvalidConfigRootTypeError, YAMLSyntaxError


def parse_yaml_text(content: str, file_path: str = "<string>") -> Dict[str, Any]:
    """
    Interpreta `content` como documento de configuração.

    Raises:
        YAMLSyntaxError: Se o YAML for malformado.
        InvalidConfigRootTypeError: Se a raiz não for um dicionário.
    """
    try:
        data = yaml.safe_load(content)
    except yaml.YAMLError as exc:
        raise YAMLSyntaxError(exc, file_path, content) from exc

    if data is None:
        return {}

    if not isinstance(data, dict):
        raise InvalidConfigRootTypeError(file_path, type(data).__name__)

    return data


def parse_yaml_file(file_path: Union[str, Path]) -> Dict[str, Any]:
    """
    Lê e interpreta um arquivo YAML do disco.

    Raises:
        ConfigFileNotFoundError: Se o arquivo não existir.
        YAMLSyntaxError: Se o YAML for malformado.
        InvalidConfigRootTypeError: Se a raiz não for um dicionário.
    """
    path = Path(file_path)
    if not path.is_file():
        raise ConfigFileNotFoundError(str(file_path))

    content = _decode(path.read_bytes(), str(file_path))
    return parse_yaml_text(content, str(file_path))


def _decode(raw: bytes, file_path: str) -> str:
    """
    Decodifica o arquivo como UTF-8.

    Bytes inválidos são reportados como `YAMLSyntaxError` na posição do
    primeiro byte inválido.
    """
    try:
        return raw.decode("utf-8")
    except UnicodeDecodeError as exc:
        line = raw.count(b"\n", 0, exc.start)
        column = exc.start - (raw.rfind(b"\n", 0, exc.start) + 1)
        error = MarkedYAMLError(
            problem=f"invalid utf-8 byte 0x{raw[exc.start]:02x}",
            problem_mark=Mark(file_path, exc.start, line, column, None, None),
        )
        raise YAMLSyntaxError(error, file_path, raw.decode("utf-8", errors="replace")) from exc
