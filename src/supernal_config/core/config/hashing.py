# src/supernal_config/core/config/hashing.py
"""
Hashing canônico de configuração.

Este módulo implementa a geração de hash determinístico da configuração
resolvida. O hash representa a identidade estrutural da configuração e é
registrado no log de eventos do loader (`config.loaded`).

Política de hashing (v1):
    - Serialização JSON canônica (chaves ordenadas, separadores compactos)
    - Chaves não-string são convertidas para string antes da ordenação
    - Valores não serializáveis em JSON (ex.: datas YAML) usam `str()`
    - Codificação UTF-8, algoritmo SHA-256

Invariantes:
    - Configurações estruturalmente equivalentes produzem o mesmo hash
    - O valor gerado é sempre uma string hexadecimal de 64 caracteres
    - Nenhuma mutação ocorre sobre o input
"""

import hashlib
import json
from typing import Any, Dict


def _canonical(value: Any) -> Any:
    if isinstance(value, dict):
        return {str(k): _canonical(v) for k, v in value.items()}
    if isinstance(value, (list, tuple)):
        return [_canonical(v) for v in value]
    return value


def compute_config_hash(config: Dict[str, Any]) -> str:
    """
    Gera um hash SHA-256 determinístico da configuração resolvida.

    Args:
        config (Dict[str, Any]): Configuração final.

    Returns:
        str: Hash SHA-256 hexadecimal da configuração.

    Raises:
        TypeError: Se o objeto fornecido não for um dicionário.
    """
    if not isinstance(config, dict):
        raise TypeError(f"Config para hashing deve ser dict, recebido: {type(config).__name__}")

    canonical_json = json.dumps(
        _canonical(config),
        sort_keys=True,
        separators=(",", ":"),
        ensure_ascii=False,
        default=str,
    )

    return hashlib.sha256(canonical_json.encode("utf-8")).hexdigest()
