# src/supernal_config/core/config/merge.py
"""
Utilitário canônico de deep-merge de configuração.

Este módulo implementa a política oficial de merge utilizada para
combinar a sequência ordenada de documentos produzida pelo resolver em
uma única configuração final.

Política de merge (v1):
    - dict + dict → merge recursivo por chave
    - list + list → concatenação (`base + override`, duplicatas preservadas)
    - list iniciada por `"__replace__"` → substituição total (sentinela removida)
    - demais casos → o valor do override vence, inclusive com troca de tipo

Princípios fundamentais:
    - O merge é determinístico e puramente funcional
    - Nenhum input é mutado durante o processo
    - Conflitos de tipo não são erro: vence o último

Invariantes:
    - A mesma sequência sempre produz a mesma saída
    - Chaves não sobrescritas são preservadas
    - `None` e listas nunca são tratados como mapeamentos

Limites explícitos:
    - Não carrega arquivos de configuração
    - Não valida semântica de domínio
    - Não realiza coerção de tipos
"""

from __future__ import annotations

from copy import deepcopy
from typing import Any, Dict, Iterable, List

REPLACE_SENTINEL = "__replace__"


def is_plain_object(value: Any) -> bool:
    """Mapeamento elegível para merge recursivo (exclui `None` e listas)."""
    return isinstance(value, dict)


def merge_arrays(base: List[Any], override: List[Any]) -> List[Any]:
    """
    Aplica a política de merge de listas.

    Uma lista de override cujo primeiro elemento é `"__replace__"`
    substitui a base integralmente; caso contrário, os elementos são
    concatenados na ordem `base + override`.
    """
    if override and override[0] == REPLACE_SENTINEL:
        return deepcopy(override[1:])
    return deepcopy(base) + deepcopy(override)


def deep_merge(base: Dict[str, Any], override: Dict[str, Any]) -> Dict[str, Any]:
    """
    Realiza um deep-merge determinístico entre dois documentos.

    Decisões arquiteturais:
        - O merge é puramente funcional (inputs não são mutados)
        - Valores copiados para o resultado são cópias profundas
        - Troca de tipo entre base e override não é erro

    Args:
        base (Dict[str, Any]): Documento acumulado até o momento.
        override (Dict[str, Any]): Documento de maior precedência.

    Returns:
        Dict[str, Any]: Novo dicionário resultante do merge.
    """
    result: Dict[str, Any] = deepcopy(base)

    for key, override_value in override.items():
        base_value = result.get(key)

        if is_plain_object(base_value) and is_plain_object(override_value):
            result[key] = deep_merge(base_value, override_value)
        elif isinstance(base_value, list) and isinstance(override_value, list):
            result[key] = merge_arrays(base_value, override_value)
        else:
            result[key] = deepcopy(override_value)

    return result


class ConfigMerger:
    """
    Merge ordenado de uma sequência de documentos.

    A precedência é posicional: documentos posteriores sobrescrevem
    documentos anteriores.
    """

    def merge(self, documents: Iterable[Dict[str, Any]]) -> Dict[str, Any]:
        merged: Dict[str, Any] = {}
        for document in documents:
            merged = self.deep_merge(merged, document)
        return merged

    def deep_merge(self, target: Dict[str, Any], source: Dict[str, Any]) -> Dict[str, Any]:
        return deep_merge(target, source)

    def merge_arrays(self, target: List[Any], source: List[Any]) -> List[Any]:
        return merge_arrays(target, source)

    @staticmethod
    def is_plain_object(value: Any) -> bool:
        return is_plain_object(value)
