# src/supernal_config/core/config/__init__.py
"""
Camada de composição de configuração.

Este pacote contém as estruturas responsáveis por interpretar documentos
YAML, resolver referências a patterns declaradas em `defaults`, mesclar
a sequência resultante e entregar a configuração final aos consumidores.

Responsabilidades do pacote:
    - Parse YAML com diagnóstico de linha, coluna e contexto
    - Resolução recursiva de patterns com detecção de ciclos
    - Deep-merge determinístico com política explícita para listas
    - Cache por caminho e log estruturado de eventos

Invariantes:
    - A configuração final é um dicionário puro (dict)
    - A mesma entrada sempre produz a mesma configuração final
    - Erros de diagnóstico nunca são silenciados

Limites explícitos:
    - Não valida semântica de negócio
    - Não acessa fontes remotas de patterns
    - Não oferece linguagem de template ou expressões
"""

from .context import ResolutionLog
from .errors import (
    CircularDependencyError,
    ConfigError,
    ConfigFileNotFoundError,
    ErrorPayload,
    InvalidConfigRootTypeError,
    InvalidDefaultEntryError,
    PatternNotFoundError,
    SectionNotFoundError,
    YAMLSyntaxError,
)
from .hashing import compute_config_hash
from .loader import ConfigLoader, MergeHistoryEntry, get_default_search_paths
from .merge import REPLACE_SENTINEL, ConfigMerger, deep_merge
from .resolver import SELF_MARKER, ParsedDefault, PatternResolver, ResolvedDocument

__all__ = [
    "CircularDependencyError",
    "ConfigError",
    "ConfigFileNotFoundError",
    "ConfigLoader",
    "ConfigMerger",
    "ErrorPayload",
    "InvalidConfigRootTypeError",
    "InvalidDefaultEntryError",
    "MergeHistoryEntry",
    "ParsedDefault",
    "PatternNotFoundError",
    "PatternResolver",
    "REPLACE_SENTINEL",
    "ResolutionLog",
    "ResolvedDocument",
    "SELF_MARKER",
    "SectionNotFoundError",
    "YAMLSyntaxError",
    "compute_config_hash",
    "deep_merge",
    "get_default_search_paths",
]
