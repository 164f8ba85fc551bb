# src/supernal_config/core/config/loader.py
"""
Loader canônico de configuração.

Este módulo é o ponto de entrada para consumidores da configuração
composta: orquestra parse → resolução de patterns → merge → cache.

Responsabilidades do módulo:
    - Interpretar o documento do usuário com diagnóstico de sintaxe
    - Delegar a resolução de `defaults` ao `PatternResolver`
    - Delegar o merge ao `ConfigMerger`
    - Manter o cache `caminho → configuração final`
    - Registrar eventos estruturados e o histórico de merge

Princípios fundamentais:
    - Falhas de diagnóstico propagam inalteradas ao chamador
    - Não existe modo de resultado parcial
    - Um resolver e um merger por instância de loader (sem estado global)

Invariantes:
    - O cache é indexado pela string exata do caminho
    - O cache só é limpo explicitamente (`clear_cache`)
    - O resultado é sempre um dicionário puro (`dict`)

Limites explícitos:
    - Não valida semântica de negócio
    - Não sincroniza acesso concorrente ao cache (última escrita vence)
    - Não persiste configuração, hash ou eventos
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence, Union

from .context import ResolutionLog
from .hashing import compute_config_hash
from .merge import ConfigMerger
from .parser import parse_yaml_file
from .resolver import PatternResolver

SUPERNAL_DIR_NAME = ".supernal"
PATTERNS_DIR_NAME = "patterns"
DEFAULT_PROJECT_FILE = "project.yaml"

PathLike = Union[str, Path]


def shipped_patterns_dir() -> Path:
    """Diretório de patterns distribuído com o pacote."""
    return Path(__file__).resolve().parent.parent / PATTERNS_DIR_NAME


def get_default_search_paths() -> List[str]:
    """Overrides do projeto (`.supernal/patterns`) antes dos patterns distribuídos."""
    return [
        os.path.join(os.getcwd(), SUPERNAL_DIR_NAME, PATTERNS_DIR_NAME),
        str(shipped_patterns_dir()),
    ]


def default_config_path() -> str:
    return os.path.join(os.getcwd(), SUPERNAL_DIR_NAME, DEFAULT_PROJECT_FILE)


@dataclass(frozen=True)
class MergeHistoryEntry:
    """Documento efetivamente mesclado, na ordem de precedência."""

    source: str
    config: Dict[str, Any]


class ConfigLoader:
    """
    Carrega e resolve configurações compostas a partir de patterns.

    Decisões arquiteturais:
        - Resolver e merger são criados sob demanda e reutilizados
        - O memo de patterns do resolver sobrevive a `clear_cache`
        - O log de eventos é compartilhado com o resolver

    Args:
        search_paths: Diretórios de patterns em ordem de precedência;
            quando omitido, usa `get_default_search_paths()`.
        cache: Dicionário de cache externo opcional.
    """

    def __init__(
        self,
        *,
        search_paths: Optional[Sequence[PathLike]] = None,
        cache: Optional[Dict[str, Dict[str, Any]]] = None,
    ) -> None:
        if search_paths is None:
            self.search_paths = get_default_search_paths()
        else:
            self.search_paths = [str(p) for p in search_paths]
        self.cache: Dict[str, Dict[str, Any]] = cache if cache is not None else {}
        self.log = ResolutionLog()
        self.merge_history: List[MergeHistoryEntry] = []
        self._resolver: Optional[PatternResolver] = None
        self._merger: Optional[ConfigMerger] = None

    @property
    def resolver(self) -> PatternResolver:
        if self._resolver is None:
            self._resolver = PatternResolver(self.search_paths, log=self.log)
        return self._resolver

    @property
    def merger(self) -> ConfigMerger:
        if self._merger is None:
            self._merger = ConfigMerger()
        return self._merger

    def parse_yaml(self, file_path: PathLike) -> Dict[str, Any]:
        """
        Interpreta um arquivo YAML com diagnóstico de contexto.

        Raises:
            ConfigFileNotFoundError: Se o arquivo não existir.
            YAMLSyntaxError: Se o YAML for malformado.
            InvalidConfigRootTypeError: Se a raiz não for um dicionário.
        """
        return parse_yaml_file(file_path)

    def load(self, config_path: PathLike) -> Dict[str, Any]:
        """
        Resolve `config_path` do zero e armazena o resultado no cache.

        Returns:
            Dict[str, Any]: Configuração final mesclada.
        """
        key = str(config_path)
        document = self.parse_yaml(config_path)
        resolved = self.resolver.resolve_with_sources(document, source=key)
        merged = self.merger.merge(item.config for item in resolved)

        self.merge_history = [MergeHistoryEntry(source=item.source, config=item.config) for item in resolved]
        self.cache[key] = merged

        self.log.log(
            level="info",
            message="config.loaded",
            config_path=key,
            documents=len(resolved),
            sources=[item.source for item in resolved],
            config_hash=compute_config_hash(merged),
        )
        return merged

    def get(self, config_path: PathLike) -> Dict[str, Any]:
        """Resultado em cache para `config_path`, ou `load` quando ausente."""
        key = str(config_path)
        if key in self.cache:
            self.log.log(level="debug", message="cache.hit", config_path=key)
            return self.cache[key]
        return self.load(config_path)

    def clear_cache(self) -> None:
        self.cache.clear()
        self.log.log(level="debug", message="cache.cleared")
