# src/supernal_config/core/config/resolver.py
"""
Resolução de patterns declarados em `defaults`.

Este módulo converte a declaração `defaults` de um documento em uma
sequência linear de documentos, ordenada por precedência, pronta para o
merge. Patterns são arquivos YAML localizados em
`{search_path}/{tipo}/{nome}.yaml` e podem declarar seus próprios
`defaults`, formando um grafo de dependências.

Gramática de `defaults` (v1):
    - `_self_`           → posição do próprio documento na sequência
    - `"nome"`           → pattern do tipo implícito `workflows`
    - `{singular: nome}` → pattern do tipo `singular + "s"` (pluralização ingênua)

Política de resolução:
    - Search paths são consultados em ordem; o primeiro arquivo existente vence
    - Patterns com `defaults` próprios são resolvidos recursivamente e a
      subsequência achatada é inserida na posição da referência
    - Sem `_self_`, o documento é anexado ao final (maior precedência)
    - Ciclos são detectados por uma pilha de caminho compartilhada por toda
      a chamada de topo, incluindo a recursão

Invariantes:
    - Patterns são memoizados por instância sob a chave `{tipo}/{nome}`
    - Um ciclo sempre reporta a cadeia completa que o formou
    - Repetições fora do caminho ativo (irmãos, diamantes) não são ciclos

Limites explícitos:
    - Não realiza merge
    - Não acessa fontes remotas
    - Não trata plurais irregulares
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence, Union

from .context import ResolutionLog
from .errors import CircularDependencyError, InvalidDefaultEntryError, PatternNotFoundError
from .parser import parse_yaml_file

SELF_MARKER = "_self_"
DEFAULT_PATTERN_TYPE = "workflows"
PATTERN_SUFFIX = ".yaml"
DOCUMENT_SOURCE = "<document>"

PathLike = Union[str, Path]


@dataclass(frozen=True)
class ParsedDefault:
    """Referência normalizada de uma entrada de `defaults`."""

    type: str
    name: str

    @property
    def key(self) -> str:
        return f"{self.type}/{self.name}"


@dataclass(frozen=True)
class ResolvedDocument:
    """Documento da sequência resolvida, com sua origem."""

    source: str
    config: Dict[str, Any]


class PatternResolver:
    """
    Resolve referências a patterns em uma sequência ordenada de documentos.

    Decisões arquiteturais:
        - Resolução sequencial e em profundidade (a pilha de caminho
          espelha exatamente a pilha de chamadas)
        - Todo estado (memo de patterns, search paths) pertence à instância
        - Erros de diagnóstico propagam sem captura

    Args:
        search_paths: Diretórios consultados em ordem.
        log: Log de eventos compartilhado; quando omitido a instância
            cria o seu próprio.
    """

    def __init__(self, search_paths: Sequence[PathLike], *, log: Optional[ResolutionLog] = None) -> None:
        self.search_paths: List[str] = [str(p) for p in search_paths]
        self.patterns: Dict[str, Dict[str, Any]] = {}
        self.log = log if log is not None else ResolutionLog()

    # -----------------------------
    # Lookup
    # -----------------------------
    def resolve_pattern(self, name: str, pattern_type: str = DEFAULT_PATTERN_TYPE) -> Dict[str, Any]:
        """
        Localiza, carrega e memoiza o pattern `{pattern_type}/{name}`.

        Raises:
            PatternNotFoundError: Se nenhum search path contiver o pattern.
            YAMLSyntaxError: Se o arquivo do pattern for malformado.
        """
        key = f"{pattern_type}/{name}"
        if key in self.patterns:
            self.log.log(level="debug", message="pattern.cached", key=key)
            return self.patterns[key]

        for search_path in self.search_paths:
            pattern_path = Path(search_path) / pattern_type / f"{name}{PATTERN_SUFFIX}"
            if pattern_path.is_file():
                pattern = self.load_pattern(pattern_path)
                self.patterns[key] = pattern
                self.log.log(level="info", message="pattern.loaded", key=key, path=str(pattern_path))
                return pattern

        raise PatternNotFoundError(name, pattern_type, self.list_patterns(pattern_type))

    def load_pattern(self, pattern_path: PathLike) -> Dict[str, Any]:
        return parse_yaml_file(pattern_path)

    def list_patterns(self, pattern_type: str) -> List[str]:
        """Nomes disponíveis para `pattern_type` em todos os search paths, sem duplicatas."""
        names: List[str] = []
        for search_path in self.search_paths:
            directory = Path(search_path) / pattern_type
            if not directory.is_dir():
                continue
            for entry in sorted(directory.iterdir()):
                if entry.is_file() and entry.name.endswith(PATTERN_SUFFIX):
                    names.append(entry.name[: -len(PATTERN_SUFFIX)])
        return list(dict.fromkeys(names))

    # -----------------------------
    # Resolution
    # -----------------------------
    def resolve(self, document: Dict[str, Any]) -> List[Dict[str, Any]]:
        """Sequência de documentos ordenada por precedência (último vence)."""
        return [item.config for item in self.resolve_with_sources(document)]

    def resolve_with_sources(
        self,
        document: Dict[str, Any],
        source: str = DOCUMENT_SOURCE,
    ) -> List[ResolvedDocument]:
        """
        Resolve `document` preservando a origem de cada item.

        Raises:
            CircularDependencyError: Se a cadeia de defaults revisitar um
                pattern do caminho ativo.
            PatternNotFoundError: Se alguma referência não existir.
            InvalidDefaultEntryError: Se alguma entrada for malformada.
        """
        return self._resolve(document, source, [])

    def _resolve(self, document: Dict[str, Any], source: str, path_stack: List[str]) -> List[ResolvedDocument]:
        defaults = document.get("defaults") or []
        if not isinstance(defaults, list):
            raise InvalidDefaultEntryError(defaults)

        resolved: List[ResolvedDocument] = []
        self_inserted = 0

        for entry in defaults:
            if entry == SELF_MARKER:
                self_inserted += 1
                if self_inserted == 2:
                    self.log.add_warning("defaults.self_repeated", source=source)
                resolved.append(ResolvedDocument(source=source, config=document))
                continue

            ref = self.parse_default(entry)
            if ref.key in path_stack:
                raise CircularDependencyError([*path_stack, ref.key])

            path_stack.append(ref.key)
            pattern = self.resolve_pattern(ref.name, ref.type)
            if pattern.get("defaults"):
                resolved.extend(self._resolve(pattern, ref.key, path_stack))
            else:
                resolved.append(ResolvedDocument(source=ref.key, config=pattern))
            path_stack.pop()

        if not self_inserted:
            resolved.append(ResolvedDocument(source=source, config=document))

        return resolved

    @staticmethod
    def parse_default(entry: Any) -> ParsedDefault:
        """
        Normaliza uma entrada de `defaults` (exceto `_self_`).

        Raises:
            InvalidDefaultEntryError: Se a entrada não for string nem
                mapeamento de chave única, ou se o nome contiver separadores
                de caminho.
        """
        if isinstance(entry, str):
            ref = ParsedDefault(type=DEFAULT_PATTERN_TYPE, name=entry)
        elif isinstance(entry, dict) and len(entry) == 1:
            ((singular, name),) = entry.items()
            if not isinstance(singular, str) or not isinstance(name, str):
                raise InvalidDefaultEntryError(entry)
            ref = ParsedDefault(type=f"{singular}s", name=name)
        else:
            raise InvalidDefaultEntryError(entry)

        if not ref.name or "/" in ref.name or "\\" in ref.name:
            raise InvalidDefaultEntryError(entry)
        return ref
