# src/supernal_config/display/displayer.py
"""
Orquestrador dos comandos de exibição e depuração de configuração.

Responsabilidades do módulo:
    - `show`            → configuração resolvida completa ou uma seção
    - `trace`           → origem de um valor ao longo da cadeia de merge
    - `list_patterns`   → patterns disponíveis por tipo
    - `inspect_pattern` → conteúdo bruto ou composto de um pattern

Decisões arquiteturais:
    - Cada operação usa um `ConfigLoader` novo (sem cache compartilhado)
    - Erros de configuração propagam inalterados ao chamador (CLI)

Limites explícitos:
    - Não valida semântica de negócio
    - Não altera arquivos de configuração (exceto `output` de `show`)
"""

from __future__ import annotations

from pathlib import Path
from typing import List, Optional, Sequence, Union

from supernal_config.core.config.errors import PatternNotFoundError, SectionNotFoundError
from supernal_config.core.config.loader import ConfigLoader, default_config_path, get_default_search_paths
from supernal_config.core.config.parser import parse_yaml_file

from .format_helper import MISSING, lookup, render
from .pattern_lister import PatternInfo, PatternList, PatternLister
from .tracer import ConfigTracer, ResolutionChain

PathLike = Union[str, Path]


class ConfigDisplayer:
    """
    Fachada dos comandos `show`, `trace`, `patterns` e `inspect`.

    Args:
        search_paths: Search paths repassados ao loader e ao lister;
            quando omitido, usa os search paths padrão.
    """

    def __init__(self, *, search_paths: Optional[Sequence[PathLike]] = None) -> None:
        self.search_paths: List[str] = (
            [str(p) for p in search_paths] if search_paths is not None else get_default_search_paths()
        )

    def _loader(self) -> ConfigLoader:
        return ConfigLoader(search_paths=self.search_paths)

    def show(
        self,
        *,
        config_path: Optional[PathLike] = None,
        fmt: str = "yaml",
        section: Optional[str] = None,
        output: Optional[PathLike] = None,
    ) -> str:
        """
        Renderiza a configuração resolvida (ou uma seção dela).

        Quando `output` é informado, o conteúdo é escrito no arquivo e a
        função retorna uma mensagem de confirmação.

        Raises:
            SectionNotFoundError: Se `section` não existir.
        """
        path = str(config_path) if config_path is not None else default_config_path()
        config = self._loader().load(path)

        data = config
        if section:
            data = lookup(config, section)
            if data is MISSING:
                raise SectionNotFoundError(section)

        formatted = render(data, fmt)

        if output is not None:
            Path(output).write_text(formatted, encoding="utf-8")
            return f"Config written to {output}"

        return formatted

    def trace(self, path: str, *, config_path: Optional[PathLike] = None) -> ResolutionChain:
        config_file = str(config_path) if config_path is not None else default_config_path()
        loader = self._loader()
        config = loader.load(config_file)
        return ConfigTracer().trace(path, config, loader.merge_history)

    def list_patterns(self, pattern_type: str = "all", *, usage: bool = False) -> PatternList:
        return PatternLister(self.search_paths).list_patterns(pattern_type, usage=usage)

    def find_pattern(self, name: str) -> PatternInfo:
        """
        Localiza um pattern por `nome` ou `tipo/nome`, em ordem de busca.

        Raises:
            PatternNotFoundError: Se nenhum pattern corresponder.
        """
        candidates = self.list_patterns("all").all()
        for info in candidates:
            if name in (info.name, info.key):
                return info
        raise PatternNotFoundError(name, "patterns", list(dict.fromkeys(info.name for info in candidates)))

    def inspect_pattern(self, name: str, *, resolve: bool = False, fmt: str = "yaml") -> str:
        """
        Conteúdo de um pattern.

        Sem `resolve`, retorna o arquivo como está (convertido para JSON
        quando `fmt="json"`). Com `resolve`, retorna a composição final do
        pattern após resolver seus próprios `defaults`.
        """
        info = self.find_pattern(name)

        if resolve:
            loader = self._loader()
            pattern = parse_yaml_file(info.path)
            resolved = loader.resolver.resolve_with_sources(pattern, source=info.key)
            return render(loader.merger.merge(item.config for item in resolved), fmt)

        if fmt == "json":
            return render(parse_yaml_file(info.path), fmt)
        return Path(info.path).read_text(encoding="utf-8")
