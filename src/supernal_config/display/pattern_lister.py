# src/supernal_config/display/pattern_lister.py
"""
Listagem e categorização de patterns disponíveis.

Patterns são agrupados em `shipped` (distribuídos com o pacote) e
`user_defined` (qualquer outro search path, ex.: `.supernal/patterns`).
Patterns sombreados por um search path anterior continuam listados,
cada um com seu próprio caminho.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, List, Optional, Sequence, Union

from supernal_config.core.config.loader import get_default_search_paths, shipped_patterns_dir
from supernal_config.core.config.parser import parse_yaml_file
from supernal_config.core.config.resolver import PATTERN_SUFFIX

from .format_helper import to_yaml

PATTERN_TYPES = ("workflows", "phases", "documents")
NO_DESCRIPTION = "No description"


@dataclass(frozen=True)
class PatternInfo:
    name: str
    type: str
    path: str
    description: str
    usage_example: Optional[str] = None

    @property
    def key(self) -> str:
        return f"{self.type}/{self.name}"


@dataclass
class PatternList:
    shipped: List[PatternInfo] = field(default_factory=list)
    user_defined: List[PatternInfo] = field(default_factory=list)

    def all(self) -> List[PatternInfo]:
        """Patterns do usuário antes dos distribuídos (ordem de busca)."""
        return [*self.user_defined, *self.shipped]


def _usage_text(value: Any) -> Optional[str]:
    """`usageExample` escrito como mapeamento ou lista é renderizado como YAML."""
    if value is None or isinstance(value, str):
        return value
    return to_yaml(value)


class PatternLister:
    def __init__(
        self,
        search_paths: Optional[Sequence[Union[str, Path]]] = None,
        *,
        shipped_dir: Optional[Union[str, Path]] = None,
    ) -> None:
        self.search_paths = [str(p) for p in search_paths] if search_paths is not None else get_default_search_paths()
        self.shipped_dir = Path(shipped_dir) if shipped_dir is not None else shipped_patterns_dir()

    def _is_shipped(self, search_path: str) -> bool:
        return Path(search_path).resolve() == self.shipped_dir.resolve()

    def list_patterns(self, pattern_type: str = "all", *, usage: bool = False) -> PatternList:
        types = PATTERN_TYPES if pattern_type == "all" else (pattern_type,)
        result = PatternList()

        for ptype in types:
            for search_path in self.search_paths:
                directory = Path(search_path) / ptype
                if not directory.is_dir():
                    continue

                for file in sorted(directory.iterdir()):
                    if not file.is_file() or not file.name.endswith(PATTERN_SUFFIX):
                        continue
                    parsed = parse_yaml_file(file)
                    usage_example = _usage_text(parsed.get("usageExample")) if usage else None

                    info = PatternInfo(
                        name=file.name[: -len(PATTERN_SUFFIX)],
                        type=ptype,
                        path=str(file),
                        description=parsed.get("description") or NO_DESCRIPTION,
                        usage_example=usage_example,
                    )
                    if self._is_shipped(search_path):
                        result.shipped.append(info)
                    else:
                        result.user_defined.append(info)

        return result
