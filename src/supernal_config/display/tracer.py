# src/supernal_config/display/tracer.py
"""
Rastreamento de valores ao longo da cadeia de merge.

Dado o caminho de um valor na configuração final e o histórico de merge
registrado pelo loader, identifica quais documentos definiram o valor e
qual deles prevaleceu.

Invariantes:
    - A cadeia segue a ordem de precedência do histórico
    - Exatamente uma entrada da cadeia é marcada como final
    - Sem contribuidores, a cadeia contém apenas a entrada `final`
"""

from __future__ import annotations

from dataclasses import asdict, dataclass, field
from typing import Any, Dict, List, Sequence

from supernal_config.core.config.loader import MergeHistoryEntry

from .format_helper import MISSING, extract_section, lookup


@dataclass
class ChainEntry:
    source: str
    value: Any
    is_final: bool = False


@dataclass
class ResolutionChain:
    path: str
    final_value: Any
    chain: List[ChainEntry] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


class ConfigTracer:
    def trace(
        self,
        path: str,
        final_config: Dict[str, Any],
        merge_history: Sequence[MergeHistoryEntry] = (),
    ) -> ResolutionChain:
        final_value = extract_section(final_config, path)
        chain: List[ChainEntry] = []

        for entry in merge_history:
            value = lookup(entry.config, path)
            if value is not MISSING:
                chain.append(ChainEntry(source=entry.source, value=value))

        if chain:
            chain[-1].is_final = True
        else:
            chain.append(ChainEntry(source="final", value=final_value, is_final=True))

        return ResolutionChain(path=path, final_value=final_value, chain=chain)
