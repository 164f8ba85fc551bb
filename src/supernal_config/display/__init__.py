# src/supernal_config/display/__init__.py
"""
Comandos de exibição e depuração da configuração composta.

Este pacote atua apenas como adapter de apresentação sobre o core:
nenhuma regra de resolução ou merge é definida aqui.
"""

from .displayer import ConfigDisplayer
from .format_helper import extract_section, to_json, to_yaml
from .pattern_lister import PatternInfo, PatternList, PatternLister
from .tracer import ChainEntry, ConfigTracer, ResolutionChain

__all__ = [
    "ChainEntry",
    "ConfigDisplayer",
    "ConfigTracer",
    "PatternInfo",
    "PatternList",
    "PatternLister",
    "ResolutionChain",
    "extract_section",
    "to_json",
    "to_yaml",
]
