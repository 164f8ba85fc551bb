# src/supernal_config/__init__.py
"""
supernal-config — composição de configuração orientada a patterns.

Este pacote raiz define o namespace público do motor de composição:
um documento YAML declara, em `defaults`, os patterns reutilizáveis dos
quais herda; o motor resolve esses patterns recursivamente, determina uma
ordem de merge determinística e entrega um único dicionário final.

Arquitetura em alto nível:
    - core.config → parse, resolução de patterns, merge, cache e diagnósticos
    - display     → exibição, rastreamento de valores e listagem de patterns
    - cli         → comandos `show`, `trace`, `patterns` e `inspect`

Limites explícitos:
    - Não valida semântica de negócio dos valores
    - Não acessa fontes remotas de patterns
"""

from importlib.metadata import PackageNotFoundError, version

try:
    __version__ = version("supernal-config")
except PackageNotFoundError:
    __version__ = "0.0.0-dev"

from .core.config import ConfigError, ConfigLoader

__all__ = ["ConfigError", "ConfigLoader", "__version__"]
