# src/supernal_config/core/__init__.py
"""
Core do supernal-config.

Componentes principais:
    - config   → parser, resolver, merger, loader e diagnósticos
    - patterns → patterns distribuídos com o pacote (workflows, phases, documents)

Princípios fundamentais:
    - Nenhuma decisão silenciosa: todo comportamento é explícito e testado
    - Estado pertence a instâncias, nunca ao módulo
"""
