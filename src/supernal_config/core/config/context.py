# src/supernal_config/core/config/context.py
"""
Registro estruturado de eventos da resolução de configuração.

Este módulo define o `ResolutionLog`, a estrutura utilizada por resolver
e loader para registrar eventos estruturados e warnings não fatais
durante o carregamento de uma configuração.

Princípios fundamentais:
    - Eventos são dicionários simples e serializáveis
    - Nenhum estado global: cada loader possui seu próprio log
    - Warnings nunca interrompem a resolução

Invariantes:
    - Todo evento possui `level`, `message` e `timestamp` (UTC, ISO-8601)
    - Eventos são mantidos na ordem de emissão

Limites explícitos:
    - Não persiste eventos automaticamente
    - Não substitui as exceções de diagnóstico
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Dict, List


@dataclass
class ResolutionLog:
    """
    Log de eventos de uma instância de loader/resolver.

    Decisões arquiteturais:
        - Compartilhado entre loader e resolver da mesma instância
        - Warnings são coletados separadamente e também emitidos como evento
    """

    events: List[Dict[str, Any]] = field(default_factory=list)
    warnings: List[str] = field(default_factory=list)

    def log(self, *, level: str, message: str, **extra: Any) -> None:
        event = {
            "level": level,
            "message": message,
            "timestamp": datetime.now(timezone.utc).isoformat(),
        }
        event.update(extra)
        self.events.append(event)

    def add_warning(self, message: str, **extra: Any) -> None:
        self.warnings.append(message)
        self.log(level="warning", message=message, **extra)

    def find(self, message: str) -> List[Dict[str, Any]]:
        """Eventos cuja mensagem é exatamente `message`."""
        return [e for e in self.events if e["message"] == message]

    def clear(self) -> None:
        self.events.clear()
        self.warnings.clear()
