# src/supernal_config/core/config/similarity.py
"""
Similaridade textual para diagnósticos de configuração.

Utilizado exclusivamente para sugerir o nome de pattern mais próximo
quando uma referência não é encontrada ("Did you mean ...?").

Política (v1):
    - Distância de Levenshtein clássica (inserção, remoção, substituição)
    - Similaridade normalizada pelo comprimento da string mais longa
    - Comparação case-insensitive fica a cargo do chamador
"""

from __future__ import annotations

from typing import Iterable, Optional, Tuple

SUGGESTION_THRESHOLD = 0.5


def levenshtein(a: str, b: str) -> int:
    """Distância de edição entre `a` e `b`."""
    if len(a) < len(b):
        a, b = b, a

    previous = list(range(len(b) + 1))
    for i, ca in enumerate(a, start=1):
        current = [i]
        for j, cb in enumerate(b, start=1):
            if ca == cb:
                current.append(previous[j - 1])
            else:
                current.append(min(previous[j - 1], current[j - 1], previous[j]) + 1)
        previous = current

    return previous[-1]


def similarity(a: str, b: str) -> float:
    """
    Similaridade normalizada em [0, 1].

    Duas strings vazias são consideradas idênticas (1.0).
    """
    longer = max(len(a), len(b))
    if longer == 0:
        return 1.0
    return (longer - levenshtein(a, b)) / longer


def best_match(target: str, candidates: Iterable[str]) -> Tuple[Optional[str], float]:
    """
    Retorna o candidato mais similar a `target` e seu score.

    Empates preservam o primeiro candidato encontrado, garantindo
    resultado determinístico para a mesma ordem de entrada.
    """
    best: Optional[str] = None
    best_score = 0.0
    needle = target.lower()

    for candidate in candidates:
        score = similarity(needle, candidate.lower())
        if score > best_score:
            best = candidate
            best_score = score

    return best, best_score
