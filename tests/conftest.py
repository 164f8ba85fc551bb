# tests/conftest.py
"""
Fixtures compartilhados para testes do supernal-config.

Este módulo define fixtures reutilizáveis que fornecem:
- árvores de patterns em disco (search paths de usuário e distribuídos)
- escrita controlada de documentos de configuração
- um conjunto de patterns semelhante ao uso real do projeto

Decisões arquiteturais:
    - Todo I/O ocorre sob `tmp_path` (isolado por teste)
    - Conteúdo YAML é fornecido como texto e normalizado com `dedent`
    - Imports do core são realizados de forma lazy

Invariantes:
    - Nenhuma fixture depende do diretório de trabalho atual
    - Nenhuma fixture depende dos patterns distribuídos com o pacote

Limites explícitos:
    - Não substituir testes de integração da CLI
    - Não conter lógica condicional complexa
"""

import textwrap
from pathlib import Path

import pytest


# =====================================================
# Search paths
# =====================================================

@pytest.fixture
def user_patterns(tmp_path: Path) -> Path:
    """Search path de maior precedência (equivalente a `.supernal/patterns`)."""
    root = tmp_path / "project" / ".supernal" / "patterns"
    root.mkdir(parents=True)
    return root


@pytest.fixture
def shipped_patterns(tmp_path: Path) -> Path:
    """Search path de menor precedência (patterns distribuídos)."""
    root = tmp_path / "install" / "patterns"
    root.mkdir(parents=True)
    return root


@pytest.fixture
def search_paths(user_patterns: Path, shipped_patterns: Path):
    return [user_patterns, shipped_patterns]


# =====================================================
# Escrita de arquivos
# =====================================================

@pytest.fixture
def write_pattern():
    """
    Fixture factory que escreve `{root}/{tipo}/{nome}.yaml`.

    Returns:
        Callable[[Path, str, str, str], Path]: Função que cria o arquivo
        do pattern e retorna seu caminho.
    """

    def _write(root: Path, pattern_type: str, name: str, body: str) -> Path:
        directory = root / pattern_type
        directory.mkdir(parents=True, exist_ok=True)
        path = directory / f"{name}.yaml"
        path.write_text(textwrap.dedent(body), encoding="utf-8")
        return path

    return _write


@pytest.fixture
def write_config(tmp_path: Path):
    """Fixture factory que escreve um documento de configuração do usuário."""

    def _write(body: str, name: str = "project.yaml") -> Path:
        path = tmp_path / "project" / ".supernal" / name
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(textwrap.dedent(body), encoding="utf-8")
        return path

    return _write


# =====================================================
# Patterns semelhantes ao uso real
# =====================================================

@pytest.fixture
def project_like_patterns(user_patterns: Path, shipped_patterns: Path, write_pattern):
    """
    Fixture que fornece uma árvore de patterns semelhante ao uso real.

    Estrutura:
        shipped/workflows/test-workflow.yaml → workflow simples, sem defaults
        shipped/workflows/agile.yaml         → workflow com defaults de phases
        shipped/phases/planning.yaml
        shipped/phases/review.yaml
        user/phases/review.yaml              → override do usuário (sombreia o shipped)

    Decisões arquiteturais:
        - O override do usuário existe apenas para `phases/review`
        - `agile` usa `_self_` explícito no final

    Returns:
        list[Path]: Search paths na ordem de precedência.
    """
    write_pattern(
        shipped_patterns,
        "workflows",
        "test-workflow",
        """\
        workflow:
          name: test-workflow
          phases: [implementation]
        tags: [shipped]
        """,
    )
    write_pattern(
        shipped_patterns,
        "workflows",
        "agile",
        """\
        description: Agile workflow
        defaults:
          - phase: planning
          - phase: review
          - _self_
        workflow:
          name: agile
          wip_limit: 3
        """,
    )
    write_pattern(
        shipped_patterns,
        "phases",
        "planning",
        """\
        phase_settings:
          planning:
            gates: [requirements-approved]
        """,
    )
    write_pattern(
        shipped_patterns,
        "phases",
        "review",
        """\
        phase_settings:
          review:
            min_reviewers: 1
        """,
    )
    write_pattern(
        user_patterns,
        "phases",
        "review",
        """\
        phase_settings:
          review:
            min_reviewers: 2
        """,
    )
    return [user_patterns, shipped_patterns]
