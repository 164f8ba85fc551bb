# src/supernal_config/core/config/errors.py
"""
Exceções canônicas da camada de configuração.

Este módulo define a hierarquia oficial de exceções utilizadas durante o
parse, a resolução de patterns e o merge de configuração.

Taxonomia (v1):
    - YAMLSyntaxError          → YAML malformado (sempre com linha/coluna e contexto)
    - PatternNotFoundError     → referência a pattern inexistente (com sugestão)
    - CircularDependencyError  → cadeia de `defaults` revisita um pattern ativo
    - InvalidDefaultEntryError → entrada de `defaults` malformada

Princípios fundamentais:
    - Exceções são tipadas e semânticas
    - A mensagem já embute todo o contexto de diagnóstico
    - Nenhuma exceção é capturada ou recuperada internamente

Invariantes:
    - Todas as exceções de configuração herdam de `ConfigError`
    - Toda exceção pode ser convertida em `ErrorPayload` serializável

Limites explícitos:
    - Não realiza fallback ou recovery
    - Não valida semântica de negócio dos valores
"""

from __future__ import annotations

from dataclasses import asdict, dataclass
from typing import Any, Dict, List, Optional, Sequence

from .similarity import SUGGESTION_THRESHOLD, best_match

CONTEXT_LINES = 3

# ---------------------------------------------------------------------------
# Catálogo canônico de tipos de erro (v1)
# ---------------------------------------------------------------------------

CONFIG_ERROR = "CONFIG_ERROR"
CONFIG_YAML_SYNTAX = "CONFIG_YAML_SYNTAX"
CONFIG_PATTERN_NOT_FOUND = "CONFIG_PATTERN_NOT_FOUND"
CONFIG_CIRCULAR_DEPENDENCY = "CONFIG_CIRCULAR_DEPENDENCY"
CONFIG_INVALID_DEFAULT = "CONFIG_INVALID_DEFAULT"
CONFIG_FILE_NOT_FOUND = "CONFIG_FILE_NOT_FOUND"
CONFIG_INVALID_ROOT = "CONFIG_INVALID_ROOT"
CONFIG_SECTION_NOT_FOUND = "CONFIG_SECTION_NOT_FOUND"


@dataclass(frozen=True)
class ErrorPayload:
    """
    Payload canônico de erro de configuração.

    Campos:
    - type: código estável do erro (não é texto livre)
    - message: mensagem pré-formatada, pronta para exibição
    - details: dados estruturados relevantes para diagnóstico
    - hint: ação sugerida ao operador
    """

    type: str
    message: str
    details: Dict[str, Any]
    hint: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        """Retorna representação serializável do erro."""
        return asdict(self)


class ConfigError(Exception):
    """
    Exceção base para erros relacionados à configuração.

    Todas as exceções levantadas durante parse, resolução e merge
    devem herdar desta classe, permitindo captura genérica pelos
    consumidores (`load`/`get`) sem re-derivar contexto.
    """

    error_type = CONFIG_ERROR
    hint: Optional[str] = None

    def _details(self) -> Dict[str, Any]:
        return {}

    def to_payload(self) -> ErrorPayload:
        return ErrorPayload(
            type=self.error_type,
            message=str(self),
            details=self._details(),
            hint=self.hint,
        )


class YAMLSyntaxError(ConfigError):
    """
    Exceção levantada quando um arquivo YAML não pode ser interpretado.

    A mensagem segue o formato `YAML syntax error in {path}:{line}:{col}`
    seguida de uma janela de contexto de ±3 linhas, limitada aos limites
    do arquivo, com a linha do erro marcada por `> `.

    Invariantes:
        - `line_number` e `column` são 1-based (0 quando desconhecidos)
        - A linha reportada sempre existe no arquivo
        - O erro original do parser é preservado em `__cause__`
    """

    error_type = CONFIG_YAML_SYNTAX
    hint = "Fix the YAML syntax at the reported line."

    def __init__(self, original_error: Exception, file_path: str, content: str) -> None:
        mark = self._error_mark(original_error, content)
        line_number = mark.line + 1 if mark is not None else 0
        column = mark.column + 1 if mark is not None else 0

        lines = content.splitlines()
        if lines and line_number > len(lines):
            line_number = len(lines)
            column = len(lines[-1]) + 1
        context = self.get_context(content, line_number)

        super().__init__(f"YAML syntax error in {file_path}:{line_number}:{column}\n{context}")

        self.file_path = file_path
        self.line_number = line_number
        self.column = column
        self.context = context
        self.problem = getattr(original_error, "problem", None) or str(original_error)

    @staticmethod
    def _error_mark(original_error: Exception, content: str) -> Any:
        """
        Posição mais útil do erro.

        Erros de fim de stream (aspas ou colchetes não fechados) apontam
        `problem_mark` para depois da última linha; nesse caso a posição de
        abertura em `context_mark` é preferida.
        """
        problem_mark = getattr(original_error, "problem_mark", None)
        context_mark = getattr(original_error, "context_mark", None)
        if problem_mark is None:
            return context_mark
        if context_mark is not None and problem_mark.line >= len(content.splitlines()):
            return context_mark
        return problem_mark

    @staticmethod
    def get_context(content: str, line_number: int, context_lines: int = CONTEXT_LINES) -> str:
        """Renderiza a janela de linhas ao redor de `line_number` (1-based)."""
        lines = content.splitlines()
        index = line_number - 1
        start = max(0, index - context_lines)
        end = min(len(lines), index + context_lines + 1)

        rendered = []
        for offset, line in enumerate(lines[start:end]):
            num = start + offset + 1
            marker = "> " if num == line_number else "  "
            rendered.append(f"{marker}{num:>4} | {line}")
        return "\n".join(rendered)

    def _details(self) -> Dict[str, Any]:
        return {
            "file_path": self.file_path,
            "line": self.line_number,
            "column": self.column,
            "problem": self.problem,
        }


class PatternNotFoundError(ConfigError):
    """
    Exceção levantada quando um pattern não existe em nenhum search path.

    A mensagem enumera todos os patterns disponíveis para o tipo
    solicitado e, quando a similaridade normalizada supera 0.5, inclui
    uma única sugestão `Did you mean "..."?`.
    """

    error_type = CONFIG_PATTERN_NOT_FOUND

    def __init__(self, pattern_name: str, pattern_type: str, available_patterns: Sequence[str]) -> None:
        available = list(available_patterns)
        match, score = best_match(pattern_name, available)
        suggestion = match if match is not None and score > SUGGESTION_THRESHOLD else None

        listing = "\n".join(f"  - {p}" for p in available) if available else "  (none)"
        message = f'Pattern "{pattern_name}" not found in {pattern_type}\n\n'
        message += f"Available {pattern_type}:\n{listing}"
        if suggestion is not None:
            message += f'\n\nDid you mean "{suggestion}"?'

        super().__init__(message)

        self.pattern_name = pattern_name
        self.pattern_type = pattern_type
        self.available_patterns = available
        self.suggestion = suggestion

    @property
    def hint(self) -> Optional[str]:  # type: ignore[override]
        if self.suggestion is None:
            return None
        return f'Use "{self.suggestion}" or create {self.pattern_type}/{self.pattern_name}.yaml'

    def _details(self) -> Dict[str, Any]:
        return {
            "pattern_name": self.pattern_name,
            "pattern_type": self.pattern_type,
            "available_patterns": self.available_patterns,
            "suggestion": self.suggestion,
        }


class CircularDependencyError(ConfigError):
    """
    Exceção levantada quando uma cadeia de `defaults` revisita um pattern
    que já está no caminho ativo de resolução.

    A cadeia completa é preservada (ex.: `workflows/a -> workflows/b -> workflows/a`),
    não apenas a indicação de que um ciclo existe.
    """

    error_type = CONFIG_CIRCULAR_DEPENDENCY
    hint = "Remove one of the references in the defaults chain."

    def __init__(self, dependency_chain: Sequence[str]) -> None:
        chain = list(dependency_chain)
        super().__init__(f"Circular dependency detected: {' -> '.join(chain)}")
        self.dependency_chain: List[str] = chain

    def _details(self) -> Dict[str, Any]:
        return {"dependency_chain": self.dependency_chain}


class InvalidDefaultEntryError(ConfigError, ValueError):
    """Entrada de `defaults` que não é string nem mapeamento de chave única."""

    error_type = CONFIG_INVALID_DEFAULT
    hint = "Use `_self_`, a bare name or `{type: name}`."

    def __init__(self, entry: Any) -> None:
        super().__init__(f"Invalid default: {entry!r}")
        self.entry = entry

    def _details(self) -> Dict[str, Any]:
        return {"entry": repr(self.entry)}


class ConfigFileNotFoundError(ConfigError, FileNotFoundError):
    """Arquivo de configuração inexistente no caminho solicitado."""

    error_type = CONFIG_FILE_NOT_FOUND

    def __init__(self, file_path: str) -> None:
        super().__init__(f"Config file not found: {file_path}")
        self.file_path = file_path

    def _details(self) -> Dict[str, Any]:
        return {"file_path": self.file_path}


class InvalidConfigRootTypeError(ConfigError):
    """
    Exceção levantada quando o conteúdo raiz de um documento não é um
    dicionário (`dict`).

    Arquivos vazios não disparam esta exceção: são interpretados como
    dicionários vazios.
    """

    error_type = CONFIG_INVALID_ROOT

    def __init__(self, file_path: str, root_type: str) -> None:
        super().__init__(f"Config root in {file_path} must be a mapping, got: {root_type}")
        self.file_path = file_path
        self.root_type = root_type

    def _details(self) -> Dict[str, Any]:
        return {"file_path": self.file_path, "root_type": self.root_type}


class SectionNotFoundError(ConfigError, LookupError):
    """Seção solicitada não existe na configuração resolvida."""

    error_type = CONFIG_SECTION_NOT_FOUND

    def __init__(self, section: str) -> None:
        super().__init__(f"Section not found: {section}")
        self.section = section

    def _details(self) -> Dict[str, Any]:
        return {"section": self.section}
