"""
Astro Footprint — Canonical Exceptions (v1)

Este módulo define as exceções tipadas levantadas pelo engine de
configuração de recursos.

Objetivo:
- Permitir que o core levante exceções semânticas tipadas
- Facilitar o mapeamento determinístico para FootprintErrorPayload
- Evitar ValueError/RuntimeError genéricos em guardrails críticos

Regras:
- Nenhuma exceção é recuperável por retry: o cálculo é puro e determinístico,
  então repetir com a mesma entrada produz a mesma falha.
- Exceções devem carregar apenas dados estruturados (serializáveis).
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, Optional


@dataclass(frozen=True)
class FootprintException(Exception):
    """Base class para exceções internas do Astro Footprint.

    Importante:
    - Sempre carregar dados estruturados em `details`
    - Não embedar stack trace em payloads de erro
    - Mensagem deve ser curta e humana
    """

    message: str
    details: Dict[str, Any] = field(default_factory=dict)
    hint: Optional[str] = None

    def __str__(self) -> str:  # pragma: no cover
        return self.message


# ---------------------------------------------------------------------------
# Catálogo estático
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class ConfigNotFoundError(FootprintException):
    """Executor ou componente referenciado não existe no catálogo estático."""


# ---------------------------------------------------------------------------
# Overrides de deployment
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class MalformedOverrideError(FootprintException):
    """Valor de recurso não é número nem string com unidade reconhecida."""


# ---------------------------------------------------------------------------
# Invariantes internas
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class InvariantViolationError(FootprintException):
    """Invariante do cálculo violada (requests != limits, quantidade negativa...).

    Indica defeito de lógica; não deve aparecer em produção.
    """
