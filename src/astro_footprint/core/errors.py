"""
Astro Footprint — Canonical Error Structures (v1)

Este módulo define o padrão canônico de erros expostos ao operador.
Erros do engine são parte do contrato operacional do sistema e devem ser:

- explícitos
- serializáveis
- acionáveis

A camada de transporte (fora do core) converte exceções tipadas em
payloads via `error_payload_from_exception` e os devolve ao operador, que
corrige a configuração declarada do deployment. Nenhum erro é reprocessado
automaticamente.
"""

from __future__ import annotations

from dataclasses import dataclass, asdict
from typing import Any, Dict, Optional

from .exceptions import (
    ConfigNotFoundError,
    FootprintException,
    InvariantViolationError,
    MalformedOverrideError,
)


# ---------------------------------------------------------------------------
# Payload canônico
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class FootprintErrorPayload:
    """
    Payload canônico de erro do Astro Footprint.

    Campos:
    - type: código estável do erro (não é texto livre)
    - message: mensagem curta, humana e objetiva
    - details: dados estruturados relevantes para diagnóstico
    - hint: ação sugerida ao operador (onde corrigir)
    """

    type: str
    message: str
    details: Dict[str, Any]
    hint: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        """Retorna representação serializável do erro."""
        return asdict(self)


# ---------------------------------------------------------------------------
# Catálogo canônico de tipos de erro (v1)
# ---------------------------------------------------------------------------

CONFIG_NOT_FOUND = "CONFIG_NOT_FOUND"
MALFORMED_OVERRIDE = "MALFORMED_OVERRIDE"
INVARIANT_VIOLATION = "INVARIANT_VIOLATION"


_TYPE_BY_EXCEPTION = {
    ConfigNotFoundError: CONFIG_NOT_FOUND,
    MalformedOverrideError: MALFORMED_OVERRIDE,
    InvariantViolationError: INVARIANT_VIOLATION,
}


def error_payload_from_exception(exc: FootprintException) -> FootprintErrorPayload:
    """Mapeia uma exceção tipada do core para o payload canônico.

    O mapeamento é determinístico: o tipo do payload depende apenas da
    classe da exceção, e `details`/`hint` são copiados sem transformação.
    """
    for exc_type, code in _TYPE_BY_EXCEPTION.items():
        if isinstance(exc, exc_type):
            return FootprintErrorPayload(
                type=code,
                message=exc.message,
                details=dict(exc.details),
                hint=exc.hint,
            )
    raise TypeError(f"Exceção sem tipo canônico: {type(exc).__name__}")
