# src/astro_footprint/core/resources/units.py
"""
Conversão de Astro Units e quantidades de recurso.

Este módulo é a **única fonte de verdade** para conversão AU → recursos e
para a leitura de quantidades vindas de overrides de deployment. Todos os
demais componentes (mapper de componentes, calculadora de constraints,
normalizador de overrides) passam por aqui.

Representações de quantidade:
    - número puro (aritmética relativa a AU): 1000, 0.5
    - string com unidade (formato do manifesto): "1000m", "4096Mi", "2Gi"

A dualidade é modelada explicitamente por `Quantity`: `unit=None` indica
um número puro, e a normalização para a unidade canônica é um passo
explícito (`with_units`).

Unidades canônicas:
    - cpu    → millicores ("m")
    - memory → mebibytes ("Mi"); "Gi" é aceito na leitura

Invariantes:
    - As duas representações nunca são misturadas numa mesma derivação
    - Sufixos são aplicados apenas na fronteira (saída para o chart)
"""

from __future__ import annotations

import math
import re
from dataclasses import dataclass
from numbers import Number
from typing import Any, Dict, Optional, Union

from ..catalog.schema import AstroUnit
from ..exceptions import MalformedOverrideError


CPU = "cpu"
MEMORY = "memory"

# Fator de cada unidade aceita para a unidade base do recurso.
_UNIT_FACTORS: Dict[str, Dict[str, int]] = {
    CPU: {"m": 1},
    MEMORY: {"Mi": 1, "Gi": 1024},
}

CANONICAL_UNITS: Dict[str, str] = {CPU: "m", MEMORY: "Mi"}

_QUANTITY_RE = re.compile(r"^\s*(-?\d+(?:\.\d+)?)\s*([A-Za-z]+)?\s*$")

Amount = Union[int, float]


def _fmt(amount: Amount) -> str:
    # 500.0 -> "500"; frações reais são preservadas
    if isinstance(amount, float) and amount.is_integer():
        return str(int(amount))
    return str(amount)


@dataclass(frozen=True)
class Quantity:
    """Quantidade de recurso com unidade opcional (None = número puro)."""

    resource: str
    amount: Amount
    unit: Optional[str] = None

    @property
    def is_bare(self) -> bool:
        return self.unit is None

    def to_base(self) -> Amount:
        """Retorna a quantidade em millicores (cpu) ou MiB (memory)."""
        if self.unit is None:
            return self.amount
        return self.amount * _UNIT_FACTORS[self.resource][self.unit]

    def with_canonical_unit(self) -> "Quantity":
        if self.unit is not None:
            return self
        return Quantity(self.resource, self.amount, CANONICAL_UNITS[self.resource])

    def __str__(self) -> str:
        return f"{_fmt(self.amount)}{self.unit or ''}"


def _malformed(value: Any, resource: str, path: Optional[str]) -> MalformedOverrideError:
    where = path or resource
    return MalformedOverrideError(
        message=f"Valor de recurso inválido em '{where}': {value!r}",
        details={"path": where, "resource": resource, "value": repr(value)},
        hint="Use um número ou uma string com unidade reconhecida (ex.: '500m', '1024Mi').",
    )


def parse_quantity(value: Any, resource: str, *, path: Optional[str] = None) -> Quantity:
    """Lê um valor de recurso (número ou string com unidade) como `Quantity`.

    Raises:
        MalformedOverrideError: se o valor não for número finito nem string
            numérica com unidade aceita para o recurso.
    """
    if resource not in _UNIT_FACTORS:
        raise ValueError(f"Recurso desconhecido: {resource}")

    if isinstance(value, bool):
        raise _malformed(value, resource, path)

    if isinstance(value, Number):
        if not math.isfinite(value):
            raise _malformed(value, resource, path)
        return Quantity(resource, value)

    if isinstance(value, str):
        match = _QUANTITY_RE.match(value)
        if match is None:
            raise _malformed(value, resource, path)
        raw, unit = match.group(1), match.group(2)
        if unit is not None and unit not in _UNIT_FACTORS[resource]:
            raise _malformed(value, resource, path)
        amount: Amount = float(raw) if "." in raw else int(raw)
        return Quantity(resource, amount, unit)

    raise _malformed(value, resource, path)


def with_units(value: Any, resource: str, *, path: Optional[str] = None) -> Any:
    """Converte números puros para a string canônica; strings com unidade passam intactas."""
    quantity = parse_quantity(value, resource, path=path)
    if quantity.is_bare:
        return str(quantity.with_canonical_unit())
    return value


def to_base_amount(value: Any, resource: str, *, path: Optional[str] = None) -> int:
    """Quantidade inteira na unidade base (millicores ou MiB), frações truncadas."""
    return int(parse_quantity(value, resource, path=path).to_base())


def format_quantity(amount: Amount, resource: str) -> str:
    """Aplica a unidade canônica a uma quantidade na unidade base."""
    return f"{_fmt(amount)}{CANONICAL_UNITS[resource]}"


def au_to_resources(au: AstroUnit, size: Amount, include_units: bool = True) -> Dict[str, Any]:
    """
    Converte um tamanho em AU para o objeto de recursos equivalente.

    `size` pode ser fracionário ou zero. Tamanhos negativos são erro do
    chamador e não são saneados aqui.

    Args:
        au: Definição da Astro Unit.
        size: Quantidade de Astro Units.
        include_units: Se True, retorna strings "<n>m" / "<n>Mi"; caso
            contrário, números puros para aritmética posterior.

    Returns:
        Dict[str, Any]: `{"cpu": ..., "memory": ...}`.
    """
    cpu = au.cpu * size
    memory = au.memory * size
    if include_units:
        return {CPU: format_quantity(cpu, CPU), MEMORY: format_quantity(memory, MEMORY)}
    return {CPU: cpu, MEMORY: memory}
