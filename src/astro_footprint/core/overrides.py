# src/astro_footprint/core/overrides.py
"""
Normalizador de overrides de deployment.

O cliente envia os recursos de cada componente como números puros
(`{"cpu": 500, "memory": 1024}`), enquanto o chart espera strings com
unidade. Este módulo reescreve o mapa `config` do deployment no shape
canônico consumido pelo Values Composer.

Política de normalização (v1):
    - folhas `resources.<seção>.{cpu,memory}` numéricas → "<n>m" / "<n>Mi"
    - folhas já sufixadas passam intactas (após validação)
    - `limits` presente → `requests = limits` (limits é autoritativo)
    - apenas `requests` presente → `limits = requests`
    - entradas sem `resources` (ou não-mapas, como `executor`) passam intactas

Invariantes:
    - A normalização é idempotente
    - O input nunca é mutado
    - Após normalizar, `requests == limits` em todo componente

Limites explícitos:
    - Não aplica defaults do catálogo (ver `core.resources.components`)
    - Não tenta adivinhar unidades desconhecidas
"""

from __future__ import annotations

from copy import deepcopy
from typing import Any, Dict, Iterable, Optional

from .exceptions import InvariantViolationError, MalformedOverrideError
from .resources.units import CPU, MEMORY, with_units


def _normalize_section(section: Any, path: str) -> Any:
    if section is None:
        return None
    if not isinstance(section, dict):
        raise MalformedOverrideError(
            message=f"Seção de recursos inválida em '{path}'",
            details={"path": path, "value": repr(section)},
            hint="Declare requests/limits como mapas com chaves cpu e memory.",
        )

    out = dict(section)
    for key in (CPU, MEMORY):
        if out.get(key) is not None:
            out[key] = with_units(out[key], key, path=f"{path}.{key}")
    return out


def normalize_component(name: str, component: Dict[str, Any]) -> Dict[str, Any]:
    """Normaliza o bloco `resources` de um único componente."""
    resources = component.get("resources")
    if not resources:
        return deepcopy(component)

    if not isinstance(resources, dict):
        raise MalformedOverrideError(
            message=f"Bloco de recursos inválido em '{name}.resources'",
            details={"path": f"{name}.resources", "value": repr(resources)},
            hint="Declare resources como um mapa com requests e/ou limits.",
        )

    normalized = {
        section: _normalize_section(values, f"{name}.resources.{section}")
        for section, values in resources.items()
    }

    # Limits é autoritativo; requests é o fallback.
    if normalized.get("limits") is not None:
        normalized["requests"] = deepcopy(normalized["limits"])
    elif normalized.get("requests") is not None:
        normalized["limits"] = deepcopy(normalized["requests"])

    out = deepcopy(component)
    out["resources"] = normalized
    return out


def assert_symmetric_resources(values: Dict[str, Any], names: Optional[Iterable[str]] = None) -> None:
    """Garante `resources.requests == resources.limits` nos componentes informados.

    Raises:
        InvariantViolationError: no primeiro componente assimétrico.
    """
    for name in names if names is not None else list(values):
        entry = values.get(name)
        if not isinstance(entry, dict) or not isinstance(entry.get("resources"), dict):
            continue
        resources = entry["resources"]
        if resources.get("requests") != resources.get("limits"):
            raise InvariantViolationError(
                message=f"requests != limits no componente '{name}'",
                details={
                    "component": name,
                    "requests": resources.get("requests"),
                    "limits": resources.get("limits"),
                },
            )


def deployment_overrides(config: Optional[Dict[str, Any]]) -> Dict[str, Any]:
    """
    Gera os overrides específicos do deployment no shape canônico.

    Args:
        config: mapa `config` do deployment (componente → settings).

    Returns:
        Dict[str, Any]: novo mapa normalizado.

    Raises:
        MalformedOverrideError: se alguma folha de recurso for inválida.
        InvariantViolationError: se a simetria requests/limits não se mantiver.
    """
    out: Dict[str, Any] = {}
    for name, value in (config or {}).items():
        if isinstance(value, dict):
            out[name] = normalize_component(name, value)
        else:
            out[name] = deepcopy(value)

    assert_symmetric_resources(out)
    return out
