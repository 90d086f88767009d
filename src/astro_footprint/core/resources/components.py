# src/astro_footprint/core/resources/components.py
"""
Mapper de recursos por componente.

Para cada componente declarado no catálogo estático (scheduler, workers,
webserver, flower, redis, pgbouncer, statsd) produz o bloco padrão de
requests/limits e os settings extras declarados.

Decisões arquiteturais:
    - `requests` e `limits` recebem a **mesma** quantidade convertida;
      não existe divergência padrão entre os dois nesta camada
    - Settings extras (`extra`) contribuem `{extra.name: extra[au_type]}`,
      o valor declarado para o tipo de AU solicitado
    - Toda conversão AU → recursos passa por `au_to_resources`

Limites explícitos:
    - Não lê overrides de deployment (ver `core.overrides`)
    - Não calcula quotas (ver `core.constraints`)
"""

from __future__ import annotations

from typing import Any, Dict

from ..catalog.schema import AstroUnit, Catalog, ComponentDefinition
from ..config.merge import merge_values
from ..constants import AU_TYPE_DEFAULT
from ..exceptions import ConfigNotFoundError
from .units import au_to_resources


def component_size(component: ComponentDefinition, au_type: str) -> float:
    """Tamanho em AU do componente para o tipo informado (default, limit, ...)."""
    if au_type not in component.au:
        raise ConfigNotFoundError(
            message=f"Componente '{component.name}' não declara au.{au_type}",
            details={"kind": "au_type", "component": component.name, "name": au_type, "available": sorted(component.au)},
            hint="Declare o tamanho em AU para este tipo no catálogo de componentes.",
        )
    return component.au[au_type]


def map_resources(
    au: AstroUnit,
    au_type: str,
    include_units: bool,
    component: ComponentDefinition,
) -> Dict[str, Any]:
    """
    Produz o bloco de values de um único componente.

    Returns:
        Dict[str, Any]: `{component.name: {"resources": {"requests", "limits"}, **extras}}`.
    """
    requests = au_to_resources(au, component_size(component, au_type), include_units)

    merged: Dict[str, Any] = {
        "resources": {
            "requests": requests,
            "limits": dict(requests),
        }
    }

    for extra in component.extra:
        if au_type in extra:
            merged = merge_values(merged, {extra["name"]: extra[au_type]})

    return {component.name: merged}


def default_resources(
    catalog: Catalog,
    au_type: str = AU_TYPE_DEFAULT,
    include_units: bool = True,
) -> Dict[str, Any]:
    """Agrega `map_resources` sobre todos os componentes do catálogo."""
    out: Dict[str, Any] = {}
    for component in catalog.components:
        out = merge_values(out, map_resources(catalog.astro_unit, au_type, include_units, component))
    return out
