# src/astro_footprint/core/values/composer.py
"""
Values Composer — documento final de values do chart do Airflow.

Este módulo compõe, em ordem de precedência definida, todas as camadas
que formam o documento consumido pelo renderer de manifestos (Helm).

Precedência (da menor para a maior; camadas posteriores sobrescrevem
anteriores via deep-merge):

    1. base          → values base do catálogo (`deployments.helm`)
    2. values        → values passados diretamente pelo chamador
    3. ingress       → domínio base e classe de ingress
    4. resources     → requests/limits padrão por componente
    5. limitRange    → LimitRange de pods e containers
    6. constraints   → quotas, pgbouncer, allowPodLaunching
    7. registry      → conexão com o registry
    8. elasticsearch → conexão com o Elasticsearch (se configurado)
    9. overrides     → overrides normalizados do deployment

Decisões arquiteturais:
    - A precedência é uma lista ordenada de produtores dobrada da esquerda
      para a direita com `merge_values`, auditável e testável por camada;
      numa colisão de chave a camada posterior vence, qualquer que seja o tipo
    - Uma falha em qualquer camada interrompe a composição; nenhum
      documento parcial é retornado
    - O RenderContext é opcional e apenas observa a composição

Invariantes:
    - `resources.requests == resources.limits` em todo componente do catálogo
    - A mesma entrada sempre produz o mesmo documento

Limites explícitos:
    - Não renderiza manifestos nem chama o Helm
    - Não decide quando regenerar a configuração
"""

from __future__ import annotations

from typing import Any, Callable, Dict, List, Mapping, Optional, Tuple, Union

import yaml  # PyYAML

from ..catalog.schema import Catalog
from ..config.hashing import compute_config_hash
from ..config.merge import merge_values
from ..constraints import constraints, limit_range
from ..deployment import Deployment
from ..overrides import assert_symmetric_resources, deployment_overrides
from ..render_context import RenderContext
from ..resources.components import default_resources
from .layers import elasticsearch, ingress, registry


Layer = Tuple[str, Callable[[], Dict[str, Any]]]


def helm_value_layers(
    catalog: Catalog,
    deployment: Deployment,
    values: Optional[Dict[str, Any]] = None,
) -> List[Layer]:
    """Retorna as camadas `(nome, produtor)` na ordem de precedência."""
    return [
        ("base", lambda: dict(catalog.base_values)),
        ("values", lambda: dict(values or {})),
        ("ingress", lambda: ingress(catalog)),
        ("resources", lambda: default_resources(catalog)),
        ("limitRange", lambda: limit_range(catalog)),
        ("constraints", lambda: constraints(catalog, deployment)),
        ("registry", lambda: registry(catalog, deployment)),
        ("elasticsearch", lambda: elasticsearch(catalog, deployment)),
        ("overrides", lambda: deployment_overrides(deployment.config)),
    ]


def _warn_unknown_components(catalog: Catalog, deployment: Deployment, ctx: RenderContext) -> None:
    known = {c.name for c in catalog.components}
    for name, value in deployment.config.items():
        if isinstance(value, dict) and name not in known:
            ctx.add_warning(
                layer="overrides",
                message=f"override para componente fora do catálogo: {name}",
            )


def generate_helm_values(
    catalog: Catalog,
    deployment: Union[Deployment, Mapping[str, Any]],
    values: Optional[Dict[str, Any]] = None,
    ctx: Optional[RenderContext] = None,
) -> Dict[str, Any]:
    """
    Gera o documento completo de values do Helm para um deployment.

    Args:
        catalog: catálogo estático validado.
        deployment: registro do deployment (`Deployment` ou mapeamento bruto).
        values: values passados diretamente pelo chamador (precedência 2).
        ctx: contexto opcional para logs estruturados.

    Returns:
        Dict[str, Any]: documento final de values.

    Raises:
        ConfigNotFoundError: executor ou componente ausente do catálogo.
        MalformedOverrideError: override inválido no deployment.
        InvariantViolationError: simetria requests/limits violada ou
            quantidade derivada inválida.
    """
    if not isinstance(deployment, Deployment):
        deployment = Deployment.from_record(deployment)

    helm_values: Dict[str, Any] = {}
    for name, produce in helm_value_layers(catalog, deployment, values):
        layer = produce()
        helm_values = merge_values(helm_values, layer)
        if ctx is not None:
            ctx.log(layer=name, level="debug", message="layer merged", keys=sorted(layer))

    assert_symmetric_resources(helm_values, [c.name for c in catalog.components])

    if ctx is not None:
        _warn_unknown_components(catalog, deployment, ctx)
        ctx.log(
            layer="final",
            level="info",
            message="helm values composed",
            release_name=deployment.release_name,
            values_hash=compute_config_hash(helm_values),
        )
        if catalog.log_helm_values:
            rendered = yaml.safe_dump(helm_values, indent=4, default_flow_style=False, sort_keys=False)
            ctx.log(layer="final", level="info", message=f"Final helm values: \n{rendered}")

    return helm_values
