# src/astro_footprint/core/constraints.py
"""
Calculadora de constraints do namespace de um deployment.

Este módulo agrega os recursos de todos os componentes exigidos pelo
executor do deployment e deriva, a partir desses totais:

    - quotas do namespace (ResourceQuota)
    - dimensionamento do pool do pgbouncer
    - a flag `allowPodLaunching`
    - o LimitRange de pods e containers (`limit_range`)

Política de cálculo (v1):
    1. total primário = Σ limits(componente) × réplicas, pods = Σ réplicas
    2. total de sidecars = Σ sidecar_overhead(componente)
    3. extra = AU × extraAu (propriedade `extra_au` do deployment)
    4. totalAu = (primário.cpu + extra.cpu) / AU.cpu
    5. quota = primário × 2 + sidecars × 2 + extra (pods: primário × 2 + extra)
    6. metadataPoolSize = ⌊AU.actualConns × totalAu⌋
       maxClientConn    = ⌊AU.airflowConns × totalAu⌋
    7. allowPodLaunching = True somente se extraAu > 0

O multiplicador 2× reserva espaço para rolling upgrades (duas gerações de
pods coexistindo) e precisa ser preservado exatamente para compatibilidade
com clusters existentes.

Decisões arquiteturais:
    - Somas intermediárias são inteiras (millicores e MiB); unidades são
      aplicadas apenas na fronteira
    - Em modo single-namespace (plataforma e Airflow no mesmo namespace)
      nenhuma quota é emitida: não existe fronteira de isolamento
    - `allowPodLaunching` é um gate de segurança e fica ausente por padrão

Invariantes:
    - requests.* == limits.* nas quotas
    - Nenhuma quantidade derivada é negativa ou não-finita

Limites explícitos:
    - Não conversa com Kubernetes
    - Não persiste nada
"""

from __future__ import annotations

import math
from numbers import Number
from typing import Any, Dict

from .catalog.schema import Catalog
from .constants import (
    AU_TYPE_DEFAULT,
    DEPLOYMENT_PROPERTY_EXTRA_AU,
    QUOTA_SAFETY_MULTIPLIER,
)
from .deployment import Deployment
from .exceptions import InvariantViolationError, MalformedOverrideError
from .overrides import deployment_overrides
from .resources.components import component_size
from .resources.units import CPU, MEMORY, au_to_resources, format_quantity, to_base_amount
from .topology.executors import executor_name, find_component, resolve_executor, sidecar_overhead


def _check_amount(label: str, value: Any) -> None:
    if not math.isfinite(value) or value < 0:
        raise InvariantViolationError(
            message=f"Quantidade derivada inválida: {label}={value!r}",
            details={"quantity": label, "value": repr(value)},
        )


def _replicas(deployment: Deployment, name: str) -> int:
    replicas = deployment.replicas(name)
    if isinstance(replicas, bool) or not isinstance(replicas, int):
        raise MalformedOverrideError(
            message=f"Réplicas inválidas em '{name}.replicas': {replicas!r}",
            details={"path": f"{name}.replicas", "value": repr(replicas)},
            hint="Declare replicas como um inteiro não negativo.",
        )
    return replicas


def extra_au(deployment: Deployment) -> float:
    """Capacidade extra comprada (em AU), lida da propriedade `extra_au`."""
    value = deployment.get_property(DEPLOYMENT_PROPERTY_EXTRA_AU)
    if value is None or value == "":
        return 0

    parsed: Any = value
    if isinstance(value, str):
        try:
            parsed = float(value)
        except ValueError:
            parsed = None
        else:
            # "10", "1e1" -> 10
            if parsed.is_integer():
                parsed = int(parsed)

    if isinstance(parsed, bool) or not isinstance(parsed, Number) or not math.isfinite(parsed):
        raise MalformedOverrideError(
            message=f"Propriedade '{DEPLOYMENT_PROPERTY_EXTRA_AU}' inválida: {value!r}",
            details={"path": f"properties.{DEPLOYMENT_PROPERTY_EXTRA_AU}", "value": repr(value)},
            hint="Declare a capacidade extra como um número de AU.",
        )
    _check_amount("extraAu", parsed)
    return parsed


def limit_range(catalog: Catalog) -> Dict[str, Any]:
    """
    Retorna o LimitRange de pods e containers do namespace.

    O container mínimo (e default) é 1 AU; o pod máximo é `maxPodAu` AU.
    Em modo single-namespace retorna `{}`.
    """
    if catalog.helm.single_namespace:
        return {}

    au = catalog.astro_unit
    max_ = au_to_resources(au, catalog.max_pod_au)
    min_ = au_to_resources(au, 1)

    pod_limit = {"type": "Pod", "max": max_}
    container_limit = {
        "type": "Container",
        "default": dict(min_),
        "defaultRequest": dict(min_),
        "min": dict(min_),
    }
    return {"limits": [pod_limit, container_limit]}


def constraints(catalog: Catalog, deployment: Deployment) -> Dict[str, Any]:
    """
    Retorna quotas, settings do pgbouncer e flags derivadas dos totais do deployment.

    Args:
        catalog: catálogo estático.
        deployment: registro do deployment.

    Returns:
        Dict[str, Any]: bloco de constraints, ou `{}` em modo single-namespace.

    Raises:
        ConfigNotFoundError: executor ou componente ausente do catálogo.
        MalformedOverrideError: override de recurso, réplicas ou extraAu inválidos.
        InvariantViolationError: quantidade derivada negativa ou não-finita.
    """
    # Executor desconhecido aborta a composição mesmo sem quotas.
    executor = resolve_executor(catalog.executors, executor_name(deployment))
    if catalog.helm.single_namespace:
        return {}

    au = catalog.astro_unit
    overrides = deployment_overrides(deployment.config)

    total = {CPU: 0, MEMORY: 0, "pods": 0}
    sidecars = {CPU: 0, MEMORY: 0}

    for name in executor.components:
        component = find_component(catalog.components, name)
        defaults = au_to_resources(au, component_size(component, AU_TYPE_DEFAULT), include_units=False)

        # limits do override (já normalizados), campo a campo sobre o default
        entry = overrides.get(name)
        declared = {}
        if isinstance(entry, dict):
            declared = (entry.get("resources") or {}).get("limits") or {}

        replicas = _replicas(deployment, name)
        for resource in (CPU, MEMORY):
            if declared.get(resource) is not None:
                amount = to_base_amount(declared[resource], resource, path=f"{name}.resources.limits.{resource}")
            else:
                amount = int(defaults[resource])
            _check_amount(f"{name}.{resource}", amount)
            total[resource] += amount * replicas
        total["pods"] += replicas

        overhead = sidecar_overhead(au, executor, name, replicas)
        sidecars[CPU] += overhead[CPU]
        sidecars[MEMORY] += overhead[MEMORY]

    extra_units = extra_au(deployment)
    extra = {
        CPU: int(au.cpu * extra_units),
        MEMORY: int(au.memory * extra_units),
        "pods": int(au.pods * extra_units),
    }

    total_au = (total[CPU] + extra[CPU]) / au.cpu

    quota_cpu = total[CPU] * QUOTA_SAFETY_MULTIPLIER + sidecars[CPU] * QUOTA_SAFETY_MULTIPLIER + extra[CPU]
    quota_memory = (
        total[MEMORY] * QUOTA_SAFETY_MULTIPLIER + sidecars[MEMORY] * QUOTA_SAFETY_MULTIPLIER + extra[MEMORY]
    )
    quota_pods = total["pods"] * QUOTA_SAFETY_MULTIPLIER + extra["pods"]

    for label, value in (("cpu", quota_cpu), ("memory", quota_memory), ("pods", quota_pods), ("totalAu", total_au)):
        _check_amount(label, value)

    cpu = format_quantity(quota_cpu, CPU)
    memory = format_quantity(quota_memory, MEMORY)

    res: Dict[str, Any] = {
        "quotas": {
            "pods": quota_pods,
            "requests.cpu": cpu,
            "requests.memory": memory,
            "limits.cpu": cpu,
            "limits.memory": memory,
        },
        "pgbouncer": {
            "metadataPoolSize": math.floor(au.actual_conns * total_au),
            "maxClientConn": math.floor(au.airflow_conns * total_au),
        },
    }

    # Gate de segurança: KubernetesPodOperator e afins.
    if extra_units > 0:
        res["allowPodLaunching"] = True

    return res
