# src/astro_footprint/core/topology/executors.py
"""
Resolver de topologia por executor.

Dado o executor escolhido por um deployment, este módulo determina quais
componentes o executor exige e qual overhead de sidecars cada um desses
componentes carrega.

Regras de sidecar (em AU equivalentes de CPU e memória):
    - scheduler sob LocalExecutor → 2 AU (log server + log trimmer)
    - workers                     → 1 AU por réplica (log trimmer)
    - pgbouncer                   → 1 AU (exporter de métricas)
    - demais componentes          → 0

Decisões arquiteturais:
    - As regras são indexadas pelo papel do componente, não declaradas no
      catálogo de executores
    - O overhead só é aplicado a componentes presentes na topologia do
      executor resolvido
    - Nomes desconhecidos são erro fatal (`ConfigNotFoundError`)
"""

from __future__ import annotations

from typing import Dict, Sequence

from ..catalog.schema import AstroUnit, ComponentDefinition, ExecutorDefinition
from ..constants import (
    AIRFLOW_COMPONENT_PGBOUNCER,
    AIRFLOW_COMPONENT_SCHEDULER,
    AIRFLOW_COMPONENT_WORKERS,
    AIRFLOW_EXECUTOR_LOCAL,
    DEFAULT_EXECUTOR,
)
from ..deployment import Deployment
from ..exceptions import ConfigNotFoundError


def executor_name(deployment: Deployment) -> str:
    """Executor declarado em `config.executor`, ou o padrão (`CeleryExecutor`)."""
    return deployment.config.get("executor") or DEFAULT_EXECUTOR


def resolve_executor(executors: Sequence[ExecutorDefinition], name: str) -> ExecutorDefinition:
    """Retorna a definição do executor ou levanta `ConfigNotFoundError`."""
    for executor in executors:
        if executor.name == name:
            return executor
    raise ConfigNotFoundError(
        message=f"Executor não encontrado no catálogo: {name}",
        details={"kind": "executor", "name": name, "available": [e.name for e in executors]},
        hint="Use um executor declarado em deployments.executors ou declare-o no catálogo.",
    )


def find_component(components: Sequence[ComponentDefinition], name: str) -> ComponentDefinition:
    """Retorna a definição do componente ou levanta `ConfigNotFoundError`."""
    for component in components:
        if component.name == name:
            return component
    raise ConfigNotFoundError(
        message=f"Componente não encontrado no catálogo: {name}",
        details={"kind": "component", "name": name, "available": [c.name for c in components]},
        hint="Declare o componente em deployments.components ou remova-o da topologia do executor.",
    )


def sidecar_au(executor: ExecutorDefinition, component: str, replicas: int = 1) -> int:
    """AU equivalentes de sidecars para um componente da topologia do executor."""
    if component not in executor.components:
        return 0
    if component == AIRFLOW_COMPONENT_SCHEDULER and executor.name == AIRFLOW_EXECUTOR_LOCAL:
        return 2
    if component == AIRFLOW_COMPONENT_WORKERS:
        return replicas
    if component == AIRFLOW_COMPONENT_PGBOUNCER:
        return 1
    return 0


def sidecar_overhead(
    au: AstroUnit,
    executor: ExecutorDefinition,
    component_name: str,
    replicas: int = 1,
) -> Dict[str, int]:
    """Recursos (millicores, MiB) consumidos pelos sidecars do componente."""
    units = sidecar_au(executor, component_name, replicas)
    return {"cpu": au.cpu * units, "memory": au.memory * units}
