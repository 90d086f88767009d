"""
Schema canônico — catálogo estático de deployments v1.

Materializa o mapeamento carregado do arquivo de configuração da plataforma
em estruturas imutáveis que são passadas explicitamente para todas as
funções do core. Nenhuma função do core consulta configuração global.

Layout esperado:

    helm:
      baseDomain: astro.example.com
      releaseName: astronomer
      singleNamespace: false
    deployments:
      helm: {...}            # values base do chart
      logHelmValues: false
      maxPodAu: 100
      astroUnit: {cpu, memory, pods, actualConns, airflowConns}
      components: [{name, au: {default, limit, ...}, extra?: [...]}]
      executors: [{name, components: [...]}]
      elasticsearch: {connection: {...} | null}
"""

from __future__ import annotations

from dataclasses import dataclass, field
from numbers import Number
from typing import Any, Dict, List, Optional, Tuple

from .errors import CatalogValidationError


def _is_non_empty_str(x: Any) -> bool:
    return isinstance(x, str) and bool(x.strip())


def _is_number(x: Any) -> bool:
    return isinstance(x, Number) and not isinstance(x, bool)


def _expect(cond: bool, msg: str) -> None:
    if not cond:
        raise CatalogValidationError(msg)


@dataclass(frozen=True)
class AstroUnit:
    """Razão fixa de CPU (millicores), memória (Mi) e pods por unidade."""

    cpu: int
    memory: int
    pods: int
    actual_conns: float
    airflow_conns: float


@dataclass(frozen=True)
class ComponentDefinition:
    """Componente implantável e seu tamanho em AU por tipo (default, limit, ...)."""

    name: str
    au: Dict[str, float]
    extra: Tuple[Dict[str, Any], ...] = ()


@dataclass(frozen=True)
class ExecutorDefinition:
    """Executor do Airflow e a lista ordenada de componentes que ele exige."""

    name: str
    components: Tuple[str, ...]


@dataclass(frozen=True)
class HelmSettings:
    base_domain: str
    release_name: str
    single_namespace: bool = False


@dataclass(frozen=True)
class Catalog:
    """Representação interna explícita do catálogo estático v1."""

    astro_unit: AstroUnit
    max_pod_au: float
    components: Tuple[ComponentDefinition, ...]
    executors: Tuple[ExecutorDefinition, ...]
    helm: HelmSettings
    base_values: Dict[str, Any] = field(default_factory=dict)
    elasticsearch_connection: Optional[Dict[str, Any]] = None
    log_helm_values: bool = False


def _validate_astro_unit(data: Any) -> AstroUnit:
    _expect(isinstance(data, dict), "deployments.astroUnit must be a mapping")
    for key in ("cpu", "memory", "pods", "actualConns", "airflowConns"):
        _expect(_is_number(data.get(key)), f"deployments.astroUnit.{key} must be a number")
    _expect(data["cpu"] > 0, "deployments.astroUnit.cpu must be positive")
    _expect(data["memory"] > 0, "deployments.astroUnit.memory must be positive")
    _expect(data["pods"] >= 0, "deployments.astroUnit.pods must not be negative")

    return AstroUnit(
        cpu=int(data["cpu"]),
        memory=int(data["memory"]),
        pods=int(data["pods"]),
        actual_conns=data["actualConns"],
        airflow_conns=data["airflowConns"],
    )


def _validate_components(data: Any) -> Tuple[ComponentDefinition, ...]:
    _expect(isinstance(data, list) and data, "deployments.components must be a non-empty list")

    seen: set[str] = set()
    out: List[ComponentDefinition] = []
    for i, c in enumerate(data):
        _expect(isinstance(c, dict), f"components[{i}] must be a mapping")
        name = c.get("name")
        _expect(_is_non_empty_str(name), f"components[{i}].name is required")
        _expect(name not in seen, f"duplicate component name: {name}")
        seen.add(name)

        au = c.get("au")
        _expect(isinstance(au, dict), f"components.{name}.au must be a mapping")
        _expect("default" in au, f"components.{name}.au.default is required")
        for au_type, size in au.items():
            _expect(_is_number(size) and size >= 0, f"components.{name}.au.{au_type} must be a non-negative number")

        extra = c.get("extra") or []
        _expect(isinstance(extra, list), f"components.{name}.extra must be a list")
        for j, e in enumerate(extra):
            _expect(isinstance(e, dict), f"components.{name}.extra[{j}] must be a mapping")
            _expect(_is_non_empty_str(e.get("name")), f"components.{name}.extra[{j}].name is required")

        out.append(
            ComponentDefinition(
                name=name,
                au=dict(au),
                extra=tuple(dict(e) for e in extra),
            )
        )
    return tuple(out)


def _validate_executors(data: Any) -> Tuple[ExecutorDefinition, ...]:
    _expect(isinstance(data, list) and data, "deployments.executors must be a non-empty list")

    seen: set[str] = set()
    out: List[ExecutorDefinition] = []
    for i, e in enumerate(data):
        _expect(isinstance(e, dict), f"executors[{i}] must be a mapping")
        name = e.get("name")
        _expect(_is_non_empty_str(name), f"executors[{i}].name is required")
        _expect(name not in seen, f"duplicate executor name: {name}")
        seen.add(name)

        components = e.get("components")
        _expect(isinstance(components, list), f"executors.{name}.components must be a list")
        _expect(all(_is_non_empty_str(c) for c in components), f"executors.{name}.components must be names")
        out.append(ExecutorDefinition(name=name, components=tuple(components)))
    return tuple(out)


def validate_catalog(data: Any) -> Catalog:
    """Valida e materializa o catálogo estático v1."""
    _expect(isinstance(data, dict), "Catalog must be a mapping/dict")

    helm = data.get("helm")
    _expect(isinstance(helm, dict), "helm must be a mapping")
    _expect(_is_non_empty_str(helm.get("baseDomain")), "helm.baseDomain is required")
    _expect(_is_non_empty_str(helm.get("releaseName")), "helm.releaseName is required")
    single_namespace = helm.get("singleNamespace", False)
    _expect(isinstance(single_namespace, bool), "helm.singleNamespace must be boolean")

    deployments = data.get("deployments")
    _expect(isinstance(deployments, dict), "deployments must be a mapping")

    max_pod_au = deployments.get("maxPodAu")
    _expect(_is_number(max_pod_au) and max_pod_au >= 1, "deployments.maxPodAu must be a number >= 1")

    base_values = deployments.get("helm") or {}
    _expect(isinstance(base_values, dict), "deployments.helm must be a mapping")

    log_helm_values = deployments.get("logHelmValues", False)
    _expect(isinstance(log_helm_values, bool), "deployments.logHelmValues must be boolean")

    elasticsearch = deployments.get("elasticsearch") or {}
    _expect(isinstance(elasticsearch, dict), "deployments.elasticsearch must be a mapping")
    connection = elasticsearch.get("connection")
    _expect(connection is None or isinstance(connection, dict), "deployments.elasticsearch.connection must be a mapping")

    return Catalog(
        astro_unit=_validate_astro_unit(deployments.get("astroUnit")),
        max_pod_au=max_pod_au,
        components=_validate_components(deployments.get("components")),
        executors=_validate_executors(deployments.get("executors")),
        helm=HelmSettings(
            base_domain=helm["baseDomain"],
            release_name=helm["releaseName"],
            single_namespace=single_namespace,
        ),
        base_values=dict(base_values),
        elasticsearch_connection=dict(connection) if connection else None,
        log_helm_values=log_helm_values,
    )
