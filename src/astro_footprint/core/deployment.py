# src/astro_footprint/core/deployment.py
"""
Deployment — registro de entrada (read-only) do engine.

O registro é obtido pela camada de persistência (fora do core) e nunca é
mutado aqui. Este módulo também concentra as pontes com a API legada de
propriedades (`DeploymentProperty`) e os helpers de tags de imagem.

Shape aceito por `Deployment.from_record`:

    {
        "releaseName": "quasarian-sun-1234",
        "properties": [{"key": "extra_au", "value": 2}],
        "config": {
            "executor": "CeleryExecutor",
            "workers": {"replicas": 2, "resources": {"limits": {...}}},
        },
    }
"""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from typing import Any, Dict, List, Mapping, Optional, Tuple

from .constants import (
    DEFAULT_EXECUTOR,
    DEFAULT_NEXT_IMAGE_TAG,
    DEPLOYMENT_PROPERTY_ALERT_EMAILS,
    DEPLOYMENT_PROPERTY_COMPONENT_VERSION,
    DEPLOYMENT_PROPERTY_EXTRA_AU,
    IMAGE_TAG_PREFIX,
)


@dataclass(frozen=True)
class DeploymentProperty:
    key: str
    value: Any


@dataclass(frozen=True)
class Deployment:
    """Registro de deployment consumido pelo engine (imutável)."""

    release_name: str
    properties: Tuple[DeploymentProperty, ...] = ()
    config: Dict[str, Any] = field(default_factory=dict)

    @classmethod
    def from_record(cls, record: Mapping[str, Any]) -> "Deployment":
        props = record.get("properties") or []
        return cls(
            release_name=record["releaseName"],
            properties=tuple(DeploymentProperty(p["key"], p.get("value")) for p in props),
            config=dict(record.get("config") or {}),
        )

    def get_property(self, key: str, default: Any = None) -> Any:
        """Valor da primeira propriedade com a chave informada."""
        for prop in self.properties:
            if prop.key == key:
                return prop.value
        return default

    def component_config(self, name: str) -> Dict[str, Any]:
        value = self.config.get(name)
        return value if isinstance(value, dict) else {}

    def replicas(self, name: str) -> int:
        return self.component_config(name).get("replicas", 1)


# -----------------------------
# Pontes com a API legada
# -----------------------------

def env_array_to_object(arr: Optional[List[Dict[str, Any]]] = None) -> Dict[str, Any]:
    """Transforma uma lista de pares `{key, value}` em um dicionário."""
    return {item["key"]: item.get("value") for item in (arr or [])}


def env_object_to_array(obj: Optional[Dict[str, Any]] = None) -> List[Dict[str, Any]]:
    """Transforma um dicionário em uma lista de objetos `{key: value}`."""
    return [{key: value} for key, value in (obj or {}).items()]


def map_properties_to_deployment(obj: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
    """Mapeia propriedades legadas para os campos de topo do deployment."""
    obj = obj or {}
    mapped: Dict[str, Any] = {}

    if obj.get(DEPLOYMENT_PROPERTY_EXTRA_AU):
        mapped["extraAu"] = obj[DEPLOYMENT_PROPERTY_EXTRA_AU]

    if obj.get(DEPLOYMENT_PROPERTY_COMPONENT_VERSION):
        mapped["airflowVersion"] = obj[DEPLOYMENT_PROPERTY_COMPONENT_VERSION]

    if obj.get(DEPLOYMENT_PROPERTY_ALERT_EMAILS):
        mapped["alertEmails"] = {"set": json.loads(obj[DEPLOYMENT_PROPERTY_ALERT_EMAILS])}

    return mapped


def map_deployment_to_properties(dep: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
    """Mapeia campos de topo do deployment de volta para propriedades legadas."""
    dep = dep or {}
    mapped: Dict[str, Any] = {}

    if dep.get("extraAu"):
        mapped[DEPLOYMENT_PROPERTY_EXTRA_AU] = dep["extraAu"]

    if dep.get("airflowVersion"):
        mapped[DEPLOYMENT_PROPERTY_COMPONENT_VERSION] = dep["airflowVersion"]

    if dep.get("alertEmails"):
        mapped[DEPLOYMENT_PROPERTY_ALERT_EMAILS] = dep["alertEmails"]

    return mapped


def generate_default_deployment_config() -> Dict[str, Any]:
    """Config padrão de um deployment novo quando nada é informado."""
    return {"executor": DEFAULT_EXECUTOR}


# -----------------------------
# Tags de imagem
# -----------------------------

def _tag_number(tag: str) -> Optional[int]:
    suffix = tag[len(IMAGE_TAG_PREFIX):]
    return int(suffix) if suffix.isdigit() else None


def find_latest_tag(tags: Optional[List[str]] = None) -> Optional[str]:
    """Tag `cli-<n>` mais recente (maior `n`), ou None se não houver."""
    latest: Optional[str] = None
    latest_num = -1
    for tag in tags or []:
        if not tag.startswith(IMAGE_TAG_PREFIX):
            continue
        num = _tag_number(tag)
        if num is not None and num > latest_num:
            latest, latest_num = tag, num
    return latest


def generate_next_tag(latest: Optional[str]) -> str:
    """Próxima tag de imagem a partir da mais recente."""
    if not latest:
        return DEFAULT_NEXT_IMAGE_TAG
    num = _tag_number(latest)
    if num is None:
        raise ValueError(f"Tag de imagem inválida: {latest!r}")
    return f"{IMAGE_TAG_PREFIX}{num + 1}"
