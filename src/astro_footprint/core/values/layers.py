# src/astro_footprint/core/values/layers.py
"""
Camadas de values derivadas de settings da plataforma.

Cada função aqui retorna um documento parcial de values que é dobrado
pelo Values Composer. Nenhum segredo é calculado: senhas do registry e do
Elasticsearch vivem em secrets do Kubernetes gerenciados fora do core;
estas camadas mapeiam apenas identidade e hostnames.
"""

from __future__ import annotations

from typing import Any, Dict

from ..catalog.schema import Catalog
from ..config.merge import merge_values
from ..deployment import Deployment


def ingress(catalog: Catalog) -> Dict[str, Any]:
    """Settings de ingress: domínio base e classe derivada do release da plataforma."""
    return {
        "ingress": {
            "baseDomain": catalog.helm.base_domain,
            "class": f"{catalog.helm.release_name}-nginx",
        }
    }


def registry(catalog: Catalog, deployment: Deployment) -> Dict[str, Any]:
    """Conexão com o registry Docker da plataforma."""
    base_domain = catalog.helm.base_domain
    return {
        "registry": {
            "connection": {
                "user": deployment.release_name,
                "host": f"registry.{base_domain}",
                "email": f"admin@{base_domain}",
            }
        }
    }


def elasticsearch(catalog: Catalog, deployment: Deployment) -> Dict[str, Any]:
    """
    Conexão com o Elasticsearch, quando configurada; caso contrário `{}`.

    Com Elasticsearch os logs das tasks vão para stdout e são enviados
    pelo Fluentd, então os workers deixam de ser StatefulSet com volume
    persistente.
    """
    connection = catalog.elasticsearch_connection
    if not connection:
        return {}

    return {
        "elasticsearch": {
            "connection": merge_values({"user": deployment.release_name}, connection),
        },
        "workers": {
            "persistence": {"enabled": False},
        },
    }
