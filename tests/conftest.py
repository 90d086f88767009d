# tests/conftest.py
"""
Fixtures compartilhados para testes do Astro Footprint.

Este módulo define fixtures reutilizáveis que fornecem:
- um catálogo estático semelhante ao da plataforma (AU, componentes, executores)
- fábricas de catálogo e de deployment para cenários específicos
- um RenderContext determinístico

Decisões arquiteturais:
    - Catálogos são fornecidos como dicionários brutos e materializados
      via `validate_catalog`, exatamente como o processo faz ao iniciar
    - Fixtures não realizam I/O (exceto quando o teste pede `tmp_path`)
    - Imports do core são realizados de forma lazy para melhorar a
      clareza de erros durante falhas

Valores de referência do catálogo padrão (AU = 100m / 384Mi / 1 pod):
    - scheduler 5 AU, webserver 5 AU, workers 10 AU
    - flower, redis, pgbouncer, statsd 2 AU cada
    - maxPodAu 35

Invariantes:
    - Nenhuma fixture depende de estado global
    - Cada chamada de fábrica retorna estruturas novas (sem aliasing)
"""

import copy
from datetime import datetime, timezone

import pytest


_CATALOG_DATA = {
    "helm": {
        "baseDomain": "astro.example.com",
        "releaseName": "astronomer",
        "singleNamespace": False,
    },
    "deployments": {
        "helm": {
            "defaultAirflowRepository": "astronomerinc/ap-airflow",
            "webserver": {"defaultUser": {"enabled": False}},
        },
        "logHelmValues": False,
        "maxPodAu": 35,
        "astroUnit": {
            "cpu": 100,
            "memory": 384,
            "pods": 1,
            "actualConns": 0.5,
            "airflowConns": 5,
        },
        "components": [
            {"name": "scheduler", "au": {"default": 5, "minimum": 5, "limit": 30}},
            {"name": "webserver", "au": {"default": 5, "minimum": 5, "limit": 30}},
            {"name": "statsd", "au": {"default": 2, "minimum": 2, "limit": 30}},
            {"name": "pgbouncer", "au": {"default": 2, "minimum": 2, "limit": 2}},
            {"name": "flower", "au": {"default": 2, "minimum": 2, "limit": 2}},
            {"name": "redis", "au": {"default": 2, "minimum": 2, "limit": 2}},
            {
                "name": "workers",
                "au": {"default": 10, "minimum": 10, "limit": 30},
                "extra": [
                    {
                        "name": "terminationGracePeriodSeconds",
                        "default": 600,
                        "minimum": 30,
                        "limit": 36000,
                    }
                ],
            },
        ],
        "executors": [
            {
                "name": "LocalExecutor",
                "components": ["scheduler", "webserver", "statsd", "pgbouncer"],
            },
            {
                "name": "CeleryExecutor",
                "components": [
                    "scheduler",
                    "webserver",
                    "statsd",
                    "pgbouncer",
                    "workers",
                    "redis",
                    "flower",
                ],
            },
            {
                "name": "KubernetesExecutor",
                "components": ["scheduler", "webserver", "statsd", "pgbouncer"],
            },
        ],
        "elasticsearch": {"connection": None},
    },
}


@pytest.fixture
def catalog_data() -> dict:
    """
    Catálogo estático bruto semelhante ao arquivo de configuração da plataforma.

    Retorna uma cópia profunda a cada uso, permitindo que testes alterem
    chaves livremente (ex.: `singleNamespace`, conexão do Elasticsearch).
    """
    return copy.deepcopy(_CATALOG_DATA)


@pytest.fixture
def make_catalog(catalog_data):
    """
    Fábrica de catálogos validados.

    Aceita callables de ajuste que recebem o dicionário bruto e podem
    mutá-lo antes da validação:

        catalog = make_catalog(lambda d: d["helm"].update(singleNamespace=True))
    """
    from astro_footprint.core.catalog.schema import validate_catalog

    def _make(*tweaks):
        data = copy.deepcopy(catalog_data)
        for tweak in tweaks:
            tweak(data)
        return validate_catalog(data)

    return _make


@pytest.fixture
def catalog(make_catalog):
    """Catálogo padrão validado (multi-namespace, sem Elasticsearch)."""
    return make_catalog()


@pytest.fixture
def single_au_catalog(make_catalog):
    """
    Catálogo mínimo com AU de 1000m / 4096Mi / 5 pods e apenas o scheduler.

    O LocalExecutor exige somente o scheduler (1 AU), o que isola a regra
    de sidecar do scheduler (+2 AU) nos cálculos de quota.
    """

    def _tweak(data):
        data["deployments"]["astroUnit"] = {
            "cpu": 1000,
            "memory": 4096,
            "pods": 5,
            "actualConns": 0.5,
            "airflowConns": 5,
        }
        data["deployments"]["components"] = [
            {"name": "scheduler", "au": {"default": 1, "limit": 4}},
        ]
        data["deployments"]["executors"] = [
            {"name": "LocalExecutor", "components": ["scheduler"]},
        ]

    return make_catalog(_tweak)


@pytest.fixture
def make_deployment():
    """
    Fábrica de deployments a partir de registros no formato da persistência.

    Args aceitos:
        config (dict): mapa componente → settings (e `executor`).
        extra_au: valor da propriedade `extra_au` (omitida se None).
        release_name (str): nome do release.
    """
    from astro_footprint.core.deployment import Deployment

    def _make(config=None, extra_au=None, release_name="quasarian-sun-1234", properties=None):
        props = list(properties or [])
        if extra_au is not None:
            props.append({"key": "extra_au", "value": extra_au})
        return Deployment.from_record(
            {
                "releaseName": release_name,
                "properties": props,
                "config": copy.deepcopy(config) if config is not None else {},
            }
        )

    return _make


@pytest.fixture
def render_ctx():
    """RenderContext determinístico para testes de logging estruturado."""
    from astro_footprint.core.render_context import RenderContext

    return RenderContext(
        render_id="render-test-001",
        created_at=datetime(2026, 1, 16, 0, 0, 0, tzinfo=timezone.utc),
        meta={"source": "pytest"},
    )
