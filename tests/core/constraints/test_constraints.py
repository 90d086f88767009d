# tests/core/constraints/test_constraints.py
"""
Testes da calculadora de constraints do namespace.

Os testes asseguram que:
- quotas seguem a lei de segurança 2× (primário + sidecars) + extra
- overrides de recursos e réplicas entram nos totais
- `allowPodLaunching` só aparece quando há capacidade extra
- modo single-namespace não emite nenhuma quota
- entradas inválidas falham com exceções tipadas
"""

import pytest

try:
    from astro_footprint.core.constraints import constraints, extra_au
    from astro_footprint.core.exceptions import (
        ConfigNotFoundError,
        InvariantViolationError,
        MalformedOverrideError,
    )
except Exception as e:  # noqa: BLE001
    _IMPORT_ERR = e
else:
    _IMPORT_ERR = None


def _require_imports():
    if _IMPORT_ERR is not None:
        pytest.fail(
            "Missing constraint calculator. Implement:\n"
            "- src/astro_footprint/core/constraints.py (constraints, limit_range)\n"
            f"Import error: {_IMPORT_ERR}"
        )


def test_celery_defaults(catalog, make_deployment):
    """
    CeleryExecutor com defaults: 28 AU primários, 2 AU de sidecars
    (workers + pgbouncer), sem extra.
    """
    _require_imports()
    out = constraints(catalog, make_deployment())

    assert out["quotas"] == {
        "pods": 14,
        "requests.cpu": "6000m",
        "requests.memory": "23040Mi",
        "limits.cpu": "6000m",
        "limits.memory": "23040Mi",
    }
    assert out["pgbouncer"] == {"metadataPoolSize": 14, "maxClientConn": 140}
    assert "allowPodLaunching" not in out


def test_local_executor_includes_scheduler_sidecars(catalog, make_deployment):
    _require_imports()
    out = constraints(catalog, make_deployment(config={"executor": "LocalExecutor"}))

    assert out["quotas"]["limits.cpu"] == "3400m"
    assert out["quotas"]["limits.memory"] == "13056Mi"
    assert out["quotas"]["pods"] == 8
    assert out["pgbouncer"] == {"metadataPoolSize": 7, "maxClientConn": 70}


def test_single_au_example(single_au_catalog, make_deployment):
    """
    AU 1000m/4096Mi, LocalExecutor só com scheduler (1 AU):
    cpu = 1000×2 + 2000×2 = 6000m.
    """
    _require_imports()
    out = constraints(single_au_catalog, make_deployment(config={"executor": "LocalExecutor"}))

    assert out["quotas"]["limits.cpu"] == "6000m"
    assert out["quotas"]["limits.memory"] == "24576Mi"
    assert out["quotas"]["pods"] == 2


def test_extra_au_adds_capacity_and_enables_pod_launching(single_au_catalog, make_deployment):
    _require_imports()
    out = constraints(
        single_au_catalog,
        make_deployment(config={"executor": "LocalExecutor"}, extra_au=2),
    )

    assert out["quotas"]["pods"] == 12
    assert out["quotas"]["limits.cpu"] == "8000m"
    assert out["allowPodLaunching"] is True


def test_extra_au_on_celery(catalog, make_deployment):
    _require_imports()
    out = constraints(catalog, make_deployment(extra_au=10))

    assert out["quotas"]["limits.cpu"] == "7000m"
    assert out["quotas"]["limits.memory"] == "26880Mi"
    assert out["quotas"]["pods"] == 24
    assert out["pgbouncer"] == {"metadataPoolSize": 19, "maxClientConn": 190}
    assert out["allowPodLaunching"] is True


def test_zero_extra_au_keeps_pod_launching_absent(catalog, make_deployment):
    _require_imports()
    for value in (0, "0", ""):
        assert "allowPodLaunching" not in constraints(catalog, make_deployment(extra_au=value))


def test_worker_replicas_and_limits_override(catalog, make_deployment):
    _require_imports()
    config = {
        "executor": "CeleryExecutor",
        "workers": {
            "replicas": 3,
            "resources": {"limits": {"cpu": 1000, "memory": 3840}},
        },
    }
    out = constraints(catalog, make_deployment(config=config))

    assert out["quotas"]["limits.cpu"] == "10400m"
    assert out["quotas"]["limits.memory"] == "39936Mi"
    assert out["quotas"]["pods"] == 18
    assert out["pgbouncer"] == {"metadataPoolSize": 24, "maxClientConn": 240}


def test_suffixed_and_requests_only_overrides_are_counted(catalog, make_deployment):
    """
    `requests` sem `limits` vira limits após normalização; "1Gi" equivale
    a 1024Mi.
    """
    _require_imports()
    base = constraints(catalog, make_deployment())
    config = {"scheduler": {"resources": {"requests": {"cpu": "600m", "memory": "1Gi"}}}}
    out = constraints(catalog, make_deployment(config=config))

    # scheduler default 500m/1920Mi → 600m/1024Mi, dobrado pela quota
    assert out["quotas"]["limits.cpu"] == "6200m"
    assert out["quotas"]["limits.memory"] == f"{23040 - 2 * (1920 - 1024)}Mi"
    assert out["quotas"]["pods"] == base["quotas"]["pods"]


def test_partial_override_falls_back_to_default_per_field(catalog, make_deployment):
    _require_imports()
    config = {"scheduler": {"resources": {"limits": {"cpu": 700}}}}
    out = constraints(catalog, make_deployment(config=config))

    assert out["quotas"]["limits.cpu"] == "6400m"
    assert out["quotas"]["limits.memory"] == "23040Mi"


def test_quotas_requests_equal_limits(catalog, make_deployment):
    _require_imports()
    quotas = constraints(catalog, make_deployment(extra_au=3))["quotas"]
    assert quotas["requests.cpu"] == quotas["limits.cpu"]
    assert quotas["requests.memory"] == quotas["limits.memory"]


def test_single_namespace_emits_nothing(make_catalog, make_deployment):
    _require_imports()
    catalog = make_catalog(lambda d: d["helm"].update(singleNamespace=True))
    assert constraints(catalog, make_deployment(extra_au=5)) == {}


def test_unknown_executor_is_fatal(catalog, make_deployment):
    _require_imports()
    with pytest.raises(ConfigNotFoundError):
        constraints(catalog, make_deployment(config={"executor": "DaskExecutor"}))


def test_executor_referencing_undeclared_component_is_fatal(make_catalog, make_deployment):
    _require_imports()
    catalog = make_catalog(
        lambda d: d["deployments"]["executors"][0]["components"].append("triggerer")
    )
    with pytest.raises(ConfigNotFoundError):
        constraints(catalog, make_deployment(config={"executor": "LocalExecutor"}))


@pytest.mark.parametrize("replicas", ["3", 2.5, True, None])
def test_malformed_replicas(catalog, make_deployment, replicas):
    _require_imports()
    with pytest.raises(MalformedOverrideError):
        constraints(catalog, make_deployment(config={"workers": {"replicas": replicas}}))


@pytest.mark.parametrize("value", ["lots", True, [1]])
def test_malformed_extra_au(catalog, make_deployment, value):
    _require_imports()
    with pytest.raises(MalformedOverrideError):
        constraints(catalog, make_deployment(extra_au=value))


def test_malformed_resource_override(catalog, make_deployment):
    _require_imports()
    config = {"workers": {"resources": {"limits": {"cpu": "lots"}}}}
    with pytest.raises(MalformedOverrideError):
        constraints(catalog, make_deployment(config=config))


def test_negative_quantities_violate_invariants(catalog, make_deployment):
    _require_imports()
    with pytest.raises(InvariantViolationError):
        constraints(catalog, make_deployment(extra_au=-1))

    config = {"workers": {"resources": {"limits": {"cpu": -5}}}}
    with pytest.raises(InvariantViolationError):
        constraints(catalog, make_deployment(config=config))


def test_extra_au_parsing(make_deployment):
    _require_imports()
    assert extra_au(make_deployment()) == 0
    assert extra_au(make_deployment(extra_au="2")) == 2
    assert extra_au(make_deployment(extra_au="1.5")) == 1.5
    assert extra_au(make_deployment(extra_au=4)) == 4


def test_safety_margin_without_extra_or_sidecars(make_catalog, make_deployment):
    """
    Sem extra e sem sidecars (executor sem workers nem pgbouncer, scheduler
    fora do LocalExecutor): quota == 2 × Σ limits × réplicas.
    """
    _require_imports()
    catalog = make_catalog(
        lambda d: d["deployments"]["executors"].append(
            {"name": "SequentialExecutor", "components": ["scheduler", "webserver", "statsd"]}
        )
    )
    config = {
        "executor": "SequentialExecutor",
        "scheduler": {"replicas": 2},
        "webserver": {"replicas": 3, "resources": {"limits": {"cpu": 800, "memory": "2Gi"}}},
    }
    out = constraints(catalog, make_deployment(config=config))

    # scheduler 500m × 2, webserver 800m × 3, statsd 200m × 1
    cpu = 500 * 2 + 800 * 3 + 200 * 1
    memory = 1920 * 2 + 2048 * 3 + 768 * 1
    assert out["quotas"]["limits.cpu"] == f"{2 * cpu}m"
    assert out["quotas"]["limits.memory"] == f"{2 * memory}Mi"
    assert out["quotas"]["pods"] == 2 * (2 + 3 + 1)
    assert "allowPodLaunching" not in out


def test_unknown_executor_is_fatal_in_single_namespace(make_catalog, make_deployment):
    _require_imports()
    catalog = make_catalog(lambda d: d["helm"].update(singleNamespace=True))
    with pytest.raises(ConfigNotFoundError):
        constraints(catalog, make_deployment(config={"executor": "BogusExecutor"}))


@pytest.mark.parametrize("value, expected", [("1e1", 10), ("10.0", 10), (" 3 ", 3), ("2.5", 2.5)])
def test_extra_au_accepts_any_numeric_string(make_deployment, value, expected):
    _require_imports()
    parsed = extra_au(make_deployment(extra_au=value))
    assert parsed == expected
    assert isinstance(parsed, type(expected))


@pytest.mark.parametrize("value", ["nan", "inf"])
def test_extra_au_rejects_non_finite_strings(make_deployment, value):
    _require_imports()
    with pytest.raises(MalformedOverrideError):
        extra_au(make_deployment(extra_au=value))
