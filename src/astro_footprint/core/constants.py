# src/astro_footprint/core/constants.py
"""
Constantes canônicas do Astro Footprint.

Nomes de executores, componentes e propriedades de deployment aqui
definidos são parte do contrato com o catálogo estático e com o chart
Helm que consome o documento de values. Alterá-los quebra
compatibilidade com clusters existentes.
"""

# ---------------------------------------------------------------------------
# Executores do Airflow
# ---------------------------------------------------------------------------

AIRFLOW_EXECUTOR_LOCAL = "LocalExecutor"
AIRFLOW_EXECUTOR_CELERY = "CeleryExecutor"
AIRFLOW_EXECUTOR_KUBERNETES = "KubernetesExecutor"

# Executor assumido quando o deployment não declara `config.executor`.
DEFAULT_EXECUTOR = AIRFLOW_EXECUTOR_CELERY

# ---------------------------------------------------------------------------
# Componentes do Airflow
# ---------------------------------------------------------------------------

AIRFLOW_COMPONENT_SCHEDULER = "scheduler"
AIRFLOW_COMPONENT_WEBSERVER = "webserver"
AIRFLOW_COMPONENT_WORKERS = "workers"
AIRFLOW_COMPONENT_FLOWER = "flower"
AIRFLOW_COMPONENT_REDIS = "redis"
AIRFLOW_COMPONENT_PGBOUNCER = "pgbouncer"
AIRFLOW_COMPONENT_STATSD = "statsd"

# ---------------------------------------------------------------------------
# Propriedades de deployment (legado)
# ---------------------------------------------------------------------------

DEPLOYMENT_PROPERTY_EXTRA_AU = "extra_au"
DEPLOYMENT_PROPERTY_COMPONENT_VERSION = "component_version"
DEPLOYMENT_PROPERTY_ALERT_EMAILS = "alert_emails"

# ---------------------------------------------------------------------------
# Tags de imagem
# ---------------------------------------------------------------------------

IMAGE_TAG_PREFIX = "cli-"
DEFAULT_NEXT_IMAGE_TAG = "cli-1"

# ---------------------------------------------------------------------------
# Recursos
# ---------------------------------------------------------------------------

# Multiplicador de segurança aplicado às quotas (duas gerações de pods
# coexistem durante um rolling upgrade).
QUOTA_SAFETY_MULTIPLIER = 2

AU_TYPE_DEFAULT = "default"
AU_TYPE_LIMIT = "limit"
