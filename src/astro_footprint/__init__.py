# src/astro_footprint/__init__.py
"""
Astro Footprint — engine de configuração de recursos de deployments do Airflow.

Operadores dimensionam deployments em Astro Units (AU) e overrides opcionais
por componente; o engine traduz isso em requests/limits, quotas de
namespace, dimensionamento de pools de conexão e flags de topologia para
o chart Helm.

Arquitetura em alto nível:
    - core.config      → carregamento, merge e hashing de configuração
    - core.catalog     → catálogo estático (AU, componentes, executores)
    - core.resources   → Unit Converter e Component Resource Mapper
    - core.topology    → Topology/Executor Resolver
    - core.constraints → Constraint Calculator
    - core.overrides   → Override Normalizer
    - core.values      → Values Composer
"""
from .core.catalog import Catalog, load_catalog, validate_catalog
from .core.deployment import Deployment
from .core.render_context import RenderContext
from .core.values import generate_helm_values

__all__ = [
    "Catalog",
    "Deployment",
    "RenderContext",
    "generate_helm_values",
    "load_catalog",
    "validate_catalog",
]
