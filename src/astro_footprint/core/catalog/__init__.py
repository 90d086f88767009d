"""Astro Footprint — Catálogo estático (core).

Componentes canônicos do catálogo de deployments:
 - schema (Astro Unit, componentes, executores, settings de Helm)
 - validação estrutural
 - carregamento a partir de YAML/JSON
"""

from .errors import CatalogValidationError  # noqa: F401
from .loader import load_catalog  # noqa: F401
from .schema import (  # noqa: F401
    AstroUnit,
    Catalog,
    ComponentDefinition,
    ExecutorDefinition,
    HelmSettings,
    validate_catalog,
)
