"""Erros canônicos do catálogo estático (Astro Footprint).

O catálogo (Astro Unit, componentes, executores, settings de Helm) é
carregado uma única vez pelo processo e tratado como entrada read-only.
Falhas de validação estrutural devem produzir erros explícitos e estáveis.
"""

from ..config.errors import ConfigError


class CatalogValidationError(ConfigError):
    """Catálogo não é estruturalmente válido segundo o schema canônico."""
