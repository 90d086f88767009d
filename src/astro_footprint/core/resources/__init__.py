"""Astro Footprint — Recursos (core).

 - units: conversão AU → recursos e leitura de quantidades (`Quantity`)
 - components: bloco padrão de requests/limits por componente
"""

from .components import default_resources, map_resources  # noqa: F401
from .units import (  # noqa: F401
    CPU,
    MEMORY,
    Quantity,
    au_to_resources,
    format_quantity,
    parse_quantity,
    to_base_amount,
    with_units,
)
