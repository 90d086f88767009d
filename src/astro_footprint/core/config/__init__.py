# src/astro_footprint/core/config/__init__.py
"""
Camada de configuração do Astro Footprint.

Este pacote contém os utilitários responsáveis por carregar, mesclar e
identificar configurações: tanto o arquivo da plataforma (de onde o
catálogo estático é materializado) quanto as camadas que compõem o
documento final de values.

Responsabilidades do pacote:
    - Carregamento de arquivos de configuração (defaults + overrides locais)
    - Deep-merge determinístico entre camadas
    - Geração de hash canônico para rastreabilidade

Princípios fundamentais:
    - Configuração não contém lógica de cálculo de recursos
    - Nenhuma heurística implícita durante merge
    - A mesma entrada sempre produz a mesma configuração final
"""

from .errors import (  # noqa: F401
    ConfigError,
    ConfigTypeConflictError,
    DefaultsNotFoundError,
    InvalidConfigRootTypeError,
    UnsupportedConfigFormatError,
)
from .hashing import compute_config_hash  # noqa: F401
from .loader import load_config  # noqa: F401
from .merge import deep_merge, merge_values  # noqa: F401
