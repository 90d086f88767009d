"""Loader do catálogo estático (YAML/JSON).

O catálogo é carregado uma única vez na inicialização do processo e passado
explicitamente para o core. Este módulo apenas compõe o loader de
configuração com a validação de schema.
"""

from __future__ import annotations

from typing import Optional

from ..config.loader import load_config
from .schema import Catalog, validate_catalog


def load_catalog(*, defaults_path: str, local_path: Optional[str] = None) -> Catalog:
    """Carrega, resolve (defaults + local) e valida o catálogo estático.

    Raises:
        DefaultsNotFoundError: se o arquivo de defaults não existir.
        UnsupportedConfigFormatError: se a extensão não for suportada.
        CatalogValidationError: se o conteúdo resolvido for inválido.
    """
    data = load_config(defaults_path=defaults_path, local_path=local_path)
    return validate_catalog(data)
