# src/astro_footprint/core/config/loader.py
"""
Loader do arquivo de configuração da plataforma.

O catálogo estático (Astro Unit, componentes, executores, settings de
Helm) é lido uma vez na inicialização do processo a partir de dois
arquivos:

    - defaults (obrigatório), distribuído junto com a plataforma
    - local (opcional), com ajustes do cluster (domínio, singleNamespace,
      conexão do Elasticsearch...)

O local é dobrado sobre os defaults com `deep_merge`; o resultado é um
`dict` puro, validado depois por `core.catalog`.

Limites explícitos:
    - Não valida o schema do catálogo
    - Não lê variáveis de ambiente
"""

import json
from pathlib import Path
from typing import Any, Callable, Dict, Optional, TextIO

import yaml  # PyYAML

from .errors import (
    DefaultsNotFoundError,
    InvalidConfigRootTypeError,
    UnsupportedConfigFormatError,
)
from .merge import deep_merge


_READERS: Dict[str, Callable[[TextIO], Any]] = {
    ".yaml": yaml.safe_load,
    ".yml": yaml.safe_load,
    ".json": json.load,
}


def _read_mapping(path: Path) -> Dict[str, Any]:
    """
    Lê um arquivo YAML/JSON cujo root deve ser um mapa.

    Um arquivo vazio vale `{}`.

    Raises:
        DefaultsNotFoundError: arquivo inexistente.
        UnsupportedConfigFormatError: extensão fora de .yaml/.yml/.json.
        InvalidConfigRootTypeError: root que não é mapa.
    """
    if not path.exists():
        raise DefaultsNotFoundError(f"Arquivo de configuração da plataforma não encontrado: {path}")

    reader = _READERS.get(path.suffix.lower())
    if reader is None:
        raise UnsupportedConfigFormatError(
            f"Formato não suportado: {path.suffix or '(sem extensão)'} em {path}"
        )

    with path.open("r", encoding="utf-8") as f:
        data = reader(f)

    if data is None:
        return {}
    if not isinstance(data, dict):
        raise InvalidConfigRootTypeError(
            f"O root de {path.name} deve ser um mapa, recebido: {type(data).__name__}"
        )
    return data


def load_config(
    *,
    defaults_path: str,
    local_path: Optional[str] = None,
) -> Dict[str, Any]:
    """
    Resolve a configuração efetiva da plataforma (defaults + local).

    A ausência do arquivo local não é erro: clusters sem ajustes rodam
    apenas com os defaults.

    Raises:
        DefaultsNotFoundError: arquivo de defaults inexistente.
        UnsupportedConfigFormatError: formato de arquivo não suportado.
        InvalidConfigRootTypeError: root de algum arquivo não é mapa.
        ConfigTypeConflictError: local incompatível com os defaults.
    """
    effective = _read_mapping(Path(defaults_path))

    if local_path is None:
        return effective

    local_file = Path(local_path)
    if not local_file.exists():
        return effective

    return deep_merge(effective, _read_mapping(local_file))
