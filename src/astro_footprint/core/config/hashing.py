# src/astro_footprint/core/config/hashing.py
"""
Hashing canônico de configuração do Astro Footprint.

O hash gerado representa a **identidade estrutural** de um mapeamento de
configuração (catálogo resolvido ou documento final de values) e é
registrado no RenderContext para permitir comparar duas composições sem
inspecionar o documento inteiro.

Política de hashing (v1):
    - Serialização JSON canônica (chaves ordenadas, separadores compactos)
    - Codificação UTF-8
    - Algoritmo SHA-256

Invariantes:
    - Mapeamentos estruturalmente equivalentes produzem o mesmo hash
    - O valor gerado é sempre uma string hexadecimal de 64 caracteres
"""


import json
import hashlib
from typing import Dict, Any


def compute_config_hash(config: Dict[str, Any]) -> str:
    """
    Gera um hash determinístico de um mapeamento de configuração.

    Args:
        config (Dict[str, Any]): Catálogo ou documento de values.

    Returns:
        str: Hash SHA-256 hexadecimal.

    Raises:
        TypeError: Se o objeto fornecido não for um dicionário.
    """

    if not isinstance(config, dict):
        raise TypeError(
            f"Config para hashing deve ser dict, recebido: {type(config).__name__}"
        )

    canonical_json = json.dumps(
        config,
        sort_keys=True,
        separators=(",", ":"),
        ensure_ascii=False,
    )

    return hashlib.sha256(canonical_json.encode("utf-8")).hexdigest()
