# src/astro_footprint/core/config/merge.py
"""
Deep-merge de configuração e de camadas de values.

Duas políticas convivem aqui, com a mesma regra para mapas:

`deep_merge` (estrita) resolve o arquivo da plataforma (defaults + local).
Um local com tipo diferente do default é erro de digitação do operador e
interrompe a inicialização:

    - mapa + mapa   → merge recursivo por chave
    - lista + lista → a lista do override substitui a da base
    - int/float     → intercambiáveis (quantidades numéricas)
    - None          → ausência de valor, em qualquer um dos lados
    - mapa vs escalar, str vs número, bool vs número → ConfigTypeConflictError

`merge_values` (por camadas) dobra as camadas do Values Composer. A
camada posterior sempre vence numa colisão de chave, qualquer que seja o
tipo; apenas mapa + mapa é mesclado recursivamente. É o que garante que
o override do deployment prevaleça sobre `values` do chamador e sobre o
catálogo (ex.: `1` numa camada e `"500m"` na seguinte).

Invariantes:
    - Nenhum input é mutado; o resultado nunca compartilha estruturas
      com os inputs
    - A mensagem de conflito traz o caminho completo da chave
      (ex.: `workers.persistence`)
"""

from copy import deepcopy
from numbers import Number
from typing import Any, Dict

from .errors import ConfigTypeConflictError


def _is_numeric(value: Any) -> bool:
    return isinstance(value, Number) and not isinstance(value, bool)


def _compatible(base_value: Any, override_value: Any) -> bool:
    if base_value is None or override_value is None:
        return True
    if _is_numeric(base_value) and _is_numeric(override_value):
        return True
    return type(base_value) is type(override_value)


def _merge_into(result: Dict[str, Any], override: Dict[str, Any], prefix: str, strict: bool) -> None:
    for key, value in override.items():
        path = f"{prefix}{key}"
        current = result.get(key)

        if isinstance(current, dict) and isinstance(value, dict):
            _merge_into(current, value, f"{path}.", strict)
            continue

        if strict and key in result and not _compatible(current, value):
            raise ConfigTypeConflictError(
                f"Conflito de tipo em '{path}': {type(current).__name__} vs {type(value).__name__}"
            )

        result[key] = deepcopy(value)


def _check_roots(base: Any, override: Any) -> None:
    if not isinstance(base, dict) or not isinstance(override, dict):
        raise ConfigTypeConflictError(
            f"Deep-merge requer mapas no root, recebido: "
            f"{type(base).__name__} vs {type(override).__name__}"
        )


def deep_merge(base: Dict[str, Any], override: Dict[str, Any]) -> Dict[str, Any]:
    """
    Retorna um novo mapa com `override` dobrado sobre `base` (política estrita).

    Args:
        base: camada de menor precedência.
        override: camada de maior precedência.

    Raises:
        ConfigTypeConflictError: root que não é mapa ou tipos incompatíveis
            numa mesma chave.
    """
    _check_roots(base, override)
    result = deepcopy(base)
    _merge_into(result, override, "", strict=True)
    return result


def merge_values(base: Dict[str, Any], override: Dict[str, Any]) -> Dict[str, Any]:
    """Dobra uma camada de values sobre outra; em colisão, `override` vence.

    Raises:
        ConfigTypeConflictError: se algum root não for mapa.
    """
    _check_roots(base, override)
    result = deepcopy(base)
    _merge_into(result, override, "", strict=False)
    return result
