# src/active_config/core/config/merge.py
"""
Weave: deep-merge canônico entre os arquivos de uma configuração.

Política de merge:
    - mapa + mapa → merge recursivo por chave
    - sequência   → sobrescrita total (sem merge elemento a elemento),
                    exceto quando `concat_lists=True` é pedido explicitamente
    - escalar (ou tipos diferentes) → o valor posterior vence
    - conteúdo ausente (arquivo inexistente) → não contribui

Princípios fundamentais:
    - O merge é determinístico e puramente funcional
    - Nenhum input é mutado durante o processo
    - A ordem dos conteúdos é a ordem ascendente de precedência

Limites explícitos:
    - Não carrega arquivos
    - Não valida semântica de domínio
"""

from __future__ import annotations

from collections.abc import Mapping
from copy import deepcopy
from typing import Any, Dict, Iterable, Optional

from .snapshot import FrozenConfig, freeze


def weave(base: Mapping, overlay: Mapping, concat_lists: bool = False) -> Dict[Any, Any]:
    """
    Combina `overlay` sobre `base` produzindo um novo dicionário.

    Chaves presentes apenas em `base` são preservadas; em conflito,
    o valor de `overlay` vence, salvo quando ambos são mapas (merge
    recursivo) ou ambos listas com `concat_lists=True` (concatenação).

    Args:
        base (Mapping): Estrutura acumulada (menor precedência).
        overlay (Mapping): Estrutura de maior precedência.
        concat_lists (bool): Concatena listas em vez de substituí-las.

    Returns:
        Dict[Any, Any]: Nova estrutura resultante.
    """
    result: Dict[Any, Any] = {k: deepcopy(v) for k, v in base.items()}

    for key, overlay_value in overlay.items():
        if key not in result:
            result[key] = deepcopy(overlay_value)
            continue

        base_value = result[key]

        if isinstance(base_value, Mapping) and isinstance(overlay_value, Mapping):
            result[key] = weave(base_value, overlay_value, concat_lists)
            continue

        if concat_lists and isinstance(base_value, list) and isinstance(overlay_value, list):
            result[key] = base_value + deepcopy(overlay_value)
            continue

        result[key] = deepcopy(overlay_value)

    return result


def merge_contents(
    contents: Iterable[Optional[Mapping]],
    concat_lists: bool = False,
) -> FrozenConfig:
    """Weave de todos os conteúdos (em ordem ascendente) seguido de normalização e freeze."""
    accumulated: Dict[Any, Any] = {}
    for content in contents:
        if content is None:
            continue
        accumulated = weave(accumulated, content, concat_lists)
    return freeze(accumulated)
