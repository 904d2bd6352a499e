# src/active_config/core/config/hashing.py
"""
Hashing canônico de snapshots de configuração.

Política de hashing:
    - Serialização JSON canônica
    - Ordenação estável de chaves
    - Separadores compactos
    - Codificação UTF-8
    - Algoritmo SHA-256

Valores YAML sem representação JSON nativa (datas, por exemplo) são
serializados via `str()`.

Este módulo existe para rastreabilidade: o hash identifica a estrutura
efetiva de um snapshot independentemente da ordem das chaves.
"""

import hashlib
import json
from collections.abc import Mapping
from typing import Any

from .snapshot import thaw


def compute_config_hash(config: Mapping) -> str:
    """
    Gera um hash SHA-256 determinístico da configuração.

    Args:
        config (Mapping): Snapshot (ou dict) de configuração.

    Returns:
        str: Hash hexadecimal de 64 caracteres.

    Raises:
        TypeError: Se o objeto fornecido não for um mapa.
    """
    if not isinstance(config, Mapping):
        raise TypeError(
            f"Config para hashing deve ser um mapa, recebido: {type(config).__name__}"
        )

    canonical_json = json.dumps(
        thaw(config),
        sort_keys=True,
        separators=(",", ":"),
        ensure_ascii=False,
        default=_json_default,
    )

    return hashlib.sha256(canonical_json.encode("utf-8")).hexdigest()


def _json_default(value: Any) -> Any:
    if isinstance(value, (set, frozenset)):
        return sorted(value, key=repr)
    return str(value)
