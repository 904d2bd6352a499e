# src/active_config/core/config/snapshot.py
"""
Snapshot imutável e com chaves normalizadas.

Após o weave, a configuração resultante é convertida recursivamente em
estruturas imutáveis:

    - mapas      → FrozenConfig (chaves na forma canônica de string)
    - sequências → tuple
    - conjuntos  → frozenset
    - escalares  → inalterados

Normalização de chaves:
    A comparação é sempre feita pela forma canônica de string. Strings
    permanecem como estão, membros de Enum usam seu valor (quando string)
    ou seu nome, bytes são decodificados e qualquer outro valor usa `str()`.
    Assim `snap["port"]`, `snap[Key.PORT]` e `snap.port` resolvem para o
    mesmo valor.

Invariantes:
    - Nenhum snapshot exposto pode ser mutado
    - `freeze(freeze(x))` devolve o mesmo objeto que `freeze(x)`
"""

from __future__ import annotations

from collections.abc import Mapping, Set
from enum import Enum
from types import MappingProxyType
from typing import Any, Dict, Iterable, Iterator


def normalize_key(key: Any) -> str:
    if isinstance(key, str):
        return str.__str__(key)
    if isinstance(key, Enum):
        return normalize_key(key.value) if isinstance(key.value, (str, bytes)) else key.name
    if isinstance(key, bytes):
        return key.decode("utf-8")
    return str(key)


class FrozenConfig(Mapping):
    """Mapa imutável de configuração com lookup por chave normalizada e por atributo."""

    __slots__ = ("_data",)

    # Construído em `__new__`: chamar `__init__` de novo não altera o conteúdo.
    def __new__(cls, data: Any = ()):
        self = super().__new__(cls)
        items = data.items() if isinstance(data, Mapping) else data
        frozen = {normalize_key(k): freeze(v) for k, v in items}
        object.__setattr__(self, "_data", MappingProxyType(frozen))
        return self

    def __getitem__(self, key: Any) -> Any:
        return self._data[normalize_key(key)]

    def __contains__(self, key: Any) -> bool:
        return normalize_key(key) in self._data

    def __iter__(self) -> Iterator[str]:
        return iter(self._data)

    def __len__(self) -> int:
        return len(self._data)

    def __getattr__(self, name: str) -> Any:
        if name.startswith("__") or name == "_data":
            raise AttributeError(name)
        try:
            return self._data[name]
        except KeyError:
            raise AttributeError(name) from None

    def __setattr__(self, name: str, value: Any) -> None:
        raise TypeError("FrozenConfig é imutável")

    def __delattr__(self, name: str) -> None:
        raise TypeError("FrozenConfig é imutável")

    def __repr__(self) -> str:
        return f"FrozenConfig({dict(self._data)!r})"

    def __copy__(self) -> "FrozenConfig":
        return self

    def __deepcopy__(self, memo: Dict[int, Any]) -> "FrozenConfig":
        return self

    def __reduce__(self):
        return (FrozenConfig, (self.to_dict(),))

    def to_dict(self) -> Dict[str, Any]:
        """Cópia mutável (dict/list) do snapshot."""
        return {k: thaw(v) for k, v in self._data.items()}


def _freeze_items(values: Iterable[Any]) -> tuple:
    return tuple(freeze(v) for v in values)


def freeze(value: Any) -> Any:
    """Converte recursivamente `value` em estrutura imutável com chaves normalizadas."""
    if isinstance(value, FrozenConfig):
        return value
    if isinstance(value, Mapping):
        return FrozenConfig(value)
    if isinstance(value, tuple):
        frozen = _freeze_items(value)
        if all(a is b for a, b in zip(frozen, value)):
            return value
        return frozen
    if isinstance(value, list):
        return _freeze_items(value)
    if isinstance(value, frozenset):
        return value
    if isinstance(value, Set):
        return frozenset(freeze(v) for v in value)
    return value


def thaw(value: Any) -> Any:
    if isinstance(value, FrozenConfig):
        return value.to_dict()
    if isinstance(value, tuple):
        return [thaw(v) for v in value]
    if isinstance(value, frozenset):
        return set(value)
    return value


def walk(value: Any, path: Iterable[Any], default: Any = None) -> Any:
    """
    Percorre `value` seguindo chaves de mapa e índices de sequência.

    Retorna `default` quando um segmento não existe, quando o índice está
    fora do intervalo ou quando o tipo não corresponde (ex.: índice
    aplicado a um mapa que não o contém, chave aplicada a um escalar).
    Nunca levanta exceção para esses casos.
    """
    current = value
    for key in path:
        if isinstance(current, Mapping):
            k = normalize_key(key)
            if k not in current:
                return default
            current = current[k]
        elif isinstance(current, (tuple, list)):
            if isinstance(key, bool) or not isinstance(key, int):
                return default
            if not -len(current) <= key < len(current):
                return default
            current = current[key]
        else:
            return default
    return current
