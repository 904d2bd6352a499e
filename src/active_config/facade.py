# src/active_config/facade.py
"""
Acesso de conveniência sobre o ConfigStore.

    cfg = ActiveConfig(path="/etc/app/config")
    cfg.database.host               # snapshot de `database`, chave `host`
    cfg.get("database")             # o mesmo snapshot, por nome dinâmico
    cfg.global_.debug               # `_` final evita conflito com palavras reservadas
    cfg["debug"]                    # chave do arquivo raiz (padrão: `global`)
    cfg.with_file("database", "replicas", 0, "host")
    cfg.set_environment("production")

Este adapter não contém lógica de cache: tudo é delegado ao store.
"""

from __future__ import annotations

from typing import Any, Callable, Optional, TypeVar

from .core.config.snapshot import FrozenConfig
from .core.config.store import ConfigStore


T = TypeVar("T")

DEFAULT_ROOT_FILE = "global"


class ActiveConfig:
    """
    Fachada de leitura sobre um `ConfigStore`.

    Args:
        store: Store existente. Quando omitido, um novo é criado com `options`.
        root_file: Nome da configuração lida por `cfg[chave]`.
        **options: Repassados a `ConfigStore` quando `store` é None.
    """

    def __init__(self, store: Optional[ConfigStore] = None, *, root_file: str = DEFAULT_ROOT_FILE, **options: Any):
        self.store = store if store is not None else ConfigStore(**options)
        self.root_file = root_file

    def __getattr__(self, name: str) -> FrozenConfig:
        if name.startswith("_"):
            raise AttributeError(name)
        if name.endswith("_"):
            name = name[:-1]
        return self.store.get_configuration(name)

    def __getitem__(self, key: Any) -> Any:
        """Valor de `key` no snapshot do arquivo raiz; KeyError se ausente."""
        return self.store.get_configuration(self.root_file)[key]

    def get(self, name: Any) -> FrozenConfig:
        """Snapshot da configuração `name`; equivale a `cfg.<name>`."""
        return self.store.get_configuration(name)

    def with_file(self, name: Any, *path: Any) -> Any:
        """Percorre `path` dentro do snapshot de `name`; None se ausente."""
        return self.store.lookup(name, *path)

    def on_load(self, *names: Any, callback: Optional[Callable[[], object]] = None):
        """Ver `ConfigStore.on_load`."""
        return self.store.on_load(*names, callback=callback)

    def disable_reload(self, work: Callable[[], T]) -> T:
        """Executa `work()` com a recarga desabilitada, restaurando o estado anterior."""
        return self.store.disable_reload(work)

    def reload(self, force: bool = False) -> None:
        self.store.reload(force)

    def set_environment(self, environment: Optional[str]) -> None:
        """Troca o ambiente dos sufixos e descarta os caches."""
        self.store.set_environment(environment)

    def set_hostname(self, hostname: Optional[str]) -> None:
        self.store.set_hostname(hostname)
