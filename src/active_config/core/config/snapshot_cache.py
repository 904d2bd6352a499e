# src/active_config/core/config/snapshot_cache.py
"""
Cache de snapshots por nome de configuração.

Guarda, por nome, o último snapshot e o fingerprint (lista de arquivos)
usado para construí-lo. Snapshot e fingerprint são sempre gravados como
um par, sob o mesmo lock.

Quando uma checagem invalida um snapshot, a lista de arquivos que ela
acabou de resolver fica pendente para a próxima reconstrução, que a
consome em vez de resolver de novo.
"""

from __future__ import annotations

import threading
from typing import Dict, List, Optional, Tuple

from .resolver import ConfigFileList
from .snapshot import FrozenConfig


class SnapshotCache:
    """
    Pares (snapshot, fingerprint) indexados por nome de configuração.

    Invariantes:
        - `store` grava snapshot e fingerprint juntos
        - Uma lista pendente existe apenas entre `invalidate(name, files)`
          e a próxima reconstrução (ou `flush_all`)
    """

    def __init__(self) -> None:
        self._snapshots: Dict[str, FrozenConfig] = {}
        self._fingerprints: Dict[str, ConfigFileList] = {}
        self._pending: Dict[str, ConfigFileList] = {}
        self._lock = threading.Lock()

    def get(self, name: str) -> Optional[FrozenConfig]:
        with self._lock:
            return self._snapshots.get(name)

    def fingerprint(self, name: str) -> Optional[ConfigFileList]:
        with self._lock:
            return self._fingerprints.get(name)

    def entry(self, name: str) -> Tuple[Optional[FrozenConfig], Optional[ConfigFileList]]:
        with self._lock:
            return self._snapshots.get(name), self._fingerprints.get(name)

    def store(self, name: str, snapshot: FrozenConfig, files: ConfigFileList) -> None:
        with self._lock:
            self._snapshots[name] = snapshot
            self._fingerprints[name] = files
            self._pending.pop(name, None)

    def invalidate(self, name: str, files: Optional[ConfigFileList] = None) -> bool:
        """
        Descarta o snapshot de `name`, registrando `files` como novo fingerprint.

        `files` também fica pendente para a próxima reconstrução de `name`.

        Returns:
            bool: True se havia snapshot em cache.
        """
        with self._lock:
            had_snapshot = self._snapshots.pop(name, None) is not None
            if files is not None:
                self._fingerprints[name] = files
                self._pending[name] = files
            return had_snapshot

    def take_pending(self, name: str) -> Optional[ConfigFileList]:
        """Remove e devolve a lista resolvida pela última invalidação de `name`."""
        with self._lock:
            return self._pending.pop(name, None)

    def names(self) -> List[str]:
        with self._lock:
            return list(self._snapshots)

    def flush_all(self) -> None:
        with self._lock:
            self._snapshots.clear()
            self._fingerprints.clear()
            self._pending.clear()
