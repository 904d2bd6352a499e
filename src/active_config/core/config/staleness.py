# src/active_config/core/config/staleness.py
"""
Política de recarga e controle de staleness.

Cada nome de configuração possui um timestamp de última checagem. Uma
checagem só acontece quando não existe timestamp anterior ou quando
`agora - última_checagem > reload_delay`. Entre checagens, o acesso ao
snapshot em cache não faz nenhum I/O.

A checagem re-executa o resolver, compara a lista de arquivos com o
fingerprint guardado e, quando difere (e a recarga está habilitada),
invalida o snapshot daquele nome.

Decisões arquiteturais:
    - Com recarga desabilitada a checagem automática não toca o disco;
      `has_changed` continua disponível para consulta manual
    - O teste do intervalo é atômico (test-and-set), então chamadas
      concorrentes disparam no máximo uma checagem por intervalo
"""

from __future__ import annotations

import threading
from contextlib import AbstractContextManager
from dataclasses import dataclass
from typing import Callable, Dict, Iterable, List, Optional

from .resolver import ConfigFileList, FileResolver
from .snapshot_cache import SnapshotCache


DEFAULT_RELOAD_DELAY = 300


@dataclass
class ReloadPolicy:
    """Estado de recarga do store (antes global ao processo)."""

    # `reload_disabled` é a flag explícita; `disable_depth` conta blocos
    # `reload_disabled()` ativos.
    reload_disabled: bool = False
    reload_delay: float = DEFAULT_RELOAD_DELAY
    verbose: bool = False
    disable_depth: int = 0

    @property
    def disabled(self) -> bool:
        return self.reload_disabled or self.disable_depth > 0


class StalenessController:
    """Decide quando checar um nome e invalida os snapshots cujos arquivos mudaram."""

    def __init__(
        self,
        policy: ReloadPolicy,
        resolver: FileResolver,
        snapshots: SnapshotCache,
        clock: Callable[[], float],
        name_lock: Callable[[str], AbstractContextManager],
    ):
        self.policy = policy
        self.resolver = resolver
        self.snapshots = snapshots
        self._clock = clock
        self._name_lock = name_lock
        self._last_check: Dict[str, float] = {}
        self._lock = threading.Lock()

    def should_check(self, name: str) -> bool:
        now = self._clock()
        with self._lock:
            last = self._last_check.get(name)
            if last is not None and now - last <= self.policy.reload_delay:
                return False
            self._last_check[name] = now
            return True

    def has_changed(self, name: str) -> bool:
        """Compara o fingerprint guardado com uma resolução nova, sem invalidar nada."""
        return self.snapshots.fingerprint(name) != self.resolver.resolve(name)

    def check_and_invalidate(self, names: Optional[Iterable[str]] = None) -> List[str]:
        """
        Invalida os snapshots cujos arquivos mudaram.

        Sem `names`, checa todos os nomes que possuem snapshot em cache.
        A lista resolvida de cada nome invalidado fica pendente no cache
        de snapshots e é reaproveitada pela reconstrução seguinte.

        Returns:
            List[str]: Nomes cujo snapshot foi invalidado.
        """
        if self.policy.disabled:
            return []

        targets = self.snapshots.names() if names is None else list(names)
        invalidated: List[str] = []
        for name in targets:
            with self._name_lock(name):
                if self.snapshots.get(name) is None:
                    continue
                current: ConfigFileList = self.resolver.resolve(name)
                if self.snapshots.fingerprint(name) == current:
                    continue
                if self.snapshots.invalidate(name, current):
                    invalidated.append(name)
        return invalidated

    def reset(self) -> None:
        with self._lock:
            self._last_check.clear()
