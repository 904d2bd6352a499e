# src/active_config/core/config/notify.py
"""
Registro de callbacks disparados quando uma configuração muda.

Callbacks são registrados por nome de configuração ou sob o sentinela
`ANY` (qualquer configuração). Cada callback é chamado uma vez no momento
do registro, para que o assinante inicialize seu estado sem um bootstrap
separado.

Invariantes:
    - Ordem de disparo: primeiro `ANY`, depois o nome, em ordem de registro
    - Duplicatas (por igualdade, o que inclui bound methods equivalentes)
      são disparadas uma única vez
    - Exceções de callbacks não são capturadas
"""

from __future__ import annotations

import threading
from typing import Callable, Dict, Iterable, List


ANY = "ANY"

Callback = Callable[[], object]


class CallbackRegistry:
    def __init__(self) -> None:
        self._callbacks: Dict[str, List[Callback]] = {}
        self._lock = threading.Lock()

    def subscribe(self, names: Iterable[object], callback: Callback) -> Callback:
        """
        Registra `callback` sob cada nome de `names` (ou sob `ANY`).

        O callback é chamado uma vez antes do registro; se levantar, a
        exceção propaga e nada é registrado.

        Args:
            names: Nomes de configuração; vazio significa qualquer uma.
            callback: Callable sem argumentos.

        Returns:
            Callback: O próprio `callback`, para uso como decorator.
        """
        keys = [str(n) for n in names] or [ANY]

        callback()

        with self._lock:
            for key in keys:
                self._callbacks.setdefault(key, []).append(callback)
        return callback

    def callbacks_for(self, name: str) -> List[Callback]:
        with self._lock:
            candidates = self._callbacks.get(ANY, []) + self._callbacks.get(name, [])

        unique: List[Callback] = []
        for cb in candidates:
            if cb not in unique:
                unique.append(cb)
        return unique

    def fire(self, name: str) -> int:
        """Dispara os callbacks de `name`; retorna quantos foram chamados."""
        callbacks = self.callbacks_for(name)
        for cb in callbacks:
            cb()
        return len(callbacks)

    def clear(self) -> None:
        with self._lock:
            self._callbacks.clear()
