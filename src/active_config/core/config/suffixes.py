# src/active_config/core/config/suffixes.py
"""
Gerador padrão da lista de sufixos de uma configuração.

A ordem define a precedência do overlay (menor precedência primeiro):

    global
    global_local
    global_config
    global_local_config
    global_<ambiente>
    global_<ambiente>_local
    global_<host>
    global_<host>_config_local

O ambiente vem de `ACTIVE_CONFIG_ENV` (padrão `development`) e o host de
`ACTIVE_CONFIG_HOSTNAME` ou do nome curto da máquina.

Qualquer callable `nome -> Sequence[str]` pode substituir esta classe
no `ConfigStore`.
"""

from __future__ import annotations

import os
import socket
from typing import List, Optional


ENV_VAR = "ACTIVE_CONFIG_ENV"
HOSTNAME_VAR = "ACTIVE_CONFIG_HOSTNAME"
DEFAULT_ENVIRONMENT = "development"


def _short_hostname() -> str:
    return socket.gethostname().split(".")[0]


class Suffixes:
    """
    Gerador de sufixos por ambiente e host.

    Args:
        environment: Ambiente explícito; None lê `ACTIVE_CONFIG_ENV`.
        hostname: Host explícito; None lê `ACTIVE_CONFIG_HOSTNAME` ou a máquina.

    `environment` e `hostname` podem ser reatribuídos em runtime (None
    volta ao padrão). Use `ConfigStore.set_environment` /
    `set_hostname` para que os caches sejam descartados junto.
    """

    def __init__(self, environment: Optional[str] = None, hostname: Optional[str] = None):
        self._environment = environment
        self._hostname = hostname

    @property
    def environment(self) -> str:
        return self._environment or os.environ.get(ENV_VAR) or DEFAULT_ENVIRONMENT

    @environment.setter
    def environment(self, value: Optional[str]) -> None:
        self._environment = value

    @property
    def hostname(self) -> str:
        return self._hostname or os.environ.get(HOSTNAME_VAR) or _short_hostname()

    @hostname.setter
    def hostname(self, value: Optional[str]) -> None:
        self._hostname = value

    def __call__(self, name: str) -> List[str]:
        env = self.environment
        host = self.hostname
        parts = [
            [],
            ["local"],
            ["config"],
            ["local", "config"],
            [env],
            [env, "local"],
            [host],
            [host, "config", "local"],
        ]
        return ["_".join([name, *p]) for p in parts]
