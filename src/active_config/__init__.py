# src/active_config/__init__.py
"""
ActiveConfig — configuração hierárquica em YAML com overlay por ambiente e host.

Arquivos de uma mesma configuração (ex.: `global.yml`, `global_local.yml`,
`global_production.yml`) são combinados em um snapshot imutável, mantido
em cache e recarregado automaticamente quando os arquivos mudam.

Arquitetura em alto nível:
    - core.config → resolver, cache de arquivos, weave, snapshots,
                    staleness e callbacks, compostos pelo ConfigStore
    - facade      → acesso de conveniência (`cfg.global_.chave`, `cfg["chave"]`)
"""

from .core.config import (
    ANY,
    ConfigError,
    ConfigLoadError,
    ConfigStore,
    FileDescriptor,
    FileReadError,
    FrozenConfig,
    InvalidConfigRootTypeError,
    ParseError,
    SearchPathNotConfiguredError,
    Suffixes,
    TemplatePreprocessError,
)
from .facade import ActiveConfig

__all__ = [
    "ANY",
    "ActiveConfig",
    "ConfigError",
    "ConfigLoadError",
    "ConfigStore",
    "FileDescriptor",
    "FileReadError",
    "FrozenConfig",
    "InvalidConfigRootTypeError",
    "ParseError",
    "SearchPathNotConfiguredError",
    "Suffixes",
    "TemplatePreprocessError",
]
