# src/active_config/core/config/__init__.py

"""
Camada de configuração do ActiveConfig.

Este pacote contém as estruturas responsáveis por localizar, carregar,
mesclar e manter em cache configurações hierárquicas em YAML.

Responsabilidades do pacote:
    - Resolução de arquivos por sufixo e search path (resolver, suffixes)
    - Carregamento com template opcional e cache por arquivo (loader, template)
    - Weave determinístico e snapshot imutável (merge, snapshot)
    - Cache de snapshots, staleness e callbacks de mudança
      (snapshot_cache, staleness, notify)
    - Composição de tudo em um store injetável (store)

Invariantes:
    - Snapshots expostos são imutáveis
    - A ordem de overlay é determinística
    - Erros de carregamento identificam o arquivo ofensor
"""

from .errors import (
    ConfigError,
    ConfigLoadError,
    FileReadError,
    InvalidConfigRootTypeError,
    ParseError,
    SearchPathNotConfiguredError,
    TemplatePreprocessError,
)
from .notify import ANY
from .resolver import FileDescriptor
from .snapshot import FrozenConfig, freeze, normalize_key, thaw, walk
from .store import ConfigStore
from .suffixes import Suffixes

__all__ = [
    "ANY",
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
    "freeze",
    "normalize_key",
    "thaw",
    "walk",
]
