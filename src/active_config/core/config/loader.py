# src/active_config/core/config/loader.py
"""
Carregamento de arquivos de configuração com cache por caminho absoluto.

Este módulo lê arquivos YAML do disco, aplica o pré-processamento de
template quando o arquivo opta por ele e mantém um cache compartilhado
por caminho absoluto, de forma que o mesmo arquivo seja lido uma única
vez mesmo quando participa de várias configurações.

Responsabilidades do módulo:
    - Ler bytes do arquivo e decodificar como UTF-8
    - Renderizar templates (opt-in via marcador no arquivo)
    - Fazer parse YAML com `yaml.safe_load`
    - Validar que o root é um mapa (ou vazio)
    - Decidir, por mtime, se uma entrada do cache ainda é válida

Invariantes:
    - Arquivo inexistente produz conteúdo ausente (None), nunca erro
    - Falhas são encapsuladas com o caminho absoluto e a causa original
    - Falhas não são cacheadas: a entrada anterior permanece intacta

Limites explícitos:
    - Não faz merge entre arquivos
    - Não decide quando checar staleness (responsabilidade do chamador)
    - Não toca em snapshots
"""

from __future__ import annotations

import logging
import threading
from dataclasses import dataclass
from typing import Any, Callable, Dict, Mapping, Optional, Sequence

import yaml  # PyYAML

from .errors import FileReadError, InvalidConfigRootTypeError, ParseError
from .resolver import FileDescriptor
from .template import render_template, wants_template


logger = logging.getLogger(__name__)


def parse_text(text: str, path: str) -> Dict[str, Any]:
    """
    Faz parse do conteúdo YAML e valida sua estrutura básica.

    Arquivos vazios são interpretados como dicionários vazios.

    Raises:
        ParseError: Se o YAML for inválido.
        InvalidConfigRootTypeError: Se o conteúdo raiz não for um mapa.
    """
    try:
        data = yaml.safe_load(text)
    except yaml.YAMLError as err:
        raise ParseError(path, err) from err

    if data is None:
        data = {}

    if not isinstance(data, Mapping):
        raise InvalidConfigRootTypeError(
            path,
            message=f"while loading {path!r}: config root deve ser um mapa, recebido: {type(data).__name__}",
        )

    return dict(data)


def read_config_file(descriptor: FileDescriptor, files: Sequence[FileDescriptor]) -> Dict[str, Any]:
    """Lê, pré-processa (quando solicitado) e faz parse de um arquivo existente."""
    path = descriptor.path
    try:
        with open(path, "r", encoding="utf-8") as f:
            text = f.read()
    except (OSError, UnicodeDecodeError) as err:
        raise FileReadError(path, err) from err

    if wants_template(text):
        text = render_template(text, path=path, name=descriptor.name, files=files)

    return parse_text(text, path)


@dataclass(frozen=True)
class FileCacheEntry:
    content: Optional[Dict[str, Any]]
    mtime: Optional[int]
    loaded_at: float


class FileCache:
    """
    Cache compartilhado de conteúdo parseado, indexado por caminho absoluto.

    Uma entrada é reutilizada enquanto o mtime observado na resolução for
    igual ao mtime registrado na última leitura.

    Invariantes:
        - Configurações diferentes que resolvem o mesmo caminho
          compartilham a mesma entrada
        - Checagem, leitura e gravação de um caminho acontecem sob o
          lock daquele caminho; leituras concorrentes do mesmo arquivo
          viram uma só
    """

    def __init__(self, clock: Callable[[], float], log_level: Callable[[], int] = lambda: logging.DEBUG):
        self._clock = clock
        self._log_level = log_level
        self._entries: Dict[str, FileCacheEntry] = {}
        self._path_locks: Dict[str, threading.Lock] = {}
        self._lock = threading.Lock()

    def _path_lock(self, path: str) -> threading.Lock:
        with self._lock:
            lock = self._path_locks.get(path)
            if lock is None:
                lock = self._path_locks[path] = threading.Lock()
            return lock

    def get(self, path: str) -> Optional[FileCacheEntry]:
        with self._lock:
            return self._entries.get(path)

    def ensure_loaded(
        self,
        descriptor: FileDescriptor,
        files: Sequence[FileDescriptor],
        force: bool = False,
    ) -> Optional[Dict[str, Any]]:
        """
        Devolve o conteúdo de `descriptor`, relendo o arquivo só quando necessário.

        Args:
            descriptor: Arquivo candidato com o mtime observado na resolução.
            files: Lista completa de candidatos (exposta ao template).
            force: Relê mesmo com mtime igual ao da entrada em cache.

        Returns:
            Optional[Dict[str, Any]]: Conteúdo parseado, ou None se o
            arquivo não existe.

        Raises:
            ConfigLoadError: Em falha de leitura, template ou parse. A
                entrada anterior (se houver) é mantida.
        """
        with self._path_lock(descriptor.path):
            entry = self.get(descriptor.path)
            if entry is not None and not force and entry.mtime == descriptor.mtime:
                return entry.content

            content: Optional[Dict[str, Any]] = None
            if descriptor.exists:
                logger.log(self._log_level(), "loading %s", descriptor.path)
                content = read_config_file(descriptor, files)

            with self._lock:
                self._entries[descriptor.path] = FileCacheEntry(content, descriptor.mtime, self._clock())
            return content

    def clear(self) -> None:
        with self._lock:
            self._entries.clear()

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)
