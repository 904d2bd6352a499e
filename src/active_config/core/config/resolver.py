# src/active_config/core/config/resolver.py
"""
Resolução dos arquivos candidatos de uma configuração.

Dado um nome de configuração, este módulo combina a lista de sufixos
(fornecida pelo gerador de sufixos) com o search path e produz a lista
ordenada de `FileDescriptor`, que também serve de fingerprint para
detecção de mudanças.

Política de ordenação:
    - sufixos em ordem ascendente de precedência
    - para cada sufixo, diretórios do search path do último para o primeiro;
      como o weave aplica a lista da esquerda para a direita, o primeiro
      diretório do search path vence dentro de um mesmo sufixo

Invariantes:
    - Arquivos inexistentes também aparecem (com `mtime=None`), para que
      o surgimento ou a remoção de um arquivo altere o fingerprint
    - Mesmas entradas (sufixos, search path, filesystem) produzem sempre
      a mesma lista

Limites explícitos:
    - Não lê conteúdo de arquivos
    - Não mantém cache
"""

from __future__ import annotations

import os
from typing import Callable, List, NamedTuple, Optional, Sequence, Tuple, Union

from .errors import SearchPathNotConfiguredError


PATH_ENV_VAR = "ACTIVE_CONFIG_PATH"
DEFAULT_EXTENSION = ".yml"


class FileDescriptor(NamedTuple):
    """Arquivo candidato: (nome, nome sufixado, caminho absoluto, mtime ou None)."""

    name: str
    suffixed_name: str
    path: str
    mtime: Optional[int]

    @property
    def exists(self) -> bool:
        return self.mtime is not None


ConfigFileList = Tuple[FileDescriptor, ...]


def parse_search_path(raw: Union[str, "os.PathLike[str]", Sequence[str], None]) -> Tuple[str, ...]:
    """
    Converte o search path em uma tupla de diretórios.

    Strings são separadas por `;` quando o caractere aparece, senão por `:`.
    Um único `os.PathLike` (ex.: `pathlib.Path`) vira um diretório só.
    Segmentos vazios são descartados.

    Raises:
        SearchPathNotConfiguredError: Se `raw` for None e a variável de
            ambiente `ACTIVE_CONFIG_PATH` não estiver definida.
    """
    if raw is None:
        raw = os.environ.get(PATH_ENV_VAR)
    if raw is None:
        raise SearchPathNotConfiguredError(
            f"Search path não configurado: informe `path` ou defina {PATH_ENV_VAR}"
        )

    if isinstance(raw, str):
        sep = ";" if ";" in raw else ":"
        parts = raw.split(sep)
    elif isinstance(raw, os.PathLike):
        parts = [os.fspath(raw)]
    else:
        parts = [os.fspath(p) for p in raw]

    return tuple(p for p in parts if p)


def _stat_mtime(path: str) -> Optional[int]:
    try:
        return os.stat(path).st_mtime_ns
    except (FileNotFoundError, NotADirectoryError):
        return None


class FileResolver:
    """Lista os arquivos candidatos de um nome de configuração."""

    def __init__(
        self,
        search_path: Sequence[str],
        suffixes: Callable[[str], Sequence[str]],
        extension: str = DEFAULT_EXTENSION,
    ):
        self.search_path = tuple(search_path)
        self.suffixes = suffixes
        self.extension = extension

    def resolve(self, name: str) -> ConfigFileList:
        """
        Lista os candidatos de `name`, do menos para o mais prioritário.

        Para cada nome sufixado (em ordem), percorre o search path de trás
        para frente; assim, dentro de um sufixo, o primeiro diretório vence.
        Arquivos inexistentes entram com `mtime=None`.

        Returns:
            ConfigFileList: Tupla comparável por igualdade (fingerprint).
        """
        files: List[FileDescriptor] = []
        for suffixed in self.suffixes(name):
            for directory in reversed(self.search_path):
                path = os.path.abspath(os.path.join(directory, f"{suffixed}{self.extension}"))
                files.append(FileDescriptor(name, suffixed, path, _stat_mtime(path)))
        return tuple(files)
