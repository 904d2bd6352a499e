# src/active_config/core/config/store.py
"""
ConfigStore — composição canônica do ActiveConfig.

O store reúne, em uma única instância injetável, todo o estado que
antes era global ao processo:

    - política de recarga (desabilitada, intervalo, verbosidade)
    - cache de arquivos (por caminho absoluto)
    - cache de snapshots e fingerprints (por nome)
    - timestamps de checagem de staleness (por nome)
    - registro de callbacks de mudança

Fluxo de acesso:
    1. `get_configuration(nome)` pergunta ao controle de staleness se
       já passou tempo suficiente para checar os arquivos
    2. em caso positivo, o resolver lista os arquivos e compara com o
       fingerprint; se mudou, o snapshot é invalidado e os callbacks
       do nome são disparados
    3. o snapshot em cache é retornado, ou reconstruído
       (resolve → load → weave → freeze) quando ausente; após uma
       invalidação, a reconstrução usa a lista que a checagem resolveu

Concorrência:
    - um RLock por nome serializa checagem e reconstrução daquele nome
    - nomes diferentes não bloqueiam uns aos outros
    - callbacks rodam fora do lock do nome

Limites explícitos:
    - Não valida schema
    - Não observa o filesystem em background; toda checagem é disparada
      por um acesso ou chamada explícita
"""

from __future__ import annotations

import logging
import os
import threading
import time
from contextlib import contextmanager
from typing import Any, Callable, Dict, Iterator, List, Optional, Sequence, TypeVar, Union

from .hashing import compute_config_hash
from .loader import FileCache
from .merge import merge_contents
from .notify import Callback, CallbackRegistry
from .resolver import DEFAULT_EXTENSION, ConfigFileList, FileResolver, parse_search_path
from .snapshot import FrozenConfig, walk
from .snapshot_cache import SnapshotCache
from .staleness import DEFAULT_RELOAD_DELAY, ReloadPolicy, StalenessController
from .suffixes import Suffixes


logger = logging.getLogger(__name__)

T = TypeVar("T")


class ConfigStore:
    """
    Store de configuração com cache em camadas e recarga por staleness.

    Args:
        path: Search path (string separada por `;`/`:`, um único
            `os.PathLike` ou sequência de diretórios). Quando omitido,
            usa `ACTIVE_CONFIG_PATH`.
        suffixes: Callable `nome -> Sequence[str]` com os nomes sufixados
            em ordem ascendente de precedência. Padrão: `Suffixes()`.
        reload_delay: Intervalo mínimo (segundos) entre checagens por nome.
        extension: Extensão dos arquivos candidatos.
        clock: Fonte de tempo monotônica.
        verbose: Promove os logs de cache de DEBUG para INFO.
        concat_lists: Concatena listas no weave em vez de substituí-las.

    Raises:
        SearchPathNotConfiguredError: Se nenhum search path for encontrado.
    """

    def __init__(
        self,
        *,
        path: Union[str, "os.PathLike[str]", Sequence[str], None] = None,
        suffixes: Optional[Callable[[str], Sequence[str]]] = None,
        reload_delay: Optional[float] = DEFAULT_RELOAD_DELAY,
        extension: str = DEFAULT_EXTENSION,
        clock: Callable[[], float] = time.monotonic,
        verbose: bool = False,
        concat_lists: bool = False,
    ):
        self.search_path = parse_search_path(path)
        self.suffixes = suffixes if suffixes is not None else Suffixes()
        self.concat_lists = concat_lists
        self.policy = ReloadPolicy(verbose=verbose)
        self.set_reload_delay(reload_delay)

        self._lock = threading.RLock()
        self._name_locks: Dict[str, threading.RLock] = {}

        self.resolver = FileResolver(self.search_path, self.suffixes, extension)
        self.files = FileCache(clock, self._log_level)
        self.snapshots = SnapshotCache()
        self.callbacks = CallbackRegistry()
        self.staleness = StalenessController(
            self.policy, self.resolver, self.snapshots, clock, self._name_lock
        )

    # -----------------------------
    # Internals
    # -----------------------------
    def _log_level(self) -> int:
        return logging.INFO if self.policy.verbose else logging.DEBUG

    def _name_lock(self, name: str) -> threading.RLock:
        with self._lock:
            lock = self._name_locks.get(name)
            if lock is None:
                lock = self._name_locks[name] = threading.RLock()
            return lock

    def _snapshot(self, name: str) -> FrozenConfig:
        snapshot = self.snapshots.get(name)
        if snapshot is not None:
            return snapshot

        with self._name_lock(name):
            snapshot = self.snapshots.get(name)
            if snapshot is not None:
                return snapshot

            # Reaproveita a lista resolvida pela checagem que invalidou o nome.
            files = self.snapshots.take_pending(name)
            if files is None:
                files = self.resolver.resolve(name)
            contents = [self.files.ensure_loaded(d, files) for d in files]
            snapshot = merge_contents(contents, self.concat_lists)
            self.snapshots.store(name, snapshot, files)

        level = self._log_level()
        if logger.isEnabledFor(level):
            logger.log(
                level,
                "config %r rebuilt from %d file(s), hash=%s",
                name,
                sum(1 for d in files if d.exists),
                compute_config_hash(snapshot)[:12],
            )
        return snapshot

    # -----------------------------
    # Access
    # -----------------------------
    def get_configuration(self, name: Any) -> FrozenConfig:
        """
        Snapshot atual da configuração `name`.

        Se o intervalo de recarga desse nome expirou, checa os arquivos
        antes (uma única rodada de resolução; a reconstrução reaproveita
        a lista). Entre checagens, nenhum I/O é feito.

        Args:
            name: Nome da configuração (convertido com `str()`).

        Returns:
            FrozenConfig: Snapshot imutável; vazio se nenhum arquivo existir.

        Raises:
            ConfigLoadError: Se algum arquivo existente falhar ao carregar.
        """
        name = str(name)
        if self.staleness.should_check(name):
            self.check_config_changed(name)
        return self._snapshot(name)

    def lookup(self, name: Any, *path: Any, default: Any = None) -> Any:
        """
        Percorre o snapshot de `name` por chaves de mapa e índices de lista.

        Segmentos inexistentes, índices fora do intervalo e tipos
        incompatíveis retornam `default` em vez de levantar exceção.
        """
        return walk(self.get_configuration(name), path, default)

    def load_config_files(self, name: Any, force: bool = False) -> List[Dict[str, Any]]:
        """Conteúdo parseado de cada arquivo existente de `name`, em ordem de precedência."""
        name = str(name)
        files = self.resolver.resolve(name)
        contents = [self.files.ensure_loaded(d, files, force=force) for d in files]
        return [c for c in contents if c is not None]

    def config_files(self, name: Any) -> ConfigFileList:
        name = str(name)
        return self.snapshots.fingerprint(name) or self.resolver.resolve(name)

    def config_hash(self, name: Any) -> str:
        return compute_config_hash(self.get_configuration(name))

    # -----------------------------
    # Change detection
    # -----------------------------
    def has_changed(self, name: Any) -> bool:
        """
        Indica se a lista de arquivos de `name` difere do fingerprint guardado.

        Consulta sem efeitos colaterais: ignora o gate de tempo e a flag
        de recarga, e não invalida o snapshot.
        """
        return self.staleness.has_changed(str(name))

    def check_config_changed(self, name: Any = None) -> List[str]:
        """
        Checa imediatamente (sem o gate de tempo) e invalida o que mudou.

        Sem `name`, checa todos os nomes com snapshot em cache. Callbacks
        dos nomes invalidados são disparados; suas exceções propagam.

        Returns:
            List[str]: Nomes invalidados.
        """
        names = None if name is None else [str(name)]
        invalidated = self.staleness.check_and_invalidate(names)
        for changed in invalidated:
            logger.log(self._log_level(), "config %r changed", changed)
            fired = self.callbacks.fire(changed)
            if fired:
                logger.log(self._log_level(), "config %r: %d on_load callback(s) fired", changed, fired)
        return invalidated

    def on_load(self, *names: Any, callback: Optional[Callback] = None):
        """
        Registra `callback` para mudanças de `names` (ou de qualquer config).

        O callback é chamado imediatamente no registro. Sem `callback`,
        retorna um decorator.
        """
        if callback is None:
            def decorator(fn: Callback) -> Callback:
                return self.callbacks.subscribe(names, fn)
            return decorator
        return self.callbacks.subscribe(names, callback)

    # -----------------------------
    # Suffixes
    # -----------------------------
    def set_suffixes(self, suffixes: Callable[[str], Sequence[str]]) -> None:
        """
        Troca o gerador de sufixos e descarta todos os caches.

        Args:
            suffixes: Callable `nome -> Sequence[str]`.
        """
        with self._lock:
            self.suffixes = suffixes
            self.resolver.suffixes = suffixes
        self.flush_cache()

    def set_environment(self, environment: Optional[str]) -> None:
        """
        Troca o ambiente usado pelos sufixos e descarta todos os caches.

        None volta a ler `ACTIVE_CONFIG_ENV`.

        Raises:
            TypeError: Se o gerador de sufixos não expõe `environment`.
        """
        self._set_suffix_attribute("environment", environment)

    def set_hostname(self, hostname: Optional[str]) -> None:
        """Troca o host usado pelos sufixos e descarta todos os caches."""
        self._set_suffix_attribute("hostname", hostname)

    def _set_suffix_attribute(self, attribute: str, value: Optional[str]) -> None:
        if not hasattr(self.suffixes, attribute):
            raise TypeError(f"gerador de sufixos {self.suffixes!r} não suporta `{attribute}`")
        with self._lock:
            setattr(self.suffixes, attribute, value)
        logger.log(self._log_level(), "suffix %s set to %r", attribute, value)
        self.flush_cache()

    # -----------------------------
    # Reload policy
    # -----------------------------
    @property
    def is_reload_disabled(self) -> bool:
        return self.policy.disabled

    def set_reload_disabled(self, disabled: Optional[bool]) -> None:
        """Liga ou desliga a recarga automática. None equivale a False."""
        with self._lock:
            self.policy.reload_disabled = bool(disabled)

    def set_reload_delay(self, seconds: Optional[float]) -> None:
        """
        Define o intervalo mínimo entre checagens de um mesmo nome.

        Args:
            seconds: Segundos; None restaura o padrão (300).

        Raises:
            ValueError: Se `seconds` for negativo.
        """
        if seconds is None:
            seconds = DEFAULT_RELOAD_DELAY
        if seconds < 0:
            raise ValueError(f"reload_delay deve ser >= 0, recebido: {seconds}")
        self.policy.reload_delay = seconds

    def set_verbose(self, verbose: Optional[bool]) -> None:
        self.policy.verbose = bool(verbose)

    @contextmanager
    def reload_disabled(self) -> Iterator[None]:
        """
        Desabilita a recarga durante o bloco, com suporte a aninhamento.

        O valor de `set_reload_disabled` vigente na entrada é restaurado na
        saída, mesmo que o bloco o altere. Ao sair do bloco mais externo
        (com a recarga novamente habilitada), uma checagem global é
        executada imediatamente.
        """
        with self._lock:
            saved = self.policy.reload_disabled
            self.policy.disable_depth += 1
        try:
            yield
        finally:
            with self._lock:
                self.policy.reload_disabled = saved
                self.policy.disable_depth -= 1
                enabled = not self.policy.disabled
            if enabled:
                self.check_config_changed()

    def disable_reload(self, work: Callable[[], T]) -> T:
        """Executa `work()` dentro de `reload_disabled()` e devolve seu resultado."""
        with self.reload_disabled():
            return work()

    def reload(self, force: bool = False) -> None:
        """Descarta os caches, exceto com recarga desabilitada e sem `force`."""
        if force or not self.policy.disabled:
            self.flush_cache()

    def flush_cache(self) -> None:
        """Descarta snapshots, fingerprints, arquivos e timestamps. Não use em produção."""
        self.snapshots.flush_all()
        self.files.clear()
        self.staleness.reset()
        logger.log(self._log_level(), "config cache flushed")
