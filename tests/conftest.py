# tests/conftest.py
"""
Fixtures compartilhados para testes do ActiveConfig.

Este módulo define fixtures reutilizáveis que fornecem:
- conteúdos YAML mínimos e determinísticos
- um diretório temporário de configuração
- escrita de arquivos com mtime explícito (detecção de mudança determinística)
- um relógio controlável para testar o gate de staleness
- um gerador de sufixos reduzido (`nome`, `nome_local`)

Decisões arquiteturais:
    - O mtime é sempre definido via `os.utime`, nunca herdado do relógio real
    - O tempo do store é injetado (FakeClock), nunca `time.sleep`
    - Cada teste usa seu próprio ConfigStore (sem estado global)
"""

import os
from pathlib import Path

import pytest


class FakeClock:
    """Relógio monotônico manual."""

    def __init__(self, start: float = 1000.0):
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


class ConfigWriter:
    """Escreve arquivos `.yml` com mtimes estritamente crescentes."""

    def __init__(self, directory: Path):
        self.directory = directory
        self._mtime_ns = 1_600_000_000 * 1_000_000_000

    def write(self, name: str, text: str, directory: Path = None) -> Path:
        target_dir = directory or self.directory
        target_dir.mkdir(parents=True, exist_ok=True)
        path = target_dir / f"{name}.yml"
        path.write_text(text, encoding="utf-8")
        self._mtime_ns += 1_000_000_000
        os.utime(path, ns=(self._mtime_ns, self._mtime_ns))
        return path

    def remove(self, name: str, directory: Path = None) -> None:
        ((directory or self.directory) / f"{name}.yml").unlink()


def local_suffixes(name):
    return [name, f"{name}_local"]


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def config_dir(tmp_path: Path) -> Path:
    d = tmp_path / "config"
    d.mkdir()
    return d


@pytest.fixture
def writer(config_dir: Path) -> ConfigWriter:
    return ConfigWriter(config_dir)


@pytest.fixture
def make_store(config_dir: Path, clock: FakeClock):
    """Factory de ConfigStore apontando para `config_dir` com relógio falso."""
    from active_config.core.config.store import ConfigStore

    def _make(**options):
        options.setdefault("path", str(config_dir))
        options.setdefault("suffixes", local_suffixes)
        options.setdefault("clock", clock)
        options.setdefault("reload_delay", 300)
        return ConfigStore(**options)

    return _make


@pytest.fixture
def app_yaml() -> str:
    """
    Arquivo base `app.yml` (menor precedência).

    Returns:
        str: Conteúdo YAML da configuração base.
    """
    return """\
a: 1
nested:
  x: base
"""


@pytest.fixture
def app_local_yaml() -> str:
    """
    Override `app_local.yml` (maior precedência).

    Returns:
        str: Conteúdo YAML do override local.
    """
    return """\
nested:
  y: local
b: 2
"""
