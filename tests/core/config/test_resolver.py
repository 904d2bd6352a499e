# tests/core/config/test_resolver.py
"""
Testes do resolver de arquivos candidatos e do parse do search path.

Os testes asseguram que:
- o search path aceita `;` ou `:` e descarta segmentos vazios
- a ordem é sufixo ascendente e, dentro do sufixo, diretórios invertidos
- arquivos inexistentes aparecem com mtime None
- a resolução é determinística
"""

import os

import pytest

from active_config.core.config.errors import SearchPathNotConfiguredError
from active_config.core.config.resolver import FileDescriptor, FileResolver, parse_search_path


def test_parse_search_path_colon_and_semicolon():
    assert parse_search_path("/a:/b::/c") == ("/a", "/b", "/c")
    assert parse_search_path("C:\\conf;D:\\conf;") == ("C:\\conf", "D:\\conf")


def test_parse_search_path_sequence():
    assert parse_search_path(["/a", "", "/b"]) == ("/a", "/b")


def test_parse_search_path_from_environment(monkeypatch):
    monkeypatch.setenv("ACTIVE_CONFIG_PATH", "/etc/app:/srv/app")
    assert parse_search_path(None) == ("/etc/app", "/srv/app")


def test_parse_search_path_missing_raises(monkeypatch):
    monkeypatch.delenv("ACTIVE_CONFIG_PATH", raising=False)
    with pytest.raises(SearchPathNotConfiguredError):
        parse_search_path(None)


def test_resolve_order_suffix_then_reversed_directories(tmp_path):
    first = tmp_path / "first"
    second = tmp_path / "second"
    resolver = FileResolver([str(first), str(second)], lambda n: [n, f"{n}_local"])

    files = resolver.resolve("app")

    assert [(f.suffixed_name, os.path.dirname(f.path)) for f in files] == [
        ("app", str(second)),
        ("app", str(first)),
        ("app_local", str(second)),
        ("app_local", str(first)),
    ]
    assert all(f.name == "app" for f in files)


def test_resolve_stats_existence_and_mtime(config_dir, writer):
    path = writer.write("app", "a: 1\n")
    resolver = FileResolver([str(config_dir)], lambda n: [n, f"{n}_local"])

    present, missing = resolver.resolve("app")

    assert isinstance(present, FileDescriptor)
    assert present.path == os.path.abspath(str(path))
    assert present.mtime == os.stat(path).st_mtime_ns
    assert present.exists
    assert missing.mtime is None
    assert not missing.exists


def test_resolve_is_deterministic_and_detects_changes(config_dir, writer):
    writer.write("app", "a: 1\n")
    resolver = FileResolver([str(config_dir)], lambda n: [n, f"{n}_local"])

    assert resolver.resolve("app") == resolver.resolve("app")

    before = resolver.resolve("app")
    writer.write("app_local", "b: 2\n")
    assert resolver.resolve("app") != before


def test_resolve_relative_directory_is_absolute(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    resolver = FileResolver(["conf"], lambda n: [n], extension=".yaml")
    (descriptor,) = resolver.resolve("app")
    assert descriptor.path == os.path.join(os.getcwd(), "conf", "app.yaml")


def test_parse_search_path_single_pathlike(tmp_path):
    assert parse_search_path(tmp_path) == (str(tmp_path),)
    assert parse_search_path([tmp_path, "/b"]) == (str(tmp_path), "/b")
