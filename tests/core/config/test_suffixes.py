# tests/core/config/test_suffixes.py
"""Testes do gerador padrão de sufixos."""

from active_config.core.config.suffixes import Suffixes


def test_default_order_with_explicit_environment_and_host():
    suffixes = Suffixes(environment="production", hostname="web1")
    assert suffixes("global") == [
        "global",
        "global_local",
        "global_config",
        "global_local_config",
        "global_production",
        "global_production_local",
        "global_web1",
        "global_web1_config_local",
    ]


def test_environment_and_host_from_env_vars(monkeypatch):
    monkeypatch.setenv("ACTIVE_CONFIG_ENV", "test")
    monkeypatch.setenv("ACTIVE_CONFIG_HOSTNAME", "box")
    out = Suffixes()("app")
    assert "app_test" in out
    assert out[-1] == "app_box_config_local"


def test_defaults_without_env_vars(monkeypatch):
    monkeypatch.delenv("ACTIVE_CONFIG_ENV", raising=False)
    monkeypatch.delenv("ACTIVE_CONFIG_HOSTNAME", raising=False)
    monkeypatch.setattr("socket.gethostname", lambda: "host.example.com")
    suffixes = Suffixes()
    assert suffixes.environment == "development"
    assert suffixes.hostname == "host"


def test_environment_and_host_can_be_reassigned(monkeypatch):
    monkeypatch.delenv("ACTIVE_CONFIG_ENV", raising=False)
    suffixes = Suffixes(environment="production", hostname="web1")

    suffixes.environment = "test"
    suffixes.hostname = "web2"
    assert "app_test" in suffixes("app")
    assert suffixes("app")[-1] == "app_web2_config_local"

    suffixes.environment = None
    assert suffixes.environment == "development"
