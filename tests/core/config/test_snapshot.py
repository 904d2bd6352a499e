# tests/core/config/test_snapshot.py
"""
Testes do snapshot imutável (normalização de chaves, freeze e walk).

Os testes asseguram que:
- chaves equivalentes (string, Enum, int) resolvem para o mesmo valor
- nenhuma parte do snapshot pode ser mutada
- freeze é idempotente (aplicar duas vezes devolve o mesmo objeto)
- walk retorna ausente em vez de levantar exceção
"""

import copy
import pickle
from enum import Enum

import pytest

from active_config.core.config.snapshot import FrozenConfig, freeze, normalize_key, thaw, walk


class Key(Enum):
    HOST = "host"
    PORT = 2


@pytest.fixture
def snapshot():
    return freeze(
        {
            "host": "localhost",
            "PORT": 5432,
            1: "one",
            "replicas": [{"host": "r1"}, {"host": "r2"}],
            "tags": ["a", "b"],
            "nested": {"deep": {"value": True}},
        }
    )


def test_normalize_key_canonical_forms():
    assert normalize_key("host") == "host"
    assert normalize_key(Key.HOST) == "host"
    assert normalize_key(Key.PORT) == "PORT"
    assert normalize_key(b"host") == "host"
    assert normalize_key(1) == "1"


def test_string_and_symbolic_keys_resolve_identically(snapshot):
    assert snapshot["host"] is snapshot[Key.HOST]
    assert snapshot["PORT"] == snapshot[Key.PORT] == 5432
    assert snapshot[1] == snapshot["1"] == "one"
    assert Key.HOST in snapshot
    assert snapshot.get(Key.HOST) == "localhost"


def test_attribute_access(snapshot):
    assert snapshot.host == "localhost"
    assert snapshot.nested.deep.value is True
    with pytest.raises(AttributeError):
        snapshot.missing


def test_sequences_and_nested_maps_are_frozen(snapshot):
    assert isinstance(snapshot["replicas"], tuple)
    assert isinstance(snapshot["replicas"][0], FrozenConfig)
    assert snapshot["tags"] == ("a", "b")


def test_snapshot_is_immutable(snapshot):
    with pytest.raises(TypeError):
        snapshot["host"] = "other"
    with pytest.raises(TypeError):
        snapshot.host = "other"
    with pytest.raises(TypeError):
        del snapshot.host
    with pytest.raises(TypeError):
        snapshot["nested"]["deep"]["value"] = False
    with pytest.raises(AttributeError):
        snapshot["tags"].append("c")


def test_freeze_is_idempotent(snapshot):
    assert freeze(snapshot) is snapshot
    nested = snapshot["replicas"]
    assert freeze(nested) is nested


def test_freeze_does_not_share_state_with_source():
    source = {"a": {"b": [1, 2]}}
    snap = freeze(source)
    source["a"]["b"].append(3)
    source["a"]["c"] = 1
    assert snap == {"a": {"b": (1, 2)}}


def test_thaw_returns_mutable_copy(snapshot):
    data = thaw(snapshot)
    assert isinstance(data, dict)
    assert data["replicas"] == [{"host": "r1"}, {"host": "r2"}]
    data["host"] = "changed"
    assert snapshot["host"] == "localhost"
    assert snapshot.to_dict() == thaw(snapshot)


def test_copy_and_pickle(snapshot):
    assert copy.copy(snapshot) is snapshot
    assert copy.deepcopy(snapshot) is snapshot
    restored = pickle.loads(pickle.dumps(snapshot))
    assert restored == snapshot
    assert isinstance(restored, FrozenConfig)


def test_walk_maps_and_indices(snapshot):
    assert walk(snapshot, ["nested", "deep", "value"]) is True
    assert walk(snapshot, ["replicas", 1, "host"]) == "r2"
    assert walk(snapshot, ["replicas", -1, "host"]) == "r2"
    assert walk(snapshot, [Key.HOST]) == "localhost"
    assert walk(snapshot, []) is snapshot


def test_walk_returns_default_on_miss(snapshot):
    assert walk(snapshot, ["nested", "z"]) is None
    assert walk(snapshot, ["replicas", 5]) is None
    assert walk(snapshot, ["replicas", "host"]) is None
    assert walk(snapshot, ["replicas", True]) is None
    assert walk(snapshot, ["host", "inner"]) is None
    assert walk(snapshot, ["nested", "z"], default="fallback") == "fallback"


def test_reinit_does_not_replace_content(snapshot):
    snapshot.__init__({"host": "hijacked"})
    assert snapshot["host"] == "localhost"
    assert "hijacked" not in snapshot.values()
