"""Tests for the high-level pairing manager."""

import pytest

from hap_credentials.auth import InitializationError, PairingManager, create_pairing_manager
from hap_credentials.config import HapCredentialsConfig, StorageConfig
from hap_credentials.crypto import public_key_for
from hap_credentials.storage import InMemoryStorage, SQLiteStorage


def test_manager_builds_configured_backend(tmp_path):
    config = HapCredentialsConfig(storage=StorageConfig(backend="sqlite", path=tmp_path / "auth.db"))

    with create_pairing_manager(config) as manager:
        assert isinstance(manager.storage, SQLiteStorage)
        assert manager.store.get_pin() == config.pin
        assert not manager.is_paired()


def test_pair_unpair_and_reset(storage, generator):
    manager = PairingManager(HapCredentialsConfig(), storage=storage, generator=generator)

    manager.pair("alice", b"a")
    manager.pair("bob", b"b")
    assert manager.is_paired()
    assert [record.username for record in manager.list_pairings()] == ["alice", "bob"]

    assert manager.unpair("alice") is True
    assert manager.unpair("alice") is False

    assert manager.reset_pairings() == 1
    assert not manager.is_paired()
    assert manager.get_identity().device_id == "AA:BB:CC:DD:EE:FF"


def test_identity_is_valid_ed25519(storage):
    manager = PairingManager(HapCredentialsConfig(), storage=storage)

    assert len(public_key_for(manager.get_identity().private_key)) == 32


def test_manager_propagates_initialization_error():
    storage = InMemoryStorage({"salt": "garbage"})

    with pytest.raises(InitializationError):
        PairingManager(HapCredentialsConfig(), storage=storage)


def test_manager_warns_on_invalid_config(storage, caplog):
    PairingManager(HapCredentialsConfig(pin="000-00-000"), storage=storage)

    assert "PIN 000-00-000 is not allowed" in caplog.text


def test_manager_rejects_unknown_backend():
    with pytest.raises(ValueError):
        PairingManager(HapCredentialsConfig(storage=StorageConfig(backend="redis")))
