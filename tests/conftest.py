"""Shared fixtures for the credential store tests."""

import pytest
from loguru import logger

from hap_credentials.storage import InMemoryStorage


class CountingGenerator:
    """Deterministic secret generator that records how often it was called."""

    def __init__(self, device_id="AA:BB:CC:DD:EE:FF", salt=123456789, private_key=b"\x01" * 32):
        self.device_id = device_id
        self.salt = salt
        self.private_key = private_key
        self.calls = {"device_id": 0, "salt": 0, "private_key": 0}

    def generate_device_id(self):
        self.calls["device_id"] += 1
        return self.device_id

    def generate_salt(self):
        self.calls["salt"] += 1
        return self.salt

    def generate_private_key(self):
        self.calls["private_key"] += 1
        return self.private_key


@pytest.fixture
def caplog(caplog):
    """Route loguru records into pytest's caplog."""
    handler_id = logger.add(caplog.handler, format="{message}", level=0)
    yield caplog
    logger.remove(handler_id)


@pytest.fixture
def storage():
    return InMemoryStorage()


@pytest.fixture
def generator():
    return CountingGenerator()


@pytest.fixture
def generator_factory():
    return CountingGenerator


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    """Keep HAP_* variables from the developer's shell out of the tests."""
    for name in ("HAP_PIN", "HAP_STORAGE_BACKEND", "HAP_STORAGE_PATH", "HAP_LOG_LEVEL", "HAP_LOG_FILE", "HAP_LOG_TO_CONSOLE"):
        monkeypatch.delenv(name, raising=False)
