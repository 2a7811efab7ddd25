import pytest

from releasekit.key_value_store.store import InMemoryKeyValueStore


@pytest.fixture
def kv_store() -> InMemoryKeyValueStore:
    """Isolated store per test."""
    return InMemoryKeyValueStore(namespace="releasekit-tests")
