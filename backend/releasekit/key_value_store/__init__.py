from releasekit.key_value_store.interface import KeyValueStore
from releasekit.key_value_store.store import InMemoryKeyValueStore
from releasekit.key_value_store.store import RedisKeyValueStore

__all__ = [
    "InMemoryKeyValueStore",
    "KeyValueStore",
    "RedisKeyValueStore",
]
