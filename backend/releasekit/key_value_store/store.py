import threading
from datetime import datetime
from datetime import timezone

from redis import Redis

from releasekit.key_value_store.interface import KeyValueStore
from releasekit.redis.redis_pool import get_redis_client
from releasekit.utils.logger import setup_logger

logger = setup_logger()


def _ensure_utc(value: datetime) -> datetime:
    # fromisoformat() returns naive datetime if input lacks timezone
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


class RedisKeyValueStore(KeyValueStore):
    """Durable store backed by Redis.

    Every key is written as ``"{namespace}:{key}"``. Dates are stored as
    ISO-8601 strings.
    """

    def __init__(
        self, namespace: str | None = None, redis_client: Redis | None = None
    ) -> None:
        super().__init__(namespace)
        self._redis_client = redis_client

    @property
    def redis_client(self) -> Redis:
        if self._redis_client is None:
            self._redis_client = get_redis_client()
        return self._redis_client

    def _namespaced(self, key: str) -> str:
        return f"{self.namespace}:{key}"

    def get(self, key: str) -> bytes | None:
        value = self.redis_client.get(self._namespaced(key))
        if value is None:
            return None
        if isinstance(value, str):
            return value.encode("utf-8")
        return bytes(value)

    def set(self, key: str, value: bytes) -> None:
        self.redis_client.set(self._namespaced(key), value)

    def get_date(self, key: str) -> datetime | None:
        raw = self.redis_client.get(self._namespaced(key))
        if not raw:
            return None

        decoded = raw.decode("utf-8") if isinstance(raw, bytes) else str(raw)
        return _ensure_utc(datetime.fromisoformat(decoded))

    def set_date(self, key: str, value: datetime) -> None:
        self.redis_client.set(self._namespaced(key), _ensure_utc(value).isoformat())


class InMemoryKeyValueStore(KeyValueStore):
    """Process-local store. Values do not survive a restart."""

    def __init__(self, namespace: str | None = None) -> None:
        super().__init__(namespace)
        self._values: dict[str, bytes] = {}
        self._dates: dict[str, datetime] = {}
        self._lock = threading.Lock()

    def get(self, key: str) -> bytes | None:
        with self._lock:
            return self._values.get(key)

    def set(self, key: str, value: bytes) -> None:
        with self._lock:
            self._values[key] = bytes(value)

    def get_date(self, key: str) -> datetime | None:
        with self._lock:
            return self._dates.get(key)

    def set_date(self, key: str, value: datetime) -> None:
        with self._lock:
            self._dates[key] = _ensure_utc(value)
