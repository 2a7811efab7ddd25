import abc
from datetime import datetime

from releasekit.configs.app_configs import VERSION_UPGRADE_NAMESPACE


class KeyValueStore(abc.ABC):
    """Minimal namespaced key-value persistence.

    Keys passed to a store are relative to its namespace, so two stores with
    different namespaces never see each other's values even when they share the
    same backend.
    """

    def __init__(self, namespace: str | None = None) -> None:
        self.namespace = namespace or VERSION_UPGRADE_NAMESPACE

    @abc.abstractmethod
    def get(self, key: str) -> bytes | None:
        """Return the raw value stored under ``key``, or None if absent."""
        raise NotImplementedError

    @abc.abstractmethod
    def set(self, key: str, value: bytes) -> None:
        raise NotImplementedError

    @abc.abstractmethod
    def get_date(self, key: str) -> datetime | None:
        """Return the instant stored under ``key`` as a UTC-aware datetime."""
        raise NotImplementedError

    @abc.abstractmethod
    def set_date(self, key: str, value: datetime) -> None:
        raise NotImplementedError
