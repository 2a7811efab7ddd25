"""Foreground event sources.

The upgrade service does not know about any platform lifecycle API. It only
needs something it can subscribe a callback to and later unsubscribe from.
"""

import threading
from abc import ABC
from abc import abstractmethod
from collections.abc import Callable

from releasekit.utils.logger import setup_logger

logger = setup_logger()

Unsubscribe = Callable[[], None]


class ForegroundEventSource(ABC):
    @abstractmethod
    def subscribe(self, callback: Callable[[], None]) -> Unsubscribe:
        """Register ``callback`` to run every time the app becomes active.

        Returns:
            A function that removes the registration. Calling it more than
            once is a no-op.
        """
        raise NotImplementedError


class ForegroundSignal(ForegroundEventSource):
    """Thread-safe callback registry the host fires with ``emit()``."""

    def __init__(self) -> None:
        self._callbacks: dict[int, Callable[[], None]] = {}
        self._next_token = 0
        self._lock = threading.Lock()

    def subscribe(self, callback: Callable[[], None]) -> Unsubscribe:
        with self._lock:
            token = self._next_token
            self._next_token += 1
            self._callbacks[token] = callback

        def _unsubscribe() -> None:
            with self._lock:
                self._callbacks.pop(token, None)

        return _unsubscribe

    @property
    def subscriber_count(self) -> int:
        with self._lock:
            return len(self._callbacks)

    def emit(self) -> None:
        with self._lock:
            callbacks = list(self._callbacks.values())

        for callback in callbacks:
            try:
                callback()
            except Exception as e:
                logger.exception(f"Foreground callback failed: {e}")
