"""Long-lived owner of a VersionChecker.

The service exposes the latest known upgrade state, notifies listeners when it
changes and drives automatic checks either on foreground events or on a fixed
interval. Checks run as asyncio tasks on the loop that armed them.
"""

import asyncio
import threading
from collections.abc import Callable
from types import TracebackType
from typing import Any
from typing import Generic

from releasekit.key_value_store.interface import KeyValueStore
from releasekit.utils.logger import setup_logger
from releasekit.version_upgrade.checker import VersionChecker
from releasekit.version_upgrade.events import ForegroundEventSource
from releasekit.version_upgrade.events import Unsubscribe
from releasekit.version_upgrade.exceptions import ProviderError
from releasekit.version_upgrade.exceptions import UpgradeError
from releasekit.version_upgrade.models import CheckInterval
from releasekit.version_upgrade.models import CheckMode
from releasekit.version_upgrade.models import UpgradeFailed
from releasekit.version_upgrade.models import UpgradeState
from releasekit.version_upgrade.models import UpToDate
from releasekit.version_upgrade.models import VersionT
from releasekit.version_upgrade.provider import VersionProvider

logger = setup_logger()

StateListener = Callable[[UpgradeState], None]


class VersionUpgradeService(Generic[VersionT]):
    """Coordinates version checks and publishes the resulting state.

    The state starts as UpToDate and is replaced by the cached state once
    ``initialize()`` runs. Use ``async with`` to make sure automatic checking
    is stopped when the service is discarded.
    """

    def __init__(
        self,
        current_version: VersionT,
        provider: VersionProvider[VersionT],
        start_checking: CheckInterval | None = None,
        kv_store: KeyValueStore | None = None,
        namespace: str | None = None,
        foreground_events: ForegroundEventSource | None = None,
    ) -> None:
        """Initialize the version upgrade service.

        Args:
            current_version: Version of the running app
            provider: Source of version requirements
            start_checking: Automatic checking to arm in ``initialize()``, if any
            kv_store: Optional store for cached results, see VersionChecker
            namespace: Namespace for the default store
            foreground_events: Source of "app became active" events, required
                for CheckInterval.on_foreground()
        """
        self._checker = VersionChecker(
            current_version=current_version,
            provider=provider,
            kv_store=kv_store,
            namespace=namespace,
        )
        self._start_checking = start_checking
        self._foreground_events = foreground_events

        self._state: UpgradeState = UpToDate()
        self._state_lock = threading.Lock()
        self._listeners: dict[int, StateListener] = {}
        self._next_listener_token = 0

        self._loop: asyncio.AbstractEventLoop | None = None
        self._interval_task: asyncio.Task | None = None
        self._interval_stop: asyncio.Event | None = None
        self._foreground_unsubscribe: Unsubscribe | None = None
        self._pending_checks: set[asyncio.Task] = set()

    @classmethod
    def from_version_string(
        cls,
        version_string: str,
        version_type: type[VersionT],
        provider: VersionProvider[VersionT],
        **kwargs: Any,
    ) -> "VersionUpgradeService[VersionT]":
        """Build a service for an app whose version is only known as a string.

        Raises:
            ValueError: If the string is not a valid ``version_type``
        """
        version = version_type.parse(version_string)
        if version is None:
            raise ValueError(
                f"Unable to parse app version {version_string!r} as {version_type.__name__}"
            )
        return cls(current_version=version, provider=provider, **kwargs)

    # -------------------------------------------------------------------------
    # State
    # -------------------------------------------------------------------------

    @property
    def state(self) -> UpgradeState:
        with self._state_lock:
            return self._state

    @property
    def current_version(self) -> VersionT:
        return self._checker.current_version

    @property
    def checker(self) -> VersionChecker[VersionT]:
        return self._checker

    def add_state_listener(self, listener: StateListener) -> Unsubscribe:
        """Call ``listener`` with the new state every time it changes.

        Listeners run on whichever thread published the state and must not block.

        Returns:
            A function that removes the listener
        """
        with self._state_lock:
            token = self._next_listener_token
            self._next_listener_token += 1
            self._listeners[token] = listener

        def _remove() -> None:
            with self._state_lock:
                self._listeners.pop(token, None)

        return _remove

    def _publish(self, state: UpgradeState) -> None:
        with self._state_lock:
            if state == self._state:
                return
            self._state = state
            listeners = list(self._listeners.values())

        logger.info(f"Upgrade state changed to {state!r}")
        for listener in listeners:
            try:
                listener(state)
            except Exception as e:
                logger.exception(f"Upgrade state listener failed: {e}")

    # -------------------------------------------------------------------------
    # Lifecycle
    # -------------------------------------------------------------------------

    async def initialize(self) -> None:
        """Load the cached state, then arm ``start_checking`` if one was given."""
        self._publish(self._checker.get_cached_state())
        if self._start_checking is not None:
            self.start_automatic_checking(self._start_checking)

    async def close(self) -> None:
        """Stop automatic checking and wait for outstanding checks to finish."""
        self.stop_automatic_checking()

        outstanding = [t for t in self._pending_checks if not t.done()]
        if outstanding:
            await asyncio.gather(*outstanding, return_exceptions=True)

    async def __aenter__(self) -> "VersionUpgradeService[VersionT]":
        await self.initialize()
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: TracebackType | None,
    ) -> None:
        await self.close()

    # -------------------------------------------------------------------------
    # Checks
    # -------------------------------------------------------------------------

    async def check_for_updates(self) -> None:
        """Check now and publish the result, falling back to the cache on failure."""
        try:
            state = await self._checker.check()
        except Exception as e:
            logger.warning(f"Version check failed: {e}")
            state = self._handle_error(e)
        self._publish(state)

    async def check_and_get_state(self) -> UpgradeState:
        """Perform a check and return the resulting state."""
        await self.check_for_updates()
        return self.state

    def _handle_error(self, error: Exception) -> UpgradeState:
        # A known non-trivial state is more useful than a fresh error
        cached_state = self._checker.get_cached_state()
        if not isinstance(cached_state, UpToDate):
            return cached_state

        if isinstance(error, UpgradeError):
            return UpgradeFailed(error=error)
        return UpgradeFailed(error=ProviderError(str(error)))

    # -------------------------------------------------------------------------
    # Automatic checking
    # -------------------------------------------------------------------------

    def start_automatic_checking(self, interval: CheckInterval) -> None:
        """Start automatic checks, replacing any that are already running.

        Must be called from a running event loop; checks are scheduled on it.

        Raises:
            ValueError: For on_foreground checks without a foreground event source
        """
        self._stop_on_loop()

        if interval.mode == CheckMode.MANUAL:
            return

        if (
            interval.mode == CheckMode.ON_FOREGROUND
            and self._foreground_events is None
        ):
            raise ValueError("Foreground checks need a foreground event source")

        self._loop = asyncio.get_running_loop()

        if interval.mode == CheckMode.ON_FOREGROUND:
            self._setup_foreground_observer()
        elif interval.mode == CheckMode.INTERVAL and interval.seconds is not None:
            self._setup_interval_task(interval.seconds)

    def stop_automatic_checking(self) -> None:
        """Stop automatic checks. Safe to call when nothing is running.

        A check that is already in flight is allowed to finish and its result
        is still published. When called off the service's loop thread, the stop
        is handed to the loop and takes effect once the loop runs it.
        """
        loop = self._loop
        if loop is None or loop.is_closed() or self._is_loop_thread(loop):
            self._stop_on_loop()
        else:
            loop.call_soon_threadsafe(self._stop_on_loop)

    def _stop_on_loop(self) -> None:
        if self._foreground_unsubscribe is not None:
            self._foreground_unsubscribe()
            self._foreground_unsubscribe = None

        if self._interval_stop is not None:
            self._interval_stop.set()
        if self._interval_task is not None and not self._interval_task.done():
            # Still finishing its last check, close() waits for it
            self._pending_checks.add(self._interval_task)
            self._interval_task.add_done_callback(self._pending_checks.discard)
        self._interval_stop = None
        self._interval_task = None

    @property
    def is_checking_automatically(self) -> bool:
        return self._foreground_unsubscribe is not None or self._interval_task is not None

    @staticmethod
    def _is_loop_thread(loop: asyncio.AbstractEventLoop) -> bool:
        try:
            return asyncio.get_running_loop() is loop
        except RuntimeError:
            return False

    def _setup_foreground_observer(self) -> None:
        assert self._foreground_events is not None
        self._foreground_unsubscribe = self._foreground_events.subscribe(
            self._on_foreground
        )

        # Initial check on first run
        self._spawn_check()

    def _on_foreground(self) -> None:
        # May be called from any thread
        loop = self._loop
        if loop is None or loop.is_closed():
            return

        if self._is_loop_thread(loop):
            self._spawn_foreground_check()
        else:
            loop.call_soon_threadsafe(self._spawn_foreground_check)

    def _spawn_foreground_check(self) -> None:
        # Events queued from other threads can land after a stop
        if self._foreground_unsubscribe is None:
            return
        self._spawn_check()

    def _spawn_check(self) -> None:
        task = asyncio.get_running_loop().create_task(self.check_for_updates())
        self._pending_checks.add(task)
        task.add_done_callback(self._pending_checks.discard)

    def _setup_interval_task(self, seconds: float) -> None:
        stop_event = asyncio.Event()
        self._interval_stop = stop_event
        self._interval_task = asyncio.get_running_loop().create_task(
            self._run_interval_checks(seconds, stop_event)
        )

    async def _run_interval_checks(
        self, seconds: float, stop_event: asyncio.Event
    ) -> None:
        logger.debug(f"Starting interval version checks every {seconds}s")
        while not stop_event.is_set():
            await self.check_for_updates()
            if stop_event.is_set():
                break
            try:
                await asyncio.wait_for(stop_event.wait(), timeout=seconds)
            except asyncio.TimeoutError:
                continue
        logger.debug("Interval version checks stopped")
