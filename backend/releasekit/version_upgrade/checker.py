"""Fetches version requirements, derives the upgrade state and caches the result.

The checker never recovers from provider failures itself; ``check()`` raises
whatever the provider raised. The cached requirement pair is a read-through
optimization: store errors are logged and otherwise ignored.
"""

import threading
from datetime import datetime
from datetime import timezone
from typing import Generic

from releasekit.configs.constants import CACHED_REQUIREMENTS_KEY
from releasekit.configs.constants import LAST_CHECK_DATE_KEY
from releasekit.key_value_store.interface import KeyValueStore
from releasekit.key_value_store.store import RedisKeyValueStore
from releasekit.utils.logger import setup_logger
from releasekit.version_upgrade.exceptions import InvalidVersionData
from releasekit.version_upgrade.exceptions import NoDataAvailable
from releasekit.version_upgrade.models import UpdateAvailable
from releasekit.version_upgrade.models import UpdateRequired
from releasekit.version_upgrade.models import UpgradeState
from releasekit.version_upgrade.models import UpToDate
from releasekit.version_upgrade.models import VersionRequirement
from releasekit.version_upgrade.models import VersionT
from releasekit.version_upgrade.provider import VersionProvider

logger = setup_logger()


class VersionChecker(Generic[VersionT]):
    """Checks the running version against the provider's requirements.

    All reads and writes of the cached requirement pair and last check date go
    through a single lock, so concurrent checks never leave a half-written
    record behind. When checks overlap, the last one to finish wins.
    """

    def __init__(
        self,
        current_version: VersionT,
        provider: VersionProvider[VersionT],
        kv_store: KeyValueStore | None = None,
        namespace: str | None = None,
    ) -> None:
        """Initialize the version checker.

        Args:
            current_version: Version of the running app
            provider: Source of version requirements
            kv_store: Optional store for cached results. If None, creates a
                RedisKeyValueStore in ``namespace``.
            namespace: Namespace for the default store, ignored if kv_store is given
        """
        self._current_version = current_version
        self._provider = provider
        self._kv_store = kv_store or RedisKeyValueStore(namespace=namespace)
        self._cache_lock = threading.Lock()

    @property
    def current_version(self) -> VersionT:
        return self._current_version

    @property
    def kv_store(self) -> KeyValueStore:
        return self._kv_store

    async def check(self) -> UpgradeState:
        """Fetch requirements from the provider and compute the state.

        Returns:
            The upgrade state for the fetched requirements

        Raises:
            Whatever the provider raised, unmodified. NoDataAvailable if the
            provider returned nothing, InvalidVersionData if it returned versions
            of a different kind than the running version.
        """
        requirement = await self._provider.fetch_version_requirements()
        if requirement is None:
            raise NoDataAvailable()
        self._validate(requirement)

        self._store_requirement(requirement, datetime.now(timezone.utc))
        state = self.compute_state(requirement)
        logger.debug(
            f"Version check complete: current={self._current_version.serialize()} "
            f"required={requirement.required_version.serialize()} "
            f"latest={requirement.latest_version.serialize()} -> {type(state).__name__}"
        )
        return state

    def get_cached_state(self) -> UpgradeState:
        """Compute the state from the cached requirements without a network call.

        Returns:
            The state for the cached requirements, or UpToDate if nothing is cached
        """
        requirement = self._load_requirement()
        if requirement is None:
            return UpToDate()
        return self.compute_state(requirement)

    def get_last_check_timestamp(self) -> datetime | None:
        """Get the time of the last successful check, or None if never checked."""
        with self._cache_lock:
            try:
                return self._kv_store.get_date(LAST_CHECK_DATE_KEY)
            except Exception as e:
                logger.error(f"Failed to read last check date: {e}")
                return None

    def compute_state(self, requirement: VersionRequirement[VersionT]) -> UpgradeState:
        # Required takes precedence over available. Being exactly at either
        # threshold falls through to the less severe state.
        if self._current_version < requirement.required_version:
            return UpdateRequired(required_version=requirement.required_version)
        if self._current_version < requirement.latest_version:
            return UpdateAvailable(latest_version=requirement.latest_version)
        return UpToDate()

    def _validate(self, requirement: VersionRequirement[VersionT]) -> None:
        version_type = type(self._current_version)
        for name, version in (
            ("required", requirement.required_version),
            ("latest", requirement.latest_version),
        ):
            if type(version) is not version_type:
                raise InvalidVersionData(
                    f"Expected {name} version of type {version_type.__name__}, "
                    f"got {type(version).__name__}"
                )

    def _store_requirement(
        self, requirement: VersionRequirement[VersionT], checked_at: datetime
    ) -> None:
        encoded = requirement.to_cache_bytes()
        with self._cache_lock:
            try:
                self._kv_store.set(CACHED_REQUIREMENTS_KEY, encoded)
                self._kv_store.set_date(LAST_CHECK_DATE_KEY, checked_at)
            except Exception as e:
                logger.error(f"Failed to cache version requirements: {e}")

    def _load_requirement(self) -> VersionRequirement[VersionT] | None:
        with self._cache_lock:
            try:
                data = self._kv_store.get(CACHED_REQUIREMENTS_KEY)
            except Exception as e:
                logger.error(f"Failed to read cached version requirements: {e}")
                return None

        if data is None:
            return None

        try:
            return VersionRequirement.from_cache_bytes(
                data, type(self._current_version)
            )
        except InvalidVersionData as e:
            logger.warning(f"Ignoring unreadable cached version requirements: {e}")
            return None
