"""Interface for the host application's source of version requirements."""

from abc import ABC
from abc import abstractmethod
from typing import Generic

from releasekit.version_upgrade.models import VersionRequirement
from releasekit.version_upgrade.models import VersionT


class VersionProvider(ABC, Generic[VersionT]):
    """Fetches version requirements from wherever the host keeps them.

    Implementations may raise any exception. Raising one of the
    ``UpgradeError`` subclasses keeps that specific kind visible to observers;
    anything else is reported as a ``ProviderError``.
    """

    @abstractmethod
    async def fetch_version_requirements(self) -> VersionRequirement[VersionT] | None:
        """Fetch the version requirements from the data source.

        Returns:
            The requirement pair, or None if the source has nothing to report
        """
        raise NotImplementedError


class StaticVersionProvider(VersionProvider[VersionT]):
    """Provider that always reports the same requirement pair.

    Useful for hosts that bake thresholds into configuration and for tests.
    """

    def __init__(self, requirement: VersionRequirement[VersionT] | None) -> None:
        self.requirement = requirement

    async def fetch_version_requirements(self) -> VersionRequirement[VersionT] | None:
        return self.requirement
