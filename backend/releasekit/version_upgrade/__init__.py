"""Version upgrade checks.

Ask a host-supplied provider whether the running app is current, may update or
must update, cache the answer and keep observers informed.
"""

from releasekit.version_upgrade.checker import VersionChecker
from releasekit.version_upgrade.events import ForegroundEventSource
from releasekit.version_upgrade.events import ForegroundSignal
from releasekit.version_upgrade.exceptions import InvalidVersionData
from releasekit.version_upgrade.exceptions import NoDataAvailable
from releasekit.version_upgrade.exceptions import ProviderError
from releasekit.version_upgrade.exceptions import UpgradeError
from releasekit.version_upgrade.models import CheckInterval
from releasekit.version_upgrade.models import CheckMode
from releasekit.version_upgrade.models import UpdateAvailable
from releasekit.version_upgrade.models import UpdateRequired
from releasekit.version_upgrade.models import UpgradeFailed
from releasekit.version_upgrade.models import UpgradeState
from releasekit.version_upgrade.models import UpToDate
from releasekit.version_upgrade.models import VersionRequirement
from releasekit.version_upgrade.provider import StaticVersionProvider
from releasekit.version_upgrade.provider import VersionProvider
from releasekit.version_upgrade.service import VersionUpgradeService
from releasekit.version_upgrade.versions import BuildNumber
from releasekit.version_upgrade.versions import SemanticVersion
from releasekit.version_upgrade.versions import Version
from releasekit.version_upgrade.versions import VersionOrdering

__all__ = [
    "BuildNumber",
    "CheckInterval",
    "CheckMode",
    "ForegroundEventSource",
    "ForegroundSignal",
    "InvalidVersionData",
    "NoDataAvailable",
    "ProviderError",
    "SemanticVersion",
    "StaticVersionProvider",
    "UpdateAvailable",
    "UpdateRequired",
    "UpgradeError",
    "UpgradeFailed",
    "UpgradeState",
    "UpToDate",
    "Version",
    "VersionChecker",
    "VersionOrdering",
    "VersionProvider",
    "VersionRequirement",
    "VersionUpgradeService",
]
