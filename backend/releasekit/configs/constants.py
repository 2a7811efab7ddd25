"""Constants for the version upgrade subsystem."""

DEFAULT_VERSION_UPGRADE_NAMESPACE = "releasekit"

# Key-value store keys (inside the store's namespace)
LAST_CHECK_DATE_KEY = "VersionUpgradeService.lastCheckDate"
CACHED_REQUIREMENTS_KEY = "VersionUpgradeService.cachedRequirements"

# Serialized field names of a cached VersionRequirement
REQUIRED_VERSION_FIELD = "requiredVersion"
LATEST_VERSION_FIELD = "latestVersion"
