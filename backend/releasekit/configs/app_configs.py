import os

from releasekit.configs.constants import DEFAULT_VERSION_UPGRADE_NAMESPACE

#####
# Logging
#####
LOG_LEVEL = os.environ.get("LOG_LEVEL") or "info"
# Let records also reach the root logger, for hosts that configure logging themselves
LOG_PROPAGATE = os.environ.get("RELEASEKIT_LOG_PROPAGATE", "").lower() == "true"

#####
# Redis
#####
REDIS_HOST = os.environ.get("REDIS_HOST") or "localhost"
REDIS_PORT = int(os.environ.get("REDIS_PORT") or 6379)
REDIS_PASSWORD = os.environ.get("REDIS_PASSWORD") or ""
# Rediss (TLS) is used when this is true
REDIS_SSL = os.environ.get("REDIS_SSL", "").lower() == "true"
REDIS_DB_NUMBER = int(os.environ.get("REDIS_DB_NUMBER") or 0)
REDIS_POOL_MAX_CONNECTIONS = int(os.environ.get("REDIS_POOL_MAX_CONNECTIONS") or 32)
REDIS_HEALTH_CHECK_INTERVAL = int(os.environ.get("REDIS_HEALTH_CHECK_INTERVAL") or 60)

#####
# Version Upgrade Checks
#####
# Keys written by the version checker are prefixed with this namespace so that
# separate apps or test runs can share a Redis instance without colliding
VERSION_UPGRADE_NAMESPACE = (
    os.environ.get("VERSION_UPGRADE_NAMESPACE") or DEFAULT_VERSION_UPGRADE_NAMESPACE
)
# Default period used by CheckInterval.from_config()
VERSION_CHECK_INTERVAL_SECONDS = float(
    os.environ.get("VERSION_CHECK_INTERVAL_SECONDS") or 60 * 60  # 1 hour
)
