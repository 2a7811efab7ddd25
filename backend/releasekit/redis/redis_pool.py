import threading

import redis
from redis import Redis

from releasekit.configs.app_configs import REDIS_DB_NUMBER
from releasekit.configs.app_configs import REDIS_HEALTH_CHECK_INTERVAL
from releasekit.configs.app_configs import REDIS_HOST
from releasekit.configs.app_configs import REDIS_PASSWORD
from releasekit.configs.app_configs import REDIS_POOL_MAX_CONNECTIONS
from releasekit.configs.app_configs import REDIS_PORT
from releasekit.configs.app_configs import REDIS_SSL
from releasekit.utils.logger import setup_logger

logger = setup_logger()


class RedisPool:
    """Process-wide connection pool, created on first use."""

    _instance: "RedisPool | None" = None
    _lock = threading.Lock()

    def __init__(self) -> None:
        self._pool = RedisPool.create_pool(ssl=REDIS_SSL)

    @classmethod
    def get_instance(cls) -> "RedisPool":
        if cls._instance is None:
            with cls._lock:
                if cls._instance is None:
                    cls._instance = cls()
        return cls._instance

    def get_client(self) -> Redis:
        return redis.Redis(connection_pool=self._pool)

    @staticmethod
    def create_pool(
        host: str = REDIS_HOST,
        port: int = REDIS_PORT,
        db: int = REDIS_DB_NUMBER,
        password: str = REDIS_PASSWORD,
        max_connections: int = REDIS_POOL_MAX_CONNECTIONS,
        ssl: bool = False,
    ) -> redis.ConnectionPool:
        logger.debug(f"Creating Redis connection pool for {host}:{port}/{db}")
        if ssl:
            return redis.ConnectionPool(
                host=host,
                port=port,
                db=db,
                password=password or None,
                max_connections=max_connections,
                health_check_interval=REDIS_HEALTH_CHECK_INTERVAL,
                connection_class=redis.SSLConnection,
            )

        return redis.ConnectionPool(
            host=host,
            port=port,
            db=db,
            password=password or None,
            max_connections=max_connections,
            health_check_interval=REDIS_HEALTH_CHECK_INTERVAL,
        )


def get_redis_client() -> Redis:
    return RedisPool.get_instance().get_client()
