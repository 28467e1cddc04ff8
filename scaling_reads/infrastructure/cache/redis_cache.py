"""Redis-based cache service for the cache-aside layer.

Provides async Redis get / set-with-TTL over string values. Keys are
namespaced with settings.cache_instance_name. Connection failures are
surfaced as CacheUnavailableError (after one reconnect attempt) so the
cache-aside layer can tell "backend unreachable" apart from "key not found".
"""

from __future__ import annotations

import logging

import redis.asyncio as redis

from scaling_reads.core.config import Settings, get_settings
from scaling_reads.infrastructure.exceptions import CacheUnavailableError

logger = logging.getLogger(__name__)


class CacheService:
    """Async Redis cache service with TTL support.

    Call connect() at startup and disconnect() at shutdown. When the
    initial connection fails the service stays unavailable (is_available()
    is False) and reads fall through to the replicas.
    """

    def __init__(
        self,
        redis_client: redis.Redis | None = None,
        settings: Settings | None = None,
    ) -> None:
        """Initialize cache service.

        Args:
            redis_client: Optional Redis client for testing or DI.
            settings: Optional settings; defaults to get_settings().
        """
        self.redis = redis_client
        self.settings = settings or get_settings()
        self.namespace = self.settings.cache_instance_name
        self._connected = redis_client is not None

    async def connect(self) -> None:
        """Establish Redis connection. Call on app startup."""
        if self.redis is not None:
            return
        try:
            self.redis = redis.Redis(
                host=self.settings.redis_host,
                port=self.settings.redis_port,
                db=self.settings.redis_db,
                password=(
                    self.settings.redis_password.get_secret_value()
                    if self.settings.redis_password
                    else None
                ),
                decode_responses=True,
                socket_connect_timeout=5,
                socket_timeout=self.settings.redis_socket_timeout,
                socket_keepalive=True,
            )
            await self.redis.ping()
            self._connected = True
            logger.info(
                "Redis cache connected: %s:%s",
                self.settings.redis_host,
                self.settings.redis_port,
            )
        except (redis.ConnectionError, redis.TimeoutError) as e:
            logger.warning(
                "Redis connection failed: %s. Cache disabled.",
                e,
            )
            self._connected = False
            self.redis = None

    async def disconnect(self) -> None:
        """Close Redis connection. Call on app shutdown."""
        if self.redis:
            await self.redis.aclose()
            self.redis = None
            self._connected = False
            logger.info("Redis cache disconnected")

    async def _reconnect(self) -> bool:
        """Attempt to reconnect after disconnect. Returns True if reconnected."""
        if self.redis is None:
            return False
        try:
            await self.redis.aclose()
        except redis.RedisError:
            logger.debug("Ignoring error while closing stale Redis client", exc_info=True)
        self.redis = None
        self._connected = False
        await self.connect()
        return self._connected

    def is_available(self) -> bool:
        """Return True if Redis is connected and usable."""
        return self._connected and self.redis is not None

    def _namespaced(self, key: str) -> str:
        return f"{self.namespace}{key}"

    async def get(self, key: str) -> str | None:
        """Return cached string or None if missing.

        Args:
            key: Cache key (built by scaling_reads.infrastructure.cache.keys).

        Returns:
            Cached value or None.

        Raises:
            CacheUnavailableError: Redis unreachable, even after reconnect.
        """
        if not self.is_available() or self.redis is None:
            raise CacheUnavailableError("get", "not connected")
        full_key = self._namespaced(key)
        try:
            value = await self.redis.get(full_key)
        except (redis.ConnectionError, redis.TimeoutError) as e:
            if await self._reconnect() and self.redis is not None:
                try:
                    value = await self.redis.get(full_key)
                except redis.RedisError as retry_error:
                    raise CacheUnavailableError("get", str(retry_error)) from retry_error
            else:
                raise CacheUnavailableError("get", str(e)) from e
        except redis.RedisError as e:
            raise CacheUnavailableError("get", str(e)) from e
        if value is None:
            logger.debug("Cache MISS: %s", key)
            return None
        logger.debug("Cache HIT: %s", key)
        return value

    async def set(self, key: str, value: str, ttl: int) -> bool:
        """Store value with TTL (atomic SETEX). Returns True on success.

        Args:
            key: Cache key.
            value: Serialized payload.
            ttl: Time-to-live in seconds.

        Returns:
            True if stored, False if the cache is not connected.

        Raises:
            CacheUnavailableError: Redis unreachable, even after reconnect.
        """
        if not self.is_available() or self.redis is None:
            return False
        full_key = self._namespaced(key)
        try:
            await self.redis.setex(full_key, ttl, value)
        except (redis.ConnectionError, redis.TimeoutError) as e:
            if await self._reconnect() and self.redis is not None:
                try:
                    await self.redis.setex(full_key, ttl, value)
                except redis.RedisError as retry_error:
                    raise CacheUnavailableError("set", str(retry_error)) from retry_error
            else:
                raise CacheUnavailableError("set", str(e)) from e
        except redis.RedisError as e:
            raise CacheUnavailableError("set", str(e)) from e
        logger.debug("Cache SET: %s (TTL: %ss)", key, ttl)
        return True

    async def ping(self) -> bool:
        """Return True if Redis answers PING (readiness probe)."""
        if not self.is_available() or self.redis is None:
            return False
        try:
            return bool(await self.redis.ping())
        except redis.RedisError:
            logger.warning("Redis ping failed", exc_info=True)
            return False
