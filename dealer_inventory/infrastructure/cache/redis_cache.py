"""Redis-backed shared cache tier.

Async Redis with JSON values and TTL. Every operation fails open: Redis
errors are logged and reported as a miss / False / None, never raised to
the caller. Call connect() at startup and disconnect() at shutdown.
"""

from __future__ import annotations

import json
from typing import Any

import redis.asyncio as redis

from dealer_inventory.core.config import get_settings
from dealer_inventory.shared.telemetry.logging import get_logger

logger = get_logger(__name__)

_SCAN_COUNT = 500
_UNLINK_CHUNK = 500


class RedisCache:
    """Shared cache tier on Redis. Supports SCAN-based key enumeration."""

    supports_key_scan = True

    def __init__(self, redis_client: redis.Redis | None = None) -> None:
        """Initialize cache service.

        Args:
            redis_client: Optional Redis client for testing or DI. When given,
                the cache is considered connected.
        """
        self.redis = redis_client
        self.settings = get_settings()
        self._connected = redis_client is not None

    async def connect(self) -> None:
        """Establish Redis connection. Leaves the tier disabled on failure."""
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
                socket_timeout=self.settings.cache_operation_timeout_seconds,
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
            logger.warning("Redis connection failed: %s. Shared cache tier disabled.", e)
            self._connected = False
            self.redis = None

    async def disconnect(self) -> None:
        """Close Redis connection."""
        if self.redis:
            await self.redis.aclose()
            self.redis = None
            self._connected = False
            logger.info("Redis cache disconnected")

    async def _reconnect(self) -> bool:
        """Attempt to reconnect after a dropped connection. Returns True if reconnected."""
        if self.redis is None:
            return False
        try:
            await self.redis.aclose()
        except redis.RedisError:
            logger.debug("Ignoring error while closing stale Redis connection")
        self.redis = None
        self._connected = False
        await self.connect()
        return self._connected

    def is_available(self) -> bool:
        """Return True if Redis is connected and usable."""
        return self._connected and self.redis is not None

    async def _get_with_pttl(self, key: str) -> tuple[str | None, int]:
        """GET and PTTL in one round trip."""
        async with self.redis.pipeline(transaction=False) as pipe:
            pipe.get(key)
            pipe.pttl(key)
            raw, pttl = await pipe.execute()
        return raw, pttl

    async def get(self, key: str) -> Any | None:
        """Return cached value (JSON-deserialized) or None if missing/unavailable."""
        value, _ = await self.get_with_ttl(key)
        return value

    async def get_with_ttl(self, key: str) -> tuple[Any | None, float | None]:
        """Return (value, seconds left) or (None, None) if missing/unavailable.

        PTTL is -1 for keys without expiry; that is reported as None.
        """
        if not self.is_available() or self.redis is None:
            return None, None
        try:
            raw, pttl = await self._get_with_pttl(key)
        except (redis.ConnectionError, redis.TimeoutError):
            if await self._reconnect() and self.redis is not None:
                try:
                    raw, pttl = await self._get_with_pttl(key)
                except redis.RedisError:
                    logger.exception("Cache get error for key %s after reconnect", key)
                    return None, None
            else:
                logger.warning("Cache get unavailable for key %s (Redis disconnected)", key)
                return None, None
        except redis.RedisError:
            logger.exception("Cache get error for key %s", key)
            return None, None
        if raw is None:
            return None, None
        try:
            value = json.loads(raw)
        except ValueError:
            logger.warning("Discarding undecodable cache value for key %s", key)
            return None, None
        return value, (pttl / 1000 if pttl is not None and pttl >= 0 else None)

    async def set(self, key: str, value: Any, ttl: int = 60) -> bool:
        """Store value (JSON) with TTL in seconds. Returns True on success."""
        if not self.is_available() or self.redis is None:
            return False
        serialized = json.dumps(value, default=str)
        try:
            await self.redis.setex(key, ttl, serialized)
            return True
        except (redis.ConnectionError, redis.TimeoutError):
            if await self._reconnect() and self.redis is not None:
                try:
                    await self.redis.setex(key, ttl, serialized)
                    return True
                except redis.RedisError:
                    logger.exception("Cache set error for key %s after reconnect", key)
            logger.warning("Cache set unavailable for key %s (Redis disconnected)", key)
            return False
        except redis.RedisError:
            logger.exception("Cache set error for key %s", key)
            return False

    async def delete(self, key: str) -> bool:
        """Remove key from cache. Returns True if the command succeeded."""
        if not self.is_available() or self.redis is None:
            return False
        try:
            await self.redis.delete(key)
            return True
        except redis.RedisError:
            logger.exception("Cache delete error for key %s", key)
            return False

    async def scan_keys(self, pattern: str) -> list[str] | None:
        """Return keys matching pattern via SCAN (non-blocking), or None on failure."""
        if not self.is_available() or self.redis is None:
            return None
        try:
            return [key async for key in self.redis.scan_iter(match=pattern, count=_SCAN_COUNT)]
        except redis.RedisError:
            logger.exception("Cache scan error for pattern %s", pattern)
            return None

    async def delete_many(self, keys: list[str]) -> int:
        """UNLINK keys in chunks through a non-transactional pipeline."""
        if not keys or not self.is_available() or self.redis is None:
            return 0
        deleted = 0
        try:
            for start in range(0, len(keys), _UNLINK_CHUNK):
                chunk = keys[start : start + _UNLINK_CHUNK]
                async with self.redis.pipeline(transaction=False) as pipe:
                    pipe.unlink(*chunk)
                    results = await pipe.execute()
                deleted += sum(int(r or 0) for r in results)
        except redis.RedisError:
            logger.exception("Cache delete_many error (%s keys)", len(keys))
        return deleted
