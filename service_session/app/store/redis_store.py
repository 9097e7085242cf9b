"""
Redis session store for Session Service.
"""

from typing import Optional

import redis.asyncio as redis
from redis.exceptions import RedisError

from shared.logging import get_logger
from shared.errors import StoreUnavailableError, ValidationError


class RedisSessionStore:
    """Redis store holding the current token for each identity key.

    Expiry is always a relative TTL in seconds (SET ... EX).
    """

    def __init__(
        self,
        redis_url: str,
        client: Optional[redis.Redis] = None,
        socket_timeout: float = 5.0
    ):
        self.redis_url = redis_url
        self.socket_timeout = socket_timeout
        self.logger = get_logger("session.store.redis")
        self.redis: Optional[redis.Redis] = client

    async def start(self):
        """Start the Redis store."""
        try:
            if self.redis is None:
                self.redis = redis.from_url(
                    self.redis_url,
                    encoding="utf-8",
                    decode_responses=True,
                    socket_connect_timeout=self.socket_timeout,
                    socket_timeout=self.socket_timeout,
                    health_check_interval=30
                )

            # Test connection
            await self.redis.ping()

            self.logger.info("Redis session store started")

        except RedisError as e:
            self.logger.error("Failed to start Redis session store", error=str(e))
            raise StoreUnavailableError("redis", str(e))

    async def stop(self):
        """Stop the Redis store."""
        if self.redis:
            await self.redis.aclose()
            self.redis = None
            self.logger.info("Redis session store stopped")

    def _client(self) -> redis.Redis:
        if self.redis is None:
            raise StoreUnavailableError("redis", "store not started")
        return self.redis

    async def set(self, key: str, value: str, ttl_seconds: int) -> None:
        """Store value under key, replacing any previous value."""
        if ttl_seconds <= 0:
            raise ValidationError(
                "TTL must be a positive number of seconds",
                details={"key": key, "ttl_seconds": ttl_seconds}
            )

        try:
            await self._client().set(key, value, ex=ttl_seconds)
        except RedisError as e:
            self.logger.error("Error storing session", key=key, error=str(e))
            raise StoreUnavailableError("redis", str(e))

        self.logger.debug("Stored session", key=key, ttl=ttl_seconds)

    async def get(self, key: str) -> Optional[str]:
        """Get the value stored under key."""
        try:
            value = await self._client().get(key)
        except RedisError as e:
            self.logger.error("Error reading session", key=key, error=str(e))
            raise StoreUnavailableError("redis", str(e))

        if isinstance(value, bytes):
            value = value.decode("utf-8")
        return value

    async def delete(self, key: str) -> int:
        """Delete key, returning the number of removed entries."""
        try:
            removed = await self._client().delete(key)
        except RedisError as e:
            self.logger.error("Error deleting session", key=key, error=str(e))
            raise StoreUnavailableError("redis", str(e))

        self.logger.debug("Deleted session", key=key, removed=removed)
        return removed

    async def health_check(self) -> bool:
        """Check Redis health."""
        try:
            await self._client().ping()
            return True
        except (RedisError, StoreUnavailableError):
            return False
