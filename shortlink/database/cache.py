"""Redis cache layer for URL shortener."""

import json
import logging
from typing import Optional

import redis.asyncio as redis
from redis.exceptions import RedisError

from .models import UrlRecord


class RedisCache:
    """Read-through cache of short code -> URL record.

    The cache is optional: every failure is logged and treated as a miss so
    a Redis outage never fails a request.
    """

    KEY_PREFIX = "url:shortener:"

    def __init__(
        self,
        redis_url: Optional[str] = None,
        ttl_seconds: int = 3600,
        logger: Optional[logging.Logger] = None,
    ):
        """Initialize Redis cache.

        Args:
            redis_url: Redis connection URL (e.g., redis://localhost:6379/0)
            ttl_seconds: TTL for cached records
            logger: Optional logger instance
        """
        self.redis_url = redis_url
        self.ttl_seconds = ttl_seconds
        self.logger = logger or logging.getLogger(__name__)
        self.enabled = redis_url is not None
        self.client: Optional[redis.Redis] = None

        if self.enabled:
            self.logger.info(f"Redis cache enabled with TTL={ttl_seconds}s")

    async def connect(self) -> None:
        """Connect to Redis, disabling the cache if it is unreachable."""
        if not self.enabled:
            return

        try:
            self.client = redis.from_url(
                self.redis_url,
                encoding="utf-8",
                decode_responses=True,
            )
            await self.client.ping()
            self.logger.info("Connected to Redis")
        except (RedisError, OSError) as e:
            self.logger.error(f"Failed to connect to Redis: {e}")
            self.enabled = False

    def get_cache_key(self, short_code: str) -> str:
        """Generate cache key for short code."""
        return f"{self.KEY_PREFIX}{short_code}"

    async def get_record(self, short_code: str) -> Optional[UrlRecord]:
        """Get a cached record.

        Args:
            short_code: The short code

        Returns:
            Cached record or None on miss or error
        """
        if not self.enabled or not self.client:
            return None

        try:
            raw = await self.client.get(self.get_cache_key(short_code))
        except RedisError as e:
            self.logger.error(f"Cache get error: {e}")
            return None

        if not raw:
            return None

        try:
            return UrlRecord.from_dict(json.loads(raw))
        except (ValueError, KeyError, TypeError) as e:
            self.logger.warning(f"Discarding unreadable cache entry for {short_code}: {e}")
            return None

    async def set_record(self, record: UrlRecord, ttl: Optional[int] = None) -> bool:
        """Cache a record.

        Args:
            record: Record to cache
            ttl: Optional TTL override (seconds)

        Returns:
            True if successful
        """
        if not self.enabled or not self.client:
            return False

        try:
            await self.client.setex(
                self.get_cache_key(record.short_code),
                ttl or self.ttl_seconds,
                json.dumps(record.to_dict()),
            )
            return True
        except RedisError as e:
            self.logger.error(f"Cache set error: {e}")
            return False

    async def ping(self) -> bool:
        """Return True if Redis answers."""
        if not self.enabled or not self.client:
            return False

        try:
            return bool(await self.client.ping())
        except RedisError as e:
            self.logger.error(f"Cache ping error: {e}")
            return False

    async def close(self) -> None:
        """Close Redis connection."""
        if self.client:
            await self.client.aclose()
            self.client = None
            self.logger.info("Redis connection closed")
