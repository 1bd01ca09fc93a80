"""Business logic service for URL shortener."""

import logging
from typing import Any, Dict, List, Optional

from .shortcode import ShortCodeGenerator
from .database.base import URLStoreBase
from .database.cache import RedisCache
from .database.models import UrlRecord
from .common.validators import (
    is_valid_short_code,
    is_valid_url,
    sanitize_url,
    validate_url,
)
from .errors import ShortCodeConflictError, StorageError, InvalidURLError


class URLShortenerService:
    """Service layer for URL shortening and redirect lookups."""

    def __init__(
        self,
        db: URLStoreBase,
        cache: Optional[RedisCache] = None,
        short_code_generator: Optional[ShortCodeGenerator] = None,
        logger: Optional[logging.Logger] = None,
        max_insert_attempts: int = 5,
    ):
        """Initialize URL shortener service.

        Args:
            db: URL store
            cache: Optional cache instance
            short_code_generator: Optional short code generator
            logger: Optional logger
            max_insert_attempts: How many times to re-run code generation
                when an insert loses a race on the same code
        """
        self.db = db
        self.cache = cache
        self.generator = short_code_generator or ShortCodeGenerator()
        self.logger = logger or logging.getLogger(__name__)
        self.max_insert_attempts = max(1, max_insert_attempts)

    async def create_short_url(self, original_url: Optional[str]) -> UrlRecord:
        """Create a new short URL.

        The same URL may be shortened any number of times; each call stores
        a new record with a new code.

        Args:
            original_url: The original long URL

        Returns:
            The stored record

        Raises:
            InvalidURLError: If the URL fails validation
            CollisionExhaustedError: If no free code is left for the URL
            StorageError: If the store fails
        """
        if not isinstance(original_url, str) or not original_url.strip():
            raise InvalidURLError("URL is required")

        is_valid, error = validate_url(original_url.strip())
        if not is_valid:
            self.logger.info(f"Rejected URL: {error}")
            raise InvalidURLError(f"Invalid URL: {error}")

        url = sanitize_url(original_url)

        is_valid, error = validate_url(url)
        if not is_valid:
            self.logger.info(f"Rejected sanitized URL: {error}")
            raise InvalidURLError(f"Invalid URL: {error}")

        record = await self._insert_unique(url)

        if self.cache:
            await self.cache.set_record(record)

        self.logger.info(f"Created short URL: {record.short_code} -> {record.original_url}")
        return record

    async def _insert_unique(self, url: str) -> UrlRecord:
        """Generate a free code and insert it, retrying lost races."""
        for attempt in range(1, self.max_insert_attempts + 1):
            short_code = await self.generator.generate_unique(url, self.db.short_code_exists)

            try:
                return await self.db.insert(short_code, url)
            except ShortCodeConflictError:
                # Another request took the code between the check and the insert
                self.logger.warning(
                    f"Insert race on {short_code} (attempt {attempt}/{self.max_insert_attempts})"
                )

        raise StorageError(
            f"Failed to store URL after {self.max_insert_attempts} conflicting inserts"
        )

    async def resolve(self, short_code: str) -> Optional[UrlRecord]:
        """Look up the record to redirect to.

        Malformed codes, unknown codes and stored URLs that no longer pass
        validation all resolve to None.

        Args:
            short_code: The short code from the request path

        Returns:
            The record or None if there is nothing safe to redirect to
        """
        if not is_valid_short_code(short_code, self.generator.length):
            self.logger.debug(f"Malformed short code: {short_code!r}")
            return None

        record = None
        if self.cache:
            record = await self.cache.get_record(short_code)
            if record:
                self.logger.debug(f"Cache hit for {short_code}")

        if record is None:
            record = await self.db.get_by_short_code(short_code)

            if record is None:
                self.logger.info(f"Short code not found: {short_code}")
                return None

            if self.cache:
                await self.cache.set_record(record)

        if not is_valid_url(record.original_url):
            self.logger.warning(
                f"Refusing to redirect {short_code} to invalid stored URL: {record.original_url!r}"
            )
            return None

        return record

    async def get_url_info(self, short_code: str) -> Optional[UrlRecord]:
        """Get the stored record for a short code without re-validation."""
        if not is_valid_short_code(short_code, self.generator.length):
            return None
        return await self.db.get_by_short_code(short_code)

    async def list_recent_urls(self, limit: int = 10) -> List[UrlRecord]:
        """List recently created URLs, newest first.

        Raises:
            ValueError: If limit is not a positive number
        """
        if limit < 1:
            raise ValueError(f"limit must be at least 1, got {limit}")
        return await self.db.list_recent_urls(limit)

    async def health_check(self) -> Dict[str, Any]:
        """Report store and cache status.

        Returns:
            Dictionary with database and cache status
        """
        try:
            if not await self.db.health_check():
                database = {"status": "disconnected", "urls_table_exists": False}
            elif not await self.db.urls_table_exists():
                # Reachable but not initialized: shortening will fail until the schema exists
                database = {
                    "status": "connected",
                    "urls_table_exists": False,
                    "error": "urls table is missing",
                }
            else:
                database = {
                    "status": "connected",
                    "urls_table_exists": True,
                    "urls_count": await self.db.count_urls(),
                }
        except StorageError as e:
            self.logger.error(f"Database health check failed: {e}")
            database = {"status": "disconnected", "urls_table_exists": False, "error": "Database unavailable"}

        if self.cache and self.cache.enabled:
            cache_status = "connected" if await self.cache.ping() else "disconnected"
        else:
            cache_status = "disabled"

        return {
            "database": database,
            "cache": cache_status,
            "overall": database["status"] == "connected" and database["urls_table_exists"],
        }

    async def close(self) -> None:
        """Close service connections."""
        await self.db.close()
        if self.cache:
            await self.cache.close()
