"""In-process implementation of the URL store."""

import asyncio
import itertools
import logging
from datetime import datetime, timezone
from typing import Dict, List, Optional

from ..errors import ShortCodeConflictError
from .base import URLStoreBase
from .models import UrlRecord


class InMemoryURLStore(URLStoreBase):
    """URL store kept in a dict, for local development and tests.

    Data lives only as long as the process. The check-and-insert runs under
    a lock so uniqueness holds across concurrent requests.
    """

    def __init__(
        self,
        db_config: str = "memory://",
        logger: Optional[logging.Logger] = None,
    ):
        super().__init__(db_config)
        self.logger = logger or logging.getLogger(__name__)
        self._records: Dict[str, UrlRecord] = {}
        self._ids = itertools.count(1)
        self._lock = asyncio.Lock()

    async def insert(self, short_code: str, original_url: str) -> UrlRecord:
        async with self._lock:
            if short_code in self._records:
                self.logger.warning(f"Short code already exists: {short_code}")
                raise ShortCodeConflictError(short_code)

            record = UrlRecord(
                id=next(self._ids),
                original_url=original_url,
                short_code=short_code,
                created_at=datetime.now(timezone.utc),
            )
            self._records[short_code] = record

        self.logger.debug(f"Inserted short URL: {short_code} -> {original_url}")
        return record

    async def short_code_exists(self, short_code: str) -> bool:
        return short_code in self._records

    async def get_by_short_code(self, short_code: str) -> Optional[UrlRecord]:
        return self._records.get(short_code)

    async def get_by_id(self, record_id: int) -> Optional[UrlRecord]:
        for record in self._records.values():
            if record.id == record_id:
                return record
        return None

    async def count_urls(self) -> int:
        return len(self._records)

    async def list_recent_urls(self, limit: int = 10) -> List[UrlRecord]:
        records = sorted(self._records.values(), key=lambda r: r.id, reverse=True)
        return records[:max(limit, 0)]

    async def health_check(self) -> bool:
        return True

    async def close(self) -> None:
        self.logger.debug("In-memory store closed")
