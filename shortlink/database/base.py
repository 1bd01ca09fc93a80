"""Abstract base class for URL store implementations."""

from abc import ABC, abstractmethod
from typing import List, Optional

from .models import UrlRecord


class URLStoreBase(ABC):
    """Persistence contract the URL shortener relies on.

    Implementations must enforce uniqueness of short codes atomically:
    when two inserts race on the same code exactly one succeeds and the
    other raises ShortCodeConflictError. Any other failure is reported as
    StorageError.
    """

    def __init__(self, db_config: str):
        """Initialize store.

        Args:
            db_config: Database connection string
        """
        self.db_config = db_config

    @abstractmethod
    async def insert(self, short_code: str, original_url: str) -> UrlRecord:
        """Insert a new URL mapping.

        Args:
            short_code: The short code to use
            original_url: The sanitized original URL

        Returns:
            The stored record with its assigned id and created_at

        Raises:
            ShortCodeConflictError: If short_code already exists
            StorageError: On any other storage failure
        """

    @abstractmethod
    async def short_code_exists(self, short_code: str) -> bool:
        """Check if a short code already exists.

        Args:
            short_code: The short code to check

        Returns:
            True if exists, False otherwise
        """

    @abstractmethod
    async def get_by_short_code(self, short_code: str) -> Optional[UrlRecord]:
        """Get the record for a short code.

        Args:
            short_code: The short code to lookup (exact match)

        Returns:
            The record if found, None otherwise
        """

    @abstractmethod
    async def get_by_id(self, record_id: int) -> Optional[UrlRecord]:
        """Get a record by its id."""

    @abstractmethod
    async def count_urls(self) -> int:
        """Return the total number of stored URLs."""

    @abstractmethod
    async def list_recent_urls(self, limit: int = 10) -> List[UrlRecord]:
        """List the most recently created records, newest first.

        Args:
            limit: Maximum number of records to return
        """

    async def create_tables(self) -> None:
        """Create the schema if the backend needs one."""

    async def urls_table_exists(self) -> bool:
        """Whether the schema is in place. Stores without a schema always have it.

        Raises:
            StorageError: If the store cannot be queried
        """
        return True

    @abstractmethod
    async def health_check(self) -> bool:
        """Check if the store is reachable.

        Returns:
            True if healthy, False otherwise
        """

    @abstractmethod
    async def close(self) -> None:
        """Release connections."""
