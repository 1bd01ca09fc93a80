"""Database layer for URL shortener."""

import logging
from typing import Optional
from urllib.parse import urlparse

from .base import URLStoreBase
from .memory import InMemoryURLStore
from .models import UrlRecord
from .postgres import PostgresURLStore

__all__ = [
    "URLStoreBase",
    "InMemoryURLStore",
    "PostgresURLStore",
    "UrlRecord",
    "create_store",
]


def create_store(
    database_url: str,
    pool_max_size: int = 10,
    logger: Optional[logging.Logger] = None,
) -> URLStoreBase:
    """Build the store matching the scheme of the database URL.

    Args:
        database_url: postgresql://... or memory://
        pool_max_size: Maximum size of the connection pool (PostgreSQL only)
        logger: Optional logger instance

    Returns:
        URL store instance
    """
    scheme = urlparse(database_url).scheme.lower()

    if scheme == "memory":
        return InMemoryURLStore(db_config=database_url, logger=logger)
    if scheme in ("postgres", "postgresql"):
        return PostgresURLStore(
            db_config=database_url,
            pool_max_size=pool_max_size,
            logger=logger,
        )

    raise ValueError(f"Unsupported database URL scheme: {scheme!r}")
