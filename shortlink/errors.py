"""Exception types for URL shortener."""


class URLShortenerError(Exception):
    """Base class for URL shortener errors."""


class InvalidURLError(URLShortenerError, ValueError):
    """URL failed validation."""


class ShortCodeConflictError(URLShortenerError):
    """Insert rejected because the short code is already taken."""

    def __init__(self, short_code: str):
        super().__init__(f"Short code already exists: {short_code}")
        self.short_code = short_code


class CollisionExhaustedError(URLShortenerError):
    """Every candidate code for a URL is already taken."""


class StorageError(URLShortenerError):
    """The URL store failed to complete an operation."""
