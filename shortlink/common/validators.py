"""Validation utilities for URL shortener."""

import re
from urllib.parse import quote, urlparse
from typing import Tuple

MAX_URL_LENGTH = 2048
SHORT_CODE_LENGTH = 8

# Rejected anywhere in the URL, not only as the scheme
SUSPICIOUS_PATTERNS = ("javascript:", "data:", "vbscript:", "file:", "ftp:")

_CONTROL_CHARS = re.compile(r"[\x00-\x08\x0b\x0c\x0e-\x1f\x7f]")
_SHORT_CODE_RE = re.compile(r"[a-zA-Z0-9]+")

# Reserved delimiters and already percent-encoded sequences are left alone
_URL_SAFE_CHARS = ":/?#[]@!$&'()*+,;=-._~%"


def validate_url(url: str) -> Tuple[bool, str]:
    """Validate a URL.

    Args:
        url: The URL to validate

    Returns:
        Tuple of (is_valid, error_message)
    """
    if not url or not isinstance(url, str):
        return False, "URL is required"

    if len(url) > MAX_URL_LENGTH:
        return False, f"URL is too long (max {MAX_URL_LENGTH} characters)"

    try:
        result = urlparse(url)

        # Check if scheme is http or https
        if result.scheme not in ("http", "https"):
            return False, "URL must use http or https protocol"

        # Check if host exists
        if not result.hostname:
            return False, "URL must have a valid domain"

    except ValueError as e:
        return False, f"Invalid URL format: {e}"

    lowered = url.lower()
    for pattern in SUSPICIOUS_PATTERNS:
        if pattern in lowered:
            return False, f"URL contains a disallowed pattern: {pattern}"

    return True, ""


def is_valid_url(url: str) -> bool:
    """Return True if the URL is a safe http/https URL."""
    is_valid, _ = validate_url(url)
    return is_valid


def sanitize_url(url: str) -> str:
    """Normalize a URL for storage.

    Trims whitespace, drops control characters, adds a missing http://
    scheme and percent-encodes unsafe characters.

    Args:
        url: The URL to sanitize

    Returns:
        Sanitized URL
    """
    url = _CONTROL_CHARS.sub("", url.strip())

    if not re.match(r"^https?://", url, re.IGNORECASE):
        url = "http://" + url

    return quote(url, safe=_URL_SAFE_CHARS)


def is_valid_short_code(short_code: str, length: int = SHORT_CODE_LENGTH) -> bool:
    """Check that a short code has the exact length and is alphanumeric.

    Args:
        short_code: The short code to validate
        length: Required length

    Returns:
        True if valid
    """
    if not short_code or not isinstance(short_code, str):
        return False

    if len(short_code) != length:
        return False

    # str.isalnum would also accept non-ASCII letters
    return _SHORT_CODE_RE.fullmatch(short_code) is not None
