"""Short code generation utilities."""

import logging
import string
import zlib
from typing import Awaitable, Callable, Optional

from .errors import CollisionExhaustedError


class InvalidDigitError(ValueError):
    """Character outside the base62 alphabet."""

    def __init__(self, char: str):
        super().__init__(f"Invalid character in base62 string: {char!r}")
        self.char = char


class ShortCodeGenerator:
    """Generate short codes for URLs.

    Codes are derived from a CRC32 checksum of the URL, so the same URL
    always starts from the same base code. Collisions are resolved by
    appending an increment instead of retrying with random codes.
    """

    # Base62 characters (alphanumeric, case-sensitive)
    BASE62_CHARS = string.ascii_letters + string.digits  # a-zA-Z0-9

    def __init__(self, length: int = 8, logger: Optional[logging.Logger] = None):
        """Initialize short code generator.

        Args:
            length: Length of generated codes
            logger: Optional logger instance
        """
        if length < 3:
            raise ValueError("Short code length must be at least 3")
        self.length = length
        self.logger = logger or logging.getLogger(__name__)

    @property
    def max_increment(self) -> int:
        """Largest increment that still fits in a two character suffix."""
        return len(self.BASE62_CHARS) ** 2 - 1

    @classmethod
    def encode_base62(cls, num: int, min_length: int = 1) -> str:
        """Convert integer to base62 string.

        Args:
            num: Non-negative integer to convert
            min_length: Pad on the left with the zero digit up to this length

        Returns:
            Base62 string
        """
        if num < 0:
            raise ValueError(f"Cannot encode negative number: {num}")

        base = len(cls.BASE62_CHARS)
        result = []

        while num > 0:
            num, remainder = divmod(num, base)
            result.append(cls.BASE62_CHARS[remainder])

        code = ''.join(reversed(result)) or cls.BASE62_CHARS[0]
        return code.rjust(min_length, cls.BASE62_CHARS[0])

    @classmethod
    def decode_base62(cls, code: str) -> int:
        """Convert base62 string to integer.

        Args:
            code: Base62 string

        Returns:
            Integer value

        Raises:
            InvalidDigitError: If a character is not in the alphabet
        """
        result = 0
        base = len(cls.BASE62_CHARS)

        for char in code:
            position = cls.BASE62_CHARS.find(char)
            if position < 0:
                raise InvalidDigitError(char)
            result = result * base + position

        return result

    @classmethod
    def base_code(cls, url: str, length: int) -> str:
        """Generate the hash-derived base code for a URL.

        Args:
            url: The (sanitized) URL
            length: Length of the base code

        Returns:
            Base62 encoded CRC32 of the URL, padded to length
        """
        checksum = zlib.crc32(url.encode("utf-8")) & 0xFFFFFFFF
        return cls.encode_base62(checksum, length)

    async def generate_unique(
        self,
        url: str,
        exists: Callable[[str], Awaitable[bool]],
    ) -> str:
        """Generate a short code for a URL that is not taken yet.

        The first candidate is the base code followed by a one character
        increment. Once the single character suffixes run out the base is
        recomputed one character shorter and a two character suffix is used.

        Args:
            url: The (sanitized) URL
            exists: Async callable reporting whether a code is already taken

        Returns:
            Unique short code

        Raises:
            CollisionExhaustedError: If every candidate is taken
        """
        base = self.base_code(url, self.length - 1)
        increment = 0
        candidate = base + self.encode_base62(increment, 1)

        while await exists(candidate):
            increment += 1

            if increment > self.max_increment:
                raise CollisionExhaustedError(
                    f"Too many collisions for URL hash {base!r}"
                )

            if increment < len(self.BASE62_CHARS):
                candidate = base + self.encode_base62(increment, 1)
            else:
                base = self.base_code(url, self.length - 2)
                candidate = base + self.encode_base62(increment, 2)

        if increment:
            self.logger.debug(f"Resolved {increment} collisions for {url}: {candidate}")

        return candidate

    @classmethod
    def is_valid_format(cls, code: str) -> bool:
        """Check if code only uses base62 characters.

        Args:
            code: Code to validate

        Returns:
            True if valid format
        """
        return bool(code) and all(c in cls.BASE62_CHARS for c in code)


encode_base62 = ShortCodeGenerator.encode_base62
decode_base62 = ShortCodeGenerator.decode_base62
base_code = ShortCodeGenerator.base_code
