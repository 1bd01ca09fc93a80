"""Tests for short code generation."""

import zlib

import pytest
from shortlink.errors import CollisionExhaustedError
from shortlink.shortcode import (
    InvalidDigitError,
    ShortCodeGenerator,
    base_code,
    decode_base62,
    encode_base62,
)


class ExistsRecorder:
    """Async exists() over a fixed set of taken codes that records each call."""

    def __init__(self, taken=()):
        self.taken = set(taken)
        self.calls = []

    async def __call__(self, code: str) -> bool:
        self.calls.append(code)
        return code in self.taken


class TestBase62:
    """Test base62 encoding/decoding."""

    def test_encode_digits(self):
        assert encode_base62(0) == "a"
        assert encode_base62(1) == "b"
        assert encode_base62(25) == "z"
        assert encode_base62(26) == "A"
        assert encode_base62(52) == "0"
        assert encode_base62(61) == "9"
        assert encode_base62(62) == "ba"

    def test_encode_pads_with_zero_digit(self):
        assert encode_base62(0, 3) == "aaa"
        assert encode_base62(5, 3) == "aaf"
        assert encode_base62(62, 2) == "ba"
        # Padding never truncates
        assert encode_base62(62 ** 3, 2) == "baaa"

    def test_encode_negative(self):
        with pytest.raises(ValueError):
            encode_base62(-1)

    def test_decode(self):
        assert decode_base62("a") == 0
        assert decode_base62("9") == 61
        assert decode_base62("ba") == 62
        assert decode_base62("aaaba") == 62

    def test_decode_invalid_digit(self):
        with pytest.raises(InvalidDigitError) as exc_info:
            decode_base62("ab-c")
        assert exc_info.value.char == "-"

        with pytest.raises(ValueError):
            decode_base62("abc!")

    @pytest.mark.parametrize("num", [0, 1, 61, 62, 3843, 3844, 123456, 2 ** 32 - 1])
    def test_decode_inverts_encode(self, num):
        assert decode_base62(encode_base62(num)) == num
        assert decode_base62(encode_base62(num, 10)) == num


class TestBaseCode:
    """Test hash-derived base codes."""

    def test_deterministic(self):
        url = "https://example.com/test"
        assert base_code(url, 7) == base_code(url, 7)

    def test_lengths(self):
        for url in ["https://example.com", "http://a.b", "https://example.com/" + "x" * 500]:
            assert len(base_code(url, 7)) == 7
            assert len(base_code(url, 6)) == 6

    def test_encodes_crc32(self):
        url = "https://www.example.com"
        assert decode_base62(base_code(url, 7)) == zlib.crc32(url.encode("utf-8"))
        assert decode_base62(base_code(url, 6)) == zlib.crc32(url.encode("utf-8"))

    def test_shorter_base_drops_padding(self):
        url = "https://www.example.com/path"
        # Same checksum, so the 7 character form is the 6 character form left-padded
        assert base_code(url, 7) == "a" + base_code(url, 6)

    def test_different_urls(self):
        assert base_code("https://example.com/a", 7) != base_code("https://example.com/b", 7)


class TestGenerateUnique:
    """Test collision resolution."""

    URL = "https://www.example.com/collide"

    async def test_no_collision(self):
        generator = ShortCodeGenerator()
        exists = ExistsRecorder()

        code = await generator.generate_unique(self.URL, exists)

        assert code == base_code(self.URL, 7) + "a"
        assert len(code) == 8
        assert exists.calls == [code]

    async def test_ten_collisions(self):
        generator = ShortCodeGenerator()
        base = base_code(self.URL, 7)
        exists = ExistsRecorder(base + c for c in "abcdefghij")

        code = await generator.generate_unique(self.URL, exists)

        assert code == base + "k"
        assert len(exists.calls) == 11

    async def test_switches_to_shorter_base_after_single_suffixes(self):
        generator = ShortCodeGenerator()
        base7 = base_code(self.URL, 7)
        exists = ExistsRecorder(base7 + c for c in ShortCodeGenerator.BASE62_CHARS)

        code = await generator.generate_unique(self.URL, exists)

        assert code == base_code(self.URL, 6) + encode_base62(62, 2)
        assert code.endswith("ba")
        assert len(code) == 8
        assert len(exists.calls) == 63

    async def test_two_character_suffixes_continue(self):
        generator = ShortCodeGenerator()
        base7 = base_code(self.URL, 7)
        base6 = base_code(self.URL, 6)
        taken = {base7 + c for c in ShortCodeGenerator.BASE62_CHARS}
        taken.update(base6 + encode_base62(i, 2) for i in range(62, 70))
        exists = ExistsRecorder(taken)

        code = await generator.generate_unique(self.URL, exists)

        assert code == base6 + encode_base62(70, 2)

    async def test_collision_exhausted(self):
        generator = ShortCodeGenerator()

        async def always_taken(code):
            always_taken.calls += 1
            return True

        always_taken.calls = 0

        with pytest.raises(CollisionExhaustedError):
            await generator.generate_unique(self.URL, always_taken)

        # Every candidate up to the last two character suffix is checked once
        assert always_taken.calls == generator.max_increment + 1

    async def test_every_candidate_is_eight_alphanumeric_characters(self):
        generator = ShortCodeGenerator()
        seen = []

        async def record(code):
            seen.append(code)
            return len(seen) < 200

        await generator.generate_unique(self.URL, record)

        assert all(len(code) == 8 for code in seen)
        assert all(ShortCodeGenerator.is_valid_format(code) for code in seen)
        assert len(set(seen)) == len(seen)


class TestShortCodeGenerator:
    """Test generator helpers."""

    def test_is_valid_format(self):
        assert ShortCodeGenerator.is_valid_format("abc123XY")
        assert not ShortCodeGenerator.is_valid_format("")
        assert not ShortCodeGenerator.is_valid_format("abc-1234")
        assert not ShortCodeGenerator.is_valid_format("abc 1234")

    def test_rejects_tiny_length(self):
        with pytest.raises(ValueError):
            ShortCodeGenerator(length=2)
