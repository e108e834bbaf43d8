"""Tests for the base85 codec (Ascii85, extended Ascii85 and Z85)."""

import pytest

from tinyland_basex.base85 import (
    Z85_ALPHABET,
    decode,
    decode_into,
    decode_len,
    encode,
    encode_into,
    encode_len,
)
from tinyland_basex.config import Base85Config, Base85Variant
from tinyland_basex.errors import (
    BufferTooSmallError,
    InvalidCharacterError,
    InvalidLengthError,
)

STD = Base85Config()
EXT = Base85Config(variant=Base85Variant.EXTENDED)
Z85 = Base85Config(variant=Base85Variant.Z85)

HELLO_WORLD_BYTES = bytes([0x86, 0x4F, 0xD2, 0x6F, 0xB5, 0x59, 0xF7, 0x5B])


# ---------------------------------------------------------------------------
# Known values
# ---------------------------------------------------------------------------


class TestAscii85KnownValues:
    """Verify Ascii85 vectors, including the z and y shortcuts."""

    @pytest.mark.parametrize(
        "raw, expected",
        [
            (b"", ""),
            (b"Man ", "9jqo^"),
            (b"Man", "9jqo"),
            (b"\x00", "!!"),
            (b"\x00\x00\x00\x00", "z"),
            (b"\x00" * 8, "zz"),
            (b"\x00\x00\x00\x00\x01", "z!<"),
            (b"    ", "+<VdL"),
        ],
    )
    def test_standard(self, raw, expected):
        assert encode(raw, STD) == expected
        assert decode(expected, STD) == raw

    def test_extended_space_shortcut(self):
        assert encode(b"    ", EXT) == "y"
        assert encode(b"        Man ", EXT) == "yy9jqo^"
        assert decode("yy9jqo^", EXT) == b"        Man "

    def test_extended_keeps_zero_shortcut(self):
        assert encode(b"\x00" * 4, EXT) == "z"

    def test_shortcuts_only_for_full_groups(self):
        # a three-byte zero tail is written as digits, not 'z'
        assert encode(b"\x00\x00\x00", STD) == "!!!!"
        assert encode(b"   ", EXT) == "+<Vd"

    def test_zero_shortcut_only_on_exact_match(self):
        assert "z" not in encode(b"\x00\x00\x00\x01", STD)


class TestZ85KnownValues:
    """Verify the ZeroMQ Z85 vector and the absence of shortcuts."""

    def test_rfc_vector(self):
        assert encode(HELLO_WORLD_BYTES, Z85) == "HelloWorld"
        assert decode("HelloWorld", Z85) == HELLO_WORLD_BYTES

    def test_no_shortcuts(self):
        assert encode(b"\x00" * 4, Z85) == "00000"
        assert encode(b"    ", Z85) != "y"
        assert "z" not in encode(b"\x00" * 16, Z85)

    def test_alphabet(self):
        assert len(Z85_ALPHABET) == 85
        assert len(set(Z85_ALPHABET)) == 85


# ---------------------------------------------------------------------------
# Round trips and lengths
# ---------------------------------------------------------------------------


class TestBase85RoundTrip:
    """Verify round trips and length bounds for each variant."""

    @pytest.mark.parametrize("config", [STD, EXT])
    def test_ascii85_all_tail_sizes(self, config):
        for n in range(0, 14):
            data = bytes((i * 91 + 7) & 0xFF for i in range(n))
            encoded = encode(data, config)
            assert len(encoded) == encode_len(n, config)
            assert decode(encoded, config) == data

    def test_z85_whole_groups(self):
        for n in range(0, 24, 4):
            data = bytes((i * 53 + 201) & 0xFF for i in range(n))
            encoded = encode(data, Z85)
            assert len(encoded) == encode_len(n, Z85)
            assert decode(encoded, Z85) == data

    @pytest.mark.parametrize("config", [STD, EXT])
    def test_mixed_shortcut_groups(self, config):
        data = b"\x00" * 4 + b"    " + b"\xff" * 4 + b"\x00" * 4 + b"ab"
        encoded = encode(data, config)
        assert len(encoded) <= encode_len(len(data), config)
        assert decode(encoded, config) == data

    def test_max_value_group(self):
        assert decode(encode(b"\xff" * 4, STD), STD) == b"\xff" * 4
        assert encode(b"\xff" * 4, STD) == "s8W-!"

    def test_decode_len_bounds_output(self):
        for text, config in [("zzzz", STD), ("yyy", EXT), ("9jqo^9jqo", STD), ("HelloWorld", Z85)]:
            assert len(decode(text, config)) <= decode_len(len(text), config)

    def test_decode_len_covers_encode_len(self):
        for n in range(0, 40):
            assert decode_len(encode_len(n, STD), STD) >= n
        for n in range(0, 40, 4):
            assert decode_len(encode_len(n, Z85), Z85) >= n


# ---------------------------------------------------------------------------
# Error handling
# ---------------------------------------------------------------------------


class TestBase85Errors:
    """Verify that malformed base85 is rejected with the right error."""

    def test_z85_encode_requires_multiple_of_4(self):
        with pytest.raises(InvalidLengthError):
            encode(b"abc", Z85)

    def test_z85_encode_len_requires_multiple_of_4(self):
        with pytest.raises(InvalidLengthError):
            encode_len(5, Z85)

    def test_z85_decode_requires_multiple_of_5(self):
        with pytest.raises(InvalidLengthError):
            decode("Hell", Z85)

    def test_z85_invalid_character(self):
        with pytest.raises(InvalidCharacterError):
            decode('Hell"', Z85)

    def test_single_trailing_digit(self):
        with pytest.raises(InvalidLengthError):
            decode("9jqo^9", STD)

    def test_zero_shortcut_inside_group(self):
        with pytest.raises(InvalidCharacterError) as exc_info:
            decode("9jz", STD)
        assert exc_info.value.char == "z"
        assert exc_info.value.position == 2

    def test_space_shortcut_needs_extended(self):
        with pytest.raises(InvalidCharacterError):
            decode("y", STD)

    def test_space_shortcut_inside_group(self):
        with pytest.raises(InvalidCharacterError):
            decode("9y", EXT)

    @pytest.mark.parametrize("bad", ["v", "~", " ", "\n", "\x00"])
    def test_out_of_range(self, bad):
        with pytest.raises(InvalidCharacterError):
            decode("9jqo^" + bad + "jqo^", STD)

    def test_group_overflow(self):
        with pytest.raises(InvalidCharacterError, match="exceeds 32 bits"):
            decode("uuuuu", STD)

    def test_partial_group_overflow(self):
        with pytest.raises(InvalidCharacterError):
            decode("uuuu", STD)

    def test_partial_group_overflow_position_skips_whitespace(self):
        config = Base85Config(ignore_whitespace=True)
        with pytest.raises(InvalidCharacterError) as exc_info:
            decode("uu u u \n", config)
        assert exc_info.value.char == "u"
        assert exc_info.value.position == 5


# ---------------------------------------------------------------------------
# Whitespace and null truncation
# ---------------------------------------------------------------------------


class TestBase85Preprocessing:
    """Test whitespace skipping and null truncation before decoding."""

    def test_ignore_whitespace(self):
        config = Base85Config(ignore_whitespace=True)
        assert decode("9jq o^\n\t9jqo", config) == b"Man Man"

    def test_whitespace_before_shortcut(self):
        config = Base85Config(ignore_whitespace=True)
        assert decode(" z\r\nz ", config) == b"\x00" * 8

    def test_z85_ignore_whitespace(self):
        config = Base85Config(variant=Base85Variant.Z85, ignore_whitespace=True)
        assert decode("Hello\nWorld\n", config) == HELLO_WORLD_BYTES
        with pytest.raises(InvalidLengthError):
            decode("Hello Worl", config)

    def test_truncate_on_null(self):
        config = Base85Config(truncate_on_null=True)
        assert decode("9jqo^\x00garbage", config) == b"Man "

    def test_truncate_before_z85_length_check(self):
        config = Base85Config(variant=Base85Variant.Z85, truncate_on_null=True)
        assert decode("HelloWorld\x00xx", config) == HELLO_WORLD_BYTES


# ---------------------------------------------------------------------------
# Caller-owned buffers
# ---------------------------------------------------------------------------


class TestBase85Buffers:
    """Test encode_into and decode_into with caller-owned buffers."""

    def test_encode_into_with_shortcut(self):
        out = bytearray(encode_len(8, STD))
        written = encode_into(b"\x00" * 4 + b"Man ", out, STD)
        assert bytes(out[:written]) == b"z9jqo^"

    def test_encode_into_too_small(self):
        with pytest.raises(BufferTooSmallError) as exc_info:
            encode_into(HELLO_WORLD_BYTES, bytearray(9), Z85)
        assert exc_info.value.required == 10

    def test_decode_into_too_small(self):
        out = bytearray(7)
        with pytest.raises(BufferTooSmallError) as exc_info:
            decode_into("zz", out, STD)
        assert exc_info.value.required == 8
        assert out == bytearray(7)
