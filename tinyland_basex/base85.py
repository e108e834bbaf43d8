"""Base85 codec: Ascii85, its extended form, and ZeroMQ's Z85.

Four bytes form one 32-bit big-endian value, written as five base-85 digits
with the most significant digit first.

Variants:
  - ASCII85  digits map to ``'!'..'u'`` (digit + 33). A full all-zero group
             is written as the single character ``'z'``.
  - EXTENDED Ascii85 plus ``'y'`` for a full group of four spaces.
  - Z85      digits map through the Z85 alphabet. No shortcuts, and input
             must be whole groups on both sides (4 bytes / 5 characters).

A trailing Ascii85 group of 1-3 bytes is zero-padded for the conversion and
only ``tail + 1`` digits are written. Decoding pads the short group back with
the highest digit (84) and keeps ``count - 1`` bytes.
"""

import logging

from tinyland_basex.config import Base85Config, Base85Variant, ensure_config
from tinyland_basex.errors import (
    InvalidCharacterError,
    InvalidLengthError,
    check_bytes_input,
    check_length,
    check_text_input,
    truncate_at_null,
    write_output,
)

logger = logging.getLogger(__name__)

Z85_ALPHABET = (
    "0123456789abcdefghijklmnopqrstuvwxyzABCDEFGHIJKLMNOPQRSTUVWXYZ.-:+=^!/*?&<>()[]{}@%$#"
)
_Z85_MAP = {char: idx for idx, char in enumerate(Z85_ALPHABET)}

ASCII85_OFFSET = 33
ASCII85_MAX_DIGIT = 84
ZERO_SHORTCUT = "z"
SPACE_SHORTCUT = "y"
SPACE_GROUP = 0x20202020
WHITESPACE = frozenset(" \t\n\v\f\r")

_U32_MAX = 0xFFFFFFFF


def encode_len(length: int, config: Base85Config | None = None) -> int:
    """Number of characters ``encode`` produces for ``length`` bytes.

    Exact for Z85 and for Ascii85 input without shortcut groups; shortcuts
    only make the output shorter.
    """
    config = ensure_config(config, Base85Config)
    check_length(length)
    full, tail = divmod(length, 4)
    if config.variant is Base85Variant.Z85:
        if tail:
            raise InvalidLengthError(
                f"Z85 input length must be a multiple of 4, got {length}"
            )
        return full * 5
    return full * 5 + (tail + 1 if tail else 0)


def decode_len(length: int, config: Base85Config | None = None) -> int:
    """Upper bound on the bytes ``decode`` produces for ``length`` characters.

    Every Ascii85 character could be a four-byte shortcut.
    """
    config = ensure_config(config, Base85Config)
    check_length(length)
    if config.variant is Base85Variant.Z85:
        return length // 5 * 4
    return length * 4


def _to_digits(value: int) -> list[int]:
    digits = [0] * 5
    for idx in range(4, -1, -1):
        value, digits[idx] = divmod(value, 85)
    return digits


def encode(data: bytes, config: Base85Config | None = None) -> str:
    """Encode bytes to a base85 string in the configured variant.

    Raises:
        InvalidLengthError: For Z85 input whose length is not a multiple of 4.
    """
    config = ensure_config(config, Base85Config)
    check_bytes_input(data)
    data = bytes(data)
    is_z85 = config.variant is Base85Variant.Z85
    use_ext = config.variant is Base85Variant.EXTENDED

    full, tail = divmod(len(data), 4)
    if is_z85 and tail:
        logger.debug("rejecting Z85 encode input of length %d", len(data))
        raise InvalidLengthError(
            f"Z85 input length must be a multiple of 4, got {len(data)}"
        )

    encoded = []
    for start in range(0, full * 4, 4):
        value = int.from_bytes(data[start:start + 4], byteorder="big")

        if not is_z85 and value == 0:
            encoded.append(ZERO_SHORTCUT)
            continue
        if use_ext and value == SPACE_GROUP:
            encoded.append(SPACE_SHORTCUT)
            continue

        if is_z85:
            encoded.extend(Z85_ALPHABET[digit] for digit in _to_digits(value))
        else:
            encoded.extend(chr(digit + ASCII85_OFFSET) for digit in _to_digits(value))

    if tail:
        value = int.from_bytes(data[full * 4:].ljust(4, b"\x00"), byteorder="big")
        digits = _to_digits(value)[:tail + 1]
        encoded.extend(chr(digit + ASCII85_OFFSET) for digit in digits)

    return "".join(encoded)


def _digit_value(char: str, is_z85: bool):
    if is_z85:
        return _Z85_MAP.get(char)
    digit = ord(char) - ASCII85_OFFSET
    if 0 <= digit <= ASCII85_MAX_DIGIT:
        return digit
    return None


def decode(encoded: str, config: Base85Config | None = None) -> bytes:
    """Decode a base85 string in the configured variant to bytes.

    Raises:
        InvalidLengthError: For Z85 text that is not whole 5-character
            groups, or a trailing group of a single digit.
        InvalidCharacterError: For a character outside the alphabet, a
            shortcut inside a group, or a group above ``2**32 - 1``.
    """
    config = ensure_config(config, Base85Config)
    check_text_input(encoded)
    if config.truncate_on_null:
        encoded = truncate_at_null(encoded)
    is_z85 = config.variant is Base85Variant.Z85
    use_ext = config.variant is Base85Variant.EXTENDED

    if is_z85 and not config.ignore_whitespace and len(encoded) % 5 != 0:
        logger.debug("rejecting Z85 decode input of length %d", len(encoded))
        raise InvalidLengthError(
            f"Z85 input length must be a multiple of 5, got {len(encoded)}"
        )

    decoded = bytearray()
    value = 0
    count = 0
    for pos, char in enumerate(encoded):
        if config.ignore_whitespace and char in WHITESPACE:
            continue

        if not is_z85 and count == 0:
            if char == ZERO_SHORTCUT:
                decoded += b"\x00\x00\x00\x00"
                continue
            if use_ext and char == SPACE_SHORTCUT:
                decoded += b"    "
                continue

        digit = _digit_value(char, is_z85)
        if digit is None:
            raise InvalidCharacterError(
                f"Invalid base85 character: {char!r} at position {pos}", char, pos
            )

        value = value * 85 + digit
        count += 1
        last_pos = pos
        if count == 5:
            if value > _U32_MAX:
                raise InvalidCharacterError(
                    f"Base85 group ending at position {pos} exceeds 32 bits",
                    char,
                    pos,
                )
            decoded += value.to_bytes(4, byteorder="big")
            value = 0
            count = 0

    if count and is_z85:
        raise InvalidLengthError(
            f"Z85 input ends with a partial group of {count} characters"
        )
    if count == 1:
        raise InvalidLengthError("Base85 input ends with a single-character group")
    if count:
        for _ in range(count, 5):
            value = value * 85 + ASCII85_MAX_DIGIT
        if value > _U32_MAX:
            raise InvalidCharacterError(
                "Base85 final partial group exceeds 32 bits",
                encoded[last_pos],
                last_pos,
            )
        decoded += value.to_bytes(4, byteorder="big")[:count - 1]

    return bytes(decoded)


def encode_into(data: bytes, out, config: Base85Config | None = None) -> int:
    """Write the ASCII base85 encoding of ``data`` into ``out``."""
    return write_output(out, encode(data, config).encode("ascii"))


def decode_into(encoded: str, out, config: Base85Config | None = None) -> int:
    """Write the bytes decoded from ``encoded`` into ``out``."""
    return write_output(out, decode(encoded, config))
