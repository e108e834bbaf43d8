"""Base58 codec (Bitcoin alphabet).

Unlike the power-of-two bases, base58 does not split into fixed bit groups:
the whole input is one big-endian number that is converted digit by digit.
Both directions work on a digit array, multiplying it by the source radix and
adding the next input digit while propagating carries.

Leading zero bytes are not representable in that number, so each one is
carried through as a leading ``'1'`` (the zero digit) and back.

Working-array sizes:
  - encode: ``m`` bytes need at most ``ceil(m * 1366 / 1000)`` base58 digits,
    since ``58 ** 1.366 > 256``.
  - decode: ``m`` digits need at most ``ceil(m * 733 / 1000)`` bytes,
    since ``256 ** 0.733 > 58``.
"""

import logging

from tinyland_basex.config import Base58Config, ensure_config
from tinyland_basex.errors import (
    InvalidCharacterError,
    check_bytes_input,
    check_length,
    check_text_input,
    truncate_at_null,
    write_output,
)

logger = logging.getLogger(__name__)

BITCOIN_ALPHABET = "123456789ABCDEFGHJKLMNPQRSTUVWXYZabcdefghijkmnopqrstuvwxyz"
_B58_MAP = {char: idx for idx, char in enumerate(BITCOIN_ALPHABET)}


def _digits_needed(length: int) -> int:
    return (length * 1366 + 999) // 1000


def _bytes_needed(length: int) -> int:
    return (length * 733 + 999) // 1000


def encode_len(length: int, config: Base58Config | None = None) -> int:
    """Upper bound on the characters ``encode`` produces for ``length`` bytes.

    Each leading zero byte costs exactly one character, which is less than
    the 1.366 characters per byte the bound allows, so the bound holds
    whatever the number of leading zeros.
    """
    ensure_config(config, Base58Config)
    check_length(length)
    return _digits_needed(length)


def decode_len(length: int, config: Base58Config | None = None) -> int:
    """Upper bound on the bytes ``decode`` produces for ``length`` characters.

    A leading ``'1'`` yields one byte and any other digit less than one, so
    ``length`` itself is the tight bound (reached by all-``'1'`` text).
    """
    ensure_config(config, Base58Config)
    check_length(length)
    return length


def encode(data: bytes, config: Base58Config | None = None) -> str:
    """Encode bytes to a base58 string using the Bitcoin alphabet."""
    ensure_config(config, Base58Config)
    check_bytes_input(data)
    data = bytes(data)
    if not data:
        return ""

    leading_zeros = 0
    for byte in data:
        if byte == 0:
            leading_zeros += 1
        else:
            break

    size = _digits_needed(len(data) - leading_zeros)
    digits = [0] * size
    # digits[high + 1:] holds every non-zero digit produced so far
    high = size - 1
    for byte in data[leading_zeros:]:
        carry = byte
        idx = size - 1
        while idx > high or carry:
            carry += digits[idx] << 8
            carry, digits[idx] = divmod(carry, 58)
            idx -= 1
        high = idx

    first = 0
    while first < size and digits[first] == 0:
        first += 1

    return BITCOIN_ALPHABET[0] * leading_zeros + "".join(
        BITCOIN_ALPHABET[digit] for digit in digits[first:]
    )


def decode(encoded: str, config: Base58Config | None = None) -> bytes:
    """Decode a base58 string to bytes using the Bitcoin alphabet."""
    config = ensure_config(config, Base58Config)
    check_text_input(encoded)
    if config.truncate_on_null:
        encoded = truncate_at_null(encoded)
    if not encoded:
        return b""

    for pos, ch in enumerate(encoded):
        if ch not in _B58_MAP:
            logger.debug("rejecting base58 input at position %d", pos)
            raise InvalidCharacterError(
                f"Invalid base58 character: {ch!r} at position {pos}", ch, pos
            )

    leading_zeros = 0
    for ch in encoded:
        if ch == BITCOIN_ALPHABET[0]:
            leading_zeros += 1
        else:
            break

    size = _bytes_needed(len(encoded) - leading_zeros)
    buf = bytearray(size)
    high = size - 1
    for ch in encoded[leading_zeros:]:
        carry = _B58_MAP[ch]
        idx = size - 1
        while idx > high or carry:
            carry += buf[idx] * 58
            buf[idx] = carry & 0xFF
            carry >>= 8
            idx -= 1
        high = idx

    first = 0
    while first < size and buf[first] == 0:
        first += 1

    return b"\x00" * leading_zeros + bytes(buf[first:])


def encode_into(data: bytes, out, config: Base58Config | None = None) -> int:
    """Write the ASCII base58 encoding of ``data`` into ``out``.

    Returns the number of bytes written. Raises BufferTooSmallError, with
    the exact size required, when ``out`` is too short.
    """
    return write_output(out, encode(data, config).encode("ascii"))


def decode_into(encoded: str, out, config: Base58Config | None = None) -> int:
    """Write the bytes decoded from ``encoded`` into ``out``."""
    return write_output(out, decode(encoded, config))
