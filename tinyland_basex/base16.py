"""Base16 (hex) codec.

Every byte becomes two characters, high nibble first. Decoding is
case-insensitive regardless of which alphabet the config selects for
encoding.
"""

import logging

from tinyland_basex.config import Base16Config, ensure_config
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

UPPER_ALPHABET = "0123456789ABCDEF"
LOWER_ALPHABET = "0123456789abcdef"
_B16_MAP = {char: idx for idx, char in enumerate(UPPER_ALPHABET)}
_B16_MAP.update({char: idx for idx, char in enumerate(LOWER_ALPHABET)})


def encode_len(length: int, config: Base16Config | None = None) -> int:
    """Exact number of characters ``encode`` produces for ``length`` bytes."""
    ensure_config(config, Base16Config)
    check_length(length)
    return 2 * length


def decode_len(length: int, config: Base16Config | None = None) -> int:
    """Number of bytes ``decode`` produces for ``length`` characters."""
    ensure_config(config, Base16Config)
    check_length(length)
    return length // 2


def encode(data: bytes, config: Base16Config | None = None) -> str:
    """Encode bytes to a hex string."""
    config = ensure_config(config, Base16Config)
    check_bytes_input(data)
    table = UPPER_ALPHABET if config.uppercase else LOWER_ALPHABET

    encoded = []
    for byte in bytes(data):
        encoded.append(table[byte >> 4])
        encoded.append(table[byte & 0x0F])
    return "".join(encoded)


def decode(encoded: str, config: Base16Config | None = None) -> bytes:
    """Decode a hex string to bytes.

    Raises:
        InvalidLengthError: If the (possibly truncated) text has odd length.
        InvalidCharacterError: If any character is not a hex digit.
    """
    config = ensure_config(config, Base16Config)
    check_text_input(encoded)
    if config.truncate_on_null:
        encoded = truncate_at_null(encoded)

    if len(encoded) % 2 != 0:
        logger.debug("rejecting base16 input of odd length %d", len(encoded))
        raise InvalidLengthError(
            f"Base16 input length must be even, got {len(encoded)}"
        )

    decoded = bytearray(len(encoded) // 2)
    for pos in range(0, len(encoded), 2):
        hi = _B16_MAP.get(encoded[pos])
        lo = _B16_MAP.get(encoded[pos + 1])
        if hi is None:
            raise InvalidCharacterError(
                f"Invalid base16 character: {encoded[pos]!r} at position {pos}",
                encoded[pos],
                pos,
            )
        if lo is None:
            raise InvalidCharacterError(
                f"Invalid base16 character: {encoded[pos + 1]!r} at position {pos + 1}",
                encoded[pos + 1],
                pos + 1,
            )
        decoded[pos // 2] = (hi << 4) | lo
    return bytes(decoded)


def encode_into(data: bytes, out, config: Base16Config | None = None) -> int:
    """Write the ASCII hex encoding of ``data`` into ``out``.

    Returns the number of bytes written. Raises BufferTooSmallError, with
    the required size, when ``out`` is too short.
    """
    return write_output(out, encode(data, config).encode("ascii"))


def decode_into(encoded: str, out, config: Base16Config | None = None) -> int:
    """Write the bytes decoded from ``encoded`` into ``out``."""
    return write_output(out, decode(encoded, config))
