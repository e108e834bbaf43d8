"""Base32 codec (RFC 4648 alphabet).

Input is processed in 5-byte groups, each packed into a 40-bit value and
split into eight 5-bit digits. A short final group emits only the digits
that carry data, followed by ``=`` unless the config disables padding.
"""

import logging

from tinyland_basex.config import Base32Config, ensure_config
from tinyland_basex.errors import (
    InvalidCharacterError,
    InvalidLengthError,
    InvalidPaddingError,
    check_bytes_input,
    check_length,
    check_text_input,
    truncate_at_null,
    write_output,
)

logger = logging.getLogger(__name__)

ALPHABET = "ABCDEFGHIJKLMNOPQRSTUVWXYZ234567"
PAD_CHAR = "="
_B32_MAP = {char: idx for idx, char in enumerate(ALPHABET)}

# Characters in a group -> bytes they carry.
_GROUP_BYTES = {2: 1, 4: 2, 5: 3, 7: 4, 8: 5}


def encode_len(length: int, config: Base32Config | None = None) -> int:
    """Exact number of characters ``encode`` produces for ``length`` bytes."""
    config = ensure_config(config, Base32Config)
    check_length(length)
    if config.padding:
        return 8 * ((length + 4) // 5)
    return (length * 8 + 4) // 5


def decode_len(length: int, config: Base32Config | None = None) -> int:
    """Upper bound on the bytes ``decode`` produces for ``length`` characters."""
    config = ensure_config(config, Base32Config)
    check_length(length)
    if config.padding:
        return 5 * ((length + 7) // 8)
    return length * 5 // 8


def encode(data: bytes, config: Base32Config | None = None) -> str:
    """Encode bytes to a base32 string."""
    config = ensure_config(config, Base32Config)
    check_bytes_input(data)
    data = bytes(data)

    encoded = []
    for start in range(0, len(data), 5):
        chunk = data[start:start + 5]
        buf = int.from_bytes(chunk.ljust(5, b"\x00"), byteorder="big")
        digits = (len(chunk) * 8 + 4) // 5

        for idx in range(8):
            if idx < digits:
                encoded.append(ALPHABET[(buf >> (35 - idx * 5)) & 0x1F])
            elif config.padding:
                encoded.append(PAD_CHAR)
    return "".join(encoded)


def decode(encoded: str, config: Base32Config | None = None) -> bytes:
    """Decode a base32 string to bytes.

    Raises:
        InvalidLengthError: If the text cannot be split into valid groups.
        InvalidCharacterError: If a character is outside the alphabet.
        InvalidPaddingError: If ``=`` characters form an invalid pattern.
    """
    config = ensure_config(config, Base32Config)
    check_text_input(encoded)
    if config.truncate_on_null:
        encoded = truncate_at_null(encoded)

    tail = len(encoded) % 8
    if config.padding and tail:
        logger.debug("rejecting padded base32 input of length %d", len(encoded))
        raise InvalidLengthError(
            f"Padded base32 input length must be a multiple of 8, got {len(encoded)}"
        )
    if not config.padding and tail and tail not in _GROUP_BYTES:
        raise InvalidLengthError(
            f"Unpadded base32 input cannot end with a group of {tail} characters"
        )

    decoded = bytearray()
    for start in range(0, len(encoded), 8):
        group = encoded[start:start + 8]
        buf = 0
        valid_chars = 0
        padded = False
        for offset, char in enumerate(group):
            pos = start + offset
            if char == PAD_CHAR and config.padding:
                padded = True
                val = 0
            else:
                val = _B32_MAP.get(char)
                if val is None:
                    raise InvalidCharacterError(
                        f"Invalid base32 character: {char!r} at position {pos}",
                        char,
                        pos,
                    )
                if padded:
                    raise InvalidPaddingError(
                        f"Base32 character {char!r} follows padding at position {pos}"
                    )
                valid_chars += 1
                last_char, last_pos = char, pos
            buf = (buf << 5) | val
        buf <<= 5 * (8 - len(group))

        if padded and start + 8 < len(encoded):
            raise InvalidPaddingError(
                f"Base32 padding in a non-final group at position {start}"
            )
        count = _GROUP_BYTES.get(valid_chars)
        if count is None:
            raise InvalidPaddingError(
                f"Base32 group at position {start} has {valid_chars} data characters"
            )
        if buf & ((1 << (40 - count * 8)) - 1):
            raise InvalidCharacterError(
                f"Base32 character {last_char!r} at position {last_pos} "
                "has non-zero trailing bits",
                last_char,
                last_pos,
            )
        decoded += buf.to_bytes(5, byteorder="big")[:count]
    return bytes(decoded)


def encode_into(data: bytes, out, config: Base32Config | None = None) -> int:
    """Write the ASCII base32 encoding of ``data`` into ``out``."""
    return write_output(out, encode(data, config).encode("ascii"))


def decode_into(encoded: str, out, config: Base32Config | None = None) -> int:
    """Write the bytes decoded from ``encoded`` into ``out``."""
    return write_output(out, decode(encoded, config))
