"""Base64 codec with standard and URL-safe alphabets.

Three bytes pack into 24 bits and split into four 6-bit digits. The two
alphabets differ only in digits 62 and 63 (``+/`` versus ``-_``); a character
from the other alphabet is rejected rather than silently accepted.
"""

import logging

from tinyland_basex.config import Base64Alphabet, Base64Config, ensure_config
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

STANDARD_ALPHABET = "ABCDEFGHIJKLMNOPQRSTUVWXYZabcdefghijklmnopqrstuvwxyz0123456789+/"
URLSAFE_ALPHABET = "ABCDEFGHIJKLMNOPQRSTUVWXYZabcdefghijklmnopqrstuvwxyz0123456789-_"
PAD_CHAR = "="

_ALPHABETS = {
    Base64Alphabet.STANDARD: STANDARD_ALPHABET,
    Base64Alphabet.URLSAFE: URLSAFE_ALPHABET,
}
_REVERSE = {
    variant: {char: idx for idx, char in enumerate(table)}
    for variant, table in _ALPHABETS.items()
}


def encode_len(length: int, config: Base64Config | None = None) -> int:
    """Exact number of characters ``encode`` produces for ``length`` bytes."""
    config = ensure_config(config, Base64Config)
    check_length(length)
    if config.padding:
        return 4 * ((length + 2) // 3)
    return (length * 4 + 2) // 3


def decode_len(length: int, config: Base64Config | None = None) -> int:
    """Upper bound on the bytes ``decode`` produces for ``length`` characters."""
    config = ensure_config(config, Base64Config)
    check_length(length)
    if config.padding:
        return 3 * ((length + 3) // 4)
    return length * 3 // 4


def encode(data: bytes, config: Base64Config | None = None) -> str:
    """Encode bytes to a base64 string."""
    config = ensure_config(config, Base64Config)
    check_bytes_input(data)
    data = bytes(data)
    table = _ALPHABETS[config.alphabet]

    encoded = []
    for start in range(0, len(data), 3):
        chunk = data[start:start + 3]
        buf24 = int.from_bytes(chunk.ljust(3, b"\x00"), byteorder="big")

        encoded.append(table[(buf24 >> 18) & 0x3F])
        encoded.append(table[(buf24 >> 12) & 0x3F])
        if len(chunk) > 1:
            encoded.append(table[(buf24 >> 6) & 0x3F])
        elif config.padding:
            encoded.append(PAD_CHAR)
        if len(chunk) > 2:
            encoded.append(table[buf24 & 0x3F])
        elif config.padding:
            encoded.append(PAD_CHAR)
    return "".join(encoded)


def decode(encoded: str, config: Base64Config | None = None) -> bytes:
    """Decode a base64 string to bytes.

    Raises:
        InvalidLengthError: If the text cannot be split into valid groups.
        InvalidCharacterError: If a character is outside the configured
            alphabet, including ``=`` when padding is disabled.
        InvalidPaddingError: If ``=`` characters form an invalid pattern.
    """
    config = ensure_config(config, Base64Config)
    check_text_input(encoded)
    if config.truncate_on_null:
        encoded = truncate_at_null(encoded)

    tail = len(encoded) % 4
    if config.padding and tail:
        logger.debug("rejecting padded base64 input of length %d", len(encoded))
        raise InvalidLengthError(
            f"Padded base64 input length must be a multiple of 4, got {len(encoded)}"
        )
    if tail == 1:
        raise InvalidLengthError(
            "Unpadded base64 input cannot end with a single character"
        )

    rev_table = _REVERSE[config.alphabet]
    decoded = bytearray()
    for start in range(0, len(encoded), 4):
        group = encoded[start:start + 4]
        buf24 = 0
        valid_chars = 0
        padded = False
        for offset, char in enumerate(group):
            pos = start + offset
            if char == PAD_CHAR and config.padding:
                padded = True
                continue
            val = rev_table.get(char)
            if val is None:
                raise InvalidCharacterError(
                    f"Invalid base64 character: {char!r} at position {pos}",
                    char,
                    pos,
                )
            if padded:
                raise InvalidPaddingError(
                    f"Base64 character {char!r} follows padding at position {pos}"
                )
            buf24 |= val << (18 - offset * 6)
            valid_chars += 1
            last_char, last_pos = char, pos

        if padded and start + 4 < len(encoded):
            raise InvalidPaddingError(
                f"Base64 padding in a non-final group at position {start}"
            )
        if valid_chars < 2:
            raise InvalidPaddingError(
                f"Base64 group at position {start} has {valid_chars} data characters"
            )
        if buf24 & ((1 << (24 - (valid_chars - 1) * 8)) - 1):
            raise InvalidCharacterError(
                f"Base64 character {last_char!r} at position {last_pos} "
                "has non-zero trailing bits",
                last_char,
                last_pos,
            )
        decoded += buf24.to_bytes(3, byteorder="big")[:valid_chars - 1]
    return bytes(decoded)


def encode_into(data: bytes, out, config: Base64Config | None = None) -> int:
    """Write the ASCII base64 encoding of ``data`` into ``out``."""
    return write_output(out, encode(data, config).encode("ascii"))


def decode_into(encoded: str, out, config: Base64Config | None = None) -> int:
    """Write the bytes decoded from ``encoded`` into ``out``."""
    return write_output(out, decode(encoded, config))
