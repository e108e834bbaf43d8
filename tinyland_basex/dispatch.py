"""Scheme-independent entry points.

Every function here accepts either a config object or a preset name from
:data:`tinyland_basex.config.PRESETS` and forwards to the codec module that
owns that config type. No encoding logic lives in this module.
"""

import logging

from tinyland_basex import base16, base32, base58, base64, base85
from tinyland_basex.config import (
    Base16Config,
    Base32Config,
    Base58Config,
    Base64Config,
    Base85Config,
    get_config,
)
from tinyland_basex.errors import InvalidArgumentError, UnsupportedConfigError

logger = logging.getLogger(__name__)

_CODECS = {
    Base16Config: base16,
    Base32Config: base32,
    Base58Config: base58,
    Base64Config: base64,
    Base85Config: base85,
}


def resolve(config):
    """Return ``(codec_module, config)`` for a config object or preset name.

    Raises:
        InvalidArgumentError: If ``config`` is None.
        UnsupportedConfigError: If the name or type is not known.
    """
    if config is None:
        raise InvalidArgumentError("A config or scheme name is required")
    if isinstance(config, str):
        config = get_config(config)
    for config_type, codec in _CODECS.items():
        if isinstance(config, config_type):
            return codec, config
    raise UnsupportedConfigError(
        f"No codec handles config of type {type(config).__name__}"
    )


def encode_len(length: int, config) -> int:
    """Output capacity needed to encode ``length`` bytes."""
    codec, config = resolve(config)
    return codec.encode_len(length, config)


def decode_len(length: int, config) -> int:
    """Output capacity needed to decode ``length`` characters."""
    codec, config = resolve(config)
    return codec.decode_len(length, config)


def encode(data: bytes, config) -> str:
    """Encode ``data`` with the codec selected by ``config``."""
    codec, config = resolve(config)
    logger.debug("encoding with %s", config)
    return codec.encode(data, config)


def decode(encoded: str, config) -> bytes:
    """Decode ``encoded`` with the codec selected by ``config``."""
    codec, config = resolve(config)
    logger.debug("decoding with %s", config)
    return codec.decode(encoded, config)


def encode_into(data: bytes, out, config) -> int:
    """Encode ``data`` into the caller-owned buffer ``out``."""
    codec, config = resolve(config)
    return codec.encode_into(data, out, config)


def decode_into(encoded: str, out, config) -> int:
    """Decode ``encoded`` into the caller-owned buffer ``out``."""
    codec, config = resolve(config)
    return codec.decode_into(encoded, out, config)


def encode_str(text: str, config, encoding: str = "utf-8") -> str:
    """Encode a text string."""
    return encode(text.encode(encoding), config)


def decode_str(encoded: str, config, encoding: str = "utf-8") -> str:
    """Decode to a text string."""
    return decode(encoded, config).decode(encoding)
