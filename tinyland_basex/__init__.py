"""Tinyland BaseX - binary-to-text codecs for Base16, Base32, Base58, Base64 and Base85.

Each scheme lives in its own module (``base16``, ``base32``, ``base58``,
``base64``, ``base85``) with the same six functions: ``encode``, ``decode``,
``encode_into``, ``decode_into``, ``encode_len`` and ``decode_len``. Variants
are chosen with a per-scheme config record or a preset name such as
``"base64_url_nopad"``. Includes a CLI for encoding and decoding from the
shell.
"""

__version__ = "0.1.0"

from tinyland_basex.errors import (  # noqa: F401
    CodecError,
    InvalidArgumentError,
    InvalidLengthError,
    InvalidCharacterError,
    InvalidPaddingError,
    BufferTooSmallError,
    UnsupportedConfigError,
)
from tinyland_basex.config import (  # noqa: F401
    PRESETS,
    Base16Config,
    Base32Config,
    Base58Config,
    Base64Alphabet,
    Base64Config,
    Base85Config,
    Base85Variant,
    get_config,
)
from tinyland_basex.dispatch import (  # noqa: F401
    decode,
    decode_into,
    decode_len,
    decode_str,
    encode,
    encode_into,
    encode_len,
    encode_str,
)
from tinyland_basex.cli import main  # noqa: F401
