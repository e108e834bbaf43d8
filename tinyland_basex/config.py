"""Variant configuration for each scheme.

Each scheme has its own frozen config record. Fields are validated once, when
the record is built, so a codec never has to re-check them mid-call. Named
presets cover the variants the command-line tool offers.
"""

import dataclasses
from dataclasses import dataclass
from enum import Enum

from tinyland_basex.errors import UnsupportedConfigError


class Base64Alphabet(Enum):
    STANDARD = "standard"
    URLSAFE = "urlsafe"


class Base85Variant(Enum):
    ASCII85 = "ascii85"
    EXTENDED = "extended"  # Ascii85 plus the 'y' shortcut for four spaces
    Z85 = "z85"


def _check_fields(config) -> None:
    for field in dataclasses.fields(config):
        value = getattr(config, field.name)
        expected = field.type
        if not isinstance(value, expected):
            raise UnsupportedConfigError(
                f"{type(config).__name__}.{field.name} must be "
                f"{expected.__name__}, got {value!r}"
            )


@dataclass(frozen=True)
class Base16Config:
    uppercase: bool = True
    truncate_on_null: bool = False

    def __post_init__(self):
        _check_fields(self)


@dataclass(frozen=True)
class Base32Config:
    padding: bool = True
    truncate_on_null: bool = False

    def __post_init__(self):
        _check_fields(self)


@dataclass(frozen=True)
class Base58Config:
    truncate_on_null: bool = False

    def __post_init__(self):
        _check_fields(self)


@dataclass(frozen=True)
class Base64Config:
    alphabet: Base64Alphabet = Base64Alphabet.STANDARD
    padding: bool = True
    truncate_on_null: bool = False

    def __post_init__(self):
        _check_fields(self)


@dataclass(frozen=True)
class Base85Config:
    variant: Base85Variant = Base85Variant.ASCII85
    ignore_whitespace: bool = False
    truncate_on_null: bool = False

    def __post_init__(self):
        _check_fields(self)


PRESETS = {
    "base16_upper": Base16Config(uppercase=True),
    "base16_lower": Base16Config(uppercase=False),
    "base32_std": Base32Config(),
    "base32_std_nopad": Base32Config(padding=False),
    "base58": Base58Config(),
    "base64_std": Base64Config(),
    "base64_url": Base64Config(alphabet=Base64Alphabet.URLSAFE),
    "base64_url_nopad": Base64Config(alphabet=Base64Alphabet.URLSAFE, padding=False),
    "base85_std": Base85Config(),
    "base85_ext": Base85Config(variant=Base85Variant.EXTENDED),
    "base85_z85": Base85Config(variant=Base85Variant.Z85),
}


def get_config(name: str):
    """Return the preset config registered under ``name``."""
    try:
        return PRESETS[name]
    except (KeyError, TypeError):
        raise UnsupportedConfigError(
            f"Unknown scheme: {name!r} (expected one of: {', '.join(PRESETS)})"
        ) from None


def ensure_config(config, config_type):
    """Return ``config`` as a ``config_type``, defaulting when it is None.

    Raises:
        UnsupportedConfigError: If ``config`` belongs to another scheme.
    """
    if config is None:
        return config_type()
    if not isinstance(config, config_type):
        raise UnsupportedConfigError(
            f"Expected {config_type.__name__}, got {type(config).__name__}"
        )
    return config
