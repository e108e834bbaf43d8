"""Tests for config records and presets."""

import dataclasses

import pytest

from tinyland_basex.config import (
    PRESETS,
    Base16Config,
    Base32Config,
    Base58Config,
    Base64Alphabet,
    Base64Config,
    Base85Config,
    Base85Variant,
    ensure_config,
    get_config,
)
from tinyland_basex.errors import CodecError, UnsupportedConfigError


class TestPresets:
    """Verify the preset registry and name lookup."""

    def test_all_demo_schemes_present(self):
        assert set(PRESETS) == {
            "base16_upper",
            "base16_lower",
            "base32_std",
            "base32_std_nopad",
            "base58",
            "base64_std",
            "base64_url",
            "base64_url_nopad",
            "base85_std",
            "base85_ext",
            "base85_z85",
        }

    def test_get_config(self):
        assert get_config("base64_url_nopad") == Base64Config(
            alphabet=Base64Alphabet.URLSAFE, padding=False
        )
        assert get_config("base85_z85").variant is Base85Variant.Z85

    def test_unknown_preset(self):
        with pytest.raises(UnsupportedConfigError, match="Unknown scheme"):
            get_config("base62")

    def test_unknown_preset_is_codec_error(self):
        with pytest.raises(CodecError):
            get_config("")


class TestValidation:
    """Verify that config records validate their fields and stay frozen."""

    def test_configs_are_frozen(self):
        config = Base32Config()
        with pytest.raises(dataclasses.FrozenInstanceError):
            config.padding = False  # type: ignore[misc]

    @pytest.mark.parametrize(
        "factory",
        [
            lambda: Base16Config(uppercase="yes"),
            lambda: Base32Config(padding=1),
            lambda: Base58Config(truncate_on_null=None),
            lambda: Base64Config(alphabet="urlsafe"),
            lambda: Base85Config(variant="z85"),
            lambda: Base85Config(ignore_whitespace=0),
        ],
    )
    def test_wrong_field_types(self, factory):
        with pytest.raises(UnsupportedConfigError):
            factory()

    def test_replace_revalidates(self):
        with pytest.raises(UnsupportedConfigError):
            dataclasses.replace(Base85Config(), variant="ascii85")

    def test_defaults(self):
        assert Base16Config().uppercase is True
        assert Base32Config().padding is True
        assert Base64Config().alphabet is Base64Alphabet.STANDARD
        assert Base85Config().variant is Base85Variant.ASCII85


class TestEnsureConfig:
    """Verify defaulting and type checks in ensure_config."""

    def test_none_gives_default(self):
        assert ensure_config(None, Base58Config) == Base58Config()

    def test_matching_type_passes_through(self):
        config = Base16Config(uppercase=False)
        assert ensure_config(config, Base16Config) is config

    def test_other_scheme_rejected(self):
        with pytest.raises(UnsupportedConfigError):
            ensure_config(Base32Config(), Base64Config)
