"""
test_config.py
"""
import json

import pytest

from src.priceoracle.core.auth import authorize
from src.priceoracle.core.config import (
    DEFAULT_PRICE_SOURCE_TIMEOUT,
    DEFAULT_PRICE_SOURCE_URL,
    build_settings,
    load_settings,
    parse_private_key,
)
from src.priceoracle.core.errors import ConfigurationError


def test_parse_json_array_key(oracle_key):
    assert parse_private_key(json.dumps(list(oracle_key))) == oracle_key


def test_parse_hex_key(oracle_key):
    assert parse_private_key(oracle_key.hex()) == oracle_key
    assert parse_private_key("0x" + oracle_key.hex()) == oracle_key


@pytest.mark.parametrize("raw", ["", "   ", "[1, 2, 999]", "[1, 2", "not-a-key"])
def test_parse_rejects_garbage(raw):
    with pytest.raises(ConfigurationError):
        parse_private_key(raw)


def test_load_settings_defaults(oracle_key):
    settings = load_settings({"ORACLE_PRIVATE_KEY": json.dumps(list(oracle_key))})

    assert settings.oracle_private_key == oracle_key
    assert settings.is_public
    assert settings.price_source_url == DEFAULT_PRICE_SOURCE_URL
    assert settings.price_source_timeout == DEFAULT_PRICE_SOURCE_TIMEOUT


def test_load_settings_overrides(oracle_key):
    settings = load_settings(
        {
            "ORACLE_PRIVATE_KEY": oracle_key.hex(),
            "TRUSTED_CLIENT_KEYS": "alpha, beta,,  ",
            "PRICE_SOURCE_URL": "http://localhost:8080/simple/price",
            "PRICE_SOURCE_TIMEOUT": "2.5",
        }
    )

    assert settings.trusted_client_keys == frozenset({"alpha", "beta"})
    assert not settings.is_public
    assert settings.price_source_url == "http://localhost:8080/simple/price"
    assert settings.price_source_timeout == 2.5


def test_blank_trusted_keys_mean_public(oracle_key):
    settings = load_settings(
        {"ORACLE_PRIVATE_KEY": oracle_key.hex(), "TRUSTED_CLIENT_KEYS": ""}
    )
    assert settings.is_public


def test_missing_key_is_fatal():
    with pytest.raises(ConfigurationError, match="ORACLE_PRIVATE_KEY"):
        load_settings({})


def test_short_key_is_fatal():
    with pytest.raises(ConfigurationError, match="64-byte"):
        load_settings({"ORACLE_PRIVATE_KEY": json.dumps(list(range(32)))})


@pytest.mark.parametrize("timeout", ["0", "-1", "soon"])
def test_bad_timeout_is_fatal(oracle_key, timeout):
    with pytest.raises(ConfigurationError):
        load_settings(
            {"ORACLE_PRIVATE_KEY": oracle_key.hex(), "PRICE_SOURCE_TIMEOUT": timeout}
        )


def test_settings_are_frozen(oracle_key):
    settings = build_settings(oracle_private_key=oracle_key)
    with pytest.raises(Exception):
        settings.trusted_client_keys = frozenset({"late"})


def test_key_hidden_from_repr(oracle_key):
    settings = build_settings(oracle_private_key=oracle_key)
    assert oracle_key.hex() not in repr(settings)
    assert str(list(oracle_key)) not in repr(settings)


def test_trusted_keys_are_trimmed_then_matched_exactly(oracle_key):
    settings = load_settings(
        {"ORACLE_PRIVATE_KEY": oracle_key.hex(), "TRUSTED_CLIENT_KEYS": "  padded-key ,other"}
    )

    assert "padded-key" in settings.trusted_client_keys
    assert authorize(settings.trusted_client_keys, "padded-key")
    assert not authorize(settings.trusted_client_keys, "  padded-key ")
