"""
Shared fixtures: a deterministic oracle key, a stub price source and a
frozen clock.
"""
import pytest
from nacl.signing import SigningKey

from src.priceoracle.core.config import build_settings
from src.priceoracle.core.errors import PriceNotFoundError
from src.priceoracle.data.base import PriceSource

SEED = bytes(range(32))
FIXED_NOW = 1_700_000_000.75


class StubPriceSource(PriceSource):
    """Serves prices from a dict and records every lookup."""

    def __init__(self, prices=None, error=None):
        self.prices = prices or {}
        self.error = error
        self.calls = []

    def fetch_usd_price(self, token: str) -> float:
        self.calls.append(token)
        if self.error is not None:
            raise self.error
        if token not in self.prices:
            raise PriceNotFoundError(token)
        return self.prices[token]


@pytest.fixture
def oracle_key() -> bytes:
    """Solana-style keypair: seed followed by its public key."""
    return SEED + SigningKey(SEED).verify_key.encode()


@pytest.fixture
def verify_key():
    return SigningKey(SEED).verify_key


@pytest.fixture
def fixed_clock():
    return lambda: FIXED_NOW


@pytest.fixture
def stub_source():
    return StubPriceSource({"solana": 150.123456})


@pytest.fixture
def make_settings(oracle_key):
    def _make(**overrides):
        kwargs = {"oracle_private_key": oracle_key}
        kwargs.update(overrides)
        return build_settings(**kwargs)

    return _make
