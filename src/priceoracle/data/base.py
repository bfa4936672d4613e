"""
Abstract base class for price sources.

The signing pipeline never talks to the network directly; it receives a
``PriceSource`` and asks it for one USD quote per request.  Concrete
adapters (CoinGecko, a test stub, a private feed) implement
``fetch_usd_price``.  The base class also provides ``extract_usd_price``,
the shared parser for the ``{token: {"usd": number}}`` response shape.
"""
from abc import ABC, abstractmethod
from typing import Any

from loguru import logger

from src.priceoracle.core.errors import PriceNotFoundError


class PriceSource(ABC):
    """Contract that every price adapter must satisfy."""

    @abstractmethod
    def fetch_usd_price(self, token: str) -> float:
        """Return the current USD price for *token*.

        Args:
            token: Provider-specific token identifier (e.g. ``"solana"``).

        Raises:
            UpstreamFetchError: If the provider is unreachable, times out, or
                                answers with a non-success status.
            PriceNotFoundError: If the response has no numeric USD price
                                for *token*.
        """

    def extract_usd_price(self, payload: Any, token: str) -> float:
        """Pull ``payload[token]["usd"]`` out of a simple-price response.

        Booleans are rejected even though ``bool`` subclasses ``int``; a JSON
        ``true`` is not a price.

        Raises:
            PriceNotFoundError: If the entry is missing or not numeric.
        """
        entry = payload.get(token) if isinstance(payload, dict) else None
        price = entry.get("usd") if isinstance(entry, dict) else None

        if isinstance(price, bool) or not isinstance(price, (int, float)):
            logger.warning(f"No numeric USD price for '{token}' in response")
            logger.debug(f"Response payload: {payload!r}")
            raise PriceNotFoundError(token)

        return price
