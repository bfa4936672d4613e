"""
CoinGecko simple-price adapter.

Queries ``<base_url>?ids=<token>&vs_currencies=usd`` and expects::

    {"solana": {"usd": 150.123456}}

The base URL defaults to the public CoinGecko endpoint and can be pointed
at any service that speaks the same shape (a Pro endpoint, a proxy, a
local mock).  Each call is a single request with a hard timeout and no
retry.
"""
from typing import Optional

import requests
from loguru import logger

from src.priceoracle.core.config import (
    DEFAULT_PRICE_SOURCE_TIMEOUT,
    DEFAULT_PRICE_SOURCE_URL,
)
from src.priceoracle.core.errors import UpstreamFetchError
from src.priceoracle.data.base import PriceSource


class CoinGeckoPriceSource(PriceSource):
    """Concrete PriceSource backed by CoinGecko's ``/simple/price``."""

    def __init__(
        self,
        base_url: str = DEFAULT_PRICE_SOURCE_URL,
        timeout: float = DEFAULT_PRICE_SOURCE_TIMEOUT,
        session: Optional[requests.Session] = None,
    ):
        """
        Args:
            base_url: Simple-price endpoint, without query string.
            timeout: Seconds allowed for connect and read.
            session: Optional shared ``requests.Session`` for connection
                     pooling; plain ``requests.get`` is used otherwise.
        """
        self.base_url = base_url
        self.timeout = timeout
        self._http = session if session is not None else requests

    def fetch_usd_price(self, token: str) -> float:
        logger.debug(f"Fetching USD price for '{token}' from {self.base_url}")

        try:
            response = self._http.get(
                self.base_url,
                params={"ids": token, "vs_currencies": "usd"},
                timeout=self.timeout,
            )
        except requests.Timeout as e:
            logger.error(f"Price source timed out after {self.timeout}s: {e}")
            raise UpstreamFetchError(
                f"Price source request timed out after {self.timeout}s"
            ) from e
        except requests.RequestException as e:
            logger.error(f"Price source unreachable: {e}")
            raise UpstreamFetchError(f"Price source request failed: {e}") from e

        if not response.ok:
            logger.error(f"Price source returned HTTP {response.status_code}")
            raise UpstreamFetchError(
                f"Price source API failed with status: {response.status_code}",
                status=response.status_code,
            )

        try:
            payload = response.json()
        except ValueError as e:
            logger.error(f"Price source returned invalid JSON: {e}")
            raise UpstreamFetchError("Price source returned invalid JSON") from e

        price = self.extract_usd_price(payload, token)
        logger.info(f"Price source quote: {token} = {price} USD")
        return price
