"""
Thin HTTP client for a deployed price oracle.
"""
from typing import Optional

import requests
from loguru import logger

from src.priceoracle.oracle.schemas import SignedPriceData


class OracleClientError(Exception):
    """The oracle answered with a non-success status."""

    def __init__(self, status_code: int, reason: str, detail: str):
        self.status_code = status_code
        self.reason = reason
        self.detail = detail
        super().__init__(
            f"Failed to fetch signed price: {status_code} {reason} - {detail}"
        )


class OracleClient:
    """Fetches signed price data from an oracle endpoint."""

    def __init__(self, base_url: str, timeout: float = 10.0):
        """
        Args:
            base_url: Full URL of the oracle endpoint, e.g.
                      ``"https://example.com/api/price"``.
            timeout: Seconds allowed for the request.

        Raises:
            ValueError: If *base_url* is empty.
        """
        if not base_url:
            raise ValueError("Oracle API base URL cannot be empty.")
        self.base_url = base_url
        self.timeout = timeout

    def fetch_signed_price(
        self, token: str, trusted_key: Optional[str] = None
    ) -> SignedPriceData:
        """Request a signed price for *token*.

        Args:
            token: Token identifier understood by the oracle's price source
                   (e.g. ``"solana"``, ``"usd-coin"``).
            trusted_key: Client key, sent only when provided.

        Raises:
            OracleClientError: On any non-2xx response.
            requests.RequestException: On transport failures.
        """
        params = {"token": token}
        if trusted_key:
            params["trustedClientKey"] = trusted_key

        response = requests.get(self.base_url, params=params, timeout=self.timeout)

        if not response.ok:
            try:
                body = response.json()
            except ValueError:
                body = {"error": "Failed to parse error response"}
            detail = (body.get("error") if isinstance(body, dict) else None) or "Unknown error"
            logger.error(f"Oracle request for '{token}' failed: {response.status_code} {detail}")
            raise OracleClientError(response.status_code, response.reason, detail)

        return SignedPriceData(**response.json())
