"""
Price reporter: the signing pipeline.

Fetches one USD quote, quantizes it to 6-decimal fixed point, stamps it
with the signing time, packs the 16-byte canonical message, hashes it with
Keccak-256, signs the digest with Ed25519 and returns a
``SignedPriceData`` payload.
"""
import math
import time
from typing import Callable

from loguru import logger

from src.priceoracle.core.encoding import encode_message, hash_message, quantize_price
from src.priceoracle.core.errors import SigningError
from src.priceoracle.core.signer import OracleSigner
from src.priceoracle.data.base import PriceSource
from src.priceoracle.oracle.schemas import SignedPriceData

Clock = Callable[[], float]


class PriceReporter:
    """Builds, signs, and packages price attestations."""

    def __init__(
        self,
        signer: OracleSigner,
        price_source: PriceSource,
        clock: Clock = time.time,
    ):
        """
        Args:
            signer: Ed25519 signer holding the oracle key.
            price_source: Capability used to fetch the USD quote.
            clock: Returns the current Unix time in (fractional) seconds.
                   Read exactly once per report, after the fetch.
        """
        self.signer = signer
        self.price_source = price_source
        self.clock = clock

    def generate_payload(self, token: str) -> SignedPriceData:
        """Fetch, sign, and return the price attestation for *token*.

        Raises:
            UpstreamFetchError: The price source failed.
            PriceNotFoundError: The price source had no price for *token*.
            PriceOutOfRangeError: The price cannot be quantized into a u64.
            SigningError: Hashing or signing failed.
        """
        price_float = self.price_source.fetch_usd_price(token)
        price_scaled = quantize_price(price_float)

        # Signing time: taken after the fetch, immediately before hashing.
        timestamp = math.floor(self.clock())

        try:
            message = encode_message(price_scaled, timestamp)
            digest = hash_message(message)
        except ValueError as e:
            raise SigningError(f"Could not build price message: {e}") from e

        signature = self.signer.sign(digest)

        logger.success(
            f"Signed {token}: price={price_scaled} timestamp={timestamp}"
        )
        return self.assemble(price_scaled, timestamp, signature)

    @staticmethod
    def assemble(price_scaled: int, timestamp: int, signature: bytes) -> SignedPriceData:
        """Render the integers as exact decimal strings and the signature as hex."""
        return SignedPriceData(
            price=str(price_scaled),
            timestamp=str(timestamp),
            signature=signature.hex(),
        )
