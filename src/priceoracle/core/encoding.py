"""
Canonical price message: quantization, byte layout and hashing.

The 16-byte message is the compatibility contract with every external
verifier (including on-chain programs)::

    offset  size  type  value
    0       8     u64   round(price * 1_000_000), little-endian
    8       8     i64   Unix seconds at signing time, little-endian

The digest that gets signed is Keccak-256 of those bytes.  Keccak-256 is
the pre-standard padding used by Ethereum and Solana's ``keccak`` syscall;
NIST SHA3-256 produces different digests and is not a substitute.
"""
import math
import struct
from decimal import ROUND_HALF_UP, Decimal

from eth_utils import keccak

from src.priceoracle.core.errors import PriceOutOfRangeError

PRICE_SCALE = 1_000_000
MESSAGE_LENGTH = 16

U64_MAX = 2**64 - 1
I64_MIN = -(2**63)
I64_MAX = 2**63 - 1

_MESSAGE_LAYOUT = struct.Struct("<Qq")


def quantize_price(price: float) -> int:
    """Convert a USD price into 6-decimal fixed point.

    Computes ``round(price * 1_000_000)`` on the binary float product, the
    same value a JavaScript ``Math.round(price * 1e6)`` signer produces.
    The product is converted to ``Decimal`` exactly and rounded half away
    from zero, so ``32.0319715`` (product ``32031971.499999996``) gives
    ``32031971`` and a true tie such as ``5e-07`` (product ``0.5``) gives ``1``.

    Raises:
        PriceOutOfRangeError: If *price* is non-finite, negative, or the
                              scaled value exceeds the u64 range.
    """
    if isinstance(price, bool) or not isinstance(price, (int, float)):
        raise PriceOutOfRangeError(f"Price {price!r} is not a number")
    if isinstance(price, float) and not math.isfinite(price):
        raise PriceOutOfRangeError(f"Price {price!r} is not finite")
    if price < 0:
        raise PriceOutOfRangeError(f"Price {price!r} is negative")

    try:
        scaled = float(price) * PRICE_SCALE
    except OverflowError as e:
        raise PriceOutOfRangeError(f"Price {price!r} is too large") from e
    # Checked before quantize(), which cannot round past the context precision.
    if scaled > U64_MAX:
        raise PriceOutOfRangeError(
            f"Scaled price {scaled} exceeds the unsigned 64-bit range"
        )

    result = int(Decimal(scaled).quantize(Decimal(1), rounding=ROUND_HALF_UP))
    if result > U64_MAX:
        raise PriceOutOfRangeError(
            f"Scaled price {result} exceeds the unsigned 64-bit range"
        )
    return result


def encode_message(price_scaled: int, timestamp: int) -> bytes:
    """Pack ``(price_scaled, timestamp)`` into the 16-byte canonical message.

    Raises:
        ValueError: If either value falls outside its 64-bit field.
    """
    if not 0 <= price_scaled <= U64_MAX:
        raise ValueError(f"price_scaled {price_scaled} does not fit in u64")
    if not I64_MIN <= timestamp <= I64_MAX:
        raise ValueError(f"timestamp {timestamp} does not fit in i64")
    return _MESSAGE_LAYOUT.pack(price_scaled, timestamp)


def hash_message(message: bytes) -> bytes:
    """Keccak-256 digest (32 bytes) of *message*."""
    return keccak(message)
