"""
Authorization gate for the oracle endpoint.

An empty policy disables the check entirely.  Otherwise the caller must
present a credential that is exactly (case-sensitively) one of the
configured keys.  The gate runs before any network or key use.
"""
from typing import AbstractSet, Optional

from loguru import logger

from src.priceoracle.core.errors import UnauthorizedError


def authorize(policy: AbstractSet[str], credential: Optional[str]) -> bool:
    """Return ``True`` when *credential* is acceptable under *policy*."""
    if not policy:
        return True
    return bool(credential) and credential in policy


def require_authorized(policy: AbstractSet[str], credential: Optional[str]) -> None:
    """Raise ``UnauthorizedError`` unless ``authorize`` allows the request."""
    if not authorize(policy, credential):
        # Never log the supplied credential.
        logger.warning(
            f"Rejected request: {'missing' if not credential else 'unknown'} "
            "trusted client key"
        )
        raise UnauthorizedError()
