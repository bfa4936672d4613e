"""
Framework-agnostic request handler for the price oracle.

``create_oracle_handler`` validates configuration once and returns an
``OracleHandler`` bound to it.  Each call to ``handle`` takes the request's
query parameters and returns an ``OracleResponse``:

    200  {"price": "...", "timestamp": "...", "signature": "..."}
    401  {"error": "Unauthorized"}
    400  {"error": "Token parameter is required"}
    500  {"error": "Internal Server Error: <message>"}

Authorization is checked before the token parameter, and both before any
price fetch or key use.  No exception escapes ``handle``.
"""
import time
from typing import Mapping, Optional

from loguru import logger

from src.priceoracle.core.auth import require_authorized
from src.priceoracle.core.config import OracleSettings
from src.priceoracle.core.errors import MissingParameterError, OracleError
from src.priceoracle.core.signer import OracleSigner
from src.priceoracle.data.adapters.coingecko_adapter import CoinGeckoPriceSource
from src.priceoracle.data.base import PriceSource
from src.priceoracle.oracle.price_reporter import Clock, PriceReporter
from src.priceoracle.oracle.schemas import ErrorResponse, OracleResponse

TOKEN_PARAM = "token"
CREDENTIAL_PARAM = "trustedClientKey"


class OracleHandler:
    """Turns query parameters into a signed price or an error response."""

    def __init__(self, settings: OracleSettings, reporter: PriceReporter):
        self.settings = settings
        self.reporter = reporter

    @property
    def public_key_hex(self) -> str:
        return self.reporter.signer.public_key_hex

    def handle(self, params: Mapping[str, str]) -> OracleResponse:
        try:
            require_authorized(
                self.settings.trusted_client_keys, params.get(CREDENTIAL_PARAM)
            )
            token = extract_token(params)
            payload = self.reporter.generate_payload(token)
        except OracleError as e:
            if e.status_code >= 500:
                logger.error(f"Error in oracle handler: {e}")
            return _error(e.status_code, e.public_message)
        except Exception as e:
            logger.exception(f"Unexpected error in oracle handler: {e}")
            detail = str(e) or "An unknown error occurred"
            return _error(500, f"Internal Server Error: {detail}")

        return OracleResponse(status_code=200, body=payload.model_dump())


def extract_token(params: Mapping[str, str]) -> str:
    """Return the non-empty ``token`` parameter.

    Raises:
        MissingParameterError: If the parameter is absent or empty.
    """
    token = params.get(TOKEN_PARAM)
    if not token:
        raise MissingParameterError(TOKEN_PARAM)
    return token


def create_oracle_handler(
    settings: OracleSettings,
    price_source: Optional[PriceSource] = None,
    clock: Clock = time.time,
) -> OracleHandler:
    """Build an ``OracleHandler`` from validated settings.

    Args:
        settings: Oracle configuration.
        price_source: Quote provider; defaults to CoinGecko at
                      ``settings.price_source_url``.
        clock: Signing-time source, injectable for tests.

    Raises:
        ConfigurationError: If the key material is unusable.  Nothing is
                            served in that case.
    """
    signer = OracleSigner(settings.oracle_private_key)

    if price_source is None:
        price_source = CoinGeckoPriceSource(
            base_url=settings.price_source_url,
            timeout=settings.price_source_timeout,
        )

    reporter = PriceReporter(signer=signer, price_source=price_source, clock=clock)
    logger.info(
        f"Oracle handler ready ({type(price_source).__name__}, "
        f"{'public' if settings.is_public else 'key-gated'})"
    )
    return OracleHandler(settings=settings, reporter=reporter)


def _error(status_code: int, message: str) -> OracleResponse:
    return OracleResponse(
        status_code=status_code,
        body=ErrorResponse(error=message).model_dump(),
    )
