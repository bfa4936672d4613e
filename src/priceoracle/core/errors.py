"""
Failure taxonomy for the price oracle.

Every per-request failure derives from ``OracleError`` and carries the HTTP
status it maps to, so the request handler can translate exceptions into
responses without a lookup table.  ``ConfigurationError`` sits
outside that hierarchy: it is raised while the handler is being built and
stops the process instead of becoming a response.
"""
from typing import Optional


class OracleError(Exception):
    """Base class for failures that surface as an error response."""

    status_code = 500

    @property
    def public_message(self) -> str:
        return f"Internal Server Error: {self}"


class UnauthorizedError(OracleError):
    status_code = 401

    def __init__(self) -> None:
        super().__init__("Unauthorized")

    @property
    def public_message(self) -> str:
        return "Unauthorized"


class MissingParameterError(OracleError):
    status_code = 400

    def __init__(self, name: str = "token") -> None:
        self.name = name
        super().__init__(f"{name.capitalize()} parameter is required")

    @property
    def public_message(self) -> str:
        return str(self)


class UpstreamFetchError(OracleError):
    """The price source was unreachable, timed out, or returned non-2xx."""

    def __init__(self, message: str, status: Optional[int] = None) -> None:
        self.status = status
        super().__init__(message)


class PriceNotFoundError(OracleError):
    """The price source answered but had no numeric USD price for the token."""

    def __init__(self, token: str) -> None:
        self.token = token
        super().__init__(
            f"Price for token '{token}' not found in price source response"
        )


class PriceOutOfRangeError(OracleError):
    """The quoted price cannot be represented as an unsigned 64-bit integer."""


class SigningError(OracleError):
    """The cryptographic backend failed to hash or sign the message."""


class ConfigurationError(ValueError):
    """Invalid oracle configuration, detected before any request is served."""
