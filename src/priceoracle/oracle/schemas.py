"""
Pydantic schemas for the signed price payload.

These models define the exact JSON structure returned to callers and
consumed by on-chain verifiers.  Both integers travel as decimal strings
so values above 2**53 survive JSON parsers that decode numbers as doubles.
"""
from pydantic import BaseModel, Field


class SignedPriceData(BaseModel):
    """Signed price attestation returned on success."""

    price: str = Field(
        ...,
        pattern=r"^[0-9]+$",
        description="Price scaled by 1_000_000, as an unsigned decimal integer",
    )
    timestamp: str = Field(
        ...,
        pattern=r"^-?[0-9]+$",
        description="Signing time in Unix seconds, as a decimal integer",
    )
    signature: str = Field(
        ...,
        pattern=r"^[0-9a-f]{128}$",
        description="Lowercase hex Ed25519 signature over keccak256(message)",
    )


class ErrorResponse(BaseModel):
    """Body of every non-200 response."""

    error: str


class OracleResponse(BaseModel):
    """Framework-neutral response: a status code plus a JSON body."""

    status_code: int
    body: dict

    @property
    def media_type(self) -> str:
        return "application/json"
