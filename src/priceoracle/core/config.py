"""
Oracle configuration.

``OracleSettings`` is the only state that outlives a single request: the
64-byte signing key, the accepted client credentials and the price-source
endpoint.  The model is frozen so request handlers can share one instance
without copying it.

Settings are normally built from environment variables (populated from a
``.env`` file by the entry point) via ``load_settings``::

    ORACLE_PRIVATE_KEY=[12,34,...]          # 64-int JSON array, or 128 hex chars
    TRUSTED_CLIENT_KEYS=key-one,key-two      # omit for a public endpoint; entries are trimmed
    PRICE_SOURCE_URL=https://...             # optional override
    PRICE_SOURCE_TIMEOUT=10                  # seconds, optional
"""
import json
import os
from typing import FrozenSet, Mapping, Optional

from loguru import logger
from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from src.priceoracle.core.errors import ConfigurationError

ORACLE_KEY_LENGTH = 64
SEED_LENGTH = 32

DEFAULT_PRICE_SOURCE_URL = "https://api.coingecko.com/api/v3/simple/price"
DEFAULT_PRICE_SOURCE_TIMEOUT = 10.0


class OracleSettings(BaseModel):
    """Immutable, validated oracle configuration."""

    model_config = ConfigDict(frozen=True)

    oracle_private_key: bytes = Field(
        ...,
        repr=False,
        description="64-byte key; the first 32 bytes are the Ed25519 seed",
    )
    trusted_client_keys: FrozenSet[str] = Field(
        default_factory=frozenset,
        description="Accepted client credentials; empty means public",
    )
    price_source_url: str = Field(
        DEFAULT_PRICE_SOURCE_URL,
        min_length=1,
        description="Base URL of the simple-price endpoint",
    )
    price_source_timeout: float = Field(
        DEFAULT_PRICE_SOURCE_TIMEOUT,
        gt=0,
        description="Upper bound in seconds for one price-source request",
    )

    @field_validator("oracle_private_key", mode="before")
    @classmethod
    def key_must_be_64_bytes(cls, v):
        if isinstance(v, (bytearray, memoryview)):
            v = bytes(v)
        if not isinstance(v, bytes):
            raise ValueError("oracle_private_key must be raw bytes")
        if len(v) != ORACLE_KEY_LENGTH:
            raise ValueError(
                f"A {ORACLE_KEY_LENGTH}-byte oracle private key is required "
                f"(got {len(v)} bytes)"
            )
        return v

    @field_validator("trusted_client_keys", mode="before")
    @classmethod
    def drop_blank_keys(cls, v):
        if v is None:
            return frozenset()
        if isinstance(v, str):
            v = v.split(",")
        return frozenset(k.strip() for k in v if k and k.strip())

    @property
    def is_public(self) -> bool:
        return not self.trusted_client_keys


def parse_private_key(raw: str) -> bytes:
    """Decode key material from either a JSON int array or a hex string.

    The JSON form matches the keypair files produced by Solana tooling
    (``[174, 47, ...]``).

    Raises:
        ConfigurationError: If *raw* is in neither format.
    """
    text = raw.strip()
    if not text:
        raise ConfigurationError("ORACLE_PRIVATE_KEY is empty")

    if text.startswith("["):
        try:
            values = json.loads(text)
            return bytes(values)
        except (json.JSONDecodeError, TypeError, ValueError) as e:
            raise ConfigurationError(
                "ORACLE_PRIVATE_KEY is not a JSON array of byte values"
            ) from e

    try:
        return bytes.fromhex(text.removeprefix("0x"))
    except ValueError as e:
        raise ConfigurationError(
            "ORACLE_PRIVATE_KEY must be a JSON byte array or a hex string"
        ) from e


def build_settings(**kwargs) -> OracleSettings:
    """Construct ``OracleSettings``, converting validation failures.

    Raises:
        ConfigurationError: If any field fails validation.
    """
    try:
        return OracleSettings(**kwargs)
    except ValidationError as e:
        details = "; ".join(err["msg"] for err in e.errors())
        raise ConfigurationError(f"Invalid oracle configuration: {details}") from e


def load_settings(environ: Optional[Mapping[str, str]] = None) -> OracleSettings:
    """Read oracle settings from *environ* (defaults to ``os.environ``).

    Raises:
        ConfigurationError: If the key is missing or malformed, or any other
                            value fails validation.
    """
    env = os.environ if environ is None else environ

    raw_key = env.get("ORACLE_PRIVATE_KEY")
    if raw_key is None:
        logger.critical("ORACLE_PRIVATE_KEY is not set")
        raise ConfigurationError("ORACLE_PRIVATE_KEY must be set")

    kwargs = {
        "oracle_private_key": parse_private_key(raw_key),
        "trusted_client_keys": env.get("TRUSTED_CLIENT_KEYS", ""),
    }
    if env.get("PRICE_SOURCE_URL"):
        kwargs["price_source_url"] = env["PRICE_SOURCE_URL"]
    if env.get("PRICE_SOURCE_TIMEOUT"):
        try:
            kwargs["price_source_timeout"] = float(env["PRICE_SOURCE_TIMEOUT"])
        except ValueError as e:
            raise ConfigurationError("PRICE_SOURCE_TIMEOUT must be a number") from e

    settings = build_settings(**kwargs)
    if settings.is_public:
        auth_mode = "public"
    else:
        auth_mode = f"{len(settings.trusted_client_keys)} trusted client keys"
    logger.info(
        f"Oracle settings loaded. Auth: {auth_mode} "
        f"| Price source: {settings.price_source_url}"
    )
    return settings
