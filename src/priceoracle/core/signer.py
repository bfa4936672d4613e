"""
Ed25519 signer built from the 64-byte oracle key.

Only the first 32 bytes (the seed) are used.  The trailing 32 bytes, which
Solana-style keypairs use for the public key, are accepted but ignored; the
public key is always re-derived from the seed.
"""
from loguru import logger
from nacl.exceptions import CryptoError
from nacl.signing import SigningKey

from src.priceoracle.core.config import ORACLE_KEY_LENGTH, SEED_LENGTH
from src.priceoracle.core.errors import ConfigurationError, SigningError


class OracleSigner:
    """Holds the Ed25519 signing key for the lifetime of the process."""

    def __init__(self, oracle_private_key: bytes):
        """
        Args:
            oracle_private_key: 64-byte key material.

        Raises:
            ConfigurationError: If the key is not exactly 64 bytes.
        """
        if not oracle_private_key or len(oracle_private_key) != ORACLE_KEY_LENGTH:
            raise ConfigurationError(
                f"A {ORACLE_KEY_LENGTH}-byte 'oracle_private_key' must be provided."
            )

        self._signing_key = SigningKey(bytes(oracle_private_key[:SEED_LENGTH]))
        logger.info(f"OracleSigner initialised. Public key: {self.public_key_hex}")

    @property
    def public_key(self) -> bytes:
        return self._signing_key.verify_key.encode()

    @property
    def public_key_hex(self) -> str:
        return self.public_key.hex()

    def sign(self, digest: bytes) -> bytes:
        """Return the 64-byte Ed25519 signature over *digest*.

        Raises:
            SigningError: If the backend rejects the input.
        """
        try:
            return self._signing_key.sign(digest).signature
        except (CryptoError, TypeError) as e:
            logger.error(f"Ed25519 signing failed: {e}")
            raise SigningError(f"Signing failed: {e}") from e
