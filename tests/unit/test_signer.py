"""
test_signer.py
"""
import pytest
from nacl.exceptions import BadSignatureError
from nacl.signing import VerifyKey

from src.priceoracle.core.encoding import encode_message, hash_message
from src.priceoracle.core.errors import ConfigurationError
from src.priceoracle.core.signer import OracleSigner


def _flip_bit(data: bytes, index: int) -> bytes:
    flipped = bytearray(data)
    flipped[index // 8] ^= 1 << (index % 8)
    return bytes(flipped)


@pytest.fixture
def digest():
    return hash_message(encode_message(150_123_456, 1_700_000_000))


def test_signature_verifies_over_digest(oracle_key, verify_key, digest):
    signature = OracleSigner(oracle_key).sign(digest)

    assert len(signature) == 64
    assert verify_key.verify(digest, signature) == digest


def test_signing_is_deterministic(oracle_key, digest):
    signer = OracleSigner(oracle_key)
    assert signer.sign(digest) == signer.sign(digest)
    assert OracleSigner(oracle_key).sign(digest) == signer.sign(digest)


def test_public_key_derived_from_seed_only(oracle_key, verify_key):
    # Trailing half is ignored, even when it is not the matching public key.
    tampered = oracle_key[:32] + b"\x00" * 32
    signer = OracleSigner(tampered)

    assert signer.public_key == verify_key.encode()
    assert signer.public_key_hex == verify_key.encode().hex()


@pytest.mark.parametrize("bit", [0, 77, 255])
def test_flipped_digest_bit_is_rejected(oracle_key, verify_key, digest, bit):
    signature = OracleSigner(oracle_key).sign(digest)
    with pytest.raises(BadSignatureError):
        verify_key.verify(_flip_bit(digest, bit), signature)


@pytest.mark.parametrize("bit", [0, 300, 511])
def test_flipped_signature_bit_is_rejected(oracle_key, verify_key, digest, bit):
    signature = OracleSigner(oracle_key).sign(digest)
    with pytest.raises(BadSignatureError):
        verify_key.verify(digest, _flip_bit(signature, bit))


@pytest.mark.parametrize("bit", [0, 100, 200])
def test_flipped_public_key_bit_is_rejected(oracle_key, verify_key, digest, bit):
    signature = OracleSigner(oracle_key).sign(digest)
    other_key = VerifyKey(_flip_bit(verify_key.encode(), bit))
    with pytest.raises(BadSignatureError):
        other_key.verify(digest, signature)


@pytest.mark.parametrize("length", [0, 32, 63, 65])
def test_key_length_checked_at_construction(length):
    with pytest.raises(ConfigurationError, match="64-byte"):
        OracleSigner(b"\x01" * length)
