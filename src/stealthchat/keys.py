"""Key generation and address derivation for StealthChat."""

import hashlib
from typing import Union

from cryptography.hazmat.primitives.asymmetric import ec
from cryptography.hazmat.primitives.serialization import Encoding, PublicFormat

from .models import KeyPair
from .types import (
    ADDRESS_SIZE,
    PRIVATE_KEY_SIZE,
    SECP256K1_ORDER,
    UNCOMPRESSED_PUBLIC_KEY_SIZE,
    InvalidPublicKeyError,
    InvalidScalarError,
)


def to_hex(data: bytes) -> str:
    """Render bytes as 0x-prefixed lowercase hex."""
    return "0x" + data.hex()


def from_hex(value: str) -> bytes:
    """Parse hex with or without a 0x prefix."""
    if value.startswith(("0x", "0X")):
        value = value[2:]
    return bytes.fromhex(value)


def is_valid_scalar(private_key: bytes) -> bool:
    """Whether 32 bytes form a usable secp256k1 private key (0 < k < n)."""
    if len(private_key) != PRIVATE_KEY_SIZE:
        return False
    return 0 < int.from_bytes(private_key, "big") < SECP256K1_ORDER


def load_private_key(private_key: bytes) -> ec.EllipticCurvePrivateKey:
    """
    Load raw private key bytes as a secp256k1 key.

    Raises:
        InvalidScalarError: If the bytes are not a valid scalar.
    """
    if not is_valid_scalar(private_key):
        raise InvalidScalarError("Private key must be a 32-byte scalar in [1, n-1]")
    return ec.derive_private_key(int.from_bytes(private_key, "big"), ec.SECP256K1())


def load_public_key(public_key: bytes) -> ec.EllipticCurvePublicKey:
    """
    Load an encoded secp256k1 point.

    Raises:
        InvalidPublicKeyError: If the bytes are not a point on the curve.
    """
    try:
        return ec.EllipticCurvePublicKey.from_encoded_point(ec.SECP256K1(), bytes(public_key))
    except ValueError as exc:
        raise InvalidPublicKeyError("Invalid public key format") from exc


def public_key_to_bytes(public_key: ec.EllipticCurvePublicKey) -> bytes:
    """Encode a public key as a 65-byte uncompressed point."""
    return public_key.public_bytes(Encoding.X962, PublicFormat.UncompressedPoint)


def private_key_to_bytes(private_key: ec.EllipticCurvePrivateKey) -> bytes:
    """Encode a private key as its 32-byte big-endian scalar."""
    return private_key.private_numbers().private_value.to_bytes(PRIVATE_KEY_SIZE, "big")


def public_key_from_private_key(private_key: bytes) -> bytes:
    """Derive the uncompressed public key for raw private key bytes."""
    return public_key_to_bytes(load_private_key(private_key).public_key())


def public_key_from_hex(value: str) -> bytes:
    """
    Parse a counterparty public key from hex.

    The raw bytes are returned as given (not re-encoded) after checking
    that they decode to a curve point.

    Raises:
        InvalidPublicKeyError: If the string is not hex or not a curve point.
    """
    try:
        data = from_hex(value.strip())
    except ValueError as exc:
        raise InvalidPublicKeyError("Invalid public key format: not hex") from exc
    load_public_key(data)
    return data


def public_key_to_address(public_key: bytes) -> str:
    """
    Convert an uncompressed public key to an address.

    The 0x04 prefix is dropped, the 64 coordinate bytes are hashed with
    SHA-256 and the last 20 bytes of the digest form the address.
    """
    if len(public_key) != UNCOMPRESSED_PUBLIC_KEY_SIZE:
        raise InvalidPublicKeyError(
            f"Public key must be {UNCOMPRESSED_PUBLIC_KEY_SIZE} bytes, got {len(public_key)}"
        )
    digest = hashlib.sha256(public_key[1:]).digest()
    return to_hex(digest[-ADDRESS_SIZE:])


def generate_keypair() -> KeyPair:
    """
    Generate a random secp256k1 key pair.

    Returns:
        KeyPair with private key, uncompressed public key and address
    """
    private_key = ec.generate_private_key(ec.SECP256K1())
    public_key = public_key_to_bytes(private_key.public_key())
    return KeyPair(
        private_key=private_key_to_bytes(private_key),
        public_key=public_key,
        address=public_key_to_address(public_key),
    )


def keypair_from_private_key(private_key: bytes) -> KeyPair:
    """
    Build the key pair for a known private key.

    Raises:
        InvalidScalarError: If the private key is zero, too large or not 32 bytes.
    """
    public_key = public_key_from_private_key(private_key)
    return KeyPair(
        private_key=bytes(private_key),
        public_key=public_key,
        address=public_key_to_address(public_key),
    )


def keypair_from_seed(seed: Union[str, bytes]) -> KeyPair:
    """
    Derive a deterministic key pair from wallet entropy.

    A signature string is UTF-8 encoded first; the SHA-256 digest of the
    seed bytes becomes the private key.

    Args:
        seed: Signature hex string or raw bytes

    Returns:
        Deterministic KeyPair
    """
    if isinstance(seed, str):
        seed = seed.encode("utf-8")
    private_key = hashlib.sha256(seed).digest()[:PRIVATE_KEY_SIZE]
    return keypair_from_private_key(private_key)
