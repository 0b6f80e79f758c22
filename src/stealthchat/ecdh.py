"""ECDH shared secret computation for StealthChat."""

import hashlib

from coincurve import PublicKey

from .keys import load_private_key, load_public_key, to_hex
from .models import SharedSecret


def shared_point(private_key: bytes, public_key: bytes) -> bytes:
    """
    Compute the compressed ECDH shared point (33 bytes).

    Raises:
        InvalidScalarError: If the private key is not a valid scalar.
        InvalidPublicKeyError: If the public key is not a curve point.
    """
    load_private_key(private_key)
    load_public_key(public_key)
    point = PublicKey(bytes(public_key)).multiply(bytes(private_key))
    return point.format(compressed=True)


def perform_ecdh(private_key: bytes, public_key: bytes) -> SharedSecret:
    """
    Derive the shared secret between our private key and their public key.

    The secret is SHA-256 of the compressed shared point, so both
    perform_ecdh(a.private_key, b.public_key) and
    perform_ecdh(b.private_key, a.public_key) agree.

    Args:
        private_key: Our 32-byte private key
        public_key: Their encoded public key (65-byte uncompressed or 33-byte compressed)

    Returns:
        SharedSecret with the 32-byte secret and its hex seed
    """
    secret = hashlib.sha256(shared_point(private_key, public_key)).digest()
    return SharedSecret(secret=secret, seed=to_hex(secret))
