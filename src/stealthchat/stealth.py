"""
Stealth address derivation.

A stealth private key is SHA-256(shared_secret || public_key || nonce_be32).
Both parties of an ECDH exchange can compute every address of either
party's sequence; the nonce orders the sequence and defines scan order.
"""

import hashlib
import struct
from typing import Union

from .keys import is_valid_scalar, public_key_from_private_key, public_key_to_address, to_hex
from .models import ObservedStealthEntry, OwnedStealthEntry, SharedSecret
from .types import NONCE_MAX

Secret = Union[bytes, SharedSecret]


def _secret_bytes(shared_secret: Secret) -> bytes:
    if isinstance(shared_secret, SharedSecret):
        return shared_secret.secret
    return bytes(shared_secret)


def _digest_to_scalar(digest: bytes) -> bytes:
    # Zero or >= n: hash again until the digest is a usable scalar.
    while not is_valid_scalar(digest):
        digest = hashlib.sha256(digest).digest()
    return digest


def derive_stealth_private_key(shared_secret: Secret, public_key: bytes, nonce: int) -> bytes:
    """
    Derive the stealth private key for a nonce.

    Args:
        shared_secret: 32-byte ECDH secret (or SharedSecret)
        public_key: Public key of the party whose sequence this is
        nonce: Position in the sequence, 0 <= nonce <= 2**32 - 1

    Returns:
        32-byte private key
    """
    if not 0 <= nonce <= NONCE_MAX:
        raise ValueError(f"Nonce must fit in 32 bits, got {nonce}")

    data = _secret_bytes(shared_secret) + bytes(public_key) + struct.pack(">I", nonce)
    return _digest_to_scalar(hashlib.sha256(data).digest())


def private_key_to_address(private_key: bytes) -> str:
    """Address of the key pair for a stealth private key."""
    return public_key_to_address(public_key_from_private_key(private_key))


def derive_stealth_address(shared_secret: Secret, public_key: bytes, nonce: int) -> OwnedStealthEntry:
    """Derive the stealth entry for a nonce, including its private key."""
    private_key = derive_stealth_private_key(shared_secret, public_key, nonce)
    stealth_public_key = public_key_from_private_key(private_key)
    return OwnedStealthEntry(
        nonce=nonce,
        private_key=private_key,
        public_key=stealth_public_key,
        address=public_key_to_address(stealth_public_key),
    )


def derive_stealth_public_key(shared_secret: Secret, public_key: bytes, nonce: int) -> ObservedStealthEntry:
    """Derive the stealth entry for a nonce, exposing only its public key and address."""
    return derive_stealth_address(shared_secret, public_key, nonce).observed()


def derive_sequence(
    shared_secret: Secret,
    public_key: bytes,
    start_nonce: int,
    count: int,
) -> list[OwnedStealthEntry]:
    """Derive `count` consecutive entries starting at `start_nonce`, in nonce order."""
    if count < 0:
        raise ValueError(f"Count must be non-negative, got {count}")
    return [
        derive_stealth_address(shared_secret, public_key, nonce)
        for nonce in range(start_nonce, start_nonce + count)
    ]


def derive_public_sequence(
    shared_secret: Secret,
    public_key: bytes,
    start_nonce: int,
    count: int,
) -> list[ObservedStealthEntry]:
    """Like derive_sequence, without private keys."""
    return [entry.observed() for entry in derive_sequence(shared_secret, public_key, start_nonce, count)]


def generate_stealth_seed(shared_secret: Secret, public_key_f: bytes, public_key_d: bytes) -> str:
    """Hex seed binding a shared secret to both parties' public keys."""
    data = _secret_bytes(shared_secret) + bytes(public_key_f) + bytes(public_key_d)
    return to_hex(hashlib.sha256(data).digest())
