"""
Placeholder "AES-128" cipher for amount-encoded messages.

This is an XOR stream keyed by HMAC-SHA256(key, 0x01) and is NOT secure;
only its interface (IV-prefixed ciphertext, big-endian amount packing)
is relied on elsewhere.
"""

import os

from cryptography.hazmat.primitives import hashes, hmac

from .models import EncryptedMessage
from .types import CIPHER_IV_SIZE


def _keystream(key: bytes) -> bytes:
    mac = hmac.HMAC(bytes(key), hashes.SHA256())
    mac.update(b"\x01")
    return mac.finalize()


def _xor(data: bytes, stream: bytes) -> bytes:
    return bytes(b ^ stream[i % len(stream)] for i, b in enumerate(data))


def encrypt_aes128(message: str, key: bytes) -> bytes:
    """Encrypt a message; returns IV (16 bytes) || ciphertext."""
    iv = os.urandom(CIPHER_IV_SIZE)
    return iv + _xor(message.encode("utf-8"), _keystream(key))


def decrypt_aes128(encrypted: bytes, key: bytes) -> str:
    """Decrypt IV || ciphertext produced by encrypt_aes128."""
    ciphertext = encrypted[CIPHER_IV_SIZE:]
    return _xor(ciphertext, _keystream(key)).decode("utf-8")


def encode_bytes_as_amount(data: bytes) -> int:
    """Pack bytes big-endian into an integer amount."""
    return int.from_bytes(data, "big")


def decode_amount_as_bytes(amount: int, length: int) -> bytes:
    """Unpack the low `length` bytes of an amount, big-endian."""
    return (amount & ((1 << (8 * length)) - 1)).to_bytes(length, "big")


def create_encrypted_message(message: str, shared_secret: bytes) -> EncryptedMessage:
    """Encrypt a message and pack it into an amount."""
    encrypted = encrypt_aes128(message, shared_secret)
    return EncryptedMessage(encrypted=encrypted, amount=encode_bytes_as_amount(encrypted))


def decrypt_message_from_amount(amount: int, shared_secret: bytes, expected_length: int) -> str:
    """Recover a message from an amount; expected_length includes the IV."""
    return decrypt_aes128(decode_amount_as_bytes(amount, expected_length), shared_secret)
