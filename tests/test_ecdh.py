"""Tests for ECDH shared secrets."""

import hashlib

import pytest
from cryptography.hazmat.primitives.asymmetric import ec

from stealthchat.ecdh import perform_ecdh, shared_point
from stealthchat.keys import generate_keypair, load_private_key, load_public_key
from stealthchat.types import InvalidPublicKeyError, InvalidScalarError


class TestSharedSecret:
    """Test ECDH agreement between two parties."""

    def test_symmetry_known_keys(self, alice, bob) -> None:
        """Both sides compute the same secret."""
        assert perform_ecdh(alice.private_key, bob.public_key) == perform_ecdh(bob.private_key, alice.public_key)

    def test_symmetry_random_keys(self) -> None:
        for _ in range(5):
            a = generate_keypair()
            b = generate_keypair()
            assert perform_ecdh(a.private_key, b.public_key).secret == perform_ecdh(b.private_key, a.public_key).secret

    def test_secret_is_hash_of_compressed_point(self, alice, bob) -> None:
        """The x-coordinate matches a standard ECDH exchange and the point is 33 bytes."""
        point = shared_point(alice.private_key, bob.public_key)
        assert len(point) == 33
        assert point[0] in (0x02, 0x03)

        x = load_private_key(alice.private_key).exchange(ec.ECDH(), load_public_key(bob.public_key))
        assert point[1:] == x
        assert perform_ecdh(alice.private_key, bob.public_key).secret == hashlib.sha256(point).digest()

    def test_seed_format(self, alice, bob) -> None:
        shared = perform_ecdh(alice.private_key, bob.public_key)
        assert len(shared.secret) == 32
        assert shared.seed == "0x" + shared.secret.hex()
        assert len(shared.seed) == 66

    def test_compressed_counterparty_key(self, alice, bob) -> None:
        """A compressed public key gives the same secret as the uncompressed one."""
        compressed = bytes([0x02 + (bob.public_key[-1] & 1)]) + bob.public_key[1:33]
        assert perform_ecdh(alice.private_key, compressed) == perform_ecdh(alice.private_key, bob.public_key)

    def test_different_pairs_differ(self, alice, bob) -> None:
        other = generate_keypair()
        assert perform_ecdh(alice.private_key, bob.public_key) != perform_ecdh(alice.private_key, other.public_key)


class TestECDHErrors:
    """Test malformed input handling."""

    def test_invalid_public_key(self, alice) -> None:
        with pytest.raises(InvalidPublicKeyError, match="Invalid public key format"):
            perform_ecdh(alice.private_key, b"\x04" + bytes(64))

    def test_truncated_public_key(self, alice, bob) -> None:
        with pytest.raises(InvalidPublicKeyError):
            perform_ecdh(alice.private_key, bob.public_key[:40])

    def test_invalid_private_key(self, bob) -> None:
        with pytest.raises(InvalidScalarError):
            perform_ecdh(bytes(32), bob.public_key)
