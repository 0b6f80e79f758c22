"""Shared fixtures for StealthChat tests."""

import pytest

from stealthchat.keys import keypair_from_private_key
from test_vectors import ALICE_PRIVATE_KEY_HEX, BOB_PRIVATE_KEY_HEX


@pytest.fixture
def alice():
    """Alice's key pair (private key 1)."""
    return keypair_from_private_key(bytes.fromhex(ALICE_PRIVATE_KEY_HEX))


@pytest.fixture
def bob():
    """Bob's key pair (private key 2)."""
    return keypair_from_private_key(bytes.fromhex(BOB_PRIVATE_KEY_HEX))
