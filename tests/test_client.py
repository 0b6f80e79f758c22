"""Tests for the high-level StealthChat client."""

import asyncio

import pytest
from stealthchat.blockchain import BalanceProvider, MessageSigner, NameRecord, NameResolver, TransferClient
from stealthchat.client import StealthChat, derive_wallet
from stealthchat.codec import encode_chunk, encode_single
from stealthchat.ecdh import perform_ecdh
from stealthchat.keys import keypair_from_private_key, keypair_from_seed, to_hex
from stealthchat.stealth import derive_public_sequence
from stealthchat.types import FIXED_SIGNING_MESSAGE, InvalidPublicKeyError, ResolutionNotFoundError, TransferRejectedError


class FakeSigner(MessageSigner):
    """Signs by returning a fixed signature and recording the message."""

    def __init__(self, signature: str) -> None:
        self.signature = signature
        self.messages: list[str] = []

    async def sign_message(self, message: str) -> str:
        self.messages.append(message)
        return self.signature


class Ledger(BalanceProvider, TransferClient):
    """In-memory chain: transfers credit balances."""

    def __init__(self, reject_after: int = -1) -> None:
        self.balances: dict[str, int] = {}
        self.transfers: list[tuple[str, int]] = []
        self.reject_after = reject_after

    async def send_transfer(self, to: str, amount: int) -> str:
        if len(self.transfers) == self.reject_after:
            raise RuntimeError("user rejected")
        self.transfers.append((to, amount))
        self.balances[to] = self.balances.get(to, 0) + amount
        return f"0x{len(self.transfers):064x}"

    async def get_balance(self, address: str) -> int:
        return self.balances.get(address, 0)


class OneNameResolver(NameResolver):
    def __init__(self, name: str, description: str) -> None:
        self.name = name
        self.description = description

    async def lookup(self, name: str) -> list[NameRecord]:
        if name != self.name:
            return []
        return [NameRecord(name=name, description=self.description)]


@pytest.fixture
def ledger():
    return Ledger()


@pytest.fixture
def alice_chat(alice, bob, ledger):
    return StealthChat(alice, bob.public_key, balances=ledger, transfers=ledger, sequence_length=10)


@pytest.fixture
def bob_chat(alice, bob, ledger):
    return StealthChat(bob, alice.public_key, balances=ledger, transfers=ledger, sequence_length=10)


class TestWallet:
    """Test signature-derived wallets."""

    def test_derive_wallet_signs_fixed_message(self) -> None:
        signer = FakeSigner("0x" + "12" * 65)
        wallet = asyncio.run(derive_wallet(signer))
        assert signer.messages == [FIXED_SIGNING_MESSAGE]
        assert FIXED_SIGNING_MESSAGE == "Aknowledge you are going steganographic"
        assert wallet == keypair_from_seed("0x" + "12" * 65)

    def test_same_signature_same_wallet(self) -> None:
        signer = FakeSigner("0xfeed")
        assert asyncio.run(derive_wallet(signer)) == asyncio.run(derive_wallet(signer))


class TestSession:
    """Test session setup and sequences."""

    def test_shared_secret_symmetric(self, alice_chat, bob_chat) -> None:
        assert alice_chat.shared_secret == bob_chat.shared_secret

    def test_sequences_mirror(self, alice_chat, bob_chat) -> None:
        """Alice's own sequence is Bob's counterparty sequence."""
        assert alice_chat.own_sequence() == bob_chat.counterparty_sequence()
        assert alice_chat.counterparty_sequence() == bob_chat.own_sequence()
        assert len(alice_chat.own_sequence()) == 10
        assert len(alice_chat.own_sequence(count=3)) == 3

    def test_own_stealth_key(self, alice_chat) -> None:
        owned = alice_chat.own_stealth_key(2)
        assert keypair_from_private_key(owned.private_key).address == alice_chat.own_sequence()[2].address

    def test_invalid_counterparty_key(self, alice) -> None:
        with pytest.raises(InvalidPublicKeyError):
            StealthChat(alice, b"\x04" + bytes(64))

    def test_from_name_rejects_bare_coordinate(self, alice, bob) -> None:
        # A bare 32-byte x-coordinate passes the record format check but is not an encoded point
        resolver = OneNameResolver("bob.eth", to_hex(bob.public_key[1:33]))
        with pytest.raises(InvalidPublicKeyError):
            asyncio.run(StealthChat.from_name(alice, resolver, "bob.eth"))

    def test_from_name_unknown(self, alice) -> None:
        resolver = OneNameResolver("bob.eth", "0x" + "00" * 32)
        with pytest.raises(ResolutionNotFoundError):
            asyncio.run(StealthChat.from_name(alice, resolver, "carol.eth"))


class TestSendAndCheck:
    """Test the full send -> scan cycle."""

    def test_single_message(self, alice_chat, bob_chat, ledger) -> None:
        results = asyncio.run(alice_chat.send_message("Gang"))

        assert len(results) == 1
        assert results[0].nonce == 0
        assert results[0].amount == encode_single("Gang")
        assert results[0].address == alice_chat.own_sequence()[0].address
        assert ledger.transfers == [(results[0].address, encode_single("Gang"))]

        seen = asyncio.run(bob_chat.check_messages())
        assert [e.message for e in seen["counterparty"]] == ["Gang", None]
        assert [e.message for e in seen["self"]] == [None]

    def test_chunked_message(self, alice_chat, bob_chat, ledger) -> None:
        results = asyncio.run(alice_chat.send_message("HelloWorld"))

        assert [r.nonce for r in results] == [0, 1, 2]
        assert [r.amount for r in results] == [
            encode_chunk("Hell", 1, 3),
            encode_chunk("oWor", 2, 3),
            encode_chunk("ld", 3, 3),
        ]

        seen = asyncio.run(bob_chat.check_messages())
        assert [e.message for e in seen["counterparty"]] == ["[1/3] He", "[2/3] oW", "[3/3] ld", None]

    def test_start_nonce(self, alice_chat, ledger) -> None:
        results = asyncio.run(alice_chat.send_message("Hi", start_nonce=4))
        assert results[0].nonce == 4
        assert results[0].address == alice_chat.own_sequence()[4].address

    def test_blank_message_sends_nothing(self, alice_chat, ledger) -> None:
        assert asyncio.run(alice_chat.send_message("  ")) == []
        assert ledger.transfers == []

    def test_both_directions(self, alice_chat, bob_chat) -> None:
        asyncio.run(alice_chat.send_message("Yo"))
        asyncio.run(bob_chat.send_message("Hey"))

        seen = asyncio.run(alice_chat.check_messages())
        assert seen["self"][0].message == "Yo"
        assert seen["counterparty"][0].message == "Hey"

    def test_rejected_transfer(self, alice, bob) -> None:
        ledger = Ledger(reject_after=1)
        chat = StealthChat(alice, bob.public_key, balances=ledger, transfers=ledger)

        with pytest.raises(TransferRejectedError) as info:
            asyncio.run(chat.send_message("HelloWorld"))

        assert info.value.nonce == 1
        assert info.value.address == chat.own_sequence(count=2)[1].address
        assert "user rejected" in str(info.value)
        assert len(ledger.transfers) == 1

    def test_missing_collaborators(self, alice, bob) -> None:
        chat = StealthChat(alice, bob.public_key)
        with pytest.raises(ValueError):
            asyncio.run(chat.send_message("Hi"))
        with pytest.raises(ValueError):
            asyncio.run(chat.check_messages())

    def test_check_identity_into_caller_list(self, alice_chat) -> None:
        asyncio.run(alice_chat.send_message("Gang"))
        collected = []
        returned = asyncio.run(alice_chat.check_identity(alice_chat.own_identity, collected))
        assert returned is collected
        assert [e.message for e in collected] == ["Gang", None]

    def test_matches_manual_derivation(self, alice, bob, alice_chat) -> None:
        shared = perform_ecdh(bob.private_key, alice.public_key)
        assert alice_chat.own_sequence(count=3) == derive_public_sequence(shared, alice.public_key, 0, 3)
