"""
StealthChat client for stealth-address messaging.

The StealthChat client ties a signature-derived wallet, an ECDH shared
secret and the balance/transfer collaborators together so that messages
can be sent to, and read from, both parties' stealth sequences.
"""

import logging
from typing import Optional

from .blockchain import BalanceProvider, MessageSigner, NameResolver, TransferClient, resolve_public_key
from .codec import encode_message
from .ecdh import perform_ecdh
from .keys import keypair_from_seed, public_key_from_hex
from .models import Identity, KeyPair, ObservedStealthEntry, OwnedStealthEntry, ScanEntry, SendResult, SharedSecret
from .scanner import BalanceScanner
from .stealth import derive_public_sequence, derive_stealth_address, derive_stealth_public_key
from .storage import PublicKeyCache
from .types import DEFAULT_SEQUENCE_LENGTH, FIXED_SIGNING_MESSAGE, TransferRejectedError

logger = logging.getLogger(__name__)


async def derive_wallet(signer: MessageSigner, message: str = FIXED_SIGNING_MESSAGE) -> KeyPair:
    """
    Derive the deterministic stealth wallet from a signature over the fixed message.

    The same signing key always yields the same wallet.
    """
    signature = await signer.sign_message(message)
    return keypair_from_seed(signature)


class StealthChat:
    """
    High-level client for one conversation between two parties.

    Example usage:
        ```python
        wallet = await derive_wallet(my_signer)
        chat = StealthChat(wallet, their_public_key, balances=provider, transfers=my_wallet)

        await chat.send_message("HelloWorld")
        results = await chat.check_messages()
        ```
    """

    SELF_LABEL = "self"
    COUNTERPARTY_LABEL = "counterparty"

    def __init__(
        self,
        wallet: KeyPair,
        counterparty_public_key: bytes,
        balances: Optional[BalanceProvider] = None,
        transfers: Optional[TransferClient] = None,
        sequence_length: int = DEFAULT_SEQUENCE_LENGTH,
    ) -> None:
        """
        Initialize the client.

        Args:
            wallet: Our key pair (typically from derive_wallet).
            counterparty_public_key: Their encoded public key.
            balances: Balance collaborator used for scanning.
            transfers: Transfer collaborator used for sending.
            sequence_length: Addresses per identity considered when scanning.

        Raises:
            InvalidPublicKeyError: If the counterparty key is not a curve point.
        """
        self.wallet = wallet
        self.counterparty_public_key = bytes(counterparty_public_key)
        self.balances = balances
        self.transfers = transfers
        self.sequence_length = sequence_length
        self.shared_secret: SharedSecret = perform_ecdh(wallet.private_key, self.counterparty_public_key)

    @classmethod
    async def from_name(
        cls,
        wallet: KeyPair,
        resolver: NameResolver,
        name: str,
        cache: Optional[PublicKeyCache] = None,
        **kwargs,
    ) -> "StealthChat":
        """Create a client for the counterparty published under `name`."""
        public_key_hex = await resolve_public_key(resolver, name, cache)
        return cls(wallet, public_key_from_hex(public_key_hex), **kwargs)

    @property
    def own_identity(self) -> Identity:
        return Identity(label=self.SELF_LABEL, public_key=self.wallet.public_key)

    @property
    def counterparty_identity(self) -> Identity:
        return Identity(label=self.COUNTERPARTY_LABEL, public_key=self.counterparty_public_key)

    # MARK: - Sequences

    def own_sequence(self, count: Optional[int] = None, start_nonce: int = 0) -> list[ObservedStealthEntry]:
        """Our stealth addresses (the ones we send messages to)."""
        return derive_public_sequence(
            self.shared_secret, self.wallet.public_key, start_nonce, self.sequence_length if count is None else count
        )

    def counterparty_sequence(self, count: Optional[int] = None, start_nonce: int = 0) -> list[ObservedStealthEntry]:
        """The counterparty's stealth addresses."""
        return derive_public_sequence(
            self.shared_secret, self.counterparty_public_key, start_nonce, self.sequence_length if count is None else count
        )

    def own_stealth_key(self, nonce: int) -> OwnedStealthEntry:
        """Spending key of one of our stealth addresses."""
        return derive_stealth_address(self.shared_secret, self.wallet.public_key, nonce)

    # MARK: - Sending

    async def send_message(self, text: str, start_nonce: int = 0) -> list[SendResult]:
        """
        Send a message as transfers to consecutive addresses of our sequence.

        Chunk i goes to nonce start_nonce + i - 1. Blank text sends nothing.

        Raises:
            TransferRejectedError: If a transfer fails; earlier chunks stay sent.
        """
        if self.transfers is None:
            raise ValueError("No transfer client configured")

        chunks = encode_message(text)
        if not chunks:
            logger.debug("Ignoring blank message")
            return []

        results = []
        for offset, chunk in enumerate(chunks):
            nonce = start_nonce + offset
            entry = derive_stealth_public_key(self.shared_secret, self.wallet.public_key, nonce)
            try:
                tx_id = await self.transfers.send_transfer(entry.address, chunk.amount)
            except TransferRejectedError:
                raise
            except Exception as exc:
                raise TransferRejectedError(entry.address, str(exc), nonce=nonce) from exc

            logger.info("Sent chunk %d/%d to nonce %d (%s)", chunk.sequence, chunk.total, nonce, tx_id)
            results.append(SendResult(
                nonce=nonce,
                address=entry.address,
                amount=chunk.amount,
                chunk=chunk,
                tx_id=tx_id,
            ))
        return results

    # MARK: - Receiving

    def _scanner(self) -> BalanceScanner:
        if self.balances is None:
            raise ValueError("No balance provider configured")
        return BalanceScanner(self.balances, max_nonces=self.sequence_length)

    async def check_messages(self) -> dict[str, list[ScanEntry]]:
        """Scan both parties' sequences; keys are "self" and "counterparty"."""
        return await self._scanner().scan_pair(
            self.shared_secret, self.own_identity, self.counterparty_identity
        )

    async def check_identity(
        self,
        identity: Identity,
        results: Optional[list[ScanEntry]] = None,
    ) -> list[ScanEntry]:
        """Scan a single identity, appending to a caller-owned list."""
        return await self._scanner().scan_identity(self.shared_secret, identity, results)
