"""Models for StealthChat keys, stealth entries, messages and scans."""

from dataclasses import dataclass
from enum import Enum
from typing import Optional


@dataclass(frozen=True)
class KeyPair:
    """
    A secp256k1 key pair with its derived address.

    Attributes:
        private_key: 32-byte private scalar (big-endian).
        public_key: 65-byte uncompressed public point (0x04 || X || Y).
        address: 0x-prefixed hex address derived from the public key.
    """

    private_key: bytes
    public_key: bytes
    address: str

    def __repr__(self) -> str:
        return f"KeyPair(address={self.address!r})"


@dataclass(frozen=True)
class SharedSecret:
    """Result of an ECDH exchange."""

    secret: bytes
    """SHA-256 of the compressed shared point (32 bytes)."""

    seed: str
    """The secret as a 0x-prefixed lowercase hex string."""


@dataclass(frozen=True)
class OwnedStealthEntry:
    """A stealth address seen from the side that holds its private key."""

    nonce: int
    private_key: bytes
    public_key: bytes
    address: str

    def observed(self) -> "ObservedStealthEntry":
        """Drops the private key."""
        return ObservedStealthEntry(nonce=self.nonce, public_key=self.public_key, address=self.address)

    def __repr__(self) -> str:
        return f"OwnedStealthEntry(nonce={self.nonce}, address={self.address!r})"


@dataclass(frozen=True)
class ObservedStealthEntry:
    """A stealth address seen from the outside (no spending key)."""

    nonce: int
    public_key: bytes
    address: str


@dataclass(frozen=True)
class MessageChunk:
    """
    One transfer-sized piece of an outgoing message.

    For messages of four characters or fewer there is a single chunk with
    sequence == total == 1, and its amount carries no chunk metadata.
    """

    chunk: str
    sequence: int
    total: int
    amount: int

    @property
    def is_single(self) -> bool:
        """Whether this is an unchunked message."""
        return self.total == 1 and self.sequence == 1


@dataclass(frozen=True)
class Identity:
    """One party whose stealth sequence gets scanned."""

    label: str
    public_key: bytes


class ScanState(Enum):
    """State of an address during a balance scan."""
    PENDING = "pending"
    OBSERVED = "observed"
    STOPPED = "stopped"


@dataclass
class ScanEntry:
    """Balance observed at one stealth address."""
    nonce: int
    address: str
    balance: int
    identity: str = ""
    message: Optional[str] = None
    state: ScanState = ScanState.PENDING
    error: Optional[str] = None

    @property
    def is_empty(self) -> bool:
        """Whether the address held no balance (or the query failed)."""
        return self.balance == 0

    @property
    def failed(self) -> bool:
        """Whether this entry is a placeholder for a failed query."""
        return self.error is not None


@dataclass(frozen=True)
class EncryptedMessage:
    """Placeholder-cipher output and its packed amount."""
    encrypted: bytes
    amount: int


@dataclass
class SendResult:
    """Result of one message transfer."""
    nonce: int
    address: str
    amount: int
    chunk: MessageChunk
    tx_id: str
