"""Type definitions and protocol constants for StealthChat."""

# Curve constants (secp256k1)
SECP256K1_ORDER = 0xFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFEBAAEDCE6AF48A03BBFD25E8CD0364141
PRIVATE_KEY_SIZE = 32
UNCOMPRESSED_PUBLIC_KEY_SIZE = 65
SHARED_SECRET_SIZE = 32
ADDRESS_SIZE = 20
NONCE_MAX = 0xFFFFFFFF

# Message signed by the user's wallet to seed the stealth key pair
FIXED_SIGNING_MESSAGE = "Aknowledge you are going steganographic"

# Message codec constants
PAYLOAD_DIGITS = 12
CODE_DIGITS = 3
CHARS_PER_MESSAGE = 4
CHARS_PER_CHUNK = 2
# Chunk totals must stay below the printable ASCII range (32+) so that
# single messages are not read as chunk headers.
MAX_CHUNKS = 31

# Denomination
WEI_DECIMALS = 18
WEI_PER_ETHER = 10**WEI_DECIMALS

# Scanning
DEFAULT_SEQUENCE_LENGTH = 100

# Placeholder cipher
CIPHER_IV_SIZE = 16


# Exception types
class StealthChatError(Exception):
    """Base exception for StealthChat errors."""
    pass


class InvalidScalarError(StealthChatError):
    """Private key bytes are not a valid secp256k1 scalar."""
    pass


class InvalidPublicKeyError(StealthChatError):
    """Public key is not a valid secp256k1 point."""
    pass


class InvalidChunkIndexError(StealthChatError):
    """Chunk sequence/total outside 1 <= sequence <= total."""

    def __init__(self, sequence: int, total: int) -> None:
        self.sequence = sequence
        self.total = total
        super().__init__(f"Invalid chunk index {sequence}/{total}")


class ResolutionNotFoundError(StealthChatError):
    """Name could not be resolved to a public key."""

    def __init__(self, name: str, reason: str) -> None:
        self.name = name
        self.reason = reason
        super().__init__(f"{reason}: {name}")


class AllEndpointsFailedError(StealthChatError):
    """Balance query failed on every configured endpoint."""

    def __init__(self, address: str, attempts: int) -> None:
        self.address = address
        self.attempts = attempts
        super().__init__(f"All {attempts} RPC endpoints failed for address: {address}")


class TransferRejectedError(StealthChatError):
    """Signing or broadcast collaborator rejected a transfer."""

    def __init__(self, address: str, reason: str, nonce: int = -1) -> None:
        self.address = address
        self.reason = reason
        self.nonce = nonce
        super().__init__(f"Transfer to {address} rejected: {reason}")
