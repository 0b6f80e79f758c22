"""
StealthChat - Messages hidden in stealth-address transfer amounts

Python implementation of secp256k1 ECDH stealth sequences with messages
encoded in the low decimal digits of transferred amounts.
"""

from .keys import (
    generate_keypair,
    keypair_from_private_key,
    keypair_from_seed,
    public_key_to_address,
    public_key_from_hex,
    to_hex,
    from_hex,
)
from .ecdh import perform_ecdh
from .stealth import (
    derive_stealth_private_key,
    private_key_to_address,
    derive_stealth_address,
    derive_stealth_public_key,
    derive_sequence,
    derive_public_sequence,
    generate_stealth_seed,
)
from .codec import (
    encode_single,
    encode_chunk,
    encode_message,
    split_into_chunks,
    decode,
    embed_in_amount,
    wei_to_display,
    display_to_wei,
)
from .cipher import (
    encrypt_aes128,
    decrypt_aes128,
    encode_bytes_as_amount,
    decode_amount_as_bytes,
    create_encrypted_message,
    decrypt_message_from_amount,
)
from .types import (
    FIXED_SIGNING_MESSAGE,
    DEFAULT_SEQUENCE_LENGTH,
    WEI_PER_ETHER,
    StealthChatError,
    InvalidScalarError,
    InvalidPublicKeyError,
    InvalidChunkIndexError,
    ResolutionNotFoundError,
    AllEndpointsFailedError,
    TransferRejectedError,
)
from .models import (
    KeyPair,
    SharedSecret,
    OwnedStealthEntry,
    ObservedStealthEntry,
    MessageChunk,
    Identity,
    ScanState,
    ScanEntry,
    EncryptedMessage,
    SendResult,
)
from .storage import PublicKeyCache
from .blockchain import (
    NetworkConfig,
    NameRecord,
    BalanceProvider,
    NameResolver,
    MessageSigner,
    TransferClient,
    JsonRpcBalanceProvider,
    resolve_public_key,
)
from .scanner import BalanceScanner
from .client import StealthChat, derive_wallet

__version__ = "0.1.0"

__all__ = [
    # Keys
    "generate_keypair",
    "keypair_from_private_key",
    "keypair_from_seed",
    "public_key_to_address",
    "public_key_from_hex",
    "to_hex",
    "from_hex",
    # ECDH
    "perform_ecdh",
    # Stealth
    "derive_stealth_private_key",
    "private_key_to_address",
    "derive_stealth_address",
    "derive_stealth_public_key",
    "derive_sequence",
    "derive_public_sequence",
    "generate_stealth_seed",
    # Codec
    "encode_single",
    "encode_chunk",
    "encode_message",
    "split_into_chunks",
    "decode",
    "embed_in_amount",
    "wei_to_display",
    "display_to_wei",
    # Cipher
    "encrypt_aes128",
    "decrypt_aes128",
    "encode_bytes_as_amount",
    "decode_amount_as_bytes",
    "create_encrypted_message",
    "decrypt_message_from_amount",
    # Constants
    "FIXED_SIGNING_MESSAGE",
    "DEFAULT_SEQUENCE_LENGTH",
    "WEI_PER_ETHER",
    # Errors
    "StealthChatError",
    "InvalidScalarError",
    "InvalidPublicKeyError",
    "InvalidChunkIndexError",
    "ResolutionNotFoundError",
    "AllEndpointsFailedError",
    "TransferRejectedError",
    # Models
    "KeyPair",
    "SharedSecret",
    "OwnedStealthEntry",
    "ObservedStealthEntry",
    "MessageChunk",
    "Identity",
    "ScanState",
    "ScanEntry",
    "EncryptedMessage",
    "SendResult",
    # Storage
    "PublicKeyCache",
    # Blockchain
    "NetworkConfig",
    "NameRecord",
    "BalanceProvider",
    "NameResolver",
    "MessageSigner",
    "TransferClient",
    "JsonRpcBalanceProvider",
    "resolve_public_key",
    # Scanning
    "BalanceScanner",
    # Client
    "StealthChat",
    "derive_wallet",
]
