"""StealthChat storage module."""

from .public_key_cache import PublicKeyCache

__all__ = [
    "PublicKeyCache",
]
