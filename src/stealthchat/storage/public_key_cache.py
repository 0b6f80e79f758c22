"""Cache of resolved names to public key strings, with TTL expiration."""

from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import Optional


@dataclass
class _CacheEntry:
    public_key: str
    expires_at: datetime


# Default TTL: 24 hours
DEFAULT_TTL = timedelta(hours=24)


class PublicKeyCache:
    """In-memory name -> public key cache."""

    def __init__(self, ttl: timedelta = DEFAULT_TTL) -> None:
        self._entries: dict[str, _CacheEntry] = {}
        self._ttl = ttl

    @staticmethod
    def _normalize(name: str) -> str:
        return name.strip().lower()

    def store(self, name: str, public_key: str) -> None:
        """Remember the public key resolved for a name."""
        self._entries[self._normalize(name)] = _CacheEntry(
            public_key=public_key,
            expires_at=datetime.now() + self._ttl,
        )

    def retrieve(self, name: str) -> Optional[str]:
        """Cached public key for a name, or None if missing or expired."""
        key = self._normalize(name)
        entry = self._entries.get(key)
        if entry is None:
            return None

        if entry.expires_at <= datetime.now():
            del self._entries[key]
            return None

        return entry.public_key

    def invalidate(self, name: str) -> None:
        self._entries.pop(self._normalize(name), None)

    def clear(self) -> None:
        self._entries.clear()

    def __len__(self) -> int:
        return len(self._entries)
