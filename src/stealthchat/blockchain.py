"""
Blockchain interfaces for StealthChat.

This module provides abstract base classes for the external collaborators
(balance queries, name resolution, message signing and value transfers)
plus a JSON-RPC balance provider that tries a list of endpoints in order.
"""

import asyncio
import logging
import re
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any, Optional

import aiohttp

from .storage import PublicKeyCache
from .types import AllEndpointsFailedError, ResolutionNotFoundError

logger = logging.getLogger(__name__)

PUBLIC_KEY_RECORD_PATTERN = re.compile(r"^0x[0-9a-fA-F]{64}$")


@dataclass
class NetworkConfig:
    """Configuration for RPC connections."""

    rpc_endpoints: list[str] = field(default_factory=list)
    """Endpoints tried in order for every request."""

    chain_id: Optional[int] = None
    """Chain ID (informational)."""

    request_timeout: float = 10.0
    """Total timeout per request, in seconds."""

    @classmethod
    def base_sepolia(cls) -> "NetworkConfig":
        """Creates configuration for Base Sepolia (public endpoints)."""
        return cls(
            rpc_endpoints=[
                "https://sepolia.base.org",
                "https://base-sepolia.blockscout.com/api",
                "https://base-sepolia-rpc.publicnode.com",
            ],
            chain_id=84532,
        )

    @classmethod
    def sepolia(cls) -> "NetworkConfig":
        """Creates configuration for Ethereum Sepolia."""
        return cls(rpc_endpoints=["https://1rpc.io/sepolia"], chain_id=11155111)

    @classmethod
    def localnet(cls) -> "NetworkConfig":
        """Creates configuration for a local development node."""
        return cls(rpc_endpoints=["http://localhost:8545"], chain_id=31337)

    def with_endpoints(self, *endpoints: str) -> "NetworkConfig":
        """Returns a copy using the given endpoints."""
        return NetworkConfig(
            rpc_endpoints=list(endpoints),
            chain_id=self.chain_id,
            request_timeout=self.request_timeout,
        )


@dataclass
class NameRecord:
    """A resolved name and its text records."""

    name: str
    """The resolved name."""

    description: Optional[str] = None
    """The `description` text record, if set."""


class BalanceProvider(ABC):
    """Abstract base class for balance queries."""

    @abstractmethod
    async def get_balance(self, address: str) -> int:
        """Get the balance of an address in the smallest unit."""
        pass


class NameResolver(ABC):
    """Abstract base class for name resolution."""

    @abstractmethod
    async def lookup(self, name: str) -> list[NameRecord]:
        """Look up a name; returns zero or one records."""
        pass


class MessageSigner(ABC):
    """Abstract base class for a wallet able to sign messages."""

    @abstractmethod
    async def sign_message(self, message: str) -> str:
        """Sign a message; returns the 0x-prefixed hex signature."""
        pass


class TransferClient(ABC):
    """Abstract base class for submitting value transfers."""

    @abstractmethod
    async def send_transfer(self, to: str, amount: int) -> str:
        """Submit a transfer of `amount` (smallest unit) and return its transaction hash."""
        pass


def parse_quantity(value: Any) -> int:
    """Parse a JSON-RPC hex quantity ("0x1a") into an integer."""
    if not isinstance(value, str) or not value.startswith("0x"):
        raise ValueError(f"Not a hex quantity: {value!r}")
    return int(value, 16)


class JsonRpcBalanceProvider(BalanceProvider):
    """
    Balance provider using `eth_getBalance` over JSON-RPC.

    Endpoints are tried in the configured order and the first well-formed
    successful response wins.

    Example usage:
        ```python
        async with JsonRpcBalanceProvider(NetworkConfig.base_sepolia()) as provider:
            balance = await provider.get_balance("0x...")
        ```
    """

    def __init__(
        self,
        config: NetworkConfig,
        session: Optional[aiohttp.ClientSession] = None,
    ) -> None:
        self.config = config
        self._session = session
        self._owns_session = session is None

    async def _get_session(self) -> aiohttp.ClientSession:
        if self._session is None or self._session.closed:
            timeout = aiohttp.ClientTimeout(total=self.config.request_timeout)
            self._session = aiohttp.ClientSession(timeout=timeout)
            self._owns_session = True
        return self._session

    async def close(self) -> None:
        """Close the HTTP session if this provider created it."""
        if self._owns_session and self._session is not None and not self._session.closed:
            await self._session.close()

    async def __aenter__(self) -> "JsonRpcBalanceProvider":
        return self

    async def __aexit__(self, *exc_info: Any) -> None:
        await self.close()

    async def _query(self, session: aiohttp.ClientSession, endpoint: str, address: str) -> Optional[int]:
        payload = {
            "jsonrpc": "2.0",
            "method": "eth_getBalance",
            "params": [address, "latest"],
            "id": 1,
        }
        async with session.post(endpoint, json=payload) as resp:
            if resp.status != 200:
                logger.debug("Endpoint %s failed with status %s", endpoint, resp.status)
                return None
            data = await resp.json(content_type=None)

        if not isinstance(data, dict) or "result" not in data:
            logger.debug("Endpoint %s returned no result: %r", endpoint, data)
            return None
        return parse_quantity(data["result"])

    async def get_balance(self, address: str) -> int:
        """
        Get the balance of an address.

        Raises:
            AllEndpointsFailedError: If no endpoint returned a usable result.
        """
        session = await self._get_session()
        for endpoint in self.config.rpc_endpoints:
            try:
                balance = await self._query(session, endpoint, address)
            except (aiohttp.ClientError, asyncio.TimeoutError, ValueError) as exc:
                logger.debug("Endpoint %s failed for %s: %s", endpoint, address, exc)
                continue
            if balance is not None:
                return balance

        raise AllEndpointsFailedError(address, len(self.config.rpc_endpoints))


async def resolve_public_key(
    resolver: NameResolver,
    name: str,
    cache: Optional[PublicKeyCache] = None,
) -> str:
    """
    Resolves a name to the public key published in its description record.

    Raises:
        ResolutionNotFoundError: If there is no record, no description, or
            the description is not a 0x-prefixed 64-hex-digit string.
    """
    if cache is not None:
        cached = cache.retrieve(name)
        if cached is not None:
            return cached

    records = await resolver.lookup(name)
    if not records:
        raise ResolutionNotFoundError(name, "No name record found")

    description = records[0].description
    if not description:
        raise ResolutionNotFoundError(name, "No description text record found")

    public_key = description.strip()
    if not PUBLIC_KEY_RECORD_PATTERN.match(public_key):
        raise ResolutionNotFoundError(name, "Invalid public key format in description")

    if cache is not None:
        cache.store(name, public_key)
    return public_key
