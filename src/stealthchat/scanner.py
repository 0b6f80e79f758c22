"""
Sequential balance scanning of stealth address sequences.

Each identity's sequence is walked by ascending nonce, one query at a
time. The first zero balance (or failed query) ends that identity's scan:
messages are sent densely from nonce 0, so nothing lies beyond it.
"""

import asyncio
import logging
from typing import Iterable, Iterator, Optional, Union

from .blockchain import BalanceProvider
from .codec import decode
from .models import Identity, ObservedStealthEntry, OwnedStealthEntry, ScanEntry, ScanState, SharedSecret
from .stealth import Secret, derive_stealth_public_key
from .types import DEFAULT_SEQUENCE_LENGTH

logger = logging.getLogger(__name__)

StealthEntry = Union[ObservedStealthEntry, OwnedStealthEntry]


class BalanceScanner:
    """
    Scans stealth sequences for message-bearing balances.

    Example usage:
        ```python
        scanner = BalanceScanner(provider)
        entries = await scanner.scan_identity(shared, Identity("bob", bob_public_key))
        for entry in entries:
            print(entry.nonce, entry.balance, entry.message)
        ```
    """

    def __init__(self, provider: BalanceProvider, max_nonces: int = DEFAULT_SEQUENCE_LENGTH) -> None:
        """
        Args:
            provider: Balance collaborator.
            max_nonces: Upper bound on addresses scanned per identity.
        """
        if max_nonces < 1:
            raise ValueError(f"max_nonces must be positive, got {max_nonces}")
        self.provider = provider
        self.max_nonces = max_nonces

    async def scan(
        self,
        sequence: Iterable[StealthEntry],
        identity: str = "",
        results: Optional[list[ScanEntry]] = None,
    ) -> list[ScanEntry]:
        """
        Scan a sequence in the order given, stopping at the first empty address.

        Entries are appended to `results` as they are observed, so a caller
        that cancels the scan keeps everything collected up to that point.

        Args:
            sequence: Stealth entries in ascending nonce order.
            identity: Label stored on each entry.
            results: Caller-owned list to append to (a new list if omitted).

        Returns:
            The results list.
        """
        if results is None:
            results = []

        for count, item in enumerate(sequence):
            if count >= self.max_nonces:
                logger.info("Reached scan limit of %d for %s", self.max_nonces, identity or "sequence")
                break

            try:
                balance = await self.provider.get_balance(item.address)
            except Exception as exc:
                logger.warning(
                    "Balance query failed for %s nonce %d (%s), stopping", identity, item.nonce, exc
                )
                results.append(ScanEntry(
                    nonce=item.nonce,
                    address=item.address,
                    balance=0,
                    identity=identity,
                    state=ScanState.STOPPED,
                    error=str(exc),
                ))
                break

            if balance == 0:
                logger.info("Found zero balance at %s nonce %d, stopping", identity, item.nonce)
                results.append(ScanEntry(
                    nonce=item.nonce,
                    address=item.address,
                    balance=0,
                    identity=identity,
                    state=ScanState.STOPPED,
                ))
                break

            results.append(ScanEntry(
                nonce=item.nonce,
                address=item.address,
                balance=balance,
                identity=identity,
                message=decode(balance),
                state=ScanState.OBSERVED,
            ))

        return results

    def _lazy_sequence(self, shared_secret: Secret, public_key: bytes) -> Iterator[ObservedStealthEntry]:
        for nonce in range(self.max_nonces):
            yield derive_stealth_public_key(shared_secret, public_key, nonce)

    async def scan_identity(
        self,
        shared_secret: Union[bytes, SharedSecret],
        identity: Identity,
        results: Optional[list[ScanEntry]] = None,
    ) -> list[ScanEntry]:
        """Derive and scan an identity's sequence from nonce 0, one address at a time."""
        return await self.scan(
            self._lazy_sequence(shared_secret, identity.public_key),
            identity=identity.label,
            results=results,
        )

    async def scan_pair(
        self,
        shared_secret: Union[bytes, SharedSecret],
        first: Identity,
        second: Identity,
    ) -> dict[str, list[ScanEntry]]:
        """Scan two identities concurrently; each stops independently."""
        first_results, second_results = await asyncio.gather(
            self.scan_identity(shared_secret, first),
            self.scan_identity(shared_secret, second),
        )
        return {first.label: first_results, second.label: second_results}
