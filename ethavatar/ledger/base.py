# ethavatar/ledger/base.py
"""
EthAvatar Ledger: Registry Transport Interface

The registry maps each address to one string: the IPFS hash of the
avatar's pointer document, or "" when no avatar is set. Every write emits
a DidSetIPFSHash(hashAddress, hash) event.

    read_hash(address)            -> hash | ""
    write_hash(hash, signed_by)   -> transaction id
    subscribe("DidSetIPFSHash")   -> EventStream of ChangeEvent

Implementations:
    - ContractLedger: web3.py contract binding (see contract.py)
    - MockLedger: in-memory registry for testing

Updated: 2026-10-17
Version: 0.1.0
"""

from __future__ import annotations

import asyncio
import secrets
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Callable, Dict, List, Optional


# =============================================================================
# Constants
# =============================================================================

EMPTY_HASH = ""
DID_SET_IPFS_HASH = "DidSetIPFSHash"


# =============================================================================
# Exceptions
# =============================================================================

class LedgerError(Exception):
    """Base ledger transport error."""
    pass


class ContractNotFoundError(LedgerError):
    """No registry contract address for the active network."""
    pass


# =============================================================================
# Types
# =============================================================================

@dataclass(frozen=True)
class ChangeEvent:
    """A registry mutation: `hash_address` now maps to `hash`."""
    hash_address: str
    hash: str

    @property
    def hashAddress(self) -> str:
        """Contract event argument name."""
        return self.hash_address

    @property
    def is_removal(self) -> bool:
        return self.hash == EMPTY_HASH


class EventStream(ABC):
    """
    Infinite async iterator of ChangeEvent.

    Not restartable; a new subscription only sees events emitted after its
    start() completes.
    """

    async def start(self) -> None:
        """Begin receiving events."""
        return None

    @abstractmethod
    async def aclose(self) -> None:
        """Stop receiving events; iteration ends."""
        pass

    def __aiter__(self) -> EventStream:
        return self

    @abstractmethod
    async def __anext__(self) -> ChangeEvent:
        pass


# =============================================================================
# Abstract Base Class
# =============================================================================

class LedgerTransport(ABC):
    """Abstract registry transport."""

    @abstractmethod
    async def read_hash(self, address: str) -> str:
        """Read the stored hash for an address ("" if unset)."""
        pass

    @abstractmethod
    async def write_hash(self, value: str, signed_by: str) -> str:
        """
        Store `value` for `signed_by`, authorized by that address.

        Returns:
            Transaction identifier

        Raises:
            LedgerError: If the write is rejected
        """
        pass

    @abstractmethod
    def subscribe(self, event_name: str = DID_SET_IPFS_HASH) -> EventStream:
        """Open a mutation event stream."""
        pass


# =============================================================================
# Mock Ledger (for testing)
# =============================================================================

_CLOSED = object()


class QueueEventStream(EventStream):
    """EventStream fed by MockLedger writes."""

    def __init__(self, on_close: Optional[Callable[[QueueEventStream], None]] = None):
        self._queue: asyncio.Queue = asyncio.Queue()
        self._on_close = on_close
        self._closed = False

    def push(self, event: ChangeEvent) -> None:
        if not self._closed:
            self._queue.put_nowait(event)

    async def aclose(self) -> None:
        if self._closed:
            return
        self._closed = True
        self._queue.put_nowait(_CLOSED)
        if self._on_close is not None:
            self._on_close(self)

    async def __anext__(self) -> ChangeEvent:
        item = await self._queue.get()
        if item is _CLOSED:
            raise StopAsyncIteration
        return item


class MockLedger(LedgerTransport):
    """
    In-memory registry for testing.

    Addresses are keyed case-insensitively, like the contract's address
    mapping.
    """

    def __init__(self):
        self._hashes: Dict[str, str] = {}
        self._streams: List[QueueEventStream] = []
        self.writes: List[ChangeEvent] = []

    @property
    def subscriber_count(self) -> int:
        return len(self._streams)

    async def read_hash(self, address: str) -> str:
        return self._hashes.get(address.lower(), EMPTY_HASH)

    async def write_hash(self, value: str, signed_by: str) -> str:
        self._hashes[signed_by.lower()] = value

        event = ChangeEvent(hash_address=signed_by, hash=value)
        self.writes.append(event)
        for stream in list(self._streams):
            stream.push(event)

        return "0x" + secrets.token_hex(32)  # Mock tx hash

    def subscribe(self, event_name: str = DID_SET_IPFS_HASH) -> EventStream:
        if event_name != DID_SET_IPFS_HASH:
            raise LedgerError(f"Unknown event: {event_name}")
        stream = QueueEventStream(on_close=self._streams.remove)
        self._streams.append(stream)
        return stream
