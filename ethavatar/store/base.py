# ethavatar/store/base.py
"""
EthAvatar Store: Content-Addressed Blob Store Interface

    put(bytes) -> hash
    get(hash)  -> bytes   (raises BlobNotFoundError for unknown hashes)

Hashes are opaque strings; the same bytes always give the same hash.

Updated: 2026-10-17
Version: 0.1.0
"""

from __future__ import annotations

import hashlib
from abc import ABC, abstractmethod
from typing import Dict


# =============================================================================
# Exceptions
# =============================================================================

class StoreError(Exception):
    """Base blob store error."""
    pass


class BlobNotFoundError(StoreError):
    """No blob stored under the hash."""
    def __init__(self, blob_hash: str):
        self.blob_hash = blob_hash
        super().__init__(f"Blob not found: {blob_hash}")


# =============================================================================
# Abstract Base Class
# =============================================================================

class BlobStore(ABC):
    """Abstract content-addressed store."""

    @abstractmethod
    async def put(self, data: bytes) -> str:
        """Store bytes, return their hash."""
        pass

    @abstractmethod
    async def get(self, blob_hash: str) -> bytes:
        """Fetch bytes by hash."""
        pass


# =============================================================================
# Memory Store (for testing)
# =============================================================================

class MemoryBlobStore(BlobStore):
    """
    In-memory BlobStore for testing.

    Hashes are SHA-256 hex digests of the content.
    """

    def __init__(self):
        self._blobs: Dict[str, bytes] = {}

    def __len__(self) -> int:
        return len(self._blobs)

    def __contains__(self, blob_hash: str) -> bool:
        return blob_hash in self._blobs

    async def put(self, data: bytes) -> str:
        data = bytes(data)
        blob_hash = hashlib.sha256(data).hexdigest()
        self._blobs[blob_hash] = data
        return blob_hash

    async def get(self, blob_hash: str) -> bytes:
        if blob_hash not in self._blobs:
            raise BlobNotFoundError(blob_hash)
        return self._blobs[blob_hash]
