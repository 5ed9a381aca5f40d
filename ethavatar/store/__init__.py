# ethavatar/store/__init__.py
"""
EthAvatar Store Layer

Components:
    BlobStore: Content-addressed store interface
    IPFSBlobStore: IPFS HTTP API (ipfshttpclient)
    MemoryBlobStore: In-memory store for testing
"""

from .base import (
    BlobStore,
    MemoryBlobStore,
    StoreError,
    BlobNotFoundError,
)

from .ipfs import (
    IPFSBlobStore,
    DEFAULT_IPFS_ADDR,
    LOCAL_IPFS_ADDR,
)

__all__ = [
    "BlobStore",
    "MemoryBlobStore",
    "StoreError",
    "BlobNotFoundError",
    "IPFSBlobStore",
    "DEFAULT_IPFS_ADDR",
    "LOCAL_IPFS_ADDR",
]
