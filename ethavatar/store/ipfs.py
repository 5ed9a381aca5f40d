# ethavatar/store/ipfs.py
"""
EthAvatar Store: IPFS

BlobStore backed by an IPFS HTTP API via ipfshttpclient.

ipfshttpclient is synchronous, so every call runs in a worker thread.
The client connects lazily on first use.

Usage:
    store = IPFSBlobStore("/ip4/127.0.0.1/tcp/5001")
    cid = await store.put(b"...")
    data = await store.get(cid)

Updated: 2026-10-17
Version: 0.1.0
"""

from __future__ import annotations

import asyncio
import logging
from typing import Any, Optional

import ipfshttpclient

from .base import BlobStore, BlobNotFoundError, StoreError


logger = logging.getLogger("ethavatar-ipfs")


# =============================================================================
# Constants
# =============================================================================

DEFAULT_IPFS_ADDR = "/dns/ipfs.infura.io/tcp/5001/https"
LOCAL_IPFS_ADDR = "/ip4/127.0.0.1/tcp/5001"


# =============================================================================
# IPFSBlobStore
# =============================================================================

class IPFSBlobStore(BlobStore):
    """IPFS client wrapper."""

    def __init__(
        self,
        api_addr: str = DEFAULT_IPFS_ADDR,
        client: Optional[Any] = None,
        pin: bool = True,
    ):
        """
        Args:
            api_addr: Multiaddr of the IPFS HTTP API
            client: Pre-connected ipfshttpclient.Client (optional)
            pin: Pin uploaded content
        """
        self.api_addr = api_addr
        self.client = client
        self._pin = pin

    @property
    def is_connected(self) -> bool:
        return self.client is not None

    def connect(self) -> Any:
        """Connect to the IPFS API (no-op if already connected)."""
        if self.client is None:
            try:
                self.client = ipfshttpclient.connect(self.api_addr)
            except ipfshttpclient.exceptions.Error as e:
                logger.error(f"IPFS connection failed: {e}")
                raise StoreError(f"Cannot connect to IPFS at {self.api_addr}: {e}") from e
            logger.info(f"Connected to IPFS: {self.api_addr}")
        return self.client

    def close(self) -> None:
        if self.client is not None:
            self.client.close()
            self.client = None

    def _add(self, data: bytes) -> str:
        client = self.connect()
        cid = client.add_bytes(data)
        if self._pin:
            client.pin.add(cid)
        return cid

    def _cat(self, blob_hash: str) -> bytes:
        client = self.connect()
        try:
            return client.cat(blob_hash)
        except ipfshttpclient.exceptions.ErrorResponse as e:
            raise BlobNotFoundError(blob_hash) from e

    async def put(self, data: bytes) -> str:
        cid = await asyncio.to_thread(self._add, bytes(data))
        logger.info(f"IPFS add: {len(data)} bytes -> {cid}")
        return cid

    async def get(self, blob_hash: str) -> bytes:
        data = await asyncio.to_thread(self._cat, blob_hash)
        logger.info(f"IPFS cat: {blob_hash} -> {len(data)} bytes")
        return data
