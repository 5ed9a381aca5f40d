# ethavatar/wallet/provider.py
"""
EthAvatar Wallet: web3.py Connection

Wraps an AsyncWeb3 instance as a WalletConnection.

Accounts come from the node (eth_accounts), or from a local private key
when one is given; in that case the key's address is the only account and
transactions are signed locally by the ledger transport.

Usage:
    wallet = Web3Wallet.from_url("http://127.0.0.1:8545")
    accounts = await wallet.get_accounts()
    address = await wallet.resolve_name("vitalik.eth")

Updated: 2026-10-17
Version: 0.1.0
"""

from __future__ import annotations

import logging
from typing import List, Optional

from eth_account import Account
from eth_account.signers.local import LocalAccount
from web3 import AsyncWeb3

from .base import (
    WalletConnection,
    AccessRefusedError,
    NameServiceUnsupportedError,
)


logger = logging.getLogger("ethavatar-wallet")


# =============================================================================
# Constants
# =============================================================================

# Chains with an ENS registry deployment
ENS_CHAIN_IDS = {
    1: "mainnet",
    17000: "holesky",
    11155111: "sepolia",
}

ETH_REQUEST_ACCOUNTS = "eth_requestAccounts"


# =============================================================================
# Web3Wallet
# =============================================================================

class Web3Wallet(WalletConnection):
    """WalletConnection backed by web3.py."""

    def __init__(
        self,
        w3: AsyncWeb3,
        private_key: Optional[str] = None,
        request_access: bool = False,
    ):
        """
        Args:
            w3: AsyncWeb3 instance
            private_key: Local signing key (optional)
            request_access: Send eth_requestAccounts before reading accounts
        """
        self._w3 = w3
        self._account: Optional[LocalAccount] = (
            Account.from_key(private_key) if private_key else None
        )
        self._request_access = request_access
        self._chain_id: Optional[int] = None

    @classmethod
    def from_url(cls, url: str, **kwargs) -> Web3Wallet:
        """Connect to a JSON-RPC endpoint over HTTP."""
        return cls(AsyncWeb3(AsyncWeb3.AsyncHTTPProvider(url)), **kwargs)

    @property
    def web3(self) -> AsyncWeb3:
        return self._w3

    @property
    def account(self) -> Optional[LocalAccount]:
        """Local signer, if a private key was given."""
        return self._account

    @property
    def requires_access_grant(self) -> bool:
        return self._request_access

    async def chain_id(self) -> int:
        """Active chain ID (cached after the first call)."""
        if self._chain_id is None:
            self._chain_id = await self._w3.eth.chain_id
        return self._chain_id

    async def request_access(self) -> None:
        try:
            await self._w3.manager.coro_request(ETH_REQUEST_ACCOUNTS, [])
        except Exception as e:
            raise AccessRefusedError(f"Access to accounts refused: {e}") from e

    async def get_accounts(self) -> List[str]:
        if self._account is not None:
            return [self._account.address]
        return list(await self._w3.eth.accounts)

    async def resolve_name(self, name: str) -> Optional[str]:
        chain_id = await self.chain_id()
        if chain_id not in ENS_CHAIN_IDS:
            raise NameServiceUnsupportedError(f"ENS is not supported on network {chain_id}")

        address = await self._w3.ens.address(name)
        logger.debug(f"ENS {name} -> {address}")
        return address
