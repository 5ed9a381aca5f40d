# ethavatar/wallet/base.py
"""
EthAvatar Wallet: Abstract Connection Interface

The client needs very little from a wallet:
    - the ordered list of accounts it controls (first one is the default)
    - ENS name resolution on the active network
    - an optional access-grant step (EIP-1102 style) before accounts
      are exposed

Implementations:
    - Web3Wallet: web3.py AsyncWeb3 connection (see provider.py)
    - MockWallet: in-memory wallet for testing

Updated: 2026-10-17
Version: 0.1.0
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any, Dict, List, Optional


# =============================================================================
# Exceptions
# =============================================================================

class WalletError(Exception):
    """Base wallet connection error."""
    pass


class NameServiceUnsupportedError(WalletError):
    """Active network has no ENS registry."""
    pass


class AccessRefusedError(WalletError):
    """User (or provider) refused the access grant."""
    pass


# =============================================================================
# Abstract Base Class
# =============================================================================

class WalletConnection(ABC):
    """
    Abstract wallet connection.

    resolve_name() returns None when the name has no address and raises
    NameServiceUnsupportedError when the network cannot resolve names.
    """

    @property
    def requires_access_grant(self) -> bool:
        """Whether request_access() must run before get_accounts()."""
        return False

    @property
    def web3(self) -> Optional[Any]:
        """Underlying AsyncWeb3 handle, if the wallet has one."""
        return None

    async def request_access(self) -> None:
        """
        Ask the wallet to expose its accounts.

        Raises:
            AccessRefusedError: If the grant is refused
        """
        return None

    @abstractmethod
    async def get_accounts(self) -> List[str]:
        """Get accounts, default account first."""
        pass

    @abstractmethod
    async def resolve_name(self, name: str) -> Optional[str]:
        """Resolve a human-readable name to an address."""
        pass


# =============================================================================
# Mock Wallet (for testing)
# =============================================================================

class MockWallet(WalletConnection):
    """
    In-memory wallet for testing.

    Records every call in `calls` so tests can check which paths ran.
    """

    def __init__(
        self,
        accounts: Optional[List[str]] = None,
        names: Optional[Dict[str, str]] = None,
        name_service: bool = True,
        requires_access_grant: bool = False,
        auto_approve: bool = True,
    ):
        self._accounts = list(accounts) if accounts is not None else ["0x" + "1" * 40]
        self._names = dict(names or {})
        self._name_service = name_service
        self._requires_access_grant = requires_access_grant
        self._auto_approve = auto_approve
        self.calls: List[str] = []

    @property
    def requires_access_grant(self) -> bool:
        return self._requires_access_grant

    async def request_access(self) -> None:
        self.calls.append("request_access")
        if not self._auto_approve:
            raise AccessRefusedError("User rejected the request")

    async def get_accounts(self) -> List[str]:
        self.calls.append("get_accounts")
        return self._accounts.copy()

    async def resolve_name(self, name: str) -> Optional[str]:
        self.calls.append("resolve_name")
        if not self._name_service:
            raise NameServiceUnsupportedError("ENS is not supported on network mock")
        return self._names.get(name)

    def set_accounts(self, accounts: List[str]) -> None:
        """Replace the account list."""
        self._accounts = list(accounts)
