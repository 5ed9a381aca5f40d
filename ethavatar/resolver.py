# ethavatar/resolver.py
"""
EthAvatar: Identity Resolver

Turns an identifier into an address, in this order:

    1. Literal address  -> returned unchanged, no network call
    2. Any other string -> ENS lookup through the wallet
    3. None             -> access grant (if the wallet needs one),
                           then the wallet's first account

The access grant is only requested on path 3, so passing an explicit
address never prompts the user.

Updated: 2026-10-17
Version: 0.1.0
"""

from __future__ import annotations

import logging
from typing import Optional

from web3 import Web3

from .errors import EthAvatarError, ErrorKind
from .wallet import WalletConnection, NameServiceUnsupportedError


logger = logging.getLogger("ethavatar-resolver")


def is_address(identifier: Optional[str]) -> bool:
    """Syntactically valid Ethereum address (any case, checksum if mixed)."""
    return bool(identifier) and Web3.is_address(identifier)


def same_address(a: str, b: str) -> bool:
    """Compare two addresses regardless of checksum casing."""
    return a.lower() == b.lower()


class IdentityResolver:
    """Resolve identifiers against a wallet connection."""

    def __init__(self, wallet: WalletConnection):
        self._wallet = wallet

    async def resolve(self, identifier: Optional[str] = None) -> str:
        """
        Resolve an identifier to an address.

        Raises:
            EthAvatarError: UNSUPPORTED_NAME_SERVICE, NAME_NOT_FOUND,
                ACCESS_DENIED or DEFAULT_ADDRESS_NOT_FOUND
        """
        if identifier:
            if is_address(identifier):
                return identifier
            return await self._resolve_name(identifier)

        return await self._default_address()

    async def _resolve_name(self, name: str) -> str:
        try:
            address = await self._wallet.resolve_name(name)
        except NameServiceUnsupportedError as e:
            raise EthAvatarError(
                ErrorKind.UNSUPPORTED_NAME_SERVICE,
                "Provided address invalid and ENS not supported",
                e,
            ) from e
        except Exception as e:
            raise EthAvatarError(
                ErrorKind.NAME_NOT_FOUND,
                "Provided address invalid and ENS domain not found",
                e,
            ) from e

        if not address or not is_address(address):
            raise EthAvatarError(
                ErrorKind.NAME_NOT_FOUND,
                "Provided address invalid and ENS domain not found",
            )

        logger.debug(f"Resolved {name} -> {address}")
        return address

    async def _default_address(self) -> str:
        if self._wallet.requires_access_grant:
            try:
                await self._wallet.request_access()
            except Exception as e:
                raise EthAvatarError(
                    ErrorKind.ACCESS_DENIED,
                    f"Access to wallet accounts denied: {e}",
                    e,
                ) from e

        accounts = await self._wallet.get_accounts()
        if not accounts:
            raise EthAvatarError(
                ErrorKind.DEFAULT_ADDRESS_NOT_FOUND,
                "Default Ethereum address not found",
            )
        return accounts[0]
