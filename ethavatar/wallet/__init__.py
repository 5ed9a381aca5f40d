# ethavatar/wallet/__init__.py
"""
EthAvatar Wallet Layer

Components:
    WalletConnection: Abstract wallet interface
    Web3Wallet: web3.py implementation (node accounts or local key)
    MockWallet: In-memory wallet for testing
"""

from .base import (
    WalletConnection,
    MockWallet,
    WalletError,
    NameServiceUnsupportedError,
    AccessRefusedError,
)

from .provider import (
    Web3Wallet,
    ENS_CHAIN_IDS,
)

__all__ = [
    # Base
    "WalletConnection",
    "MockWallet",
    "WalletError",
    "NameServiceUnsupportedError",
    "AccessRefusedError",
    # web3.py
    "Web3Wallet",
    "ENS_CHAIN_IDS",
]
