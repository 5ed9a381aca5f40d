# ethavatar/ledger/__init__.py
"""
EthAvatar Ledger Layer

On-chain address -> pointer hash registry.

Components:
    LedgerTransport: Registry transport interface
    ContractLedger: web3.py binding to the EthAvatar contract
    MockLedger: In-memory registry for testing
"""

from .base import (
    LedgerTransport,
    EventStream,
    ChangeEvent,
    MockLedger,
    QueueEventStream,
    LedgerError,
    ContractNotFoundError,
    EMPTY_HASH,
    DID_SET_IPFS_HASH,
)

from .contract import (
    ContractLedger,
    FilterEventStream,
    CONTRACT_ABI,
    deployed_address,
)

__all__ = [
    # Base
    "LedgerTransport",
    "EventStream",
    "ChangeEvent",
    "MockLedger",
    "QueueEventStream",
    "LedgerError",
    "ContractNotFoundError",
    "EMPTY_HASH",
    "DID_SET_IPFS_HASH",
    # Contract
    "ContractLedger",
    "FilterEventStream",
    "CONTRACT_ABI",
    "deployed_address",
]
