# ethavatar/__init__.py
"""
EthAvatar: Avatars for Ethereum Addresses

Publishes an image for an Ethereum address and reads it back. The image
lives on IPFS; the EthAvatar registry contract stores, per address, the
IPFS hash of a small pointer document naming the image hash.

Architecture:
    ┌─────────────────────────────────────────────────────────┐
    │  ethavatar                                              │
    │  ├── client.py      # EthAvatar: get/set/remove/watch   │
    │  ├── resolver.py    # address | ENS name | default      │
    │  ├── codec.py       # pointer document                  │
    │  ├── notifier.py    # DidSetIPFSHash subscriptions      │
    │  ├── wallet/        # web3.py wallet, mock wallet       │
    │  ├── store/         # IPFS store, memory store          │
    │  ├── ledger/        # registry contract, mock ledger    │
    │  ├── helpers/       # file and URL helpers              │
    │  ├── config.py      # environment + ~/.ethavatar        │
    │  └── cli.py         # `ethavatar` command               │
    └─────────────────────────────────────────────────────────┘

Quick Start:
    from ethavatar import EthAvatar

    client = EthAvatar("http://127.0.0.1:8545")
    await client.set(b"...png bytes...")
    avatar = await client.get()
"""

__version__ = "0.1.0"

# =============================================================================
# Errors
# =============================================================================
from .errors import (
    EthAvatarError,
    ErrorKind,
)

# =============================================================================
# Codec
# =============================================================================
from .codec import (
    PointerDocument,
    encode,
    decode,
)

# =============================================================================
# Collaborators
# =============================================================================
from .wallet import (
    WalletConnection,
    Web3Wallet,
    MockWallet,
)

from .store import (
    BlobStore,
    IPFSBlobStore,
    MemoryBlobStore,
)

from .ledger import (
    LedgerTransport,
    ContractLedger,
    MockLedger,
    ChangeEvent,
    EMPTY_HASH,
)

# =============================================================================
# Client
# =============================================================================
from .resolver import IdentityResolver
from .notifier import ChangeNotifier, Subscription
from .client import (
    EthAvatar,
    InitializationSequencer,
    InitState,
)

# =============================================================================
# Helpers
# =============================================================================
from .helpers import FileHelper, UrlHelper
from .config import Settings, ConnectionConfig


__all__ = [
    "__version__",
    # Errors
    "EthAvatarError",
    "ErrorKind",
    # Codec
    "PointerDocument",
    "encode",
    "decode",
    # Collaborators
    "WalletConnection",
    "Web3Wallet",
    "MockWallet",
    "BlobStore",
    "IPFSBlobStore",
    "MemoryBlobStore",
    "LedgerTransport",
    "ContractLedger",
    "MockLedger",
    "ChangeEvent",
    "EMPTY_HASH",
    # Client
    "IdentityResolver",
    "ChangeNotifier",
    "Subscription",
    "EthAvatar",
    "InitializationSequencer",
    "InitState",
    # Helpers
    "FileHelper",
    "UrlHelper",
    "Settings",
    "ConnectionConfig",
]
