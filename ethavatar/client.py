# ethavatar/client.py
"""
EthAvatar: Client

Publishes and retrieves avatars of Ethereum addresses.

Storage layout (two hops):
    contract.getIPFSHash(address) -> data_hash
    ipfs.cat(data_hash)           -> {"imageHash": image_hash}
    ipfs.cat(image_hash)          -> image bytes

Every operation first awaits one shared initialization task that connects
the wallet, the IPFS store and the registry contract. The task runs once;
concurrent callers join it, and a failure is terminal for the client.

Usage:
    client = EthAvatar("http://127.0.0.1:8545")

    await client.set(open("avatar.png", "rb").read())
    avatar = await client.get()                  # own avatar
    avatar = await client.get("vitalik.eth")     # ENS name
    await client.remove()

    sub = client.watch(lambda event: print(event.hash))
    await sub.ready()

Updated: 2026-10-17
Version: 0.1.0
"""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass
from enum import Enum, auto
from typing import Awaitable, Callable, Generic, Optional, TypeVar, Union

from web3 import AsyncWeb3

from . import codec
from .config import ConnectionConfig
from .errors import EthAvatarError, ErrorKind
from .ledger import LedgerTransport, ContractLedger, EMPTY_HASH
from .notifier import ChangeNotifier, ChangeCallback, Subscription, DEFAULT_RETRY_DELAY
from .resolver import IdentityResolver
from .store import BlobStore, IPFSBlobStore, DEFAULT_IPFS_ADDR
from .wallet import WalletConnection, Web3Wallet


logger = logging.getLogger("ethavatar-client")

T = TypeVar("T")


# =============================================================================
# Initialization Sequencer
# =============================================================================

class InitState(Enum):
    """Initialization state (moves forward only)."""
    NOT_STARTED = auto()
    PENDING = auto()
    SUCCEEDED = auto()
    FAILED = auto()


class InitializationSequencer(Generic[T]):
    """
    Lazily started, once-settled async setup.

    The first wait() starts the setup task; every later wait() awaits the
    same task. Once settled, the result (or the error) is returned to all
    callers for the life of the sequencer.
    """

    def __init__(self, setup: Callable[[], Awaitable[T]]):
        self._setup = setup
        self._state = InitState.NOT_STARTED
        self._task: Optional[asyncio.Task] = None
        self._error: Optional[BaseException] = None

    @property
    def state(self) -> InitState:
        return self._state

    @property
    def error(self) -> Optional[BaseException]:
        return self._error

    async def wait(self) -> T:
        if self._task is None:
            self._state = InitState.PENDING
            self._task = asyncio.get_running_loop().create_task(self._run())
        # A cancelled caller must not cancel the shared task
        return await asyncio.shield(self._task)

    async def _run(self) -> T:
        try:
            result = await self._setup()
        except BaseException as e:
            self._state = InitState.FAILED
            self._error = e
            raise
        self._state = InitState.SUCCEEDED
        return result


@dataclass
class ClientContext:
    """Connections established by initialization."""
    wallet: WalletConnection
    store: BlobStore
    ledger: LedgerTransport
    resolver: IdentityResolver


# =============================================================================
# EthAvatar
# =============================================================================

WalletArg = Union[WalletConnection, AsyncWeb3, str, None]
StoreArg = Union[BlobStore, str, None]


class EthAvatar:
    """Client for the EthAvatar registry."""

    def __init__(
        self,
        wallet: WalletArg = None,
        store: StoreArg = None,
        contract: Optional[str] = None,
        ledger: Optional[LedgerTransport] = None,
        auto_detect_wallet: bool = True,
        private_key: Optional[str] = None,
        request_access: bool = False,
        config: Optional[ConnectionConfig] = None,
    ):
        """
        Args:
            wallet: WalletConnection, AsyncWeb3 instance or JSON-RPC URL
                (default: detected from environment and settings)
            store: BlobStore or IPFS API multiaddr (default: Infura IPFS)
            contract: Registry contract address (default: deployed address)
            ledger: Registry transport (overrides `contract`)
            auto_detect_wallet: Look up a wallet from environment and
                settings when `wallet` is None
            private_key: Local signing key for a web3 wallet
            request_access: Request account access before using the
                default account (web3 wallets only)
            config: Connection values (default: read from environment
                and settings on first use)
        """
        self._wallet_arg = wallet
        self._store_arg = store
        self._contract = contract
        self._ledger_arg = ledger
        self._auto_detect_wallet = auto_detect_wallet
        self._private_key = private_key
        self._request_access = request_access
        self._config = config

        self._sequencer: InitializationSequencer[ClientContext] = InitializationSequencer(
            self._initialize
        )

    # =========================================================================
    # Initialization
    # =========================================================================

    @property
    def init_state(self) -> InitState:
        return self._sequencer.state

    async def initialized(self) -> ClientContext:
        """Wait for (and start, if needed) initialization."""
        return await self._sequencer.wait()

    def _connection_config(self) -> ConnectionConfig:
        if self._config is None:
            self._config = ConnectionConfig.from_environment()
        return self._config

    async def _initialize(self) -> ClientContext:
        wallet = self._build_wallet()
        store = self._build_store()
        ledger = await self._build_ledger(wallet)

        logger.info(f"EthAvatar initialized ({type(wallet).__name__}, "
                    f"{type(store).__name__}, {type(ledger).__name__})")

        return ClientContext(
            wallet=wallet,
            store=store,
            ledger=ledger,
            resolver=IdentityResolver(wallet),
        )

    def _web3_wallet(self, w3: AsyncWeb3) -> Web3Wallet:
        private_key = self._private_key or self._connection_config().private_key
        return Web3Wallet(w3, private_key=private_key, request_access=self._request_access)

    def _build_wallet(self) -> WalletConnection:
        wallet = self._wallet_arg

        if isinstance(wallet, WalletConnection):
            return wallet
        if isinstance(wallet, AsyncWeb3):
            return self._web3_wallet(wallet)
        if isinstance(wallet, str):
            return self._web3_wallet(AsyncWeb3(AsyncWeb3.AsyncHTTPProvider(wallet)))
        if wallet is not None:
            raise EthAvatarError(
                ErrorKind.WALLET_PROVIDER_NOT_FOUND,
                f"Unsupported wallet connection: {type(wallet).__name__}",
            )

        url = self._connection_config().web3 if self._auto_detect_wallet else None
        if not url:
            raise EthAvatarError(
                ErrorKind.WALLET_PROVIDER_NOT_FOUND,
                "Default Web3 provider not found",
            )

        logger.info(f"Using Web3 provider: {url}")
        return self._web3_wallet(AsyncWeb3(AsyncWeb3.AsyncHTTPProvider(url)))

    def _build_store(self) -> BlobStore:
        store = self._store_arg
        if isinstance(store, BlobStore):
            return store
        if isinstance(store, str):
            return IPFSBlobStore(store)
        return IPFSBlobStore(self._connection_config().ipfs or DEFAULT_IPFS_ADDR)

    async def _build_ledger(self, wallet: WalletConnection) -> LedgerTransport:
        if self._ledger_arg is not None:
            return self._ledger_arg

        w3 = wallet.web3
        if w3 is None:
            raise EthAvatarError(
                ErrorKind.CONTRACT_NOT_FOUND,
                "Wallet has no Web3 connection to bind the registry contract",
            )

        account = wallet.account if isinstance(wallet, Web3Wallet) else None
        address = self._contract or self._connection_config().contract

        try:
            return await ContractLedger.for_chain(w3, address, account=account)
        except Exception as e:
            raise EthAvatarError.wrap(ErrorKind.CONTRACT_NOT_FOUND, e) from e

    # =========================================================================
    # Resolution
    # =========================================================================

    async def resolve(self, identifier: Optional[str] = None) -> str:
        """
        Resolve an address, ENS name, or (None) the wallet's default account.
        """
        ctx = await self.initialized()
        return await ctx.resolver.resolve(identifier)

    # =========================================================================
    # Avatar Operations
    # =========================================================================

    async def get(self, identifier: Optional[str] = None) -> Optional[bytes]:
        """
        Get the avatar of an address.

        Args:
            identifier: Address or ENS name (default: current account)

        Returns:
            Avatar bytes, or None if no avatar is set

        Raises:
            EthAvatarError: MALFORMED_POINTER if the stored document is
                invalid, GET_AVATAR for other lookup failures
        """
        ctx = await self.initialized()
        address = await ctx.resolver.resolve(identifier)

        try:
            data_hash = await ctx.ledger.read_hash(address)
            if data_hash == EMPTY_HASH:
                logger.info(f"No avatar set for {address}")
                return None

            document = codec.decode(await ctx.store.get(data_hash))
            image = await ctx.store.get(document.image_hash)
        except EthAvatarError as e:
            if e.kind == ErrorKind.MALFORMED_POINTER:
                raise
            raise EthAvatarError.wrap(ErrorKind.GET_AVATAR, e) from e
        except Exception as e:
            raise EthAvatarError.wrap(ErrorKind.GET_AVATAR, e) from e

        logger.info(f"Got avatar of {address}: {len(image)} bytes")
        return bytes(image)

    async def set(self, data: bytes) -> None:
        """
        Set the avatar of the current account.

        Raises:
            EthAvatarError(SET_AVATAR): If upload or the contract write fails
        """
        ctx = await self.initialized()
        address = await ctx.resolver.resolve()

        try:
            image_hash = await ctx.store.put(bytes(data))
            _, pointer = codec.encode(image_hash)
            data_hash = await ctx.store.put(pointer)
            await ctx.ledger.write_hash(data_hash, signed_by=address)
        except Exception as e:
            raise EthAvatarError.wrap(ErrorKind.SET_AVATAR, e) from e

        logger.info(f"Set avatar of {address}: {data_hash}")

    async def remove(self) -> None:
        """
        Remove the avatar of the current account.

        Raises:
            EthAvatarError(REMOVE_AVATAR): If the contract write fails
        """
        ctx = await self.initialized()
        address = await ctx.resolver.resolve()

        try:
            await ctx.ledger.write_hash(EMPTY_HASH, signed_by=address)
        except Exception as e:
            raise EthAvatarError.wrap(ErrorKind.REMOVE_AVATAR, e) from e

        logger.info(f"Removed avatar of {address}")

    # =========================================================================
    # Change Notification
    # =========================================================================

    def watch(
        self,
        callback: ChangeCallback,
        identifier: Optional[str] = None,
        retry_delay: float = DEFAULT_RETRY_DELAY,
    ) -> Subscription:
        """
        Watch avatar changes of an address.

        The callback receives each ChangeEvent for the watched address, in
        order. If the event stream fails, the watch logs the error and
        subscribes again after `retry_delay` seconds.

        Args:
            callback: Function or coroutine function taking a ChangeEvent
            identifier: Address or ENS name (default: current account)
            retry_delay: Seconds to wait before subscribing again

        Returns:
            Subscription (await .ready(), call .unsubscribe())

        Raises:
            RuntimeError: If no event loop is running
        """
        async def setup():
            ctx = await self.initialized()
            return await ChangeNotifier(ctx.ledger, ctx.resolver).open(identifier)

        return Subscription(setup, callback, retry_delay=retry_delay)
