# ethavatar/notifier.py
"""
EthAvatar: Change Notifier

Watches the registry's DidSetIPFSHash events and calls back for the ones
that concern one address.

    sub = client.watch(on_change, "0x...")
    await sub.ready()        # subscription established
    ...
    sub.unsubscribe()

Callbacks run in stream order, one at a time; coroutine callbacks are
awaited before the next event is handled. Events emitted before ready()
resolves are not delivered. A failed event stream is logged and opened
again after a delay.

Updated: 2026-10-17
Version: 0.1.0
"""

from __future__ import annotations

import asyncio
import inspect
import logging
from typing import Any, Awaitable, Callable, Optional, Tuple

from .ledger import LedgerTransport, EventStream, ChangeEvent, DID_SET_IPFS_HASH
from .resolver import IdentityResolver, same_address


logger = logging.getLogger("ethavatar-notifier")


ChangeCallback = Callable[[ChangeEvent], Any]
SubscriptionSetup = Callable[[], Awaitable[Tuple[str, EventStream]]]

DEFAULT_RETRY_DELAY = 2.0  # seconds


# =============================================================================
# ChangeNotifier
# =============================================================================

class ChangeNotifier:
    """Opens filtered event streams on a ledger."""

    def __init__(self, ledger: LedgerTransport, resolver: IdentityResolver):
        self._ledger = ledger
        self._resolver = resolver

    async def open(self, identifier: Optional[str] = None) -> Tuple[str, EventStream]:
        """Resolve the watched address and start an event stream."""
        address = await self._resolver.resolve(identifier)

        stream = self._ledger.subscribe(DID_SET_IPFS_HASH)
        try:
            await stream.start()
        except BaseException:
            await stream.aclose()
            raise

        logger.info(f"Watching avatar changes for {address}")
        return address, stream


# =============================================================================
# Subscription
# =============================================================================

class Subscription:
    """
    Running watch.

    Created by EthAvatar.watch(); must be started inside a running event
    loop. Lives until unsubscribe() or until the loop shuts down. If the
    event stream fails, the error is logged and the watch subscribes again
    after `retry_delay` seconds, keeping the address it was established
    with.
    """

    def __init__(
        self,
        setup: SubscriptionSetup,
        callback: ChangeCallback,
        retry_delay: float = DEFAULT_RETRY_DELAY,
    ):
        try:
            loop = asyncio.get_running_loop()
        except RuntimeError as e:
            raise RuntimeError("watch() must be called from a running event loop") from e

        self._setup = setup
        self._callback = callback
        self._retry_delay = retry_delay
        self._address: Optional[str] = None
        self._delivered = 0
        self._reconnects = 0
        self._last_error: Optional[Exception] = None

        self._ready: asyncio.Future = loop.create_future()
        self._task = loop.create_task(self._run())

    @property
    def address(self) -> Optional[str]:
        """Watched address (None until ready)."""
        return self._address

    @property
    def delivered(self) -> int:
        """Number of callbacks invoked so far."""
        return self._delivered

    @property
    def reconnects(self) -> int:
        """Number of times the event stream was opened again after a failure."""
        return self._reconnects

    @property
    def last_error(self) -> Optional[Exception]:
        """Most recent event stream failure, if any."""
        return self._last_error

    @property
    def active(self) -> bool:
        return not self._task.done()

    async def ready(self) -> str:
        """
        Wait until the subscription is established.

        Returns:
            Watched address

        Raises:
            EthAvatarError: If initialization or resolution failed
        """
        return await asyncio.shield(self._ready)

    def unsubscribe(self) -> None:
        """Stop watching. Safe to call more than once."""
        if not self._task.done():
            self._task.cancel()
        if not self._ready.done():
            self._ready.cancel()

    async def wait_closed(self) -> None:
        """Wait for the watch task to finish after unsubscribe()."""
        try:
            await self._task
        except asyncio.CancelledError:
            pass

    async def _run(self) -> None:
        try:
            address, stream = await self._setup()
        except asyncio.CancelledError:
            raise
        except Exception as e:
            logger.error(f"Watch setup failed: {e}")
            if not self._ready.done():
                self._ready.set_exception(e)
                self._ready.exception()  # reported through ready()
            return

        self._address = address
        if not self._ready.done():
            self._ready.set_result(address)

        while True:
            try:
                await self._consume(stream)
                return
            except Exception as e:
                self._failed(e)
            stream = await self._reopen()

    async def _consume(self, stream: EventStream) -> None:
        try:
            async for event in stream:
                if not same_address(event.hash_address, self._address):
                    continue
                await self._deliver(event)
        finally:
            await stream.aclose()

    async def _reopen(self) -> EventStream:
        while True:
            await asyncio.sleep(self._retry_delay)
            try:
                _, stream = await self._setup()
            except Exception as e:
                self._failed(e)
                continue

            self._reconnects += 1
            logger.info(f"Watch for {self._address} subscribed again")
            return stream

    def _failed(self, error: Exception) -> None:
        self._last_error = error
        logger.error(f"Watch stream for {self._address} failed: {error!r}; "
                     f"retrying in {self._retry_delay}s")

    async def _deliver(self, event: ChangeEvent) -> None:
        self._delivered += 1
        try:
            result = self._callback(event)
            if inspect.isawaitable(result):
                await result
        except Exception as e:
            logger.error(f"Watch callback failed for {event.hash_address}: {e}")
