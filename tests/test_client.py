# tests/test_client.py
"""EthAvatar get/set/remove and initialization."""

import asyncio
import os

import pytest

from ethavatar import (
    EthAvatar,
    MockWallet,
    MemoryBlobStore,
    MockLedger,
    ConnectionConfig,
    EthAvatarError,
    ErrorKind,
    InitState,
    EMPTY_HASH,
    decode,
)
from ethavatar.ledger import LedgerError
from ethavatar.store import BlobNotFoundError

from conftest import ALICE, BOB


AVATAR = bytes([0x00, 0x01, 0x03, 0x04, 0x05, 0x06, 0x07, 0x08, 0x09])


# =============================================================================
# Round trip
# =============================================================================

@pytest.mark.parametrize("data", [AVATAR, b"", os.urandom(4096)])
def test_set_then_get_returns_same_bytes(client, data):
    async def scenario():
        await client.set(data)
        return await client.get()

    assert asyncio.run(scenario()) == data


def test_set_writes_pointer_hash_not_image_hash(client, store, ledger):
    asyncio.run(client.set(AVATAR))

    data_hash = asyncio.run(ledger.read_hash(ALICE))
    image_hash = decode(asyncio.run(store.get(data_hash))).image_hash

    assert asyncio.run(store.get(image_hash)) == AVATAR
    assert data_hash != image_hash
    assert len(store) == 2


def test_get_by_address_and_name(client, ledger):
    async def scenario():
        await client.set(AVATAR)
        return await client.get(ALICE), await client.get("alice.eth")

    assert asyncio.run(scenario()) == (AVATAR, AVATAR)


def test_set_signs_with_default_account(client, ledger):
    asyncio.run(client.set(AVATAR))

    assert [w.hash_address for w in ledger.writes] == [ALICE]


# =============================================================================
# Absent avatars and removal
# =============================================================================

def test_get_never_written_is_absent(client):
    assert asyncio.run(client.get(BOB)) is None


def test_remove_then_get_is_absent(client, ledger):
    async def scenario():
        await client.set(AVATAR)
        await client.remove()
        return await client.get()

    assert asyncio.run(scenario()) is None
    assert ledger.writes[-1].hash == EMPTY_HASH


def test_remove_twice(client):
    async def scenario():
        await client.set(AVATAR)
        await client.remove()
        await client.remove()
        return await client.get()

    assert asyncio.run(scenario()) is None


def test_set_replaces_previous_avatar(client):
    async def scenario():
        await client.set(b"first")
        await client.set(b"second")
        return await client.get()

    assert asyncio.run(scenario()) == b"second"


# =============================================================================
# Failures
# =============================================================================

def test_malformed_pointer(client, store, ledger):
    async def scenario():
        junk_hash = await store.put(b"\x89PNG not a pointer")
        await ledger.write_hash(junk_hash, signed_by=BOB)
        await client.get(BOB)

    with pytest.raises(EthAvatarError) as exc_info:
        asyncio.run(scenario())

    assert exc_info.value.kind == ErrorKind.MALFORMED_POINTER


def test_missing_image_blob_is_get_error(client, store, ledger):
    async def scenario():
        data_hash = await store.put(b'{"imageHash":"missing"}')
        await ledger.write_hash(data_hash, signed_by=BOB)
        await client.get(BOB)

    with pytest.raises(EthAvatarError) as exc_info:
        asyncio.run(scenario())

    assert exc_info.value.kind == ErrorKind.GET_AVATAR
    assert isinstance(exc_info.value.cause, BlobNotFoundError)


class FailingLedger(MockLedger):
    async def write_hash(self, value, signed_by):
        raise LedgerError("Transaction failed: 0xdead")


def test_set_failure_is_wrapped(wallet, store):
    client = EthAvatar(wallet=wallet, store=store, ledger=FailingLedger())

    with pytest.raises(EthAvatarError) as exc_info:
        asyncio.run(client.set(AVATAR))

    assert exc_info.value.kind == ErrorKind.SET_AVATAR
    assert isinstance(exc_info.value.cause, LedgerError)
    assert isinstance(exc_info.value.__cause__, LedgerError)


def test_remove_failure_is_wrapped(wallet, store):
    client = EthAvatar(wallet=wallet, store=store, ledger=FailingLedger())

    with pytest.raises(EthAvatarError) as exc_info:
        asyncio.run(client.remove())

    assert exc_info.value.kind == ErrorKind.REMOVE_AVATAR


def test_resolution_errors_keep_their_kind(store, ledger):
    client = EthAvatar(wallet=MockWallet(accounts=[]), store=store, ledger=ledger)

    with pytest.raises(EthAvatarError) as exc_info:
        asyncio.run(client.set(AVATAR))

    assert exc_info.value.kind == ErrorKind.DEFAULT_ADDRESS_NOT_FOUND
    assert len(store) == 0


# =============================================================================
# Initialization
# =============================================================================

class CountingClient(EthAvatar):
    setups = 0

    async def _initialize(self):
        CountingClient.setups += 1
        await asyncio.sleep(0.01)
        return await super()._initialize()


def test_initialization_runs_once_for_concurrent_calls(wallet, store, ledger):
    CountingClient.setups = 0
    client = CountingClient(wallet=wallet, store=store, ledger=ledger)
    assert client.init_state == InitState.NOT_STARTED

    async def scenario():
        return await asyncio.gather(
            client.get(), client.resolve(), client.resolve(BOB), client.get(BOB),
        )

    assert asyncio.run(scenario()) == [None, ALICE, BOB, None]
    assert CountingClient.setups == 1
    assert client.init_state == InitState.SUCCEEDED


def test_wallet_not_found_without_auto_detect(store, ledger):
    client = EthAvatar(store=store, ledger=ledger, auto_detect_wallet=False)

    with pytest.raises(EthAvatarError) as exc_info:
        asyncio.run(client.get(ALICE))

    assert exc_info.value.kind == ErrorKind.WALLET_PROVIDER_NOT_FOUND
    assert client.init_state == InitState.FAILED


def test_wallet_not_found_when_nothing_configured(store, ledger):
    client = EthAvatar(store=store, ledger=ledger, config=ConnectionConfig())

    with pytest.raises(EthAvatarError) as exc_info:
        asyncio.run(client.get(ALICE))

    assert exc_info.value.kind == ErrorKind.WALLET_PROVIDER_NOT_FOUND


def test_failed_initialization_is_terminal(store, ledger):
    client = EthAvatar(store=store, ledger=ledger, auto_detect_wallet=False)

    async def scenario():
        kinds = []
        for _ in range(2):
            try:
                await client.resolve(ALICE)
            except EthAvatarError as e:
                kinds.append(e.kind)
        return kinds

    assert asyncio.run(scenario()) == [ErrorKind.WALLET_PROVIDER_NOT_FOUND] * 2
    assert client.init_state == InitState.FAILED


def test_contract_not_found_without_web3(wallet, store):
    client = EthAvatar(wallet=wallet, store=store)

    with pytest.raises(EthAvatarError) as exc_info:
        asyncio.run(client.get(ALICE))

    assert exc_info.value.kind == ErrorKind.CONTRACT_NOT_FOUND
