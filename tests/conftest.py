# tests/conftest.py
"""Shared fixtures: an EthAvatar client wired to in-memory collaborators."""

from __future__ import annotations

import pytest

from ethavatar import EthAvatar, MockWallet, MemoryBlobStore, MockLedger


ALICE = "0x" + "a" * 40
BOB = "0x" + "b" * 40
CAROL = "0x" + "c" * 40


@pytest.fixture
def wallet() -> MockWallet:
    return MockWallet(accounts=[ALICE, BOB], names={"alice.eth": ALICE})


@pytest.fixture
def store() -> MemoryBlobStore:
    return MemoryBlobStore()


@pytest.fixture
def ledger() -> MockLedger:
    return MockLedger()


@pytest.fixture
def client(wallet, store, ledger) -> EthAvatar:
    return EthAvatar(wallet=wallet, store=store, ledger=ledger)


@pytest.fixture(autouse=True)
def isolated_settings(tmp_path, monkeypatch):
    """Keep tests away from ~/.ethavatar and the caller's environment."""
    monkeypatch.setenv("ETHAVATAR_SETTINGS", str(tmp_path / "settings.json"))
    for name in ("ETHAVATAR_WEB3", "WEB3_PROVIDER_URI", "ETHAVATAR_IPFS",
                 "ETHAVATAR_CONTRACT", "ETHAVATAR_PRIVATE_KEY"):
        monkeypatch.delenv(name, raising=False)
    monkeypatch.chdir(tmp_path)
