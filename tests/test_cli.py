# tests/test_cli.py
"""Command line interface."""

import pytest

from ethavatar import cli, EthAvatar, MockWallet, MemoryBlobStore, MockLedger, Settings
from ethavatar.config import settings_path

from conftest import ALICE, BOB


AVATAR = b"\x89PNG\r\n\x1a\n-avatar"


@pytest.fixture
def registry(monkeypatch):
    """Point the CLI at one in-memory registry shared across invocations."""
    store, ledger = MemoryBlobStore(), MockLedger()

    def build_client(args, settings):
        return EthAvatar(wallet=MockWallet(accounts=[ALICE]), store=store, ledger=ledger)

    monkeypatch.setattr(cli, "build_client", build_client)
    return store, ledger


def test_no_command_prints_help(capsys):
    assert cli.main([]) == 0
    assert "usage: ethavatar" in capsys.readouterr().out


def test_config_set_and_unset(capsys):
    assert cli.main(["config", "--web3", "http://127.0.0.1:8545", "--ipfs", "/ip4/127.0.0.1/tcp/5001"]) == 0
    out = capsys.readouterr().out
    assert "Current Web3 connection: http://127.0.0.1:8545" in out
    assert "Current IPFS connection: /ip4/127.0.0.1/tcp/5001" in out
    assert Settings.load(settings_path()).get("web3") == "http://127.0.0.1:8545"

    assert cli.main(["config", "--ipfs"]) == 0
    out = capsys.readouterr().out
    assert "Current IPFS connection: Not set" in out
    assert Settings.load(settings_path()).to_dict() == {"web3": "http://127.0.0.1:8545"}


def test_get_without_web3_connection(capsys, tmp_path):
    assert cli.main(["get", str(tmp_path / "a.png")]) == 1
    assert "Web3 connection not specified!" in capsys.readouterr().err


def test_set_then_get(registry, capsys, tmp_path):
    source = tmp_path / "upload.png"
    source.write_bytes(AVATAR)
    target = tmp_path / "download.png"

    assert cli.main(["set", str(source)]) == 0
    assert f"Avatar of address {ALICE} from file {source} has been uploaded" in capsys.readouterr().out

    assert cli.main(["get", str(target), "--address", ALICE]) == 0
    assert f"Avatar of address {ALICE} has been written to file {target}" in capsys.readouterr().out
    assert target.read_bytes() == AVATAR


def test_remove(registry, capsys, tmp_path):
    source = tmp_path / "upload.png"
    source.write_bytes(AVATAR)

    assert cli.main(["set", str(source)]) == 0
    assert cli.main(["remove"]) == 0
    assert "has been removed" in capsys.readouterr().out

    assert cli.main(["get", str(tmp_path / "gone.png")]) == 1
    assert "is not set" in capsys.readouterr().err


def test_get_unset_avatar_fails(registry, capsys, tmp_path):
    assert cli.main(["get", str(tmp_path / "a.png"), "--address", BOB]) == 1
    assert f"Avatar of address {BOB} is not set" in capsys.readouterr().err


CONTRACT = "0x" + "d" * 40


def test_config_contract_set_and_unset(capsys):
    assert cli.main(["config", "--contract", CONTRACT]) == 0
    assert f"Current contract: {CONTRACT}" in capsys.readouterr().out
    assert Settings.load(settings_path()).get("contract") == CONTRACT

    assert cli.main(["config", "--contract"]) == 0
    assert "Current contract: Not set" in capsys.readouterr().out
    assert Settings.load(settings_path()).get("contract") is None


@pytest.fixture
def client_options(monkeypatch):
    """Capture the keyword arguments build_client passes to EthAvatar."""
    monkeypatch.setattr(cli, "EthAvatar", lambda **kwargs: kwargs)


def test_contract_option_reaches_client(client_options):
    args = cli.build_parser().parse_args(
        ["remove", "--web3", "http://127.0.0.1:8545", "--contract", CONTRACT]
    )

    options = cli.build_client(args, Settings.load(settings_path()))

    assert options["wallet"] == "http://127.0.0.1:8545"
    assert options["contract"] == CONTRACT


def test_contract_falls_back_to_settings(client_options):
    settings = Settings.load(settings_path())
    settings.set("web3", "http://127.0.0.1:8545")
    settings.set("contract", CONTRACT)
    args = cli.build_parser().parse_args(["get", "a.png"])

    options = cli.build_client(args, settings)

    assert options["contract"] == CONTRACT
