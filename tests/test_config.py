# tests/test_config.py
"""Persisted settings and environment configuration."""

import pytest

from ethavatar import Settings, ConnectionConfig, EthAvatarError, ErrorKind
from ethavatar.config import settings_path


def test_missing_file_gives_empty_settings(tmp_path):
    settings = Settings.load(tmp_path / "nothing.json")

    assert settings.to_dict() == {}
    assert settings.get("web3") is None


def test_settings_persist(tmp_path):
    path = tmp_path / "settings.json"
    settings = Settings.load(path)
    settings.set("web3", "http://127.0.0.1:8545")
    settings.set("ipfs", "/ip4/127.0.0.1/tcp/5001")
    settings.save()

    reloaded = Settings.load(path)
    assert reloaded.get("web3") == "http://127.0.0.1:8545"
    assert reloaded.get("ipfs") == "/ip4/127.0.0.1/tcp/5001"

    reloaded.unset("ipfs")
    reloaded.save()
    assert Settings.load(path).to_dict() == {"web3": "http://127.0.0.1:8545"}


def test_unknown_setting_rejected(tmp_path):
    with pytest.raises(KeyError):
        Settings.load(tmp_path / "s.json").set("private_key", "0x00")


@pytest.mark.parametrize("content", ["not json", "[1, 2]"])
def test_invalid_settings_file(tmp_path, content):
    path = tmp_path / "settings.json"
    path.write_text(content)

    with pytest.raises(EthAvatarError) as exc_info:
        Settings.load(path)

    assert exc_info.value.kind == ErrorKind.INVALID_SETTINGS


def test_settings_path_override(tmp_path, monkeypatch):
    monkeypatch.setenv("ETHAVATAR_SETTINGS", str(tmp_path / "custom"))

    assert settings_path() == tmp_path / "custom"


def test_environment_wins_over_settings(tmp_path, monkeypatch):
    settings = Settings(tmp_path / "s.json", {"web3": "http://settings:8545", "ipfs": "/ip4/1.2.3.4/tcp/5001"})
    monkeypatch.setenv("ETHAVATAR_WEB3", "http://env:8545")
    monkeypatch.setenv("ETHAVATAR_PRIVATE_KEY", "0x" + "11" * 32)

    config = ConnectionConfig.from_environment(settings)

    assert config.web3 == "http://env:8545"
    assert config.ipfs == "/ip4/1.2.3.4/tcp/5001"
    assert config.contract is None
    assert config.private_key == "0x" + "11" * 32


def test_web3_provider_uri_fallback(tmp_path, monkeypatch):
    monkeypatch.setenv("WEB3_PROVIDER_URI", "http://fallback:8545")

    config = ConnectionConfig.from_environment(Settings(tmp_path / "s.json"))

    assert config.web3 == "http://fallback:8545"


def test_dotenv_file_is_loaded(tmp_path, monkeypatch):
    # register for restore; load_dotenv writes os.environ directly
    monkeypatch.setenv("ETHAVATAR_CONTRACT", "unset")
    monkeypatch.delenv("ETHAVATAR_CONTRACT")
    (tmp_path / ".env").write_text("ETHAVATAR_CONTRACT=0x" + "d" * 40 + "\n")
    monkeypatch.chdir(tmp_path)

    config = ConnectionConfig.from_environment(Settings(tmp_path / "s.json"))

    assert config.contract == "0x" + "d" * 40
