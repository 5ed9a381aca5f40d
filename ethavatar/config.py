# ethavatar/config.py
"""
EthAvatar: Configuration

Two sources, consulted by EthAvatar when a connection is not passed in:

    Environment (also read from .env via python-dotenv):
        ETHAVATAR_WEB3         - JSON-RPC endpoint (fallback: WEB3_PROVIDER_URI)
        ETHAVATAR_IPFS         - IPFS API multiaddr
        ETHAVATAR_CONTRACT     - Registry contract address
        ETHAVATAR_PRIVATE_KEY  - Local signing key (never persisted)
        ETHAVATAR_SETTINGS     - Settings file path (default: ~/.ethavatar)

    Settings file (JSON, managed by `ethavatar config`):
        {"web3": "http://127.0.0.1:8545", "ipfs": "/ip4/127.0.0.1/tcp/5001"}

Environment values win over the settings file.

Updated: 2026-10-17
Version: 0.1.0
"""

from __future__ import annotations

import json
import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, Optional

from dotenv import find_dotenv, load_dotenv

from .errors import EthAvatarError, ErrorKind


logger = logging.getLogger("ethavatar-config")


# =============================================================================
# Constants
# =============================================================================

SETTINGS_FILENAME = ".ethavatar"

ENV_WEB3 = "ETHAVATAR_WEB3"
ENV_WEB3_FALLBACK = "WEB3_PROVIDER_URI"
ENV_IPFS = "ETHAVATAR_IPFS"
ENV_CONTRACT = "ETHAVATAR_CONTRACT"
ENV_PRIVATE_KEY = "ETHAVATAR_PRIVATE_KEY"
ENV_SETTINGS = "ETHAVATAR_SETTINGS"

SETTINGS_KEYS = ("web3", "ipfs", "contract")


def load_env() -> None:
    """Load .env from the working directory. Safe to call multiple times."""
    load_dotenv(find_dotenv(usecwd=True))


def _env(name: str) -> Optional[str]:
    value = (os.getenv(name) or "").strip()
    return value or None


def settings_path() -> Path:
    """Settings file location."""
    override = _env(ENV_SETTINGS)
    if override:
        return Path(override).expanduser()
    return Path.home() / SETTINGS_FILENAME


# =============================================================================
# Persisted Settings
# =============================================================================

class Settings:
    """User settings stored as a small JSON file."""

    def __init__(self, path: Optional[Path] = None, values: Optional[Dict[str, str]] = None):
        self.path = Path(path) if path is not None else settings_path()
        self._values: Dict[str, str] = dict(values or {})

    @classmethod
    def load(cls, path: Optional[Path] = None) -> Settings:
        """
        Load settings; a missing file gives empty settings.

        Raises:
            EthAvatarError(INVALID_SETTINGS): File exists but is not a JSON object
        """
        settings = cls(path)
        if not settings.path.exists():
            return settings

        try:
            with open(settings.path) as f:
                data = json.load(f)
        except (OSError, ValueError) as e:
            raise EthAvatarError(
                ErrorKind.INVALID_SETTINGS,
                f"Cannot read settings {settings.path}: {e}",
                e,
            ) from e

        if not isinstance(data, dict):
            raise EthAvatarError(
                ErrorKind.INVALID_SETTINGS,
                f"Settings {settings.path} must be a JSON object",
            )

        settings._values = {k: str(v) for k, v in data.items() if k in SETTINGS_KEYS}
        return settings

    def save(self) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        with open(self.path, "w") as f:
            json.dump(self._values, f, indent=2)
        logger.debug(f"Settings saved: {self.path}")

    def get(self, key: str) -> Optional[str]:
        return self._values.get(key)

    def set(self, key: str, value: str) -> None:
        if key not in SETTINGS_KEYS:
            raise KeyError(f"Unknown setting: {key}")
        self._values[key] = value

    def unset(self, key: str) -> None:
        self._values.pop(key, None)

    def to_dict(self) -> Dict[str, str]:
        return dict(self._values)


# =============================================================================
# Connection Config
# =============================================================================

@dataclass
class ConnectionConfig:
    """Connection values resolved from environment and settings."""
    web3: Optional[str] = None
    ipfs: Optional[str] = None
    contract: Optional[str] = None
    private_key: Optional[str] = None

    @classmethod
    def from_environment(cls, settings: Optional[Settings] = None) -> ConnectionConfig:
        load_env()
        if settings is None:
            settings = Settings.load()

        return cls(
            web3=_env(ENV_WEB3) or _env(ENV_WEB3_FALLBACK) or settings.get("web3"),
            ipfs=_env(ENV_IPFS) or settings.get("ipfs"),
            contract=_env(ENV_CONTRACT) or settings.get("contract"),
            private_key=_env(ENV_PRIVATE_KEY),
        )
