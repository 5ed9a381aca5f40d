# ethavatar/helpers/file.py
"""
EthAvatar Helpers: Files

    helper = FileHelper(client)
    await helper.to_file("avatar.png", "vitalik.eth")
    await helper.from_file("avatar.png")

Updated: 2026-10-17
Version: 0.1.0
"""

from __future__ import annotations

import asyncio
import logging
from pathlib import Path
from typing import Optional, Union, TYPE_CHECKING

from ..errors import EthAvatarError, ErrorKind

if TYPE_CHECKING:
    from ..client import EthAvatar


logger = logging.getLogger("ethavatar-file")

PathLike = Union[str, Path]


class FileHelper:
    """Download avatars to files and upload them from files."""

    def __init__(self, client: "EthAvatar"):
        self.client = client

    async def to_file(self, filename: PathLike, identifier: Optional[str] = None) -> str:
        """
        Download an avatar to a file.

        Returns:
            Resolved address

        Raises:
            EthAvatarError(DOWNLOAD_FILE): No avatar set, or write failed
        """
        address = await self.client.resolve(identifier)
        avatar = await self.client.get(address)
        if avatar is None:
            raise EthAvatarError(
                ErrorKind.DOWNLOAD_FILE,
                f"Avatar of address {address} is not set",
            )

        try:
            await asyncio.to_thread(Path(filename).write_bytes, avatar)
        except OSError as e:
            raise EthAvatarError.wrap(ErrorKind.DOWNLOAD_FILE, e) from e

        logger.info(f"Avatar of {address} written to {filename}")
        return address

    async def from_file(self, filename: PathLike) -> None:
        """
        Upload an avatar from a file.

        Raises:
            EthAvatarError(UPLOAD_FILE): If the file cannot be read
        """
        try:
            data = await asyncio.to_thread(Path(filename).read_bytes)
        except OSError as e:
            raise EthAvatarError.wrap(ErrorKind.UPLOAD_FILE, e) from e

        await self.client.set(data)
