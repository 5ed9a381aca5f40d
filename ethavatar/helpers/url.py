# ethavatar/helpers/url.py
"""
EthAvatar Helpers: URLs

to_url() posts an avatar as multipart form data with two fields:
    address - resolved Ethereum address
    avatar  - avatar bytes

from_url() downloads raw bytes and sets them as the current account's
avatar.

Updated: 2026-10-17
Version: 0.1.0
"""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator, Optional, TYPE_CHECKING

import httpx

from ..errors import EthAvatarError, ErrorKind

if TYPE_CHECKING:
    from ..client import EthAvatar


logger = logging.getLogger("ethavatar-url")

DEFAULT_TIMEOUT = 30.0


class UrlHelper:
    """Post avatars to URLs and fetch them from URLs."""

    def __init__(
        self,
        client: "EthAvatar",
        http: Optional[httpx.AsyncClient] = None,
        timeout: float = DEFAULT_TIMEOUT,
    ):
        """
        Args:
            client: EthAvatar client
            http: Shared httpx client (not closed by the helper)
            timeout: Request timeout when the helper opens its own client
        """
        self.client = client
        self._http = http
        self._timeout = timeout

    @asynccontextmanager
    async def _session(self) -> AsyncIterator[httpx.AsyncClient]:
        if self._http is not None:
            yield self._http
        else:
            async with httpx.AsyncClient(timeout=self._timeout, follow_redirects=True) as http:
                yield http

    async def to_url(self, url: str, identifier: Optional[str] = None) -> str:
        """
        Post an avatar to a URL.

        Returns:
            Resolved address

        Raises:
            EthAvatarError(POST_URL): No avatar set, or the request failed
        """
        address = await self.client.resolve(identifier)
        avatar = await self.client.get(address)
        if avatar is None:
            raise EthAvatarError(
                ErrorKind.POST_URL,
                f"Avatar of address {address} is not set",
            )

        try:
            async with self._session() as http:
                response = await http.post(
                    url,
                    data={"address": address},
                    files={"avatar": ("avatar", avatar, "application/octet-stream")},
                )
                response.raise_for_status()
        except httpx.HTTPError as e:
            raise EthAvatarError.wrap(ErrorKind.POST_URL, e) from e

        logger.info(f"Avatar of {address} posted to {url}")
        return address

    async def from_url(self, url: str) -> None:
        """
        Set the current account's avatar from a URL.

        Raises:
            EthAvatarError(GET_URL): If the download fails
        """
        try:
            async with self._session() as http:
                response = await http.get(url)
                response.raise_for_status()
                data = response.content
        except httpx.HTTPError as e:
            raise EthAvatarError.wrap(ErrorKind.GET_URL, e) from e

        logger.info(f"Downloaded avatar from {url}: {len(data)} bytes")
        await self.client.set(data)
