# ethavatar/errors.py
"""
EthAvatar: Error Kinds

Every failure surfaced by the client is an EthAvatarError tagged with an
ErrorKind. The original exception (if any) is kept as `cause` and chained
with `raise ... from`, so both library consumers and the CLI can inspect it.

Usage:
    from ethavatar.errors import EthAvatarError, ErrorKind

    try:
        avatar = await client.get("vitalik.eth")
    except EthAvatarError as e:
        if e.kind.is_invalid_address:
            print("Bad address or ENS name")
        elif e.kind == ErrorKind.GET_AVATAR:
            print(f"Lookup failed: {e.cause}")

Updated: 2026-10-17
Version: 0.1.0
"""

from __future__ import annotations

from enum import Enum
from typing import Optional


# =============================================================================
# Error Kinds
# =============================================================================

class ErrorKind(Enum):
    """Tag carried by every EthAvatarError."""
    # Initialization
    WALLET_PROVIDER_NOT_FOUND = "wallet_provider_not_found"
    CONTRACT_NOT_FOUND = "contract_not_found"

    # Address resolution
    ACCESS_DENIED = "access_denied"
    UNSUPPORTED_NAME_SERVICE = "unsupported_name_service"
    NAME_NOT_FOUND = "name_not_found"
    DEFAULT_ADDRESS_NOT_FOUND = "default_address_not_found"

    # Avatar protocol
    MALFORMED_POINTER = "malformed_pointer"
    GET_AVATAR = "get_avatar"
    SET_AVATAR = "set_avatar"
    REMOVE_AVATAR = "remove_avatar"

    # Helpers
    DOWNLOAD_FILE = "download_file"
    UPLOAD_FILE = "upload_file"
    GET_URL = "get_url"
    POST_URL = "post_url"

    # Settings
    INVALID_SETTINGS = "invalid_settings"

    @property
    def is_invalid_address(self) -> bool:
        """Identifier was neither a literal address nor a resolvable name."""
        return self in (ErrorKind.UNSUPPORTED_NAME_SERVICE, ErrorKind.NAME_NOT_FOUND)


# =============================================================================
# Exception
# =============================================================================

class EthAvatarError(Exception):
    """
    Kinded EthAvatar failure.

    Attributes:
        kind: ErrorKind tag
        message: Human readable description
        cause: Underlying exception (None if the failure originated here)
    """

    def __init__(
        self,
        kind: ErrorKind,
        message: str,
        cause: Optional[BaseException] = None,
    ):
        self.kind = kind
        self.message = message
        self.cause = cause
        super().__init__(message)

    def __repr__(self) -> str:
        return f"EthAvatarError({self.kind.name}, {self.message!r})"

    @classmethod
    def wrap(cls, kind: ErrorKind, cause: BaseException) -> EthAvatarError:
        """Wrap a collaborator failure, keeping its message."""
        return cls(kind, str(cause) or type(cause).__name__, cause)
