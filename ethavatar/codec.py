# ethavatar/codec.py
"""
EthAvatar: Pointer Document Codec

The registry contract stores the hash of a small JSON pointer document,
which in turn names the hash of the image blob:

    contract[address] -> data_hash
    ipfs[data_hash]   -> {"imageHash": image_hash}
    ipfs[image_hash]  -> image bytes

Image bytes are never inspected; any byte sequence is a valid avatar.

Updated: 2026-10-17
Version: 0.1.0
"""

from __future__ import annotations

import json
from dataclasses import dataclass
from typing import Tuple

from .errors import EthAvatarError, ErrorKind


IMAGE_HASH_FIELD = "imageHash"


@dataclass(frozen=True)
class PointerDocument:
    """Pointer from the on-chain hash to the image blob."""
    image_hash: str

    def to_dict(self) -> dict:
        return {IMAGE_HASH_FIELD: self.image_hash}

    def to_bytes(self) -> bytes:
        """Serialize as compact UTF-8 JSON."""
        return json.dumps(self.to_dict(), separators=(",", ":")).encode("utf-8")

    @classmethod
    def from_bytes(cls, data: bytes) -> PointerDocument:
        """
        Deserialize a pointer document.

        Raises:
            EthAvatarError(MALFORMED_POINTER): data is not a JSON object
                with a non-empty string `imageHash`
        """
        try:
            obj = json.loads(bytes(data).decode("utf-8"))
        except (UnicodeDecodeError, ValueError) as e:
            raise EthAvatarError(
                ErrorKind.MALFORMED_POINTER,
                f"Avatar data is not a pointer document: {e}",
                e,
            ) from e

        if not isinstance(obj, dict):
            raise EthAvatarError(
                ErrorKind.MALFORMED_POINTER,
                f"Avatar data must be a JSON object, got {type(obj).__name__}",
            )

        image_hash = obj.get(IMAGE_HASH_FIELD)
        if not isinstance(image_hash, str) or not image_hash:
            raise EthAvatarError(
                ErrorKind.MALFORMED_POINTER,
                f"Avatar data has no valid '{IMAGE_HASH_FIELD}' field",
            )

        return cls(image_hash=image_hash)


def encode(image_hash: str) -> Tuple[PointerDocument, bytes]:
    """Build the pointer document for an uploaded image and serialize it."""
    document = PointerDocument(image_hash=image_hash)
    return document, document.to_bytes()


def decode(data: bytes) -> PointerDocument:
    """Parse a stored pointer document."""
    return PointerDocument.from_bytes(data)
