# tests/test_codec.py
"""Pointer document encoding and decoding."""

import json

import pytest

from ethavatar import PointerDocument, EthAvatarError, ErrorKind, encode, decode


def test_encode_writes_image_hash_field():
    document, data = encode("QmImage")

    assert document == PointerDocument(image_hash="QmImage")
    assert json.loads(data.decode("utf-8")) == {"imageHash": "QmImage"}


def test_decode_reads_original_client_format():
    # Written by the JavaScript client: JSON.stringify({imageHash})
    document = decode(b'{"imageHash":"QmXoypizjW3WknFiJnKLwHCnL72vedxjQkDDP1mXWo6uco"}')

    assert document.image_hash == "QmXoypizjW3WknFiJnKLwHCnL72vedxjQkDDP1mXWo6uco"


def test_decode_ignores_extra_fields():
    document = decode(b'{"imageHash": "QmImage", "mimeType": "image/png"}')

    assert document.image_hash == "QmImage"


@pytest.mark.parametrize("data", [
    b"\x89PNG\r\n\x1a\n\x00\x00",          # image bytes, not a pointer
    b"not json",
    b"[\"QmImage\"]",
    b"{}",
    b'{"imageHash": 42}',
    b'{"imageHash": ""}',
])
def test_decode_rejects_malformed_documents(data):
    with pytest.raises(EthAvatarError) as exc_info:
        decode(data)

    assert exc_info.value.kind == ErrorKind.MALFORMED_POINTER
