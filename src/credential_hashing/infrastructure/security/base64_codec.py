"""Strict standard-base64 helpers for persisted salts and hashes."""

from __future__ import annotations

import base64
import binascii

from credential_hashing.domain.credentials.errors import (
    CredentialEncodingError,
    EncodedField,
)


def encode_bytes(raw: bytes | bytearray) -> str:
    """Encode raw bytes as padded standard base64 text."""

    return base64.b64encode(raw).decode("ascii")


def decode_text(value: str, *, field: EncodedField, expected_size: int | None = None) -> bytearray:
    """Decode base64 text into a mutable buffer, rejecting anything malformed.

    The returned buffer is owned by the caller, who is expected to zero it.
    """

    try:
        raw = base64.b64decode(value, validate=True)
    except (binascii.Error, ValueError) as exc:
        raise CredentialEncodingError(field=field, reason="not valid base64") from exc
    if not raw:
        raise CredentialEncodingError(field=field, reason="decodes to zero bytes")
    if expected_size is not None and len(raw) != expected_size:
        raise CredentialEncodingError(
            field=field,
            reason=f"expected {expected_size} bytes, got {len(raw)}",
        )
    return bytearray(raw)
