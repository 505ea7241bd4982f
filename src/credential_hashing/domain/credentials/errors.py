"""Error types raised by credential hashing."""

from __future__ import annotations

from typing import Literal

EncodedField = Literal["salt", "password_hash"]


class CredentialEncodingError(ValueError):
    """Raised when a stored salt or hash is not valid base64 of the expected size."""

    def __init__(self, *, field: EncodedField, reason: str) -> None:
        super().__init__(f"invalid {field} encoding: {reason}")
        self.field = field


class EntropyUnavailableError(RuntimeError):
    """Raised when the operating system cannot supply secure random bytes."""

    def __init__(self) -> None:
        super().__init__("secure random source unavailable")
