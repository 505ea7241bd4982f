"""PBKDF2-HMAC-SHA256 credential hasher with legacy SHA-256 verification."""

from __future__ import annotations

import hashlib
import hmac
import secrets
from collections.abc import Iterator
from contextlib import contextmanager

from credential_hashing.domain.credentials.errors import EntropyUnavailableError
from credential_hashing.domain.credentials.parameters import (
    LEGACY_DIGEST_BYTES,
    HashingParameters,
)
from credential_hashing.domain.credentials.stored_credential import (
    GeneratedCredential,
    LegacyCredential,
    SaltedCredential,
    StoredCredential,
    stored_credential_from_columns,
)
from credential_hashing.infrastructure.security.base64_codec import decode_text, encode_bytes

_DIGEST_NAME = "sha256"


@contextmanager
def _scrubbed(buffer: bytearray) -> Iterator[bytearray]:
    """Yield one sensitive buffer and zero it when the block exits."""

    try:
        yield buffer
    finally:
        buffer[:] = bytes(len(buffer))


def _credential_buffer(credential: str) -> bytearray:
    return bytearray(credential.encode("utf-8"))


class Pbkdf2CredentialHasher:
    """Salted PBKDF2 hashing plus verification of legacy unsalted digests.

    Instances hold only immutable parameters, so one instance can be shared
    across threads or a new one built per call.
    """

    def __init__(self, parameters: HashingParameters | None = None) -> None:
        self._parameters = parameters or HashingParameters()

    @property
    def parameters(self) -> HashingParameters:
        return self._parameters

    def generate_hash(self, credential: str) -> GeneratedCredential:
        """Create a fresh random salt and derive the hash for one credential."""

        try:
            salt_raw = bytearray(secrets.token_bytes(self._parameters.salt_bytes))
        except (OSError, NotImplementedError) as exc:
            raise EntropyUnavailableError() from exc

        with _scrubbed(salt_raw):
            salt = encode_bytes(salt_raw)
            password_hash = self._derive(credential, salt_raw)
        return GeneratedCredential(password_hash=password_hash, salt=salt)

    def derive_hash(self, credential: str, salt: str) -> str:
        """Derive the base64 hash for one credential under an existing salt."""

        with _scrubbed(decode_text(salt, field="salt")) as salt_raw:
            return self._derive(credential, salt_raw)

    def verify(self, credential: str, stored: StoredCredential) -> bool:
        """Return whether the credential matches the stored record.

        Mismatch is reported as False; malformed stored values raise
        CredentialEncodingError.
        """

        if isinstance(stored, SaltedCredential):
            _require_hash_shape(stored.password_hash, size=self._parameters.hash_bytes)
            computed = self.derive_hash(credential, stored.salt)
        elif isinstance(stored, LegacyCredential):
            _require_hash_shape(stored.password_hash, size=LEGACY_DIGEST_BYTES)
            computed = _legacy_hash(credential)
        else:
            raise TypeError(f"unsupported stored credential type: {type(stored).__name__}")
        return hmac.compare_digest(computed.encode("ascii"), stored.password_hash.encode("ascii"))

    def verify_columns(self, credential: str, password_hash: str, salt: str | None) -> bool:
        """Verify against raw persisted columns; a missing or blank salt selects legacy.

        The legacy scheme always stores a 32-byte SHA-256 digest, so a salted hash of
        another length paired with a missing salt raises CredentialEncodingError
        rather than returning False.
        """

        stored = stored_credential_from_columns(password_hash=password_hash, salt=salt)
        return self.verify(credential, stored)

    def _derive(self, credential: str, salt_raw: bytearray) -> str:
        with _scrubbed(_credential_buffer(credential)) as secret:
            derived = bytearray(
                hashlib.pbkdf2_hmac(
                    _DIGEST_NAME,
                    secret,
                    salt_raw,
                    self._parameters.iterations,
                    dklen=self._parameters.hash_bytes,
                )
            )
        with _scrubbed(derived):
            return encode_bytes(derived)


def _legacy_hash(credential: str) -> str:
    with _scrubbed(_credential_buffer(credential)) as secret:
        digest = bytearray(hashlib.sha256(secret).digest())
    with _scrubbed(digest):
        return encode_bytes(digest)


def _require_hash_shape(password_hash: str, *, size: int) -> None:
    with _scrubbed(decode_text(password_hash, field="password_hash", expected_size=size)):
        pass
