"""Stored credential variants and the mapping from persisted columns."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class LegacyCredential:
    """Unsalted single-pass SHA-256 record, accepted for verification only."""

    password_hash: str


@dataclass(frozen=True)
class SaltedCredential:
    """PBKDF2 record with its per-record salt."""

    password_hash: str
    salt: str


StoredCredential = LegacyCredential | SaltedCredential


@dataclass(frozen=True)
class GeneratedCredential:
    """Freshly generated hash and salt, ready to be persisted by the caller."""

    password_hash: str
    salt: str

    def as_stored(self) -> SaltedCredential:
        return SaltedCredential(password_hash=self.password_hash, salt=self.salt)


def stored_credential_from_columns(*, password_hash: str, salt: str | None) -> StoredCredential:
    """Map a persisted (hash, salt) pair to its scheme; missing or blank salt means legacy."""

    if not salt:
        return LegacyCredential(password_hash=password_hash)
    return SaltedCredential(password_hash=password_hash, salt=salt)
