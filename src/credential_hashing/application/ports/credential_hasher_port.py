"""Port for credential hashing and verification."""

from __future__ import annotations

from typing import Protocol

from credential_hashing.domain.credentials.stored_credential import (
    GeneratedCredential,
    StoredCredential,
)


class CredentialHasherPort(Protocol):
    """Credential hashing/verification contract."""

    def generate_hash(self, credential: str) -> GeneratedCredential:
        """Generate a new salt and the derived hash for storage."""

    def derive_hash(self, credential: str, salt: str) -> str:
        """Derive the hash for a credential under an existing salt."""

    def verify(self, credential: str, stored: StoredCredential) -> bool:
        """Verify plaintext credential against one stored record."""
