"""Port for reading and replacing persisted user credentials."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Protocol
from uuid import UUID

from credential_hashing.domain.credentials.stored_credential import (
    StoredCredential,
    stored_credential_from_columns,
)


@dataclass(frozen=True)
class UserCredentialRecord:
    """Credential columns of one persisted user."""

    user_id: UUID
    email: str
    password_hash: str
    salt: str | None
    is_active: bool

    @property
    def stored_credential(self) -> StoredCredential:
        return stored_credential_from_columns(password_hash=self.password_hash, salt=self.salt)


class UserCredentialRepositoryPort(Protocol):
    """User credential repository contract."""

    async def get_by_id(self, *, user_id: UUID) -> UserCredentialRecord | None:
        """Return user credentials by id, including inactive users."""

    async def get_by_email(self, *, email: str) -> UserCredentialRecord | None:
        """Return user credentials by normalized email, including inactive users."""

    async def update_credential(self, *, user_id: UUID, password_hash: str, salt: str) -> None:
        """Replace the stored hash and salt of one user."""
