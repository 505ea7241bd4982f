"""Application service for credential authentication and password changes."""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass
from enum import StrEnum
from uuid import UUID

from credential_hashing.application.ports.credential_hasher_port import CredentialHasherPort
from credential_hashing.application.ports.user_credential_repository_port import (
    UserCredentialRecord,
    UserCredentialRepositoryPort,
)
from credential_hashing.domain.credentials.stored_credential import (
    GeneratedCredential,
    LegacyCredential,
)

logger = logging.getLogger(__name__)


class UserNotFoundError(LookupError):
    """Raised when a target user cannot be found."""

    def __init__(self, *, user_id: UUID) -> None:
        super().__init__(f"user not found: {user_id}")
        self.user_id = user_id


class InvalidCurrentPasswordError(PermissionError):
    """Raised when a password change is attempted with a wrong current password."""

    def __init__(self) -> None:
        super().__init__("current password is invalid")


class AuthOutcome(StrEnum):
    """Supported authentication outcomes."""

    SUCCESS = "success"
    INVALID_CREDENTIALS = "invalid_credentials"
    INACTIVE_USER = "inactive_user"


@dataclass(frozen=True)
class AuthResult:
    """Authentication result model."""

    outcome: AuthOutcome
    user: UserCredentialRecord | None = None


class CredentialService:
    """Verify and replace user credentials through the hasher port.

    Key derivation runs in a worker thread so callers on an event loop are
    not blocked for the duration of the PBKDF2 rounds.
    """

    def __init__(
        self,
        *,
        users: UserCredentialRepositoryPort,
        hasher: CredentialHasherPort,
        upgrade_legacy_credentials: bool = False,
    ) -> None:
        self._users = users
        self._hasher = hasher
        self._upgrade_legacy_credentials = upgrade_legacy_credentials

    async def hash_new_credential(self, *, password: str) -> GeneratedCredential:
        """Return a fresh salted hash for a credential about to be stored."""

        return await asyncio.to_thread(self._hasher.generate_hash, password)

    async def authenticate(self, *, email: str, password: str) -> AuthResult:
        """Authenticate one email/password pair."""

        user = await self._users.get_by_email(email=email)
        if user is None:
            logger.info("credential_auth_failed reason=unknown_user")
            return AuthResult(outcome=AuthOutcome.INVALID_CREDENTIALS)

        if not user.is_active:
            logger.info("credential_auth_blocked_inactive user_id=%s", user.user_id)
            return AuthResult(outcome=AuthOutcome.INACTIVE_USER)

        if not await self._verify(user=user, password=password):
            logger.warning("credential_auth_failed user_id=%s reason=invalid_password", user.user_id)
            return AuthResult(outcome=AuthOutcome.INVALID_CREDENTIALS)

        if self._upgrade_legacy_credentials and isinstance(user.stored_credential, LegacyCredential):
            user = await self._replace_credential(user=user, password=password)
            logger.info("credential_legacy_upgraded user_id=%s", user.user_id)

        logger.info("credential_auth_succeeded user_id=%s", user.user_id)
        return AuthResult(outcome=AuthOutcome.SUCCESS, user=user)

    async def change_password(
        self,
        *,
        user_id: UUID,
        current_password: str,
        new_password: str,
    ) -> UserCredentialRecord:
        """Verify the current password and store a newly salted hash."""

        user = await self._users.get_by_id(user_id=user_id)
        if user is None:
            logger.warning("credential_change_failed user_id=%s reason=not_found", user_id)
            raise UserNotFoundError(user_id=user_id)

        if not await self._verify(user=user, password=current_password):
            logger.warning(
                "credential_change_failed user_id=%s reason=invalid_current_password",
                user_id,
            )
            raise InvalidCurrentPasswordError()

        updated = await self._replace_credential(user=user, password=new_password)
        logger.info("credential_changed user_id=%s", user_id)
        return updated

    async def _verify(self, *, user: UserCredentialRecord, password: str) -> bool:
        return await asyncio.to_thread(self._hasher.verify, password, user.stored_credential)

    async def _replace_credential(
        self,
        *,
        user: UserCredentialRecord,
        password: str,
    ) -> UserCredentialRecord:
        generated = await self.hash_new_credential(password=password)
        await self._users.update_credential(
            user_id=user.user_id,
            password_hash=generated.password_hash,
            salt=generated.salt,
        )
        return UserCredentialRecord(
            user_id=user.user_id,
            email=user.email,
            password_hash=generated.password_hash,
            salt=generated.salt,
            is_active=user.is_active,
        )
