"""Build the credential hasher and service from runtime settings."""

from __future__ import annotations

from credential_hashing.application.ports.user_credential_repository_port import (
    UserCredentialRepositoryPort,
)
from credential_hashing.application.services.credential_service import CredentialService
from credential_hashing.config.settings import Settings, load_settings
from credential_hashing.domain.credentials.parameters import HashingParameters
from credential_hashing.infrastructure.logging import configure_logging
from credential_hashing.infrastructure.security.pbkdf2_hasher import Pbkdf2CredentialHasher


def build_credential_hasher(settings: Settings) -> Pbkdf2CredentialHasher:
    return Pbkdf2CredentialHasher(
        HashingParameters(
            iterations=settings.password_hash_iterations,
            salt_bytes=settings.password_salt_bytes,
            hash_bytes=settings.password_hash_bytes,
        )
    )


def build_credential_service(
    *,
    settings: Settings,
    users: UserCredentialRepositoryPort,
) -> CredentialService:
    """Compose the credential service over a caller-supplied repository."""

    return CredentialService(
        users=users,
        hasher=build_credential_hasher(settings),
        upgrade_legacy_credentials=settings.upgrade_legacy_credentials,
    )


def bootstrap_credential_service(
    *,
    users: UserCredentialRepositoryPort,
    settings: Settings | None = None,
) -> CredentialService:
    """Configure process logging from settings and return the wired service."""

    resolved = settings or load_settings()
    configure_logging(level=resolved.log_level)
    return build_credential_service(settings=resolved, users=users)
