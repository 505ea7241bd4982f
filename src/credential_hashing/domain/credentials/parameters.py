"""Key-derivation parameters for salted credential hashing."""

from __future__ import annotations

from dataclasses import dataclass

MIN_ITERATIONS = 100_000
DEFAULT_ITERATIONS = 100_000
DEFAULT_SALT_BYTES = 32
DEFAULT_HASH_BYTES = 32
LEGACY_DIGEST_BYTES = 32


@dataclass(frozen=True)
class HashingParameters:
    """PBKDF2-HMAC-SHA256 parameters shared by hashing and verification.

    Defaults match records written before the parameters became configurable;
    changing them invalidates existing salted hashes.
    """

    iterations: int = DEFAULT_ITERATIONS
    salt_bytes: int = DEFAULT_SALT_BYTES
    hash_bytes: int = DEFAULT_HASH_BYTES

    def __post_init__(self) -> None:
        if self.iterations < MIN_ITERATIONS:
            raise ValueError(f"iterations must be at least {MIN_ITERATIONS}")
        if self.salt_bytes <= 0:
            raise ValueError("salt_bytes must be positive")
        if self.hash_bytes <= 0:
            raise ValueError("hash_bytes must be positive")
