from __future__ import annotations

import base64
import hashlib
import secrets
import time

import pytest

from credential_hashing.domain.credentials.errors import (
    CredentialEncodingError,
    EntropyUnavailableError,
)
from credential_hashing.domain.credentials.parameters import HashingParameters
from credential_hashing.domain.credentials.stored_credential import (
    LegacyCredential,
    SaltedCredential,
)
from credential_hashing.infrastructure.security.pbkdf2_hasher import Pbkdf2CredentialHasher


def _legacy_hash(credential: str) -> str:
    return base64.b64encode(hashlib.sha256(credential.encode("utf-8")).digest()).decode("ascii")


@pytest.fixture(scope="module")
def hasher() -> Pbkdf2CredentialHasher:
    return Pbkdf2CredentialHasher()


def test_generated_hash_verifies_and_never_contains_plaintext(
    hasher: Pbkdf2CredentialHasher,
) -> None:
    password = "super-secret-password"

    generated = hasher.generate_hash(password)

    assert password not in generated.password_hash
    assert password not in generated.salt
    assert hasher.verify(password, generated.as_stored()) is True
    assert hasher.verify_columns(password, generated.password_hash, generated.salt) is True


def test_generated_salt_and_hash_are_256_bit_base64(hasher: Pbkdf2CredentialHasher) -> None:
    generated = hasher.generate_hash("pw")

    assert len(base64.b64decode(generated.salt, validate=True)) == 32
    assert len(base64.b64decode(generated.password_hash, validate=True)) == 32


def test_derive_hash_matches_reference_pbkdf2_sha256(hasher: Pbkdf2CredentialHasher) -> None:
    salt_raw = bytes(range(32))
    salt = base64.b64encode(salt_raw).decode("ascii")
    expected = hashlib.pbkdf2_hmac("sha256", "pässwörd".encode(), salt_raw, 100_000, dklen=32)

    assert hasher.derive_hash("pässwörd", salt) == base64.b64encode(expected).decode("ascii")


def test_derive_hash_is_deterministic(hasher: Pbkdf2CredentialHasher) -> None:
    salt = hasher.generate_hash("seed").salt

    first = hasher.derive_hash("Tr0ub4dor&3", salt)
    second = hasher.derive_hash("Tr0ub4dor&3", salt)

    assert first == second


def test_empty_credential_is_hashed_and_verified(hasher: Pbkdf2CredentialHasher) -> None:
    generated = hasher.generate_hash("")

    assert hasher.verify("", generated.as_stored()) is True
    assert hasher.verify(" ", generated.as_stored()) is False


def test_same_credential_gets_distinct_salts_and_hashes(hasher: Pbkdf2CredentialHasher) -> None:
    trials = [hasher.generate_hash("same-password") for _ in range(24)]

    assert len({item.salt for item in trials}) == len(trials)
    assert len({item.password_hash for item in trials}) == len(trials)


def test_distinct_credentials_get_distinct_salts(hasher: Pbkdf2CredentialHasher) -> None:
    salts = [hasher.generate_hash(f"password-{index}").salt for index in range(24)]

    assert len(set(salts)) == len(salts)


@pytest.mark.parametrize("wrong", ["tr0ub4dor&3", "Tr0ub4dor&", "Tr0ub4dor&3 ", "", "x"])
def test_wrong_credential_fails_verification(hasher: Pbkdf2CredentialHasher, wrong: str) -> None:
    generated = hasher.generate_hash("Tr0ub4dor&3")

    assert hasher.verify(wrong, generated.as_stored()) is False


def test_modern_record_scenario(hasher: Pbkdf2CredentialHasher) -> None:
    generated = hasher.generate_hash("Tr0ub4dor&3")

    assert hasher.verify_columns("Tr0ub4dor&3", generated.password_hash, generated.salt) is True
    assert hasher.verify_columns("tr0ub4dor&3", generated.password_hash, generated.salt) is False
    assert hasher.verify_columns("Tr0ub4dor&3", generated.password_hash, None) is False


@pytest.mark.parametrize("salt", [None, ""])
def test_legacy_record_verifies_without_salt(
    hasher: Pbkdf2CredentialHasher,
    salt: str | None,
) -> None:
    legacy_hash = _legacy_hash("legacy-password")

    assert hasher.verify_columns("legacy-password", legacy_hash, salt) is True
    assert hasher.verify_columns("Legacy-password", legacy_hash, salt) is False


def test_legacy_hash_is_not_accepted_as_salted_record(hasher: Pbkdf2CredentialHasher) -> None:
    legacy_hash = _legacy_hash("legacy-password")
    salt = hasher.generate_hash("unrelated").salt

    stored = SaltedCredential(password_hash=legacy_hash, salt=salt)

    assert hasher.verify("legacy-password", stored) is False


def test_malformed_salt_and_hash_raise_encoding_error(hasher: Pbkdf2CredentialHasher) -> None:
    with pytest.raises(CredentialEncodingError):
        hasher.verify_columns("pw", "not-valid-base64", "also-not-valid-base64")


def test_malformed_salt_with_valid_hash_reports_salt_field(
    hasher: Pbkdf2CredentialHasher,
) -> None:
    generated = hasher.generate_hash("pw")

    with pytest.raises(CredentialEncodingError) as exc_info:
        hasher.verify_columns("pw", generated.password_hash, "also-not-valid-base64")

    assert exc_info.value.field == "salt"
    assert "also-not-valid-base64" not in str(exc_info.value)


@pytest.mark.parametrize(
    "password_hash",
    ["", "not-valid-base64", "AAAA", "QUJD", "éééé"],
)
def test_legacy_record_with_malformed_hash_raises(
    hasher: Pbkdf2CredentialHasher,
    password_hash: str,
) -> None:
    with pytest.raises(CredentialEncodingError) as exc_info:
        hasher.verify("pw", LegacyCredential(password_hash=password_hash))

    assert exc_info.value.field == "password_hash"


def test_derive_hash_rejects_unpadded_salt(hasher: Pbkdf2CredentialHasher) -> None:
    with pytest.raises(CredentialEncodingError):
        hasher.derive_hash("pw", "QUJ")


def test_unknown_stored_credential_type_is_rejected(hasher: Pbkdf2CredentialHasher) -> None:
    with pytest.raises(TypeError):
        hasher.verify("pw", object())  # type: ignore[arg-type]


@pytest.mark.parametrize("error_type", [OSError, NotImplementedError])
def test_entropy_failure_propagates(
    hasher: Pbkdf2CredentialHasher,
    monkeypatch: pytest.MonkeyPatch,
    error_type: type[Exception],
) -> None:
    def _unavailable(size: int) -> bytes:
        raise error_type("no entropy")

    monkeypatch.setattr(secrets, "token_bytes", _unavailable)

    with pytest.raises(EntropyUnavailableError) as exc_info:
        hasher.generate_hash("pw")

    assert isinstance(exc_info.value.__cause__, error_type)


def test_custom_parameters_control_sizes() -> None:
    hasher = Pbkdf2CredentialHasher(
        HashingParameters(iterations=120_000, salt_bytes=16, hash_bytes=64)
    )

    generated = hasher.generate_hash("pw")

    assert len(base64.b64decode(generated.salt)) == 16
    assert len(base64.b64decode(generated.password_hash)) == 64
    assert hasher.verify("pw", generated.as_stored()) is True


def test_wide_salted_hash_without_salt_is_rejected_as_malformed_legacy_record() -> None:
    hasher = Pbkdf2CredentialHasher(HashingParameters(hash_bytes=48))
    generated = hasher.generate_hash("Tr0ub4dor&3")

    with pytest.raises(CredentialEncodingError) as exc_info:
        hasher.verify_columns("Tr0ub4dor&3", generated.password_hash, None)

    assert exc_info.value.field == "password_hash"


def test_parameters_reject_low_iteration_counts() -> None:
    with pytest.raises(ValueError):
        HashingParameters(iterations=1_000)


def test_mismatch_timing_does_not_depend_on_similarity(hasher: Pbkdf2CredentialHasher) -> None:
    stored = hasher.generate_hash("Tr0ub4dor&3").as_stored()
    candidates = ["Xr0ub4dor&3", "Tr0ub4dor&X", "completely-different", "T"]

    def _elapsed(candidate: str) -> float:
        samples = []
        for _ in range(3):
            started = time.perf_counter()
            assert hasher.verify(candidate, stored) is False
            samples.append(time.perf_counter() - started)
        return min(samples)

    timings = [_elapsed(candidate) for candidate in candidates]

    assert max(timings) / min(timings) < 3.0
