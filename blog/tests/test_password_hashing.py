from __future__ import annotations

import base64

import pytest

from blog.application.services.password_hashing import Pbkdf2PasswordHasher


@pytest.fixture(scope="module")
def hasher() -> Pbkdf2PasswordHasher:
    return Pbkdf2PasswordHasher()


def test_hash_returns_base64_digest_and_salt(hasher: Pbkdf2PasswordHasher) -> None:
    digest, salt = hasher.hash("P@ssw0rd!")

    assert len(base64.b64decode(digest)) == 32
    assert len(base64.b64decode(salt)) == 16


def test_verify_accepts_correct_password(hasher: Pbkdf2PasswordHasher) -> None:
    digest, salt = hasher.hash("P@ssw0rd!")

    assert hasher.verify("P@ssw0rd!", digest, salt) is True


def test_verify_rejects_wrong_password(hasher: Pbkdf2PasswordHasher) -> None:
    digest, salt = hasher.hash("P@ssw0rd!")

    assert hasher.verify("P@ssw0rd?", digest, salt) is False


def test_same_password_gets_fresh_salt(hasher: Pbkdf2PasswordHasher) -> None:
    first = hasher.hash("P@ssw0rd!")
    second = hasher.hash("P@ssw0rd!")

    assert first[1] != second[1]
    assert first[0] != second[0]


def test_verify_with_foreign_salt_fails(hasher: Pbkdf2PasswordHasher) -> None:
    digest, _ = hasher.hash("P@ssw0rd!")
    _, other_salt = hasher.hash("P@ssw0rd!")

    assert hasher.verify("P@ssw0rd!", digest, other_salt) is False


@pytest.mark.parametrize(
    ("stored_hash", "stored_salt"),
    [
        ("not base64!!", "c2FsdHNhbHRzYWx0c2FsdA=="),
        ("c2FsdHNhbHRzYWx0c2FsdA==", "%%%"),
        ("c2FsdHNhbHRzYWx0c2FsdA==", ""),
    ],
)
def test_verify_returns_false_for_corrupt_material(
    hasher: Pbkdf2PasswordHasher, stored_hash: str, stored_salt: str
) -> None:
    assert hasher.verify("P@ssw0rd!", stored_hash, stored_salt) is False


def test_iterations_are_configurable() -> None:
    fast = Pbkdf2PasswordHasher(iterations=1_000)
    digest, salt = fast.hash("secret")

    assert fast.verify("secret", digest, salt) is True
    assert Pbkdf2PasswordHasher().verify("secret", digest, salt) is False


def test_lone_surrogate_password_is_rejected_not_raised(hasher: Pbkdf2PasswordHasher) -> None:
    digest, salt = hasher.hash("P@ssw0rd!")

    assert hasher.verify("\ud800", digest, salt) is False


def test_lone_surrogate_password_round_trips(hasher: Pbkdf2PasswordHasher) -> None:
    digest, salt = hasher.hash("P@ss\udfffw0rd!")

    assert hasher.verify("P@ss\udfffw0rd!", digest, salt) is True
    assert hasher.verify("P@ssw0rd!", digest, salt) is False
