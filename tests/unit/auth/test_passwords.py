"""Unit tests for bcrypt password hashing."""

import pytest

from infrastructure.auth.passwords import BcryptPasswordHasher


@pytest.fixture
def hasher() -> BcryptPasswordHasher:
    return BcryptPasswordHasher(rounds=4)


class TestBcryptPasswordHasher:
    def test_hash_is_salted(self, hasher: BcryptPasswordHasher) -> None:
        first = hasher.hash("secret123")
        second = hasher.hash("secret123")

        assert first != second
        assert "secret123" not in first

    def test_verify_accepts_correct_password(self, hasher: BcryptPasswordHasher) -> None:
        assert hasher.verify("secret123", hasher.hash("secret123"))

    def test_verify_rejects_wrong_password(self, hasher: BcryptPasswordHasher) -> None:
        assert not hasher.verify("wrong", hasher.hash("secret123"))

    def test_verify_rejects_non_bcrypt_value(self, hasher: BcryptPasswordHasher) -> None:
        assert not hasher.verify("secret123", "plaintext")
