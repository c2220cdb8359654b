"""Unit tests for password hashing."""

from board.config import AuthSettings
from board.util.password import PasswordHasher

hasher = PasswordHasher(AuthSettings(bcrypt_rounds=4))


class TestPasswordHasher:
    def test_hash_is_salted_bcrypt(self):
        first = hasher.hash("admin123!")
        second = hasher.hash("admin123!")

        assert first.startswith("$2")
        assert first != second
        assert "admin123!" not in first

    def test_verify(self):
        hashed = hasher.hash("correct horse")

        assert hasher.verify("correct horse", hashed)
        assert not hasher.verify("wrong horse", hashed)

    def test_verify_against_non_hash_is_false(self):
        assert not hasher.verify("plain", "plain")
