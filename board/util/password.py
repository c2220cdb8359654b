"""Password hashing.

Passwords are stored as bcrypt hashes and only ever compared through
``verify``; plain text never reaches the repositories.
"""

import logfire
from passlib.context import CryptContext

from board.config import AuthSettings


class PasswordHasher:
    """bcrypt hashing backed by passlib."""

    def __init__(self, auth_settings: AuthSettings) -> None:
        """Initialize the hasher.

        Args:
            auth_settings: Authentication settings (bcrypt cost factor)
        """
        self._context = CryptContext(
            schemes=["bcrypt"],
            deprecated="auto",
            bcrypt__rounds=auth_settings.bcrypt_rounds,
        )

    def hash(self, password: str) -> str:
        return self._context.hash(password)

    def verify(self, password: str, hashed: str) -> bool:
        """Check a plain-text password against a stored hash.

        A stored value that is not a recognizable bcrypt hash never matches.
        """
        try:
            return self._context.verify(password, hashed)
        except ValueError as e:
            logfire.warn("Unrecognized password hash", error=str(e))
            return False
