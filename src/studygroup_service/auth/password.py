"""
Password hashing.

Hashes are bcrypt strings carrying their own salt and cost, so each call
to ``hash`` produces a different value for the same password and
``matches`` needs nothing but the stored string.

Security Note:
    - Plaintext passwords are never stored or logged
    - bcrypt reads only the first 72 bytes of its input, so the password
      is first reduced to a fixed-length SHA-256 digest (base64 encoded)
      and long passwords keep every byte significant
"""

import base64
import hashlib

import bcrypt


class PasswordHasher:
    """
    Salted, slow one-way password hashing.

    Args:
        rounds: bcrypt cost factor (log2 of the iteration count)

    Example:
        >>> hasher = PasswordHasher(rounds=12)
        >>> stored = hasher.hash("hunter22")
        >>> hasher.matches("hunter22", stored)
        True
        >>> hasher.matches("hunter23", stored)
        False
    """

    def __init__(self, rounds: int = 12):
        self.rounds = rounds

    @staticmethod
    def _prepare(password: str) -> bytes:
        digest = hashlib.sha256(password.encode("utf-8")).digest()
        return base64.b64encode(digest)

    def hash(self, password: str) -> str:
        """Return a fresh salted hash of ``password``."""
        hashed = bcrypt.hashpw(self._prepare(password), bcrypt.gensalt(rounds=self.rounds))
        return hashed.decode("utf-8")

    def matches(self, password: str, stored_hash: str) -> bool:
        """
        Check a plaintext password against a stored hash.

        Returns False for a wrong password and for a stored value that is
        not a bcrypt hash.
        """
        try:
            return bcrypt.checkpw(self._prepare(password), stored_hash.encode("utf-8"))
        except ValueError:
            return False
