"""Salted one-way password hashing backed by bcrypt."""

from __future__ import annotations

import hashlib
import logging
import secrets

import bcrypt

logger = logging.getLogger(__name__)

DEFAULT_ROUNDS = 10


class PasswordHasher:
    """Hash and verify passwords with a fixed bcrypt cost factor.

    Plaintext is pre-hashed with SHA-256 so bcrypt never sees more than its
    72-byte input limit; long passwords are neither truncated nor rejected.
    """

    def __init__(self, rounds: int = DEFAULT_ROUNDS) -> None:
        """Store the bcrypt cost factor and prepare the timing-equaliser hash."""
        self._rounds = rounds
        self._dummy_hash = self.hash(secrets.token_urlsafe(16))

    @property
    def rounds(self) -> int:
        return self._rounds

    def hash(self, plaintext: str) -> str:
        """Return a bcrypt hash with a fresh random salt embedded in it."""
        salt = bcrypt.gensalt(rounds=self._rounds)
        return bcrypt.hashpw(self._prehash(plaintext), salt).decode("utf-8")

    def verify(self, plaintext: str, stored_hash: str) -> bool:
        """Return ``True`` when ``plaintext`` matches ``stored_hash``.

        A malformed stored hash fails closed: the result is ``False`` and a
        corrupt-credential warning is logged. A plaintext that cannot be
        encoded as UTF-8 simply does not match.
        """
        try:
            attempt = self._prehash(plaintext)
        except UnicodeEncodeError:
            return False
        try:
            return bcrypt.checkpw(attempt, stored_hash.encode("utf-8"))
        except (ValueError, TypeError, AttributeError):
            logger.warning("corrupt credential: stored password hash could not be parsed")
            return False

    def verify_dummy(self, plaintext: str) -> bool:
        """Spend one verification worth of work; used when no account matched."""
        self.verify(plaintext, self._dummy_hash)
        return False

    @staticmethod
    def _prehash(plaintext: str) -> bytes:
        return hashlib.sha256(plaintext.encode("utf-8")).hexdigest().encode("ascii")
