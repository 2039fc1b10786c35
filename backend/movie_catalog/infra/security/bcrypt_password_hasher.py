# movie_catalog/infra/security/bcrypt_password_hasher.py
from __future__ import annotations

import logging

import bcrypt

from movie_catalog.services._shared.ports import PasswordHasher

# bcrypt only consumes this many bytes of input
BCRYPT_MAX_BYTES = 72


class BcryptPasswordHasher(PasswordHasher):
    """
    Salted bcrypt hashing with a fixed cost factor.

    Inputs longer than 72 bytes are truncated explicitly, matching what bcrypt
    always did implicitly, so long passphrases hash instead of raising.
    """

    def __init__(self, *, rounds: int = 12, logger: logging.Logger | None = None) -> None:
        self.rounds = rounds
        self.log = logger or logging.getLogger(__name__)

    @staticmethod
    def _encode(password: str) -> bytes:
        return password.encode("utf-8")[:BCRYPT_MAX_BYTES]

    def hash(self, password: str) -> str:
        self.log.debug("Hashing password")
        salt = bcrypt.gensalt(rounds=self.rounds)
        return bcrypt.hashpw(self._encode(password), salt).decode("utf-8")

    def compare(self, password: str, hashed: str) -> bool:
        """Return ``True`` iff ``password`` matches ``hashed``; malformed hashes never match."""
        self.log.debug("Comparing password hash")
        try:
            return bcrypt.checkpw(self._encode(password), hashed.encode("utf-8"))
        except ValueError:
            self.log.warning("Stored password hash is not a valid bcrypt hash")
            return False
