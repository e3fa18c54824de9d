"""Bcrypt password hasher adapter."""

from __future__ import annotations

import bcrypt

from passlist.application.errors import PasswordHashingError
from passlist.application.ports.password_hasher_port import PasswordHasherPort

# Higher costs slow down brute force and every login alike.
DEFAULT_BCRYPT_ROUNDS = 6


class BcryptPasswordHasher(PasswordHasherPort):
    """Password hashing adapter using bcrypt."""

    def __init__(self, *, rounds: int = DEFAULT_BCRYPT_ROUNDS) -> None:
        self._rounds = rounds

    @property
    def rounds(self) -> int:
        return self._rounds

    def hash_password(self, password: str) -> str:
        encoded = password.encode("utf-8")
        try:
            return bcrypt.hashpw(encoded, bcrypt.gensalt(rounds=self._rounds)).decode("utf-8")
        except ValueError as exc:
            raise PasswordHashingError(f"bcrypt hashing failed: {exc}") from exc

    def verify_password(self, *, password: str, password_hash: str) -> bool:
        try:
            return bcrypt.checkpw(password.encode("utf-8"), password_hash.encode("utf-8"))
        except ValueError:
            return False
