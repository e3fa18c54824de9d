"""Port for password hashing and verification."""

from __future__ import annotations

from typing import Protocol


class PasswordHasherPort(Protocol):
    """One-way password hashing contract."""

    def hash_password(self, password: str) -> str:
        """Hash an (already peppered) plaintext password for storage."""

    def verify_password(self, *, password: str, password_hash: str) -> bool:
        """Verify an (already peppered) plaintext password against a stored hash."""
