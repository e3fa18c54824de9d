"""Port for interactive password entry."""

from __future__ import annotations

from typing import Protocol


class PasswordPromptPort(Protocol):
    """Supply one non-empty plaintext password from the operator."""

    def read_password(self, *, repeat: bool) -> str:
        """Return the entered password, asking twice when `repeat` is set."""
