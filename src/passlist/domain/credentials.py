"""Shared normalization helpers for user credential inputs."""

from __future__ import annotations

_FORBIDDEN_USERNAME_CHARS = frozenset(":\r\n")


def normalize_username(*, user: str) -> str:
    """Normalize one username and reject blank or unstorable values."""

    normalized = user.strip()
    if not normalized:
        raise ValueError("username cannot be blank")
    if _FORBIDDEN_USERNAME_CHARS.intersection(normalized):
        raise ValueError("username cannot contain ':' or line breaks")
    return normalized


def require_password(*, password: str) -> str:
    """Reject empty plaintext passwords; surrounding whitespace is significant."""

    if not password:
        raise ValueError("password cannot be empty")
    return password
