"""Pepper applied to every plaintext password before hashing or verification."""

from __future__ import annotations

DEFAULT_PEPPER = "github.com/mwat56/passlist"


def resolve_pepper(pepper: str | None) -> str:
    """Return `pepper`, or the process default when it is None or empty."""

    if pepper:
        return pepper
    return DEFAULT_PEPPER


def apply_pepper(*, password: str, pepper: str) -> str:
    """Append the pepper to one plaintext password."""

    return password + pepper
