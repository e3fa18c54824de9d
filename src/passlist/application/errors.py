"""Typed failures raised by password-list operations."""

from __future__ import annotations


class PassListError(Exception):
    """Base class for every password-list failure."""


class PassListConfigurationError(PassListError, ValueError):
    """Raised for empty filenames, usernames or passwords at the API boundary."""


class AuthConfigurationError(PassListConfigurationError):
    """Raised when fail-closed auth middleware cannot be configured."""


class UserNotFoundError(PassListError, LookupError):
    """Raised when a username is not present in the password list."""

    def __init__(self, *, user: str) -> None:
        super().__init__(f"user not found: {user}")
        self.user = user


class EmptyPassListError(PassListError, LookupError):
    """Raised when a listing finds no users at all."""

    def __init__(self, *, path: str) -> None:
        super().__init__(f"no users found in password list: {path}")
        self.path = path


class UserAlreadyExistsError(PassListError, ValueError):
    """Raised when adding a username that is already present."""

    def __init__(self, *, user: str) -> None:
        super().__init__(f"user already exists: {user}")
        self.user = user


class PassListIOError(PassListError, OSError):
    """Raised when the password file cannot be opened, read or written."""


class PasswordHashingError(PassListError, RuntimeError):
    """Raised when the hashing primitive fails to produce a digest."""


class MissingCredentialsError(PassListError, PermissionError):
    """Raised when a request carries no Basic-Auth credentials."""


class InvalidCredentialsError(PassListError, PermissionError):
    """Raised when Basic-Auth credentials are malformed or do not match."""


class PasswordMismatchError(PassListError, PermissionError):
    """Raised when a password check fails for an administrative command."""

    def __init__(self, *, user: str) -> None:
        super().__init__(f"password check failed: {user}")
        self.user = user


class PasswordPromptAbortedError(PassListError, RuntimeError):
    """Raised when interactive password entry is interrupted."""
