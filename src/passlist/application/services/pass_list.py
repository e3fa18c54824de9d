"""In-memory username/password-hash list bound to one flat password file."""

from __future__ import annotations

import logging
import os
from pathlib import Path

from passlist.application.errors import PassListConfigurationError, PassListIOError
from passlist.application.ports.password_hasher_port import PasswordHasherPort
from passlist.domain.credentials import normalize_username, require_password
from passlist.domain.passwd_format import format_records, parse_lines
from passlist.domain.pepper import apply_pepper, resolve_pepper

PASSWD_FILE_MODE = 0o660
logger = logging.getLogger(__name__)


class PassList:
    """Username/password-hash mapping with load/store against a password file.

    The list has no internal locking: request handlers may read it
    concurrently, but `load`, `add`, `remove` and `store` must be
    serialized by the caller while it is shared.
    """

    def __init__(
        self,
        path: str | os.PathLike[str],
        *,
        hasher: PasswordHasherPort,
        pepper: str | None = None,
    ) -> None:
        raw_path = os.fspath(path)
        if not raw_path.strip():
            raise PassListConfigurationError("missing password filename")
        self._path = raw_path
        self._hasher = hasher
        self._pepper = resolve_pepper(pepper)
        self._users: dict[str, str] = {}

    @classmethod
    def new(
        cls,
        path: str | os.PathLike[str] | None,
        *,
        hasher: PasswordHasherPort,
        pepper: str | None = None,
    ) -> PassList | None:
        """Return a list bound to `path`, or None when `path` is blank."""

        if path is None or not os.fspath(path).strip():
            return None
        return cls(path, hasher=hasher, pepper=pepper)

    @property
    def path(self) -> str:
        return self._path

    @property
    def pepper(self) -> str:
        return self._pepper

    def load(self) -> int:
        """Replace all entries with the password file's contents.

        Returns the number of bytes read. Unsaved in-memory changes are lost.
        """

        try:
            with open(self._path, encoding="utf-8", newline="") as handle:
                parsed = parse_lines(handle)
        except (OSError, UnicodeDecodeError) as exc:
            raise PassListIOError(f"cannot read password file {self._path}: {exc}") from exc

        self.clear()
        self._users.update(parsed.records)
        logger.debug("passlist_loaded path=%s users=%s", self._path, len(self._users))
        return parsed.bytes_read

    def store(self) -> int:
        """Write all entries to the password file, truncating it.

        Returns the number of bytes written. A crash mid-write can leave
        the file truncated.
        """

        # Serialize before opening to keep the file-open window small.
        payload = str(self).encode("utf-8")
        try:
            fd = os.open(self._path, os.O_WRONLY | os.O_CREAT | os.O_TRUNC, PASSWD_FILE_MODE)
            with os.fdopen(fd, "wb") as handle:
                written = handle.write(payload)
        except OSError as exc:
            raise PassListIOError(f"cannot write password file {self._path}: {exc}") from exc

        logger.debug("passlist_stored path=%s users=%s bytes=%s", self._path, len(self), written)
        return written

    def add(self, user: str, password: str) -> None:
        """Hash `password` with the pepper and insert or overwrite `user`."""

        try:
            normalized_user = normalize_username(user=user)
            plaintext = require_password(password=password)
        except ValueError as exc:
            raise PassListConfigurationError(str(exc)) from exc

        password_hash = self._hasher.hash_password(
            apply_pepper(password=plaintext, pepper=self._pepper)
        )
        self._users[normalized_user] = password_hash

    def remove(self, user: str) -> PassList:
        """Delete `user` if present; unknown users are ignored."""

        self._users.pop(user.strip(), None)
        return self

    def clear(self) -> PassList:
        """Remove every entry in place."""

        self._users.clear()
        return self

    def exists(self, user: str) -> bool:
        return user.strip() in self._users

    def find(self, user: str) -> str | None:
        """Return the stored hash of `user`, or None when unknown."""

        return self._users.get(user.strip())

    def list_users(self) -> list[str]:
        """Return all usernames in ascending order."""

        return sorted(self._users)

    def records(self) -> dict[str, str]:
        """Return a copy of the username-to-hash mapping."""

        return dict(self._users)

    def matches(self, user: str, password: str) -> bool:
        """Return True only when `user` exists and `password` verifies.

        Unknown users and wrong passwords are indistinguishable here.
        """

        password_hash = self._users.get(user.strip())
        if password_hash is None:
            return False
        return self._hasher.verify_password(
            password=apply_pepper(password=password, pepper=self._pepper),
            password_hash=password_hash,
        )

    def __contains__(self, user: object) -> bool:
        return isinstance(user, str) and self.exists(user)

    def __len__(self) -> int:
        return len(self._users)

    def __str__(self) -> str:
        return format_records(self._users)

    def __repr__(self) -> str:
        return f"PassList(path={self._path!r}, users={len(self._users)})"


def load_pass_list(
    path: str | os.PathLike[str],
    *,
    hasher: PasswordHasherPort,
    pepper: str | None = None,
) -> PassList:
    """Create a list bound to `path` and load the file's contents."""

    pass_list = PassList.new(path, hasher=hasher, pepper=pepper)
    if pass_list is None:
        raise PassListConfigurationError("missing password filename")
    pass_list.load()
    return pass_list


def resolve_passwd_path(path: str | os.PathLike[str]) -> str:
    """Return the absolute form of one password-file path."""

    return str(Path(path).expanduser().absolute())
