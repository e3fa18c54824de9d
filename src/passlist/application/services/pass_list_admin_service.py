"""Application service for maintaining a password file from the command line."""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass, field
from enum import StrEnum

from passlist.application.errors import (
    EmptyPassListError,
    PassListConfigurationError,
    PassListIOError,
    PasswordMismatchError,
    UserAlreadyExistsError,
    UserNotFoundError,
)
from passlist.application.ports.password_hasher_port import PasswordHasherPort
from passlist.application.ports.password_prompt_port import PasswordPromptPort
from passlist.application.services.pass_list import PassList
from passlist.domain.credentials import normalize_username

logger = logging.getLogger(__name__)


class AdminOutcome(StrEnum):
    """Successful outcomes of administrative password-file operations."""

    ADDED = "added"
    CHECK_PASSED = "check_passed"
    REMOVED = "removed"
    LISTED = "listed"
    UPDATED = "updated"


@dataclass(frozen=True)
class AdminResult:
    """Result model for one administrative operation."""

    outcome: AdminOutcome
    message: str
    user: str | None = None
    users: list[str] = field(default_factory=list)


class PassListAdminService:
    """Add, check, delete, list and update users of one password file.

    Every operation raises a `PassListError` subclass on failure and never
    terminates the process.
    """

    def __init__(
        self,
        *,
        path: str | os.PathLike[str],
        hasher: PasswordHasherPort,
        prompt: PasswordPromptPort,
        pepper: str | None = None,
    ) -> None:
        self._pass_list = PassList(path, hasher=hasher, pepper=pepper)
        self._prompt = prompt

    @property
    def path(self) -> str:
        return self._pass_list.path

    def add_user(self, user: str) -> AdminResult:
        """Add a new user, prompting twice for the password."""

        user = _normalized(user)
        try:
            self._pass_list.load()
        except PassListIOError:
            if os.path.exists(self._pass_list.path):
                raise
            # a missing file is created by the store below
            self._pass_list.clear()
        if self._pass_list.exists(user):
            raise UserAlreadyExistsError(user=user)

        self._pass_list.add(user, self._prompt.read_password(repeat=True))
        self._pass_list.store()
        logger.info("passlist_user_added path=%s user=%s", self._pass_list.path, user)
        return AdminResult(
            outcome=AdminOutcome.ADDED,
            message=f"added '{user}' to list",
            user=user,
        )

    def check_user(self, user: str) -> AdminResult:
        """Compare a prompted password with the stored one."""

        user = _normalized(user)
        self._pass_list.load()
        password = self._prompt.read_password(repeat=False)
        if not self._pass_list.matches(user, password):
            raise PasswordMismatchError(user=user)
        return AdminResult(
            outcome=AdminOutcome.CHECK_PASSED,
            message=f"'{user}' password check successful",
            user=user,
        )

    def delete_user(self, user: str) -> AdminResult:
        """Remove an existing user."""

        user = _normalized(user)
        self._require_existing_user(user)
        self._pass_list.remove(user).store()
        logger.info("passlist_user_removed path=%s user=%s", self._pass_list.path, user)
        return AdminResult(
            outcome=AdminOutcome.REMOVED,
            message=f"removed '{user}' from list",
            user=user,
        )

    def list_users(self) -> AdminResult:
        """Return all usernames stored in the password file."""

        self._pass_list.load()
        users = self._pass_list.list_users()
        if not users:
            raise EmptyPassListError(path=self._pass_list.path)
        return AdminResult(
            outcome=AdminOutcome.LISTED,
            message="\n".join(users),
            users=users,
        )

    def update_user(self, user: str) -> AdminResult:
        """Replace an existing user's password, prompting twice."""

        user = _normalized(user)
        self._require_existing_user(user)
        self._pass_list.add(user, self._prompt.read_password(repeat=True))
        self._pass_list.store()
        logger.info("passlist_user_updated path=%s user=%s", self._pass_list.path, user)
        return AdminResult(
            outcome=AdminOutcome.UPDATED,
            message=f"updated user '{user}' in list",
            user=user,
        )

    def _require_existing_user(self, user: str) -> None:
        self._pass_list.load()
        if not self._pass_list.exists(user):
            raise UserNotFoundError(user=user)


def _normalized(user: str) -> str:
    try:
        return normalize_username(user=user)
    except ValueError as exc:
        raise PassListConfigurationError(str(exc)) from exc
