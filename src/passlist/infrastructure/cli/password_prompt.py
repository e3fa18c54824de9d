"""Terminal password prompt backed by getpass."""

from __future__ import annotations

import getpass
import sys
from collections.abc import Callable
from typing import TextIO

from passlist.application.errors import PasswordPromptAbortedError
from passlist.application.ports.password_prompt_port import PasswordPromptPort


class GetpassPasswordPrompt(PasswordPromptPort):
    """Read passwords without echo, re-asking until input is usable."""

    def __init__(
        self,
        *,
        quiet: bool = False,
        read: Callable[[str], str] = getpass.getpass,
        stream: TextIO | None = None,
    ) -> None:
        self._quiet = quiet
        self._read = read
        self._stream = stream

    def read_password(self, *, repeat: bool) -> str:
        while True:
            password = self._ask(" password: ")
            if not password:
                self._notice("empty password not accepted")
                continue
            if not repeat:
                return password

            confirmation = self._ask("repeat pw: ")
            if not confirmation:
                self._notice("empty password not accepted")
                continue
            if password == confirmation:
                return password
            self._notice("the two passwords don't match", force=True)

    def _ask(self, label: str) -> str:
        try:
            return self._read(label)
        except (EOFError, KeyboardInterrupt) as exc:
            raise PasswordPromptAbortedError("password entry aborted") from exc

    def _notice(self, message: str, *, force: bool = False) -> None:
        if self._quiet and not force:
            return
        stream = self._stream if self._stream is not None else sys.stderr
        print(f"\t{message}", file=stream)
