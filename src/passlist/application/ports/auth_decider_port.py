"""Port deciding whether one incoming request must authenticate."""

from __future__ import annotations

from typing import Protocol

from starlette.requests import HTTPConnection


class AuthDeciderPort(Protocol):
    """Authentication requirement contract."""

    def need_authentication(self, request: HTTPConnection) -> bool:
        """Return True when `request` must carry valid Basic-Auth credentials."""
