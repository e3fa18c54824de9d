"""Built-in authentication deciders."""

from __future__ import annotations

from collections.abc import Callable, Iterable

from starlette.requests import HTTPConnection

from passlist.application.ports.auth_decider_port import AuthDeciderPort


class AlwaysAuthenticate(AuthDeciderPort):
    """Require authentication for every request."""

    def need_authentication(self, request: HTTPConnection) -> bool:
        _ = request
        return True


class NeverAuthenticate(AuthDeciderPort):
    """Skip authentication for every request."""

    def need_authentication(self, request: HTTPConnection) -> bool:
        _ = request
        return False


class PathPrefixDecider(AuthDeciderPort):
    """Decide by URL path prefix.

    Paths under a public prefix never authenticate. When protected prefixes
    are given, only paths under one of them authenticate; otherwise every
    non-public path does.
    """

    def __init__(
        self,
        *,
        public_prefixes: Iterable[str] = (),
        protected_prefixes: Iterable[str] = (),
    ) -> None:
        self._public_prefixes = tuple(prefix for prefix in public_prefixes if prefix)
        self._protected_prefixes = tuple(prefix for prefix in protected_prefixes if prefix)

    def need_authentication(self, request: HTTPConnection) -> bool:
        path = request.url.path
        if any(_under_prefix(path, prefix) for prefix in self._public_prefixes):
            return False
        if self._protected_prefixes:
            return any(_under_prefix(path, prefix) for prefix in self._protected_prefixes)
        return True


class CallableDecider(AuthDeciderPort):
    """Adapt a plain callable to the decider contract."""

    def __init__(self, func: Callable[[HTTPConnection], bool]) -> None:
        self._func = func

    def need_authentication(self, request: HTTPConnection) -> bool:
        return bool(self._func(request))


def _under_prefix(path: str, prefix: str) -> bool:
    if prefix.endswith("/"):
        return path.startswith(prefix)
    return path == prefix or path.startswith(prefix + "/")
