"""ASGI middleware guarding an application with Basic-Auth against a password file."""

from __future__ import annotations

import logging
import os
from enum import StrEnum

from starlette import status
from starlette.authentication import AuthCredentials
from starlette.concurrency import run_in_threadpool
from starlette.requests import HTTPConnection
from starlette.types import ASGIApp, Receive, Scope, Send
from starlette.websockets import WebSocketClose

from passlist.application.errors import (
    AuthConfigurationError,
    InvalidCredentialsError,
    MissingCredentialsError,
    PassListError,
)
from passlist.application.ports.auth_decider_port import AuthDeciderPort
from passlist.application.ports.password_hasher_port import PasswordHasherPort
from passlist.application.services.pass_list import PassList, load_pass_list
from passlist.infrastructure.http.basic_auth import (
    AuthenticatedUser,
    deny,
    extract_basic_credentials,
    resolve_realm,
)
from passlist.infrastructure.security.password_hasher import BcryptPasswordHasher

AUTHENTICATED_USER_STATE_KEY = "authenticated_user"
logger = logging.getLogger(__name__)


class AuthFailurePolicy(StrEnum):
    """What `wrap` does when authentication cannot be configured."""

    FAIL_OPEN = "fail_open"
    FAIL_CLOSED = "fail_closed"


class BasicAuthMiddleware:
    """Challenge requests the decider marks as protected; forward the rest.

    Successful requests carry an `AuthenticatedUser` in `scope["user"]` and
    `request.state.authenticated_user`. Missing credentials, unknown users
    and wrong passwords all get the same 401 challenge.
    """

    def __init__(
        self,
        app: ASGIApp,
        *,
        pass_list: PassList,
        decider: AuthDeciderPort,
        realm: str | None = None,
    ) -> None:
        self.app = app
        self._pass_list = pass_list
        self._decider = decider
        self._realm = resolve_realm(realm)

    @property
    def realm(self) -> str:
        return self._realm

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if scope["type"] not in ("http", "websocket"):
            await self.app(scope, receive, send)
            return

        connection = HTTPConnection(scope)
        if not self._decider.need_authentication(connection):
            await self.app(scope, receive, send)
            return

        user = await self.authenticate(connection)
        if user is None:
            logger.info(
                "passlist_auth_denied realm=%s path=%s",
                self._realm,
                connection.url.path,
            )
            if scope["type"] == "websocket":
                await WebSocketClose(code=status.WS_1008_POLICY_VIOLATION)(scope, receive, send)
            else:
                await deny(self._realm)(scope, receive, send)
            return

        scope["user"] = user
        scope["auth"] = AuthCredentials(["authenticated"])
        scope.setdefault("state", {})[AUTHENTICATED_USER_STATE_KEY] = user
        await self.app(scope, receive, send)

    async def authenticate(self, connection: HTTPConnection) -> AuthenticatedUser | None:
        """Return the authenticated identity of `connection`, or None."""

        try:
            credentials = extract_basic_credentials(connection.headers.get("authorization"))
        except (MissingCredentialsError, InvalidCredentialsError) as exc:
            logger.debug("passlist_auth_rejected realm=%s reason=%s", self._realm, exc)
            return None

        # bcrypt is CPU bound; keep it off the event loop.
        matched = await run_in_threadpool(
            self._pass_list.matches,
            credentials.username,
            credentials.password,
        )
        password_hash = self._pass_list.find(credentials.username)
        if not matched or password_hash is None:
            logger.debug("passlist_auth_rejected realm=%s reason=credentials", self._realm)
            return None
        return AuthenticatedUser(
            username=credentials.username.strip(),
            password_hash=password_hash,
        )


def wrap(
    app: ASGIApp,
    *,
    realm: str | None,
    passwd_file: str | os.PathLike[str] | None,
    decider: AuthDeciderPort | None,
    hasher: PasswordHasherPort | None = None,
    pepper: str | None = None,
    failure_policy: AuthFailurePolicy | str = AuthFailurePolicy.FAIL_OPEN,
) -> ASGIApp:
    """Return `app` guarded by Basic-Auth against `passwd_file`.

    The password file is read once, here. If it cannot be loaded, or no
    file or decider is given, the fail-open policy logs the problem and
    returns `app` itself, unauthenticated; the fail-closed policy raises
    `AuthConfigurationError` instead.
    """

    failure_policy = AuthFailurePolicy(failure_policy)
    if decider is None:
        return _disable_authentication(app, reason="missing auth decider", policy=failure_policy)
    if passwd_file is None or not os.fspath(passwd_file).strip():
        return _disable_authentication(
            app,
            reason="missing password filename",
            policy=failure_policy,
        )

    try:
        pass_list = load_pass_list(
            passwd_file,
            hasher=hasher if hasher is not None else BcryptPasswordHasher(),
            pepper=pepper,
        )
    except PassListError as exc:
        return _disable_authentication(app, reason=str(exc), policy=failure_policy)

    middleware = BasicAuthMiddleware(app, pass_list=pass_list, decider=decider, realm=realm)
    logger.info(
        "passlist_auth_enabled realm=%s path=%s users=%s",
        middleware.realm,
        pass_list.path,
        len(pass_list),
    )
    return middleware


def _disable_authentication(app: ASGIApp, *, reason: str, policy: AuthFailurePolicy) -> ASGIApp:
    if policy is AuthFailurePolicy.FAIL_CLOSED:
        logger.error("passlist_auth_unavailable policy=%s reason=%s", policy.value, reason)
        raise AuthConfigurationError(f"cannot enable authentication: {reason}")

    logger.error(
        "passlist_auth_disabled policy=%s reason=%s AUTHENTICATION DISABLED!",
        policy.value,
        reason,
    )
    return app
