"""Basic-Auth header parsing and the 401 challenge response."""

from __future__ import annotations

import base64
import binascii
from dataclasses import dataclass

from starlette.authentication import BaseUser
from starlette.responses import PlainTextResponse, Response

from passlist.application.errors import InvalidCredentialsError, MissingCredentialsError

DEFAULT_REALM = "Default"
UNAUTHORISED_BODY = "401 Unauthorised"


@dataclass(frozen=True)
class BasicCredentials:
    """Username/password pair sent by a client."""

    username: str
    password: str


@dataclass(frozen=True)
class AuthenticatedUser(BaseUser):
    """Identity attached to a request after successful authentication."""

    username: str
    password_hash: str

    @property
    def is_authenticated(self) -> bool:
        return True

    @property
    def display_name(self) -> str:
        return self.username

    @property
    def identity(self) -> str:
        return self.username


def extract_basic_credentials(authorization_header: str | None) -> BasicCredentials:
    """Decode a standard `Authorization: Basic <base64(user:password)>` header."""

    if authorization_header is None or not authorization_header.strip():
        raise MissingCredentialsError("missing basic credentials")

    scheme, _, encoded = authorization_header.strip().partition(" ")
    if scheme.lower() != "basic" or not encoded.strip():
        raise InvalidCredentialsError("invalid basic authorization header")

    try:
        decoded = base64.b64decode(encoded.strip(), validate=True).decode("utf-8")
    except (binascii.Error, UnicodeDecodeError) as exc:
        raise InvalidCredentialsError("invalid basic authorization header") from exc

    username, separator, password = decoded.partition(":")
    if not separator:
        raise InvalidCredentialsError("invalid basic authorization header")
    return BasicCredentials(username=username, password=password)


def resolve_realm(realm: str | None) -> str:
    """Return `realm`, or the placeholder realm when it is empty."""

    return realm if realm else DEFAULT_REALM


def challenge_header(realm: str | None) -> dict[str, str]:
    quoted = resolve_realm(realm).replace("\\", "\\\\").replace('"', '\\"')
    return {"WWW-Authenticate": f'Basic realm="{quoted}"'}


def deny(realm: str | None) -> Response:
    """Build the `401 Unauthorised` response challenging for `realm`."""

    return PlainTextResponse(
        UNAUTHORISED_BODY,
        status_code=401,
        headers=challenge_header(realm),
    )
