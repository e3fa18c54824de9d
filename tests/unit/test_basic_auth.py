from __future__ import annotations

import base64

import pytest

from passlist.application.errors import InvalidCredentialsError, MissingCredentialsError
from passlist.infrastructure.http.basic_auth import (
    AuthenticatedUser,
    challenge_header,
    deny,
    extract_basic_credentials,
)


def _basic(raw: bytes) -> str:
    return "Basic " + base64.b64encode(raw).decode("ascii")


def test_extract_basic_credentials_success() -> None:
    credentials = extract_basic_credentials(_basic(b"alice:secret1"))

    assert credentials.username == "alice"
    assert credentials.password == "secret1"


def test_extract_basic_credentials_scheme_is_case_insensitive() -> None:
    header = "basic " + base64.b64encode(b"alice:pw").decode("ascii")

    assert extract_basic_credentials(header).username == "alice"


def test_password_may_contain_colons() -> None:
    credentials = extract_basic_credentials(_basic(b"alice:pass:word"))

    assert credentials.password == "pass:word"


@pytest.mark.parametrize("header", [None, "", "   "])
def test_missing_header_raises_missing_credentials(header: str | None) -> None:
    with pytest.raises(MissingCredentialsError):
        extract_basic_credentials(header)


@pytest.mark.parametrize(
    "header",
    [
        "Bearer abc123",
        "Basic",
        "Basic not-valid-base64!",
        _basic(b"no-colon-here"),
        _basic(b"\xff\xfe:pw"),
    ],
)
def test_malformed_header_raises_invalid_credentials(header: str) -> None:
    with pytest.raises(InvalidCredentialsError):
        extract_basic_credentials(header)


def test_challenge_header_defaults_realm() -> None:
    assert challenge_header("") == {"WWW-Authenticate": 'Basic realm="Default"'}
    assert challenge_header(None) == {"WWW-Authenticate": 'Basic realm="Default"'}


def test_challenge_header_escapes_quotes() -> None:
    assert challenge_header('my "realm"') == {"WWW-Authenticate": 'Basic realm="my \\"realm\\""'}


def test_deny_builds_401_response() -> None:
    response = deny("intranet")

    assert response.status_code == 401
    assert response.body == b"401 Unauthorised"
    assert response.headers["www-authenticate"] == 'Basic realm="intranet"'


def test_authenticated_user_identity() -> None:
    user = AuthenticatedUser(username="alice", password_hash="hash")

    assert user.is_authenticated is True
    assert user.display_name == "alice"
    assert user.identity == "alice"
