import pytest
from pydantic import ValidationError

from passlist.config.settings import Settings
from passlist.domain.pepper import DEFAULT_PEPPER, resolve_pepper

SETTINGS_ENV = (
    "PASSLIST_FILE",
    "PASSLIST_REALM",
    "PASSLIST_PEPPER",
    "PASSLIST_BCRYPT_ROUNDS",
    "PASSLIST_AUTH_FAILURE_POLICY",
    "PASSLIST_PUBLIC_PATHS",
    "DEMO_API_HOST",
    "DEMO_API_PORT",
    "LOG_LEVEL",
)


@pytest.fixture(autouse=True)
def _clear_env(monkeypatch: pytest.MonkeyPatch) -> None:
    for key in SETTINGS_ENV:
        monkeypatch.delenv(key, raising=False)


def test_defaults_are_deterministic() -> None:
    settings = Settings(_env_file=None)

    assert settings.passwd_file == "pwaccess.db"
    assert settings.realm == "Default"
    assert settings.pepper is None
    assert settings.bcrypt_rounds == 6
    assert settings.auth_failure_policy == "fail_open"
    assert settings.public_path_list == ["/health"]
    assert settings.api_host == "127.0.0.1"
    assert settings.api_port == 8000
    assert settings.log_level == "INFO"


def test_env_values_override_defaults(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("PASSLIST_FILE", "/etc/app/users.db")
    monkeypatch.setenv("PASSLIST_REALM", "intranet")
    monkeypatch.setenv("PASSLIST_PEPPER", "spicy")
    monkeypatch.setenv("PASSLIST_BCRYPT_ROUNDS", "10")
    monkeypatch.setenv("PASSLIST_AUTH_FAILURE_POLICY", "fail_closed")
    monkeypatch.setenv("PASSLIST_PUBLIC_PATHS", " /health , /static/ ,,")

    settings = Settings(_env_file=None)

    assert settings.passwd_file == "/etc/app/users.db"
    assert settings.realm == "intranet"
    assert settings.pepper == "spicy"
    assert settings.bcrypt_rounds == 10
    assert settings.auth_failure_policy == "fail_closed"
    assert settings.public_path_list == ["/health", "/static/"]


@pytest.mark.parametrize("rounds", ["3", "32", "many"])
def test_bcrypt_rounds_out_of_range_raises(monkeypatch: pytest.MonkeyPatch, rounds: str) -> None:
    monkeypatch.setenv("PASSLIST_BCRYPT_ROUNDS", rounds)

    with pytest.raises(ValidationError):
        Settings(_env_file=None)


def test_unknown_failure_policy_raises(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("PASSLIST_AUTH_FAILURE_POLICY", "fail_sideways")

    with pytest.raises(ValidationError):
        Settings(_env_file=None)


@pytest.mark.parametrize("key", ["PASSLIST_FILE", "PASSLIST_REALM"])
def test_blank_strings_are_rejected(monkeypatch: pytest.MonkeyPatch, key: str) -> None:
    monkeypatch.setenv(key, "")

    with pytest.raises(ValidationError):
        Settings(_env_file=None)


def test_blank_pepper_falls_back_to_default_pepper(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("PASSLIST_PEPPER", "")

    settings = Settings(_env_file=None)

    assert resolve_pepper(settings.pepper) == DEFAULT_PEPPER
