from __future__ import annotations

import io

import pytest

from passlist.application.errors import PasswordPromptAbortedError
from passlist.infrastructure.cli.password_prompt import GetpassPasswordPrompt


class ScriptedInput:
    def __init__(self, *answers: str | BaseException) -> None:
        self._answers = list(answers)
        self.labels: list[str] = []

    def __call__(self, label: str) -> str:
        self.labels.append(label)
        answer = self._answers.pop(0)
        if isinstance(answer, BaseException):
            raise answer
        return answer


def test_single_entry_without_repeat() -> None:
    read = ScriptedInput("secret")

    assert GetpassPasswordPrompt(read=read).read_password(repeat=False) == "secret"
    assert read.labels == [" password: "]


def test_repeat_requires_matching_entries() -> None:
    stream = io.StringIO()
    read = ScriptedInput("one", "two", "secret", "secret")

    password = GetpassPasswordPrompt(read=read, stream=stream).read_password(repeat=True)

    assert password == "secret"
    assert "don't match" in stream.getvalue()
    assert len(read.labels) == 4


def test_empty_entries_are_rejected() -> None:
    stream = io.StringIO()
    read = ScriptedInput("", "secret")

    password = GetpassPasswordPrompt(read=read, stream=stream).read_password(repeat=False)

    assert password == "secret"
    assert "empty password not accepted" in stream.getvalue()


def test_quiet_suppresses_empty_notice_but_not_mismatch() -> None:
    stream = io.StringIO()
    read = ScriptedInput("", "a", "b", "c", "c")

    GetpassPasswordPrompt(quiet=True, read=read, stream=stream).read_password(repeat=True)

    assert "empty password" not in stream.getvalue()
    assert "don't match" in stream.getvalue()


@pytest.mark.parametrize("interrupt", [EOFError(), KeyboardInterrupt()])
def test_interrupt_aborts_prompt(interrupt: BaseException) -> None:
    prompt = GetpassPasswordPrompt(read=ScriptedInput(interrupt))

    with pytest.raises(PasswordPromptAbortedError):
        prompt.read_password(repeat=False)
