from __future__ import annotations

import logging

import pytest

from passlist.infrastructure.logging import resolve_log_level


@pytest.mark.parametrize(
    ("level", "expected"),
    [
        ("debug", logging.DEBUG),
        (" WARNING ", logging.WARNING),
        ("", logging.INFO),
        (None, logging.INFO),
        ("chatty", logging.INFO),
    ],
)
def test_resolve_log_level(level: str | None, expected: int) -> None:
    assert resolve_log_level(level) == expected
