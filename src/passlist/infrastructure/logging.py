"""Logging setup shared by the pwaccess CLI and the demo API."""

from __future__ import annotations

import logging

_LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"
_QUIET_LEVEL = logging.ERROR


def resolve_log_level(level: str | None) -> int:
    """Map a level name such as `debug` to its numeric value, falling back to INFO."""

    name = (level or "").strip().upper()
    resolved = logging.getLevelName(name) if name else logging.INFO
    return resolved if isinstance(resolved, int) else logging.INFO


def configure_logging(*, level: str | None, quiet: bool = False) -> None:
    """Configure root logging once per process; `quiet` keeps only errors."""

    logging.basicConfig(
        level=_QUIET_LEVEL if quiet else resolve_log_level(level),
        format=_LOG_FORMAT,
    )
