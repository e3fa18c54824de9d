"""Line-oriented `username:hash` password file format."""

from __future__ import annotations

from collections.abc import Iterable, Iterator, Mapping
from dataclasses import dataclass

COMMENT_PREFIXES = ("#", ";")
FIELD_SEPARATOR = ":"


@dataclass(frozen=True)
class ParsedLines:
    """Records parsed from one password file and the bytes consumed."""

    records: dict[str, str]
    bytes_read: int


def iter_records(lines: Iterable[str]) -> Iterator[tuple[str, str]]:
    """Yield `(username, hash)` pairs, skipping blank, comment and malformed lines."""

    for raw_line in lines:
        line = raw_line.strip()
        if not line or line.startswith(COMMENT_PREFIXES):
            continue
        user, separator, password_hash = line.partition(FIELD_SEPARATOR)
        if not separator:
            continue
        user = user.strip()
        password_hash = password_hash.strip()
        if not user or not password_hash:
            continue
        yield user, password_hash


def parse_lines(lines: Iterable[str]) -> ParsedLines:
    """Parse password-file lines into a mapping; later duplicates win."""

    records: dict[str, str] = {}
    bytes_read = 0
    for raw_line in lines:
        bytes_read += len(raw_line.encode("utf-8"))
        if not raw_line.endswith("\n"):
            # a final line without newline still counts its LF
            bytes_read += 1
        for user, password_hash in iter_records((raw_line,)):
            records[user] = password_hash
    return ParsedLines(records=records, bytes_read=bytes_read)


def format_records(records: Mapping[str, str]) -> str:
    """Serialize records as `username:hash` lines sorted by username."""

    if not records:
        return ""
    return "".join(
        f"{user}{FIELD_SEPARATOR}{records[user]}\n" for user in sorted(records)
    )
