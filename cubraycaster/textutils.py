"""Small text helpers used by the scene parser."""

from __future__ import annotations

from collections.abc import Iterable, Iterator
from typing import TextIO

_SPACES = frozenset("\t\n\v\f\r ")
_DIGITS = frozenset("0123456789")
_CHUNK_SIZE = 4096


def is_space(char: str) -> bool:
    """Return True for the six ASCII whitespace characters."""
    return char in _SPACES and len(char) == 1


def atoi(text: str) -> int:
    """Parse a leading integer the way C's atoi does.

    Leading whitespace is skipped, one optional sign is accepted and
    digits are read until the first non-digit. No digits gives 0.
    """
    pos = 0
    length = len(text)
    while pos < length and is_space(text[pos]):
        pos += 1
    sign = 1
    if pos < length and text[pos] in "+-":
        if text[pos] == "-":
            sign = -1
        pos += 1
    value = 0
    while pos < length and text[pos] in _DIGITS:
        value = value * 10 + (ord(text[pos]) - ord("0"))
        pos += 1
    return sign * value


def split(text: str, sep: str) -> list[str]:
    """Split on a single separator character, dropping empty words."""
    if len(sep) != 1:
        raise ValueError("separator must be a single character")
    return [word for word in text.split(sep) if word]


def is_digit(text: str) -> bool:
    """Return True if every character is an ASCII digit (True for '')."""
    return all(char in _DIGITS for char in text)


def has_extension(path: str, ext: str) -> bool:
    """Return True if path ends with ext and has a non-empty stem."""
    return len(path) > len(ext) and path.endswith(ext)


def count_columns(rows: Iterable[str]) -> int:
    """Return the length of the longest row, or 0 when there are none."""
    return max((len(row) for row in rows), default=0)


def read_lines(stream: TextIO) -> Iterator[str]:
    """Yield lines from a text stream, each keeping its trailing newline.

    Only '\\n' ends a line. A final line without a newline is yielded as
    is; an empty stream yields nothing.
    """
    pending = ""
    while True:
        chunk = stream.read(_CHUNK_SIZE)
        if not chunk:
            break
        pending += chunk
        start = 0
        while True:
            end = pending.find("\n", start)
            if end == -1:
                break
            yield pending[start:end + 1]
            start = end + 1
        pending = pending[start:]
    if pending:
        yield pending