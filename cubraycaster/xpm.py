"""Reading of XPM images used as wall textures."""

from __future__ import annotations

import os
import re
from collections.abc import Iterable, Iterator
from dataclasses import dataclass

from cubraycaster.colors import lookup_color
from cubraycaster.textutils import atoi

TRANSPARENT = 0xFF000000
_WORD_SPLIT = re.compile(r"[ \t]+")
_HEX_PREFIX = re.compile(r"[ \t\n\v\f\r]*([+-]?)(?:0[xX])?([0-9a-fA-F]*)")


class XpmError(ValueError):
    """Raised when XPM data cannot be read."""


@dataclass(frozen=True)
class XpmImage:
    """A decoded image: row-major 32-bit pixel values."""

    width: int
    height: int
    pixels: tuple[int, ...]

    def pixel(self, x: int, y: int) -> int:
        """Return the pixel at column x, row y."""
        if not (0 <= x < self.width and 0 <= y < self.height):
            raise IndexError(f"pixel ({x}, {y}) outside {self.width}x{self.height} image")
        return self.pixels[y * self.width + x]


def _find_outside_quotes(text: str, needle: str) -> int:
    quoted = False
    for pos in range(len(text) - len(needle) + 1):
        if text[pos] == '"':
            quoted = not quoted
        if not quoted and text.startswith(needle, pos):
            return pos
    return -1


def _blank(text: str, start: int, end: int) -> str:
    return text[:start] + " " * (end - start) + text[end:]


def strip_comments(text: str) -> str:
    """Replace C comments outside string literals with spaces.

    The result has the same length as the input.
    """
    while (start := _find_outside_quotes(text, "/*")) != -1:
        end = text.find("*/", start + 2)
        text = _blank(text, start, len(text) if end == -1 else end + 2)
    while (start := _find_outside_quotes(text, "//")) != -1:
        end = text.find("\n", start + 2)
        text = _blank(text, start, len(text) if end == -1 else end + 1)
    return text


def quoted_lines(text: str) -> Iterator[str]:
    """Yield the contents of successive double-quoted strings."""
    pos = 0
    while True:
        opening = text.find('"', pos)
        if opening == -1:
            return
        closing = text.find('"', opening + 1)
        if closing == -1:
            return
        yield text[opening + 1:closing]
        pos = closing + 1


def _words(text: str) -> list[str]:
    return [word for word in _WORD_SPLIT.split(text) if word]


def _parse_hex(digits: str) -> int:
    match = _HEX_PREFIX.match(digits)
    if match is None or not match.group(2):
        return 0
    value = int(match.group(2), 16)
    return -value if match.group(1) == "-" else value


def parse_color(name: str, end: str | None = None) -> int:
    """Turn an XPM colour value into 0xRRGGBB.

    '#RRGGBB' is read as hexadecimal. Otherwise the name, joined with the
    following word when there is one, is looked up among the named
    colours; "none" gives -1 and unknown names give 0.
    """
    if name.startswith("#"):
        return _parse_hex(name[1:])
    full = f"{name} {end}" if end else name
    value = lookup_color(full[:63])
    return 0 if value is None else value


def _next(lines: Iterator[str], what: str) -> str:
    try:
        return next(lines)
    except StopIteration:
        raise XpmError(f"missing {what}") from None


def parse_xpm(lines: Iterable[str]) -> XpmImage:
    """Decode an image from the XPM string values, header first."""
    source = iter(lines)
    header = _words(_next(source, "header"))
    if len(header) < 4:
        raise XpmError("header needs width, height, colours and chars per pixel")
    width, height, ncolors, cpp = (atoi(word) for word in header[:4])
    if width <= 0 or height <= 0 or ncolors <= 0 or cpp <= 0:
        raise XpmError("header values must be positive")

    palette: dict[str, int] = {}
    for _ in range(ncolors):
        line = _next(source, "colour definition")
        words = _words(line[cpp:])
        try:
            index = words.index("c") + 1
        except ValueError:
            raise XpmError(f"colour definition without 'c': {line!r}") from None
        if index >= len(words):
            raise XpmError(f"colour definition without a value: {line!r}")
        following = words[index + 1] if index + 1 < len(words) else None
        color = parse_color(words[index], following)
        key = line[:cpp]
        if cpp <= 2:
            palette[key] = color
        else:
            palette.setdefault(key, color)

    pixels: list[int] = []
    for _ in range(height):
        line = _next(source, "pixel row")
        if len(line) < width * cpp:
            raise XpmError(f"pixel row too short: {line!r}")
        for x in range(width):
            color = palette.get(line[x * cpp:(x + 1) * cpp], 0)
            pixels.append(TRANSPARENT if color == -1 else color & 0xFFFFFFFF)
    return XpmImage(width, height, tuple(pixels))


def parse_xpm_text(text: str) -> XpmImage:
    """Decode the text of an XPM file."""
    return parse_xpm(quoted_lines(strip_comments(text)))


def load_xpm(path: str | os.PathLike[str]) -> XpmImage:
    """Read and decode an XPM file."""
    try:
        with open(path, encoding="latin-1") as stream:
            text = stream.read()
    except OSError as exc:
        raise XpmError(f"cannot read {os.fspath(path)!r}") from exc
    return parse_xpm_text(text)