"""Parsing and validation of .cub scene descriptions."""

from __future__ import annotations

import io
import os
from collections.abc import Callable, Iterable, Mapping, Sequence
from dataclasses import dataclass, field

from cubraycaster.textutils import atoi, has_extension, is_digit, read_lines, split

TEXTURE_KEYS = ("NO", "SO", "WE", "EA")
COLOR_KEYS = ("F", "C")
ELEMENT_KEYS = TEXTURE_KEYS + COLOR_KEYS
PLAYER_CHARS = frozenset("NSEW")
MAP_CHARS = frozenset(" 01") | PLAYER_CHARS

RGB = tuple[int, int, int]


class ParseError(ValueError):
    """Raised when a scene description is not valid."""


@dataclass
class Scene:
    """A validated scene: four wall textures, two colours and the map grid."""

    north: str
    south: str
    west: str
    east: str
    floor: RGB
    ceiling: RGB
    grid: list[str] = field(default_factory=list)

    def floor_color(self) -> int:
        """Return the floor colour packed as 0xRRGGBB."""
        return _pack(self.floor)

    def ceiling_color(self) -> int:
        """Return the ceiling colour packed as 0xRRGGBB."""
        return _pack(self.ceiling)


def _pack(rgb: RGB) -> int:
    red, green, blue = rgb
    return (red << 16) + (green << 8) + blue


def _printable(char: str) -> bool:
    return 33 <= ord(char) <= 126


def _readable(path: str) -> bool:
    return os.access(path, os.R_OK)


def split_sections(lines: Iterable[str]) -> tuple[list[str], list[str]]:
    """Split the lines of a scene into its six element lines and its map rows.

    Lines keep their trailing newlines. Blank lines before and among the
    elements are ignored, as are empty lines right before the map. The map
    must not be followed by further line breaks.
    """
    elements: list[str] = []
    map_parts: list[str] = []
    counted = 0
    for line in lines:
        if len(elements) < len(ELEMENT_KEYS):
            if any(_printable(char) for char in line):
                elements.append(line[:-1] if line.endswith("\n") else line)
            continue
        if line.endswith("\n") and (len(line) > 1 or counted):
            counted += 1
        if counted:
            map_parts.append(line)
    if not counted:
        raise ParseError("the scene has no map")
    text = "".join(map_parts)
    last = max(
        (index for index, char in enumerate(text) if _printable(char)),
        default=0,
    )
    if last == 0:
        raise ParseError("the map is too small")
    if counted >= text.count("\n", 0, last) + 1:
        raise ParseError("unexpected lines after the map")
    return elements, text[: last + 1].split("\n")


def parse_rgb(text: str) -> RGB:
    """Parse 'R,G,B' with each component a plain number from 0 to 255."""
    parts = split(text, ",")
    if len(parts) != 3:
        raise ParseError(f"colour needs three components: {text!r}")
    values = []
    for part in parts:
        value = atoi(part)
        if not is_digit(part) or not 0 <= value <= 255:
            raise ParseError(f"bad colour component {part!r}")
        values.append(value)
    red, green, blue = values
    return red, green, blue


def parse_elements(
    elements: Iterable[str],
    file_exists: Callable[[str], bool] = _readable,
) -> dict[str, str]:
    """Validate the element lines and return their values by identifier.

    Each line is an identifier and one value separated by spaces. Texture
    values must be existing .xpm files; colour values must be valid RGB.
    Every identifier must appear exactly once.
    """
    values: dict[str, str] = {}
    for element in elements:
        words = split(element, " ")
        if len(words) != 2:
            raise ParseError(f"element needs an identifier and one value: {element!r}")
        key, value = words
        if key not in ELEMENT_KEYS:
            raise ParseError(f"unknown identifier {key!r}")
        if key in TEXTURE_KEYS:
            if not file_exists(value) or not has_extension(value, ".xpm"):
                raise ParseError(f"bad texture path {value!r}")
        else:
            parse_rgb(value)
        if key in values:
            raise ParseError(f"identifier {key!r} given twice")
        values[key] = value
    missing = [key for key in ELEMENT_KEYS if key not in values]
    if missing:
        raise ParseError(f"missing identifiers: {', '.join(missing)}")
    return values


def _cell(grid: Sequence[str], row: int, column: int) -> str:
    line = grid[row]
    return line[column] if 0 <= column < len(line) else ""


def _is_enclosed(grid: Sequence[str], row: int, column: int) -> bool:
    if grid[row][column] in ("1", " "):
        return True
    if row == 0 or row == len(grid) - 1:
        return False
    if column == 0 or grid[row][column - 1] == " ":
        return False
    if _cell(grid, row, column + 1) in ("", " "):
        return False
    return all(
        _cell(grid, neighbour, column) not in ("", " ")
        for neighbour in (row - 1, row + 1)
    )


def check_map(grid: Sequence[str]) -> tuple[int, int]:
    """Check that the map is closed and valid; return the player's (x, y)."""
    if not grid:
        raise ParseError("the map is empty")
    for row, line in enumerate(grid):
        for column in range(len(line)):
            if not _is_enclosed(grid, row, column):
                raise ParseError(f"the map is open at row {row}, column {column}")
    players = []
    for row, line in enumerate(grid):
        for column, char in enumerate(line):
            if char not in MAP_CHARS:
                raise ParseError(f"invalid map character {char!r}")
            if char in PLAYER_CHARS:
                players.append((column, row))
    if len(players) != 1:
        raise ParseError(f"the map needs exactly one player, found {len(players)}")
    return players[0]


def _build(values: Mapping[str, str], grid: list[str]) -> Scene:
    return Scene(
        north=values["NO"],
        south=values["SO"],
        west=values["WE"],
        east=values["EA"],
        floor=parse_rgb(values["F"]),
        ceiling=parse_rgb(values["C"]),
        grid=grid,
    )


def parse_scene(
    text: str,
    file_exists: Callable[[str], bool] = _readable,
) -> Scene:
    """Parse and validate the full text of a scene description."""
    elements, grid = split_sections(read_lines(io.StringIO(text, newline="")))
    values = parse_elements(elements, file_exists)
    check_map(grid)
    return _build(values, grid)


def load_scene(path: str | os.PathLike[str]) -> Scene:
    """Read and validate a .cub file."""
    name = os.fspath(path)
    if not has_extension(name, ".cub"):
        raise ParseError("Wrong path")
    try:
        with open(name, encoding="utf-8", errors="surrogateescape", newline="") as stream:
            text = stream.read()
    except OSError as exc:
        raise ParseError("Wrong path") from exc
    return parse_scene(text)