"""Drawing of the minimap in the top-left corner of the frame."""

from __future__ import annotations

import math
from collections.abc import Sequence

from cubraycaster.raycast import MINIMAP_SCALE, Frame, Player

WALL_COLOR = 0x0000FF
BORDER_COLOR = 0x000000
PLAYER_COLOR = 0xFF0000
VIEW_TILES = 20


def draw_tile(frame: Frame, scale: int, color: int, x: float, y: float) -> None:
    """Fill the tile at (x, y) in tile units, with a black outline."""
    first = x * scale
    last = (x + 1) * scale
    top = y * scale
    bottom = (y + 1) * scale
    hold_x = first
    while hold_x < last:
        hold_y = top
        while hold_y < bottom:
            border = (
                hold_x == first
                or hold_x == last - 1
                or hold_y == top
                or hold_y == (y + 1) * last - 1
            )
            frame.put(hold_x, hold_y, BORDER_COLOR if border else color)
            hold_y += 1
        hold_x += 1


def draw_line(frame: Frame, x: float, y: float, angle: float, length: float) -> None:
    """Draw a red line of the given length from (x, y) towards angle."""
    end_x = x + math.cos(angle) * length
    end_y = y + math.sin(angle) * length
    steps = int(max(abs(end_x - x), abs(end_y - y)))
    if steps <= 0:
        return
    x_inc = (end_x - x) / steps
    y_inc = (end_y - y) / steps
    for _ in range(steps):
        frame.put(x, y, PLAYER_COLOR)
        x += x_inc
        y += y_inc


def draw_circle(frame: Frame, x: float, y: float, radius: int) -> None:
    """Draw a filled red disc as concentric rings around (x, y)."""
    for ring in range(int(radius), 0, -1):
        degrees = 0.0
        while degrees < 360:
            theta = degrees * math.pi / 180
            frame.put(x + ring * math.cos(theta), y + ring * math.sin(theta), PLAYER_COLOR)
            degrees += 0.1


def draw_minimap(
    frame: Frame,
    grid: Sequence[str],
    player: Player,
    scale: int = MINIMAP_SCALE,
) -> tuple[float, float]:
    """Draw the walls around the player and the player marker.

    Shows up to a 20 by 20 tile window starting ten tiles up and left of
    the player. Returns the marker's centre in frame pixels.
    """
    start_x = max(player.x1 / scale - VIEW_TILES / 2, 0.0)
    start_y = max(player.y1 / scale - VIEW_TILES / 2, 0.0)
    row = int(start_y)
    while row < len(grid) and row < start_y + VIEW_TILES:
        line = grid[row]
        column = int(start_x)
        while column < len(line) and column < start_x + VIEW_TILES:
            if line[column] == "1":
                draw_tile(frame, scale, WALL_COLOR, column - start_x, row - start_y)
            column += 1
        row += 1
    center_x = (player.x1 / scale - start_x) * scale
    center_y = (player.y1 / scale - start_y) * scale
    draw_circle(frame, center_x, center_y, scale // 5)
    draw_line(frame, center_x, center_y, player.angle, scale)
    return center_x, center_y