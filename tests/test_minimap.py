import math

from cubraycaster.minimap import (
    BORDER_COLOR,
    PLAYER_COLOR,
    WALL_COLOR,
    draw_circle,
    draw_line,
    draw_minimap,
    draw_tile,
)
from cubraycaster.raycast import Frame, Player

SENTINEL = 0x123456


def _frame(size=40):
    frame = Frame(size, size)
    frame.pixels = [SENTINEL] * (size * size)
    return frame


def test_tile_interior_and_border():
    frame = _frame()
    draw_tile(frame, 12, WALL_COLOR, 0, 0)
    assert frame.get(5, 5) == WALL_COLOR
    assert frame.get(0, 5) == BORDER_COLOR
    assert frame.get(11, 5) == BORDER_COLOR
    assert frame.get(5, 0) == BORDER_COLOR
    assert frame.get(5, 11) == BORDER_COLOR
    assert frame.get(12, 5) == SENTINEL


def test_tile_away_from_origin_keeps_bottom_row_coloured():
    frame = _frame()
    draw_tile(frame, 12, WALL_COLOR, 1, 1)
    assert frame.get(12, 18) == BORDER_COLOR
    assert frame.get(23, 18) == BORDER_COLOR
    assert frame.get(18, 12) == BORDER_COLOR
    assert frame.get(18, 23) == WALL_COLOR
    assert frame.get(18, 18) == WALL_COLOR
    assert frame.get(5, 5) == SENTINEL


def test_line_covers_length_pixels():
    frame = _frame()
    draw_line(frame, 10, 10, 0.0, 12)
    painted = [x for x in range(40) if frame.get(x, 10) == PLAYER_COLOR]
    assert painted == list(range(10, 22))
    assert all(frame.get(x, 11) == SENTINEL for x in range(40))


def test_zero_length_line_draws_nothing():
    frame = _frame()
    draw_line(frame, 10, 10, 1.0, 0)
    assert set(frame.pixels) == {SENTINEL}


def test_circle_stays_within_radius():
    frame = _frame()
    draw_circle(frame, 10, 10, 2)
    assert frame.get(12, 10) == PLAYER_COLOR
    painted = [
        (x, y) for y in range(40) for x in range(40) if frame.get(x, y) == PLAYER_COLOR
    ]
    assert painted
    assert all(math.hypot(x - 10, y - 10) <= 3 for x, y in painted)


def test_minimap_draws_walls_and_player():
    frame = _frame()
    grid = ["111", "1N1", "111"]
    player = Player(x=96, y=96, x1=18, y1=18, angle=3 * math.pi / 2)
    center = draw_minimap(frame, grid, player, 12)
    assert center == (18, 18)
    assert frame.get(5, 5) == WALL_COLOR
    assert frame.get(20, 18) == PLAYER_COLOR
    assert frame.get(18, 10) == PLAYER_COLOR
    assert frame.get(14, 21) == SENTINEL