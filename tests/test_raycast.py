import math

import pytest

from cubraycaster.raycast import (
    HEIGHT,
    NO_HIT,
    WIDTH,
    Frame,
    Player,
    RayHit,
    World,
    cast_ray,
    cast_rays,
    distance,
    draw_column,
    render_view,
    spawn_player,
)
from cubraycaster.xpm import XpmImage

GRID = ["11111", "10001", "10N01", "10001", "11111"]
TILE = 64


def make_world(grid=GRID):
    return World(list(grid), TILE)


def uniform(color):
    return XpmImage(TILE, TILE, (color,) * (TILE * TILE))


def test_frame_put_get_and_bounds():
    frame = Frame(4, 3)
    frame.put(1, 2, 0xABCDEF)
    frame.put(-1, 0, 0x111111)
    frame.put(4, 0, 0x111111)
    assert frame.get(1, 2) == 0xABCDEF
    assert sum(1 for p in frame.pixels if p) == 1
    with pytest.raises(IndexError):
        frame.get(4, 0)


def test_default_frame_size():
    frame = Frame()
    assert (frame.width, frame.height) == (WIDTH, HEIGHT) == (900, 900)


def test_world_dimensions_and_walls():
    world = make_world()
    assert (world.columns, world.rows) == (5, 5)
    assert world.width == world.columns * TILE
    assert world.is_wall(-1, 10)
    assert world.is_wall(32, 32)
    assert not world.is_wall(160, 160)


def test_short_row_is_not_wall_beyond_its_end():
    world = World(["111", "1", "111"], TILE)
    assert not world.is_wall(TILE + 1, 2 * TILE + 1)


@pytest.mark.parametrize(
    "char, angle",
    [("N", 3 * math.pi / 2), ("S", math.pi / 2), ("E", 0.0), ("W", math.pi)],
)
def test_spawn_player_orientation(char, angle):
    grid = [row.replace("N", char) for row in GRID]
    player = spawn_player(make_world(grid), 12)
    assert player.angle == pytest.approx(angle)
    assert (player.x, player.y) == (2 * TILE + TILE // 2, 2 * TILE + TILE // 2)
    assert (player.x1, player.y1) == (2 * 12 + 6, 2 * 12 + 6)


def test_spawn_player_without_player():
    with pytest.raises(ValueError):
        spawn_player(make_world(["111", "101", "111"]))


def test_distance():
    assert distance(0, 0, 3, 4) == 5
    assert distance(1, 2, 7, -3) == distance(7, -3, 1, 2)
    assert distance(1, 1, 1, 1) == 0


def test_cast_ray_east_hits_vertical_wall():
    world = make_world()
    player = spawn_player(world)
    player.angle = 0.0
    hit = cast_ray(world, player, 0.0)
    assert hit.vertical and hit.side == "WE"
    assert hit.wall_x == 256.0
    assert hit.raw_distance == pytest.approx(96.0)
    assert hit.distance == pytest.approx(hit.raw_distance)


def test_cast_ray_south_hits_horizontal_wall():
    world = make_world()
    player = spawn_player(world)
    hit = cast_ray(world, player, math.pi / 2)
    assert not hit.vertical and hit.side == "NO"
    assert hit.wall_y == pytest.approx(4 * TILE)
    assert hit.raw_distance == pytest.approx(hit.wall_y - player.y)


def test_cast_rays_closed_map_always_hits():
    world = make_world()
    player = spawn_player(world)
    hits = cast_rays(world, player, 90)
    assert len(hits) == 90
    assert all(0 < hit.raw_distance < NO_HIT for hit in hits)
    assert all(0 <= hit.angle < 2 * math.pi for hit in hits)
    assert all(0 <= hit.offset < TILE for hit in hits)


def test_collides():
    world = make_world()
    player = spawn_player(world)
    player.angle = 0.0
    assert not world.collides(player, 10)
    assert world.collides(player, 150)


def _hit(dist):
    return RayHit(0.0, dist, dist, 0.0, 0.0, True, False, True, "WE", 0)


def test_draw_column_far_wall():
    frame = Frame()
    draw_column(frame, 5, _hit(500.0), uniform(0x123456), TILE, 0x0000AA, 0x00AA00)
    assert frame.get(5, 0) == 0x0000AA
    assert frame.get(5, HEIGHT - 1) == 0x00AA00
    assert frame.get(5, HEIGHT // 2) == 0x123456
    assert frame.get(6, HEIGHT // 2) == 0


def test_draw_column_close_wall_fills_column():
    frame = Frame()
    draw_column(frame, 0, _hit(0.5), uniform(0x123456), TILE, 0x0000AA, 0x00AA00)
    column = [frame.get(0, y) for y in range(HEIGHT)]
    assert set(column) == {0x123456}


def test_render_view_uses_side_textures():
    world = make_world()
    player = spawn_player(world)
    player.angle = 0.0
    textures = {
        "NO": uniform(0x010101),
        "SO": uniform(0x020202),
        "WE": uniform(0x030303),
        "EA": uniform(0x040404),
    }
    frame = Frame()
    hits = render_view(frame, world, player, textures, 0x0000AA, 0x00AA00)
    assert len(hits) == frame.width
    assert frame.get(450, 450) == 0x030303
    assert frame.get(450, 0) == 0x0000AA
    assert frame.get(450, HEIGHT - 1) == 0x00AA00
    for column in (0, 300, 899):
        assert frame.get(column, 450) == textures[hits[column].side].pixels[0]