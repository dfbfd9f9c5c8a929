import math

import pytest

from cubraycaster.movement import Action, Controls, apply_controls, move
from cubraycaster.raycast import World, spawn_player

OPEN = ["11111", "10001", "10N01", "10001", "11111"]
CLOSED = ["111", "1N1", "111"]
NARROW = ["11111", "11011", "11N11", "11011", "11111"]


def _setup(grid, tile=64):
    world = World(list(grid), tile)
    return world, spawn_player(world)


def test_controls_press_and_release():
    controls = Controls()
    assert controls.active() is False
    controls.press(Action.FORWARD)
    controls.press(Action.TURN_LEFT)
    assert controls.active() is True
    controls.release(Action.FORWARD)
    assert controls.pressed == {Action.TURN_LEFT}
    controls.release(Action.TURN_LEFT)
    controls.release(Action.TURN_LEFT)
    assert controls.active() is False


def test_forward_moves_along_heading():
    world, player = _setup(OPEN)
    start_x, start_y = player.x, player.y
    assert move(world, player, 1) is True
    assert player.y == pytest.approx(start_y - player.move_speed)
    assert player.x == pytest.approx(start_x, abs=1e-9)


def test_minimap_position_follows_world_position():
    world, player = _setup(OPEN)
    move(world, player, -1)
    assert player.x1 / 12 == pytest.approx(player.x / world.tile)
    assert player.y1 / 12 == pytest.approx(player.y / world.tile)


def test_backward_and_strafe():
    world, player = _setup(OPEN)
    start_x, start_y = player.x, player.y
    assert move(world, player, -1) is True
    assert player.y == pytest.approx(start_y + player.move_speed)
    assert move(world, player, 1, True) is True
    assert player.x == pytest.approx(start_x + player.move_speed)


def test_walls_block_every_direction():
    world, player = _setup(CLOSED)
    before = (player.x, player.y, player.x1, player.y1)
    for direction, sideways in ((1, False), (-1, False), (1, True), (-1, True)):
        assert move(world, player, direction, sideways) is False
    assert (player.x, player.y, player.x1, player.y1) == before


def test_field_of_view_edges_block_forward_only():
    world, player = _setup(NARROW, tile=40)
    start_y = player.y
    assert move(world, player, 1) is False
    assert player.y == start_y
    assert move(world, player, -1) is True
    assert player.y == pytest.approx(start_y + player.move_speed)


def test_apply_controls_idle_does_nothing():
    world, player = _setup(OPEN)
    before = (player.x, player.y, player.angle)
    assert apply_controls(world, player, Controls()) is False
    assert (player.x, player.y, player.angle) == before


def test_apply_controls_turns():
    world, player = _setup(OPEN)
    start = player.angle
    controls = Controls()
    controls.press(Action.TURN_RIGHT)
    assert apply_controls(world, player, controls) is True
    assert player.angle == pytest.approx(start + player.rot_speed)
    controls.press(Action.TURN_LEFT)
    apply_controls(world, player, controls)
    assert player.angle == pytest.approx(start + player.rot_speed)


def test_apply_controls_forward_and_backward_cancel():
    world, player = _setup(OPEN)
    start_x, start_y = player.x, player.y
    controls = Controls({Action.FORWARD, Action.BACKWARD})
    assert apply_controls(world, player, controls) is True
    assert player.x == pytest.approx(start_x, abs=1e-9)
    assert player.y == pytest.approx(start_y)
    assert math.isclose(player.angle, 3 * math.pi / 2)