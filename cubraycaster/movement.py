"""Player movement driven by the pressed controls."""

from __future__ import annotations

import enum
import math
from dataclasses import dataclass, field

from cubraycaster.raycast import MINIMAP_SCALE, Player, World


class Action(enum.Enum):
    """What a held key asks the player to do."""

    FORWARD = "forward"
    BACKWARD = "backward"
    STRAFE_RIGHT = "strafe_right"
    STRAFE_LEFT = "strafe_left"
    TURN_RIGHT = "turn_right"
    TURN_LEFT = "turn_left"


@dataclass
class Controls:
    """The set of actions whose keys are currently held down."""

    pressed: set[Action] = field(default_factory=set)

    def press(self, action: Action) -> None:
        """Mark an action as held."""
        self.pressed.add(action)

    def release(self, action: Action) -> None:
        """Mark an action as no longer held."""
        self.pressed.discard(action)

    def active(self) -> bool:
        """Return True while at least one action is held."""
        return bool(self.pressed)


def move(
    world: World,
    player: Player,
    direction: float,
    sideways: bool = False,
    minimap_scale: int = MINIMAP_SCALE,
) -> bool:
    """Step the player along its heading, or across it when sideways.

    direction is 1 or -1. The step is refused when the target point is in
    a wall; a plain forward step is also refused when either edge of the
    field of view would reach a wall. Returns True if the player moved.
    """
    step = direction * player.move_speed
    heading = player.angle + math.pi / 2 if sideways else player.angle
    x = player.x + math.cos(heading) * step
    y = player.y + math.sin(heading) * step
    if world.is_wall(y, x):
        return False
    if direction > 0 and not sideways and world.collides(player, step):
        return False
    player.x = x
    player.y = y
    player.x1 = (world.columns * minimap_scale * x) / world.width
    player.y1 = (world.rows * minimap_scale * y) / world.height
    return True


def apply_controls(
    world: World,
    player: Player,
    controls: Controls,
    minimap_scale: int = MINIMAP_SCALE,
) -> bool:
    """Apply every held action once; return True if any action was held."""
    if not controls.active():
        return False
    held = controls.pressed
    if Action.FORWARD in held:
        move(world, player, 1, False, minimap_scale)
    if Action.BACKWARD in held:
        move(world, player, -1, False, minimap_scale)
    if Action.STRAFE_RIGHT in held:
        move(world, player, 1, True, minimap_scale)
    if Action.STRAFE_LEFT in held:
        move(world, player, -1, True, minimap_scale)
    if Action.TURN_RIGHT in held:
        player.angle += player.rot_speed
    if Action.TURN_LEFT in held:
        player.angle -= player.rot_speed
    return True