"""The game window: loading, input handling and the main loop."""

from __future__ import annotations

import math
import os
import sys
from array import array
from collections.abc import Mapping, Sequence

from cubraycaster.minimap import draw_minimap
from cubraycaster.movement import Action, Controls, apply_controls
from cubraycaster.raycast import (
    HEIGHT,
    MINIMAP_SCALE,
    WIDTH,
    Frame,
    World,
    render_view,
    spawn_player,
)
from cubraycaster.scene import ParseError, Scene, load_scene
from cubraycaster.textutils import has_extension
from cubraycaster.xpm import XpmError, XpmImage, load_xpm

MOUSE_TURN = 0.05
TITLE = "CUB3D"
_TWO_PI = 2 * math.pi


def load_textures(scene: Scene) -> dict[str, XpmImage]:
    """Load the four wall textures of a scene, keyed NO, SO, WE and EA."""
    return {
        "NO": load_xpm(scene.north),
        "SO": load_xpm(scene.south),
        "WE": load_xpm(scene.west),
        "EA": load_xpm(scene.east),
    }


class Game:
    """Game state: the world, the player, held controls and the last frame."""

    def __init__(self, scene: Scene, textures: Mapping[str, XpmImage]) -> None:
        self.scene = scene
        self.textures = dict(textures)
        self.world = World(list(scene.grid), self.textures["NO"].height)
        self.minimap_scale = MINIMAP_SCALE
        self.player = spawn_player(self.world, self.minimap_scale)
        self.controls = Controls()
        self.ceiling = scene.ceiling_color()
        self.floor = scene.floor_color()
        self.frame: Frame | None = None

    def render(self) -> Frame:
        """Draw the 3D view and the minimap into a new frame."""
        frame = Frame(WIDTH, HEIGHT)
        render_view(frame, self.world, self.player, self.textures, self.ceiling, self.floor)
        draw_minimap(frame, self.world.grid, self.player, self.minimap_scale)
        self.frame = frame
        return frame

    def on_mouse(self, x: float) -> Frame:
        """Turn left or right depending on the pointer's side, then redraw."""
        if x < WIDTH / 2:
            self.player.angle = math.fmod(self.player.angle - MOUSE_TURN + _TWO_PI, _TWO_PI)
        else:
            self.player.angle = math.fmod(self.player.angle + MOUSE_TURN, _TWO_PI)
        return self.render()

    def tick(self) -> bool:
        """Apply held controls; redraw and return True if any were held."""
        if not apply_controls(self.world, self.player, self.controls, self.minimap_scale):
            return False
        self.render()
        return True


def _present(pygame, screen, frame: Frame) -> None:
    data = array("I", frame.pixels)
    if sys.byteorder == "big":
        data.byteswap()
    buffer = bytearray(data.tobytes())
    buffer[3::4] = b"\xff" * (len(buffer) // 4)
    surface = pygame.image.frombuffer(bytes(buffer), (frame.width, frame.height), "BGRA")
    screen.blit(surface, (0, 0))
    pygame.display.flip()


def run(path: str | os.PathLike[str]) -> int:
    """Load a scene and play it in a window until it is closed.

    Returns 0 when the window is closed and 1 when the player quits with
    Escape or Q.
    """
    scene = load_scene(path)
    textures = load_textures(scene)
    game = Game(scene, textures)

    import pygame

    keys = {
        pygame.K_w: Action.FORWARD,
        pygame.K_s: Action.BACKWARD,
        pygame.K_d: Action.STRAFE_RIGHT,
        pygame.K_a: Action.STRAFE_LEFT,
        pygame.K_RIGHT: Action.TURN_RIGHT,
        pygame.K_LEFT: Action.TURN_LEFT,
    }
    pygame.init()
    try:
        screen = pygame.display.set_mode((WIDTH, HEIGHT))
        pygame.display.set_caption(TITLE)
        clock = pygame.time.Clock()
        _present(pygame, screen, game.render())
        while True:
            for event in pygame.event.get():
                if event.type == pygame.QUIT:
                    return 0
                if event.type == pygame.KEYDOWN:
                    if event.key in (pygame.K_ESCAPE, pygame.K_q):
                        return 1
                    if event.key == pygame.K_KP_MINUS:
                        pygame.mouse.set_visible(False)
                    elif event.key == pygame.K_KP_PLUS:
                        pygame.mouse.set_visible(True)
                    elif event.key in keys:
                        game.controls.press(keys[event.key])
                elif event.type == pygame.KEYUP and event.key in keys:
                    game.controls.release(keys[event.key])
                elif event.type == pygame.MOUSEMOTION:
                    _present(pygame, screen, game.on_mouse(event.pos[0]))
                    pygame.mouse.set_pos((WIDTH // 2, HEIGHT - 1))
                    pygame.mouse.set_visible(False)
                    pygame.event.clear(pygame.MOUSEMOTION)
            if game.tick() and game.frame is not None:
                _present(pygame, screen, game.frame)
            clock.tick(60)
    finally:
        pygame.quit()


def main(argv: Sequence[str] | None = None) -> int:
    """Command-line entry: play the .cub file given as the only argument."""
    args = list(sys.argv[1:] if argv is None else argv)
    if len(args) != 1:
        sys.stderr.write("Check your arguments !\n")
        return 0
    path = args[0]
    if not has_extension(path, ".cub") or not os.access(path, os.R_OK):
        sys.stderr.write("Wrong path\n")
        return 0
    try:
        return run(path)
    except ParseError:
        sys.stderr.write("Error\nNot valid")
        return 0
    except XpmError:
        return 0


if __name__ == "__main__":
    sys.exit(main())