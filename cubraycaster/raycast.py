"""Ray casting against the map grid and drawing of the 3D view."""

from __future__ import annotations

import math
from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field

from cubraycaster.textutils import count_columns
from cubraycaster.xpm import XpmImage

WIDTH = 900
HEIGHT = 900
VIEW_ANGLE = math.radians(60)
NO_HIT = 2**31 - 1
MINIMAP_SCALE = 12
ROT_SPEED = math.radians(1.5)
MOVE_SPEED = 50.0

_TWO_PI = 2 * math.pi
_ORIENTATIONS = {
    "N": 3 * math.pi / 2,
    "S": math.pi / 2,
    "E": 0.0,
    "W": math.pi,
}


@dataclass
class Frame:
    """An off-screen image of 0xRRGGBB pixels."""

    width: int = WIDTH
    height: int = HEIGHT
    pixels: list[int] = field(init=False, repr=False)

    def __post_init__(self) -> None:
        self.pixels = [0] * (self.width * self.height)

    def put(self, x: float, y: float, color: int) -> None:
        """Set a pixel; coordinates outside the frame are ignored."""
        column, row = int(x), int(y)
        if 0 <= column < self.width and 0 <= row < self.height:
            self.pixels[row * self.width + column] = color & 0xFFFFFFFF

    def get(self, x: int, y: int) -> int:
        """Return the pixel at column x, row y."""
        if not (0 <= x < self.width and 0 <= y < self.height):
            raise IndexError(f"pixel ({x}, {y}) outside the frame")
        return self.pixels[y * self.width + x]


@dataclass
class Player:
    """Player position in world units (x, y) and minimap units (x1, y1)."""

    x: float
    y: float
    x1: float
    y1: float
    angle: float
    rot_speed: float = ROT_SPEED
    move_speed: float = MOVE_SPEED


@dataclass
class World:
    """The map grid with square tiles of the given size in world units."""

    grid: list[str]
    tile: int

    @property
    def columns(self) -> int:
        return count_columns(self.grid)

    @property
    def rows(self) -> int:
        return len(self.grid)

    @property
    def width(self) -> int:
        return self.columns * self.tile

    @property
    def height(self) -> int:
        return self.rows * self.tile

    def is_wall(self, y: float, x: float) -> bool:
        """Return True if the point lies outside the map or in a wall."""
        if x < 0 or x > self.width or y < 0 or y > self.height:
            return True
        column = math.floor(x / self.tile)
        row = math.floor(y / self.tile)
        if column < self.columns and row < self.rows:
            line = self.grid[row]
            return column < len(line) and line[column] == "1"
        return False

    def collides(self, player: Player, move: float) -> bool:
        """Check the two edges of the field of view after a move."""
        for edge in (player.angle - VIEW_ANGLE / 2, player.angle + VIEW_ANGLE / 2):
            x = player.x + math.cos(edge) * move
            y = player.y + math.sin(edge) * move
            if self.is_wall(y, x):
                return True
        return False


@dataclass(frozen=True)
class RayHit:
    """Where a ray met a wall and which texture it shows."""

    angle: float
    distance: float
    raw_distance: float
    wall_x: float
    wall_y: float
    vertical: bool
    facing_down: bool
    facing_right: bool
    side: str
    offset: int


def spawn_player(world: World, minimap_scale: int = MINIMAP_SCALE) -> Player:
    """Place the player on the first N, S, E or W cell of the map."""
    for row, line in enumerate(world.grid):
        for column, char in enumerate(line):
            if char in _ORIENTATIONS:
                tile = world.tile
                return Player(
                    x=column * tile + tile // 2,
                    y=row * tile + tile // 2,
                    x1=column * minimap_scale + minimap_scale // 2,
                    y1=row * minimap_scale + minimap_scale // 2,
                    angle=_ORIENTATIONS[char],
                )
    raise ValueError("the map has no player")


def distance(x1: float, y1: float, x2: float, y2: float) -> float:
    """Euclidean distance between two points."""
    return math.sqrt((x2 - x1) * (x2 - x1) + (y2 - y1) * (y2 - y1))


def _div(numerator: float, denominator: float) -> float:
    if denominator != 0:
        return numerator / denominator
    if numerator == 0 or math.isnan(numerator):
        return math.nan
    return math.copysign(math.inf, numerator) * math.copysign(1.0, denominator)


def _normalize(angle: float) -> float:
    angle = math.fmod(angle, _TWO_PI)
    return angle + _TWO_PI if angle < 0 else angle


def _march(
    world: World,
    x: float,
    y: float,
    xstep: float,
    ystep: float,
    probe_dx: float,
    probe_dy: float,
) -> tuple[float, float] | None:
    while 0 <= x <= world.width and 0 <= y <= world.height:
        if world.is_wall(y - probe_dy, x - probe_dx):
            return x, y
        x += xstep
        y += ystep
    return None


def _horizontal(world: World, player: Player, angle: float, down: bool, right: bool):
    tile = world.tile
    yint = math.floor(player.y / tile) * tile + (tile if down else 0)
    tangent = math.tan(angle)
    xint = player.x + _div(yint - player.y, tangent)
    ystep = tile if down else -tile
    xstep = _div(tile, tangent)
    if (not right and xstep > 0) or (right and xstep < 0):
        xstep = -xstep
    return _march(world, xint, yint, xstep, ystep, 0, 0 if down else 1)


def _vertical(world: World, player: Player, angle: float, down: bool, right: bool):
    tile = world.tile
    xint = math.floor(player.x / tile) * tile + (tile if right else 0)
    tangent = math.tan(angle)
    yint = player.y + (xint - player.x) * tangent
    xstep = tile if right else -tile
    ystep = tile * tangent
    if (not down and ystep > 0) or (down and ystep < 0):
        ystep = -ystep
    return _march(world, xint, yint, xstep, ystep, 0 if right else 1, 0)


def _hit_distance(player: Player, point: tuple[float, float] | None) -> float:
    if point is None:
        return NO_HIT
    return distance(player.x, player.y, point[0], point[1])


def cast_ray(world: World, player: Player, angle: float) -> RayHit:
    """Cast one ray and return the nearer of its horizontal and vertical hits.

    The facing flags come from the angle as given; the stepping uses the
    angle brought into [0, 2*pi).
    """
    down = 0 < angle < math.pi
    right = angle < math.pi / 2 or angle > 3 * math.pi / 2
    angle = _normalize(angle)
    h_point = _horizontal(world, player, angle, down, right)
    v_point = _vertical(world, player, angle, down, right)
    h_dist = _hit_distance(player, h_point)
    v_dist = _hit_distance(player, v_point)
    correction = math.cos(player.angle - angle)
    if h_dist < v_dist:
        wall_x, wall_y = h_point if h_point else (0.0, 0.0)
        return RayHit(
            angle=angle,
            distance=h_dist * correction,
            raw_distance=h_dist,
            wall_x=wall_x,
            wall_y=wall_y,
            vertical=False,
            facing_down=down,
            facing_right=right,
            side="NO" if down else "SO",
            offset=int(math.fmod(int(wall_x), world.tile)),
        )
    wall_x, wall_y = v_point if v_point else (0.0, 0.0)
    return RayHit(
        angle=angle,
        distance=v_dist * correction,
        raw_distance=v_dist,
        wall_x=wall_x,
        wall_y=wall_y,
        vertical=True,
        facing_down=down,
        facing_right=right,
        side="WE" if right else "EA",
        offset=int(math.fmod(int(wall_y), world.tile)),
    )


def cast_rays(world: World, player: Player, num_rays: int = WIDTH) -> list[RayHit]:
    """Cast num_rays rays spread evenly across the field of view."""
    step = VIEW_ANGLE / num_rays
    angle = _normalize(player.angle - VIEW_ANGLE / 2)
    hits = []
    for _ in range(num_rays):
        hit = cast_ray(world, player, angle)
        hits.append(hit)
        angle = hit.angle + step
    return hits


def draw_column(
    frame: Frame,
    column: int,
    hit: RayHit,
    texture: XpmImage,
    tile: int,
    ceiling: int,
    floor: int,
) -> None:
    """Draw ceiling, textured wall slice and floor for one screen column."""
    ray_distance = max(hit.distance, 1.0)
    plane = (frame.width // 2) / math.tan(VIEW_ANGLE / 2)
    strip = (tile / ray_distance) * plane
    half = frame.height // 2
    top = max(int(half - strip / 2), 0)
    for y in range(top):
        frame.put(column, y, ceiling)
    pixels = texture.pixels
    last = len(pixels) - 1
    y = top
    while y < top + strip:
        from_top = int(y + strip / 2 - half)
        offset_y = int(from_top * (tile / strip))
        index = int(offset_y * tile) + hit.offset
        frame.put(column, y, pixels[min(max(index, 0), last)])
        y += 1
        if y > frame.height:
            break
    while y < frame.height:
        frame.put(column, y, floor)
        y += 1


def render_view(
    frame: Frame,
    world: World,
    player: Player,
    textures: Mapping[str, XpmImage],
    ceiling: int,
    floor: int,
) -> Sequence[RayHit]:
    """Draw the 3D view, one ray per frame column; return the hits."""
    hits = cast_rays(world, player, frame.width)
    for column, hit in enumerate(hits):
        draw_column(frame, column, hit, textures[hit.side], world.tile, ceiling, floor)
    return hits