# cubraycaster

A small first-person raycaster for grid maps. You describe a scene in a
`.cub` file, give it four XPM wall textures, and walk through it in a
900×900 pygame window. A minimap in the top-left corner shows the walls
near you and a red marker for the player.

## Installing

```
pip install .
```

To run the tests:

```
pip install ".[test]"
pytest
```

## Running

```
cubraycaster path/to/scene.cub
```

- With no argument or more than one, it prints `Check your arguments !`.
- If the name does not end in `.cub` or the file cannot be read, it
  prints `Wrong path`.
- If the scene is not valid, it prints `Error` and `Not valid`.
- If a texture cannot be read as XPM, it exits without opening a window.

The command exits with status 1 when you quit with Esc or Q, and 0
otherwise.

## Scene files

A scene starts with six element lines, in any order; blank lines between
them are ignored. Each line is an identifier and one value separated by
spaces, and each identifier must appear exactly once:

```
NO ./textures/north.xpm
SO ./textures/south.xpm
WE ./textures/west.xpm
EA ./textures/east.xpm
F 220,100,0
C 225,30,0
```

- `NO`, `SO`, `WE`, `EA` give the path of a readable `.xpm` texture for
  each wall face.
- `F` and `C` give the floor and ceiling colours as three comma-separated
  plain numbers from 0 to 255.

The map follows the elements:

```
        1111111111
        1000000001
111111111011000001
100000000000000001
1111111110110N0001
        1111111111
```

- Only `1` (wall), `0` (floor), space, and `N`, `S`, `E`, `W` are allowed.
- Exactly one of `N`, `S`, `E` or `W` marks where the player starts and
  which way the player faces.
- Every non-wall cell must be enclosed: it may not sit on the first or
  last row or column, nor next to a space or the end of a row.
- The map must be the last thing in the file; no further line breaks may
  follow it.

The tile size in the 3D view is the height of the north texture, and the
textures are sampled as square images of that size.

## Controls

| Key          | Action                        |
|--------------|-------------------------------|
| W / S        | move forward / backward       |
| A / D        | step left / right             |
| ← / →        | turn left / right             |
| mouse        | turn toward the pointer's side |
| `-` (keypad) | hide the mouse pointer        |
| `+` (keypad) | show the mouse pointer        |
| Esc / Q      | quit                          |

Moving forward is refused when either edge of the field of view would
reach a wall; every move is refused when its target point is in a wall.

## Using it as a library

```python
from cubraycaster.scene import load_scene
from cubraycaster.game import Game, load_textures

scene = load_scene("maps/demo.cub")
print(hex(scene.floor_color()), hex(scene.ceiling_color()))

game = Game(scene, load_textures(scene))
frame = game.render()          # a Frame of 0xRRGGBB pixels
print(frame.get(450, 450))
```

- `cubraycaster.scene`: `Scene`, `ParseError`, `parse_scene`,
  `load_scene`, `split_sections`, `parse_elements`, `parse_rgb` and
  `check_map`.
- `cubraycaster.xpm`: `XpmImage`, `XpmError`, `load_xpm`,
  `parse_xpm_text`, `parse_xpm`, `strip_comments`, `quoted_lines` and
  `parse_color`. `cubraycaster.colors.lookup_color` resolves X11 colour
  names, case-insensitively.
- `cubraycaster.raycast`: `Frame`, `World`, `Player`, `RayHit`,
  `spawn_player`, `cast_ray`, `cast_rays`, `draw_column` and
  `render_view`.
- `cubraycaster.minimap`: `draw_minimap`, `draw_tile`, `draw_line` and
  `draw_circle`.
- `cubraycaster.movement`: `Action`, `Controls`, `move` and
  `apply_controls`.
- `cubraycaster.textutils`: small helpers such as `atoi`, `split` and
  `read_lines`.
- `cubraycaster.game`: `Game` (with `render`, `on_mouse` and `tick`),
  `load_textures`, `run` and `main`.

## What it does not do

There are no sprites, doors, enemies, weapons or sound; the world is only
walls, a floor colour and a ceiling colour. Textures must be XPM files;
other image formats are not read. The window size is fixed at 900×900.