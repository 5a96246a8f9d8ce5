# towerdef

A full-screen tower defense game drawn with pygame. Each time you start a
round, the game builds a new map on a 40 × 30 tile grid. A random path runs
from one edge of the board to another. Obstacles are scattered around the
path without overlapping it or each other, and some of them have canopies
that turn see-through when the mouse is over them. A sidebar shows your
energy, gears and lives, and it lists the towers you can place.

## Installing

```
pip install .
```

## Playing

```
towerdef
towerdef --assets path/to/assets
```

`--assets` names the asset directory. The default is `./assets`. The window
opens full-screen and has no frame.

The game expects this layout inside the asset directory:

- `fonts/FreePixel.ttf`. This file is optional. Without it, pygame's default
  font is used.
- `textures/menu/start_button.png` and `quit_button.png`
- `textures/gui/`: `backdrop.png`, `energy.png`, `gears.png`,
  `money_box.png`, `lives_box.png`, `health_bar.png`, `tower_box.png`,
  `hover_tower.png`, `placeable_disk.png`, `select_arrow_left.png`,
  `select_arrow_right.png`, `damage_icon.png`, `range_icon.png`,
  `attack_speed_icon.png`, `pierce_icon.png`, `splash_damage_icon.png` and
  `splash_radius.png`
- `textures/environments/terrain`, `paths` and `obstacles`: images whose
  names contain the environment number followed by a dash, for example
  `1-grass.png`. The only environment is 1. An obstacle image whose name
  contains `_bottom` is paired with the image of the same name with `_top`
  in its place, which is drawn as a canopy above it.
- `textures/towers/`: one image per tower. The images are taken in
  file-name order.
- `data/towers.dat`: one block of `key value` lines per tower, in the same
  order as the tower images, with blocks separated by a blank line. The game
  reads `name`, `description`, `price`, `damage`, `range`, `speed`, and
  optionally `pierce`, `splash_radius` and `splash_damage`. `price` must be
  an integer and `range` a number of tiles.

A missing texture raises `FileNotFoundError`.

### Controls

- Click **Start** to build a map, or **Quit** to leave.
- Click a tower in the sidebar to pick it up. The tower follows the mouse,
  and a disk under it shows its range. The disk turns red where the tower
  would overlap the path, an obstacle, another tower or the sidebar.
- Click to place the tower. This works only on a free spot and only if you
  have enough energy. Placing the tower takes its price from your energy.
- Click a placed tower to see its stats. The arrow buttons step through its
  two targeting priorities: First, Last, Strong, Weak, Fast, Slow, In-file,
  Clustered, Healthy and Unhealthy. Clicking elsewhere closes the stats.
- **Esc** drops the tower you are holding. The tower is also dropped if you
  move it back over the sidebar or out of the window. **F1** turns the FPS
  counter on and off.

## What the game does not do

There are no enemies and no waves yet. Towers do not attack, lives never
change and gears are never spent. The only thing energy pays for is placing
towers. The path difficulty is fixed, and nothing in the game or on the
command line changes it.

## Using the pieces

The modules also work on their own:

- `towerdef.geometry`: `Rect` (`contains`, `intersection`, `intersects`),
  `Transform` (`transform_point`, `inverse`, `transform_rect`) and
  `make_transform`
- `towerdef.sprite`: `Texture`, `Origin`, `Sprite`, `Button`, `Canopy`,
  `Obstacle`, `Terrain`, `Path` and `TowerGUI`
- `towerdef.collision`: `pixel_perfect_test`, `circle_test`,
  `bounding_box_test`, `create_texture_and_bitmask`, `sprite_center`,
  `sprite_size`, `OrientedBoundingBox` and `BitmaskManager`
- `towerdef.label`: `Label`, `TextBox`, `VariableLabel`, `Anchor` and
  `word_wrap`
- `towerdef.group`: `Group`, a layered container that updates, draws and
  routes clicks to the sprites it holds
- `towerdef.placeable`: `Placeable`, `Tower`, `Focus`, `Resources` and `Hand`
- `towerdef.pathgen`: `PathGenerator`, `distances_ok`, `wrap`,
  `parse_tower_data`, `load_tower_data` and `environment_files`
- `towerdef.game`: `Game` and `main`

`PathGenerator` takes a difficulty from 0 to 3 and raises `ValueError` for
any other value. Its `generate` method keeps drawing paths until one passes
`distances_ok`, and then returns that path's tiles as `(column, row)` pairs.

```python
import random
from towerdef.pathgen import PathGenerator, distances_ok

generator = PathGenerator(1, random.Random(42))
waypoints = generator.generate()
assert distances_ok(waypoints)
```

`parse_tower_data` turns lines into one dictionary per block. If a key is
repeated, the first value wins.

```python
from towerdef.pathgen import parse_tower_data

records = parse_tower_data(["name Cannon", "price 50", "", "name Laser"])
assert records == [{"name": "Cannon", "price": "50"}, {"name": "Laser"}]
```