# isoworld

A small isometric terrain editor built on pygame. It shows a square grid of
tiles in isometric projection. You can raise and lower the grid, paint its
tiles, rotate and zoom the view, and save the map to a plain text file.

## Installation

```
pip install .
```

To run the tests, install the test extra and run pytest:

```
pip install ".[test]"
pytest
```

## Running

```
isoworld              # start with a fresh, flat 32x32 map
isoworld save_file    # open a map written earlier
isoworld -h           # print the usage text
```

With more than one argument the command prints `Wrong number of arguments`
and exits with status 84. If the save file cannot be read or is malformed, it
prints the reason on standard error and exits with status 84.

When the window is closed, the current map is written to `autosave` in the
working directory.

## Controls

| Input              | Effect                                                   |
|--------------------|----------------------------------------------------------|
| Left / right click | Apply the selected tool                                  |
| Mouse wheel        | Zoom in / out around the cursor                          |
| Left / right arrow | Rotate the map horizontally by 5 degrees                 |
| `B`                | Bucket: paint the hovered tile with the chosen texture   |
| `M`                | Panning: drag the map with the left button               |
| `P`                | Precision: grab a corner or a tile and drag its height   |
| `L`                | Level: left button raises a tile, right button lowers it |
| `C`                | Picker: take the texture of the hovered tile             |

The tool buttons on the left side of the window select the same tools. The
texture buttons below them (grass, dirt, sand, stone) choose the texture the
bucket paints with. The `+` and `-` buttons switch the map size between 8, 16,
32 and 64; switching replaces the map with a flat one of the new size.

## Save file format

The first line holds the map size *n*. It is followed by *n* × *n* lines, one
per grid point, in row order:

```
x y z texture
```

The coordinates are written with two decimals. `texture` is the texture
number: 0 grass, 1 dirt, 2 sand, 3 stone. A file is accepted only if every
line holds nothing but digits, `.`, `-`, spaces and line breaks.

## Assets

The window loads its images from `img/` and its font from `font/nunito.ttf`,
both relative to the working directory. These files are not part of the
package. Where an image is missing, a plain surface of the right size is used
instead, and where the font is missing, pygame's default font is used. Tiles
are drawn as solid polygons filled with the average colour of their texture
image, shaded by height; the texture images are not drawn onto the tiles.

## Library use

The editing model works without a window:

```python
from isoworld.editor import Editor, MouseInput, Tool
from isoworld.terrain import TerrainMap

editor = Editor(16)
editor.select_tool(Tool.LEVEL)
editor.rotate(5)
editor.recalculate()
editor.update_hover(MouseInput((930.0, 510.0)))
editor.apply_tool(MouseInput((930.0, 510.0), left=True))

terrain = TerrainMap(8)
terrain.raise_tile(2, 3, 0.5)
terrain.save("my_map")
print(terrain.dump())
```

The modules are:

- `isoworld.app` – the `isoworld` command (`main`, `usage`).
- `isoworld.editor` – `Editor`, the tools (`Tool`), the interface buttons
  (`Button`, `ButtonId`, `ButtonState`) and `MouseInput`.
- `isoworld.terrain` – `TerrainMap`, `Tile`, `TextureKind` and `check_line`.
- `isoworld.render` – `Renderer`, which draws an `Editor` onto a pygame surface.
- `isoworld.geometry` – isometric projection, distances, point-in-quad tests,
  rotation and `parse_float`.
- `isoworld.cformat` – a printf-style formatter (`format`, `fprintf`,
  `printf`) used for the save file.
- `isoworld.numutils` and `isoworld.textutils` – small integer and ASCII
  string helpers.