"""The height map: tiles, projection, draw order, rotation and saving."""

from __future__ import annotations

import enum
from dataclasses import dataclass, field
from os import PathLike
from typing import Iterator, Union

from isoworld.cformat import format as cformat
from isoworld.geometry import Point, project_iso_point, rotate_point

Color = tuple[int, int, int, int]
WHITE: Color = (255, 255, 255, 255)

_LINE_CHARS = frozenset(".-\n 0123456789")


class TextureKind(enum.IntEnum):
    """Ground textures a tile can carry; the values are the saved ids."""

    GRASS = 0
    DIRT = 1
    SAND = 2
    STONE = 3


@dataclass
class Tile:
    """One corner point of the grid, and the tile that starts at it."""

    x: float
    y: float
    z: float
    index_x: int
    index_y: int
    texture: TextureKind = TextureKind.SAND
    color: Color = WHITE
    screen: Point = (0.0, 0.0)
    flat: Point = (0.0, 0.0)


@dataclass
class TerrainMap:
    """A square grid of ``size`` by ``size`` tile corners."""

    size: int
    tiles: list[list[Tile]] = field(init=False, repr=False)
    draw_order: list[Tile] = field(init=False, repr=False)

    def __init__(self, size: int) -> None:
        if size < 1:
            raise ValueError("a map needs at least one tile")
        self.size = size
        self.tiles = [
            [Tile(x=float(i), y=float(j), z=0.0, index_x=i, index_y=j) for j in range(size)]
            for i in range(size)
        ]
        self.draw_order = [tile for row in self.tiles for tile in row]

    def _all_tiles(self) -> Iterator[Tile]:
        for row in self.tiles:
            yield from row

    def tile(self, i: int, j: int) -> Tile:
        """Return the tile at grid position ``(i, j)``."""
        if not (0 <= i < self.size and 0 <= j < self.size):
            raise IndexError(f"tile ({i}, {j}) is outside a map of size {self.size}")
        return self.tiles[i][j]

    def center_point(self, factors: Point) -> Point:
        """Return the projected centre of the map at height zero."""
        last = self.size - 1
        cx = (self.tiles[0][0].x + self.tiles[last][last].x) / 2
        cy = (self.tiles[last][0].y + self.tiles[0][last].y) / 2
        return project_iso_point(cx, cy, 0, factors)

    def project(self, factors: Point, translation: Point) -> None:
        """Compute every tile's screen position and its height shading."""
        tx, ty = translation
        last = self.size - 1
        for i, row in enumerate(self.tiles):
            for j, tile in enumerate(row):
                sx, sy = project_iso_point(tile.x, tile.y, tile.z, factors)
                tile.screen = (sx + tx, sy + ty)
                if i >= last or j >= last:
                    continue
                mean = (
                    abs(tile.z)
                    + abs(self.tiles[i + 1][j].z)
                    + abs(self.tiles[i][j + 1].z)
                    + abs(self.tiles[i + 1][j + 1].z)
                ) / 4
                shade = int(255 - min(mean * 10, 100))
                tile.color = (shade, shade, shade, tile.color[3])

    def sort_draw_order(self, factors: Point) -> None:
        """Order tiles back to front by their flat projected height.

        The last entry of the draw order keeps its place.
        """
        for tile in self.draw_order[:-1]:
            tile.flat = project_iso_point(tile.x, tile.y, 0, factors)
        head = sorted(self.draw_order[:-1], key=lambda tile: tile.flat[1])
        self.draw_order = head + self.draw_order[-1:]

    def rotate(self, degrees: float) -> None:
        """Turn the whole map around its centre in the horizontal plane."""
        last = self.size - 1
        corner, origin = self.tiles[last][last], self.tiles[0][0]
        cx = (corner.x + origin.x) / 2
        cy = (corner.y + origin.y) / 2
        for tile in self._all_tiles():
            tile.x, tile.y = rotate_point(tile.x, tile.y, cx, cy, degrees)

    def raise_tile(self, i: int, j: int, delta: float) -> None:
        """Move the four corners of tile ``(i, j)`` up by ``delta``."""
        if not (0 <= i < self.size - 1 and 0 <= j < self.size - 1):
            raise IndexError(f"no tile starts at ({i}, {j})")
        for di, dj in ((0, 0), (1, 0), (1, 1), (0, 1)):
            self.tiles[i + di][j + dj].z += delta

    def dump(self) -> str:
        """Return the map in its save-file text form."""
        lines = [cformat("%d\n", self.size)]
        lines.extend(
            cformat("%.2f %.2f %.2f %d\n", tile.x, tile.y, tile.z, int(tile.texture))
            for tile in self._all_tiles()
        )
        return "".join(lines)

    def save(self, path: Union[str, PathLike]) -> None:
        """Write the map to ``path``, replacing any existing file."""
        with open(path, "w", encoding="ascii", newline="") as stream:
            stream.write(self.dump())


def check_line(line: str) -> bool:
    """Tell whether a save-file line holds only digits, dots, minus signs,
    spaces and newlines."""
    return all(char in _LINE_CHARS for char in line)