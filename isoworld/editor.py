"""Editor state: tools, interface buttons, hovering and map editing."""

from __future__ import annotations

import enum
import math
from dataclasses import dataclass
from typing import Optional

from isoworld.geometry import Point, distance, point_in_quad
from isoworld.terrain import Color, TerrainMap, TextureKind, Tile

SIZE_STEPS = (8, 16, 32, 64)
DEFAULT_SIZE_STEP = 2
DEFAULT_FACTORS: Point = (15.0, 15.0)
SCREEN_ANCHOR: Point = (930.0, 510.0)
LEVEL_STEP = 0.1
ZOOM_STEP = 5
TOOLTIP_OFFSET = 82

_SIN_Y = math.sin(math.radians(25))


class Tool(enum.IntEnum):
    """Editing tools; the values match the tool buttons' positions."""

    BUCKET = 0
    PANNING = 1
    PRECISION = 2
    LEVEL = 3
    PICKER = 4


class ButtonId(enum.IntEnum):
    """Every interface button, in the order they are checked."""

    BUCKET = 0
    PANNING = 1
    PRECISION = 2
    LEVEL = 3
    PICKER = 4
    GRASS = 5
    DIRT = 6
    SAND = 7
    STONE = 8
    PLUS = 9
    MINUS = 10


class ButtonState(enum.Enum):
    """Mouse state of a button; the value is the tint it is drawn with."""

    IDLE = (255, 255, 255, 255)
    HOVERED = (200, 200, 200, 255)
    SELECTED = (150, 150, 150, 255)

    @property
    def tint(self) -> Color:
        return self.value


TOOLTIPS = {
    ButtonId.BUCKET: "B - Bucket\nLeft click on the tile you want to paint.",
    ButtonId.PANNING: "M - Panning\nLeft click to move around the map.",
    ButtonId.PRECISION: (
        "P - Precision\nGrab corner/tile with left click and use mouse to "
        "change height."
    ),
    ButtonId.LEVEL: (
        "L - Level\nLeft click to increase tile height, right click to "
        "decrease it."
    ),
    ButtonId.PICKER: "C - Picker\nLeft click on the tile you want to copy texture from.",
}

_TOOL_SIZE = (62.0, 62.0)
_TEXTURE_SIZE = (68.0, 68.0)

_LAYOUT: dict[ButtonId, tuple[Point, tuple[float, float]]] = {
    ButtonId.BUCKET: ((30.0, 270.0), _TOOL_SIZE),
    ButtonId.PANNING: ((30.0, 348.0), _TOOL_SIZE),
    ButtonId.PRECISION: ((30.0, 426.0), _TOOL_SIZE),
    ButtonId.LEVEL: ((30.0, 504.0), _TOOL_SIZE),
    ButtonId.PICKER: ((30.0, 582.0), _TOOL_SIZE),
    ButtonId.GRASS: ((30.0, 660.0), _TEXTURE_SIZE),
    ButtonId.DIRT: ((30.0, 738.0), _TEXTURE_SIZE),
    ButtonId.SAND: ((30.0, 816.0), _TEXTURE_SIZE),
    ButtonId.STONE: ((30.0, 894.0), _TEXTURE_SIZE),
    ButtonId.PLUS: ((74.0, 168.0), _TOOL_SIZE),
    ButtonId.MINUS: ((109.0, 168.0), _TOOL_SIZE),
}

_TEXTURE_BUTTONS = {
    ButtonId.GRASS: TextureKind.GRASS,
    ButtonId.DIRT: TextureKind.DIRT,
    ButtonId.SAND: TextureKind.SAND,
    ButtonId.STONE: TextureKind.STONE,
}


@dataclass
class Button:
    """A rectangular interface button."""

    id: ButtonId
    position: Point
    size: tuple[float, float]
    state: ButtonState = ButtonState.IDLE
    visible: bool = True

    def contains(self, pos: Point) -> bool:
        """Tell whether ``pos`` lies inside the button's rectangle."""
        left, top = self.position
        width, height = self.size
        x, y = pos
        return left <= x < left + width and top <= y < top + height


@dataclass(frozen=True)
class MouseInput:
    """Mouse position and the buttons held down."""

    pos: Point
    left: bool = False
    right: bool = False


@dataclass(frozen=True)
class _PrecisionGrab:
    tile: Tile
    is_tile: bool
    is_corner: bool
    dist_tile: float
    delta_z: tuple[float, float, float]


class Editor:
    """Everything the terrain editor knows besides how to draw it."""

    def __init__(self, size: int = SIZE_STEPS[DEFAULT_SIZE_STEP]) -> None:
        self.map = TerrainMap(size)
        self.size_step = DEFAULT_SIZE_STEP
        self.new_map_size: Optional[int] = None
        self.map_size_text = str(SIZE_STEPS[DEFAULT_SIZE_STEP])
        self.factors: Point = DEFAULT_FACTORS
        self.recalc = True
        self.selected_texture = TextureKind.GRASS
        self.buttons = {
            bid: Button(bid, pos, dims) for bid, (pos, dims) in _LAYOUT.items()
        }
        self.tooltip_text = ""
        self.tooltip_pos: Point = (0.0, 0.0)
        self.tooltip_visible = False
        self.hovered_tile: Optional[Tile] = None
        self.is_tile_hovered = False
        self.show_hover_circle = False
        self.use_hover_circle = False
        self.hover_circle_radius = self.factors[0] / 6
        self._pan_anchor: Point = (-1.0, -1.0)
        self._grab: Optional[_PrecisionGrab] = None
        self.tool = Tool.BUCKET
        self.buttons[ButtonId.BUCKET].state = ButtonState.SELECTED
        self.map.sort_draw_order(self.factors)
        self.translation = self._centered_translation()

    def _centered_translation(self) -> Point:
        cx, cy = self.map.center_point(self.factors)
        return SCREEN_ANCHOR[0] - cx, SCREEN_ANCHOR[1] - cy

    def select_tool(self, tool: Tool) -> None:
        """Make ``tool`` the active tool and mark its button as selected."""
        tool = Tool(tool)
        for bid in ButtonId:
            if bid <= ButtonId.PICKER:
                self.buttons[bid].state = ButtonState.IDLE
        self.use_hover_circle = tool is Tool.PRECISION
        self.buttons[ButtonId(tool.value)].state = ButtonState.SELECTED
        self.tool = tool

    def select_texture(self, texture: TextureKind) -> None:
        """Choose the texture the bucket paints with."""
        self.selected_texture = TextureKind(texture)

    def _set_size_step(self, step: int) -> None:
        self.size_step = step
        size = SIZE_STEPS[step]
        self.map_size_text = str(size)
        self.new_map_size = size

    def grow_map(self) -> None:
        """Ask for the next larger map size, if there is one."""
        if self.size_step < len(SIZE_STEPS) - 1:
            self._set_size_step(self.size_step + 1)

    def shrink_map(self) -> None:
        """Ask for the next smaller map size, if there is one."""
        if self.size_step > 0:
            self._set_size_step(self.size_step - 1)

    def apply_resize(self) -> bool:
        """Replace the map with a flat one of the requested size, if any."""
        if self.new_map_size is None or self.new_map_size <= 0:
            return False
        self.map = TerrainMap(self.new_map_size)
        self.map.sort_draw_order(self.factors)
        self.new_map_size = None
        self.hovered_tile = None
        self.is_tile_hovered = False
        self.show_hover_circle = False
        self._grab = None
        self.recalc = True
        return True

    def recalculate(self) -> None:
        """Recompute the screen position and shading of every tile."""
        self.map.project(self.factors, self.translation)
        self.recalc = False

    def _quad(self, i: int, j: int) -> list[Point]:
        tiles = self.map.tiles
        return [
            tiles[i][j].screen,
            tiles[i][j + 1].screen,
            tiles[i + 1][j + 1].screen,
            tiles[i + 1][j].screen,
        ]

    def update_hover(self, mouse: MouseInput) -> None:
        """Find the tile, or tile corner, under the mouse."""
        self.show_hover_circle = False
        self.is_tile_hovered = False
        self.hover_circle_radius = self.factors[0] / 6
        last = self.map.size - 1
        for tile in self.map.draw_order:
            if tile.index_x >= last or tile.index_y >= last:
                continue
            if (
                self.use_hover_circle
                and distance(tile.screen, mouse.pos) < self.hover_circle_radius
            ):
                self.show_hover_circle = True
                self.is_tile_hovered = False
                self.hovered_tile = tile
            elif point_in_quad(self._quad(tile.index_x, tile.index_y), mouse.pos):
                self.hovered_tile = tile
                self.show_hover_circle = False
                self.is_tile_hovered = True

    def apply_tool(self, mouse: MouseInput) -> None:
        """Run the active tool for the current mouse state."""
        {
            Tool.BUCKET: self._bucket,
            Tool.PANNING: self._panning,
            Tool.PRECISION: self._precision,
            Tool.LEVEL: self._level,
            Tool.PICKER: self._picker,
        }[self.tool](mouse)

    def _bucket(self, mouse: MouseInput) -> None:
        if mouse.left and self.is_tile_hovered and self.hovered_tile is not None:
            self.hovered_tile.texture = self.selected_texture

    def _panning(self, mouse: MouseInput) -> None:
        if not mouse.left:
            self._pan_anchor = mouse.pos
            return
        ax, ay = self._pan_anchor
        mx, my = mouse.pos
        tx, ty = self.translation
        self.translation = (tx + mx - ax, ty + my - ay)
        self.recalc = True
        self._pan_anchor = mouse.pos

    def _precision(self, mouse: MouseInput) -> None:
        if self.hovered_tile is None:
            return
        if not mouse.left:
            self._grab = self._make_grab(mouse)
            return
        if self._grab is not None:
            self._drag(mouse, self._grab)

    def _make_grab(self, mouse: MouseInput) -> _PrecisionGrab:
        tile = self.hovered_tile
        tiles = self.map.tiles
        x, y = tile.index_x, tile.index_y
        base = tiles[x][y].z
        return _PrecisionGrab(
            tile=tile,
            is_tile=self.is_tile_hovered,
            is_corner=self.show_hover_circle,
            dist_tile=tiles[x][y].screen[1] - mouse.pos[1],
            delta_z=(
                tiles[x + 1][y].z - base,
                tiles[x + 1][y + 1].z - base,
                tiles[x][y + 1].z - base,
            ),
        )

    def _drag(self, mouse: MouseInput, grab: _PrecisionGrab) -> None:
        tiles = self.map.tiles
        x, y = grab.tile.index_x, grab.tile.index_y
        origin = tiles[x][y]
        new_y = mouse.pos[1] - self.translation[1] + grab.dist_tile
        height = _SIN_Y * origin.y + _SIN_Y * origin.x - new_y / self.factors[1]
        if grab.is_tile:
            origin.z = height
            tiles[x + 1][y].z = height + grab.delta_z[0]
            tiles[x + 1][y + 1].z = height + grab.delta_z[1]
            tiles[x][y + 1].z = height + grab.delta_z[2]
            self.recalc = True
        elif grab.is_corner:
            origin.z = height
            self.recalc = True

    def _level(self, mouse: MouseInput) -> None:
        if not self.is_tile_hovered or self.hovered_tile is None:
            return
        x, y = self.hovered_tile.index_x, self.hovered_tile.index_y
        if mouse.left:
            self.map.raise_tile(x, y, LEVEL_STEP)
            self.recalc = True
        elif mouse.right:
            self.map.raise_tile(x, y, -LEVEL_STEP)
            self.recalc = True

    def _picker(self, mouse: MouseInput) -> None:
        if mouse.left and self.is_tile_hovered and self.hovered_tile is not None:
            self.selected_texture = self.hovered_tile.texture

    def zoom(self, delta: float, mouse_pos: Point) -> bool:
        """Scale the map by ``delta`` wheel steps, keeping the point under
        the mouse in place. Return whether the zoom was applied."""
        fx, fy = self.factors
        new_fx = fx + delta * ZOOM_STEP
        new_fy = fy + delta * ZOOM_STEP
        if new_fx <= 0 or new_fy <= 0:
            return False
        tx, ty = self.translation
        rel_x, rel_y = mouse_pos[0] - tx, mouse_pos[1] - ty
        shift_x = rel_x / fx * new_fx - rel_x
        shift_y = rel_y / fy * new_fy - rel_y
        self.factors = (new_fx, new_fy)
        self.translation = (tx - shift_x, ty - shift_y)
        self.recalc = True
        return True

    def rotate(self, degrees: float) -> None:
        """Turn the map horizontally and reorder it for drawing."""
        self.map.rotate(degrees)
        self.map.sort_draw_order(self.factors)
        self.recalc = True

    def _press(self, bid: ButtonId) -> None:
        if bid <= ButtonId.PICKER:
            self.select_tool(Tool(bid.value))
        elif bid in _TEXTURE_BUTTONS:
            self.select_texture(_TEXTURE_BUTTONS[bid])
        elif bid is ButtonId.PLUS:
            self.grow_map()
        else:
            self.shrink_map()

    def click_button(self, pos: Point) -> bool:
        """Press the button under ``pos``; return whether there was one."""
        for button in self.buttons.values():
            if button.contains(pos):
                self._press(button.id)
                return True
        return False

    def hover_buttons(self, pos: Point) -> bool:
        """Update button highlighting and the tooltip for the mouse at ``pos``.

        Return whether an idle button became hovered.
        """
        for button in self.buttons.values():
            if button.state is ButtonState.HOVERED:
                button.state = ButtonState.IDLE
        self.tooltip_visible = False
        for button in self.buttons.values():
            if not button.contains(pos):
                continue
            if button.id < ButtonId.GRASS:
                self.tooltip_text = TOOLTIPS[button.id]
                bx, by = button.position
                self.tooltip_pos = (bx + TOOLTIP_OFFSET, by)
                self.tooltip_visible = True
            if button.state is ButtonState.IDLE:
                button.state = ButtonState.HOVERED
                return True
            if button.state is ButtonState.HOVERED:
                button.state = ButtonState.IDLE
        return False