"""Drawing the editor with pygame: map tiles, hover marks and the interface."""

from __future__ import annotations

from os import PathLike
from pathlib import Path
from typing import Union

import pygame

from isoworld.editor import ButtonId, Editor
from isoworld.terrain import Color, TextureKind, Tile

WINDOW_SIZE = (1920, 1080)
WINDOW_TITLE = "my_world"
FRAMERATE = 60

FONT_PATH = "font/nunito.ttf"
FONT_SIZE = 30
TEXT_COLOR = (255, 255, 255)
MAP_SIZE_TEXT_POS = (92, 119)
TOOLS_BACKGROUND_POS = (0, 30)
HOVER_TILE_COLOR: Color = (120, 120, 120, 255)
HOVER_CIRCLE_FILL = (0, 0, 0, 150)
HOVER_CIRCLE_OUTLINE = (0, 0, 0, 175)
HOVER_CIRCLE_THICKNESS = 5
TOOLTIP_FILL = (0, 0, 0, 200)
TOOLTIP_PADDING = (25, 40)
TOOLTIP_TEXT_OFFSET = 10

_TILE_SIZE = (16, 16)
_TOOL_SIZE = (62, 62)
_TEXTURE_BUTTON_SIZE = (68, 68)

TILE_TEXTURES = {
    TextureKind.GRASS: ("img/tiles/grass.png", _TILE_SIZE),
    TextureKind.DIRT: ("img/tiles/dirt.png", _TILE_SIZE),
    TextureKind.SAND: ("img/tiles/sand.png", _TILE_SIZE),
    TextureKind.STONE: ("img/tiles/stone.png", _TILE_SIZE),
}

BUTTON_TEXTURES = {
    ButtonId.BUCKET: ("img/tools/bucket.png", _TOOL_SIZE),
    ButtonId.PANNING: ("img/tools/panning.png", _TOOL_SIZE),
    ButtonId.PRECISION: ("img/tools/precision.png", _TOOL_SIZE),
    ButtonId.LEVEL: ("img/tools/level.png", _TOOL_SIZE),
    ButtonId.PICKER: ("img/tools/picker.png", _TOOL_SIZE),
    ButtonId.GRASS: ("img/tiles/grass_btn.png", _TEXTURE_BUTTON_SIZE),
    ButtonId.DIRT: ("img/tiles/dirt_btn.png", _TEXTURE_BUTTON_SIZE),
    ButtonId.SAND: ("img/tiles/sand_btn.png", _TEXTURE_BUTTON_SIZE),
    ButtonId.STONE: ("img/tiles/stone_btn.png", _TEXTURE_BUTTON_SIZE),
    ButtonId.PLUS: ("img/tools/plus_btn.png", _TOOL_SIZE),
    ButtonId.MINUS: ("img/tools/minus_btn.png", _TOOL_SIZE),
}

TOOLS_BACKGROUND = ("img/backgrounds/interface_background.png", (135, 476))
UI_BACKGROUND = ("img/backgrounds/ui_bg3_auto_x1.jpg", WINDOW_SIZE)

_OPAQUE_WHITE = (255, 255, 255, 255)
_TRANSPARENT = (0, 0, 0, 0)


def _load_image(path: Path, size: tuple[int, int], fallback: tuple[int, int, int, int]) -> pygame.Surface:
    """Load an image, or make a plain surface of ``size`` if it cannot be read."""
    if path.is_file():
        try:
            image = pygame.image.load(str(path))
        except pygame.error:
            image = None
        if image is not None:
            if pygame.display.get_init() and pygame.display.get_surface() is not None:
                image = image.convert_alpha()
            return image
    surface = pygame.Surface(size, pygame.SRCALPHA)
    surface.fill(fallback)
    return surface


def _modulate(base: tuple[int, ...], tint: tuple[int, ...]) -> tuple[int, int, int]:
    r, g, b = (c * t // 255 for c, t in zip(base[:3], tint[:3]))
    return r, g, b


class Renderer:
    """Draws an :class:`Editor` onto a pygame surface."""

    def __init__(self, screen: pygame.Surface, asset_dir: Union[str, PathLike]) -> None:
        self.screen = screen
        self.asset_dir = Path(asset_dir)
        self.tile_textures = {
            kind: _load_image(self.asset_dir / rel, size, _OPAQUE_WHITE)
            for kind, (rel, size) in TILE_TEXTURES.items()
        }
        self._tile_colors = {
            kind: tuple(pygame.transform.average_color(surface))
            for kind, surface in self.tile_textures.items()
        }
        self.button_textures = {
            bid: _load_image(self.asset_dir / rel, size, _TRANSPARENT)
            for bid, (rel, size) in BUTTON_TEXTURES.items()
        }
        self.tools_background = _load_image(
            self.asset_dir / TOOLS_BACKGROUND[0], TOOLS_BACKGROUND[1], _TRANSPARENT
        )
        self.ui_background = _load_image(
            self.asset_dir / UI_BACKGROUND[0], UI_BACKGROUND[1], _TRANSPARENT
        )
        pygame.font.init()
        font_file = self.asset_dir / FONT_PATH
        self.font = pygame.font.Font(str(font_file) if font_file.is_file() else None, FONT_SIZE)

    def draw(self, editor: Editor) -> None:
        """Draw the background, the map and the interface for ``editor``."""
        self.screen.fill((0, 0, 0))
        self.screen.blit(self.ui_background, (0, 0))
        self._draw_map(editor)
        self._draw_interface(editor)

    def _is_hovered(self, editor: Editor, tile: Tile) -> bool:
        hovered = editor.hovered_tile
        return (
            editor.is_tile_hovered
            and hovered is not None
            and hovered.index_x == tile.index_x
            and hovered.index_y == tile.index_y
        )

    def _draw_map(self, editor: Editor) -> None:
        tiles = editor.map.tiles
        last = editor.map.size - 1
        for tile in editor.map.draw_order:
            i, j = tile.index_x, tile.index_y
            if i >= last or j >= last:
                continue
            quad = [
                tiles[i][j].screen,
                tiles[i][j + 1].screen,
                tiles[i + 1][j + 1].screen,
                tiles[i + 1][j].screen,
            ]
            tint = HOVER_TILE_COLOR if self._is_hovered(editor, tile) else tile.color
            colour = _modulate(self._tile_colors[tile.texture], tint)
            pygame.draw.polygon(self.screen, colour, quad)
        self._draw_hover_circle(editor)

    def _draw_hover_circle(self, editor: Editor) -> None:
        if not (editor.use_hover_circle and editor.show_hover_circle):
            return
        if editor.hovered_tile is None:
            return
        radius = editor.hover_circle_radius
        outer = radius + HOVER_CIRCLE_THICKNESS
        side = int(2 * outer) + 2
        centre = (side / 2, side / 2)
        overlay = pygame.Surface((side, side), pygame.SRCALPHA)
        pygame.draw.circle(overlay, HOVER_CIRCLE_FILL, centre, radius)
        pygame.draw.circle(overlay, HOVER_CIRCLE_OUTLINE, centre, outer, HOVER_CIRCLE_THICKNESS)
        x, y = editor.hovered_tile.screen
        self.screen.blit(overlay, (x - side / 2, y - side / 2))

    def _draw_interface(self, editor: Editor) -> None:
        self.screen.blit(self.tools_background, TOOLS_BACKGROUND_POS)
        for bid, button in editor.buttons.items():
            sprite = self.button_textures[bid].copy()
            sprite.fill(button.state.tint, special_flags=pygame.BLEND_RGBA_MULT)
            self.screen.blit(sprite, button.position)
        if editor.tooltip_visible:
            self._draw_tooltip(editor)
        size_text = self.font.render(editor.map_size_text, True, TEXT_COLOR)
        self.screen.blit(size_text, MAP_SIZE_TEXT_POS)

    def _draw_tooltip(self, editor: Editor) -> None:
        lines = [self.font.render(line, True, TEXT_COLOR) for line in editor.tooltip_text.split("\n")]
        width = max((line.get_width() for line in lines), default=0)
        height = sum(line.get_height() for line in lines)
        background = pygame.Surface(
            (width + TOOLTIP_PADDING[0], height + TOOLTIP_PADDING[1]), pygame.SRCALPHA
        )
        background.fill(TOOLTIP_FILL)
        x, y = editor.tooltip_pos
        self.screen.blit(background, (x, y))
        top = y + TOOLTIP_TEXT_OFFSET
        for line in lines:
            self.screen.blit(line, (x + TOOLTIP_TEXT_OFFSET, top))
            top += line.get_height()