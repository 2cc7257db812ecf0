"""Command entry point: argument handling, map loading and the main loop."""

from __future__ import annotations

import sys
from os import PathLike
from pathlib import Path
from typing import Optional, Sequence, Union

from isoworld.editor import Editor, MouseInput, Tool
from isoworld.geometry import parse_float
from isoworld.numutils import parse_int
from isoworld.terrain import TerrainMap, TextureKind, check_line

AUTOSAVE_PATH = "autosave"
ROTATION_STEP = 5.0
EXIT_FAILURE = 84

_USAGE = (
    "USAGE\n"
    "\t./my_world [save_file]\n"
    "\n"
    "DESCRIPTION\n"
    "\tsave_file\t\tOptional, path to a file representing a saved map\n"
    "\n"
    "USER INPUT\n"
    "\tRight/Left click\tAllows the user to modify the map based on the tool selected\n"
    "\tMouse wheel\t\tAllows the user to zoom in/out of the map\n"
    "\tLeft/Right arrow\tAllows the user to rotate horizontally the map\n"
    "\n"
    "TOOLS\n"
    "\tBUCKET (key : B)\t\tAllows the user to change the texture of the tile\n"
    "\t\t\t\t\t(the user can choose the default texture via a box in the "
    "bottom left corner)\n"
    "\tPANNING (key : M)\t\tAllows the user to move with the mouse\n"
    "\tPRECISION (key : P)\t\tAllows the user to level the terrain more "
    "precisely (by either picking a corner of a tile or a tile)\n"
    "\tLEVEL (key : L)\t\t\tAllows the user to level the map, either up "
    "(with left click) or down (with right click)\n"
    "\tPICKER (key : C)\t\tAllows the user to pick the default texture "
    "directly on the map\n"
    "\n"
)


def usage() -> str:
    """Return the command's help text."""
    return _USAGE


def _load_terrain(path: Union[str, PathLike]) -> TerrainMap:
    """Read a map in the save-file format; raise ValueError if it is malformed."""
    with open(path, encoding="ascii", errors="replace") as stream:
        lines = stream.read().splitlines(keepends=True)
    if not lines:
        raise ValueError("the save file is empty")
    bad = next((line for line in lines if not check_line(line)), None)
    if bad is not None:
        raise ValueError(f"invalid line in save file: {bad!r}")
    size = parse_int(lines[0].strip())
    if size < 1:
        raise ValueError("the save file gives no valid map size")
    records = lines[1:1 + size * size]
    if len(records) < size * size:
        raise ValueError("the save file holds too few tiles")
    terrain = TerrainMap(size)
    tiles = (tile for row in terrain.tiles for tile in row)
    for tile, record in zip(tiles, records):
        fields = record.split()
        if len(fields) != 4:
            raise ValueError(f"a tile needs four fields: {record!r}")
        tile.x, tile.y, tile.z = (parse_float(value) for value in fields[:3])
        texture_id = parse_int(fields[3])
        if texture_id in TextureKind._value2member_map_:
            tile.texture = TextureKind(texture_id)
    return terrain


def _install_map(editor: Editor, terrain: TerrainMap) -> None:
    editor.map = terrain
    terrain.sort_draw_order(editor.factors)
    cx, cy = terrain.center_point(editor.factors)
    editor.translation = (930.0 - cx, 510.0 - cy)
    editor.recalc = True


def _handle_event(editor: Editor, event, mouse: MouseInput) -> bool:
    """Apply one input event to ``editor``; return False once the window closes."""
    import pygame

    running = event.type != pygame.QUIT
    if event.type == pygame.KEYUP:
        if event.key == pygame.K_RIGHT:
            editor.rotate(ROTATION_STEP)
        elif event.key == pygame.K_LEFT:
            editor.rotate(-ROTATION_STEP)
    if event.type == pygame.MOUSEWHEEL:
        editor.zoom(event.y, mouse.pos)
    if event.type == pygame.KEYDOWN:
        shortcuts = {
            pygame.K_b: Tool.BUCKET,
            pygame.K_m: Tool.PANNING,
            pygame.K_p: Tool.PRECISION,
            pygame.K_l: Tool.LEVEL,
            pygame.K_c: Tool.PICKER,
        }
        if event.key in shortcuts:
            editor.select_tool(shortcuts[event.key])
    if not (mouse.left and editor.click_button(mouse.pos)):
        editor.apply_tool(mouse)
    return running


def _run(editor: Editor) -> None:
    import pygame

    from isoworld.render import FRAMERATE, WINDOW_SIZE, WINDOW_TITLE, Renderer

    pygame.init()
    try:
        screen = pygame.display.set_mode(WINDOW_SIZE)
        pygame.display.set_caption(WINDOW_TITLE)
        renderer = Renderer(screen, Path.cwd())
        clock = pygame.time.Clock()
        running = True
        while running:
            x, y = pygame.mouse.get_pos()
            pressed = pygame.mouse.get_pressed()
            mouse = MouseInput((float(x), float(y)), left=pressed[0], right=pressed[2])
            editor.apply_resize()
            if editor.recalc:
                editor.recalculate()
            editor.hover_buttons(mouse.pos)
            for event in pygame.event.get():
                running = _handle_event(editor, event, mouse) and running
            editor.update_hover(mouse)
            renderer.draw(editor)
            pygame.display.flip()
            clock.tick(FRAMERATE)
    finally:
        pygame.quit()


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Start the terrain editor; return the process exit status."""
    args = list(sys.argv[1:] if argv is None else argv)
    if args == ["-h"]:
        sys.stdout.write(usage())
        return 0
    if len(args) > 1:
        sys.stdout.write("Wrong number of arguments\n")
        return EXIT_FAILURE
    editor = Editor()
    if args:
        try:
            terrain = _load_terrain(args[0])
        except (OSError, ValueError) as error:
            sys.stderr.write(f"Cannot load map: {error}\n")
            return EXIT_FAILURE
        _install_map(editor, terrain)
    _run(editor)
    editor.map.save(AUTOSAVE_PATH)
    return 0


if __name__ == "__main__":
    sys.exit(main())