import pytest

from isoworld.editor import (
    Button,
    ButtonId,
    ButtonState,
    Editor,
    MouseInput,
    TOOLTIPS,
    Tool,
)
from isoworld.terrain import TextureKind


def quad_center(editor, i, j):
    m = editor.map
    pts = [
        m.tile(i, j).screen,
        m.tile(i, j + 1).screen,
        m.tile(i + 1, j + 1).screen,
        m.tile(i + 1, j).screen,
    ]
    return (sum(p[0] for p in pts) / 4, sum(p[1] for p in pts) / 4)


@pytest.fixture
def editor():
    ed = Editor(4)
    ed.recalculate()
    return ed


def hover_tile(ed, i=1, j=1):
    pos = quad_center(ed, i, j)
    ed.update_hover(MouseInput(pos))
    return pos


def test_initial_state():
    ed = Editor()
    assert ed.map.size == 32
    assert ed.tool is Tool.BUCKET
    assert ed.buttons[ButtonId.BUCKET].state is ButtonState.SELECTED
    assert ed.buttons[ButtonId.PANNING].state is ButtonState.IDLE
    assert ed.selected_texture is TextureKind.GRASS
    assert ed.map_size_text == "32"
    assert ed.factors == (15.0, 15.0)
    assert ed.recalc is True


def test_translation_centers_map():
    ed = Editor(8)
    cx, cy = ed.map.center_point(ed.factors)
    assert ed.translation[0] + cx == pytest.approx(930)
    assert ed.translation[1] + cy == pytest.approx(510)


def test_select_tool_switches_buttons(editor):
    editor.select_tool(Tool.PRECISION)
    assert editor.tool is Tool.PRECISION
    assert editor.use_hover_circle is True
    assert editor.buttons[ButtonId.PRECISION].state is ButtonState.SELECTED
    assert editor.buttons[ButtonId.BUCKET].state is ButtonState.IDLE
    editor.select_tool(Tool.LEVEL)
    assert editor.use_hover_circle is False


def test_selected_tint(editor):
    editor.select_tool(Tool.LEVEL)
    assert editor.buttons[ButtonId.LEVEL].state.tint == (150, 150, 150, 255)
    assert editor.buttons[ButtonId.BUCKET].state.tint == (255, 255, 255, 255)


def test_grow_and_shrink_limits():
    ed = Editor()
    ed.grow_map()
    assert ed.new_map_size == 64
    assert ed.map_size_text == "64"
    ed.grow_map()
    assert ed.size_step == 3
    for _ in range(5):
        ed.shrink_map()
    assert ed.new_map_size == 8
    assert ed.map_size_text == "8"
    assert ed.size_step == 0


def test_apply_resize(editor):
    hover_tile(editor)
    assert editor.apply_resize() is False
    editor.shrink_map()
    assert editor.apply_resize() is True
    assert editor.map.size == 16
    assert editor.new_map_size is None
    assert editor.hovered_tile is None
    assert editor.recalc is True


def test_click_buttons(editor):
    assert editor.click_button((75, 169)) is True
    assert editor.new_map_size == 64
    assert editor.click_button((31, 895)) is True
    assert editor.selected_texture is TextureKind.STONE
    assert editor.click_button((31, 427)) is True
    assert editor.tool is Tool.PRECISION
    assert editor.click_button((0, 0)) is False


def test_button_contains_edges():
    button = Button(ButtonId.PLUS, (10.0, 20.0), (5.0, 5.0))
    assert button.contains((10, 20)) is True
    assert button.contains((15, 20)) is False
    assert button.contains((14.9, 24.9)) is True


def test_hover_idle_button(editor):
    assert editor.hover_buttons((31, 349)) is True
    assert editor.buttons[ButtonId.PANNING].state is ButtonState.HOVERED
    assert editor.tooltip_visible is True
    assert editor.tooltip_text == TOOLTIPS[ButtonId.PANNING]
    assert editor.hover_buttons((500, 500)) is False
    assert editor.buttons[ButtonId.PANNING].state is ButtonState.IDLE
    assert editor.tooltip_visible is False


def test_hover_selected_button_shows_tooltip(editor):
    assert editor.hover_buttons((31, 271)) is False
    assert editor.buttons[ButtonId.BUCKET].state is ButtonState.SELECTED
    assert editor.tooltip_pos == (30 + 82, 270)
    assert editor.tooltip_text == TOOLTIPS[ButtonId.BUCKET]


def test_hover_texture_button_has_no_tooltip(editor):
    assert editor.hover_buttons((31, 661)) is True
    assert editor.tooltip_visible is False


def test_update_hover_finds_tile(editor):
    hover_tile(editor)
    assert editor.is_tile_hovered is True
    assert editor.show_hover_circle is False
    assert editor.hovered_tile is editor.map.tile(1, 1)


def test_update_hover_corner_in_precision(editor):
    editor.select_tool(Tool.PRECISION)
    editor.update_hover(MouseInput(editor.map.tile(1, 1).screen))
    assert editor.show_hover_circle is True
    assert editor.is_tile_hovered is False
    assert editor.hovered_tile is editor.map.tile(1, 1)


def test_bucket_paints(editor):
    pos = hover_tile(editor)
    editor.select_texture(TextureKind.STONE)
    editor.apply_tool(MouseInput(pos))
    assert editor.map.tile(1, 1).texture is TextureKind.SAND
    editor.apply_tool(MouseInput(pos, left=True))
    assert editor.map.tile(1, 1).texture is TextureKind.STONE


def test_picker_copies_texture(editor):
    pos = hover_tile(editor)
    editor.map.tile(1, 1).texture = TextureKind.DIRT
    editor.select_tool(Tool.PICKER)
    editor.apply_tool(MouseInput(pos, left=True))
    assert editor.selected_texture is TextureKind.DIRT


def test_level_raises_and_lowers(editor):
    pos = hover_tile(editor)
    editor.select_tool(Tool.LEVEL)
    editor.apply_tool(MouseInput(pos, left=True))
    corners = [(1, 1), (2, 1), (2, 2), (1, 2)]
    for i, j in corners:
        assert editor.map.tile(i, j).z == pytest.approx(0.1)
    assert editor.map.tile(0, 0).z == 0
    assert editor.recalc is True
    editor.apply_tool(MouseInput(pos, right=True))
    for i, j in corners:
        assert editor.map.tile(i, j).z == pytest.approx(0.0)


def test_panning_moves_translation(editor):
    editor.select_tool(Tool.PANNING)
    editor.apply_tool(MouseInput((100, 100)))
    tx, ty = editor.translation
    editor.apply_tool(MouseInput((130, 90), left=True))
    assert editor.translation == pytest.approx((tx + 30, ty - 10))
    assert editor.recalc is True


def test_precision_drag_lifts_tile(editor):
    editor.select_tool(Tool.PRECISION)
    x, y = hover_tile(editor)
    assert editor.is_tile_hovered is True
    editor.apply_tool(MouseInput((x, y)))
    editor.apply_tool(MouseInput((x, y - editor.factors[1]), left=True))
    heights = [editor.map.tile(i, j).z for i, j in [(1, 1), (2, 1), (2, 2), (1, 2)]]
    assert heights == pytest.approx([1.0] * 4)
    assert editor.map.tile(0, 0).z == 0


def test_precision_without_hover_does_nothing(editor):
    editor.select_tool(Tool.PRECISION)
    editor.recalc = False
    editor.apply_tool(MouseInput((0, 0), left=True))
    assert editor.recalc is False
    assert all(t.z == 0 for t in editor.map.draw_order)


def test_zoom_keeps_point_under_mouse(editor):
    mouse = (700.0, 400.0)
    t0, f0 = editor.translation, editor.factors
    assert editor.zoom(1, mouse) is True
    t1, f1 = editor.translation, editor.factors
    assert f1[0] > f0[0]
    assert (mouse[0] - t1[0]) / f1[0] == pytest.approx((mouse[0] - t0[0]) / f0[0])
    assert (mouse[1] - t1[1]) / f1[1] == pytest.approx((mouse[1] - t0[1]) / f0[1])


def test_zoom_rejects_non_positive_factors(editor):
    before = editor.factors
    assert editor.zoom(-3, (10, 10)) is False
    assert editor.factors == before


def test_rotate_round_trip(editor):
    before = [(t.x, t.y) for row in editor.map.tiles for t in row]
    editor.rotate(5)
    assert editor.recalc is True
    editor.rotate(-5)
    after = [(t.x, t.y) for row in editor.map.tiles for t in row]
    for (bx, by), (ax, ay) in zip(before, after):
        assert ax == pytest.approx(bx, abs=1e-9)
        assert ay == pytest.approx(by, abs=1e-9)