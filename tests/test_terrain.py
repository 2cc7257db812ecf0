import math

import pytest

from isoworld.geometry import distance, project_iso_point
from isoworld.terrain import TerrainMap, TextureKind, check_line

FACTORS = (15.0, 15.0)


def test_new_map_grid():
    terrain = TerrainMap(3)
    tile = terrain.tile(2, 1)
    assert (tile.x, tile.y, tile.z) == (2.0, 1.0, 0.0)
    assert (tile.index_x, tile.index_y) == (2, 1)
    assert tile.texture is TextureKind.SAND
    assert tile.color == (255, 255, 255, 255)


def test_draw_order_holds_every_tile_once():
    terrain = TerrainMap(4)
    assert len(terrain.draw_order) == 16
    assert len({id(t) for t in terrain.draw_order}) == 16


def test_tile_out_of_range():
    terrain = TerrainMap(3)
    with pytest.raises(IndexError):
        terrain.tile(3, 0)
    with pytest.raises(IndexError):
        terrain.tile(0, -1)


def test_empty_map_rejected():
    with pytest.raises(ValueError):
        TerrainMap(0)


def test_texture_ids():
    assert [int(k) for k in TextureKind] == [0, 1, 2, 3]
    assert TextureKind(2) is TextureKind.SAND


def test_center_point_of_flat_map():
    terrain = TerrainMap(5)
    assert terrain.center_point(FACTORS) == pytest.approx(
        project_iso_point(2.0, 2.0, 0, FACTORS)
    )


def test_project_applies_translation():
    terrain = TerrainMap(3)
    terrain.project(FACTORS, (100.0, 50.0))
    assert terrain.tile(0, 0).screen == pytest.approx((100.0, 50.0))
    sx, sy = project_iso_point(1, 2, 0, FACTORS)
    assert terrain.tile(1, 2).screen == pytest.approx((sx + 100.0, sy + 50.0))


def test_flat_map_stays_white():
    terrain = TerrainMap(3)
    terrain.project(FACTORS, (0.0, 0.0))
    assert all(t.color == (255, 255, 255, 255) for t in terrain.draw_order)


def test_raised_tile_is_shaded():
    terrain = TerrainMap(3)
    terrain.raise_tile(0, 0, 1.0)
    terrain.project(FACTORS, (0.0, 0.0))
    assert terrain.tile(0, 0).color == (245, 245, 245, 255)


def test_shading_is_capped():
    terrain = TerrainMap(3)
    terrain.raise_tile(1, 1, 50.0)
    terrain.project(FACTORS, (0.0, 0.0))
    assert terrain.tile(1, 1).color == (155, 155, 155, 255)


def test_raise_tile_moves_four_corners():
    terrain = TerrainMap(4)
    terrain.raise_tile(1, 2, 0.5)
    raised = {(t.index_x, t.index_y) for t in terrain.draw_order if t.z == 0.5}
    assert raised == {(1, 2), (2, 2), (2, 3), (1, 3)}


def test_raise_tile_needs_a_whole_tile():
    terrain = TerrainMap(3)
    with pytest.raises(IndexError):
        terrain.raise_tile(2, 0, 1.0)


def test_sort_draw_order_is_ascending():
    terrain = TerrainMap(5)
    terrain.rotate(30)
    terrain.sort_draw_order(FACTORS)
    heights = [t.flat[1] for t in terrain.draw_order[:-1]]
    assert heights == sorted(heights)
    assert len(terrain.draw_order) == 25


def test_sort_keeps_last_entry():
    terrain = TerrainMap(4)
    last = terrain.draw_order[-1]
    terrain.sort_draw_order(FACTORS)
    assert terrain.draw_order[-1] is last


def test_rotate_keeps_distances():
    terrain = TerrainMap(4)
    a, b = terrain.tile(0, 0), terrain.tile(3, 1)
    before = distance((a.x, a.y), (b.x, b.y))
    terrain.rotate(5)
    assert distance((a.x, a.y), (b.x, b.y)) == pytest.approx(before)
    assert (a.x, a.y) != pytest.approx((0.0, 0.0))


def test_rotate_and_back():
    terrain = TerrainMap(4)
    terrain.rotate(5)
    terrain.rotate(-5)
    for tile in terrain.draw_order:
        assert (tile.x, tile.y) == pytest.approx(
            (tile.index_x, tile.index_y), abs=1e-9
        )


def test_rotate_keeps_center():
    terrain = TerrainMap(6)
    before = terrain.center_point(FACTORS)
    terrain.rotate(45)
    assert terrain.center_point(FACTORS) == pytest.approx(before)
    assert not math.isnan(terrain.tile(0, 0).x)


def test_dump_format():
    terrain = TerrainMap(2)
    assert terrain.dump() == (
        "2\n"
        "0.00 0.00 0.00 2\n"
        "0.00 1.00 0.00 2\n"
        "1.00 0.00 0.00 2\n"
        "1.00 1.00 0.00 2\n"
    )


def test_dump_reflects_height_and_texture():
    terrain = TerrainMap(2)
    terrain.tile(1, 1).texture = TextureKind.STONE
    terrain.raise_tile(0, 0, 0.1)
    lines = terrain.dump().splitlines()
    assert lines[4] == "1.00 1.00 0.10 3"
    assert all(check_line(line) for line in lines)


def test_save_writes_dump(tmp_path):
    terrain = TerrainMap(3)
    terrain.raise_tile(0, 1, 2.0)
    target = tmp_path / "autosave"
    terrain.save(target)
    assert target.read_text(encoding="ascii") == terrain.dump()


@pytest.mark.parametrize("line", ["32\n", "1.00 -2.50 0.00 3\n", ""])
def test_check_line_accepts(line):
    assert check_line(line) is True


@pytest.mark.parametrize("line", ["1.00 a 0.00\n", "1,5\n", "+3\n"])
def test_check_line_rejects(line):
    assert check_line(line) is False