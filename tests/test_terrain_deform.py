import pytest

from dragokit.terrain_deform import Brush, DeformMode, MutationLayer, deform, mutate
from dragokit.terrain_grid import Terrain

WHITE = 0xFFFFFFFF
BLACK = 0xFF000000


def _brush(colour=WHITE, **kwargs):
    params = dict(radius=1, velocity=1.0, x=2, y=2)
    params.update(kwargs)
    return Brush(texture=[colour] * 4, width=2, height=2, **params)


def _region(t, x1, y1, x2, y2):
    return [t.get_z(i, j) for i in range(x1, x2 + 1) for j in range(y1, y2 + 1)]


def _outside(t, x1, y1, x2, y2):
    return [t.get_z(i, j) for i in range(t.width) for j in range(t.height)
            if not (x1 <= i <= x2 and y1 <= j <= y2)]


def test_mold_raises_region_by_velocity():
    t = Terrain(5, 5)
    deform(t, _brush(velocity=2.0), DeformMode.MOLD)
    assert _region(t, 1, 1, 3, 3) == [2.0] * 9
    assert _outside(t, 1, 1, 3, 3) == [0.0] * 16


def test_mold_with_black_brush_changes_nothing():
    heights = [float(k) for k in range(25)]
    t = Terrain(5, 5, heights)
    deform(t, _brush(BLACK, velocity=5.0), DeformMode.MOLD)
    assert t.heights == heights


def test_zero_with_full_strength_clears_region():
    t = Terrain(5, 5, [3.0] * 25)
    deform(t, _brush(velocity=8.0), DeformMode.ZERO)
    assert _region(t, 1, 1, 3, 3) == [0.0] * 9
    assert _outside(t, 1, 1, 3, 3) == [3.0] * 16


def test_zero_with_partial_strength_moves_towards_zero():
    t = Terrain(5, 5, [3.0] * 25)
    deform(t, _brush(velocity=4.0), DeformMode.ZERO)
    assert all(0.0 < z < 3.0 for z in _region(t, 1, 1, 3, 3))


def test_negative_strength_is_clamped_and_pushes_away():
    t = Terrain(5, 5, [3.0] * 25)
    deform(t, _brush(velocity=-100.0), DeformMode.ZERO)
    region = _region(t, 1, 1, 3, 3)
    assert all(z > 3.0 for z in region)
    assert len(set(region)) == 1


def test_average_with_full_strength_levels_region():
    heights = [float((k * 7) % 5) for k in range(25)]
    t = Terrain(5, 5, heights)
    deform(t, _brush(velocity=8.0), DeformMode.AVERAGE)
    region = _region(t, 1, 1, 3, 3)
    assert all(z == pytest.approx(region[0]) for z in region)
    before = Terrain(5, 5, heights)
    assert _outside(t, 1, 1, 3, 3) == _outside(before, 1, 1, 3, 3)


def test_zero_radius_does_nothing():
    t = Terrain(5, 5, [1.0] * 25)
    deform(t, _brush(radius=0, velocity=8.0), DeformMode.ZERO)
    assert t.heights == [1.0] * 25


def test_brush_off_the_terrain_does_nothing():
    t = Terrain(5, 5, [1.0] * 25)
    deform(t, _brush(x=-10, y=-10, velocity=8.0), DeformMode.ZERO)
    assert t.heights == [1.0] * 25


def test_deform_keeps_vertex_buffer_in_step():
    t = Terrain(5, 5, [float(k % 3) for k in range(25)])
    t.generate_internal()
    deform(t, _brush(velocity=1.5), DeformMode.MOLD)
    updated = list(t.vertices)
    assert t.generate_internal() == updated


def test_brush_with_too_little_data_is_rejected():
    with pytest.raises(ValueError):
        Brush(texture=[WHITE], width=2, height=2)


def test_mutate_with_constant_noise_adds_its_value():
    t = Terrain(3, 4, [1.0] * 12)
    mutate(t, noise=MutationLayer([0.25] * 4, 2, 2, 0.0))
    assert t.heights == [1.25] * 12


def test_mutate_white_texture_raises_by_strength():
    t = Terrain(3, 3)
    mutate(t, texture=MutationLayer([WHITE] * 4, 2, 2, 1.0))
    assert t.heights == [1.0] * 9


def test_mutate_black_texture_lowers_by_strength():
    t = Terrain(3, 3)
    mutate(t, texture=MutationLayer([BLACK] * 4, 2, 2, 1.0))
    assert t.heights == [-1.0] * 9


def test_mutate_without_layers_keeps_heights():
    heights = [float(k) for k in range(9)]
    t = Terrain(3, 3, heights)
    mutate(t)
    assert t.heights == heights


def test_mutation_layer_rejects_bad_size():
    with pytest.raises(ValueError):
        MutationLayer([0.0] * 3, 2, 2)