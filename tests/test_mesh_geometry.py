import pytest
from hypothesis import given, strategies as st

from dragokit.mesh_geometry import (
    UVRemap,
    flip_tex_u,
    flip_tex_v,
    get_bounds,
    mirror_axis_x,
    mirror_axis_y,
    reverse,
    rotate_up,
    transform_center,
)


def vertex(seed):
    values = [float(seed * 100 + k) for k in range(18)]
    values[8] = 0xFF00FF00 + seed
    return values


def triangle():
    return vertex(1) + vertex(2) + vertex(3)


def test_get_bounds_uses_positions():
    data = vertex(1) + vertex(2)
    data[0:3] = [-4.0, 7.0, 2.0]
    data[18:21] = [3.0, -1.0, 9.0]
    assert get_bounds(data) == (-4.0, -1.0, 2.0, 3.0, 7.0, 9.0)


def test_get_bounds_empty_returns_sentinels():
    assert get_bounds([]) == (1e7, 1e7, 1e7, -1e7, -1e7, -1e7)


def test_transform_center_zero_mean():
    data = triangle()
    z_before = [data[2], data[20], data[38]]
    transform_center(data)
    assert sum(data[s] for s in (0, 18, 36)) == pytest.approx(0.0)
    assert sum(data[s + 1] for s in (0, 18, 36)) == pytest.approx(0.0)
    assert [data[2], data[20], data[38]] == z_before


def test_transform_center_empty_raises():
    with pytest.raises(ValueError):
        transform_center([])


def test_rotate_up_cycles_axes():
    data = vertex(1)
    orig = list(data)
    rotate_up(data)
    assert data[0:3] == [orig[2], orig[0], orig[1]]
    assert data[3:6] == [orig[5], orig[3], orig[4]]
    assert data[12:15] == [orig[14], orig[12], orig[13]]
    assert data[6:9] == orig[6:9]
    assert data[15:18] == orig[15:18]


def test_rotate_up_three_times_is_identity():
    data = triangle()
    orig = list(data)
    for _ in range(3):
        rotate_up(data)
    assert data == orig


def test_mirror_x_swaps_winding_and_negates_x():
    data = triangle()
    orig = list(data)
    mirror_axis_x(data)
    assert data[0] == -orig[0]
    assert data[1] == orig[1]
    assert data[18] == -orig[36]
    assert data[18 + 1] == orig[36 + 1]
    assert data[18 + 8] == orig[36 + 8]
    assert data[36 + 8] == orig[18 + 8]
    assert data[36 + 15:36 + 18] == orig[18 + 15:18 + 18]


def test_reverse_swaps_without_scaling():
    data = triangle()
    orig = list(data)
    reverse(data)
    assert data[0:18] == orig[0:18]
    assert data[18:36] == orig[36:54]
    assert data[36:54] == orig[18:36]


def test_partial_triangle_raises():
    with pytest.raises(ValueError):
        reverse(vertex(1) + vertex(2))


def test_small_vertex_size_raises():
    with pytest.raises(ValueError):
        mirror_axis_y([0.0] * 27, vertex_size=9)


@given(st.lists(st.floats(-1e6, 1e6), min_size=54, max_size=54))
def test_mirror_twice_is_identity(values):
    data = list(values)
    mirror_axis_y(data)
    mirror_axis_y(data)
    assert data == values


def test_flip_tex_u_and_v():
    data = vertex(1)
    data[6], data[7] = 0.25, 0.125
    flip_tex_u(data)
    flip_tex_v(data)
    assert data[6] + 0.25 == pytest.approx(1.0)
    assert data[7] + 0.125 == pytest.approx(1.0)
    flip_tex_u(data)
    assert data[6] == pytest.approx(0.25)


def test_uv_remap_maps_endpoints():
    remap = UVRemap(start1=(0.0, 0.0), start2=(1.0, 1.0), end1=(0.5, 0.25), end2=(0.75, 1.0))
    data = vertex(1) + vertex(2)
    data[6:8] = [0.0, 0.0]
    data[24:26] = [1.0, 1.0]
    remap.apply(data)
    assert data[6:8] == pytest.approx([0.5, 0.25])
    assert data[24:26] == pytest.approx([0.75, 1.0])


def test_uv_remap_respects_offset_and_length():
    remap = UVRemap(start1=(0.0, 0.0), start2=(1.0, 1.0), end1=(0.5, 0.5), end2=(1.0, 1.0))
    data = vertex(1) + vertex(2)
    data[6:8] = [0.0, 0.0]
    data[24:26] = [0.0, 0.0]
    remap.apply(data, offset=18, length=18)
    assert data[6:8] == [0.0, 0.0]
    assert data[24:26] == pytest.approx([0.5, 0.5])


def test_uv_remap_zero_span_raises():
    with pytest.raises(ValueError):
        UVRemap(start1=(0.0, 0.0), start2=(0.0, 1.0), end1=(0.0, 0.0), end2=(1.0, 1.0))