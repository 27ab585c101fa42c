import pytest
from hypothesis import given
from hypothesis import strategies as st

from dragokit.vertex_format import VertexFormat, adjust, format_vertex, format_vertices

VERTEX = [1.0, 2.0, 3.0, 0.0, 0.0, 1.0, 0.25, 0.75, 0xFF112233,
          1.0, 0.0, 0.0, 0.0, 1.0, 0.0, 1.0, 0.0, 0.0]


def test_adjust_maps_range_ends():
    assert adjust(-1.0, 0.0, 255.0, -1.0, 1.0) == 0.0
    assert adjust(1.0, 0.0, 255.0, -1.0, 1.0) == 255.0


@given(st.floats(min_value=-1, max_value=1))
def test_adjust_round_trip(value):
    there = adjust(value, 0.0, 255.0, -1.0, 1.0)
    back = adjust(there, -1.0, 1.0, 0.0, 255.0)
    assert back == pytest.approx(value, abs=1e-9)


def test_position_3d_only():
    assert format_vertex(VERTEX, VertexFormat.POSITION_3D) == VERTEX[0:3]


def test_standard_format_order():
    fmt = VertexFormat.POSITION_3D | VertexFormat.NORMAL | VertexFormat.TEXCOORD | VertexFormat.COLOUR
    assert format_vertex(VERTEX, fmt) == VERTEX[0:9]


def test_barycentric_written_before_tangent_and_bitangent():
    fmt = VertexFormat.TANGENT | VertexFormat.BITANGENT | VertexFormat.BARYCENTRIC
    assert format_vertex(VERTEX, fmt) == VERTEX[15:18] + VERTEX[9:12] + VERTEX[12:15]


def test_small_normal_extremes():
    up = [0.0] * 3 + [1.0, 1.0, 1.0] + [0.0] * 12
    down = [0.0] * 3 + [-1.0, -1.0, -1.0] + [0.0] * 12
    assert format_vertex(up, VertexFormat.SMALL_NORMAL) == [0xFFFFFF]
    assert format_vertex(down, VertexFormat.SMALL_NORMAL) == [0]


def test_small_texcoord():
    vertex = [0.0] * 6 + [1.0, 0.0] + [0.0] * 10
    assert format_vertex(vertex, VertexFormat.SMALL_TEXCOORD) == [255]


def test_int_format_is_accepted():
    assert format_vertex(VERTEX, int(VertexFormat.POSITION_2D)) == VERTEX[0:2]


def test_empty_format_yields_nothing():
    assert format_vertex(VERTEX, 0) == []


def test_short_vertex_is_padded():
    assert format_vertex([5.0, 6.0], VertexFormat.POSITION_3D) == [5.0, 6.0, 0]


def test_format_vertices_concatenates():
    data = VERTEX + [v * 2 if i != 8 else v for i, v in enumerate(VERTEX)]
    result = format_vertices(data, VertexFormat.POSITION_3D)
    assert result == VERTEX[0:3] + [2.0, 4.0, 6.0]


def test_format_vertices_custom_vertex_size():
    data = list(range(18)) + list(range(18))
    assert len(format_vertices(data, VertexFormat.POSITION_2D, 9)) == 8


def test_format_vertices_rejects_partial_vertex():
    with pytest.raises(ValueError):
        format_vertices(VERTEX[:-1], VertexFormat.POSITION_3D)


def test_format_vertices_rejects_zero_vertex_size():
    with pytest.raises(ValueError):
        format_vertices(VERTEX, VertexFormat.POSITION_3D, 0)