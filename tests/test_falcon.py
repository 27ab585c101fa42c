import pytest

from dragokit.falcon import Falcon


def test_combine_offsets_each_vertex():
    target = [0.0] * 18
    Falcon().combine(target, [(18 * 4, 1.0, 2.0, 3.0)])
    assert target[0:3] == [1.0, 2.0, 3.0]
    assert target[9:12] == [1.0, 2.0, 3.0]
    assert target[3:9] == [0.0] * 6


def test_combine_batches_follow_each_other():
    target = [0.0] * 18
    Falcon().combine(target, [(9 * 4, 1.0, 1.0, 1.0), (9 * 4, 5.0, 6.0, 7.0)])
    assert target[0:3] == [1.0, 1.0, 1.0]
    assert target[9:12] == [5.0, 6.0, 7.0]


def test_combine_no_batches_leaves_target():
    target = [float(i) for i in range(9)]
    before = list(target)
    Falcon().combine(target, [])
    assert target == before


def test_combine_respects_vertex_size():
    target = [0.0] * 8
    Falcon(vertex_size=4).combine(target, [(8 * 4, 1.0, 2.0, 3.0)])
    assert target == [1.0, 2.0, 3.0, 0.0, 1.0, 2.0, 3.0, 0.0]


def test_combine_color_scales_colour():
    target = [0.0] * 8 + [2.0] + [0.0] * 8 + [4.0]
    Falcon().combine_color(target, [(18 * 4, 1.0, 1.0, 1.0, 0.5)])
    assert target[8] == 1.0
    assert target[17] == 2.0
    assert target[9:12] == [1.0, 1.0, 1.0]


def test_combine_color_requires_factor():
    with pytest.raises(ValueError):
        Falcon().combine_color([0.0] * 9, [(9 * 4, 1.0, 1.0, 1.0)])


def test_vertex_size_must_be_positive():
    with pytest.raises(ValueError):
        Falcon(vertex_size=0)