"""Geometric operations on flat buffers of full vertices.

Each vertex occupies ``vertex_size`` values, the first eighteen being
position (0-2), normal (3-5), texture coordinate (6-7), packed colour (8),
tangent (9-11), bitangent (12-14) and barycentric coordinate (15-17).
All operations change the buffer in place.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from .vertex_format import FULL_VERTEX_SIZE

_BOUNDS_LIMIT = 10000000.0
# Offsets of the three-component direction-like attributes that follow the axes.
_AXIS_ATTRIBUTES = (0, 3, 9, 12)


def _vertex_starts(data: list, vertex_size: int, needed: int, group: int = 1) -> range:
    if vertex_size < needed:
        raise ValueError(f"vertex_size must be at least {needed}")
    step = vertex_size * group
    if len(data) % step:
        raise ValueError(f"buffer of {len(data)} values is not a whole number of {step}-value blocks")
    return range(0, len(data), step)


def get_bounds(data: list, vertex_size: int = FULL_VERTEX_SIZE) -> tuple[float, float, float, float, float, float]:
    """Return ``(minx, miny, minz, maxx, maxy, maxz)`` of all vertex positions."""
    minx = miny = minz = _BOUNDS_LIMIT
    maxx = maxy = maxz = -_BOUNDS_LIMIT
    for start in _vertex_starts(data, vertex_size, 3):
        x, y, z = data[start:start + 3]
        minx, miny, minz = min(minx, x), min(miny, y), min(minz, z)
        maxx, maxy, maxz = max(maxx, x), max(maxy, y), max(maxz, z)
    return minx, miny, minz, maxx, maxy, maxz


def transform_center(data: list, vertex_size: int = FULL_VERTEX_SIZE) -> None:
    """Move the mesh so that the mean x and y of its vertices is zero."""
    starts = _vertex_starts(data, vertex_size, 2)
    if not starts:
        raise ValueError("cannot centre an empty buffer")
    count = len(starts)
    mean_x = sum(data[s] for s in starts) / count
    mean_y = sum(data[s + 1] for s in starts) / count
    for start in starts:
        data[start] -= mean_x
        data[start + 1] -= mean_y


def rotate_up(data: list, vertex_size: int = FULL_VERTEX_SIZE) -> None:
    """Cycle the axes of every position, normal, tangent and bitangent: (x, y, z) becomes (z, x, y)."""
    for start in _vertex_starts(data, vertex_size, 15):
        for offset in _AXIS_ATTRIBUTES:
            base = start + offset
            x, y, z = data[base:base + 3]
            data[base:base + 3] = [z, x, y]


def _scaled(vertex: list, xs: float, ys: float, zs: float) -> list:
    out = list(vertex)
    for offset in _AXIS_ATTRIBUTES:
        out[offset] *= xs
        out[offset + 1] *= ys
        out[offset + 2] *= zs
    return out


def mirror_axis(data: list, xs: float, ys: float, zs: float, vertex_size: int = FULL_VERTEX_SIZE) -> None:
    """Scale every triangle by ``(xs, ys, zs)`` and reverse its winding.

    The second and third vertex of each triangle swap places, so that a
    mirrored mesh keeps facing outwards.
    """
    for start in _vertex_starts(data, vertex_size, FULL_VERTEX_SIZE, 3):
        first, second, third = (
            list(data[start + k * vertex_size:start + k * vertex_size + FULL_VERTEX_SIZE]) for k in range(3)
        )
        for k, vertex in enumerate((first, third, second)):
            base = start + k * vertex_size
            data[base:base + FULL_VERTEX_SIZE] = _scaled(vertex, xs, ys, zs)


def mirror_axis_x(data: list, vertex_size: int = FULL_VERTEX_SIZE) -> None:
    """Mirror the mesh across the x axis."""
    mirror_axis(data, -1.0, 1.0, 1.0, vertex_size)


def mirror_axis_y(data: list, vertex_size: int = FULL_VERTEX_SIZE) -> None:
    """Mirror the mesh across the y axis."""
    mirror_axis(data, 1.0, -1.0, 1.0, vertex_size)


def mirror_axis_z(data: list, vertex_size: int = FULL_VERTEX_SIZE) -> None:
    """Mirror the mesh across the z axis."""
    mirror_axis(data, 1.0, 1.0, -1.0, vertex_size)


def reverse(data: list, vertex_size: int = FULL_VERTEX_SIZE) -> None:
    """Reverse the winding of every triangle without moving it."""
    mirror_axis(data, 1.0, 1.0, 1.0, vertex_size)


def flip_tex_u(data: list, vertex_size: int = FULL_VERTEX_SIZE) -> None:
    """Replace every u texture coordinate with ``1 - u``."""
    for start in _vertex_starts(data, vertex_size, 8):
        data[start + 6] = 1 - data[start + 6]


def flip_tex_v(data: list, vertex_size: int = FULL_VERTEX_SIZE) -> None:
    """Replace every v texture coordinate with ``1 - v``."""
    for start in _vertex_starts(data, vertex_size, 8):
        data[start + 7] = 1 - data[start + 7]


@dataclass(frozen=True)
class UVRemap:
    """Linear remapping of texture coordinates from one rectangle to another.

    ``start1`` maps to ``end1`` and ``start2`` to ``end2``, per axis.
    """

    start1: tuple[float, float]
    start2: tuple[float, float]
    end1: tuple[float, float]
    end2: tuple[float, float]

    def __post_init__(self) -> None:
        if self.start2[0] == self.start1[0] or self.start2[1] == self.start1[1]:
            raise ValueError("the source rectangle must have a non-zero extent on both axes")

    def apply(self, data: list, offset: int = 0, length: Optional[int] = None,
              vertex_size: int = FULL_VERTEX_SIZE) -> None:
        """Remap the texture coordinates of the vertices in ``data[offset:offset + length]``."""
        if vertex_size < 8:
            raise ValueError("vertex_size must be at least 8")
        if length is None:
            length = len(data) - offset
        (s1x, s1y), (s2x, s2y) = self.start1, self.start2
        (e1x, e1y), (e2x, e2y) = self.end1, self.end2
        scale_x = (e2x - e1x) / (s2x - s1x)
        scale_y = (e2y - e1y) / (s2y - s1y)
        for start in range(offset, offset + length, vertex_size):
            data[start + 6] = e1x + (data[start + 6] - s1x) * scale_x
            data[start + 7] = e1y + (data[start + 7] - s1y) * scale_y