"""Colour, normal and text-export operations on flat buffers of full vertices.

Each vertex occupies ``vertex_size`` values: position (0-2), normal (3-5),
texture coordinate (6-7) and a packed 32-bit colour (8), followed by the
remaining attributes of a full vertex. Colours hold red in the lowest byte,
then green, blue and alpha. Operations on buffers change them in place.
"""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import Sequence

from .spriteops import merge
from .vertex_format import FULL_VERTEX_SIZE

_MASK32 = 0xFFFFFFFF
_COLOUR = 8

Vector = tuple[float, float, float]


def _starts(data: Sequence, vertex_size: int, needed: int, group: int = 1) -> range:
    if vertex_size < needed:
        raise ValueError(f"vertex_size must be at least {needed}")
    step = vertex_size * group
    if len(data) % step:
        raise ValueError(f"buffer of {len(data)} values is not a whole number of {step}-value blocks")
    return range(0, len(data), step)


def _colour_at(data: Sequence, start: int) -> int:
    return int(data[start + _COLOUR]) & _MASK32


def _alpha_level(alpha: float) -> int:
    return min(0xFF, max(0x00, int(alpha * 255)))


def _normalize(v: Vector) -> Vector:
    length = math.sqrt(v[0] * v[0] + v[1] * v[1] + v[2] * v[2])
    if length == 0.0:
        return (0.0, 0.0, 0.0)
    return (v[0] / length, v[1] / length, v[2] / length)


def _dot(a: Sequence[float], b: Sequence[float]) -> float:
    return a[0] * b[0] + a[1] * b[1] + a[2] * b[2]


def _face_normal(data: Sequence[float], start: int, vertex_size: int) -> Vector:
    ax, ay, az = data[start:start + 3]
    bx, by, bz = data[start + vertex_size:start + vertex_size + 3]
    cx, cy, cz = data[start + 2 * vertex_size:start + 2 * vertex_size + 3]
    e1 = (bx - ax, by - ay, bz - az)
    e2 = (cx - ax, cy - ay, cz - az)
    cross = (
        e1[1] * e2[2] - e1[2] * e2[1],
        e1[2] * e2[0] - e1[0] * e2[2],
        e1[0] * e2[1] - e1[1] * e2[0],
    )
    return _normalize(cross)


def set_colour(data: list, colour: int, vertex_size: int = FULL_VERTEX_SIZE) -> None:
    """Set the RGB part of every vertex colour, keeping its alpha."""
    for start in _starts(data, vertex_size, 9):
        data[start + _COLOUR] = ((_colour_at(data, start) & 0xFF000000) | int(colour)) & _MASK32


def set_alpha(data: list, alpha: float, vertex_size: int = FULL_VERTEX_SIZE) -> None:
    """Set the alpha of every vertex colour to ``alpha`` (0..1), keeping its RGB."""
    mask = _alpha_level(alpha) << 24
    for start in _starts(data, vertex_size, 9):
        data[start + _COLOUR] = (_colour_at(data, start) & 0x00FFFFFF) | mask


def set_colour_and_alpha(data: list, colour: int, alpha: float, vertex_size: int = FULL_VERTEX_SIZE) -> None:
    """Replace every vertex colour with ``colour`` at opacity ``alpha`` (0..1)."""
    value = (int(colour) | (_alpha_level(alpha) << 24)) & _MASK32
    for start in _starts(data, vertex_size, 9):
        data[start + _COLOUR] = value


def invert_alpha(data: list, vertex_size: int = FULL_VERTEX_SIZE) -> None:
    """Replace the alpha ``a`` of every vertex colour with ``255 - a``."""
    for start in _starts(data, vertex_size, 9):
        value = _colour_at(data, start)
        data[start + _COLOUR] = ((0xFF - (value >> 24)) << 24) | (value & 0x00FFFFFF)


def blend_colour(data: list, target: int, amount: float, vertex_size: int = FULL_VERTEX_SIZE) -> None:
    """Blend the RGB of every vertex colour towards ``target`` by ``amount``, keeping alpha."""
    target = int(target) & _MASK32
    for start in _starts(data, vertex_size, 9):
        value = _colour_at(data, start)
        alpha = value & 0xFF000000
        data[start + _COLOUR] = (alpha | merge(value & 0x00FFFFFF, target, amount)) & _MASK32


def multiply_colour(data: list, target: int, vertex_size: int = FULL_VERTEX_SIZE) -> None:
    """Multiply each RGB channel by the matching channel of ``target`` (scaled by 1/256)."""
    target = int(target) & _MASK32
    tr, tg, tb = target & 0xFF, (target >> 8) & 0xFF, (target >> 16) & 0xFF
    for start in _starts(data, vertex_size, 9):
        value = _colour_at(data, start)
        r = ((value & 0xFF) * tr) >> 8
        g = (((value >> 8) & 0xFF) * tg) >> 8
        b = (((value >> 16) & 0xFF) * tb) >> 8
        data[start + _COLOUR] = (value & 0xFF000000) | (b << 16) | (g << 8) | r


def set_normals_flat(data: list, vertex_size: int = FULL_VERTEX_SIZE) -> None:
    """Give every vertex of each triangle the unit normal of that triangle."""
    for start in _starts(data, vertex_size, 6, 3):
        normal = list(_face_normal(data, start, vertex_size))
        for k in range(3):
            base = start + k * vertex_size
            data[base + 3:base + 6] = normal


@dataclass
class SmoothNormals:
    """Accumulates face normals per vertex position across one or more buffers.

    Call :meth:`calculate` on every buffer, then :meth:`finalize` on each to
    write the averaged normals. :meth:`reset` starts a new accumulation.
    """

    vertex_size: int = FULL_VERTEX_SIZE
    _cache: dict = field(default_factory=dict, init=False, repr=False)

    def reset(self) -> None:
        """Forget every accumulated normal."""
        self._cache.clear()

    def calculate(self, data: list) -> None:
        """Write flat normals into ``data`` and add them to the per-position totals."""
        vs = self.vertex_size
        for start in _starts(data, vs, 6, 3):
            normal = _face_normal(data, start, vs)
            for k in range(3):
                base = start + k * vs
                data[base + 3:base + 6] = list(normal)
                key = tuple(data[base:base + 3])
                total = self._cache.get(key, (0.0, 0.0, 0.0))
                self._cache[key] = (total[0] + normal[0], total[1] + normal[1], total[2] + normal[2])

    def finalize(self, data: list, threshold: float) -> None:
        """Replace each vertex normal with the averaged one where they agree beyond ``threshold``.

        The averaged normal is written in reverse component order (z, y, x).
        """
        vs = self.vertex_size
        for start in _starts(data, vs, 6):
            key = tuple(data[start:start + 3])
            cached = _normalize(self._cache.get(key, (0.0, 0.0, 0.0)))
            if _dot(data[start + 3:start + 6], cached) > threshold:
                data[start + 3:start + 6] = [cached[2], cached[1], cached[0]]


def set_normals_smooth(data: list, threshold: float, vertex_size: int = FULL_VERTEX_SIZE) -> None:
    """Compute smooth normals for a single buffer."""
    smoother = SmoothNormals(vertex_size)
    smoother.calculate(data)
    smoother.finalize(data, threshold)


def export_d3d(data: Sequence, vertex_size: int = FULL_VERTEX_SIZE) -> str:
    """Return the buffer as the text of a D3D model file."""
    starts = _starts(data, vertex_size, 9)
    lines = ["100", str(len(starts) + 2), "0 4 0 0 0 0 0 0 0 0 0"]
    for start in starts:
        colour = _colour_at(data, start)
        coords = " ".join(f"{float(value):.6f}" for value in data[start:start + 8])
        lines.append(f"9 {coords} {colour & 0x00FFFFFF} {(colour >> 24) / 255.0:.2f}")
    lines.append("1 0 0 0 0 0 0 0 0 0 0")
    return "".join(line + "\r\n" for line in lines)