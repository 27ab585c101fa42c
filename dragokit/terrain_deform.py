"""Brush deformation and noise mutation of a terrain heightfield."""

from __future__ import annotations

import enum
from dataclasses import dataclass
from typing import Optional, Sequence

from .spriteops import sample_float, sample_vec4
from .terrain_grid import Terrain


class DeformMode(enum.Enum):
    """How a brush changes the heights under it."""

    MOLD = "mold"
    AVERAGE = "average"
    ZERO = "zero"


def _check_grid(data: Sequence, width: int, height: int, what: str) -> None:
    if width <= 0 or height <= 0:
        raise ValueError(f"{what} width and height must be positive")
    if len(data) < width * height:
        raise ValueError(f"{what} holds {len(data)} values, {width}x{height} needs {width * height}")


@dataclass
class Brush:
    """A brush texture of ``width`` by ``height`` pixels centred on ``(x, y)``.

    The brush covers ``radius`` cells on each side of its centre; the red
    channel of the texture, times ``velocity``, is the strength applied.
    """

    texture: Sequence[int]
    width: int
    height: int
    radius: float = 8.0
    velocity: float = 0.0
    x: float = 0.0
    y: float = 0.0

    def __post_init__(self) -> None:
        _check_grid(self.texture, int(self.width), int(self.height), "brush")


@dataclass(frozen=True)
class MutationLayer:
    """A grid of ``width`` by ``height`` values stretched over the whole terrain."""

    data: Sequence
    width: int
    height: int
    strength: float = 0.0

    def __post_init__(self) -> None:
        _check_grid(self.data, self.width, self.height, "layer")


def deform(terrain: Terrain, brush: Brush, mode: DeformMode) -> None:
    """Apply ``brush`` to the terrain in the given mode, in place.

    ``MOLD`` raises each height by the brush strength. ``AVERAGE`` and
    ``ZERO`` move each height towards the region's average or towards zero
    by an eighth of the strength, never less than -0.5 before that scaling.
    """
    mode = DeformMode(mode)
    w, h = terrain.width, terrain.height
    bw, bh = int(brush.width), int(brush.height)
    reach = int(brush.radius)
    cx, cy = int(brush.x), int(brush.y)

    bx1, by1 = cx - reach, cy - reach
    bx2, by2 = cx + reach, cy + reach
    x1, y1 = max(0, bx1), max(0, by1)
    x2, y2 = min(w - 1, bx2), min(h - 1, by2)

    if x1 == x2 or y1 == y2:
        return

    columns = range(x1, x2 + 1)
    rows = range(y1, y2 + 1)

    average = 0.0
    if mode is DeformMode.AVERAGE:
        total = sum(terrain.get_z(i, j) for i in columns for j in rows)
        average = total / ((x2 - x1) * (y2 - y1))

    for i in columns:
        for j in rows:
            sampled = sample_vec4(brush.texture, bw, bh, (i - bx1) / (bx2 - bx1), (j - by1) / (by2 - by1)).r
            strength = sampled * brush.velocity
            if mode is DeformMode.MOLD:
                terrain.add_z(i, j, strength)
                continue
            target = average if mode is DeformMode.AVERAGE else 0.0
            t = max(-0.5, strength) / 8.0
            current = terrain.get_z(i, j)
            terrain.set_z(i, j, current + t * (target - current))


def mutate(terrain: Terrain, noise: Optional[MutationLayer] = None,
           texture: Optional[MutationLayer] = None) -> None:
    """Raise every height by sampled noise and texture values, in place.

    The noise contributes its sampled value less half its strength; the
    texture contributes ``(red - 0.5) * 2 * strength``.
    """
    w, h = terrain.width, terrain.height
    for i in range(w):
        for j in range(h):
            u, v = i / w, j / h
            delta = 0.0
            if noise is not None:
                delta += sample_float(noise.data, noise.width, noise.height, u, v) - noise.strength / 2
            if texture is not None:
                red = sample_vec4(texture.data, texture.width, texture.height, u, v).r
                delta += (red - 0.5) * 2 * texture.strength
            terrain.add_z(i, j, delta)