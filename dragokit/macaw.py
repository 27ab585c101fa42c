"""Layered value-noise heightmaps and helpers to turn them into pixels or triangles."""

from __future__ import annotations

import random
from dataclasses import dataclass, field
from typing import Optional, Sequence

_PERSISTENCE = 0.5


def _smoother_lerp(a: float, b: float, f: float) -> float:
    t = f * f * f * (f * (f * 6.0 - 15.0) + 10.0)
    return a + (b - a) * t


def _check_size(w: int, h: int) -> None:
    if w <= 0 or h <= 0:
        raise ValueError("width and height must be positive")


@dataclass
class Macaw:
    """Generator of smooth noise fields of ``height`` built from ``octaves`` layers.

    Grids are flat lists indexed ``i * h + j`` for column ``i`` and row ``j``.
    """

    height: float = 1.0
    octaves: int = 6
    seed_value: Optional[int] = None
    _rng: random.Random = field(default_factory=random.Random, init=False, repr=False)

    def __post_init__(self) -> None:
        if self.seed_value is not None:
            self._rng.seed(self.seed_value)

    def seed(self, value: int) -> None:
        """Restart the random sequence from ``value``."""
        self.seed_value = value
        self._rng.seed(value)

    def white_noise(self, w: int, h: int) -> list[float]:
        """Return ``w * h`` uniform random values in 0..1."""
        _check_size(w, h)
        return [self._rng.random() for _ in range(w * h)]

    def smooth_noise(self, base: Sequence[float], w: int, h: int, octaves: int) -> list[float]:
        """Return ``octaves`` smoothed copies of ``base``, one after another.

        Layer ``k`` samples the base every ``2 ** k`` cells, wrapping at the
        edges, and blends between the samples.
        """
        _check_size(w, h)
        if octaves < 1:
            raise ValueError("octaves must be at least 1")
        if len(base) < w * h:
            raise ValueError(f"base holds {len(base)} values, {w}x{h} needs {w * h}")
        smooth: list[float] = []
        for octave in range(octaves):
            period = 1 << octave
            for i in range(w):
                i0 = (i // period) * period
                i1 = (i0 + period) % w
                hblend = (i - i0) / period
                for j in range(h):
                    j0 = (j // period) * period
                    j1 = (j0 + period) % h
                    vblend = (j - j0) / period
                    top = _smoother_lerp(base[i0 * h + j0], base[i1 * h + j0], hblend)
                    bottom = _smoother_lerp(base[i0 * h + j1], base[i1 * h + j1], hblend)
                    smooth.append(_smoother_lerp(top, bottom, vblend))
        return smooth

    def generate(self, w: int, h: int) -> list[float]:
        """Return a ``w`` by ``h`` noise field with values in ``0..height``."""
        if self.octaves < 1:
            raise ValueError("octaves must be at least 1")
        size = w * h
        smooth = self.smooth_noise(self.white_noise(w, h), w, h, self.octaves)
        field_values = [0.0] * size
        amplitude = 1.0
        total = 0.0
        for octave in reversed(range(self.octaves)):
            amplitude *= _PERSISTENCE
            total += amplitude
            layer = smooth[octave * size:(octave + 1) * size]
            field_values = [value + s * amplitude for value, s in zip(field_values, layer)]
        factor = self.height / total
        return [value * factor for value in field_values]


def to_sprite(values: Sequence[float]) -> list[int]:
    """Return opaque grey pixels whose intensity is each value clamped to 0..255."""
    pixels = []
    for value in values:
        level = min(255, max(int(value), 0))
        pixels.append(level | (level << 8) | (level << 16) | 0xFF000000)
    return pixels


def to_vbuff(values: Sequence[float], w: int, h: int) -> list[float]:
    """Return two triangles per grid cell as flat ``x, y, height`` triples."""
    _check_size(w, h)
    if len(values) < w * h:
        raise ValueError(f"values hold {len(values)} entries, {w}x{h} needs {w * h}")
    out: list[float] = []
    for i in range(w - 1):
        for j in range(h - 1):
            h00 = values[i * h + j]
            h01 = values[i * h + j + 1]
            h10 = values[(i + 1) * h + j]
            h11 = values[(i + 1) * h + j + 1]
            out += [
                float(i), float(j), h00,
                float(i + 1), float(j), h10,
                float(i + 1), float(j + 1), h11,
                float(i + 1), float(j + 1), h11,
                float(i), float(j + 1), h01,
                float(i), float(j), h00,
            ]
    return out