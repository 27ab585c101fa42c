"""Sampling and pixel operations on packed 32-bit ABGR sprite data.

Pixels are unsigned integers laid out row by row (index ``y * w + x``).
Red is stored in the lowest byte, then green, blue and alpha.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Sequence

_MASK32 = 0xFFFFFFFF


@dataclass(frozen=True)
class Vec4:
    """A four-channel colour with components in the range 0..1."""

    r: float = 0.0
    g: float = 0.0
    b: float = 0.0
    a: float = 0.0


def _lerp(a: float, b: float, f: float) -> float:
    return a + (b - a) * f


def _smoother_lerp(a: float, b: float, f: float) -> float:
    t = f * f * f * (f * (f * 6.0 - 15.0) + 10.0)
    return a + (b - a) * t


def _clamp(value: float, low: float, high: float) -> float:
    return max(low, min(value, high))


def _alpha(pixel: int) -> int:
    return (pixel >> 24) & 0xFF


def _channels(pixel: int) -> tuple[int, int, int, int]:
    return (pixel & 0xFF, (pixel >> 8) & 0xFF, (pixel >> 16) & 0xFF, (pixel >> 24) & 0xFF)


def _to_vec4(pixel: int) -> Vec4:
    r, g, b, a = _channels(pixel)
    return Vec4(r / 255.0, g / 255.0, b / 255.0, a / 255.0)


def _check_size(data: Sequence, w: int, h: int) -> None:
    if w <= 0 or h <= 0:
        raise ValueError("width and height must be positive")
    if len(data) < w * h:
        raise ValueError(f"data holds {len(data)} values, {w}x{h} needs {w * h}")


def get_cropped_dimensions(data: Sequence[int], w: int, h: int, cutoff: float) -> tuple[int, int, int, int]:
    """Return ``(left, top, right, bottom)`` of the pixels whose alpha exceeds the cutoff.

    ``cutoff`` is a fraction of full opacity. Sides with no such pixel keep
    the full-image bounds.
    """
    _check_size(data, w, h)
    limit = int(cutoff * 255)

    def opaque(x: int, y: int) -> bool:
        return _alpha(data[y * w + x]) > limit

    left = next((x for x in range(w) if any(opaque(x, y) for y in range(h))), 0)
    right = next((x for x in reversed(range(w)) if any(opaque(x, y) for y in range(h))), w - 1)
    top = next((y for y in range(h) if any(opaque(x, y) for x in range(w))), 0)
    bottom = next((y for y in range(h - 1, 0, -1) if any(opaque(x, y) for x in range(w))), h - 1)
    return left, top, right, bottom


def remove_transparent_colour(data: Sequence[int], colour: int) -> list[int]:
    """Return the pixels with every pixel of the given RGB colour made fully clear."""
    return [0 if (pixel & 0x00FFFFFF) == colour else pixel for pixel in data]


def set_alpha(data: Sequence[int], alpha: float) -> list[int]:
    """Return the pixels with their alpha replaced by ``alpha`` (0..1)."""
    level = min(0xFF, max(0x00, int(alpha * 255.0)))
    mask = level << 24
    return [(pixel & 0x00FFFFFF) | mask for pixel in data]


def merge(a: int, b: int, f: float) -> int:
    """Linearly blend two packed colours channel by channel."""
    result = 0
    for shift, (ca, cb) in zip((0, 8, 16, 24), zip(_channels(a), _channels(b))):
        result |= (int(_lerp(ca, cb, f)) & 0xFF) << shift
    return result & _MASK32


def merge_vec4(a: Vec4, b: Vec4, f: float) -> Vec4:
    """Blend two colours with a quintic (smootherstep) curve."""
    return Vec4(
        _smoother_lerp(a.r, b.r, f),
        _smoother_lerp(a.g, b.g, f),
        _smoother_lerp(a.b, b.b, f),
        _smoother_lerp(a.a, b.a, f),
    )


def _bilinear_corners(w: int, h: int, x: float, y: float):
    x = _clamp(x, 0.0, w - 1.0)
    y = _clamp(y, 0.0, h - 1.0)
    xi, yi = int(x), int(y)
    xj, yj = min(w - 1, xi + 1), min(h - 1, yi + 1)
    return (
        (yi * w + xi, yi * w + xj, yj * w + xi, yj * w + xj),
        x - xi,
        y - yi,
    )


def _nearest_index(w: int, h: int, x: float, y: float) -> int:
    x = _clamp(x, 0.0, w - 1.0)
    y = _clamp(y, 0.0, h - 1.0)
    return math.floor(y) * w + math.floor(x)


def sample(data: Sequence[int], w: int, h: int, u: float, v: float) -> int:
    """Bilinearly sample a packed colour at normalised coordinates."""
    return sample_pixel(data, w, h, u * w, v * h)


def sample_pixel(data: Sequence[int], w: int, h: int, x: float, y: float) -> int:
    """Bilinearly sample a packed colour at pixel coordinates, clamped to the edges."""
    _check_size(data, w, h)
    (ia, ib, ic, id_), xf, yf = _bilinear_corners(w, h, x, y)
    top = merge(data[ia], data[ib], xf)
    bottom = merge(data[ic], data[id_], xf)
    return merge(top, bottom, yf)


def sample_unfiltered(data: Sequence[int], w: int, h: int, u: float, v: float) -> int:
    """Sample the nearest packed colour at normalised coordinates."""
    return sample_pixel_unfiltered(data, w, h, u * w, v * h)


def sample_pixel_unfiltered(data: Sequence[int], w: int, h: int, x: float, y: float) -> int:
    """Sample the packed colour of the pixel containing ``(x, y)``."""
    _check_size(data, w, h)
    return data[_nearest_index(w, h, x, y)]


def sample_vec4(data: Sequence[int], w: int, h: int, u: float, v: float) -> Vec4:
    """Sample a colour as a :class:`Vec4` at normalised coordinates."""
    return sample_vec4_pixel(data, w, h, u * w, v * h)


def sample_vec4_pixel(data: Sequence[int], w: int, h: int, x: float, y: float) -> Vec4:
    """Sample a colour as a :class:`Vec4` at pixel coordinates with smooth blending."""
    _check_size(data, w, h)
    (ia, ib, ic, id_), xf, yf = _bilinear_corners(w, h, x, y)
    top = merge_vec4(_to_vec4(data[ia]), _to_vec4(data[ib]), xf)
    bottom = merge_vec4(_to_vec4(data[ic]), _to_vec4(data[id_]), xf)
    return merge_vec4(top, bottom, yf)


def sample_vec4_unfiltered(data: Sequence[int], w: int, h: int, u: float, v: float) -> Vec4:
    """Sample the nearest colour as a :class:`Vec4` at normalised coordinates."""
    return sample_vec4_pixel_unfiltered(data, w, h, u * w, v * h)


def sample_vec4_pixel_unfiltered(data: Sequence[int], w: int, h: int, x: float, y: float) -> Vec4:
    """Return the colour of the pixel containing ``(x, y)`` as a :class:`Vec4`."""
    _check_size(data, w, h)
    return _to_vec4(data[_nearest_index(w, h, x, y)])


def sample_float(data: Sequence[float], w: int, h: int, u: float, v: float) -> float:
    """Bilinearly sample a float grid at normalised coordinates."""
    return sample_float_pixel(data, w, h, u * w, v * h)


def sample_float_pixel(data: Sequence[float], w: int, h: int, x: float, y: float) -> float:
    """Bilinearly sample a float grid at pixel coordinates, clamped to the edges."""
    _check_size(data, w, h)
    (ia, ib, ic, id_), xf, yf = _bilinear_corners(w, h, x, y)
    top = _lerp(data[ia], data[ib], xf)
    bottom = _lerp(data[ic], data[id_], xf)
    return _lerp(top, bottom, yf)


def sample_float_unfiltered(data: Sequence[float], w: int, h: int, u: float, v: float) -> float:
    """Sample the nearest float at normalised coordinates."""
    return sample_float_pixel_unfiltered(data, w, h, u * w, v * h)


def sample_float_pixel_unfiltered(data: Sequence[float], w: int, h: int, x: float, y: float) -> float:
    """Return the float of the cell containing ``(x, y)``."""
    _check_size(data, w, h)
    return data[_nearest_index(w, h, x, y)]