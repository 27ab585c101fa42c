"""Packing of rectangular sprites into a single texture atlas."""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Sequence


@dataclass
class Sprite:
    """A sprite of size ``w`` by ``h`` placed at ``(x, y)`` in the atlas."""

    w: int
    h: int
    x: int = 0
    y: int = 0


def _collides(sprites: Sequence[Sprite], index: int, x: int, y: int, stride: int) -> bool:
    own = sprites[index]
    for n, other in enumerate(sprites):
        if n == index:
            continue
        apart = (
            other.x + other.w + stride < x
            or other.x > x + own.w + stride
            or other.y + other.h + stride < y
            or other.y > y + own.h + stride
        )
        if not apart:
            return True
    return False


def _place(sprites: Sequence[Sprite], index: int, maxx: int, maxy: int, stride: int) -> bool:
    for x in range(0, maxx, stride):
        for y in range(0, maxy, stride):
            if not _collides(sprites, index, x, y, stride):
                sprites[index].x = x
                sprites[index].y = y
                return True
    return False


def _next_power_of_two(value: int) -> int:
    return 1 << math.ceil(math.log2(max(1, value)))


def pack(sprites: Sequence[Sprite], stride: int = 1, force_po2: bool = False) -> tuple[int, int]:
    """Place every sprite and return the atlas size ``(width, height)``.

    Sprites are placed in order, each in the first free spot found on a
    grid of step ``stride``; when none is free the atlas grows. The sprites'
    ``x`` and ``y`` are updated in place. With ``force_po2`` both sides of
    the atlas are rounded up to powers of two.
    """
    if stride <= 0:
        raise ValueError("stride must be positive")
    maxx = maxy = nextx = nexty = 0
    for index, sprite in enumerate(sprites):
        if maxx == 0:
            sprite.x, sprite.y = 0, 0
            nextx += sprite.w + stride
        elif not _place(sprites, index, maxx, maxy, stride):
            if nextx + sprite.w > maxy:
                nexty = maxy
                nextx = 0
            sprite.x, sprite.y = nextx, nexty
            nextx += sprite.w + stride
        maxx = max(maxx, sprite.x + sprite.w + stride)
        maxy = max(maxy, sprite.y + sprite.h + stride)

    if force_po2:
        maxx = _next_power_of_two(maxx)
        maxy = _next_power_of_two(maxy)
    return maxx, maxy