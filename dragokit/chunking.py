"""Splitting a triangle buffer into square chunks on the x/y plane."""

from __future__ import annotations

import math
from collections import Counter

from .vertex_format import FULL_VERTEX_SIZE


class ChunkGrid:
    """A grid of square chunks covering ``startx..endx`` by ``starty..endy``.

    Each chunk is identified by its address, an integer computed from the
    chunk's column and row. A triangle is assigned to every distinct chunk
    that one of its vertices falls in.
    """

    def __init__(self, chunk_size: int, startx: float, starty: float, endx: float, endy: float,
                 vertex_size: int = FULL_VERTEX_SIZE) -> None:
        if chunk_size <= 0:
            raise ValueError("chunk_size must be positive")
        if vertex_size < 2:
            raise ValueError("vertex_size must be at least 2")
        self.chunk_size = int(chunk_size)
        self.startx = startx
        self.starty = starty
        self.endx = endx
        self.endy = endy
        self.vertex_size = vertex_size
        self.countx = (endx - startx) / self.chunk_size
        self.county = (endy - starty) / self.chunk_size

    def address(self, x: float, y: float) -> int:
        """Return the address of the chunk that contains the point ``(x, y)``."""
        column = math.floor((x - self.startx) / self.chunk_size)
        row = math.floor((y - self.starty) / self.chunk_size)
        return int(2 * (column * self.county + row))

    def _triangles(self, data: list):
        step = self.vertex_size * 3
        if len(data) % step:
            raise ValueError(f"buffer of {len(data)} values is not a whole number of {step}-value triangles")
        for start in range(0, len(data), step):
            vertices = [start + k * self.vertex_size for k in range(3)]
            addresses = dict.fromkeys(self.address(data[v], data[v + 1]) for v in vertices)
            yield vertices, list(addresses)

    def analyze(self, data: list) -> dict[int, int]:
        """Return how many vertices each chunk will receive from :meth:`split`."""
        counts: Counter[int] = Counter()
        for _, addresses in self._triangles(data):
            for address in addresses:
                counts[address] += 3
        return dict(counts)

    def split(self, data: list) -> dict[int, list]:
        """Return each chunk's vertices as a flat buffer of 18-value vertices.

        Values 9 to 17 of each vertex come out rotated by three: the input's
        values 12-17 come first, then its values 9-11.
        """
        if self.vertex_size < FULL_VERTEX_SIZE:
            raise ValueError(f"vertex_size must be at least {FULL_VERTEX_SIZE}")
        chunks: dict[int, list] = {}
        for vertices, addresses in self._triangles(data):
            written = []
            for v in vertices:
                written += data[v:v + 9] + data[v + 12:v + 18] + data[v + 9:v + 12]
            for address in addresses:
                chunks.setdefault(address, []).extend(written)
        return chunks