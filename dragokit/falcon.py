"""Batch offsetting of vertex data for many copies of a mesh."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, MutableSequence, Sequence

BATCH_DATA_SIZE = 4
BATCH_DATA_SIZE_COLOR = 5


@dataclass
class Falcon:
    """Offsets consecutive runs of vertices in a combined buffer.

    Each batch describes one run: its length in bytes (four bytes per
    value), then the x, y, z offset to add to every vertex in it.
    """

    vertex_size: int = 9
    color_offset: int = 8

    def __post_init__(self) -> None:
        if self.vertex_size < 1:
            raise ValueError("vertex_size must be at least 1")

    def _runs(self, batches: Iterable[Sequence[float]]):
        index = 0
        for batch in batches:
            count = int(batch[0]) // 4
            yield index, count, batch
            index += count

    def combine(self, target: MutableSequence[float], batches: Iterable[Sequence[float]]) -> None:
        """Add each batch's ``(dx, dy, dz)`` to the positions of its vertices, in place."""
        for index, count, batch in self._runs(batches):
            _, dx, dy, dz = batch
            for start in range(index, index + count, self.vertex_size):
                target[start] += dx
                target[start + 1] += dy
                target[start + 2] += dz

    def combine_color(self, target: MutableSequence[float], batches: Iterable[Sequence[float]]) -> None:
        """Offset positions like :meth:`combine` and scale each vertex's colour value.

        Each batch carries a fifth value, the factor the colour is multiplied by.
        """
        for index, count, batch in self._runs(batches):
            _, dx, dy, dz, factor = batch
            for start in range(index, index + count, self.vertex_size):
                target[start] += dx
                target[start + 1] += dy
                target[start + 2] += dz
                target[start + self.color_offset] *= factor