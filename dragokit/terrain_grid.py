"""A terrain heightfield and the vertex buffers kept in step with it.

Heights are stored column by column: the height at ``(x, y)`` lives at
index ``x * height + y``. Each grid cell is drawn as two triangles, six
vertices of three values (x, y, z), so a cell takes eighteen values in a
vertex buffer. Cells are grouped into square blocks of ``CELL_SIZE``
cells; :func:`vertex_index` gives where a cell's vertices start.
"""

from __future__ import annotations

from typing import Optional, Sequence

CELL_SIZE = 256
LOD_REDUCTION = 8
CELL_VALUES = 18

# Fractional parts packed into the x and y of each generated vertex.
# x carries the barycentric corner, y the triangle and its texture offsets.
_BC0, _BC1, _BC2 = 0.5, 0.25, 0.125
_T0, _T1 = 0.0, 0.5
_U, _V = 0.25, 0.125

_MAX_FLOOR = -1e10
_MIN_CEILING = 1e10

Vector = tuple[float, float, float]


def max_height(data: Sequence[float]) -> float:
    """Return the largest value in ``data``, or -1e10 for an empty sequence."""
    return max((_MAX_FLOOR, *data))


def min_height(data: Sequence[float]) -> float:
    """Return the smallest value in ``data``, or 1e10 for an empty sequence."""
    return min((_MIN_CEILING, *data))


def vertex_index(cell_size: int, x: int, y: int, w: int, h: int, vertex: int) -> int:
    """Return the buffer index of vertex ``vertex`` (0-5) of cell ``(x, y)``.

    The grid is ``w`` by ``h`` cells, split into blocks of ``cell_size``
    cells a side; blocks at the right and bottom edges may be smaller.
    """
    if cell_size <= 0:
        raise ValueError("cell_size must be positive")
    column_size = cell_size * h
    chunk_x, chunk_y = x // cell_size, y // cell_size
    local_x, local_y = x % cell_size, y % cell_size
    chunk_width = min(cell_size, w - chunk_x * cell_size)
    chunk_height = min(cell_size, h - chunk_y * cell_size)
    chunk_address = chunk_x * column_size + chunk_y * cell_size * chunk_width
    base_address = chunk_address + local_x * chunk_height + local_y
    return (base_address * 6 + vertex) * 3


def _sub(a: Sequence[float], b: Sequence[float]) -> Vector:
    return (a[0] - b[0], a[1] - b[1], a[2] - b[2])


def _dot(a: Sequence[float], b: Sequence[float]) -> float:
    return a[0] * b[0] + a[1] * b[1] + a[2] * b[2]


def _cross(a: Sequence[float], b: Sequence[float]) -> Vector:
    return (
        a[1] * b[2] - a[2] * b[1],
        a[2] * b[0] - a[0] * b[2],
        a[0] * b[1] - a[1] * b[0],
    )


def ray_triangle(origin: Sequence[float], direction: Sequence[float],
                 a: Sequence[float], b: Sequence[float], c: Sequence[float]) -> Optional[Vector]:
    """Intersect a ray with triangle ``abc``.

    Return ``(t, u, v)`` where the hit point is ``origin + t * direction``
    and ``a + u * (b - a) + v * (c - a)``, or ``None`` if the ray misses or
    runs parallel to the triangle.
    """
    edge1 = _sub(b, a)
    edge2 = _sub(c, a)
    pvec = _cross(direction, edge2)
    det = _dot(edge1, pvec)
    if det == 0:
        return None
    tvec = _sub(origin, a)
    u = _dot(tvec, pvec)
    if det > 0:
        if u < 0.0 or u > det:
            return None
        qvec = _cross(tvec, edge1)
        v = _dot(direction, qvec)
        if v < 0.0 or u + v > det:
            return None
    else:
        if u > 0.0 or u < det:
            return None
        qvec = _cross(tvec, edge1)
        v = _dot(direction, qvec)
        if v > 0.0 or u + v < det:
            return None
    inv_det = 1.0 / det
    return (_dot(edge2, qvec) * inv_det, u * inv_det, v * inv_det)


class Terrain:
    """A ``width`` by ``height`` heightfield with full and reduced-detail vertex buffers.

    ``vertices`` holds eighteen values per cell of the full grid and
    ``lod_vertices`` the same for the grid reduced by ``LOD_REDUCTION``.
    Height changes made through :meth:`set_z` are written to both.
    """

    cell_size = CELL_SIZE
    lod_reduction = LOD_REDUCTION

    def __init__(self, width: int, height: int, heights: Optional[Sequence[float]] = None) -> None:
        if width <= 0 or height <= 0:
            raise ValueError("width and height must be positive")
        size = width * height
        if heights is None:
            values = [0.0] * size
        else:
            values = [float(value) for value in heights]
            if len(values) != size:
                raise ValueError(f"{width}x{height} terrain needs {size} heights, got {len(values)}")
        self.width = width
        self.height = height
        self.heights = values
        self.lod_width = width // self.lod_reduction
        self.lod_height = height // self.lod_reduction
        self.vertices = [0.0] * (size * CELL_VALUES)
        self.lod_vertices = [0.0] * (self.lod_width * self.lod_height * CELL_VALUES)

    def _index(self, x: int, y: int) -> int:
        if not (0 <= x < self.width and 0 <= y < self.height):
            raise IndexError(f"({x}, {y}) is outside the {self.width}x{self.height} terrain")
        return x * self.height + y

    def get_z(self, x: int, y: int) -> float:
        """Return the height at ``(x, y)``."""
        return self.heights[self._index(x, y)]

    @staticmethod
    def _put(buffer: list, cell_size: int, x: int, y: int, w: int, h: int, vertex: int, value: float) -> None:
        if 0 <= x < w and 0 <= y < h:
            buffer[vertex_index(cell_size, x, y, w, h, vertex) + 2] = value

    def set_z(self, x: int, y: int, value: float) -> None:
        """Set the height at ``(x, y)`` and every vertex that shares it."""
        self.heights[self._index(x, y)] = value
        w, h = self.width, self.height
        r = self.lod_reduction
        cs = self.cell_size
        lcs = cs // r
        lw, lh = self.lod_width, self.lod_height
        corner = x % r == 0 and y % r == 0
        vertices, lod = self.vertices, self.lod_vertices

        if x > 0 and y > 0:
            self._put(vertices, cs, x - 1, y - 1, w, h, 2, value)
            self._put(vertices, cs, x - 1, y - 1, w, h, 3, value)
            if corner:
                self._put(lod, lcs, x // r - 1, y // r - 1, lw, lh, 2, value)
                self._put(lod, lcs, x // r - 1, y // r - 1, lw, lh, 3, value)
        if x < w and y > 0:
            self._put(vertices, cs, x, y - 1, w, h, 4, value)
            if corner:
                self._put(lod, lcs, x // r, y // r - 1, lw, lh, 4, value)
        if x > 0 and y < h - 1:
            self._put(vertices, cs, x - 1, y, w, h, 1, value)
            if corner:
                self._put(lod, lcs, x // r - 1, y // r, lw, lh, 1, value)
        if x < w and y < h - 1:
            self._put(vertices, cs, x, y, w, h, 0, value)
            self._put(vertices, cs, x, y, w, h, 5, value)
            if corner:
                self._put(lod, lcs, x // r, y // r, lw, lh, 0, value)
                self._put(lod, lcs, x // r, y // r, lw, lh, 5, value)

    def add_z(self, x: int, y: int, value: float) -> None:
        """Raise the height at ``(x, y)`` by ``value``."""
        self.set_z(x, y, self.get_z(x, y) + value)

    def to_heightmap(self) -> list[int]:
        """Return opaque grey pixels, brightest at the highest point."""
        top = max_height(self.heights)
        pixels = []
        for value in self.heights:
            level = 0 if top == 0 else max(0, min(255, int(255.0 * value / top)))
            pixels.append(0xFF000000 | level | (level << 8) | (level << 16))
        return pixels

    def from_heightmap(self, pixels: Sequence[int], scale: float = 1.0) -> None:
        """Set every height from the red channel of ``pixels``, scaled to ``0..scale``.

        The vertex buffers are left as they are.
        """
        size = self.width * self.height
        if len(pixels) < size:
            raise ValueError(f"heightmap holds {len(pixels)} pixels, terrain needs {size}")
        self.heights = [(int(pixel) & 0xFF) / 255.0 * scale for pixel in pixels[:size]]

    def flatten(self, height: float) -> None:
        """Set every height, and every vertex, to ``height``."""
        self.heights = [height] * len(self.heights)
        for buffer in (self.vertices, self.lod_vertices):
            buffer[2::3] = [height] * len(buffer[2::3])

    def apply_scale(self, scale: float) -> None:
        """Multiply every height, and every vertex height, by ``scale``."""
        self.heights = [value * scale for value in self.heights]
        for buffer in (self.vertices, self.lod_vertices):
            buffer[2::3] = [value * scale for value in buffer[2::3]]

    def generate_internal(self) -> list[float]:
        """Fill and return the full-detail vertex buffer."""
        w, h = self.width, self.height
        out = self.vertices
        z = self.get_z
        for i in range(w - 1):
            for j in range(h - 1):
                base = vertex_index(self.cell_size, i, j, w, h, 0)
                out[base:base + CELL_VALUES] = [
                    i + _BC0, j + _T0, z(i, j),
                    i + 1 + _BC1, j + _T0 + _U, z(i + 1, j),
                    i + 1 + _BC2, j + 1 + _T0 + _U + _V, z(i + 1, j + 1),
                    i + 1 + _BC0, j + 1 + _T1 + _U + _V, z(i + 1, j + 1),
                    i + _BC1, j + 1 + _T1 + _V, z(i, j + 1),
                    i + _BC2, j + _T1, z(i, j),
                ]
        return out

    def generate_lod_internal(self) -> list[float]:
        """Fill and return the reduced-detail vertex buffer."""
        r = self.lod_reduction
        lw, lh = self.lod_width, self.lod_height
        cs = self.cell_size // r
        out = self.lod_vertices
        z = self.get_z
        for i in range(lw - 1):
            for j in range(lh - 1):
                x0, y0 = i * r, j * r
                x1, y1 = x0 + r, y0 + r
                base = vertex_index(cs, i, j, lw, lh, 0)
                out[base:base + CELL_VALUES] = [
                    x0 + _BC0, y0 + _T0, z(x0, y0),
                    x1 + _BC1, y0 + _T0 + _U, z(x1, y0),
                    x1 + _BC2, y1 + _T0 + _U + _V, z(x1, y1),
                    x1 + _BC0, y1 + _T1 + _U + _V, z(x1, y1),
                    x0 + _BC1, y1 + _T1 + _V, z(x0, y1),
                    x0 + _BC2, y0 + _T1, z(x0, y0),
                ]
        return out