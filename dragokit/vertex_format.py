"""Conversion of full 18-value vertices into compact vertex formats.

A full vertex holds, in order: position (x, y, z), normal (nx, ny, nz),
texture coordinate (u, v), packed colour, tangent (3), bitangent (3) and
barycentric coordinate (3).
"""

from __future__ import annotations

import enum
import math
from typing import Sequence

FULL_VERTEX_SIZE = 18


class VertexFormat(enum.IntFlag):
    """Attributes that can be written to a formatted vertex."""

    POSITION_2D = 0x00001
    POSITION_3D = 0x00002
    NORMAL = 0x00004
    TEXCOORD = 0x00008
    COLOUR = 0x00010
    TANGENT = 0x00020
    BITANGENT = 0x00040
    BARYCENTRIC = 0x00080
    SMALL_NORMAL = 0x00100
    SMALL_TANGENT = 0x00200
    SMALL_BITANGENT = 0x00400
    SMALL_TEXCOORD = 0x00800
    SMALL_NORMAL_PAL = 0x01000
    SMALL_BARYCENTRIC = 0x02000


def adjust(value: float, mn: float, mx: float, omin: float, omax: float) -> float:
    """Remap ``value`` from the range ``omin..omax`` to ``mn..mx``."""
    return mn + ((value - omin) / (omax - omin)) * (mx - mn)


def _to_uint(value: float) -> int:
    return int(value) & 0xFFFFFFFF


def _to_byte_range(value: float) -> float:
    return adjust(value, 0.0, 255.0, -1.0, 1.0)


def _pack3(a: float, b: float, c: float) -> int:
    return _to_uint(a + b * 256.0 + c * 65536.0)


def format_vertex(vertex: Sequence[float], fmt: int) -> list:
    """Return the values of one full vertex written in the given format.

    Missing trailing attributes count as zero. Packed attributes come out
    as unsigned 32-bit integers.
    """
    fmt = VertexFormat(fmt)
    values = list(vertex[:FULL_VERTEX_SIZE])
    values += [0] * (FULL_VERTEX_SIZE - len(values))
    x, y, z, nx, ny, nz, u, v, c, tax, tay, taz, bix, biy, biz, barx, bary, barz = values

    out: list = []
    if fmt & VertexFormat.POSITION_2D:
        out += [x, y]
    if fmt & VertexFormat.POSITION_3D:
        out += [x, y, z]
    if fmt & VertexFormat.NORMAL:
        out += [nx, ny, nz]
    if fmt & VertexFormat.TEXCOORD:
        out += [u, v]
    if fmt & VertexFormat.COLOUR:
        out.append(int(c) & 0xFFFFFFFF)
    if fmt & VertexFormat.BARYCENTRIC:
        out += [barx, bary, barz]
    if fmt & VertexFormat.TANGENT:
        out += [tax, tay, taz]
    if fmt & VertexFormat.BITANGENT:
        out += [bix, biy, biz]
    # The compact attributes below rescale the working values in sequence,
    # so a later attribute sees what an earlier one left behind.
    if fmt & VertexFormat.SMALL_NORMAL:
        nx, ny, nz = _to_byte_range(nx), _to_byte_range(ny), _to_byte_range(nz)
        out.append(_pack3(nx, ny, nz))
    if fmt & VertexFormat.SMALL_TANGENT:
        tax, tay, taz = _to_byte_range(tax), _to_byte_range(tay), _to_byte_range(taz)
        out.append(_pack3(tax, tay, taz))
    if fmt & VertexFormat.SMALL_BITANGENT:
        bix, biy, biz = _to_byte_range(bix), _to_byte_range(biy), _to_byte_range(biz)
        out.append(_pack3(bix, biy, biz))
    if fmt & VertexFormat.SMALL_TEXCOORD:
        u = math.floor(u * 255.0)
        v = math.floor(v * 255.0)
        out.append(_to_uint(u + v * 256.0))
    if fmt & VertexFormat.SMALL_NORMAL_PAL:
        nx, ny, nz = _to_byte_range(nx), _to_byte_range(ny), _to_byte_range(nz)
        u = math.floor(u * 255.0)
        out.append(_to_uint(nx + ny * 256.0 + nz * 65536.0 + u * 16777216.0))
    return out


def format_vertices(data: Sequence[float], fmt: int, vertex_size: int = FULL_VERTEX_SIZE) -> list:
    """Format every vertex of a flat buffer and return the flat result."""
    if vertex_size <= 0:
        raise ValueError("vertex_size must be positive")
    if len(data) % vertex_size:
        raise ValueError(f"buffer of {len(data)} values is not a whole number of {vertex_size}-value vertices")
    out: list = []
    for start in range(0, len(data), vertex_size):
        out.extend(format_vertex(data[start:start + vertex_size], fmt))
    return out