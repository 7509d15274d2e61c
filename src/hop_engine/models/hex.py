"""Axial hex coordinates and grid geometry.

Cells use axial ``(q, r)`` coordinates with the implied cube coordinate
``s = -q - r``. Arenas are "diamond" shaped: a ``width`` by ``height``
parallelogram clipped by two limits on ``q + r``.

Example:
    >>> a, b = Hex(q=3, r=8), Hex(q=3, r=6)
    >>> hex_distance(a, b)
    2
    >>> direction_between(a, b)
    2
"""

from __future__ import annotations

import math

from pydantic import BaseModel, ConfigDict, Field


class Hex(BaseModel):
    """A cell of the hex grid in axial coordinates.

    Attributes:
        q: Column coordinate.
        r: Row coordinate.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    q: int = Field(description="Axial column")
    r: int = Field(description="Axial row")

    @property
    def s(self) -> int:
        """Third cube coordinate, derived from q and r."""
        return -self.q - self.r

    def __add__(self, other: Hex) -> Hex:
        return Hex(q=self.q + other.q, r=self.r + other.r)

    def __sub__(self, other: Hex) -> Hex:
        return Hex(q=self.q - other.q, r=self.r - other.r)

    def scale(self, factor: int) -> Hex:
        """Multiply both coordinates by ``factor``."""
        return Hex(q=self.q * factor, r=self.r * factor)

    def sort_key(self) -> tuple[int, int]:
        """Key giving a stable (r, q) ordering of cells."""
        return (self.r, self.q)


DIRECTIONS: list[Hex] = [
    Hex(q=1, r=0),
    Hex(q=1, r=-1),
    Hex(q=0, r=-1),
    Hex(q=-1, r=0),
    Hex(q=-1, r=1),
    Hex(q=0, r=1),
]
"""The six unit direction vectors, indexed 0 through 5."""


def hex_distance(a: Hex, b: Hex) -> int:
    """Return the number of steps between two cells."""
    return (abs(a.q - b.q) + abs(a.r - b.r) + abs(a.s - b.s)) // 2


def neighbors(cell: Hex) -> list[Hex]:
    """Return the six neighbours of ``cell`` in direction order."""
    return [cell + d for d in DIRECTIONS]


def is_straight_line(a: Hex, b: Hex) -> bool:
    """Check whether two distinct cells share an axial line."""
    if a == b:
        return False
    return a.q == b.q or a.r == b.r or a.s == b.s


def direction_between(a: Hex, b: Hex) -> int | None:
    """Return the direction index from ``a`` to ``b`` along a straight line.

    Args:
        a: Origin cell.
        b: Destination cell.

    Returns:
        Index into DIRECTIONS, or None when the cells are not on a line.
    """
    if not is_straight_line(a, b):
        return None
    dist = hex_distance(a, b)
    delta = b - a
    step = Hex(q=delta.q // dist, r=delta.r // dist)
    return DIRECTIONS.index(step)


def facing_towards(a: Hex, b: Hex) -> int:
    """Return the approximate direction index from ``a`` towards ``b``.

    Unlike :func:`direction_between` this always yields a facing, picking
    the nearest sextant by the sign of the axial deltas.
    """
    dq = b.q - a.q
    dr = b.r - a.r
    if dq > 0 and dr == 0:
        return 0
    if dq > 0 and dr < 0:
        return 1
    if dq == 0 and dr < 0:
        return 2
    if dq < 0 and dr == 0:
        return 3
    if dq < 0 and dr > 0:
        return 4
    return 5


def _round_half_up(value: float) -> int:
    return math.floor(value + 0.5)


def _cube_round(fq: float, fr: float) -> Hex:
    fs = -fq - fr
    q = _round_half_up(fq)
    r = _round_half_up(fr)
    s = _round_half_up(fs)
    dq = abs(q - fq)
    dr = abs(r - fr)
    ds = abs(s - fs)
    if dq > dr and dq > ds:
        q = -r - s
    elif dr > ds:
        r = -q - s
    return Hex(q=q, r=r)


def hex_line(a: Hex, b: Hex) -> list[Hex]:
    """Return the cells on the line from ``a`` to ``b``, both inclusive."""
    n = hex_distance(a, b)
    if n == 0:
        return [a]
    line = []
    for i in range(n + 1):
        t = i / n
        line.append(_cube_round(a.q + (b.q - a.q) * t, a.r + (b.r - a.r) * t))
    return line


def cells_between(a: Hex, b: Hex) -> list[Hex]:
    """Return the cells strictly between ``a`` and ``b`` on their line."""
    return hex_line(a, b)[1:-1]


def cells_in_direction(origin: Hex, direction: int, steps: int) -> list[Hex]:
    """Return ``steps`` cells walking from ``origin`` along ``direction``.

    The origin itself is excluded.
    """
    vector = DIRECTIONS[direction % 6]
    return [origin + vector.scale(i) for i in range(1, steps + 1)]


# =============================================================================
# Diamond Grid
# =============================================================================


def diamond_limits(width: int, height: int) -> tuple[int, int]:
    """Return the (top, bottom) limits on ``q + r`` for a diamond grid."""
    top = width // 2
    bottom = (width - 1) + (height - 1) - top
    return top, bottom


def in_diamond(cell: Hex, width: int, height: int) -> bool:
    """Check whether ``cell`` lies inside a ``width`` by ``height`` diamond."""
    if not (0 <= cell.q < width and 0 <= cell.r < height):
        return False
    top, bottom = diamond_limits(width, height)
    return top <= cell.q + cell.r <= bottom


def diamond_grid(width: int, height: int) -> list[Hex]:
    """Return every cell of a diamond grid in stable column-major order."""
    return [
        Hex(q=q, r=r)
        for q in range(width)
        for r in range(height)
        if in_diamond(Hex(q=q, r=r), width, height)
    ]


def diamond_spawn(width: int, height: int) -> Hex:
    """Return the bottom-centre player spawn cell of a diamond grid."""
    _, bottom = diamond_limits(width, height)
    return Hex(q=bottom - (height - 1), r=height - 1)


def diamond_stairs_default(width: int, height: int) -> Hex:
    """Return the top-centre fallback stairs cell of a diamond grid."""
    top, _ = diamond_limits(width, height)
    return Hex(q=top, r=0)


__all__ = [
    "Hex",
    "DIRECTIONS",
    "hex_distance",
    "neighbors",
    "is_straight_line",
    "direction_between",
    "facing_towards",
    "hex_line",
    "cells_between",
    "cells_in_direction",
    "diamond_limits",
    "in_diamond",
    "diamond_grid",
    "diamond_spawn",
    "diamond_stairs_default",
]
