"""Layout grid — square cells sized by a seeded divisor of the shorter side."""

from __future__ import annotations

import math
from dataclasses import dataclass

from constructivist.sequence import SeededSequence


@dataclass(frozen=True)
class GridLayout:
    width: int
    height: int
    divisor: int
    cell_size: int
    cols: int
    rows: int

    def vertical_lines(self) -> list[int]:
        """x positions 0, cell, 2*cell ... up to and including width."""
        return list(range(0, self.width + 1, self.cell_size))

    def horizontal_lines(self) -> list[int]:
        return list(range(0, self.height + 1, self.cell_size))


def build_grid(seq: SeededSequence, width: int, height: int) -> GridLayout:
    """
    Draw the divisor in [8, 16) and derive the cell grid.

    Cell size is clamped to at least 1 px so tiny canvases still produce a
    finite grid.
    """
    if width <= 0 or height <= 0:
        raise ValueError(f"Canvas must have positive size, got {width}x{height}")

    divisor = seq.range_int(8, 16)
    cell_size = max(1, math.floor(min(width, height) / divisor))

    return GridLayout(
        width=width,
        height=height,
        divisor=divisor,
        cell_size=cell_size,
        cols=math.ceil(width / cell_size),
        rows=math.ceil(height / cell_size),
    )
