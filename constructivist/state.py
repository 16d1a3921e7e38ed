"""
Composition state calculator — the layout engine.

Every seeded decision about the artwork is made here, before any pixel is
touched. The renderer only rasterises the resulting CompositionState, so
the plan is a pure function of (config, width, height).

Draw order is a contract: palette (2 draws), grid divisor (1), grid-line
Bernoulli draws (vertical then horizontal), shape placements with each
mirrored copy drawing its own style, then connective lines. Reordering any
of these changes the artwork for a given seed.
"""

from __future__ import annotations

import math
from dataclasses import dataclass, field, replace
from typing import Any, Optional

from constructivist.grid import GridLayout, build_grid
from constructivist.palette import Palette, derive_palette
from constructivist.sequence import SeededSequence, random_seed

ASPECT_RATIOS = ("1:1", "4:5", "9:16", "16:9")

SIZE_MULTIPLIERS = [1, 2, 3, 4, 6]
ARC_STARTS = [0, 90, 180, 270]
ARC_SPANS = [90, 180, 270]
STEM_DIRECTIONS = [(1, 0), (-1, 0), (0, 1), (0, -1)]

CENTER_BIAS_PROBABILITY = 0.6
HOLLOW_PROBABILITY = 0.6
ARC_PROBABILITY = 0.4
RECT_PROBABILITY = 0.7

SYMMETRY_X_THRESHOLD = 0.2
SYMMETRY_Y_THRESHOLD = 0.6

_UNIT_FIELDS = ("complexity", "line_density", "circle_emphasis", "symmetry", "contrast_mode")


@dataclass(frozen=True)
class ArtConfig:
    """
    The parameters of one artwork.

    Unit parameters are clamped into [0, 1]; an unknown aspect ratio is
    rejected. Use with_changes() to derive a new config.
    """
    seed: str = field(default_factory=random_seed)
    complexity: float = 0.6        # number of elements
    line_density: float = 0.5      # grid / hatching frequency
    circle_emphasis: float = 0.4   # likelihood of radial shapes
    symmetry: float = 0.2          # none -> mirror X -> mirror XY
    contrast_mode: float = 0.5     # light -> dark
    aspect_ratio: str = "4:5"

    def __post_init__(self) -> None:
        if not isinstance(self.seed, str):
            raise TypeError(f"seed must be a string, got {type(self.seed).__name__}")
        if self.aspect_ratio not in ASPECT_RATIOS:
            raise ValueError(
                f"Unknown aspect ratio {self.aspect_ratio!r}; expected one of {ASPECT_RATIOS}"
            )
        for name in _UNIT_FIELDS:
            value = float(getattr(self, name))
            if math.isnan(value):
                raise ValueError(f"{name} must be a number, got NaN")
            object.__setattr__(self, name, min(1.0, max(0.0, value)))

    @property
    def symmetry_x(self) -> bool:
        return self.symmetry > SYMMETRY_X_THRESHOLD

    @property
    def symmetry_y(self) -> bool:
        return self.symmetry > SYMMETRY_Y_THRESHOLD

    def with_changes(self, **changes: Any) -> ArtConfig:
        return replace(self, **changes)

    def to_dict(self) -> dict[str, Any]:
        return {
            "seed": self.seed,
            "complexity": self.complexity,
            "line_density": self.line_density,
            "circle_emphasis": self.circle_emphasis,
            "symmetry": self.symmetry,
            "contrast_mode": self.contrast_mode,
            "aspect_ratio": self.aspect_ratio,
        }

    @classmethod
    def from_dict(cls, d: dict[str, Any]) -> ArtConfig:
        return cls(**{k: v for k, v in d.items() if k in cls.__dataclass_fields__})


@dataclass(frozen=True)
class Segment:
    """An axis-aligned stroke in canvas coordinates."""
    x0: float
    y0: float
    x1: float
    y1: float


@dataclass
class ElementState:
    """One drawn element; mirrored copies are separate elements."""
    index: int                 # placement iteration
    mirror: str                # "none" | "x" | "y" | "xy"
    variant: str               # "circle" | "rect" | "complex"
    x: float
    y: float
    width: float
    height: float
    hollow: bool
    line_width: float
    fill_role: str             # "fg_secondary" | "accent"
    arc: Optional[tuple[int, int]] = None   # (start, end) degrees, clockwise
    rings: list[float] = field(default_factory=list)
    hatch_step: Optional[int] = None
    stem: Optional[tuple[int, int]] = None
    node_radius: float = 0.0

    @property
    def radius(self) -> float:
        return min(self.width, self.height) / 2


@dataclass
class CompositionState:
    """Complete layout of one artwork."""
    config: ArtConfig
    width: int
    height: int
    palette: Palette
    grid: GridLayout
    grid_lines: list[Segment] = field(default_factory=list)
    elements: list[ElementState] = field(default_factory=list)
    lines: list[Segment] = field(default_factory=list)
    num_shapes: int = 0
    num_lines: int = 0

    @property
    def symmetry_x(self) -> bool:
        return self.config.symmetry_x

    @property
    def symmetry_y(self) -> bool:
        return self.config.symmetry_y

    @property
    def mirror_factor(self) -> int:
        return (2 if self.symmetry_x else 1) * (2 if self.symmetry_y else 1)


def _plan_grid_lines(
    seq: SeededSequence,
    grid: GridLayout,
    line_density: float,
) -> list[Segment]:
    """One Bernoulli draw per vertical line, then per horizontal line."""
    lines = []
    for x in grid.vertical_lines():
        if seq.boolean(line_density):
            lines.append(Segment(x, 0, x, grid.height))
    for y in grid.horizontal_lines():
        if seq.boolean(line_density):
            lines.append(Segment(0, y, grid.width, y))
    return lines


def _plan_element(
    seq: SeededSequence,
    config: ArtConfig,
    grid: GridLayout,
    index: int,
    mirror: str,
    x: float,
    y: float,
    size: float,
    variant: str,
) -> ElementState:
    """Style draws for a single copy of a placed shape."""
    element = ElementState(
        index=index,
        mirror=mirror,
        variant=variant,
        x=x,
        y=y,
        width=size,
        height=size,
        hollow=seq.boolean(HOLLOW_PROBABILITY),
        line_width=seq.pick([1, 2, 4, grid.cell_size / 8]),
        fill_role="fg_secondary" if seq.boolean(0.5) else "accent",
    )

    if variant == "circle":
        if seq.boolean(ARC_PROBABILITY):
            start = seq.pick(ARC_STARTS)
            element.arc = (start, start + seq.pick(ARC_SPANS))
        if seq.boolean(config.complexity):
            steps = seq.range_int(2, 5)
            element.rings = [element.radius * (1 - i / steps) for i in range(1, steps)]
    elif variant == "rect":
        if seq.boolean(config.line_density):
            element.hatch_step = seq.range_int(4, 10)
    elif variant == "complex":
        element.node_radius = grid.cell_size / 4
        element.stem = seq.pick(STEM_DIRECTIONS)

    return element


def _plan_shapes(
    seq: SeededSequence,
    config: ArtConfig,
    grid: GridLayout,
    num_shapes: int,
) -> list[ElementState]:
    width, height = grid.width, grid.height
    cell = grid.cell_size
    center_x = width / 2
    center_y = height / 2

    elements: list[ElementState] = []
    for i in range(num_shapes):
        # Snap to grid
        gx = seq.range_int(0, grid.cols) * cell
        gy = seq.range_int(0, grid.rows) * cell

        # Bias towards center for composition
        if seq.boolean(CENTER_BIAS_PROBABILITY):
            gx = center_x + seq.range_int(-grid.cols / 4, grid.cols / 4) * cell
            gy = center_y + seq.range_int(-grid.rows / 4, grid.rows / 4) * cell

        size = cell * seq.pick(SIZE_MULTIPLIERS)
        if seq.next() < config.circle_emphasis:
            variant = "circle"
        else:
            variant = "rect" if seq.boolean(RECT_PROBABILITY) else "complex"

        copies = [("none", gx, gy)]
        if config.symmetry_x:
            copies.append(("x", width - gx, gy))
        if config.symmetry_y:
            copies.append(("y", gx, height - gy))
            if config.symmetry_x:
                copies.append(("xy", width - gx, height - gy))

        for mirror, x, y in copies:
            elements.append(
                _plan_element(seq, config, grid, i, mirror, x, y, size, variant)
            )

    return elements


def _plan_connective_lines(
    seq: SeededSequence,
    config: ArtConfig,
    grid: GridLayout,
    num_lines: int,
) -> list[Segment]:
    """Circuit-board style runs; mirrored across the vertical midline only."""
    cell = grid.cell_size
    segments = []
    for _ in range(num_lines):
        x1 = seq.range_int(0, grid.cols) * cell
        y1 = seq.range_int(0, grid.rows) * cell
        length = cell * seq.range_int(2, 8)
        is_vertical = seq.boolean()

        x2 = x1 if is_vertical else x1 + length
        y2 = y1 + length if is_vertical else y1

        segments.append(Segment(x1, y1, x2, y2))
        if config.symmetry_x:
            segments.append(Segment(grid.width - x1, y1, grid.width - x2, y2))
    return segments


def calculate_composition(config: ArtConfig, width: int, height: int) -> CompositionState:
    """
    Calculate the full composition from config and canvas size.

    Owns the one SeededSequence for this render and consumes it in the
    documented order.
    """
    seq = SeededSequence(config.seed)

    palette = derive_palette(seq, config.contrast_mode)
    grid = build_grid(seq, width, height)

    # ── Technical grid ───────────────────────────────────────────────
    grid_lines = _plan_grid_lines(seq, grid, config.line_density)

    # ── Shapes with symmetry ─────────────────────────────────────────
    num_shapes = math.floor(5 + config.complexity * 25)
    elements = _plan_shapes(seq, config, grid, num_shapes)

    # ── Connective lines ─────────────────────────────────────────────
    num_lines = math.floor(config.complexity * 15)
    lines = _plan_connective_lines(seq, config, grid, num_lines)

    return CompositionState(
        config=config,
        width=width,
        height=height,
        palette=palette,
        grid=grid,
        grid_lines=grid_lines,
        elements=elements,
        lines=lines,
        num_shapes=num_shapes,
        num_lines=num_lines,
    )
