"""Constructivist — seeded geometric composition → raster image pipeline."""

from constructivist.sequence import SeededSequence, seed_hash, random_seed
from constructivist.palette import Palette, derive_palette
from constructivist.grid import GridLayout, build_grid
from constructivist.state import ArtConfig, CompositionState, calculate_composition
from constructivist.renderer import render_composition, draw_composition, render_artwork
from constructivist.grain import apply_grain
from constructivist.variations import generate_variations

__all__ = [
    "SeededSequence",
    "seed_hash",
    "random_seed",
    "Palette",
    "derive_palette",
    "GridLayout",
    "build_grid",
    "ArtConfig",
    "CompositionState",
    "calculate_composition",
    "render_composition",
    "draw_composition",
    "render_artwork",
    "apply_grain",
    "generate_variations",
]
