"""
Seed variations.

Generates N artworks with identical parameters but different seeds,
producing visually distinct compositions from one configuration. Seeds are
derived as "<base>-<i>" so a batch is itself reproducible from its base.
"""

from __future__ import annotations

from typing import Optional

from PIL import Image

from config import settings
from constructivist.renderer import draw_composition
from constructivist.sequence import random_seed
from constructivist.state import ArtConfig, CompositionState


def variation_seeds(base_seed: str, n: int) -> list[str]:
    return [f"{base_seed}-{i}" for i in range(n)]


def regenerate(config: ArtConfig) -> ArtConfig:
    """Same parameters, fresh random seed."""
    return config.with_changes(seed=random_seed())


def generate_variations(
    config: ArtConfig,
    n: Optional[int] = None,
    width: Optional[int] = None,
    height: Optional[int] = None,
    base_seed: Optional[str] = None,
    grain: bool = True,
) -> list[tuple[CompositionState, Image.Image]]:
    """
    Render n seed variations of config.

    Args:
        config: Parameters to hold constant.
        n: Number of variations (defaults to settings.NUM_VARIATIONS).
        width, height: Canvas size (defaults to the configured canvas).
        base_seed: Seed prefix; defaults to config.seed.
        grain: Whether to apply the grain finish.

    Returns:
        List of (CompositionState, PIL.Image) tuples.
    """
    if n is None:
        n = settings.NUM_VARIATIONS
    if width is None:
        width = settings.CANVAS_WIDTH
    if height is None:
        height = settings.CANVAS_HEIGHT
    if base_seed is None:
        base_seed = config.seed

    print(f"[Variations] Rendering {n} variations of {base_seed!r} at {width}x{height}")

    results: list[tuple[CompositionState, Image.Image]] = []
    for seed in variation_seeds(base_seed, n):
        image = Image.new("RGB", (width, height))
        state = draw_composition(image, config.with_changes(seed=seed), grain=grain)
        results.append((state, image))

    return results
