"""
Grain finisher — per-pixel colour jitter applied after all geometry.

By default the jitter comes from a fresh, unseeded numpy generator, so two
renders of the same seed differ only here. seeded_grain derives an
independent sub-stream from the seed hash instead; it never touches the
main SeededSequence.
"""

from __future__ import annotations

from typing import Optional

import numpy as np
from PIL import Image

from config import settings
from constructivist.sequence import seed_hash


def grain_rng(seed: str, seeded: Optional[bool] = None) -> np.random.Generator:
    if seeded is None:
        seeded = settings.GRAIN_SEEDED
    if seeded:
        return np.random.default_rng(seed_hash(seed))
    return np.random.default_rng()


def apply_grain(
    image: Image.Image,
    amount: Optional[float] = None,
    rng: Optional[np.random.Generator] = None,
) -> Image.Image:
    """
    Add one offset in [-amount/2, amount/2) per pixel to R, G and B.

    Values are rounded and clamped to [0, 255]; alpha is left alone. The
    image is modified in place and returned for chaining.
    """
    if amount is None:
        amount = settings.GRAIN_AMOUNT
    if rng is None:
        rng = np.random.default_rng()

    pixels = np.asarray(image, dtype=np.float32).copy()
    h, w = pixels.shape[:2]
    noise = (rng.random((h, w, 1), dtype=np.float32) - 0.5) * amount

    pixels[..., :3] += noise
    pixels = np.clip(np.rint(pixels), 0, 255).astype(np.uint8)

    image.paste(Image.fromarray(pixels))
    return image
