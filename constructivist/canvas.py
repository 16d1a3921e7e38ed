"""
Canvas sizing — turns an aspect ratio plus a container or export target into
concrete pixel dimensions. The engine itself only ever sees width/height.
"""

from __future__ import annotations

from typing import Optional

from config import settings
from constructivist.state import ASPECT_RATIOS


def parse_aspect_ratio(aspect_ratio: str) -> tuple[int, int]:
    """'16:9' -> (16, 9). Rejects anything outside the supported set."""
    if aspect_ratio not in ASPECT_RATIOS:
        raise ValueError(
            f"Unknown aspect ratio {aspect_ratio!r}; expected one of {ASPECT_RATIOS}"
        )
    rw, rh = aspect_ratio.split(":")
    return int(rw), int(rh)


def fit_to_container(
    container_width: float,
    container_height: float,
    aspect_ratio: str,
    padding: Optional[int] = None,
) -> tuple[float, float]:
    """
    Largest canvas of the given ratio inside the padded container.

    Falls back to the configured default canvas when the container has not
    been measured yet.
    """
    if padding is None:
        padding = settings.CANVAS_PADDING
    if not container_width:
        return settings.CANVAS_WIDTH, settings.CANVAS_HEIGHT

    rw, rh = parse_aspect_ratio(aspect_ratio)
    ratio = rw / rh
    avail_w = container_width - padding * 2
    avail_h = container_height - padding * 2

    if avail_w / ratio <= avail_h:
        return avail_w, avail_w / ratio
    return avail_h * ratio, avail_h


def scale_for_device(width: float, height: float, device_pixel_ratio: float = 1.0) -> tuple[int, int]:
    """Backing-store pixels for a logical canvas on a high-DPI display."""
    dpr = device_pixel_ratio or 1.0
    return max(1, int(width * dpr)), max(1, int(height * dpr))


def export_dimensions(aspect_ratio: str, base_size: Optional[int] = None) -> tuple[int, int]:
    """Longest side pinned to base_size, the other side proportional."""
    if base_size is None:
        base_size = settings.EXPORT_BASE_SIZE
    rw, rh = parse_aspect_ratio(aspect_ratio)

    width = base_size if rw >= rh else base_size * rw / rh
    height = base_size if rh > rw else base_size * rh / rw
    return int(width), int(height)
