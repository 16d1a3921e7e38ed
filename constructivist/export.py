"""
High-resolution export — renders the artwork at export size and writes a PNG.

The same pipeline as the preview, just with bigger numbers: the export has
the longest side pinned to EXPORT_BASE_SIZE.
"""

from __future__ import annotations

import io
import time
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from config import settings
from constructivist.canvas import export_dimensions
from constructivist.renderer import render_artwork
from constructivist.state import ArtConfig


def export_filename(seed: str, timestamp_ms: Optional[int] = None) -> str:
    if timestamp_ms is None:
        timestamp_ms = int(time.time() * 1000)
    return f"constructivist-{seed}-{timestamp_ms}.png"


def render_png_bytes(config: ArtConfig, width: int, height: int) -> bytes:
    """Render and encode as PNG, for download buttons and HTTP responses."""
    image = render_artwork(config, width, height)
    buffer = io.BytesIO()
    image.save(buffer, format="PNG")
    return buffer.getvalue()


@dataclass
class HQExport:
    """An encoded HQ render, tied to the config it was made from."""
    config: ArtConfig
    width: int
    height: int
    filename: str
    data: bytes

    def matches(self, config: ArtConfig) -> bool:
        return self.config == config


def prepare_hq_export(config: ArtConfig, base_size: Optional[int] = None) -> HQExport:
    """Render at export dimensions and keep the PNG in memory for download."""
    width, height = export_dimensions(config.aspect_ratio, base_size)
    data = render_png_bytes(config, width, height)
    print(f"[Export] Prepared {width}x{height} PNG ({len(data)} bytes) for seed {config.seed!r}")
    return HQExport(
        config=config,
        width=width,
        height=height,
        filename=export_filename(config.seed),
        data=data,
    )


def export_artwork(
    config: ArtConfig,
    out_dir: Optional[str | Path] = None,
    base_size: Optional[int] = None,
    filename: Optional[str] = None,
) -> Path:
    """Render at export dimensions and save to disk. Returns the output path."""
    out_dir = Path(out_dir) if out_dir is not None else settings.OUTPUTS_DIR
    width, height = export_dimensions(config.aspect_ratio, base_size)

    path = out_dir / (filename or export_filename(config.seed))
    path.parent.mkdir(parents=True, exist_ok=True)

    image = render_artwork(config, width, height)
    image.save(str(path), format="PNG")
    print(f"[Export] Wrote {width}x{height} artwork to {path}")
    return path
