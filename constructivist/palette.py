"""
Palette derivation — five colour roles from two seeded draws.

The palette is strictly monochrome/neutral. Both draws are consumed before
the contrast branch so the rest of the sequence lines up either way.
"""

from __future__ import annotations

from dataclasses import dataclass

from constructivist.sequence import SeededSequence

Color = tuple[int, int, int, int]

DARK_MODE_THRESHOLD = 0.7
GRID_ALPHA = round(0.1 * 255)


@dataclass(frozen=True)
class Palette:
    """Role-based colours, RGBA 0-255."""
    bg: Color
    fg_primary: Color
    fg_secondary: Color
    accent: Color
    grid: Color

    def role(self, name: str) -> Color:
        return getattr(self, name)

    def to_dict(self) -> dict[str, str]:
        return {
            "bg": to_hex(self.bg),
            "fg_primary": to_hex(self.fg_primary),
            "fg_secondary": to_hex(self.fg_secondary),
            "accent": to_hex(self.accent),
            "grid": to_hex(self.grid),
        }


DARK_PALETTE = Palette(
    bg=(0x22, 0x22, 0x22, 255),
    fg_primary=(0xEE, 0xEE, 0xEE, 255),
    fg_secondary=(0xAA, 0xAA, 0xAA, 255),
    accent=(0xFF, 0xFF, 0xFF, 255),
    grid=(255, 255, 255, GRID_ALPHA),
)


def _tinted(level: int, tone_shift: int) -> Color:
    """Warm (+) or cool (-) shift around a grey level."""
    return (level + tone_shift, level, level - tone_shift, 255)


def derive_palette(seq: SeededSequence, contrast_mode: float) -> Palette:
    """
    Build the palette for one render.

    Always draws exactly two values (base grey, tone shift). High contrast
    returns the fixed dark palette and ignores them.
    """
    base_grey = seq.range_int(230, 250)
    tone_shift = seq.range_int(-5, 5)

    if contrast_mode > DARK_MODE_THRESHOLD:
        return DARK_PALETTE

    # Light mode (Bauhaus standard)
    return Palette(
        bg=_tinted(base_grey, tone_shift),
        fg_primary=(0x1A, 0x1A, 0x1A, 255),
        fg_secondary=_tinted(120, tone_shift),
        accent=_tinted(200, tone_shift),
        grid=(0, 0, 0, GRID_ALPHA),
    )


def to_hex(color: Color) -> str:
    """'#RRGGBB', or '#RRGGBBAA' when the colour is translucent."""
    r, g, b, a = color
    if a == 255:
        return f"#{r:02x}{g:02x}{b:02x}"
    return f"#{r:02x}{g:02x}{b:02x}{a:02x}"


def with_opacity(color: Color, opacity: float) -> Color:
    r, g, b, a = color
    return (r, g, b, round(a * opacity))
