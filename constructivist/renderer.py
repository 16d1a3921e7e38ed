"""
Pillow rasteriser — CompositionState → RGB image.

Layers are painted in a fixed order with no depth sorting: background,
technical grid, shapes (with mirrored copies), connective lines, then the
grain finish. Every primitive is drawn from absolute coordinates held in the
plan, so no drawing state carries over between elements.
"""

from __future__ import annotations

from typing import Optional

from PIL import Image, ImageDraw

from config import settings
from constructivist.grain import apply_grain, grain_rng
from constructivist.palette import Palette, with_opacity
from constructivist.state import (
    ArtConfig,
    CompositionState,
    ElementState,
    Segment,
    calculate_composition,
)

FILL_OPACITY = 0.8
DOT_RADIUS = 2


def _px(width: float) -> int:
    """Pillow strokes take whole pixels."""
    return max(1, round(width))


def _bbox(cx: float, cy: float, rx: float, ry: float) -> tuple[float, float, float, float]:
    return (cx - rx, cy - ry, cx + rx, cy + ry)


def _stroke(draw: ImageDraw.ImageDraw, seg: Segment, color, width: float = 1) -> None:
    draw.line([(seg.x0, seg.y0), (seg.x1, seg.y1)], fill=color, width=_px(width))


# ------------------------------------------------------------------
# Element primitives
# ------------------------------------------------------------------

def _draw_circle(draw: ImageDraw.ImageDraw, el: ElementState, palette: Palette) -> None:
    r = el.radius
    box = _bbox(el.x, el.y, r, r)
    stroke = palette.fg_primary
    fill = with_opacity(palette.role(el.fill_role), FILL_OPACITY)

    if el.arc is not None:
        start, end = el.arc
        if not el.hollow:
            draw.chord(box, start, end, fill=fill)
        draw.arc(box, start, end, fill=stroke, width=_px(el.line_width))
    else:
        if not el.hollow:
            draw.ellipse(box, fill=fill)
        draw.ellipse(box, outline=stroke, width=_px(el.line_width))

    # Inner concentric circles
    for ring in el.rings:
        draw.ellipse(_bbox(el.x, el.y, ring, ring), outline=stroke, width=1)


def _draw_rect(draw: ImageDraw.ImageDraw, el: ElementState, palette: Palette) -> None:
    half_w = el.width / 2
    half_h = el.height / 2
    box = _bbox(el.x, el.y, half_w, half_h)

    if not el.hollow:
        draw.rectangle(box, fill=palette.role(el.fill_role))
    draw.rectangle(box, outline=palette.fg_primary, width=_px(el.line_width))

    # Hatching
    if el.hatch_step is not None:
        offset = -half_w
        while offset < half_w:
            x = el.x + offset
            draw.line([(x, el.y - half_h), (x, el.y + half_h)], fill=palette.fg_primary, width=1)
            offset += el.hatch_step


def _draw_complex(draw: ImageDraw.ImageDraw, el: ElementState, palette: Palette) -> None:
    """A node disk with one stem running out along an axis."""
    r = el.node_radius
    draw.ellipse(_bbox(el.x, el.y, r, r), fill=palette.fg_primary)

    dx, dy = el.stem
    draw.line(
        [(el.x, el.y), (el.x + dx * el.width, el.y + dy * el.height)],
        fill=palette.fg_primary,
        width=_px(el.line_width),
    )


_ELEMENT_DRAWERS = {
    "circle": _draw_circle,
    "rect": _draw_rect,
    "complex": _draw_complex,
}


def _draw_dot(draw: ImageDraw.ImageDraw, x: float, y: float, color) -> None:
    draw.ellipse(_bbox(x, y, DOT_RADIUS, DOT_RADIUS), fill=color)


# ------------------------------------------------------------------
# Layers
# ------------------------------------------------------------------

def render_composition(
    state: CompositionState,
    image: Optional[Image.Image] = None,
    end_dots: Optional[bool] = None,
) -> Image.Image:
    """
    Paint every geometric layer of the plan (no grain).

    Draws onto image when given (it must be RGB and match the plan's size),
    otherwise onto a fresh canvas.
    """
    if end_dots is None:
        end_dots = settings.LINE_END_DOTS

    if image is None:
        image = Image.new("RGB", (state.width, state.height))
    elif image.size != (state.width, state.height):
        raise ValueError(
            f"Surface is {image.size[0]}x{image.size[1]}, plan is {state.width}x{state.height}"
        )

    palette = state.palette
    # RGBA drawing mode blends translucent colours into the RGB surface
    draw = ImageDraw.Draw(image, "RGBA")

    # 1. Background
    draw.rectangle((0, 0, state.width, state.height), fill=palette.bg)

    # 2. Technical grid
    for seg in state.grid_lines:
        _stroke(draw, seg, palette.grid)

    # 3. Shapes, mirrored copies included
    for el in state.elements:
        _ELEMENT_DRAWERS[el.variant](draw, el, palette)

    # 4. Connective lines
    for seg in state.lines:
        _stroke(draw, seg, palette.fg_primary)
        if end_dots:
            _draw_dot(draw, seg.x0, seg.y0, palette.fg_primary)
            _draw_dot(draw, seg.x1, seg.y1, palette.fg_primary)

    return image


def draw_composition(
    image: Image.Image,
    config: ArtConfig,
    grain: bool = True,
    grain_amount: Optional[float] = None,
    seeded_grain: Optional[bool] = None,
    end_dots: Optional[bool] = None,
) -> CompositionState:
    """
    Run the whole pipeline onto a caller-owned RGB surface, in place.

    The surface size is the canvas size. Returns the plan that was drawn.
    """
    if image.mode != "RGB":
        raise ValueError(f"Surface must be an RGB image, got mode {image.mode!r}")
    width, height = image.size
    if width <= 0 or height <= 0:
        raise ValueError(f"Surface must have positive size, got {width}x{height}")

    state = calculate_composition(config, width, height)
    render_composition(state, image, end_dots=end_dots)

    if grain:
        apply_grain(image, grain_amount, grain_rng(config.seed, seeded_grain))
    return state


def render_artwork(
    config: ArtConfig,
    width: int,
    height: int,
    grain: bool = True,
    grain_amount: Optional[float] = None,
    seeded_grain: Optional[bool] = None,
    end_dots: Optional[bool] = None,
) -> Image.Image:
    """Render config at width x height onto a new RGB image."""
    if width <= 0 or height <= 0:
        raise ValueError(f"Canvas must have positive size, got {width}x{height}")
    image = Image.new("RGB", (int(width), int(height)))
    draw_composition(
        image,
        config,
        grain=grain,
        grain_amount=grain_amount,
        seeded_grain=seeded_grain,
        end_dots=end_dots,
    )
    return image
