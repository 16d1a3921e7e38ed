"""
Streamlit Dashboard — Constructivist Generative Assembler

Layout:
  Sidebar) Aspect ratio, parameter sliders, seed, Regenerate
  Main)    Live preview of the composition plus its palette, stats and
           an on-demand HQ export (Prepare HQ, then Download HQ)
"""

from __future__ import annotations

import streamlit as st
from PIL import Image

from config import settings
from constructivist.canvas import export_dimensions, fit_to_container, scale_for_device
from constructivist.export import HQExport, prepare_hq_export
from constructivist.palette import to_hex
from constructivist.renderer import draw_composition
from constructivist.state import ASPECT_RATIOS, ArtConfig
from constructivist.variations import regenerate


# ── Page Config ──────────────────────────────────────────────────────
st.set_page_config(
    page_title="Constructivist — Generative Geometric Assembler",
    layout="wide",
    initial_sidebar_state="expanded",
)

# ── Custom CSS ───────────────────────────────────────────────────────
st.markdown("""
<style>
    .main-header h1 {
        margin: 0;
        font-size: 1.8rem;
        font-weight: 700;
        letter-spacing: -0.04em;
    }

    .main-header p {
        margin: 0.2rem 0 1rem 0;
        color: #6b7280;
        font-size: 0.8rem;
    }

    .swatch {
        display: inline-block;
        width: 1.4rem;
        height: 1.4rem;
        margin-right: 0.3rem;
        border: 1px solid #d1d5db;
    }

    .panel-title {
        font-size: 0.75rem;
        font-weight: 600;
        text-transform: uppercase;
        letter-spacing: 0.1em;
        color: #6b7280;
        margin-bottom: 0.5rem;
    }
</style>
""", unsafe_allow_html=True)


# ── Session State ────────────────────────────────────────────────────

def init_session_state():
    """Initialize all session state variables."""
    defaults = {
        "config": ArtConfig(),
        "error_message": None,
        "hq_export": None,
    }
    for key, val in defaults.items():
        if key not in st.session_state:
            st.session_state[key] = val


init_session_state()


config: ArtConfig = st.session_state.config


# ── Header ───────────────────────────────────────────────────────────

st.markdown("""
<div class="main-header">
    <h1>CONSTRUCTIVIST</h1>
    <p>Generative Geometric Assembler</p>
</div>
""", unsafe_allow_html=True)


# ── Sidebar ──────────────────────────────────────────────────────────

with st.sidebar:
    st.markdown('<div class="panel-title">Dimensions</div>', unsafe_allow_html=True)
    aspect_ratio = st.radio(
        "Aspect ratio",
        ASPECT_RATIOS,
        index=ASPECT_RATIOS.index(config.aspect_ratio),
        horizontal=True,
        label_visibility="collapsed",
    )

    st.divider()

    complexity = st.slider("Complexity", 0.1, 1.0, config.complexity, 0.05)
    line_density = st.slider("Line Density", 0.0, 1.0, config.line_density, 0.05)
    circle_emphasis = st.slider("Curvature", 0.0, 1.0, config.circle_emphasis, 0.05)
    symmetry = st.slider("Symmetry", 0.0, 1.0, config.symmetry, 0.1)
    contrast_mode = st.slider("Contrast", 0.0, 1.0, config.contrast_mode, 0.1)

    st.divider()

    st.markdown('<div class="panel-title">Seed</div>', unsafe_allow_html=True)
    col1, col2 = st.columns([3, 1])
    with col1:
        seed = st.text_input("Seed", config.seed, label_visibility="collapsed")
    with col2:
        randomize_btn = st.button("↻", key="randomize", use_container_width=True, help="Randomize Seed")

    st.divider()

    regenerate_btn = st.button("Regenerate", key="regenerate", use_container_width=True, type="primary")

try:
    config = config.with_changes(
        seed=seed,
        complexity=complexity,
        line_density=line_density,
        circle_emphasis=circle_emphasis,
        symmetry=symmetry,
        contrast_mode=contrast_mode,
        aspect_ratio=aspect_ratio,
    )
    st.session_state.config = config
except (TypeError, ValueError) as e:
    st.session_state.error_message = str(e)

if randomize_btn or regenerate_btn:
    st.session_state.config = regenerate(config)
    st.rerun()


# ── Main Content ─────────────────────────────────────────────────────

preview_col, info_col = st.columns([3, 1])

state = None
with preview_col:
    width, height = fit_to_container(
        settings.CANVAS_WIDTH + 2 * settings.CANVAS_PADDING,
        settings.CANVAS_HEIGHT + 2 * settings.CANVAS_PADDING,
        config.aspect_ratio,
    )
    pixel_w, pixel_h = scale_for_device(width, height, settings.PREVIEW_PIXEL_RATIO)
    try:
        preview = Image.new("RGB", (pixel_w, pixel_h))
        state = draw_composition(preview, config)
        st.image(preview, caption=f"seed: {config.seed}", width=int(width))
    except Exception as e:
        import traceback
        traceback.print_exc()
        st.session_state.error_message = str(e) or type(e).__name__

if state is not None:
    with info_col:
        st.markdown('<div class="panel-title">Palette</div>', unsafe_allow_html=True)
        swatches = "".join(
            f'<span class="swatch" title="{role}" style="background:{color}"></span>'
            for role, color in state.palette.to_dict().items()
        )
        st.markdown(swatches, unsafe_allow_html=True)

        st.markdown('<div class="panel-title" style="margin-top:1rem;">Composition</div>', unsafe_allow_html=True)
        st.caption(f"**Grid:** {state.grid.cols}×{state.grid.rows} cells of {state.grid.cell_size}px")
        st.caption(f"**Shapes:** {state.num_shapes} placed, {len(state.elements)} drawn")
        st.caption(f"**Lines:** {len(state.lines)}")
        st.caption(f"**Mirror:** ×{state.mirror_factor}")
        st.caption(f"**Background:** `{to_hex(state.palette.bg)}`")

        # HQ render only on request; the bytes are kept until the config changes
        st.markdown('<div class="panel-title" style="margin-top:1rem;">Export</div>', unsafe_allow_html=True)
        export_w, export_h = export_dimensions(config.aspect_ratio)
        if st.button("Prepare HQ", key="prepare_hq", use_container_width=True):
            try:
                with st.spinner(f"Rendering {export_w}×{export_h} export..."):
                    st.session_state.hq_export = prepare_hq_export(config)
            except Exception as e:
                st.session_state.hq_export = None
                st.session_state.error_message = f"HQ export failed: {e}"

        hq: HQExport | None = st.session_state.hq_export
        if hq is not None and hq.matches(config):
            st.download_button(
                "Download HQ",
                data=hq.data,
                file_name=hq.filename,
                mime="image/png",
                use_container_width=True,
            )
            st.caption(f"{hq.width}×{hq.height}px PNG, ready")
        else:
            st.caption(f"{export_w}×{export_h}px PNG, rendered on demand")

# Show errors
if st.session_state.error_message:
    st.error(st.session_state.error_message)
    st.session_state.error_message = None
