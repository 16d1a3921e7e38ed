"""Tests for the composition state calculator (layout engine)."""

import math

import pytest

from constructivist.state import ArtConfig, calculate_composition


def _geometry(state):
    return [(e.index, e.mirror, e.variant, e.x, e.y, e.width, e.height) for e in state.elements]


class TestArtConfig:
    """Tests for ArtConfig validation and conversion."""

    def test_defaults(self):
        config = ArtConfig(seed="abc")
        assert config.complexity == 0.6
        assert config.line_density == 0.5
        assert config.circle_emphasis == 0.4
        assert config.symmetry == 0.2
        assert config.contrast_mode == 0.5
        assert config.aspect_ratio == "4:5"

    def test_random_default_seed(self):
        assert isinstance(ArtConfig().seed, str)
        assert ArtConfig().seed

    def test_clamps_unit_parameters(self):
        config = ArtConfig(seed="abc", complexity=1.5, symmetry=-0.3)
        assert config.complexity == 1.0
        assert config.symmetry == 0.0

    def test_rejects_nan(self):
        with pytest.raises(ValueError):
            ArtConfig(seed="abc", line_density=float("nan"))

    def test_rejects_unknown_aspect_ratio(self):
        with pytest.raises(ValueError):
            ArtConfig(seed="abc", aspect_ratio="3:2")

    def test_rejects_non_string_seed(self):
        with pytest.raises(TypeError):
            ArtConfig(seed=42)

    def test_immutable(self):
        config = ArtConfig(seed="abc")
        with pytest.raises(AttributeError):
            config.seed = "other"

    def test_with_changes(self):
        config = ArtConfig(seed="abc")
        changed = config.with_changes(symmetry=0.9)
        assert changed.symmetry == 0.9
        assert changed.seed == "abc"
        assert config.symmetry == 0.2

    def test_dict_roundtrip(self):
        orig = ArtConfig(seed="roundtrip", complexity=0.3, aspect_ratio="16:9")
        restored = ArtConfig.from_dict({**orig.to_dict(), "unknown": 1})
        assert restored == orig

    def test_symmetry_gates(self):
        assert not ArtConfig(seed="s", symmetry=0.2).symmetry_x
        assert ArtConfig(seed="s", symmetry=0.3).symmetry_x
        assert not ArtConfig(seed="s", symmetry=0.6).symmetry_y
        assert ArtConfig(seed="s", symmetry=0.7).symmetry_y


class TestCalculateComposition:
    """Tests for calculate_composition()."""

    def test_deterministic_same_seed(self):
        config = ArtConfig(seed="determinism", complexity=0.8, symmetry=0.9)
        a = calculate_composition(config, 400, 500)
        b = calculate_composition(config, 400, 500)
        assert a.palette == b.palette
        assert a.grid == b.grid
        assert a.grid_lines == b.grid_lines
        assert a.elements == b.elements
        assert a.lines == b.lines

    def test_different_seeds_differ(self):
        a = calculate_composition(ArtConfig(seed="alpha"), 400, 500)
        b = calculate_composition(ArtConfig(seed="beta"), 400, 500)
        assert _geometry(a) != _geometry(b)

    def test_shape_count(self):
        for complexity, expected in [(0.0, 5), (0.5, 17), (1.0, 30)]:
            config = ArtConfig(seed="count", complexity=complexity, symmetry=0.0)
            state = calculate_composition(config, 300, 300)
            assert state.num_shapes == expected
            assert len(state.elements) == expected

    def test_line_count(self):
        config = ArtConfig(seed="lines", complexity=0.5, symmetry=0.0)
        state = calculate_composition(config, 300, 300)
        assert state.num_lines == 7
        assert len(state.lines) == 7

    def test_no_lines_at_zero_complexity(self):
        state = calculate_composition(ArtConfig(seed="flat", complexity=0.0), 300, 300)
        assert state.lines == []

    @pytest.mark.parametrize("symmetry,factor,mirrors", [
        (0.1, 1, {"none"}),
        (0.5, 2, {"none", "x"}),
        (0.9, 4, {"none", "x", "y", "xy"}),
    ])
    def test_symmetry_multiplier(self, symmetry, factor, mirrors):
        config = ArtConfig(seed="mirror", complexity=0.4, symmetry=symmetry)
        state = calculate_composition(config, 400, 500)
        assert state.mirror_factor == factor
        assert len(state.elements) == state.num_shapes * factor
        assert {e.mirror for e in state.elements} == mirrors

    def test_mirrored_copies_share_geometry(self):
        config = ArtConfig(seed="reflect", complexity=0.7, symmetry=0.9)
        state = calculate_composition(config, 400, 500)
        by_index = {}
        for e in state.elements:
            by_index.setdefault(e.index, {})[e.mirror] = e

        for copies in by_index.values():
            orig = copies["none"]
            assert copies["x"].x == 400 - orig.x and copies["x"].y == orig.y
            assert copies["y"].x == orig.x and copies["y"].y == 500 - orig.y
            assert copies["xy"].x == 400 - orig.x and copies["xy"].y == 500 - orig.y
            for copy in copies.values():
                assert copy.variant == orig.variant
                assert copy.width == orig.width

    def test_copy_order(self):
        config = ArtConfig(seed="order", complexity=0.2, symmetry=1.0)
        state = calculate_composition(config, 300, 300)
        mirrors = [e.mirror for e in state.elements[:4]]
        assert mirrors == ["none", "x", "y", "xy"]

    def test_elements_grid_aligned(self):
        config = ArtConfig(seed="aligned", complexity=1.0, symmetry=0.0)
        state = calculate_composition(config, 420, 525)
        cell = state.grid.cell_size
        for e in state.elements:
            snapped = e.x % cell == 0 and e.y % cell == 0
            centred = (e.x - 210) % cell == 0 and (e.y - 262.5) % cell == 0
            assert snapped or centred
            assert e.width / cell in (1, 2, 3, 4, 6)
            assert e.width == e.height

    def test_element_details_match_variant(self):
        config = ArtConfig(seed="details", complexity=1.0, line_density=1.0, circle_emphasis=0.5)
        state = calculate_composition(config, 400, 400)
        cell = state.grid.cell_size
        for e in state.elements:
            assert e.line_width in (1, 2, 4, cell / 8)
            assert e.fill_role in ("fg_secondary", "accent")
            if e.variant == "circle":
                if e.arc is not None:
                    start, end = e.arc
                    assert start in (0, 90, 180, 270)
                    assert end - start in (90, 180, 270)
                assert len(e.rings) in (0, 1, 2, 3)
                assert all(0 < r < e.radius for r in e.rings)
            elif e.variant == "rect":
                # line_density 1.0 always hatches
                assert 4 <= e.hatch_step < 10
            else:
                assert e.stem in ((1, 0), (-1, 0), (0, 1), (0, -1))
                assert e.node_radius == cell / 4

    def test_circle_emphasis_extremes(self):
        all_circles = calculate_composition(
            ArtConfig(seed="curves", circle_emphasis=1.0, symmetry=0.0), 300, 300
        )
        assert {e.variant for e in all_circles.elements} == {"circle"}
        no_circles = calculate_composition(
            ArtConfig(seed="curves", circle_emphasis=0.0, symmetry=0.0), 300, 300
        )
        assert "circle" not in {e.variant for e in no_circles.elements}

    def test_grid_lines_follow_density(self):
        none = calculate_composition(ArtConfig(seed="grid", line_density=0.0), 300, 300)
        assert none.grid_lines == []
        full = calculate_composition(ArtConfig(seed="grid", line_density=1.0), 300, 300)
        grid = full.grid
        assert len(full.grid_lines) == len(grid.vertical_lines()) + len(grid.horizontal_lines())

    def test_connective_lines_axis_aligned(self):
        config = ArtConfig(seed="circuit", complexity=1.0, symmetry=0.5)
        state = calculate_composition(config, 400, 500)
        cell = state.grid.cell_size
        assert len(state.lines) == 2 * state.num_lines
        for seg in state.lines:
            assert seg.x0 == seg.x1 or seg.y0 == seg.y1
            length = abs(seg.x1 - seg.x0) + abs(seg.y1 - seg.y0)
            assert length % cell == 0
            assert 2 * cell <= length < 8 * cell

    def test_lines_mirrored_vertically_only(self):
        config = ArtConfig(seed="circuit", complexity=1.0, symmetry=0.9)
        state = calculate_composition(config, 400, 500)
        for orig, mirrored in zip(state.lines[::2], state.lines[1::2]):
            assert mirrored.x0 == 400 - orig.x0
            assert mirrored.x1 == 400 - orig.x1
            assert mirrored.y0 == orig.y0

    def test_scale_invariance(self):
        """Doubling the canvas doubles every coordinate when cells divide evenly."""
        config = ArtConfig(seed="scale", complexity=0.8, symmetry=0.9, line_density=0.6)
        divisor = calculate_composition(config, 100, 100).grid.divisor

        small = calculate_composition(config, divisor * 20, divisor * 25)
        large = calculate_composition(config, divisor * 40, divisor * 50)

        assert small.grid.cell_size == 20
        assert large.grid.cell_size == 40
        assert (small.grid.cols, small.grid.rows) == (large.grid.cols, large.grid.rows)
        assert len(small.grid_lines) == len(large.grid_lines)
        assert len(small.elements) == len(large.elements)

        for s, l in zip(small.elements, large.elements):
            assert (s.variant, s.mirror, s.hollow, s.fill_role) == (l.variant, l.mirror, l.hollow, l.fill_role)
            assert (l.x, l.y, l.width) == (2 * s.x, 2 * s.y, 2 * s.width)
            assert l.arc == s.arc
            assert l.rings == [2 * r for r in s.rings]

        for s, l in zip(small.lines, large.lines):
            assert (l.x0, l.y0, l.x1, l.y1) == (2 * s.x0, 2 * s.y0, 2 * s.x1, 2 * s.y1)

    def test_palette_branch(self):
        dark = calculate_composition(ArtConfig(seed="p", contrast_mode=0.9), 200, 200)
        light = calculate_composition(ArtConfig(seed="p", contrast_mode=0.3), 200, 200)
        assert dark.palette.bg == (0x22, 0x22, 0x22, 255)
        assert light.palette.bg != dark.palette.bg

    def test_tiny_canvas(self):
        state = calculate_composition(ArtConfig(seed="tiny"), 4, 4)
        assert state.grid.cell_size == 1
        assert len(state.elements) >= state.num_shapes
