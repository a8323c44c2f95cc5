"""Tests for line style modulation."""

import numpy as np
import pytest

from py_autotile.core.line_styles import (
    LineStyleParams,
    default_style_params,
    modulate_polyline,
    style_offset,
)
from py_autotile.core.polyline import build_base_polyline, edge_mid
from py_autotile.utils.hashing import lcg_mix, lcg_sign, lcg_unit

STYLES = ["straight_line", "wavy_smooth", "craggy", "zigzag"]


@pytest.fixture
def straight_base():
    return build_base_polyline(32, edge_mid("W"), edge_mid("E"))


@pytest.fixture
def wedge_base():
    return build_base_polyline(32, edge_mid("N"), edge_mid("E"), "rounded")


class TestModulation:
    """Shape of styled polylines."""

    def test_straight_line_is_a_copy(self, straight_base):
        styled = modulate_polyline(straight_base, "straight_line")
        np.testing.assert_array_equal(styled, straight_base)
        styled[0, 0] = 99
        assert straight_base[0, 0] == 0.0

    @pytest.mark.parametrize("style", STYLES)
    def test_endpoints_preserved(self, style, straight_base, wedge_base):
        """Styled boundaries still start and end on the shared endpoints."""
        for base in (straight_base, wedge_base):
            styled = modulate_polyline(base, style)
            np.testing.assert_array_equal(styled[0], base[0])
            np.testing.assert_array_equal(styled[-1], base[-1])

    @pytest.mark.parametrize("style", STYLES)
    def test_base_is_not_modified(self, style, wedge_base):
        before = wedge_base.copy()
        modulate_polyline(wedge_base, style)
        np.testing.assert_array_equal(wedge_base, before)

    def test_styles_densify(self, straight_base):
        styled = modulate_polyline(straight_base, "wavy_smooth")
        assert len(styled) > len(straight_base)

    def test_wavy_offset_bounded_by_amplitude(self, straight_base):
        styled = modulate_polyline(straight_base, "wavy_smooth")
        assert np.all(np.abs(styled[:, 1] - 15.5) <= 1.5 + 1e-9)
        assert np.abs(styled[:, 1] - 15.5).max() > 0.5

    def test_zigzag_offset_bounded_by_amplitude(self, straight_base):
        styled = modulate_polyline(straight_base, "zigzag")
        assert np.all(np.abs(styled[:, 1] - 15.5) <= 2.0 + 1e-9)

    def test_craggy_is_deterministic(self, wedge_base):
        first = modulate_polyline(wedge_base, "craggy")
        second = modulate_polyline(wedge_base, "craggy")
        np.testing.assert_array_equal(first, second)

    def test_craggy_stair_step_snaps_interior_points(self, straight_base):
        params = LineStyleParams(jitter=1.0, stair_step=2)
        styled = modulate_polyline(straight_base, "craggy", params)
        interior = styled[1:-1]
        np.testing.assert_array_equal(interior % 2, np.zeros_like(interior))

    def test_no_consecutive_duplicates(self, straight_base):
        params = LineStyleParams(jitter=1.0, stair_step=4)
        styled = modulate_polyline(straight_base, "craggy", params)
        assert not np.any(np.all(styled[1:] == styled[:-1], axis=1))


class TestStyleOffsets:
    """Per-style offset functions and defaults."""

    def test_unknown_style_raises(self):
        with pytest.raises(ValueError):
            style_offset("sketchy", 0.5, 10.0, LineStyleParams())

    def test_straight_offset_is_zero(self):
        assert style_offset("straight_line", 0.3, 31.0, LineStyleParams()) == 0.0

    def test_defaults(self):
        assert default_style_params("zigzag").amplitude == 2.0
        assert default_style_params("wavy_smooth").amplitude == 1.5
        assert default_style_params("craggy").stair_step == 1


class TestLcg:
    """Deterministic hash used by the craggy style."""

    def test_known_values(self):
        assert lcg_mix(0) == 49297
        assert lcg_unit(0) == pytest.approx(49297 / 233280)
        assert lcg_sign(0) == -1

    def test_range(self):
        for key in range(200):
            assert 0.0 <= lcg_unit(key) < 1.0
            assert lcg_sign(key) in (-1, 1)
