"""
Unit tests for geometry clamping and validation.
"""

import math

import pytest
from floatwm.geometry import Geometry, Size, ViewportBounds, clamp, clamp_size, is_valid


@pytest.mark.unit
class TestClamp:
    """Test clamping rectangles into the viewport."""

    def test_negative_origin_moves_to_zero(self):
        """Windows dragged past the top-left corner stop at the edge."""
        result = clamp(Geometry(-50, -50, 100, 100), ViewportBounds(1000, 800), Size(50, 50))

        assert result == Geometry(0, 0, 100, 100)

    def test_geometry_inside_viewport_unchanged(self):
        g = Geometry(100, 120, 300, 200)
        result = clamp(g, ViewportBounds(1000, 800), Size(50, 50))

        assert result == g
        assert result is not g

    def test_far_edge_pushes_origin_back(self):
        result = clamp(Geometry(900, 700, 300, 200), ViewportBounds(1000, 800), Size(50, 50))

        assert result.x == 700  # 1000 - 300
        assert result.y == 600  # 800 - 200
        assert result.width == 300
        assert result.height == 200

    def test_size_floored_at_minimum(self):
        result = clamp(Geometry(10, 10, 20, 5), ViewportBounds(1000, 800), Size(200, 150))

        assert result.width == 200
        assert result.height == 150

    def test_oversized_window_capped_at_viewport(self):
        result = clamp(Geometry(0, 0, 5000, 5000), ViewportBounds(1000, 800), Size(50, 50))

        assert result == Geometry(0, 0, 1000, 800)

    def test_viewport_smaller_than_minimum_overflows(self):
        """A tiny viewport yields the minimum size, never a degenerate one."""
        result = clamp(Geometry(30, 30, 10, 10), ViewportBounds(100, 100), Size(200, 150))

        assert result.width == 200
        assert result.height == 150
        assert result.x == 0
        assert result.y == 0

    def test_reserved_bands(self, banded_viewport):
        """Windows stay between the header and footer bands."""
        top = clamp(Geometry(10, 0, 300, 200), banded_viewport, Size(50, 50))
        bottom = clamp(Geometry(10, 790, 300, 200), banded_viewport, Size(50, 50))

        assert top.y == 80
        assert bottom.y == 800 - 40 - 200

    def test_height_capped_at_usable_height(self, banded_viewport):
        result = clamp(Geometry(0, 0, 300, 2000), banded_viewport, Size(50, 50))

        assert result.height == 680  # 800 - 80 - 40
        assert result.y == 80


@pytest.mark.unit
class TestClampSize:
    """Test capping a size from a fixed origin."""

    def test_keeps_origin(self):
        result = clamp_size(Geometry(600, 500, 900, 900), ViewportBounds(1000, 800), Size(50, 50))

        assert (result.x, result.y) == (600, 500)
        assert result.width == 400
        assert result.height == 300

    def test_floors_at_minimum(self):
        result = clamp_size(Geometry(950, 10, 900, 900), ViewportBounds(1000, 800), Size(200, 150))

        assert result.width == 200


@pytest.mark.unit
class TestIsValid:
    """Test numeric validation."""

    def test_valid_geometry(self):
        assert is_valid(Geometry(0, 0, 100, 100))
        assert is_valid(Geometry(1.5, -2.0, 0, 0))

    @pytest.mark.parametrize("bad", [math.nan, math.inf, -math.inf, "10", None, True])
    def test_invalid_fields(self, bad):
        assert not is_valid(Geometry(0, 0, bad, 100))

    def test_none_is_invalid(self):
        assert not is_valid(None)

    def test_missing_keys_are_invalid(self):
        assert not is_valid(Geometry.from_dict({"x": 1, "y": 2, "width": 3}))

    def test_far_corner(self):
        assert Geometry(10, 20, 30, 40).far_corner.x == 40
        assert Geometry(10, 20, 30, 40).far_corner.y == 60
