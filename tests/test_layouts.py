"""
Unit tests for layout algorithms.
"""

import pytest
from floatwm.geometry import Geometry, ViewportBounds
from floatwm.layouts import GridLayout
from floatwm.layouts.layout_grid import grid_dimensions


@pytest.mark.unit
class TestGridDimensions:
    """Test column/row selection."""

    @pytest.mark.parametrize(
        "n,expected",
        [
            (1, (1, 1)),
            (2, (2, 1)),
            (3, (3, 1)),
            (4, (2, 2)),
            (5, (3, 2)),
            (6, (3, 2)),
            (7, (3, 3)),
            (10, (4, 3)),
        ],
    )
    def test_dimensions(self, n, expected):
        assert grid_dimensions(n) == expected


@pytest.mark.unit
class TestGridLayout:
    """Test grid layout calculations."""

    def test_no_windows(self, banded_viewport):
        assert GridLayout().calculate([], banded_viewport) == {}

    def test_single_window_fills_usable_area(self, banded_viewport):
        result = GridLayout().calculate(["a"], banded_viewport)

        # 1200 - 2*20 wide, 800 - 80 - 40 - 2*20 high, below the header band
        assert result["a"] == Geometry(20, 100, 1160, 640)

    def test_four_windows_two_by_two(self, banded_viewport):
        result = GridLayout().calculate(["a", "b", "c", "d"], banded_viewport)

        # (1200 - 3*20) / 2 = 570, (680 - 3*20) / 2 = 310
        assert result["a"] == Geometry(20, 100, 570, 310)
        assert result["b"] == Geometry(610, 100, 570, 310)
        assert result["c"] == Geometry(20, 430, 570, 310)
        assert result["d"] == Geometry(610, 430, 570, 310)

    def test_three_windows_single_row(self, banded_viewport):
        result = GridLayout().calculate(["a", "b", "c"], banded_viewport)

        ys = {g.y for g in result.values()}
        assert ys == {100}
        assert result["a"].x < result["b"].x < result["c"].x
        assert result["a"].height == 640

    def test_row_major_order(self, banded_viewport):
        ids = ["a", "b", "c", "d", "e"]
        result = GridLayout().calculate(ids, banded_viewport)

        # 3 columns, 2 rows; the fifth window starts the second column of row 2
        assert result["d"].x == result["a"].x
        assert result["e"].x == result["b"].x
        assert result["d"].y == result["e"].y > result["a"].y

    def test_cells_do_not_overlap(self, banded_viewport):
        ids = [f"w{i}" for i in range(6)]
        cells = list(GridLayout().calculate(ids, banded_viewport).values())

        for i, a in enumerate(cells):
            for b in cells[i + 1:]:
                disjoint = (
                    a.x + a.width <= b.x
                    or b.x + b.width <= a.x
                    or a.y + a.height <= b.y
                    or b.y + b.height <= a.y
                )
                assert disjoint

    def test_minimum_cell_size(self):
        """Crowded grids keep readable cells even if they overflow."""
        ids = [f"w{i}" for i in range(9)]
        result = GridLayout().calculate(ids, ViewportBounds(600, 400))

        for geometry in result.values():
            assert geometry.width == 250
            assert geometry.height == 200

    def test_calculation_is_idempotent(self, banded_viewport):
        layout = GridLayout()
        ids = ["a", "b", "c", "d", "e"]

        assert layout.calculate(ids, banded_viewport) == layout.calculate(ids, banded_viewport)

    def test_custom_padding(self, standard_viewport):
        result = GridLayout(padding=0).calculate(["a", "b"], standard_viewport)

        assert result["a"] == Geometry(0, 0, 600, 800)
        assert result["b"] == Geometry(600, 0, 600, 800)

    def test_name(self):
        assert GridLayout().name == "grid"
