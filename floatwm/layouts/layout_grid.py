"""
Grid Layout

Windows arranged in a row-major grid between the reserved bands.
"""

from __future__ import annotations
from typing import Dict, Sequence, Tuple
import math

from .layout_base import Layout
from ..geometry import Geometry, ViewportBounds

# Window counts that tile better than the square-root default
GRID_OVERRIDES: Dict[int, Tuple[int, int]] = {
    3: (3, 1),
    4: (2, 2),
    6: (3, 2),
}


def grid_dimensions(n: int) -> Tuple[int, int]:
    """Columns and rows used for n windows."""
    if n in GRID_OVERRIDES:
        return GRID_OVERRIDES[n]
    cols = math.ceil(math.sqrt(n))
    rows = math.ceil(n / cols)
    return cols, rows


class GridLayout(Layout):
    """
    Grid layout - windows arranged in a grid pattern.

    Cells never shrink below min_cell_width x min_cell_height, so a crowded
    grid on a small viewport can run past its edges; the manager clamps the
    result per window afterwards.
    """

    def __init__(
        self,
        padding: float = 20,
        min_cell_width: float = 250,
        min_cell_height: float = 200,
    ):
        self.padding = padding
        self.min_cell_width = min_cell_width
        self.min_cell_height = min_cell_height

    @property
    def name(self) -> str:
        return "grid"

    def calculate(
        self, window_ids: Sequence[str], viewport: ViewportBounds
    ) -> Dict[str, Geometry]:
        if not window_ids:
            return {}

        n = len(window_ids)
        cols, rows = grid_dimensions(n)
        padding = self.padding

        available_width = viewport.width - padding * (cols + 1)
        available_height = viewport.usable_height - padding * (rows + 1)

        cell_width = max(self.min_cell_width, available_width / cols)
        cell_height = max(self.min_cell_height, available_height / rows)

        result = {}
        for i, window_id in enumerate(window_ids):
            row = i // cols
            col = i % cols
            x = padding + col * (cell_width + padding)
            y = viewport.top + padding + row * (cell_height + padding)
            result[window_id] = Geometry(x, y, cell_width, cell_height)

        return result
