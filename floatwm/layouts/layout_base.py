"""
Window Layout Base Classes

Provides the Layout interface shared by automatic arrangements.
"""

from __future__ import annotations
from abc import ABC, abstractmethod
from typing import Dict, Sequence

from ..geometry import Geometry, ViewportBounds


class Layout(ABC):
    """Abstract base class for window layouts."""

    @abstractmethod
    def calculate(
        self, window_ids: Sequence[str], viewport: ViewportBounds
    ) -> Dict[str, Geometry]:
        """
        Calculate window positions and sizes.

        Args:
            window_ids: Ordered ids of the windows to arrange
            viewport: Viewport bounds, including reserved bands

        Returns:
            Dictionary mapping window ids to their calculated geometry
        """
        pass

    @property
    @abstractmethod
    def name(self) -> str:
        """Layout name for display."""
        pass
