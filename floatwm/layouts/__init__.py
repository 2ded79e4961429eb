"""
Layout System

Provides automatic window arrangement algorithms.
"""

from .layout_base import Layout
from .layout_grid import GridLayout

__all__ = [
    # Base classes
    "Layout",
    # Layout implementations
    "GridLayout",
]
