"""
Responsive Scaler

Scales authored default geometry down to the current viewport.
"""

from __future__ import annotations
from dataclasses import dataclass

from .geometry import Geometry, Position, Size, ViewportBounds, clamp


@dataclass
class ReferenceDesign:
    """Viewport size the default window geometry was authored for."""

    width: float = 1200
    height: float = 800


def compute_scale(viewport: ViewportBounds, reference: ReferenceDesign) -> float:
    """Scale factor for a viewport, capped at 1 so windows only ever shrink."""
    return min(viewport.width / reference.width, viewport.height / reference.height, 1)


def scale_default(
    default_position: Position,
    default_size: Size,
    viewport: ViewportBounds,
    reference: ReferenceDesign,
    min_size: Size,
    edge_margin: float = 20,
) -> Geometry:
    """
    Compute a window's default geometry for the current viewport.

    Args:
        default_position: Authored position at the reference size
        default_size: Authored size at the reference size
        viewport: Current viewport bounds
        reference: Reference design size
        min_size: Minimum window size
        edge_margin: Gap kept free along the right and bottom edges

    Returns:
        Scaled geometry clamped into the viewport
    """
    scale = compute_scale(viewport, reference)
    scaled = Geometry(
        x=default_position.x * scale,
        y=default_position.y * scale,
        width=default_size.width * scale,
        height=default_size.height * scale,
    )

    # Keep the header/footer bands and leave a margin on the far edges
    inner = ViewportBounds(
        width=viewport.width - edge_margin,
        height=viewport.height - edge_margin,
        reserved_top=viewport.reserved_top,
        reserved_bottom=viewport.reserved_bottom,
    )
    return clamp(scaled, inner, min_size)
