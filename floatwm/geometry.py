"""
Geometry and Viewport Bounds

Value types for window placement and the pure functions that keep a
rectangle inside the viewport.
"""

from __future__ import annotations
from dataclasses import dataclass
import math


@dataclass
class Position:
    """Position in viewport coordinates."""

    x: float = 0
    y: float = 0


@dataclass
class Size:
    """Dimensions in viewport coordinates."""

    width: float = 0
    height: float = 0


@dataclass
class Geometry:
    """Position and size of a window."""

    x: float = 0
    y: float = 0
    width: float = 0
    height: float = 0

    @property
    def origin(self) -> Position:
        return Position(self.x, self.y)

    @property
    def size(self) -> Size:
        return Size(self.width, self.height)

    @property
    def far_corner(self) -> Position:
        """Bottom-right corner of the window."""
        return Position(self.x + self.width, self.y + self.height)

    def contains(self, x: float, y: float) -> bool:
        """Check if a point lies inside the window."""
        return self.x <= x < self.x + self.width and self.y <= y < self.y + self.height

    def update(self, other: "Geometry"):
        """Copy another geometry into this record in place."""
        self.x = other.x
        self.y = other.y
        self.width = other.width
        self.height = other.height

    def copy(self) -> "Geometry":
        return Geometry(self.x, self.y, self.width, self.height)

    def to_dict(self) -> dict:
        return {"x": self.x, "y": self.y, "width": self.width, "height": self.height}

    @classmethod
    def from_dict(cls, data: dict) -> "Geometry":
        """Build a geometry from a mapping.

        Missing keys become NaN so the result fails is_valid() rather than
        silently defaulting to zero.
        """
        return cls(
            x=data.get("x", math.nan),
            y=data.get("y", math.nan),
            width=data.get("width", math.nan),
            height=data.get("height", math.nan),
        )


@dataclass
class ViewportBounds:
    """Visible surface the windows live on.

    reserved_top and reserved_bottom are bands taken by the host's header
    and footer; windows may not enter them.
    """

    width: float
    height: float
    reserved_top: float = 0
    reserved_bottom: float = 0

    @property
    def top(self) -> float:
        return self.reserved_top

    @property
    def bottom(self) -> float:
        return self.height - self.reserved_bottom

    @property
    def usable_height(self) -> float:
        return self.bottom - self.top


def _is_number(value) -> bool:
    return (
        isinstance(value, (int, float))
        and not isinstance(value, bool)
        and math.isfinite(value)
    )


def is_valid(geometry: Geometry | None) -> bool:
    """Check that every field of a geometry is a finite number."""
    if geometry is None:
        return False
    return all(
        _is_number(v)
        for v in (geometry.x, geometry.y, geometry.width, geometry.height)
    )


def clamp(geometry: Geometry, viewport: ViewportBounds, min_size: Size) -> Geometry:
    """
    Return the nearest rectangle that fits the viewport.

    Sizes are floored at min_size and capped at what the viewport offers,
    but never below min_size: a viewport smaller than the minimum yields an
    overflowing window instead of a degenerate one. The origin is then moved
    into [0, width - size] horizontally and [top, bottom - size] vertically.

    Args:
        geometry: Candidate rectangle
        viewport: Current viewport bounds
        min_size: Minimum window size

    Returns:
        A new clamped Geometry
    """
    width = max(geometry.width, min_size.width)
    height = max(geometry.height, min_size.height)

    width = max(min_size.width, min(width, viewport.width))
    height = max(min_size.height, min(height, viewport.usable_height))

    x = max(0, min(geometry.x, viewport.width - width))
    y = max(viewport.top, min(geometry.y, viewport.bottom - height))

    return Geometry(x, y, width, height)


def clamp_size(
    geometry: Geometry, viewport: ViewportBounds, min_size: Size
) -> Geometry:
    """
    Keep the origin and cap the size at what remains of the viewport.

    The result is floored at min_size, so it may still overflow when the
    origin leaves less room than the minimum; callers that need the full
    invariant pass it through clamp() afterwards.
    """
    width = max(min_size.width, min(geometry.width, viewport.width - geometry.x))
    height = max(min_size.height, min(geometry.height, viewport.bottom - geometry.y))
    return Geometry(geometry.x, geometry.y, width, height)
