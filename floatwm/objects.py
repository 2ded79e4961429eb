"""
Window Objects

Descriptors for registered windows and the contract their content follows.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from typing import Any, Optional

from .geometry import Position, Size


class WindowContent:
    """
    Base class for window payloads.

    Content is opaque to the layout engine. Subclasses (or any object with
    the same methods) are told when their window is closed and may report
    their natural size for resize-to-content.
    """

    def on_close_requested(self):
        """Called after the window hosting this content was closed."""
        pass

    def measure_intrinsic_size(self) -> Optional[Size]:
        """Natural, unconstrained size of the content, or None if unknown."""
        return None


@dataclass
class WindowDescriptor:
    """A window registered with the WindowManager."""

    window_id: str
    title: str
    default_position: Position = field(default_factory=lambda: Position(50, 50))
    default_size: Size = field(default_factory=lambda: Size(300, 200))
    is_visible: bool = True
    min_width: float = 200
    min_height: float = 150
    content: Optional[Any] = None

    @property
    def min_size(self) -> Size:
        return Size(self.min_width, self.min_height)

    @classmethod
    def from_dict(cls, data: dict) -> "WindowDescriptor":
        """Build a descriptor from a JSON-style mapping.

        Example:
            {"id": "scope", "title": "Oscilloscope",
             "position": [20, 80], "size": [900, 450]}
        """
        position = data.get("position", (50, 50))
        size = data.get("size", (300, 200))
        return cls(
            window_id=str(data["id"]),
            title=str(data.get("title", data["id"])),
            default_position=Position(position[0], position[1]),
            default_size=Size(size[0], size[1]),
            is_visible=bool(data.get("visible", True)),
            min_width=data.get("min_width", 200),
            min_height=data.get("min_height", 150),
        )
