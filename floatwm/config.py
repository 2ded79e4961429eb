"""
floatwm Configuration

Layout constants, window chrome metrics and colours in one dataclass.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional, Tuple
import logging
import os

from .geometry import ViewportBounds
from .scaler import ReferenceDesign

Color = Tuple[int, int, int, int]

COLOR_FIELDS = (
    "background_color",
    "window_color",
    "header_color",
    "focused_header_color",
    "border_color",
    "title_color",
    "button_color",
)


def parse_color(color: str | Color) -> Color:
    """
    Turn a colour setting into an (R, G, B, A) tuple of 0-255 channels.

    "#RRGGBB" is opaque, "#RRGGBBAA" carries its own alpha; the leading "#"
    is optional. RGBA tuples pass through unchanged.
    """
    if isinstance(color, tuple) and len(color) == 4:
        return color
    if not isinstance(color, str):
        raise ValueError(f"Unsupported colour {color!r}: use a hex string or RGBA tuple")

    digits = color.lstrip("#")
    if len(digits) not in (6, 8):
        raise ValueError(f"Unsupported colour {color!r}: use #RRGGBB or #RRGGBBAA")

    channels = [int(digits[i:i + 2], 16) for i in range(0, len(digits), 2)]
    if len(channels) == 3:
        channels.append(0xFF)
    return tuple(channels)


@dataclass
class LayoutConfig:
    """Window layout configuration."""

    # Design size the default window geometry was authored for
    reference_width: float = 1200
    reference_height: float = 800

    # Host chrome bands windows must stay out of
    header_band: float = 80
    footer_band: float = 40

    # Free margin kept along the right/bottom edge for scaled defaults
    edge_margin: float = 20

    # Grid arrangement
    grid_padding: float = 20
    grid_min_cell_width: float = 250
    grid_min_cell_height: float = 200

    # Window chrome
    header_height: int = 40
    border_width: int = 2
    content_padding: int = 8
    resize_handle_size: int = 24
    button_size: int = 24
    font_family: str = "monospace"
    font_size: int = 12

    # Colors (hex format: #RRGGBB or #RRGGBBAA)
    background_color: str | Color = "#111827"
    window_color: str | Color = "#1f2937"
    header_color: str | Color = "#374151"
    focused_header_color: str | Color = "#4b5563"
    border_color: str | Color = "#4b5563"
    title_color: str | Color = "#fcd34d"
    button_color: str | Color = "#9ca3af"

    # Number of layout snapshots kept
    snapshot_limit: int = 5

    # Where the CLI keeps state
    state_path: Optional[Path] = field(
        default_factory=lambda: Path(os.getenv("FLOATWM_STATE", "floatwm-state.json"))
    )

    def __post_init__(self):
        for name in COLOR_FIELDS:
            setattr(self, name, parse_color(getattr(self, name)))

    @property
    def reference_design(self) -> ReferenceDesign:
        return ReferenceDesign(self.reference_width, self.reference_height)

    def viewport(self, width: float, height: float) -> ViewportBounds:
        """Viewport bounds for a host surface of the given size."""
        return ViewportBounds(
            width=width,
            height=height,
            reserved_top=self.header_band,
            reserved_bottom=self.footer_band,
        )


def configure_logging(level: str | int = logging.INFO):
    """Send floatwm log records to stderr."""
    if isinstance(level, str):
        level = getattr(logging, level.upper(), logging.INFO)
    handler = logging.StreamHandler()
    handler.setFormatter(
        logging.Formatter("%(asctime)s %(levelname)s %(name)s: %(message)s", "%H:%M:%S")
    )
    root = logging.getLogger("floatwm")
    root.handlers[:] = [handler]
    root.setLevel(level)
