"""
Window Chrome

Header, border and resize-handle geometry shared by pointer hit-testing and
the Cairo renderer that draws layout previews.
"""

from __future__ import annotations
from enum import Enum, auto
from typing import TYPE_CHECKING, Iterable, Tuple
import cairo

from .geometry import Geometry, Size

if TYPE_CHECKING:
    from .config import LayoutConfig


class HitRegion(Enum):
    """Part of a window under the pointer."""

    NONE = auto()
    CONTENT = auto()
    HEADER = auto()
    FIT_BUTTON = auto()
    CLOSE_BUTTON = auto()
    RESIZE_HANDLE = auto()


class WindowChrome:
    """Metrics of the frame drawn around window content.

    Layout: title on the left of the header, fit and close buttons on the
    right, a square resize handle in the bottom-right corner.
    """

    def __init__(self, config: "LayoutConfig"):
        self.header_height = config.header_height
        self.border_width = config.border_width
        self.content_padding = config.content_padding
        self.resize_handle_size = config.resize_handle_size
        self.button_size = config.button_size

    def frame_size(self, content: Size) -> Size:
        """Window size needed to show content of the given natural size."""
        horizontal = self.border_width * 2 + self.content_padding * 2
        vertical = self.header_height + horizontal
        return Size(content.width + horizontal, content.height + vertical)

    def button_rect(self, geometry: Geometry, index: int) -> Geometry:
        """Rectangle of the header button at index, counted from the right."""
        size = self.button_size
        x = geometry.x + geometry.width - self.border_width - (index + 1) * size
        y = geometry.y + (self.header_height - size) / 2
        return Geometry(x, y, size, size)

    def hit_test(self, geometry: Geometry, x: float, y: float) -> HitRegion:
        """Test which part of a window a point is over.

        Args:
            geometry: Window geometry
            x, y: Point coordinates

        Returns:
            The region under the point, HitRegion.NONE if outside the window
        """
        if not geometry.contains(x, y):
            return HitRegion.NONE

        handle = self.resize_handle_size
        if x >= geometry.x + geometry.width - handle and y >= geometry.y + geometry.height - handle:
            return HitRegion.RESIZE_HANDLE

        if self.button_rect(geometry, 0).contains(x, y):
            return HitRegion.CLOSE_BUTTON
        if self.button_rect(geometry, 1).contains(x, y):
            return HitRegion.FIT_BUTTON

        if y < geometry.y + self.header_height:
            return HitRegion.HEADER

        return HitRegion.CONTENT


class ChromeRenderer:
    """Renders window frames with Cairo."""

    def __init__(self, config: "LayoutConfig"):
        """Initialize the renderer.

        Args:
            config: Layout configuration with chrome metrics and colours
        """
        self.config = config
        self.chrome = WindowChrome(config)
        self.title_padding = 8

    def render_layout(
        self,
        width: int,
        height: int,
        windows: Iterable[Tuple[str, Geometry, bool]],
    ) -> cairo.ImageSurface:
        """Render a preview of a whole layout.

        Args:
            width, height: Surface size in pixels
            windows: (title, geometry, focused) triples, bottom to top

        Returns:
            An ARGB32 image surface
        """
        surface = cairo.ImageSurface(cairo.FORMAT_ARGB32, max(1, int(width)), max(1, int(height)))
        ctx = cairo.Context(surface)

        self._set_color(ctx, self.config.background_color)
        ctx.rectangle(0, 0, width, height)
        ctx.fill()

        for title, geometry, focused in windows:
            self.render_window(ctx, geometry, title, focused)

        surface.flush()
        return surface

    def render_window(self, ctx: cairo.Context, geometry: Geometry, title: str, focused: bool):
        """Render one window frame.

        Args:
            ctx: Cairo context
            geometry: Window geometry
            title: Window title
            focused: Whether window is focused
        """
        chrome = self.chrome
        x, y, w, h = geometry.x, geometry.y, geometry.width, geometry.height

        # Body
        self._set_color(ctx, self.config.window_color)
        ctx.rectangle(x, y, w, h)
        ctx.fill()

        # Header
        header = self.config.focused_header_color if focused else self.config.header_color
        self._set_color(ctx, header)
        ctx.rectangle(x, y, w, chrome.header_height)
        ctx.fill()

        # Border
        self._set_color(ctx, self.config.border_color)
        ctx.set_line_width(chrome.border_width)
        half = chrome.border_width / 2
        ctx.rectangle(x + half, y + half, w - chrome.border_width, h - chrome.border_width)
        ctx.stroke()

        # Title on the left, leaving room for two buttons
        title_max_width = w - 2 * chrome.button_size - self.title_padding * 2
        if title_max_width > 0:
            self._render_title(ctx, title, x, y, title_max_width)

        self._render_buttons(ctx, geometry)
        self._render_resize_grip(ctx, geometry)

    def _render_title(self, ctx: cairo.Context, title: str, x: float, y: float, max_width: float):
        """Render the window title, truncated with an ellipsis if needed."""
        ctx.select_font_face(
            self.config.font_family, cairo.FONT_SLANT_NORMAL, cairo.FONT_WEIGHT_BOLD
        )
        ctx.set_font_size(self.config.font_size)
        self._set_color(ctx, self.config.title_color)

        display_title = self.truncate(ctx, title, max_width)

        y_offset = (self.chrome.header_height + self.config.font_size) // 2 - 2
        ctx.move_to(x + self.title_padding, y + y_offset)
        ctx.show_text(display_title)

    @staticmethod
    def truncate(ctx: cairo.Context, title: str, max_width: float) -> str:
        """Shorten a title to fit max_width using the context's current font."""
        if ctx.text_extents(title).width <= max_width:
            return title

        # Binary search for the right length
        ellipsis = "..."
        available = max_width - ctx.text_extents(ellipsis).width

        left = 0
        right = len(title)
        while left < right:
            mid = (left + right + 1) // 2
            if ctx.text_extents(title[:mid]).width <= available:
                left = mid
            else:
                right = mid - 1

        return title[:left] + ellipsis

    def _render_buttons(self, ctx: cairo.Context, geometry: Geometry):
        """Render the close (X) and fit-to-content (square) buttons."""
        self._set_color(ctx, self.config.button_color)
        ctx.set_line_width(1.5)
        icon_size = 10

        for index in (0, 1):
            rect = self.chrome.button_rect(geometry, index)
            icon_x = rect.x + (rect.width - icon_size) / 2
            icon_y = rect.y + (rect.height - icon_size) / 2

            if index == 0:
                ctx.move_to(icon_x, icon_y)
                ctx.line_to(icon_x + icon_size, icon_y + icon_size)
                ctx.stroke()
                ctx.move_to(icon_x + icon_size, icon_y)
                ctx.line_to(icon_x, icon_y + icon_size)
                ctx.stroke()
            else:
                ctx.rectangle(icon_x, icon_y, icon_size, icon_size)
                ctx.stroke()

    def _render_resize_grip(self, ctx: cairo.Context, geometry: Geometry):
        """Render a small triangle in the bottom-right corner."""
        grip = self.chrome.resize_handle_size / 4
        right = geometry.x + geometry.width - self.chrome.border_width
        bottom = geometry.y + geometry.height - self.chrome.border_width
        self._set_color(ctx, self.config.border_color)
        ctx.move_to(right, bottom)
        ctx.line_to(right - grip, bottom)
        ctx.line_to(right, bottom - grip)
        ctx.close_path()
        ctx.fill()

    def _set_color(self, ctx: cairo.Context, color: Tuple[int, int, int, int]):
        """Set Cairo color from RGBA tuple.

        Args:
            ctx: Cairo context
            color: (R, G, B, A) tuple with values 0-255
        """
        r, g, b, a = color
        ctx.set_source_rgba(r / 255.0, g / 255.0, b / 255.0, a / 255.0)
