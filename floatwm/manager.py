"""
Window Manager

Owns the registered windows, their live geometry and stacking order, and
routes pointer events to the interaction controller.
"""

from __future__ import annotations
from typing import Dict, List, Optional, Set, Tuple
import logging
import os

from pubsub import pub

from . import topics
from .config import LayoutConfig
from .decoration import HitRegion, WindowChrome
from .focus_manager import FocusManager
from .geometry import Geometry, Size, ViewportBounds, clamp, clamp_size, is_valid
from .layouts import GridLayout, Layout
from .objects import WindowDescriptor
from .operation_manager import InteractionController, InteractionState
from .persistence import PersistenceAdapter
from .scaler import scale_default

logger = logging.getLogger(__name__)


class WindowManager:
    """
    Registry of floating windows.

    Geometry records are created once per registration and then mutated in
    place, so a reference obtained from geometry() keeps tracking the window
    through gestures, grid arrangements and resets.

    Viewport changes never rescale existing windows; windows are only nudged
    back inside the viewport when they no longer fit. Newly registered and
    reset windows pick up the new size.

    Only windows whose geometry was committed (by a gesture, resize-to-content,
    grid or layout load) enter the aggregate, so untouched windows keep
    getting scaled defaults in later sessions.
    """

    def __init__(
        self,
        persistence: PersistenceAdapter,
        viewport: ViewportBounds,
        config: Optional[LayoutConfig] = None,
        layout: Optional[Layout] = None,
        scope: Optional[str] = None,
    ):
        """Initialize the window manager.

        Args:
            persistence: Adapter for the durable geometry store
            viewport: Current viewport bounds
            config: Layout configuration (defaults to LayoutConfig())
            layout: Arrangement used by arrange_grid (defaults to a GridLayout
                built from the config)
            scope: Prefix of the command topics this manager answers to, so
                several managers can share the bus (see topics.scoped)
        """
        self.config = config or LayoutConfig()
        self.persistence = persistence
        self.viewport = viewport
        self.scope = scope

        self.descriptors: Dict[str, WindowDescriptor] = {}
        self.geometry_map: Dict[str, Geometry] = {}
        # Windows committed since the last reset
        self._committed: Set[str] = set()

        self.chrome = WindowChrome(self.config)
        self.layout = layout or GridLayout(
            padding=self.config.grid_padding,
            min_cell_width=self.config.grid_min_cell_width,
            min_cell_height=self.config.grid_min_cell_height,
        )

        # Focus management
        self.focus_manager = FocusManager()

        # Drag/resize gestures
        self.interaction = InteractionController(
            persistence,
            get_viewport_fn=lambda: self.viewport,
            on_commit=self._on_gesture_committed,
        )

        # Setup debug event logging if enabled
        if os.getenv("FLOATWM_DEBUG"):
            pub.subscribe(self.debug_event_logger, pub.ALL_TOPICS)

    def debug_event_logger(self, topic=pub.AUTO_TOPIC, **kwargs):
        """Log all events published on the event bus."""
        data_str = ", ".join(f"{k}={v}" for k, v in kwargs.items() if k != "topic")
        logger.debug("EVENT: %s | %s", topic.getName(), data_str)

    # Queries

    def geometry(self, window_id: str) -> Geometry:
        """Live geometry record of a window."""
        return self.geometry_map[window_id]

    def geometries(self) -> Dict[str, Geometry]:
        """Copies of all window geometries."""
        return {window_id: g.copy() for window_id, g in self.geometry_map.items()}

    def visible_windows(self) -> List[WindowDescriptor]:
        """Visible windows in registration order."""
        return [d for d in self.descriptors.values() if d.is_visible]

    def z_order(self) -> List[str]:
        """Registered window ids from bottom to top."""
        return [w for w in self.focus_manager.z_order() if w in self.descriptors]

    @property
    def focused_window(self) -> Optional[str]:
        """Get the focused window (delegates to FocusManager)."""
        return self.focus_manager.focused_window

    def state_of(self, window_id: str) -> InteractionState:
        """Gesture state of a window."""
        return self.interaction.state_of(window_id)

    # Registration

    def _default_geometry(self, descriptor: WindowDescriptor) -> Geometry:
        return scale_default(
            descriptor.default_position,
            descriptor.default_size,
            self.viewport,
            self.config.reference_design,
            descriptor.min_size,
            edge_margin=self.config.edge_margin,
        )

    def _persisted_geometry(self, window_id: str) -> Optional[Geometry]:
        geometry = self.persistence.load(window_id)
        if geometry is None:
            geometry = self.persistence.load_aggregate().get(window_id)
        return geometry

    def register(self, descriptor: WindowDescriptor) -> Geometry:
        """
        Register a window, or replace the descriptor of a registered one.

        Stored geometry is reused when valid; otherwise the default geometry
        is scaled to the current viewport.

        Returns:
            The window's live geometry record
        """
        window_id = descriptor.window_id
        if self.interaction.get_current_window() == window_id:
            self.interaction.cancel()

        stored = self._persisted_geometry(window_id)
        if stored is not None:
            geometry = clamp(stored, self.viewport, descriptor.min_size)
        else:
            logger.debug("No stored geometry for %s, using defaults", window_id)
            geometry = self._default_geometry(descriptor)

        self.descriptors[window_id] = descriptor
        if window_id in self.geometry_map:
            self.geometry_map[window_id].update(geometry)
        else:
            self.geometry_map[window_id] = geometry
        self.focus_manager.add_window(window_id)

        pub.sendMessage(topics.WINDOW_REGISTERED, window_id=window_id)
        return self.geometry_map[window_id]

    def unregister(self, window_id: str):
        """Remove a window. Its stored geometry is kept for a later register()."""
        if window_id not in self.descriptors:
            return
        if self.interaction.get_current_window() == window_id:
            self.interaction.cancel()

        del self.descriptors[window_id]
        del self.geometry_map[window_id]
        self._committed.discard(window_id)
        self.focus_manager.remove_window(window_id)
        pub.sendMessage(topics.WINDOW_UNREGISTERED, window_id=window_id)

    # Visibility

    def set_visible(self, window_id: str, visible: bool):
        """Show or hide a window without touching its stored geometry."""
        descriptor = self.descriptors[window_id]
        if descriptor.is_visible == visible:
            return

        if not visible and self.interaction.get_current_window() == window_id:
            self.interaction.end_operation()

        descriptor.is_visible = visible
        if visible:
            # The viewport may have shrunk while the window was hidden
            self._fit_to_viewport(window_id)

        pub.sendMessage(topics.WINDOW_VISIBILITY, window_id=window_id, visible=visible)

    def toggle_visible(self, window_id: str):
        """Show a hidden window or hide a visible one."""
        self.set_visible(window_id, not self.descriptors[window_id].is_visible)

    def close(self, window_id: str):
        """Hide a window and tell its content it was closed."""
        self.set_visible(window_id, False)

        content = self.descriptors[window_id].content
        on_close = getattr(content, "on_close_requested", None)
        if callable(on_close):
            on_close()

        pub.sendMessage(topics.WINDOW_CLOSED, window_id=window_id)

    def bring_to_front(self, window_id: str):
        """Raise a window to the top of the stacking order."""
        if window_id in self.descriptors:
            self.focus_manager.set_focused_window(window_id)

    # Sizing

    def resize_to_content(
        self, window_id: str, intrinsic_size: Optional[Size] = None
    ) -> Optional[Geometry]:
        """
        Fit a window around its content's natural size.

        Args:
            window_id: The window to resize
            intrinsic_size: Natural content size; asked from the content's
                measure_intrinsic_size() when omitted

        Returns:
            The committed geometry, or None if the content size is unknown
        """
        descriptor = self.descriptors[window_id]

        if intrinsic_size is None:
            measure = getattr(descriptor.content, "measure_intrinsic_size", None)
            if not callable(measure):
                return None
            intrinsic_size = measure()
        if intrinsic_size is None:
            return None

        frame = self.chrome.frame_size(intrinsic_size)
        if not is_valid(Geometry(0, 0, frame.width, frame.height)):
            logger.debug("Ignoring invalid content size for %s", window_id)
            return None

        min_size = descriptor.min_size
        geometry = self.geometry_map[window_id]
        candidate = Geometry(
            geometry.x,
            geometry.y,
            max(min_size.width, frame.width),
            max(min_size.height, frame.height),
        )
        resized = clamp_size(candidate, self.viewport, min_size)
        geometry.update(clamp(resized, self.viewport, min_size))

        self._commit(window_id)
        return geometry

    def _fit_to_viewport(self, window_id: str):
        geometry = self.geometry_map[window_id]
        min_size = self.descriptors[window_id].min_size
        geometry.update(clamp(geometry, self.viewport, min_size))

    def resize_viewport(self, viewport: ViewportBounds):
        """
        Record a new viewport size.

        Windows are not rescaled. Visible windows that no longer fit are
        moved (and only if unavoidable, shrunk) back inside.
        """
        self.viewport = viewport
        for descriptor in self.visible_windows():
            self._fit_to_viewport(descriptor.window_id)
        pub.sendMessage(topics.VIEWPORT_CHANGED, viewport=viewport)

    # Commits

    def _commit(self, window_id: str):
        """Persist one window and the aggregate, then announce the change."""
        self.persistence.save(window_id, self.geometry_map[window_id])
        self._committed.add(window_id)
        self._save_aggregate()
        self._announce(window_id)

    def _save_aggregate(self):
        """Merge the committed windows into the stored aggregate.

        Entries of windows that are not registered right now are kept.
        """
        states = self.persistence.load_aggregate()
        for window_id in self._committed:
            if window_id in self.geometry_map:
                states[window_id] = self.geometry_map[window_id]
        self.persistence.save_aggregate(states)

    def _announce(self, window_id: str):
        pub.sendMessage(
            topics.GEOMETRY_COMMITTED,
            window_id=window_id,
            geometry=self.geometry_map[window_id].copy(),
        )

    def _on_gesture_committed(self, window_id: str, geometry: Geometry):
        # The controller already saved the per-window entry
        if window_id in self.geometry_map:
            self._committed.add(window_id)
            self._save_aggregate()
            self._announce(window_id)

    # Layout commands

    def arrange_grid(self) -> Dict[str, Geometry]:
        """
        Tile all visible windows into a grid, in registration order.

        Returns:
            Copies of the new geometries of the arranged windows
        """
        self.interaction.cancel()
        visible = self.visible_windows()
        cells = self.layout.calculate([d.window_id for d in visible], self.viewport)

        for descriptor in visible:
            window_id = descriptor.window_id
            cell = clamp(cells[window_id], self.viewport, descriptor.min_size)
            self.geometry_map[window_id].update(cell)
            self.persistence.save(window_id, cell)
            self._committed.add(window_id)

        if visible:
            self._save_aggregate()
        for descriptor in visible:
            self._announce(descriptor.window_id)

        pub.sendMessage(topics.LAYOUT_ARRANGED, count=len(visible))
        return {d.window_id: self.geometry_map[d.window_id].copy() for d in visible}

    def save_layout(self) -> Optional[str]:
        """Save a snapshot of every window's geometry.

        Returns:
            The snapshot id, or None if it could not be written
        """
        snapshot_id = self.persistence.save_named_snapshot(self.geometry_map)
        if snapshot_id is not None:
            pub.sendMessage(topics.LAYOUT_SAVED, snapshot_id=snapshot_id)
        return snapshot_id

    def load_layout(self) -> bool:
        """Restore the most recent snapshot for the registered windows.

        Returns:
            True if a snapshot was applied
        """
        states = self.persistence.load_latest_snapshot()
        if states is None:
            return False

        self.interaction.cancel()
        restored = [w for w in self.descriptors if w in states]
        for window_id in restored:
            min_size = self.descriptors[window_id].min_size
            geometry = clamp(states[window_id], self.viewport, min_size)
            self.geometry_map[window_id].update(geometry)
            self.persistence.save(window_id, geometry)
            self._committed.add(window_id)

        if restored:
            self._save_aggregate()
        for window_id in restored:
            self._announce(window_id)

        pub.sendMessage(topics.LAYOUT_LOADED, count=len(restored))
        return True

    def reset_layout(self):
        """Forget all stored geometry and recompute every window's default."""
        self.interaction.cancel()
        self.persistence.clear()
        self._committed.clear()
        for window_id, descriptor in self.descriptors.items():
            self.geometry_map[window_id].update(self._default_geometry(descriptor))
        pub.sendMessage(topics.LAYOUT_RESET)

    # Pointer routing

    def window_at(self, x: float, y: float) -> Tuple[Optional[str], HitRegion]:
        """Top-most visible window under a point and the region hit."""
        for window_id in reversed(self.z_order()):
            if not self.descriptors[window_id].is_visible:
                continue
            region = self.chrome.hit_test(self.geometry_map[window_id], x, y)
            if region != HitRegion.NONE:
                return window_id, region
        return None, HitRegion.NONE

    def pointer_down(self, x: float, y: float) -> Tuple[Optional[str], HitRegion]:
        """
        Handle a pointer press.

        The header starts a drag, the corner handle a resize; the header
        buttons close or fit the window; the content area only raises it.
        A press during an active gesture is ignored.

        Returns:
            The window hit (or None) and the region under the pointer
        """
        if self.interaction.is_active():
            return None, HitRegion.NONE

        window_id, region = self.window_at(x, y)
        if window_id is None:
            return None, region

        if region == HitRegion.HEADER:
            self.begin_drag(window_id, x, y)
        elif region == HitRegion.RESIZE_HANDLE:
            self.begin_resize(window_id, x, y)
        elif region == HitRegion.CLOSE_BUTTON:
            self.close(window_id)
        elif region == HitRegion.FIT_BUTTON:
            self.bring_to_front(window_id)
            self.resize_to_content(window_id)
        else:
            self.bring_to_front(window_id)

        return window_id, region

    def begin_drag(self, window_id: str, x: float, y: float) -> bool:
        """Start dragging a window from pointer position (x, y)."""
        if not self.descriptors[window_id].is_visible:
            return False
        started = self.interaction.begin_drag(
            window_id,
            self.geometry_map[window_id],
            self.descriptors[window_id].min_size,
            x,
            y,
        )
        if started:
            self.focus_manager.set_focused_window(window_id)
        return started

    def begin_resize(self, window_id: str, x: float, y: float) -> bool:
        """Start resizing a window from pointer position (x, y)."""
        if not self.descriptors[window_id].is_visible:
            return False
        started = self.interaction.begin_resize(
            window_id,
            self.geometry_map[window_id],
            self.descriptors[window_id].min_size,
            x,
            y,
        )
        if started:
            self.focus_manager.set_focused_window(window_id)
        return started

    def pointer_move(self, x: float, y: float):
        """Handle pointer motion."""
        self.interaction.handle_motion(x, y)

    def pointer_up(self) -> Optional[Geometry]:
        """Handle pointer release, committing any active gesture."""
        return self.interaction.end_operation()

    def pointer_leave(self) -> Optional[Geometry]:
        """Handle the pointer leaving the window system; same as a release."""
        return self.interaction.end_operation()
