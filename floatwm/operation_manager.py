"""
Operation Manager

Handles interactive drag and resize gestures for windows.
"""

from __future__ import annotations
from dataclasses import dataclass
from enum import Enum, auto
from typing import TYPE_CHECKING, Callable, Optional
import logging
import math

from pubsub import pub

from . import topics
from .geometry import Geometry, Position, Size, ViewportBounds, clamp, clamp_size

if TYPE_CHECKING:
    from .persistence import PersistenceAdapter

logger = logging.getLogger(__name__)


class InteractionState(Enum):
    """Gesture state of a window."""

    IDLE = auto()
    DRAGGING = auto()
    RESIZING = auto()


@dataclass
class Operation:
    """Represents an active gesture."""

    state: InteractionState
    window_id: str
    geometry: Geometry
    min_size: Size
    pointer_anchor: Position


class InteractionController:
    """Drives the drag/resize state machine from pointer events.

    Only one gesture exists at a time, so every window other than the one in
    `current` is IDLE. The geometry record handed to begin_drag/begin_resize
    is mutated in place on every move so renderers always see the window
    tracking the pointer.
    """

    def __init__(
        self,
        persistence: "PersistenceAdapter",
        get_viewport_fn: Callable[[], ViewportBounds],
        on_commit: Optional[Callable[[str, Geometry], None]] = None,
    ):
        """Initialize interaction controller.

        Args:
            persistence: Adapter the final geometry is saved through
            get_viewport_fn: Function returning the current viewport bounds
            on_commit: Called with (window_id, geometry) when a gesture ends
        """
        self.current: Optional[Operation] = None
        self.persistence = persistence
        self._get_viewport = get_viewport_fn
        self._on_commit = on_commit

    def is_active(self) -> bool:
        """Check if a gesture is currently active."""
        return self.current is not None

    def state_of(self, window_id: str) -> InteractionState:
        """Get the gesture state of a window."""
        if self.current and self.current.window_id == window_id:
            return self.current.state
        return InteractionState.IDLE

    def get_current_window(self) -> Optional[str]:
        """Get the id of the window involved in the current gesture."""
        return self.current.window_id if self.current else None

    def _begin(
        self,
        state: InteractionState,
        window_id: str,
        geometry: Geometry,
        min_size: Size,
        anchor: Position,
    ) -> bool:
        if self.current is not None:
            return False
        if not (math.isfinite(anchor.x) and math.isfinite(anchor.y)):
            return False

        self.current = Operation(
            state=state,
            window_id=window_id,
            geometry=geometry,
            min_size=min_size,
            pointer_anchor=anchor,
        )
        pub.sendMessage(topics.OPERATION_STARTED, window_id=window_id, state=state)
        return True

    def begin_drag(
        self, window_id: str, geometry: Geometry, min_size: Size, x: float, y: float
    ) -> bool:
        """Start dragging a window.

        Args:
            window_id: The window to move
            geometry: Live geometry record of the window
            min_size: Minimum window size
            x, y: Pointer position

        Returns:
            True if the gesture started, False if one is already active
        """
        anchor = Position(x - geometry.x, y - geometry.y)
        return self._begin(InteractionState.DRAGGING, window_id, geometry, min_size, anchor)

    def begin_resize(
        self, window_id: str, geometry: Geometry, min_size: Size, x: float, y: float
    ) -> bool:
        """Start resizing a window from its bottom-right corner.

        Args:
            window_id: The window to resize
            geometry: Live geometry record of the window
            min_size: Minimum window size
            x, y: Pointer position

        Returns:
            True if the gesture started, False if one is already active
        """
        corner = geometry.far_corner
        anchor = Position(x - corner.x, y - corner.y)
        return self._begin(InteractionState.RESIZING, window_id, geometry, min_size, anchor)

    def handle_motion(self, x: float, y: float):
        """Handle pointer motion during a gesture.

        Args:
            x, y: Pointer position
        """
        if not self.current:
            return
        if not (math.isfinite(x) and math.isfinite(y)):
            return

        op = self.current
        geometry = op.geometry
        anchor = op.pointer_anchor
        viewport = self._get_viewport()

        if op.state == InteractionState.DRAGGING:
            candidate = Geometry(
                x - anchor.x, y - anchor.y, geometry.width, geometry.height
            )
            geometry.update(clamp(candidate, viewport, op.min_size))

        elif op.state == InteractionState.RESIZING:
            candidate = Geometry(
                geometry.x,
                geometry.y,
                max(op.min_size.width, x - anchor.x - geometry.x),
                max(op.min_size.height, y - anchor.y - geometry.y),
            )
            resized = clamp_size(candidate, viewport, op.min_size)
            geometry.update(clamp(resized, viewport, op.min_size))

    def end_operation(self) -> Optional[Geometry]:
        """End the current gesture and commit its geometry.

        Returns:
            The committed geometry, or None if no gesture was active
        """
        if not self.current:
            return None

        op = self.current
        self.current = None

        self.persistence.save(op.window_id, op.geometry)
        if self._on_commit:
            self._on_commit(op.window_id, op.geometry)

        pub.sendMessage(
            topics.OPERATION_ENDED, window_id=op.window_id, geometry=op.geometry
        )
        return op.geometry

    def cancel(self):
        """Drop the current gesture without committing it."""
        if self.current:
            logger.debug("Cancelled gesture on %s", self.current.window_id)
        self.current = None
