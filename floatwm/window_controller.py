"""
Window Controller

Handles window and layout commands published on the event bus.
"""

from __future__ import annotations
from typing import TYPE_CHECKING
import logging

from pubsub import pub

from . import topics

if TYPE_CHECKING:
    from .manager import WindowManager

logger = logging.getLogger(__name__)


class WindowController:
    """Handles commands from the host UI.

    This component subscribes to command events and executes them on the
    WindowManager. Commands naming an unknown window are logged and dropped;
    a stale button in the host must not take the layout down. A manager
    created with a scope only receives commands published under it.

    Responsibilities:
    - CMD_CLOSE_WINDOW: Close a window
    - CMD_TOGGLE_VISIBLE: Show/hide a window
    - CMD_RESIZE_TO_CONTENT: Fit a window to its content
    - CMD_BRING_TO_FRONT: Raise a window
    - CMD_ARRANGE_GRID / CMD_SAVE_LAYOUT / CMD_LOAD_LAYOUT / CMD_RESET_LAYOUT
    """

    def __init__(self, window_manager: "WindowManager"):
        """Initialize window controller.

        Args:
            window_manager: WindowManager the commands act on
        """
        self.window_manager = window_manager
        self._setup_subscriptions()

    def _topic(self, topic: str) -> str:
        return topics.scoped(topic, self.window_manager.scope)

    def _setup_subscriptions(self):
        """Subscribe to the command events of this controller's manager."""
        pub.subscribe(self._on_close_window, self._topic(topics.CMD_CLOSE_WINDOW))
        pub.subscribe(self._on_toggle_visible, self._topic(topics.CMD_TOGGLE_VISIBLE))
        pub.subscribe(self._on_resize_to_content, self._topic(topics.CMD_RESIZE_TO_CONTENT))
        pub.subscribe(self._on_bring_to_front, self._topic(topics.CMD_BRING_TO_FRONT))
        pub.subscribe(self._on_arrange_grid, self._topic(topics.CMD_ARRANGE_GRID))
        pub.subscribe(self._on_save_layout, self._topic(topics.CMD_SAVE_LAYOUT))
        pub.subscribe(self._on_load_layout, self._topic(topics.CMD_LOAD_LAYOUT))
        pub.subscribe(self._on_reset_layout, self._topic(topics.CMD_RESET_LAYOUT))

    def _known(self, window_id: str) -> bool:
        if window_id in self.window_manager.descriptors:
            return True
        logger.warning("Ignoring command for unknown window %r", window_id)
        return False

    def _on_close_window(self, window_id: str):
        """Handle CMD_CLOSE_WINDOW command."""
        if self._known(window_id):
            self.window_manager.close(window_id)

    def _on_toggle_visible(self, window_id: str):
        """Handle CMD_TOGGLE_VISIBLE command."""
        if self._known(window_id):
            self.window_manager.toggle_visible(window_id)

    def _on_resize_to_content(self, window_id: str):
        """Handle CMD_RESIZE_TO_CONTENT command."""
        if self._known(window_id):
            self.window_manager.resize_to_content(window_id)

    def _on_bring_to_front(self, window_id: str):
        """Handle CMD_BRING_TO_FRONT command."""
        if self._known(window_id):
            self.window_manager.bring_to_front(window_id)

    def _on_arrange_grid(self):
        """Handle CMD_ARRANGE_GRID command."""
        self.window_manager.arrange_grid()

    def _on_save_layout(self):
        """Handle CMD_SAVE_LAYOUT command."""
        self.window_manager.save_layout()

    def _on_load_layout(self):
        """Handle CMD_LOAD_LAYOUT command."""
        if not self.window_manager.load_layout():
            logger.info("No saved layout to load")

    def _on_reset_layout(self):
        """Handle CMD_RESET_LAYOUT command."""
        self.window_manager.reset_layout()
