"""
Focus Manager

Tracks the stacking order of windows and which one is focused.
"""

from __future__ import annotations
from typing import List, Optional

from pubsub import pub

from . import topics


class FocusManager:
    """Manages focus and z-order for the windows of one WindowManager.

    The owning manager reports registrations, removals and gesture starts
    directly, so several managers can share the event bus without touching
    each other's stacks. FOCUS_CHANGED is published whenever the top-most
    window changes. Focus follows interaction, never hover.

    Responsibilities:
    - Keep the stacking order, bottom to top
    - Raise a window when a drag or resize starts on it
    - Drop windows that are unregistered
    """

    def __init__(self):
        self.stack: List[str] = []
        self.focused_window: Optional[str] = None

    def set_focused_window(self, window_id: Optional[str]):
        """Raise a window to the top and focus it.

        Args:
            window_id: The window to focus, or None to clear focus
        """
        if window_id is not None:
            if window_id in self.stack:
                self.stack.remove(window_id)
            self.stack.append(window_id)

        if window_id == self.focused_window:
            return

        self.focused_window = window_id
        pub.sendMessage(topics.FOCUS_CHANGED, window_id=window_id)

    def z_order(self) -> List[str]:
        """Window ids from bottom to top."""
        return list(self.stack)

    def add_window(self, window_id: str):
        """Stack a new window just below the focused one; focus is earned by interaction."""
        if window_id in self.stack:
            return
        if self.focused_window in self.stack:
            self.stack.insert(self.stack.index(self.focused_window), window_id)
        else:
            self.stack.append(window_id)

    def remove_window(self, window_id: str):
        if window_id in self.stack:
            self.stack.remove(window_id)
        if self.focused_window == window_id:
            self.focused_window = None
            pub.sendMessage(topics.FOCUS_CHANGED, window_id=None)

    def get_focused_window(self) -> Optional[str]:
        """Get the currently focused window."""
        return self.focused_window
