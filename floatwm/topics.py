"""
Event Topics for floatwm

All pub/sub topics are defined here for easy discovery and documentation.
Topic naming convention: <category>.<action>

Every topic is always published with the same keyword arguments, listed
under each name. Listeners must accept exactly those arguments.
"""

# Window lifecycle events
WINDOW_REGISTERED = "window.registered"
"""Published when a window is registered. Params: window_id"""

WINDOW_UNREGISTERED = "window.unregistered"
"""Published when a window is removed from the registry. Params: window_id"""

WINDOW_VISIBILITY = "window.visibility"
"""Published when a window is shown or hidden. Params: window_id, visible"""

WINDOW_CLOSED = "window.closed"
"""Published when a window is closed by the user. Params: window_id"""

# Geometry events
GEOMETRY_COMMITTED = "geometry.committed"
"""Published when a window's geometry is committed. Params: window_id, geometry"""

# Focus state notifications
FOCUS_CHANGED = "focus.changed"
"""Published when the top-most window changes. Params: window_id (or None)"""

# Operation events (interactive move/resize)
OPERATION_STARTED = "operation.started"
"""Published when a drag or resize gesture starts. Params: window_id, state"""

OPERATION_ENDED = "operation.ended"
"""Published when a gesture is released. Params: window_id, geometry"""

# Layout events
LAYOUT_SAVED = "layout.saved"
"""Published after a layout snapshot is written. Params: snapshot_id"""

LAYOUT_LOADED = "layout.loaded"
"""Published after a snapshot is applied. Params: count"""

LAYOUT_RESET = "layout.reset"
"""Published after all geometry was reset to defaults."""

LAYOUT_ARRANGED = "layout.arranged"
"""Published after a grid arrangement. Params: count"""

VIEWPORT_CHANGED = "viewport.changed"
"""Published when the host reports a new viewport. Params: viewport"""

# Command events (imperative - tell components to do something)
# These are triggered by the host UI (buttons, keybinds)

CMD_CLOSE_WINDOW = "cmd.close_window"
"""Command: Close a window. Params: window_id"""

CMD_TOGGLE_VISIBLE = "cmd.toggle_visible"
"""Command: Show a hidden window or hide a visible one. Params: window_id"""

CMD_RESIZE_TO_CONTENT = "cmd.resize_to_content"
"""Command: Fit a window to its content. Params: window_id"""

CMD_BRING_TO_FRONT = "cmd.bring_to_front"
"""Command: Raise a window to the top. Params: window_id"""

CMD_ARRANGE_GRID = "cmd.arrange_grid"
"""Command: Tile all visible windows into a grid."""

CMD_SAVE_LAYOUT = "cmd.save_layout"
"""Command: Save a layout snapshot."""

CMD_LOAD_LAYOUT = "cmd.load_layout"
"""Command: Restore the latest layout snapshot."""

CMD_RESET_LAYOUT = "cmd.reset_layout"
"""Command: Discard all stored geometry and recompute defaults."""


def scoped(topic: str, scope=None) -> str:
    """
    Name of a command topic as answered by one WindowManager.

    Managers created with a scope only listen below it, e.g.
    scoped(CMD_ARRANGE_GRID, "left") == "left.cmd.arrange_grid". Without a
    scope the plain topic name is used. Scopes must be valid identifiers.
    """
    return f"{scope}.{topic}" if scope else topic
