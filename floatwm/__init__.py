"""
floatwm - Floating Window Layout Engine

Keeps a set of floating content panels inside a bounded viewport.

This package provides:
- Geometry types and viewport clamping
- Responsive scaling of authored default geometry
- Persistence of per-window geometry and layout snapshots
- The drag/resize interaction state machine
- Grid arrangement of visible windows
- A window manager tying it all together over a pub/sub event bus

Example usage:
    from floatwm import (
        WindowManager, WindowDescriptor, PersistenceAdapter, MemoryStore,
        LayoutConfig, Position, Size,
    )

    config = LayoutConfig()
    wm = WindowManager(PersistenceAdapter(MemoryStore()), config.viewport(1200, 800), config)
    wm.register(WindowDescriptor("scope", "Oscilloscope", Position(20, 80), Size(900, 450)))
    wm.arrange_grid()

Or run directly:
    python -m floatwm --windows windows.json show
"""

__version__ = "0.1.0"

from .geometry import (
    Position,
    Size,
    Geometry,
    ViewportBounds,
    clamp,
    clamp_size,
    is_valid,
)

from .scaler import ReferenceDesign, compute_scale, scale_default

from .persistence import (
    KeyValueStore,
    MemoryStore,
    JsonFileStore,
    PersistenceAdapter,
    PersistenceError,
)

from .objects import WindowDescriptor, WindowContent

from .operation_manager import InteractionController, InteractionState, Operation

from .layouts import Layout, GridLayout

from .focus_manager import FocusManager

from .decoration import HitRegion, WindowChrome, ChromeRenderer

from .config import LayoutConfig, parse_color, configure_logging

from .manager import WindowManager

from .window_controller import WindowController

from . import topics

__all__ = [
    # Version
    "__version__",
    # Geometry
    "Position",
    "Size",
    "Geometry",
    "ViewportBounds",
    "clamp",
    "clamp_size",
    "is_valid",
    # Scaling
    "ReferenceDesign",
    "compute_scale",
    "scale_default",
    # Persistence
    "KeyValueStore",
    "MemoryStore",
    "JsonFileStore",
    "PersistenceAdapter",
    "PersistenceError",
    # Objects
    "WindowDescriptor",
    "WindowContent",
    # Interaction
    "InteractionController",
    "InteractionState",
    "Operation",
    # Layouts
    "Layout",
    "GridLayout",
    # Focus
    "FocusManager",
    # Chrome
    "HitRegion",
    "WindowChrome",
    "ChromeRenderer",
    # Configuration
    "LayoutConfig",
    "parse_color",
    "configure_logging",
    # Manager
    "WindowManager",
    "WindowController",
    # Event topics
    "topics",
]
