"""
Command Line Interface

Drives a WindowManager against a JSON state file, for scripting layouts and
rendering previews without a host UI.
"""

from __future__ import annotations
from pathlib import Path
from typing import List, Optional
import argparse
import json
import os
import sys

from .config import LayoutConfig, configure_logging
from .manager import WindowManager
from .objects import WindowDescriptor
from .persistence import JsonFileStore, PersistenceAdapter


def parse_viewport(value: str):
    """Parse WIDTHxHEIGHT."""
    try:
        width, height = value.lower().split("x", 1)
        return float(width), float(height)
    except ValueError:
        raise argparse.ArgumentTypeError(f"Invalid viewport {value!r}, use WIDTHxHEIGHT")


def load_descriptors(path: Path) -> List[WindowDescriptor]:
    """Read window descriptors from a JSON list."""
    data = json.loads(path.read_text(encoding="utf-8"))
    if not isinstance(data, list):
        raise ValueError(f"{path}: expected a JSON list of windows")
    return [WindowDescriptor.from_dict(entry) for entry in data]


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="floatwm", description="Arrange and persist floating window layouts"
    )
    parser.add_argument("--windows", type=Path, required=True, help="JSON list of windows")
    parser.add_argument("--state", type=Path, default=None, help="State file (default: $FLOATWM_STATE)")
    parser.add_argument("--viewport", type=parse_viewport, default=(1200.0, 800.0), help="WIDTHxHEIGHT")
    parser.add_argument("--log-level", default=os.getenv("FLOATWM_LOG_LEVEL", "WARNING"))

    sub = parser.add_subparsers(dest="command", required=True)
    sub.add_parser("show", help="Print current geometry")
    sub.add_parser("grid", help="Arrange visible windows in a grid")
    sub.add_parser("save", help="Save a layout snapshot")
    sub.add_parser("load", help="Restore the latest snapshot")
    sub.add_parser("reset", help="Forget stored geometry")

    snapshots = sub.add_parser("snapshots", help="List layout snapshots")
    snapshots.add_argument("--prune", type=int, default=None, metavar="KEEP")

    toggle = sub.add_parser("toggle", help="Show or hide a window")
    toggle.add_argument("window_id")

    drag = sub.add_parser("drag", help="Drag a window by its header")
    drag.add_argument("window_id")
    drag.add_argument("dx", type=float)
    drag.add_argument("dy", type=float)

    resize = sub.add_parser("resize", help="Resize a window by its corner handle")
    resize.add_argument("window_id")
    resize.add_argument("dw", type=float)
    resize.add_argument("dh", type=float)

    preview = sub.add_parser("preview", help="Render the layout to a PNG")
    preview.add_argument("output", type=Path)

    return parser


def _print_geometry(wm: WindowManager):
    out = {}
    for window_id, geometry in wm.geometries().items():
        entry = geometry.to_dict()
        entry["visible"] = wm.descriptors[window_id].is_visible
        out[window_id] = entry
    print(json.dumps(out, indent=2))


def run(args: argparse.Namespace) -> int:
    config = LayoutConfig()
    state_path = args.state or config.state_path
    adapter = PersistenceAdapter(JsonFileStore(state_path), config.snapshot_limit)
    wm = WindowManager(adapter, config.viewport(*args.viewport), config)

    try:
        descriptors = load_descriptors(args.windows)
    except (OSError, ValueError, KeyError, IndexError, TypeError) as e:
        print(f"Failed to read windows file: {e}", file=sys.stderr)
        return 1

    for descriptor in descriptors:
        wm.register(descriptor)

    command = args.command
    if command == "show":
        _print_geometry(wm)
    elif command == "grid":
        wm.arrange_grid()
        _print_geometry(wm)
    elif command == "save":
        snapshot_id = wm.save_layout()
        if snapshot_id is None:
            print("Failed to save layout", file=sys.stderr)
            return 1
        print(snapshot_id)
    elif command == "load":
        if not wm.load_layout():
            print("No saved layout", file=sys.stderr)
            return 1
        _print_geometry(wm)
    elif command == "reset":
        wm.reset_layout()
        _print_geometry(wm)
    elif command == "snapshots":
        if args.prune is not None:
            adapter.prune_snapshots(args.prune)
        for snapshot_id in adapter.list_snapshots():
            print(snapshot_id)
    elif command in ("toggle", "drag", "resize"):
        if args.window_id not in wm.descriptors:
            print(f"Unknown window: {args.window_id}", file=sys.stderr)
            return 1
        if command == "toggle":
            wm.toggle_visible(args.window_id)
        else:
            _run_gesture(wm, command, args)
        _print_geometry(wm)
    elif command == "preview":
        _render_preview(wm, args.output)

    return 0


def _run_gesture(wm: WindowManager, command: str, args: argparse.Namespace):
    """Replay a one-step pointer gesture on a window."""
    geometry = wm.geometry(args.window_id)
    if command == "drag":
        start_x = geometry.x + geometry.width / 2
        start_y = geometry.y + wm.chrome.header_height / 2
        started = wm.begin_drag(args.window_id, start_x, start_y)
        end_x, end_y = start_x + args.dx, start_y + args.dy
    else:
        start_x = geometry.x + geometry.width - 1
        start_y = geometry.y + geometry.height - 1
        started = wm.begin_resize(args.window_id, start_x, start_y)
        end_x, end_y = start_x + args.dw, start_y + args.dh
    if started:
        wm.pointer_move(end_x, end_y)
        wm.pointer_up()


def _render_preview(wm: WindowManager, output: Path):
    from .decoration import ChromeRenderer

    renderer = ChromeRenderer(wm.config)
    windows = [
        (wm.descriptors[w].title, wm.geometry(w), w == wm.focused_window)
        for w in wm.z_order()
        if wm.descriptors[w].is_visible
    ]
    surface = renderer.render_layout(wm.viewport.width, wm.viewport.height, windows)
    surface.write_to_png(str(output))
    print(output)


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point."""
    args = build_parser().parse_args(argv)
    configure_logging(args.log_level)
    return run(args)
