"""
Geometry Persistence

Stores per-window geometry, the aggregate layout and timestamped layout
snapshots in a durable key-value store.

Key space:
- window-geometry-<id>: one geometry per window
- window-manager-states: the full id -> geometry mapping
- window-layout-<snapshot id>: saved layouts, oldest pruned first
"""

from __future__ import annotations
from abc import ABC, abstractmethod
from datetime import datetime, timezone
from pathlib import Path
from typing import Dict, Iterable, List, Optional
import json
import logging
import os
import time

from .geometry import Geometry, is_valid

logger = logging.getLogger(__name__)

GEOMETRY_PREFIX = "window-geometry-"
AGGREGATE_KEY = "window-manager-states"
SNAPSHOT_PREFIX = "window-layout-"

# Nanosecond timestamps fit in 20 digits; padding keeps key order numeric
SNAPSHOT_ID_WIDTH = 20


class PersistenceError(Exception):
    """Raised by stores when a read or write cannot be completed."""


class KeyValueStore(ABC):
    """Durable string key-value storage."""

    @abstractmethod
    def get(self, key: str) -> Optional[str]:
        """Return the value for a key, or None if absent."""
        pass

    @abstractmethod
    def set(self, key: str, value: str):
        """Store a value."""
        pass

    @abstractmethod
    def delete(self, key: str):
        """Remove a key. Missing keys are ignored."""
        pass

    @abstractmethod
    def keys(self) -> Iterable[str]:
        """All stored keys."""
        pass


class MemoryStore(KeyValueStore):
    """
    In-memory store.

    An optional quota (in characters of stored keys and values) makes writes
    fail the way browser storage does once it is full.
    """

    def __init__(self, quota: Optional[int] = None):
        self.quota = quota
        self._data: Dict[str, str] = {}

    def _usage(self) -> int:
        return sum(len(k) + len(v) for k, v in self._data.items())

    def get(self, key: str) -> Optional[str]:
        return self._data.get(key)

    def set(self, key: str, value: str):
        if self.quota is not None:
            current = len(key) + len(self._data[key]) if key in self._data else 0
            if self._usage() - current + len(key) + len(value) > self.quota:
                raise PersistenceError(f"Storage quota exceeded writing {key!r}")
        self._data[key] = value

    def delete(self, key: str):
        self._data.pop(key, None)

    def keys(self) -> Iterable[str]:
        return list(self._data.keys())


class JsonFileStore(KeyValueStore):
    """Store backed by a single JSON document on disk."""

    def __init__(self, path: str | Path):
        self.path = Path(path)
        self._data: Dict[str, str] = self._read()

    def _read(self) -> Dict[str, str]:
        if not self.path.exists():
            return {}
        try:
            data = json.loads(self.path.read_text(encoding="utf-8"))
        except (OSError, ValueError) as e:
            logger.warning("Ignoring unreadable state file %s: %s", self.path, e)
            return {}
        if not isinstance(data, dict):
            logger.warning("Ignoring state file %s: not a JSON object", self.path)
            return {}
        return {str(k): v for k, v in data.items() if isinstance(v, str)}

    def _flush(self):
        tmp = self.path.with_name(self.path.name + ".tmp")
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            tmp.write_text(json.dumps(self._data, indent=2, sort_keys=True), encoding="utf-8")
            os.replace(tmp, self.path)
        except OSError as e:
            raise PersistenceError(f"Failed to write {self.path}: {e}") from e

    def get(self, key: str) -> Optional[str]:
        return self._data.get(key)

    def set(self, key: str, value: str):
        previous = self._data.get(key)
        self._data[key] = value
        try:
            self._flush()
        except PersistenceError:
            # Keep memory and disk in step
            if previous is None:
                del self._data[key]
            else:
                self._data[key] = previous
            raise

    def delete(self, key: str):
        if key in self._data:
            del self._data[key]
            self._flush()

    def keys(self) -> Iterable[str]:
        return list(self._data.keys())


def _encode_states(states: Dict[str, Geometry]) -> Dict[str, dict]:
    return {window_id: g.to_dict() for window_id, g in states.items() if is_valid(g)}


def _decode_geometry(data) -> Optional[Geometry]:
    """Turn stored data into a Geometry, or None if it is not usable."""
    if not isinstance(data, dict):
        return None
    geometry = Geometry.from_dict(data)
    if not is_valid(geometry):
        return None
    if geometry.width < 0 or geometry.height < 0:
        return None
    return geometry


def _decode_states(data) -> Dict[str, Geometry]:
    if not isinstance(data, dict):
        return {}
    states = {}
    for window_id, entry in data.items():
        geometry = _decode_geometry(entry)
        if geometry is None:
            logger.debug("Dropping invalid stored geometry for %s", window_id)
            continue
        states[str(window_id)] = geometry
    return states


class PersistenceAdapter:
    """
    Loads and saves window geometry through a KeyValueStore.

    Nothing here raises into the caller: unreadable or invalid entries load
    as absent, and failed writes are logged and reported by the return value.
    """

    def __init__(self, store: KeyValueStore, snapshot_limit: int = 5):
        self.store = store
        self.snapshot_limit = snapshot_limit
        self._last_snapshot_id = 0

    # Low-level helpers

    def _write(self, key: str, value) -> bool:
        try:
            self.store.set(key, json.dumps(value))
        except (PersistenceError, OSError) as e:
            logger.warning("Failed to persist %s: %s", key, e)
            return False
        return True

    def _read(self, key: str):
        try:
            raw = self.store.get(key)
        except (PersistenceError, OSError) as e:
            logger.warning("Failed to read %s: %s", key, e)
            return None
        if raw is None:
            return None
        try:
            return json.loads(raw)
        except ValueError:
            logger.debug("Stored value for %s is not valid JSON", key)
            return None

    def _remove(self, key: str) -> bool:
        try:
            self.store.delete(key)
        except (PersistenceError, OSError) as e:
            logger.warning("Failed to delete %s: %s", key, e)
            return False
        return True

    def _keys(self) -> List[str]:
        try:
            return list(self.store.keys())
        except (PersistenceError, OSError) as e:
            logger.warning("Failed to list stored keys: %s", e)
            return []

    # Per-window geometry

    def save(self, window_id: str, geometry: Geometry) -> bool:
        """Persist one window's geometry. Invalid geometry is never written."""
        if not is_valid(geometry):
            logger.debug("Refusing to persist invalid geometry for %s", window_id)
            return False
        return self._write(GEOMETRY_PREFIX + window_id, geometry.to_dict())

    def load(self, window_id: str) -> Optional[Geometry]:
        """Load one window's geometry, or None if absent or invalid."""
        return _decode_geometry(self._read(GEOMETRY_PREFIX + window_id))

    def delete(self, window_id: str) -> bool:
        """Forget one window's persisted geometry."""
        return self._remove(GEOMETRY_PREFIX + window_id)

    # Aggregate mapping

    def save_aggregate(self, states: Dict[str, Geometry]) -> bool:
        """Persist the full id -> geometry mapping."""
        return self._write(AGGREGATE_KEY, _encode_states(states))

    def load_aggregate(self) -> Dict[str, Geometry]:
        """Load the full mapping, skipping entries that fail validation."""
        return _decode_states(self._read(AGGREGATE_KEY))

    # Snapshots

    def _next_snapshot_id(self) -> int:
        snapshot_id = time.time_ns()
        existing = [int(s) for s in self.list_snapshots()]
        floor = max(existing + [self._last_snapshot_id])
        if snapshot_id <= floor:
            snapshot_id = floor + 1
        self._last_snapshot_id = snapshot_id
        return snapshot_id

    def list_snapshots(self) -> List[str]:
        """Snapshot ids, oldest first."""
        ids = []
        for key in self._keys():
            if not key.startswith(SNAPSHOT_PREFIX):
                continue
            suffix = key[len(SNAPSHOT_PREFIX):]
            if suffix.isdigit():
                ids.append(suffix)
        return sorted(ids, key=int)

    def save_named_snapshot(self, states: Dict[str, Geometry]) -> Optional[str]:
        """
        Save a full layout snapshot and prune old ones.

        Returns:
            The new snapshot id, or None if the write failed
        """
        snapshot_id = str(self._next_snapshot_id()).zfill(SNAPSHOT_ID_WIDTH)
        payload = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "states": _encode_states(states),
        }
        if not self._write(SNAPSHOT_PREFIX + snapshot_id, payload):
            return None
        self.prune_snapshots(self.snapshot_limit)
        return snapshot_id

    def load_snapshot(self, snapshot_id: str) -> Optional[Dict[str, Geometry]]:
        """Load a snapshot by id, or None if absent or unreadable."""
        data = self._read(SNAPSHOT_PREFIX + snapshot_id)
        if not isinstance(data, dict) or not isinstance(data.get("states"), dict):
            return None
        return _decode_states(data["states"])

    def load_latest_snapshot(self) -> Optional[Dict[str, Geometry]]:
        """Load the most recent snapshot, or None if there is none."""
        snapshots = self.list_snapshots()
        if not snapshots:
            return None
        return self.load_snapshot(snapshots[-1])

    def prune_snapshots(self, keep: int = 5) -> int:
        """
        Delete all but the most recent snapshots.

        Returns:
            Number of snapshots deleted
        """
        snapshots = self.list_snapshots()
        stale = snapshots[: max(0, len(snapshots) - keep)]
        removed = 0
        for snapshot_id in stale:
            if self._remove(SNAPSHOT_PREFIX + snapshot_id):
                removed += 1
        return removed

    # Reset

    def clear(self) -> bool:
        """Remove every per-window entry and the aggregate. Snapshots stay."""
        ok = True
        for key in self._keys():
            if key.startswith(GEOMETRY_PREFIX) or key == AGGREGATE_KEY:
                ok = self._remove(key) and ok
        return ok
