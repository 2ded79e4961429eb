"""
Unit tests for geometry persistence.
"""

import json
import logging
import math

import pytest
from floatwm.geometry import Geometry
from floatwm.persistence import (
    AGGREGATE_KEY,
    GEOMETRY_PREFIX,
    SNAPSHOT_PREFIX,
    JsonFileStore,
    MemoryStore,
    PersistenceAdapter,
    PersistenceError,
)


@pytest.mark.unit
class TestPerWindowGeometry:
    """Test save/load of single window geometry."""

    def test_round_trip(self, adapter):
        g = Geometry(12.5, 80, 640.25, 480)
        assert adapter.save("scope", g)

        loaded = adapter.load("scope")

        assert loaded == g

    def test_missing_entry_is_absent(self, adapter):
        assert adapter.load("nothing") is None

    def test_invalid_geometry_never_written(self, adapter, store):
        assert not adapter.save("scope", Geometry(0, 0, math.nan, 100))

        assert adapter.load("scope") is None
        assert GEOMETRY_PREFIX + "scope" not in store.keys()

    def test_corrupt_json_is_absent(self, adapter, store):
        store.set(GEOMETRY_PREFIX + "scope", "{not json")

        assert adapter.load("scope") is None

    @pytest.mark.parametrize(
        "stored",
        [
            {"x": 1, "y": 2, "width": "wide", "height": 4},
            {"x": 1, "y": 2, "width": 3},
            {"x": 1, "y": 2, "width": -30, "height": 40},
            [1, 2, 3, 4],
            "null",
        ],
    )
    def test_invalid_stored_values_are_absent(self, adapter, store, stored):
        store.set(GEOMETRY_PREFIX + "scope", json.dumps(stored))

        assert adapter.load("scope") is None

    def test_key_naming(self, adapter, store):
        adapter.save("scope", Geometry(1, 2, 3, 4))

        assert json.loads(store.get("window-geometry-scope")) == {
            "x": 1,
            "y": 2,
            "width": 3,
            "height": 4,
        }


@pytest.mark.unit
class TestAggregate:
    """Test the full id -> geometry mapping."""

    def test_round_trip(self, adapter):
        states = {"a": Geometry(0, 0, 100, 100), "b": Geometry(10, 20, 300, 200)}
        adapter.save_aggregate(states)

        assert adapter.load_aggregate() == states

    def test_invalid_entries_skipped(self, adapter, store):
        store.set(
            AGGREGATE_KEY,
            json.dumps({"a": {"x": 0, "y": 0, "width": 100, "height": 100}, "b": {"x": "?"}}),
        )

        assert adapter.load_aggregate() == {"a": Geometry(0, 0, 100, 100)}

    def test_missing_aggregate_is_empty(self, adapter):
        assert adapter.load_aggregate() == {}


@pytest.mark.unit
class TestSnapshots:
    """Test timestamped layout snapshots."""

    def test_ids_strictly_increase(self, adapter):
        ids = [adapter.save_named_snapshot({"a": Geometry(0, 0, 1, 1)}) for _ in range(3)]

        assert [int(i) for i in ids] == sorted(int(i) for i in ids)
        assert len(set(ids)) == 3

    def test_latest_snapshot_loaded(self, adapter):
        adapter.save_named_snapshot({"a": Geometry(0, 0, 100, 100)})
        adapter.save_named_snapshot({"a": Geometry(50, 60, 100, 100)})

        assert adapter.load_latest_snapshot() == {"a": Geometry(50, 60, 100, 100)}

    def test_no_snapshot_is_absent(self, adapter):
        assert adapter.load_latest_snapshot() is None

    def test_only_five_kept(self, adapter):
        ids = [adapter.save_named_snapshot({"a": Geometry(i, 0, 100, 100)}) for i in range(8)]

        assert adapter.list_snapshots() == ids[-5:]
        assert adapter.load_latest_snapshot() == {"a": Geometry(7, 0, 100, 100)}

    def test_prune_keeps_most_recent(self, adapter):
        ids = [adapter.save_named_snapshot({}) for _ in range(4)]

        removed = adapter.prune_snapshots(keep=2)

        assert removed == 2
        assert adapter.list_snapshots() == ids[2:]

    def test_snapshot_payload(self, adapter, store):
        snapshot_id = adapter.save_named_snapshot({"a": Geometry(1, 2, 3, 4)})

        payload = json.loads(store.get(SNAPSHOT_PREFIX + snapshot_id))
        assert "timestamp" in payload
        assert payload["states"] == {"a": {"x": 1, "y": 2, "width": 3, "height": 4}}

    def test_corrupt_snapshot_is_absent(self, adapter, store):
        store.set(SNAPSHOT_PREFIX + "1".zfill(20), "garbage")

        assert adapter.load_latest_snapshot() is None

    def test_clear_keeps_snapshots(self, adapter):
        adapter.save("a", Geometry(0, 0, 100, 100))
        adapter.save_aggregate({"a": Geometry(0, 0, 100, 100)})
        adapter.save_named_snapshot({"a": Geometry(0, 0, 100, 100)})

        adapter.clear()

        assert adapter.load("a") is None
        assert adapter.load_aggregate() == {}
        assert adapter.load_latest_snapshot() is not None


@pytest.mark.unit
class TestWriteFailures:
    """Write failures are logged, never raised."""

    def test_quota_exceeded(self, caplog):
        adapter = PersistenceAdapter(MemoryStore(quota=10))

        with caplog.at_level(logging.WARNING, logger="floatwm.persistence"):
            ok = adapter.save("scope", Geometry(0, 0, 100, 100))

        assert ok is False
        assert "quota" in caplog.text

    def test_failed_snapshot_returns_none(self):
        adapter = PersistenceAdapter(MemoryStore(quota=10))

        assert adapter.save_named_snapshot({"a": Geometry(0, 0, 1, 1)}) is None

    def test_memory_store_quota(self):
        store = MemoryStore(quota=20)
        store.set("k", "v" * 10)

        with pytest.raises(PersistenceError):
            store.set("other", "v" * 20)

        # Overwriting an existing key only counts the difference
        store.set("k", "w" * 15)
        assert store.get("k") == "w" * 15


class TestJsonFileStore:
    """Test the on-disk store."""

    def test_survives_reopen(self, tmp_path):
        path = tmp_path / "state.json"
        PersistenceAdapter(JsonFileStore(path)).save("scope", Geometry(5, 6, 300, 200))

        reopened = PersistenceAdapter(JsonFileStore(path))

        assert reopened.load("scope") == Geometry(5, 6, 300, 200)

    def test_unreadable_file_starts_empty(self, tmp_path):
        path = tmp_path / "state.json"
        path.write_text("{broken", encoding="utf-8")

        assert list(JsonFileStore(path).keys()) == []

    def test_write_failure_raises_persistence_error(self, tmp_path):
        blocker = tmp_path / "blocker"
        blocker.write_text("", encoding="utf-8")
        store = JsonFileStore(blocker / "state.json")

        with pytest.raises(PersistenceError):
            store.set("k", "v")
        assert store.get("k") is None

    def test_delete(self, tmp_path):
        path = tmp_path / "state.json"
        store = JsonFileStore(path)
        store.set("k", "v")
        store.delete("k")

        assert JsonFileStore(path).get("k") is None
