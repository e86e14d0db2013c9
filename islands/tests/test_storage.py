"""
Tests for snapshot stores.
"""

import builtins

import pytest

from ..storage import FileSnapshotStore, MemorySnapshotStore, snapshot_store


@pytest.fixture(params=["memory", "file"])
def any_store(request, tmp_path):
    if request.param == "memory":
        return MemorySnapshotStore()
    return FileSnapshotStore(tmp_path / "snapshots")


class TestSnapshotStore:
    """Behaviour shared by every store."""

    def test_get_absent(self, any_store):
        assert any_store.get("alice") is None

    def test_put_get(self, any_store):
        any_store.put("alice", '{"a": 1}')
        assert any_store.get("alice") == '{"a": 1}'

    def test_put_replaces(self, any_store):
        any_store.put("alice", "first")
        any_store.put("alice", "second")
        assert any_store.get("alice") == "second"
        assert any_store.keys() == ["alice"]

    def test_delete(self, any_store):
        any_store.put("alice", "x")
        any_store.delete("alice")
        assert any_store.get("alice") is None
        any_store.delete("alice")

    def test_keys(self, any_store):
        any_store.put("bob", "x")
        any_store.put("alice", "y")
        assert any_store.keys() == ["alice", "bob"]


class TestFileSnapshotStore:
    """File store specifics."""

    def test_survives_a_new_instance(self, tmp_path):
        FileSnapshotStore(tmp_path).put("alice", "state")
        assert FileSnapshotStore(tmp_path).get("alice") == "state"

    def test_awkward_names_are_safe(self, tmp_path):
        store = FileSnapshotStore(tmp_path)
        store.put("../../etc/passwd", "x")
        store.put("Zoë & co", "y")

        assert store.get("../../etc/passwd") == "x"
        assert sorted(store.keys()) == ["../../etc/passwd", "Zoë & co"]
        assert all(p.parent == tmp_path for p in tmp_path.iterdir())

    def test_no_temp_files_left_behind(self, tmp_path):
        store = FileSnapshotStore(tmp_path)
        store.put("alice", "one")
        store.put("alice", "two")
        assert [p.suffix for p in tmp_path.iterdir()] == [".json"]

    def test_get_tolerates_a_concurrent_delete(self, tmp_path, monkeypatch):
        store = FileSnapshotStore(tmp_path)
        store.put("alice", "state")

        def open_after_delete(path, *args, **kwargs):
            store.delete("alice")
            return builtins.open(path, *args, **kwargs)

        monkeypatch.setattr(snapshot_store, "open", open_after_delete, raising=False)
        assert store.get("alice") is None

    def test_keys_skips_snapshots_deleted_while_listing(self, tmp_path, monkeypatch):
        store = FileSnapshotStore(tmp_path)
        store.put("alice", "a")
        store.put("bob", "b")

        def open_after_delete(path, *args, **kwargs):
            store.delete("alice")
            return builtins.open(path, *args, **kwargs)

        monkeypatch.setattr(snapshot_store, "open", open_after_delete, raising=False)
        assert store.keys() == ["bob"]
