"""
Snapshot Store - Key-value persistence of live session snapshots.

The store:
- Is keyed by session name
- Holds one full snapshot per session (put replaces it whole)
- Is only used for crash recovery of live sessions

Snapshots are opaque JSON text to the store; see codec.py.
"""

from __future__ import annotations
import hashlib
import json
import os
import tempfile
import threading
from abc import ABC, abstractmethod
from pathlib import Path


class SnapshotStore(ABC):
    """
    Abstract snapshot store.

    Invariants:
    - get() after put() returns exactly what was put
    - readers never observe a partially written snapshot
    """

    @abstractmethod
    def put(self, name: str, snapshot: str) -> None:
        """Store snapshot for name, replacing any previous one."""

    @abstractmethod
    def get(self, name: str) -> str | None:
        """Return the snapshot for name, or None if absent."""

    @abstractmethod
    def delete(self, name: str) -> None:
        """Remove the snapshot for name. Deleting an absent name is a no-op."""

    @abstractmethod
    def keys(self) -> list[str]:
        """Names that currently have a snapshot."""


class MemorySnapshotStore(SnapshotStore):
    """In-process store. Snapshots survive actor restarts, not process restarts."""

    def __init__(self):
        self._snapshots: dict[str, str] = {}
        self._lock = threading.Lock()

    def put(self, name: str, snapshot: str) -> None:
        with self._lock:
            self._snapshots[name] = snapshot

    def get(self, name: str) -> str | None:
        with self._lock:
            return self._snapshots.get(name)

    def delete(self, name: str) -> None:
        with self._lock:
            self._snapshots.pop(name, None)

    def keys(self) -> list[str]:
        with self._lock:
            return sorted(self._snapshots)


class FileSnapshotStore(SnapshotStore):
    """
    File-based store, one JSON file per session.

    Usage:
        store = FileSnapshotStore("~/.islands/snapshots")
        store.put("alice", snapshot)
        snapshot = store.get("alice")

    File names are a hash of the session name, so any name is safe to use;
    the name itself is kept inside the file. Writes go to a temp file which
    is then renamed over the target.
    """

    def __init__(self, snapshot_dir: str | Path | None = None):
        if snapshot_dir is None:
            snapshot_dir = Path.home() / ".islands" / "snapshots"
        self.snapshot_dir = Path(snapshot_dir).expanduser()
        self.snapshot_dir.mkdir(parents=True, exist_ok=True)

    def put(self, name: str, snapshot: str) -> None:
        path = self._get_path(name)
        payload = json.dumps({"name": name, "snapshot": snapshot})
        fd, tmp_path = tempfile.mkstemp(dir=self.snapshot_dir, prefix=".", suffix=".tmp")
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                f.write(payload)
                f.flush()
                os.fsync(f.fileno())
            os.replace(tmp_path, path)
        except BaseException:
            Path(tmp_path).unlink(missing_ok=True)
            raise

    def get(self, name: str) -> str | None:
        # A concurrent delete may remove the file at any point.
        try:
            with open(self._get_path(name), encoding="utf-8") as f:
                return json.load(f)["snapshot"]
        except FileNotFoundError:
            return None

    def delete(self, name: str) -> None:
        self._get_path(name).unlink(missing_ok=True)

    def keys(self) -> list[str]:
        names = []
        for path in self.snapshot_dir.glob("*.json"):
            try:
                with open(path, encoding="utf-8") as f:
                    names.append(json.load(f)["name"])
            except FileNotFoundError:
                continue
        return sorted(names)

    def _get_path(self, name: str) -> Path:
        key = hashlib.sha256(name.encode("utf-8")).hexdigest()[:32]
        return self.snapshot_dir / f"{key}.json"
