"""
Storage Module - Crash-recovery snapshots of live sessions.

The only persistence in the system: one snapshot per live session,
replaced after every successful operation and deleted on idle timeout.
"""

from .snapshot_store import SnapshotStore, MemorySnapshotStore, FileSnapshotStore
from .codec import encode_snapshot, decode_snapshot

__all__ = [
    "SnapshotStore",
    "MemorySnapshotStore",
    "FileSnapshotStore",
    "encode_snapshot",
    "decode_snapshot",
]
