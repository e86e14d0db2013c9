"""
Configuration - Environment-driven settings.

    ISLANDS_IDLE_TIMEOUT         Idle seconds before a session is torn down (default 24h)
    ISLANDS_SNAPSHOT_DIR         Directory for file snapshots (default: in-memory store)
    ISLANDS_MAX_RESTARTS         Crash restarts allowed per window (default 3)
    ISLANDS_MAX_RESTART_SECONDS  Restart window in seconds (default 5)
    ISLANDS_LOG_LEVEL            Log level for the CLI (default INFO)
    ALLOWED_ORIGINS              Comma separated CORS origins (default *)
"""

from __future__ import annotations
import os
from dataclasses import dataclass, field

DEFAULT_IDLE_TIMEOUT = 24 * 60 * 60


@dataclass(frozen=True)
class Settings:
    idle_timeout: float = DEFAULT_IDLE_TIMEOUT
    snapshot_dir: str | None = None
    max_restarts: int = 3
    max_restart_seconds: float = 5.0
    log_level: str = "INFO"
    allowed_origins: list[str] = field(default_factory=lambda: ["*"])

    @classmethod
    def from_env(cls) -> Settings:
        return cls(
            idle_timeout=float(os.getenv("ISLANDS_IDLE_TIMEOUT", DEFAULT_IDLE_TIMEOUT)),
            snapshot_dir=os.getenv("ISLANDS_SNAPSHOT_DIR") or None,
            max_restarts=int(os.getenv("ISLANDS_MAX_RESTARTS", "3")),
            max_restart_seconds=float(os.getenv("ISLANDS_MAX_RESTART_SECONDS", "5")),
            log_level=os.getenv("ISLANDS_LOG_LEVEL", "INFO").upper(),
            allowed_origins=os.getenv("ALLOWED_ORIGINS", "*").split(","),
        )

    def make_store(self):
        """Build the snapshot store these settings describe."""
        from .storage import FileSnapshotStore, MemorySnapshotStore

        if self.snapshot_dir:
            return FileSnapshotStore(self.snapshot_dir)
        return MemorySnapshotStore()
