"""
Session Manager - Directory and lifecycle manager for game sessions.

Responsibilities:
- At most one live GameSession per name (atomic create-if-absent)
- Route operations addressed by session name to the live session
- Restart crashed sessions from their snapshot (transient policy:
  normal and timeout exits are never restarted)
- Forget sessions that stop or time out

Thread-safe.
"""

from __future__ import annotations
import logging
import threading
import time
from collections import deque

from ..config import Settings
from ..engine_core.board import Board
from ..engine_core.errors import SessionNotFound
from ..engine_core.state import GuessResult, SessionState
from ..storage import MemorySnapshotStore, SnapshotStore
from .game import ExitReason, GameSession

logger = logging.getLogger(__name__)


class SessionManager:
    """
    Manages game sessions.

    Usage:
        manager = SessionManager(store=FileSnapshotStore("/var/lib/islands"))

        manager.start_session("alice")
        manager.add_player("alice", "bob")
        manager.position_island("alice", "player1", "dot", 5, 5)
    """

    def __init__(
        self,
        store: SnapshotStore | None = None,
        idle_timeout: float | None = None,
        max_restarts: int | None = None,
        max_restart_seconds: float | None = None,
        settings: Settings | None = None,
    ):
        settings = settings or Settings()
        self.store = store if store is not None else MemorySnapshotStore()
        self.idle_timeout = idle_timeout if idle_timeout is not None else settings.idle_timeout
        self.max_restarts = max_restarts if max_restarts is not None else settings.max_restarts
        self.max_restart_seconds = (
            max_restart_seconds if max_restart_seconds is not None else settings.max_restart_seconds
        )

        self._sessions: dict[str, GameSession] = {}
        self._restarts: dict[str, deque[float]] = {}
        self._lock = threading.RLock()

    @classmethod
    def from_settings(cls, settings: Settings) -> SessionManager:
        return cls(store=settings.make_store(), settings=settings)

    # =========================================================================
    # Directory
    # =========================================================================

    def start_session(self, name: str) -> GameSession:
        """
        Return the live session for name, starting it if needed.

        A new session restores the last snapshot for the name if one exists.
        Concurrent calls for the same name all get the same instance. A
        session that is timing out counts as gone: its replacement starts
        once the old snapshot has been discarded.
        """
        with self._lock:
            session = self._sessions.get(name)
            if session is not None and session.alive:
                return session
            return self._spawn(name)

    def get_session(self, name: str) -> GameSession | None:
        """Get the live session for name, if any."""
        with self._lock:
            session = self._sessions.get(name)
            if session is not None and session.alive:
                return session
            return None

    def stop_session(self, name: str) -> bool:
        """
        Shut a session down normally. Its snapshot is kept.

        Returns False if no session by that name was live.
        """
        with self._lock:
            session = self._sessions.pop(name, None)
            self._restarts.pop(name, None)
        if session is None:
            return False
        session.stop()
        return True

    def list_sessions(self) -> list[str]:
        """Names of live sessions."""
        with self._lock:
            return sorted(name for name, s in self._sessions.items() if s.alive)

    def shutdown(self):
        """Stop every live session."""
        with self._lock:
            sessions = list(self._sessions.values())
            self._sessions.clear()
            self._restarts.clear()
        for session in sessions:
            session.stop()

    def _require(self, name: str) -> GameSession:
        session = self.get_session(name)
        if session is None:
            raise SessionNotFound(name)
        return session

    # =========================================================================
    # Operations by session name
    # =========================================================================

    def add_player(self, name: str, player_name: str) -> None:
        self._require(name).add_player(player_name)

    def position_island(self, name: str, player: str, shape: str, row: int, col: int) -> None:
        self._require(name).position_island(player, shape, row, col)

    def set_islands(self, name: str, player: str) -> Board:
        return self._require(name).set_islands(player)

    def guess_coordinate(self, name: str, player: str, row: int, col: int) -> GuessResult:
        return self._require(name).guess_coordinate(player, row, col)

    def get_state(self, name: str) -> SessionState:
        return self._require(name).get_state()

    # =========================================================================
    # Lifecycle
    # =========================================================================

    def _spawn(self, name: str) -> GameSession:
        previous = self._sessions.get(name)
        if previous is not None:
            # Still winding down; it never needs our lock to get this far.
            previous.wait_released()

        session = GameSession(
            name,
            store=self.store,
            idle_timeout=self.idle_timeout,
            on_exit=self._on_exit,
        )
        self._sessions[name] = session
        try:
            session.start()
        except Exception:
            self._sessions.pop(name, None)
            raise
        return session

    def _on_exit(self, session: GameSession, reason: ExitReason):
        with self._lock:
            if self._sessions.get(session.name) is not session:
                return
            del self._sessions[session.name]

            if reason is not ExitReason.CRASH:
                self._restarts.pop(session.name, None)
                return

            if not self._allow_restart(session.name):
                logger.error(
                    "Session %s crashed more than %d times in %ss, giving up",
                    session.name, self.max_restarts, self.max_restart_seconds,
                )
                self._restarts.pop(session.name, None)
                return

            logger.warning("Restarting crashed session %s", session.name)
            try:
                self._spawn(session.name)
            except Exception:
                logger.exception("Restart of session %s failed", session.name)

    def _allow_restart(self, name: str) -> bool:
        now = time.monotonic()
        history = self._restarts.setdefault(name, deque())
        while history and now - history[0] > self.max_restart_seconds:
            history.popleft()
        if len(history) >= self.max_restarts:
            return False
        history.append(now)
        return True
