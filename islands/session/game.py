"""
Game Session - The actor that owns one session's state.

A GameSession is a worker thread with its own mailbox. Requests are
processed strictly one at a time in arrival order, so SessionState never
sees concurrent writers.

LIFECYCLE:
1. start() -> restore the last snapshot for the name, or create fresh state
2. Persist immediately, then serve requests
3. Every successful mutation is persisted BEFORE the caller gets a reply
4. No request for `idle_timeout` seconds -> delete snapshot, exit (TIMEOUT)
5. stop() -> exit normally, snapshot retained (NORMAL)
6. Unexpected exception in a handler -> exit, snapshot retained (CRASH);
   the manager may restart the session from the snapshot
"""

from __future__ import annotations
import logging
import queue
import threading
from concurrent.futures import Future
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Callable

from ..engine_core.board import Board
from ..engine_core.errors import GameError, PersistenceError, SessionNotFound
from ..engine_core.state import GuessResult, SessionState
from ..storage import SnapshotStore, decode_snapshot, encode_snapshot

logger = logging.getLogger(__name__)


class ExitReason(Enum):
    """Why a session's worker stopped."""
    NORMAL = "normal"
    TIMEOUT = "timeout"
    CRASH = "crash"


@dataclass
class _Request:
    operation: str
    args: tuple
    future: Future = field(default_factory=Future)


_STOP = object()


class GameSession:
    """
    A single live game, addressed by player1's name.

    Usage:
        session = GameSession("alice", store)
        session.start()
        session.add_player("bob")
        session.position_island("player1", "dot", 5, 5)
    """

    def __init__(
        self,
        name: str,
        store: SnapshotStore,
        idle_timeout: float,
        on_exit: Callable[[GameSession, ExitReason], None] | None = None,
    ):
        self.name = name
        self.store = store
        self.idle_timeout = idle_timeout
        self.on_exit = on_exit

        self._state: SessionState | None = None
        self._mailbox: queue.Queue = queue.Queue()
        self._lock = threading.Lock()
        self._alive = False
        self._ready: Future = Future()
        self._released = threading.Event()
        self._thread = threading.Thread(target=self._run, name=f"game-{name}", daemon=True)
        self.exit_reason: ExitReason | None = None

    # =========================================================================
    # Lifecycle
    # =========================================================================

    @property
    def alive(self) -> bool:
        return self._alive

    def start(self) -> GameSession:
        """
        Start the worker and wait for it to load its state.

        Raises PersistenceError if the initial snapshot cannot be read or written.
        """
        with self._lock:
            self._alive = True
        self._thread.start()
        self._ready.result()
        return self

    def stop(self, timeout: float | None = None):
        """Shut down normally after pending requests. The snapshot is kept."""
        with self._lock:
            if self._alive:
                self._mailbox.put(_STOP)
        self.join(timeout)

    def join(self, timeout: float | None = None):
        if self._thread is not threading.current_thread():
            self._thread.join(timeout)

    def wait_released(self, timeout: float | None = None) -> bool:
        """
        Block until this session has let go of its name.

        After this returns True the store holds whatever the session
        leaves behind (nothing, after an idle timeout), so a replacement
        session may read it.
        """
        return self._released.wait(timeout)

    # =========================================================================
    # Public operations
    # =========================================================================

    def add_player(self, name: str) -> None:
        """Join `name` as player2."""
        self._call("add_player", name)

    def position_island(self, player: str, shape: str, row: int, col: int) -> None:
        self._call("position_island", player, shape, row, col)

    def set_islands(self, player: str) -> Board:
        """Lock in player's islands. Returns their finished board."""
        return self._call("set_islands", player)

    def guess_coordinate(self, player: str, row: int, col: int) -> GuessResult:
        return self._call("guess_coordinate", player, row, col)

    def get_state(self) -> SessionState:
        """Current state. Read-only; counts as activity for the idle timer."""
        return self._call("get_state")

    def _call(self, operation: str, *args) -> Any:
        request = _Request(operation, args)
        with self._lock:
            if not self._alive:
                raise SessionNotFound(self.name)
            self._mailbox.put(request)
        return request.future.result()

    # =========================================================================
    # Worker
    # =========================================================================

    def _run(self):
        try:
            self._state = self._initialize()
        except Exception as e:
            self._shutdown()
            self._released.set()
            self._ready.set_exception(e)
            return
        self._ready.set_result(None)

        while True:
            try:
                request = self._mailbox.get(timeout=self.idle_timeout)
            except queue.Empty:
                # Stop taking requests before the snapshot is discarded.
                # One that slipped in just now is still served.
                with self._lock:
                    if not self._mailbox.empty():
                        continue
                    self._alive = False
                self._terminate(ExitReason.TIMEOUT)
                return

            if request is _STOP:
                self._terminate(ExitReason.NORMAL)
                return

            try:
                reply = self._handle(request)
            except GameError as e:
                request.future.set_exception(e)
            except Exception as e:
                logger.exception("Session %s crashed handling %s", self.name, request.operation)
                self._terminate(ExitReason.CRASH)
                request.future.set_exception(e)
                return
            else:
                request.future.set_result(reply)

    def _initialize(self) -> SessionState:
        snapshot = self._read_snapshot()
        if snapshot is None:
            state = SessionState.new(self.name)
            logger.info("Session %s created", self.name)
        else:
            try:
                state = decode_snapshot(snapshot)
            except (ValueError, KeyError, TypeError, AttributeError) as e:
                logger.error("Session %s: snapshot is unreadable: %s", self.name, e)
                raise PersistenceError(f"Could not load session {self.name!r}: {e}") from e
            logger.info("Session %s restored from snapshot (phase %s)", self.name, state.rules.phase.value)
        self._persist(state)
        return state

    def _handle(self, request: _Request) -> Any:
        state = self._state
        operation = request.operation

        if operation == "get_state":
            return state
        if operation == "add_player":
            new_state, reply = state.add_player(*request.args), None
        elif operation == "position_island":
            new_state, reply = state.position_island(*request.args), None
        elif operation == "set_islands":
            reply, new_state = state.set_islands(*request.args)
        elif operation == "guess_coordinate":
            reply, new_state = state.guess_coordinate(*request.args)
        else:
            raise ValueError(f"Unknown operation: {operation}")

        self._persist(new_state)
        self._state = new_state
        return reply

    def _persist(self, state: SessionState):
        try:
            self.store.put(self.name, encode_snapshot(state))
        except Exception as e:
            logger.error("Session %s: snapshot write failed: %s", self.name, e)
            raise PersistenceError(f"Could not save session {self.name!r}: {e}") from e

    def _read_snapshot(self) -> str | None:
        try:
            return self.store.get(self.name)
        except Exception as e:
            raise PersistenceError(f"Could not load session {self.name!r}: {e}") from e

    def _shutdown(self) -> list:
        """Mark the session dead and return requests that can no longer be served."""
        with self._lock:
            self._alive = False
            pending = []
            while True:
                try:
                    pending.append(self._mailbox.get_nowait())
                except queue.Empty:
                    break
        return [r for r in pending if r is not _STOP]

    def _terminate(self, reason: ExitReason):
        self.exit_reason = reason

        # Replacements wait on _released, so the snapshot is gone before
        # a session started under the same name can read it.
        if reason is ExitReason.TIMEOUT:
            logger.info("Session %s idle for %ss, discarding", self.name, self.idle_timeout)
            try:
                self.store.delete(self.name)
            except Exception:
                logger.exception("Session %s: snapshot delete failed", self.name)
        else:
            logger.info("Session %s stopped (%s)", self.name, reason.value)

        pending = self._shutdown()
        self._released.set()

        if self.on_exit is not None:
            self.on_exit(self, reason)

        for request in pending:
            request.future.set_exception(SessionNotFound(self.name))
