"""
Pytest fixtures for Islands tests.
"""

import time

import pytest

from ..engine_core import SessionState
from ..session import SessionManager
from ..storage import MemorySnapshotStore

# One legal, non-overlapping layout of all five shapes: (shape, row, col)
LAYOUT = [
    ("square", 1, 1),
    ("atoll", 1, 4),
    ("dot", 5, 5),
    ("l_shape", 6, 1),
    ("s_shape", 9, 7),
]

# Every cell the layout covers
LAYOUT_CELLS = [
    (1, 1), (1, 2), (2, 1), (2, 2),
    (1, 4), (1, 5), (2, 5), (3, 4), (3, 5),
    (5, 5),
    (6, 1), (7, 1), (8, 1), (8, 2),
    (9, 8), (9, 9), (10, 7), (10, 8),
]

# Cells the layout leaves empty
LAYOUT_MISSES = [(4, c) for c in range(1, 11)] + [(5, c) for c in range(1, 11) if c != 5]


def wait_for(condition, timeout: float = 3.0, interval: float = 0.02) -> bool:
    """Poll condition until it is true or timeout expires."""
    deadline = time.monotonic() + timeout
    while time.monotonic() < deadline:
        if condition():
            return True
        time.sleep(interval)
    return condition()


def place_all(target, player: str):
    """Position every island of LAYOUT for player on a session or state."""
    for shape, row, col in LAYOUT:
        result = target.position_island(player, shape, row, col)
        if isinstance(result, SessionState):
            target = result
    return target


@pytest.fixture
def store() -> MemorySnapshotStore:
    return MemorySnapshotStore()


@pytest.fixture
def manager(store):
    """Manager with an idle timeout long enough to never fire during a test."""
    manager = SessionManager(store=store, idle_timeout=60)
    yield manager
    manager.shutdown()


@pytest.fixture
def placing_state() -> SessionState:
    """Both players joined, no islands yet."""
    return SessionState.new("alice").add_player("bob")


@pytest.fixture
def playing_state(placing_state) -> SessionState:
    """Both players have set the full layout; player1 to move."""
    state = place_all(placing_state, "player1")
    state = place_all(state, "player2")
    _, state = state.set_islands("player1")
    _, state = state.set_islands("player2")
    return state
