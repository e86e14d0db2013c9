"""
Session Module - Live game sessions.

A session represents one game between two players:
- Started on first contact for player1's name
- Holds the current SessionState inside a single-writer actor
- Snapshotted after every successful operation for crash recovery
- Discarded, snapshot included, after a day without activity
"""

from .game import GameSession, ExitReason
from .manager import SessionManager

__all__ = [
    "GameSession",
    "ExitReason",
    "SessionManager",
]
