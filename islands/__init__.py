"""
Islands - Two-player island hunting game engine

Each game session tracks two players' hidden island layouts, enforces the
turn and phase protocol, and resolves guesses until one side's islands are
all forested. The engine provides:
- Pure domain model (coordinates, islands, boards, rules)
- One single-writer actor per live session
- Crash-recovery snapshots and idle-timeout teardown
- A small HTTP API and CLI
"""

__version__ = "0.1.0"
