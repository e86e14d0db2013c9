"""
Session State - The complete state of one game between two players.

Design principles:
- Immutable: every operation returns a new SessionState
- All-or-nothing: an operation either returns a complete new state or
  raises, leaving the caller's state untouched
- Serializable: to_dict()/from_dict() round-trip exactly, for snapshots

Each public operation first asks the Rules whether the action is legal,
then runs the domain checks (Coordinate, Island, Board, GuessLog), and only
then assembles the new state.
"""

from __future__ import annotations
from dataclasses import dataclass, field, replace

from .action import Action
from .board import Board, WinStatus
from .coordinate import Coordinate
from .errors import InvalidCoordinate, NotAllIslandsPositioned, OutOfBounds
from .guesses import GuessLog
from .island import Island, Outcome, ShapeKind
from .rules import Player, Rules

SNAPSHOT_VERSION = 1


@dataclass(frozen=True)
class PlayerRecord:
    """One player's side of the game."""
    name: str | None = None
    board: Board = field(default_factory=Board)
    guesses: GuessLog = field(default_factory=GuessLog)

    def to_dict(self) -> dict:
        return {
            "name": self.name,
            "board": self.board.to_dict(),
            "guesses": self.guesses.to_dict(),
        }

    @classmethod
    def from_dict(cls, data: dict) -> PlayerRecord:
        return cls(
            name=data["name"],
            board=Board.from_dict(data["board"]),
            guesses=GuessLog.from_dict(data["guesses"]),
        )


@dataclass(frozen=True)
class GuessResult:
    """What a guessing player learns from one guess."""
    outcome: Outcome
    forested: ShapeKind | None
    win: WinStatus


@dataclass(frozen=True)
class SessionState:
    """
    Aggregate state of a session: both players plus the rules state.

    The session is addressed by player1's name.
    """
    player1: PlayerRecord
    player2: PlayerRecord
    rules: Rules = field(default_factory=Rules)

    @classmethod
    def new(cls, name: str) -> SessionState:
        """Fresh state for a session started by player1 `name`."""
        return cls(player1=PlayerRecord(name=name), player2=PlayerRecord())

    @property
    def name(self) -> str:
        return self.player1.name

    def player(self, player: Player) -> PlayerRecord:
        return self.player1 if player is Player.PLAYER1 else self.player2

    def with_player(self, player: Player, record: PlayerRecord) -> SessionState:
        """Return new state with player's record replaced."""
        return replace(self, **{player.value: record})

    # =========================================================================
    # Operations
    # =========================================================================

    def add_player(self, name: str) -> SessionState:
        """Join `name` as player2."""
        rules = self.rules.check(Action.add_player())
        return replace(self, player2=replace(self.player2, name=name), rules=rules)

    def position_island(
        self,
        player: Player | str,
        shape: ShapeKind | str,
        row: int,
        col: int,
    ) -> SessionState:
        """
        Place (or move) one of player's islands with its upper-left at (row, col).

        Raises InvalidPlayerName, InvalidActionForState, IslandsAlreadySet,
        InvalidShape, OutOfBounds or OverlappingIsland.
        """
        rules = self.rules.check(Action.position_island(player))
        player = Player.parse(player)
        kind = ShapeKind.parse(shape)
        try:
            anchor = Coordinate(row, col)
        except InvalidCoordinate as e:
            raise OutOfBounds(e.message) from None
        island = Island.new(kind, anchor)

        record = self.player(player)
        board = record.board.position_island(island)
        return replace(self.with_player(player, replace(record, board=board)), rules=rules)

    def set_islands(self, player: Player | str) -> tuple[Board, SessionState]:
        """
        Lock in player's islands.

        Returns (player's finished board, new state).
        Raises NotAllIslandsPositioned if any shape is still missing.
        """
        rules = self.rules.check(Action.set_islands(player))
        board = self.player(Player.parse(player)).board
        if not board.all_positioned():
            raise NotAllIslandsPositioned(
                f"Missing islands: {', '.join(s.value for s in ShapeKind if board.get(s) is None)}"
            )
        return board, replace(self, rules=rules)

    def guess_coordinate(self, player: Player | str, row: int, col: int) -> tuple[GuessResult, SessionState]:
        """
        Guess (row, col) on the opponent's board.

        Returns (GuessResult, new state). The turn passes to the opponent;
        a winning guess ends the game.
        """
        rules = self.rules.check(Action.guess_coordinate(player))
        player = Player.parse(player)
        coordinate = Coordinate(row, col)

        opponent = player.opponent
        opponent_record = self.player(opponent)
        resolved = opponent_record.board.guess(coordinate)
        rules = rules.check(Action.win_check(resolved.win is WinStatus.WIN))

        record = self.player(player)
        state = self.with_player(opponent, replace(opponent_record, board=resolved.board))
        state = state.with_player(player, replace(record, guesses=record.guesses.add(resolved.outcome, coordinate)))
        result = GuessResult(outcome=resolved.outcome, forested=resolved.forested, win=resolved.win)
        return result, replace(state, rules=rules)

    # =========================================================================
    # Snapshots
    # =========================================================================

    def to_dict(self) -> dict:
        return {
            "version": SNAPSHOT_VERSION,
            "player1": self.player1.to_dict(),
            "player2": self.player2.to_dict(),
            "rules": self.rules.to_dict(),
        }

    @classmethod
    def from_dict(cls, data: dict) -> SessionState:
        if data.get("version") != SNAPSHOT_VERSION:
            raise ValueError(f"Unsupported snapshot version: {data.get('version')!r}")
        return cls(
            player1=PlayerRecord.from_dict(data["player1"]),
            player2=PlayerRecord.from_dict(data["player2"]),
            rules=Rules.from_dict(data["rules"]),
        )
