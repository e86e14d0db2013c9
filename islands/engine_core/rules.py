"""
Rules - The phase/turn state machine for a game session.

The state is a composite: a global phase plus one islands flag per player.

    INITIALIZED -> PLAYERS_SET -> PLAYER1_TURN <-> PLAYER2_TURN -> GAME_OVER

While in PLAYERS_SET each player positions islands independently and then
sets them; the game starts once both players have set their islands.

check() is total over (rules, action): it returns the next Rules or raises
a specific GameError. It never mutates its input.
"""

from __future__ import annotations
from dataclasses import dataclass, replace
from enum import Enum

from .action import Action, ActionType
from .errors import (
    InvalidActionForState,
    InvalidPlayerName,
    IslandsAlreadySet,
    NotYourTurn,
)


class GamePhase(str, Enum):
    INITIALIZED = "initialized"
    PLAYERS_SET = "players_set"
    PLAYER1_TURN = "player1_turn"
    PLAYER2_TURN = "player2_turn"
    GAME_OVER = "game_over"


class IslandsState(str, Enum):
    NOT_SET = "islands_not_set"
    SET = "islands_set"


class Player(str, Enum):
    """Player identifiers within a session."""
    PLAYER1 = "player1"
    PLAYER2 = "player2"

    @classmethod
    def parse(cls, value: Player | str) -> Player:
        """Resolve a player identifier. Raises InvalidPlayerName."""
        if isinstance(value, Player):
            return value
        try:
            return cls(value)
        except ValueError:
            raise InvalidPlayerName(f"Unknown player: {value!r}") from None

    @property
    def opponent(self) -> Player:
        return Player.PLAYER2 if self is Player.PLAYER1 else Player.PLAYER1


TURN_PHASES = {
    Player.PLAYER1: GamePhase.PLAYER1_TURN,
    Player.PLAYER2: GamePhase.PLAYER2_TURN,
}


@dataclass(frozen=True)
class Rules:
    """Composite rules state."""
    phase: GamePhase = GamePhase.INITIALIZED
    player1: IslandsState = IslandsState.NOT_SET
    player2: IslandsState = IslandsState.NOT_SET

    def islands_state(self, player: Player) -> IslandsState:
        return self.player1 if player is Player.PLAYER1 else self.player2

    def check(self, action: Action) -> Rules:
        """
        Apply action to this state.

        Returns the next Rules if the action is legal.

        Raises:
            InvalidPlayerName: the action names an unknown player.
            InvalidActionForState: the action is not allowed in this phase.
            IslandsAlreadySet: positioning after the player set their islands.
            NotYourTurn: guessing out of turn.
        """
        player = None
        if action.action_type in _PLAYER_ACTIONS:
            player = Player.parse(action.player)

        handler = _HANDLERS[action.action_type]
        return handler(self, action, player)

    # =========================================================================
    # Handlers
    # =========================================================================

    def _add_player(self, action: Action, player: Player | None) -> Rules:
        self._require(GamePhase.INITIALIZED, action)
        return replace(self, phase=GamePhase.PLAYERS_SET)

    def _position_island(self, action: Action, player: Player) -> Rules:
        self._require(GamePhase.PLAYERS_SET, action)
        if self.islands_state(player) is IslandsState.SET:
            raise IslandsAlreadySet(f"{player.value} has already set their islands")
        return self

    def _set_islands(self, action: Action, player: Player) -> Rules:
        self._require(GamePhase.PLAYERS_SET, action)
        rules = replace(self, **{player.value: IslandsState.SET})
        if rules.player1 is IslandsState.SET and rules.player2 is IslandsState.SET:
            return replace(rules, phase=GamePhase.PLAYER1_TURN)
        return rules

    def _guess_coordinate(self, action: Action, player: Player) -> Rules:
        if self.phase not in (GamePhase.PLAYER1_TURN, GamePhase.PLAYER2_TURN):
            raise self._invalid(action)
        if self.phase is not TURN_PHASES[player]:
            raise NotYourTurn(f"It is not {player.value}'s turn")
        return replace(self, phase=TURN_PHASES[player.opponent])

    def _win_check(self, action: Action, player: Player | None) -> Rules:
        if self.phase not in (GamePhase.PLAYER1_TURN, GamePhase.PLAYER2_TURN):
            raise self._invalid(action)
        if action.win:
            return replace(self, phase=GamePhase.GAME_OVER)
        return self

    def _require(self, phase: GamePhase, action: Action):
        if self.phase is not phase:
            raise self._invalid(action)

    def _invalid(self, action: Action) -> InvalidActionForState:
        return InvalidActionForState(
            f"{action.action_type.value} is not allowed in phase {self.phase.value}"
        )

    def to_dict(self) -> dict:
        return {
            "phase": self.phase.value,
            "player1": self.player1.value,
            "player2": self.player2.value,
        }

    @classmethod
    def from_dict(cls, data: dict) -> Rules:
        return cls(
            phase=GamePhase(data["phase"]),
            player1=IslandsState(data["player1"]),
            player2=IslandsState(data["player2"]),
        )


_PLAYER_ACTIONS = {
    ActionType.POSITION_ISLAND,
    ActionType.SET_ISLANDS,
    ActionType.GUESS_COORDINATE,
}

_HANDLERS = {
    ActionType.ADD_PLAYER: Rules._add_player,
    ActionType.POSITION_ISLAND: Rules._position_island,
    ActionType.SET_ISLANDS: Rules._set_islands,
    ActionType.GUESS_COORDINATE: Rules._guess_coordinate,
    ActionType.WIN_CHECK: Rules._win_check,
}
