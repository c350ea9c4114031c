"""
Match State - Mutable per-match state owned by the rules engine.

The board is built once; match state is created fresh for every match by
reset_match(), which also wipes occupancy and edge control on the board.
"""

from dataclasses import dataclass, field
from typing import Optional

from engine.board import BoardGraph, NodeId
from models.circuit import Circuit, CIRCUIT_ORDER
from models.match import EndReason, GamePhase, MatchStatus
from models.player import PlayerColor


@dataclass
class PlayerState:
    """Counters for one side."""
    color: PlayerColor
    placed: int = 0     # titans put on the board during placement
    live: int = 0       # titans currently on the board
    score: int = 0      # sum of weights of controlled edges


def _new_players() -> dict[PlayerColor, PlayerState]:
    return {color: PlayerState(color) for color in PlayerColor}


@dataclass
class MatchState:
    """Phase, turn, selection, unlocked circuits and lifecycle flags."""
    phase: GamePhase = GamePhase.PLACEMENT
    active_player: PlayerColor = PlayerColor.RED
    players: dict[PlayerColor, PlayerState] = field(default_factory=_new_players)
    selected_node: Optional[NodeId] = None
    open_circuits: set[Circuit] = field(default_factory=lambda: {Circuit.OUTER})
    is_running: bool = False
    is_paused: bool = False
    is_over: bool = False
    winner: Optional[PlayerColor] = None
    end_reason: Optional[EndReason] = None

    @property
    def status(self) -> MatchStatus:
        if self.is_over:
            return MatchStatus.OVER
        if self.is_paused:
            return MatchStatus.PAUSED
        if self.is_running:
            return MatchStatus.RUNNING
        return MatchStatus.IDLE

    @property
    def active(self) -> PlayerState:
        return self.players[self.active_player]

    def player(self, color: PlayerColor) -> PlayerState:
        return self.players[color]

    def score(self, color: PlayerColor) -> int:
        return self.players[color].score

    def scores(self) -> dict[PlayerColor, int]:
        return {color: p.score for color, p in self.players.items()}

    def is_open(self, circuit: Circuit) -> bool:
        return circuit in self.open_circuits

    def ordered_circuits(self) -> list[Circuit]:
        return [c for c in CIRCUIT_ORDER if c in self.open_circuits]


def reset_match(board: BoardGraph) -> MatchState:
    """
    Clear the board and produce a fresh match state.

    This is the only operation allowed to move phase or unlocked circuits
    backward.
    """
    board.clear()
    return MatchState()
