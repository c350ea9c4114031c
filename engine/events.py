"""
Outcome and derived-event records produced by the rules engine.

Events are collected while an action is applied and emitted as Qt signals
only once the action has been fully committed.
"""

from dataclasses import dataclass, field
from typing import Optional, Union

from engine.errors import RuleViolation
from models.circuit import Circuit
from models.match import EndReason, GamePhase
from models.player import PlayerColor


@dataclass(frozen=True)
class MatchResult:
    """Final outcome of a match. A winner of None is a draw."""
    winner: Optional[PlayerColor]
    reason: EndReason
    red_score: int
    blue_score: int

    @property
    def final_scores(self) -> dict[PlayerColor, int]:
        return {PlayerColor.RED: self.red_score, PlayerColor.BLUE: self.blue_score}

    @property
    def is_draw(self) -> bool:
        return self.winner is None

    @property
    def message(self) -> str:
        if self.winner is None:
            headline = "The match is a draw!"
        else:
            headline = f"{self.winner.display_name} player wins!"

        if self.reason == EndReason.ELIMINATION:
            if self.winner is None:
                return f"{headline} Both sides lost all their titans."
            loser = self.winner.opponent.value
            return f"{headline} All {loser} titans have been removed."
        if self.reason == EndReason.BOARD_SATURATION:
            return f"{headline} Inner circuit is full."
        return f"Time's up! {headline}"

    @property
    def score_line(self) -> str:
        return f"Final Score - Red: {self.red_score}, Blue: {self.blue_score}"


@dataclass(frozen=True)
class CircuitUnlocked:
    circuit: Circuit


@dataclass(frozen=True)
class ScoreChanged:
    player: PlayerColor
    score: int


@dataclass(frozen=True)
class PieceCaptured:
    node_id: str
    player: PlayerColor


@dataclass(frozen=True)
class PhaseChanged:
    phase: GamePhase


@dataclass(frozen=True)
class TurnChanged:
    player: PlayerColor
    timed_out: bool = False


@dataclass(frozen=True)
class SelectionChanged:
    node_id: Optional[str]


@dataclass(frozen=True)
class MatchEnded:
    result: MatchResult


GameEvent = Union[
    CircuitUnlocked, ScoreChanged, PieceCaptured, PhaseChanged,
    TurnChanged, SelectionChanged, MatchEnded,
]


@dataclass
class ActionOutcome:
    """Result of submitting one action or clock event to the engine."""
    accepted: bool
    message: str = ""
    error: Optional[RuleViolation] = None
    events: list[GameEvent] = field(default_factory=list)

    @classmethod
    def rejected(cls, error: RuleViolation) -> "ActionOutcome":
        return cls(accepted=False, message=error.reason, error=error)

    @property
    def reason(self) -> str:
        """Rejection reason, empty for accepted actions."""
        return self.error.reason if self.error is not None else ""

    def of_type(self, event_type: type) -> list:
        return [event for event in self.events if isinstance(event, event_type)]
