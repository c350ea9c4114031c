"""
Titan Circuits Game Engine

Board graph, match state, rules and clock.
This module contains no GUI dependencies.
"""

from engine.board import BoardGraph, Edge, Node
from engine.errors import (
    AlreadyOver,
    ConstructionError,
    IllegalPhaseAction,
    InvalidAction,
    RuleViolation,
)
from engine.events import ActionOutcome, MatchResult
from engine.rules import RulesEngine
from engine.state import MatchState, PlayerState, reset_match
from engine.timer import CountdownTimer, TurnClock

__all__ = [
    "BoardGraph",
    "Edge",
    "Node",
    "AlreadyOver",
    "ConstructionError",
    "IllegalPhaseAction",
    "InvalidAction",
    "RuleViolation",
    "ActionOutcome",
    "MatchResult",
    "RulesEngine",
    "MatchState",
    "PlayerState",
    "reset_match",
    "CountdownTimer",
    "TurnClock",
]
