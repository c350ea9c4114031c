"""
Titan Circuits Domain Models

Enums for players, circuits and match lifecycle, plus the pydantic
snapshot schemas handed to renderers.
"""

from models.player import PlayerColor
from models.circuit import Circuit, CIRCUIT_ORDER
from models.match import GamePhase, MatchStatus, EndReason
from models.schemas import NodeSnapshot, EdgeSnapshot, PlayerSnapshot, MatchSnapshot

__all__ = [
    "PlayerColor",
    "Circuit",
    "CIRCUIT_ORDER",
    "GamePhase",
    "MatchStatus",
    "EndReason",
    "NodeSnapshot",
    "EdgeSnapshot",
    "PlayerSnapshot",
    "MatchSnapshot",
]
