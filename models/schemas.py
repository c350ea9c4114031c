"""
Pydantic schemas for read-only match snapshots.

Snapshots are what renderers and other collaborators receive after every
accepted action; they never hold references back into the engine.
"""

from typing import Optional

from pydantic import BaseModel, Field, field_validator

from models.circuit import Circuit, CIRCUIT_ORDER
from models.match import EndReason, GamePhase, MatchStatus
from models.player import PlayerColor


# ============ Board Schemas ============

class NodeSnapshot(BaseModel):
    """Schema for a board node."""
    id: str
    circuit: Circuit
    index: int = Field(..., ge=0)
    x: float
    y: float
    occupant: Optional[PlayerColor] = None
    neighbors: list[str] = Field(default_factory=list)

    class Config:
        from_attributes = True


class EdgeSnapshot(BaseModel):
    """Schema for a weighted board edge."""
    id: str
    source: str
    target: str
    weight: int = Field(..., gt=0)
    controller: Optional[PlayerColor] = None

    class Config:
        from_attributes = True


# ============ Player Schemas ============

class PlayerSnapshot(BaseModel):
    """Schema for one side's counters."""
    color: PlayerColor
    placed: int = Field(..., ge=0)
    live: int = Field(..., ge=0)
    score: int = Field(..., ge=0)

    class Config:
        from_attributes = True


# ============ Match Schemas ============

class MatchSnapshot(BaseModel):
    """Full read-only view of a match: state flags plus board occupancy."""
    phase: GamePhase
    status: MatchStatus
    active_player: PlayerColor
    selected_node: Optional[str] = None
    open_circuits: list[Circuit]
    winner: Optional[PlayerColor] = None
    end_reason: Optional[EndReason] = None
    players: list[PlayerSnapshot]
    nodes: list[NodeSnapshot]
    edges: list[EdgeSnapshot]

    @field_validator("open_circuits")
    @classmethod
    def circuits_in_ring_order(cls, v: list[Circuit]) -> list[Circuit]:
        if Circuit.OUTER not in v:
            raise ValueError("The outer circuit is always open")
        return sorted(set(v), key=CIRCUIT_ORDER.index)

    def player(self, color: PlayerColor) -> PlayerSnapshot:
        return next(p for p in self.players if p.color == color)

    def node(self, node_id: str) -> NodeSnapshot:
        return next(n for n in self.nodes if n.id == node_id)

    def edge(self, edge_id: str) -> EdgeSnapshot:
        return next(e for e in self.edges if e.id == edge_id)
