"""
Edge Control Scoring - Keeps edge controllers and player scores in sync.

Control is recomputed over the whole board after every mutation. At
eighteen nodes and twenty-four edges a full pass is O(nodes + edges) per
action; it is kept non-incremental so a controller can never go stale.
"""

from dataclasses import dataclass
from typing import Optional

from engine.board import BoardGraph, Edge, NodeId
from engine.state import MatchState
from models.player import PlayerColor


@dataclass(frozen=True)
class ScoreDelta:
    """One controller change on one edge."""
    player: PlayerColor
    edge_id: str
    delta: int


def edge_controller(board: BoardGraph, edge: Edge) -> Optional[PlayerColor]:
    """The common occupant of both endpoints, or None."""
    first = board.node(edge.source).occupant
    if first is not None and first is board.node(edge.target).occupant:
        return first
    return None


def recompute_edge_control(board: BoardGraph, state: MatchState) -> list[ScoreDelta]:
    """
    Bring every edge controller in line with current occupancy.

    Newly controlled edges add their weight to the controller's score;
    edges that lose control subtract it from the previous controller.
    Running this twice without an occupancy change yields no deltas.

    Args:
        board: Board whose edge controllers are updated in place
        state: Match state whose player scores are adjusted

    Returns:
        One ScoreDelta per controller gained or lost, in edge order
    """
    deltas: list[ScoreDelta] = []
    for edge in board.edges:
        controller = edge_controller(board, edge)
        if controller is edge.controller:
            continue

        if edge.controller is not None:
            state.player(edge.controller).score -= edge.weight
            deltas.append(ScoreDelta(edge.controller, edge.id, -edge.weight))
        if controller is not None:
            state.player(controller).score += edge.weight
            deltas.append(ScoreDelta(controller, edge.id, edge.weight))
        edge.controller = controller
    return deltas


def release_incident_edges(board: BoardGraph, state: MatchState,
                           node_id: NodeId, player: PlayerColor) -> list[ScoreDelta]:
    """Drop *player*'s control of every edge touching *node_id* (before a move)."""
    deltas: list[ScoreDelta] = []
    for edge in board.incident_edges(node_id):
        if edge.controller is player:
            state.player(player).score -= edge.weight
            edge.controller = None
            deltas.append(ScoreDelta(player, edge.id, -edge.weight))
    return deltas


def controlled_weight(board: BoardGraph, player: PlayerColor) -> int:
    """Score *player* should have, derived from occupancy alone."""
    return sum(edge.weight for edge in board.edges
               if edge_controller(board, edge) is player)
