"""
Board Graph - Fixed three-ring topology.

Eighteen nodes on three hexagonal rings. Each ring is a weighted cycle;
outer and middle rings are joined at even indices, middle and inner rings
at odd indices. The topology is a networkx graph built once and never
changed; only node occupancy and edge controllers are mutated by the
rules engine.
"""

import logging
import math
from dataclasses import dataclass
from typing import Iterator, Optional

import networkx as nx

from config import BOARD_SETTINGS, BoardSettings
from engine.errors import ConstructionError
from models.circuit import Circuit, CIRCUIT_ORDER
from models.player import PlayerColor

logger = logging.getLogger(__name__)

NodeId = str
EdgeId = str


def make_node_id(circuit: Circuit, index: int) -> NodeId:
    """Node ids look like ``outer-0``."""
    return f"{circuit.value}-{index}"


def make_edge_id(source: NodeId, target: NodeId) -> EdgeId:
    """Edge ids look like ``outer-0-outer-1`` (source first)."""
    return f"{source}-{target}"


@dataclass
class Node:
    """A board intersection a titan can stand on."""
    id: NodeId
    circuit: Circuit
    index: int
    x: float
    y: float
    occupant: Optional[PlayerColor] = None

    @property
    def is_empty(self) -> bool:
        return self.occupant is None


@dataclass
class Edge:
    """A weighted connection. The controller is a cache of endpoint occupancy."""
    id: EdgeId
    source: NodeId
    target: NodeId
    weight: int
    controller: Optional[PlayerColor] = None

    @property
    def endpoints(self) -> tuple[NodeId, NodeId]:
        return self.source, self.target


class BoardGraph:
    """
    Immutable board topology with mutable occupancy.

    Each graph node carries ``circuit``, ``index``, ``x`` and ``y``
    attributes plus its ``record`` (a Node); each graph edge carries a
    ``weight`` and its ``record`` (an Edge).

    Usage:
        board = BoardGraph()
        board.neighbors("outer-0")                       # ('outer-1', 'outer-5', 'middle-0')
        board.edge_between("outer-1", "outer-0").weight  # 1
    """

    def __init__(self, settings: BoardSettings = BOARD_SETTINGS):
        """
        Build the board.

        Args:
            settings: Weight tables and geometry (default: BOARD_SETTINGS)

        Raises:
            ConstructionError: If a weight table is malformed
        """
        self._settings = settings
        self._graph = nx.Graph()
        self._edges_by_id: dict[EdgeId, Edge] = {}
        self._build()

    # ============ Construction ============

    def _build(self) -> None:
        s = self._settings
        radii = {
            Circuit.OUTER: s.outer_radius,
            Circuit.MIDDLE: s.middle_radius,
            Circuit.INNER: s.inner_radius,
        }
        for circuit in CIRCUIT_ORDER:
            self._add_ring_nodes(circuit, radii[circuit])

        self._add_ring_edges(Circuit.OUTER, s.outer_weights)
        self._add_ring_edges(Circuit.MIDDLE, s.middle_weights)
        self._add_ring_edges(Circuit.INNER, s.inner_weights)

        # Outer to middle on even indices, middle to inner on odd indices
        self._add_spokes(Circuit.OUTER, Circuit.MIDDLE, s.outer_middle_weights, start=0)
        self._add_spokes(Circuit.MIDDLE, Circuit.INNER, s.middle_inner_weights, start=1)

        logger.debug("Built board with %d nodes and %d edges",
                     self._graph.number_of_nodes(), self._graph.number_of_edges())

    def _add_ring_nodes(self, circuit: Circuit, radius: float) -> None:
        cx, cy = self._settings.center
        count = self._settings.nodes_per_ring
        nodes = []
        for i in range(count):
            angle = (2 * math.pi / count) * i
            nodes.append(Node(
                id=make_node_id(circuit, i),
                circuit=circuit,
                index=i,
                x=cx + radius * math.cos(angle),
                y=cy + radius * math.sin(angle),
            ))
        self._graph.add_nodes_from(
            (node.id, {"circuit": circuit, "index": node.index, "x": node.x, "y": node.y})
            for node in nodes
        )
        nx.set_node_attributes(self._graph, {node.id: node for node in nodes}, "record")

    def _add_ring_edges(self, circuit: Circuit, weights: tuple[int, ...]) -> None:
        count = self._settings.nodes_per_ring
        self._check_table(circuit.value, weights)
        for i in range(count):
            self._connect(
                make_node_id(circuit, i),
                make_node_id(circuit, (i + 1) % count),
                weights[i],
            )

    def _add_spokes(self, outer: Circuit, inner: Circuit,
                    weights: tuple[int, ...], start: int) -> None:
        self._check_table(f"{outer.value}-{inner.value}", weights)
        for i in range(start, self._settings.nodes_per_ring, 2):
            self._connect(make_node_id(outer, i), make_node_id(inner, i), weights[i])

    def _check_table(self, name: str, weights: tuple[int, ...]) -> None:
        if len(weights) != self._settings.nodes_per_ring:
            raise ConstructionError(
                f"Weight table '{name}' has {len(weights)} entries, "
                f"expected {self._settings.nodes_per_ring}"
            )

    def _connect(self, source: NodeId, target: NodeId, weight: int) -> None:
        for node_id in (source, target):
            if node_id not in self._graph:
                raise ConstructionError(f"Edge endpoint {node_id} does not exist")
        if source == target:
            raise ConstructionError(f"Self loop on {source}")
        if weight <= 0:
            raise ConstructionError(f"Edge {source}-{target} has non-positive weight {weight}")
        if self._graph.has_edge(source, target):
            raise ConstructionError(f"Duplicate edge between {source} and {target}")

        edge = Edge(id=make_edge_id(source, target), source=source,
                    target=target, weight=weight)
        self._graph.add_edge(source, target, weight=weight, record=edge)
        self._edges_by_id[edge.id] = edge

    # ============ Queries ============

    @property
    def settings(self) -> BoardSettings:
        return self._settings

    @property
    def graph(self) -> nx.Graph:
        """The underlying topology. Treat as read-only."""
        return self._graph

    @property
    def nodes(self) -> list[Node]:
        """All nodes, outer ring first."""
        return [record for _, record in self._graph.nodes(data="record")]

    @property
    def edges(self) -> list[Edge]:
        return [record for _, _, record in self._graph.edges(data="record")]

    def __iter__(self) -> Iterator[Node]:
        return iter(self.nodes)

    def __len__(self) -> int:
        return self._graph.number_of_nodes()

    def has_node(self, node_id: NodeId) -> bool:
        return self._graph.has_node(node_id)

    def node(self, node_id: NodeId) -> Node:
        """Look up a node. Raises KeyError for unknown ids."""
        return self._graph.nodes[node_id]["record"]

    def edge(self, edge_id: EdgeId) -> Edge:
        """Look up an edge by id. Raises KeyError for unknown ids."""
        return self._edges_by_id[edge_id]

    def edge_between(self, a: NodeId, b: NodeId) -> Optional[Edge]:
        """The edge joining two nodes, in either order, or None."""
        if not self._graph.has_edge(a, b):
            return None
        return self._graph.edges[a, b]["record"]

    def neighbors(self, node_id: NodeId) -> tuple[NodeId, ...]:
        """Adjacent node ids in the order their edges were built."""
        return tuple(self._graph.neighbors(node_id))

    def are_adjacent(self, a: NodeId, b: NodeId) -> bool:
        return self._graph.has_edge(a, b)

    def incident_edges(self, node_id: NodeId) -> list[Edge]:
        return [record for _, _, record in self._graph.edges(node_id, data="record")]

    def nodes_in(self, circuit: Circuit) -> list[Node]:
        return [data["record"] for _, data in self._graph.nodes(data=True)
                if data["circuit"] == circuit]

    def is_circuit_full(self, circuit: Circuit) -> bool:
        return all(not node.is_empty for node in self.nodes_in(circuit))

    def occupied_by(self, player: PlayerColor) -> list[Node]:
        return [node for node in self.nodes if node.occupant is player]

    # ============ Mutation ============

    def clear(self) -> None:
        """Empty every node and drop every edge controller. Topology is kept."""
        for node in self.nodes:
            node.occupant = None
        for edge in self.edges:
            edge.controller = None
