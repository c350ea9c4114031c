"""
Unit tests for edge control scoring.
"""

from engine.board import BoardGraph
from engine.scoring import (
    ScoreDelta,
    controlled_weight,
    edge_controller,
    recompute_edge_control,
    release_incident_edges,
)
from engine.state import MatchState
from models.player import PlayerColor

RED = PlayerColor.RED
BLUE = PlayerColor.BLUE


class TestEdgeControl:
    """Tests for recompute_edge_control and edge_controller."""

    def setup_method(self):
        """Fresh board and state for each test."""
        self.board = BoardGraph()
        self.state = MatchState()

    def occupy(self, color, *node_ids):
        for node_id in node_ids:
            self.board.node(node_id).occupant = color

    def test_single_titan_controls_nothing(self):
        """One endpoint is not enough."""
        self.occupy(RED, "outer-0")

        assert recompute_edge_control(self.board, self.state) == []
        assert self.state.score(RED) == 0

    def test_adjacent_pair_controls_edge(self):
        """Two red titans on outer-0 and outer-1 control the weight-1 edge."""
        self.occupy(RED, "outer-0", "outer-1")

        deltas = recompute_edge_control(self.board, self.state)

        assert deltas == [ScoreDelta(RED, "outer-0-outer-1", 1)]
        assert self.board.edge("outer-0-outer-1").controller is RED
        assert self.state.score(RED) == 1

    def test_mixed_endpoints_uncontrolled(self):
        """An edge between opposing titans has no controller."""
        self.occupy(RED, "outer-2")
        self.occupy(BLUE, "outer-3")

        recompute_edge_control(self.board, self.state)

        assert self.board.edge("outer-2-outer-3").controller is None
        assert self.state.scores() == {RED: 0, BLUE: 0}

    def test_spoke_counts(self):
        """Spokes are scored like ring edges."""
        self.occupy(BLUE, "middle-5", "inner-5")

        recompute_edge_control(self.board, self.state)

        assert self.state.score(BLUE) == 8

    def test_recompute_is_idempotent(self):
        """A second pass without occupancy changes yields nothing."""
        self.occupy(RED, "middle-0", "middle-1", "middle-2")
        recompute_edge_control(self.board, self.state)
        score = self.state.score(RED)

        assert recompute_edge_control(self.board, self.state) == []
        assert self.state.score(RED) == score == 10

    def test_losing_control_subtracts(self):
        """Vacating an endpoint takes the weight back."""
        self.occupy(RED, "outer-1", "outer-2")
        recompute_edge_control(self.board, self.state)
        assert self.state.score(RED) == 2

        self.board.node("outer-2").occupant = None
        deltas = recompute_edge_control(self.board, self.state)

        assert deltas == [ScoreDelta(RED, "outer-1-outer-2", -2)]
        assert self.board.edge("outer-1-outer-2").controller is None
        assert self.state.score(RED) == 0

    def test_controller_can_flip(self):
        """An edge taken over by the other side moves its weight across."""
        self.occupy(RED, "inner-0", "inner-1")
        recompute_edge_control(self.board, self.state)

        self.occupy(BLUE, "inner-0", "inner-1")
        recompute_edge_control(self.board, self.state)

        assert self.board.edge("inner-0-inner-1").controller is BLUE
        assert self.state.scores() == {RED: 0, BLUE: 8}

    def test_edge_controller_helper(self):
        """edge_controller reads occupancy, not the stored controller."""
        edge = self.board.edge("outer-2-outer-3")
        assert edge_controller(self.board, edge) is None

        self.occupy(BLUE, "outer-2", "outer-3")

        assert edge_controller(self.board, edge) is BLUE
        assert edge.controller is None


class TestReleaseAndWeights:
    """Tests for release_incident_edges and controlled_weight."""

    def setup_method(self):
        """Board with a small red chain scored."""
        self.board = BoardGraph()
        self.state = MatchState()
        for node_id in ("outer-0", "outer-1", "middle-0"):
            self.board.node(node_id).occupant = RED
        recompute_edge_control(self.board, self.state)

    def test_initial_score(self):
        """outer-0-outer-1 (1) plus the outer-0 spoke (2)."""
        assert self.state.score(RED) == 3
        assert controlled_weight(self.board, RED) == 3

    def test_release_drops_all_incident_edges(self):
        """Releasing outer-0 gives up both edges touching it."""
        deltas = release_incident_edges(self.board, self.state, "outer-0", RED)

        assert {d.edge_id for d in deltas} == {"outer-0-outer-1", "outer-0-middle-0"}
        assert self.state.score(RED) == 0
        assert self.board.edge("outer-0-outer-1").controller is None

    def test_release_leaves_other_edges(self):
        """Edges not touching the released node are untouched."""
        self.board.node("middle-1").occupant = RED
        recompute_edge_control(self.board, self.state)

        release_incident_edges(self.board, self.state, "outer-1", RED)

        assert self.board.edge("middle-0-middle-1").controller is RED
        assert self.state.score(RED) == 2 + 6

    def test_release_ignores_opponent_edges(self):
        """Only the releasing player's edges are dropped."""
        deltas = release_incident_edges(self.board, self.state, "outer-0", BLUE)

        assert deltas == []
        assert self.state.score(RED) == 3

    def test_controlled_weight_matches_score(self):
        """The stored score always equals the weight derived from occupancy."""
        self.board.node("outer-5").occupant = BLUE
        self.board.node("outer-4").occupant = BLUE
        recompute_edge_control(self.board, self.state)

        for color in PlayerColor:
            assert self.state.score(color) == controlled_weight(self.board, color)
