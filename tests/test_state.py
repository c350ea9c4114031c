"""
Unit tests for MatchState and reset_match.
"""

from engine.board import BoardGraph
from engine.state import MatchState, PlayerState, reset_match
from models.circuit import Circuit
from models.match import GamePhase, MatchStatus
from models.player import PlayerColor


class TestMatchState:
    """Tests for the MatchState dataclass."""

    def test_defaults(self):
        """A new match is idle, in placement, with red to move."""
        state = MatchState()

        assert state.phase == GamePhase.PLACEMENT
        assert state.active_player is PlayerColor.RED
        assert state.selected_node is None
        assert state.open_circuits == {Circuit.OUTER}
        assert state.status == MatchStatus.IDLE
        assert state.winner is None
        assert state.end_reason is None

    def test_players_start_at_zero(self):
        """Both sides start with nothing placed, live or scored."""
        state = MatchState()

        for color in PlayerColor:
            assert state.player(color) == PlayerState(color)
        assert state.scores() == {PlayerColor.RED: 0, PlayerColor.BLUE: 0}

    def test_states_do_not_share_players(self):
        """Each match gets its own counters."""
        first = MatchState()
        second = MatchState()
        first.player(PlayerColor.RED).score = 5

        assert second.score(PlayerColor.RED) == 0
        assert second.open_circuits is not first.open_circuits

    def test_status_precedence(self):
        """Over beats paused, paused beats running."""
        state = MatchState()
        state.is_running = True
        assert state.status == MatchStatus.RUNNING

        state.is_paused = True
        assert state.status == MatchStatus.PAUSED

        state.is_over = True
        assert state.status == MatchStatus.OVER

    def test_active_player_state(self):
        """active follows active_player."""
        state = MatchState()
        state.active_player = PlayerColor.BLUE

        assert state.active.color is PlayerColor.BLUE

    def test_ordered_circuits(self):
        """Open circuits are reported outer to inner."""
        state = MatchState()
        state.open_circuits |= {Circuit.INNER, Circuit.MIDDLE}

        assert state.ordered_circuits() == [Circuit.OUTER, Circuit.MIDDLE, Circuit.INNER]
        assert state.is_open(Circuit.INNER)


class TestResetMatch:
    """Tests for reset_match."""

    def test_clears_board(self):
        """Occupancy and edge control are wiped."""
        board = BoardGraph()
        board.node("outer-0").occupant = PlayerColor.RED
        board.node("outer-1").occupant = PlayerColor.RED
        board.edge("outer-0-outer-1").controller = PlayerColor.RED

        state = reset_match(board)

        assert all(node.is_empty for node in board.nodes)
        assert all(edge.controller is None for edge in board.edges)
        assert state == MatchState()
