"""
Unit tests for the pydantic snapshot schemas.
"""

import pytest
from pydantic import ValidationError

from engine.rules import RulesEngine
from models.circuit import Circuit
from models.match import GamePhase, MatchStatus
from models.player import PlayerColor
from models.schemas import EdgeSnapshot, MatchSnapshot, NodeSnapshot, PlayerSnapshot


class TestSnapshotFromEngine:
    """Tests for snapshots built from a live engine."""

    def setup_method(self):
        self.engine = RulesEngine()
        self.engine.start()

    def test_counts(self):
        """All nodes, edges and both players are included."""
        snapshot = self.engine.snapshot()

        assert len(snapshot.nodes) == 18
        assert len(snapshot.edges) == 24
        assert {p.color for p in snapshot.players} == set(PlayerColor)

    def test_reflects_state(self):
        """Snapshots carry phase, status, turn and open circuits."""
        self.engine.place_at("outer-0")
        snapshot = self.engine.snapshot()

        assert snapshot.phase == GamePhase.PLACEMENT
        assert snapshot.status == MatchStatus.RUNNING
        assert snapshot.active_player is PlayerColor.BLUE
        assert snapshot.open_circuits == [Circuit.OUTER]
        assert snapshot.player(PlayerColor.RED).placed == 1
        assert snapshot.node("outer-0").neighbors == ["outer-1", "outer-5", "middle-0"]

    def test_snapshot_is_detached(self):
        """Later actions do not change an earlier snapshot."""
        snapshot = self.engine.snapshot()

        self.engine.place_at("outer-0")

        assert snapshot.node("outer-0").occupant is None

    def test_edge_lookup(self):
        """Edges are addressable by id."""
        edge = self.engine.snapshot().edge("middle-5-inner-5")

        assert edge.weight == 8
        assert edge.controller is None


class TestSchemaValidation:
    """Tests for field validation."""

    def base_fields(self, **overrides):
        fields = dict(
            phase=GamePhase.PLACEMENT,
            status=MatchStatus.IDLE,
            active_player=PlayerColor.RED,
            open_circuits=[Circuit.OUTER],
            players=[],
            nodes=[],
            edges=[],
        )
        fields.update(overrides)
        return fields

    def test_open_circuits_sorted(self):
        """Open circuits come back outer to inner without duplicates."""
        snapshot = MatchSnapshot(**self.base_fields(
            open_circuits=[Circuit.INNER, Circuit.OUTER, Circuit.MIDDLE, Circuit.OUTER]
        ))

        assert snapshot.open_circuits == [Circuit.OUTER, Circuit.MIDDLE, Circuit.INNER]

    def test_outer_always_open(self):
        """A snapshot without the outer circuit is invalid."""
        with pytest.raises(ValidationError):
            MatchSnapshot(**self.base_fields(open_circuits=[Circuit.MIDDLE]))

    def test_values_parsed_from_strings(self):
        """Enum fields accept their string values."""
        node = NodeSnapshot(id="inner-2", circuit="inner", index=2, x=0, y=0, occupant="blue")

        assert node.circuit is Circuit.INNER
        assert node.occupant is PlayerColor.BLUE

    def test_edge_weight_positive(self):
        """Edge weights must be positive."""
        with pytest.raises(ValidationError):
            EdgeSnapshot(id="a-b", source="a", target="b", weight=0)

    def test_negative_counters_rejected(self):
        """Player counters cannot go below zero."""
        with pytest.raises(ValidationError):
            PlayerSnapshot(color="red", placed=0, live=-1, score=0)
