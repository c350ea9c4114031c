"""Shared pytest fixtures used across the test suite."""

import sys

import pytest
from PySide6.QtCore import QCoreApplication

from engine.rules import RulesEngine
from engine.scoring import recompute_edge_control
from models.circuit import CIRCUIT_ORDER
from models.match import GamePhase
from models.player import PlayerColor


# Create QCoreApplication for Qt event loop (required for QTimer)
@pytest.fixture(scope="session")
def qapp():
    """Create a QCoreApplication instance for the test session."""
    app = QCoreApplication.instance()
    if app is None:
        app = QCoreApplication(sys.argv)
    yield app


@pytest.fixture
def engine():
    """A started engine on a fresh default board."""
    rules = RulesEngine()
    rules.start()
    return rules


@pytest.fixture
def arrange():
    """
    Put titans directly on the board, bypassing placement.

    Usage:
        arrange(engine, red=["outer-0"], blue=["outer-3"])
    """
    def _arrange(rules: RulesEngine, red=(), blue=(),
                 phase: GamePhase = GamePhase.MOVEMENT,
                 active: PlayerColor = PlayerColor.RED,
                 open_circuits=CIRCUIT_ORDER) -> RulesEngine:
        board = rules.board
        state = rules.state
        board.clear()

        for color, node_ids in ((PlayerColor.RED, red), (PlayerColor.BLUE, blue)):
            for node_id in node_ids:
                board.node(node_id).occupant = color
            player = state.player(color)
            if phase is GamePhase.MOVEMENT:
                player.placed = rules.settings.max_titans
            else:
                player.placed = len(node_ids)
            player.live = len(node_ids)
            player.score = 0

        state.phase = phase
        state.active_player = active
        state.selected_node = None
        state.open_circuits = set(open_circuits)
        recompute_edge_control(board, state)
        return rules

    return _arrange
