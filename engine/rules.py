"""
Rules Engine - Enforces Titan Circuits rules.

Validates placements and moves, keeps edge control and scores current,
unlocks circuits, removes surrounded titans and decides when a match is
over. Runs independently of any GUI: every action returns an
ActionOutcome and the same information is emitted as Qt signals.
"""

import logging
from typing import Callable, Optional

from PySide6.QtCore import QObject, Signal

from config import GAME_SETTINGS, GameSettings
from engine.board import BoardGraph, Node, NodeId
from engine.errors import AlreadyOver, IllegalPhaseAction, InvalidAction, RuleViolation
from engine.events import (
    ActionOutcome,
    CircuitUnlocked,
    GameEvent,
    MatchEnded,
    MatchResult,
    PhaseChanged,
    PieceCaptured,
    ScoreChanged,
    SelectionChanged,
    TurnChanged,
)
from engine.scoring import ScoreDelta, recompute_edge_control, release_incident_edges
from engine.state import MatchState, reset_match
from models.circuit import Circuit, CIRCUIT_ORDER
from models.match import EndReason, GamePhase
from models.player import PlayerColor
from models.schemas import EdgeSnapshot, MatchSnapshot, NodeSnapshot, PlayerSnapshot

logger = logging.getLogger(__name__)


def evaluate_unlocks(board: BoardGraph, state: MatchState) -> list[Circuit]:
    """Open every ring whose predecessor is open and full. Returns the newly opened rings."""
    unlocked = []
    for circuit in CIRCUIT_ORDER[1:]:
        if circuit in state.open_circuits:
            continue
        previous = circuit.previous
        if previous in state.open_circuits and board.is_circuit_full(previous):
            state.open_circuits.add(circuit)
            unlocked.append(circuit)
    return unlocked


def find_surrounded(board: BoardGraph) -> list[Node]:
    """
    Titans whose every neighbor is held by the opponent.

    Evaluated in one pass against current occupancy; the caller removes
    the whole list afterwards so captures never cascade.
    """
    surrounded = []
    for node in board.nodes:
        if node.occupant is None:
            continue
        neighbors = board.neighbors(node.id)
        opponent = node.occupant.opponent
        if neighbors and all(board.node(n).occupant is opponent for n in neighbors):
            surrounded.append(node)
    return surrounded


def decide_winner(state: MatchState) -> Optional[PlayerColor]:
    """
    Winner by score.

    Primary: higher score
    Tiebreaker: more live titans

    Returns:
        The winning color, or None for a draw
    """
    red = state.player(PlayerColor.RED)
    blue = state.player(PlayerColor.BLUE)
    if red.score != blue.score:
        return PlayerColor.RED if red.score > blue.score else PlayerColor.BLUE
    if red.live != blue.live:
        return PlayerColor.RED if red.live > blue.live else PlayerColor.BLUE
    return None


class RulesEngine(QObject):
    """
    Applies player actions and clock events to a match.

    Each action is validated completely before anything is mutated, so a
    rejected action leaves the match untouched. Derived events are
    collected while the action is applied and emitted afterwards.

    Usage:
        engine = RulesEngine()
        engine.start()
        outcome = engine.place_at("outer-0")
        if not outcome.accepted:
            print(outcome.reason)
    """

    # Signals
    circuit_unlocked = Signal(str)      # circuit name
    score_changed = Signal(str, int)    # player, new score
    piece_captured = Signal(str, str)   # node id, owner
    match_ended = Signal(object)        # MatchResult
    turn_changed = Signal(str, bool)    # player now to move, turn timed out
    phase_changed = Signal(str)         # new phase
    selection_changed = Signal(object)  # node id or None
    action_rejected = Signal(str)       # human-readable reason
    status_changed = Signal(str)        # MatchStatus value
    board_updated = Signal(object)      # MatchSnapshot

    def __init__(self, board: Optional[BoardGraph] = None,
                 settings: GameSettings = GAME_SETTINGS):
        super().__init__()
        if settings.max_titans < 1:
            raise ValueError("Each player needs at least one titan")
        self._board = board if board is not None else BoardGraph()
        self._settings = settings
        self._state = reset_match(self._board)
        self._events: list[GameEvent] = []
        self._score_deltas: list[ScoreDelta] = []

    @property
    def board(self) -> BoardGraph:
        return self._board

    @property
    def state(self) -> MatchState:
        return self._state

    @property
    def settings(self) -> GameSettings:
        return self._settings

    # ============ Lifecycle ============

    def start(self) -> bool:
        """Start the match. Returns False if it is already running or over."""
        if self._state.is_running or self._state.is_over:
            return False
        self._state.is_running = True
        logger.info("Match started. Red player goes first.")
        self._emit_status()
        return True

    def pause(self) -> bool:
        """Pause a running match."""
        state = self._state
        if not state.is_running or state.is_over or state.is_paused:
            return False
        state.is_paused = True
        logger.info("Match paused")
        self._emit_status()
        return True

    def resume(self) -> bool:
        """Resume a paused match."""
        state = self._state
        if not state.is_paused or state.is_over:
            return False
        state.is_paused = False
        logger.info("Match resumed")
        self._emit_status()
        return True

    def reset(self) -> None:
        """Discard the current match and start over from an empty board."""
        self._state = reset_match(self._board)
        logger.info("Match reset")
        self._emit_status()
        self.board_updated.emit(self.snapshot())

    # ============ Actions ============

    def place_at(self, node_id: NodeId) -> ActionOutcome:
        """
        Place a titan for the active player (placement phase).

        Args:
            node_id: Empty node in an unlocked circuit

        Returns:
            ActionOutcome, rejected with the reason if the placement is illegal
        """
        return self._submit(self._place, node_id)

    def select_or_move_to(self, node_id: NodeId) -> ActionOutcome:
        """
        Select a titan, cancel the selection, or move the selected titan (movement phase).

        With nothing selected, node_id must hold one of the active player's
        titans. With a titan selected, clicking it again cancels; clicking an
        adjacent empty node moves it there and ends the turn.

        Args:
            node_id: Titan to select, or destination for the selected titan

        Returns:
            ActionOutcome, rejected with the reason if the selection or move is illegal
        """
        return self._submit(self._select_or_move, node_id)

    def click_node(self, node_id: NodeId) -> ActionOutcome:
        """Route a node click to placement or movement depending on the phase."""
        if self._state.phase is GamePhase.PLACEMENT:
            return self.place_at(node_id)
        return self.select_or_move_to(node_id)

    def pass_turn(self) -> ActionOutcome:
        """Give the turn to the opponent without acting."""
        return self._submit(self._pass_turn)

    def turn_timeout(self) -> ActionOutcome:
        """Per-turn countdown expired: drop any selection and swap turns."""
        return self._submit(self._turn_timeout)

    def match_timeout(self) -> ActionOutcome:
        """Whole-match countdown expired: the higher score wins."""
        return self._submit(self._match_timeout)

    def snapshot(self) -> MatchSnapshot:
        """Read-only view of the match for renderers."""
        state = self._state
        return MatchSnapshot(
            phase=state.phase,
            status=state.status,
            active_player=state.active_player,
            selected_node=state.selected_node,
            open_circuits=state.ordered_circuits(),
            winner=state.winner,
            end_reason=state.end_reason,
            players=[PlayerSnapshot.model_validate(p) for p in state.players.values()],
            nodes=[
                NodeSnapshot(id=n.id, circuit=n.circuit, index=n.index, x=n.x, y=n.y,
                             occupant=n.occupant, neighbors=list(self._board.neighbors(n.id)))
                for n in self._board.nodes
            ],
            edges=[EdgeSnapshot.model_validate(e) for e in self._board.edges],
        )

    # ============ Action Handlers ============

    def _place(self, node_id: NodeId) -> str:
        self._require_playing()
        state = self._state
        if state.phase is not GamePhase.PLACEMENT:
            raise IllegalPhaseAction("All titans are placed. Move them instead.")

        node = self._lookup(node_id)
        player = state.active
        if player.placed >= self._settings.max_titans:
            raise InvalidAction("You have already placed all your titans. Now move them.")
        if not state.is_open(node.circuit):
            raise InvalidAction(f"The {node.circuit.value} circuit is not unlocked yet.")
        if not node.is_empty:
            raise InvalidAction("This node is already occupied.")

        node.occupant = player.color
        player.placed += 1
        player.live += 1
        message = f"{player.color.display_name} placed a titan on {node.id}."

        for circuit in evaluate_unlocks(self._board, state):
            self._events.append(CircuitUnlocked(circuit))
            message = f"{circuit.display_name} circuit unlocked!"

        if all(p.placed == self._settings.max_titans for p in state.players.values()):
            state.phase = GamePhase.MOVEMENT
            self._events.append(PhaseChanged(GamePhase.MOVEMENT))
            message = "All titans placed. Movement phase begins."

        self._score_deltas += recompute_edge_control(self._board, state)

        result = self._check_match_end()
        if result is not None:
            return result.message
        self._advance_turn()
        return message

    def _select_or_move(self, node_id: NodeId) -> str:
        self._require_playing()
        state = self._state
        if state.phase is not GamePhase.MOVEMENT:
            raise IllegalPhaseAction("Titans can only be moved once all titans are placed.")

        node = self._lookup(node_id)
        player = state.active_player

        if state.selected_node is None:
            if node.occupant is not player:
                raise InvalidAction("Select one of your titans to move.")
            state.selected_node = node.id
            self._events.append(SelectionChanged(node.id))
            return "Select a destination for your titan."

        source = self._board.node(state.selected_node)
        if source.id == node.id:
            state.selected_node = None
            self._events.append(SelectionChanged(None))
            return "Movement canceled."
        if not self._board.are_adjacent(source.id, node.id):
            raise InvalidAction("You can only move to adjacent nodes.")
        if not node.is_empty:
            raise InvalidAction("The destination node is already occupied.")

        self._score_deltas += release_incident_edges(self._board, state, source.id, player)
        node.occupant = player
        source.occupant = None
        state.selected_node = None
        self._events.append(SelectionChanged(None))
        self._score_deltas += recompute_edge_control(self._board, state)
        message = f"{player.display_name} moved a titan from {source.id} to {node.id}."

        captured = self._resolve_captures()
        if captured:
            message = f"A {captured[-1].player.value} titan was surrounded and removed!"

        result = self._check_match_end()
        if result is not None:
            return result.message
        self._advance_turn()
        return message

    def _pass_turn(self) -> str:
        self._require_playing()
        passer = self._state.active_player
        self._advance_turn()
        return f"{passer.display_name} player passed."

    def _turn_timeout(self) -> str:
        self._require_playing()
        timed_out = self._state.active_player
        self._advance_turn(timed_out=True)
        return f"{timed_out.display_name} player's turn timed out!"

    def _match_timeout(self) -> str:
        self._require_playing()
        result = self._end_match(decide_winner(self._state), EndReason.MATCH_TIMEOUT)
        return result.message

    # ============ Rule Steps ============

    def _resolve_captures(self) -> list[PieceCaptured]:
        """Remove every surrounded titan found in a single pass."""
        captures = []
        for node in find_surrounded(self._board):
            owner = node.occupant
            node.occupant = None
            self._state.player(owner).live -= 1
            capture = PieceCaptured(node.id, owner)
            captures.append(capture)
            self._events.append(capture)
            logger.info("A %s titan on %s was surrounded and removed", owner.value, node.id)

        if captures:
            self._score_deltas += recompute_edge_control(self._board, self._state)
        return captures

    def _check_match_end(self) -> Optional[MatchResult]:
        """Elimination first, then a full inner circuit."""
        state = self._state
        if state.phase is GamePhase.MOVEMENT:
            eliminated = [p.color for p in state.players.values() if p.live == 0]
            if eliminated:
                winner = eliminated[0].opponent if len(eliminated) == 1 else None
                return self._end_match(winner, EndReason.ELIMINATION)

        if self._board.is_circuit_full(Circuit.INNER):
            return self._end_match(decide_winner(state), EndReason.BOARD_SATURATION)
        return None

    def _end_match(self, winner: Optional[PlayerColor], reason: EndReason) -> MatchResult:
        state = self._state
        state.is_over = True
        state.is_running = False
        state.is_paused = False
        state.winner = winner
        state.end_reason = reason
        if state.selected_node is not None:
            state.selected_node = None
            self._events.append(SelectionChanged(None))

        result = MatchResult(
            winner=winner,
            reason=reason,
            red_score=state.score(PlayerColor.RED),
            blue_score=state.score(PlayerColor.BLUE),
        )
        self._events.append(MatchEnded(result))
        logger.info("%s %s", result.message, result.score_line)
        return result

    def _advance_turn(self, timed_out: bool = False) -> None:
        state = self._state
        if state.selected_node is not None:
            state.selected_node = None
            self._events.append(SelectionChanged(None))
        state.active_player = state.active_player.opponent
        self._events.append(TurnChanged(state.active_player, timed_out))

    # ============ Validation ============

    def _require_playing(self) -> None:
        state = self._state
        if state.is_over:
            raise AlreadyOver("The match is over. Reset to play again.")
        if not state.is_running:
            raise IllegalPhaseAction("The match has not started yet.")
        if state.is_paused:
            raise IllegalPhaseAction("The match is paused.")

    def _lookup(self, node_id: NodeId) -> Node:
        if not self._board.has_node(node_id):
            raise InvalidAction(f"There is no node called '{node_id}'.")
        return self._board.node(node_id)

    # ============ Dispatch ============

    def _submit(self, handler: Callable[..., str], *args) -> ActionOutcome:
        """Run one handler; convert rule violations into a rejected outcome."""
        self._events = []
        self._score_deltas = []
        try:
            message = handler(*args)
        except RuleViolation as exc:
            self._events = []
            self._score_deltas = []
            logger.debug("Rejected %s%s: %s", handler.__name__.lstrip("_"), args, exc.reason)
            self.action_rejected.emit(exc.reason)
            return ActionOutcome.rejected(exc)

        events, self._events = self._events, []
        deltas, self._score_deltas = self._score_deltas, []
        score_events = self._score_events(deltas)
        ended = [e for e in events if isinstance(e, MatchEnded)]
        events = [e for e in events if not isinstance(e, MatchEnded)] + score_events + ended

        logger.info(message)
        self._emit(events)
        return ActionOutcome(accepted=True, message=message, events=events)

    def _score_events(self, deltas: list[ScoreDelta]) -> list[ScoreChanged]:
        """One ScoreChanged per player whose net change is non-zero, red first."""
        net = {color: 0 for color in PlayerColor}
        for delta in deltas:
            logger.debug("%s %+d on %s", delta.player.value, delta.delta, delta.edge_id)
            net[delta.player] += delta.delta
        return [ScoreChanged(color, self._state.score(color))
                for color, change in net.items() if change]

    def _emit(self, events: list[GameEvent]) -> None:
        """Publish committed events, then the updated snapshot."""
        for event in events:
            if isinstance(event, CircuitUnlocked):
                self.circuit_unlocked.emit(event.circuit.value)
            elif isinstance(event, ScoreChanged):
                self.score_changed.emit(event.player.value, event.score)
            elif isinstance(event, PieceCaptured):
                self.piece_captured.emit(event.node_id, event.player.value)
            elif isinstance(event, PhaseChanged):
                self.phase_changed.emit(event.phase.value)
            elif isinstance(event, TurnChanged):
                self.turn_changed.emit(event.player.value, event.timed_out)
            elif isinstance(event, SelectionChanged):
                self.selection_changed.emit(event.node_id)
            elif isinstance(event, MatchEnded):
                self._emit_status()
                self.match_ended.emit(event.result)
        self.board_updated.emit(self.snapshot())

    def _emit_status(self) -> None:
        self.status_changed.emit(self._state.status.value)
