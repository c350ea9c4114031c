"""
Titan Circuits Application Controller

Top-level controller that wires together the board, rules engine, turn
clock and event bus, and serializes every input action and clock event.
"""

import logging
from collections import deque
from typing import Callable, Optional

from PySide6.QtCore import QObject

from config import BOARD_SETTINGS, GAME_SETTINGS, BoardSettings, GameSettings
from engine.board import BoardGraph
from engine.events import ActionOutcome, MatchResult
from engine.rules import RulesEngine
from engine.timer import TurnClock
from models.player import PlayerColor
from models.schemas import MatchSnapshot
from services.event_bus import EventBus

logger = logging.getLogger(__name__)


class TitanCircuitsApp(QObject):
    """
    Top-level application controller.

    Input collaborators call the public methods; clock timeouts arrive
    through the same dispatch. Only one action is processed at a time:
    anything submitted while an action is in progress (for example by a
    signal handler reacting to that action) is queued and processed once
    the current action has completed.
    """

    def __init__(self, settings: GameSettings = GAME_SETTINGS,
                 board_settings: BoardSettings = BOARD_SETTINGS,
                 clock: Optional[TurnClock] = None,
                 event_bus: Optional[EventBus] = None):
        super().__init__()

        # Core services
        self.event_bus = event_bus or EventBus()
        self.board = BoardGraph(board_settings)
        self.rules_engine = RulesEngine(self.board, settings)
        self.clock = clock or TurnClock(
            settings.turn_duration_ms,
            settings.match_duration_ms,
            settings.tick_interval_ms,
        )

        self._pending: deque[Callable[[], object]] = deque()
        self._busy = False

        # Bumped on every turn change; a turn timeout only applies to the
        # turn that was current when it was raised
        self._turn_serial = 0
        self._action_turn = 0

        self._wire_engine()
        self._wire_clock()

    def _wire_engine(self) -> None:
        engine = self.rules_engine
        bus = self.event_bus

        engine.circuit_unlocked.connect(bus.circuit_unlocked.emit)
        engine.score_changed.connect(bus.score_changed.emit)
        engine.piece_captured.connect(bus.piece_captured.emit)
        engine.phase_changed.connect(bus.phase_changed.emit)
        engine.selection_changed.connect(bus.selection_changed.emit)
        engine.action_rejected.connect(bus.action_rejected.emit)
        engine.status_changed.connect(bus.status_changed.emit)
        engine.board_updated.connect(bus.board_updated.emit)
        engine.turn_changed.connect(self._on_turn_changed)
        engine.match_ended.connect(self._on_match_ended)

    def _wire_clock(self) -> None:
        self.clock.turn_tick.connect(self.event_bus.turn_tick.emit)
        self.clock.match_tick.connect(self.event_bus.match_tick.emit)
        self.clock.turn_timeout.connect(self.turn_timeout)
        self.clock.match_timeout.connect(self.match_timeout)

    # ============ Read Access ============

    def snapshot(self) -> MatchSnapshot:
        return self.rules_engine.snapshot()

    # ============ Input Actions ============

    def place_at(self, node_id: str) -> Optional[ActionOutcome]:
        return self._dispatch(lambda: self.rules_engine.place_at(node_id))

    def select_or_move_to(self, node_id: str) -> Optional[ActionOutcome]:
        return self._dispatch(lambda: self.rules_engine.select_or_move_to(node_id))

    def click_node(self, node_id: str) -> Optional[ActionOutcome]:
        return self._dispatch(lambda: self.rules_engine.click_node(node_id))

    def pass_turn(self) -> Optional[ActionOutcome]:
        return self._dispatch(self.rules_engine.pass_turn)

    # ============ Lifecycle ============

    def start_match(self) -> Optional[bool]:
        return self._dispatch(self._start)

    def pause_match(self) -> Optional[bool]:
        return self._dispatch(self._pause)

    def resume_match(self) -> Optional[bool]:
        return self._dispatch(self._resume)

    def reset_match(self) -> None:
        self._dispatch(self._reset)

    # ============ Clock Events ============

    def turn_timeout(self) -> Optional[ActionOutcome]:
        """
        Per-turn countdown expired.

        Raised while an action is in progress, the timeout belongs to the
        turn that action started in; it is dropped if that turn has ended
        by the time the timeout is processed.
        """
        turn = self._action_turn if self._busy else self._turn_serial
        return self._dispatch(self.rules_engine.turn_timeout, from_clock=True, turn=turn)

    def match_timeout(self) -> Optional[ActionOutcome]:
        return self._dispatch(self.rules_engine.match_timeout, from_clock=True)

    # ============ Internal ============

    def _start(self) -> bool:
        if not self.rules_engine.start():
            return False
        self.clock.start()
        self.event_bus.match_started.emit()
        self.event_bus.emit_message("info", "Match started! Red player goes first.")
        return True

    def _pause(self) -> bool:
        if not self.rules_engine.pause():
            return False
        self.clock.pause()
        self.event_bus.match_paused.emit()
        return True

    def _resume(self) -> bool:
        if not self.rules_engine.resume():
            return False
        self.clock.resume()
        self.event_bus.match_resumed.emit()
        return True

    def _reset(self) -> None:
        self.clock.reset()
        self._pending.clear()
        self.rules_engine.reset()
        self.event_bus.match_reset.emit()
        self.event_bus.emit_message("info", "Match reset. Press Start to begin.")

    def _dispatch(self, action: Callable[[], object], from_clock: bool = False,
                  turn: Optional[int] = None):
        """
        Run *action* now, or queue it if another action is in progress.

        Returns the action's result, or None when it was queued.
        """
        if self._busy:
            self._pending.append(lambda: self._run(action, from_clock, turn))
            return None

        result = self._run(action, from_clock, turn)
        while self._pending:
            self._pending.popleft()()
        return result

    def _run(self, action: Callable[[], object], from_clock: bool, turn: Optional[int]):
        if from_clock and not self._accepts_clock_event(turn):
            return None
        self._busy = True
        self._action_turn = self._turn_serial
        try:
            return action()
        finally:
            self._busy = False

    def _accepts_clock_event(self, turn: Optional[int]) -> bool:
        """Clock events only reach a running, unpaused match, on the turn they were raised in."""
        state = self.rules_engine.state
        if state.is_over:
            logger.debug("Dropping clock event after match end")
            return False
        if state.is_paused or not state.is_running:
            logger.debug("Dropping clock event while the match is not running")
            return False
        if turn is not None and turn != self._turn_serial:
            logger.debug("Dropping turn timeout for a turn that already ended")
            return False
        return True

    def _on_turn_changed(self, player: str, timed_out: bool) -> None:
        self._turn_serial += 1
        self.clock.restart_turn()
        self.event_bus.turn_changed.emit(player, timed_out)
        if timed_out:
            timed_out_player = PlayerColor(player).opponent
            self.event_bus.emit_message(
                "warning", f"{timed_out_player.display_name} player's turn timed out!"
            )

    def _on_match_ended(self, result: MatchResult) -> None:
        self.clock.stop()
        self.event_bus.match_ended.emit(result)
        self.event_bus.emit_message("info", f"{result.message} {result.score_line}")
