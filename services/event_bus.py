"""
Event Bus - Central signal hub for inter-module communication.

All collaborators (renderers, input adapters, sound, logging panels)
connect to this single object rather than to the rules engine or the
clock directly.
"""

import logging

from PySide6.QtCore import QObject, Signal

logger = logging.getLogger(__name__)


class EventBus(QObject):
    """
    Central signal hub for Titan Circuits.

    The EventBus acts as a mediator between the application components:
    - RulesEngine emits rule outcomes (unlocks, captures, scores, match end)
    - TurnClock emits countdown ticks
    - Renderers listen and redraw from the published snapshot

    Usage:
        bus.board_updated.connect(view.render)
        bus.match_ended.connect(lambda result: print(result.message))
    """

    # ============ Match Lifecycle ============
    match_started = Signal()
    match_paused = Signal()
    match_resumed = Signal()
    match_reset = Signal()
    match_ended = Signal(object)            # MatchResult
    status_changed = Signal(str)            # MatchStatus value

    # ============ Rule Outcomes ============
    circuit_unlocked = Signal(str)          # circuit name
    score_changed = Signal(str, int)        # player, new score
    piece_captured = Signal(str, str)       # node id, owner
    turn_changed = Signal(str, bool)        # player now to move, timed out
    phase_changed = Signal(str)             # new phase
    selection_changed = Signal(object)      # node id or None
    action_rejected = Signal(str)           # human-readable reason

    # ============ Rendering ============
    board_updated = Signal(object)          # MatchSnapshot

    # ============ Timer Events ============
    turn_tick = Signal(int)                 # ms left in the turn
    match_tick = Signal(int)                # ms left in the match

    # ============ System Events ============
    system_message = Signal(str, str)       # (level, message)

    def __init__(self):
        super().__init__()

    def emit_message(self, level: str, message: str) -> None:
        """Emit a system message (info, warning, error) and log it."""
        level_no = logging.getLevelName(level.upper())
        if not isinstance(level_no, int):
            level_no = logging.INFO
        logger.log(level_no, message)
        self.system_message.emit(level, message)
