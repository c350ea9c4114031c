"""
Turn Clock - Countdown timers for turns and for the whole match.

The clock knows nothing about the game. It only emits timeout signals;
the application controller feeds them to the rules engine through the
same path as player input.
"""

import logging

from PySide6.QtCore import QObject, Qt, Signal, QTimer, QElapsedTimer

from config import GAME_SETTINGS

logger = logging.getLogger(__name__)


class CountdownTimer(QObject):
    """
    Pausable countdown.

    Emits tick every interval and expired once when time runs out.
    Pausing preserves the remaining time; resuming continues from it.

    Usage:
        timer = CountdownTimer(duration_ms=30_000)
        timer.tick.connect(on_tick)
        timer.expired.connect(on_expired)
        timer.start()
    """

    # Signals
    tick = Signal(int)      # milliseconds remaining
    expired = Signal()      # time's up

    # Constants
    TICK_INTERVAL_MS = 1_000

    def __init__(self, duration_ms: int, tick_interval_ms: int = None):
        """
        Initialize the countdown.

        Args:
            duration_ms: Countdown length in milliseconds
            tick_interval_ms: Tick period (default: 1000)
        """
        super().__init__()

        self._duration_ms = duration_ms
        self._remaining_ms = self._duration_ms
        self._is_running = False
        self._is_paused = False

        # Internal Qt timer
        self._timer = QTimer(self)
        self._timer.setInterval(tick_interval_ms or self.TICK_INTERVAL_MS)
        self._timer.setTimerType(Qt.TimerType.PreciseTimer)
        self._timer.timeout.connect(self._on_tick)

        # Elapsed time tracking for precision
        self._elapsed = QElapsedTimer()
        self._start_elapsed_ms = 0

    @property
    def duration_ms(self) -> int:
        return self._duration_ms

    @property
    def is_running(self) -> bool:
        """Check if the countdown is currently running."""
        return self._is_running and not self._is_paused

    @property
    def is_paused(self) -> bool:
        return self._is_paused

    @property
    def remaining_ms(self) -> int:
        """Get remaining time in milliseconds."""
        if self._is_running and not self._is_paused:
            return self._calc_remaining()
        return self._remaining_ms

    @property
    def remaining_seconds(self) -> float:
        return self.remaining_ms / 1000.0

    def start(self) -> None:
        """Start the countdown from the full duration."""
        self._remaining_ms = self._duration_ms
        self._start_elapsed_ms = 0
        self._is_running = True
        self._is_paused = False

        self._elapsed.start()
        self._timer.start()

        self.tick.emit(self._remaining_ms)

    def stop(self) -> None:
        """Stop the countdown. No further ticks or expiry."""
        if self._is_running and not self._is_paused:
            self._remaining_ms = self._calc_remaining()
        self._timer.stop()
        self._is_running = False
        self._is_paused = False

    def pause(self) -> None:
        """Pause the countdown, preserving remaining time."""
        if self._is_running and not self._is_paused:
            self._timer.stop()
            self._remaining_ms = self._calc_remaining()
            self._is_paused = True

    def resume(self) -> None:
        """Resume a paused countdown from the remaining time."""
        if self._is_running and self._is_paused:
            self._start_elapsed_ms = self._duration_ms - self._remaining_ms
            self._elapsed.restart()
            self._is_paused = False
            self._timer.start()

    def reset(self, duration_ms: int = None) -> None:
        """Stop and restore the full duration."""
        self.stop()
        if duration_ms is not None:
            self._duration_ms = duration_ms
        self._remaining_ms = self._duration_ms
        self._start_elapsed_ms = 0

    def _calc_remaining(self) -> int:
        if not self._elapsed.isValid():
            return self._remaining_ms
        elapsed = self._elapsed.elapsed()
        return max(0, self._duration_ms - (self._start_elapsed_ms + elapsed))

    def _on_tick(self) -> None:
        remaining = self._calc_remaining()
        self._remaining_ms = remaining
        self.tick.emit(remaining)

        if remaining <= 0:
            self._timer.stop()
            self._is_running = False
            self.expired.emit()


class TurnClock(QObject):
    """
    Per-turn and whole-match countdowns driven together.

    Both countdowns start, pause, resume and stop as one. The turn
    countdown is restarted by the application on every turn change.
    """

    # Signals
    turn_tick = Signal(int)     # ms left in the turn
    match_tick = Signal(int)    # ms left in the match
    turn_timeout = Signal()
    match_timeout = Signal()

    def __init__(self, turn_duration_ms: int = GAME_SETTINGS.turn_duration_ms,
                 match_duration_ms: int = GAME_SETTINGS.match_duration_ms,
                 tick_interval_ms: int = GAME_SETTINGS.tick_interval_ms):
        super().__init__()
        self._turn = CountdownTimer(turn_duration_ms, tick_interval_ms)
        self._match = CountdownTimer(match_duration_ms, tick_interval_ms)
        self._active = False

        self._turn.tick.connect(self.turn_tick.emit)
        self._match.tick.connect(self.match_tick.emit)
        self._turn.expired.connect(self._on_turn_expired)
        self._match.expired.connect(self._on_match_expired)

    @property
    def turn_timer(self) -> CountdownTimer:
        return self._turn

    @property
    def match_timer(self) -> CountdownTimer:
        return self._match

    @property
    def is_running(self) -> bool:
        return self._active and not self._match.is_paused

    @property
    def is_paused(self) -> bool:
        return self._active and self._match.is_paused

    @property
    def turn_remaining_ms(self) -> int:
        return self._turn.remaining_ms

    @property
    def match_remaining_ms(self) -> int:
        return self._match.remaining_ms

    def start(self) -> None:
        """Start both countdowns from their full durations."""
        self._active = True
        self._match.start()
        self._turn.start()

    def pause(self) -> None:
        if self.is_running:
            self._turn.pause()
            self._match.pause()

    def resume(self) -> None:
        if self.is_paused:
            self._match.resume()
            self._turn.resume()

    def restart_turn(self) -> None:
        """Give the new active player a full turn."""
        if not self._active:
            return
        self._turn.reset()
        self._turn.start()
        if self._match.is_paused:
            self._turn.pause()

    def stop(self) -> None:
        """Cancel both countdowns. Nothing is delivered after this."""
        self._active = False
        self._turn.stop()
        self._match.stop()

    def reset(self) -> None:
        """Stop and restore both full durations."""
        self._active = False
        self._turn.reset()
        self._match.reset()

    def _on_turn_expired(self) -> None:
        if self._active:
            logger.debug("Turn countdown expired")
            self.turn_timeout.emit()

    def _on_match_expired(self) -> None:
        if self._active:
            logger.debug("Match countdown expired")
            self._active = False
            self._turn.stop()
            self.match_timeout.emit()
