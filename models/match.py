"""
Match lifecycle enums: phases, status, and the reasons a match ends.
"""

import enum


class GamePhase(enum.Enum):
    """Titans are first placed, then moved. Never goes backward except on reset."""
    PLACEMENT = "placement"
    MOVEMENT = "movement"


class MatchStatus(enum.Enum):
    """Match lifecycle states."""
    IDLE = "idle"
    RUNNING = "running"
    PAUSED = "paused"
    OVER = "over"


class EndReason(enum.Enum):
    """Why a match ended."""
    ELIMINATION = "elimination"
    BOARD_SATURATION = "board_saturation"
    MATCH_TIMEOUT = "match_timeout"
