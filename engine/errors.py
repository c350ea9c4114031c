"""
Rule violation taxonomy.

Every recoverable rejection derives from RuleViolation and carries a
human-readable reason. ConstructionError is deliberately separate: it only
signals a defect in the fixed board tables and is never caught.
"""


class RuleViolation(Exception):
    """An action was rejected; match state is unchanged."""

    def __init__(self, reason: str):
        super().__init__(reason)
        self.reason = reason


class InvalidAction(RuleViolation):
    """Illegal placement or movement target."""


class IllegalPhaseAction(RuleViolation):
    """Action not valid in the current phase, or the match is not running."""


class AlreadyOver(RuleViolation):
    """Action submitted after the match ended."""


class ConstructionError(Exception):
    """Malformed board topology."""
