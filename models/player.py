"""
Player identities for the two sides of a match.
"""

import enum


class PlayerColor(enum.Enum):
    """The two sides. Red always opens a match."""
    RED = "red"
    BLUE = "blue"

    @property
    def opponent(self) -> "PlayerColor":
        return PlayerColor.BLUE if self is PlayerColor.RED else PlayerColor.RED

    @property
    def display_name(self) -> str:
        return self.value.title()
