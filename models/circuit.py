"""
Circuits (rings) of the board, listed from the outside in.
"""

import enum
from typing import Optional


class Circuit(enum.Enum):
    """The three concentric rings. Only the outer ring is open at the start."""
    OUTER = "outer"
    MIDDLE = "middle"
    INNER = "inner"

    @property
    def order(self) -> int:
        """Position from the outside in (outer = 0)."""
        return CIRCUIT_ORDER.index(self)

    @property
    def previous(self) -> Optional["Circuit"]:
        """The ring that must be full before this one unlocks."""
        if self.order == 0:
            return None
        return CIRCUIT_ORDER[self.order - 1]

    @property
    def display_name(self) -> str:
        return self.value.title()


CIRCUIT_ORDER = (Circuit.OUTER, Circuit.MIDDLE, Circuit.INNER)
