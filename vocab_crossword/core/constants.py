"""Shared constants and enumerations for the crossword mini-game."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Dict, Tuple


GRID_SIZE = 12
MAX_WORDS = 8
MAX_SCORE = 100
REVEAL_PENALTY = 5


class Direction(str, Enum):
    """Word orientations supported by the grid."""

    ACROSS = "across"
    DOWN = "down"

    @property
    def step(self) -> Tuple[int, int]:
        return (0, 1) if self is Direction.ACROSS else (1, 0)

    def perpendicular(self) -> "Direction":
        return Direction.DOWN if self is Direction.ACROSS else Direction.ACROSS


class Arrow(str, Enum):
    """Compass keys used to move the focus around the grid."""

    UP = "up"
    DOWN = "down"
    LEFT = "left"
    RIGHT = "right"


# (direction of travel, step along that axis)
ARROW_MOVES: Dict[Arrow, Tuple[Direction, int]] = {
    Arrow.RIGHT: (Direction.ACROSS, 1),
    Arrow.LEFT: (Direction.ACROSS, -1),
    Arrow.DOWN: (Direction.DOWN, 1),
    Arrow.UP: (Direction.DOWN, -1),
}

ORTHOGONAL_STEPS: Tuple[Tuple[int, int], ...] = ((0, 1), (1, 0), (0, -1), (-1, 0))


class SessionState(str, Enum):
    """Lifecycle of a puzzle session."""

    EDITING = "EDITING"
    SOLVED = "SOLVED"


@dataclass(frozen=True)
class Bounds:
    """Simple rectangle bounds helper."""

    rows: int
    cols: int

    def contains(self, row: int, col: int) -> bool:
        return 0 <= row < self.rows and 0 <= col < self.cols
