"""Compare the player's letters against the answer grid."""

from __future__ import annotations

from typing import List, Tuple

from ..core.constants import MAX_SCORE, REVEAL_PENALTY
from ..core.models import CheckResult, UserInputGrid
from .grid import CrosswordGrid


SOLVED_MESSAGE = "Great job!"
NOT_YET_MESSAGE = "Not quite right yet!"
EMPTY_MESSAGE = "There is nothing to solve."


def check(grid: CrosswordGrid, user_input: UserInputGrid) -> CheckResult:
    """Return whether every answer cell is filled and whether all are correct."""

    if grid.is_empty():
        return CheckResult(solved=False, filled=False, message=EMPTY_MESSAGE)

    filled = True
    wrong: List[Tuple[int, int]] = []
    for row, col, cell in grid.occupied():
        entered = user_input.get(row, col)
        if not entered:
            filled = False
        if entered != cell.letter:
            wrong.append((row, col))
    solved = filled and not wrong
    return CheckResult(
        solved=solved,
        filled=filled,
        message=SOLVED_MESSAGE if solved else NOT_YET_MESSAGE,
        wrong_cells=wrong,
    )


def compute_score(revealed_count: int) -> int:
    """Final score after hint penalties, never below zero."""

    return max(0, MAX_SCORE - revealed_count * REVEAL_PENALTY)
