"""Pretty-print helpers for crossword grids and sessions."""

from __future__ import annotations

import sys
from typing import TYPE_CHECKING, List

from ..core.constants import Direction

if TYPE_CHECKING:
    from ..engine.grid import CrosswordGrid
    from ..engine.session import CrosswordSession


HOLE = "."
BLANK = "_"


def _render_rows(size: int, rows: List[List[str]]) -> str:
    header_cells = [f"{c:>2}" for c in range(size)]
    lines = ["    " + " ".join(header_cells)]
    lines.append("    " + "-" * (3 * size - 1))
    for r, row_cells in enumerate(rows):
        row_render = " ".join(f"{symbol:>2}" for symbol in row_cells)
        lines.append(f"{r:>2} | {row_render}")
    return "\n".join(lines)


def format_grid(grid: CrosswordGrid) -> str:
    """Render the answer letters."""

    rows = []
    for r in range(grid.size):
        row = []
        for c in range(grid.size):
            cell = grid.cell(r, c)
            row.append(cell.letter if cell else HOLE)
        rows.append(row)
    return _render_rows(grid.size, rows)


def format_board(session: CrosswordSession) -> str:
    """Render the player's letters; the focused cell is bracketed."""

    grid = session.grid
    rows = []
    for r in range(grid.size):
        row = []
        for c in range(grid.size):
            if not grid.has_cell(r, c):
                row.append(HOLE)
                continue
            symbol = session.inputs.get(r, c) or BLANK
            if session.selected == (r, c):
                symbol = f"[{symbol}]"
            row.append(symbol)
        rows.append(row)
    return _render_rows(grid.size, rows)


def format_clues(session: CrosswordSession) -> str:
    active = session.active_word()
    numbered = session.numbered_clues()
    lines: List[str] = []
    for direction in (Direction.ACROSS, Direction.DOWN):
        lines.append(direction.value.capitalize())
        for number, word in numbered:
            if word.direction is not direction:
                continue
            marker = ">" if active is not None and active.id == word.id else " "
            lines.append(
                f" {marker} {number}. ({word.origin_row},{word.origin_col}) "
                f"{word.clue or '?'} [{word.length}]"
            )
    return "\n".join(lines)


def pretty_print_session(session: CrosswordSession, *, stream=None) -> None:
    """Print the board, the typing direction and the clue lists."""

    stream = stream or sys.stdout
    print(format_board(session), file=stream)
    print(f"Direction: {session.direction.value}", file=stream)
    print(format_clues(session), file=stream)
