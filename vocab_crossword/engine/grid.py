"""Grid representation and placement legality checks."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Iterator, List, Optional, Tuple

from ..core.constants import GRID_SIZE, ORTHOGONAL_STEPS, Bounds, Direction
from ..core.exceptions import SlotPlacementError
from ..core.models import Cell, PlacedWord
from ..utils.logger import get_logger


LOGGER = get_logger(__name__)


@dataclass
class GridConfig:
    """Configuration values driving the grid layout."""

    size: int = GRID_SIZE
    strict_adjacency: bool = False

    def bounds(self) -> Bounds:
        return Bounds(rows=self.size, cols=self.size)


class CrosswordGrid:
    """Square answer grid stored as a flat list indexed by ``row * size + col``.

    A slot holds ``None`` where no word passes and a :class:`Cell` otherwise.
    Letters are never overwritten: a later word may only reuse a cell whose
    letter matches its own at that offset.
    """

    def __init__(self, config: Optional[GridConfig] = None) -> None:
        self.config = config or GridConfig()
        self.size = self.config.size
        self.bounds = self.config.bounds()
        self.cells: List[Optional[Cell]] = [None] * (self.size * self.size)
        self.words: Dict[str, PlacedWord] = {}

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------
    def index(self, row: int, col: int) -> int:
        return row * self.size + col

    def cell(self, row: int, col: int) -> Optional[Cell]:
        if not self.bounds.contains(row, col):
            return None
        return self.cells[self.index(row, col)]

    def has_cell(self, row: int, col: int) -> bool:
        return self.cell(row, col) is not None

    def occupied(self) -> Iterator[Tuple[int, int, Cell]]:
        for idx, cell in enumerate(self.cells):
            if cell is not None:
                row, col = divmod(idx, self.size)
                yield row, col, cell

    def letter_count(self) -> int:
        return sum(1 for cell in self.cells if cell is not None)

    def is_empty(self) -> bool:
        return not self.words

    def next_cell(
        self, row: int, col: int, direction: Direction, step: int
    ) -> Optional[Tuple[int, int]]:
        """Walk from ``(row, col)`` along ``direction`` to the next existing cell.

        Holes are skipped; the walk stops at the grid edge and returns ``None``
        when nothing is found.
        """

        dr, dc = direction.step
        r, c = row + dr * step, col + dc * step
        while self.bounds.contains(r, c):
            if self.cells[self.index(r, c)] is not None:
                return r, c
            r += dr * step
            c += dc * step
        return None

    # ------------------------------------------------------------------
    # Placement
    # ------------------------------------------------------------------
    def can_place(self, text: str, row: int, col: int, direction: Direction) -> bool:
        """Return whether ``text`` fits at ``(row, col)`` without breaking rules.

        The word must stay inside the grid, agree with every letter it crosses,
        and leave the cells just before its start and just after its end empty.
        It may not share a cell with a word of its own orientation, and it must
        add at least one new letter. No new letter may land on the cell just
        before or after a crossing word. With ``strict_adjacency`` enabled, new
        letters must also have empty neighbours on both sides of the axis.
        """

        length = len(text)
        if length == 0:
            return False
        dr, dc = direction.step
        end_row, end_col = row + dr * (length - 1), col + dc * (length - 1)
        if not (self.bounds.contains(row, col) and self.bounds.contains(end_row, end_col)):
            return False

        new_letters = 0
        for offset, letter in enumerate(text):
            r, c = row + dr * offset, col + dc * offset
            existing = self.cells[self.index(r, c)]
            if existing is None:
                new_letters += 1
                if self._extends_crossing_word(r, c, direction):
                    return False
                if self.config.strict_adjacency and self._touches_side(r, c, direction):
                    return False
                continue
            if existing.letter != letter:
                return False
            if existing.owner(direction) is not None:
                return False
        if new_letters == 0:
            return False

        if self.has_cell(row - dr, col - dc):
            return False
        if self.has_cell(end_row + dr, end_col + dc):
            return False
        return True

    def _touches_side(self, row: int, col: int, direction: Direction) -> bool:
        dr, dc = direction.perpendicular().step
        return self.has_cell(row - dr, col - dc) or self.has_cell(row + dr, col + dc)

    def _extends_crossing_word(self, row: int, col: int, direction: Direction) -> bool:
        # An empty cell next to a perpendicular word along that word's axis is
        # necessarily the cell just before or after it.
        perpendicular = direction.perpendicular()
        dr, dc = perpendicular.step
        for neighbour in (self.cell(row - dr, col - dc), self.cell(row + dr, col + dc)):
            if neighbour is not None and neighbour.owner(perpendicular) is not None:
                return True
        return False

    def place_word(self, word: PlacedWord) -> None:
        if word.id in self.words:
            raise SlotPlacementError(f"Word id {word.id!r} already placed")
        if not self.can_place(word.text, word.origin_row, word.origin_col, word.direction):
            raise SlotPlacementError(
                f"Cannot place {word.text} {word.direction.value} at "
                f"({word.origin_row},{word.origin_col})"
            )

        for offset, (r, c) in enumerate(word.cells):
            idx = self.index(r, c)
            cell = self.cells[idx]
            if cell is None:
                cell = Cell(letter=word.text[offset])
                self.cells[idx] = cell
            if offset == 0:
                cell.is_word_start = True
            if word.direction is Direction.ACROSS:
                cell.across_owner = word.id
            else:
                cell.down_owner = word.id
        self.words[word.id] = word
        LOGGER.debug(
            "Placed %s %s at (%s,%s)",
            word.text,
            word.direction.value,
            word.origin_row,
            word.origin_col,
        )

    def word_at(self, row: int, col: int, direction: Direction) -> Optional[PlacedWord]:
        cell = self.cell(row, col)
        if cell is None:
            return None
        owner = cell.owner(direction)
        return self.words.get(owner) if owner else None

    def touching_pairs(self) -> List[Tuple[Tuple[int, int], Tuple[int, int]]]:
        """Adjacent occupied cells that are not part of one common word."""

        pairs = []
        for row, col, cell in self.occupied():
            for dr, dc in ORTHOGONAL_STEPS[:2]:
                neighbour = self.cell(row + dr, col + dc)
                if neighbour is None:
                    continue
                direction = Direction.ACROSS if dr == 0 else Direction.DOWN
                owner = cell.owner(direction)
                if owner is None or owner != neighbour.owner(direction):
                    pairs.append(((row, col), (row + dr, col + dc)))
        return pairs

    # ------------------------------------------------------------------
    # Serialization helpers
    # ------------------------------------------------------------------
    def to_jsonable(self) -> List[List[Optional[dict]]]:
        serialized: List[List[Optional[dict]]] = []
        for row in range(self.size):
            serialized_row: List[Optional[dict]] = []
            for col in range(self.size):
                cell = self.cells[self.index(row, col)]
                if cell is None:
                    serialized_row.append(None)
                    continue
                serialized_row.append(
                    {
                        "letter": cell.letter,
                        "is_word_start": cell.is_word_start,
                        "across": cell.across_owner,
                        "down": cell.down_owner,
                    }
                )
            serialized.append(serialized_row)
        return serialized
