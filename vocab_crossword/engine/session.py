"""Interactive puzzle state: focus, typing direction, and the player's letters."""

from __future__ import annotations

from typing import Callable, List, Optional, Sequence, Tuple

from ..core.constants import ARROW_MOVES, Arrow, Direction, SessionState
from ..core.models import CheckResult, PlacedWord, UserInputGrid, WordEntry
from ..utils.logger import get_logger
from .checker import check, compute_score
from .generator import CrosswordGenerator, GeneratorConfig
from .grid import CrosswordGrid


LOGGER = get_logger(__name__)

CompletionCallback = Callable[[int], None]


class CrosswordSession:
    """One play-through of a generated crossword.

    Every operation is a silent no-op when it targets a cell outside the grid
    or a slot no word passes through. Once the puzzle is verified the session
    is ``SOLVED`` and the letters can no longer change.
    """

    def __init__(
        self,
        grid: CrosswordGrid,
        placed_words: Sequence[PlacedWord],
        on_complete: Optional[CompletionCallback] = None,
    ) -> None:
        self.grid = grid
        self.placed_words: List[PlacedWord] = list(placed_words)
        self.on_complete = on_complete
        self.inputs = UserInputGrid(grid.size)
        self.state = SessionState.EDITING
        self.selected: Optional[Tuple[int, int]] = None
        self.direction = Direction.ACROSS
        self.revealed_count = 0
        self.score: Optional[int] = None
        self._completed = False

    @classmethod
    def from_words(
        cls,
        words: Sequence[WordEntry],
        config: Optional[GeneratorConfig] = None,
        on_complete: Optional[CompletionCallback] = None,
    ) -> "CrosswordSession":
        result = CrosswordGenerator(config).generate(words)
        return cls(result.grid, result.placed_words, on_complete=on_complete)

    @property
    def is_solved(self) -> bool:
        return self.state is SessionState.SOLVED

    # ------------------------------------------------------------------
    # Typing
    # ------------------------------------------------------------------
    def set_char(self, row: int, col: int, char: str) -> bool:
        """Write ``char`` into a cell and advance along the typing direction."""

        if self.is_solved or not self.grid.has_cell(row, col):
            return False
        letter = char[-1:].upper() if char else ""
        self.inputs.set(row, col, letter)
        self.selected = (row, col)
        if letter:
            self._move_focus(row, col, self.direction, 1)
        return True

    def backspace(self, row: int, col: int) -> None:
        if self.is_solved or not self.grid.has_cell(row, col):
            return
        self.selected = (row, col)
        if self.inputs.get(row, col):
            self.inputs.set(row, col, "")
        else:
            self._move_focus(row, col, self.direction, -1)

    # ------------------------------------------------------------------
    # Focus
    # ------------------------------------------------------------------
    def arrow_move(self, arrow: Arrow | str) -> None:
        if self.selected is None:
            return
        try:
            direction, step = ARROW_MOVES[Arrow(arrow)]
        except ValueError:
            return
        self._move_focus(*self.selected, direction, step)

    def toggle_direction(self) -> None:
        self.direction = self.direction.perpendicular()

    def select_cell(self, row: int, col: int) -> None:
        cell = self.grid.cell(row, col)
        if cell is None:
            return
        if self.selected == (row, col):
            self.toggle_direction()
            return
        self.selected = (row, col)
        if cell.across_owner and not cell.down_owner:
            self.direction = Direction.ACROSS
        elif cell.down_owner and not cell.across_owner:
            self.direction = Direction.DOWN

    def select_word(self, word_id: str) -> None:
        """Jump to the first letter of a word, as when its clue is picked."""

        word = self.grid.words.get(word_id)
        if word is None:
            return
        self.selected = (word.origin_row, word.origin_col)
        self.direction = word.direction

    def _move_focus(self, row: int, col: int, direction: Direction, step: int) -> None:
        target = self.grid.next_cell(row, col, direction, step)
        if target is not None:
            self.selected = target

    def active_word(self) -> Optional[PlacedWord]:
        if self.selected is None:
            return None
        return self.grid.word_at(*self.selected, self.direction)

    def active_cells(self) -> List[Tuple[int, int]]:
        word = self.active_word()
        return word.cells if word else []

    def clues(self, direction: Direction) -> List[PlacedWord]:
        return [word for word in self.placed_words if word.direction is direction]

    def numbered_clues(self) -> List[Tuple[int, PlacedWord]]:
        """Clues numbered from 1, across first, in the order they are listed."""

        ordered = self.clues(Direction.ACROSS) + self.clues(Direction.DOWN)
        return list(enumerate(ordered, start=1))

    def select_clue(self, number: int) -> None:
        for index, word in self.numbered_clues():
            if index == number:
                self.select_word(word.id)
                return

    # ------------------------------------------------------------------
    # Hints, checking and exit
    # ------------------------------------------------------------------
    def reveal_letter(self) -> Optional[str]:
        if self.is_solved or self.selected is None:
            return None
        cell = self.grid.cell(*self.selected)
        if cell is None:
            return None
        self.inputs.set(*self.selected, cell.letter)
        self.revealed_count += 1
        LOGGER.debug("Revealed %s at %s (%s so far)", cell.letter, self.selected, self.revealed_count)
        return cell.letter

    def check(self) -> CheckResult:
        """Verify the grid; a correct and complete grid locks the session."""

        if self.is_solved:
            return CheckResult(solved=True, filled=True, score=self.score)
        result = check(self.grid, self.inputs)
        if not result.solved:
            LOGGER.debug(
                "Check failed (filled=%s, %s wrong cells)", result.filled, len(result.wrong_cells)
            )
            return result
        self.state = SessionState.SOLVED
        self.score = compute_score(self.revealed_count)
        result.score = self.score
        LOGGER.info("Crossword solved with %s reveals, score %s", self.revealed_count, self.score)
        self._finish(self.score)
        return result

    def reset(self) -> None:
        """Wipe the player's letters and focus; hint penalties already taken stay."""

        if self.is_solved:
            return
        self.inputs.clear()
        self.selected = None
        self.direction = Direction.ACROSS

    def quit(self) -> None:
        self._finish(0)

    def _finish(self, score: int) -> None:
        if self._completed:
            return
        self._completed = True
        if self.on_complete is not None:
            self.on_complete(score)
