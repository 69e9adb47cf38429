"""Greedy crossword layout.

The longest word is laid across the middle of the grid; every following
word is tried against the already placed words (visited in shuffled order)
and committed at the first legal perpendicular intersection. Words that
find no home are dropped from this puzzle.
"""

from __future__ import annotations

import random
from dataclasses import dataclass, field
from typing import List, Optional, Sequence, Tuple

from ..core.constants import GRID_SIZE, MAX_WORDS, Direction
from ..core.models import PlacedWord, WordEntry, normalize_answer
from ..utils.logger import get_logger
from .grid import CrosswordGrid, GridConfig


LOGGER = get_logger(__name__)


@dataclass
class GeneratorConfig:
    size: int = GRID_SIZE
    max_words: int = MAX_WORDS
    seed: Optional[int] = None
    strict_adjacency: bool = False

    def to_grid_config(self) -> GridConfig:
        return GridConfig(size=self.size, strict_adjacency=self.strict_adjacency)


@dataclass
class CrosswordResult:
    grid: CrosswordGrid
    placed_words: List[PlacedWord]
    dropped: List[WordEntry] = field(default_factory=list)
    seed: Optional[int] = None

    def to_jsonable(self) -> dict:
        data = {
            "grid": self.grid.to_jsonable(),
            "placed_words": [word.to_dict() for word in self.placed_words],
            "dropped": [entry.word for entry in self.dropped],
        }
        if self.seed is not None:
            data["seed"] = self.seed
        return data


class CrosswordGenerator:
    """Builds a fresh answer grid from a vocabulary list."""

    def __init__(
        self,
        config: Optional[GeneratorConfig] = None,
        rng: Optional[random.Random] = None,
    ) -> None:
        self.config = config or GeneratorConfig()
        if rng is not None:
            # the caller owns the random state, so there is no seed to report
            self.seed: Optional[int] = None
            self.rng = rng
        else:
            self.seed = self.config.seed
            if self.seed is None:
                self.seed = random.randrange(2**32)
            self.rng = random.Random(self.seed)

    # ------------------------------------------------------------------
    # Public entrypoint
    # ------------------------------------------------------------------
    def generate(self, words: Sequence[WordEntry]) -> CrosswordResult:
        grid = CrosswordGrid(self.config.to_grid_config())
        placed: List[PlacedWord] = []
        dropped: List[WordEntry] = []

        candidates = self._select_candidates(words, dropped)
        for entry, text in candidates:
            if not placed:
                move = self._center_move(grid, text)
            else:
                move = self._find_intersection(grid, text, placed)
            if move is None:
                LOGGER.debug("No legal position for %s; dropping it", text)
                dropped.append(entry)
                continue
            row, col, direction = move
            word = PlacedWord(
                id=entry.id,
                text=text,
                clue=entry.clue,
                direction=direction,
                origin_row=row,
                origin_col=col,
            )
            grid.place_word(word)
            placed.append(word)

        intersections = sum(1 for _, _, cell in grid.occupied() if cell.is_intersection())
        LOGGER.info(
            "Crossword generated with %s/%s words (%s intersections, %s side contacts)",
            len(placed),
            len(candidates),
            intersections,
            len(grid.touching_pairs()),
        )
        return CrosswordResult(grid=grid, placed_words=placed, dropped=dropped, seed=self.seed)

    # ------------------------------------------------------------------
    # Candidate selection
    # ------------------------------------------------------------------
    def _select_candidates(
        self, words: Sequence[WordEntry], dropped: List[WordEntry]
    ) -> List[Tuple[WordEntry, str]]:
        normalized = []
        seen_ids = set()
        for entry in words:
            text = normalize_answer(entry.word)
            if not text:
                LOGGER.debug("Skipping entry %s with no letters", entry.id)
                continue
            if entry.id in seen_ids:
                LOGGER.debug("Skipping duplicate word id %s", entry.id)
                continue
            seen_ids.add(entry.id)
            normalized.append((entry, text))

        # sorted() is stable, so equal lengths keep their input order
        normalized = sorted(normalized, key=lambda item: len(item[1]), reverse=True)
        selected = normalized[: self.config.max_words]
        if len(normalized) > len(selected):
            LOGGER.debug(
                "Keeping the %s longest of %s words", len(selected), len(normalized)
            )

        fitting = []
        for entry, text in selected:
            if len(text) > self.config.size:
                LOGGER.debug("%s is longer than the grid; dropping it", text)
                dropped.append(entry)
                continue
            fitting.append((entry, text))
        return fitting

    # ------------------------------------------------------------------
    # Move search
    # ------------------------------------------------------------------
    def _center_move(self, grid: CrosswordGrid, text: str) -> Optional[Tuple[int, int, Direction]]:
        row = self.config.size // 2
        col = (self.config.size - len(text)) // 2
        if grid.can_place(text, row, col, Direction.ACROSS):
            return row, col, Direction.ACROSS
        return None

    def _find_intersection(
        self, grid: CrosswordGrid, text: str, placed: Sequence[PlacedWord]
    ) -> Optional[Tuple[int, int, Direction]]:
        anchors = list(placed)
        self.rng.shuffle(anchors)
        for anchor in anchors:
            direction = anchor.direction.perpendicular()
            for i, letter in enumerate(text):
                for j, anchor_letter in enumerate(anchor.text):
                    if anchor_letter != letter:
                        continue
                    row, col = self._aligned_origin(anchor, j, i, direction)
                    if grid.can_place(text, row, col, direction):
                        return row, col, direction
        return None

    @staticmethod
    def _aligned_origin(
        anchor: PlacedWord, anchor_offset: int, offset: int, direction: Direction
    ) -> Tuple[int, int]:
        """Origin that lines up ``offset`` of the new word with the anchor letter."""

        adr, adc = anchor.direction.step
        shared_row = anchor.origin_row + adr * anchor_offset
        shared_col = anchor.origin_col + adc * anchor_offset
        dr, dc = direction.step
        return shared_row - dr * offset, shared_col - dc * offset


def generate(
    words: Sequence[WordEntry], config: Optional[GeneratorConfig] = None
) -> Tuple[CrosswordGrid, List[PlacedWord]]:
    """Convenience wrapper returning just the grid and the placed words."""

    result = CrosswordGenerator(config).generate(words)
    return result.grid, result.placed_words
