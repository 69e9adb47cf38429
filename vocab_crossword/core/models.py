"""Data models supporting the crossword mini-game."""

from __future__ import annotations

import uuid
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Tuple

from .constants import Direction


def normalize_answer(text: str) -> str:
    """Uppercase ``text`` and drop everything that is not a letter."""

    if not text:
        return ""
    return "".join(char for char in text if char.isalpha()).upper()


@dataclass
class WordEntry:
    """A vocabulary word as handed over by the content provider."""

    id: str
    word: str
    translation: str = ""
    pronunciation: str = ""
    example: str = ""
    example_translation: str = ""
    image_url: Optional[str] = None
    audio: Optional[str] = None

    @property
    def clue(self) -> str:
        return self.translation

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "WordEntry":
        """Build an entry from provider JSON, accepting both key spellings."""

        return cls(
            id=str(data.get("id") or uuid.uuid4().hex),
            word=str(data.get("word", "")).strip(),
            translation=data.get("translation") or data.get("chinese") or "",
            pronunciation=data.get("pronunciation", ""),
            example=data.get("example", ""),
            example_translation=data.get("example_translation") or data.get("exampleChinese") or "",
            image_url=data.get("image_url") or data.get("imageUrl"),
            audio=data.get("audio"),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "word": self.word,
            "translation": self.translation,
            "pronunciation": self.pronunciation,
            "example": self.example,
            "example_translation": self.example_translation,
            "image_url": self.image_url,
            "audio": self.audio,
        }


@dataclass
class Cell:
    """A grid cell holding a placed letter and the words running through it."""

    letter: str
    is_word_start: bool = False
    across_owner: Optional[str] = None
    down_owner: Optional[str] = None

    def owner(self, direction: Direction) -> Optional[str]:
        return self.across_owner if direction is Direction.ACROSS else self.down_owner

    def is_intersection(self) -> bool:
        return self.across_owner is not None and self.down_owner is not None


@dataclass(frozen=True)
class PlacedWord:
    """A word committed to the grid during generation."""

    id: str
    text: str
    clue: str
    direction: Direction
    origin_row: int
    origin_col: int

    @property
    def length(self) -> int:
        return len(self.text)

    @property
    def cells(self) -> List[Tuple[int, int]]:
        dr, dc = self.direction.step
        return [(self.origin_row + dr * i, self.origin_col + dc * i) for i in range(self.length)]

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "text": self.text,
            "clue": self.clue,
            "direction": self.direction.value,
            "start": [self.origin_row, self.origin_col],
        }


class UserInputGrid:
    """The player's letters, one string per grid slot (``""`` when blank)."""

    def __init__(self, size: int) -> None:
        self.size = size
        self.letters: List[str] = [""] * (size * size)

    def _index(self, row: int, col: int) -> Optional[int]:
        if 0 <= row < self.size and 0 <= col < self.size:
            return row * self.size + col
        return None

    def get(self, row: int, col: int) -> str:
        idx = self._index(row, col)
        return self.letters[idx] if idx is not None else ""

    def set(self, row: int, col: int, letter: str) -> None:
        idx = self._index(row, col)
        if idx is not None:
            self.letters[idx] = letter

    def clear(self) -> None:
        self.letters = [""] * (self.size * self.size)

    def rows(self) -> List[List[str]]:
        return [self.letters[r * self.size:(r + 1) * self.size] for r in range(self.size)]


@dataclass
class CheckResult:
    """Outcome of comparing the player's letters with the answers."""

    solved: bool
    filled: bool
    message: str = ""
    score: Optional[int] = None
    wrong_cells: List[Tuple[int, int]] = field(default_factory=list)
