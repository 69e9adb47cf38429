"""Crossword mini-game for a children's vocabulary trainer.

This package exposes the public API surface via:

- ``vocab_crossword.engine.generator.CrosswordGenerator``: lays words into the grid.
- ``vocab_crossword.engine.session.CrosswordSession``: interactive solving state.
- ``vocab_crossword.data.vocabulary`` helpers: vocabulary providers.
"""

from .core.models import PlacedWord, WordEntry
from .engine.generator import CrosswordGenerator, CrosswordResult, GeneratorConfig
from .engine.session import CrosswordSession

__all__ = [
    "CrosswordGenerator",
    "CrosswordResult",
    "CrosswordSession",
    "GeneratorConfig",
    "PlacedWord",
    "WordEntry",
]

__version__ = "0.1.0"
