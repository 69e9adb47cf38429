"""Custom exception hierarchy for the crossword mini-game."""


class CrosswordError(Exception):
    """Base exception for crossword failures."""


class SlotPlacementError(CrosswordError):
    """Raised when a word is committed to a position that breaks grid rules."""


class WordListError(CrosswordError):
    """Raised when a word list file cannot be read or parsed."""


class ContentProviderError(CrosswordError):
    """Raised when the vocabulary provider cannot produce a word set."""
