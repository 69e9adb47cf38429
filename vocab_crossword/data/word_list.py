"""Reading word lists supplied on the command line or in files."""

from __future__ import annotations

import json
import uuid
from pathlib import Path
from typing import Iterable, List, Optional, Tuple

from ..core.exceptions import WordListError
from ..core.models import WordEntry


def parse_word_specs(raw_words: Iterable[str]) -> List[WordEntry]:
    """Turn ``WORD`` or ``WORD:clue`` strings into entries. Blank items are skipped."""

    entries: List[WordEntry] = []
    for item in raw_words:
        item = item.strip()
        if not item:
            continue
        word, _, clue = item.partition(":")
        word = word.strip()
        if not word:
            continue
        entries.append(WordEntry(id=uuid.uuid4().hex, word=word, translation=clue.strip()))
    return entries


def load_word_file(path: Path) -> Tuple[Optional[str], List[WordEntry]]:
    """Load words from ``path`` and return ``(theme, entries)``.

    ``.json`` files hold either a list of word objects or an object with
    ``theme`` and ``words`` keys. Any other file is read one ``WORD`` or
    ``WORD:clue`` per line; blank lines and ``#`` comments are skipped.
    """

    try:
        text = path.read_text(encoding="utf-8")
    except OSError as exc:
        raise WordListError(f"Cannot read word list {path}: {exc}") from exc

    if path.suffix.lower() != ".json":
        lines = [line for line in text.splitlines() if not line.strip().startswith("#")]
        return None, parse_word_specs(lines)

    try:
        data = json.loads(text)
    except json.JSONDecodeError as exc:
        raise WordListError(f"Word list {path} is not valid JSON: {exc}") from exc

    theme: Optional[str] = None
    if isinstance(data, dict):
        theme = data.get("theme")
        items = data.get("words")
    else:
        items = data
    if not isinstance(items, list):
        raise WordListError(f"Word list {path} has no 'words' array")

    entries: List[WordEntry] = []
    for index, item in enumerate(items):
        if isinstance(item, str):
            entries.extend(parse_word_specs([item]))
        elif isinstance(item, dict) and isinstance(item.get("word"), str):
            entries.append(WordEntry.from_dict(item))
        else:
            raise WordListError(f"Word list {path}: entry {index} has no 'word' field")
    return theme, entries
