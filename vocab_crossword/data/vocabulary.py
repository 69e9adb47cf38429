"""Vocabulary providers feeding words into the crossword."""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from typing import List, Optional, Protocol, Sequence

from ..core.exceptions import ContentProviderError
from ..core.models import WordEntry
from ..io.gemini_client import GeminiAPIError, GeminiClient
from ..utils.logger import get_logger


LOGGER = get_logger(__name__)

DEFAULT_THEME = "Fun Words"


@dataclass
class VocabularySet:
    """A theme plus the words generated for it."""

    theme: str
    words: List[WordEntry] = field(default_factory=list)
    source: str = "unknown"


class VocabularyProvider(Protocol):
    """Protocol implemented by all vocabulary sources."""

    def generate(self, theme: Optional[str] = None, count: int = 10) -> VocabularySet:
        ...


class StaticVocabularyProvider:
    """Returns a fixed word list, e.g. one read from a file or the command line."""

    def __init__(self, words: Sequence[WordEntry], theme: str = DEFAULT_THEME) -> None:
        self._words = list(words)
        self._theme = theme

    def generate(self, theme: Optional[str] = None, count: int = 10) -> VocabularySet:
        return VocabularySet(theme=theme or self._theme, words=list(self._words), source="user")


FALLBACK_WORDS = [
    {"word": "apple", "pronunciation": "ˈæpəl", "chinese": "苹果",
     "example": "I eat an apple.", "exampleChinese": "我吃一个苹果。"},
    {"word": "banana", "pronunciation": "bəˈnænə", "chinese": "香蕉",
     "example": "Bananas are yellow.", "exampleChinese": "香蕉是黄色的。"},
    {"word": "orange", "pronunciation": "ˈɔːrɪndʒ", "chinese": "橙子",
     "example": "The orange is sweet.", "exampleChinese": "橙子很甜。"},
    {"word": "grape", "pronunciation": "ɡreɪp", "chinese": "葡萄",
     "example": "Grapes grow in bunches.", "exampleChinese": "葡萄成串生长。"},
    {"word": "strawberry", "pronunciation": "ˈstrɔːˌbɛri", "chinese": "草莓",
     "example": "She likes strawberry cake.", "exampleChinese": "她喜欢草莓蛋糕。"},
    {"word": "watermelon", "pronunciation": "ˈwɔːtərˌmɛlən", "chinese": "西瓜",
     "example": "We share a watermelon.", "exampleChinese": "我们分享一个西瓜。"},
    {"word": "pineapple", "pronunciation": "ˈpaɪˌnæpəl", "chinese": "菠萝",
     "example": "Pineapple is juicy.", "exampleChinese": "菠萝很多汁。"},
    {"word": "cherry", "pronunciation": "ˈtʃɛri", "chinese": "樱桃",
     "example": "The cherry is small.", "exampleChinese": "樱桃很小。"},
    {"word": "mango", "pronunciation": "ˈmæŋɡoʊ", "chinese": "芒果",
     "example": "He loves mango juice.", "exampleChinese": "他喜欢芒果汁。"},
    {"word": "peach", "pronunciation": "piːtʃ", "chinese": "桃子",
     "example": "Peaches are soft.", "exampleChinese": "桃子很柔软。"},
]


class FallbackVocabularyProvider:
    """Offline word set used when no generator is reachable."""

    THEME = "Fruits"

    def generate(self, theme: Optional[str] = None, count: int = 10) -> VocabularySet:
        words = [WordEntry.from_dict(item) for item in FALLBACK_WORDS[:count]]
        return VocabularySet(theme=self.THEME, words=words, source="fallback")


class GeminiVocabularyProvider:
    """LLM-powered provider using the Gemini REST API."""

    PROMPT = (
        "{theme_line}"
        "Then, list exactly {count} English vocabulary words related to this theme.\n"
        "For each word, provide:\n"
        "- word: the word itself\n"
        "- pronunciation: simple phonetic pronunciation\n"
        "- chinese: the Chinese meaning (suitable for kids)\n"
        "- example: a simple example sentence in English\n"
        "- exampleChinese: the Chinese translation of the example sentence.\n"
        'Respond with a single JSON object: {{"theme": "...", "words": [{{...}}, ...]}}.'
    )

    RANDOM_THEME_LINE = (
        "Generate a random, fun theme suitable for children "
        "(e.g., Space, Jungle Animals, Superheroes, Fruits, Colors, Under the Sea).\n"
    )

    def __init__(self, client: Optional[GeminiClient] = None) -> None:
        self._client = client

    def generate(self, theme: Optional[str] = None, count: int = 10) -> VocabularySet:
        prompt = self._render_prompt(theme, count)
        try:
            client = self._client or GeminiClient()
            self._client = client
            text = client.generate_json_text(prompt)
        except GeminiAPIError as exc:
            raise ContentProviderError(str(exc)) from exc
        return self._parse_response(text, theme)

    @classmethod
    def _render_prompt(cls, theme: Optional[str], count: int) -> str:
        if theme:
            theme_line = f"The theme is '{theme}', suitable for children.\n"
        else:
            theme_line = cls.RANDOM_THEME_LINE
        return cls.PROMPT.format(theme_line=theme_line, count=count)

    @staticmethod
    def _parse_response(text: str, requested_theme: Optional[str] = None) -> VocabularySet:
        stripped = text.strip()
        if stripped.startswith("```"):
            lines = stripped.splitlines()
            inner = "\n".join(lines[1:-1] if lines[-1].strip().startswith("```") else lines[1:])
            stripped = inner.strip()
        try:
            data = json.loads(stripped)
        except json.JSONDecodeError as exc:
            raise ContentProviderError("Gemini vocabulary payload is not valid JSON") from exc
        if not isinstance(data, dict):
            raise ContentProviderError("Gemini vocabulary payload must be a JSON object")

        words: List[WordEntry] = []
        for item in data.get("words") or []:
            if isinstance(item, dict) and isinstance(item.get("word"), str) and item["word"].strip():
                words.append(WordEntry.from_dict(item))
        if not words:
            raise ContentProviderError("Gemini vocabulary payload contained no words")
        theme = data.get("theme") or requested_theme or DEFAULT_THEME
        return VocabularySet(theme=theme, words=words, source="gemini")


def merge_vocabulary_providers(
    primary: Optional[VocabularyProvider],
    fallbacks: Sequence[VocabularyProvider],
    theme: Optional[str] = None,
    count: int = 10,
) -> VocabularySet:
    """Return the first non-empty vocabulary set, trying fallbacks in order."""

    providers: List[VocabularyProvider] = []
    if primary is not None:
        providers.append(primary)
    providers.extend(fallbacks)

    for provider in providers:
        try:
            result = provider.generate(theme, count)
        except ContentProviderError as exc:
            LOGGER.warning("%s failed: %s", type(provider).__name__, exc)
            continue
        if result.words:
            LOGGER.info(
                "Using %s words from %s for theme '%s'", len(result.words), result.source, result.theme
            )
            return result
        LOGGER.warning("%s returned no words", type(provider).__name__)
    raise ContentProviderError("No vocabulary provider produced any words")
