import json
import os
import tempfile
import unittest
from pathlib import Path
from unittest.mock import MagicMock, patch

import requests

from vocab_crossword.core.exceptions import ContentProviderError, WordListError
from vocab_crossword.core.models import WordEntry
from vocab_crossword.data.vocabulary import (
    FallbackVocabularyProvider,
    GeminiVocabularyProvider,
    StaticVocabularyProvider,
    VocabularySet,
    merge_vocabulary_providers,
)
from vocab_crossword.data.word_list import load_word_file, parse_word_specs
from vocab_crossword.io.gemini_client import GeminiAPIError, GeminiClient


GEMINI_PAYLOAD = {
    "theme": "Space",
    "words": [
        {"word": "rocket", "pronunciation": "ˈrɒkɪt", "chinese": "火箭",
         "example": "The rocket flies.", "exampleChinese": "火箭在飞。"},
        {"word": "star", "pronunciation": "stɑː", "chinese": "星星",
         "example": "I see a star.", "exampleChinese": "我看到一颗星星。"},
        {"pronunciation": "missing word"},
    ],
}


class WordEntryTests(unittest.TestCase):
    def test_from_dict_accepts_provider_keys(self) -> None:
        entry = WordEntry.from_dict(GEMINI_PAYLOAD["words"][0])
        self.assertEqual(entry.word, "rocket")
        self.assertEqual(entry.clue, "火箭")
        self.assertEqual(entry.example_translation, "火箭在飞。")
        self.assertTrue(entry.id)

    def test_from_dict_keeps_given_id(self) -> None:
        entry = WordEntry.from_dict({"id": "w1", "word": "moon", "translation": "月亮"})
        self.assertEqual(entry.id, "w1")
        self.assertEqual(entry.to_dict()["translation"], "月亮")


class WordListTests(unittest.TestCase):
    def test_parse_word_specs_splits_clues(self) -> None:
        words = parse_word_specs(["cat:猫", "dog", "  ", ":orphan"])
        self.assertEqual([w.word for w in words], ["cat", "dog"])
        self.assertEqual([w.clue for w in words], ["猫", ""])
        self.assertNotEqual(words[0].id, words[1].id)

    def test_text_file_skips_comments_and_blanks(self) -> None:
        with tempfile.TemporaryDirectory() as tmpdir:
            path = Path(tmpdir) / "words.txt"
            path.write_text("# animals\ncat:猫\n\ndog:狗\n", encoding="utf-8")
            theme, words = load_word_file(path)
        self.assertIsNone(theme)
        self.assertEqual([(w.word, w.clue) for w in words], [("cat", "猫"), ("dog", "狗")])

    def test_json_object_file(self) -> None:
        with tempfile.TemporaryDirectory() as tmpdir:
            path = Path(tmpdir) / "words.json"
            document = {"theme": "Space", "words": GEMINI_PAYLOAD["words"][:2] + ["moon:月亮"]}
            path.write_text(json.dumps(document), encoding="utf-8")
            theme, words = load_word_file(path)
        self.assertEqual(theme, "Space")
        self.assertEqual([w.word for w in words], ["rocket", "star", "moon"])

    def test_json_list_file(self) -> None:
        with tempfile.TemporaryDirectory() as tmpdir:
            path = Path(tmpdir) / "words.json"
            path.write_text(json.dumps([{"word": "sun", "translation": "太阳"}]), encoding="utf-8")
            theme, words = load_word_file(path)
        self.assertIsNone(theme)
        self.assertEqual(words[0].clue, "太阳")

    def test_invalid_files_raise(self) -> None:
        with tempfile.TemporaryDirectory() as tmpdir:
            broken = Path(tmpdir) / "broken.json"
            broken.write_text("{not json", encoding="utf-8")
            with self.assertRaises(WordListError):
                load_word_file(broken)

            no_words = Path(tmpdir) / "nowords.json"
            no_words.write_text(json.dumps({"theme": "x"}), encoding="utf-8")
            with self.assertRaises(WordListError):
                load_word_file(no_words)

            bad_entry = Path(tmpdir) / "bad.json"
            bad_entry.write_text(json.dumps([{"clue": "no word"}]), encoding="utf-8")
            with self.assertRaises(WordListError):
                load_word_file(bad_entry)

            with self.assertRaises(WordListError):
                load_word_file(Path(tmpdir) / "missing.txt")


class GeminiProviderTests(unittest.TestCase):
    def test_parse_response_strips_code_fences(self) -> None:
        text = "```json\n" + json.dumps(GEMINI_PAYLOAD) + "\n```"
        result = GeminiVocabularyProvider._parse_response(text)
        self.assertEqual(result.theme, "Space")
        self.assertEqual(result.source, "gemini")
        self.assertEqual([w.word for w in result.words], ["rocket", "star"])

    def test_parse_response_rejects_bad_payloads(self) -> None:
        for text in ("not json", "[]", json.dumps({"theme": "x", "words": []})):
            with self.assertRaises(ContentProviderError):
                GeminiVocabularyProvider._parse_response(text)

    def test_parse_response_defaults_theme(self) -> None:
        payload = {"words": GEMINI_PAYLOAD["words"][:1]}
        self.assertEqual(GeminiVocabularyProvider._parse_response(json.dumps(payload), "Sea").theme, "Sea")
        self.assertEqual(GeminiVocabularyProvider._parse_response(json.dumps(payload)).theme, "Fun Words")

    def test_prompt_mentions_requested_theme(self) -> None:
        prompt = GeminiVocabularyProvider._render_prompt("Dinosaurs", 6)
        self.assertIn("'Dinosaurs'", prompt)
        self.assertIn("exactly 6", prompt)
        self.assertIn("random", GeminiVocabularyProvider._render_prompt(None, 10))

    def test_generate_uses_client(self) -> None:
        client = MagicMock()
        client.generate_json_text.return_value = json.dumps(GEMINI_PAYLOAD)
        result = GeminiVocabularyProvider(client=client).generate("Space", 2)
        self.assertEqual(len(result.words), 2)
        client.generate_json_text.assert_called_once()

    def test_client_errors_become_provider_errors(self) -> None:
        client = MagicMock()
        client.generate_json_text.side_effect = GeminiAPIError("boom")
        with self.assertRaises(ContentProviderError):
            GeminiVocabularyProvider(client=client).generate()


class GeminiClientTests(unittest.TestCase):
    def test_missing_key_raises(self) -> None:
        with patch.dict(os.environ, {}, clear=True):
            with self.assertRaises(GeminiAPIError):
                GeminiClient()

    def test_generate_json_text_returns_first_candidate(self) -> None:
        session = MagicMock()
        response = MagicMock()
        response.json.return_value = {
            "candidates": [{"content": {"parts": [{"text": '{"theme": "Space"}'}]}}]
        }
        session.post.return_value = response
        with patch.dict(os.environ, {"GEMINI_API_KEY": "secret"}, clear=True):
            client = GeminiClient(session=session)
        self.assertEqual(client.generate_json_text("hi"), '{"theme": "Space"}')
        _, kwargs = session.post.call_args
        self.assertEqual(kwargs["headers"], {"x-goog-api-key": "secret"})
        self.assertEqual(kwargs["json"]["generationConfig"], {"responseMimeType": "application/json"})

    def test_http_failure_raises(self) -> None:
        session = MagicMock()
        session.post.side_effect = requests.ConnectionError("offline")
        with patch.dict(os.environ, {"GEMINI_API_KEY": "secret"}, clear=True):
            client = GeminiClient(session=session)
        with self.assertRaises(GeminiAPIError):
            client.generate_json_text("hi")

    def test_empty_candidates_raise(self) -> None:
        session = MagicMock()
        session.post.return_value.json.return_value = {"candidates": []}
        with patch.dict(os.environ, {"GEMINI_API_KEY": "secret"}, clear=True):
            client = GeminiClient(session=session)
        with self.assertRaises(GeminiAPIError):
            client.generate_json_text("hi")


class MergeProvidersTests(unittest.TestCase):
    def test_fallback_used_when_primary_fails(self) -> None:
        class FailingProvider:
            def generate(self, theme=None, count=10) -> VocabularySet:
                raise ContentProviderError("no network")

        result = merge_vocabulary_providers(FailingProvider(), [FallbackVocabularyProvider()])
        self.assertEqual(result.source, "fallback")
        self.assertEqual(result.theme, "Fruits")
        self.assertEqual(len(result.words), 10)

    def test_static_provider_wins(self) -> None:
        words = parse_word_specs(["cat:猫"])
        result = merge_vocabulary_providers(
            StaticVocabularyProvider(words, theme="Pets"), [FallbackVocabularyProvider()]
        )
        self.assertEqual(result.theme, "Pets")
        self.assertEqual(result.source, "user")

    def test_all_providers_failing_raises(self) -> None:
        with self.assertRaises(ContentProviderError):
            merge_vocabulary_providers(StaticVocabularyProvider([]), [])

    def test_fallback_honours_count(self) -> None:
        self.assertEqual(len(FallbackVocabularyProvider().generate(count=4).words), 4)


if __name__ == "__main__":  # pragma: no cover
    unittest.main()
