import io
import json
import re
import tempfile
import unittest
from pathlib import Path

from main import build_parser, main, play_session, resolve_vocabulary
from vocab_crossword.data.word_list import parse_word_specs
from vocab_crossword.core.models import WordEntry
from vocab_crossword.engine.session import CrosswordSession
from vocab_crossword.utils.pretty import pretty_print_session


def scripted(lines):
    feed = iter(lines)

    def read_line(prompt: str) -> str:
        try:
            return next(feed)
        except StopIteration:
            raise EOFError
    return read_line


class GenerateCommandTests(unittest.TestCase):
    def test_generate_writes_json(self) -> None:
        with tempfile.TemporaryDirectory() as tmpdir:
            output = Path(tmpdir) / "puzzle.json"
            main([
                "generate", "--words", "cat:猫", "top:顶", "--seed", "4",
                "--output", str(output), "--log-level", "WARNING",
            ])
            payload = json.loads(output.read_text(encoding="utf-8"))
        self.assertEqual(payload["theme"], "My Words")
        self.assertEqual([w["text"] for w in payload["placed_words"]], ["CAT", "TOP"])
        self.assertEqual(payload["placed_words"][0]["clue"], "猫")
        self.assertEqual(payload["grid"][6][4]["letter"], "C")

    def test_default_vocabulary_is_fallback(self) -> None:
        args = build_parser().parse_args(["generate"])
        vocabulary = resolve_vocabulary(args)
        self.assertEqual(vocabulary.theme, "Fruits")

    def test_words_file_theme_is_used(self) -> None:
        with tempfile.TemporaryDirectory() as tmpdir:
            path = Path(tmpdir) / "words.json"
            path.write_text(json.dumps({"theme": "Pets", "words": ["cat:猫"]}), encoding="utf-8")
            args = build_parser().parse_args(["play", "--words-file", str(path)])
            vocabulary = resolve_vocabulary(args)
        self.assertEqual(vocabulary.theme, "Pets")
        self.assertEqual([w.word for w in vocabulary.words], ["cat"])

    def test_unreadable_words_file_is_a_usage_error(self) -> None:
        with self.assertRaises(SystemExit):
            main(["generate", "--words-file", "/nonexistent/words.txt", "--log-level", "ERROR"])


class PlayLoopTests(unittest.TestCase):
    def setUp(self) -> None:
        words = [WordEntry(id="cat", word="cat", translation="猫"),
                 WordEntry(id="top", word="top", translation="顶")]
        self.scores = []
        self.session = CrosswordSession.from_words(words, on_complete=self.scores.append)

    def test_solving_from_commands(self) -> None:
        out = io.StringIO()
        score = play_session(
            self.session,
            scripted(["sel 6 4", "t cat", "word 2", "reveal", "down", "t op", "check"]),
            stream=out,
        )
        self.assertEqual(score, 95)
        self.assertEqual(self.scores, [95])
        self.assertIn("Score: 95", out.getvalue())

    def test_wrong_answer_keeps_playing_until_quit(self) -> None:
        out = io.StringIO()
        score = play_session(
            self.session,
            scripted(["sel 6 4", "t cax", "check", "sel x y", "bogus", "quit"]),
            stream=out,
        )
        self.assertEqual(score, 0)
        self.assertIn("Not quite right yet!", out.getvalue())
        self.assertIn("Invalid command", out.getvalue())

    def test_word_command_takes_printed_clue_number(self) -> None:
        scores = []
        session = CrosswordSession.from_words(parse_word_specs(["cat:猫", "top:顶"]), on_complete=scores.append)
        board = io.StringIO()
        pretty_print_session(session, stream=board)
        match = re.search(r"(\d+)\. \(\d+,\d+\) 顶", board.getvalue())
        self.assertIsNotNone(match)

        score = play_session(
            session,
            scripted([f"word {match.group(1)}", "t top", "sel 6 4", "t ca", "check"]),
            stream=io.StringIO(),
        )
        self.assertEqual(score, 100)
        self.assertEqual(scores, [100])

    def test_non_numeric_clue_is_rejected(self) -> None:
        out = io.StringIO()
        play_session(self.session, scripted(["word top", "quit"]), stream=out)
        self.assertIn("Invalid command", out.getvalue())
        self.assertIsNone(self.session.selected)

    def test_end_of_input_quits(self) -> None:
        score = play_session(self.session, scripted([]), stream=io.StringIO())
        self.assertEqual(score, 0)
        self.assertEqual(self.scores, [0])


if __name__ == "__main__":  # pragma: no cover
    unittest.main()
