"""CLI entrypoint for the vocabulary crossword mini-game."""

from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import Callable, List, Optional, Tuple

from vocab_crossword.core.constants import Arrow
from vocab_crossword.core.exceptions import CrosswordError
from vocab_crossword.core.models import WordEntry
from vocab_crossword.data.vocabulary import (
    FallbackVocabularyProvider,
    GeminiVocabularyProvider,
    StaticVocabularyProvider,
    VocabularyProvider,
    VocabularySet,
    merge_vocabulary_providers,
)
from vocab_crossword.data.word_list import load_word_file, parse_word_specs
from vocab_crossword.engine.generator import CrosswordGenerator, GeneratorConfig
from vocab_crossword.engine.session import CrosswordSession
from vocab_crossword.utils.logger import configure_logging
from vocab_crossword.utils.pretty import format_grid, pretty_print_session


HELP_TEXT = """Commands:
  sel R C          select the cell at row R, column C
  t LETTERS        type letters starting at the selected cell
  bs               backspace at the selected cell
  up|down|left|right
                   move the focus
  tog              toggle across/down
  word N           jump to the start of clue N
  reveal           reveal the selected letter (-5 points)
  check            check the puzzle
  reset            clear all letters
  quit             give up"""


def _add_word_options(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "--words",
        nargs="+",
        metavar="WORD",
        help="Explicit words (format: WORD or WORD:Clue)",
    )
    parser.add_argument(
        "--words-file",
        type=Path,
        metavar="FILE",
        help="JSON vocabulary file, or one WORD / WORD:Clue entry per line",
    )
    parser.add_argument(
        "--llm",
        action="store_true",
        help="Generate the vocabulary with Gemini (needs GEMINI_API_KEY)",
    )
    parser.add_argument("--theme", type=str, default=None, help="Theme for --llm generation")
    parser.add_argument("--count", type=int, default=10, help="Number of words to request with --llm")
    parser.add_argument("--seed", type=int, default=None, help="Random seed for reproducibility")
    parser.add_argument(
        "--strict-adjacency",
        action="store_true",
        help="Reject placements whose new letters touch other words side-on",
    )
    parser.add_argument(
        "--log-level",
        type=str,
        default="INFO",
        help="Logging level (DEBUG, INFO, WARNING, ERROR)",
    )


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Vocabulary crossword mini-game")
    subparsers = parser.add_subparsers(dest="command", required=True)

    generate = subparsers.add_parser("generate", help="Generate a puzzle and print it as JSON")
    _add_word_options(generate)
    generate.add_argument("--output", type=Path, help="Optional path to JSON output")
    generate.add_argument(
        "--show",
        action="store_true",
        help="Also print the answer grid to stderr",
    )

    play = subparsers.add_parser("play", help="Solve a puzzle in the terminal")
    _add_word_options(play)
    return parser


def resolve_vocabulary(args: argparse.Namespace) -> VocabularySet:
    user_words: List[WordEntry] = []
    file_theme: Optional[str] = None
    if args.words:
        user_words.extend(parse_word_specs(args.words))
    if args.words_file:
        file_theme, file_words = load_word_file(args.words_file)
        user_words.extend(file_words)

    primary: Optional[VocabularyProvider] = None
    fallbacks: List[VocabularyProvider] = []
    if user_words:
        primary = StaticVocabularyProvider(user_words, theme=args.theme or file_theme or "My Words")
    elif args.llm:
        primary = GeminiVocabularyProvider()
        fallbacks = [FallbackVocabularyProvider()]
    else:
        fallbacks = [FallbackVocabularyProvider()]
    return merge_vocabulary_providers(primary, fallbacks, theme=args.theme, count=args.count)


def _config_from_args(args: argparse.Namespace) -> GeneratorConfig:
    return GeneratorConfig(seed=args.seed, strict_adjacency=args.strict_adjacency)


def run_generate(args: argparse.Namespace) -> None:
    vocabulary = resolve_vocabulary(args)
    result = CrosswordGenerator(_config_from_args(args)).generate(vocabulary.words)
    payload = {"theme": vocabulary.theme, **result.to_jsonable()}

    output_text = json.dumps(payload, ensure_ascii=False, indent=2)
    if args.show:
        print(format_grid(result.grid), file=sys.stderr)
    if args.output:
        args.output.write_text(output_text, encoding="utf-8")
    else:
        print(output_text)


def _parse_cell(parts: List[str]) -> Tuple[int, int]:
    if len(parts) != 2:
        raise ValueError("expected a row and a column")
    return int(parts[0]), int(parts[1])


def play_session(
    session: CrosswordSession,
    read_line: Callable[[str], str] = input,
    stream=None,
) -> Optional[int]:
    """Drive ``session`` from text commands until it is solved or abandoned."""

    stream = stream or sys.stdout
    scores: List[int] = []
    previous = session.on_complete

    def _record(score: int) -> None:
        scores.append(score)
        if previous is not None:
            previous(score)

    session.on_complete = _record
    print(HELP_TEXT, file=stream)
    while not scores:
        pretty_print_session(session, stream=stream)
        try:
            line = read_line("> ")
        except EOFError:
            session.quit()
            break
        command, *rest = line.strip().split() or [""]
        command = command.lower()
        try:
            if command == "sel":
                session.select_cell(*_parse_cell(rest))
            elif command == "t":
                for letter in "".join(rest):
                    if session.selected is None:
                        break
                    session.set_char(*session.selected, letter)
            elif command == "bs":
                if session.selected is not None:
                    session.backspace(*session.selected)
            elif command in {arrow.value for arrow in Arrow}:
                session.arrow_move(command)
            elif command == "tog":
                session.toggle_direction()
            elif command == "word" and rest:
                session.select_clue(int(rest[0]))
            elif command == "reveal":
                session.reveal_letter()
            elif command == "check":
                result = session.check()
                print(result.message, file=stream)
            elif command == "reset":
                session.reset()
            elif command == "quit":
                session.quit()
            elif command:
                print(HELP_TEXT, file=stream)
        except ValueError as exc:
            print(f"Invalid command: {exc}", file=stream)
    if scores:
        print(f"Score: {scores[0]}", file=stream)
        return scores[0]
    return None


def run_play(args: argparse.Namespace) -> None:
    vocabulary = resolve_vocabulary(args)
    print(f"Theme: {vocabulary.theme}")
    session = CrosswordSession.from_words(vocabulary.words, _config_from_args(args))
    play_session(session)


def main(argv: list[str] | None = None) -> None:
    parser = build_parser()
    args = parser.parse_args(argv)
    level = getattr(logging, args.log_level.upper(), logging.INFO)
    configure_logging(level)

    try:
        if args.command == "generate":
            run_generate(args)
        else:
            run_play(args)
    except CrosswordError as exc:
        parser.error(str(exc))


if __name__ == "__main__":  # pragma: no cover
    main()
