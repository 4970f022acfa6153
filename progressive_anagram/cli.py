from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import Callable, Dict, List, Optional, Sequence

from .errors import AnagramError
from .service import AnagramService
from .session import solve
from .store import KeyValueStore
from .tree import build_tree, render_tree
from .words import letter_index, load_word_list, parse_word_list

DEFAULT_STORE_PATH = Path.home() / ".progressive_anagram.json"

_YES = {"y", "yes"}
_NO = {"n", "no"}


def parse_answers(text: str) -> Dict[str, bool]:
    """
    Parse "r=y,s=n" into {"r": True, "s": False}.
    """
    answers: Dict[str, bool] = {}
    for part in text.split(","):
        part = part.strip()
        if not part:
            continue
        letter, sep, value = part.partition("=")
        if not sep:
            raise ValueError(f"Invalid answer '{part}'. Expected <letter>=<y|n>.")
        clean_value = value.strip().lower()
        if clean_value not in _YES and clean_value not in _NO:
            raise ValueError(f"Invalid answer '{part}'. Value must be y or n.")
        letter_index(letter)
        answers[letter.strip().lower()] = clean_value in _YES
    return answers


def run_interactive(
    service: AnagramService,
    *,
    input_fn: Callable[[str], str] = input,
    output_fn: Callable[[str], None] = print,
) -> Optional[List[str]]:
    """Ask questions until the session finishes. Returns None if the user quits."""
    while not service.is_completed:
        current = service.current_question()
        if current is None:
            break
        prompt = f"[{current['step']}] {current['question']} ({current['candidate_count']} candidates) [y/n/q] "
        try:
            raw = input_fn(prompt).strip().lower()
        except (EOFError, KeyboardInterrupt):
            output_fn("\nExiting.")
            return None

        if raw in ("q", "quit"):
            output_fn("Exiting.")
            return None
        if raw not in _YES and raw not in _NO:
            output_fn("Please answer y or n.")
            continue

        reply = service.answer_question(raw in _YES)
        if not reply["success"]:
            output_fn(f"Error: {reply['error']}")
            return None

    status = service.status()
    result = list(status.get("result") or [])
    if len(result) == 1:
        output_fn(f"Your word is: {result[0]}")
    elif result:
        output_fn(f"Could not tell these apart: {', '.join(result)}")
    else:
        output_fn("No candidates left.")
    return result


def parse_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Progressive anagram: narrow down a hidden word with yes/no letter questions.",
    )
    source = parser.add_mutually_exclusive_group()
    source.add_argument(
        "--words",
        "-w",
        type=str,
        help='Comma or newline separated word list, e.g. "Mercury,Venus,Earth"',
    )
    source.add_argument("--file", "-f", type=str, help="Read the word list from a text file.")
    parser.add_argument(
        "--store",
        type=str,
        default=str(DEFAULT_STORE_PATH),
        help=f"Key-value store used when no word list is given (default: {DEFAULT_STORE_PATH})",
    )
    parser.add_argument("--entropy", action="store_true", help="Pick questions by information gain.")
    parser.add_argument("--save", action="store_true", help="Save the word list and options to the store.")
    parser.add_argument("--answers", type=str, help='One-shot solve, e.g. "r=y,s=n,t=y"')
    parser.add_argument("--show-tree", action="store_true", help="Print the decision tree and exit.")
    parser.add_argument("--verbose", "-v", action="store_true", help="Enable debug logging.")
    return parser.parse_args(argv)


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    store = KeyValueStore(args.store)
    entropy = bool(args.entropy)
    if args.words is not None:
        words = parse_word_list(args.words)
    elif args.file is not None:
        words = load_word_list(args.file)
    else:
        words = AnagramService.load_words_from_store(store)
        config = store.load("anagram", {})
        if isinstance(config, dict):
            entropy = entropy or bool(config.get("use_entropy", False))

    if args.save:
        AnagramService.save_to_store(store, words, entropy=entropy)
        print(f"Saved {len(words)} words to {store.path}")

    if args.show_tree:
        print(render_tree(build_tree(words, entropy=entropy)))
        return 0

    if args.answers is not None:
        try:
            result = solve(words, parse_answers(args.answers), entropy=entropy)
        except (AnagramError, ValueError) as exc:
            print(f"Error: {exc}", file=sys.stderr)
            return 2
        print(", ".join(result) if result else "(no candidates)")
        return 0

    service = AnagramService()
    started = service.initialize(words, entropy=entropy)
    if not started["success"]:
        print(f"Error: {started['error']}", file=sys.stderr)
        return 2

    print(f"Think of one of {started['word_count']} words.")
    result = run_interactive(service)
    return 0 if result is not None else 1


if __name__ == "__main__":
    raise SystemExit(main())
