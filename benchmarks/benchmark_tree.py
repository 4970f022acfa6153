#!/usr/bin/env python3
from __future__ import annotations

import argparse
import json
import pathlib
import random
import string
import sys
import time
from typing import Dict, List

sys.path.insert(0, str(pathlib.Path(__file__).resolve().parents[1]))

from progressive_anagram import Session, build_tree, iter_leaves, solve, tree_depth


def make_words(count: int, *, seed: int = 0, min_len: int = 3, max_len: int = 9) -> List[str]:
    rng = random.Random(seed)
    return [
        "".join(rng.choice(string.ascii_lowercase) for _ in range(rng.randint(min_len, max_len)))
        for _ in range(count)
    ]


def run_build_benchmark(words: List[str], repeats: int, *, entropy: bool) -> Dict[str, float]:
    start = time.perf_counter()
    for _ in range(repeats):
        root = build_tree(words, entropy=entropy)
    elapsed = time.perf_counter() - start

    leaves = list(iter_leaves(root))
    return {
        "words": float(len(words)),
        "seconds": elapsed,
        "builds_per_sec": repeats / elapsed,
        "depth": float(tree_depth(root)),
        "mean_questions": sum(len(trail) for trail, _ in leaves) / max(1, len(leaves)),
    }


def run_session_benchmark(words: List[str], sessions: int) -> Dict[str, float]:
    root = build_tree(words)
    rng = random.Random(0)

    start = time.perf_counter()
    for _ in range(sessions):
        session = Session(root)
        while not session.done():
            session.answer(rng.random() < 0.5)
    elapsed = time.perf_counter() - start

    return {
        "sessions": float(sessions),
        "seconds": elapsed,
        "sessions_per_sec": sessions / elapsed,
    }


def run_solve_benchmark(words: List[str], solves: int) -> Dict[str, float]:
    answers = {letter: True for letter in string.ascii_lowercase}

    start = time.perf_counter()
    for _ in range(solves):
        solve(words, answers)
    elapsed = time.perf_counter() - start

    return {
        "solves": float(solves),
        "seconds": elapsed,
        "solves_per_sec": solves / elapsed,
    }


def main() -> None:
    parser = argparse.ArgumentParser(description="Progressive anagram tree benchmarks.")
    parser.add_argument("--words", type=int, default=2000, help="Number of random words.")
    parser.add_argument("--repeats", type=int, default=5, help="Tree builds per mode.")
    parser.add_argument("--sessions", type=int, default=5000, help="Random sessions to play.")
    parser.add_argument("--solves", type=int, default=5, help="One-shot solves (each rebuilds the tree).")
    args = parser.parse_args()

    words = make_words(args.words)
    results = {
        "build_balanced": run_build_benchmark(words, args.repeats, entropy=False),
        "build_entropy": run_build_benchmark(words, args.repeats, entropy=True),
        "sessions": run_session_benchmark(words, args.sessions),
        "solve": run_solve_benchmark(words, args.solves),
    }
    print(json.dumps(results, indent=2, sort_keys=True))


if __name__ == "__main__":
    main()
