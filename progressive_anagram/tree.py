from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Iterator, List, Optional, Sequence, Tuple, Union

import numpy as np

from .words import ALPHABET_SIZE, Word, index_letter, letter_index, preprocess

logger = logging.getLogger(__name__)

_LETTER_SHIFTS = np.arange(ALPHABET_SIZE, dtype=np.uint32)


class SplitMode(str, Enum):
    BALANCED = "balanced"
    ENTROPY = "entropy"


@dataclass(frozen=True)
class Leaf:
    words: Tuple[str, ...]


@dataclass(frozen=True)
class Branch:
    letter: str
    yes: "Node"
    no: "Node"


Node = Union[Leaf, Branch]


def letter_counts(words: Sequence[Word], used_mask: int = 0) -> np.ndarray:
    """
    Per-letter count of words containing each still-unused letter.
    Returns shape: (26,), int64.
    """
    if not words:
        return np.zeros(ALPHABET_SIZE, dtype=np.int64)
    masks = np.fromiter((w.letter_mask for w in words), dtype=np.uint32, count=len(words))
    available = masks & np.uint32(~used_mask & ((1 << ALPHABET_SIZE) - 1))
    bits = (available.reshape(-1, 1) >> _LETTER_SHIFTS) & np.uint32(1)
    return bits.sum(axis=0, dtype=np.int64)


def binary_entropy(p: np.ndarray) -> np.ndarray:
    p = np.asarray(p, dtype=np.float64)
    out = np.zeros_like(p)
    inner = (p > 0.0) & (p < 1.0)
    q = p[inner]
    out[inner] = -(q * np.log2(q) + (1.0 - q) * np.log2(1.0 - q))
    return out


def select_split_letter(
    words: Sequence[Word],
    used_mask: int,
    mode: Union[str, SplitMode] = SplitMode.BALANCED,
) -> Optional[int]:
    """
    Pick the letter index that best splits `words`, or None when nothing splits them.

    Letters already in `used_mask`, and letters present in none or all of the
    words, are never chosen. Ties go to the earliest letter in a-z order.
    """
    split_mode = _parse_split_mode(mode)
    n = len(words)
    if n <= 1:
        return None

    counts = letter_counts(words, used_mask)
    used = np.array([(used_mask >> idx) & 1 for idx in range(ALPHABET_SIZE)], dtype=bool)
    candidates = (~used) & (counts > 0) & (counts < n)
    if not candidates.any():
        return None

    if split_mode == SplitMode.ENTROPY:
        p = counts / n
        h_yes = binary_entropy(p)
        h_no = binary_entropy(1.0 - p)
        gain = 1.0 - (p * h_yes + (1.0 - p) * h_no)
        gain[~candidates] = -np.inf
        # argmax returns the first maximum, so ties resolve a -> z.
        return int(np.argmax(gain))

    imbalance = np.abs(counts - (n - counts)).astype(np.float64)
    imbalance[~candidates] = np.inf
    return int(np.argmin(imbalance))


def build_tree(words: Sequence[str], *, entropy: bool = False) -> Node:
    mode = SplitMode.ENTROPY if entropy else SplitMode.BALANCED
    items = preprocess(words)
    root = _build(items, 0, mode)
    logger.debug(
        "Built %s tree over %d words (depth=%d)",
        mode.value,
        len(items),
        tree_depth(root),
    )
    return root


def _build(items: List[Word], used_mask: int, mode: SplitMode) -> Node:
    if len(items) <= 1:
        return Leaf(words=tuple(w.raw for w in items))

    idx = select_split_letter(items, used_mask, mode)
    if idx is None:
        return Leaf(words=tuple(w.raw for w in items))

    yes = [w for w in items if w.has_letter(idx)]
    no = [w for w in items if not w.has_letter(idx)]
    if not yes or not no:
        return Leaf(words=tuple(w.raw for w in items))

    next_used = used_mask | (1 << idx)
    return Branch(
        letter=index_letter(idx),
        yes=_build(yes, next_used, mode),
        no=_build(no, next_used, mode),
    )


def count_words(node: Node) -> int:
    if isinstance(node, Leaf):
        return len(node.words)
    return count_words(node.yes) + count_words(node.no)


def tree_depth(node: Node) -> int:
    if isinstance(node, Leaf):
        return 0
    return 1 + max(tree_depth(node.yes), tree_depth(node.no))


def iter_leaves(
    node: Node,
    trail: Tuple[Tuple[str, bool], ...] = (),
) -> Iterator[Tuple[Tuple[Tuple[str, bool], ...], Leaf]]:
    """
    Yield (trail, leaf) pairs in yes-first order, where `trail` is the list of
    (letter, answered_yes) decisions that reaches the leaf from `node`.
    """
    if isinstance(node, Leaf):
        yield trail, node
        return
    yield from iter_leaves(node.yes, trail + ((node.letter, True),))
    yield from iter_leaves(node.no, trail + ((node.letter, False),))


def follow(node: Node, trail: Sequence[Tuple[str, bool]]) -> Node:
    current = node
    for step, (letter, yes) in enumerate(trail):
        if isinstance(current, Leaf):
            raise ValueError(f"Trail continues past a leaf at step {step + 1}.")
        if letter_index(letter) != letter_index(current.letter):
            raise ValueError(
                f"Trail letter '{letter}' does not match question '{current.letter}' at step {step + 1}."
            )
        current = current.yes if yes else current.no
    return current


def render_tree(node: Node, *, indent: str = "") -> str:
    if isinstance(node, Leaf):
        return f"{indent}{', '.join(node.words) or '(empty)'}"
    lines = [
        f"{indent}[{node.letter}]",
        f"{indent}  yes:",
        render_tree(node.yes, indent=indent + "    "),
        f"{indent}  no:",
        render_tree(node.no, indent=indent + "    "),
    ]
    return "\n".join(lines)


def _parse_split_mode(mode: Union[str, SplitMode]) -> SplitMode:
    if isinstance(mode, SplitMode):
        return mode
    if not isinstance(mode, str):
        raise ValueError("mode must be one of: balanced, entropy.")

    clean = mode.strip().lower()
    if clean == "balanced":
        return SplitMode.BALANCED
    if clean == "entropy":
        return SplitMode.ENTROPY
    raise ValueError("mode must be one of: balanced, entropy.")
