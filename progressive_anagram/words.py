from __future__ import annotations

import logging
import re
import unicodedata
from dataclasses import dataclass
from pathlib import Path
from typing import List, Sequence, Union

logger = logging.getLogger(__name__)

ALPHABET_SIZE = 26

_COMBINING_MARKS = re.compile("[\u0300-\u036f]")
_LIGATURES = (("œ", "oe"), ("æ", "ae"))
_LIST_SEPARATORS = re.compile(r"[,\n]")


@dataclass(frozen=True)
class Word:
    raw: str
    normalized: str
    letter_mask: int

    def has_letter(self, index: int) -> bool:
        return bool(self.letter_mask & (1 << index))


def normalize_word(word: str) -> str:
    clean = unicodedata.normalize("NFD", word.lower())
    clean = _COMBINING_MARKS.sub("", clean)
    for ligature, replacement in _LIGATURES:
        clean = clean.replace(ligature, replacement)
    return clean.strip()


def letter_mask(normalized: str) -> int:
    """
    26-bit set of the a-z letters in `normalized`. Anything outside a-z is ignored.
    """
    mask = 0
    for ch in normalized:
        idx = ord(ch) - ord("a")
        if 0 <= idx < ALPHABET_SIZE:
            mask |= 1 << idx
    return mask


def letter_index(letter: str) -> int:
    clean = letter.strip().lower()
    if len(clean) != 1 or not ("a" <= clean <= "z"):
        raise ValueError(f"Invalid letter '{letter}'. Must be a single letter a-z.")
    return ord(clean) - ord("a")


def index_letter(index: int) -> str:
    if index < 0 or index >= ALPHABET_SIZE:
        raise ValueError(f"Letter index out of range: {index}")
    return chr(ord("a") + index)


def preprocess(words: Sequence[str]) -> List[Word]:
    out: List[Word] = []
    for raw in words:
        normalized = normalize_word(raw)
        if not normalized:
            continue
        out.append(Word(raw=raw, normalized=normalized, letter_mask=letter_mask(normalized)))
    return out


def parse_word_list(text: str) -> List[str]:
    return [w.strip() for w in _LIST_SEPARATORS.split(text) if w.strip()]


def load_word_list(path: Union[str, Path]) -> List[str]:
    p = Path(path)
    words = parse_word_list(p.read_text(encoding="utf-8"))
    logger.info("Loaded %d words from %s", len(words), p)
    return words
