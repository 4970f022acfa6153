"""Progressive anagram decision-tree engine."""

from .errors import AnagramError, InsufficientInputError, SessionAlreadyDoneError, UnknownAnswerKeyError
from .service import AnagramService
from .session import Session, SessionState, solve, start_session
from .store import KeyValueStore
from .tree import (
    Branch,
    Leaf,
    Node,
    SplitMode,
    build_tree,
    count_words,
    follow,
    iter_leaves,
    render_tree,
    select_split_letter,
    tree_depth,
)
from .words import Word, load_word_list, normalize_word, parse_word_list, preprocess

__all__ = [
    "AnagramError",
    "InsufficientInputError",
    "SessionAlreadyDoneError",
    "UnknownAnswerKeyError",
    "AnagramService",
    "Session",
    "SessionState",
    "solve",
    "start_session",
    "KeyValueStore",
    "Branch",
    "Leaf",
    "Node",
    "SplitMode",
    "build_tree",
    "count_words",
    "follow",
    "iter_leaves",
    "render_tree",
    "select_split_letter",
    "tree_depth",
    "Word",
    "load_word_list",
    "normalize_word",
    "parse_word_list",
    "preprocess",
]
