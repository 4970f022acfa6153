from __future__ import annotations

import logging
from enum import Enum
from typing import List, Mapping, Optional, Sequence, Tuple

from .errors import InsufficientInputError, SessionAlreadyDoneError, UnknownAnswerKeyError
from .tree import Branch, Leaf, Node, build_tree, count_words, follow
from .words import preprocess

logger = logging.getLogger(__name__)

Decision = Tuple[str, bool]


class SessionState(str, Enum):
    ACTIVE = "active"
    DONE = "done"


class Session:
    """
    Stepwise traversal of a built tree.

    The tree is never modified, so any number of sessions can share one root.
    A single session is not safe to answer from several threads at once.
    """

    def __init__(self, root: Node) -> None:
        self._root = root
        self._current: Node = root
        self._trail: List[Decision] = []
        self._state = self._state_for(root)

    @classmethod
    def replay(cls, root: Node, trail: Sequence[Decision]) -> "Session":
        session = cls(root)
        # Validate the whole trail before touching the session.
        follow(root, trail)
        for _, yes in trail:
            session.answer(bool(yes))
        return session

    @property
    def root(self) -> Node:
        return self._root

    @property
    def current(self) -> Node:
        return self._current

    @property
    def state(self) -> SessionState:
        return self._state

    @property
    def step(self) -> int:
        return len(self._trail) + 1

    def done(self) -> bool:
        return self._state == SessionState.DONE

    def get_question(self) -> Optional[str]:
        if self._state == SessionState.DONE:
            return None
        return f'Contains "{self._branch().letter}"?'

    def answer(self, yes: bool) -> None:
        if self._state == SessionState.DONE:
            raise SessionAlreadyDoneError()

        branch = self._branch()
        self._trail.append((branch.letter, bool(yes)))
        self._current = branch.yes if yes else branch.no
        self._state = self._state_for(self._current)
        logger.debug(
            "Answered %s for '%s' (%d candidates left)",
            "yes" if yes else "no",
            branch.letter,
            self.candidate_count(),
        )

    def result(self) -> List[str]:
        if isinstance(self._current, Leaf):
            return list(self._current.words)
        return []

    def path(self) -> List[Decision]:
        return list(self._trail)

    def candidate_count(self) -> int:
        return count_words(self._current)

    def _branch(self) -> Branch:
        current = self._current
        if not isinstance(current, Branch):
            raise SessionAlreadyDoneError()
        return current

    @staticmethod
    def _state_for(node: Node) -> SessionState:
        return SessionState.DONE if isinstance(node, Leaf) else SessionState.ACTIVE


def start_session(words: Sequence[str], *, entropy: bool = False) -> Session:
    usable = len(preprocess(words))
    if usable < 2:
        raise InsufficientInputError(usable)
    return Session(build_tree(words, entropy=entropy))


def solve(
    words: Sequence[str],
    answers: Mapping[str, bool],
    *,
    entropy: bool = False,
) -> List[str]:
    current = build_tree(words, entropy=entropy)
    while isinstance(current, Branch):
        letter = current.letter
        if letter.upper() in answers:
            yes = answers[letter.upper()]
        elif letter in answers:
            yes = answers[letter]
        else:
            raise UnknownAnswerKeyError(letter)
        current = current.yes if yes else current.no
    return list(current.words)
