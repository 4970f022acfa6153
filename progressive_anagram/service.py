from __future__ import annotations

import logging
from typing import Dict, List, Optional, Sequence

from .errors import AnagramError
from .session import Session, start_session
from .store import KeyValueStore
from .words import parse_word_list

logger = logging.getLogger(__name__)

DEFAULT_STORE_KEY = "anagram"


class AnagramService:
    """
    Single-session facade for UI integration.

    Every operation returns a plain status dict instead of raising, so a UI can
    render a corrective message. Failures carry `success=False` and `error`.
    """

    def __init__(self) -> None:
        self._session: Optional[Session] = None
        self._word_count = 0

    @property
    def is_ready(self) -> bool:
        return self._session is not None

    @property
    def is_completed(self) -> bool:
        return self._session is not None and self._session.done()

    @property
    def session(self) -> Optional[Session]:
        return self._session

    def initialize(self, words: Sequence[str], *, entropy: bool = False) -> Dict[str, object]:
        try:
            session = start_session(words, entropy=entropy)
        except AnagramError as exc:
            logger.warning("Anagram service initialization failed: %s", exc)
            return {"success": False, "error": str(exc)}

        self._session = session
        self._word_count = session.candidate_count()
        logger.info(
            "Anagram service initialized with %d words (entropy=%s)",
            self._word_count,
            entropy,
        )
        return {
            "success": True,
            "word_count": self._word_count,
            "first_question": session.get_question(),
        }

    def initialize_from_store(
        self,
        store: KeyValueStore,
        key: str = DEFAULT_STORE_KEY,
    ) -> Dict[str, object]:
        words = self.load_words_from_store(store, key)
        config = store.load(key, {})
        entropy = bool(config.get("use_entropy", False)) if isinstance(config, dict) else False
        return self.initialize(words, entropy=entropy)

    @staticmethod
    def load_words_from_store(store: KeyValueStore, key: str = DEFAULT_STORE_KEY) -> List[str]:
        config = store.load(key, {})
        if not isinstance(config, dict):
            return []
        blob = config.get("word_list") or ""
        if not isinstance(blob, str):
            logger.warning("Stored word_list under '%s' is not a string; ignoring it", key)
            return []
        return parse_word_list(blob)

    @staticmethod
    def save_to_store(
        store: KeyValueStore,
        words: Sequence[str],
        *,
        entropy: bool = False,
        key: str = DEFAULT_STORE_KEY,
    ) -> None:
        store.save(key, {"word_list": "\n".join(words), "use_entropy": bool(entropy)})

    def current_question(self) -> Optional[Dict[str, object]]:
        session = self._session
        if session is None or session.done():
            return None
        return {
            "question": session.get_question(),
            "step": session.step,
            "candidate_count": session.candidate_count(),
        }

    def answer_question(self, yes: bool) -> Dict[str, object]:
        session = self._session
        if session is None:
            return {"success": False, "error": "Service not initialized"}

        try:
            session.answer(yes)
        except AnagramError as exc:
            return {"success": False, "error": str(exc)}

        if session.done():
            return {
                "success": True,
                "completed": True,
                "result": session.result(),
                "path": session.path(),
            }
        return {
            "success": True,
            "completed": False,
            "next_question": session.get_question(),
            "step": session.step,
            "candidate_count": session.candidate_count(),
        }

    def status(self) -> Dict[str, object]:
        session = self._session
        if session is None:
            return {"initialized": False}

        completed = session.done()
        return {
            "initialized": True,
            "completed": completed,
            "word_count": self._word_count,
            "current_question": session.get_question(),
            "step": session.step,
            "path": session.path(),
            "candidate_count": session.candidate_count(),
            "result": session.result() if completed else None,
        }

    def reset(self) -> Dict[str, object]:
        if self._session is None:
            return {"success": False, "error": "Service not initialized"}
        self._session = Session(self._session.root)
        return {
            "success": True,
            "word_count": self._word_count,
            "first_question": self._session.get_question(),
        }
